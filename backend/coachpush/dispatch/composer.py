# backend/coachpush/dispatch/composer.py

"""
PushMessage の組み立て。

Composer は I/O を持たない純粋な変換層で、
同じ入力からは常に同じ title / body / data を生成する（時刻や乱数を含めない）。
デフォルト文言の置き換えは enrichment 側で済んでいる前提。
"""

from __future__ import annotations

from typing import Dict, Optional

from coachpush.notifications.schemas import (
    NotificationCategory,
    PushMessage,
    icon_for,
    parse_category,
)

from .enrichment import (
    AchievementContext,
    DailyReminderContext,
    DisplayContext,
    GenericNotificationContext,
    PlanAssignmentContext,
    WorkoutCompletionContext,
)

# data.type の値（モバイルアプリ側の画面遷移で使用）
TYPE_PLAN_ASSIGNED = "plan_assigned"
TYPE_WORKOUT_COMPLETED = "workout_completed"
TYPE_ACHIEVEMENT_UNLOCKED = "achievement_unlocked"
TYPE_DAILY_REMINDER = "daily_reminder"
TYPE_INACTIVITY_REMINDER = "inactivity_reminder"

WELCOME_ICON = "👋"
WORKOUT_COMPLETED_ICON = "💪"


def format_activity_details(name: str, reps: Optional[int] = None, duration: Optional[int] = None) -> str:
    """
    "Push-ups - 20 reps - 10 mins" 形式の文字列を作る。

    回数・時間はそれぞれ値がある場合のみ、この順で付け足す。
    """
    details = name
    if reps:
        details += f" - {reps} reps"
    if duration:
        details += f" - {duration} mins"
    return details


class MessageComposer:
    """
    カテゴリ・コンテキスト・宛先トークンから PushMessage を生成する。
    """

    def _build(
        self,
        *,
        token: str,
        category: NotificationCategory,
        title: str,
        body: str,
        data: Dict[str, str],
        icon: Optional[str] = None,
        high_priority: bool = False,
    ) -> PushMessage:
        glyph = icon or icon_for(category.value)
        return PushMessage(
            token=token,
            title=f"{glyph} {title}",
            body=body,
            icon=glyph,
            category=category,
            data={key: str(value) for key, value in data.items()},
            high_priority=high_priority,
        )

    def compose_generic(self, ctx: GenericNotificationContext, token: str) -> PushMessage:
        # type 未指定は general、追加データはそのまま後勝ちでマージする
        data = {
            "type": ctx.category or NotificationCategory.GENERAL.value,
            "notificationId": ctx.notification_id,
            **ctx.data,
        }
        return self._build(
            token=token,
            category=parse_category(ctx.category),
            title=ctx.title,
            body=ctx.message,
            data=data,
            high_priority=True,
        )

    def compose_plan_assigned(self, ctx: PlanAssignmentContext, token: str) -> PushMessage:
        return self._build(
            token=token,
            category=NotificationCategory.PLAN_ASSIGNED,
            title="New Training Plan Assigned!",
            body=f'{ctx.coach_name} assigned you "{ctx.plan_name}". Let\'s get started!',
            data={
                "type": TYPE_PLAN_ASSIGNED,
                "planId": ctx.plan_id,
                "assignmentId": ctx.assignment_id,
            },
        )

    def compose_workout_completed(self, ctx: WorkoutCompletionContext, token: str) -> PushMessage:
        details = format_activity_details(ctx.activity_name, ctx.reps, ctx.duration)
        return self._build(
            token=token,
            category=NotificationCategory.WORKOUT_COMPLETED,
            title="Workout Completed!",
            body=f"{ctx.athlete_name} just finished: {details}",
            data={
                "type": TYPE_WORKOUT_COMPLETED,
                "athleteId": ctx.athlete_id,
                "activityId": ctx.activity_id,
            },
            icon=WORKOUT_COMPLETED_ICON,
        )

    def compose_achievement(self, ctx: AchievementContext, token: str) -> PushMessage:
        return self._build(
            token=token,
            category=NotificationCategory.ACHIEVEMENT,
            title="Achievement Unlocked!",
            body=f'Congratulations! You\'ve earned "{ctx.achievement_name}"',
            data={
                "type": TYPE_ACHIEVEMENT_UNLOCKED,
                "achievementId": ctx.achievement_id,
            },
            icon=ctx.achievement_icon,
        )

    def compose_daily_reminder(self, ctx: DailyReminderContext, token: str) -> PushMessage:
        return self._build(
            token=token,
            category=NotificationCategory.REMINDER,
            title="Time to Workout!",
            body=f"Don't forget to complete {ctx.plan_name} today. Let's keep that streak going!",
            data={
                "type": TYPE_DAILY_REMINDER,
                "planId": ctx.plan_id,
            },
        )

    def compose_welcome(self, token: str) -> PushMessage:
        return self._build(
            token=token,
            category=NotificationCategory.ENCOURAGEMENT,
            title="Ready to get started?",
            body="Let's begin your fitness journey! Check out your training plan.",
            data={"type": TYPE_INACTIVITY_REMINDER},
            icon=WELCOME_ICON,
        )

    def compose_reengagement(self, token: str) -> PushMessage:
        return self._build(
            token=token,
            category=NotificationCategory.ENCOURAGEMENT,
            title="We miss you!",
            body="It's been a few days. Ready to get back on track?",
            data={"type": TYPE_INACTIVITY_REMINDER},
        )

    def compose(self, context: DisplayContext, token: str) -> PushMessage:
        """コンテキストの型に応じて対応する compose_* を呼び出す。"""
        if isinstance(context, GenericNotificationContext):
            return self.compose_generic(context, token)
        if isinstance(context, PlanAssignmentContext):
            return self.compose_plan_assigned(context, token)
        if isinstance(context, WorkoutCompletionContext):
            return self.compose_workout_completed(context, token)
        if isinstance(context, AchievementContext):
            return self.compose_achievement(context, token)
        if isinstance(context, DailyReminderContext):
            return self.compose_daily_reminder(context, token)
        raise TypeError(f"Unsupported context type: {type(context).__name__}")
