# backend/coachpush/dispatch/enrichment.py

"""
表示用コンテキストの補完。

イベントが持つ外部キー（プラン ID / コーチ ID / 実績 ID / アスリート ID）から
関連ドキュメントを点読みし、メッセージ文面に必要な表示名を集める。

関連ドキュメントが存在しない・フィールドが空の場合は、ここで定義する
デフォルト文言に置き換える。Composer 側ではフォールバック処理を一切行わない。

唯一の例外はワークアウト完了で、アスリートに担当コーチがいない場合は
「宛先なし」として None を返す（文面のデフォルトではなく前提条件）。
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Optional, Union

from coachpush.store.base import ACHIEVEMENTS, TRAINING_PLANS, DocumentStore

from .events import (
    AchievementUnlockEvent,
    ActivityCompletionEvent,
    GenericNotificationEvent,
    PlanAssignmentEvent,
)
from .recipients import RecipientResolver

DEFAULT_PLAN_NAME = "Training Plan"
DEFAULT_REMINDER_PLAN_NAME = "your workout"
DEFAULT_COACH_NAME = "Your coach"
DEFAULT_ATHLETE_NAME = "An athlete"
DEFAULT_ACHIEVEMENT_NAME = "Achievement"
DEFAULT_ACHIEVEMENT_ICON = "🏆"


@dataclass(frozen=True)
class GenericNotificationContext:
    notification_id: str
    title: str
    message: str
    category: Optional[str] = None
    data: Dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class PlanAssignmentContext:
    assignment_id: str
    plan_id: str
    plan_name: str
    coach_name: str


@dataclass(frozen=True)
class WorkoutCompletionContext:
    activity_id: str
    athlete_id: str
    athlete_name: str
    coach_id: str
    activity_name: str
    reps: Optional[int] = None
    duration: Optional[int] = None


@dataclass(frozen=True)
class AchievementContext:
    achievement_id: str
    achievement_name: str
    achievement_icon: str


@dataclass(frozen=True)
class DailyReminderContext:
    plan_id: str
    plan_name: str


DisplayContext = Union[
    GenericNotificationContext,
    PlanAssignmentContext,
    WorkoutCompletionContext,
    AchievementContext,
    DailyReminderContext,
]


class ContextEnricher:
    """
    関連ドキュメントの点読みとデフォルト文言の置き換えを担当する。

    各ルックアップは独立しており、どれかが見つからなくてもパイプラインは止めない。
    """

    def __init__(self, store: DocumentStore, resolver: Optional[RecipientResolver] = None) -> None:
        self._store = store
        self._resolver = resolver or RecipientResolver(store)

    # ------------------------------------------------------------------
    # 内部ユーティリティ
    # ------------------------------------------------------------------
    def _field(self, collection: str, doc_id: Optional[str], name: str, default: str) -> str:
        if not doc_id:
            return default
        doc = self._store.get_by_id(collection, doc_id)
        if doc is None:
            return default
        return doc.get(name) or default

    def _user_name(self, user_id: Optional[str], default: str) -> str:
        if not user_id:
            return default
        return self._resolver.resolve(user_id).display_name or default

    # ------------------------------------------------------------------
    # 公開 API
    # ------------------------------------------------------------------
    def plan_name(self, plan_id: Optional[str], *, default: str = DEFAULT_PLAN_NAME) -> str:
        return self._field(TRAINING_PLANS, plan_id, "name", default)

    def for_generic(self, event: GenericNotificationEvent) -> GenericNotificationContext:
        # 文面はイベント自身が持っているため、ストアは読まない
        return GenericNotificationContext(
            notification_id=event.notification_id,
            title=event.title,
            message=event.message,
            category=event.type,
            data=dict(event.data),
        )

    def for_plan_assignment(self, event: PlanAssignmentEvent) -> PlanAssignmentContext:
        return PlanAssignmentContext(
            assignment_id=event.assignment_id,
            plan_id=event.plan_id,
            plan_name=self.plan_name(event.plan_id),
            coach_name=self._user_name(event.assigned_by, DEFAULT_COACH_NAME),
        )

    def for_activity_completion(
        self, event: ActivityCompletionEvent
    ) -> Optional[WorkoutCompletionContext]:
        """
        アスリートのプロフィールから担当コーチを引く。

        担当コーチがいない場合は None（宛先なし）。
        """
        athlete = self._resolver.resolve(event.athlete_id)
        if not athlete.coach_id:
            return None
        return WorkoutCompletionContext(
            activity_id=event.activity_id,
            athlete_id=event.athlete_id,
            athlete_name=athlete.display_name or DEFAULT_ATHLETE_NAME,
            coach_id=athlete.coach_id,
            activity_name=event.activity_name,
            reps=event.reps,
            duration=event.duration,
        )

    def for_achievement(self, event: AchievementUnlockEvent) -> AchievementContext:
        doc = self._store.get_by_id(ACHIEVEMENTS, event.achievement_id) or {}
        return AchievementContext(
            achievement_id=event.achievement_id,
            achievement_name=doc.get("name") or DEFAULT_ACHIEVEMENT_NAME,
            achievement_icon=doc.get("icon") or DEFAULT_ACHIEVEMENT_ICON,
        )

    def for_daily_reminder(self, plan_id: Optional[str]) -> DailyReminderContext:
        return DailyReminderContext(
            plan_id=plan_id or "",
            plan_name=self.plan_name(plan_id, default=DEFAULT_REMINDER_PLAN_NAME),
        )

    def enrich(self, event) -> Optional[DisplayContext]:
        """
        イベント種別に応じたコンテキストを返す。

        None はワークアウト完了で担当コーチがいない場合のみ。
        """
        if isinstance(event, GenericNotificationEvent):
            return self.for_generic(event)
        if isinstance(event, PlanAssignmentEvent):
            return self.for_plan_assignment(event)
        if isinstance(event, ActivityCompletionEvent):
            return self.for_activity_completion(event)
        if isinstance(event, AchievementUnlockEvent):
            return self.for_achievement(event)
        raise TypeError(f"Unsupported event type: {type(event).__name__}")
