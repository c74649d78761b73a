# backend/coachpush/dispatch/events.py

"""
通知パイプラインを起動するトリガーイベントの定義。

ドキュメント作成トリガー 1件につき 1イベント。
kind をタグとしたユニオンで、各バリアントは必要な外部キーだけを持つ。
"""

from __future__ import annotations

from typing import Annotated, Any, Dict, Literal, Optional, Union

from pydantic import BaseModel, Field, TypeAdapter


class GenericNotificationEvent(BaseModel):
    """アプリ内通知（notifications コレクション）が作成された。"""

    kind: Literal["notification"] = "notification"
    notification_id: str = Field(..., min_length=1, description="通知ドキュメント ID")
    receiver_id: str = Field(..., min_length=1, description="受信ユーザー ID")
    title: str = Field(..., description="通知タイトル（アイコンなし）")
    message: str = Field(..., description="通知本文")
    type: Optional[str] = Field(None, description="通知カテゴリ（planAssigned など）")
    data: Dict[str, str] = Field(
        default_factory=dict,
        description="アプリへそのまま引き渡す追加データ",
    )


class PlanAssignmentEvent(BaseModel):
    """トレーニングプランがアスリートに割り当てられた。"""

    kind: Literal["plan_assignment"] = "plan_assignment"
    assignment_id: str = Field(..., min_length=1)
    athlete_id: str = Field(..., min_length=1)
    plan_id: str = Field(..., min_length=1)
    assigned_by: Optional[str] = Field(None, description="割り当てたコーチのユーザー ID")


class ActivityCompletionEvent(BaseModel):
    """アスリートがワークアウトを完了した（activityLogs）。"""

    kind: Literal["activity_completion"] = "activity_completion"
    activity_id: str = Field(..., min_length=1)
    athlete_id: str = Field(..., min_length=1)
    activity_name: str = Field(..., description="アクティビティ名（例: Push-ups）")
    reps: Optional[int] = Field(None, description="回数")
    duration: Optional[int] = Field(None, description="所要時間（分）")


class AchievementUnlockEvent(BaseModel):
    """ユーザーが実績を解除した（userAchievements）。"""

    kind: Literal["achievement_unlock"] = "achievement_unlock"
    user_achievement_id: str = Field(..., min_length=1)
    user_id: str = Field(..., min_length=1)
    achievement_id: str = Field(..., min_length=1)


AnyTriggerEvent = Union[
    GenericNotificationEvent,
    PlanAssignmentEvent,
    ActivityCompletionEvent,
    AchievementUnlockEvent,
]

TriggerEvent = Annotated[AnyTriggerEvent, Field(discriminator="kind")]

_trigger_event_adapter: TypeAdapter = TypeAdapter(TriggerEvent)


def parse_event(payload: Dict[str, Any]) -> AnyTriggerEvent:
    """
    kind をもとに dict を対応するイベントモデルへ変換する。

    :raises pydantic.ValidationError: kind が未知、または必須フィールドが欠けている場合。
    """
    return _trigger_event_adapter.validate_python(payload)
