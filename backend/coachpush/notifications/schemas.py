# backend/coachpush/notifications/schemas.py

"""
Push メッセージの共通スキーマ定義。

PushMessage はプラットフォーム非依存の表現で、
Android / APNs 向けの具体的なペイロードは Sender 実装側（fcm.py）で組み立てる。

※ 生成 → 送信 → 破棄されるだけの一時オブジェクトで、永続化はしない。
"""

from __future__ import annotations

from enum import Enum
from typing import Dict, Optional

from pydantic import BaseModel, Field


class NotificationCategory(str, Enum):
    """
    通知テンプレートを識別するカテゴリ（閉じた列挙）。

    値はモバイルアプリがアプリ内通知の type に保存している文字列と一致させる。
    """

    GENERAL = "general"
    PLAN_ASSIGNED = "planAssigned"
    ENCOURAGEMENT = "encouragement"
    REMINDER = "reminder"
    ACHIEVEMENT = "achievement"
    COACH_MESSAGE = "coachMessage"
    WORKOUT_COMPLETED = "workoutCompleted"


CATEGORY_ICONS: Dict[NotificationCategory, str] = {
    NotificationCategory.GENERAL: "📬",
    NotificationCategory.PLAN_ASSIGNED: "🎯",
    NotificationCategory.ENCOURAGEMENT: "💪",
    NotificationCategory.REMINDER: "⏰",
    NotificationCategory.ACHIEVEMENT: "🏆",
    NotificationCategory.COACH_MESSAGE: "💬",
    NotificationCategory.WORKOUT_COMPLETED: "✅",
}

DEFAULT_ICON = CATEGORY_ICONS[NotificationCategory.GENERAL]


def parse_category(raw: Optional[str]) -> NotificationCategory:
    """
    任意の文字列をカテゴリに変換する。未定義・未指定は GENERAL。
    """
    if not raw:
        return NotificationCategory.GENERAL
    try:
        return NotificationCategory(raw)
    except ValueError:
        return NotificationCategory.GENERAL


def icon_for(category: Optional[str]) -> str:
    """カテゴリに対応するアイコン。未知のカテゴリは 📬。"""
    return CATEGORY_ICONS[parse_category(category)]


class PushMessage(BaseModel):
    """
    1 デバイス宛ての Push 通知 1件分。

    data の値は FCM の制約に合わせて文字列のみとする。
    """

    token: str = Field(..., description="送信先のデバイストークン。")
    title: str = Field(..., description="通知タイトル（先頭にアイコンを含む）。")
    body: str = Field(..., description="本文。プレーンテキスト想定。")
    icon: str = Field(DEFAULT_ICON, description="タイトルに付けたアイコン。")
    category: NotificationCategory = Field(
        NotificationCategory.GENERAL,
        description="通知カテゴリ。",
    )
    data: Dict[str, str] = Field(
        default_factory=dict,
        description="アプリに渡す構造化データ（type / 各種 ID など）。",
    )
    high_priority: bool = Field(
        False,
        description="True の場合、Android/APNs 向けに高優先度・サウンド付きで配信する。",
    )
