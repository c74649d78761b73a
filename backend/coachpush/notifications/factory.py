# backend/coachpush/notifications/factory.py

"""
PushSender の簡易ファクトリ。

- FCM_PROJECT_ID が設定されていれば FcmPushSender
- 未設定なら LoggingPushSender（ログ出力のみ）
"""

from __future__ import annotations

from typing import Optional

from coachpush.utils.config import get_env

from .fcm import FcmPushSender
from .schemas import NotificationCategory, PushMessage
from .service import DeliveryError, LoggingPushSender, PushSender

_push_sender: Optional[PushSender] = None


def get_push_sender() -> PushSender:
    """
    アプリ全体で共有する PushSender を返す。

    初回呼び出し時にのみ生成し、それ以降は同じインスタンスを返す。
    """
    global _push_sender
    if _push_sender is None:
        if get_env("FCM_PROJECT_ID", required=False):
            _push_sender = FcmPushSender()
        else:
            _push_sender = LoggingPushSender()
    return _push_sender


def reset_push_sender() -> None:
    """
    テスト用に共有 Sender をリセットする。
    """
    global _push_sender
    _push_sender = None


__all__ = [
    "NotificationCategory",
    "PushMessage",
    "PushSender",
    "DeliveryError",
    "FcmPushSender",
    "LoggingPushSender",
    "get_push_sender",
    "reset_push_sender",
]
