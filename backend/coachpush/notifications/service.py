# backend/coachpush/notifications/service.py

"""
Push 送信インターフェースと最小実装。

- PushMessage を受け取って配信 ID を返す send() インターフェース
- ログ出力のみ行う LoggingPushSender（FCM 未設定時のデフォルト）
"""

from __future__ import annotations

import logging
from typing import Any, Protocol
from uuid import uuid4

from .schemas import PushMessage

logger = logging.getLogger(__name__)


class PushSenderError(Exception):
    """Push 送信全般の基底例外。"""


class DeliveryError(PushSenderError):
    """
    配信に失敗した場合の例外。

    呼び出し側はこの送信 1件についてリトライ不可として扱う。
    """

    def __init__(self, message: str, *, status_code: int | None = None, body: Any | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class PushSender(Protocol):
    """
    Push 送信の最小インターフェース。

    実装例:
    - LoggingPushSender: ログ出力のみ
    - FcmPushSender: FCM HTTP v1 API 経由で送信
    """

    def send(self, message: PushMessage) -> str:  # pragma: no cover - Protocol
        ...


def _mask_token(token: str) -> str:
    # デバイストークンはログに全文を出さない
    return f"{token[:8]}..." if len(token) > 8 else "***"


class LoggingPushSender:
    """
    PushMessage を Python の logger に記録するだけの Sender。

    - ローカル開発・FCM 未設定環境向け
    - 実際の外部サービスへの送信は行わない
    """

    def __init__(self, logger_: logging.Logger | None = None) -> None:
        self._logger = logger_ or logger

    def send(self, message: PushMessage) -> str:
        delivery_id = f"log-{uuid4().hex[:12]}"
        self._logger.info(
            "[push][%s] token=%s %s %s data=%s",
            message.category.value,
            _mask_token(message.token),
            message.title,
            message.body,
            message.data,
        )
        return delivery_id
