# backend/coachpush/notifications/fcm.py

"""
Firebase Cloud Messaging HTTP v1 API への送信クライアント。

POST {api_base_url}/projects/{project_id}/messages:send
"""

from __future__ import annotations

from typing import Any, Dict, Optional

import httpx

from .config import FcmSettings, get_fcm_settings
from .schemas import PushMessage
from .service import DeliveryError


class FcmPushSender:
    """
    PushMessage を FCM のメッセージ形式に変換して送信する Sender。

    NOTE:
      - アクセストークンの取得・更新はデプロイ環境側の責務。
      - 失敗時のリトライは行わない（DeliveryError を投げるだけ）。
    """

    def __init__(
        self,
        settings: Optional[FcmSettings] = None,
        *,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self._settings = settings or get_fcm_settings()
        self._transport = transport

    @property
    def send_url(self) -> str:
        return f"{self._settings.api_base_url}/projects/{self._settings.project_id}/messages:send"

    def _build_headers(self) -> Dict[str, str]:
        return {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self._settings.access_token}",
        }

    def build_payload(self, message: PushMessage) -> Dict[str, Any]:
        """
        FCM の Message リソースを組み立てる。

        high_priority の場合のみ android / apns ブロックを付与する。
        """
        fcm_message: Dict[str, Any] = {
            "token": message.token,
            "notification": {
                "title": message.title,
                "body": message.body,
            },
            "data": dict(message.data),
        }

        if message.high_priority:
            fcm_message["android"] = {
                "priority": "HIGH",
                "notification": {
                    "channel_id": self._settings.android_channel_id,
                    "notification_priority": "PRIORITY_HIGH",
                    "default_sound": True,
                    "default_vibrate_timings": True,
                },
            }
            fcm_message["apns"] = {
                "payload": {
                    "aps": {
                        "alert": {
                            "title": message.title,
                            "body": message.body,
                        },
                        "sound": "default",
                        "badge": 1,
                    },
                },
            }

        return {"message": fcm_message}

    def send(self, message: PushMessage) -> str:
        """
        メッセージを 1件送信し、FCM のメッセージ名（projects/.../messages/...）を返す。

        :raises DeliveryError: 接続エラー・タイムアウト・4xx/5xx の場合。
        """
        try:
            with httpx.Client(
                timeout=self._settings.timeout_seconds,
                transport=self._transport,
            ) as client:
                response = client.post(
                    self.send_url,
                    json=self.build_payload(message),
                    headers=self._build_headers(),
                )
        except httpx.RequestError as exc:  # 接続エラー・タイムアウトなど
            raise DeliveryError(f"Failed to call FCM API: {exc}") from exc

        if response.status_code // 100 != 2:
            try:
                body = response.json()
            except ValueError:
                body = response.text
            raise DeliveryError(
                f"FCM API error: status_code={response.status_code}",
                status_code=response.status_code,
                body=body,
            )

        try:
            return str(response.json().get("name", ""))
        except ValueError:
            return response.text
