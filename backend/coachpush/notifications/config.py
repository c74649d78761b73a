# backend/coachpush/notifications/config.py

from dataclasses import dataclass
from functools import lru_cache

from coachpush.utils.config import get_env, get_env_int


@dataclass(frozen=True)
class FcmSettings:
    """
    Firebase Cloud Messaging (HTTP v1) 関連の設定値。
    """

    project_id: str
    access_token: str
    api_base_url: str = "https://fcm.googleapis.com/v1"
    android_channel_id: str = "pushup_channel"
    timeout_seconds: int = 10


@lru_cache()
def get_fcm_settings() -> FcmSettings:
    """
    FCM 設定値を環境変数から読み出す。

    必須:
      - FCM_PROJECT_ID
      - FCM_ACCESS_TOKEN

    任意:
      - FCM_API_BASE_URL（デフォルト https://fcm.googleapis.com/v1）
      - FCM_ANDROID_CHANNEL_ID（デフォルト pushup_channel）
      - FCM_TIMEOUT_SECONDS（デフォルト 10秒）
    """
    return FcmSettings(
        project_id=get_env("FCM_PROJECT_ID"),
        access_token=get_env("FCM_ACCESS_TOKEN"),
        api_base_url=get_env(
            "FCM_API_BASE_URL",
            default="https://fcm.googleapis.com/v1",
            required=False,
        ),
        android_channel_id=get_env(
            "FCM_ANDROID_CHANNEL_ID",
            default="pushup_channel",
            required=False,
        ),
        timeout_seconds=get_env_int("FCM_TIMEOUT_SECONDS", default=10),
    )
