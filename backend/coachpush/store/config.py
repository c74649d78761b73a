# backend/coachpush/store/config.py

"""
Firestore 連携に必要な設定値をまとめるモジュール。
"""

from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

from coachpush.utils.config import get_env, get_env_int


@dataclass(frozen=True)
class FirestoreSettings:
    """Firestore REST API 用の設定値コンテナ。"""

    project_id: str
    database_id: str = "(default)"
    api_base_url: str = "https://firestore.googleapis.com/v1"
    access_token: Optional[str] = None
    timeout_seconds: int = 10


@lru_cache()
def get_firestore_settings() -> FirestoreSettings:
    """
    環境変数から Firestore 設定を読み込む。

    必須:
      - FIRESTORE_PROJECT_ID

    任意:
      - FIRESTORE_DATABASE_ID      (デフォルト: (default))
      - FIRESTORE_API_BASE_URL     (デフォルト: https://firestore.googleapis.com/v1)
      - FIRESTORE_ACCESS_TOKEN     (エミュレータ利用時は不要)
      - FIRESTORE_TIMEOUT_SECONDS  (デフォルト: 10)
    """
    return FirestoreSettings(
        project_id=get_env("FIRESTORE_PROJECT_ID"),
        database_id=get_env("FIRESTORE_DATABASE_ID", default="(default)", required=False),
        api_base_url=get_env(
            "FIRESTORE_API_BASE_URL",
            default="https://firestore.googleapis.com/v1",
            required=False,
        ),
        access_token=get_env("FIRESTORE_ACCESS_TOKEN", required=False),
        timeout_seconds=get_env_int("FIRESTORE_TIMEOUT_SECONDS", default=10),
    )
