# backend/coachpush/automation/config.py

"""
定期ジョブの設定値。
"""

from dataclasses import dataclass
from functools import lru_cache

from coachpush.utils.config import get_env_int

# 外部スケジューラへの登録値（cron 形式）。ここでは参照用の定数として持つだけ。
DAILY_REMINDER_SCHEDULE = "0 9 * * *"
INACTIVITY_REMINDER_SCHEDULE = "0 18 * * *"
SCHEDULE_TIMEZONE = "America/New_York"


@dataclass(frozen=True)
class JobSettings:
    max_workers: int = 8
    inactivity_threshold_days: int = 3


@lru_cache()
def get_job_settings() -> JobSettings:
    """
    任意:
      - PUSH_BATCH_MAX_WORKERS（デフォルト 8）
      - INACTIVITY_THRESHOLD_DAYS（デフォルト 3）
    """
    return JobSettings(
        max_workers=max(1, get_env_int("PUSH_BATCH_MAX_WORKERS", default=8)),
        inactivity_threshold_days=get_env_int("INACTIVITY_THRESHOLD_DAYS", default=3),
    )
