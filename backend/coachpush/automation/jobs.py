# backend/coachpush/automation/jobs.py
from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

from coachpush.dispatch.batch import BatchFanoutDispatcher, BatchResult, CandidateQuery
from coachpush.dispatch.composer import MessageComposer
from coachpush.dispatch.enrichment import ContextEnricher
from coachpush.dispatch.recipients import RecipientProfile, RecipientResolver
from coachpush.notifications.factory import get_push_sender
from coachpush.notifications.schemas import PushMessage
from coachpush.notifications.service import PushSender
from coachpush.store.base import ACTIVITY_LOGS, PLAN_ASSIGNMENTS, USERS, Document, DocumentStore
from coachpush.store.factory import get_document_store

from .config import get_job_settings

logger = logging.getLogger(__name__)

DAILY_REMINDERS_QUERY = CandidateQuery(collection=PLAN_ASSIGNMENTS, where={"status": "active"})
INACTIVITY_REMINDERS_QUERY = CandidateQuery(collection=USERS, where={"role": "athlete"})


def _normalize_now(now: Optional[datetime]) -> datetime:
    """
    naive な datetime が渡された場合でも UTC として扱うヘルパー。
    """
    if now is None:
        return datetime.now(timezone.utc)
    if now.tzinfo is None:
        return now.replace(tzinfo=timezone.utc)
    return now


def _to_datetime(value: Any) -> datetime:
    """
    completedAt の値を aware datetime に変換する。

    ストアによって datetime / ISO 8601 文字列のどちらでも返りうる。
    """
    if isinstance(value, str):
        value = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if not isinstance(value, datetime):
        raise ValueError(f"Unsupported completedAt value: {value!r}")
    return _normalize_now(value)


class DailyWorkoutReminderBuilder:
    """
    アクティブなプラン割り当て 1件から、アスリート宛てのリマインダーを組み立てる。
    """

    def __init__(self, store: DocumentStore) -> None:
        self._resolver = RecipientResolver(store)
        self._enricher = ContextEnricher(store, self._resolver)
        self._composer = MessageComposer()

    def __call__(self, assignment: Document) -> Optional[PushMessage]:
        athlete_id = assignment.get("athleteId")
        athlete = (
            self._resolver.resolve(athlete_id)
            if athlete_id
            else RecipientProfile(user_id="")
        )
        if not athlete.is_reachable:
            logger.info("No FCM token for athlete %s. Skipping daily reminder.", athlete_id)
            return None

        context = self._enricher.for_daily_reminder(assignment.get("planId"))
        return self._composer.compose_daily_reminder(context, athlete.delivery_token)


class InactivityReminderBuilder:
    """
    アスリート 1人について、直近のアクティビティから送る文面を決める。

    - アクティビティが 1件もない → ウェルカムメッセージ
    - 直近のアクティビティが now - threshold より前 → 再エンゲージメントメッセージ
    - それ以外 → 送らない
    """

    def __init__(self, store: DocumentStore, *, now: datetime, threshold_days: int = 3) -> None:
        self._store = store
        self._composer = MessageComposer()
        self._cutoff = now - timedelta(days=threshold_days)

    def __call__(self, user: Document) -> Optional[PushMessage]:
        user_id = user.get("id")
        token = user.get("fcmToken")
        if not token:
            logger.info("No FCM token for athlete %s. Skipping inactivity reminder.", user_id)
            return None

        latest = self._store.query(
            ACTIVITY_LOGS,
            where={"athleteId": user_id},
            order_by="completedAt",
            descending=True,
            limit=1,
        )
        if not latest:
            return self._composer.compose_welcome(token)

        if _to_datetime(latest[0].get("completedAt")) < self._cutoff:
            return self._composer.compose_reengagement(token)

        logger.info("Athlete %s was active recently. Skipping inactivity reminder.", user_id)
        return None


def run_daily_workout_reminders(
    *,
    store: Optional[DocumentStore] = None,
    sender: Optional[PushSender] = None,
    max_workers: Optional[int] = None,
) -> BatchResult:
    """
    日次のワークアウトリマインダーを送る。

    - status == "active" のプラン割り当てを全件取得
    - 割り当てごとにアスリートのトークンとプラン名を引いて送信
    """
    store = store or get_document_store()
    sender = sender or get_push_sender()
    workers = max_workers or get_job_settings().max_workers

    dispatcher = BatchFanoutDispatcher(store, sender, max_workers=workers)
    return dispatcher.run(
        DAILY_REMINDERS_QUERY,
        DailyWorkoutReminderBuilder(store),
        label="daily workout reminders",
    )


def run_inactivity_reminders(
    *,
    store: Optional[DocumentStore] = None,
    sender: Optional[PushSender] = None,
    now: Optional[datetime] = None,
    max_workers: Optional[int] = None,
    threshold_days: Optional[int] = None,
) -> BatchResult:
    """
    一定期間ワークアウトしていないアスリートに声をかける。

    now は「何日前か」の判定にだけ使う。テストでは固定値を渡す。
    """
    store = store or get_document_store()
    sender = sender or get_push_sender()
    settings = get_job_settings()
    workers = max_workers or settings.max_workers
    days = settings.inactivity_threshold_days if threshold_days is None else threshold_days

    dispatcher = BatchFanoutDispatcher(store, sender, max_workers=workers)
    return dispatcher.run(
        INACTIVITY_REMINDERS_QUERY,
        InactivityReminderBuilder(store, now=_normalize_now(now), threshold_days=days),
        label="inactivity reminders",
    )


def main() -> None:
    """
    簡易 CLI エントリーポイント。

    例:
        python -m coachpush.automation.jobs daily-reminders
        python -m coachpush.automation.jobs inactivity-reminders

    本番運用では外部スケジューラ（config.DAILY_REMINDER_SCHEDULE など）から呼び出す想定。
    """
    import argparse

    parser = argparse.ArgumentParser(description="Push notification jobs runner")
    parser.add_argument(
        "job",
        choices=["daily-reminders", "inactivity-reminders"],
        help="実行するジョブ種別",
    )
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    store = get_document_store()
    sender = get_push_sender()

    if args.job == "daily-reminders":
        run_daily_workout_reminders(store=store, sender=sender)
    elif args.job == "inactivity-reminders":
        run_inactivity_reminders(store=store, sender=sender)


if __name__ == "__main__":
    main()
