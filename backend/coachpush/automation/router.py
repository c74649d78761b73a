# backend/coachpush/automation/router.py

"""
定期ジョブを外部スケジューラから起動するための FastAPI ルーター。

- POST /jobs/daily-reminders
- POST /jobs/inactivity-reminders

どちらも個々の送信失敗はレスポンスの件数に含めるだけで、常に 200 を返す。
"""

from dataclasses import asdict

from fastapi import APIRouter, Depends

from coachpush.notifications.factory import get_push_sender
from coachpush.notifications.service import PushSender
from coachpush.store.base import DocumentStore
from coachpush.store.factory import get_document_store

from .jobs import run_daily_workout_reminders, run_inactivity_reminders
from .schemas import BatchRunResponse

router = APIRouter(prefix="/jobs", tags=["jobs"])


@router.post("/daily-reminders", response_model=BatchRunResponse)
def trigger_daily_reminders(
    store: DocumentStore = Depends(get_document_store),
    sender: PushSender = Depends(get_push_sender),
) -> BatchRunResponse:
    result = run_daily_workout_reminders(store=store, sender=sender)
    return BatchRunResponse(job="daily-reminders", **asdict(result))


@router.post("/inactivity-reminders", response_model=BatchRunResponse)
def trigger_inactivity_reminders(
    store: DocumentStore = Depends(get_document_store),
    sender: PushSender = Depends(get_push_sender),
) -> BatchRunResponse:
    result = run_inactivity_reminders(store=store, sender=sender)
    return BatchRunResponse(job="inactivity-reminders", **asdict(result))
