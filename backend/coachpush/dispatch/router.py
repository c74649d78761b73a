# backend/coachpush/dispatch/router.py

"""
トリガーイベント受け口の FastAPI ルーター定義。

- POST /events

外部トリガー（Firestore の onCreate など）から 1 イベントずつ呼ばれる想定。
パイプライン内部の失敗でトリガーがリトライしないよう、常に 200 を返す。
"""

from functools import lru_cache
from typing import Annotated

from fastapi import APIRouter, Body, Depends

from coachpush.notifications.factory import get_push_sender
from coachpush.store.factory import get_document_store

from .dispatcher import SingleEventDispatcher
from .events import AnyTriggerEvent
from .schemas import EventAcceptedResponse

router = APIRouter(tags=["events"])


@lru_cache()
def get_single_event_dispatcher() -> SingleEventDispatcher:
    """
    SingleEventDispatcher のシングルトンインスタンスを取得する。

    NOTE:
    - ストア / Sender は各 factory の共有インスタンスを使う。
    - テストでは app.dependency_overrides で差し替える。
    """
    return SingleEventDispatcher(get_document_store(), get_push_sender())


@router.post(
    "/events",
    response_model=EventAcceptedResponse,
    summary="ドキュメント作成イベントを受け取り Push 通知を送る",
)
def receive_event(
    event: Annotated[AnyTriggerEvent, Body(discriminator="kind")],
    dispatcher: SingleEventDispatcher = Depends(get_single_event_dispatcher),
) -> EventAcceptedResponse:
    """
    kind に応じたイベントを 1件ディスパッチする。

    - 不正なボディ（kind 不明・必須キー欠落）は FastAPI 標準の 422
    - 送信 / スキップ / 内部失敗はいずれも 200
    """
    dispatcher.dispatch(event)
    return EventAcceptedResponse()
