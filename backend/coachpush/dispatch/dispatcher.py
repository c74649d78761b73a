# backend/coachpush/dispatch/dispatcher.py

"""
単発イベントのディスパッチ。

1 イベントにつき:
  受信者解決 → (トークンなし: 終了) → コンテキスト補完 → メッセージ組み立て → 送信

想定外の例外（ストア読み取り失敗・送信失敗など）もここで捕捉してログに残し、
トリガー側には常に正常終了として返す（通知の失敗でトリガーを再実行させない）。
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Optional

from coachpush.notifications.service import PushSender
from coachpush.store.base import DocumentStore

from .composer import MessageComposer
from .enrichment import ContextEnricher
from .events import (
    AchievementUnlockEvent,
    ActivityCompletionEvent,
    AnyTriggerEvent,
    GenericNotificationEvent,
    PlanAssignmentEvent,
)
from .recipients import RecipientResolver

logger = logging.getLogger(__name__)


class DispatchOutcome(str, Enum):
    """
    1 回のディスパッチの終端状態。

    トリガー側からはどれも「成功」で区別されない。ログとテストのためだけに使う。
    """

    SENT = "sent"
    SKIPPED_NO_TOKEN = "skipped_no_token"
    SKIPPED_NO_COACH = "skipped_no_coach"
    SKIPPED_COACH_NO_TOKEN = "skipped_coach_no_token"
    FAILED = "failed"


def recipient_id_for(event: AnyTriggerEvent) -> str:
    """ワークアウト完了以外のイベントの受信者 ID。"""
    if isinstance(event, GenericNotificationEvent):
        return event.receiver_id
    if isinstance(event, PlanAssignmentEvent):
        return event.athlete_id
    if isinstance(event, AchievementUnlockEvent):
        return event.user_id
    raise TypeError(f"Recipient of {type(event).__name__} is derived from the athlete's coach.")


class SingleEventDispatcher:
    """
    ドキュメント作成トリガー 4種（通知 / プラン割り当て / ワークアウト完了 / 実績解除）の
    共通ディスパッチャ。

    ストアと Sender はエントリーポイント側で生成して注入する。
    """

    def __init__(
        self,
        store: DocumentStore,
        sender: PushSender,
        *,
        resolver: Optional[RecipientResolver] = None,
        enricher: Optional[ContextEnricher] = None,
        composer: Optional[MessageComposer] = None,
    ) -> None:
        self._sender = sender
        self._resolver = resolver or RecipientResolver(store)
        self._enricher = enricher or ContextEnricher(store, self._resolver)
        self._composer = composer or MessageComposer()

    def dispatch(self, event: AnyTriggerEvent) -> DispatchOutcome:
        try:
            return self._dispatch(event)
        except Exception:  # noqa: BLE001 - 通知の失敗はトリガーに伝播させない
            logger.exception("Error sending %s push notification.", event.kind)
            return DispatchOutcome.FAILED

    def _dispatch(self, event: AnyTriggerEvent) -> DispatchOutcome:
        if isinstance(event, ActivityCompletionEvent):
            return self._dispatch_workout_completed(event)

        recipient_id = recipient_id_for(event)
        recipient = self._resolver.resolve(recipient_id)
        if not recipient.is_reachable:
            logger.info("No FCM token for user %s. Skipping %s notification.", recipient_id, event.kind)
            return DispatchOutcome.SKIPPED_NO_TOKEN

        context = self._enricher.enrich(event)
        message = self._composer.compose(context, recipient.delivery_token)
        delivery_id = self._sender.send(message)
        logger.info(
            "Push notification sent to user %s (%s): %s [%s]",
            recipient_id,
            event.kind,
            message.title,
            delivery_id,
        )
        return DispatchOutcome.SENT

    def _dispatch_workout_completed(self, event: ActivityCompletionEvent) -> DispatchOutcome:
        context = self._enricher.for_activity_completion(event)
        if context is None:
            logger.info("No coach assigned to athlete %s. Skipping workout notification.", event.athlete_id)
            return DispatchOutcome.SKIPPED_NO_COACH

        coach = self._resolver.resolve(context.coach_id)
        if not coach.is_reachable:
            logger.info("No FCM token for coach %s. Skipping workout notification.", context.coach_id)
            return DispatchOutcome.SKIPPED_COACH_NO_TOKEN

        message = self._composer.compose_workout_completed(context, coach.delivery_token)
        delivery_id = self._sender.send(message)
        logger.info(
            "Notification sent to coach %s for workout completion of athlete %s [%s]",
            context.coach_id,
            event.athlete_id,
            delivery_id,
        )
        return DispatchOutcome.SENT
