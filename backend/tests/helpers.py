# backend/tests/helpers.py
"""
テスト共通のダミー Sender / ストア。
"""

import threading
from typing import List, Set

from coachpush.notifications.schemas import PushMessage
from coachpush.notifications.service import DeliveryError
from coachpush.store.base import StoreReadError
from coachpush.store.memory import InMemoryDocumentStore


class DummySender:
    """送信されたメッセージを記録するだけの Sender。failing_tokens 宛ては DeliveryError。"""

    def __init__(self, failing_tokens: Set[str] = frozenset()) -> None:
        self.messages: List[PushMessage] = []
        self.attempted_tokens: List[str] = []
        self._failing_tokens = set(failing_tokens)
        self._lock = threading.Lock()

    def send(self, message: PushMessage) -> str:
        with self._lock:
            self.attempted_tokens.append(message.token)
            if message.token in self._failing_tokens:
                raise DeliveryError(f"delivery failed for {message.token}")
            self.messages.append(message)
            return f"dummy-{len(self.messages)}"


class FailingStore(InMemoryDocumentStore):
    """指定したドキュメントの点読みだけ失敗させるストア。"""

    def __init__(self, *args, failing_ids: Set[str] = frozenset(), **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._failing_ids = set(failing_ids)

    def get_by_id(self, collection, doc_id):
        if doc_id in self._failing_ids:
            raise StoreReadError(f"read failed for {collection}/{doc_id}")
        return super().get_by_id(collection, doc_id)
