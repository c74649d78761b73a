# backend/coachpush/dispatch/recipients.py

"""
受信者の解決。

ユーザー ID からプロフィール（表示名・デバイストークン・担当コーチ）を読み出す。
ユーザーが存在しない場合も例外にせず空のプロフィールを返し、
呼び出し側は「トークンなし」と同じくスキップとして扱う。
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from coachpush.store.base import USERS, Document, DocumentStore


@dataclass(frozen=True)
class RecipientProfile:
    """通知の宛先として必要なユーザー情報。"""

    user_id: str
    display_name: Optional[str] = None
    delivery_token: Optional[str] = None
    role: Optional[str] = None
    coach_id: Optional[str] = None

    @property
    def is_reachable(self) -> bool:
        return bool(self.delivery_token)

    @classmethod
    def from_document(cls, user_id: str, doc: Optional[Document]) -> "RecipientProfile":
        if doc is None:
            return cls(user_id=user_id)
        return cls(
            user_id=user_id,
            display_name=doc.get("name") or None,
            delivery_token=doc.get("fcmToken") or None,
            role=doc.get("role"),
            coach_id=doc.get("coachId") or None,
        )


class RecipientResolver:
    """users コレクションの点読みだけを行う。"""

    def __init__(self, store: DocumentStore) -> None:
        self._store = store

    def resolve(self, user_id: str) -> RecipientProfile:
        return RecipientProfile.from_document(user_id, self._store.get_by_id(USERS, user_id))
