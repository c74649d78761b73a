# backend/coachpush/store/memory.py

"""
dict ベースの DocumentStore 実装。

FIRESTORE_PROJECT_ID 未設定時のデフォルト、およびテストで使用する。
"""

from __future__ import annotations

import copy
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from .base import Document


def _sort_key(value: Any) -> tuple:
    # None は常に末尾（昇順時）。ISO 8601 文字列は datetime として比較し、naive datetime は UTC とみなす。
    if value is None:
        return (1, 0)
    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return (0, value)
    if isinstance(value, datetime) and value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return (0, value)


class InMemoryDocumentStore:
    """
    コレクション名 → {ドキュメントID → フィールド dict} を保持するだけのストア。
    """

    def __init__(self, data: Optional[Dict[str, Dict[str, Dict[str, Any]]]] = None) -> None:
        self._collections: Dict[str, Dict[str, Dict[str, Any]]] = {}
        for collection, docs in (data or {}).items():
            for doc_id, fields in docs.items():
                self.add(collection, doc_id, fields)

    def add(self, collection: str, doc_id: str, fields: Dict[str, Any]) -> None:
        """ドキュメントを登録（上書き）する。"""
        self._collections.setdefault(collection, {})[doc_id] = dict(fields)

    def _to_document(self, doc_id: str, fields: Dict[str, Any]) -> Document:
        doc = copy.deepcopy(fields)
        doc["id"] = doc_id
        return doc

    def get_by_id(self, collection: str, doc_id: str) -> Optional[Document]:
        fields = self._collections.get(collection, {}).get(doc_id)
        if fields is None:
            return None
        return self._to_document(doc_id, fields)

    def query(
        self,
        collection: str,
        *,
        where: Optional[Dict[str, Any]] = None,
        order_by: Optional[str] = None,
        descending: bool = False,
        limit: Optional[int] = None,
    ) -> List[Document]:
        conditions = where or {}
        docs = [
            self._to_document(doc_id, fields)
            for doc_id, fields in self._collections.get(collection, {}).items()
            if all(fields.get(key) == value for key, value in conditions.items())
        ]

        if order_by is not None:
            # Firestore と同様、order_by のフィールドを持たないドキュメントは除外する
            docs = [doc for doc in docs if doc.get(order_by) is not None]
            docs.sort(key=lambda doc: _sort_key(doc.get(order_by)), reverse=descending)

        if limit is not None:
            docs = docs[:limit]
        return docs
