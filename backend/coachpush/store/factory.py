# backend/coachpush/store/factory.py

"""
ドキュメントストアの簡易ファクトリ。

- FIRESTORE_PROJECT_ID が設定されていれば FirestoreDocumentStore
- 未設定なら InMemoryDocumentStore（ローカル開発用。中身は空）
"""

from __future__ import annotations

import logging
from typing import Optional

from coachpush.utils.config import get_env

from .base import DocumentStore
from .firestore import FirestoreDocumentStore
from .memory import InMemoryDocumentStore

logger = logging.getLogger(__name__)

_document_store: Optional[DocumentStore] = None


def get_document_store() -> DocumentStore:
    """
    アプリ全体で共有する DocumentStore を返す。

    初回呼び出し時にのみ生成し、それ以降は同じインスタンスを返す。
    """
    global _document_store
    if _document_store is None:
        if get_env("FIRESTORE_PROJECT_ID", required=False):
            _document_store = FirestoreDocumentStore()
        else:
            logger.warning("FIRESTORE_PROJECT_ID is not set. Using an empty in-memory store.")
            _document_store = InMemoryDocumentStore()
    return _document_store


def reset_document_store() -> None:
    """
    テスト用に共有ストアをリセットする。
    """
    global _document_store
    _document_store = None
