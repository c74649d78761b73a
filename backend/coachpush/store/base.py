# backend/coachpush/store/base.py

"""
ドキュメントストアのインターフェース定義。

ドキュメントは「フィールド名 → 値」の dict として扱い、
ドキュメント ID は必ず "id" キーに入れて返す。
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Protocol

Document = Dict[str, Any]

# コレクション名（モバイルアプリ側の Firestore スキーマに合わせる）
USERS = "users"
TRAINING_PLANS = "trainingPlans"
PLAN_ASSIGNMENTS = "planAssignments"
ACTIVITY_LOGS = "activityLogs"
ACHIEVEMENTS = "achievements"
USER_ACHIEVEMENTS = "userAchievements"
NOTIFICATIONS = "notifications"


class StoreError(RuntimeError):
    """ドキュメントストア全般の基底例外。"""


class StoreReadError(StoreError):
    """読み取り（点読み / クエリ）に失敗した場合の例外。"""


class DocumentStore(Protocol):
    """
    通知パイプラインが利用するストアの最小インターフェース。

    実装例:
    - InMemoryDocumentStore: dict ベース（開発・テスト用）
    - FirestoreDocumentStore: Firestore REST API 経由
    """

    def get_by_id(self, collection: str, doc_id: str) -> Optional[Document]:  # pragma: no cover - Protocol
        """
        ドキュメントを 1件取得する。存在しない場合は例外ではなく None を返す。
        """
        ...

    def query(
        self,
        collection: str,
        *,
        where: Optional[Dict[str, Any]] = None,
        order_by: Optional[str] = None,
        descending: bool = False,
        limit: Optional[int] = None,
    ) -> List[Document]:  # pragma: no cover - Protocol
        """
        等価フィルタ（where の全キーを AND）・並び順・件数上限付きでドキュメントを取得する。
        """
        ...
