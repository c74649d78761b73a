# backend/coachpush/dispatch/batch.py

"""
一括ファンアウト用のディスパッチ。

- run_bounded: 候補ごとの処理を上限付きで並行実行し、成功数を数える汎用ユーティリティ
- BatchFanoutDispatcher: 1 回のクエリで候補を集め、候補ごとにメッセージを組み立てて送信する

候補 1件の失敗（読み取り失敗・送信失敗）はその候補の中で捕捉し、バッチ全体は止めない。
どの候補が失敗したかは返さず、件数だけを集計する。
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, Optional, TypeVar

from coachpush.notifications.schemas import PushMessage
from coachpush.notifications.service import PushSender
from coachpush.store.base import Document, DocumentStore

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_MAX_WORKERS = 8


@dataclass(frozen=True)
class CandidateQuery:
    """候補集合を得るための 1 回分のクエリ。"""

    collection: str
    where: Dict[str, Any] = field(default_factory=dict)
    order_by: Optional[str] = None
    descending: bool = False
    limit: Optional[int] = None


@dataclass
class BatchResult:
    """
    バッチ 1 回分の集計。

    - candidates: 処理対象になった候補数
    - sent: 送信に成功した件数
    - skipped: トークンなし・条件不一致などで送信しなかった件数
    - failed: 例外で終わった件数
    """

    candidates: int = 0
    sent: int = 0
    skipped: int = 0
    failed: int = 0


def run_bounded(
    items: Iterable[T],
    work: Callable[[T], bool],
    *,
    max_workers: int = DEFAULT_MAX_WORKERS,
) -> BatchResult:
    """
    items の各要素に work を適用する。

    - 同時実行数は max_workers で上限を設ける
    - work が True を返したら sent、False なら skipped、例外なら failed として数える
    - すべての work の完了を待ってから返る
    """
    candidates = list(items)
    result = BatchResult(candidates=len(candidates))
    if not candidates:
        return result

    with ThreadPoolExecutor(max_workers=max(1, max_workers)) as executor:
        futures = [executor.submit(work, item) for item in candidates]
        for future in as_completed(futures):
            try:
                if future.result():
                    result.sent += 1
                else:
                    result.skipped += 1
            except Exception:  # noqa: BLE001 - 候補 1件の失敗でバッチを止めない
                result.failed += 1
                logger.exception("Batch work item failed. Continuing with others.")

    return result


MessageBuilder = Callable[[Document], Optional[PushMessage]]


class BatchFanoutDispatcher:
    """
    クエリで得た候補ごとに builder でメッセージを組み立てて送信する。

    builder が None を返した候補は送信しない（スキップ）。
    """

    def __init__(
        self,
        store: DocumentStore,
        sender: PushSender,
        *,
        max_workers: int = DEFAULT_MAX_WORKERS,
    ) -> None:
        self._store = store
        self._sender = sender
        self._max_workers = max_workers

    def _send_one(self, builder: MessageBuilder, candidate: Document) -> bool:
        message = builder(candidate)
        if message is None:
            return False
        self._sender.send(message)
        return True

    def run(self, query: CandidateQuery, builder: MessageBuilder, *, label: str = "notifications") -> BatchResult:
        try:
            candidates = self._store.query(
                query.collection,
                where=query.where,
                order_by=query.order_by,
                descending=query.descending,
                limit=query.limit,
            )
        except Exception:  # noqa: BLE001 - 候補取得の失敗もトリガーには伝播させない
            logger.exception("Failed to load candidates for %s.", label)
            return BatchResult()

        result = run_bounded(
            candidates,
            lambda candidate: self._send_one(builder, candidate),
            max_workers=self._max_workers,
        )
        logger.info(
            "Sent %d %s (candidates=%d, skipped=%d, failed=%d)",
            result.sent,
            label,
            result.candidates,
            result.skipped,
            result.failed,
        )
        return result
