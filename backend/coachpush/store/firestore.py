# backend/coachpush/store/firestore.py

"""
Firestore REST API との通信を担当する DocumentStore 実装。

- documents/{collection}/{id} の GET（点読み）
- documents:runQuery（等価フィルタ + orderBy + limit）

Firestore の型付き値（stringValue / timestampValue など）は
このモジュール内で素の Python 値に変換し、上位レイヤーには dict だけを渡す。
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

import httpx

from .base import Document, StoreReadError
from .config import FirestoreSettings, get_firestore_settings


def _parse_timestamp(raw: str) -> datetime:
    """
    RFC3339 のタイムスタンプ文字列を aware datetime に変換する。

    Firestore はナノ秒精度（小数 9 桁）で返すことがあるため、マイクロ秒に丸める。
    """
    text = raw.replace("Z", "+00:00")
    if "." in text:
        head, _, rest = text.partition(".")
        digits = ""
        for ch in rest:
            if not ch.isdigit():
                break
            digits += ch
        text = f"{head}.{digits[:6].ljust(6, '0')}{rest[len(digits):]}"
    parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def decode_value(value: Dict[str, Any]) -> Any:
    """Firestore の型付き値を Python の値に変換する。"""
    if "stringValue" in value:
        return value["stringValue"]
    if "integerValue" in value:
        return int(value["integerValue"])
    if "doubleValue" in value:
        return float(value["doubleValue"])
    if "booleanValue" in value:
        return bool(value["booleanValue"])
    if "nullValue" in value:
        return None
    if "timestampValue" in value:
        return _parse_timestamp(value["timestampValue"])
    if "mapValue" in value:
        return decode_fields(value["mapValue"].get("fields", {}))
    if "arrayValue" in value:
        return [decode_value(v) for v in value["arrayValue"].get("values", [])]
    if "referenceValue" in value:
        return value["referenceValue"]
    # geoPointValue / bytesValue などは通知では使わないため生のまま返す
    return value


def decode_fields(fields: Dict[str, Any]) -> Dict[str, Any]:
    return {name: decode_value(raw) for name, raw in fields.items()}


def encode_value(value: Any) -> Dict[str, Any]:
    """Python の値を Firestore の型付き値に変換する（クエリのフィルタ用）。"""
    if value is None:
        return {"nullValue": None}
    if isinstance(value, bool):
        return {"booleanValue": value}
    if isinstance(value, int):
        return {"integerValue": str(value)}
    if isinstance(value, float):
        return {"doubleValue": value}
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return {"timestampValue": value.isoformat()}
    return {"stringValue": str(value)}


def decode_document(raw: Dict[str, Any]) -> Document:
    """
    REST API のドキュメント表現を dict に変換する。

    name は "projects/.../documents/users/abc" 形式なので、末尾セグメントを id とする。
    """
    doc = decode_fields(raw.get("fields", {}))
    doc["id"] = raw.get("name", "").rsplit("/", 1)[-1]
    return doc


class FirestoreDocumentStore:
    """
    Firestore REST API の薄いラッパー。

    NOTE:
      - 認証トークンの取得・更新は外部（デプロイ環境）の責務とし、
        ここでは FIRESTORE_ACCESS_TOKEN をそのまま Bearer として付与する。
      - transport はテスト時に httpx.MockTransport を差し込むためのもの。
    """

    def __init__(
        self,
        settings: Optional[FirestoreSettings] = None,
        *,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self._settings = settings or get_firestore_settings()
        self._transport = transport

    @property
    def documents_url(self) -> str:
        s = self._settings
        return f"{s.api_base_url}/projects/{s.project_id}/databases/{s.database_id}/documents"

    def _build_headers(self) -> Dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self._settings.access_token:
            headers["Authorization"] = f"Bearer {self._settings.access_token}"
        return headers

    def _request(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        try:
            with httpx.Client(
                timeout=self._settings.timeout_seconds,
                transport=self._transport,
            ) as client:
                return client.request(method, url, headers=self._build_headers(), **kwargs)
        except httpx.RequestError as exc:
            raise StoreReadError(f"Failed to call Firestore API: {exc}") from exc

    def get_by_id(self, collection: str, doc_id: str) -> Optional[Document]:
        response = self._request("GET", f"{self.documents_url}/{collection}/{doc_id}")

        if response.status_code == 404:
            return None
        if response.status_code >= 400:
            raise StoreReadError(
                f"Firestore API error: {response.status_code} {response.text}"
            )
        return decode_document(response.json())

    def _build_where(self, where: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        filters = [
            {
                "fieldFilter": {
                    "field": {"fieldPath": field},
                    "op": "EQUAL",
                    "value": encode_value(value),
                }
            }
            for field, value in where.items()
        ]
        if not filters:
            return None
        if len(filters) == 1:
            return filters[0]
        return {"compositeFilter": {"op": "AND", "filters": filters}}

    def query(
        self,
        collection: str,
        *,
        where: Optional[Dict[str, Any]] = None,
        order_by: Optional[str] = None,
        descending: bool = False,
        limit: Optional[int] = None,
    ) -> List[Document]:
        structured: Dict[str, Any] = {"from": [{"collectionId": collection}]}

        condition = self._build_where(where or {})
        if condition is not None:
            structured["where"] = condition
        if order_by is not None:
            structured["orderBy"] = [
                {
                    "field": {"fieldPath": order_by},
                    "direction": "DESCENDING" if descending else "ASCENDING",
                }
            ]
        if limit is not None:
            structured["limit"] = limit

        response = self._request(
            "POST",
            f"{self.documents_url}:runQuery",
            json={"structuredQuery": structured},
        )
        if response.status_code >= 400:
            raise StoreReadError(
                f"Firestore API error: {response.status_code} {response.text}"
            )

        rows = response.json()
        if not isinstance(rows, list):
            raise StoreReadError("Unexpected Firestore response format: runQuery result is not a list.")

        # 結果 0 件の場合も {"readTime": ...} だけの要素が返るため document を持つものに絞る
        return [decode_document(row["document"]) for row in rows if "document" in row]
