# backend/tests/test_store_memory.py

from datetime import datetime, timezone

from coachpush.store.memory import InMemoryDocumentStore


def _utc(day: int) -> datetime:
    return datetime(2025, 1, day, tzinfo=timezone.utc)


def test_get_by_id_returns_copy_with_id_and_none_when_missing() -> None:
    store = InMemoryDocumentStore({"users": {"u1": {"name": "Alice"}}})

    doc = store.get_by_id("users", "u1")
    assert doc == {"id": "u1", "name": "Alice"}

    # 返り値を書き換えてもストアには影響しない
    doc["name"] = "changed"
    assert store.get_by_id("users", "u1")["name"] == "Alice"

    assert store.get_by_id("users", "missing") is None
    assert store.get_by_id("unknown_collection", "u1") is None


def test_query_filters_orders_and_limits() -> None:
    store = InMemoryDocumentStore(
        {
            "activityLogs": {
                "a1": {"athleteId": "u1", "completedAt": _utc(1)},
                "a2": {"athleteId": "u1", "completedAt": _utc(5)},
                "a3": {"athleteId": "u2", "completedAt": _utc(9)},
                "a4": {"athleteId": "u1"},
            }
        }
    )

    latest = store.query(
        "activityLogs",
        where={"athleteId": "u1"},
        order_by="completedAt",
        descending=True,
        limit=1,
    )
    assert [doc["id"] for doc in latest] == ["a2"]

    ascending = store.query("activityLogs", where={"athleteId": "u1"}, order_by="completedAt")
    # order_by のフィールドを持たない a4 は除外される
    assert [doc["id"] for doc in ascending] == ["a1", "a2"]

    unordered = store.query("activityLogs", where={"athleteId": "u1"})
    assert {doc["id"] for doc in unordered} == {"a1", "a2", "a4"}


def test_query_on_empty_collection_returns_empty_list() -> None:
    store = InMemoryDocumentStore()

    assert store.query("users", where={"role": "athlete"}) == []


def test_query_orders_mixed_datetime_and_iso_string_values() -> None:
    store = InMemoryDocumentStore(
        {
            "activityLogs": {
                "a1": {"athleteId": "u1", "completedAt": _utc(3)},
                "a2": {"athleteId": "u1", "completedAt": "2025-01-07T00:00:00Z"},
                "a3": {"athleteId": "u1", "completedAt": datetime(2025, 1, 5)},
            }
        }
    )

    docs = store.query("activityLogs", where={"athleteId": "u1"}, order_by="completedAt", descending=True)

    assert [doc["id"] for doc in docs] == ["a2", "a3", "a1"]
