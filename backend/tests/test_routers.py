# backend/tests/test_routers.py

from fastapi.testclient import TestClient

from coachpush.dispatch.dispatcher import SingleEventDispatcher
from coachpush.dispatch.router import get_single_event_dispatcher
from coachpush.dispatch.schemas import EventAcceptedResponse
from coachpush.main import create_app
from coachpush.notifications.factory import get_push_sender
from coachpush.store.factory import get_document_store
from coachpush.store.memory import InMemoryDocumentStore

from helpers import DummySender


def _store() -> InMemoryDocumentStore:
    return InMemoryDocumentStore(
        {
            "users": {
                "u1": {"name": "Alice", "role": "athlete", "fcmToken": "alice-tok"},
                "u2": {"name": "Bob", "role": "athlete"},
            },
            "planAssignments": {"as-1": {"athleteId": "u1", "planId": "p1", "status": "active"}},
        }
    )


def _client(store, sender) -> TestClient:
    app = create_app()
    app.dependency_overrides[get_single_event_dispatcher] = lambda: SingleEventDispatcher(store, sender)
    app.dependency_overrides[get_document_store] = lambda: store
    app.dependency_overrides[get_push_sender] = lambda: sender
    return TestClient(app)


def test_health() -> None:
    response = TestClient(create_app()).get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_post_event_sends_notification() -> None:
    sender = DummySender()
    client = _client(_store(), sender)

    response = client.post(
        "/events",
        json={
            "kind": "notification",
            "notification_id": "n1",
            "receiver_id": "u1",
            "title": "Plan updated",
            "message": "Check your new plan",
            "type": "planAssigned",
        },
    )

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}
    [message] = sender.messages
    assert message.title == "🎯 Plan updated"


def test_post_event_returns_ok_when_skipped_or_failed() -> None:
    sender = DummySender(failing_tokens={"alice-tok"})
    client = _client(_store(), sender)

    skipped = client.post(
        "/events",
        json={"kind": "achievement_unlock", "user_achievement_id": "ua", "user_id": "u2", "achievement_id": "a"},
    )
    failed = client.post(
        "/events",
        json={"kind": "achievement_unlock", "user_achievement_id": "ua", "user_id": "u1", "achievement_id": "a"},
    )

    assert skipped.status_code == 200
    assert failed.status_code == 200
    assert sender.messages == []


def test_post_event_with_unknown_kind_is_rejected() -> None:
    client = _client(_store(), DummySender())

    response = client.post("/events", json={"kind": "unknown", "receiver_id": "u1"})

    assert response.status_code == 422


def test_jobs_endpoints_report_counts() -> None:
    sender = DummySender()
    client = _client(_store(), sender)

    daily = client.post("/jobs/daily-reminders")
    inactivity = client.post("/jobs/inactivity-reminders")

    assert daily.status_code == 200
    assert daily.json() == {"job": "daily-reminders", "candidates": 1, "sent": 1, "skipped": 0, "failed": 0}
    assert inactivity.status_code == 200
    # u1 はアクティビティなし → ウェルカム、u2 はトークンなし → スキップ
    assert inactivity.json() == {
        "job": "inactivity-reminders",
        "candidates": 2,
        "sent": 1,
        "skipped": 1,
        "failed": 0,
    }


def test_post_event_ignores_unused_sender_name_field() -> None:
    sender = DummySender()
    client = _client(_store(), sender)

    response = client.post(
        "/events",
        json={
            "kind": "notification",
            "notification_id": "n2",
            "receiver_id": "u1",
            "title": "Hello",
            "message": "From your coach",
            "type": "coachMessage",
            "sender_name": "Coach Kim",
        },
    )

    assert response.status_code == 200
    assert response.json() == EventAcceptedResponse().model_dump()
    [message] = sender.messages
    assert message.title == "💬 Hello"
