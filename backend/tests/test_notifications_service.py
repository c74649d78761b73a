# backend/tests/test_notifications_service.py

import logging

import pytest

from coachpush.notifications.factory import get_push_sender
from coachpush.notifications.fcm import FcmPushSender
from coachpush.notifications.schemas import NotificationCategory, PushMessage
from coachpush.notifications.service import (
    DeliveryError,
    LoggingPushSender,
    PushSenderError,
)


def test_logging_push_sender_logs_message_and_masks_token(caplog) -> None:
    """
    LoggingPushSender が INFO でタイトル・本文を出力し、トークンは先頭だけ出すことを確認。
    """
    logger = logging.getLogger("test_logger_push")
    sender = LoggingPushSender(logger_=logger)

    message = PushMessage(
        token="abcdefgh-secret-device-token",
        title="⏰ Time to Workout!",
        body="reminder-body",
        category=NotificationCategory.REMINDER,
        data={"type": "daily_reminder"},
    )

    with caplog.at_level(logging.INFO, logger="test_logger_push"):
        delivery_id = sender.send(message)

    assert delivery_id.startswith("log-")
    records = [r for r in caplog.records if r.levelno == logging.INFO and "reminder-body" in r.getMessage()]
    assert records, "INFO log should contain 'reminder-body'"
    assert "secret-device-token" not in records[0].getMessage()
    assert "abcdefgh..." in records[0].getMessage()


def test_delivery_error_is_push_sender_error() -> None:
    assert issubclass(DeliveryError, PushSenderError)


def test_factory_returns_logging_sender_without_fcm_settings() -> None:
    assert isinstance(get_push_sender(), LoggingPushSender)
    # 2回目以降は同じインスタンス
    assert get_push_sender() is get_push_sender()


def test_factory_returns_fcm_sender_when_configured(monkeypatch) -> None:
    monkeypatch.setenv("FCM_PROJECT_ID", "demo")
    monkeypatch.setenv("FCM_ACCESS_TOKEN", "dummy-token")

    assert isinstance(get_push_sender(), FcmPushSender)


def test_push_message_rejects_non_string_data_values() -> None:
    with pytest.raises(ValueError):
        PushMessage(token="t", title="x", body="y", data={"reps": {"nested": 1}})
