# backend/tests/test_config.py

import pytest

from coachpush.automation.config import get_job_settings
from coachpush.utils.config import EnvVarMissingError, get_env, get_env_int


def test_get_env_raises_when_required_and_missing(monkeypatch) -> None:
    monkeypatch.delenv("COACHPUSH_TEST_VALUE", raising=False)

    with pytest.raises(EnvVarMissingError) as exc_info:
        get_env("COACHPUSH_TEST_VALUE")

    assert exc_info.value.name == "COACHPUSH_TEST_VALUE"


def test_get_env_treats_empty_string_as_missing(monkeypatch) -> None:
    monkeypatch.setenv("COACHPUSH_TEST_VALUE", "")

    assert get_env("COACHPUSH_TEST_VALUE", default="fallback", required=False) == "fallback"


def test_get_env_int_falls_back_on_invalid_value(monkeypatch) -> None:
    monkeypatch.setenv("COACHPUSH_TEST_INT", "not-a-number")
    assert get_env_int("COACHPUSH_TEST_INT", default=7) == 7

    monkeypatch.setenv("COACHPUSH_TEST_INT", "12")
    assert get_env_int("COACHPUSH_TEST_INT", default=7) == 12


def test_job_settings_defaults_and_overrides(monkeypatch) -> None:
    settings = get_job_settings()
    assert settings.max_workers == 8
    assert settings.inactivity_threshold_days == 3

    get_job_settings.cache_clear()
    monkeypatch.setenv("PUSH_BATCH_MAX_WORKERS", "0")
    monkeypatch.setenv("INACTIVITY_THRESHOLD_DAYS", "5")

    settings = get_job_settings()
    # 0 以下は 1 に切り上げる
    assert settings.max_workers == 1
    assert settings.inactivity_threshold_days == 5
