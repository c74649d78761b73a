# backend/tests/conftest.py
"""
Pytest configuration for the push notification backend tests.

- Ensures that the project root (backend/) is added to sys.path
  so that `import coachpush.*` works correctly in tests.
- Ensures that Firestore / FCM environment variables are NOT inherited
  from the developer's shell, so factories fall back to in-memory / logging adapters.
"""

import sys
from pathlib import Path

import pytest


def _ensure_project_root_in_sys_path() -> None:
    # This file is located at: backend/tests/conftest.py
    # parents[1] -> backend/
    project_root = Path(__file__).resolve().parents[1]
    project_root_str = str(project_root)

    if project_root_str not in sys.path:
        # Insert at the beginning so it has priority over site-packages, etc.
        sys.path.insert(0, project_root_str)


_ensure_project_root_in_sys_path()

_ADAPTER_ENV_VARS = (
    "FIRESTORE_PROJECT_ID",
    "FIRESTORE_ACCESS_TOKEN",
    "FCM_PROJECT_ID",
    "FCM_ACCESS_TOKEN",
    "PUSH_BATCH_MAX_WORKERS",
    "INACTIVITY_THRESHOLD_DAYS",
)


@pytest.fixture(autouse=True)
def _isolate_shared_state(monkeypatch):
    """
    共有インスタンス（factory のシングルトン・lru_cache の設定）をテストごとにリセットする。
    """
    from coachpush.automation.config import get_job_settings
    from coachpush.dispatch.router import get_single_event_dispatcher
    from coachpush.notifications.config import get_fcm_settings
    from coachpush.notifications.factory import reset_push_sender
    from coachpush.store.config import get_firestore_settings
    from coachpush.store.factory import reset_document_store

    for name in _ADAPTER_ENV_VARS:
        monkeypatch.delenv(name, raising=False)

    caches = (get_job_settings, get_fcm_settings, get_firestore_settings, get_single_event_dispatcher)
    for cached in caches:
        cached.cache_clear()
    reset_push_sender()
    reset_document_store()

    yield

    for cached in caches:
        cached.cache_clear()
    reset_push_sender()
    reset_document_store()
