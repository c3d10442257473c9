"""Shared pytest fixtures."""

from __future__ import annotations

from collections.abc import Iterator

import pytest
from fastapi.testclient import TestClient

from app.config import settings
from app.core.notifier import get_notifier
from app.core.rate_limit import limiter
from app.database.supabase_client import get_service_supabase, get_supabase
from app.main import app
from app.modules.auth import service as auth_service
from app.modules.rbac.repository import RBACRepository
from app.modules.rbac.resolver import PermissionResolver
from tests.fakes import FakeSupabaseClient, RecordingNotifier
from tests.helpers import ADMIN_ID, EDITOR_ID, OUTSIDER_ID


@pytest.fixture
def fake_supabase() -> FakeSupabaseClient:
    """Empty in-memory store."""
    return FakeSupabaseClient()


@pytest.fixture
def repository(fake_supabase: FakeSupabaseClient) -> RBACRepository:
    return RBACRepository(fake_supabase)


@pytest.fixture
def resolver(repository: RBACRepository) -> PermissionResolver:
    return PermissionResolver(repository)


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def client(
    fake_supabase: FakeSupabaseClient,
    notifier: RecordingNotifier,
    monkeypatch: pytest.MonkeyPatch,
) -> Iterator[TestClient]:
    """TestClient over the real app with the store, auth and notifier faked.

    Bearer tokens: "admin-token", "editor-token", "outsider-token".
    """
    fake_supabase.auth.add_user(ADMIN_ID, "admin@example.com", token="admin-token")
    fake_supabase.auth.add_user(EDITOR_ID, "editor@example.com", token="editor-token")
    fake_supabase.auth.add_user(OUTSIDER_ID, "outsider@example.com", token="outsider-token")

    monkeypatch.setattr(settings, "supabase_service_role_key", "service-key")
    monkeypatch.setattr(settings, "rbac_bootstrap_emails", "")
    auth_service._AUTH_USER_CACHE.clear()
    limiter.reset()

    app.dependency_overrides[get_supabase] = lambda: fake_supabase
    app.dependency_overrides[get_service_supabase] = lambda: fake_supabase
    app.dependency_overrides[get_notifier] = lambda: notifier
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
    auth_service._AUTH_USER_CACHE.clear()
