"""Tests for the require_permission / require_role dependency factories."""

from __future__ import annotations

import pytest
from fastapi import HTTPException

from app.core.dependencies import require_permission, require_role
from app.modules.rbac.gate import AccessGate
from app.modules.rbac.resolver import PermissionResolver
from tests.fakes import FakeSupabaseClient, seed_rbac

USER = {"id": "user-1", "email": "u1@example.com"}


@pytest.fixture
def gate(fake_supabase: FakeSupabaseClient, resolver: PermissionResolver) -> AccessGate:
    seed_rbac(fake_supabase, grants={"editor": ["edit_tours"]}, assignments={USER["id"]: ["editor"]})
    return AccessGate(resolver)


class TestRequirePermission:
    def test_returns_user_when_allowed(self, gate: AccessGate) -> None:
        check = require_permission("edit_tours")

        assert check(user_data=USER, gate=gate) is USER

    def test_forbidden_without_permission(self, gate: AccessGate) -> None:
        check = require_permission("delete_tours")

        with pytest.raises(HTTPException) as exc_info:
            check(user_data=USER, gate=gate)

        assert exc_info.value.status_code == 403
        assert exc_info.value.detail == "Permission denied: delete_tours"

    def test_forbidden_without_user(self, gate: AccessGate) -> None:
        with pytest.raises(HTTPException) as exc_info:
            require_permission("edit_tours")(user_data=None, gate=gate)

        assert exc_info.value.status_code == 403
        assert exc_info.value.detail == "Permission denied: edit_tours"


class TestRequireRole:
    def test_role_check(self, gate: AccessGate) -> None:
        assert require_role("editor")(user_data=USER, gate=gate) is USER

        with pytest.raises(HTTPException) as exc_info:
            require_role("admin")(user_data=USER, gate=gate)

        assert exc_info.value.status_code == 403
