"""Tests for the request-scoped AccessGate."""

from __future__ import annotations

import pytest

from app.core.exceptions import AuthorizationError
from app.modules.rbac.gate import AccessGate
from app.modules.rbac.resolver import PermissionResolver
from tests.fakes import FakeSupabaseClient, seed_rbac

USER = "user-1"


@pytest.fixture
def gate(fake_supabase: FakeSupabaseClient, resolver: PermissionResolver) -> AccessGate:
    seed_rbac(
        fake_supabase,
        grants={"editor": ["view_tours", "edit_tours"], "admin": ["manage_roles"]},
        assignments={USER: ["editor"]},
    )
    return AccessGate(resolver)


class TestRequirePermission:
    def test_allows_granted_permission(self, gate: AccessGate) -> None:
        gate.require_permission(USER, "edit_tours")

    def test_denies_missing_permission(self, gate: AccessGate) -> None:
        with pytest.raises(AuthorizationError) as exc_info:
            gate.require_permission(USER, "manage_roles")
        assert str(exc_info.value) == "Permission denied: manage_roles"
        assert exc_info.value.required == "manage_roles"

    def test_no_principal_is_denied_like_missing_permission(self, gate: AccessGate) -> None:
        with pytest.raises(AuthorizationError) as exc_info:
            gate.require_permission(None, "view_tours")
        assert str(exc_info.value) == "Permission denied: view_tours"

    def test_require_any_permission(self, gate: AccessGate) -> None:
        gate.require_any_permission(USER, ["manage_roles", "view_tours"])
        with pytest.raises(AuthorizationError):
            gate.require_any_permission(USER, ["manage_roles", "delete_tours"])

    def test_require_role(self, gate: AccessGate) -> None:
        gate.require_role(USER, "editor")
        with pytest.raises(AuthorizationError) as exc_info:
            gate.require_role(USER, "admin")
        assert exc_info.value.kind == "role"


class TestSnapshotScope:
    def test_resolves_once_per_principal(self, gate: AccessGate, fake_supabase: FakeSupabaseClient) -> None:
        gate.has_permission(USER, "view_tours")
        calls = fake_supabase.count_calls("user_roles")

        gate.has_permission(USER, "edit_tours")
        gate.require_permission(USER, "view_tours")
        gate.has_role(USER, "editor")

        assert fake_supabase.count_calls("user_roles") == calls == 1

    def test_new_gate_sees_revocation(
        self, gate: AccessGate, fake_supabase: FakeSupabaseClient, resolver: PermissionResolver
    ) -> None:
        assert gate.has_permission(USER, "edit_tours") is True
        fake_supabase.tables["user_roles"] = []

        assert AccessGate(resolver).has_permission(USER, "edit_tours") is False

    def test_anonymous_snapshot_is_empty(self, gate: AccessGate, fake_supabase: FakeSupabaseClient) -> None:
        snapshot = gate.snapshot(None)

        assert snapshot.permissions == []
        assert fake_supabase.calls == []
