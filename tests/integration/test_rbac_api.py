"""API tests for /rbac, /auth/me and the access dependencies."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from app.config import settings
from app.config.permissions_config import CATALOG_PERMISSION_NAMES
from tests.fakes import FakeSupabaseClient
from tests.helpers import ADMIN_ID, OUTSIDER_ID, auth


class TestRepairEndpoint:
    def test_cold_start_repair_grants_caller_admin(
        self, client: TestClient, fake_supabase: FakeSupabaseClient
    ) -> None:
        response = client.post("/api/v1/rbac/repair", headers=auth("outsider-token"))

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["admin_role_created"] is True
        assert body["permissions_total"] == len(CATALOG_PERMISSION_NAMES)
        assert fake_supabase.rows("user_roles")[0]["user_id"] == OUTSIDER_ID

        me = client.get("/api/v1/rbac/me", headers=auth("outsider-token")).json()
        assert [r["name"] for r in me["roles"]] == ["admin"]
        assert sorted(me["permissions"]) == sorted(CATALOG_PERMISSION_NAMES)

    def test_failure_reports_step(self, client: TestClient, fake_supabase: FakeSupabaseClient) -> None:
        fake_supabase.fail("permissions", "upsert")

        response = client.post("/api/v1/rbac/repair", headers=auth("admin-token"))

        assert response.status_code == 500
        assert response.json()["detail"]["step"] == "permission_upsert"
        assert "failed" in response.json()["detail"]["error"]

    def test_requires_service_role_key(self, client: TestClient, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(settings, "supabase_service_role_key", None)

        response = client.post("/api/v1/rbac/repair", headers=auth("admin-token"))

        assert response.status_code == 500
        assert "SUPABASE_SERVICE_ROLE_KEY" in response.json()["detail"]

    def test_bootstrap_allow_list(self, client: TestClient, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(settings, "rbac_bootstrap_emails", "Admin@Example.com")

        denied = client.post("/api/v1/rbac/repair", headers=auth("outsider-token"))
        allowed = client.post("/api/v1/rbac/repair", headers=auth("admin-token"))

        assert denied.status_code == 403
        assert allowed.status_code == 200

    def test_invalid_token_is_rejected(self, client: TestClient) -> None:
        response = client.post("/api/v1/rbac/repair", headers=auth("forged"))

        assert response.status_code == 401


class TestSyncAdmin:
    def test_requires_manage_roles(self, client: TestClient, seeded: dict[str, str]) -> None:
        response = client.post("/api/v1/rbac/sync-admin", headers=auth("editor-token"))

        assert response.status_code == 403
        assert response.json()["detail"] == "Permission denied: manage_roles"

    def test_adds_new_permission_to_admin(
        self, client: TestClient, seeded: dict[str, str], fake_supabase: FakeSupabaseClient
    ) -> None:
        fake_supabase.rows("permissions").append({"id": "perm-extra", "name": "manage_newsletter"})

        response = client.post("/api/v1/rbac/sync-admin", headers=auth("admin-token"))

        assert response.status_code == 200
        assert response.json()["newly_assigned"] == 1
        assert response.json()["is_complete"] is True


class TestDiagnoseAndChecks:
    def test_diagnose_healthy(self, client: TestClient, seeded: dict[str, str]) -> None:
        response = client.get("/api/v1/rbac/diagnose", headers=auth("admin-token"))

        assert response.status_code == 200
        body = response.json()
        assert body["principal_id"] == ADMIN_ID
        assert body["principal_has_probe"] is True
        assert body["issue"] == "System appears healthy"

    def test_check_permission(self, client: TestClient, seeded: dict[str, str]) -> None:
        assert client.get("/api/v1/rbac/check/edit_tours", headers=auth("editor-token")).json()["allowed"] is True
        assert client.get("/api/v1/rbac/check/manage_roles", headers=auth("editor-token")).json()["allowed"] is False
        assert client.get("/api/v1/rbac/check/view_tours").json()["allowed"] is False

    def test_auth_me_lists_roles_and_permissions(self, client: TestClient, seeded: dict[str, str]) -> None:
        body = client.get("/api/v1/auth/me", headers=auth("editor-token")).json()

        assert body["email"] == "editor@example.com"
        assert body["roles"] == ["editor"]
        assert "edit_tours" in body["permissions"]
        assert "manage_roles" not in body["permissions"]


class TestRequirePermissionDependency:
    def test_anonymous_gets_same_denial_as_unprivileged(self, client: TestClient, seeded: dict[str, str]) -> None:
        anonymous = client.get("/api/v1/tours")
        outsider = client.get("/api/v1/tours", headers=auth("outsider-token"))

        assert anonymous.status_code == outsider.status_code == 403
        assert anonymous.json() == outsider.json() == {"detail": "Permission denied: view_tours"}

    def test_store_failure_fails_closed(
        self, client: TestClient, seeded: dict[str, str], fake_supabase: FakeSupabaseClient
    ) -> None:
        fake_supabase.fail("user_roles", "select")

        response = client.get("/api/v1/tours", headers=auth("admin-token"))

        assert response.status_code == 403

    def test_revoked_role_denied_on_next_request(
        self, client: TestClient, seeded: dict[str, str], fake_supabase: FakeSupabaseClient
    ) -> None:
        assert client.get("/api/v1/tours", headers=auth("editor-token")).status_code == 200

        fake_supabase.tables["user_roles"] = [
            ur for ur in fake_supabase.rows("user_roles") if ur["role_id"] != seeded["editor"]
        ]

        assert client.get("/api/v1/tours", headers=auth("editor-token")).status_code == 403

    def test_permissions_resolved_once_per_request(
        self, client: TestClient, seeded: dict[str, str], fake_supabase: FakeSupabaseClient
    ) -> None:
        client.post(
            "/api/v1/posts",
            json={"title": "Sapa in Spring", "status": "published"},
            headers=auth("editor-token"),
        )

        assert fake_supabase.count_calls("user_roles", "select") == 1
