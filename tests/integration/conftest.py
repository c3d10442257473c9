"""Fixtures for API tests: default roles seeded into the fake store."""

from __future__ import annotations

import pytest

from app.config.permissions_config import CATALOG_PERMISSION_NAMES, get_role_permission_names
from tests.fakes import FakeSupabaseClient, seed_rbac
from tests.helpers import ADMIN_ID, EDITOR_ID


@pytest.fixture
def seeded(fake_supabase: FakeSupabaseClient) -> dict[str, str]:
    """admin-token holds the admin role, editor-token the editor role, outsider-token nothing."""
    return seed_rbac(
        fake_supabase,
        grants={
            "admin": list(CATALOG_PERMISSION_NAMES),
            "editor": get_role_permission_names("editor"),
            "writer": ["view_posts", "create_posts", "edit_posts"],
        },
        assignments={ADMIN_ID: ["admin"], EDITOR_ID: ["editor"]},
    )
