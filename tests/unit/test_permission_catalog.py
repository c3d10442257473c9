"""Tests for the static permission catalog and default roles."""

from __future__ import annotations

from app.config.permissions_config import (
    CATALOG_PERMISSION_NAMES,
    PERMISSION_CATALOG,
    PERMISSION_MATRIX,
    get_role_permission_names,
)

EXPECTED_NAMES = (
    "view_dashboard, view_tours, create_tours, edit_tours, delete_tours, publish_tours, "
    "manage_tours, view_destinations, create_destinations, edit_destinations, "
    "delete_destinations, manage_destinations, view_bookings, create_bookings, "
    "edit_bookings, delete_bookings, manage_bookings, view_posts, create_posts, "
    "edit_posts, delete_posts, publish_posts, manage_blog, view_media, upload_media, "
    "delete_media, manage_media, view_users, create_users, edit_users, delete_users, "
    "manage_users, assign_roles, view_customers, manage_customers, view_settings, "
    "manage_settings, view_roles, manage_roles, view_analytics, export_analytics"
).split(", ")


class TestCatalog:
    def test_names_match_exactly_and_in_order(self) -> None:
        assert CATALOG_PERMISSION_NAMES == EXPECTED_NAMES
        assert len(CATALOG_PERMISSION_NAMES) == 41

    def test_names_are_unique(self) -> None:
        assert len(set(CATALOG_PERMISSION_NAMES)) == len(CATALOG_PERMISSION_NAMES)

    def test_entries_carry_metadata(self) -> None:
        for entry in PERMISSION_CATALOG:
            assert set(entry) == {"name", "resource", "action", "description"}
            assert entry["resource"]
            assert entry["action"]


class TestDefaultRoles:
    def test_admin_gets_whole_catalog(self) -> None:
        assert get_role_permission_names("admin") == EXPECTED_NAMES

    def test_viewer_gets_only_view_permissions(self) -> None:
        names = get_role_permission_names("viewer")
        assert names
        assert all(n.startswith("view_") for n in names)
        assert "view_tours" in names

    def test_editor_cannot_manage_roles(self) -> None:
        names = get_role_permission_names("editor")
        assert "edit_tours" in names
        assert "manage_roles" not in names
        assert "delete_tours" not in names

    def test_unknown_role_is_empty(self) -> None:
        assert get_role_permission_names("nobody") == []

    def test_matrix_lists_every_role(self) -> None:
        assert {r["name"] for r in PERMISSION_MATRIX["roles"]} == {"admin", "editor", "viewer"}
        assert PERMISSION_MATRIX["permissions"] == PERMISSION_CATALOG
