"""
Typed Supabase access for the RBAC tables.
Every method raises StoreError on failure; callers pick the error strategy
(the resolver fails closed, the repair procedure propagates).
"""

import logging
from typing import Any, Dict, Iterable, List, Optional

from supabase import Client

from app.core.exceptions import StoreError

logger = logging.getLogger(__name__)


class RBACRepository:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def _execute(self, operation: str, query) -> Any:
        try:
            return query.execute()
        except Exception as e:
            raise StoreError(operation, e) from e

    # Roles

    def get_role_by_name(self, name: str) -> Optional[Dict[str, Any]]:
        result = self._execute(
            "fetch role by name",
            self.supabase.table("roles")
                .select("id, name, description")
                .eq("name", name)
                .limit(1)
        )
        return result.data[0] if result.data else None

    def create_role(self, name: str, description: Optional[str] = None) -> Dict[str, Any]:
        result = self._execute(
            "create role",
            self.supabase.table("roles").insert({"name": name, "description": description})
        )
        if not result.data:
            raise StoreError("create role", RuntimeError("insert returned no rows"))
        return result.data[0]

    def get_roles_by_ids(self, role_ids: Iterable[str]) -> List[Dict[str, Any]]:
        role_ids = list(role_ids)
        if not role_ids:
            return []
        result = self._execute(
            "fetch roles",
            self.supabase.table("roles")
                .select("id, name, description")
                .in_("id", role_ids)
        )
        return result.data or []

    def count_roles(self) -> int:
        result = self._execute(
            "count roles",
            self.supabase.table("roles").select("id", count="exact")
        )
        return result.count or 0

    # Permissions

    def get_permission_by_name(self, name: str) -> Optional[Dict[str, Any]]:
        result = self._execute(
            "fetch permission by name",
            self.supabase.table("permissions")
                .select("id, name, resource, action, description")
                .eq("name", name)
                .limit(1)
        )
        return result.data[0] if result.data else None

    def get_permissions_by_ids(self, permission_ids: Iterable[str]) -> List[Dict[str, Any]]:
        permission_ids = list(permission_ids)
        if not permission_ids:
            return []
        result = self._execute(
            "fetch permissions",
            self.supabase.table("permissions")
                .select("id, name, resource, action, description")
                .in_("id", permission_ids)
        )
        return result.data or []

    def list_permissions(self) -> List[Dict[str, Any]]:
        result = self._execute(
            "fetch permissions",
            self.supabase.table("permissions").select("id, name")
        )
        return result.data or []

    def count_permissions(self) -> int:
        result = self._execute(
            "count permissions",
            self.supabase.table("permissions").select("id", count="exact")
        )
        return result.count or 0

    def upsert_permissions(self, permissions: List[Dict[str, str]]) -> List[Dict[str, Any]]:
        """Insert missing catalog rows keyed by name; existing rows keep their id."""
        if not permissions:
            return []
        result = self._execute(
            "upsert permissions",
            self.supabase.table("permissions").upsert(permissions, on_conflict="name")
        )
        return result.data or []

    # role_permissions

    def get_role_permission_ids(self, role_ids: Iterable[str]) -> List[str]:
        role_ids = list(role_ids)
        if not role_ids:
            return []
        result = self._execute(
            "fetch role permissions",
            self.supabase.table("role_permissions")
                .select("role_id, permission_id")
                .in_("role_id", role_ids)
        )
        return [r["permission_id"] for r in (result.data or []) if r.get("permission_id")]

    def role_grants_permission(self, role_ids: Iterable[str], permission_id: str) -> bool:
        role_ids = list(role_ids)
        if not role_ids:
            return False
        result = self._execute(
            "check role permission",
            self.supabase.table("role_permissions")
                .select("permission_id")
                .in_("role_id", role_ids)
                .eq("permission_id", permission_id)
                .limit(1)
        )
        return bool(result.data)

    def count_role_permissions(self, role_id: str) -> int:
        result = self._execute(
            "count role permissions",
            self.supabase.table("role_permissions")
                .select("permission_id", count="exact")
                .eq("role_id", role_id)
        )
        return result.count or 0

    def insert_role_permissions(self, role_id: str, permission_ids: Iterable[str]) -> int:
        rows = [{"role_id": role_id, "permission_id": pid} for pid in permission_ids]
        if not rows:
            return 0
        self._execute(
            "insert role permissions",
            self.supabase.table("role_permissions")
                .upsert(rows, on_conflict="role_id,permission_id", ignore_duplicates=True)
        )
        return len(rows)

    def delete_role_permissions(self, role_id: str, permission_ids: Iterable[str]) -> int:
        permission_ids = list(permission_ids)
        if not permission_ids:
            return 0
        self._execute(
            "delete role permissions",
            self.supabase.table("role_permissions")
                .delete()
                .eq("role_id", role_id)
                .in_("permission_id", permission_ids)
        )
        return len(permission_ids)

    # user_roles

    def get_user_role_ids(self, user_id: str) -> List[str]:
        result = self._execute(
            "fetch user roles",
            self.supabase.table("user_roles")
                .select("role_id")
                .eq("user_id", user_id)
        )
        return [r["role_id"] for r in (result.data or []) if r.get("role_id")]

    def count_user_role(self, user_id: str, role_id: str) -> int:
        result = self._execute(
            "count user role",
            self.supabase.table("user_roles")
                .select("role_id", count="exact")
                .eq("user_id", user_id)
                .eq("role_id", role_id)
        )
        return result.count or 0

    def insert_user_role(self, user_id: str, role_id: str, assigned_by: Optional[str] = None) -> None:
        row = {"user_id": user_id, "role_id": role_id}
        if assigned_by:
            row["assigned_by"] = assigned_by
        self._execute(
            "insert user role",
            self.supabase.table("user_roles")
                .upsert(row, on_conflict="user_id,role_id", ignore_duplicates=True)
        )

    def delete_user_role(self, user_id: str, role_id: str) -> None:
        self._execute(
            "delete user role",
            self.supabase.table("user_roles")
                .delete()
                .eq("user_id", user_id)
                .eq("role_id", role_id)
        )
