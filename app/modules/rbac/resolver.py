"""
Permission resolution: principal -> roles -> permissions.
Every public method fails closed: a missing principal or a store failure
yields no roles / no permissions, never an exception.
"""

import logging
from typing import List, Optional

from app.core.exceptions import StoreError
from app.modules.rbac.repository import RBACRepository
from app.modules.rbac.schemas import AccessSnapshot, Permission, Role

logger = logging.getLogger(__name__)


class PermissionResolver:
    def __init__(self, repository: RBACRepository):
        self.repository = repository

    def _roles(self, principal_id: str) -> List[Role]:
        role_ids = set(self.repository.get_user_role_ids(principal_id))
        if not role_ids:
            return []
        roles = {r["id"]: Role(**r) for r in self.repository.get_roles_by_ids(role_ids)}
        return list(roles.values())

    def _permissions(self, role_ids: List[str]) -> List[Permission]:
        permission_ids = set(self.repository.get_role_permission_ids(role_ids))
        if not permission_ids:
            return []
        # Deduplicate by id; the same permission may be granted through several roles
        permissions = {p["id"]: Permission(**p) for p in self.repository.get_permissions_by_ids(permission_ids)}
        return list(permissions.values())

    def resolve_roles(self, principal_id: Optional[str]) -> List[Role]:
        """Distinct roles held by the principal; empty when unassigned"""
        if not principal_id:
            return []
        try:
            return self._roles(principal_id)
        except StoreError as e:
            logger.error(f"Error resolving roles for {principal_id}: {e}")
            return []

    def resolve_permissions(self, principal_id: Optional[str]) -> List[Permission]:
        """Distinct permissions reachable through the principal's roles"""
        return self.resolve_access(principal_id).permissions

    def resolve_access(self, principal_id: Optional[str]) -> AccessSnapshot:
        """Resolve roles and permissions in one pass. Primary API for request handlers."""
        if not principal_id:
            return AccessSnapshot()
        try:
            roles = self._roles(principal_id)
            permissions = self._permissions([r.id for r in roles]) if roles else []
        except StoreError as e:
            logger.error(f"Error resolving access for {principal_id}: {e}")
            return AccessSnapshot(principal_id=principal_id)
        return AccessSnapshot(principal_id=principal_id, roles=roles, permissions=permissions)

    def has_permission(self, principal_id: Optional[str], permission_name: str) -> bool:
        """Existence check without materializing the permission set"""
        if not principal_id or not permission_name:
            return False
        try:
            permission = self.repository.get_permission_by_name(permission_name)
            if not permission:
                return False
            role_ids = self.repository.get_user_role_ids(principal_id)
            if not role_ids:
                return False
            return self.repository.role_grants_permission(role_ids, permission["id"])
        except StoreError as e:
            logger.error(f"Error checking permission {permission_name} for {principal_id}: {e}")
            return False

    def has_role(self, principal_id: Optional[str], role_name: str) -> bool:
        if not principal_id or not role_name:
            return False
        return any(r.name == role_name for r in self.resolve_roles(principal_id))
