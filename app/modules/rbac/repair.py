"""
RBAC repair/bootstrap and read-only diagnostics.

repair() restores a known-good state for one principal:
1. ensure the admin role exists
2. upsert the permission catalog keyed by name
3. reconcile the admin role's grants to every permission in the store
4. ensure the principal holds the admin role exactly once

Steps run strictly in order and abort with RepairError naming the failing step.
Concurrent repairs for the same admin role are serialized in-process; the
unique constraints on the join tables plus upsert(ignore_duplicates) cover
multiple workers.
"""

import logging
import threading
from typing import Dict, List, Optional

from app.config import settings
from app.config.permissions_config import PERMISSION_CATALOG, ROLE_TYPES
from app.core.exceptions import RepairError, RepairStep, StoreError
from app.modules.rbac.repository import RBACRepository
from app.modules.rbac.resolver import PermissionResolver
from app.modules.rbac.schemas import AdminGrantSyncResult, RBACDiagnosis, RepairResult

logger = logging.getLogger(__name__)

_locks_guard = threading.Lock()
_repair_locks: Dict[str, threading.Lock] = {}


def _lock_for(role_name: str) -> threading.Lock:
    with _locks_guard:
        lock = _repair_locks.get(role_name)
        if lock is None:
            lock = threading.Lock()
            _repair_locks[role_name] = lock
        return lock


class RBACRepairService:
    def __init__(
        self,
        repository: RBACRepository,
        admin_role: Optional[str] = None,
        probe_permission: Optional[str] = None,
        catalog: Optional[List[Dict[str, str]]] = None
    ):
        self.repository = repository
        self.admin_role = admin_role or settings.rbac_admin_role
        self.probe_permission = probe_permission or settings.rbac_probe_permission
        self.catalog = catalog if catalog is not None else PERMISSION_CATALOG

    def _admin_role_description(self) -> str:
        role = ROLE_TYPES.get(self.admin_role)
        return role["description"] if role else "Full system access"

    def _ensure_admin_role(self) -> tuple:
        """Return (role, created). Lookup-then-create; a lost create race falls back to the winner's row."""
        try:
            role = self.repository.get_role_by_name(self.admin_role)
            if role:
                return role, False
        except StoreError as e:
            raise RepairError(RepairStep.ROLE_CREATION, e) from e
        try:
            return self.repository.create_role(self.admin_role, self._admin_role_description()), True
        except StoreError as e:
            try:
                role = self.repository.get_role_by_name(self.admin_role)
            except StoreError:
                role = None
            if role:
                return role, False
            raise RepairError(RepairStep.ROLE_CREATION, e) from e

    def _all_permission_ids(self) -> List[str]:
        try:
            permissions = self.repository.list_permissions()
        except StoreError as e:
            raise RepairError(RepairStep.PERMISSION_FETCH, e) from e
        if not permissions:
            raise RepairError(RepairStep.PERMISSION_FETCH, "No permissions found in database")
        return [p["id"] for p in permissions]

    def _reconcile_admin_grants(self, role_id: str, permission_ids: List[str]) -> tuple:
        """Make the role's grants equal permission_ids. Returns (added, removed)."""
        desired = set(permission_ids)
        try:
            current = set(self.repository.get_role_permission_ids([role_id]))
            to_remove = current - desired
            to_add = desired - current
            self.repository.delete_role_permissions(role_id, to_remove)
            self.repository.insert_role_permissions(role_id, to_add)
        except StoreError as e:
            raise RepairError(RepairStep.ROLE_PERMISSION_INSERT, e) from e
        return len(to_add), len(to_remove)

    def _ensure_user_role(self, principal_id: str, role_id: str, assigned_by: Optional[str]) -> bool:
        try:
            existing = self.repository.count_user_role(principal_id, role_id)
            if existing == 1:
                return False
            if existing > 1:
                # Only possible without the unique constraint; collapse to one row
                self.repository.delete_user_role(principal_id, role_id)
            self.repository.insert_user_role(principal_id, role_id, assigned_by)
        except StoreError as e:
            raise RepairError(RepairStep.USER_ROLE_INSERT, e) from e
        return True

    def repair(self, principal_id: str, assigned_by: Optional[str] = None) -> RepairResult:
        if not principal_id:
            raise ValueError("principal_id is required")

        with _lock_for(self.admin_role):
            logger.info(f"Starting RBAC repair for principal {principal_id}")

            admin_role, role_created = self._ensure_admin_role()
            logger.info(f"Admin role {'created' if role_created else 'exists'}: {admin_role['id']}")

            try:
                self.repository.upsert_permissions(self.catalog)
            except StoreError as e:
                raise RepairError(RepairStep.PERMISSION_UPSERT, e) from e
            logger.info(f"{len(self.catalog)} catalog permissions ensured")

            permission_ids = self._all_permission_ids()
            added, removed = self._reconcile_admin_grants(admin_role["id"], permission_ids)
            logger.info(f"Admin grants reconciled: {added} added, {removed} removed, {len(permission_ids)} total")

            user_role_created = self._ensure_user_role(
                principal_id, admin_role["id"], assigned_by or principal_id
            )
            logger.info(f"Admin role {'assigned to' if user_role_created else 'already held by'} {principal_id}")

        return RepairResult(
            message="RBAC system repaired successfully",
            admin_role_id=admin_role["id"],
            admin_role_created=role_created,
            permissions_total=len(permission_ids),
            grants_added=added,
            grants_removed=removed,
            user_role_created=user_role_created
        )

    def sync_admin_grants(self) -> AdminGrantSyncResult:
        """Grant every stored permission to the existing admin role; never creates roles or catalog rows."""
        with _lock_for(self.admin_role):
            try:
                admin_role = self.repository.get_role_by_name(self.admin_role)
            except StoreError as e:
                raise RepairError(RepairStep.ROLE_CREATION, e) from e
            if not admin_role:
                raise RepairError(RepairStep.ROLE_CREATION, "Admin role not found")

            permission_ids = self._all_permission_ids()
            try:
                current = set(self.repository.get_role_permission_ids([admin_role["id"]]))
                missing = [pid for pid in permission_ids if pid not in current]
                self.repository.insert_role_permissions(admin_role["id"], missing)
                final_count = self.repository.count_role_permissions(admin_role["id"])
            except StoreError as e:
                raise RepairError(RepairStep.ROLE_PERMISSION_INSERT, e) from e

        return AdminGrantSyncResult(
            admin_role=admin_role["name"],
            total_permissions=len(permission_ids),
            previously_assigned=len(current),
            newly_assigned=len(missing),
            final_count=final_count,
            is_complete=final_count == len(permission_ids)
        )

    def diagnose(self, principal_id: Optional[str], resolver: Optional[PermissionResolver] = None) -> RBACDiagnosis:
        """Read-only report of catalog drift and the principal's effective access"""
        resolver = resolver or PermissionResolver(self.repository)
        repo = self.repository

        total_roles = repo.count_roles()
        stored_names = {p["name"] for p in repo.list_permissions()}
        total_permissions = len(stored_names)
        catalog_names = [p["name"] for p in self.catalog]
        missing_catalog = [n for n in catalog_names if n not in stored_names]

        admin_role = repo.get_role_by_name(self.admin_role)
        admin_count = repo.count_role_permissions(admin_role["id"]) if admin_role else 0
        probe = repo.get_permission_by_name(self.probe_permission)
        admin_has_probe = bool(admin_role and probe and repo.role_grants_permission([admin_role["id"]], probe["id"]))

        snapshot = resolver.resolve_access(principal_id)
        principal_has_probe = resolver.has_permission(principal_id, self.probe_permission)

        if not admin_role:
            issue = "Admin role does not exist"
            recommendation = "Run RBAC repair to create the admin role and grant it every permission"
        elif admin_count == 0:
            issue = "Admin role has ZERO permissions assigned"
            recommendation = "Run RBAC repair to assign all permissions to the admin role"
        elif admin_count < total_permissions:
            issue = f"Admin role missing {total_permissions - admin_count} permissions"
            recommendation = "Run RBAC repair or the admin grant sync"
        elif missing_catalog:
            issue = f"{len(missing_catalog)} catalog permissions missing from the permissions table"
            recommendation = "Run RBAC repair to upsert the permission catalog"
        elif not admin_has_probe:
            issue = f"Admin role does not have {self.probe_permission} permission"
            recommendation = "Run RBAC repair to assign all permissions to the admin role"
        elif principal_id and not principal_has_probe:
            issue = f"User cannot {self.probe_permission} (permission check failed)"
            recommendation = "Check user_roles table - user might not be assigned admin role"
        else:
            issue = "System appears healthy"
            recommendation = "No action needed"

        return RBACDiagnosis(
            total_roles=total_roles,
            total_permissions=total_permissions,
            catalog_total=len(catalog_names),
            missing_catalog_permissions=missing_catalog,
            admin_role_exists=admin_role is not None,
            admin_permission_count=admin_count,
            admin_missing_count=max(total_permissions - admin_count, 0),
            probe_permission=self.probe_permission,
            probe_permission_exists=probe is not None,
            admin_has_probe=admin_has_probe,
            principal_id=principal_id,
            principal_roles=sorted(snapshot.role_names),
            principal_permission_count=len(snapshot.permissions),
            principal_has_probe=principal_has_probe,
            issue=issue,
            recommendation=recommendation
        )
