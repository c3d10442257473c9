"""
Access decision gate used by every administrative write.
Snapshots live only as long as the gate instance (one request); there is no
cross-request cache, so revoked grants take effect on the next request.
"""

import logging
from typing import Dict, Iterable, Optional

from app.core.exceptions import AuthorizationError
from app.modules.rbac.resolver import PermissionResolver
from app.modules.rbac.schemas import AccessSnapshot

logger = logging.getLogger(__name__)


class AccessGate:
    def __init__(self, resolver: PermissionResolver):
        self.resolver = resolver
        self._snapshots: Dict[str, AccessSnapshot] = {}

    def snapshot(self, principal_id: Optional[str]) -> AccessSnapshot:
        if not principal_id:
            return AccessSnapshot()
        if principal_id not in self._snapshots:
            self._snapshots[principal_id] = self.resolver.resolve_access(principal_id)
        return self._snapshots[principal_id]

    def has_permission(self, principal_id: Optional[str], permission_name: str) -> bool:
        return self.snapshot(principal_id).has_permission(permission_name)

    def has_role(self, principal_id: Optional[str], role_name: str) -> bool:
        return self.snapshot(principal_id).has_role(role_name)

    def require_permission(self, principal_id: Optional[str], permission_name: str) -> None:
        if not self.has_permission(principal_id, permission_name):
            logger.info(f"Denied {permission_name} for principal {principal_id or '<anonymous>'}")
            raise AuthorizationError(permission_name)

    def require_any_permission(self, principal_id: Optional[str], permission_names: Iterable[str]) -> None:
        permission_names = list(permission_names)
        if not any(self.has_permission(principal_id, name) for name in permission_names):
            logger.info(f"Denied any of {permission_names} for principal {principal_id or '<anonymous>'}")
            raise AuthorizationError(" | ".join(permission_names))

    def require_role(self, principal_id: Optional[str], role_name: str) -> None:
        if not self.has_role(principal_id, role_name):
            logger.info(f"Denied role {role_name} for principal {principal_id or '<anonymous>'}")
            raise AuthorizationError(role_name, kind="role")
