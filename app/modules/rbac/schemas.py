from pydantic import BaseModel, Field
from typing import Optional, List, FrozenSet


class Role(BaseModel):
    id: str
    name: str
    description: Optional[str] = None


class Permission(BaseModel):
    id: str
    name: str
    resource: Optional[str] = None
    action: Optional[str] = None
    description: Optional[str] = None


class AccessSnapshot(BaseModel):
    """Roles and effective permissions of one principal, resolved once per request"""
    principal_id: Optional[str] = None
    roles: List[Role] = Field(default_factory=list)
    permissions: List[Permission] = Field(default_factory=list)

    @property
    def role_names(self) -> FrozenSet[str]:
        return frozenset(r.name for r in self.roles)

    @property
    def permission_names(self) -> FrozenSet[str]:
        return frozenset(p.name for p in self.permissions)

    def has_permission(self, permission_name: str) -> bool:
        return self.principal_id is not None and permission_name in self.permission_names

    def has_role(self, role_name: str) -> bool:
        return self.principal_id is not None and role_name in self.role_names


class AccessResponse(BaseModel):
    user_id: str
    email: Optional[str] = None
    roles: List[Role]
    permissions: List[str]


class PermissionCheckResponse(BaseModel):
    permission: str
    allowed: bool


class RepairResult(BaseModel):
    success: bool = True
    message: str
    admin_role_id: str
    admin_role_created: bool
    permissions_total: int
    grants_added: int
    grants_removed: int
    user_role_created: bool


class AdminGrantSyncResult(BaseModel):
    admin_role: str
    total_permissions: int
    previously_assigned: int
    newly_assigned: int
    final_count: int
    is_complete: bool


class RBACDiagnosis(BaseModel):
    total_roles: int
    total_permissions: int
    catalog_total: int
    missing_catalog_permissions: List[str]
    admin_role_exists: bool
    admin_permission_count: int
    admin_missing_count: int
    probe_permission: str
    probe_permission_exists: bool
    admin_has_probe: bool
    principal_id: Optional[str] = None
    principal_roles: List[str] = Field(default_factory=list)
    principal_permission_count: int = 0
    principal_has_probe: bool = False
    issue: str
    recommendation: str

    @property
    def has_drift(self) -> bool:
        return (
            self.admin_missing_count > 0
            or bool(self.missing_catalog_permissions)
            or not self.admin_has_probe
        )
