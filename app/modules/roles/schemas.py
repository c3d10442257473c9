from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import datetime


class PermissionCreate(BaseModel):
    name: str = Field(..., min_length=1, pattern=r"^[a-z][a-z0-9_]*$")
    resource: str
    action: str
    description: Optional[str] = None


class PermissionUpdate(BaseModel):
    resource: Optional[str] = None
    action: Optional[str] = None
    description: Optional[str] = None


class PermissionResponse(BaseModel):
    id: str
    name: str
    resource: Optional[str] = None
    action: Optional[str] = None
    description: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class RoleCreate(BaseModel):
    name: str = Field(..., min_length=1)
    description: Optional[str] = None


class RoleUpdate(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None


class RoleResponse(BaseModel):
    id: str
    name: str
    description: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class RoleWithPermissionsResponse(RoleResponse):
    permissions: List[PermissionResponse]


class RolePermissionAssign(BaseModel):
    permission_id: str


class RolePermissionResponse(BaseModel):
    role_id: str
    permission_id: str
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class BulkPermissionAssign(BaseModel):
    permission_ids: List[str]


class BulkPermissionAssignResponse(BaseModel):
    role_id: str
    assigned_count: int
    skipped_count: int
    removed_count: int = 0
    message: str


class BulkPermissionUpdate(BaseModel):
    permission_ids: List[str]
