from fastapi import APIRouter, Depends
from app.database.supabase_client import get_service_supabase
from app.modules.roles.schemas import (
    PermissionCreate, PermissionUpdate, PermissionResponse,
    RoleCreate, RoleUpdate, RoleResponse, RoleWithPermissionsResponse,
    RolePermissionAssign, RolePermissionResponse,
    BulkPermissionAssign, BulkPermissionAssignResponse, BulkPermissionUpdate
)
from app.modules.roles.service import RoleService, PermissionService
from app.core.dependencies import require_permission
from supabase import Client
from typing import List, Optional, Dict

router = APIRouter(prefix="/roles", tags=["roles"])


def get_role_service(supabase: Client = Depends(get_service_supabase)) -> RoleService:
    return RoleService(supabase)


def get_permission_service(supabase: Client = Depends(get_service_supabase)) -> PermissionService:
    return PermissionService(supabase)


# Permission endpoints
@router.post("/permissions", response_model=PermissionResponse, status_code=201)
async def create_permission(
    permission_data: PermissionCreate,
    user_data: Dict = Depends(require_permission("manage_roles")),
    service: PermissionService = Depends(get_permission_service)
):
    """Create a new permission"""
    return service.create_permission(permission_data)


@router.get("/permissions", response_model=List[PermissionResponse])
async def list_permissions(
    resource: Optional[str] = None,
    limit: int = 100,
    offset: int = 0,
    user_data: Dict = Depends(require_permission("view_roles")),
    service: PermissionService = Depends(get_permission_service)
):
    """List permissions"""
    return service.list_permissions(resource=resource, limit=limit, offset=offset)


@router.get("/permissions/{permission_id}", response_model=PermissionResponse)
async def get_permission(
    permission_id: str,
    user_data: Dict = Depends(require_permission("view_roles")),
    service: PermissionService = Depends(get_permission_service)
):
    """Get permission by ID"""
    return service.get_permission_by_id(permission_id)


@router.put("/permissions/{permission_id}", response_model=PermissionResponse)
async def update_permission(
    permission_id: str,
    permission_data: PermissionUpdate,
    user_data: Dict = Depends(require_permission("manage_roles")),
    service: PermissionService = Depends(get_permission_service)
):
    """Update permission metadata"""
    return service.update_permission(permission_id, permission_data)


@router.delete("/permissions/{permission_id}", status_code=204)
async def delete_permission(
    permission_id: str,
    user_data: Dict = Depends(require_permission("manage_roles")),
    service: PermissionService = Depends(get_permission_service)
):
    """Delete permission"""
    service.delete_permission(permission_id)
    return None


# Role endpoints
@router.post("", response_model=RoleResponse, status_code=201)
async def create_role(
    role_data: RoleCreate,
    user_data: Dict = Depends(require_permission("manage_roles")),
    service: RoleService = Depends(get_role_service)
):
    """Create a new role"""
    return service.create_role(role_data)


@router.get("", response_model=List[RoleResponse])
async def list_roles(
    limit: int = 50,
    offset: int = 0,
    user_data: Dict = Depends(require_permission("view_roles")),
    service: RoleService = Depends(get_role_service)
):
    """List roles"""
    return service.list_roles(limit=limit, offset=offset)


@router.get("/{role_id}", response_model=RoleWithPermissionsResponse)
async def get_role(
    role_id: str,
    user_data: Dict = Depends(require_permission("view_roles")),
    service: RoleService = Depends(get_role_service)
):
    """Get role with all associated permissions"""
    return service.get_role_with_permissions(role_id)


@router.put("/{role_id}", response_model=RoleResponse)
async def update_role(
    role_id: str,
    role_data: RoleUpdate,
    user_data: Dict = Depends(require_permission("manage_roles")),
    service: RoleService = Depends(get_role_service)
):
    """Update role"""
    return service.update_role(role_id, role_data)


@router.delete("/{role_id}", status_code=204)
async def delete_role(
    role_id: str,
    user_data: Dict = Depends(require_permission("manage_roles")),
    service: RoleService = Depends(get_role_service)
):
    """Delete role"""
    service.delete_role(role_id)
    return None


# Role-Permission association endpoints
@router.post("/{role_id}/permissions", response_model=RolePermissionResponse, status_code=201)
async def assign_permission_to_role(
    role_id: str,
    permission_assign: RolePermissionAssign,
    user_data: Dict = Depends(require_permission("manage_roles")),
    service: RoleService = Depends(get_role_service)
):
    """Assign a permission to a role"""
    return service.assign_permission_to_role(role_id, permission_assign.permission_id)


@router.get("/{role_id}/permissions", response_model=List[PermissionResponse])
async def get_role_permissions(
    role_id: str,
    user_data: Dict = Depends(require_permission("view_roles")),
    service: RoleService = Depends(get_role_service)
):
    """Get all permissions for a role"""
    return service.get_role_permissions(role_id)


@router.delete("/{role_id}/permissions/{permission_id}", status_code=204)
async def remove_permission_from_role(
    role_id: str,
    permission_id: str,
    user_data: Dict = Depends(require_permission("manage_roles")),
    service: RoleService = Depends(get_role_service)
):
    """Remove a permission from a role"""
    service.remove_permission_from_role(role_id, permission_id)
    return None


@router.post("/{role_id}/permissions/bulk-assign", response_model=BulkPermissionAssignResponse, status_code=200)
async def bulk_assign_permissions_to_role(
    role_id: str,
    bulk_data: BulkPermissionAssign,
    user_data: Dict = Depends(require_permission("manage_roles")),
    service: RoleService = Depends(get_role_service)
):
    """Bulk assign multiple permissions to a role"""
    return service.bulk_assign_permissions_to_role(role_id, bulk_data.permission_ids)


@router.put("/{role_id}/permissions/bulk-update", response_model=BulkPermissionAssignResponse, status_code=200)
async def bulk_update_role_permissions(
    role_id: str,
    bulk_data: BulkPermissionUpdate,
    user_data: Dict = Depends(require_permission("manage_roles")),
    service: RoleService = Depends(get_role_service)
):
    """Replace all permissions of a role"""
    return service.bulk_update_role_permissions(role_id, bulk_data.permission_ids)
