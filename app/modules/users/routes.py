from fastapi import APIRouter, Depends
from app.database.supabase_client import get_service_supabase
from app.modules.rbac.schemas import Role
from app.modules.users.schemas import UserWithRolesResponse, UserRoleAssign, UserRoleResponse
from app.modules.users.service import UserService
from app.core.dependencies import require_permission
from supabase import Client
from typing import List, Dict

router = APIRouter(prefix="/users", tags=["users"])


def get_user_service(supabase: Client = Depends(get_service_supabase)) -> UserService:
    return UserService(supabase)


@router.get("", response_model=List[UserWithRolesResponse])
async def list_users(
    page: int = 1,
    per_page: int = 50,
    user_data: Dict = Depends(require_permission("view_users")),
    service: UserService = Depends(get_user_service)
):
    """List users with their roles"""
    return service.list_users_with_roles(page=page, per_page=per_page)


@router.get("/{user_id}/roles", response_model=List[Role])
async def get_user_roles(
    user_id: str,
    user_data: Dict = Depends(require_permission("view_users")),
    service: UserService = Depends(get_user_service)
):
    """Get roles held by a user"""
    return service.get_user_roles(user_id)


@router.post("/{user_id}/roles", response_model=UserRoleResponse, status_code=201)
async def assign_role(
    user_id: str,
    assignment: UserRoleAssign,
    user_data: Dict = Depends(require_permission("assign_roles")),
    service: UserService = Depends(get_user_service)
):
    """Assign a role to a user"""
    return service.assign_role(user_id, assignment.role_id, assigned_by=user_data["id"])


@router.delete("/{user_id}/roles/{role_id}", status_code=204)
async def remove_role(
    user_id: str,
    role_id: str,
    user_data: Dict = Depends(require_permission("assign_roles")),
    service: UserService = Depends(get_user_service)
):
    """Remove a role from a user"""
    service.remove_role(user_id, role_id)
    return None
