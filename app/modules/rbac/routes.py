import logging
from fastapi import APIRouter, Depends, HTTPException, status
from app.config import settings
from app.core.dependencies import (
    get_current_user_id,
    get_optional_user,
    get_access_gate,
    get_rbac_repository,
    get_permission_resolver,
    require_permission,
)
from app.core.exceptions import RepairError
from app.database.supabase_client import SupabaseClient
from app.modules.rbac.gate import AccessGate
from app.modules.rbac.repair import RBACRepairService
from app.modules.rbac.repository import RBACRepository
from app.modules.rbac.resolver import PermissionResolver
from app.modules.rbac.schemas import (
    AccessResponse, PermissionCheckResponse, RepairResult,
    AdminGrantSyncResult, RBACDiagnosis
)
from typing import Dict, Optional

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/rbac", tags=["rbac"])


def get_repair_service(repository: RBACRepository = Depends(get_rbac_repository)) -> RBACRepairService:
    return RBACRepairService(repository)


def _ensure_repair_allowed(user_data: Dict) -> None:
    if not SupabaseClient.has_service_client():
        logger.error("SUPABASE_SERVICE_ROLE_KEY is missing; RBAC repair cannot bypass RLS")
        raise HTTPException(
            status_code=500,
            detail="Configuration Error: SUPABASE_SERVICE_ROLE_KEY is not configured. It is required for RBAC repair."
        )
    allowed = settings.get_bootstrap_emails()
    if allowed and (user_data.get("email") or "").lower() not in allowed:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="You are not allowed to run RBAC repair"
        )


def _repair_failure(e: RepairError) -> HTTPException:
    logger.error(str(e))
    return HTTPException(
        status_code=500,
        detail={"step": e.step.value, "error": str(e.cause)}
    )


@router.post("/repair", response_model=RepairResult)
async def repair_rbac(
    user_data: Dict = Depends(get_current_user_id),
    service: RBACRepairService = Depends(get_repair_service)
):
    """Restore the admin role, the permission catalog and grant the admin role to the caller"""
    _ensure_repair_allowed(user_data)
    try:
        return service.repair(user_data["id"], assigned_by=user_data["id"])
    except RepairError as e:
        raise _repair_failure(e)


@router.post("/sync-admin", response_model=AdminGrantSyncResult)
async def sync_admin_grants(
    user_data: Dict = Depends(require_permission("manage_roles")),
    service: RBACRepairService = Depends(get_repair_service)
):
    """Grant every stored permission to the admin role without touching roles or user assignments"""
    try:
        return service.sync_admin_grants()
    except RepairError as e:
        raise _repair_failure(e)


@router.get("/diagnose", response_model=RBACDiagnosis)
async def diagnose_rbac(
    user_data: Dict = Depends(get_current_user_id),
    service: RBACRepairService = Depends(get_repair_service),
    resolver: PermissionResolver = Depends(get_permission_resolver)
):
    """Read-only RBAC health report for the caller"""
    return service.diagnose(user_data["id"], resolver)


@router.get("/me", response_model=AccessResponse)
async def my_access(
    user_data: Dict = Depends(get_current_user_id),
    gate: AccessGate = Depends(get_access_gate)
):
    """Roles and effective permissions of the caller"""
    snapshot = gate.snapshot(user_data["id"])
    return AccessResponse(
        user_id=user_data["id"],
        email=user_data.get("email"),
        roles=snapshot.roles,
        permissions=sorted(snapshot.permission_names)
    )


@router.get("/check/{permission_name}", response_model=PermissionCheckResponse)
async def check_permission(
    permission_name: str,
    user_data: Optional[Dict] = Depends(get_optional_user),
    gate: AccessGate = Depends(get_access_gate)
):
    """Boolean permission probe; anonymous callers always get false"""
    principal_id = user_data["id"] if user_data else None
    return PermissionCheckResponse(
        permission=permission_name,
        allowed=gate.has_permission(principal_id, permission_name)
    )
