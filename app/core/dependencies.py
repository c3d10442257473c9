"""
Core dependencies for route protection and permission checking
"""

from fastapi import Depends, HTTPException, Request, Security, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from app.database.supabase_client import get_supabase, get_service_supabase
from app.core.exceptions import AuthorizationError
from app.modules.auth.service import AuthService
from app.modules.rbac.gate import AccessGate
from app.modules.rbac.repository import RBACRepository
from app.modules.rbac.resolver import PermissionResolver
from supabase import Client
from typing import Optional, Dict, Any
import logging

logger = logging.getLogger(__name__)

security = HTTPBearer()
optional_security = HTTPBearer(auto_error=False)


def get_auth_service(supabase: Client = Depends(get_supabase)) -> AuthService:
    return AuthService(supabase)


def get_current_user_id(
    credentials: HTTPAuthorizationCredentials = Security(security),
    auth_service: AuthService = Depends(get_auth_service)
) -> dict:
    """Extract current user info from JWT token"""
    token = credentials.credentials
    user_data = auth_service.get_current_user(token)
    return user_data


def get_optional_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Security(optional_security),
    auth_service: AuthService = Depends(get_auth_service)
) -> Optional[Dict[str, Any]]:
    """Current user, or None when the token is missing or invalid. Callers treat None as no permissions."""
    if credentials is None:
        return None
    try:
        return auth_service.get_current_user(credentials.credentials)
    except HTTPException as e:
        logger.info(f"Rejected bearer token: {e.detail}")
        return None


def get_rbac_repository(supabase: Client = Depends(get_service_supabase)) -> RBACRepository:
    return RBACRepository(supabase)


def get_permission_resolver(repository: RBACRepository = Depends(get_rbac_repository)) -> PermissionResolver:
    return PermissionResolver(repository)


def get_access_gate(
    request: Request,
    resolver: PermissionResolver = Depends(get_permission_resolver)
) -> AccessGate:
    """Request-scoped gate; permissions are resolved at most once per principal per request."""
    if not hasattr(request.state, "access_gate"):
        request.state.access_gate = AccessGate(resolver)
    return request.state.access_gate


def _principal_id(user_data: Optional[Dict[str, Any]]) -> Optional[str]:
    return user_data.get("id") if user_data else None


def require_permission(required_permission: str):
    """Factory function to create permission check dependency"""
    def check_permission(
        user_data: Optional[Dict[str, Any]] = Depends(get_optional_user),
        gate: AccessGate = Depends(get_access_gate)
    ) -> dict:
        """Dependency to check if user has required permission"""
        try:
            gate.require_permission(_principal_id(user_data), required_permission)
        except AuthorizationError as e:
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))
        return user_data
    return check_permission


def require_role(required_role: str):
    """Factory function to create role check dependency"""
    def check_role(
        user_data: Optional[Dict[str, Any]] = Depends(get_optional_user),
        gate: AccessGate = Depends(get_access_gate)
    ) -> dict:
        try:
            gate.require_role(_principal_id(user_data), required_role)
        except AuthorizationError as e:
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))
        return user_data
    return check_role
