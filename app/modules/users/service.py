import logging
from supabase import Client
from app.modules.rbac.schemas import Role
from app.modules.users.schemas import UserWithRolesResponse, UserRoleResponse
from typing import Dict, List, Optional
from fastapi import HTTPException

logger = logging.getLogger(__name__)


class UserService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def _roles_by_user(self, user_ids: Optional[List[str]] = None) -> Dict[str, List[Role]]:
        query = self.supabase.table("user_roles").select("user_id, role_id")
        if user_ids is not None:
            query = query.in_("user_id", user_ids)
        links = query.execute().data or []
        role_ids = list({link["role_id"] for link in links})
        roles = {}
        if role_ids:
            result = self.supabase.table("roles")\
                .select("id, name, description")\
                .in_("id", role_ids)\
                .execute()
            roles = {r["id"]: Role(**r) for r in result.data or []}

        by_user: Dict[str, List[Role]] = {}
        for link in links:
            role = roles.get(link["role_id"])
            if role and role not in by_user.setdefault(link["user_id"], []):
                by_user[link["user_id"]].append(role)
        return by_user

    def list_users_with_roles(self, page: int = 1, per_page: int = 50) -> List[UserWithRolesResponse]:
        """List auth users with their roles (requires the service role client)"""
        try:
            users = self.supabase.auth.admin.list_users(page=page, per_page=per_page) or []
            by_user = self._roles_by_user([u.id for u in users]) if users else {}
            return [
                UserWithRolesResponse(
                    id=u.id,
                    email=u.email or "",
                    created_at=u.created_at,
                    roles=by_user.get(u.id, [])
                )
                for u in users
            ]
        except Exception as e:
            logger.error(f"Error listing users: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def get_user_roles(self, user_id: str) -> List[Role]:
        try:
            return self._roles_by_user([user_id]).get(user_id, [])
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def assign_role(self, user_id: str, role_id: str, assigned_by: Optional[str] = None) -> UserRoleResponse:
        """Assign a role to a user; assigning a held role is a no-op success"""
        try:
            role = self.supabase.table("roles")\
                .select("id")\
                .eq("id", role_id)\
                .limit(1)\
                .execute()
            if not role.data:
                raise HTTPException(status_code=404, detail="Role not found")

            existing = self.supabase.table("user_roles")\
                .select("user_id")\
                .eq("user_id", user_id)\
                .eq("role_id", role_id)\
                .execute()
            if existing.data:
                return UserRoleResponse(
                    user_id=user_id,
                    role_id=role_id,
                    already_assigned=True,
                    message="Role already assigned"
                )

            row = {"user_id": user_id, "role_id": role_id}
            if assigned_by:
                row["assigned_by"] = assigned_by
            self.supabase.table("user_roles").insert(row).execute()
            logger.info(f"Role {role_id} assigned to {user_id} by {assigned_by}")

            return UserRoleResponse(
                user_id=user_id,
                role_id=role_id,
                assigned_by=assigned_by,
                message="Role assigned"
            )
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error assigning role: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def remove_role(self, user_id: str, role_id: str) -> bool:
        """Remove a role from a user"""
        try:
            result = self.supabase.table("user_roles")\
                .delete()\
                .eq("user_id", user_id)\
                .eq("role_id", role_id)\
                .execute()
            logger.info(f"Role {role_id} removed from {user_id}")
            return len(result.data or []) > 0
        except Exception as e:
            logger.error(f"Error removing role: {e}")
            raise HTTPException(status_code=500, detail=str(e))
