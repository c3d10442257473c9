from supabase import Client
from app.config import settings
from app.modules.roles.schemas import (
    PermissionCreate, PermissionUpdate, PermissionResponse,
    RoleCreate, RoleUpdate, RoleResponse, RoleWithPermissionsResponse,
    RolePermissionResponse, BulkPermissionAssignResponse
)
from typing import List, Optional
from fastapi import HTTPException


class PermissionService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def create_permission(self, permission_data: PermissionCreate) -> PermissionResponse:
        """Create a new permission"""
        try:
            existing = self.supabase.table("permissions")\
                .select("id")\
                .eq("name", permission_data.name)\
                .execute()
            if existing.data:
                raise HTTPException(status_code=400, detail="Permission already exists")

            result = self.supabase.table("permissions").insert({
                "name": permission_data.name,
                "resource": permission_data.resource,
                "action": permission_data.action,
                "description": permission_data.description
            }).execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to create permission")

            return PermissionResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def get_permission_by_id(self, permission_id: str) -> PermissionResponse:
        """Get permission by ID"""
        try:
            result = self.supabase.table("permissions")\
                .select("*")\
                .eq("id", permission_id)\
                .limit(1)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Permission not found")

            return PermissionResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def update_permission(self, permission_id: str, permission_data: PermissionUpdate) -> PermissionResponse:
        """Update permission metadata; the name is a stable identifier and cannot change"""
        try:
            update_data = permission_data.model_dump(exclude_none=True)
            if not update_data:
                return self.get_permission_by_id(permission_id)

            result = self.supabase.table("permissions")\
                .update(update_data)\
                .eq("id", permission_id)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Permission not found")

            return PermissionResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def list_permissions(
        self,
        resource: Optional[str] = None,
        limit: int = 100,
        offset: int = 0
    ) -> List[PermissionResponse]:
        """List permissions, optionally filtered by resource"""
        try:
            query = self.supabase.table("permissions").select("*")
            if resource:
                query = query.eq("resource", resource)
            result = query.order("name")\
                .limit(limit)\
                .offset(offset)\
                .execute()
            return [PermissionResponse(**permission) for permission in result.data]
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def delete_permission(self, permission_id: str) -> bool:
        """Delete permission"""
        try:
            # Remove from role_permissions first
            self.supabase.table("role_permissions")\
                .delete()\
                .eq("permission_id", permission_id)\
                .execute()

            result = self.supabase.table("permissions")\
                .delete()\
                .eq("id", permission_id)\
                .execute()

            return len(result.data) > 0
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))


class RoleService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def _guard_admin_role(self, role: RoleResponse, action: str):
        if role.name == settings.rbac_admin_role:
            raise HTTPException(status_code=400, detail=f"The {role.name} role cannot be {action}")

    def create_role(self, role_data: RoleCreate) -> RoleResponse:
        """Create a new role"""
        try:
            existing = self.supabase.table("roles")\
                .select("id")\
                .eq("name", role_data.name)\
                .execute()
            if existing.data:
                raise HTTPException(status_code=400, detail="Role already exists")

            result = self.supabase.table("roles").insert({
                "name": role_data.name,
                "description": role_data.description
            }).execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to create role")

            return RoleResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def get_role_by_id(self, role_id: str) -> RoleResponse:
        """Get role by ID"""
        try:
            result = self.supabase.table("roles")\
                .select("*")\
                .eq("id", role_id)\
                .limit(1)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Role not found")

            return RoleResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def get_role_permissions(self, role_id: str) -> List[PermissionResponse]:
        """Get all permissions for a role"""
        try:
            links = self.supabase.table("role_permissions")\
                .select("permission_id")\
                .eq("role_id", role_id)\
                .execute()

            permission_ids = list({item["permission_id"] for item in links.data}) if links.data else []
            if not permission_ids:
                return []

            result = self.supabase.table("permissions")\
                .select("*")\
                .in_("id", permission_ids)\
                .execute()
            return sorted(
                (PermissionResponse(**p) for p in result.data),
                key=lambda p: p.name
            )
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def get_role_with_permissions(self, role_id: str) -> RoleWithPermissionsResponse:
        """Get role with all associated permissions"""
        role = self.get_role_by_id(role_id)
        permissions = self.get_role_permissions(role_id)
        return RoleWithPermissionsResponse(**role.model_dump(), permissions=permissions)

    def update_role(self, role_id: str, role_data: RoleUpdate) -> RoleResponse:
        """Update role"""
        try:
            role = self.get_role_by_id(role_id)
            update_data = role_data.model_dump(exclude_none=True)
            if "name" in update_data and update_data["name"] != role.name:
                self._guard_admin_role(role, "renamed")
            if not update_data:
                return role

            result = self.supabase.table("roles")\
                .update(update_data)\
                .eq("id", role_id)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Role not found")

            return RoleResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def list_roles(self, limit: int = 50, offset: int = 0) -> List[RoleResponse]:
        """List roles"""
        try:
            result = self.supabase.table("roles")\
                .select("*")\
                .order("name")\
                .limit(limit)\
                .offset(offset)\
                .execute()
            return [RoleResponse(**role) for role in result.data]
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def delete_role(self, role_id: str) -> bool:
        """Delete role and its join rows"""
        try:
            role = self.get_role_by_id(role_id)
            self._guard_admin_role(role, "deleted")

            self.supabase.table("role_permissions")\
                .delete()\
                .eq("role_id", role_id)\
                .execute()

            self.supabase.table("user_roles")\
                .delete()\
                .eq("role_id", role_id)\
                .execute()

            result = self.supabase.table("roles")\
                .delete()\
                .eq("id", role_id)\
                .execute()

            return len(result.data) > 0
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def assign_permission_to_role(self, role_id: str, permission_id: str) -> RolePermissionResponse:
        """Assign a permission to a role"""
        try:
            self.get_role_by_id(role_id)
            PermissionService(self.supabase).get_permission_by_id(permission_id)

            existing = self.supabase.table("role_permissions")\
                .select("role_id")\
                .eq("role_id", role_id)\
                .eq("permission_id", permission_id)\
                .execute()

            if existing.data:
                raise HTTPException(status_code=400, detail="Permission already assigned to role")

            result = self.supabase.table("role_permissions").insert({
                "role_id": role_id,
                "permission_id": permission_id
            }).execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to assign permission")

            return RolePermissionResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def remove_permission_from_role(self, role_id: str, permission_id: str) -> bool:
        """Remove a permission from a role"""
        try:
            result = self.supabase.table("role_permissions")\
                .delete()\
                .eq("role_id", role_id)\
                .eq("permission_id", permission_id)\
                .execute()

            return len(result.data) > 0
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def _current_permission_ids(self, role_id: str) -> set:
        result = self.supabase.table("role_permissions")\
            .select("permission_id")\
            .eq("role_id", role_id)\
            .execute()
        return {item["permission_id"] for item in result.data} if result.data else set()

    def bulk_assign_permissions_to_role(self, role_id: str, permission_ids: List[str]) -> BulkPermissionAssignResponse:
        """Bulk assign multiple permissions to a role, skipping ones already granted"""
        try:
            self.get_role_by_id(role_id)
            permission_service = PermissionService(self.supabase)
            for permission_id in set(permission_ids):
                permission_service.get_permission_by_id(permission_id)

            existing = self._current_permission_ids(role_id)
            to_add = sorted(set(permission_ids) - existing)
            if to_add:
                self.supabase.table("role_permissions")\
                    .insert([{"role_id": role_id, "permission_id": pid} for pid in to_add])\
                    .execute()

            skipped_count = len(set(permission_ids) & existing)
            return BulkPermissionAssignResponse(
                role_id=role_id,
                assigned_count=len(to_add),
                skipped_count=skipped_count,
                message=f"Assigned {len(to_add)} permissions, skipped {skipped_count} already assigned"
            )
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def bulk_update_role_permissions(self, role_id: str, permission_ids: List[str]) -> BulkPermissionAssignResponse:
        """Replace the role's permissions with exactly permission_ids (only the difference is written)"""
        try:
            self.get_role_by_id(role_id)
            permission_service = PermissionService(self.supabase)
            for permission_id in set(permission_ids):
                permission_service.get_permission_by_id(permission_id)

            desired = set(permission_ids)
            existing = self._current_permission_ids(role_id)
            to_remove = sorted(existing - desired)
            to_add = sorted(desired - existing)

            if to_remove:
                self.supabase.table("role_permissions")\
                    .delete()\
                    .eq("role_id", role_id)\
                    .in_("permission_id", to_remove)\
                    .execute()
            if to_add:
                self.supabase.table("role_permissions")\
                    .insert([{"role_id": role_id, "permission_id": pid} for pid in to_add])\
                    .execute()

            return BulkPermissionAssignResponse(
                role_id=role_id,
                assigned_count=len(to_add),
                skipped_count=len(desired & existing),
                removed_count=len(to_remove),
                message=f"Updated role with {len(desired)} permissions"
            )
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))
