from pydantic import BaseModel
from typing import Optional, List
from datetime import datetime
from app.modules.rbac.schemas import Role


class UserWithRolesResponse(BaseModel):
    id: str
    email: str
    created_at: Optional[datetime] = None
    roles: List[Role]


class UserRoleAssign(BaseModel):
    role_id: str


class UserRoleResponse(BaseModel):
    user_id: str
    role_id: str
    assigned_by: Optional[str] = None
    already_assigned: bool = False
    message: str
