"""
Error taxonomy shared by the RBAC core and the admin modules
"""

from enum import Enum
from typing import Optional


class StoreError(Exception):
    """A Supabase/PostgREST call failed (network, constraint violation, malformed query)."""

    def __init__(self, operation: str, cause: Optional[BaseException] = None):
        self.operation = operation
        self.cause = cause
        message = f"{operation} failed"
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message)


class AuthorizationError(Exception):
    """Principal is missing, or lacks the required permission/role."""

    def __init__(self, required: str, kind: str = "permission"):
        self.required = required
        self.kind = kind
        super().__init__(f"Permission denied: {required}")


class RepairStep(str, Enum):
    ROLE_CREATION = "role_creation"
    PERMISSION_UPSERT = "permission_upsert"
    PERMISSION_FETCH = "permission_fetch"
    ROLE_PERMISSION_INSERT = "role_permission_insert"
    USER_ROLE_INSERT = "user_role_insert"


class RepairError(Exception):
    """RBAC repair aborted; `step` names the relation an operator should inspect."""

    def __init__(self, step: RepairStep, cause: BaseException | str):
        self.step = step
        self.cause = cause
        super().__init__(f"RBAC repair failed at step '{step.value}': {cause}")
