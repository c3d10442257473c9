"""
Seed Permissions and Roles Script
Populates the permission catalog and the default roles from permissions_config,
then makes sure the admin role holds every stored permission.

    python -m app.scripts.seed_permissions_roles
    python -m app.scripts.seed_permissions_roles --user-id <uuid>   # full repair, grants admin to the user

Can be run manually or as part of a nightly job.
"""

import argparse
import sys
import logging
from typing import List, Optional

from app.config import settings
from app.config.permissions_config import PERMISSION_MATRIX
from app.core.exceptions import RepairError, StoreError
from app.database.supabase_client import get_service_supabase
from app.modules.rbac.repair import RBACRepairService
from app.modules.rbac.repository import RBACRepository

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def seed_permissions(repository: RBACRepository) -> int:
    """Upsert the permission catalog keyed by name"""
    logger.info("Seeding permissions...")
    permissions = PERMISSION_MATRIX["permissions"]
    repository.upsert_permissions(permissions)
    logger.info(f"Permissions seeded: {len(permissions)} ensured")
    return len(permissions)


def seed_roles(repository: RBACRepository, admin_role: str) -> int:
    """Create missing roles; non-admin roles get exactly the permissions in the config"""
    logger.info("Seeding roles...")
    by_name = {p["name"]: p["id"] for p in repository.list_permissions()}
    count = 0

    for role in PERMISSION_MATRIX["roles"]:
        existing = repository.get_role_by_name(role["name"])
        if existing:
            role_id = existing["id"]
        else:
            role_id = repository.create_role(role["name"], role["description"])["id"]
            logger.info(f"Created role: {role['name']}")
        count += 1

        # Admin grants are synced against the whole store, not just the catalog
        if role["name"] == admin_role:
            continue
        assign_permissions_to_role(repository, role_id, role["name"], role["permissions"], by_name)

    logger.info(f"Roles seeded: {count} processed")
    return count


def assign_permissions_to_role(
    repository: RBACRepository,
    role_id: str,
    role_name: str,
    permission_names: List[str],
    permission_ids_by_name: dict
):
    desired = {permission_ids_by_name[n] for n in permission_names if n in permission_ids_by_name}
    current = set(repository.get_role_permission_ids([role_id]))
    added = repository.insert_role_permissions(role_id, desired - current)
    removed = repository.delete_role_permissions(role_id, current - desired)
    logger.debug(f"Role {role_name}: {added} permissions added, {removed} removed")


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Seed RBAC permissions and roles")
    parser.add_argument("--user-id", help="Run the full RBAC repair and grant the admin role to this user")
    args = parser.parse_args(argv)

    if not settings.supabase_service_role_key:
        logger.error("SUPABASE_SERVICE_ROLE_KEY is required to seed RBAC tables")
        return 1

    repository = RBACRepository(get_service_supabase())
    service = RBACRepairService(repository)

    try:
        logger.info("Starting permissions and roles seeding...")
        perm_count = seed_permissions(repository)
        role_count = seed_roles(repository, service.admin_role)

        if args.user_id:
            result = service.repair(args.user_id)
            logger.info(
                f"Repair completed: {result.permissions_total} permissions, "
                f"{result.grants_added} grants added, {result.grants_removed} removed"
            )
        else:
            sync = service.sync_admin_grants()
            logger.info(f"Admin grants: {sync.final_count}/{sync.total_permissions} ({sync.newly_assigned} new)")

        logger.info(f"Seeding completed successfully! Total: {perm_count} permissions, {role_count} roles processed")
        return 0
    except RepairError as e:
        logger.error(f"Seeding failed at step {e.step.value}: {e.cause}")
        return 1
    except StoreError as e:
        logger.error(f"Error during seeding: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
