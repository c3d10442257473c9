"""
Permissions and Roles Configuration
This config defines the permission catalog for every manageable resource and the default roles.
Used by the RBAC repair procedure, the seed script and the /rbac/me endpoint.
"""

from typing import Dict, List

ADMIN_ROLE = "admin"
EDITOR_ROLE = "editor"
VIEWER_ROLE = "viewer"

# resource -> [(permission name, action, description)]
# Names are stable identifiers checked by the access gate; do not rename.
MODULES = {
    "dashboard": [
        ("view_dashboard", "read", "View dashboard"),
    ],
    "tours": [
        ("view_tours", "read", "View tours"),
        ("create_tours", "create", "Create new tours"),
        ("edit_tours", "update", "Edit existing tours"),
        ("delete_tours", "delete", "Delete tours"),
        ("publish_tours", "publish", "Publish/unpublish tours"),
        ("manage_tours", "manage", "Full tour management"),
    ],
    "destinations": [
        ("view_destinations", "read", "View destinations"),
        ("create_destinations", "create", "Create destinations"),
        ("edit_destinations", "update", "Edit destinations"),
        ("delete_destinations", "delete", "Delete destinations"),
        ("manage_destinations", "manage", "Full destination management"),
    ],
    "bookings": [
        ("view_bookings", "read", "View bookings"),
        ("create_bookings", "create", "Create bookings"),
        ("edit_bookings", "update", "Edit bookings"),
        ("delete_bookings", "delete", "Delete bookings"),
        ("manage_bookings", "manage", "Full booking management"),
    ],
    "blog": [
        ("view_posts", "read", "View blog posts"),
        ("create_posts", "create", "Create blog posts"),
        ("edit_posts", "update", "Edit blog posts"),
        ("delete_posts", "delete", "Delete blog posts"),
        ("publish_posts", "publish", "Publish blog posts"),
        ("manage_blog", "manage", "Full blog management"),
    ],
    "media": [
        ("view_media", "read", "View media library"),
        ("upload_media", "create", "Upload files"),
        ("delete_media", "delete", "Delete files"),
        ("manage_media", "manage", "Manage media library"),
    ],
    "users": [
        ("view_users", "read", "View user list"),
        ("create_users", "create", "Create users"),
        ("edit_users", "update", "Edit users"),
        ("delete_users", "delete", "Delete users"),
        ("manage_users", "manage", "Create, edit, delete users"),
        ("assign_roles", "assign_roles", "Assign roles to users"),
    ],
    "customers": [
        ("view_customers", "read", "View customers"),
        ("manage_customers", "manage", "Manage customer data"),
    ],
    "settings": [
        ("view_settings", "read", "View settings"),
        ("manage_settings", "manage", "Manage site settings"),
    ],
    "roles": [
        ("view_roles", "read", "View roles"),
        ("manage_roles", "manage", "Manage roles and permissions"),
    ],
    "analytics": [
        ("view_analytics", "read", "View analytics dashboard"),
        ("export_analytics", "export", "Export analytics data"),
    ],
}

# Role definitions; the admin role always receives the whole catalog
ROLE_TYPES = {
    ADMIN_ROLE: {
        "description": "Full system access",
        "permissions": "*",
    },
    EDITOR_ROLE: {
        "description": "Content editor for tours, destinations and blog",
        "permissions": [
            "view_dashboard",
            "view_tours", "create_tours", "edit_tours", "publish_tours",
            "view_destinations", "create_destinations", "edit_destinations",
            "view_bookings", "edit_bookings",
            "view_posts", "create_posts", "edit_posts", "publish_posts",
            "view_media", "upload_media",
        ],
    },
    VIEWER_ROLE: {
        "description": "Read-only access to the back office",
        "permissions": "view_*",
    },
}


def get_permission_catalog() -> List[Dict[str, str]]:
    """
    Returns the permission catalog in declaration order.
    Format: [{"name": "view_tours", "resource": "tours", "action": "read", "description": "View tours"}, ...]
    """
    catalog = []
    for resource, entries in MODULES.items():
        for name, action, description in entries:
            catalog.append({
                "name": name,
                "resource": resource,
                "action": action,
                "description": description
            })
    return catalog


def get_role_permission_names(role_name: str) -> List[str]:
    """Expand a role definition into concrete permission names"""
    role = ROLE_TYPES.get(role_name)
    if role is None:
        return []
    names = [p["name"] for p in get_permission_catalog()]
    granted = role["permissions"]
    if granted == "*":
        return names
    if isinstance(granted, str) and granted.endswith("*"):
        prefix = granted[:-1]
        return [n for n in names if n.startswith(prefix)]
    return [n for n in granted if n in names]


def get_permission_matrix():
    """
    Returns a dictionary with all permissions and the default roles
    Format: {
        "permissions": [{"name": "view_tours", "resource": "tours", ...}, ...],
        "roles": [{"name": "admin", "description": "...", "permissions": [...]}, ...]
    }
    """
    roles = [
        {
            "name": role_name,
            "description": role_config["description"],
            "permissions": get_role_permission_names(role_name)
        }
        for role_name, role_config in ROLE_TYPES.items()
    ]
    return {
        "permissions": get_permission_catalog(),
        "roles": roles
    }


PERMISSION_CATALOG = get_permission_catalog()
CATALOG_PERMISSION_NAMES = [p["name"] for p in PERMISSION_CATALOG]
PERMISSION_MATRIX = get_permission_matrix()
