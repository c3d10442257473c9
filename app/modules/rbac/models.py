# Supabase tables: roles, permissions, role_permissions, user_roles
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in repository.py

"""
Expected Supabase table structure:

roles:
- id: uuid (primary key)
- name: text (not null, unique) - "admin", "editor", "viewer"
- description: text (nullable)
- created_at: timestamp (default: now())

permissions:
- id: uuid (primary key)
- name: text (not null, unique) - e.g., "view_tours", "manage_bookings"
- resource: text (not null) - e.g., "tours", "bookings"; descriptive only
- action: text (not null) - e.g., "read", "manage"; descriptive only
- description: text (nullable)
- created_at: timestamp (default: now())

role_permissions:
- role_id: uuid (foreign key to roles.id, not null, on delete cascade)
- permission_id: uuid (foreign key to permissions.id, not null, on delete cascade)
- created_at: timestamp (default: now())
- unique constraint on (role_id, permission_id)

user_roles:
- user_id: uuid (foreign key to auth.users.id, not null)
- role_id: uuid (foreign key to roles.id, not null, on delete cascade)
- assigned_by: uuid (nullable)
- created_at: timestamp (default: now())
- unique constraint on (user_id, role_id)
"""
