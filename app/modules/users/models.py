# Supabase tables: auth.users, user_roles
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py
# Authentication is handled by Supabase Auth (auth.users table)

"""
Users are not stored by this service: they live in auth.users and are listed
through the Auth admin API (service role key required).

Role assignment uses the user_roles join table documented in
app/modules/rbac/models.py:
- user_id: uuid (auth.users.id)
- role_id: uuid (roles.id)
- assigned_by: uuid (nullable) - the admin who granted the role
- unique constraint on (user_id, role_id)
"""
