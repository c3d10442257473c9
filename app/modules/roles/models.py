# Role and permission administration works on the RBAC tables.
# The schema is documented in app/modules/rbac/models.py.
# Actual operations are handled via Supabase SDK in service.py
