# Supabase table: customers
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

customers:
- id: uuid (primary key)
- fullname: text (not null)
- email: text (not null)
- phone: text (nullable)
- nationality: text (nullable)
- date_of_birth: date (nullable)
- passport_number: text (nullable)
- address: text (nullable)
- tags: text[] (default: '{}')
- notes: text (nullable)
- created_at, updated_at: timestamp

bookings.customer_id references customers.id; a customer with bookings
cannot be deleted.
"""
