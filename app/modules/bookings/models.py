# Supabase table: bookings
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

bookings:
- id: uuid (primary key)
- booking_code: text (not null, unique), e.g. BK-20260101-7F3A2C
- tour_id: uuid (foreign key to tours.id, nullable)
- customer_id: uuid (foreign key to customers.id, nullable)
- customer_name: text (not null)
- customer_email: text (not null)
- customer_phone: text (nullable)
- people_count: integer (default: 1)
- start_date: date (nullable)
- message: text (nullable)
- status: text (pending | confirmed | cancelled | completed, default: 'pending')
- payment_status: text (unpaid | deposit | paid | refunded, default: 'unpaid')
- total_price: numeric (nullable)
- admin_note: text (nullable)
- created_at, updated_at: timestamp
- updated_by: uuid (nullable)
"""
