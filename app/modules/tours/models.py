# Supabase tables: tours, tour_destinations
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

tours:
- id: uuid (primary key)
- title: text (not null)
- slug: text (not null, unique)
- description, short_description: text (nullable)
- duration_days, duration_nights: integer (nullable)
- price_adult, price_child: numeric (nullable)
- currency: text (default: 'USD')
- featured_image: text (nullable)
- gallery_images, includes, excludes: text[] (nullable)
- itinerary: jsonb (nullable)
- status: text (draft | published | archived, default: 'draft')
- featured: boolean (default: false)
- created_by, updated_by: uuid (nullable)
- created_at, updated_at: timestamp

tour_destinations:
- tour_id: uuid (foreign key to tours.id, on delete cascade)
- destination_id: uuid (foreign key to destinations.id, on delete cascade)
- unique constraint on (tour_id, destination_id)
"""
