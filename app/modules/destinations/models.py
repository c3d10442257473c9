# Supabase table: destinations
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

destinations:
- id: uuid (primary key)
- name: text (not null)
- slug: text (not null, unique)
- description, short_description: text (nullable)
- country, region: text (nullable)
- image_url: text (nullable)
- gallery_images, highlights: text[] (nullable)
- best_time_to_visit: text (nullable)
- status: text (draft | published | archived, default: 'draft')
- featured: boolean (default: false)
- created_at, updated_at: timestamp
"""
