# Supabase table: testimonials
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

testimonials:
- id: uuid (primary key)
- name: text (not null)
- role: text (nullable)
- content: text (not null)
- rating: integer (1-5, default: 5)
- avatar_url: text (nullable)
- status: text (draft | published | archived, default: 'draft')
- display_order: integer (default: 0)
- created_at: timestamp
"""
