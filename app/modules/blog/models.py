# Supabase table: blog_posts
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

blog_posts:
- id: uuid (primary key)
- title: text (not null)
- slug: text (not null, unique)
- excerpt, content: text (nullable)
- cover_image: text (nullable)
- category: text (nullable)
- tags: text[] (nullable)
- meta_title, meta_description: text (nullable)
- featured: boolean (default: false)
- status: text (draft | published, default: 'draft')
- published_at: timestamp (nullable, set on first publish)
- author_id: uuid (nullable)
- created_at, updated_at: timestamp
"""
