# Supabase table: site_settings (single row)
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

site_settings:
- id: uuid (primary key)
- site_name: text (not null)
- site_short_name, site_description, site_tagline, site_url: text (nullable)
- logo_main, logo_dark, logo_small, logo_text: text (nullable)
- favicon_ico, og_image: text (nullable)
- contact_email, contact_phone, contact_address: text (nullable)
- social_facebook, social_instagram, social_twitter, social_youtube, social_tiktok: text (nullable)
- meta_keywords: text[] (nullable)
- meta_author, meta_language: text (nullable)
- theme_color, background_color: text (nullable)
- google_analytics_id, facebook_pixel_id, google_tag_manager_id: text (nullable)
- features: jsonb (nullable), e.g. {"blog": true, "tours": true}
- created_at, updated_at: timestamp
- updated_by: uuid (nullable)
"""
