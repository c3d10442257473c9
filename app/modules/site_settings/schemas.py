from pydantic import BaseModel, Field, model_validator
from typing import Optional, List, Dict
from datetime import datetime


class SiteSettingsBase(BaseModel):
    site_short_name: Optional[str] = None
    site_description: Optional[str] = None
    site_tagline: Optional[str] = None
    site_url: Optional[str] = None

    logo_main: Optional[str] = None
    logo_dark: Optional[str] = None
    logo_small: Optional[str] = None
    logo_text: Optional[str] = None
    favicon_ico: Optional[str] = None
    og_image: Optional[str] = None

    contact_email: Optional[str] = None
    contact_phone: Optional[str] = None
    contact_address: Optional[str] = None

    social_facebook: Optional[str] = None
    social_instagram: Optional[str] = None
    social_twitter: Optional[str] = None
    social_youtube: Optional[str] = None
    social_tiktok: Optional[str] = None

    meta_keywords: Optional[List[str]] = None
    meta_author: Optional[str] = None
    meta_language: Optional[str] = None

    theme_color: Optional[str] = None
    background_color: Optional[str] = None

    google_analytics_id: Optional[str] = None
    facebook_pixel_id: Optional[str] = None
    google_tag_manager_id: Optional[str] = None

    features: Optional[Dict[str, bool]] = None


class SiteSettingsUpdate(SiteSettingsBase):
    site_name: Optional[str] = Field(None, min_length=1)

    @model_validator(mode="after")
    def reject_null_site_name(self):
        if "site_name" in self.model_fields_set and self.site_name is None:
            raise ValueError("site_name cannot be null")
        return self


class SiteSettingsResponse(SiteSettingsBase):
    id: str
    site_name: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    updated_by: Optional[str] = None

    class Config:
        from_attributes = True
