import logging
from supabase import Client
from app.modules.site_settings.schemas import SiteSettingsUpdate, SiteSettingsResponse
from typing import Optional
from fastapi import HTTPException

logger = logging.getLogger(__name__)


class SiteSettingsService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def _current(self) -> Optional[dict]:
        result = self.supabase.table("site_settings")\
            .select("*")\
            .limit(1)\
            .execute()
        return result.data[0] if result.data else None

    def get_settings(self) -> SiteSettingsResponse:
        try:
            current = self._current()
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))
        if not current:
            raise HTTPException(status_code=404, detail="Site settings not configured")
        return SiteSettingsResponse(**current)

    def update_settings(self, data: SiteSettingsUpdate, user_id: str) -> SiteSettingsResponse:
        """Update the single settings row, creating it on first save"""
        payload = data.model_dump(exclude_unset=True)
        payload["updated_by"] = user_id
        try:
            current = self._current()
            if current:
                result = self.supabase.table("site_settings")\
                    .update(payload)\
                    .eq("id", current["id"])\
                    .execute()
            else:
                if not payload.get("site_name"):
                    raise HTTPException(status_code=400, detail="site_name is required")
                result = self.supabase.table("site_settings").insert(payload).execute()
            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to save site settings")
            logger.info(f"Site settings updated by {user_id}")
            return SiteSettingsResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))
