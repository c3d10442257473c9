from fastapi import APIRouter, Depends
from app.database.supabase_client import get_supabase, get_service_supabase
from app.modules.site_settings.schemas import SiteSettingsUpdate, SiteSettingsResponse
from app.modules.site_settings.service import SiteSettingsService
from app.core.dependencies import require_permission
from supabase import Client
from typing import Dict

router = APIRouter(prefix="/site-settings", tags=["site-settings"])


@router.get("", response_model=SiteSettingsResponse)
async def get_site_settings(supabase: Client = Depends(get_supabase)):
    """Public site settings"""
    return SiteSettingsService(supabase).get_settings()


@router.put("", response_model=SiteSettingsResponse)
async def update_site_settings(
    settings_data: SiteSettingsUpdate,
    user_data: Dict = Depends(require_permission("manage_settings")),
    supabase: Client = Depends(get_service_supabase)
):
    return SiteSettingsService(supabase).update_settings(settings_data, user_data["id"])
