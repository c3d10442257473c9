from fastapi import APIRouter, Depends
from app.database.supabase_client import get_service_supabase
from app.modules.tours.schemas import (
    TourCreate, TourUpdate, TourResponse, TourStatusUpdate, TourFeaturedUpdate
)
from app.modules.tours.service import TourService
from app.core.dependencies import require_permission
from supabase import Client
from typing import List, Optional, Dict

router = APIRouter(prefix="/tours", tags=["tours"])


def get_tour_service(supabase: Client = Depends(get_service_supabase)) -> TourService:
    return TourService(supabase)


@router.get("", response_model=List[TourResponse])
async def list_tours(
    status: Optional[str] = None,
    featured: Optional[bool] = None,
    search: Optional[str] = None,
    limit: int = 20,
    offset: int = 0,
    user_data: Dict = Depends(require_permission("view_tours")),
    service: TourService = Depends(get_tour_service)
):
    """List tours"""
    return service.list_tours(status=status, featured=featured, search=search, limit=limit, offset=offset)


@router.get("/{tour_id}", response_model=TourResponse)
async def get_tour(
    tour_id: str,
    user_data: Dict = Depends(require_permission("view_tours")),
    service: TourService = Depends(get_tour_service)
):
    """Get tour by ID"""
    return service.get_tour(tour_id)


@router.post("", response_model=TourResponse, status_code=201)
async def create_tour(
    tour_data: TourCreate,
    user_data: Dict = Depends(require_permission("create_tours")),
    service: TourService = Depends(get_tour_service)
):
    """Create a new tour"""
    return service.create_tour(tour_data, user_data["id"])


@router.put("/{tour_id}", response_model=TourResponse)
async def update_tour(
    tour_id: str,
    tour_data: TourUpdate,
    user_data: Dict = Depends(require_permission("edit_tours")),
    service: TourService = Depends(get_tour_service)
):
    """Update tour"""
    return service.update_tour(tour_id, tour_data, user_data["id"])


@router.patch("/{tour_id}/status", response_model=TourResponse)
async def update_tour_status(
    tour_id: str,
    status_data: TourStatusUpdate,
    user_data: Dict = Depends(require_permission("publish_tours")),
    service: TourService = Depends(get_tour_service)
):
    """Publish, unpublish or archive a tour"""
    return service.update_status(tour_id, status_data.status, user_data["id"])


@router.patch("/{tour_id}/featured", response_model=TourResponse)
async def update_tour_featured(
    tour_id: str,
    featured_data: TourFeaturedUpdate,
    user_data: Dict = Depends(require_permission("edit_tours")),
    service: TourService = Depends(get_tour_service)
):
    """Set or toggle the featured flag"""
    return service.set_featured(tour_id, featured_data.featured, user_data["id"])


@router.delete("/{tour_id}", status_code=204)
async def delete_tour(
    tour_id: str,
    user_data: Dict = Depends(require_permission("delete_tours")),
    service: TourService = Depends(get_tour_service)
):
    """Delete tour"""
    service.delete_tour(tour_id)
    return None
