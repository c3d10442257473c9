from fastapi import APIRouter, Depends
from app.database.supabase_client import get_service_supabase
from app.modules.destinations.schemas import DestinationCreate, DestinationUpdate, DestinationResponse
from app.modules.destinations.service import DestinationService
from app.core.dependencies import require_permission
from supabase import Client
from typing import List, Optional, Dict

router = APIRouter(prefix="/destinations", tags=["destinations"])


def get_destination_service(supabase: Client = Depends(get_service_supabase)) -> DestinationService:
    return DestinationService(supabase)


@router.get("", response_model=List[DestinationResponse])
async def list_destinations(
    status: Optional[str] = None,
    region: Optional[str] = None,
    search: Optional[str] = None,
    limit: int = 20,
    offset: int = 0,
    user_data: Dict = Depends(require_permission("view_destinations")),
    service: DestinationService = Depends(get_destination_service)
):
    """List destinations"""
    return service.list_destinations(status=status, region=region, search=search, limit=limit, offset=offset)


@router.get("/regions", response_model=List[str])
async def list_regions(
    user_data: Dict = Depends(require_permission("view_destinations")),
    service: DestinationService = Depends(get_destination_service)
):
    """Distinct destination regions"""
    return service.list_regions()


@router.get("/{destination_id}", response_model=DestinationResponse)
async def get_destination(
    destination_id: str,
    user_data: Dict = Depends(require_permission("view_destinations")),
    service: DestinationService = Depends(get_destination_service)
):
    """Get destination by ID"""
    return service.get_destination(destination_id)


@router.post("", response_model=DestinationResponse, status_code=201)
async def create_destination(
    data: DestinationCreate,
    user_data: Dict = Depends(require_permission("create_destinations")),
    service: DestinationService = Depends(get_destination_service)
):
    """Create destination"""
    return service.create_destination(data)


@router.put("/{destination_id}", response_model=DestinationResponse)
async def update_destination(
    destination_id: str,
    data: DestinationUpdate,
    user_data: Dict = Depends(require_permission("edit_destinations")),
    service: DestinationService = Depends(get_destination_service)
):
    """Update destination"""
    return service.update_destination(destination_id, data)


@router.delete("/{destination_id}", status_code=204)
async def delete_destination(
    destination_id: str,
    user_data: Dict = Depends(require_permission("delete_destinations")),
    service: DestinationService = Depends(get_destination_service)
):
    """Delete destination"""
    service.delete_destination(destination_id)
    return None
