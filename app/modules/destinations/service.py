from supabase import Client
from app.core.slug import generate_slug
from app.modules.destinations.schemas import DestinationCreate, DestinationUpdate, DestinationResponse
from typing import List, Optional
from fastapi import HTTPException


class DestinationService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def list_destinations(
        self,
        status: Optional[str] = None,
        region: Optional[str] = None,
        search: Optional[str] = None,
        limit: int = 20,
        offset: int = 0
    ) -> List[DestinationResponse]:
        try:
            query = self.supabase.table("destinations").select("*")
            if status:
                query = query.eq("status", status)
            if region:
                query = query.eq("region", region)
            if search:
                query = query.ilike("name", f"%{search}%")
            result = query.order("name")\
                .limit(limit)\
                .offset(offset)\
                .execute()
            return [DestinationResponse(**d) for d in result.data or []]
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def list_regions(self) -> List[str]:
        """Distinct non-empty regions, sorted"""
        try:
            result = self.supabase.table("destinations").select("region").execute()
            return sorted({d["region"] for d in result.data or [] if d.get("region")})
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def get_destination(self, destination_id: str) -> DestinationResponse:
        try:
            result = self.supabase.table("destinations")\
                .select("*")\
                .eq("id", destination_id)\
                .limit(1)\
                .execute()
            if not result.data:
                raise HTTPException(status_code=404, detail="Destination not found")
            return DestinationResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def create_destination(self, data: DestinationCreate) -> DestinationResponse:
        try:
            payload = data.model_dump(exclude_none=True)
            payload["slug"] = data.slug or generate_slug(data.name)
            result = self.supabase.table("destinations").insert(payload).execute()
            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to create destination")
            return DestinationResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def update_destination(self, destination_id: str, data: DestinationUpdate) -> DestinationResponse:
        try:
            payload = data.model_dump(exclude_unset=True)
            if not payload:
                return self.get_destination(destination_id)
            result = self.supabase.table("destinations")\
                .update(payload)\
                .eq("id", destination_id)\
                .execute()
            if not result.data:
                raise HTTPException(status_code=404, detail="Destination not found")
            return DestinationResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def delete_destination(self, destination_id: str) -> bool:
        try:
            self.supabase.table("tour_destinations")\
                .delete()\
                .eq("destination_id", destination_id)\
                .execute()
            result = self.supabase.table("destinations")\
                .delete()\
                .eq("id", destination_id)\
                .execute()
            if not result.data:
                raise HTTPException(status_code=404, detail="Destination not found")
            return True
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))
