import logging
from supabase import Client
from app.core.slug import generate_slug
from app.modules.tours.schemas import TourCreate, TourUpdate, TourResponse
from typing import Dict, List, Optional
from fastapi import HTTPException

logger = logging.getLogger(__name__)


class TourService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def _destination_ids(self, tour_ids: List[str]) -> Dict[str, List[str]]:
        if not tour_ids:
            return {}
        result = self.supabase.table("tour_destinations")\
            .select("tour_id, destination_id")\
            .in_("tour_id", tour_ids)\
            .execute()
        by_tour: Dict[str, List[str]] = {}
        for link in result.data or []:
            by_tour.setdefault(link["tour_id"], []).append(link["destination_id"])
        return by_tour

    def _sync_destinations(self, tour_id: str, destination_ids: List[str]):
        """Replace the tour's destination links"""
        self.supabase.table("tour_destinations")\
            .delete()\
            .eq("tour_id", tour_id)\
            .execute()
        unique_ids = list(dict.fromkeys(destination_ids))
        if unique_ids:
            self.supabase.table("tour_destinations")\
                .insert([{"tour_id": tour_id, "destination_id": d} for d in unique_ids])\
                .execute()

    def _to_response(self, row: dict, destination_ids: Optional[List[str]] = None) -> TourResponse:
        return TourResponse(**row, destination_ids=destination_ids or [])

    def list_tours(
        self,
        status: Optional[str] = None,
        featured: Optional[bool] = None,
        search: Optional[str] = None,
        limit: int = 20,
        offset: int = 0
    ) -> List[TourResponse]:
        """List tours with optional filters, newest first"""
        try:
            query = self.supabase.table("tours").select("*")
            if status:
                query = query.eq("status", status)
            if featured is not None:
                query = query.eq("featured", featured)
            if search:
                query = query.ilike("title", f"%{search}%")
            result = query.order("created_at", desc=True)\
                .limit(limit)\
                .offset(offset)\
                .execute()
            rows = result.data or []
            links = self._destination_ids([r["id"] for r in rows])
            return [self._to_response(r, links.get(r["id"])) for r in rows]
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def get_tour(self, tour_id: str) -> TourResponse:
        """Get tour by ID with its destination links"""
        try:
            result = self.supabase.table("tours")\
                .select("*")\
                .eq("id", tour_id)\
                .limit(1)\
                .execute()
            if not result.data:
                raise HTTPException(status_code=404, detail="Tour not found")
            return self._to_response(result.data[0], self._destination_ids([tour_id]).get(tour_id))
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def create_tour(self, tour_data: TourCreate, user_id: str) -> TourResponse:
        """Create tour"""
        try:
            payload = tour_data.model_dump(exclude={"destination_ids"}, exclude_none=True)
            payload["slug"] = tour_data.slug or generate_slug(tour_data.title)
            payload["created_by"] = user_id
            payload["updated_by"] = user_id

            result = self.supabase.table("tours").insert(payload).execute()
            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to create tour")
            tour = result.data[0]

            if tour_data.destination_ids:
                self._sync_destinations(tour["id"], tour_data.destination_ids)
            logger.info(f"Tour {tour['id']} created by {user_id}")
            return self._to_response(tour, tour_data.destination_ids)
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def update_tour(self, tour_id: str, tour_data: TourUpdate, user_id: str) -> TourResponse:
        """Update tour; destination links are replaced only when destination_ids is sent"""
        try:
            payload = tour_data.model_dump(exclude={"destination_ids"}, exclude_unset=True)
            payload["updated_by"] = user_id

            result = self.supabase.table("tours")\
                .update(payload)\
                .eq("id", tour_id)\
                .execute()
            if not result.data:
                raise HTTPException(status_code=404, detail="Tour not found")

            if tour_data.destination_ids is not None:
                self._sync_destinations(tour_id, tour_data.destination_ids)
            return self.get_tour(tour_id)
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def update_status(self, tour_id: str, status: str, user_id: str) -> TourResponse:
        try:
            result = self.supabase.table("tours")\
                .update({"status": status, "updated_by": user_id})\
                .eq("id", tour_id)\
                .execute()
            if not result.data:
                raise HTTPException(status_code=404, detail="Tour not found")
            return self.get_tour(tour_id)
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def set_featured(self, tour_id: str, featured: Optional[bool], user_id: str) -> TourResponse:
        """Set featured flag, or toggle it when featured is None"""
        if featured is None:
            featured = not self.get_tour(tour_id).featured
        try:
            result = self.supabase.table("tours")\
                .update({"featured": featured, "updated_by": user_id})\
                .eq("id", tour_id)\
                .execute()
            if not result.data:
                raise HTTPException(status_code=404, detail="Tour not found")
            return self.get_tour(tour_id)
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def delete_tour(self, tour_id: str) -> bool:
        """Delete tour"""
        try:
            self.supabase.table("tour_destinations")\
                .delete()\
                .eq("tour_id", tour_id)\
                .execute()
            result = self.supabase.table("tours")\
                .delete()\
                .eq("id", tour_id)\
                .execute()
            if not result.data:
                raise HTTPException(status_code=404, detail="Tour not found")
            return True
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))
