from supabase import Client
from app.modules.testimonials.schemas import TestimonialCreate, TestimonialUpdate, TestimonialResponse
from typing import List, Optional
from fastapi import HTTPException


class TestimonialService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def list_testimonials(self, status: Optional[str] = None) -> List[TestimonialResponse]:
        """Testimonials in display order, newest first within the same position"""
        try:
            query = self.supabase.table("testimonials")\
                .select("*")\
                .order("display_order")\
                .order("created_at", desc=True)
            if status:
                query = query.eq("status", status)
            result = query.execute()
            return [TestimonialResponse(**t) for t in result.data or []]
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def get_testimonial(self, testimonial_id: str) -> TestimonialResponse:
        try:
            result = self.supabase.table("testimonials")\
                .select("*")\
                .eq("id", testimonial_id)\
                .limit(1)\
                .execute()
            if not result.data:
                raise HTTPException(status_code=404, detail="Testimonial not found")
            return TestimonialResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def create_testimonial(self, data: TestimonialCreate) -> TestimonialResponse:
        try:
            result = self.supabase.table("testimonials")\
                .insert(data.model_dump(exclude_none=True))\
                .execute()
            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to create testimonial")
            return TestimonialResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def update_testimonial(self, testimonial_id: str, data: TestimonialUpdate) -> TestimonialResponse:
        payload = data.model_dump(exclude_unset=True)
        if not payload:
            return self.get_testimonial(testimonial_id)
        try:
            result = self.supabase.table("testimonials")\
                .update(payload)\
                .eq("id", testimonial_id)\
                .execute()
            if not result.data:
                raise HTTPException(status_code=404, detail="Testimonial not found")
            return TestimonialResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def delete_testimonial(self, testimonial_id: str) -> bool:
        try:
            result = self.supabase.table("testimonials")\
                .delete()\
                .eq("id", testimonial_id)\
                .execute()
            if not result.data:
                raise HTTPException(status_code=404, detail="Testimonial not found")
            return True
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))
