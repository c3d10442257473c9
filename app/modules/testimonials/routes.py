from fastapi import APIRouter, Depends
from app.database.supabase_client import get_supabase, get_service_supabase
from app.modules.testimonials.schemas import TestimonialCreate, TestimonialUpdate, TestimonialResponse
from app.modules.testimonials.service import TestimonialService
from app.core.dependencies import require_permission
from supabase import Client
from typing import List, Optional, Dict

router = APIRouter(prefix="/testimonials", tags=["testimonials"])


def get_testimonial_service(supabase: Client = Depends(get_service_supabase)) -> TestimonialService:
    return TestimonialService(supabase)


def get_public_testimonial_service(supabase: Client = Depends(get_supabase)) -> TestimonialService:
    return TestimonialService(supabase)


@router.get("/published", response_model=List[TestimonialResponse])
async def list_published_testimonials(
    service: TestimonialService = Depends(get_public_testimonial_service)
):
    """Published testimonials for the public site"""
    return service.list_testimonials(status="published")


@router.get("", response_model=List[TestimonialResponse])
async def list_testimonials(
    status: Optional[str] = None,
    user_data: Dict = Depends(require_permission("view_customers")),
    service: TestimonialService = Depends(get_testimonial_service)
):
    return service.list_testimonials(status=status)


@router.get("/{testimonial_id}", response_model=TestimonialResponse)
async def get_testimonial(
    testimonial_id: str,
    user_data: Dict = Depends(require_permission("view_customers")),
    service: TestimonialService = Depends(get_testimonial_service)
):
    return service.get_testimonial(testimonial_id)


@router.post("", response_model=TestimonialResponse, status_code=201)
async def create_testimonial(
    data: TestimonialCreate,
    user_data: Dict = Depends(require_permission("manage_customers")),
    service: TestimonialService = Depends(get_testimonial_service)
):
    return service.create_testimonial(data)


@router.put("/{testimonial_id}", response_model=TestimonialResponse)
async def update_testimonial(
    testimonial_id: str,
    data: TestimonialUpdate,
    user_data: Dict = Depends(require_permission("manage_customers")),
    service: TestimonialService = Depends(get_testimonial_service)
):
    return service.update_testimonial(testimonial_id, data)


@router.delete("/{testimonial_id}", status_code=204)
async def delete_testimonial(
    testimonial_id: str,
    user_data: Dict = Depends(require_permission("manage_customers")),
    service: TestimonialService = Depends(get_testimonial_service)
):
    service.delete_testimonial(testimonial_id)
    return None
