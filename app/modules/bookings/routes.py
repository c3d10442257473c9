from fastapi import APIRouter, BackgroundTasks, Depends, Request
from app.config import settings
from app.core.dependencies import require_permission
from app.core.notifier import TelegramNotifier, get_notifier
from app.core.rate_limit import limiter
from app.database.supabase_client import get_supabase, get_service_supabase
from app.modules.bookings.schemas import (
    BookingCreate, BookingUpdate, BookingStatusUpdate, BookingNoteUpdate,
    BookingResponse, BookingSubmitResponse
)
from app.modules.bookings.service import BookingService, format_booking_message
from supabase import Client
from typing import List, Optional, Dict

router = APIRouter(prefix="/bookings", tags=["bookings"])


def get_booking_service(supabase: Client = Depends(get_service_supabase)) -> BookingService:
    return BookingService(supabase)


def get_public_booking_service(supabase: Client = Depends(get_supabase)) -> BookingService:
    return BookingService(supabase)


@router.post("", response_model=BookingSubmitResponse, status_code=201)
@limiter.limit(settings.booking_rate_limit)
async def submit_booking(
    request: Request,
    booking_data: BookingCreate,
    background_tasks: BackgroundTasks,
    service: BookingService = Depends(get_public_booking_service),
    notifier: TelegramNotifier = Depends(get_notifier)
):
    """Public booking form; staff are notified on Telegram after the response"""
    booking = service.submit_booking(booking_data)
    text = format_booking_message(booking, service.get_tour_title(booking.get("tour_id")))
    background_tasks.add_task(notifier.send, text)
    return BookingSubmitResponse(success=True, booking_code=booking["booking_code"])


@router.get("", response_model=List[BookingResponse])
async def list_bookings(
    status: Optional[str] = None,
    payment_status: Optional[str] = None,
    tour_id: Optional[str] = None,
    customer_id: Optional[str] = None,
    date_from: Optional[str] = None,
    date_to: Optional[str] = None,
    search: Optional[str] = None,
    limit: int = 50,
    offset: int = 0,
    user_data: Dict = Depends(require_permission("view_bookings")),
    service: BookingService = Depends(get_booking_service)
):
    """List bookings, newest first"""
    return service.list_bookings(
        status=status,
        payment_status=payment_status,
        tour_id=tour_id,
        customer_id=customer_id,
        date_from=date_from,
        date_to=date_to,
        search=search,
        limit=limit,
        offset=offset
    )


@router.get("/{booking_id}", response_model=BookingResponse)
async def get_booking(
    booking_id: str,
    user_data: Dict = Depends(require_permission("view_bookings")),
    service: BookingService = Depends(get_booking_service)
):
    return service.get_booking(booking_id)


@router.put("/{booking_id}", response_model=BookingResponse)
async def update_booking(
    booking_id: str,
    booking_data: BookingUpdate,
    user_data: Dict = Depends(require_permission("edit_bookings")),
    service: BookingService = Depends(get_booking_service)
):
    return service.update_booking(booking_id, booking_data, user_data["id"])


@router.patch("/{booking_id}/status", response_model=BookingResponse)
async def update_booking_status(
    booking_id: str,
    status_data: BookingStatusUpdate,
    user_data: Dict = Depends(require_permission("edit_bookings")),
    service: BookingService = Depends(get_booking_service)
):
    """Update booking status and/or payment status"""
    return service.update_status(booking_id, status_data, user_data["id"])


@router.patch("/{booking_id}/note", response_model=BookingResponse)
async def update_booking_note(
    booking_id: str,
    note_data: BookingNoteUpdate,
    user_data: Dict = Depends(require_permission("edit_bookings")),
    service: BookingService = Depends(get_booking_service)
):
    return service.update_note(booking_id, note_data.admin_note, user_data["id"])


@router.delete("/{booking_id}", status_code=204)
async def delete_booking(
    booking_id: str,
    user_data: Dict = Depends(require_permission("delete_bookings")),
    service: BookingService = Depends(get_booking_service)
):
    service.delete_booking(booking_id)
    return None
