import logging
import secrets
from datetime import datetime, timezone
from supabase import Client
from app.core.notifier import escape
from app.modules.bookings.schemas import (
    BookingCreate, BookingUpdate, BookingStatusUpdate, BookingResponse
)
from typing import List, Optional
from fastapi import HTTPException

logger = logging.getLogger(__name__)


def generate_booking_code() -> str:
    """BK-<yyyymmdd>-<6 hex chars>"""
    today = datetime.now(timezone.utc).strftime("%Y%m%d")
    return f"BK-{today}-{secrets.token_hex(3).upper()}"


def format_booking_message(booking: dict, tour_title: Optional[str] = None) -> str:
    """Telegram HTML message for a new booking"""
    lines = [
        "<b>New booking</b>",
        f"Code: <code>{escape(booking.get('booking_code'))}</code>",
        f"Tour: {escape(tour_title or booking.get('tour_id'))}",
        f"Name: {escape(booking.get('customer_name'))}",
        f"Email: {escape(booking.get('customer_email'))}",
        f"Phone: {escape(booking.get('customer_phone'))}",
        f"People: {escape(booking.get('people_count'))}",
        f"Start date: {escape(booking.get('start_date'))}",
    ]
    if booking.get("message"):
        lines.append(f"Message: {escape(booking['message'])}")
    return "\n".join(lines)


class BookingService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def submit_booking(self, data: BookingCreate) -> dict:
        """Insert a pending booking from the public form"""
        payload = data.model_dump(exclude_none=True, mode="json")
        payload["booking_code"] = generate_booking_code()
        payload["status"] = "pending"
        payload["payment_status"] = "unpaid"
        try:
            result = self.supabase.table("bookings").insert(payload).execute()
        except Exception as e:
            logger.error(f"Booking insert failed: {e}")
            raise HTTPException(status_code=500, detail="Failed to submit booking")
        if not result.data:
            raise HTTPException(status_code=500, detail="Failed to submit booking")
        booking = result.data[0]
        logger.info(f"Booking {booking.get('booking_code')} submitted")
        return booking

    def get_tour_title(self, tour_id: Optional[str]) -> Optional[str]:
        """Tour title for notifications; None when unknown"""
        if not tour_id:
            return None
        try:
            result = self.supabase.table("tours")\
                .select("title")\
                .eq("id", tour_id)\
                .limit(1)\
                .execute()
        except Exception as e:
            logger.warning(f"Could not load tour {tour_id} for notification: {e}")
            return None
        return result.data[0].get("title") if result.data else None

    def list_bookings(
        self,
        status: Optional[str] = None,
        payment_status: Optional[str] = None,
        tour_id: Optional[str] = None,
        customer_id: Optional[str] = None,
        date_from: Optional[str] = None,
        date_to: Optional[str] = None,
        search: Optional[str] = None,
        limit: int = 50,
        offset: int = 0
    ) -> List[BookingResponse]:
        try:
            query = self.supabase.table("bookings").select("*")
            if status:
                query = query.eq("status", status)
            if payment_status:
                query = query.eq("payment_status", payment_status)
            if tour_id:
                query = query.eq("tour_id", tour_id)
            if customer_id:
                query = query.eq("customer_id", customer_id)
            if date_from:
                query = query.gte("start_date", date_from)
            if date_to:
                query = query.lte("start_date", date_to)
            if search:
                query = query.ilike("customer_name", f"%{search}%")
            result = query.order("created_at", desc=True)\
                .limit(limit)\
                .offset(offset)\
                .execute()
            return [BookingResponse(**b) for b in result.data or []]
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def get_booking(self, booking_id: str) -> BookingResponse:
        try:
            result = self.supabase.table("bookings")\
                .select("*")\
                .eq("id", booking_id)\
                .limit(1)\
                .execute()
            if not result.data:
                raise HTTPException(status_code=404, detail="Booking not found")
            return BookingResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def _update(self, booking_id: str, payload: dict, user_id: str) -> BookingResponse:
        payload["updated_by"] = user_id
        try:
            result = self.supabase.table("bookings")\
                .update(payload)\
                .eq("id", booking_id)\
                .execute()
            if not result.data:
                raise HTTPException(status_code=404, detail="Booking not found")
            return BookingResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def update_booking(self, booking_id: str, data: BookingUpdate, user_id: str) -> BookingResponse:
        return self._update(booking_id, data.model_dump(exclude_unset=True, mode="json"), user_id)

    def update_status(self, booking_id: str, data: BookingStatusUpdate, user_id: str) -> BookingResponse:
        """Update booking and/or payment status"""
        payload = data.model_dump(exclude_none=True)
        if not payload:
            raise HTTPException(status_code=400, detail="Nothing to update")
        return self._update(booking_id, payload, user_id)

    def update_note(self, booking_id: str, admin_note: Optional[str], user_id: str) -> BookingResponse:
        return self._update(booking_id, {"admin_note": admin_note}, user_id)

    def delete_booking(self, booking_id: str) -> bool:
        try:
            result = self.supabase.table("bookings")\
                .delete()\
                .eq("id", booking_id)\
                .execute()
            if not result.data:
                raise HTTPException(status_code=404, detail="Booking not found")
            return True
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))
