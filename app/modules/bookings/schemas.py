from pydantic import BaseModel, EmailStr, Field, model_validator
from typing import Optional, Literal
from datetime import datetime, date

BookingStatus = Literal["pending", "confirmed", "cancelled", "completed"]
PaymentStatus = Literal["unpaid", "deposit", "paid", "refunded"]


class BookingCreate(BaseModel):
    """Public booking request"""
    tour_id: Optional[str] = None
    customer_name: str = Field(..., min_length=1, max_length=200)
    customer_email: EmailStr
    customer_phone: Optional[str] = Field(None, max_length=50)
    people_count: int = Field(1, ge=1, le=100)
    start_date: Optional[date] = None
    message: Optional[str] = Field(None, max_length=5000)


class BookingUpdate(BaseModel):
    tour_id: Optional[str] = None
    customer_id: Optional[str] = None
    customer_name: Optional[str] = None
    customer_email: Optional[EmailStr] = None
    customer_phone: Optional[str] = None
    people_count: Optional[int] = Field(None, ge=1, le=100)
    start_date: Optional[date] = None
    message: Optional[str] = None
    total_price: Optional[float] = None

    @model_validator(mode="after")
    def reject_null_required(self):
        for field in ("customer_name", "customer_email", "people_count"):
            if field in self.model_fields_set and getattr(self, field) is None:
                raise ValueError(f"{field} cannot be null")
        return self


class BookingStatusUpdate(BaseModel):
    status: Optional[BookingStatus] = None
    payment_status: Optional[PaymentStatus] = None


class BookingNoteUpdate(BaseModel):
    admin_note: Optional[str] = None


class BookingSubmitResponse(BaseModel):
    success: bool
    booking_code: str


class BookingResponse(BaseModel):
    id: str
    booking_code: Optional[str] = None
    tour_id: Optional[str] = None
    customer_id: Optional[str] = None
    customer_name: str
    customer_email: str
    customer_phone: Optional[str] = None
    people_count: int = 1
    start_date: Optional[date] = None
    message: Optional[str] = None
    status: str
    payment_status: Optional[str] = None
    total_price: Optional[float] = None
    admin_note: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
