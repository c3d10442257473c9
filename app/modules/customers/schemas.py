from pydantic import BaseModel, EmailStr, Field, field_validator, model_validator
from typing import Optional, List
from datetime import datetime, date


class CustomerBase(BaseModel):
    phone: Optional[str] = Field(None, max_length=50)
    nationality: Optional[str] = None
    date_of_birth: Optional[date] = None
    passport_number: Optional[str] = None
    address: Optional[str] = None
    notes: Optional[str] = None


def _clean_tags(tags):
    if tags is None:
        return None
    if isinstance(tags, str):
        tags = tags.split(",")
    return [t.strip() for t in tags if t and t.strip()]


class CustomerCreate(CustomerBase):
    fullname: str = Field(..., min_length=1, max_length=200)
    email: EmailStr
    tags: List[str] = Field(default_factory=list)

    @field_validator("tags", mode="before")
    @classmethod
    def split_tags(cls, v):
        return _clean_tags(v) or []


class CustomerUpdate(CustomerBase):
    fullname: Optional[str] = Field(None, min_length=1, max_length=200)
    email: Optional[EmailStr] = None
    tags: Optional[List[str]] = None

    @field_validator("tags", mode="before")
    @classmethod
    def split_tags(cls, v):
        return _clean_tags(v)

    @model_validator(mode="after")
    def reject_null_required(self):
        for field in ("fullname", "email"):
            if field in self.model_fields_set and getattr(self, field) is None:
                raise ValueError(f"{field} cannot be null")
        return self


class CustomerResponse(CustomerBase):
    id: str
    fullname: str
    email: str
    tags: List[str] = Field(default_factory=list)
    booking_count: int = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator("tags", mode="before")
    @classmethod
    def default_tags(cls, v):
        return v or []

    class Config:
        from_attributes = True
