from pydantic import BaseModel, Field, model_validator
from typing import Optional, Literal
from datetime import datetime

TestimonialStatus = Literal["draft", "published", "archived"]


class TestimonialCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    role: Optional[str] = None
    content: str = Field(..., min_length=1)
    rating: int = Field(5, ge=1, le=5)
    avatar_url: Optional[str] = None
    status: TestimonialStatus = "draft"
    display_order: int = 0


class TestimonialUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    role: Optional[str] = None
    content: Optional[str] = Field(None, min_length=1)
    rating: Optional[int] = Field(None, ge=1, le=5)
    avatar_url: Optional[str] = None
    status: Optional[TestimonialStatus] = None
    display_order: Optional[int] = None

    @model_validator(mode="after")
    def reject_null_required(self):
        for field in ("name", "content", "rating", "status", "display_order"):
            if field in self.model_fields_set and getattr(self, field) is None:
                raise ValueError(f"{field} cannot be null")
        return self


class TestimonialResponse(BaseModel):
    id: str
    name: str
    role: Optional[str] = None
    content: str
    rating: int = 5
    avatar_url: Optional[str] = None
    status: str
    display_order: int = 0
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
