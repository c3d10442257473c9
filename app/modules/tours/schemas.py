from pydantic import BaseModel, Field, model_validator
from typing import Optional, List, Any, Literal
from datetime import datetime

TourStatus = Literal["draft", "published", "archived"]


class TourBase(BaseModel):
    description: Optional[str] = None
    short_description: Optional[str] = None
    duration_days: Optional[int] = Field(None, ge=0)
    duration_nights: Optional[int] = Field(None, ge=0)
    price_adult: Optional[float] = Field(None, ge=0)
    price_child: Optional[float] = Field(None, ge=0)
    currency: Optional[str] = None
    featured_image: Optional[str] = None
    gallery_images: Optional[List[str]] = None
    itinerary: Optional[List[Any]] = None
    includes: Optional[List[str]] = None
    excludes: Optional[List[str]] = None


class TourCreate(TourBase):
    title: str = Field(..., min_length=1)
    slug: Optional[str] = None
    currency: Optional[str] = "USD"
    status: TourStatus = "draft"
    featured: bool = False
    destination_ids: Optional[List[str]] = None


class TourUpdate(TourBase):
    title: Optional[str] = Field(None, min_length=1)
    slug: Optional[str] = None
    featured: Optional[bool] = None
    destination_ids: Optional[List[str]] = None

    @model_validator(mode="after")
    def reject_null_required(self):
        for field in ("title", "slug", "featured"):
            if field in self.model_fields_set and getattr(self, field) is None:
                raise ValueError(f"{field} cannot be null")
        return self


class TourStatusUpdate(BaseModel):
    status: TourStatus


class TourFeaturedUpdate(BaseModel):
    featured: Optional[bool] = None  # None toggles the current value


class TourResponse(TourBase):
    id: str
    title: str
    slug: str
    status: str
    featured: bool = False
    destination_ids: List[str] = Field(default_factory=list)
    created_by: Optional[str] = None
    updated_by: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
