from pydantic import BaseModel, Field, model_validator
from typing import Optional, List, Literal
from datetime import datetime

DestinationStatus = Literal["draft", "published", "archived"]


class DestinationBase(BaseModel):
    description: Optional[str] = None
    short_description: Optional[str] = None
    country: Optional[str] = None
    region: Optional[str] = None
    image_url: Optional[str] = None
    gallery_images: Optional[List[str]] = None
    highlights: Optional[List[str]] = None
    best_time_to_visit: Optional[str] = None


class DestinationCreate(DestinationBase):
    name: str = Field(..., min_length=1)
    slug: Optional[str] = None
    status: DestinationStatus = "draft"
    featured: bool = False


class DestinationUpdate(DestinationBase):
    name: Optional[str] = Field(None, min_length=1)
    slug: Optional[str] = None
    status: Optional[DestinationStatus] = None
    featured: Optional[bool] = None

    @model_validator(mode="after")
    def reject_null_required(self):
        for field in ("name", "slug", "status", "featured"):
            if field in self.model_fields_set and getattr(self, field) is None:
                raise ValueError(f"{field} cannot be null")
        return self


class DestinationResponse(DestinationBase):
    id: str
    name: str
    slug: str
    status: str
    featured: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
