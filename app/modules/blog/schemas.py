from pydantic import BaseModel, Field, model_validator
from typing import Optional, List, Literal
from datetime import datetime

PostStatus = Literal["draft", "published"]


class PostBase(BaseModel):
    excerpt: Optional[str] = None
    content: Optional[str] = None
    cover_image: Optional[str] = None
    category: Optional[str] = None
    tags: Optional[List[str]] = None
    meta_title: Optional[str] = None
    meta_description: Optional[str] = None


class PostCreate(PostBase):
    title: str = Field(..., min_length=1)
    slug: Optional[str] = None
    status: PostStatus = "draft"
    featured: bool = False


class PostUpdate(PostBase):
    title: Optional[str] = Field(None, min_length=1)
    slug: Optional[str] = None
    status: Optional[PostStatus] = None
    featured: Optional[bool] = None

    @model_validator(mode="after")
    def reject_null_required(self):
        for field in ("title", "slug", "status", "featured"):
            if field in self.model_fields_set and getattr(self, field) is None:
                raise ValueError(f"{field} cannot be null")
        return self


class PostPublish(BaseModel):
    published: bool = True


class PostResponse(PostBase):
    id: str
    title: str
    slug: str
    status: str
    featured: bool = False
    published_at: Optional[datetime] = None
    author_id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
