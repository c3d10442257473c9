import logging
from datetime import datetime, timezone
from supabase import Client
from app.core.slug import generate_slug
from app.modules.blog.schemas import PostCreate, PostUpdate, PostResponse
from typing import List, Optional
from fastapi import HTTPException

logger = logging.getLogger(__name__)


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class BlogService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def list_posts(
        self,
        status: Optional[str] = None,
        category: Optional[str] = None,
        search: Optional[str] = None,
        limit: int = 20,
        offset: int = 0
    ) -> List[PostResponse]:
        try:
            query = self.supabase.table("blog_posts").select("*")
            if status:
                query = query.eq("status", status)
            if category:
                query = query.eq("category", category)
            if search:
                query = query.ilike("title", f"%{search}%")
            result = query.order("created_at", desc=True)\
                .limit(limit)\
                .offset(offset)\
                .execute()
            return [PostResponse(**p) for p in result.data or []]
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def get_post(self, post_id: str) -> PostResponse:
        try:
            result = self.supabase.table("blog_posts")\
                .select("*")\
                .eq("id", post_id)\
                .limit(1)\
                .execute()
            if not result.data:
                raise HTTPException(status_code=404, detail="Post not found")
            return PostResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def create_post(self, data: PostCreate, user_id: str) -> PostResponse:
        try:
            payload = data.model_dump(exclude_none=True)
            payload["slug"] = data.slug or generate_slug(data.title)
            payload["author_id"] = user_id
            if data.status == "published":
                payload["published_at"] = _now()
            result = self.supabase.table("blog_posts").insert(payload).execute()
            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to create post")
            logger.info(f"Post {result.data[0]['id']} created by {user_id}")
            return PostResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def _update(self, post_id: str, payload: dict) -> PostResponse:
        try:
            result = self.supabase.table("blog_posts")\
                .update(payload)\
                .eq("id", post_id)\
                .execute()
            if not result.data:
                raise HTTPException(status_code=404, detail="Post not found")
            return PostResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def update_post(self, post_id: str, data: PostUpdate) -> PostResponse:
        payload = data.model_dump(exclude_unset=True)
        if not payload:
            return self.get_post(post_id)
        if payload.get("status") == "published":
            return self.set_published(post_id, True, extra=payload)
        return self._update(post_id, payload)

    def set_published(self, post_id: str, published: bool, extra: Optional[dict] = None) -> PostResponse:
        """Publish or unpublish; published_at is kept from the first publish"""
        payload = dict(extra or {})
        payload["status"] = "published" if published else "draft"
        if published and not self.get_post(post_id).published_at:
            payload["published_at"] = _now()
        return self._update(post_id, payload)

    def delete_post(self, post_id: str) -> bool:
        try:
            result = self.supabase.table("blog_posts")\
                .delete()\
                .eq("id", post_id)\
                .execute()
            if not result.data:
                raise HTTPException(status_code=404, detail="Post not found")
            return True
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))
