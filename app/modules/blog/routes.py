from fastapi import APIRouter, Depends
from app.database.supabase_client import get_service_supabase
from app.modules.blog.schemas import PostCreate, PostUpdate, PostPublish, PostResponse
from app.modules.blog.service import BlogService
from app.modules.rbac.gate import AccessGate
from app.core.dependencies import require_permission, get_access_gate
from supabase import Client
from typing import List, Optional, Dict

router = APIRouter(prefix="/posts", tags=["blog"])


def get_blog_service(supabase: Client = Depends(get_service_supabase)) -> BlogService:
    return BlogService(supabase)


@router.get("", response_model=List[PostResponse])
async def list_posts(
    status: Optional[str] = None,
    category: Optional[str] = None,
    search: Optional[str] = None,
    limit: int = 20,
    offset: int = 0,
    user_data: Dict = Depends(require_permission("view_posts")),
    service: BlogService = Depends(get_blog_service)
):
    """List blog posts, newest first"""
    return service.list_posts(status=status, category=category, search=search, limit=limit, offset=offset)


@router.get("/{post_id}", response_model=PostResponse)
async def get_post(
    post_id: str,
    user_data: Dict = Depends(require_permission("view_posts")),
    service: BlogService = Depends(get_blog_service)
):
    return service.get_post(post_id)


@router.post("", response_model=PostResponse, status_code=201)
async def create_post(
    post_data: PostCreate,
    user_data: Dict = Depends(require_permission("create_posts")),
    gate: AccessGate = Depends(get_access_gate),
    service: BlogService = Depends(get_blog_service)
):
    """Create post; creating it already published also needs publish_posts"""
    if post_data.status == "published":
        gate.require_permission(user_data["id"], "publish_posts")
    return service.create_post(post_data, user_data["id"])


@router.put("/{post_id}", response_model=PostResponse)
async def update_post(
    post_id: str,
    post_data: PostUpdate,
    user_data: Dict = Depends(require_permission("edit_posts")),
    gate: AccessGate = Depends(get_access_gate),
    service: BlogService = Depends(get_blog_service)
):
    """Update post; touching status also needs publish_posts"""
    if "status" in post_data.model_fields_set:
        gate.require_permission(user_data["id"], "publish_posts")
    return service.update_post(post_id, post_data)


@router.patch("/{post_id}/publish", response_model=PostResponse)
async def publish_post(
    post_id: str,
    publish_data: PostPublish,
    user_data: Dict = Depends(require_permission("publish_posts")),
    service: BlogService = Depends(get_blog_service)
):
    """Publish or unpublish a post"""
    return service.set_published(post_id, publish_data.published)


@router.delete("/{post_id}", status_code=204)
async def delete_post(
    post_id: str,
    user_data: Dict = Depends(require_permission("delete_posts")),
    service: BlogService = Depends(get_blog_service)
):
    service.delete_post(post_id)
    return None
