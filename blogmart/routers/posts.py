import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from blogmart import dependencies as deps
from blogmart.errors import StorageUnavailable
from blogmart.schemas.blog import Category, Post, PostResponse, Tag
from blogmart.services.posts_service import PostLoadStatus, PostsService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/post")


@router.get("", response_model=PostResponse)
def list_posts(
    page: int = Query(1, ge=1),
    category: Optional[str] = None,
    tag: Optional[str] = None,
    search_query: Optional[str] = Query(None, alias="q"),
    service: PostsService = Depends(deps.get_posts_service),
):
    """Get one page of posts, optionally filtered."""
    try:
        return service.get_posts(page, category, tag, search_query)
    except HTTPException:
        raise
    except StorageUnavailable as e:
        logger.error(f"Posts storage unavailable: {e}")
        raise HTTPException(status_code=503, detail="Posts storage unavailable")
    except Exception as e:
        logger.error(f"Unexpected error listing posts: {e}")
        raise HTTPException(status_code=500, detail="Failed to retrieve posts")


@router.get("/ids", response_model=List[str])
def list_post_ids(service: PostsService = Depends(deps.get_posts_service)):
    try:
        return service.get_post_ids()
    except StorageUnavailable as e:
        logger.error(f"Posts storage unavailable: {e}")
        raise HTTPException(status_code=503, detail="Posts storage unavailable")


@router.get("/categories", response_model=List[Category])
def list_categories(service: PostsService = Depends(deps.get_posts_service)):
    try:
        return service.get_category_list()
    except StorageUnavailable as e:
        logger.error(f"Posts storage unavailable: {e}")
        raise HTTPException(status_code=503, detail="Posts storage unavailable")


@router.get("/tags", response_model=List[Tag])
def list_tags(service: PostsService = Depends(deps.get_posts_service)):
    try:
        return service.get_tag_list()
    except StorageUnavailable as e:
        logger.error(f"Posts storage unavailable: {e}")
        raise HTTPException(status_code=503, detail="Posts storage unavailable")


@router.get("/{post_id}", response_model=Post)
def get_post(
    post_id: str,
    service: PostsService = Depends(deps.get_posts_service),
):
    """Get a single post by id."""
    return _load_or_raise(service, post_id)


@router.get("/{post_id}/related", response_model=List[Post])
def get_related_posts(
    post_id: str,
    service: PostsService = Depends(deps.get_posts_service),
):
    post = _load_or_raise(service, post_id)
    try:
        return service.get_related_posts(post)
    except StorageUnavailable as e:
        logger.error(f"Posts storage unavailable: {e}")
        raise HTTPException(status_code=503, detail="Posts storage unavailable")


def _load_or_raise(service: PostsService, post_id: str) -> Post:
    result = service.load_post(post_id)
    if result.status == PostLoadStatus.NOT_FOUND:
        raise HTTPException(status_code=404, detail="Post not found")
    if result.status == PostLoadStatus.READ_FAILED:
        raise HTTPException(status_code=500, detail="Failed to retrieve post")
    return result.post
