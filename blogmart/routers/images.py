import logging

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import Response

from blogmart import dependencies as deps
from blogmart.services.posts_service import PostsService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/api/post/img/{post_id}/{filename:path}")
def get_image(
    post_id: str,
    filename: str,
    service: PostsService = Depends(deps.get_posts_service),
):
    """
    Serve files stored beside a post's markdown source
    """
    image_data, content_type = service.get_post_image_file(post_id, filename)

    if image_data is None or not content_type:
        raise HTTPException(status_code=404, detail="Image not found")

    headers = {
        "Content-Length": str(len(image_data)),
        "Accept-Ranges": "bytes",
    }

    return Response(content=image_data, media_type=content_type, headers=headers)
