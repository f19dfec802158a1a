import logging
import re
import urllib.parse
from typing import Optional, Tuple

logger = logging.getLogger(__name__)

markdown_image_pattern = re.compile(r"(!\[[^\]]*\]\(\s*<?)([^)\s>]+)")
html_image_pattern = re.compile(r"(<img\b[^>]*?\bsrc\s*=\s*[\"'])([^\"']+)", re.IGNORECASE)


def get_post_image_file(repo, post_id: str, filename: str) -> Tuple[Optional[bytes], Optional[str]]:
    """
    Read a raw file stored beside a post's markdown source
    """
    path = repo.resolve_file(post_id, filename)
    if path is None:
        logger.warning(f"Image not found: {post_id}/{filename}")
        return None, None

    try:
        image_data = path.read_bytes()
    except OSError as e:
        logger.error(f"Error reading image {post_id}/{filename}: {e}")
        return None, None

    return image_data, get_content_type_from_filename(filename)


def get_content_type_from_filename(filename: str) -> str:
    """
    Determine content type from file extension
    """
    filename = filename.lower()
    if filename.endswith((".jpg", ".jpeg")):
        return "image/jpeg"
    elif filename.endswith(".png"):
        return "image/png"
    elif filename.endswith(".gif"):
        return "image/gif"
    elif filename.endswith(".svg"):
        return "image/svg+xml"
    elif filename.endswith(".webp"):
        return "image/webp"
    else:
        return "application/octet-stream"


def is_relative_image_path(path: str) -> bool:
    if not path or path.startswith(("/", "#")):
        return False
    return not urllib.parse.urlsplit(path).scheme


def prefix_image_path(path: str, base_url: str) -> str:
    """
    Point a post-relative image path at the image-serving endpoint
    """
    if not is_relative_image_path(path):
        return path
    while path.startswith("./"):
        path = path[2:]
    return f"{base_url.rstrip('/')}/{path}"


def process_image_references(content: str, base_url: str) -> str:
    """
    Rewrite relative markdown and inline HTML image sources to use the image endpoint
    """

    def _rewrite(match: re.Match) -> str:
        return match.group(1) + prefix_image_path(match.group(2), base_url)

    content = markdown_image_pattern.sub(_rewrite, content)
    content = html_image_pattern.sub(_rewrite, content)
    return content
