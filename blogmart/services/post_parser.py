import logging
import re
from typing import List

import frontmatter
import markdown
from frontmatter.default_handlers import BaseHandler

from blogmart.schemas.blog import Post
from blogmart.services.image_service import prefix_image_path, process_image_references

logger = logging.getLogger(__name__)

METADATA_KEYS = ("title", "date", "thumbnail", "tags", "categories")
METADATA_LIST_DELIMITER = ","
MARKDOWN_EXTENSIONS = ["fenced_code", "tables"]


class KeyLineHandler(BaseHandler):
    """Front-matter handler that reads ``key: value`` lines as raw text.

    Only the fixed post keys are picked up; the first occurrence of a key
    wins and everything after ``key:`` is kept verbatim (stripped).
    """

    FM_BOUNDARY = re.compile(r"^-{3,}\s*$", re.MULTILINE)
    START_DELIMITER = END_DELIMITER = "---"

    def __init__(self, keys=METADATA_KEYS):
        super().__init__()
        self.keys = tuple(keys)

    def load(self, fm: str, **kwargs) -> dict:
        metadata = {}
        for line in fm.splitlines():
            line = line.strip()
            for key in self.keys:
                if key not in metadata and line.startswith(f"{key}:"):
                    metadata[key] = line[len(key) + 1 :].strip()
        return metadata


def parse_post_content(post_id: str, content: str, image_url_prefix: str) -> Post:
    """Convert the markdown source of a post into a Post.

    Front-matter keys ``title``, ``date``, ``thumbnail``, ``tags`` and
    ``categories`` are read; anything missing comes back empty. Image paths in
    the body and the thumbnail are rewritten under
    ``<image_url_prefix>/<post_id>/``.
    """
    parsed = frontmatter.loads(content, handler=KeyLineHandler())
    metadata = parsed.metadata or {}
    base_url = f"{image_url_prefix.rstrip('/')}/{post_id}"

    thumbnail = metadata_value(metadata, "thumbnail")
    return Post(
        id=post_id,
        title=metadata_value(metadata, "title"),
        date=metadata_value(metadata, "date"),
        thumbnail=prefix_image_path(thumbnail, base_url) if thumbnail else None,
        tags=metadata_list(metadata, "tags"),
        categories=metadata_list(metadata, "categories"),
        article=render_article(parsed.content, base_url),
    )


def render_article(body: str, base_url: str) -> str:
    processed = process_image_references(body, base_url)
    logger.debug(f"Processed content after image processing: {processed}")
    return markdown.markdown(processed, extensions=MARKDOWN_EXTENSIONS)


def metadata_value(metadata: dict, key: str) -> str:
    value = metadata.get(key)
    if value is None:
        return ""
    return _unquote(str(value).strip())


def metadata_list(metadata: dict, key: str) -> List[str]:
    value = metadata_value(metadata, key)
    if value.startswith("[") and value.endswith("]"):
        value = value[1:-1]
    items = (_unquote(item.strip()) for item in value.split(METADATA_LIST_DELIMITER))
    return [item for item in items if item]


def _unquote(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in "\"'":
        return value[1:-1]
    return value
