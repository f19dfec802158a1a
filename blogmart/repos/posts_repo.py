import logging
from pathlib import Path
from typing import List, Optional

from blogmart.errors import StorageUnavailable

logger = logging.getLogger(__name__)

POST_SOURCE_FILENAME = "index.md"


class LocalPostsRepo:
    """Read-only view over a directory holding one subdirectory per post."""

    def __init__(self, root: Path):
        self.root = Path(root)

    def list_post_ids(self) -> List[str]:
        try:
            entries = sorted(self.root.iterdir(), key=lambda p: p.name)
        except OSError as e:
            logger.error(f"Failed to read directories under {self.root}: {e}")
            raise StorageUnavailable(self.root, e) from e
        return [entry.name for entry in entries if entry.is_dir()]

    def read_post_source(self, post_id: str) -> str:
        post_dir = self._post_dir(post_id)
        if post_dir is None:
            raise FileNotFoundError(post_id)
        return (post_dir / POST_SOURCE_FILENAME).read_text(encoding="utf-8")

    def resolve_file(self, post_id: str, filename: str) -> Optional[Path]:
        """Return the path of a file inside the post directory, or None."""
        post_dir = self._post_dir(post_id)
        if post_dir is None:
            return None
        path = (post_dir / filename).resolve()
        if not path.is_relative_to(post_dir) or not path.is_file():
            return None
        return path

    def _post_dir(self, post_id: str) -> Optional[Path]:
        root = self.root.resolve()
        post_dir = (root / post_id).resolve()
        if post_dir.parent != root:
            logger.warning(f"Rejected post id outside posts root: {post_id!r}")
            return None
        return post_dir
