import textwrap
from pathlib import Path

from blogmart.errors import StorageUnavailable


class FakeRepo:
    """
    Minimal in-memory posts storage stand-in.
    A source given as an Exception instance is raised when read.
    """

    def __init__(self, sources: dict, files: dict | None = None, list_error=None):
        self.sources = sources
        self.files = files or {}
        self.list_error = list_error
        self.list_calls = 0

    def list_post_ids(self):
        self.list_calls += 1
        if self.list_error is not None:
            raise StorageUnavailable("fake-root", self.list_error)
        return list(self.sources)

    def read_post_source(self, post_id: str) -> str:
        if post_id not in self.sources:
            raise FileNotFoundError(post_id)
        source = self.sources[post_id]
        if isinstance(source, Exception):
            raise source
        return textwrap.dedent(source).lstrip()

    def resolve_file(self, post_id: str, filename: str):
        return self.files.get((post_id, filename))


def make_post_source(
    title: str = "",
    date: str = "",
    tags: str | None = None,
    categories: str | None = None,
    thumbnail: str | None = None,
    body: str = "",
) -> str:
    lines = ["---"]
    if title:
        lines.append(f"title: {title}")
    if date:
        lines.append(f"date: {date}")
    if thumbnail:
        lines.append(f"thumbnail: {thumbnail}")
    if tags is not None:
        lines.append(f"tags: {tags}")
    if categories is not None:
        lines.append(f"categories: {categories}")
    lines.append("---")
    lines.append(body)
    return "\n".join(lines) + "\n"


def write_post(root: Path, post_id: str, source: str) -> Path:
    post_dir = root / post_id
    post_dir.mkdir(parents=True, exist_ok=True)
    (post_dir / "index.md").write_text(source, encoding="utf-8")
    return post_dir


class FakePostsService:
    """
    Minimal posts service stand-in for router tests.
    """

    def __init__(
        self,
        posts_response=None,
        load_result=None,
        related=None,
        ids=None,
        categories=None,
        tags=None,
        image=(None, None),
        error: Exception | None = None,
    ):
        self.posts_response = posts_response
        self.load_result = load_result
        self.related = related or []
        self.ids = ids or []
        self.categories = categories or []
        self.tags = tags or []
        self.image = image
        self.error = error
        self.calls = []

    def _maybe_raise(self):
        if self.error is not None:
            raise self.error

    def get_posts(self, page=None, category=None, tag=None, search_query=None):
        self.calls.append(("get_posts", page, category, tag, search_query))
        self._maybe_raise()
        return self.posts_response

    def load_post(self, post_id):
        self.calls.append(("load_post", post_id))
        return self.load_result

    def get_related_posts(self, post):
        self.calls.append(("get_related_posts", post.id))
        self._maybe_raise()
        return self.related

    def get_post_ids(self):
        self._maybe_raise()
        return self.ids

    def get_category_list(self):
        self._maybe_raise()
        return self.categories

    def get_tag_list(self):
        self._maybe_raise()
        return self.tags

    def get_post_image_file(self, post_id, filename):
        self.calls.append(("get_post_image_file", post_id, filename))
        return self.image
