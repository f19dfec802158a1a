import logging
import random
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional, Tuple

from blogmart.errors import PostReadFailure
from blogmart.schemas.blog import Category, Post, PostResponse, Tag
from blogmart.services.image_service import get_post_image_file
from blogmart.services.post_parser import parse_post_content
from blogmart.settings import settings

logger = logging.getLogger(__name__)

FULL_WIDTH_SPACE = "　"


class PostLoadStatus(str, Enum):
    FOUND = "found"
    NOT_FOUND = "not_found"
    READ_FAILED = "read_failed"


@dataclass(frozen=True)
class PostLoadResult:
    post_id: str
    status: PostLoadStatus
    post: Optional[Post] = None
    error: Optional[PostReadFailure] = None


class PostsService:
    def __init__(
        self,
        repo,
        page_size: Optional[int] = None,
        related_count: Optional[int] = None,
        image_url_prefix: Optional[str] = None,
        rng: Optional[random.Random] = None,
    ):
        self.repo = repo
        self.page_size = settings.POSTS_PER_PAGE if page_size is None else page_size
        self.related_count = (
            settings.RELATED_ARTICLES_COUNT if related_count is None else related_count
        )
        self.image_url_prefix = image_url_prefix or settings.IMAGE_URL_PREFIX
        self.rng = rng or random.Random()

    def get_posts(
        self,
        page: Optional[int] = None,
        category: Optional[str] = None,
        tag: Optional[str] = None,
        search_query: Optional[str] = None,
    ) -> PostResponse:
        """Return one page of posts, filtered by the first of category, tag or search that is set."""
        posts = self._get_all_posts()

        if category:
            posts = filter_by_category(posts, category)
        elif tag:
            posts = filter_by_tag(posts, tag)
        elif search_query:
            posts = search_posts(posts, search_query)

        return PostResponse(
            posts=paginate(posts, page, self.page_size), totalCount=len(posts)
        )

    def get_post_by_id(self, post_id: str) -> Optional[Post]:
        return self.load_post(post_id).post

    def load_post(self, post_id: str) -> PostLoadResult:
        try:
            content = self.repo.read_post_source(post_id)
        except FileNotFoundError:
            logger.warning(f"Post source not found: {post_id}")
            return PostLoadResult(post_id, PostLoadStatus.NOT_FOUND)
        except (OSError, ValueError) as e:
            return _read_failed(post_id, e)

        try:
            post = parse_post_content(post_id, content, self.image_url_prefix)
        except Exception as e:
            return _read_failed(post_id, e)

        return PostLoadResult(post_id, PostLoadStatus.FOUND, post=post)

    def get_post_ids(self) -> List[str]:
        return self.repo.list_post_ids()

    def get_category_list(self) -> List[Category]:
        counts = count_names(post.categories for post in self._get_all_posts())
        return [Category(name=name, count=count) for name, count in counts]

    def get_tag_list(self) -> List[Tag]:
        counts = count_names(post.tags for post in self._get_all_posts())
        return [Tag(name=name, count=count) for name, count in counts]

    def get_related_posts(self, post: Post) -> List[Post]:
        """Posts sharing a category or tag with ``post``, shuffled and truncated."""
        all_posts = self._get_all_posts()
        related: List[Post] = []
        seen = {post.id}

        for names, attr in ((post.categories, "categories"), (post.tags, "tags")):
            for name in names:
                for candidate in all_posts:
                    if candidate.id not in seen and name in getattr(candidate, attr):
                        related.append(candidate)
                        seen.add(candidate.id)

        self.rng.shuffle(related)
        return related[: self.related_count]

    def get_post_image_file(
        self, post_id: str, filename: str
    ) -> Tuple[Optional[bytes], Optional[str]]:
        return get_post_image_file(self.repo, post_id, filename)

    def _get_all_posts(self) -> List[Post]:
        posts = []
        for post_id in self.repo.list_post_ids():
            post = self.get_post_by_id(post_id)
            if post is not None:
                posts.append(post)
        return sort_by_date(posts)


def _read_failed(post_id: str, cause: Exception) -> PostLoadResult:
    failure = PostReadFailure(post_id, cause)
    logger.error(str(failure))
    return PostLoadResult(post_id, PostLoadStatus.READ_FAILED, error=failure)


def sort_by_date(posts: List[Post]) -> List[Post]:
    # Undated posts go last; ties keep loader order.
    return sorted(posts, key=lambda p: p.date or "0000-01-01", reverse=True)


def filter_by_category(posts: List[Post], category: str) -> List[Post]:
    return [post for post in posts if category in post.categories]


def filter_by_tag(posts: List[Post], tag: str) -> List[Post]:
    return [post for post in posts if tag in post.tags]


def split_search_terms(search_query: str) -> List[str]:
    # Every full-width space is normalised, not only the first one.
    return search_query.lower().replace(FULL_WIDTH_SPACE, " ").split(" ")


def search_posts(posts: List[Post], search_query: str) -> List[Post]:
    """Keep posts whose title, or whose article, contains every search term."""
    terms = split_search_terms(search_query)

    def _contains_all(text: str) -> bool:
        text = text.lower()
        return all(term in text for term in terms)

    return [
        post for post in posts if _contains_all(post.title) or _contains_all(post.article)
    ]


def paginate(posts: List[Post], page: Optional[int], page_size: int) -> List[Post]:
    if page is None:
        page = 1
    start_index = (page - 1) * page_size
    end_index = page * page_size
    return posts[start_index:end_index]


def count_names(name_lists: Iterable[Iterable[str]]) -> List[Tuple[str, int]]:
    counts: dict = {}
    for names in name_lists:
        for name in names:
            counts[name] = counts.get(name, 0) + 1
    return list(counts.items())
