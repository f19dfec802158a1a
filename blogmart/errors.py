class BlogmartError(Exception):
    """Base class for errors raised by blogmart services."""


class StorageUnavailable(BlogmartError):
    """The posts root directory could not be listed."""

    def __init__(self, path, cause: Exception | None = None):
        self.path = path
        self.cause = cause
        super().__init__(f"Failed to read directories under {path}")


class PostReadFailure(BlogmartError):
    """A single post source could not be read or parsed."""

    def __init__(self, post_id: str, cause: Exception | None = None):
        self.post_id = post_id
        self.cause = cause
        super().__init__(f"Failed to read post {post_id}: {cause}")


class ItemNotFound(BlogmartError):
    def __init__(self, item_id: str):
        self.item_id = item_id
        super().__init__(f"Item not found: {item_id}")
