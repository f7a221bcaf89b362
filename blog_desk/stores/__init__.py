"""
Post stores for blog-desk.

    from blog_desk.stores import get_store
"""
from ..conf import blog_settings
from .base import PostStore
from .file import JsonFilePostStore
from .hosted import HostedPostStore

BACKENDS = {
    "file": lambda: JsonFilePostStore(blog_settings.JSON_FILE_PATH),
    "hosted": HostedPostStore.from_settings,
}


def get_store():
    """Build the store named by the STORE_BACKEND setting."""
    backend = blog_settings.STORE_BACKEND
    try:
        factory = BACKENDS[backend]
    except KeyError:
        raise ValueError(f"Unknown blog_desk STORE_BACKEND: {backend!r}") from None
    return factory()


__all__ = [
    "PostStore",
    "JsonFilePostStore",
    "HostedPostStore",
    "get_store",
]
