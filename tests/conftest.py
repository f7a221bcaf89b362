"""
Shared fixtures for blog-desk tests.
"""
import datetime
import json
from unittest.mock import MagicMock

import pytest

from blog_desk.models import Post
from blog_desk.stores import JsonFilePostStore, PostStore


@pytest.fixture
def posts_file(tmp_path, settings):
    """Empty JSON array file wired in as the configured file store."""
    path = tmp_path / "data" / "blogPosts.json"
    path.parent.mkdir()
    path.write_text("[]", encoding="utf-8")
    settings.BLOG_DESK = {
        "STORE_BACKEND": "file",
        "JSON_FILE_PATH": str(path),
    }
    return path


@pytest.fixture
def file_store(posts_file):
    return JsonFilePostStore(posts_file)


@pytest.fixture
def read_records(posts_file):
    """Return what is currently on disk."""

    def _read():
        return json.loads(posts_file.read_text(encoding="utf-8"))

    return _read


@pytest.fixture
def mock_store():
    """PostStore double; hosted ordering by default."""
    store = MagicMock(spec=PostStore)
    store.new_posts_first = True
    store.list_all.return_value = []
    return store


@pytest.fixture
def make_post():
    def _make(post_id=None, title="Test Post", category="News", date=None, **kwargs):
        return Post(
            id=post_id,
            title=title,
            slug=kwargs.pop("slug", title.lower().replace(" ", "-")),
            content=kwargs.pop("content", "This is a test post body."),
            category=category,
            author=kwargs.pop("author", "Ann"),
            date=date or datetime.date(2024, 1, 1),
            **kwargs,
        )

    return _make
