"""
Flat JSON file post store.

The whole array is read on every call and rewritten on every write.
"""
import json
import logging
import os
import tempfile
import time
from pathlib import Path

from ..exceptions import (
    StoreUnavailable,
    StoreWriteError,
    UploadError,
    ValidationError,
)
from ..models import Post
from .base import PostStore

logger = logging.getLogger(__name__)


class JsonFilePostStore(PostStore):
    """Posts kept in insertion order in a single JSON array file."""

    new_posts_first = False

    def __init__(self, path):
        self.path = Path(path)

    def __repr__(self):
        return f"JsonFilePostStore({str(self.path)!r})"

    def _read_records(self):
        with self.path.open(encoding="utf-8") as fh:
            records = json.load(fh)
        if not isinstance(records, list):
            raise ValueError(f"{self.path} does not contain a JSON array")
        if not all(isinstance(record, dict) for record in records):
            raise ValueError(f"{self.path} contains entries that are not objects")
        return records

    def _write_records(self, records):
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(records, fh, indent=2, ensure_ascii=False)
            os.replace(tmp_name, self.path)
        except BaseException:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise

    def list_all(self):
        try:
            return [Post.from_record(record) for record in self._read_records()]
        except (OSError, ValueError, ValidationError) as e:
            logger.error(f"Failed to load posts from {self.path}: {e}")
            raise StoreUnavailable("Failed to load blogs") from e

    @staticmethod
    def _next_id(records):
        post_id = int(time.time() * 1000)
        ids = [r["id"] for r in records if isinstance(r.get("id"), int)]
        if ids and post_id <= max(ids):
            post_id = max(ids) + 1
        return post_id

    def create(self, post):
        try:
            records = self._read_records()
            if post.id is None:
                post = post.with_id(self._next_id(records))
            records.append(post.to_record())
            self._write_records(records)
        except (OSError, ValueError) as e:
            logger.error(f"Failed to save post {post.slug!r} to {self.path}: {e}")
            raise StoreWriteError("Failed to save blog") from e

        logger.info(f"Saved post {post.id} ({post.slug}) to {self.path}")
        return post

    def delete(self, post_id):
        try:
            records = self._read_records()
            remaining = [r for r in records if r.get("id") != post_id]
            if len(remaining) == len(records):
                return
            self._write_records(remaining)
        except (OSError, ValueError) as e:
            logger.error(f"Failed to delete post {post_id} from {self.path}: {e}")
            raise StoreWriteError("Failed to delete blog") from e

        logger.info(f"Deleted post {post_id} from {self.path}")

    def upload_media(self, bucket, file, path_prefix):
        raise UploadError("Media uploads are not configured for the file store.")
