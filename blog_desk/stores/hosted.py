"""
Hosted table + object storage post store.

Rows live in a table exposed through a PostgREST-style REST interface; cover
images and inline media live in two buckets reached through the storage
service's S3-compatible API.
"""
import logging

import boto3
import requests
from botocore.exceptions import BotoCoreError, ClientError

from ..conf import blog_settings
from ..exceptions import (
    StoreUnavailable,
    StoreWriteError,
    UploadError,
    ValidationError,
)
from ..models import MediaFile, Post
from .base import PostStore

logger = logging.getLogger(__name__)


def _error_message(exc, default):
    """Pull the backend's message out of a failed response, if any."""
    response = getattr(exc, "response", None)
    if response is not None:
        try:
            body = response.json()
        except ValueError:
            body = None
        if isinstance(body, dict):
            for key in ("message", "error_description", "error", "hint"):
                if body.get(key):
                    return str(body[key])
    return default


class HostedPostStore(PostStore):
    """
    Posts in a hosted table, newest first; media in two public buckets.

    ``session`` and ``storage_client`` can be injected; by default a
    ``requests.Session`` and a boto3 S3 client are built from settings.
    """

    new_posts_first = True

    def __init__(
        self,
        base_url,
        api_key,
        table="blogs",
        session=None,
        storage_client=None,
        public_base=None,
        timeout=10,
        cache_control="max-age=3600",
    ):
        self.base_url = base_url.rstrip("/")
        self.table = table
        self.timeout = timeout
        self.cache_control = cache_control
        self.public_base = (
            public_base or f"{self.base_url}/storage/v1/object/public"
        ).rstrip("/")
        self.session = session or requests.Session()
        self.session.headers.update(
            {
                "apikey": api_key,
                "Authorization": f"Bearer {api_key}",
                "Content-Type": "application/json",
                "Accept": "application/json",
            }
        )
        self._storage_client = storage_client

    def __repr__(self):
        return f"HostedPostStore({self.base_url!r}, table={self.table!r})"

    @classmethod
    def from_settings(cls):
        return cls(
            base_url=blog_settings.HOSTED_URL,
            api_key=blog_settings.HOSTED_API_KEY,
            table=blog_settings.TABLE_NAME,
            public_base=blog_settings.STORAGE_PUBLIC_BASE or None,
            timeout=blog_settings.REQUEST_TIMEOUT,
            cache_control=blog_settings.CACHE_CONTROL,
        )

    @property
    def table_url(self):
        return f"{self.base_url}/rest/v1/{self.table}"

    @property
    def storage_client(self):
        if self._storage_client is None:
            self._storage_client = boto3.client(
                "s3",
                endpoint_url=blog_settings.STORAGE_URL,
                region_name=blog_settings.STORAGE_REGION,
                aws_access_key_id=blog_settings.STORAGE_ACCESS_KEY_ID,
                aws_secret_access_key=blog_settings.STORAGE_SECRET_ACCESS_KEY,
            )
        return self._storage_client

    def public_url(self, bucket, path):
        return f"{self.public_base}/{bucket}/{path.lstrip('/')}"

    def list_all(self):
        try:
            resp = self.session.get(
                self.table_url,
                params={"select": "*", "order": "date.desc"},
                timeout=self.timeout,
            )
            resp.raise_for_status()
            rows = resp.json()
            if not isinstance(rows, list):
                raise ValueError(f"Expected a list of rows, got {type(rows).__name__}")
            return [Post.from_record(row) for row in rows]
        except (requests.RequestException, ValueError, ValidationError) as e:
            message = _error_message(e, "Failed to load blogs")
            logger.error(f"Failed to load posts from {self.table_url}: {e}")
            raise StoreUnavailable(message) from e

    def create(self, post):
        payload = post.to_record()
        payload.pop("id", None)
        try:
            resp = self.session.post(
                self.table_url,
                json=[payload],
                headers={"Prefer": "return=representation"},
                timeout=self.timeout,
            )
            resp.raise_for_status()
            rows = resp.json()
        except (requests.RequestException, ValueError) as e:
            message = _error_message(e, "Failed to save blog")
            logger.error(f"Failed to insert post {post.slug!r}: {e}")
            raise StoreWriteError(message) from e

        if not isinstance(rows, list) or not rows:
            logger.error(f"Insert of post {post.slug!r} returned no row: {rows!r}")
            raise StoreWriteError("Failed to save blog")

        try:
            created = Post.from_record(rows[0])
        except ValidationError as e:
            logger.error(f"Insert of post {post.slug!r} returned a bad row: {e}")
            raise StoreWriteError("Failed to save blog") from e
        logger.info(f"Inserted post {created.id} ({created.slug})")
        return created

    def delete(self, post_id):
        try:
            resp = self.session.delete(
                self.table_url,
                params={"id": f"eq.{post_id}"},
                timeout=self.timeout,
            )
            resp.raise_for_status()
        except requests.RequestException as e:
            message = _error_message(e, "Failed to delete blog")
            logger.error(f"Failed to delete post {post_id}: {e}")
            raise StoreWriteError(message) from e

        logger.info(f"Deleted post {post_id}")

    def upload_media(self, bucket, file, path_prefix):
        media = MediaFile.wrap(file)
        media.validate()
        path = media.build_path(path_prefix)

        try:
            self.storage_client.upload_fileobj(
                media.open(),
                bucket,
                path,
                ExtraArgs={
                    "ContentType": media.content_type,
                    "CacheControl": self.cache_control,
                },
            )
        except (BotoCoreError, ClientError) as e:
            logger.exception(f"Upload of {media.name} to {bucket} failed")
            raise UploadError(f"Upload failed: {e}") from e

        url = self.public_url(bucket, path)
        logger.info(f"Uploaded {media.name} to {url}")
        return url
