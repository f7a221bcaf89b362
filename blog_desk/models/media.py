"""
Media upload models for blog-desk.

Covers and inline media are written to object storage under generated paths;
only the resulting public URL is kept on the post.
"""
import mimetypes
import os
import secrets
import time

from ..conf import blog_settings
from ..exceptions import ValidationError


def build_media_path(prefix, filename):
    """
    Generate a storage path for an uploaded file.

    The path is ``<prefix>/<millis>-<random>.<ext>`` where ``ext`` is the
    original extension lower-cased, or MEDIA_DEFAULT_EXTENSION if the file has
    none.
    """
    ext = os.path.splitext(filename or "")[1].lstrip(".").lower()
    if not ext:
        ext = blog_settings.MEDIA_DEFAULT_EXTENSION
    stamp = int(time.time() * 1000)
    token = secrets.token_hex(4)
    prefix = (prefix or "").strip("/")
    name = f"{stamp}-{token}.{ext}"
    return f"{prefix}/{name}" if prefix else name


class MediaFile:
    """
    A file about to be uploaded.

    Wraps a Django ``UploadedFile`` or any binary file-like object with a
    ``name``.
    """

    TYPE_CHOICES = [
        ("IMAGE", "Image"),
        ("VIDEO", "Video"),
        ("GIF", "GIF"),
        ("DOCUMENT", "Document"),
    ]

    def __init__(self, file_obj, name=None, content_type=None, size=None):
        self.file = file_obj
        self.name = name or os.path.basename(getattr(file_obj, "name", "") or "")
        self.content_type = (
            content_type
            or getattr(file_obj, "content_type", None)
            or mimetypes.guess_type(self.name)[0]
            or "application/octet-stream"
        ).lower()
        self.size = size if size is not None else getattr(file_obj, "size", None)

    def __str__(self):
        return f"{self.name} ({self.media_type})"

    @classmethod
    def wrap(cls, file_obj):
        if isinstance(file_obj, cls):
            return file_obj
        return cls(file_obj)

    @property
    def media_type(self):
        if self.content_type.startswith("image/gif"):
            return "GIF"
        if self.content_type.startswith("image/"):
            return "IMAGE"
        if self.content_type.startswith("video/"):
            return "VIDEO"
        return "DOCUMENT"

    @property
    def is_image(self):
        return self.media_type in ("IMAGE", "GIF")

    @property
    def is_video(self):
        return self.media_type == "VIDEO"

    def validate(self):
        """
        Reject files that are not an allowed image/video type or are too big.

        Raises:
            ValidationError: if the file cannot be uploaded
        """
        if self.content_type not in blog_settings.ALLOWED_MEDIA_TYPES:
            raise ValidationError(
                f"Only image or video uploads are allowed (got {self.content_type})."
            )
        max_bytes = blog_settings.MEDIA_MAX_SIZE_MB * 1024 * 1024
        if self.size is not None and self.size > max_bytes:
            raise ValidationError(
                f"File too large ({blog_settings.MEDIA_MAX_SIZE_MB} MB max)."
            )

    def build_path(self, prefix):
        return build_media_path(prefix, self.name)

    def open(self):
        """Return the underlying stream rewound to the start."""
        if hasattr(self.file, "seek"):
            self.file.seek(0)
        return self.file
