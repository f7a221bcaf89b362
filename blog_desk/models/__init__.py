"""
Models for blog-desk.

All models are importable from blog_desk.models:

    from blog_desk.models import Post, PostDraft, PostField, MediaFile
"""
from .posts import Post, PostDraft, PostField, REQUIRED_FIELDS, parse_date
from .media import MediaFile, build_media_path

__all__ = [
    # Posts
    "Post",
    "PostDraft",
    "PostField",
    "REQUIRED_FIELDS",
    "parse_date",
    # Media
    "MediaFile",
    "build_media_path",
]
