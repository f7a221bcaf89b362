"""
Configuration settings for blog-desk.

Override these in your Django settings.py:

    BLOG_DESK = {
        'STORE_BACKEND': 'hosted',
        'HOSTED_URL': 'https://project.example.co',
        'HOSTED_API_KEY': '...',
        ...
    }

The file backend only needs a path:

    BLOG_DESK = {
        'STORE_BACKEND': 'file',
        'JSON_FILE_PATH': BASE_DIR / 'data' / 'blogPosts.json',
    }
"""
from django.conf import settings

DEFAULTS = {
    # Storage backend: "file" (flat JSON array) or "hosted" (table + buckets)
    "STORE_BACKEND": "file",
    "JSON_FILE_PATH": "data/blogPosts.json",

    # Hosted table
    "HOSTED_URL": "",
    "HOSTED_API_KEY": "",
    "TABLE_NAME": "blogs",
    "REQUEST_TIMEOUT": 10,

    # Object storage buckets
    "COVER_BUCKET": "blog-images",
    "INLINE_BUCKET": "blog-media",
    "COVER_PATH_PREFIX": "blogs",
    "INLINE_PATH_PREFIX": "inline",
    "STORAGE_ENDPOINT": "",
    "STORAGE_REGION": "auto",
    "STORAGE_ACCESS_KEY_ID": "",
    "STORAGE_SECRET_ACCESS_KEY": "",
    "STORAGE_PUBLIC_BASE": "",
    "CACHE_CONTROL": "max-age=3600",

    # Media
    "MEDIA_MAX_SIZE_MB": 50,
    "ALLOWED_IMAGE_TYPES": ["image/jpeg", "image/png", "image/gif", "image/webp"],
    "ALLOWED_VIDEO_TYPES": ["video/mp4", "video/webm"],
    "MEDIA_DEFAULT_EXTENSION": "bin",

    # Posts
    "CATEGORY_CHOICES": None,
    "AUTHOR_CHOICES": None,
    "AUTO_EXCERPT": False,
    "EXCERPT_LENGTH": 160,
    "RECENT_POSTS": 5,
}


class BlogDeskSettings:
    """
    Lazy settings object that reads from Django settings.

    Access via: from blog_desk.conf import blog_settings
    """

    def __getattr__(self, name):
        if name not in DEFAULTS:
            raise AttributeError(f"Invalid blog_desk setting: {name}")

        user_settings = getattr(settings, "BLOG_DESK", {})
        return user_settings.get(name, DEFAULTS[name])

    @property
    def ALLOWED_MEDIA_TYPES(self):
        """Return every content type accepted for upload."""
        return list(self.ALLOWED_IMAGE_TYPES) + list(self.ALLOWED_VIDEO_TYPES)

    @property
    def STORAGE_URL(self):
        """Return the S3-compatible endpoint for the media buckets."""
        if self.STORAGE_ENDPOINT:
            return self.STORAGE_ENDPOINT
        return f"{self.HOSTED_URL.rstrip('/')}/storage/v1/s3"


blog_settings = BlogDeskSettings()
