"""Django app configuration for blog_desk."""
from django.apps import AppConfig
from django.core.exceptions import ImproperlyConfigured


class BlogDeskConfig(AppConfig):
    """Configuration for the blog desk app."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "blog_desk"
    verbose_name = "Blog Desk"

    def ready(self):
        """Check the configured store backend."""
        from .conf import blog_settings
        from .stores import BACKENDS

        if blog_settings.STORE_BACKEND not in BACKENDS:
            raise ImproperlyConfigured(
                f"BLOG_DESK['STORE_BACKEND'] must be one of {sorted(BACKENDS)}, "
                f"got {blog_settings.STORE_BACKEND!r}"
            )
