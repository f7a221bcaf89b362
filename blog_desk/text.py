"""
Text helpers for post titles and bodies.
"""
import re
from html import unescape

# Word characters are ASCII only
_NON_SLUG_CHARS = re.compile(r"[^A-Za-z0-9_\s-]")
_WHITESPACE = re.compile(r"\s+")
_TAGS = re.compile(r"<[^>]*>")


def generate_slug(title):
    """
    Derive a URL slug from a post title.

    Lower-cases and trims the title, drops anything that is not an ASCII
    letter, digit, underscore, whitespace or hyphen, then turns each
    whitespace run into a single hyphen.

        >>> generate_slug("Hello, World!  2024")
        'hello-world-2024'
        >>> generate_slug("Café Déjà vu")
        'caf-dj-vu'
    """
    slug = title.lower().strip()
    slug = _NON_SLUG_CHARS.sub("", slug)
    return _WHITESPACE.sub("-", slug)


def strip_tags(html):
    """Return the visible text of an HTML fragment."""
    text = unescape(_TAGS.sub(" ", html))
    return _WHITESPACE.sub(" ", text).strip()


def derive_excerpt(content, length=160):
    """Build a short plain-text excerpt from plain or HTML content."""
    text = strip_tags(content)
    if len(text) <= length:
        return text
    return text[:length].rstrip() + "..."
