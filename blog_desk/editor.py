"""
Editor seam for post bodies.

Rich-text editors are treated as opaque: the composer only reads and writes
their HTML through ``get_content`` / ``set_content``.
"""
from html import escape
from typing import Protocol


class Editor(Protocol):
    def get_content(self) -> str: ...

    def set_content(self, html: str) -> None: ...


class TextareaEditor:
    """Plain textarea-backed editor holding the body as a string."""

    def __init__(self, content=""):
        self._content = content

    def get_content(self):
        return self._content

    def set_content(self, html):
        self._content = html or ""


def media_tag(url, is_video=False, alt=""):
    """Return the HTML element used to embed uploaded media in a body."""
    src = escape(url, quote=True)
    if is_video:
        return f'<video controls src="{src}"></video>'
    return f'<img src="{src}" alt="{escape(alt, quote=True)}">'


def insert_media(editor, url, is_video=False, alt=""):
    """Append an embedded image or video to the editor's content."""
    editor.set_content(editor.get_content() + media_tag(url, is_video, alt))
