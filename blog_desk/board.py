"""
In-memory post list behind the blog screen.

The board is the only owner of the list. Everything else reads ``posts`` as a
tuple and asks for changes through :meth:`PostBoard.add_created` and
:meth:`PostBoard.delete`.
"""
import logging

from .conf import blog_settings
from .exceptions import BlogDeskError

logger = logging.getLogger(__name__)


class PostBoard:
    """Loaded posts plus the last user-visible error."""

    def __init__(self, store):
        self.store = store
        self._posts = []
        self.error_message = None
        self.loading = False
        self.deleting_id = None

    @property
    def posts(self):
        return tuple(self._posts)

    def __len__(self):
        return len(self._posts)

    def load(self):
        """
        Replace the list with everything in the store.

        A read failure leaves the list empty and sets ``error_message``.
        """
        self.loading = True
        self.error_message = None
        try:
            self._posts = list(self.store.list_all())
        except BlogDeskError as e:
            self._posts = []
            self.error_message = str(e)
        finally:
            self.loading = False
        return self.posts

    def add_created(self, post):
        """Insert a freshly stored post where the store's ordering puts it."""
        if self.store.new_posts_first:
            self._posts.insert(0, post)
        else:
            self._posts.append(post)

    def delete(self, post_id):
        """
        Remove a post optimistically, then ask the store to delete it.

        On failure the list is put back as it was and ``error_message`` is
        set. Returns True when the store confirmed the delete.
        """
        if post_id is None or self.deleting_id == post_id:
            return False

        previous = list(self._posts)
        self.deleting_id = post_id
        self.error_message = None
        self._posts = [p for p in self._posts if p.id != post_id]
        try:
            self.store.delete(post_id)
        except BlogDeskError as e:
            logger.warning(f"Delete of post {post_id} failed, restoring list: {e}")
            self.error_message = str(e)
            self._posts = previous
            return False
        finally:
            self.deleting_id = None
        return True

    def grouped_by_category(self):
        """Return (category, posts) pairs in first-seen order."""
        groups = {}
        for post in self._posts:
            groups.setdefault(post.category or "Uncategorized", []).append(post)
        return list(groups.items())

    def recent(self, limit=None):
        """Return the newest posts by date."""
        if limit is None:
            limit = blog_settings.RECENT_POSTS
        ordered = sorted(self._posts, key=lambda p: p.date, reverse=True)
        return ordered[:limit]
