"""
Abstract post store for blog-desk.
"""
from abc import ABC, abstractmethod


class PostStore(ABC):
    """
    Durable storage for posts and their media.

    Subclasses decide where new posts show up in a listing through
    ``new_posts_first``.
    """

    new_posts_first = False

    @abstractmethod
    def list_all(self):
        """
        Return every stored post.

        Raises:
            StoreUnavailable: if the backing file or table cannot be read
        """

    @abstractmethod
    def create(self, post):
        """
        Store one post and return it with its assigned id.

        Raises:
            StoreWriteError: if the write is rejected
        """

    @abstractmethod
    def delete(self, post_id):
        """
        Remove the post with ``post_id``. Unknown ids are ignored.

        Raises:
            StoreWriteError: if the delete is rejected
        """

    @abstractmethod
    def upload_media(self, bucket, file, path_prefix):
        """
        Write a media file to ``bucket`` and return its public URL.

        Raises:
            ValidationError: if the file type or size is not allowed
            UploadError: if the write fails
        """
