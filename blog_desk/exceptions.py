class BlogDeskError(Exception):
    """Base class for every error surfaced to the post screens."""

    pass


class ValidationError(BlogDeskError):
    """A required field is missing or a value is not acceptable."""

    pass


class UploadError(BlogDeskError):
    """Writing a media file to a bucket failed."""

    pass


class StoreError(BlogDeskError):
    """The post store rejected or could not serve a request."""

    pass


class StoreUnavailable(StoreError):
    """Posts could not be read from the backing file or table."""

    pass


class StoreWriteError(StoreError):
    """A create or delete was rejected by the backing file or table."""

    pass
