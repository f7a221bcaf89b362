"""
Post composer: draft state, media upload and the create request.
"""
import enum
import logging

from .conf import blog_settings
from .editor import insert_media, media_tag
from .exceptions import BlogDeskError, UploadError, ValidationError
from .models import MediaFile, PostDraft, PostField

logger = logging.getLogger(__name__)


class ComposerState(enum.Enum):
    EDITING = "editing"
    SUBMITTING = "submitting"
    SUCCESS = "success"
    FAILED = "failed"


class PostComposer:
    """
    Collects a draft and submits it to a store.

    Cover media is uploaded before the create call; if the upload fails no
    post is created. On success the stored post is handed to ``on_created``
    and the draft is reset.

    Args:
        store: a PostStore
        on_created: callback receiving the stored Post
        editor: optional Editor providing the body at submit time
    """

    def __init__(self, store, on_created=None, editor=None):
        self.store = store
        self.on_created = on_created
        self.editor = editor
        self.draft = PostDraft()
        self.cover = None
        self.state = ComposerState.EDITING
        self.error_message = None

    @property
    def submitting(self):
        return self.state is ComposerState.SUBMITTING

    @property
    def can_submit(self):
        if self.submitting:
            return False
        self._sync_content()
        return self.draft.is_complete

    def update(self, post_field, value):
        self.draft.update(post_field, value)
        if PostField(post_field) is PostField.CONTENT and self.editor is not None:
            self.editor.set_content(self.draft.content)

    def set_cover(self, file_obj):
        self.cover = MediaFile.wrap(file_obj) if file_obj is not None else None

    def _sync_content(self):
        if self.editor is not None:
            self.draft.content = self.editor.get_content()

    def _fail(self, state, exc):
        self.state = state
        self.error_message = str(exc)
        logger.warning(f"Post submit failed ({state.value}): {exc}")
        return None

    def reset(self):
        self.draft = PostDraft()
        self.cover = None
        if self.editor is not None:
            self.editor.set_content("")

    def submit(self):
        """
        Validate, upload the cover if any, then create the post.

        Returns the stored Post, or None if anything failed (see
        ``error_message``). A second call while one is in flight is ignored.
        """
        if self.submitting:
            return None

        self.error_message = None
        self._sync_content()
        try:
            self.draft.validate()
            if self.cover is not None:
                self.cover.validate()
        except ValidationError as e:
            return self._fail(ComposerState.EDITING, e)

        self.state = ComposerState.SUBMITTING
        try:
            post = self._upload_and_create()
        finally:
            # An unexpected error must not leave submit locked
            if self.submitting:
                self.state = ComposerState.FAILED
                self.error_message = self.error_message or "Failed to save blog"
        if post is None:
            return None

        self.state = ComposerState.SUCCESS
        if self.on_created is not None:
            self.on_created(post)
        self.reset()
        return post

    def _upload_and_create(self):
        image = None
        if self.cover is not None:
            try:
                image = self.store.upload_media(
                    blog_settings.COVER_BUCKET,
                    self.cover,
                    f"{blog_settings.COVER_PATH_PREFIX}/{self.draft.slug}",
                )
            except BlogDeskError as e:
                return self._fail(ComposerState.EDITING, e)

        try:
            post = self.store.create(self.draft.to_post(image=image))
        except BlogDeskError as e:
            return self._fail(ComposerState.FAILED, e)
        return post

    def insert_inline_media(self, file_obj, alt=""):
        """
        Upload a file to the inline bucket and embed it in the body.

        Returns the public URL, or None if the upload failed.
        """
        media = MediaFile.wrap(file_obj)
        try:
            url = self.store.upload_media(
                blog_settings.INLINE_BUCKET,
                media,
                blog_settings.INLINE_PATH_PREFIX,
            )
        except (ValidationError, UploadError) as e:
            self.error_message = str(e)
            return None

        if self.editor is not None:
            insert_media(self.editor, url, media.is_video, alt)
            self.draft.content = self.editor.get_content()
        else:
            self.draft.content += media_tag(url, media.is_video, alt)
        return url
