"""
Tests for the post composer.
"""
from unittest.mock import MagicMock

import pytest
from django.core.files.uploadedfile import SimpleUploadedFile

from blog_desk.composer import ComposerState, PostComposer
from blog_desk.editor import TextareaEditor
from blog_desk.exceptions import StoreWriteError, UploadError
from blog_desk.models import Post, PostField


def _fill(composer):
    values = {
        PostField.TITLE: "Hello, World!  2024",
        PostField.AUTHOR: "Ann",
        PostField.CATEGORY: "News",
        PostField.CONTENT: "<p>Body</p>",
        PostField.DATE: "2024-05-06",
    }
    for post_field, value in values.items():
        composer.update(post_field, value)


@pytest.fixture
def stored():
    """Make store.create echo the post back with an id."""

    def _create(post):
        return post.with_id(101)

    return _create


@pytest.fixture
def composer(mock_store, stored):
    mock_store.create.side_effect = stored
    return PostComposer(mock_store, on_created=MagicMock())


@pytest.fixture
def cover():
    return SimpleUploadedFile("cover.png", b"png-bytes", content_type="image/png")


class TestCanSubmit:
    """Tests for the submit guard."""

    def test_disabled_until_required_fields_filled(self, composer):
        assert not composer.can_submit
        _fill(composer)
        assert composer.can_submit

    @pytest.mark.parametrize(
        "post_field",
        [PostField.TITLE, PostField.AUTHOR, PostField.CATEGORY, PostField.CONTENT],
    )
    def test_disabled_when_any_required_field_empty(self, composer, post_field):
        _fill(composer)
        composer.update(post_field, "")
        assert not composer.can_submit

    def test_disabled_when_slug_cleared(self, composer):
        _fill(composer)
        composer.update(PostField.SLUG, "")
        assert not composer.can_submit

    def test_disabled_while_submitting(self, composer):
        _fill(composer)
        composer.state = ComposerState.SUBMITTING
        assert not composer.can_submit


class TestSubmit:
    """Tests for PostComposer.submit."""

    def test_success(self, composer, mock_store):
        _fill(composer)

        post = composer.submit()

        mock_store.create.assert_called_once()
        sent = mock_store.create.call_args.args[0]
        assert isinstance(sent, Post)
        assert sent.slug == "hello-world-2024"
        assert sent.id is None
        assert post.id == 101
        composer.on_created.assert_called_once_with(post)
        assert composer.state is ComposerState.SUCCESS
        assert composer.error_message is None

    def test_success_resets_draft(self, composer):
        _fill(composer)
        composer.submit()
        assert composer.draft.title == ""
        assert composer.draft.slug == ""
        assert composer.cover is None

    @pytest.mark.parametrize(
        "post_field",
        [PostField.TITLE, PostField.AUTHOR, PostField.CATEGORY, PostField.CONTENT],
    )
    def test_missing_field_never_creates(self, composer, mock_store, post_field):
        _fill(composer)
        composer.update(post_field, "   ")

        assert composer.submit() is None

        mock_store.create.assert_not_called()
        mock_store.upload_media.assert_not_called()
        assert composer.state is ComposerState.EDITING
        assert "required fields" in composer.error_message

    def test_create_failure_keeps_input(self, composer, mock_store):
        mock_store.create.side_effect = StoreWriteError("duplicate key")
        _fill(composer)

        assert composer.submit() is None

        assert composer.state is ComposerState.FAILED
        assert composer.error_message == "duplicate key"
        assert composer.draft.title == "Hello, World!  2024"
        composer.on_created.assert_not_called()

    def test_second_submit_while_in_flight_ignored(self, composer, mock_store):
        _fill(composer)
        composer.state = ComposerState.SUBMITTING

        assert composer.submit() is None
        mock_store.create.assert_not_called()

    def test_unexpected_error_does_not_lock_submit(self, composer, mock_store, stored):
        mock_store.create.side_effect = KeyError(0)
        _fill(composer)

        with pytest.raises(KeyError):
            composer.submit()

        assert composer.state is ComposerState.FAILED
        assert composer.error_message == "Failed to save blog"
        mock_store.create.side_effect = stored
        assert composer.submit() is not None

    def test_retry_after_failure(self, composer, mock_store, stored):
        mock_store.create.side_effect = StoreWriteError("offline")
        _fill(composer)
        composer.submit()

        mock_store.create.side_effect = stored
        post = composer.submit()

        assert post is not None
        assert composer.state is ComposerState.SUCCESS


class TestCoverUpload:
    """Tests for cover media sequencing."""

    def test_upload_before_create(self, composer, mock_store, cover):
        mock_store.upload_media.return_value = "https://cdn/blogs/cover.png"
        _fill(composer)
        composer.set_cover(cover)

        post = composer.submit()

        assert [c[0] for c in mock_store.method_calls] == ["upload_media", "create"]
        bucket, media, prefix = mock_store.upload_media.call_args.args
        assert bucket == "blog-images"
        assert media.name == "cover.png"
        assert prefix == "blogs/hello-world-2024"
        assert post.image == "https://cdn/blogs/cover.png"

    def test_uploaded_cover_overrides_pasted_url(self, composer, mock_store, cover):
        mock_store.upload_media.return_value = "https://cdn/uploaded.png"
        _fill(composer)
        composer.update(PostField.IMAGE, "https://example.com/pasted.png")
        composer.set_cover(cover)

        assert composer.submit().image == "https://cdn/uploaded.png"

    def test_pasted_url_used_without_upload(self, composer, mock_store):
        _fill(composer)
        composer.update(PostField.IMAGE, "https://example.com/pasted.png")

        assert composer.submit().image == "https://example.com/pasted.png"
        mock_store.upload_media.assert_not_called()

    def test_failed_upload_prevents_create(self, composer, mock_store, cover):
        mock_store.upload_media.side_effect = UploadError("Upload failed: denied")
        _fill(composer)
        composer.set_cover(cover)

        assert composer.submit() is None

        mock_store.create.assert_not_called()
        assert composer.state is ComposerState.EDITING
        assert composer.error_message == "Upload failed: denied"
        assert composer.cover is not None

    def test_disallowed_cover_never_uploads(self, composer, mock_store):
        _fill(composer)
        composer.set_cover(SimpleUploadedFile("notes.txt", b"x", content_type="text/plain"))

        assert composer.submit() is None

        mock_store.upload_media.assert_not_called()
        mock_store.create.assert_not_called()
        assert composer.state is ComposerState.EDITING


class TestEditor:
    """Tests for the editor seam."""

    def test_content_read_from_editor(self, mock_store, stored):
        mock_store.create.side_effect = stored
        editor = TextareaEditor()
        composer = PostComposer(mock_store, editor=editor)
        _fill(composer)

        editor.set_content("<h2>Rich</h2>")
        post = composer.submit()

        assert post.content == "<h2>Rich</h2>"
        assert editor.get_content() == ""

    def test_content_update_pushed_to_editor(self, mock_store):
        editor = TextareaEditor()
        composer = PostComposer(mock_store, editor=editor)
        composer.update(PostField.CONTENT, "<p>typed</p>")
        assert editor.get_content() == "<p>typed</p>"

    def test_inline_image(self, mock_store):
        mock_store.upload_media.return_value = "https://cdn/inline/1.png"
        editor = TextareaEditor("<p>Intro</p>")
        composer = PostComposer(mock_store, editor=editor)

        url = composer.insert_inline_media(
            SimpleUploadedFile("1.png", b"x", content_type="image/png"), alt="Diagram"
        )

        assert url == "https://cdn/inline/1.png"
        bucket, _, prefix = mock_store.upload_media.call_args.args
        assert (bucket, prefix) == ("blog-media", "inline")
        assert editor.get_content() == (
            '<p>Intro</p><img src="https://cdn/inline/1.png" alt="Diagram">'
        )
        assert composer.draft.content == editor.get_content()

    def test_inline_video_without_editor(self, mock_store):
        mock_store.upload_media.return_value = "https://cdn/inline/clip.mp4"
        composer = PostComposer(mock_store)

        composer.insert_inline_media(
            SimpleUploadedFile("clip.mp4", b"x", content_type="video/mp4")
        )

        assert composer.draft.content == (
            '<video controls src="https://cdn/inline/clip.mp4"></video>'
        )

    def test_inline_upload_failure(self, mock_store):
        mock_store.upload_media.side_effect = UploadError("Upload failed: offline")
        editor = TextareaEditor("<p>Intro</p>")
        composer = PostComposer(mock_store, editor=editor)

        assert composer.insert_inline_media(
            SimpleUploadedFile("1.png", b"x", content_type="image/png")
        ) is None

        assert composer.error_message == "Upload failed: offline"
        assert editor.get_content() == "<p>Intro</p>"
