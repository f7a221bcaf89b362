"""
Views for blog-desk.
"""
import json
import logging

from django.contrib import messages
from django.http import JsonResponse
from django.shortcuts import redirect, render
from django.utils.decorators import method_decorator
from django.views import View
from django.views.decorators.csrf import csrf_exempt

from .board import PostBoard
from .composer import ComposerState, PostComposer
from .conf import blog_settings
from .exceptions import StoreError, UploadError, ValidationError
from .forms import PostForm
from .models import MediaFile, PostField
from .stores import get_store

logger = logging.getLogger(__name__)


class PostListView(View):
    """List posts with the composer form above them."""

    template_name = "blog_desk/post_list.html"

    def get_context_data(self, board, form, **kwargs):
        context = {
            "posts": board.posts,
            "groups": board.grouped_by_category(),
            "recent_posts": board.recent(),
            "error_message": board.error_message,
            "form": form,
        }
        context.update(kwargs)
        return context

    def get(self, request):
        board = PostBoard(get_store())
        board.load()
        return render(
            request,
            self.template_name,
            self.get_context_data(board, PostForm()),
        )


class PostCreateView(PostListView):
    """Submit the composer form."""

    def post(self, request):
        board = PostBoard(get_store())
        composer = PostComposer(board.store, on_created=board.add_created)
        form = PostForm(request.POST, request.FILES)

        if form.is_valid():
            form.apply(composer)
            post = composer.submit()
            if post is not None:
                messages.success(request, f'Saved "{post.title}".')
                return redirect("blog_desk:post_list")
            form.add_error(None, composer.error_message)

        # Re-render with the user's input kept
        board.load()
        context = self.get_context_data(
            board,
            form,
            error_message=composer.error_message or board.error_message,
        )
        return render(request, self.template_name, context, status=400)


class PostDeleteView(View):
    """Delete a post by id."""

    def post(self, request, pk):
        board = PostBoard(get_store())
        if board.delete(pk):
            messages.success(request, "Post removed.")
        else:
            messages.error(request, board.error_message or "Failed to delete blog")
        return redirect("blog_desk:post_list")


@method_decorator(csrf_exempt, name="dispatch")
class PostCollectionApiView(View):
    """JSON list/create endpoint."""

    def get(self, request):
        try:
            posts = get_store().list_all()
        except StoreError as e:
            return JsonResponse({"error": str(e)}, status=500)
        return JsonResponse([p.to_record() for p in posts], safe=False)

    def post(self, request):
        try:
            payload = json.loads(request.body or b"null")
        except ValueError:
            return JsonResponse({"error": "Invalid JSON body"}, status=400)
        if not isinstance(payload, dict):
            return JsonResponse({"error": "Expected a JSON object"}, status=400)

        composer = PostComposer(get_store())
        try:
            for post_field in PostField:
                if post_field is not PostField.SLUG and post_field.value in payload:
                    composer.update(post_field, payload[post_field.value])
            if payload.get("slug"):
                composer.update(PostField.SLUG, payload["slug"])
            # Unknown keys are stored alongside the post; the store assigns id
            known = {post_field.value for post_field in PostField} | {"id"}
            composer.draft.extra = {k: v for k, v in payload.items() if k not in known}
        except ValidationError as e:
            return JsonResponse({"error": str(e)}, status=400)

        post = composer.submit()
        if post is None:
            status = 500 if composer.state is ComposerState.FAILED else 400
            return JsonResponse({"error": composer.error_message}, status=status)

        return JsonResponse(
            {"message": "Blog saved successfully", "post": post.to_record()},
            status=201,
        )


@method_decorator(csrf_exempt, name="dispatch")
class PostApiDetailView(View):
    """JSON delete endpoint."""

    def delete(self, request, pk):
        try:
            get_store().delete(pk)
        except StoreError as e:
            return JsonResponse({"error": str(e)}, status=500)
        return JsonResponse({"message": "Blog deleted successfully"})


@method_decorator(csrf_exempt, name="dispatch")
class MediaUploadApiView(View):
    """Upload a cover or inline media file and return its public URL."""

    def post(self, request):
        upload = request.FILES.get("file")
        if upload is None or not upload.name:
            return JsonResponse({"error": "No file received."}, status=400)

        kind = request.POST.get("kind", "inline")
        if kind == "cover":
            bucket = blog_settings.COVER_BUCKET
            prefix = blog_settings.COVER_PATH_PREFIX
        elif kind == "inline":
            bucket = blog_settings.INLINE_BUCKET
            prefix = blog_settings.INLINE_PATH_PREFIX
        else:
            return JsonResponse({"error": f"Unknown media kind: {kind}"}, status=400)

        try:
            url = get_store().upload_media(bucket, MediaFile(upload), prefix)
        except ValidationError as e:
            return JsonResponse({"error": str(e)}, status=415)
        except UploadError as e:
            return JsonResponse({"error": str(e)}, status=502)

        return JsonResponse({"url": url}, status=201)
