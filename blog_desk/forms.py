"""
Forms for blog-desk.
"""
from django import forms

from .conf import blog_settings
from .models import PostField


class PostForm(forms.Form):
    """
    Post composer form.

    Only types are checked here; required fields and choice lists are
    enforced by the composer so the HTML form and the JSON API report the
    same errors.
    """

    title = forms.CharField(max_length=255, required=False)
    slug = forms.CharField(
        max_length=255,
        required=False,
        help_text="Generated from the title unless you type one.",
    )
    author = forms.CharField(max_length=255, required=False)
    category = forms.CharField(max_length=255, required=False)
    date = forms.DateField(required=False)
    excerpt = forms.CharField(max_length=1000, required=False, empty_value=None)
    image = forms.URLField(
        required=False,
        empty_value=None,
        assume_scheme="https",
        help_text="Or paste an image URL instead of uploading a file.",
    )
    cover = forms.FileField(required=False)
    content = forms.CharField(widget=forms.Textarea, required=False)

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        for name, choices in (
            ("category", blog_settings.CATEGORY_CHOICES),
            ("author", blog_settings.AUTHOR_CHOICES),
        ):
            if choices:
                self.fields[name] = forms.ChoiceField(
                    choices=[("", "---------")] + [(c, c) for c in choices],
                    required=False,
                )

    def apply(self, composer):
        """Copy cleaned values into a composer, title before slug."""
        data = self.cleaned_data
        for post_field in PostField:
            if post_field is PostField.SLUG:
                continue
            composer.update(post_field, data.get(post_field.value))
        if data.get("slug"):
            composer.update(PostField.SLUG, data["slug"])
        composer.set_cover(data.get("cover"))
