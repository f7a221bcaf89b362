"""
Post record and draft models for blog-desk.
"""
import datetime
import enum
from dataclasses import dataclass, field, fields, replace

from django.utils import timezone

from ..conf import blog_settings
from ..exceptions import ValidationError
from ..text import derive_excerpt, generate_slug


class PostField(enum.Enum):
    """Editable fields of a post draft."""

    TITLE = "title"
    SLUG = "slug"
    CONTENT = "content"
    CATEGORY = "category"
    AUTHOR = "author"
    DATE = "date"
    EXCERPT = "excerpt"
    IMAGE = "image"


REQUIRED_FIELDS = (
    PostField.TITLE,
    PostField.SLUG,
    PostField.CONTENT,
    PostField.CATEGORY,
    PostField.AUTHOR,
)

OPTIONAL_FIELDS = (PostField.EXCERPT, PostField.IMAGE)


def parse_date(value):
    """Accept a date, datetime or ISO string; blank means today."""
    if isinstance(value, datetime.datetime):
        return value.date()
    if isinstance(value, datetime.date):
        return value
    if not value:
        return timezone.localdate()
    try:
        return datetime.date.fromisoformat(str(value)[:10])
    except ValueError:
        raise ValidationError(f"Invalid date: {value!r}") from None


@dataclass(frozen=True)
class Post:
    """
    A stored blog post.

    ``id`` is assigned by the store and is the only key used for deletion.
    Posts are never edited in place.

    ``excerpt`` and ``image`` are None when the record has no such key.
    ``extra`` holds any other keys of the record so they survive a
    read/write cycle.
    """

    title: str
    slug: str
    content: str
    category: str
    author: str
    date: datetime.date = field(default_factory=timezone.localdate)
    excerpt: str | None = None
    image: str | None = None
    id: int | None = None
    extra: dict = field(default_factory=dict, compare=False, repr=False)

    def __str__(self):
        return self.title

    @property
    def preview(self):
        """Return the excerpt, or a shortened body for list display."""
        if self.excerpt:
            return self.excerpt
        return derive_excerpt(self.content, blog_settings.EXCERPT_LENGTH)

    def with_id(self, post_id):
        return replace(self, id=post_id)

    def to_record(self):
        """
        Serialize to the stored JSON shape.

        Excerpt and image are left out when unset; date is an ISO string.
        Extra keys follow the known ones and never replace them.
        """
        record = {}
        if self.id is not None:
            record["id"] = self.id
        record.update(
            {
                "title": self.title,
                "slug": self.slug,
                "content": self.content,
                "category": self.category,
                "author": self.author,
                "date": self.date.isoformat(),
            }
        )
        if self.excerpt is not None:
            record["excerpt"] = self.excerpt
        if self.image is not None:
            record["image"] = self.image
        for key, value in self.extra.items():
            record.setdefault(key, value)
        return record

    @classmethod
    def from_record(cls, record):
        """
        Build a post from a stored row.

        Raises:
            ValidationError: if the row is not an object or has a bad date
        """
        if not isinstance(record, dict):
            raise ValidationError(f"Expected a post object, got {type(record).__name__}")
        known = {f.name for f in fields(cls)} - {"extra"}
        data = {k: v for k, v in record.items() if k in known}
        data["date"] = parse_date(data.get("date"))
        for name in ("title", "slug", "content", "category", "author"):
            data[name] = data.get(name) or ""
        extra = {k: v for k, v in record.items() if k not in known}
        return cls(extra=extra, **data)


@dataclass
class PostDraft:
    """
    Mutable form state for a post that has not been stored yet.

    All changes go through :meth:`update`, which keeps the slug in step with
    the title. Values are stored as given; only the date is normalized.
    """

    title: str = ""
    slug: str = ""
    content: str = ""
    category: str = ""
    author: str = ""
    date: datetime.date = field(default_factory=timezone.localdate)
    excerpt: str | None = None
    image: str | None = None
    extra: dict = field(default_factory=dict)

    def update(self, post_field, value):
        """Set one field. Changing the title regenerates the slug."""
        post_field = PostField(post_field)
        if post_field is PostField.DATE:
            value = parse_date(value)
        elif value is None:
            # Optional fields stay unset rather than empty
            value = None if post_field in OPTIONAL_FIELDS else ""
        else:
            value = str(value)
        setattr(self, post_field.value, value)
        if post_field is PostField.TITLE:
            self.slug = generate_slug(value)

    def missing_fields(self):
        """Return required fields that are still blank."""
        return [f for f in REQUIRED_FIELDS if not getattr(self, f.value).strip()]

    @property
    def is_complete(self):
        return not self.missing_fields()

    def validate(self):
        """
        Check required fields and fixed choice lists.

        Raises:
            ValidationError: if anything is missing or not an allowed choice
        """
        missing = self.missing_fields()
        if missing:
            names = ", ".join(f.value for f in missing)
            raise ValidationError(f"Please fill in all required fields ({names}).")

        categories = blog_settings.CATEGORY_CHOICES
        if categories and self.category not in categories:
            raise ValidationError(f"Unknown category: {self.category}")

        authors = blog_settings.AUTHOR_CHOICES
        if authors and self.author not in authors:
            raise ValidationError(f"Unknown author: {self.author}")

    def to_post(self, image=None):
        """Build the post to hand to a store."""
        excerpt = self.excerpt
        if not (excerpt or "").strip() and blog_settings.AUTO_EXCERPT:
            excerpt = derive_excerpt(self.content, blog_settings.EXCERPT_LENGTH)
        return Post(
            title=self.title,
            slug=self.slug,
            content=self.content,
            category=self.category,
            author=self.author,
            date=self.date or timezone.localdate(),
            excerpt=excerpt,
            image=image if image is not None else self.image,
            extra=dict(self.extra),
        )
