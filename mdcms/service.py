"""
Article workflows shared by the web layer and the CLI.

This module validates submitted form data and turns it into repository
calls. Nothing reaches the repository until validation has passed:
- create: slug derived from the title, never overwrites an existing article
- update: slug taken from the path and never re-derived from the title
- get_public: enforces publication gating
"""

from __future__ import annotations

from datetime import date

from .core.document import DELIMITER
from .core.errors import NotFound, ValidationError
from .core.slug import make_slug
from .core.types import Article, ArticleMetadata
from .core.visibility import ensure_public, parse_date
from .store.listing import ListingService
from .store.repository import ArticleRepository


def validate_title(title: str | None) -> str:
    """Normalize a submitted title.

    Returns:
        The title with surrounding whitespace removed

    Raises:
        ValidationError: if the title is empty, spans lines or is the header delimiter
    """
    title = (title or "").strip()
    if not title:
        raise ValidationError("title is required")
    if "\n" in title or "\r" in title:
        raise ValidationError("title must be a single line")
    if title == DELIMITER:
        raise ValidationError(f"title cannot be {DELIMITER!r}")
    return title


def parse_submitted_date(text: str | None, default: date) -> date:
    """Parse a ``YYYY-MM-DD`` form value; blank means ``default``."""
    text = (text or "").strip()
    if not text:
        return default
    try:
        return parse_date(text)
    except ValueError as exc:
        raise ValidationError(f"publish date must be YYYY-MM-DD, got {text!r}") from exc


class ArticleService:
    """Validated create/read/update/delete flows over the repository."""

    def __init__(self, repository: ArticleRepository, listing: ListingService | None = None):
        self.repository = repository
        self.listing = listing or ListingService(repository)

    def create(
        self,
        title: str | None,
        body: str | None,
        publish_date: str | None,
        today: date,
    ) -> Article:
        title = validate_title(title)
        published = parse_submitted_date(publish_date, today)
        slug = make_slug(title)
        if not slug:
            raise ValidationError(f"title {title!r} does not produce a usable slug")
        if self.repository.exists(slug):
            raise ValidationError(f"an article with slug {slug!r} already exists", slug=slug)

        article = Article(title=title, slug=slug, publish_date=published, body=_normalize_body(body))
        self.repository.save(article)
        return article

    def update(
        self,
        slug: str,
        title: str | None,
        body: str | None,
        publish_date: str | None,
        today: date,
    ) -> Article:
        """Replace the article stored under ``slug``.

        Saving to a slug that has no file yet creates it there; this is the
        admin fallback for links to articles that do not exist yet.
        """
        self.repository.path_for(slug)
        title = validate_title(title)
        try:
            default_date = self.repository.load_metadata(slug).publish_date
        except NotFound:
            default_date = today
        published = parse_submitted_date(publish_date, default_date)

        article = Article(title=title, slug=slug, publish_date=published, body=_normalize_body(body))
        self.repository.save(article)
        return article

    def delete(self, slug: str) -> None:
        self.repository.delete(slug)

    def get_admin(self, slug: str) -> Article:
        return self.repository.load(slug)

    def get_public(self, slug: str, today: date) -> Article:
        """Load an article for anonymous readers.

        Raises:
            NotFound: no such article
            Unpublished: the article is scheduled after ``today``
        """
        article = self.repository.load(slug)
        ensure_public(article, today)
        return article

    def list_all(self) -> list[ArticleMetadata]:
        return self.listing.list_all()

    def list_published(self, today: date) -> list[ArticleMetadata]:
        return self.listing.list_published(today)


def _normalize_body(body: str | None) -> str:
    # Browsers submit textarea content with CRLF line endings.
    return (body or "").replace("\r\n", "\n")
