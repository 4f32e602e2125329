"""Article listings for the public index and the admin dashboard."""

from __future__ import annotations

from datetime import date

from mdcms.core.types import ArticleMetadata
from mdcms.core.visibility import format_date, is_public

from .repository import ArticleRepository


class ListingService:
    """Enumerates the store and projects every article to its metadata.

    Listings are fail-fast: if any single document cannot be read, the whole
    listing raises that error instead of returning a partial result.
    """

    def __init__(self, repository: ArticleRepository):
        self._repository = repository

    def list_all(self) -> list[ArticleMetadata]:
        """Every article, drafts included, newest first."""
        items = [self._repository.load_metadata(slug) for slug in self._repository.list_slugs()]
        return _newest_first(items)

    def list_published(self, today: date) -> list[ArticleMetadata]:
        """Articles whose publish date is on or before ``today``, newest first."""
        return [item for item in self.list_all() if is_public(item, today)]


def _newest_first(items: list[ArticleMetadata]) -> list[ArticleMetadata]:
    items = sorted(items, key=lambda item: item.slug)
    return sorted(items, key=lambda item: format_date(item.publish_date), reverse=True)
