"""
Core data types for mdcms.

This module defines the two shapes an article takes inside the system:
- Article: a full article as stored on disk (front matter + markdown body)
- ArticleMetadata: the same article without its body, used for listings
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date


@dataclass
class ArticleMetadata:
    """Article projection without the body.

    Attributes:
        title: Human-readable article title
        slug: URL- and filename-safe identifier, also the storage key
        publish_date: Date from which the article is publicly visible
    """

    title: str
    slug: str
    publish_date: date


@dataclass
class Article:
    """A stored markdown article.

    Attributes:
        title: Human-readable article title (single line, never "---")
        slug: URL- and filename-safe identifier, immutable after creation
        publish_date: Date from which the article is publicly visible
        body: Raw markdown text, may be empty
    """

    title: str
    slug: str
    publish_date: date
    body: str = ""

    @property
    def metadata(self) -> ArticleMetadata:
        return ArticleMetadata(title=self.title, slug=self.slug, publish_date=self.publish_date)
