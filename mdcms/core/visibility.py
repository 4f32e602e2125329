"""Publication gating.

Publish dates are compared as fixed-width ``YYYY-MM-DD`` strings, where
lexicographic order equals chronological order.
"""

from __future__ import annotations

import re
from datetime import date
from typing import TYPE_CHECKING

from .errors import Unpublished

if TYPE_CHECKING:
    from .types import Article, ArticleMetadata

DATE_PATTERN = re.compile(r"\d{4}-\d{2}-\d{2}")


def format_date(value: date) -> str:
    return f"{value.year:04d}-{value.month:02d}-{value.day:02d}"


def parse_date(text: str) -> date:
    """Parse a strict ``YYYY-MM-DD`` date.

    Raises:
        ValueError: on any other shape or an impossible calendar date
    """
    if DATE_PATTERN.fullmatch(text) is None:
        raise ValueError(f"expected YYYY-MM-DD, got {text!r}")
    return date(int(text[0:4]), int(text[5:7]), int(text[8:10]))


def is_public(article: Article | ArticleMetadata, today: date) -> bool:
    return format_date(article.publish_date) <= format_date(today)


def ensure_public(article: Article | ArticleMetadata, today: date) -> None:
    """Raise ``Unpublished`` when the article is still a draft on ``today``."""
    if not is_public(article, today):
        raise Unpublished(
            f"{article.slug} is scheduled for {format_date(article.publish_date)}",
            slug=article.slug,
        )
