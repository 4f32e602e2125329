"""
Core domain models and storage format.

This package contains the article types, the error taxonomy, the slug and
document codecs and the visibility policy. Nothing in here logs or touches
HTTP.
"""

from .types import Article, ArticleMetadata
from .errors import (
    MalformedDocument,
    MdcmsError,
    NotFound,
    RenderError,
    StorageError,
    Unpublished,
    ValidationError,
)
from .slug import is_valid_slug, make_slug
from .visibility import ensure_public, format_date, is_public, parse_date

__all__ = [
    "Article",
    "ArticleMetadata",
    "MdcmsError",
    "NotFound",
    "MalformedDocument",
    "Unpublished",
    "StorageError",
    "ValidationError",
    "RenderError",
    "make_slug",
    "is_valid_slug",
    "is_public",
    "ensure_public",
    "format_date",
    "parse_date",
]
