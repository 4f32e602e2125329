"""
File-backed article storage.

One markdown document per article, addressed by slug, plus the listing
service built on top of it.
"""

from .listing import ListingService
from .repository import ArticleRepository

__all__ = ["ArticleRepository", "ListingService"]
