"""
mdcms - a small markdown content-management server.

Articles are stored one file per slug as a fixed four-line front matter
followed by a markdown body. Anonymous readers see published articles;
an admin behind HTTP Basic auth creates, edits and deletes them.

Main entry point is the CLI via `mdcms serve`.

Example:
    $ MDCMS_ADMIN_PASSWORD=secret mdcms serve --data-dir data/
"""

__all__ = ["__version__", "Article", "ArticleMetadata", "ArticleRepository", "ListingService", "make_slug"]
__version__ = "0.1.0"

from .core.slug import make_slug
from .core.types import Article, ArticleMetadata
from .store.listing import ListingService
from .store.repository import ArticleRepository
