from __future__ import annotations

import re

from slugify import slugify as _slugify

SLUG_RE = re.compile(r"[a-z0-9-]+")


def make_slug(title: str) -> str:
    """Convert a title to a URL- and filename-safe slug.

    Non-ASCII characters are transliterated, runs of anything that is not
    ``[a-z0-9]`` collapse into a single hyphen and hyphens are trimmed from
    both ends. The result may be empty; callers must reject that.

    Args:
        title: The article title

    Returns:
        Slug matching ``[a-z0-9-]*``
    """
    slug = _slugify(title, lowercase=True)
    slug = re.sub(r"[^a-z0-9]+", "-", slug)
    return slug.strip("-")


def is_valid_slug(slug: str) -> bool:
    return bool(slug) and SLUG_RE.fullmatch(slug) is not None
