"""Error taxonomy shared by the storage core and its callers.

The core raises these and never logs or formats messages for end users;
the HTTP layer and the CLI decide how each one is presented.
"""

from __future__ import annotations


class MdcmsError(Exception):
    """Base class for all mdcms errors."""

    def __init__(self, message: str, *, slug: str | None = None):
        super().__init__(message)
        self.slug = slug


class NotFound(MdcmsError):
    """The slug has no backing file."""


class MalformedDocument(MdcmsError):
    """The document header violates the fixed four-line contract."""


class Unpublished(MdcmsError):
    """The article exists but its publish date is still in the future."""


class StorageError(MdcmsError):
    """Any other filesystem failure (permissions, disk full, bad path)."""


class ValidationError(MdcmsError):
    """Submitted data cannot be turned into a valid article."""


class RenderError(MdcmsError):
    """Markdown conversion failed for an already loaded article."""
