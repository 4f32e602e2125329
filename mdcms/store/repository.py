"""File-per-article repository.

Each article lives at ``<root>/<slug>.md``; the slug is both primary key and
storage address. Writes go to ``<slug>.md.tmp`` first and are renamed over
the target, so readers never see a half-written file. There is no locking:
concurrent writers race and the last rename wins.
"""

from __future__ import annotations

import contextlib
import os
from pathlib import Path

from mdcms.core import document
from mdcms.core.errors import NotFound, StorageError, ValidationError
from mdcms.core.slug import is_valid_slug
from mdcms.core.types import Article, ArticleMetadata

SUFFIX = ".md"
TMP_SUFFIX = ".tmp"


class ArticleRepository:
    """CRUD over a directory of markdown documents, keyed by slug."""

    def __init__(self, root: Path):
        """Initialize the repository.

        Args:
            root: Directory holding the ``<slug>.md`` files
        """
        self._root = Path(root)

    @property
    def root(self) -> Path:
        return self._root

    def path_for(self, slug: str) -> Path:
        """Returns the document path for a slug.

        Raises:
            ValidationError: if the slug is empty or outside ``[a-z0-9-]``
        """
        if not is_valid_slug(slug):
            raise ValidationError(f"invalid slug: {slug!r}", slug=slug)
        return self._root / f"{slug}{SUFFIX}"

    def ensure_store(self) -> None:
        try:
            self._root.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise StorageError(f"cannot create store {self._root}: {exc}") from exc

    def save(self, article: Article) -> None:
        """Write the whole document, replacing any previous version."""
        path = self.path_for(article.slug)
        data = document.encode(article)
        tmp = path.with_name(path.name + TMP_SUFFIX)
        try:
            with open(tmp, "wb") as f:
                f.write(data)
            os.replace(tmp, path)
        except OSError as exc:
            _discard(tmp)
            raise StorageError(f"cannot write {article.slug}: {exc}", slug=article.slug) from exc

    def load(self, slug: str) -> Article:
        path = self.path_for(slug)
        try:
            with open(path, "rb") as f:
                data = f.read()
        except FileNotFoundError as exc:
            raise NotFound(f"no article {slug!r}", slug=slug) from exc
        except OSError as exc:
            raise StorageError(f"cannot read {slug}: {exc}", slug=slug) from exc
        return document.decode(data, slug)

    def load_metadata(self, slug: str) -> ArticleMetadata:
        """Load title and date without reading the body."""
        path = self.path_for(slug)
        try:
            with open(path, "rb") as f:
                return document.decode_metadata(f, slug)
        except FileNotFoundError as exc:
            raise NotFound(f"no article {slug!r}", slug=slug) from exc
        except OSError as exc:
            raise StorageError(f"cannot read {slug}: {exc}", slug=slug) from exc

    def delete(self, slug: str) -> None:
        path = self.path_for(slug)
        try:
            path.unlink()
        except FileNotFoundError as exc:
            raise NotFound(f"no article {slug!r}", slug=slug) from exc
        except OSError as exc:
            raise StorageError(f"cannot delete {slug}: {exc}", slug=slug) from exc

    def exists(self, slug: str) -> bool:
        return self.path_for(slug).is_file()

    def list_slugs(self) -> list[str]:
        """Return every stored slug in directory order.

        The order is whatever the filesystem yields; sort explicitly when a
        stable order matters. A missing store directory is an empty store.
        """
        try:
            entries = list(os.scandir(self._root))
        except FileNotFoundError:
            return []
        except OSError as exc:
            raise StorageError(f"cannot list {self._root}: {exc}") from exc

        slugs = []
        for entry in entries:
            name = entry.name
            if name.startswith(".") or not name.endswith(SUFFIX):
                continue
            if not entry.is_file():
                continue
            slug = name[: -len(SUFFIX)]
            if is_valid_slug(slug):
                slugs.append(slug)
        return slugs


def _discard(path: Path) -> None:
    with contextlib.suppress(OSError):
        path.unlink()
