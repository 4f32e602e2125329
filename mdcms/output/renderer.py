"""Markdown to HTML conversion for article bodies."""

from __future__ import annotations

import html
import re
import xml.etree.ElementTree as etree

import markdown
from markdown.treeprocessors import Treeprocessor

from mdcms.config import RenderConfig
from mdcms.core.errors import RenderError

# Parts of the "extra" extension that cannot inject markup or attributes.
SAFE_EXTRA = ["abbr", "def_list", "fenced_code", "footnotes", "tables"]
UNSAFE_EXTENSIONS = {"attr_list", "md_in_html", "markdown.extensions.attr_list", "markdown.extensions.md_in_html"}
SAFE_SCHEMES = {"http", "https", "mailto", "ftp", "tel"}
URL_ATTRIBUTES = ("href", "src")

_SCHEME_RE = re.compile(r"^([a-z][a-z0-9+.\-]*):")
_IGNORED_URL_CHARS = re.compile(r"[\x00-\x20\x7f]+")


def is_safe_url(url: str) -> bool:
    """Relative URLs, fragments and a small set of schemes are safe.

    Entities and embedded whitespace are resolved first, the way a browser
    would before looking at the scheme.
    """
    normalized = _IGNORED_URL_CHARS.sub("", html.unescape(url)).lower()
    match = _SCHEME_RE.match(normalized)
    return match is None or match.group(1) in SAFE_SCHEMES


class UrlSchemeFilter(Treeprocessor):
    """Drops ``href``/``src`` attributes whose scheme is not allowed."""

    def run(self, root: etree.Element) -> None:
        for el in root.iter():
            for attr in URL_ATTRIBUTES:
                value = el.get(attr)
                if value is not None and not is_safe_url(value):
                    del el.attrib[attr]


def safe_extensions(extensions: list[str]) -> list[str]:
    """Expand ``extra`` and drop extensions that pass attributes or raw HTML through."""
    result: list[str] = []
    for name in extensions:
        parts = SAFE_EXTRA if name in ("extra", "markdown.extensions.extra") else [name]
        for part in parts:
            if part not in UNSAFE_EXTENSIONS and part not in result:
                result.append(part)
    return result


class MarkdownRenderer:
    """Converts stored markdown bodies to HTML for display.

    Built once at startup from ``RenderConfig`` and shared by the views.
    Unless ``allow_raw_html`` is set, the output is safe to embed: raw HTML
    is escaped, attribute syntax is disabled and links or images with
    scripting schemes lose their URL.
    """

    def __init__(self, cfg: RenderConfig | None = None):
        self._cfg = cfg or RenderConfig()

    def _build(self) -> markdown.Markdown:
        if self._cfg.allow_raw_html:
            return markdown.Markdown(extensions=list(self._cfg.extensions), output_format="html")

        md = markdown.Markdown(extensions=safe_extensions(self._cfg.extensions), output_format="html")
        md.preprocessors.deregister("html_block")
        md.inlinePatterns.deregister("html")
        # after the inline and unescape treeprocessors
        md.treeprocessors.register(UrlSchemeFilter(md), "url_scheme_filter", -1)
        return md

    def render(self, body: str, *, slug: str | None = None) -> str:
        """Render a markdown body.

        Args:
            body: Raw markdown text
            slug: Slug of the article, attached to any error

        Returns:
            HTML fragment

        Raises:
            RenderError: if the converter fails
        """
        try:
            return self._build().convert(body)
        except Exception as exc:  # noqa: BLE001
            raise RenderError(f"cannot render markdown: {exc}", slug=slug) from exc
