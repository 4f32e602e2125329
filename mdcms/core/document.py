"""Document codec for the on-disk article format.

Every article file starts with a fixed four-line header, parsed by position:

    ---
    <title>
    <YYYY-MM-DD>
    ---

Everything after the fourth line is the markdown body, stored verbatim.
The codec never scans for delimiters. A header that does not match the
layout exactly is a ``MalformedDocument``.
"""

from __future__ import annotations

from io import BytesIO
from typing import BinaryIO

from .errors import MalformedDocument, ValidationError
from .types import Article, ArticleMetadata
from .visibility import format_date, parse_date

DELIMITER = "---"
HEADER_LINES = 4
# bytes per header line, excluding the line ending
MAX_HEADER_LINE = 4096
ENCODING = "utf-8"


def encode(article: Article) -> bytes:
    """Serialize an article to its on-disk bytes.

    Raises:
        ValidationError: if the title cannot be represented in the header
    """
    _check_header_value(article.title, "title", article.slug)
    header = "\n".join([DELIMITER, article.title, format_date(article.publish_date), DELIMITER])
    return (header + "\n").encode(ENCODING) + article.body.encode(ENCODING)


def decode(data: bytes, slug: str) -> Article:
    """Parse on-disk bytes back into an Article.

    Args:
        data: Full file contents
        slug: Slug the file is stored under (not part of the file itself)

    Raises:
        MalformedDocument: header does not match the fixed layout, or the
            body is not valid UTF-8
    """
    stream = BytesIO(data)
    meta = decode_metadata(stream, slug)
    try:
        body = stream.read().decode(ENCODING)
    except UnicodeDecodeError as exc:
        raise MalformedDocument(f"{slug}: body is not valid UTF-8", slug=slug) from exc
    return Article(title=meta.title, slug=slug, publish_date=meta.publish_date, body=body)


def decode_metadata(stream: BinaryIO, slug: str) -> ArticleMetadata:
    """Parse only the header from a binary stream.

    Reads exactly four lines and leaves the stream positioned at the first
    byte of the body, which is never read.
    """
    lines = [_read_header_line(stream, idx, slug) for idx in range(HEADER_LINES)]
    opening, title, raw_date, closing = lines

    if opening != DELIMITER:
        raise MalformedDocument(f"{slug}: line 1 must be {DELIMITER!r}", slug=slug)
    if title == DELIMITER:
        raise MalformedDocument(f"{slug}: line 2 must be a title, got the delimiter", slug=slug)
    try:
        publish_date = parse_date(raw_date)
    except ValueError as exc:
        raise MalformedDocument(
            f"{slug}: line 3 is not a YYYY-MM-DD date: {raw_date!r}", slug=slug
        ) from exc
    if closing != DELIMITER:
        raise MalformedDocument(f"{slug}: line 4 must be {DELIMITER!r}", slug=slug)

    return ArticleMetadata(title=title, slug=slug, publish_date=publish_date)


def _read_header_line(stream: BinaryIO, idx: int, slug: str) -> str:
    raw = stream.readline(MAX_HEADER_LINE + 2)
    if not raw.endswith(b"\n"):
        if len(raw) >= MAX_HEADER_LINE + 2:
            raise MalformedDocument(f"{slug}: header line {idx + 1} is too long", slug=slug)
        raise MalformedDocument(f"{slug}: header truncated at line {idx + 1}", slug=slug)
    raw = raw[:-1]
    if raw.endswith(b"\r"):
        raw = raw[:-1]
    if len(raw) > MAX_HEADER_LINE:
        raise MalformedDocument(f"{slug}: header line {idx + 1} is too long", slug=slug)
    try:
        return raw.decode(ENCODING)
    except UnicodeDecodeError as exc:
        raise MalformedDocument(f"{slug}: line {idx + 1} is not valid UTF-8", slug=slug) from exc


def _check_header_value(value: str, field: str, slug: str) -> None:
    if "\n" in value or "\r" in value:
        raise ValidationError(f"{field} must be a single line", slug=slug)
    if value == DELIMITER:
        raise ValidationError(f"{field} cannot be {DELIMITER!r}", slug=slug)
    if len(value.encode(ENCODING)) > MAX_HEADER_LINE:
        raise ValidationError(f"{field} is longer than {MAX_HEADER_LINE} bytes", slug=slug)
