"""Tests for publication gating."""

from datetime import date, timedelta

import pytest

from mdcms.core.errors import Unpublished
from mdcms.core.types import Article, ArticleMetadata
from mdcms.core.visibility import ensure_public, format_date, is_public, parse_date


def test_is_public_on_and_after_publish_date() -> None:
    meta = ArticleMetadata(title="T", slug="t", publish_date=date(2024, 5, 1))
    assert is_public(meta, date(2024, 5, 1))
    assert is_public(meta, date(2024, 5, 2))
    assert not is_public(meta, date(2024, 4, 30))


def test_is_public_is_monotonic_in_today() -> None:
    meta = ArticleMetadata(title="T", slug="t", publish_date=date(2024, 2, 28))
    start = date(2024, 1, 1)
    seen_public = False
    for offset in range(400):
        visible = is_public(meta, start + timedelta(days=offset))
        if seen_public:
            assert visible
        seen_public = seen_public or visible
    assert seen_public


def test_ensure_public_raises_unpublished_for_future_articles() -> None:
    article = Article(title="Later", slug="later", publish_date=date(2099, 1, 1), body="")
    with pytest.raises(Unpublished) as exc_info:
        ensure_public(article, date(2024, 5, 1))
    assert exc_info.value.slug == "later"

    ensure_public(article, date(2099, 1, 1))


def test_format_date_is_fixed_width() -> None:
    assert format_date(date(2024, 5, 1)) == "2024-05-01"
    assert format_date(date(33, 1, 9)) == "0033-01-09"


def test_format_order_matches_chronological_order() -> None:
    days = [date(999, 12, 31), date(1000, 1, 1), date(2024, 1, 9), date(2024, 1, 10), date(2024, 10, 1)]
    assert sorted(days, key=format_date) == sorted(days)


def test_parse_date_strict() -> None:
    assert parse_date("2024-05-01") == date(2024, 5, 1)
    for bad in ["2024-5-1", "2024/05/01", "20240501", "2024-13-01", "", "2024-05-01T00:00"]:
        with pytest.raises(ValueError):
            parse_date(bad)
