"""Tests for slug derivation."""

import re

import pytest

from mdcms.core.slug import is_valid_slug, make_slug

SLUG_CHARSET = re.compile(r"[a-z0-9-]*")


def test_make_slug_basic_title() -> None:
    assert make_slug("Hello World") == "hello-world"


def test_make_slug_collapses_and_trims_separators() -> None:
    assert make_slug("  --Hello,   World!!  ") == "hello-world"
    assert make_slug("foo___bar") == "foo-bar"


def test_make_slug_transliterates_to_ascii() -> None:
    assert make_slug("Crème Brûlée") == "creme-brulee"
    assert make_slug("Ünïcödé 2024") == "unicode-2024"


def test_make_slug_empty_for_symbol_only_input() -> None:
    assert make_slug("") == ""
    assert make_slug("!!! ???") == ""


@pytest.mark.parametrize(
    "title",
    ["Hello World", "Crème Brûlée", "  a -- b  ", "Python 3.12 release notes", "你好 世界", "---", "x"],
)
def test_make_slug_is_idempotent_and_in_charset(title: str) -> None:
    slug = make_slug(title)
    assert SLUG_CHARSET.fullmatch(slug)
    assert make_slug(slug) == slug
    assert not slug.startswith("-")
    assert not slug.endswith("-")
    assert "--" not in slug


def test_is_valid_slug() -> None:
    assert is_valid_slug("hello-world")
    assert is_valid_slug("2024")
    assert not is_valid_slug("")
    assert not is_valid_slug("Hello")
    assert not is_valid_slug("../etc/passwd")
    assert not is_valid_slug("a b")
