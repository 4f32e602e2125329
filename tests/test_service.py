"""Tests for article workflows."""

from datetime import date
from pathlib import Path

import pytest

from mdcms.core.errors import NotFound, Unpublished, ValidationError
from mdcms.service import ArticleService, parse_submitted_date, validate_title
from mdcms.store.repository import ArticleRepository

TODAY = date(2024, 5, 1)


@pytest.fixture
def service(tmp_path: Path) -> ArticleService:
    repository = ArticleRepository(tmp_path)
    repository.ensure_store()
    return ArticleService(repository)


def test_create_hello_world_scenario(service: ArticleService) -> None:
    article = service.create("Hello World", "Body", None, TODAY)

    assert article.slug == "hello-world"
    assert article.publish_date == TODAY
    assert [i.slug for i in service.list_published(date(2024, 5, 1))] == ["hello-world"]
    assert service.list_published(date(2024, 4, 30)) == []


def test_create_then_delete_scenario(service: ArticleService) -> None:
    service.create("Hello World", "", "", TODAY)
    service.delete("hello-world")

    with pytest.raises(NotFound):
        service.repository.load("hello-world")


def test_future_article_is_hidden_from_public_but_not_admin(service: ArticleService) -> None:
    service.create("Far Future", "soon", "2099-01-01", TODAY)

    with pytest.raises(Unpublished):
        service.get_public("far-future", TODAY)
    assert service.get_admin("far-future").title == "Far Future"


def test_get_public_missing_is_not_found(service: ArticleService) -> None:
    with pytest.raises(NotFound):
        service.get_public("nothing-here", TODAY)


@pytest.mark.parametrize("title", ["", "   ", None, "two\nlines", "---", "!!!"])
def test_create_rejects_invalid_titles_without_writing(service: ArticleService, title: str | None) -> None:
    with pytest.raises(ValidationError):
        service.create(title, "body", None, TODAY)
    assert service.repository.list_slugs() == []


def test_create_rejects_bad_date_without_writing(service: ArticleService) -> None:
    with pytest.raises(ValidationError):
        service.create("Title", "body", "May 1st", TODAY)
    assert service.repository.list_slugs() == []


def test_create_never_overwrites(service: ArticleService) -> None:
    service.create("Hello World", "first", None, TODAY)
    with pytest.raises(ValidationError):
        service.create("hello world!", "second", None, TODAY)
    assert service.get_admin("hello-world").body == "first"


def test_update_keeps_slug_when_title_changes(service: ArticleService) -> None:
    service.create("Hello World", "v1", "2024-04-01", TODAY)
    updated = service.update("hello-world", "Goodbye World", "v2", "", TODAY)

    assert updated.slug == "hello-world"
    assert updated.publish_date == date(2024, 4, 1)
    assert service.repository.list_slugs() == ["hello-world"]
    assert service.get_admin("hello-world").title == "Goodbye World"


def test_update_sets_new_date(service: ArticleService) -> None:
    service.create("Hello World", "v1", None, TODAY)
    updated = service.update("hello-world", "Hello World", "v1", "2030-12-31", TODAY)
    assert updated.publish_date == date(2030, 12, 31)


def test_update_missing_slug_creates_it(service: ArticleService) -> None:
    article = service.update("new-page", "New Page", "text", None, TODAY)
    assert article.publish_date == TODAY
    assert service.get_admin("new-page").body == "text"


def test_update_rejects_invalid_slug(service: ArticleService) -> None:
    with pytest.raises(ValidationError):
        service.update("Bad Slug", "Title", "", None, TODAY)


def test_form_bodies_are_stored_with_unix_newlines(service: ArticleService) -> None:
    service.create("Lines", "a\r\nb\r\n", None, TODAY)
    assert service.get_admin("lines").body == "a\nb\n"


def test_validate_title_strips_whitespace() -> None:
    assert validate_title("  Title  ") == "Title"


def test_parse_submitted_date() -> None:
    assert parse_submitted_date("", TODAY) == TODAY
    assert parse_submitted_date(None, TODAY) == TODAY
    assert parse_submitted_date(" 2024-01-02 ", TODAY) == date(2024, 1, 2)
    with pytest.raises(ValidationError):
        parse_submitted_date("2024-02-30", TODAY)
