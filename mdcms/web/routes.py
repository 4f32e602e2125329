"""
Public and admin routes.

Public:
    GET  /                      redirect to /articles
    GET  /articles              published articles
    GET  /articles/{slug}       rendered article
Admin (HTTP Basic):
    GET  /admin                 redirect to /admin/articles
    GET  /admin/articles        all articles, ?action=create shows the create form
    POST /admin/articles        create
    GET  /admin/articles/{slug} edit form
    POST /admin/articles/{slug} ?action=edit (default) saves, ?action=delete deletes

HTML forms cannot send PUT or DELETE, hence the ``action`` query parameter.
"""

from __future__ import annotations

import logging
from urllib.parse import quote

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import RedirectResponse
from markupsafe import Markup

from mdcms.core.errors import NotFound, ValidationError
from mdcms.core.types import Article
from mdcms.core.visibility import format_date, is_public
from mdcms.service import ArticleService
from mdcms.utils.logging import log_event

from .auth import require_admin
from .views import render_page

logger = logging.getLogger("mdcms.web")

public_router = APIRouter()
admin_router = APIRouter(prefix="/admin", dependencies=[Depends(require_admin)])


def _service(request: Request) -> ArticleService:
    return request.app.state.service


def _today(request: Request):
    return request.app.state.clock()


def _form(title: str = "", body: str = "", publish_date: str = "") -> dict[str, str]:
    return {"title": title, "body": body, "publish_date": publish_date}


def _form_from_article(article: Article) -> dict[str, str]:
    return _form(article.title, article.body, format_date(article.publish_date))


# public


@public_router.get("/")
def index():
    return RedirectResponse("/articles", status_code=302)


@public_router.get("/articles")
def list_published(request: Request):
    today = _today(request)
    articles = _service(request).list_published(today)
    return render_page(request, "articles.html", articles=articles)


@public_router.get("/articles/{slug}")
def view_article(request: Request, slug: str):
    try:
        article = _service(request).get_public(slug, _today(request))
    except NotFound:
        log_event(logger, "article_missing_redirect", slug=slug)
        return RedirectResponse(
            f"/admin/articles?action=create&slug={quote(slug)}",
            status_code=303,
        )
    body_html = request.app.state.renderer.render(article.body, slug=article.slug)
    return render_page(request, "article.html", article=article, body_html=Markup(body_html))


# admin


@admin_router.get("")
@admin_router.get("/")
def admin_index():
    return RedirectResponse("/admin/articles", status_code=302)


@admin_router.get("/articles")
def admin_list(request: Request, action: str | None = None, slug: str | None = None):
    today = _today(request)
    if action == "create":
        return render_page(
            request,
            "edit.html",
            form=_form(title=slug or "", publish_date=format_date(today)),
            action_url="/admin/articles",
            slug=None,
        )
    articles = _service(request).list_all()
    rows = [{"meta": item, "public": is_public(item, today)} for item in articles]
    return render_page(request, "admin_articles.html", rows=rows)


@admin_router.post("/articles")
def admin_create(
    request: Request,
    title: str = Form(""),
    body: str = Form(""),
    publish_date: str = Form(""),
    user: str = Depends(require_admin),
):
    try:
        article = _service(request).create(title, body, publish_date, _today(request))
    except ValidationError as exc:
        return render_page(
            request,
            "edit.html",
            status_code=400,
            form=_form(title, body, publish_date),
            action_url="/admin/articles",
            slug=None,
            error=str(exc),
        )
    log_event(logger, "article_created", slug=article.slug, user=user)
    return RedirectResponse(f"/admin/articles/{article.slug}", status_code=303)


@admin_router.get("/articles/{slug}")
def admin_edit(request: Request, slug: str):
    service = _service(request)
    try:
        article = service.get_admin(slug)
        exists = True
    except NotFound:
        service.repository.path_for(slug)
        article = Article(title=slug, slug=slug, publish_date=_today(request))
        exists = False
    return render_page(
        request,
        "edit.html",
        form=_form_from_article(article),
        action_url=f"/admin/articles/{slug}",
        slug=slug,
        exists=exists,
    )


@admin_router.post("/articles/{slug}")
def admin_update(
    request: Request,
    slug: str,
    action: str = "edit",
    title: str = Form(""),
    body: str = Form(""),
    publish_date: str = Form(""),
    user: str = Depends(require_admin),
):
    service = _service(request)
    service.repository.path_for(slug)
    if action == "delete":
        service.delete(slug)
        log_event(logger, "article_deleted", slug=slug, user=user)
        return RedirectResponse("/admin/articles", status_code=303)
    if action != "edit":
        raise ValidationError(f"unknown action {action!r}", slug=slug)

    try:
        service.update(slug, title, body, publish_date, _today(request))
    except ValidationError as exc:
        return render_page(
            request,
            "edit.html",
            status_code=400,
            form=_form(title, body, publish_date),
            action_url=f"/admin/articles/{slug}",
            slug=slug,
            exists=service.repository.exists(slug),
            error=str(exc),
        )
    log_event(logger, "article_saved", slug=slug, user=user)
    return RedirectResponse(f"/admin/articles/{slug}", status_code=303)
