"""FastAPI application factory.

Everything the handlers need (service, renderer, templates, clock and the
admin predicate) is built here once and attached to ``app.state``.
"""

from __future__ import annotations

import logging
from datetime import date
from pathlib import Path
from typing import Callable

from fastapi import FastAPI, Request
from fastapi.staticfiles import StaticFiles

from mdcms.config import AppConfig, resolve_credentials
from mdcms.core.errors import (
    MalformedDocument,
    MdcmsError,
    NotFound,
    RenderError,
    StorageError,
    Unpublished,
    ValidationError,
)
from mdcms.output.renderer import MarkdownRenderer
from mdcms.service import ArticleService
from mdcms.store.repository import ArticleRepository
from mdcms.utils.logging import log_event

from .auth import Authorizer, credentials_checker
from .routes import admin_router, public_router
from .views import STATIC_DIR, build_environment, render_page

logger = logging.getLogger("mdcms.web")

# (status code, page heading, show the error message to the visitor)
ERROR_PAGES: dict[type[MdcmsError], tuple[int, str, bool]] = {
    NotFound: (404, "Article not found", True),
    Unpublished: (404, "Not yet published", False),
    ValidationError: (400, "Invalid request", True),
    MalformedDocument: (500, "Malformed article", False),
    StorageError: (500, "Storage error", False),
    RenderError: (500, "Could not render article", False),
}


def create_app(
    cfg: AppConfig | None = None,
    *,
    clock: Callable[[], date] | None = None,
    is_authorized: Authorizer | None = None,
) -> FastAPI:
    """Build the web application.

    Args:
        cfg: Application configuration, defaults when omitted
        clock: Returns "today" for publication gating, ``date.today`` by default
        is_authorized: Admin credential predicate; built from ``cfg.auth`` when omitted

    Returns:
        Configured FastAPI instance
    """
    cfg = cfg or AppConfig()

    repository = ArticleRepository(Path(cfg.store.data_dir))
    repository.ensure_store()

    if is_authorized is None:
        username, password = resolve_credentials(cfg.auth)
        if password is None:
            logger.warning(
                "No admin password configured (set %s); admin pages are locked.",
                cfg.auth.password_env,
            )
        is_authorized = credentials_checker(username, password)

    app = FastAPI(title="mdcms", docs_url=None, redoc_url=None, openapi_url=None)
    app.state.config = cfg
    app.state.service = ArticleService(repository)
    app.state.renderer = MarkdownRenderer(cfg.render)
    app.state.templates = build_environment()
    app.state.clock = clock or date.today
    app.state.is_authorized = is_authorized

    app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")
    app.include_router(public_router)
    app.include_router(admin_router)
    app.add_exception_handler(MdcmsError, handle_mdcms_error)

    log_event(logger, "app_ready", data_dir=str(repository.root))
    return app


def handle_mdcms_error(request: Request, exc: MdcmsError):
    status_code, heading, show_message = _error_page_for(exc)
    level = logging.ERROR if status_code >= 500 else logging.INFO
    log_event(
        logger,
        "request_failed",
        level=level,
        error=type(exc).__name__,
        detail=str(exc),
        slug=exc.slug,
        path=request.url.path,
    )
    message = str(exc) if show_message else None
    if isinstance(exc, Unpublished):
        message = "This article exists but is not published yet."
    return render_page(
        request,
        "error.html",
        status_code=status_code,
        heading=heading,
        message=message,
    )


def _error_page_for(exc: MdcmsError) -> tuple[int, str, bool]:
    for cls in type(exc).__mro__:
        if cls in ERROR_PAGES:
            return ERROR_PAGES[cls]
    return 500, "Internal error", False
