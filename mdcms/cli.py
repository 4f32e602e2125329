"""
Command-line interface for mdcms.

Uses Typer to serve the site and to manage articles from a terminal.
Supports loading .env files for admin credentials and the port.
"""

from __future__ import annotations

from datetime import date
from pathlib import Path

import typer
import uvicorn
from dotenv import load_dotenv
from rich.console import Console
from rich.table import Table

from .config import AppConfig, load_config, resolve_port
from .core.errors import MdcmsError
from .core.visibility import format_date, is_public
from .service import ArticleService
from .store.repository import ArticleRepository
from .utils.logging import setup_logging
from .web.app import create_app

app = typer.Typer(add_completion=False)
console = Console()

ConfigOption = typer.Option(None, "--config", "-c", exists=True, help="YAML config file.")
DataDirOption = typer.Option(None, "--data-dir", "-d", help="Article directory (overrides config).")


def _load(config: Path | None, data_dir: Path | None) -> AppConfig:
    load_dotenv()
    cfg = load_config(str(config) if config else None)
    if data_dir is not None:
        cfg.store.data_dir = str(data_dir)
    return cfg


def _service(cfg: AppConfig) -> ArticleService:
    return ArticleService(ArticleRepository(Path(cfg.store.data_dir)))


def _fail(exc: MdcmsError) -> typer.Exit:
    console.print(f"[red]{type(exc).__name__}:[/red] {exc}")
    return typer.Exit(code=1)


@app.command()
def serve(
    config: Path | None = ConfigOption,
    data_dir: Path | None = DataDirOption,
    host: str | None = typer.Option(None, "--host", help="Bind address."),
    port: int | None = typer.Option(None, "--port", "-p", help="Port (overrides PORT and config)."),
    log_level: str | None = typer.Option(None, "--log-level", help="Logging level."),
):
    """Serve the public site and the admin pages."""
    cfg = _load(config, data_dir)
    if log_level:
        cfg.logging.level = log_level
    setup_logging(cfg.logging)

    bind_host = host or cfg.server.host
    bind_port = port if port is not None else resolve_port(cfg.server)
    console.print(f"Serving {cfg.store.data_dir} on http://{bind_host}:{bind_port}")
    uvicorn.run(
        create_app(cfg),
        host=bind_host,
        port=bind_port,
        log_level=cfg.logging.level.lower(),
        timeout_keep_alive=cfg.server.keep_alive_timeout,
        timeout_graceful_shutdown=cfg.server.graceful_shutdown_timeout,
    )


@app.command("list")
def list_articles(
    config: Path | None = ConfigOption,
    data_dir: Path | None = DataDirOption,
    all_: bool = typer.Option(False, "--all", "-a", help="Include scheduled articles."),
):
    """List articles, newest first."""
    cfg = _load(config, data_dir)
    service = _service(cfg)
    today = date.today()
    try:
        items = service.list_all() if all_ else service.list_published(today)
    except MdcmsError as exc:
        raise _fail(exc) from exc

    table = Table("Title", "Slug", "Date", "Status")
    for item in items:
        status = "published" if is_public(item, today) else "scheduled"
        table.add_row(item.title, item.slug, format_date(item.publish_date), status)
    console.print(table)


@app.command()
def new(
    title: str = typer.Argument(..., help="Article title; the slug is derived from it."),
    publish_date: str | None = typer.Option(None, "--date", help="Publish date, YYYY-MM-DD."),
    body_file: Path | None = typer.Option(None, "--body-file", exists=True, readable=True),
    config: Path | None = ConfigOption,
    data_dir: Path | None = DataDirOption,
):
    """Create an article."""
    cfg = _load(config, data_dir)
    service = _service(cfg)
    try:
        body = body_file.read_text(encoding="utf-8") if body_file else ""
    except UnicodeDecodeError as exc:
        raise typer.BadParameter("body file is not valid UTF-8", param_hint="--body-file") from exc
    try:
        service.repository.ensure_store()
        article = service.create(title, body, publish_date, date.today())
    except MdcmsError as exc:
        raise _fail(exc) from exc
    console.print(f"Created {article.slug} ({format_date(article.publish_date)})")


@app.command()
def delete(
    slug: str = typer.Argument(...),
    config: Path | None = ConfigOption,
    data_dir: Path | None = DataDirOption,
):
    """Delete an article."""
    cfg = _load(config, data_dir)
    try:
        _service(cfg).delete(slug)
    except MdcmsError as exc:
        raise _fail(exc) from exc
    console.print(f"Deleted {slug}")


if __name__ == "__main__":
    app()
