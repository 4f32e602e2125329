"""
Configuration management using YAML files and dataclasses.

This module defines all configuration dataclasses and provides loading
from YAML files with defaults. Configuration sections:
- StoreConfig: Article directory
- ServerConfig: HTTP bind address and port
- AuthConfig: Admin credentials for HTTP Basic auth
- RenderConfig: Markdown converter settings
- LoggingConfig: Logging behavior
- AppConfig: Root configuration container
"""

from __future__ import annotations

from dataclasses import dataclass, field
import logging
import os
from typing import Any

import yaml

log = logging.getLogger("mdcms.config")


@dataclass
class StoreConfig:
    """Configuration for the article store.

    Attributes:
        data_dir: Directory holding one ``<slug>.md`` file per article
    """

    data_dir: str = "data"


@dataclass
class ServerConfig:
    """Configuration for the HTTP server.

    Attributes:
        host: Bind address
        port: Listen port, used when the port environment variable is unset
        port_env: Environment variable that overrides ``port``
        keep_alive_timeout: Seconds an idle keep-alive connection stays open
        graceful_shutdown_timeout: Seconds in-flight requests get to finish on shutdown
    """

    host: str = "0.0.0.0"
    port: int = 8080
    port_env: str = "PORT"
    keep_alive_timeout: int = 60
    graceful_shutdown_timeout: int = 30


@dataclass
class AuthConfig:
    """Configuration for admin authentication.

    Attributes:
        username: Admin username
        password: Admin password; when unset, every admin request is refused
        username_env: Environment variable that overrides ``username``
        password_env: Environment variable that overrides ``password``
    """

    username: str = "admin"
    password: str | None = None
    username_env: str = "MDCMS_ADMIN_USERNAME"
    password_env: str = "MDCMS_ADMIN_PASSWORD"


@dataclass
class RenderConfig:
    """Configuration for markdown rendering.

    Attributes:
        extensions: python-markdown extension names
        allow_raw_html: Pass raw HTML in article bodies through unescaped
    """

    extensions: list[str] = field(default_factory=lambda: ["extra", "sane_lists", "smarty"])
    allow_raw_html: bool = False


@dataclass
class LoggingConfig:
    """Configuration for logging behavior.

    Attributes:
        level: Logging level ("DEBUG", "INFO", "WARNING", "ERROR")
        console: Whether to log to console
        file: Whether to log to file
        format: Log file format ("jsonl" or "plain")
        filename: Name of the log file
        directory: Directory for the log file
    """

    level: str = "INFO"
    console: bool = True
    file: bool = False
    format: str = "jsonl"
    filename: str = "mdcms.jsonl"
    directory: str = "logs"


@dataclass
class AppConfig:
    """Root configuration container aggregating all config sections."""

    store: StoreConfig = field(default_factory=StoreConfig)
    server: ServerConfig = field(default_factory=ServerConfig)
    auth: AuthConfig = field(default_factory=AuthConfig)
    render: RenderConfig = field(default_factory=RenderConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def load_config(path: str | None) -> AppConfig:
    """Load configuration from a YAML file with defaults."""
    if not path:
        return AppConfig()

    with open(path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}

    return _merge_config(AppConfig(), raw)


def _merge_config(base: AppConfig, raw: dict[str, Any]) -> AppConfig:
    """Merge raw YAML config into base AppConfig."""
    data = _asdict(base)
    for key, value in raw.items():
        if key not in data:
            continue
        if isinstance(value, dict) and isinstance(data[key], dict):
            data[key].update({k: v for k, v in value.items() if k in data[key]})
        else:
            data[key] = value
    return _fromdict(data)


def _asdict(cfg: AppConfig) -> dict[str, Any]:
    """Convert AppConfig to nested dictionary."""
    return {
        "store": {
            "data_dir": cfg.store.data_dir,
        },
        "server": {
            "host": cfg.server.host,
            "port": cfg.server.port,
            "port_env": cfg.server.port_env,
            "keep_alive_timeout": cfg.server.keep_alive_timeout,
            "graceful_shutdown_timeout": cfg.server.graceful_shutdown_timeout,
        },
        "auth": {
            "username": cfg.auth.username,
            "password": cfg.auth.password,
            "username_env": cfg.auth.username_env,
            "password_env": cfg.auth.password_env,
        },
        "render": {
            "extensions": list(cfg.render.extensions),
            "allow_raw_html": cfg.render.allow_raw_html,
        },
        "logging": {
            "level": cfg.logging.level,
            "console": cfg.logging.console,
            "file": cfg.logging.file,
            "format": cfg.logging.format,
            "filename": cfg.logging.filename,
            "directory": cfg.logging.directory,
        },
    }


def _fromdict(data: dict[str, Any]) -> AppConfig:
    """Reconstruct AppConfig from nested dictionary."""
    return AppConfig(
        store=StoreConfig(**data["store"]),
        server=ServerConfig(**data["server"]),
        auth=AuthConfig(**data["auth"]),
        render=RenderConfig(**data["render"]),
        logging=LoggingConfig(**data["logging"]),
    )


def resolve_port(cfg: ServerConfig) -> int:
    """Port from the environment, falling back to the configured one.

    An unparseable environment value is reported and replaced by 8080.
    """
    raw = os.getenv(cfg.port_env)
    if raw is None or raw == "":
        return cfg.port
    try:
        return int(raw)
    except ValueError:
        log.warning("Invalid %s environment variable: %s. Defaulting to 8080.", cfg.port_env, raw)
        return 8080


def resolve_credentials(cfg: AuthConfig) -> tuple[str, str | None]:
    """Get admin credentials, environment variables taking precedence."""
    username = os.getenv(cfg.username_env) or cfg.username
    password = os.getenv(cfg.password_env) or cfg.password
    return username, password
