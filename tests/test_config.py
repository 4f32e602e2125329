"""Tests for YAML configuration loading."""

from pathlib import Path

import pytest

from mdcms.config import (
    AppConfig,
    AuthConfig,
    ServerConfig,
    load_config,
    resolve_credentials,
    resolve_port,
)


def test_load_config_defaults_without_path() -> None:
    cfg = load_config(None)
    assert cfg == AppConfig()
    assert cfg.store.data_dir == "data"
    assert cfg.server.port == 8080
    assert cfg.render.allow_raw_html is False


def test_load_config_merges_sections(tmp_path: Path) -> None:
    path = tmp_path / "config.yaml"
    path.write_text(
        "store:\n"
        "  data_dir: /srv/articles\n"
        "server:\n"
        "  port: 9000\n"
        "render:\n"
        "  extensions: [tables]\n"
        "  unknown_key: 1\n"
        "unknown_section:\n"
        "  x: 1\n",
        encoding="utf-8",
    )

    cfg = load_config(str(path))

    assert cfg.store.data_dir == "/srv/articles"
    assert cfg.server.port == 9000
    assert cfg.server.host == "0.0.0.0"
    assert cfg.render.extensions == ["tables"]
    assert cfg.logging.level == "INFO"


def test_load_config_empty_file(tmp_path: Path) -> None:
    path = tmp_path / "empty.yaml"
    path.write_text("", encoding="utf-8")
    assert load_config(str(path)) == AppConfig()


def test_resolve_port_prefers_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PORT", "9090")
    assert resolve_port(ServerConfig(port=8000)) == 9090


def test_resolve_port_falls_back_to_config(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("PORT", raising=False)
    assert resolve_port(ServerConfig(port=8000)) == 8000


def test_resolve_port_invalid_environment_defaults_to_8080(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PORT", "not-a-port")
    assert resolve_port(ServerConfig(port=8000)) == 8080


def test_resolve_credentials(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("MDCMS_ADMIN_USERNAME", raising=False)
    monkeypatch.delenv("MDCMS_ADMIN_PASSWORD", raising=False)
    assert resolve_credentials(AuthConfig()) == ("admin", None)
    assert resolve_credentials(AuthConfig(password="file-secret")) == ("admin", "file-secret")

    monkeypatch.setenv("MDCMS_ADMIN_USERNAME", "editor")
    monkeypatch.setenv("MDCMS_ADMIN_PASSWORD", "env-secret")
    assert resolve_credentials(AuthConfig(password="file-secret")) == ("editor", "env-secret")


def test_example_config_matches_defaults() -> None:
    example = Path(__file__).resolve().parents[1] / "config.example.yaml"
    assert load_config(str(example)) == AppConfig()
