"""Tests for settings and the per-user .env helpers."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest
from pydantic import ValidationError

from core import config
from core.config import DEFAULT_API_URL, AppSettings, normalize_api_url, write_user_env_vars


def test_defaults_match_local_api(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("USERDATA_API_URL")
    monkeypatch.delenv("USERDATA_HTTP_TIMEOUT_SECONDS")

    settings = AppSettings(_env_file=None)

    assert settings.api_url == DEFAULT_API_URL == "http://localhost:3000"
    assert settings.http_timeout_seconds == 20.0
    assert settings.log_level == "WARNING"


def test_env_overrides_and_normalizes(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("USERDATA_API_URL", "https://api.example.com/")
    monkeypatch.setenv("USERDATA_LOG_LEVEL", "debug")

    settings = AppSettings(_env_file=None)

    assert settings.api_url == "https://api.example.com"
    assert settings.log_level == "DEBUG"


def test_reads_env_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("USERDATA_API_URL")
    env_file = tmp_path / ".env"
    env_file.write_text("USERDATA_API_URL=http://from-file:9000\n", encoding="utf-8")

    assert AppSettings(_env_file=env_file).api_url == "http://from-file:9000"


def test_rejects_non_positive_timeout() -> None:
    with pytest.raises(ValidationError):
        AppSettings(_env_file=None, http_timeout_seconds=0)


def test_write_user_env_vars_merges_and_sorts(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    env_path = tmp_path / "cfg" / ".env"
    env_path.parent.mkdir()
    env_path.write_text("# old\nUSERDATA_USER_AGENT='bot/1'\nnot a pair\n", encoding="utf-8")
    monkeypatch.setattr(config, "get_user_env_file", lambda: env_path)

    written = write_user_env_vars({"USERDATA_API_URL": "http://x:1"})

    assert written == env_path
    assert env_path.read_text(encoding="utf-8").splitlines() == [
        "# userdata-client user config (.env)",
        "USERDATA_API_URL=http://x:1",
        "USERDATA_USER_AGENT=bot/1",
    ]


@pytest.mark.skipif(not sys.platform.startswith("linux"), reason="XDG layout is Linux-only")
def test_user_config_dir_honours_xdg(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))

    assert config.get_user_config_dir() == tmp_path / "userdata-client"
    assert config.get_user_env_file() == tmp_path / "userdata-client" / ".env"


@pytest.mark.parametrize(
    "value",
    [
        "http://localhost:99999",
        "http://localhost:0",
        "http://localhost:abc",
        "localhost:3000",
        "ftp://files.example.com",
        "http:///users",
    ],
)
def test_rejects_malformed_api_url(value: str) -> None:
    with pytest.raises(ValueError):
        normalize_api_url(value)
    with pytest.raises(ValidationError):
        AppSettings(_env_file=None, api_url=value)


def test_normalize_api_url_keeps_path_prefix() -> None:
    assert normalize_api_url(" https://gw.example.com:8443/api/ ") == "https://gw.example.com:8443/api"


def test_write_user_env_vars_none_removes_key(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    env_path = tmp_path / ".env"
    env_path.write_text("USERDATA_API_URL=http://old:1\nUSERDATA_LOG_LEVEL=INFO\n", encoding="utf-8")
    monkeypatch.setattr(config, "get_user_env_file", lambda: env_path)

    write_user_env_vars({"USERDATA_API_URL": None, "USERDATA_MISSING": None})

    assert env_path.read_text(encoding="utf-8").splitlines() == [
        "# userdata-client user config (.env)",
        "USERDATA_LOG_LEVEL=INFO",
    ]


def test_write_user_env_vars_quotes_and_reads_export(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    env_path = tmp_path / ".env"
    env_path.write_text("export USERDATA_LOG_LEVEL=DEBUG\n", encoding="utf-8")
    monkeypatch.setattr(config, "get_user_env_file", lambda: env_path)

    write_user_env_vars({"USERDATA_USER_AGENT": "my agent #2"})

    lines = env_path.read_text(encoding="utf-8").splitlines()
    assert lines[1:] == [
        "USERDATA_LOG_LEVEL=DEBUG",
        'USERDATA_USER_AGENT="my agent #2"',
    ]
    monkeypatch.delenv("USERDATA_LOG_LEVEL")
    loaded = AppSettings(_env_file=env_path)
    assert loaded.user_agent == "my agent #2"
    assert loaded.log_level == "DEBUG"
