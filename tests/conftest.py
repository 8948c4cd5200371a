"""Shared fixtures: isolate settings from the developer's environment."""

from __future__ import annotations

import pytest

from core.config import AppSettings

API_URL = "http://localhost:3000"


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Environment variables win over any `.env` file on the machine."""
    monkeypatch.setenv("USERDATA_API_URL", API_URL)
    monkeypatch.setenv("USERDATA_LOG_LEVEL", "WARNING")
    monkeypatch.setenv("USERDATA_HTTP_TIMEOUT_SECONDS", "5")
    monkeypatch.delenv("USERDATA_USER_AGENT", raising=False)


@pytest.fixture
def settings() -> AppSettings:
    return AppSettings(_env_file=None)
