"""Settings for the users API client (pydantic-settings).

Sources, highest priority first: explicit keyword arguments, `USERDATA_*`
environment variables, the project `.env`, the per-user `.env` managed by
`userdata doctor setup`.
"""

from __future__ import annotations

import os
import sys
from collections.abc import Mapping
from pathlib import Path

import httpx
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_API_URL = "http://localhost:3000"

_APP_DIR_NAME = "userdata-client"
_ENV_HEADER = "# userdata-client user config (.env)"


def get_user_config_dir() -> Path:
    if sys.platform.startswith("win"):
        return Path(os.environ.get("APPDATA", str(Path.home()))) / _APP_DIR_NAME
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / _APP_DIR_NAME
    return Path(os.environ.get("XDG_CONFIG_HOME") or Path.home() / ".config") / _APP_DIR_NAME


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def normalize_api_url(value: str) -> str:
    """Validate an API base URL and drop its trailing slash.

    Raises `ValueError` unless it is an absolute http(s) URL with a host and
    a port in 1..65535.
    """

    candidate = value.strip().rstrip("/")
    try:
        url = httpx.URL(candidate)
    except httpx.InvalidURL as exc:
        raise ValueError(f"invalid API URL {value!r}: {exc}") from exc
    if url.scheme not in ("http", "https"):
        raise ValueError(f"API URL must use http or https: {value!r}")
    if not url.host:
        raise ValueError(f"API URL has no host: {value!r}")
    if url.port is not None and not 0 < url.port <= 65535:
        raise ValueError(f"API URL port out of range: {value!r}")
    return candidate


def _parse_env_lines(text: str) -> dict[str, str]:
    """Parse `KEY=value` lines; accepts shell-style `export KEY=value`."""

    data: dict[str, str] = {}
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        if line.startswith("export "):
            line = line[len("export "):]
        key, value = (part.strip() for part in line.split("=", 1))
        if key:
            data[key] = value.strip('"').strip("'")
    return data


def _format_env_value(value: str) -> str:
    # python-dotenv treats an unquoted " #" as the start of a comment.
    if not value or any(ch.isspace() for ch in value) or "#" in value:
        return '"' + value.replace('"', '\\"') + '"'
    return value


def write_user_env_vars(values: Mapping[str, str | None]) -> Path:
    """Merge `values` into the per-user .env and return its path.

    A `None` value removes the key, so settings fall back to their defaults.
    """

    env_path = get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)

    existing: dict[str, str] = {}
    if env_path.exists():
        existing = _parse_env_lines(env_path.read_text(encoding="utf-8"))

    for key, value in values.items():
        if value is None:
            existing.pop(key, None)
        else:
            existing[key] = value

    lines = [_ENV_HEADER]
    lines.extend(f"{key}={_format_env_value(existing[key])}" for key in sorted(existing))
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return env_path


class AppSettings(BaseSettings):
    """Central application settings.

    The defaults reproduce the stock setup (API on localhost:3000), so an
    empty environment behaves exactly like the unconfigured client.
    """

    model_config = SettingsConfigDict(
        env_prefix="USERDATA_",
        extra="ignore",
        case_sensitive=False,
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    api_url: str = Field(
        default=DEFAULT_API_URL,
        min_length=8,
        description="Base URL of the users API.",
    )
    http_timeout_seconds: float = Field(
        default=20.0,
        gt=0,
        description="Per-request timeout (seconds).",
    )
    user_agent: str = Field(
        default="userdata-client/0.1",
        min_length=1,
        description="User-Agent sent with every request.",
    )
    log_level: str = Field(
        default="WARNING",
        description="Stdlib logging level name (DEBUG, INFO, WARNING...).",
    )

    @field_validator("api_url")
    @classmethod
    def _validate_api_url(cls, value: str) -> str:
        return normalize_api_url(value)

    @field_validator("log_level")
    @classmethod
    def _normalize_level(cls, value: str) -> str:
        return value.strip().upper()
