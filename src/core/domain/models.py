"""Domain models (Pydantic v2)."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, Field


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class UserDataSnapshot(BaseModel):
    """A fetched user payload plus where and when it came from.

    Only used when exporting to disk; `get_user_data` returns the raw body.
    """

    source_url: str = Field(
        ...,
        min_length=1,
        description="Full URL the payload was fetched from.",
    )
    fetched_at: datetime = Field(
        default_factory=_utcnow,
        description="Fetch time (UTC).",
    )
    data: Any = Field(
        default=None,
        description="Response body exactly as returned by the API.",
    )
