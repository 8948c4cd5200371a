"""Contract for sources of current-user data."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class UserDataSource(Protocol):
    """Minimal contract for anything that can fetch the current user.

    `get_user_data` is async because it does network I/O. The return value
    is whatever the backend sent; implementations must not reshape it.
    """

    async def get_user_data(self) -> Any:
        """Fetch the current user's data and return it unchanged."""

        ...
