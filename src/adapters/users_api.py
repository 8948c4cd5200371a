"""Users API adapter.

Fetches `/users/me` and hands back the decoded JSON body untouched.
Errors are not translated: `httpx.RequestError` (connection, timeout),
`httpx.HTTPStatusError` (non-2xx) and JSON decode errors reach the caller.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from adapters.http_client import build_async_client
from core.config import AppSettings
from core.interfaces.user_source import UserDataSource

logger = logging.getLogger(__name__)

USERS_ME_PATH = "/users/me"


async def get_user_data(
    *,
    settings: AppSettings | None = None,
    client: httpx.AsyncClient | None = None,
) -> Any:
    """GET `{api_url}/users/me` and return the parsed body.

    Pass either `settings` or `client`, not both: a supplied client already
    carries its base URL and headers, and the caller owns its lifecycle.
    Without a client one is built from `settings` and closed before returning.
    """

    if client is not None:
        if settings is not None:
            raise TypeError("get_user_data() takes either settings or client, not both")
        return await _fetch(client)

    async with build_async_client(settings) as own_client:
        return await _fetch(own_client)


async def _fetch(client: httpx.AsyncClient) -> Any:
    logger.debug("GET %s (base %s)", USERS_ME_PATH, client.base_url)
    response = await client.get(USERS_ME_PATH)
    logger.debug("GET %s -> HTTP %s", response.url, response.status_code)
    response.raise_for_status()
    return response.json()


class UsersApiClient(UserDataSource):
    """`UserDataSource` backed by the HTTP users API."""

    def __init__(self, settings: AppSettings | None = None) -> None:
        self._settings = settings or AppSettings()

    @property
    def source_url(self) -> str:
        return f"{self._settings.api_url}{USERS_ME_PATH}"

    async def get_user_data(self) -> Any:
        return await get_user_data(settings=self._settings)
