"""Blocking HTTP GET used by service handlers."""

from __future__ import annotations

from typing import Any

import httpx
from loguru import logger

from linkbot.errors import HttpBadRequest, HttpConnectionError, HttpNotFound, HttpStatusError


class HttpClient:
    """Thin wrapper over ``httpx.Client`` that maps failures to handler errors."""

    def __init__(
        self,
        timeout: float = 10.0,
        user_agent: str = "linkbot",
        transport: httpx.BaseTransport | None = None,
    ):
        self._client = httpx.Client(
            timeout=timeout,
            headers={"User-Agent": user_agent},
            follow_redirects=True,
            transport=transport,
        )

    def get(self, url: str, params: dict[str, Any] | None = None) -> str:
        """
        GET ``url`` and return the response body.

        Raises:
            HttpBadRequest: On HTTP 400.
            HttpNotFound: On HTTP 404.
            HttpStatusError: On any other non-200 status.
            HttpConnectionError: If no response was received.
        """
        try:
            response = self._client.get(url, params=params)
        except httpx.HTTPError as e:
            logger.warning(f"GET {url} failed: {e!r}")
            raise HttpConnectionError(str(e), url=url) from e

        status = response.status_code
        if status == httpx.codes.OK:
            return response.text

        logger.debug(f"GET {url} returned {status}")
        if status == httpx.codes.BAD_REQUEST:
            raise HttpBadRequest(url=url)
        if status == httpx.codes.NOT_FOUND:
            raise HttpNotFound(url=url)
        raise HttpStatusError(status, url=url)

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> HttpClient:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
