"""Shared httpx plumbing for upstream weather and geocoding services."""

from __future__ import annotations

import logging
from typing import Any, Self

import httpx

from .config import Settings


class HttpSource:
    """Owns one httpx client; failed requests come back as ``None``.

    Timeouts, transport errors, non-2xx statuses and undecodable bodies are
    all reported the same way so callers only deal with "got data" or not.
    """

    def __init__(self, settings: Settings, logger: logging.Logger) -> None:
        self.settings = settings
        self.logger = logger
        self._client = httpx.Client(
            timeout=httpx.Timeout(settings.http_timeout_seconds),
            headers={"User-Agent": settings.user_agent},
            follow_redirects=True,
        )

    def __enter__(self) -> Self:
        return self

    def __exit__(self, exc_type: Any, exc: Any, exc_tb: Any) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    def _get(
        self, url: str, context: str, params: dict[str, Any] | None = None
    ) -> httpx.Response | None:
        try:
            response = self._client.get(url, params=params)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            self.logger.warning(
                "%s failed with status %d at %s", context, exc.response.status_code, url
            )
            return None
        except httpx.HTTPError as exc:
            self.logger.warning("%s request failed (%s) at %s", context, type(exc).__name__, url)
            return None

        if not response.content.strip():
            self.logger.info("%s returned an empty body at %s", context, url)
            return None
        return response

    def _request_text(
        self, url: str, context: str, params: dict[str, Any] | None = None
    ) -> str | None:
        response = self._get(url, context=context, params=params)
        return response.text if response is not None else None

    def _request_json(
        self, url: str, context: str, params: dict[str, Any] | None = None
    ) -> Any | None:
        response = self._get(url, context=context, params=params)
        if response is None:
            return None
        try:
            return response.json()
        except ValueError:
            self.logger.warning("%s returned non-JSON response at %s", context, url)
            return None
