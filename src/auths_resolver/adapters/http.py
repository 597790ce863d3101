"""Async JSON GET client shared by the REST forge adapters."""

from __future__ import annotations

from typing import Any

import httpx
from loguru import logger
from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)
from tenacity.wait import wait_base

from auths_resolver import __version__
from auths_resolver.core.errors import ForgeSchemaError, HttpError

# Only connection-level failures are retried; HTTP status errors (rate limits included) surface as-is
TRANSIENT_ERRORS = (
    httpx.ConnectError,
    httpx.ConnectTimeout,
    httpx.ReadTimeout,
    httpx.WriteTimeout,
    httpx.PoolTimeout,
    httpx.ReadError,
    httpx.WriteError,
)

DEFAULT_USER_AGENT = f"auths-resolver/{__version__}"


class ForgeHttpClient:
    """Async client for forge REST APIs. Uses tenacity for transport retries.

    One httpx.AsyncClient per request; a resolve issues its requests
    sequentially, so there is no pool to share.
    """

    def __init__(
        self,
        *,
        timeout: float = 10.0,
        user_agent: str = DEFAULT_USER_AGENT,
        retry_attempts: int = 3,
        retry_wait: wait_base | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._timeout = timeout
        self._user_agent = user_agent
        self._retry_attempts = max(1, retry_attempts)
        self._retry_wait = retry_wait or wait_exponential(multiplier=0.5, min=0.5, max=4)
        self._transport = transport

    def _headers(self, extra: dict[str, str] | None = None) -> dict[str, str]:
        h: dict[str, str] = {"Accept": "application/json", "User-Agent": self._user_agent}
        if extra:
            h.update(extra)
        return h

    async def get_json(
        self,
        url: str,
        *,
        label: str,
        headers: dict[str, str] | None = None,
    ) -> Any:
        """GET url and decode JSON. Raises HttpError on non-2xx, ForgeSchemaError on a non-JSON body."""
        async for attempt in AsyncRetrying(
            stop=stop_after_attempt(self._retry_attempts),
            wait=self._retry_wait,
            retry=retry_if_exception_type(TRANSIENT_ERRORS),
            reraise=True,
        ):
            with attempt:
                async with httpx.AsyncClient(
                    timeout=self._timeout, transport=self._transport
                ) as client:
                    logger.debug("GET {}", url)
                    resp = await client.get(url, headers=self._headers(headers))

        if not resp.is_success:
            raise HttpError(label, resp.status_code, resp.reason_phrase, url)
        try:
            return resp.json()
        except ValueError as exc:
            raise ForgeSchemaError(
                f"{label} API returned invalid JSON ({url})",
                code="invalid_json",
                details={"url": url},
                original_error=exc,
            ) from exc
