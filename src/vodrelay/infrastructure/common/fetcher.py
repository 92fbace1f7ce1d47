"""Outbound GET with a per-attempt timeout and bounded, immediate retry."""

from __future__ import annotations

import asyncio

import httpx
import structlog

from vodrelay.domain.entities import FetchError

log = structlog.get_logger(__name__)


class RetryingFetcher:
    """Issues GET requests through a shared ``httpx.AsyncClient``.

    A network error or timeout is a failure and is retried immediately (no
    backoff) up to *max_retries* more times. A non-2xx response is NOT a
    failure: it is returned so the caller can pass the upstream answer on.

    Buffered fetches are bounded by *timeout* as a total ceiling per
    attempt; streamed fetches are bounded until the response headers arrive
    and then only by the client's per-read timeout.

    Args:
        http_client: Shared client (connection pool).
        timeout: Timeout in seconds, applied to every attempt.
        user_agent: User-Agent sent with every request.
        max_retries: Default additional attempts after the first.
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        *,
        timeout: float,
        user_agent: str,
        max_retries: int = 0,
    ) -> None:
        self._http = http_client
        self._timeout = timeout
        self._user_agent = user_agent
        self._max_retries = max_retries

    @property
    def timeout(self) -> float:
        return self._timeout

    async def fetch(
        self,
        url: str | httpx.URL,
        *,
        max_retries: int | None = None,
        stream: bool = False,
        follow_redirects: bool = True,
    ) -> httpx.Response:
        """GET *url*, retrying on transport failures.

        Returns:
            The first response received. With ``stream=True`` its body has
            not been read and the caller must close it.

        Raises:
            FetchError: Every attempt failed; carries the last cause.
        """
        retries = max(0, self._max_retries if max_retries is None else max_retries)
        attempt = 0

        while True:
            try:
                return await self._attempt(
                    url, stream=stream, follow_redirects=follow_redirects
                )
            except (httpx.RequestError, TimeoutError) as e:
                if attempt >= retries:
                    raise FetchError(str(url), e, attempts=attempt + 1) from e
                attempt += 1
                log.info(
                    "fetch_retry",
                    url=str(url),
                    attempt=attempt,
                    max_retries=retries,
                    error=str(e) or type(e).__name__,
                )

    async def _attempt(
        self,
        url: str | httpx.URL,
        *,
        stream: bool,
        follow_redirects: bool,
    ) -> httpx.Response:
        request = self._http.build_request(
            "GET",
            url,
            headers={"User-Agent": self._user_agent},
            timeout=self._timeout,
        )
        if stream:
            return await asyncio.wait_for(
                self._http.send(
                    request, stream=True, follow_redirects=follow_redirects
                ),
                timeout=self._timeout,
            )
        return await asyncio.wait_for(
            self._http.send(request, follow_redirects=follow_redirects),
            timeout=self._timeout,
        )
