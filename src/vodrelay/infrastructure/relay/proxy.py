"""Proxy relay: target decoding, gated fetching and header filtering.

The relay takes an arbitrary URL from the request path, checks it with the
URL safety gate, fetches it as a stream and hands the raw body back so the
caller can pipe it out without buffering. Upstream non-2xx answers are
relayed with their own status and body; only a fetch that produced no
response at all surfaces as an error.

Redirects are followed here rather than inside httpx so every hop goes
through the safety gate before it is requested.
"""

from __future__ import annotations

import re
from collections.abc import AsyncIterator, Iterable
from dataclasses import dataclass
from typing import Awaitable, Callable
from urllib.parse import unquote

import httpx
import structlog

from vodrelay.domain.entities import UnsafeUrlError
from vodrelay.infrastructure.common.fetcher import RetryingFetcher
from vodrelay.infrastructure.relay.url_guard import UrlSafetyGate

log = structlog.get_logger(__name__)

# Some front proxies collapse "https://host" to "https:/host" in the path.
_COLLAPSED_SCHEME_RE = re.compile(r"^(https?:)/(?=[^/])")

# Transport-level headers that describe the upstream connection, not the body.
HOP_BY_HOP_HEADERS = frozenset(
    {
        "connection",
        "keep-alive",
        "proxy-authenticate",
        "proxy-authorization",
        "te",
        "trailer",
        "transfer-encoding",
        "upgrade",
    }
)

_CHUNK_SIZE = 65536


def repair_target_path(raw: str) -> str:
    """Strip the leading slash and restore a collapsed ``scheme://``.

    >>> repair_target_path("/https:/cdn.example.com/a.m3u8")
    'https://cdn.example.com/a.m3u8'
    >>> repair_target_path("https://cdn.example.com/a.m3u8")
    'https://cdn.example.com/a.m3u8'
    """
    target = raw[1:] if raw.startswith("/") else raw
    return _COLLAPSED_SCHEME_RE.sub(r"\1//", target, count=1)


def decode_target(raw_path: str, query_string: str = "") -> str:
    """Recover the target URL from the (still percent-encoded) path tail.

    A query string that reached the relay unencoded belongs to the target.
    """
    target = unquote(repair_target_path(raw_path))
    if query_string:
        target = f"{target}?{query_string}"
    return target


def filter_headers(
    raw_headers: Iterable[tuple[bytes, bytes]],
    blocked: frozenset[str],
) -> list[tuple[bytes, bytes]]:
    """Drop *blocked* and hop-by-hop headers, keep everything else verbatim.

    Header names in *blocked* must be lowercase. Repeated headers keep
    their order and multiplicity.
    """
    kept: list[tuple[bytes, bytes]] = []
    for name, value in raw_headers:
        lowered = name.decode("latin-1").lower()
        if lowered in blocked or lowered in HOP_BY_HOP_HEADERS:
            continue
        kept.append((lowered.encode("latin-1"), value))
    return kept


@dataclass
class RelayStream:
    """An open upstream response ready to be piped to the caller."""

    url: str
    status_code: int
    headers: list[tuple[bytes, bytes]]
    body: AsyncIterator[bytes]
    aclose: Callable[[], Awaitable[None]]


class ProxyRelay:
    """Gate, fetch and sanitize one relayed URL.

    Args:
        fetcher: Shared fetcher (timeout + user agent).
        gate: URL safety gate evaluated before every outbound request.
        filtered_headers: Response headers never forwarded.
        max_retries: Additional attempts per hop on transport failure.
        max_redirects: Redirect hops followed (each one gated).
    """

    def __init__(
        self,
        *,
        fetcher: RetryingFetcher,
        gate: UrlSafetyGate,
        filtered_headers: Iterable[str],
        max_retries: int,
        max_redirects: int = 5,
    ) -> None:
        self._fetcher = fetcher
        self._gate = gate
        self._filtered = frozenset(h.lower() for h in filtered_headers)
        self._max_retries = max_retries
        self._max_redirects = max_redirects

    @property
    def filtered_headers(self) -> frozenset[str]:
        return self._filtered

    async def open(self, target: str) -> RelayStream:
        """Open *target* as a stream.

        Raises:
            UnsafeUrlError: *target* or a redirect hop failed the gate.
            FetchError: No response after all retries.
        """
        url = target
        for hop in range(self._max_redirects + 1):
            if not self._gate.is_allowed(url):
                log.warning("proxy_url_rejected", url=url, hop=hop)
                raise UnsafeUrlError(url)

            log.debug("proxy_request", url=url, hop=hop)
            response = await self._fetcher.fetch(
                url,
                max_retries=self._max_retries,
                stream=True,
                follow_redirects=False,
            )

            next_request = response.next_request
            if (
                not response.is_redirect
                or next_request is None
                or hop == self._max_redirects
            ):
                return self._to_stream(url, response)

            await response.aclose()
            log.debug(
                "proxy_redirect",
                url=url,
                location=str(next_request.url),
                status=response.status_code,
            )
            url = str(next_request.url)

        raise AssertionError("unreachable")  # pragma: no cover

    def _to_stream(self, url: str, response: httpx.Response) -> RelayStream:
        if response.status_code >= 400:
            log.info("proxy_upstream_error", url=url, status=response.status_code)

        async def _iter() -> AsyncIterator[bytes]:
            try:
                # Raw bytes: content-encoding and content-length stay valid.
                async for chunk in response.aiter_raw(chunk_size=_CHUNK_SIZE):
                    yield chunk
            finally:
                await response.aclose()

        return RelayStream(
            url=url,
            status_code=response.status_code,
            headers=filter_headers(response.headers.raw, self._filtered),
            body=_iter(),
            aclose=response.aclose,
        )
