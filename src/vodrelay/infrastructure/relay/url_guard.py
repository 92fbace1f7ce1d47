"""URL safety gate for the proxy relay.

Decides whether a caller-supplied target may be fetched at all. The check
is pure string logic (no DNS, no sockets) and fails closed.

The deny-prefix list is a plain ``str.startswith`` match on the hostname,
not a network/CIDR test. With the defaults, ``172.`` blocks every
``172.x.y.z`` (public ranges included) while link-local ``169.254.*``,
cloud metadata endpoints, private IPv6 ranges and hostnames that resolve
to private addresses all pass. Operators who need a real SSRF boundary
must extend the lists or filter at the network layer.
"""

from __future__ import annotations

from collections.abc import Iterable
from urllib.parse import urlsplit

import structlog

log = structlog.get_logger(__name__)

ALLOWED_SCHEMES = frozenset({"http", "https"})


class UrlSafetyGate:
    """Protocol allow-list plus hostname deny-list / deny-prefix check.

    Args:
        blocked_hosts: Hostnames rejected on exact (case-insensitive) match.
        blocked_prefixes: Hostname prefixes rejected by string prefix match.
    """

    def __init__(
        self,
        *,
        blocked_hosts: Iterable[str],
        blocked_prefixes: Iterable[str],
    ) -> None:
        self._blocked_hosts = frozenset(h.lower() for h in blocked_hosts if h)
        self._blocked_prefixes = tuple(p.lower() for p in blocked_prefixes if p)

    def is_allowed(self, raw_url: str) -> bool:
        """Return True when *raw_url* may be fetched."""
        try:
            parts = urlsplit(raw_url)
            hostname = parts.hostname
            # Accessing .port validates it; a bad port is a parse failure.
            parts.port  # noqa: B018
        except ValueError:
            return False

        if parts.scheme not in ALLOWED_SCHEMES:
            return False
        if not hostname:
            return False
        if hostname in self._blocked_hosts:
            log.debug("url_blocked_host", hostname=hostname)
            return False
        if hostname.startswith(self._blocked_prefixes):
            log.debug("url_blocked_prefix", hostname=hostname)
            return False
        return True
