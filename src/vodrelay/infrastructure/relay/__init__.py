"""Proxy relay - URL safety gate and streamed passthrough."""

from __future__ import annotations

from .proxy import ProxyRelay, RelayStream, decode_target, filter_headers
from .url_guard import UrlSafetyGate

__all__ = [
    "ProxyRelay",
    "RelayStream",
    "UrlSafetyGate",
    "decode_target",
    "filter_headers",
]
