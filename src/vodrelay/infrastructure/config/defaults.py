"""Hardcoded default configuration values."""

from __future__ import annotations

from typing import Any

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36"
)

DEFAULT_CONFIG: dict[str, Any] = {
    "app_name": "vodrelay",
    "environment": "dev",
    "http": {
        "timeout_seconds": 5.0,
        "max_retries": 2,
        "follow_redirects": True,
        "user_agent": DEFAULT_USER_AGENT,
    },
    "relay": {
        "blocked_hosts": ["localhost", "127.0.0.1", "0.0.0.0", "::1"],
        "blocked_host_prefixes": ["192.168.", "10.", "172."],
        "filtered_headers": [
            "content-security-policy",
            "cookie",
            "set-cookie",
            "x-frame-options",
            "access-control-allow-origin",
        ],
        "max_redirects": 5,
    },
    "web": {
        "static_dir": "./public",
        "cache_max_age": "1d",
        "cors_origin": "*",
        "password": "",
        "admin_password": "",
    },
    "catalog": {
        "default_source": "heimuer",
        "search_result_cap": 1000,
        "recommendation_cap": 100,
        "recommendation_sources": 5,
        "recommendation_pages": 2,
    },
    "logging": {
        "level": "INFO",
        "format": None,  # Derived from environment in schema.py
    },
}
