"""``vodrelay`` command: serve the catalog API, proxy relay and pages.

HOST and PORT are read from the environment when the flags are absent,
matching how the relay is usually deployed behind a container runtime.
"""

from __future__ import annotations

import argparse
import os
import sys
from collections.abc import Iterable
from pathlib import Path
from typing import Any

import structlog
import uvicorn

from vodrelay.infrastructure.config import load_config
from vodrelay.infrastructure.logging.setup import configure_logging
from vodrelay.interfaces.app import create_app

log = structlog.get_logger(__name__)

DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 8080

# argparse dest -> flat AppConfig key
_OVERRIDE_FLAGS: dict[str, str] = {
    "static_dir": "static_dir",
    "log_level": "log_level",
    "log_format": "log_format",
}


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="vodrelay",
        description="Video catalog aggregator and streaming proxy relay.",
    )

    bind = parser.add_argument_group("listen address")
    bind.add_argument(
        "--host",
        help=f"Interface to bind (env HOST, default {DEFAULT_HOST}).",
    )
    bind.add_argument(
        "--port",
        type=int,
        help=f"TCP port to bind (env PORT, default {DEFAULT_PORT}).",
    )

    sources = parser.add_argument_group("config sources")
    sources.add_argument(
        "--config", type=Path, help="YAML file layered over the defaults."
    )
    sources.add_argument(
        "--dotenv",
        type=Path,
        help=".env file loaded before VODRELAY_* variables are read.",
    )

    overrides = parser.add_argument_group("overrides (beat every config source)")
    overrides.add_argument(
        "--static-dir", help="Directory holding index.html and player.html."
    )
    overrides.add_argument("--log-level", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    overrides.add_argument("--log-format", choices=["json", "console"])
    return parser


def _parse_args(argv: Iterable[str] | None) -> argparse.Namespace:
    return _build_parser().parse_args(argv)


def build_cli_overrides(args: argparse.Namespace) -> dict[str, Any]:
    """Collect the flags that were given into a flat override layer."""
    return {
        key: getattr(args, dest)
        for dest, key in _OVERRIDE_FLAGS.items()
        if getattr(args, dest)
    }


def _resolve_bind(args: argparse.Namespace) -> tuple[str, int]:
    host = args.host or os.getenv("HOST") or DEFAULT_HOST
    port = args.port or int(os.getenv("PORT") or DEFAULT_PORT)
    return host, port


def start(argv: Iterable[str] | None = None) -> None:
    """Load the layered config once, set up logging, then run uvicorn."""
    args = _parse_args(sys.argv[1:] if argv is None else argv)
    host, port = _resolve_bind(args)

    config = load_config(
        config_path=args.config,
        dotenv_path=args.dotenv,
        cli_overrides=build_cli_overrides(args),
    )
    log_config = configure_logging(config)
    log.info("server_starting", host=host, port=port, environment=config.environment)

    uvicorn.run(create_app(config), host=host, port=port, log_config=log_config)


if __name__ == "__main__":
    raise SystemExit(start())
