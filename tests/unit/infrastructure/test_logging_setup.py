"""Tests for the structlog/uvicorn logging config builder."""

from __future__ import annotations

import structlog

from vodrelay.infrastructure.config.schema import AppConfig
from vodrelay.infrastructure.logging.setup import (
    _drop_color_message,
    build_logging_config,
)


class TestBuildLoggingConfig:
    def test_routes_handlers_through_structlog(self) -> None:
        cfg = build_logging_config(AppConfig())
        assert cfg["handlers"]["default"]["formatter"] == "structlog"
        assert cfg["handlers"]["access"]["formatter"] == "structlog"
        assert cfg["formatters"]["structlog"]["()"] is (
            structlog.stdlib.ProcessorFormatter
        )

    def test_applies_level_to_all_loggers(self) -> None:
        cfg = build_logging_config(AppConfig.model_validate({"log_level": "WARNING"}))
        assert cfg["loggers"]["uvicorn"]["level"] == "WARNING"
        assert cfg["loggers"]["fastapi"]["level"] == "WARNING"
        assert cfg["root"]["level"] == "WARNING"

    def test_httpx_quiet_unless_debug(self) -> None:
        info = build_logging_config(AppConfig())
        debug = build_logging_config(AppConfig.model_validate({"log_level": "DEBUG"}))
        assert info["loggers"]["httpx"]["level"] == "WARNING"
        assert debug["loggers"]["httpx"]["level"] == "DEBUG"

    def test_renderer_follows_format(self) -> None:
        json_cfg = build_logging_config(AppConfig.model_validate({"log_format": "json"}))
        renderer = json_cfg["formatters"]["structlog"]["processors"][-1]
        assert isinstance(renderer, structlog.processors.JSONRenderer)

    def test_does_not_mutate_base_config(self) -> None:
        build_logging_config(AppConfig())
        from vodrelay.infrastructure.logging.setup import BASE_LOGGING_CONFIG

        assert "structlog" not in BASE_LOGGING_CONFIG["formatters"]


class TestDropColorMessage:
    def test_removes_key(self) -> None:
        event = {"event": "x", "color_message": "\x1b[1mx"}
        assert _drop_color_message(None, None, event) == {"event": "x"}
