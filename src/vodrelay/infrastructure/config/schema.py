"""Pydantic configuration models with validation."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal, Optional

from pydantic import (
    AliasChoices,
    AliasPath,
    BaseModel,
    Field,
    SecretStr,
    field_validator,
    model_validator,
)
from pydantic_settings import BaseSettings, SettingsConfigDict

from vodrelay.infrastructure.common.converters import (
    parse_duration_seconds,
    split_csv,
)

from .defaults import DEFAULT_USER_AGENT

Environment = Literal["dev", "test", "prod"]
LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR"]
LogFormat = Literal["json", "console"]


def _normalize_path(value: Any) -> Path:
    """
    Normalize a path-like value without causing filesystem side-effects.

    This function MUST NOT create directories or files.
    """
    if isinstance(value, Path):
        return value.expanduser()
    if isinstance(value, str):
        return Path(value).expanduser()
    raise TypeError(f"Expected path-like value, got: {type(value)!r}")


def _provided(data: dict[str, Any]) -> dict[str, Any]:
    """Drop blank strings so an empty variable keeps the lower layer."""
    return {
        key: value
        for key, value in data.items()
        if not (isinstance(value, str) and not value.strip())
    }


class RelayConfig(BaseModel):
    """Proxy relay safety gate and header filtering (YAML section: relay.*)."""

    blocked_hosts: list[str] = Field(
        default=["localhost", "127.0.0.1", "0.0.0.0", "::1"],
        description="Hostnames rejected by exact match.",
    )
    blocked_host_prefixes: list[str] = Field(
        default=["192.168.", "10.", "172."],
        description=(
            "Hostname prefixes rejected by string prefix match. "
            "Not a CIDR check: '172.' also blocks public 172.x ranges."
        ),
    )
    filtered_headers: list[str] = Field(
        default=[
            "content-security-policy",
            "cookie",
            "set-cookie",
            "x-frame-options",
            "access-control-allow-origin",
        ],
        description="Upstream response headers never forwarded to the caller.",
    )
    max_redirects: int = Field(
        default=5,
        description="Redirect hops the relay follows (each hop is re-checked).",
    )

    @field_validator(
        "blocked_hosts", "blocked_host_prefixes", "filtered_headers", mode="before"
    )
    @classmethod
    def _split_lists(cls, v: Any) -> list[str]:
        return split_csv(v)

    @field_validator("blocked_hosts", "filtered_headers")
    @classmethod
    def _lowercase(cls, v: list[str]) -> list[str]:
        return [item.lower() for item in v]

    @field_validator("max_redirects")
    @classmethod
    def _validate_max_redirects(cls, v: int) -> int:
        if v < 0:
            raise ValueError("relay.max_redirects must be >= 0")
        return v


class WebConfig(BaseModel):
    """Static pages, CORS and shared-secret settings (YAML section: web.*)."""

    static_dir: Path = Field(
        default=Path("./public"),
        description="Directory holding index.html, player.html and assets.",
    )
    cache_max_age: str = Field(
        default="1d",
        description="Cache-Control max-age for static files (e.g. 1d, 12h, 600).",
    )
    cors_origin: str = Field(
        default="*",
        description="Allowed CORS origin.",
    )
    password: SecretStr = Field(
        default=SecretStr(""),
        description="User password; its SHA-256 is injected into pages.",
    )
    admin_password: SecretStr = Field(
        default=SecretStr(""),
        description="Admin password; its SHA-256 is injected into pages.",
    )

    @field_validator("static_dir", mode="before")
    @classmethod
    def _validate_static_dir(cls, v: Any) -> Path:
        return _normalize_path(v)

    @field_validator("cache_max_age", mode="before")
    @classmethod
    def _validate_cache_max_age(cls, v: Any) -> str:
        parse_duration_seconds(v)
        return str(v)

    @property
    def cache_max_age_seconds(self) -> int:
        return parse_duration_seconds(self.cache_max_age)


class CatalogConfig(BaseModel):
    """Aggregator result shaping (YAML section: catalog.*)."""

    default_source: str = Field(
        default="heimuer",
        description="Source key used when a request names none.",
    )
    search_result_cap: int = Field(
        default=1000,
        gt=0,
        description="Max records returned by aggregated search.",
    )
    recommendation_cap: int = Field(
        default=100,
        gt=0,
        description="Max records returned by recommendations.",
    )
    recommendation_sources: int = Field(
        default=5,
        gt=0,
        description="Number of sources sampled for recommendations.",
    )
    recommendation_pages: int = Field(
        default=2,
        gt=0,
        description="Listing pages fetched per recommendation source.",
    )


class AppConfig(BaseModel):
    """
    Canonical application configuration (validated, final).

    Note:
    - YAML is expected to be sectioned (http/relay/web/catalog/logging).
    - Environment variables are handled by EnvOverrides / LegacyEnvOverrides
      (BaseSettings) to allow strict precedence control
      (defaults < YAML < legacy ENV < ENV < CLI) in load.py.
    """

    # General
    app_name: str = Field(default="vodrelay", description="Application name.")
    environment: Environment = Field(
        default="dev",
        description="Runtime environment (affects defaults like log format).",
    )

    # HTTP client (YAML section: http.*)
    http_timeout_seconds: float = Field(
        default=5.0,
        validation_alias=AliasChoices(
            "http_timeout_seconds",
            AliasPath("http", "timeout_seconds"),
        ),
        description="Timeout in seconds for every outbound fetch.",
    )
    http_max_retries: int = Field(
        default=2,
        validation_alias=AliasChoices(
            "http_max_retries",
            AliasPath("http", "max_retries"),
        ),
        description="Additional attempts for relayed fetches after a failure.",
    )
    http_follow_redirects: bool = Field(
        default=True,
        validation_alias=AliasChoices(
            "http_follow_redirects",
            AliasPath("http", "follow_redirects"),
        ),
        description="Whether catalog API requests follow redirects.",
    )
    http_user_agent: str = Field(
        default=DEFAULT_USER_AGENT,
        validation_alias=AliasChoices(
            "http_user_agent",
            AliasPath("http", "user_agent"),
        ),
        description="User-Agent for outgoing HTTP requests.",
    )

    # Logging (YAML section: logging.*)
    log_level: LogLevel = Field(
        default="INFO",
        validation_alias=AliasChoices(
            "log_level",
            AliasPath("logging", "level"),
        ),
        description="Log level.",
    )
    log_format: Optional[LogFormat] = Field(
        default=None,
        validation_alias=AliasChoices(
            "log_format",
            AliasPath("logging", "format"),
        ),
        description=(
            "Log renderer format (console/json). If unset, derived from environment."
        ),
    )

    relay: RelayConfig = Field(default_factory=RelayConfig)
    web: WebConfig = Field(default_factory=WebConfig)
    catalog: CatalogConfig = Field(default_factory=CatalogConfig)

    @field_validator("http_timeout_seconds")
    @classmethod
    def _validate_http_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("http_timeout_seconds must be > 0")
        return v

    @field_validator("http_max_retries")
    @classmethod
    def _validate_max_retries(cls, v: int) -> int:
        if v < 0:
            raise ValueError("http_max_retries must be >= 0")
        return v

    @model_validator(mode="after")
    def _derive_defaults(self) -> "AppConfig":
        # Default log format: console in dev/test, json in prod.
        if self.log_format is None:
            self.log_format = "json" if self.environment == "prod" else "console"
        return self

    def to_sectioned_dict(self) -> dict[str, Any]:
        """
        Dump configuration in the sectioned shape used by config.yaml/docs.

        Passwords are masked.
        """
        web = self.web.model_dump()
        web["static_dir"] = str(self.web.static_dir)
        web["password"] = "******" if self.web.password.get_secret_value() else ""
        web["admin_password"] = (
            "******" if self.web.admin_password.get_secret_value() else ""
        )
        return {
            "app_name": self.app_name,
            "environment": self.environment,
            "http": {
                "timeout_seconds": self.http_timeout_seconds,
                "max_retries": self.http_max_retries,
                "follow_redirects": self.http_follow_redirects,
                "user_agent": self.http_user_agent,
            },
            "relay": self.relay.model_dump(),
            "web": web,
            "catalog": self.catalog.model_dump(),
            "logging": {"level": self.log_level, "format": self.log_format},
        }


class EnvOverrides(BaseSettings):
    """
    Environment-variable overrides (all optional).

    Intended usage:
    - load.py creates EnvOverrides() to read VODRELAY_* variables,
      converts to dict of set values, merges into YAML/defaults,
      then validates AppConfig.

    Supported env var examples (flat, explicit):
    - VODRELAY_HTTP_TIMEOUT_SECONDS
    - VODRELAY_RELAY_BLOCKED_HOSTS (comma-separated)
    - VODRELAY_WEB_PASSWORD
    - VODRELAY_LOG_LEVEL
    """

    model_config = SettingsConfigDict(
        env_prefix="VODRELAY_",
        extra="ignore",
        case_sensitive=False,
        env_ignore_empty=True,
    )

    app_name: Optional[str] = None
    environment: Optional[Environment] = None

    http_timeout_seconds: Optional[float] = None
    http_max_retries: Optional[int] = None
    http_follow_redirects: Optional[bool] = None
    http_user_agent: Optional[str] = None

    # Lists stay raw strings here; RelayConfig splits them.
    relay_blocked_hosts: Optional[str] = None
    relay_blocked_host_prefixes: Optional[str] = None
    relay_filtered_headers: Optional[str] = None
    relay_max_redirects: Optional[int] = None

    web_static_dir: Optional[Path] = None
    web_cache_max_age: Optional[str] = None
    web_cors_origin: Optional[str] = None
    web_password: Optional[str] = None
    web_admin_password: Optional[str] = None

    catalog_default_source: Optional[str] = None

    log_level: Optional[LogLevel] = None
    log_format: Optional[LogFormat] = None

    @field_validator("web_static_dir", mode="before")
    @classmethod
    def _validate_paths(cls, v: Any) -> Any:
        if v is None:
            return None
        return _normalize_path(v)

    def to_update_dict(self) -> dict[str, Any]:
        """
        Return only values that were actually provided (non-None and
        non-blank), for merging.
        """
        return _provided(self.model_dump(exclude_none=True))


class LegacyEnvOverrides(BaseSettings):
    """
    Unprefixed environment variables understood for drop-in deployments.

    Lower precedence than EnvOverrides. ``REQUEST_TIMEOUT`` is in
    milliseconds; ``DEBUG=true`` switches the log level to DEBUG.
    """

    model_config = SettingsConfigDict(
        extra="ignore",
        case_sensitive=False,
        env_ignore_empty=True,
    )

    password: Optional[str] = Field(default=None, validation_alias="PASSWORD")
    admin_password: Optional[str] = Field(
        default=None, validation_alias="ADMINPASSWORD"
    )
    cors_origin: Optional[str] = Field(default=None, validation_alias="CORS_ORIGIN")
    request_timeout_ms: Optional[int] = Field(
        default=None, validation_alias="REQUEST_TIMEOUT"
    )
    max_retries: Optional[int] = Field(default=None, validation_alias="MAX_RETRIES")
    user_agent: Optional[str] = Field(default=None, validation_alias="USER_AGENT")
    blocked_hosts: Optional[str] = Field(default=None, validation_alias="BLOCKED_HOSTS")
    blocked_ip_prefixes: Optional[str] = Field(
        default=None, validation_alias="BLOCKED_IP_PREFIXES"
    )
    filtered_headers: Optional[str] = Field(
        default=None, validation_alias="FILTERED_HEADERS"
    )
    cache_max_age: Optional[str] = Field(default=None, validation_alias="CACHE_MAX_AGE")
    debug: Optional[str] = Field(default=None, validation_alias="DEBUG")

    def to_update_dict(self) -> dict[str, Any]:
        """Translate the legacy names into flat AppConfig keys."""
        mapping: dict[str, str] = {
            "password": "web_password",
            "admin_password": "web_admin_password",
            "cors_origin": "web_cors_origin",
            "max_retries": "http_max_retries",
            "user_agent": "http_user_agent",
            "blocked_hosts": "relay_blocked_hosts",
            "blocked_ip_prefixes": "relay_blocked_host_prefixes",
            "filtered_headers": "relay_filtered_headers",
            "cache_max_age": "web_cache_max_age",
        }
        data = _provided(self.model_dump(exclude_none=True))
        out: dict[str, Any] = {
            mapping[key]: value for key, value in data.items() if key in mapping
        }
        if self.request_timeout_ms is not None:
            out["http_timeout_seconds"] = self.request_timeout_ms / 1000.0
        if self.debug is not None and self.debug.strip().lower() == "true":
            out["log_level"] = "DEBUG"
        return out
