from __future__ import annotations

from .load import load_config
from .schema import AppConfig, EnvOverrides, LegacyEnvOverrides

__all__ = ["AppConfig", "EnvOverrides", "LegacyEnvOverrides", "load_config"]
