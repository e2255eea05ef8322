"""Application configuration helpers."""

from __future__ import annotations

from .engine import (
    DEFAULT_COLLATERAL_LABELS,
    DEFAULT_COMPANY_TOKENS,
    EngineConfig,
    get_engine_config,
    get_log_level,
)
from .errors import ConfigurationError
from .logging import configure_logging, resolve_level

__all__ = [
    "DEFAULT_COLLATERAL_LABELS",
    "DEFAULT_COMPANY_TOKENS",
    "ConfigurationError",
    "EngineConfig",
    "configure_logging",
    "get_engine_config",
    "get_log_level",
    "resolve_level",
]
