"""Configuration error definitions."""

from __future__ import annotations

from mattergraph.domain.errors import MatterGraphError


class ConfigurationError(MatterGraphError):
    """Raised when a configuration value cannot be used."""
