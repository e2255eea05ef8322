"""Base error type shared across the package."""

from __future__ import annotations


class MatterGraphError(RuntimeError):
    """Base class for errors raised by mattergraph."""
