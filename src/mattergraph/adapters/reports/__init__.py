"""Public interface for the batch snapshot adapter."""

from __future__ import annotations

from .schema import MatterBatchDocument, MatterBatchInput, ReportEnvelope
from .translator import BatchLoadError, batch_from_payload, load_batch, parse_batch

__all__ = [
    "BatchLoadError",
    "MatterBatchDocument",
    "MatterBatchInput",
    "ReportEnvelope",
    "batch_from_payload",
    "load_batch",
    "parse_batch",
]
