"""Public interface for the mind-map output adapter."""

from __future__ import annotations

from .schema import MindMapDocument
from .translator import dump_mind_map, mind_map_payload, render_mind_map

__all__ = ["MindMapDocument", "dump_mind_map", "mind_map_payload", "render_mind_map"]
