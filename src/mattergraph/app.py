"""Application orchestration entry points."""

from __future__ import annotations

from logging import getLogger
from pathlib import Path
from typing import TYPE_CHECKING

from mattergraph.adapters.mindmap import dump_mind_map, mind_map_payload
from mattergraph.adapters.reports import batch_from_payload, load_batch
from mattergraph.config import get_engine_config
from mattergraph.domain.resolution import assemble_matter_graph

if TYPE_CHECKING:
    from mattergraph.adapters.reports import MatterBatchInput
    from mattergraph.config import EngineConfig
    from mattergraph.domain.model import MatterBatch, MatterGraph


log = getLogger(__name__)


def build_matter_graph(
    batch: MatterBatch,
    *,
    config: EngineConfig | None = None,
) -> MatterGraph:
    """Resolve ``batch`` with the configured engine settings."""

    effective_config = config or get_engine_config()
    return assemble_matter_graph(batch, config=effective_config)


def build_mind_map(
    payload: MatterBatchInput,
    *,
    config: EngineConfig | None = None,
) -> dict[str, object]:
    """Resolve an in-memory batch document into the mind-map payload."""

    graph = build_matter_graph(batch_from_payload(payload), config=config)
    return mind_map_payload(graph)


def build_mind_map_from_file(
    path: Path | str,
    *,
    config: EngineConfig | None = None,
    indent: int | None = 2,
) -> str:
    log.info("Loading batch document %s", path)
    graph = build_matter_graph(load_batch(path), config=config)
    return dump_mind_map(graph, indent=indent)


def write_mind_map(
    source: Path | str,
    destination: Path | str,
    *,
    config: EngineConfig | None = None,
    indent: int | None = 2,
) -> Path:
    rendered = build_mind_map_from_file(source, config=config, indent=indent)
    target = Path(destination)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(rendered + "\n", encoding="utf-8")
    log.info("Wrote mind map to %s", target)
    return target
