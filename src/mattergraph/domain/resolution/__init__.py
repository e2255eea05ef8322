"""Entity resolution and relationship-graph construction.

The engine runs as explicit phases (companies, identity, security interests,
findings, addresses, relationships) over one immutable ``MatterBatch``. All
mutable merge state lives in a ``ResolutionContext`` created per run.
"""

from __future__ import annotations

from .addresses import AddressDeduplicator
from .companies import CompanyResolver
from .context import ResolutionContext
from .findings import FindingsLinker
from .identity import IdentityMergeEngine, IdentityMergeResult
from .orchestrator import GraphAssembler, ResolutionPhase, assemble_matter_graph, default_phases
from .relationships import RelationshipBuilder, deduplicate_edges, role_label
from .security_interests import SecurityInterestAggregator

__all__ = [
    "AddressDeduplicator",
    "CompanyResolver",
    "FindingsLinker",
    "GraphAssembler",
    "IdentityMergeEngine",
    "IdentityMergeResult",
    "RelationshipBuilder",
    "ResolutionContext",
    "ResolutionPhase",
    "SecurityInterestAggregator",
    "assemble_matter_graph",
    "deduplicate_edges",
    "default_phases",
    "role_label",
]
