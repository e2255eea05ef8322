"""Phase-based Graph Assembler for one matter batch."""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING, Protocol

from mattergraph.domain.model import MatterGraph
from mattergraph.domain.resolution.addresses import AddressDeduplicator
from mattergraph.domain.resolution.companies import CompanyResolver
from mattergraph.domain.resolution.context import ResolutionContext
from mattergraph.domain.resolution.findings import FindingsLinker
from mattergraph.domain.resolution.identity import IdentityMergeEngine
from mattergraph.domain.resolution.relationships import RelationshipBuilder
from mattergraph.domain.resolution.security_interests import SecurityInterestAggregator

if TYPE_CHECKING:
    from collections.abc import Sequence

    from mattergraph.config.engine import EngineConfig
    from mattergraph.domain.model import MatterBatch, RoleRecord

log = getLogger(__name__)


class ResolutionPhase(Protocol):
    """Contract implemented by each resolution phase."""

    name: str

    def run(self, batch: MatterBatch, *, context: ResolutionContext) -> None: ...


def _identity_engine(context: ResolutionContext) -> IdentityMergeEngine:
    return IdentityMergeEngine(context, CompanyResolver(context))


def _role_collections(batch: MatterBatch) -> tuple[Sequence[RoleRecord], ...]:
    return (batch.directors, batch.office_holders, batch.secretaries, batch.shareholders)


@dataclass(slots=True)
class CompanyResolutionPhase:
    """Resolve registry extracts first, then every company a role record refers to."""

    name: str = "companies"

    def run(self, batch: MatterBatch, *, context: ResolutionContext) -> None:
        resolver = CompanyResolver(context)
        for record in batch.companies:
            resolver.record_company(record)
        for records in _role_collections(batch):
            resolver.resolve_role_companies(records)


@dataclass(slots=True)
class IdentityMergePhase:
    name: str = "identity"

    def run(self, batch: MatterBatch, *, context: ResolutionContext) -> None:
        _identity_engine(context).merge(
            batch.directors, batch.office_holders, batch.secretaries, batch.shareholders
        )


@dataclass(slots=True)
class SecurityInterestPhase:
    name: str = "security_interests"

    def run(self, batch: MatterBatch, *, context: ResolutionContext) -> None:
        SecurityInterestAggregator(
            context, CompanyResolver(context), _identity_engine(context)
        ).aggregate(batch.security_interest_reports)


@dataclass(slots=True)
class FindingsPhase:
    name: str = "findings"

    def run(self, batch: MatterBatch, *, context: ResolutionContext) -> None:
        FindingsLinker(context, _identity_engine(context)).link(
            batch.bankruptcy_searches, batch.tax_debt_reports, batch.court_reports
        )


@dataclass(slots=True)
class AddressPhase:
    name: str = "addresses"

    def run(self, batch: MatterBatch, *, context: ResolutionContext) -> None:
        deduplicator = AddressDeduplicator(context)
        deduplicator.add_company_records(batch.companies)
        for records in _role_collections(batch):
            deduplicator.add_role_records(records)


@dataclass(slots=True)
class RelationshipPhase:
    name: str = "relationships"

    def run(self, batch: MatterBatch, *, context: ResolutionContext) -> None:
        RelationshipBuilder(context).build()


def default_phases() -> tuple[ResolutionPhase, ...]:
    """Phase order: later phases look up entities created by earlier ones."""

    return (
        CompanyResolutionPhase(),
        IdentityMergePhase(),
        SecurityInterestPhase(),
        FindingsPhase(),
        AddressPhase(),
        RelationshipPhase(),
    )


@dataclass(slots=True)
class GraphAssembler:
    """Compose and execute the ordered resolution phases."""

    phases: Sequence[ResolutionPhase] = field(default_factory=default_phases)

    def with_phase(self, phase: ResolutionPhase) -> GraphAssembler:
        """Return a new assembler appending ``phase`` at the end."""

        return GraphAssembler(phases=(*self.phases, phase))

    def run(self, batch: MatterBatch, *, context: ResolutionContext | None = None) -> MatterGraph:
        active_context = context or ResolutionContext(matter_id=batch.matter_id)
        if batch.is_empty:
            log.warning("Matter %s has no records to resolve", batch.matter_id)
        for phase in self.phases:
            log.debug("Running resolution phase %s", phase.name)
            phase.run(batch, context=active_context)

        graph = graph_from_context(batch, active_context)
        stats = graph.stats
        log.info(
            "Resolved matter %s: %d companies, %d persons, %d addresses, "
            "%d relationships (%d uncertain merges, %d skipped records)",
            graph.matter_id,
            stats.total_companies,
            stats.total_persons,
            stats.total_addresses,
            stats.total_relationships,
            active_context.uncertain_matches,
            active_context.skipped_records,
        )
        return graph


def graph_from_context(batch: MatterBatch, context: ResolutionContext) -> MatterGraph:
    return MatterGraph(
        matter_id=context.matter_id or batch.matter_id,
        companies=list(context.companies.values()),
        persons=list(context.persons.values()),
        shareholders=list(context.company_shareholders.values()),
        addresses=list(context.addresses.values()),
        bankruptcies=list(context.bankruptcies),
        directors=list(batch.directors),
        secretaries=list(batch.secretaries),
        office_holders=list(batch.office_holders),
        relationships=list(context.relationships),
    )


def assemble_matter_graph(batch: MatterBatch, *, config: EngineConfig | None = None) -> MatterGraph:
    """Resolve ``batch`` into a deduplicated entity graph.

    Pure function of its input: all merge state lives in a fresh
    ``ResolutionContext``, so concurrent calls on different batches are safe.
    """

    context = ResolutionContext(matter_id=batch.matter_id)
    if config is not None:
        context.config = config
    return GraphAssembler().run(batch, context=context)
