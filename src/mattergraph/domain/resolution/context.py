"""Request-scoped state shared across the resolution phases."""

from __future__ import annotations

from dataclasses import dataclass, field

from mattergraph.config.engine import EngineConfig
from mattergraph.domain.model import (
    BankruptcyNode,
    CanonicalAddress,
    CanonicalCompany,
    CanonicalPerson,
    CompanyShareholder,
    CourtCase,
    EntityId,
    EntityKind,
    RelationshipEdge,
    SecurityInterestSummary,
    TaxDebtReport,
)

type SecurityKey = tuple[EntityId, EntityId, str]
type RecordToken = int  # id() of an input record


@dataclass(slots=True)
class ResolutionContext:
    """Every mutable lookup map of one resolution run.

    One context is created per batch and discarded afterwards, so independent
    batches never share state. Entities live in id-keyed arenas; every other
    structure refers to them by id only.
    """

    matter_id: str | None = None
    config: EngineConfig = field(default_factory=EngineConfig)

    companies: dict[EntityId, CanonicalCompany] = field(
        default_factory=dict[EntityId, CanonicalCompany]
    )
    company_ids_by_acn: dict[str, EntityId] = field(default_factory=dict[str, EntityId])
    company_ids_by_abn: dict[str, EntityId] = field(default_factory=dict[str, EntityId])
    record_company_ids: dict[RecordToken, EntityId] = field(
        default_factory=dict[RecordToken, EntityId]
    )

    persons: dict[EntityId, CanonicalPerson] = field(
        default_factory=dict[EntityId, CanonicalPerson]
    )
    person_ids_by_key: dict[str, EntityId] = field(default_factory=dict[str, EntityId])
    person_ids_by_name: dict[str, list[EntityId]] = field(
        default_factory=dict[str, list[EntityId]]
    )
    record_entities: dict[RecordToken, tuple[EntityId, EntityKind]] = field(
        default_factory=dict[RecordToken, tuple[EntityId, EntityKind]]
    )

    company_shareholders: dict[EntityId, CompanyShareholder] = field(
        default_factory=dict[EntityId, CompanyShareholder]
    )
    company_holding_edges: list[RelationshipEdge] = field(
        default_factory=list[RelationshipEdge]
    )

    addresses: dict[str, CanonicalAddress] = field(default_factory=dict[str, CanonicalAddress])

    security_summaries: dict[SecurityKey, SecurityInterestSummary] = field(
        default_factory=dict[SecurityKey, SecurityInterestSummary]
    )
    bankruptcies: list[BankruptcyNode] = field(default_factory=list[BankruptcyNode])
    bankruptcy_edges: list[RelationshipEdge] = field(default_factory=list[RelationshipEdge])
    tax_debts: dict[str, TaxDebtReport] = field(default_factory=dict[str, TaxDebtReport])
    court_cases: dict[str, list[CourtCase]] = field(
        default_factory=dict[str, list[CourtCase]]
    )

    relationships: list[RelationshipEdge] = field(default_factory=list[RelationshipEdge])

    used_ids: set[EntityId] = field(default_factory=set[EntityId])
    skipped_records: int = 0
    uncertain_matches: int = 0

    def claim_id(self, base: str) -> EntityId:
        """Reserve ``base`` (or ``base_2``, ``base_3``...) as a fresh entity id."""

        candidate = base
        suffix = 2
        while candidate in self.used_ids:
            candidate = f"{base}_{suffix}"
            suffix += 1
        self.used_ids.add(candidate)
        return candidate

    def company_id_for_identifiers(self, acn: str | None, abn: str | None) -> EntityId | None:
        if acn and acn in self.company_ids_by_acn:
            return self.company_ids_by_acn[acn]
        if abn and abn in self.company_ids_by_abn:
            return self.company_ids_by_abn[abn]
        return None

    def persons_named(self, normalized_name: str) -> list[CanonicalPerson]:
        """Persons sharing ``normalized_name``, in creation order."""

        return [
            self.persons[person_id]
            for person_id in self.person_ids_by_name.get(normalized_name, [])
        ]
