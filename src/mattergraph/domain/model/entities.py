"""Canonical entities produced by one resolution run.

Entities reference each other by stable string ids only; a merge is an index
rewrite in the resolution context, never pointer surgery between objects.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, ClassVar

from mattergraph.domain.model.enums import (
    SECURITY_EDGE_TYPES,
    EntityKind,
    LifecycleState,
    RoleType,
)

if TYPE_CHECKING:
    from datetime import date

    from mattergraph.domain.model.records import (
        AddressComponents,
        AddressRecord,
        CourtCase,
        OfficerRecord,
        SourceRef,
        TaxDebt,
    )


type EntityId = str


@dataclass(frozen=True, slots=True)
class CertainMatch:
    uncertain: ClassVar[bool] = False

    @property
    def similarity_percentage(self) -> int | None:
        return None


@dataclass(frozen=True, slots=True)
class UncertainMatch:
    similarity_percentage: int
    uncertain: ClassVar[bool] = True


type MatchConfidence = CertainMatch | UncertainMatch

CERTAIN = CertainMatch()


@dataclass(slots=True, kw_only=True)
class RoleAssignment:
    """One role a person holds with respect to one company."""

    role_type: RoleType
    lifecycle_state: LifecycleState
    company_id: EntityId
    role_title: str | None = None
    shares: int | str | None = None
    share_class: str | None = None
    confidence: MatchConfidence = CERTAIN

    @property
    def is_ceased(self) -> bool:
        return self.lifecycle_state is LifecycleState.CEASED

    @property
    def original_type(self) -> str:
        """Lifecycle-tagged role name, e.g. ``current_director``; doubles as the edge type."""
        return f"{self.lifecycle_state.value}_{self.role_type.edge_stem}"


@dataclass(slots=True, kw_only=True)
class CanonicalCompany:
    id: EntityId
    name: str
    acn: str | None = None
    abn: str | None = None
    status: str | None = None
    company_type: str | None = None
    registered_date: str | None = None
    address: AddressRecord | None = None
    sources: list[SourceRef] = field(default_factory=list["SourceRef"])
    tax_debt: TaxDebt | None = None
    court_cases: list[CourtCase] = field(default_factory=list["CourtCase"])


@dataclass(slots=True, kw_only=True)
class CanonicalPerson:
    id: EntityId
    name: str
    dob: str | None = None
    address: AddressRecord | None = None
    roles: list[RoleAssignment] = field(default_factory=list[RoleAssignment])
    company_ids: list[EntityId] = field(default_factory=list[EntityId])

    @property
    def lifecycle_state(self) -> LifecycleState:
        # Role-level state is authoritative; any current role keeps the person current.
        if self.roles and all(role.is_ceased for role in self.roles):
            return LifecycleState.CEASED
        return LifecycleState.CURRENT

    def attach_role(self, role: RoleAssignment) -> None:
        self.roles.append(role)
        if role.company_id not in self.company_ids:
            self.company_ids.append(role.company_id)


@dataclass(slots=True, kw_only=True)
class CompanyShareholder:
    """A shareholder classified as a company that did not resolve to a known company."""

    id: EntityId
    name: str
    lifecycle_state: LifecycleState
    shares: int | str | None = None
    share_class: str | None = None
    address: AddressRecord | None = None
    acn: str | None = None
    abn: str | None = None
    ceased_date: str | None = None
    holdings: list[RoleAssignment] = field(default_factory=list[RoleAssignment])

    @property
    def original_type(self) -> str:
        return f"{self.lifecycle_state.value}_shareholder"

    @property
    def company_ids(self) -> list[EntityId]:
        return list(dict.fromkeys(holding.company_id for holding in self.holdings))

    def attach_holding(self, holding: RoleAssignment) -> None:
        self.holdings.append(holding)


@dataclass(slots=True, kw_only=True)
class CanonicalAddress:
    id: EntityId
    normalized_key: str
    full_text: str | None
    components: AddressComponents
    address_type: str
    status: LifecycleState
    start_date: date | None = None
    end_date: date | None = None
    linked_entity_ids: list[EntityId] = field(default_factory=list[EntityId])
    entity_kinds: list[EntityKind] = field(default_factory=list[EntityKind])

    def link(self, entity_id: EntityId, kind: EntityKind) -> None:
        if entity_id not in self.linked_entity_ids:
            self.linked_entity_ids.append(entity_id)
        if kind not in self.entity_kinds:
            self.entity_kinds.append(kind)


@dataclass(slots=True, kw_only=True)
class BankruptcyNode:
    id: EntityId
    person_id: EntityId
    has_bankruptcy: bool
    uuid: str | None = None
    extract_id: str | None = None
    start_date: str | None = None
    source: SourceRef | None = None

    @property
    def name(self) -> str:
        return "Bankruptcy" if self.has_bankruptcy else "No Bankruptcy"


@dataclass(slots=True, kw_only=True)
class SecurityInterestSummary:
    """Aggregated registrations between one secured party and one grantor."""

    secured_party_id: EntityId
    grantor_id: EntityId
    collateral_type: str
    collateral_label: str
    person_grantor: bool
    registration_keys: set[str] = field(default_factory=set[str])

    @property
    def count(self) -> int:
        return len(self.registration_keys)

    @property
    def label(self) -> str:
        return f"{self.count} x {self.collateral_label}"


@dataclass(frozen=True, slots=True, kw_only=True)
class RelationshipEdge:
    from_id: EntityId
    to_id: EntityId
    edge_type: str
    label: str
    attributes: dict[str, object] = field(default_factory=dict[str, object], compare=False)

    @property
    def key(self) -> tuple[str, ...]:
        if self.edge_type in SECURITY_EDGE_TYPES:
            return (self.from_id, self.to_id, self.edge_type, self.label)
        return (self.from_id, self.to_id, self.edge_type)


@dataclass(slots=True, kw_only=True)
class GraphStats:
    total_companies: int = 0
    total_persons: int = 0
    total_directors: int = 0
    total_shareholders: int = 0
    total_secretaries: int = 0
    total_office_holders: int = 0
    total_addresses: int = 0
    total_relationships: int = 0


@dataclass(slots=True, kw_only=True)
class MatterGraph:
    """Result of one Graph Assembler run; never mutated after it is returned."""

    matter_id: str | None = None
    companies: list[CanonicalCompany] = field(default_factory=list[CanonicalCompany])
    persons: list[CanonicalPerson] = field(default_factory=list[CanonicalPerson])
    shareholders: list[CompanyShareholder] = field(default_factory=list[CompanyShareholder])
    addresses: list[CanonicalAddress] = field(default_factory=list[CanonicalAddress])
    bankruptcies: list[BankruptcyNode] = field(default_factory=list[BankruptcyNode])
    directors: list[OfficerRecord] = field(default_factory=list["OfficerRecord"])
    secretaries: list[OfficerRecord] = field(default_factory=list["OfficerRecord"])
    office_holders: list[OfficerRecord] = field(default_factory=list["OfficerRecord"])
    relationships: list[RelationshipEdge] = field(default_factory=list[RelationshipEdge])

    @property
    def stats(self) -> GraphStats:
        return GraphStats(
            total_companies=len(self.companies),
            total_persons=len(self.persons),
            total_directors=len(self.directors),
            total_shareholders=len(self.shareholders),
            total_secretaries=len(self.secretaries),
            total_office_holders=len(self.office_holders),
            total_addresses=len(self.addresses),
            total_relationships=len(self.relationships),
        )
