"""Domain model: input records, canonical entities and enums."""

from __future__ import annotations

from .entities import (
    CERTAIN,
    BankruptcyNode,
    CanonicalAddress,
    CanonicalCompany,
    CanonicalPerson,
    CertainMatch,
    CompanyShareholder,
    EntityId,
    GraphStats,
    MatchConfidence,
    MatterGraph,
    RelationshipEdge,
    RoleAssignment,
    SecurityInterestSummary,
    UncertainMatch,
)
from .enums import SECURITY_EDGE_TYPES, EdgeType, EntityKind, LifecycleState, RoleType
from .records import (
    AddressComponents,
    AddressRecord,
    BankruptcySearch,
    CompanyRecord,
    CompanyRef,
    CourtCase,
    CourtReport,
    MatterBatch,
    OfficerRecord,
    RoleRecord,
    SecurityInterestReport,
    SecurityRegistration,
    ShareholderRecord,
    SourceRef,
    TaxDebt,
    TaxDebtReport,
)

__all__ = [
    "CERTAIN",
    "SECURITY_EDGE_TYPES",
    "AddressComponents",
    "AddressRecord",
    "BankruptcyNode",
    "BankruptcySearch",
    "CanonicalAddress",
    "CanonicalCompany",
    "CanonicalPerson",
    "CertainMatch",
    "CompanyRecord",
    "CompanyRef",
    "CompanyShareholder",
    "CourtCase",
    "CourtReport",
    "EdgeType",
    "EntityId",
    "EntityKind",
    "GraphStats",
    "LifecycleState",
    "MatchConfidence",
    "MatterBatch",
    "MatterGraph",
    "OfficerRecord",
    "RelationshipEdge",
    "RoleAssignment",
    "RoleRecord",
    "RoleType",
    "SecurityInterestReport",
    "SecurityInterestSummary",
    "SecurityRegistration",
    "ShareholderRecord",
    "SourceRef",
    "TaxDebt",
    "TaxDebtReport",
    "UncertainMatch",
]
