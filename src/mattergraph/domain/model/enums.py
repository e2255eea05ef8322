"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum


class RoleType(StrEnum):
    DIRECTOR = "director"
    OFFICE_HOLDER = "officeHolder"
    SECRETARY = "secretary"
    SECRETARY_ROLE_INFERRED = "secretaryRoleInferred"
    SHAREHOLDER = "shareholder"

    @property
    def edge_stem(self) -> str:
        """Role name used inside edge types (``current_<stem>``/``ceased_<stem>``)."""
        return _EDGE_STEMS[self]


_EDGE_STEMS: dict[RoleType, str] = {
    RoleType.DIRECTOR: "director",
    RoleType.OFFICE_HOLDER: "officeholder",
    RoleType.SECRETARY: "secretary",
    RoleType.SECRETARY_ROLE_INFERRED: "secretary",
    RoleType.SHAREHOLDER: "shareholder",
}


class LifecycleState(StrEnum):
    CURRENT = "current"
    CEASED = "ceased"

    @property
    def label(self) -> str:
        return self.value.capitalize()


class EntityKind(StrEnum):
    """Kind of entity an address is attached to."""

    COMPANY = "Company"
    PERSON = "Person"


class EdgeType(StrEnum):
    """Edge types that are not derived from a role (see ``RoleAssignment.original_type``)."""

    COMPANY_SHAREHOLDER = "company_shareholder"
    PPSR_SECURITY = "ppsr_security"
    PPSR_DIRECTOR = "ppsr_director"
    BANKRUPTCY = "bankruptcy"
    HAS_ADDRESS = "has_address"


SECURITY_EDGE_TYPES: frozenset[str] = frozenset({EdgeType.PPSR_SECURITY, EdgeType.PPSR_DIRECTOR})
