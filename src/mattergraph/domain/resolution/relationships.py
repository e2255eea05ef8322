"""Relationship Builder: derive the deduplicated edge list from resolved entities."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from mattergraph.domain.model import EdgeType, RelationshipEdge, RoleType

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from mattergraph.domain.model import RoleAssignment
    from mattergraph.domain.resolution.context import ResolutionContext

log = getLogger(__name__)


def shares_label(shares: int | str | None) -> str:
    if shares is None or shares in ("", 0):
        return "Shareholder"
    return f"{shares} shares"


def role_label(role: RoleAssignment) -> str:
    """Human-readable edge label, e.g. ``Director`` or ``Former 100 shares``."""

    match role.role_type:
        case RoleType.DIRECTOR:
            label = "Director"
        case RoleType.OFFICE_HOLDER:
            label = role.role_title or "Office Holder"
        case RoleType.SECRETARY | RoleType.SECRETARY_ROLE_INFERRED:
            label = "Secretary"
        case RoleType.SHAREHOLDER:
            label = shares_label(role.shares)
    if role.is_ceased:
        return f"Former {label}"
    return label


def deduplicate_edges(edges: Iterable[RelationshipEdge]) -> list[RelationshipEdge]:
    """Keep the first edge per composite key, preserving order."""

    seen: set[tuple[str, ...]] = set()
    unique: list[RelationshipEdge] = []
    for edge in edges:
        if edge.key in seen:
            continue
        seen.add(edge.key)
        unique.append(edge)
    return unique


class RelationshipBuilder:
    """Emit role, shareholding, security, bankruptcy and address edges."""

    def __init__(self, context: ResolutionContext) -> None:
        self._context = context

    def build(self) -> list[RelationshipEdge]:
        edges = [
            *self._role_edges(),
            *self._company_shareholder_edges(),
            *self._context.company_holding_edges,
            *self._security_edges(),
            *self._context.bankruptcy_edges,
            *self._address_edges(),
        ]
        unique = deduplicate_edges(edges)
        if len(unique) != len(edges):
            log.debug("Collapsed %d duplicate relationships", len(edges) - len(unique))
        self._context.relationships = unique
        return unique

    def _role_edges(self) -> Iterator[RelationshipEdge]:
        for person in self._context.persons.values():
            for role in person.roles:
                yield RelationshipEdge(
                    from_id=person.id,
                    to_id=role.company_id,
                    edge_type=role.original_type,
                    label=role_label(role),
                    attributes={
                        "uncertain": role.confidence.uncertain,
                        "similarityPercentage": role.confidence.similarity_percentage,
                    },
                )

    def _company_shareholder_edges(self) -> Iterator[RelationshipEdge]:
        for shareholder in self._context.company_shareholders.values():
            for holding in shareholder.holdings:
                yield RelationshipEdge(
                    from_id=shareholder.id,
                    to_id=holding.company_id,
                    edge_type=holding.original_type,
                    label=role_label(holding),
                    attributes={"shares": holding.shares, "shareClass": holding.share_class},
                )

    def _security_edges(self) -> Iterator[RelationshipEdge]:
        for summary in self._context.security_summaries.values():
            edge_type = EdgeType.PPSR_DIRECTOR if summary.person_grantor else EdgeType.PPSR_SECURITY
            yield RelationshipEdge(
                from_id=summary.secured_party_id,
                to_id=summary.grantor_id,
                edge_type=edge_type,
                label=summary.label,
                attributes={"collateralType": summary.collateral_type, "count": summary.count},
            )

    def _address_edges(self) -> Iterator[RelationshipEdge]:
        for address in self._context.addresses.values():
            for entity_id in address.linked_entity_ids:
                yield RelationshipEdge(
                    from_id=entity_id,
                    to_id=address.id,
                    edge_type=EdgeType.HAS_ADDRESS,
                    label=address.address_type,
                    attributes={
                        "addressType": address.address_type,
                        "status": address.status.label,
                    },
                )
