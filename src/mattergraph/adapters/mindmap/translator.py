"""Render a resolved ``MatterGraph`` as the mind-map document."""

from __future__ import annotations

from typing import TYPE_CHECKING

from mattergraph.domain.resolution.normalization import address_text

from .schema import (
    AddressOut,
    BankruptcyOut,
    CompanyOut,
    CourtCaseOut,
    EntitiesOut,
    MindMapDocument,
    PersonOut,
    RelationshipOut,
    RoleOut,
    RoleRecordOut,
    ShareholderOut,
    SourceOut,
    StatsOut,
    TaxDebtOut,
)

if TYPE_CHECKING:
    from datetime import date

    from mattergraph.domain.model import (
        AddressRecord,
        BankruptcyNode,
        CanonicalAddress,
        CanonicalCompany,
        CanonicalPerson,
        CompanyShareholder,
        GraphStats,
        MatterGraph,
        OfficerRecord,
        RelationshipEdge,
        RoleAssignment,
    )


def render_mind_map(graph: MatterGraph) -> MindMapDocument:
    return MindMapDocument(
        matter_id=graph.matter_id,
        entities=EntitiesOut(
            companies=[_company(company) for company in graph.companies],
            persons=[_person(person) for person in graph.persons],
            shareholders=[_shareholder(shareholder) for shareholder in graph.shareholders],
            addresses=[_address(address) for address in graph.addresses],
            bankruptcies=[_bankruptcy(node) for node in graph.bankruptcies],
            directors=[_role_record(record) for record in graph.directors],
            secretaries=[_role_record(record) for record in graph.secretaries],
            office_holders=[_role_record(record) for record in graph.office_holders],
        ),
        relationships=[_relationship(edge) for edge in graph.relationships],
        stats=_stats(graph.stats),
    )


def mind_map_payload(graph: MatterGraph) -> dict[str, object]:
    """JSON-compatible mind-map document with camelCase keys."""

    return render_mind_map(graph).model_dump(by_alias=True, mode="json")


def dump_mind_map(graph: MatterGraph, *, indent: int | None = 2) -> str:
    return render_mind_map(graph).model_dump_json(by_alias=True, indent=indent)


def _iso(value: date | None) -> str | None:
    return value.isoformat() if value is not None else None


def _address_line(address: AddressRecord | None) -> str | None:
    if address is None:
        return None
    return address_text(address) or None


def _company(company: CanonicalCompany) -> CompanyOut:
    first = company.sources[0] if company.sources else None
    return CompanyOut(
        id=company.id,
        name=company.name,
        acn=company.acn,
        abn=company.abn,
        status=company.status or "Unknown",
        type=company.company_type,
        registered=company.registered_date,
        address=_address_line(company.address),
        report_type=first.report_type if first else None,
        report_id=first.report_id if first else None,
        search_word=first.search_word if first else None,
        sources=[
            SourceOut(
                report_type=source.report_type,
                report_id=source.report_id,
                search_word=source.search_word,
            )
            for source in company.sources
        ],
        tax_debt=TaxDebtOut(
            amount=company.tax_debt.amount,
            status=company.tax_debt.status,
            date=company.tax_debt.date,
            ato_updated_at=company.tax_debt.ato_updated_at,
        )
        if company.tax_debt is not None
        else None,
        court_cases=[
            CourtCaseOut(
                uuid=case.uuid,
                type=case.case_type_label,
                case_number=case.case_number,
                case_name=case.case_name,
                case_type=case.case_type,
                court_name=case.court_name,
                state=case.state,
                notification_time=case.notification_time,
                url=case.url,
                party_role=case.party_role,
                match_on=case.match_on,
            )
            for case in company.court_cases
        ],
    )


def _role(role: RoleAssignment) -> RoleOut:
    return RoleOut(
        type=role.role_type.edge_stem,
        original_type=role.original_type,
        company_ids=[role.company_id],
        role=role.role_title,
        shares=role.shares,
        share_class=role.share_class,
        uncertain=role.confidence.uncertain,
        similarity_percentage=role.confidence.similarity_percentage,
    )


def _person(person: CanonicalPerson) -> PersonOut:
    state = person.lifecycle_state
    return PersonOut(
        id=person.id,
        name=person.name,
        dob=person.dob,
        address=_address_line(person.address),
        type=f"{state.value}_person",
        lifecycle_state=state.value,
        roles=[_role(role) for role in person.roles],
        company_ids=list(person.company_ids),
    )


def _shareholder(shareholder: CompanyShareholder) -> ShareholderOut:
    return ShareholderOut(
        id=shareholder.id,
        name=shareholder.name,
        type=shareholder.original_type,
        shares=shareholder.shares,
        share_class=shareholder.share_class,
        acn=shareholder.acn,
        abn=shareholder.abn,
        address=_address_line(shareholder.address),
        ceased_date=shareholder.ceased_date,
        company_ids=shareholder.company_ids,
    )


def _address(address: CanonicalAddress) -> AddressOut:
    return AddressOut(
        id=address.id,
        address=address.full_text,
        address1=address.components.line1,
        address2=address.components.line2,
        suburb=address.components.suburb,
        state=address.components.state,
        postcode=address.components.postcode,
        country=address.components.country,
        type=address.address_type,
        status=address.status.label,
        start_date=_iso(address.start_date),
        end_date=_iso(address.end_date),
        normalized_key=address.normalized_key,
        linked_entity_ids=list(address.linked_entity_ids),
        entity_types=[kind.value for kind in address.entity_kinds],
    )


def _bankruptcy(node: BankruptcyNode) -> BankruptcyOut:
    return BankruptcyOut(
        id=node.id,
        name=node.name,
        from_date=node.start_date,
        has_bankruptcy=node.has_bankruptcy,
        uuid=node.uuid,
        extract_id=node.extract_id,
        person_id=node.person_id,
        report_id=node.source.report_id if node.source else None,
        search_word=node.source.search_word if node.source else None,
    )


def _role_record(record: OfficerRecord) -> RoleRecordOut:
    return RoleRecordOut(
        name=record.name,
        dob=record.dob,
        type=f"{record.lifecycle_state.value}_{record.role_type.edge_stem}",
        role=record.role_title,
        address=_address_line(record.address),
        company_name=record.company.name,
        company_acn=record.company.acn,
        company_abn=record.company.abn,
        ceased_date=record.ceased_date,
        report_id=record.source.report_id,
    )


def _relationship(edge: RelationshipEdge) -> RelationshipOut:
    return RelationshipOut(
        from_id=edge.from_id,
        to_id=edge.to_id,
        type=str(edge.edge_type),
        label=edge.label,
        attributes={key: _json_value(value) for key, value in edge.attributes.items()},
    )


def _json_value(value: object) -> str | int | float | bool | None:
    if value is None or isinstance(value, bool | int | float | str):
        return value
    return str(value)


def _stats(stats: GraphStats) -> StatsOut:
    return StatsOut(
        total_companies=stats.total_companies,
        total_persons=stats.total_persons,
        total_directors=stats.total_directors,
        total_shareholders=stats.total_shareholders,
        total_secretaries=stats.total_secretaries,
        total_office_holders=stats.total_office_holders,
        total_addresses=stats.total_addresses,
        total_relationships=stats.total_relationships,
    )
