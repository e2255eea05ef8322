from __future__ import annotations

from mattergraph.config import DEFAULT_COLLATERAL_LABELS
from mattergraph.domain.model import (
    EdgeType,
    SecurityInterestReport,
    SecurityRegistration,
    SourceRef,
)
from mattergraph.domain.resolution.companies import CompanyResolver
from mattergraph.domain.resolution.context import ResolutionContext
from mattergraph.domain.resolution.identity import IdentityMergeEngine
from mattergraph.domain.resolution.relationships import RelationshipBuilder
from mattergraph.domain.resolution.security_interests import (
    SecurityInterestAggregator,
    collateral_label,
    parse_party_summary,
)

NAB = "ACN 004044937 NATIONAL AUSTRALIA BANK LIMITED"


def _aggregator(context: ResolutionContext) -> SecurityInterestAggregator:
    companies = CompanyResolver(context)
    return SecurityInterestAggregator(
        context, companies, IdentityMergeEngine(context, companies)
    )


def _registration(
    number: str | None, collateral: str = "Motor Vehicle", party: str = NAB
) -> SecurityRegistration:
    return SecurityRegistration(
        secured_party_summary=party,
        collateral_class_type=collateral,
        registration_number=number,
    )


def _company_report(
    *registrations: SecurityRegistration, report_id: str = "ppsr-1"
) -> SecurityInterestReport:
    return SecurityInterestReport(
        source=SourceRef(report_type="ppsr", report_id=report_id, search_word="Acme Pty Ltd"),
        acn="123456789",
        subject_name="Acme Pty Ltd",
        registrations=registrations,
    )


def test_parse_party_summary_uses_first_party() -> None:
    party = parse_party_summary(f"{NAB} | ACN 111222333 SOMEONE ELSE PTY LTD")

    assert party.acn == "004044937"
    assert party.abn is None
    assert party.name == "NATIONAL AUSTRALIA BANK LIMITED"


def test_parse_party_summary_reads_abn() -> None:
    party = parse_party_summary("ABN 51824753556 WESTPAC BANKING CORPORATION")

    assert party.abn == "51824753556"
    assert party.name == "WESTPAC BANKING CORPORATION"


def test_collateral_label_maps_known_classes() -> None:
    assert collateral_label("All Pap No Except", DEFAULT_COLLATERAL_LABELS) == "BLANKET SECURITY"
    assert collateral_label(" Motor  Vehicle ", DEFAULT_COLLATERAL_LABELS) == "MOTOR VEHICLE"
    assert collateral_label("Crops", DEFAULT_COLLATERAL_LABELS) == "CROPS"


def test_registrations_aggregate_per_collateral_type() -> None:
    context = ResolutionContext()
    report = _company_report(
        _registration("R1"),
        _registration("R2"),
        _registration("R3", collateral="Other Goods"),
    )

    summaries = _aggregator(context).aggregate([report])

    assert [(summary.label, summary.count) for summary in summaries] == [
        ("2 x MOTOR VEHICLE", 2),
        ("1 x OTHER GOODS", 1),
    ]
    assert {summary.secured_party_id for summary in summaries} == {"company_004044937"}
    assert {summary.grantor_id for summary in summaries} == {"company_123456789"}
    bank = context.companies["company_004044937"]
    assert bank.name == "NATIONAL AUSTRALIA BANK LIMITED"
    assert bank.sources[0].report_type == "ppsr-secured-party"


def test_registration_seen_in_two_reports_counts_once() -> None:
    context = ResolutionContext()
    aggregator = _aggregator(context)

    aggregator.aggregate(
        [
            _company_report(_registration("R1"), report_id="ppsr-1"),
            _company_report(_registration("R1"), _registration("R2"), report_id="ppsr-2"),
        ]
    )

    (summary,) = context.security_summaries.values()
    assert summary.count == 2


def test_unnumbered_registrations_count_individually() -> None:
    context = ResolutionContext()

    (summary,) = _aggregator(context).aggregate(
        [_company_report(_registration(None), _registration(None))]
    )

    assert summary.count == 2


def test_unnumbered_registrations_in_reports_without_id_stay_distinct() -> None:
    context = ResolutionContext()
    reports = [
        SecurityInterestReport(
            source=SourceRef(), acn="123456789", registrations=(_registration(None),)
        )
        for _ in range(2)
    ]

    (summary,) = _aggregator(context).aggregate(reports)

    assert summary.count == 2


def test_incomplete_registrations_are_skipped() -> None:
    context = ResolutionContext()
    report = _company_report(
        SecurityRegistration(secured_party_summary=None, collateral_class_type="Account"),
        SecurityRegistration(secured_party_summary=NAB, collateral_class_type=None),
    )

    assert _aggregator(context).aggregate([report]) == []


def test_grantor_falls_back_to_summary_without_report_identifiers() -> None:
    context = ResolutionContext()
    report = SecurityInterestReport(
        source=SourceRef(report_id="ppsr-9"),
        registrations=(
            SecurityRegistration(
                secured_party_summary=NAB,
                collateral_class_type="Account",
                registration_number="R9",
                grantor_summary="ACN 555666777 BORROWER PTY LTD",
            ),
        ),
    )

    (summary,) = _aggregator(context).aggregate([report])

    assert summary.grantor_id == "company_555666777"
    assert context.companies["company_555666777"].name == "BORROWER PTY LTD"


def test_person_search_without_registrations_creates_person() -> None:
    context = ResolutionContext()
    report = SecurityInterestReport(
        source=SourceRef(report_type="director-ppsr", report_id="p-1"),
        person_search=True,
        subject_name="Jane Citizen",
    )

    assert _aggregator(context).aggregate([report]) == []
    assert list(context.persons) == ["person_jane_citizen"]


def test_person_search_produces_director_security_edges() -> None:
    context = ResolutionContext()
    report = SecurityInterestReport(
        source=SourceRef(report_type="director-ppsr", report_id="p-1"),
        person_search=True,
        subject_name="Jane Citizen",
        registrations=(_registration("R1"), _registration("R2", collateral="Other Goods")),
    )
    _aggregator(context).aggregate([report])

    edges = RelationshipBuilder(context).build()

    assert [(edge.edge_type, edge.label) for edge in edges] == [
        (EdgeType.PPSR_DIRECTOR, "1 x MOTOR VEHICLE"),
        (EdgeType.PPSR_DIRECTOR, "1 x OTHER GOODS"),
    ]
    assert all(edge.from_id == "company_004044937" for edge in edges)
    assert all(edge.to_id == "person_jane_citizen" for edge in edges)
    assert edges[0].attributes == {"collateralType": "Motor Vehicle", "count": 1}
