from __future__ import annotations

import json

from mattergraph.adapters.mindmap import dump_mind_map, mind_map_payload, render_mind_map
from mattergraph.domain.model import (
    BankruptcySearch,
    MatterBatch,
    RoleType,
    SourceRef,
    TaxDebt,
    TaxDebtReport,
)
from mattergraph.domain.resolution import assemble_matter_graph
from tests.helpers.records import make_address, make_company, make_officer, make_shareholder


def _graph_payload() -> dict[str, object]:
    batch = MatterBatch(
        matter_id="matter-7",
        companies=(make_company(status="unknown", addresses=(make_address("1 George St"),)),),
        directors=(make_officer("Jane Doe", dob="1980-01-01"),),
        office_holders=(make_officer("Max Power", role_type=RoleType.OFFICE_HOLDER),),
        shareholders=(
            make_shareholder("Jane Doe", shares=100),
            make_shareholder("Holdco Pty Ltd", shares=5),
        ),
        bankruptcy_searches=(
            BankruptcySearch(source=SourceRef(report_id="b-1"), subject_name="Jane Doe"),
        ),
        tax_debt_reports=(
            TaxDebtReport(
                source=SourceRef(report_id="t-1"),
                acn="123456789",
                debt=TaxDebt(amount=99.5, status="Active"),
            ),
        ),
    )
    return mind_map_payload(assemble_matter_graph(batch))


def test_payload_uses_camel_case_keys() -> None:
    payload = _graph_payload()

    assert payload["matterId"] == "matter-7"
    entities = payload["entities"]
    assert isinstance(entities, dict)
    assert set(entities) == {
        "companies",
        "persons",
        "shareholders",
        "addresses",
        "bankruptcies",
        "directors",
        "secretaries",
        "officeHolders",
    }
    assert payload["stats"] == {
        "totalCompanies": 1,
        "totalPersons": 2,
        "totalDirectors": 1,
        "totalShareholders": 1,
        "totalSecretaries": 0,
        "totalOfficeHolders": 1,
        "totalAddresses": 1,
        "totalRelationships": 6,
    }


def test_company_renders_unknown_status_and_tax_debt() -> None:
    payload = _graph_payload()
    entities = payload["entities"]
    assert isinstance(entities, dict)
    (company,) = entities["companies"]

    assert company["status"] == "Unknown"
    assert company["reportId"] == "asic-1"
    assert company["taxDebt"] == {
        "amount": 99.5,
        "status": "Active",
        "date": None,
        "ato_updated_at": None,
    }
    assert company["courtCases"] == []


def test_person_roles_carry_merge_confidence() -> None:
    payload = _graph_payload()
    entities = payload["entities"]
    assert isinstance(entities, dict)
    persons = {person["id"]: person for person in entities["persons"]}

    jane = persons["person_jane_doe_1980-01-01"]
    assert jane["type"] == "current_person"
    assert jane["lifecycleState"] == "current"
    assert [role["originalType"] for role in jane["roles"]] == [
        "current_director",
        "current_shareholder",
    ]
    assert jane["roles"][1]["uncertain"] is True
    assert jane["roles"][1]["similarityPercentage"] == 78
    assert jane["companyIds"] == ["company_123456789"]


def test_relationships_use_from_and_to() -> None:
    payload = _graph_payload()
    relationships = payload["relationships"]
    assert isinstance(relationships, list)

    by_type = {edge["type"]: edge for edge in relationships}
    assert by_type["current_director"]["from"] == "person_jane_doe_1980-01-01"
    assert by_type["current_director"]["to"] == "company_123456789"
    assert by_type["current_director"]["attributes"] == {
        "uncertain": False,
        "similarityPercentage": None,
    }
    assert by_type["current_shareholder"]["label"] == "5 shares"
    assert by_type["bankruptcy"]["label"] == "No Bankruptcy"
    assert by_type["has_address"]["attributes"]["status"] == "Current"


def test_legacy_collections_keep_pre_merge_records() -> None:
    payload = _graph_payload()
    entities = payload["entities"]
    assert isinstance(entities, dict)

    (holder,) = entities["officeHolders"]
    assert holder["type"] == "current_officeholder"
    assert holder["companyAcn"] == "123456789"
    (shareholder,) = entities["shareholders"]
    assert shareholder["id"] == "shareholder_holdco_pty_ltd"
    assert shareholder["companyIds"] == ["company_123456789"]


def test_dump_matches_payload() -> None:
    graph = assemble_matter_graph(MatterBatch(directors=(make_officer("Jane Doe"),)))

    assert json.loads(dump_mind_map(graph)) == mind_map_payload(graph)
    assert render_mind_map(graph).stats.total_persons == 1
