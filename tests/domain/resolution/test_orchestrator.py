from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import pytest

from mattergraph.config import EngineConfig
from mattergraph.domain.model import (
    EdgeType,
    EntityKind,
    LifecycleState,
    MatterBatch,
    RoleType,
    SecurityInterestReport,
    SecurityRegistration,
    SourceRef,
)
from mattergraph.domain.resolution import (
    GraphAssembler,
    ResolutionContext,
    assemble_matter_graph,
    default_phases,
)
from tests.helpers.records import make_address, make_company, make_officer, make_shareholder

if TYPE_CHECKING:
    from mattergraph.domain.model import MatterGraph


def _jane_doe_batch() -> MatterBatch:
    return MatterBatch(
        matter_id="matter-1",
        companies=(make_company(addresses=(make_address("1 George St, Sydney NSW 2000"),)),),
        directors=(make_officer("Jane Doe", dob="1980-01-01"),),
        shareholders=(make_shareholder("Jane Doe", dob="1980-01-01", shares=100),),
    )


def test_empty_batch_yields_empty_graph() -> None:
    graph = assemble_matter_graph(MatterBatch(matter_id="empty"))

    assert graph.matter_id == "empty"
    assert graph.companies == []
    assert graph.persons == []
    assert graph.relationships == []
    assert graph.stats.total_relationships == 0


def test_empty_batch_logs_warning(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING, logger="mattergraph.domain.resolution.orchestrator"):
        assemble_matter_graph(MatterBatch(matter_id="empty"))

    assert "Matter empty has no records to resolve" in caplog.text


def test_person_with_two_roles_resolves_to_one_node() -> None:
    graph = assemble_matter_graph(_jane_doe_batch())

    assert [company.id for company in graph.companies] == ["company_123456789"]
    (person,) = graph.persons
    assert person.id == "person_jane_doe_1980-01-01"
    assert person.lifecycle_state is LifecycleState.CURRENT

    role_edges = [edge for edge in graph.relationships if edge.from_id == person.id]
    assert [(edge.edge_type, edge.label) for edge in role_edges] == [
        ("current_director", "Director"),
        ("current_shareholder", "100 shares"),
    ]
    assert all(edge.to_id == "company_123456789" for edge in role_edges)


def test_company_address_produces_address_edge() -> None:
    graph = assemble_matter_graph(_jane_doe_batch())

    (address,) = graph.addresses
    (edge,) = [edge for edge in graph.relationships if edge.edge_type == EdgeType.HAS_ADDRESS]
    assert (edge.from_id, edge.to_id) == ("company_123456789", address.id)
    assert edge.attributes["status"] == "Current"


def _address_edges(graph: MatterGraph) -> list[tuple[str, str]]:
    return [
        (edge.from_id, edge.to_id)
        for edge in graph.relationships
        if edge.edge_type == EdgeType.HAS_ADDRESS
    ]


def test_officer_addresses_merge_into_one_node() -> None:
    batch = MatterBatch(
        directors=(
            make_officer(
                "Jane Doe", dob="1980-01-01", address=make_address("1 George St., Sydney")
            ),
            make_officer("John Roe", address=make_address("1 george st sydney")),
        ),
    )

    graph = assemble_matter_graph(batch)

    (address,) = graph.addresses
    assert address.linked_entity_ids == ["person_jane_doe_1980-01-01", "person_john_roe"]
    assert address.entity_kinds == [EntityKind.PERSON]
    assert _address_edges(graph) == [
        ("person_jane_doe_1980-01-01", address.id),
        ("person_john_roe", address.id),
    ]


def test_address_of_folded_record_links_to_merged_person() -> None:
    batch = MatterBatch(
        directors=(make_officer("Mary Major", dob="1965-03-02"),),
        shareholders=(make_shareholder("Mary Major", address=make_address("7 Home St")),),
    )

    graph = assemble_matter_graph(batch)

    (person,) = graph.persons
    assert person.id == "person_mary_major_1965-03-02"
    (address,) = graph.addresses
    assert address.linked_entity_ids == [person.id]
    assert _address_edges(graph) == [(person.id, address.id)]


def test_company_shareholder_addresses_link_to_company_nodes() -> None:
    batch = MatterBatch(
        companies=(make_company("Holdco Pty Ltd", acn="999999999"),),
        shareholders=(
            make_shareholder(
                "Holdco Pty Ltd", acn="999999999", address=make_address("2 Pitt St")
            ),
            make_shareholder("Other Pty Ltd", address=make_address("9 Bridge St")),
        ),
    )

    graph = assemble_matter_graph(batch)

    assert graph.persons == []
    linked = {address.full_text: address for address in graph.addresses}
    assert linked["2 Pitt St"].linked_entity_ids == ["company_999999999"]
    assert linked["9 Bridge St"].linked_entity_ids == ["shareholder_other_pty_ltd"]
    assert all(address.entity_kinds == [EntityKind.COMPANY] for address in graph.addresses)


def test_stats_count_legacy_collections() -> None:
    batch = MatterBatch(
        directors=(make_officer("Jane Doe"),),
        secretaries=(make_officer("Jane Doe", role_type=RoleType.SECRETARY_ROLE_INFERRED),),
    )

    graph = assemble_matter_graph(batch)

    assert graph.stats.total_directors == 1
    assert graph.stats.total_secretaries == 1
    assert graph.stats.total_persons == 1
    edge_types = [edge.edge_type for edge in graph.relationships]
    assert edge_types == ["current_director", "current_secretary"]


def test_person_with_only_ceased_roles_is_ceased() -> None:
    graph = assemble_matter_graph(MatterBatch(directors=(make_officer("Old Hand", ceased=True),)))

    (person,) = graph.persons
    assert person.lifecycle_state is LifecycleState.CEASED
    assert graph.relationships[0].label == "Former Director"


def test_security_report_for_known_company_targets_it() -> None:
    batch = MatterBatch(
        companies=(make_company(),),
        security_interest_reports=(
            SecurityInterestReport(
                source=SourceRef(report_type="ppsr", report_id="ppsr-1"),
                acn="123456789",
                registrations=(
                    SecurityRegistration(
                        secured_party_summary="ACN 004044937 NATIONAL AUSTRALIA BANK LIMITED",
                        collateral_class_type="Motor Vehicle",
                        registration_number="R1",
                    ),
                ),
            ),
        ),
    )

    graph = assemble_matter_graph(batch)

    (edge,) = [edge for edge in graph.relationships if edge.edge_type == EdgeType.PPSR_SECURITY]
    assert (edge.from_id, edge.to_id) == ("company_004044937", "company_123456789")
    assert edge.label == "1 x MOTOR VEHICLE"
    assert len(graph.companies) == 2


def test_resolution_is_deterministic() -> None:
    first = assemble_matter_graph(_jane_doe_batch())
    second = assemble_matter_graph(_jane_doe_batch())

    assert [edge.key for edge in first.relationships] == [
        edge.key for edge in second.relationships
    ]
    assert [person.id for person in first.persons] == [person.id for person in second.persons]


def test_config_is_applied() -> None:
    batch = MatterBatch(shareholders=(make_shareholder("Muster GmbH"),))

    default_graph = assemble_matter_graph(batch)
    custom_graph = assemble_matter_graph(batch, config=EngineConfig(company_tokens=("gmbh",)))

    assert [person.name for person in default_graph.persons] == ["Muster GmbH"]
    assert custom_graph.persons == []
    assert [node.id for node in custom_graph.shareholders] == ["shareholder_muster_gmbh"]


@dataclass(slots=True)
class _RecordingPhase:
    name: str = "recording"
    seen: list[int] = field(default_factory=list[int])

    def run(self, batch: MatterBatch, *, context: ResolutionContext) -> None:
        self.seen.append(len(context.relationships))


def test_assembler_runs_appended_phase_last() -> None:
    recorder = _RecordingPhase()
    assembler = GraphAssembler().with_phase(recorder)

    assembler.run(_jane_doe_batch())

    assert [phase.name for phase in assembler.phases][-1] == "recording"
    assert len(assembler.phases) == len(default_phases()) + 1
    # Relationships are already built when the appended phase runs.
    assert recorder.seen == [3]
