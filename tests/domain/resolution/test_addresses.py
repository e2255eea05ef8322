from __future__ import annotations

from datetime import date

from mattergraph.config import EngineConfig
from mattergraph.domain.model import EntityKind, LifecycleState
from mattergraph.domain.resolution.addresses import AddressDeduplicator
from mattergraph.domain.resolution.context import ResolutionContext
from tests.helpers.records import make_address


def test_punctuation_variants_share_one_address() -> None:
    context = ResolutionContext()
    deduplicator = AddressDeduplicator(context)

    first = deduplicator.add(make_address("1 George St., Sydney"), "company_1", EntityKind.COMPANY)
    second = deduplicator.add(make_address("1 george st sydney"), "person_a", EntityKind.PERSON)

    assert first is second
    assert len(context.addresses) == 1
    assert first is not None
    assert first.id == "address_1_george_st_sydney"
    assert first.full_text == "1 George St., Sydney"
    assert first.linked_entity_ids == ["company_1", "person_a"]
    assert first.entity_kinds == [EntityKind.COMPANY, EntityKind.PERSON]


def test_linking_the_same_entity_twice_is_idempotent() -> None:
    context = ResolutionContext()
    deduplicator = AddressDeduplicator(context)

    deduplicator.add(make_address("5 King St"), "company_1", EntityKind.COMPANY)
    canonical = deduplicator.add(make_address("5 King St"), "company_1", EntityKind.COMPANY)

    assert canonical is not None
    assert canonical.linked_entity_ids == ["company_1"]


def test_any_current_observation_makes_address_current() -> None:
    context = ResolutionContext()
    deduplicator = AddressDeduplicator(context)
    ceased = make_address(
        "9 Old Rd",
        ceased=True,
        start_date=date(2015, 1, 1),
        end_date=date(2018, 6, 30),
    )
    later_ceased = make_address(
        "9 Old Rd",
        ceased=True,
        start_date=date(2012, 3, 1),
        end_date=date(2020, 2, 1),
    )

    canonical = deduplicator.add(ceased, "company_1", EntityKind.COMPANY)
    deduplicator.add(later_ceased, "company_2", EntityKind.COMPANY)

    assert canonical is not None
    assert canonical.status is LifecycleState.CEASED
    assert canonical.start_date == date(2012, 3, 1)
    assert canonical.end_date == date(2020, 2, 1)

    deduplicator.add(make_address("9 Old Rd"), "person_a", EntityKind.PERSON)

    assert canonical.status is LifecycleState.CURRENT


def test_ceased_status_without_end_date_counts_as_current() -> None:
    context = ResolutionContext()
    deduplicator = AddressDeduplicator(context)

    canonical = deduplicator.add(make_address("3 Lane", ceased=True), "c", EntityKind.COMPANY)

    assert canonical is not None
    assert canonical.status is LifecycleState.CURRENT


def test_empty_addresses_are_dropped() -> None:
    context = ResolutionContext()
    deduplicator = AddressDeduplicator(context)

    assert deduplicator.add(make_address("  ,  "), "company_1", EntityKind.COMPANY) is None
    assert deduplicator.add(None, "company_1", EntityKind.COMPANY) is None
    assert context.addresses == {}


def test_address_type_defaults_and_is_kept_from_first_observation() -> None:
    context = ResolutionContext()
    deduplicator = AddressDeduplicator(context)

    untyped = deduplicator.add(make_address("1 A St"), "c", EntityKind.COMPANY)
    typed = deduplicator.add(
        make_address("2 B St", address_type="Registered Office"), "c", EntityKind.COMPANY
    )

    assert untyped is not None
    assert typed is not None
    assert untyped.address_type == "Address"
    assert typed.address_type == "Registered Office"


def test_address_ids_are_truncated_and_made_unique() -> None:
    context = ResolutionContext(config=EngineConfig(address_id_length=10))
    deduplicator = AddressDeduplicator(context)

    first = deduplicator.add(make_address("12 Long Street North"), "c", EntityKind.COMPANY)
    second = deduplicator.add(make_address("12 Long Street South"), "c", EntityKind.COMPANY)

    assert first is not None
    assert second is not None
    assert first.id == "address_12_long_st"
    assert second.id == "address_12_long_st_2"
