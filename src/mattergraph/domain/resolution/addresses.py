"""Address Deduplicator: one canonical address per normalized string."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from mattergraph.domain.model import CanonicalAddress, EntityKind, LifecycleState
from mattergraph.domain.resolution.normalization import normalize_address

if TYPE_CHECKING:
    from collections.abc import Iterable

    from mattergraph.domain.model import (
        AddressRecord,
        CompanyRecord,
        EntityId,
        RoleRecord,
    )
    from mattergraph.domain.resolution.context import ResolutionContext

log = getLogger(__name__)

DEFAULT_ADDRESS_TYPE = "Address"


def _contributes_current(address: AddressRecord) -> bool:
    return address.status is LifecycleState.CURRENT or address.end_date is None


def _contributed_state(address: AddressRecord) -> LifecycleState:
    return LifecycleState.CURRENT if _contributes_current(address) else LifecycleState.CEASED


class AddressDeduplicator:
    """Group address observations by normalized text and link them to entities."""

    def __init__(self, context: ResolutionContext) -> None:
        self._context = context

    def add(
        self, address: AddressRecord | None, entity_id: EntityId, kind: EntityKind
    ) -> CanonicalAddress | None:
        """Record that ``entity_id`` is located at ``address``.

        Addresses that normalize to an empty string are dropped.
        """

        if address is None:
            return None
        key = normalize_address(address)
        if not key:
            log.debug("Dropping address without usable text for %s", entity_id)
            return None

        canonical = self._context.addresses.get(key)
        if canonical is None:
            canonical = self._seed(key, address)
        else:
            self._reconcile(canonical, address)
        canonical.link(entity_id, kind)
        return canonical

    def add_company_records(self, records: Iterable[CompanyRecord]) -> None:
        for record in records:
            company_id = self._context.record_company_ids.get(id(record))
            if company_id is None:
                continue
            for address in record.addresses:
                self.add(address, company_id, EntityKind.COMPANY)

    def add_role_records(self, records: Iterable[RoleRecord]) -> None:
        for record in records:
            resolved = self._context.record_entities.get(id(record))
            if resolved is None:
                continue
            entity_id, kind = resolved
            self.add(record.address, entity_id, kind)

    def _seed(self, key: str, address: AddressRecord) -> CanonicalAddress:
        length = self._context.config.address_id_length
        canonical = CanonicalAddress(
            id=self._context.claim_id(f"address_{key.replace(' ', '_')[:length]}"),
            normalized_key=key,
            full_text=address.full_text,
            components=address.components,
            address_type=address.address_type or DEFAULT_ADDRESS_TYPE,
            status=_contributed_state(address),
            start_date=address.start_date,
            end_date=address.end_date,
        )
        self._context.addresses[key] = canonical
        return canonical

    def _reconcile(self, canonical: CanonicalAddress, address: AddressRecord) -> None:
        if _contributes_current(address):
            canonical.status = LifecycleState.CURRENT
        if address.start_date is not None and (
            canonical.start_date is None or address.start_date < canonical.start_date
        ):
            canonical.start_date = address.start_date
        if address.end_date is not None and (
            canonical.end_date is None or address.end_date > canonical.end_date
        ):
            canonical.end_date = address.end_date
        if canonical.full_text is None and address.full_text:
            canonical.full_text = address.full_text
