"""Company Resolver: one canonical company per ACN/ABN."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from mattergraph.domain.model import CanonicalCompany, LifecycleState
from mattergraph.domain.resolution.normalization import normalize_identifier, normalize_name

if TYPE_CHECKING:
    from collections.abc import Iterable

    from mattergraph.domain.model import (
        AddressRecord,
        CompanyRecord,
        CompanyRef,
        EntityId,
        RoleRecord,
        SourceRef,
    )
    from mattergraph.domain.resolution.context import ResolutionContext

log = getLogger(__name__)

UNKNOWN_COMPANY = "Unknown Company"


def _clean_status(value: str | None) -> str | None:
    if value is None:
        return None
    text = " ".join(value.split())
    if not text or text.lower() == "unknown":
        return None
    return text


def _display_name(value: str | None) -> str:
    if not normalize_name(value):
        return ""
    return " ".join(str(value).split())


def _preferred_address(addresses: Iterable[AddressRecord]) -> AddressRecord | None:
    first: AddressRecord | None = None
    for address in addresses:
        if address.status is LifecycleState.CURRENT:
            return address
        if first is None:
            first = address
    return first


class CompanyResolver:
    """Resolve company observations to canonical company ids.

    Lookup order is normalized ACN, then normalized ABN. Records that carry
    neither only converge with records producing the identical name-derived id;
    they never merge into an identifier-bearing company.
    """

    def __init__(self, context: ResolutionContext) -> None:
        self._context = context

    def resolve_company(
        self,
        name: str | None,
        acn: str | None = None,
        abn: str | None = None,
        status: str | None = None,
        *,
        source: SourceRef | None = None,
    ) -> EntityId | None:
        normalized_acn = normalize_identifier(acn)
        normalized_abn = normalize_identifier(abn)
        display_name = _display_name(name)

        company_id = self._context.company_id_for_identifiers(normalized_acn, normalized_abn)
        if company_id is None:
            key = normalized_acn or normalized_abn or "".join(display_name.split())
            if not key:
                log.debug("Skipping company without name or identifiers")
                return None
            company_id = f"company_{key}"

        company = self._context.companies.get(company_id)
        if company is None:
            company = CanonicalCompany(
                id=company_id,
                name=display_name or UNKNOWN_COMPANY,
                acn=normalized_acn,
                abn=normalized_abn,
                status=_clean_status(status),
            )
            self._context.companies[company_id] = company
            self._index(company)
        else:
            self._backfill(
                company,
                name=display_name,
                acn=normalized_acn,
                abn=normalized_abn,
                status=_clean_status(status),
            )

        if source is not None and source not in company.sources:
            company.sources.append(source)
        return company_id

    def resolve_reference(
        self, ref: CompanyRef, *, source: SourceRef | None = None
    ) -> EntityId | None:
        return self.resolve_company(ref.name, ref.acn, ref.abn, ref.status, source=source)

    def record_company(self, record: CompanyRecord) -> EntityId | None:
        """Resolve a registry extract and merge its descriptive fields."""

        company_id = self.resolve_company(
            record.name, record.acn, record.abn, record.status, source=record.source
        )
        if company_id is None:
            self._context.skipped_records += 1
            return None

        company = self._context.companies[company_id]
        if company.company_type is None and record.company_type:
            company.company_type = record.company_type
        if company.registered_date is None and record.registered_date:
            company.registered_date = record.registered_date
        if company.address is None:
            company.address = _preferred_address(record.addresses)

        self._context.record_company_ids[id(record)] = company_id
        return company_id

    def resolve_role_companies(self, records: Iterable[RoleRecord]) -> None:
        """Resolve the company every named role record refers to."""

        for record in records:
            if not normalize_name(record.name):
                continue
            company_id = self.resolve_reference(record.company, source=record.source)
            if company_id is not None:
                self._context.record_company_ids[id(record)] = company_id

    def _index(self, company: CanonicalCompany) -> None:
        if company.acn:
            self._context.company_ids_by_acn.setdefault(company.acn, company.id)
        if company.abn:
            self._context.company_ids_by_abn.setdefault(company.abn, company.id)

    def _backfill(
        self,
        company: CanonicalCompany,
        *,
        name: str,
        acn: str | None,
        abn: str | None,
        status: str | None,
    ) -> None:
        # Never overwrite a value that is already present.
        if company.name == UNKNOWN_COMPANY and name:
            company.name = name
        if company.acn is None and acn:
            company.acn = acn
        if company.abn is None and abn:
            company.abn = abn
        if company.status is None and status:
            company.status = status
        self._index(company)
