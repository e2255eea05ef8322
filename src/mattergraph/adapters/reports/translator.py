"""Translate the batch snapshot document into domain input records."""

from __future__ import annotations

from datetime import date
from logging import getLogger
from pathlib import Path
from typing import TYPE_CHECKING

from pydantic import ValidationError

from mattergraph.domain.errors import MatterGraphError
from mattergraph.domain.model import (
    AddressComponents,
    AddressRecord,
    BankruptcySearch,
    CompanyRecord,
    CompanyRef,
    CourtCase,
    CourtReport,
    LifecycleState,
    MatterBatch,
    OfficerRecord,
    RoleType,
    SecurityInterestReport,
    SecurityRegistration,
    ShareholderRecord,
    SourceRef,
    TaxDebt,
    TaxDebtReport,
)
from mattergraph.domain.resolution.normalization import normalize_dob

from .schema import (
    AddressPayload,
    BankruptcyPayload,
    CompanyPayload,
    CourtTaxPayload,
    MatterBatchDocument,
    MatterBatchInput,
    RegistrationPayload,
    ReportEnvelope,
    RolePayload,
    SecurityRegisterPayload,
    SourcePayload,
    lifecycle_tag,
)

if TYPE_CHECKING:
    from collections.abc import Iterable

    from mattergraph.domain.model.records import OfficerRoleType

log = getLogger(__name__)

PERSON_SECURITY_SEARCH = "director-ppsr"
COMPANY_SECURITY_SEARCH = "ppsr"
BANKRUPTCY_SEARCH = "director-bankruptcy"


class BatchLoadError(MatterGraphError, ValueError):
    """Raised when the batch document cannot be read or does not validate."""


def load_batch(path: Path | str) -> MatterBatch:
    """Read and translate a batch snapshot stored as JSON."""

    try:
        raw = Path(path).read_bytes()
    except OSError as exc:
        raise BatchLoadError(f"Cannot read batch document {path}: {exc}") from exc
    return parse_batch(raw)


def parse_batch(raw: str | bytes) -> MatterBatch:
    try:
        document = MatterBatchDocument.model_validate_json(raw)
    except ValidationError as exc:
        raise BatchLoadError(f"Invalid batch document: {exc}") from exc
    return batch_from_document(document)


def batch_from_payload(payload: MatterBatchInput) -> MatterBatch:
    if isinstance(payload, MatterBatchDocument):
        return batch_from_document(payload)
    try:
        document = MatterBatchDocument.model_validate(payload)
    except ValidationError as exc:
        raise BatchLoadError(f"Invalid batch document: {exc}") from exc
    return batch_from_document(document)


def batch_from_document(document: MatterBatchDocument) -> MatterBatch:
    try:
        security_reports = tuple(_security_reports(document.security_interest_reports))
        bankruptcy_searches = tuple(_bankruptcy_searches(document.bankruptcy_reports))
        tax_reports, court_reports = _court_and_tax_reports(document.court_tax_reports)
    except ValidationError as exc:
        raise BatchLoadError(f"Invalid report payload: {exc}") from exc

    return MatterBatch(
        matter_id=document.matter_id,
        companies=tuple(_company(payload) for payload in document.companies),
        directors=tuple(_officer(payload, RoleType.DIRECTOR) for payload in document.directors),
        office_holders=tuple(
            _officer(payload, RoleType.OFFICE_HOLDER) for payload in document.office_holders
        ),
        secretaries=tuple(
            _officer(payload, _secretary_type(payload)) for payload in document.secretaries
        ),
        shareholders=tuple(_shareholder(payload) for payload in document.shareholders),
        security_interest_reports=security_reports,
        bankruptcy_searches=bankruptcy_searches,
        tax_debt_reports=tuple(tax_reports),
        court_reports=tuple(court_reports),
    )


def _parse_date(value: str | None) -> date | None:
    normalized = normalize_dob(value)
    return date.fromisoformat(normalized) if normalized else None


def _lifecycle(value: str | None) -> LifecycleState:
    return LifecycleState(lifecycle_tag(value))


def _source(payload: SourcePayload) -> SourceRef:
    return SourceRef(
        report_type=payload.report_type,
        report_id=payload.report_id,
        search_word=payload.search_word,
    )


def _envelope_source(envelope: ReportEnvelope, default_type: str) -> SourceRef:
    return SourceRef(
        report_type=envelope.rtype or default_type,
        report_id=envelope.id,
        search_word=envelope.search_word,
    )


def _address(payload: AddressPayload | None) -> AddressRecord | None:
    if payload is None:
        return None
    return AddressRecord(
        full_text=payload.address,
        components=AddressComponents(
            line1=payload.address_1,
            line2=payload.address_2,
            suburb=payload.suburb,
            state=payload.state,
            postcode=payload.postcode,
            country=payload.country,
        ),
        address_type=payload.type,
        status=_lifecycle(payload.status),
        start_date=_parse_date(payload.start_date),
        end_date=_parse_date(payload.end_date),
    )


def _company(payload: CompanyPayload) -> CompanyRecord:
    addresses = (_address(address) for address in payload.addresses)
    return CompanyRecord(
        name=payload.name,
        acn=payload.acn,
        abn=payload.abn,
        status=payload.status,
        company_type=payload.company_type,
        registered_date=payload.registered_date,
        addresses=tuple(address for address in addresses if address is not None),
        source=_source(payload.source),
    )


def _company_ref(payload: RolePayload) -> CompanyRef:
    return CompanyRef(
        name=payload.company.name,
        acn=payload.company.acn,
        abn=payload.company.abn,
        status=payload.company.status,
    )


def _secretary_type(payload: RolePayload) -> OfficerRoleType:
    if payload.role_type == RoleType.SECRETARY_ROLE_INFERRED:
        return RoleType.SECRETARY_ROLE_INFERRED
    return RoleType.SECRETARY


def _officer(payload: RolePayload, role_type: OfficerRoleType) -> OfficerRecord:
    return OfficerRecord(
        role_type=role_type,
        name=payload.name,
        company=_company_ref(payload),
        dob=payload.dob,
        address=_address(payload.address),
        lifecycle_state=LifecycleState(payload.lifecycle_state),
        ceased_date=payload.ceased_date,
        role_title=payload.role_title if role_type is RoleType.OFFICE_HOLDER else None,
        source=_source(payload.source),
    )


def _shareholder(payload: RolePayload) -> ShareholderRecord:
    return ShareholderRecord(
        name=payload.name,
        company=_company_ref(payload),
        dob=payload.dob,
        address=_address(payload.address),
        lifecycle_state=LifecycleState(payload.lifecycle_state),
        ceased_date=payload.ceased_date,
        shares=payload.shares,
        share_class=payload.share_class,
        acn=payload.acn,
        abn=payload.abn,
        source=_source(payload.source),
    )


def _registration(payload: RegistrationPayload) -> SecurityRegistration:
    grantor = payload.grantors[0] if payload.grantors else None
    return SecurityRegistration(
        secured_party_summary=payload.secured_party_summary,
        collateral_class_type=payload.collateral_class_type,
        registration_number=payload.registration_number,
        grantor_summary=payload.grantor_summary,
        grantor_acn=grantor.organisation_number if grantor else None,
        grantor_name=grantor.organisation_name if grantor else None,
    )


def _security_reports(envelopes: Iterable[ReportEnvelope]) -> Iterable[SecurityInterestReport]:
    for envelope in envelopes:
        payload = SecurityRegisterPayload.model_validate(envelope.rdata)
        yield SecurityInterestReport(
            source=_envelope_source(envelope, COMPANY_SECURITY_SEARCH),
            person_search=envelope.rtype == PERSON_SECURITY_SEARCH,
            acn=envelope.acn,
            abn=envelope.abn,
            subject_name=envelope.search_word,
            registrations=tuple(_registration(item) for item in payload.items),
        )


def _bankruptcy_searches(envelopes: Iterable[ReportEnvelope]) -> Iterable[BankruptcySearch]:
    for envelope in envelopes:
        payload = BankruptcyPayload.model_validate(envelope.rdata)
        yield BankruptcySearch(
            source=_envelope_source(envelope, BANKRUPTCY_SEARCH),
            subject_name=envelope.search_word,
            uuid=payload.uuid,
            extract_id=payload.extract_id,
            start_date=payload.debtor.start_date if payload.debtor else None,
        )


def _court_and_tax_reports(
    envelopes: Iterable[ReportEnvelope],
) -> tuple[list[TaxDebtReport], list[CourtReport]]:
    tax_reports: list[TaxDebtReport] = []
    court_reports: list[CourtReport] = []
    for envelope in envelopes:
        if not envelope.is_tax and not envelope.is_court:
            log.debug("Ignoring report %s of type %s", envelope.id, envelope.rtype)
            continue
        payload = CourtTaxPayload.model_validate(envelope.rdata)
        source = _envelope_source(envelope, "court" if envelope.is_court else "ato")
        entity_name = payload.entity.name or envelope.search_word
        acn = payload.entity.acn or envelope.acn
        abn = payload.entity.abn or envelope.abn

        if envelope.is_tax:
            debt = payload.current_tax_debt
            tax_reports.append(
                TaxDebtReport(
                    source=source,
                    entity_name=entity_name,
                    acn=acn,
                    abn=abn,
                    debt=TaxDebt(
                        amount=debt.amount,
                        status=debt.status,
                        date=debt.date,
                        ato_updated_at=debt.ato_updated_at,
                    )
                    if debt is not None
                    else TaxDebt(),
                )
            )
        if envelope.is_court:
            cases = tuple(
                CourtCase(
                    uuid=case.uuid,
                    case_type_label=case.type or "Court Case",
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
                for case in payload.cases
                if case.uuid
            )
            court_reports.append(
                CourtReport(source=source, entity_name=entity_name, acn=acn, abn=abn, cases=cases)
            )
    return tax_reports, court_reports
