"""Input records handed to the resolution engine.

Records are immutable observations taken from one source report. The extractor
layer (outside this package) produces them; the adapters in
``mattergraph.adapters.reports`` translate the batch snapshot document into them.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Literal

from mattergraph.domain.model.enums import LifecycleState, RoleType

if TYPE_CHECKING:
    from datetime import date


@dataclass(frozen=True, slots=True, kw_only=True)
class SourceRef:
    """Provenance of one observation."""

    report_type: str | None = None
    report_id: str | None = None
    search_word: str | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class AddressComponents:
    line1: str | None = None
    line2: str | None = None
    suburb: str | None = None
    state: str | None = None
    postcode: str | None = None
    country: str | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class AddressRecord:
    """One address observation; ``full_text`` wins over components when both exist."""

    full_text: str | None = None
    components: AddressComponents = AddressComponents()
    address_type: str | None = None
    status: LifecycleState = LifecycleState.CURRENT
    start_date: date | None = None
    end_date: date | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class CompanyRef:
    """The company a role record refers to."""

    name: str | None = None
    acn: str | None = None
    abn: str | None = None
    status: str | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class CompanyRecord:
    """Company details taken from a registry extract."""

    name: str | None = None
    acn: str | None = None
    abn: str | None = None
    status: str | None = None
    company_type: str | None = None
    registered_date: str | None = None
    addresses: tuple[AddressRecord, ...] = ()
    source: SourceRef = SourceRef()


type OfficerRoleType = Literal[
    RoleType.DIRECTOR,
    RoleType.OFFICE_HOLDER,
    RoleType.SECRETARY,
    RoleType.SECRETARY_ROLE_INFERRED,
]


@dataclass(frozen=True, slots=True, kw_only=True)
class OfficerRecord:
    """Director, office holder or secretary observation."""

    role_type: OfficerRoleType
    name: str | None
    company: CompanyRef
    dob: str | None = None
    address: AddressRecord | None = None
    lifecycle_state: LifecycleState = LifecycleState.CURRENT
    ceased_date: str | None = None
    role_title: str | None = None
    source: SourceRef = SourceRef()


@dataclass(frozen=True, slots=True, kw_only=True)
class ShareholderRecord:
    """Shareholding observation; the holder may be a person or a company."""

    name: str | None
    company: CompanyRef
    dob: str | None = None
    address: AddressRecord | None = None
    lifecycle_state: LifecycleState = LifecycleState.CURRENT
    ceased_date: str | None = None
    shares: int | str | None = None
    share_class: str | None = None
    acn: str | None = None
    abn: str | None = None
    source: SourceRef = SourceRef()
    role_type: Literal[RoleType.SHAREHOLDER] = RoleType.SHAREHOLDER


type RoleRecord = OfficerRecord | ShareholderRecord


@dataclass(frozen=True, slots=True, kw_only=True)
class SecurityRegistration:
    """One security-register registration."""

    secured_party_summary: str | None
    collateral_class_type: str | None
    registration_number: str | None = None
    grantor_summary: str | None = None
    grantor_acn: str | None = None
    grantor_name: str | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class SecurityInterestReport:
    """Security-register search run against a company or a person."""

    source: SourceRef
    person_search: bool = False
    acn: str | None = None
    abn: str | None = None
    subject_name: str | None = None
    registrations: tuple[SecurityRegistration, ...] = ()


@dataclass(frozen=True, slots=True, kw_only=True)
class BankruptcySearch:
    """Bankruptcy search for a named person; ``uuid`` is absent when nothing was found."""

    source: SourceRef
    subject_name: str | None
    uuid: str | None = None
    extract_id: str | None = None
    start_date: str | None = None

    @property
    def has_bankruptcy(self) -> bool:
        return bool(self.uuid)


@dataclass(frozen=True, slots=True, kw_only=True)
class TaxDebt:
    amount: float = 0.0
    status: str = "Unknown"
    date: str | None = None
    ato_updated_at: str | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class TaxDebtReport:
    source: SourceRef
    entity_name: str | None = None
    acn: str | None = None
    abn: str | None = None
    debt: TaxDebt = TaxDebt()


@dataclass(frozen=True, slots=True, kw_only=True)
class CourtCase:
    uuid: str
    case_type_label: str = "Court Case"
    case_number: str | None = None
    case_name: str | None = None
    case_type: str | None = None
    court_name: str | None = None
    state: str | None = None
    notification_time: str | None = None
    url: str | None = None
    party_role: str | None = None
    match_on: str | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class CourtReport:
    source: SourceRef
    entity_name: str | None = None
    acn: str | None = None
    abn: str | None = None
    cases: tuple[CourtCase, ...] = ()


@dataclass(frozen=True, slots=True, kw_only=True)
class MatterBatch:
    """Immutable snapshot of every record collected for one matter."""

    matter_id: str | None = None
    companies: tuple[CompanyRecord, ...] = ()
    directors: tuple[OfficerRecord, ...] = ()
    office_holders: tuple[OfficerRecord, ...] = ()
    secretaries: tuple[OfficerRecord, ...] = ()
    shareholders: tuple[ShareholderRecord, ...] = ()
    security_interest_reports: tuple[SecurityInterestReport, ...] = ()
    bankruptcy_searches: tuple[BankruptcySearch, ...] = ()
    tax_debt_reports: tuple[TaxDebtReport, ...] = ()
    court_reports: tuple[CourtReport, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not any(
            (
                self.companies,
                self.directors,
                self.office_holders,
                self.secretaries,
                self.shareholders,
                self.security_interest_reports,
                self.bankruptcy_searches,
                self.tax_debt_reports,
                self.court_reports,
            )
        )
