"""Pydantic models describing the matter batch snapshot document."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Literal, cast

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator

_CEASED_PREFIXES = ("ceased", "former", "previous", "historic")


def _blank_to_none(value: object) -> object:
    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    return value


def _text_or_none(value: object) -> object:
    if value is None or isinstance(value, bool | Mapping | list):
        return None
    if isinstance(value, str):
        return value.strip() or None
    return str(value).strip() or None


def _scalar_to_str(value: object) -> object:
    if isinstance(value, bool):
        return None
    if isinstance(value, int | float):
        return str(value)
    return _blank_to_none(value)


def _as_mapping(value: object) -> dict[str, object] | None:
    if isinstance(value, Mapping):
        return dict(cast(Mapping[str, object], value))
    return None


def lifecycle_tag(value: object) -> str:
    if isinstance(value, str) and value.strip().lower().startswith(_CEASED_PREFIXES):
        return "ceased"
    return "current"


class ReportBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class SourcePayload(ReportBaseModel):
    report_type: str | None = Field(default=None, alias="reportType")
    report_id: str | None = Field(default=None, alias="reportId")
    search_word: str | None = Field(default=None, alias="searchWord")

    _normalize_id = field_validator("report_id", mode="before")(_scalar_to_str)


class AddressPayload(ReportBaseModel):
    address: str | None = None
    address_1: str | None = Field(
        default=None, validation_alias=AliasChoices("address_1", "address1", "addressLine1")
    )
    address_2: str | None = Field(
        default=None, validation_alias=AliasChoices("address_2", "address2", "addressLine2")
    )
    suburb: str | None = None
    state: str | None = None
    postcode: str | None = None
    country: str | None = None
    type: str | None = Field(default=None, validation_alias=AliasChoices("type", "addressType"))
    status: str | None = None
    start_date: str | None = Field(default=None, alias="startDate")
    end_date: str | None = Field(default=None, alias="endDate")

    @model_validator(mode="before")
    @classmethod
    def _wrap_plain_string(cls, value: object) -> object:
        if isinstance(value, str):
            return {"address": value}
        return value

    _normalize_text = field_validator(
        "address", "address_1", "address_2", "suburb", "state", "country", mode="before"
    )(_text_or_none)
    _normalize_postcode = field_validator("postcode", mode="before")(_scalar_to_str)


class CompanyRefPayload(ReportBaseModel):
    name: str | None = None
    acn: str | None = None
    abn: str | None = None
    status: str | None = None

    _normalize_text = field_validator("name", "status", mode="before")(_text_or_none)
    _normalize_ids = field_validator("acn", "abn", mode="before")(_scalar_to_str)


class CompanyPayload(ReportBaseModel):
    name: str | None = None
    acn: str | None = None
    abn: str | None = None
    status: str | None = None
    company_type: str | None = Field(
        default=None, validation_alias=AliasChoices("companyType", "type")
    )
    registered_date: str | None = Field(default=None, alias="registeredDate")
    addresses: list[AddressPayload] = Field(default_factory=list[AddressPayload])
    source: SourcePayload = Field(default_factory=SourcePayload)

    _normalize_text = field_validator(
        "name", "status", "company_type", "registered_date", mode="before"
    )(_text_or_none)
    _normalize_ids = field_validator("acn", "abn", mode="before")(_scalar_to_str)

    @field_validator("addresses", mode="before")
    @classmethod
    def _drop_malformed_addresses(cls, value: object) -> object:
        if not isinstance(value, list):
            return []
        return [item for item in cast(list[object], value) if isinstance(item, str | Mapping)]


class RolePayload(ReportBaseModel):
    """One role record; ``type`` may carry a lifecycle tag such as ``ceased_director``."""

    name: str | None = None
    dob: str | None = Field(default=None, validation_alias=AliasChoices("dob", "dateOfBirth"))
    address: AddressPayload | None = None
    lifecycle_state: Literal["current", "ceased"] = Field(
        default="current", alias="lifecycleState"
    )
    ceased_date: str | None = Field(default=None, alias="ceasedDate")
    company: CompanyRefPayload = Field(default_factory=CompanyRefPayload)
    role_title: str | None = Field(default=None, validation_alias=AliasChoices("roleTitle", "role"))
    role_type: str | None = Field(default=None, alias="roleType")
    shares: int | str | None = Field(
        default=None, validation_alias=AliasChoices("shares", "numberOfShares", "shareCount")
    )
    share_class: str | None = Field(
        default=None, validation_alias=AliasChoices("shareClass", "class")
    )
    acn: str | None = None
    abn: str | None = None
    source: SourcePayload = Field(default_factory=SourcePayload)

    @model_validator(mode="before")
    @classmethod
    def _normalize_legacy_fields(cls, value: object) -> object:
        data = _as_mapping(value)
        if data is None:
            return value
        if "lifecycleState" not in data and "lifecycle_state" not in data:
            tag = data.get("type")
            ceased = isinstance(tag, str) and tag.lower().startswith("ceased")
            data["lifecycleState"] = "ceased" if ceased or data.get("ceasedDate") else "current"
        else:
            state = data.get("lifecycleState", data.get("lifecycle_state"))
            data.pop("lifecycle_state", None)
            data["lifecycleState"] = lifecycle_tag(state)
        if not isinstance(data.get("company"), Mapping):
            data["company"] = {
                "name": data.get("companyName"),
                "acn": data.get("companyAcn"),
                "abn": data.get("companyAbn"),
                "status": data.get("companyStatus"),
            }
        address = data.get("address")
        if address is not None and not isinstance(address, str | Mapping):
            data["address"] = None
        return data

    _normalize_text = field_validator("name", "dob", "role_title", mode="before")(_text_or_none)
    _normalize_ids = field_validator("acn", "abn", mode="before")(_scalar_to_str)

    @field_validator("shares", mode="before")
    @classmethod
    def _parse_shares(cls, value: object) -> object:
        if isinstance(value, str):
            stripped = value.replace(",", "").strip()
            if not stripped:
                return None
            return int(stripped) if stripped.isdigit() else value.strip()
        if isinstance(value, float) and value.is_integer():
            return int(value)
        return value


class ReportEnvelope(ReportBaseModel):
    """Raw report row as stored by the fetch collaborator."""

    id: str | None = None
    rtype: str | None = None
    report_name: str | None = Field(default=None, alias="reportName")
    search_word: str | None = Field(default=None, alias="searchWord")
    acn: str | None = None
    abn: str | None = None
    rdata: dict[str, object] = Field(default_factory=dict[str, object])

    _normalize_id = field_validator("id", "acn", "abn", mode="before")(_scalar_to_str)
    _normalize_search = field_validator("search_word", mode="before")(_blank_to_none)

    @field_validator("rdata", mode="before")
    @classmethod
    def _default_rdata(cls, value: object) -> object:
        return value if value is not None else {}

    @property
    def is_court(self) -> bool:
        return self.rtype == "court" or (self.report_name or "").lower().startswith("court_")

    @property
    def is_tax(self) -> bool:
        return self.rtype == "ato" or (self.report_name or "").lower().startswith("ato_")


class GrantorPayload(ReportBaseModel):
    organisation_number: str | None = Field(default=None, alias="organisationNumber")
    organisation_name: str | None = Field(default=None, alias="organisationName")

    _normalize_name = field_validator("organisation_name", mode="before")(_text_or_none)
    _normalize_number = field_validator("organisation_number", mode="before")(_scalar_to_str)


class RegistrationPayload(ReportBaseModel):
    secured_party_summary: str | None = Field(default=None, alias="securedPartySummary")
    collateral_class_type: str | None = Field(default=None, alias="collateralClassType")
    registration_number: str | None = Field(default=None, alias="registrationNumber")
    grantor_summary: str | None = Field(default=None, alias="grantorSummary")
    grantors: list[GrantorPayload] = Field(default_factory=list[GrantorPayload])

    _normalize_text = field_validator(
        "secured_party_summary", "collateral_class_type", "grantor_summary", mode="before"
    )(_text_or_none)
    _normalize_number = field_validator("registration_number", mode="before")(_scalar_to_str)

    @field_validator("grantors", mode="before")
    @classmethod
    def _default_grantors(cls, value: object) -> object:
        if not isinstance(value, list):
            return []
        return [item for item in cast(list[object], value) if isinstance(item, Mapping)]


class SecurityRegisterPayload(ReportBaseModel):
    """Registrations of a security-register search in any of its stored nestings."""

    items: list[RegistrationPayload] = Field(default_factory=list[RegistrationPayload])

    @model_validator(mode="before")
    @classmethod
    def _unwrap_resource(cls, value: object) -> object:
        data = _as_mapping(value)
        if data is None:
            return value
        resource = _as_mapping(data.get("resource"))
        if resource is None and "items" not in data:
            nested = _as_mapping(data.get("rdata"))
            resource = _as_mapping(nested.get("resource")) if nested is not None else None
        source = resource if resource is not None else data
        items = source.get("items")
        if not isinstance(items, list):
            return {"items": []}
        # Drop non-object entries instead of failing the whole search.
        return {"items": [item for item in cast(list[object], items) if isinstance(item, Mapping)]}


class DebtorPayload(ReportBaseModel):
    start_date: str | None = Field(default=None, alias="startDate")


class BankruptcyPayload(ReportBaseModel):
    uuid: str | None = None
    extract_id: str | None = Field(default=None, alias="extractId")
    debtor: DebtorPayload | None = None

    @model_validator(mode="before")
    @classmethod
    def _unwrap_data(cls, value: object) -> object:
        data = _as_mapping(value)
        if data is None:
            return value
        inner = _as_mapping(data.get("data"))
        return inner if inner is not None else data

    _normalize_ids = field_validator("uuid", "extract_id", mode="before")(_scalar_to_str)


class EntityPayload(ReportBaseModel):
    name: str | None = None
    acn: str | None = Field(default=None, validation_alias=AliasChoices("acn", "ACN"))
    abn: str | None = Field(default=None, validation_alias=AliasChoices("abn", "ABN"))

    _normalize_ids = field_validator("acn", "abn", mode="before")(_scalar_to_str)


class TaxDebtPayload(ReportBaseModel):
    amount: float = 0.0
    status: str = "Unknown"
    date: str | None = None
    ato_updated_at: str | None = None

    @field_validator("amount", mode="before")
    @classmethod
    def _parse_amount(cls, value: object) -> object:
        if value is None:
            return 0.0
        if isinstance(value, str):
            value = value.replace("$", "").replace(",", "").strip()
        try:
            return float(cast(str | float, value))
        except (TypeError, ValueError):
            return 0.0

    @field_validator("status", mode="before")
    @classmethod
    def _default_status(cls, value: object) -> object:
        return _blank_to_none(value) or "Unknown"


class CourtCasePayload(ReportBaseModel):
    uuid: str | None = None
    type: str | None = None
    case_number: str | None = None
    case_name: str | None = None
    case_type: str | None = None
    court_name: str | None = None
    state: str | None = None
    notification_time: str | None = None
    url: str | None = None
    party_role: str | None = None
    match_on: str | None = None

    _normalize_text = field_validator("uuid", "case_number", mode="before")(_scalar_to_str)


class CourtTaxPayload(ReportBaseModel):
    entity: EntityPayload = Field(default_factory=EntityPayload)
    current_tax_debt: TaxDebtPayload | None = None
    cases: list[CourtCasePayload] = Field(default_factory=list[CourtCasePayload])

    @field_validator("entity", mode="before")
    @classmethod
    def _default_entity(cls, value: object) -> object:
        return value if isinstance(value, Mapping) else {}

    @field_validator("cases", mode="before")
    @classmethod
    def _cases_from_mapping(cls, value: object) -> object:
        # Stored keyed by case id; only the values matter.
        if isinstance(value, Mapping):
            value = list(cast(Mapping[str, object], value).values())
        if not isinstance(value, list):
            return []
        return [item for item in cast(list[object], value) if isinstance(item, Mapping)]


class MatterBatchDocument(ReportBaseModel):
    matter_id: str | None = Field(default=None, alias="matterId")
    companies: list[CompanyPayload] = Field(default_factory=list[CompanyPayload])
    directors: list[RolePayload] = Field(default_factory=list[RolePayload])
    office_holders: list[RolePayload] = Field(
        default_factory=list[RolePayload], alias="officeHolders"
    )
    secretaries: list[RolePayload] = Field(default_factory=list[RolePayload])
    shareholders: list[RolePayload] = Field(default_factory=list[RolePayload])
    security_interest_reports: list[ReportEnvelope] = Field(
        default_factory=list[ReportEnvelope], alias="securityInterestReports"
    )
    bankruptcy_reports: list[ReportEnvelope] = Field(
        default_factory=list[ReportEnvelope], alias="bankruptcyReports"
    )
    court_tax_reports: list[ReportEnvelope] = Field(
        default_factory=list[ReportEnvelope], alias="courtTaxReports"
    )

    _normalize_matter = field_validator("matter_id", mode="before")(_scalar_to_str)


MatterBatchInput = MatterBatchDocument | Mapping[str, object]
