"""Pydantic models for the mind-map document consumed by the visualization.

Field names and nesting are a compatibility surface: keep the aliases stable.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, JsonValue


class MindMapBaseModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class SourceOut(MindMapBaseModel):
    report_type: str | None = Field(default=None, alias="reportType")
    report_id: str | None = Field(default=None, alias="reportId")
    search_word: str | None = Field(default=None, alias="searchWord")


class TaxDebtOut(MindMapBaseModel):
    amount: float
    status: str
    date: str | None = None
    ato_updated_at: str | None = None


class CourtCaseOut(MindMapBaseModel):
    uuid: str
    type: str
    case_number: str | None = None
    case_name: str | None = None
    case_type: str | None = None
    court_name: str | None = None
    state: str | None = None
    notification_time: str | None = None
    url: str | None = None
    party_role: str | None = None
    match_on: str | None = None


class CompanyOut(MindMapBaseModel):
    id: str
    name: str
    acn: str | None = None
    abn: str | None = None
    status: str = "Unknown"
    type: str | None = None
    registered: str | None = None
    address: str | None = None
    report_type: str | None = Field(default=None, alias="reportType")
    report_id: str | None = Field(default=None, alias="reportId")
    search_word: str | None = Field(default=None, alias="searchWord")
    sources: list[SourceOut] = Field(default_factory=list[SourceOut])
    tax_debt: TaxDebtOut | None = Field(default=None, alias="taxDebt")
    court_cases: list[CourtCaseOut] = Field(
        default_factory=list[CourtCaseOut], alias="courtCases"
    )


class RoleOut(MindMapBaseModel):
    type: str
    original_type: str = Field(alias="originalType")
    company_ids: list[str] = Field(alias="companyIds")
    role: str | None = None
    shares: int | str | None = None
    share_class: str | None = Field(default=None, alias="shareClass")
    uncertain: bool = False
    similarity_percentage: int | None = Field(default=None, alias="similarityPercentage")


class PersonOut(MindMapBaseModel):
    id: str
    name: str
    dob: str | None = None
    address: str | None = None
    type: str
    lifecycle_state: str = Field(alias="lifecycleState")
    roles: list[RoleOut] = Field(default_factory=list[RoleOut])
    company_ids: list[str] = Field(default_factory=list[str], alias="companyIds")


class ShareholderOut(MindMapBaseModel):
    id: str
    name: str
    type: str
    shares: int | str | None = None
    share_class: str | None = Field(default=None, alias="shareClass")
    acn: str | None = None
    abn: str | None = None
    address: str | None = None
    ceased_date: str | None = Field(default=None, alias="ceasedDate")
    company_ids: list[str] = Field(default_factory=list[str], alias="companyIds")


class AddressOut(MindMapBaseModel):
    id: str
    address: str | None = None
    address1: str | None = None
    address2: str | None = None
    suburb: str | None = None
    state: str | None = None
    postcode: str | None = None
    country: str | None = None
    type: str
    status: str
    start_date: str | None = Field(default=None, alias="startDate")
    end_date: str | None = Field(default=None, alias="endDate")
    normalized_key: str = Field(alias="normalizedKey")
    linked_entity_ids: list[str] = Field(default_factory=list[str], alias="linkedEntityIds")
    entity_types: list[str] = Field(default_factory=list[str], alias="entityTypes")


class BankruptcyOut(MindMapBaseModel):
    id: str
    name: str
    type: str = "bankruptcy"
    from_date: str | None = Field(default=None, alias="from")
    has_bankruptcy: bool = Field(alias="hasBankruptcy")
    uuid: str | None = None
    extract_id: str | None = Field(default=None, alias="extractId")
    person_id: str = Field(alias="personId")
    report_id: str | None = Field(default=None, alias="reportId")
    search_word: str | None = Field(default=None, alias="searchWord")


class RoleRecordOut(MindMapBaseModel):
    """Pre-merge officer record kept for the legacy collections."""

    name: str | None = None
    dob: str | None = None
    type: str
    role: str | None = None
    address: str | None = None
    company_name: str | None = Field(default=None, alias="companyName")
    company_acn: str | None = Field(default=None, alias="companyAcn")
    company_abn: str | None = Field(default=None, alias="companyAbn")
    ceased_date: str | None = Field(default=None, alias="ceasedDate")
    report_id: str | None = Field(default=None, alias="reportId")


class RelationshipOut(MindMapBaseModel):
    from_id: str = Field(alias="from")
    to_id: str = Field(alias="to")
    type: str
    label: str
    attributes: dict[str, JsonValue] = Field(default_factory=dict[str, JsonValue])


class EntitiesOut(MindMapBaseModel):
    companies: list[CompanyOut] = Field(default_factory=list[CompanyOut])
    persons: list[PersonOut] = Field(default_factory=list[PersonOut])
    shareholders: list[ShareholderOut] = Field(default_factory=list[ShareholderOut])
    addresses: list[AddressOut] = Field(default_factory=list[AddressOut])
    bankruptcies: list[BankruptcyOut] = Field(default_factory=list[BankruptcyOut])
    directors: list[RoleRecordOut] = Field(default_factory=list[RoleRecordOut])
    secretaries: list[RoleRecordOut] = Field(default_factory=list[RoleRecordOut])
    office_holders: list[RoleRecordOut] = Field(
        default_factory=list[RoleRecordOut], alias="officeHolders"
    )


class StatsOut(MindMapBaseModel):
    total_companies: int = Field(default=0, alias="totalCompanies")
    total_persons: int = Field(default=0, alias="totalPersons")
    total_directors: int = Field(default=0, alias="totalDirectors")
    total_shareholders: int = Field(default=0, alias="totalShareholders")
    total_secretaries: int = Field(default=0, alias="totalSecretaries")
    total_office_holders: int = Field(default=0, alias="totalOfficeHolders")
    total_addresses: int = Field(default=0, alias="totalAddresses")
    total_relationships: int = Field(default=0, alias="totalRelationships")


class MindMapDocument(MindMapBaseModel):
    matter_id: str | None = Field(default=None, alias="matterId")
    entities: EntitiesOut = Field(default_factory=EntitiesOut)
    relationships: list[RelationshipOut] = Field(default_factory=list[RelationshipOut])
    stats: StatsOut = Field(default_factory=StatsOut)
