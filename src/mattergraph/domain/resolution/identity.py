"""Identity Merge Engine: fold role records into canonical persons."""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from mattergraph.domain.model import (
    CERTAIN,
    CanonicalPerson,
    CompanyShareholder,
    EdgeType,
    EntityKind,
    LifecycleState,
    RelationshipEdge,
    RoleAssignment,
    RoleType,
    ShareholderRecord,
    UncertainMatch,
)
from mattergraph.domain.resolution.normalization import (
    is_company_name,
    normalize_dob,
    normalize_identifier,
    normalize_name,
    person_key,
    similarity,
    slug,
)
from mattergraph.domain.resolution.relationships import shares_label

if TYPE_CHECKING:
    from collections.abc import Iterable

    from mattergraph.domain.model import (
        EntityId,
        MatchConfidence,
        OfficerRecord,
        RoleRecord,
    )
    from mattergraph.domain.resolution.companies import CompanyResolver
    from mattergraph.domain.resolution.context import ResolutionContext

log = getLogger(__name__)


@dataclass(slots=True, kw_only=True)
class IdentityMergeResult:
    persons: list[CanonicalPerson] = field(default_factory=list[CanonicalPerson])
    company_shareholders: list[CompanyShareholder] = field(
        default_factory=list[CompanyShareholder]
    )
    company_holding_edges: list[RelationshipEdge] = field(
        default_factory=list[RelationshipEdge]
    )


class IdentityMergeEngine:
    """Merge role records into persons keyed by normalized name and dob.

    Collections are processed in a fixed order (directors, office holders,
    secretaries, shareholders); the first record seen for a person decides
    which later dob-less records fold into it.
    """

    def __init__(self, context: ResolutionContext, companies: CompanyResolver) -> None:
        self._context = context
        self._companies = companies

    def merge(
        self,
        directors: Iterable[OfficerRecord],
        office_holders: Iterable[OfficerRecord],
        secretaries: Iterable[OfficerRecord],
        shareholders: Iterable[ShareholderRecord],
    ) -> IdentityMergeResult:
        for records in (directors, office_holders, secretaries):
            for record in records:
                self._absorb(record)

        tokens = self._context.config.company_tokens
        for record in shareholders:
            if is_company_name(record.name, tokens):
                self._absorb_company_shareholder(record)
            else:
                self._absorb(record)

        return IdentityMergeResult(
            persons=list(self._context.persons.values()),
            company_shareholders=list(self._context.company_shareholders.values()),
            company_holding_edges=list(self._context.company_holding_edges),
        )

    def find_or_create_by_name(self, name: str | None) -> EntityId | None:
        """Return the first person named ``name``, creating a role-less one if needed."""

        normalized = normalize_name(name)
        if not normalized:
            return None
        existing = self._context.persons_named(normalized)
        if existing:
            return existing[0].id
        person = self._create_person(
            display_name=" ".join(str(name).split()),
            normalized_name=normalized,
            dob="",
        )
        log.debug("Created person %s from a name-only search subject", person.id)
        return person.id

    def _company_for(self, record: RoleRecord) -> EntityId | None:
        company_id = self._context.record_company_ids.get(id(record))
        if company_id is None:
            company_id = self._companies.resolve_reference(record.company, source=record.source)
        return company_id

    def _absorb(self, record: RoleRecord) -> None:
        normalized = normalize_name(record.name)
        company_id = self._company_for(record) if normalized else None
        if company_id is None:
            log.debug("Skipping %s record without name or company", record.role_type)
            self._context.skipped_records += 1
            return

        dob = normalize_dob(record.dob)
        key = person_key(record.name, record.dob)
        confidence: MatchConfidence = CERTAIN

        person_id = self._context.person_ids_by_key.get(key)
        if person_id is not None:
            person = self._context.persons[person_id]
        else:
            candidate = self._fallback_candidate(normalized, dob)
            if candidate is None:
                person = self._create_person(
                    display_name=" ".join(str(record.name).split()),
                    normalized_name=normalized,
                    dob=dob,
                )
            else:
                person = candidate
                confidence = UncertainMatch(similarity_percentage=similarity(person, record))
                self._context.uncertain_matches += 1
                log.debug(
                    "Uncertain merge of %s record into %s (%d%%)",
                    record.role_type,
                    person.id,
                    confidence.similarity_percentage,
                )
                if dob and not person.dob:
                    self._backfill_dob(person, normalized_name=normalized, dob=dob, key=key)

        person.attach_role(self._role_for(record, company_id, confidence))
        if person.address is None and record.address is not None:
            person.address = record.address
        self._context.record_entities[id(record)] = (person.id, EntityKind.PERSON)

    def _fallback_candidate(self, normalized_name: str, dob: str) -> CanonicalPerson | None:
        # Dob-less records fold into the first same-named person; dated records
        # only into a same-named person whose dob is still unknown.
        for person in self._context.persons_named(normalized_name):
            if not dob or not person.dob:
                return person
        return None

    def _backfill_dob(
        self, person: CanonicalPerson, *, normalized_name: str, dob: str, key: str
    ) -> None:
        index = self._context.person_ids_by_key
        if index.get(normalized_name) == person.id:
            del index[normalized_name]
        person.dob = dob
        index[key] = person.id

    def _create_person(
        self, *, display_name: str, normalized_name: str, dob: str
    ) -> CanonicalPerson:
        base = f"person_{normalized_name.replace(' ', '_')}"
        if dob:
            base = f"{base}_{dob}"
        person = CanonicalPerson(
            id=self._context.claim_id(base),
            name=display_name,
            dob=dob or None,
        )
        self._context.persons[person.id] = person
        self._context.person_ids_by_key[person_key(normalized_name, dob)] = person.id
        self._context.person_ids_by_name.setdefault(normalized_name, []).append(person.id)
        return person

    def _role_for(
        self, record: RoleRecord, company_id: EntityId, confidence: MatchConfidence
    ) -> RoleAssignment:
        if isinstance(record, ShareholderRecord):
            return RoleAssignment(
                role_type=RoleType.SHAREHOLDER,
                lifecycle_state=record.lifecycle_state,
                company_id=company_id,
                shares=record.shares,
                share_class=record.share_class,
                confidence=confidence,
            )
        return RoleAssignment(
            role_type=record.role_type,
            lifecycle_state=record.lifecycle_state,
            company_id=company_id,
            role_title=record.role_title,
            confidence=confidence,
        )

    def _absorb_company_shareholder(self, record: ShareholderRecord) -> None:
        company_id = self._company_for(record)
        if company_id is None:
            log.debug("Skipping company shareholder without a held company")
            self._context.skipped_records += 1
            return

        holder_id = self._context.company_id_for_identifiers(
            normalize_identifier(record.acn), normalize_identifier(record.abn)
        )
        if holder_id is not None:
            self._context.company_holding_edges.append(
                RelationshipEdge(
                    from_id=holder_id,
                    to_id=company_id,
                    edge_type=EdgeType.COMPANY_SHAREHOLDER,
                    label=shares_label(record.shares),
                    attributes={"shares": record.shares, "shareClass": record.share_class},
                )
            )
            self._context.record_entities[id(record)] = (holder_id, EntityKind.COMPANY)
            return

        ceased = record.lifecycle_state is LifecycleState.CEASED
        dob = normalize_dob(record.dob)
        shareholder_id = f"shareholder_{'ceased_' if ceased else ''}{slug(record.name)}"
        if dob:
            shareholder_id = f"{shareholder_id}_{dob}"

        shareholder = self._context.company_shareholders.get(shareholder_id)
        if shareholder is None:
            shareholder = CompanyShareholder(
                id=shareholder_id,
                name=" ".join(str(record.name).split()),
                lifecycle_state=record.lifecycle_state,
                shares=record.shares,
                share_class=record.share_class,
                address=record.address,
                acn=normalize_identifier(record.acn),
                abn=normalize_identifier(record.abn),
                ceased_date=record.ceased_date,
            )
            self._context.company_shareholders[shareholder_id] = shareholder
            self._context.used_ids.add(shareholder_id)

        shareholder.attach_holding(
            RoleAssignment(
                role_type=RoleType.SHAREHOLDER,
                lifecycle_state=record.lifecycle_state,
                company_id=company_id,
                shares=record.shares,
                share_class=record.share_class,
            )
        )
        self._context.record_entities[id(record)] = (shareholder_id, EntityKind.COMPANY)
