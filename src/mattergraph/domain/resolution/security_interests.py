"""Security-Interest Aggregator: group registrations into counted edges."""

from __future__ import annotations

import re
from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from mattergraph.domain.model import SecurityInterestSummary, SourceRef

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from mattergraph.domain.model import EntityId, SecurityInterestReport, SecurityRegistration
    from mattergraph.domain.resolution.companies import CompanyResolver
    from mattergraph.domain.resolution.context import ResolutionContext
    from mattergraph.domain.resolution.identity import IdentityMergeEngine

log = getLogger(__name__)

SECURED_PARTY_REPORT_TYPE = "ppsr-secured-party"

_ACN = re.compile(r"ACN\s+(\d+)\s*", re.IGNORECASE)
_ABN = re.compile(r"ABN\s+(\d+)\s*", re.IGNORECASE)


@dataclass(frozen=True, slots=True, kw_only=True)
class PartyRef:
    """Organisation parsed out of a register summary string."""

    name: str
    acn: str | None = None
    abn: str | None = None


def parse_party_summary(summary: str) -> PartyRef:
    """Parse ``"ACN 004044937 NATIONAL AUSTRALIA BANK LIMITED | ..."``.

    Only the first ``|``-separated party counts.
    """

    first = summary.split("|")[0].strip() or summary.strip()
    name = first
    acn = abn = None
    if match := _ACN.search(name):
        acn = match.group(1)
        name = _ACN.sub("", name, count=1)
    if match := _ABN.search(name):
        abn = match.group(1)
        name = _ABN.sub("", name, count=1)
    return PartyRef(name=" ".join(name.split()), acn=acn, abn=abn)


def parse_grantor(registration: SecurityRegistration) -> PartyRef | None:
    if registration.grantor_summary and registration.grantor_summary.strip():
        return parse_party_summary(registration.grantor_summary)
    if registration.grantor_acn or registration.grantor_name:
        return PartyRef(
            name=" ".join((registration.grantor_name or "").split()),
            acn=registration.grantor_acn or None,
        )
    return None


def collateral_label(collateral_type: str, labels: Mapping[str, str]) -> str:
    """Display label of a collateral class; unmapped classes are upper-cased."""

    cleaned = " ".join(collateral_type.split())
    return labels.get(cleaned, cleaned.upper())


class SecurityInterestAggregator:
    """Aggregate registrations per (grantor, secured party, collateral type).

    Counts are taken across the whole batch: a registration seen in two
    reports is counted once when it carries a registration number.
    """

    def __init__(
        self,
        context: ResolutionContext,
        companies: CompanyResolver,
        identity: IdentityMergeEngine,
    ) -> None:
        self._context = context
        self._companies = companies
        self._identity = identity
        self._reports_seen = 0

    def aggregate(self, reports: Iterable[SecurityInterestReport]) -> list[SecurityInterestSummary]:
        for report in reports:
            self.add_report(report)
        return list(self._context.security_summaries.values())

    def add_report(self, report: SecurityInterestReport) -> None:
        # Reports without an id are told apart by their position in the batch.
        position = self._reports_seen
        self._reports_seen += 1
        report_key = report.source.report_id or f"report-{position}"

        if report.person_search and not report.registrations:
            # The searched person still appears on the map.
            if self._identity.find_or_create_by_name(report.subject_name) is None:
                log.warning(
                    "Security-register person search %s has no subject name",
                    report.source.report_id,
                )
            return

        for index, registration in enumerate(report.registrations):
            if not registration.secured_party_summary or not registration.collateral_class_type:
                log.debug("Skipping registration without secured party or collateral type")
                continue

            grantor_id = self._grantor_for(report, registration)
            if grantor_id is None:
                log.debug("Skipping registration without an identifiable grantor")
                continue

            party = parse_party_summary(registration.secured_party_summary)
            secured_party_id = self._companies.resolve_company(
                party.name,
                party.acn,
                party.abn,
                source=SourceRef(
                    report_type=SECURED_PARTY_REPORT_TYPE,
                    report_id=report.source.report_id,
                    search_word=party.name or None,
                ),
            )
            if secured_party_id is None:
                log.debug("Skipping registration with an unparseable secured party")
                continue

            collateral_type = " ".join(registration.collateral_class_type.split())
            key = (grantor_id, secured_party_id, collateral_type)
            summary = self._context.security_summaries.get(key)
            if summary is None:
                summary = SecurityInterestSummary(
                    secured_party_id=secured_party_id,
                    grantor_id=grantor_id,
                    collateral_type=collateral_type,
                    collateral_label=collateral_label(
                        collateral_type, self._context.config.collateral_labels
                    ),
                    person_grantor=report.person_search,
                )
                self._context.security_summaries[key] = summary
            summary.registration_keys.add(
                registration.registration_number or f"{report_key}#{index}"
            )

    def _grantor_for(
        self, report: SecurityInterestReport, registration: SecurityRegistration
    ) -> EntityId | None:
        grantor = parse_grantor(registration)
        if report.person_search:
            name = report.subject_name or (grantor.name if grantor else None)
            return self._identity.find_or_create_by_name(name)
        if report.acn or report.abn:
            return self._companies.resolve_company(
                report.subject_name or (grantor.name if grantor else None),
                report.acn,
                report.abn,
                source=report.source,
            )
        if grantor is None:
            return None
        return self._companies.resolve_company(grantor.name, grantor.acn, source=report.source)
