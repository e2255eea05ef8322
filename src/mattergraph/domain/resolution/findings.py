"""Findings Linker: bankruptcy nodes and court/tax facts."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from mattergraph.domain.model import BankruptcyNode, EdgeType, RelationshipEdge
from mattergraph.domain.resolution.normalization import normalize_identifier, normalize_name

if TYPE_CHECKING:
    from collections.abc import Iterable

    from mattergraph.domain.model import (
        BankruptcySearch,
        CanonicalCompany,
        CourtReport,
        TaxDebtReport,
    )
    from mattergraph.domain.resolution.context import ResolutionContext
    from mattergraph.domain.resolution.identity import IdentityMergeEngine

log = getLogger(__name__)


def entity_key(acn: str | None, abn: str | None, name: str | None) -> str:
    """Fact lookup key: ACN, else ABN, else normalized name."""

    return normalize_identifier(acn) or normalize_identifier(abn) or normalize_name(name)


def _company_keys(company: CanonicalCompany) -> list[str]:
    keys = [company.acn, company.abn, normalize_name(company.name)]
    return [key for key in keys if key]


class FindingsLinker:
    def __init__(self, context: ResolutionContext, identity: IdentityMergeEngine) -> None:
        self._context = context
        self._identity = identity

    def add_bankruptcy_search(self, search: BankruptcySearch) -> BankruptcyNode | None:
        """Create the finding node for one search and link the searched person to it."""

        person_id = self._identity.find_or_create_by_name(search.subject_name)
        if person_id is None:
            log.warning("Bankruptcy search %s has no subject name", search.source.report_id)
            return None

        report_id = search.source.report_id or str(len(self._context.bankruptcies))
        node_id = f"bankruptcy_{person_id}_{report_id}"
        if node_id in self._context.used_ids:
            return None
        self._context.used_ids.add(node_id)

        node = BankruptcyNode(
            id=node_id,
            person_id=person_id,
            has_bankruptcy=search.has_bankruptcy,
            uuid=search.uuid,
            extract_id=search.extract_id or search.uuid,
            start_date=search.start_date if search.has_bankruptcy else None,
            source=search.source,
        )
        self._context.bankruptcies.append(node)
        self._context.bankruptcy_edges.append(
            RelationshipEdge(
                from_id=person_id,
                to_id=node_id,
                edge_type=EdgeType.BANKRUPTCY,
                label=node.name,
                attributes={"extractId": node.extract_id},
            )
        )
        return node

    def add_tax_report(self, report: TaxDebtReport) -> None:
        key = entity_key(report.acn, report.abn, report.entity_name)
        if not key:
            log.debug("Skipping tax report %s without entity", report.source.report_id)
            return
        existing = self._context.tax_debts.get(key)
        if existing is None or report.debt.amount > existing.debt.amount:
            self._context.tax_debts[key] = report

    def add_court_report(self, report: CourtReport) -> None:
        key = entity_key(report.acn, report.abn, report.entity_name)
        if not key:
            log.debug("Skipping court report %s without entity", report.source.report_id)
            return
        cases = self._context.court_cases.setdefault(key, [])
        known = {case.uuid for case in cases}
        for case in report.cases:
            if case.uuid and case.uuid not in known:
                cases.append(case)
                known.add(case.uuid)

    def link(
        self,
        bankruptcy_searches: Iterable[BankruptcySearch],
        tax_reports: Iterable[TaxDebtReport],
        court_reports: Iterable[CourtReport],
    ) -> None:
        for search in bankruptcy_searches:
            self.add_bankruptcy_search(search)
        for report in tax_reports:
            self.add_tax_report(report)
        for report in court_reports:
            self.add_court_report(report)
        self.attach_company_findings()

    def attach_company_findings(self) -> None:
        """Copy stored facts onto companies, matching by ACN, ABN, then name."""

        for company in self._context.companies.values():
            keys = _company_keys(company)
            tax_key = next((key for key in keys if key in self._context.tax_debts), None)
            if tax_key is not None:
                company.tax_debt = self._context.tax_debts[tax_key].debt
            court_key = next((key for key in keys if self._context.court_cases.get(key)), None)
            if court_key is not None:
                company.court_cases = list(self._context.court_cases[court_key])
