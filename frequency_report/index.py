from __future__ import annotations

import datetime
import logging
from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Iterable, List, Mapping, Optional

from .attendanceRow import AttendanceRow
from .util import collation_key, parse_date

log = logging.getLogger(__name__)

PROGRAM_PREFIX = "APR"


@dataclass(frozen=True)
class Company:
    cnpj: str
    nome: str


@dataclass(frozen=True)
class DateSpan:
    min: Optional[datetime.date] = None
    max: Optional[datetime.date] = None


@dataclass(frozen=True)
class AttendanceIndex:
    """Programme companies, their classes and the dates seen, built from one load.

    A new index is built for every load and never modified afterwards.
    """
    companies: Mapping[str, Company] = field(default_factory=dict)
    classes_by_company: Mapping[str, FrozenSet[str]] = field(default_factory=dict)
    known_dates: FrozenSet[str] = frozenset()

    @property
    def class_count(self) -> int:
        """Distinct class codes across all programme companies."""
        codes = set()
        for classes in self.classes_by_company.values():
            codes.update(classes)
        return len(codes)

    def list_companies(self) -> List[Company]:
        return sorted(self.companies.values(), key=lambda c: collation_key(c.nome))

    def search_companies(self, term: Optional[str]) -> List[Company]:
        """Companies whose name contains term (any case) or whose CNPJ contains it."""
        term = (term or "").strip()
        if not term:
            return self.list_companies()

        lowered = term.casefold()
        return [
            c for c in self.list_companies()
            if lowered in c.nome.casefold() or term in c.cnpj
        ]

    def classes_for(self, cnpj: str) -> List[str]:
        return sorted(self.classes_by_company.get(cnpj, ()))

    def known_dates_sorted(self) -> List[str]:
        # unparseable strings sort ahead of every real date
        return sorted(
            self.known_dates,
            key=lambda d: (parse_date(d) is not None, parse_date(d) or datetime.date.min, d),
        )

    def dataset_span(self) -> DateSpan:
        dates = [d for d in (parse_date(s) for s in self.known_dates) if d is not None]
        if not dates:
            return DateSpan()
        return DateSpan(min=min(dates), max=max(dates))


def is_programme_row(turma: str, cnpj: str, empresa: str, prefix: str = PROGRAM_PREFIX) -> bool:
    return turma.startswith(prefix) and bool(cnpj) and bool(empresa)


def build_index(rows: Iterable[AttendanceRow], prefix: str = PROGRAM_PREFIX) -> AttendanceIndex:
    """Scan every row once and index the ones belonging to the programme."""
    companies: Dict[str, Company] = {}
    classes: Dict[str, set] = {}
    dates = set()

    for row in rows:
        turma = row.turma.strip()
        cnpj = row.cnpj_empresa.strip()
        empresa = row.empresa.strip()
        data = row.data.strip()

        if not is_programme_row(turma, cnpj, empresa, prefix):
            continue

        # first name seen for a CNPJ is kept
        if cnpj not in companies:
            companies[cnpj] = Company(cnpj=cnpj, nome=empresa)
        classes.setdefault(cnpj, set()).add(turma)
        if data:
            dates.add(data)

    index = AttendanceIndex(
        companies=companies,
        classes_by_company={cnpj: frozenset(codes) for cnpj, codes in classes.items()},
        known_dates=frozenset(dates),
    )
    log.debug(
        "Indexed %d companies, %d classes, %d dates",
        len(companies), index.class_count, len(dates),
    )
    return index
