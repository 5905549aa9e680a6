from __future__ import annotations

import datetime
from dataclasses import dataclass
from typing import FrozenSet, Iterable, List, Optional, Union

from .attendanceRow import AttendanceRow
from .util import parse_date

WILDCARD = "*"

DateLike = Union[datetime.date, str, None]


class InvalidCriteriaError(ValueError):
    """Raised when a filter bound cannot be read as a date."""


def _coerce_bound(value: DateLike, name: str) -> Optional[datetime.date]:
    if value is None or isinstance(value, datetime.date):
        return value
    if not value.strip():
        return None
    parsed = parse_date(value)
    if parsed is None:
        raise InvalidCriteriaError(f"{name} must be a DD/MM/YYYY date, got {value!r}")
    return parsed


@dataclass(frozen=True)
class FilterCriteria:
    """Conjunctive filter over the loaded rows.

    turma of None, "" or "*" selects every class of the company.
    statuses of None applies no status restriction; an empty collection
    matches no row at all; a single string is one status.
    """
    cnpj: Optional[str] = None
    turma: Optional[str] = None
    date_start: DateLike = None
    date_end: DateLike = None
    statuses: Optional[FrozenSet[str]] = None

    def __post_init__(self):
        object.__setattr__(self, "date_start", _coerce_bound(self.date_start, "date_start"))
        object.__setattr__(self, "date_end", _coerce_bound(self.date_end, "date_end"))
        if isinstance(self.statuses, str):
            object.__setattr__(self, "statuses", frozenset([self.statuses.strip()]))
        elif self.statuses is not None:
            object.__setattr__(self, "statuses", frozenset(s.strip() for s in self.statuses))

    @property
    def all_classes(self) -> bool:
        return not self.turma or self.turma.strip() in ("", WILDCARD)

    def matches(self, row: AttendanceRow) -> bool:
        if self.cnpj and row.cnpj_empresa.strip() != self.cnpj.strip():
            return False

        if not self.all_classes and row.turma.strip() != self.turma.strip():
            return False

        if self.date_start and self.date_end:
            row_date = parse_date(row.data)
            if row_date is None:
                return False
            if row_date < self.date_start or row_date > self.date_end:
                return False

        if self.statuses is not None and row.descricao.strip() not in self.statuses:
            return False

        return True


def apply_filter(rows: Iterable[AttendanceRow], criteria: FilterCriteria) -> List[AttendanceRow]:
    """Rows matching every set criterion, in their original order."""
    return [row for row in rows if criteria.matches(row)]
