from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, List, Mapping, Tuple

from .attendance import open_file
from .attendanceRow import AttendanceRow
from .filters import FilterCriteria, apply_filter
from .index import PROGRAM_PREFIX, AttendanceIndex, build_index

log = logging.getLogger(__name__)


class DatasetNotLoadedError(RuntimeError):
    """Raised when filtering or reporting is attempted before a successful load."""


@dataclass(frozen=True)
class LoadResult:
    total_records: int
    qualifying_companies: int
    qualifying_classes: int


class AttendanceDataset:
    """The rows of the current export and the index derived from them.

    Rows and index are replaced together on every load; a failed load leaves
    the dataset empty.
    """

    def __init__(self, program_prefix: str = PROGRAM_PREFIX) -> None:
        self._prefix = program_prefix
        self._state: Tuple[Tuple[AttendanceRow, ...], AttendanceIndex, bool] = ((), AttendanceIndex(), False)

    @property
    def rows(self) -> Tuple[AttendanceRow, ...]:
        return self._state[0]

    @property
    def index(self) -> AttendanceIndex:
        return self._state[1]

    @property
    def is_loaded(self) -> bool:
        return len(self.rows) > 0

    def load_rows(self, mappings: Iterable[Mapping]) -> LoadResult:
        try:
            rows = tuple(AttendanceRow.from_mapping(m) for m in mappings)
            index = build_index(rows, self._prefix)
        except Exception:
            self.clear()
            raise

        self._state = (rows, index, True)
        result = LoadResult(
            total_records=len(rows),
            qualifying_companies=len(index.companies),
            qualifying_classes=index.class_count,
        )
        log.info(
            "Loaded %d records, %d programme companies, %d classes",
            result.total_records, result.qualifying_companies, result.qualifying_classes,
        )
        return result

    def load_file(self, path: str, encoding: str = "utf-8-sig") -> LoadResult:
        try:
            mappings = open_file(path, encoding)
        except Exception:
            self.clear()
            raise
        return self.load_rows(mappings)

    def clear(self) -> None:
        self._state = ((), AttendanceIndex(), False)

    def apply_filter(self, criteria: FilterCriteria) -> List[AttendanceRow]:
        # a file with a header and no data rows is still a successful load
        if not self._state[2]:
            raise DatasetNotLoadedError("No attendance file has been loaded.")
        return apply_filter(self.rows, criteria)
