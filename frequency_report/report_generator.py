import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional

from .attendanceRow import AttendanceRow
from .dataset import AttendanceDataset
from .exporter import save_report
from .filters import FilterCriteria
from .formatter import ReportLayout, format_report
from .student import ClassEvent, StudentSummary
from .util import collation_key, to_hours, to_int

log = logging.getLogger(__name__)

ProgressFn = Optional[Callable[[int], None]]


def progress(cb: ProgressFn, value: int):
    if cb:
        cb(int(value))


@dataclass
class AttendanceReport:
    total_records: int = 0
    students: List[StudentSummary] = field(default_factory=list)

    @property
    def total_students(self) -> int:
        return len(self.students)


@dataclass
class ReportOutcome:
    report: AttendanceReport
    output_path: Optional[str] = None

    @property
    def is_empty(self) -> bool:
        """True when nothing matched the criteria and no file was written."""
        return self.report.total_records == 0


def event_from_row(row: AttendanceRow) -> ClassEvent:
    return ClassEvent(
        data=row.data,
        mes=row.mes,
        faltas=to_int(row.faltas),
        frequencia=to_int(row.frequencia),
        justificada=to_int(row.justificada),
        horas_falta_justificada=to_hours(row.horas_falta_justificada),
        horas_falta_nao_justificada=to_hours(row.horas_falta_nao_justificada),
        horas_atraso=to_hours(row.horas_atraso),
    )


def build_report(rows: List[AttendanceRow]) -> AttendanceReport:
    """Consolidate filtered rows into one summary per student, sorted by name."""
    by_ra: Dict[str, StudentSummary] = {}
    skipped = 0

    for row in rows:
        ra = row.ra.strip()
        if not ra:
            skipped += 1
            continue
        if ra not in by_ra:
            by_ra[ra] = StudentSummary.from_row(row)
        by_ra[ra].add_event(event_from_row(row))

    if skipped:
        log.debug("Skipped %d rows without RA", skipped)

    students = sorted(by_ra.values(), key=lambda s: collation_key(s.aluno))
    return AttendanceReport(total_records=len(rows), students=students)


def generate_report(
    dataset: AttendanceDataset,
    criteria: FilterCriteria,
    settings,
    layout: Optional[ReportLayout] = None,
    company_name: Optional[str] = None,
    output_dir: Optional[str] = None,
    on_progress: ProgressFn = None,
) -> ReportOutcome:
    progress(on_progress, 0)
    layout = layout or ReportLayout(settings.default_layout)

    filtered = dataset.apply_filter(criteria)
    progress(on_progress, 30)
    if not filtered:
        log.info("No records matched %s", criteria)
        progress(on_progress, 100)
        return ReportOutcome(report=AttendanceReport())

    report = build_report(filtered)
    progress(on_progress, 60)

    records = format_report(report, layout)
    progress(on_progress, 90)

    if company_name is None:
        company = dataset.index.companies.get((criteria.cnpj or "").strip())
        company_name = company.nome if company else (criteria.cnpj or "")

    output_path = save_report(
        records,
        layout.columns,
        company_name,
        output_dir=output_dir or settings.output_dir or None,
        sheet_name=settings.sheet_name,
        open_after=settings.open_after_export,
    )
    progress(on_progress, 100)
    return ReportOutcome(report=report, output_path=output_path)
