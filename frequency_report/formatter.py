from enum import Enum
from typing import Callable, Dict, List, Tuple

from .student import StudentSummary

Column = Tuple[str, Callable[[StudentSummary], object]]

_IDENTITY: List[Column] = [
    ("RA", lambda s: s.ra),
    ("Aluno", lambda s: s.aluno),
    ("Curso", lambda s: s.curso),
    ("Turma", lambda s: s.turma),
    ("Empresa", lambda s: s.empresa),
    ("CNPJ", lambda s: s.cnpj_empresa),
    ("Status", lambda s: s.descricao),
    ("Data Início Turma", lambda s: s.dtinicio_turma),
]

_TOTALS: List[Column] = [
    ("Total de Aulas", lambda s: s.total_aulas),
    ("Total de Presenças", lambda s: s.total_presencas),
    ("Total de Faltas", lambda s: s.total_faltas),
    ("Faltas Justificadas", lambda s: s.total_justificadas),
]

_DURATIONS: List[Column] = [
    ("Faltas Não Justificadas", lambda s: s.total_faltas_nao_justificadas),
    ("Horas de Falta Justificada", lambda s: round(s.horas_falta_justificada, 2)),
    ("Horas de Falta Não Justificada", lambda s: round(s.horas_falta_nao_justificada, 2)),
    ("Horas de Atraso", lambda s: round(s.horas_atraso, 2)),
]

_FREQUENCY: List[Column] = [
    ("Percentual de Frequência", lambda s: s.percentual_frequencia),
]

# spreadsheet column widths, in characters
COLUMN_WIDTHS: Dict[str, int] = {
    "RA": 12,
    "Aluno": 35,
    "Curso": 40,
    "Turma": 18,
    "Empresa": 40,
    "CNPJ": 20,
    "Status": 15,
    "Data Início Turma": 18,
    "Total de Aulas": 15,
    "Total de Presenças": 18,
    "Total de Faltas": 15,
    "Faltas Justificadas": 20,
    "Faltas Não Justificadas": 24,
    "Horas de Falta Justificada": 26,
    "Horas de Falta Não Justificada": 30,
    "Horas de Atraso": 16,
    "Percentual de Frequência": 25,
}


class ReportLayout(Enum):
    SIMPLE = "simple"
    EXTENDED = "extended"

    @property
    def _getters(self) -> List[Column]:
        if self is ReportLayout.EXTENDED:
            return _IDENTITY + _TOTALS + _DURATIONS + _FREQUENCY
        return _IDENTITY + _TOTALS + _FREQUENCY

    @property
    def columns(self) -> List[str]:
        return [name for name, _ in self._getters]

    def format_student(self, student: StudentSummary) -> Dict[str, object]:
        return {name: getter(student) for name, getter in self._getters}


def format_report(students, layout: ReportLayout = ReportLayout.SIMPLE) -> List[Dict[str, object]]:
    """Flat records for the exporter, keys in the layout's column order.

    Accepts an AttendanceReport or any iterable of StudentSummary.
    """
    students = getattr(students, "students", students)
    return [layout.format_student(s) for s in students]
