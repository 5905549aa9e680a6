from dataclasses import dataclass, field
from typing import List

from .attendanceRow import AttendanceRow


@dataclass
class ClassEvent:
    data: str
    mes: str
    faltas: int = 0
    frequencia: int = 0
    justificada: int = 0
    horas_falta_justificada: float = 0.0
    horas_falta_nao_justificada: float = 0.0
    horas_atraso: float = 0.0


@dataclass
class StudentSummary:
    """Consolidated attendance of one student over the filtered rows."""
    ra: str
    aluno: str = ""
    curso: str = ""
    turma: str = ""
    empresa: str = ""
    cnpj_empresa: str = ""
    descricao: str = ""
    dtinicio_turma: str = ""
    total_faltas: int = 0
    total_presencas: int = 0
    total_justificadas: int = 0
    horas_falta_justificada: float = 0.0
    horas_falta_nao_justificada: float = 0.0
    horas_atraso: float = 0.0
    aulas: List[ClassEvent] = field(default_factory=list)

    @classmethod
    def from_row(cls, row: AttendanceRow) -> "StudentSummary":
        """Identity and context come from the first row seen for the student."""
        return cls(
            ra=row.ra.strip(),
            aluno=row.aluno,
            curso=row.curso,
            turma=row.turma,
            empresa=row.empresa,
            cnpj_empresa=row.cnpj_empresa,
            descricao=row.descricao,
            dtinicio_turma=row.dtinicio_turma,
        )

    def add_event(self, event: ClassEvent):
        self.total_faltas += event.faltas
        self.total_presencas += event.frequencia
        self.total_justificadas += event.justificada
        self.horas_falta_justificada += event.horas_falta_justificada
        self.horas_falta_nao_justificada += event.horas_falta_nao_justificada
        self.horas_atraso += event.horas_atraso
        self.aulas.append(event)

    @property
    def total_aulas(self) -> int:
        return len(self.aulas)

    @property
    def total_faltas_nao_justificadas(self) -> int:
        return max(self.total_faltas - self.total_justificadas, 0)

    @property
    def frequency_percent(self) -> float:
        """Presences over class events, as a percentage rounded to two places."""
        if self.total_aulas == 0:
            return 0.0
        return round(self.total_presencas / self.total_aulas * 100, 2)

    @property
    def percentual_frequencia(self) -> str:
        return f"{self.frequency_percent:.2f}%"
