from dataclasses import dataclass, fields
from typing import Dict, Mapping

# input column -> AttendanceRow attribute
COLUMNS: Dict[str, str] = {
    "CURSO": "curso",
    "TURMA": "turma",
    "RA": "ra",
    "ALUNO": "aluno",
    "DESCRICAO": "descricao",
    "DTINICIO_TURMA": "dtinicio_turma",
    "DATA": "data",
    "FALTAS": "faltas",
    "FREQUENCIA": "frequencia",
    "JUSTIFICADA": "justificada",
    "MES": "mes",
    "CNPJ_EMPRESA": "cnpj_empresa",
    "EMPRESA": "empresa",
    # optional, only read by the extended report
    "HORAS_FALTA_JUSTIFICADA": "horas_falta_justificada",
    "HORAS_FALTA_NAO_JUSTIFICADA": "horas_falta_nao_justificada",
    "HORAS_ATRASO": "horas_atraso",
}


@dataclass(frozen=True)
class AttendanceRow:
    """One attendance event exactly as it came out of the export."""
    curso: str = ""                 # CURSO
    turma: str = ""                 # TURMA, class code
    ra: str = ""                    # RA, student id
    aluno: str = ""                 # ALUNO, student name
    descricao: str = ""             # DESCRICAO, enrolment status
    dtinicio_turma: str = ""        # DTINICIO_TURMA
    data: str = ""                  # DATA, DD/MM/YYYY
    faltas: str = ""                # FALTAS
    frequencia: str = ""            # FREQUENCIA, presences
    justificada: str = ""           # JUSTIFICADA
    mes: str = ""                   # MES
    cnpj_empresa: str = ""          # CNPJ_EMPRESA, company tax id
    empresa: str = ""               # EMPRESA
    horas_falta_justificada: str = ""
    horas_falta_nao_justificada: str = ""
    horas_atraso: str = ""

    @classmethod
    def from_mapping(cls, mapping: Mapping) -> "AttendanceRow":
        """Build a row from a header-keyed mapping; missing or null columns become ""."""
        values = {}
        for column, attr in COLUMNS.items():
            value = mapping.get(column)
            values[attr] = "" if value is None else str(value)
        return cls(**values)

    def as_dict(self) -> Dict[str, str]:
        by_attr = {attr: column for column, attr in COLUMNS.items()}
        return {by_attr[f.name]: getattr(self, f.name) for f in fields(self)}
