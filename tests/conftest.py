import pytest

HEADER = [
    "CURSO", "TURMA", "RA", "ALUNO", "DESCRICAO", "DTINICIO_TURMA", "DATA",
    "FALTAS", "FREQUENCIA", "JUSTIFICADA", "MES", "CNPJ_EMPRESA", "EMPRESA",
]


def make_row(**overrides):
    row = {
        "CURSO": "Aprendizagem Industrial",
        "TURMA": "APR01",
        "RA": "S1",
        "ALUNO": "Ana",
        "DESCRICAO": "Ativo",
        "DTINICIO_TURMA": "01/02/2024",
        "DATA": "01/03/2024",
        "FALTAS": "0",
        "FREQUENCIA": "1",
        "JUSTIFICADA": "0",
        "MES": "3",
        "CNPJ_EMPRESA": "111",
        "EMPRESA": "Acme",
    }
    row.update(overrides)
    return row


@pytest.fixture
def sample_rows():
    return [
        make_row(),
        make_row(DATA="02/03/2024", FALTAS="1", FREQUENCIA="0", JUSTIFICADA="1"),
        make_row(RA="S2", ALUNO="Bruno", DATA="01/03/2024"),
        make_row(RA="S2", ALUNO="Bruno", DATA="15/03/2024", FALTAS="1", FREQUENCIA="0"),
        make_row(TURMA="APR02", RA="S3", ALUNO="Álvaro", DATA="05/03/2024", DESCRICAO="Trancado"),
        make_row(CNPJ_EMPRESA="222", EMPRESA="Beta Ltda", TURMA="APR10", RA="S4", ALUNO="Carla",
                 DATA="10/04/2024"),
        make_row(CNPJ_EMPRESA="333", EMPRESA="Gamma", TURMA="TEC01", RA="S5", ALUNO="Davi",
                 DATA="20/01/2024"),
    ]


def write_csv(path, rows, header=HEADER, delimiter=","):
    lines = [delimiter.join(header)]
    for row in rows:
        lines.append(delimiter.join(row.get(h, "") for h in header))
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path
