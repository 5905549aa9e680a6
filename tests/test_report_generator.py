import random

from conftest import make_row, write_csv
from frequency_report.attendanceRow import AttendanceRow
from frequency_report.dataset import AttendanceDataset
from frequency_report.filters import FilterCriteria
from frequency_report.formatter import ReportLayout
from frequency_report.report_generator import build_report, generate_report
from frequency_report.settings import Settings
from frequency_report.student import StudentSummary


def _rows(mappings):
    return [AttendanceRow.from_mapping(m) for m in mappings]


def test_two_events_consolidate_into_one_student():
    dataset = AttendanceDataset()
    dataset.load_rows([
        {"TURMA": "APR01", "CNPJ_EMPRESA": "111", "EMPRESA": "Acme", "RA": "S1", "ALUNO": "Ana",
         "DATA": "01/03/2024", "FALTAS": "0", "FREQUENCIA": "1", "JUSTIFICADA": "0"},
        {"TURMA": "APR01", "CNPJ_EMPRESA": "111", "EMPRESA": "Acme", "RA": "S1", "ALUNO": "Ana",
         "DATA": "02/03/2024", "FALTAS": "1", "FREQUENCIA": "0", "JUSTIFICADA": "1"},
    ])
    filtered = dataset.apply_filter(
        FilterCriteria(cnpj="111", turma="APR01", date_start="01/03/2024", date_end="02/03/2024")
    )
    report = build_report(filtered)

    assert report.total_students == 1
    assert report.total_records == 2
    student = report.students[0]
    assert student.ra == "S1"
    assert student.total_aulas == 2
    assert student.total_presencas == 1
    assert student.total_faltas == 1
    assert student.total_justificadas == 1
    assert student.percentual_frequencia == "50.00%"


def test_frequency_percentage_formatting():
    student = StudentSummary(ra="S1")
    assert student.percentual_frequencia == "0.00%"
    assert student.frequency_percent == 0.0

    report = build_report(_rows(
        [make_row(FREQUENCIA="1")] * 8 + [make_row(FREQUENCIA="0", FALTAS="1")] * 2
    ))
    assert report.students[0].total_aulas == 10
    assert report.students[0].percentual_frequencia == "80.00%"
    assert report.students[0].frequency_percent == 80.0


def test_identity_comes_from_first_row():
    report = build_report(_rows([
        make_row(DESCRICAO="Ativo", CURSO="Curso A"),
        make_row(DESCRICAO="Trancado", CURSO="Curso B", DATA="02/03/2024"),
    ]))

    student = report.students[0]
    assert student.descricao == "Ativo"
    assert student.curso == "Curso A"
    assert [a.data for a in student.aulas] == ["01/03/2024", "02/03/2024"]


def test_rows_without_ra_are_skipped_but_counted():
    report = build_report(_rows([make_row(RA=""), make_row(RA="  "), make_row()]))

    assert report.total_records == 3
    assert report.total_students == 1


def test_non_numeric_counts_coerce_to_zero():
    report = build_report(_rows([
        make_row(FALTAS="x", FREQUENCIA="", JUSTIFICADA=None),
        make_row(FALTAS="2", FREQUENCIA="1", JUSTIFICADA="1"),
    ]))

    student = report.students[0]
    assert student.total_faltas == 2
    assert student.total_presencas == 1
    assert student.total_justificadas == 1
    assert student.total_aulas == 2
    assert student.aulas[0].faltas == 0


def test_students_sorted_by_name(sample_rows):
    report = build_report(_rows(sample_rows))

    assert [s.aluno for s in report.students] == ["Álvaro", "Ana", "Bruno", "Carla", "Davi"]


def test_totals_independent_of_row_order(sample_rows):
    rows = _rows(sample_rows)
    shuffled = rows[:]
    random.Random(7).shuffle(shuffled)

    def totals(report):
        return {
            s.ra: (s.total_aulas, s.total_presencas, s.total_faltas, s.total_justificadas)
            for s in report.students
        }

    assert totals(build_report(rows)) == totals(build_report(shuffled))


def test_extended_durations_accumulate():
    report = build_report(_rows([
        make_row(HORAS_FALTA_JUSTIFICADA="1,5", HORAS_ATRASO="0.25", FALTAS="2", JUSTIFICADA="1"),
        make_row(HORAS_FALTA_NAO_JUSTIFICADA="4", HORAS_ATRASO="0,25", DATA="02/03/2024"),
    ]))

    student = report.students[0]
    assert student.horas_falta_justificada == 1.5
    assert student.horas_falta_nao_justificada == 4.0
    assert student.horas_atraso == 0.5
    assert student.total_faltas_nao_justificadas == 1


def test_generate_report_exports_workbook(tmp_path, sample_rows):
    dataset = AttendanceDataset()
    dataset.load_rows(sample_rows)
    seen = []

    outcome = generate_report(
        dataset,
        FilterCriteria(cnpj="111", turma="*", date_start="01/03/2024", date_end="31/03/2024"),
        Settings(),
        output_dir=str(tmp_path),
        on_progress=seen.append,
    )

    assert not outcome.is_empty
    assert outcome.report.total_students == 3
    assert outcome.output_path.startswith(str(tmp_path))
    assert "relatorio_frequencia_Acme_" in outcome.output_path
    assert seen == [0, 30, 60, 90, 100]


def test_generate_report_empty_result_writes_nothing(tmp_path, sample_rows):
    dataset = AttendanceDataset()
    dataset.load_rows(sample_rows)

    outcome = generate_report(
        dataset,
        FilterCriteria(cnpj="111", statuses=frozenset()),
        Settings(),
        layout=ReportLayout.EXTENDED,
        output_dir=str(tmp_path),
    )

    assert outcome.is_empty
    assert outcome.output_path is None
    assert list(tmp_path.iterdir()) == []


def test_generate_report_on_header_only_file_is_empty(tmp_path):
    dataset = AttendanceDataset()
    dataset.load_file(str(write_csv(tmp_path / "export.csv", [])))

    outcome = generate_report(
        dataset,
        FilterCriteria(cnpj="111", date_start="01/03/2024", date_end="31/03/2024"),
        Settings(),
        output_dir=str(tmp_path / "reports"),
    )

    assert outcome.is_empty
    assert outcome.output_path is None
    assert not (tmp_path / "reports").exists()
