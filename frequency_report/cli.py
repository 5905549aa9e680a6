from __future__ import annotations
import argparse, json, logging, sys

from typing import Tuple

from .dataset import AttendanceDataset, LoadResult
from .filters import FilterCriteria
from .formatter import ReportLayout
from .report_generator import generate_report
from .settings import Settings
from .util import format_cnpj, format_date

def emit(kind: str, **payload):
    print(json.dumps({"type": kind, **payload}, ensure_ascii=False), flush=True)

def load_dataset(input_path: str, settings: Settings) -> Tuple[AttendanceDataset, LoadResult]:
    dataset = AttendanceDataset(settings.program_prefix)
    result = dataset.load_file(input_path, settings.csv_encoding)
    return dataset, result

def load_cmd(input_path: str, settings: Settings):
    _, result = load_dataset(input_path, settings)
    emit(
        "loaded",
        total_records=result.total_records,
        qualifying_companies=result.qualifying_companies,
        qualifying_classes=result.qualifying_classes,
    )

def companies_cmd(input_path: str, term: str, settings: Settings):
    dataset, _ = load_dataset(input_path, settings)
    items = [
        {"cnpj": c.cnpj, "cnpj_formatted": format_cnpj(c.cnpj), "name": c.nome}
        for c in dataset.index.search_companies(term)
    ]
    emit("companies", items=items)

def classes_cmd(input_path: str, cnpj: str, settings: Settings):
    dataset, _ = load_dataset(input_path, settings)
    emit("classes", cnpj=cnpj, items=dataset.index.classes_for(cnpj))

def span_cmd(input_path: str, settings: Settings):
    dataset, _ = load_dataset(input_path, settings)
    span = dataset.index.dataset_span()
    emit(
        "span",
        min=format_date(span.min) or None,
        max=format_date(span.max) or None,
        dates=dataset.index.known_dates_sorted(),
    )

def generate_cmd(args, settings: Settings) -> int:
    dataset, _ = load_dataset(args.input, settings)

    if args.no_status:
        statuses = frozenset()
    elif args.status:
        statuses = frozenset(args.status)
    else:
        statuses = None

    criteria = FilterCriteria(
        cnpj=args.cnpj,
        turma=args.turma,
        date_start=args.start,
        date_end=args.end,
        statuses=statuses,
    )
    layout = ReportLayout(args.layout) if args.layout else None

    def progress_cb(pct: int):
        emit("progress", value=int(pct))

    outcome = generate_report(
        dataset,
        criteria,
        settings,
        layout=layout,
        output_dir=args.output_dir or None,
        on_progress=progress_cb,
    )
    if outcome.is_empty:
        emit("empty", message="No records matched the selected filters.")
        return 0

    emit(
        "done",
        output=outcome.output_path,
        total_students=outcome.report.total_students,
        total_records=outcome.report.total_records,
    )
    return 0

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="frequency-report")
    parser.add_argument("--settings", type=str, help="Path to settings JSON (defaults to user.settings)")
    parser.add_argument("--verbose", action="store_true")
    sub = parser.add_subparsers(dest="cmd", required=True)

    ld = sub.add_parser("load")
    ld.add_argument("--input", required=True)

    comp = sub.add_parser("companies")
    comp.add_argument("--input", required=True)
    comp.add_argument("--search", default="")

    cls = sub.add_parser("classes")
    cls.add_argument("--input", required=True)
    cls.add_argument("--cnpj", required=True)

    sp = sub.add_parser("span")
    sp.add_argument("--input", required=True)

    gen = sub.add_parser("generate")
    gen.add_argument("--input", required=True)
    gen.add_argument("--cnpj", required=True)
    gen.add_argument("--turma", default=None, help="Class code, or * for every class of the company")
    gen.add_argument("--start", required=True, help="DD/MM/YYYY")
    gen.add_argument("--end", required=True, help="DD/MM/YYYY")
    gen.add_argument("--status", action="append", help="Keep only rows with this status; repeatable")
    gen.add_argument("--no-status", action="store_true", help="Select no status (matches nothing)")
    gen.add_argument("--layout", choices=[layout.value for layout in ReportLayout], default=None)
    gen.add_argument("--output-dir", default="")
    return parser

def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    settings = Settings.load_from_file(filepath=args.settings) if args.settings else Settings.load_from_file()

    if args.cmd == "load":
        load_cmd(args.input, settings)
    elif args.cmd == "companies":
        companies_cmd(args.input, args.search, settings)
    elif args.cmd == "classes":
        classes_cmd(args.input, args.cnpj, settings)
    elif args.cmd == "span":
        span_cmd(args.input, settings)
    elif args.cmd == "generate":
        return generate_cmd(args, settings)
    return 0

def run():
    try:
        sys.exit(main())
    except Exception as e:
        logging.getLogger(__name__).debug("Command failed", exc_info=True)
        emit("error", error=str(e))
        sys.exit(1)

if __name__ == "__main__":
    run()
