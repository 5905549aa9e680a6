import datetime
import logging
import webbrowser
from pathlib import Path
from typing import Dict, List, Optional

import pandas as pd
from openpyxl.utils import get_column_letter

from .formatter import COLUMN_WIDTHS
from .util import sanitize_filename

log = logging.getLogger(__name__)

DEFAULT_SHEET_NAME = "Relatório de Frequência"


def default_output_dir() -> Path:
    return Path.home() / "Downloads"


def report_filename(company_name: str, now: Optional[datetime.datetime] = None) -> str:
    timestamp = (now or datetime.datetime.now()).strftime("%Y%m%d_%H%M%S")
    return f"relatorio_frequencia_{sanitize_filename(company_name)}_{timestamp}.xlsx"


def export_xlsx(
    records: List[Dict[str, object]],
    columns: List[str],
    output_path,
    sheet_name: str = DEFAULT_SHEET_NAME,
) -> str:
    """Write records to a single-sheet workbook, columns in the given order."""
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    df = pd.DataFrame(records, columns=columns)
    # Excel caps sheet titles at 31 characters
    sheet_name = sheet_name[:31]
    with pd.ExcelWriter(output_path, engine="openpyxl") as writer:
        df.to_excel(writer, sheet_name=sheet_name, index=False)
        ws = writer.sheets[sheet_name]
        for i, column in enumerate(columns, start=1):
            ws.column_dimensions[get_column_letter(i)].width = COLUMN_WIDTHS.get(column, 15)

    log.info("Wrote %d rows to %s", len(records), output_path)
    return str(output_path)


def save_report(
    records: List[Dict[str, object]],
    columns: List[str],
    company_name: str,
    output_dir=None,
    sheet_name: str = DEFAULT_SHEET_NAME,
    open_after: bool = False,
) -> str:
    out_dir = Path(output_dir) if output_dir else default_output_dir()
    output_path = out_dir / report_filename(company_name)

    path = export_xlsx(records, columns, output_path, sheet_name)
    if open_after:
        webbrowser.open(Path(path).resolve().as_uri())
    return path
