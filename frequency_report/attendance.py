import csv
import logging
import os
import tempfile
from typing import Dict, List

from xlsx2csv import Xlsx2csv

log = logging.getLogger(__name__)

DELIMITERS = ",;\t|"


class MalformedInputError(ValueError):
    """Raised when the export cannot be parsed into rows."""


def _detect_dialect(sample: str):
    try:
        return csv.Sniffer().sniff(sample, delimiters=DELIMITERS)
    except csv.Error:
        return csv.excel


def read_rows(f) -> List[Dict[str, str]]:
    """Read header-keyed rows from an open text stream.

    Blank lines are skipped. Every row whose field count differs from the
    header is collected, and the whole read fails with a single
    MalformedInputError if there was any.
    """
    sample = f.read(64 * 1024)
    f.seek(0)
    reader = csv.reader(f, _detect_dialect(sample))

    try:
        headers = next(reader)
    except StopIteration:
        raise MalformedInputError("The file is empty.")
    except csv.Error as e:
        raise MalformedInputError(f"Could not read the header row: {e}")

    headers = [h.strip() for h in headers]
    if not any(headers):
        raise MalformedInputError("The header row is empty.")

    data: List[Dict[str, str]] = []
    errors: List[str] = []
    try:
        for row in reader:
            if not row or all(not cell.strip() for cell in row):
                continue
            if len(row) != len(headers):
                errors.append(
                    f"line {reader.line_num}: expected {len(headers)} fields, found {len(row)}"
                )
                continue
            data.append(dict(zip(headers, row)))
    except csv.Error as e:
        errors.append(f"line {reader.line_num}: {e}")

    if errors:
        log.warning("Rejected export: %d malformed row(s), first: %s", len(errors), errors[0])
        raise MalformedInputError(
            f"{len(errors)} malformed row(s) in the file; first: {errors[0]}"
        )
    return data


def open_file(input_file: str, encoding: str = "utf-8-sig") -> List[Dict[str, str]]:
    """Read a CSV or XLSX export into a list of header-keyed row mappings."""
    if not input_file:
        raise ValueError("input_file is required")

    temp_csv_path = None
    try:
        if input_file.lower().endswith(".xlsx"):
            fd, temp_csv_path = tempfile.mkstemp(suffix=".csv")
            os.close(fd)
            try:
                Xlsx2csv(input_file, outputencoding="utf-8").convert(temp_csv_path)
            except Exception as e:
                raise MalformedInputError(f"Error reading workbook '{input_file}': {e}")
            source, encoding = temp_csv_path, "utf-8"
        else:
            source = input_file

        try:
            with open(source, "r", encoding=encoding, newline="") as f:
                data = read_rows(f)
        except (OSError, UnicodeDecodeError) as e:
            raise MalformedInputError(f"Error reading '{input_file}': {e}")

        log.debug("Read %d rows from %s", len(data), input_file)
        return data
    finally:
        if temp_csv_path and os.path.exists(temp_csv_path):
            try:
                os.remove(temp_csv_path)
            except OSError:
                pass
