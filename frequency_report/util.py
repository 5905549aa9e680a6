import datetime
import re
import unicodedata
from typing import Optional

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")
_LEADING_NUMBER = re.compile(r"^\s*([+-]?\d+(?:[.,]\d+)?)")


def collation_key(raw: str) -> tuple:
    """Sort key for display names: accents and case ignored, raw text breaks ties."""
    if not raw:
        return ("", "")

    s = unicodedata.normalize("NFKD", raw)
    s = "".join(c for c in s if not unicodedata.combining(c))
    s = re.sub(r"\s+", " ", s).strip().casefold()
    return (s, raw)


def parse_date(value) -> Optional[datetime.date]:
    """Parse DD/MM/YYYY. Returns None for anything that is not a real date."""
    if not value:
        return None

    parts = str(value).strip().split("/")
    if len(parts) != 3:
        return None

    try:
        day, month, year = (int(p) for p in parts)
        return datetime.date(year, month, day)
    except ValueError:
        return None


def format_date(value: Optional[datetime.date]) -> str:
    if not value:
        return ""
    return f"{value.day:02d}/{value.month:02d}/{value.year:04d}"


def to_int(value) -> int:
    # leading integer only: "3.7" -> 3, "12abc" -> 12, "abc" -> 0
    match = _LEADING_INT.match(str(value or ""))
    return int(match.group(1)) if match else 0


def to_hours(value) -> float:
    match = _LEADING_NUMBER.match(str(value or ""))
    if not match:
        return 0.0
    return float(match.group(1).replace(",", "."))


def format_cnpj(cnpj: str) -> str:
    if not cnpj or not re.fullmatch(r"\d{14}", cnpj):
        return cnpj
    return f"{cnpj[:2]}.{cnpj[2:5]}.{cnpj[5:8]}/{cnpj[8:12]}-{cnpj[12:]}"


def sanitize_filename(s) -> str:
    return re.sub(r"[^A-Za-z0-9]", "_", str(s or ""))
