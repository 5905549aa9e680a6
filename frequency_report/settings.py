from __future__ import annotations
import json, os
from dataclasses import dataclass, asdict, replace
from pathlib import Path
from typing import Optional

APP_NAME = "AprFrequencyReport"

def _user_config_path(filename: str = "user.settings.json") -> Path:
    base = Path(os.getenv("APPDATA")) / APP_NAME if os.name == "nt" else Path.home() / f".config/{APP_NAME}"
    base.mkdir(parents=True, exist_ok=True)
    return base / filename

@dataclass
class Settings:
    program_prefix: str = "APR"
    output_dir: str = ""
    default_layout: str = "simple"
    sheet_name: str = "Relatório de Frequência"
    open_after_export: bool = False
    csv_encoding: str = "utf-8-sig"

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "Settings":
        return cls(
            program_prefix=data.get("program_prefix", "APR") or "APR",
            output_dir=data.get("output_dir", ""),
            default_layout=data.get("default_layout", "simple"),
            sheet_name=data.get("sheet_name", "Relatório de Frequência"),
            open_after_export=bool(data.get("open_after_export", False)),
            csv_encoding=data.get("csv_encoding", "utf-8-sig"),
        )

    def save_to_file(self, filepath: Optional[str | os.PathLike] = None) -> Path:
        path = Path(filepath) if filepath else _user_config_path()
        with path.open("w", encoding="utf-8") as f:
            json.dump(self.to_dict(), f, indent=2, ensure_ascii=False)
        return path

    @classmethod
    def load_from_file(cls, filepath: Optional[str | os.PathLike] = None) -> "Settings":
        path = Path(filepath) if filepath else _user_config_path()
        if path.exists():
            try:
                with path.open("r", encoding="utf-8") as f:
                    data = json.load(f)
                if isinstance(data, dict):
                    return cls.from_dict(data)
            except (json.JSONDecodeError, OSError):
                return replace(DEFAULT_SETTINGS)
        return replace(DEFAULT_SETTINGS)

DEFAULT_SETTINGS = Settings()
