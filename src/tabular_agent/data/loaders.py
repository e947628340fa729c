"""Local file loaders.

Supported formats:
- CSV (`.csv`)
- JSON (`.json`) - list of objects, or dict containing a list under `data`/`records`/`items`
- JSON Lines (`.jsonl`)
- Excel (`.xlsx`) via optional dependency `openpyxl`

Loaders only turn a file into rows; registering the result is up to the
caller. Cells are kept as parsed (CSV cells stay strings) and typed later by
the coercion rules.
"""

from __future__ import annotations

import csv
import json
import zipfile
from pathlib import Path
from typing import Any

from ..exceptions import FileLoadError
from ..types import Dataset, DatasetSource

SUPPORTED_FORMATS = ("csv", "json", "jsonl", "xlsx")
DEFAULT_MAX_FILE_SIZE_MB = 10


def _auto_format_from_path(path: str | Path) -> str:
    return Path(path).suffix.lower().lstrip(".")


def _load_csv(path: Path, *, delimiter: str, encoding: str) -> list[dict[str, Any]]:
    with open(path, "r", encoding=encoding, newline="") as f:
        reader = csv.DictReader(f, delimiter=delimiter)
        return [dict(row) for row in reader]


def _records_from_json(data: Any) -> list[dict[str, Any]]:
    if isinstance(data, dict):
        for key in ("data", "records", "items"):
            if isinstance(data.get(key), list):
                data = data[key]
                break
        else:
            return [data]
    if not isinstance(data, list):
        return [{"value": data}]
    return [{str(k): v for k, v in r.items()} for r in data if isinstance(r, dict)]


def _load_json(path: Path, *, encoding: str) -> list[dict[str, Any]]:
    with open(path, "r", encoding=encoding) as f:
        return _records_from_json(json.load(f))


def _load_jsonl(path: Path, *, encoding: str) -> list[dict[str, Any]]:
    rows: list[dict[str, Any]] = []
    with open(path, "r", encoding=encoding) as f:
        for line in f:
            line = line.strip()
            if not line:
                continue
            obj = json.loads(line)
            if isinstance(obj, dict):
                rows.append({str(k): v for k, v in obj.items()})
            else:
                rows.append({"value": obj})
    return rows


def _load_xlsx(path: Path, *, sheet_name: str | None) -> list[dict[str, Any]]:
    try:
        from openpyxl import load_workbook  # type: ignore[import-not-found]
    except ImportError:
        raise FileLoadError(str(path), "openpyxl is required for .xlsx support. Install with: pip install tabular-agent[xlsx]")

    wb = load_workbook(path, read_only=True, data_only=True)
    try:
        ws = wb[sheet_name] if sheet_name is not None else wb.worksheets[0]
        sheet_rows = [tuple(r) for r in ws.iter_rows(values_only=True)]
    finally:
        wb.close()

    if not sheet_rows:
        return []

    columns = [str(c) if c is not None else f"col_{idx+1}" for idx, c in enumerate(sheet_rows[0])]
    return [
        {col: (r[idx] if idx < len(r) else None) for idx, col in enumerate(columns)}
        for r in sheet_rows[1:]
    ]


def read_rows(
    path: str | Path,
    format: str = "auto",
    *,
    delimiter: str = ",",
    encoding: str = "utf-8",
    sheet_name: str | None = None,
    max_file_size_mb: int = DEFAULT_MAX_FILE_SIZE_MB,
) -> list[dict[str, Any]]:
    """Parse a local file into a list of row dicts.

    Raises:
        FileLoadError: On a missing, oversized, unsupported or malformed file.
    """
    path = Path(path)
    fmt = _auto_format_from_path(path) if format == "auto" else format
    if fmt not in SUPPORTED_FORMATS:
        raise FileLoadError(str(path), f"unsupported format '{fmt}'. Supported: {', '.join(SUPPORTED_FORMATS)}")
    if not path.is_file():
        raise FileLoadError(str(path), "file does not exist")
    if path.stat().st_size > max_file_size_mb * 1024 * 1024:
        raise FileLoadError(str(path), f"file is larger than {max_file_size_mb}MB")

    try:
        if fmt == "csv":
            return _load_csv(path, delimiter=delimiter, encoding=encoding)
        if fmt == "json":
            return _load_json(path, encoding=encoding)
        if fmt == "jsonl":
            return _load_jsonl(path, encoding=encoding)
        return _load_xlsx(path, sheet_name=sheet_name)
    except FileLoadError:
        raise
    except (OSError, UnicodeDecodeError, ValueError, KeyError, csv.Error, zipfile.BadZipFile) as e:
        raise FileLoadError(str(path), f"{type(e).__name__}: {e}") from e


def load_file(path: str | Path, name: str | None = None, **kwargs: Any) -> Dataset:
    """Parse a file into a file-sourced Dataset whose id is the file name."""
    rows = read_rows(path, **kwargs)
    file_name = Path(path).name
    return Dataset.from_rows(file_name, rows, name=name or file_name, source=DatasetSource.FILE)
