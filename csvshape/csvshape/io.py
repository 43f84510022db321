from __future__ import annotations

import gzip
from collections.abc import Sequence
from enum import Enum
from pathlib import Path
from typing import IO

import pandas as pd

from csvshape.shape import Record


class FileFormat(str, Enum):
    CSV = "csv"
    CSV_GZIP = "csv-gzip"


SUPPORTED_INPUT_EXTENSIONS: tuple[str, ...] = (".csv", ".csv.gz")


def discover_csv_files(input_path: Path) -> list[Path]:
    if input_path.is_file():
        if _is_supported_input_file(input_path):
            return [input_path]
        return []

    files: list[Path] = []
    for candidate in sorted(input_path.rglob("*")):
        if candidate.is_file() and _is_supported_input_file(candidate):
            files.append(candidate)
    return files


def read_csv_rows(path: Path) -> list[list[str]]:
    """Read a CSV file into rows of raw string cells, header row included.

    Cells are never converted to NA or numbers. Missing trailing cells are
    dropped so short rows stay short, and an empty file yields no rows.
    """
    if not _is_supported_input_file(path):
        raise ValueError(f"Unsupported input format: {path}")

    with _open_text(path) as handle:
        try:
            frame = pd.read_csv(
                handle,
                header=None,
                dtype=str,
                keep_default_na=False,
                skip_blank_lines=True,
            )
        except pd.errors.EmptyDataError:
            return []

    return [_as_strings(row) for row in frame.itertuples(index=False, name=None)]


def records_to_frame(records: Sequence[Record]) -> pd.DataFrame:
    """Tabulate records with one column per external name, in shape order."""
    if not records:
        return pd.DataFrame()
    columns = list(dict.fromkeys(records[0].shape.external_names()))
    return pd.DataFrame([record.to_external_dict() for record in records], columns=columns)


def output_path_for_file(
    input_file: Path,
    input_root: Path,
    output_root: Path,
    output_format: FileFormat,
) -> Path:
    relative = input_file.relative_to(input_root) if input_root.is_dir() else Path(input_file.name)
    base = _strip_known_extensions(relative)

    if output_format == FileFormat.CSV_GZIP:
        return output_root / f"{base}.csv.gz"
    return output_root / f"{base}.csv"


def write_records(records: Sequence[Record], output_file: Path) -> None:
    output_file.parent.mkdir(parents=True, exist_ok=True)
    frame = records_to_frame(records)

    name = output_file.name.lower()
    if name.endswith(".csv.gz"):
        frame.to_csv(output_file, index=False, compression="gzip")
        return

    if name.endswith(".csv"):
        frame.to_csv(output_file, index=False)
        return

    raise ValueError(f"Unsupported output format: {output_file}")


def _open_text(path: Path) -> IO[str]:
    if path.name.lower().endswith(".gz"):
        return gzip.open(path, "rt", encoding="utf-8", newline="")
    return path.open("r", encoding="utf-8", newline="")


def _as_strings(row: tuple[object, ...]) -> list[str]:
    # pandas only pads at the end of a row; real empty cells stay "".
    cells: list[str] = []
    for cell in row:
        if not isinstance(cell, str):
            break
        cells.append(cell)
    return cells


def _is_supported_input_file(path: Path) -> bool:
    return path.name.lower().endswith(SUPPORTED_INPUT_EXTENSIONS)


def _strip_known_extensions(path: Path) -> str:
    text = str(path)
    for suffix in (".csv.gz", ".csv"):
        if text.lower().endswith(suffix):
            return text[: -len(suffix)]
    return text
