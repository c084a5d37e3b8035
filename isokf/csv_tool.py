"""Reading and writing columns of numbers as delimited text files."""

from __future__ import annotations

import logging
import re
from typing import Mapping, Sequence

from isokf.fileio import file_exists, open_file

_log = logging.getLogger(__name__)

_NUMBER = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def _split_fields(line: str, delim: str) -> list[str]:
    """Split as a delimiter-driven line reader does: no trailing empty field."""
    if not line:
        return []
    fields = line.split(delim)
    if fields[-1] == "":
        fields.pop()
    return fields


def _parse_number(token: str) -> float | None:
    match = _NUMBER.match(token)
    return float(match.group(1)) if match else None


def _is_data_line(line: str) -> bool:
    stripped = line.lstrip(" \t")
    return bool(stripped) and (stripped[0].isdigit() or stripped[0] in "+-")


def read_csv(file_path: str, delim: str = ",") -> dict[str, list[float]]:
    """Read a file with a header row into a mapping from column name to values.

    Lines before the first numeric line are skipped; the last of them is the
    header. Rows with the wrong number of fields are skipped.
    """
    if not file_exists(file_path):
        raise FileNotFoundError(f"file {file_path} does not exist")
    with open(file_path, encoding="utf-8") as handle:
        text = handle.read()
    lines = text.split("\n")
    if lines and lines[-1] == "":
        lines.pop()

    first_value_row = next((idx for idx, line in enumerate(lines) if _is_data_line(line)), len(lines))
    if first_value_row < 1:
        raise ValueError(f"no header in CSV file {file_path}")

    header = ["".join(token.split()) for token in _split_fields(lines[first_value_row - 1], delim)]
    columns: dict[str, list[float]] = {name: [] for name in header}
    n_cols = len(header)

    for row_number, line in enumerate(lines[first_value_row:], start=first_value_row):
        fields = _split_fields(line, delim)
        if len(fields) > n_cols:
            _log.warning("too many entries in row %d", row_number)
        if len(fields) != n_cols:
            _log.warning("corrupted row=%d will be skipped", row_number)
            continue
        for name, token in zip(header, fields):
            value = _parse_number(token)
            if value is None:
                _log.warning("could not parse item %r as double in row %d", token, row_number)
                value = 0.0
            columns[name].append(value)
    return columns


def write_csv(csv_data: Mapping[str, Sequence[float]], filename: str, delim: str = ",") -> None:
    """Write columns with a header row; the first column sets the row count."""
    names = list(csv_data)
    num_rows = len(csv_data[names[0]]) if names else 0
    short = [name for name in names if len(csv_data[name]) < num_rows]
    if short:
        raise ValueError(f"columns shorter than the first one: {', '.join(short)}")

    try:
        handle = open_file(filename)
    except OSError:
        _log.error("file %s could not be created/opened", filename)
        raise
    with handle:
        if not names:
            _log.warning("no data for %s", filename)
            return
        handle.write(delim.join(names) + "\n")
        for row in range(num_rows):
            handle.write(delim.join(f"{float(csv_data[name][row]):.16g}" for name in names) + "\n")