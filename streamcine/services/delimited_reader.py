"""
Delimited Record Reader

Reads a catalog text file, detects whether it is comma or semicolon
separated and returns the lowercase header with the raw data rows.
Rows are left unsplit so callers can still see the whole line.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable


logger = logging.getLogger(__name__)

BOM = "\ufeff"
COMMA = ","
SEMICOLON = ";"


@dataclass(slots=True)
class DelimitedRecords:
    """Header, delimiter and unsplit data rows of one catalog file"""
    header: list[str] = field(default_factory=list)
    delimiter: str = COMMA
    rows: list[str] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.header or not self.rows

    def column(self, name: str, *alternates: str) -> int | None:
        """Return the header index of the first present column name, or None."""
        for candidate in (name, *alternates):
            if candidate in self.header:
                return self.header.index(candidate)
        return None

    def split_row(self, row: str) -> list[str]:
        return row.split(self.delimiter)


def detect_delimiter(header_line: str) -> str:
    """
    Detect the field delimiter from the header line.

    Commas win ties and are the fallback when neither character appears.

    Args:
        header_line: First non-blank line of the file

    Returns:
        "," or ";"
    """
    line = header_line.lstrip(BOM)
    semicolons = line.count(SEMICOLON)
    commas = line.count(COMMA)

    if semicolons == 0 and commas == 0:
        return COMMA
    if commas >= semicolons:
        return COMMA
    return SEMICOLON


def read_delimited(path: Path | str, required_columns: Iterable[str] = ()) -> DelimitedRecords:
    """
    Load a delimited catalog file.

    Missing files and files with no data rows produce empty records rather
    than errors. Required columns are only checked and reported.

    Args:
        path: Location of the catalog file
        required_columns: Column names the caller needs (lowercase)

    Returns:
        DelimitedRecords with lowercase header names and non-blank raw rows

    Raises:
        OSError: If the file exists but cannot be read
    """
    path = Path(path)

    if not path.exists():
        logger.warning(f"Catalog file not found: {path}")
        return DelimitedRecords()

    logger.info(f"Reading catalog file {path}")
    data = path.read_bytes()
    try:
        raw = data.decode("utf-8")
    except UnicodeDecodeError as e:
        logger.warning(f"{path.name} is not valid UTF-8 ({e.reason} at byte {e.start}); undecodable bytes replaced")
        raw = data.decode("utf-8", errors="replace")
    if raw.startswith(BOM):
        raw = raw[len(BOM):]

    lines = [line.strip() for line in raw.split("\n")]
    lines = [line for line in lines if line]

    if len(lines) <= 1:
        logger.warning(f"Catalog file looks empty ({len(lines)} non-blank lines): {path.name}")
        return DelimitedRecords()

    header_line = lines[0].lstrip(BOM)
    delimiter = detect_delimiter(header_line)
    logger.info(f"Detected delimiter {delimiter!r} in {path.name}")

    header = [name.strip().lower() for name in header_line.split(delimiter)]

    for column in required_columns:
        if column not in header:
            logger.warning(
                f"Header of {path.name} is missing required column {column!r}. Header: {header}"
            )

    return DelimitedRecords(header=header, delimiter=delimiter, rows=lines[1:])
