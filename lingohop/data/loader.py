"""
CSV ingestion - turns a country/language table into a Repository.

The table needs a "Country" and a "Language" column (matched
case-insensitively, other columns ignored). A language cell may list
several languages separated by commas, semicolons or pipes.
"""

from __future__ import annotations
import csv
import logging
import re
from pathlib import Path
from typing import Iterable, Iterator

from .repository import Repository

logger = logging.getLogger(__name__)

COUNTRY_COLUMN = "country"
LANGUAGE_COLUMN = "language"

_LANGUAGE_SEPARATORS = re.compile(r"[,;|]")


class DataConfigError(ValueError):
    """Raised when ingestion input is malformed. Not recoverable mid-session."""


def split_languages(cell: str) -> list[str]:
    """Split a language cell into trimmed, lowercased, non-empty names."""
    names = (part.strip().lower() for part in _LANGUAGE_SEPARATORS.split(cell or ""))
    return [name for name in names if name]


def _column_indexes(headers: list[str]) -> tuple[int, int]:
    country_idx = language_idx = None
    for i, header in enumerate(headers):
        header = header.strip().lower()
        if header == COUNTRY_COLUMN and country_idx is None:
            country_idx = i
        elif header == LANGUAGE_COLUMN and language_idx is None:
            language_idx = i

    if country_idx is None or language_idx is None:
        raise DataConfigError("CSV must contain 'Country' and 'Language' columns")
    return country_idx, language_idx


def iter_pairs(rows: Iterable[list[str]]) -> Iterator[tuple[str, list[str]]]:
    """
    Yield (country, languages) pairs from raw CSV rows.

    The first row is the header.
    """
    rows = iter(rows)
    headers = next(rows, None)
    if headers is None:
        raise DataConfigError("CSV is empty")
    country_idx, language_idx = _column_indexes(headers)
    width = max(country_idx, language_idx)

    for line_no, row in enumerate(rows, start=2):
        if not any(cell.strip() for cell in row):
            continue
        if len(row) <= width:
            logger.warning("Skipping short row %d: %r", line_no, row)
            continue
        country = row[country_idx].strip()
        if not country:
            logger.warning("Skipping row %d with no country", line_no)
            continue
        yield country, split_languages(row[language_idx])


def load_rows(rows: Iterable[list[str]]) -> Repository:
    """Build a repository from already-read CSV rows (header first)."""
    repository = Repository.from_pairs(iter_pairs(rows))
    logger.info(
        "Loaded %d countries and %d languages",
        len(repository.countries),
        len(repository.languages),
    )
    return repository


def load_repository(path: str | Path) -> Repository:
    """
    Load a repository from a CSV file.

    Raises:
        FileNotFoundError: if the file does not exist
        DataConfigError: if the required columns are missing
    """
    path = Path(path)
    logger.debug("Reading country data from %s", path)
    with path.open("r", encoding="utf-8-sig", newline="") as f:
        return load_rows(csv.reader(f))
