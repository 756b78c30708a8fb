"""
Data - country/language ingestion and lookup.

Raw (country, languages) rows are turned into immutable Country and
Language values, with each language scored by how rare it is.
"""

from .repository import Repository, rarity_score, normalize_name
from .loader import DataConfigError, load_repository, load_rows, split_languages

__all__ = [
    "Repository",
    "rarity_score",
    "normalize_name",
    "DataConfigError",
    "load_repository",
    "load_rows",
    "split_languages",
]
