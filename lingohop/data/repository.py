"""
Repository - the universe of countries and languages for a game.

Built once from ingested (country, languages) pairs, then read-only.
Lookups are case-insensitive; the flexible variant also tolerates
punctuation, accents and spacing differences in player input.
"""

from __future__ import annotations
import math
import re
import unicodedata
from collections import Counter
from typing import Iterable

from ..engine_core.models import Country, Language, canonical_key


_PUNCTUATION = re.compile(r"[^\w\s]")
_WHITESPACE = re.compile(r"\s+")


def rarity_score(frequency: int) -> int:
    """
    Points per streak step for a language spoken by `frequency` countries.

    Rarer languages score higher, with a floor of one point.
    """
    return max(1, math.ceil(10 / (frequency + 1)))


def normalize_name(name: str) -> str:
    """
    Loose form of a name for tolerant matching.

    "  Côte d'Ivoire " -> "cote divoire", "The Bahamas" -> "bahamas",
    "Trinidad & Tobago" -> "trinidad and tobago".
    """
    text = unicodedata.normalize("NFKD", name)
    text = "".join(ch for ch in text if not unicodedata.combining(ch))
    text = text.casefold().replace("&", " and ")
    text = _PUNCTUATION.sub("", text)
    text = _WHITESPACE.sub(" ", text).strip()
    if text.startswith("the "):
        text = text[4:]
    return text


class Repository:
    """
    Read-only lookup over countries and languages.

    Usage:
        repo = Repository.from_pairs([
            ("France", ["french"]),
            ("Belgium", ["french", "dutch", "german"]),
        ])
        repo.lookup_country("FRANCE")
        repo.lookup_country_flexible(" the france. ")
    """

    def __init__(self, countries: Iterable[Country], languages: Iterable[Language]):
        self._languages: dict[str, Language] = {lang.key: lang for lang in languages}
        self._countries: dict[str, Country] = {c.key: c for c in countries}
        self._flexible: dict[str, Country] = {}
        for country in self._countries.values():
            self._flexible.setdefault(normalize_name(country.name), country)

    @classmethod
    def from_pairs(cls, pairs: Iterable[tuple[str, Iterable[str]]]) -> Repository:
        """
        Build a repository from raw (country, language names) pairs.

        Language names are lowercased for display and deduplicated per
        row by their canonical key before counting, keeping the first
        spelling seen. A country listed twice keeps its last row, while
        every row still counts toward language frequency.
        """
        frequency: Counter[str] = Counter()
        display_names: dict[str, str] = {}
        country_languages: dict[str, tuple[str, set[str]]] = {}

        for country_name, language_names in pairs:
            country_name = country_name.strip()
            keys = set()
            for name in language_names:
                name = name.strip().lower()
                if name:
                    key = canonical_key(name)
                    display_names.setdefault(key, name)
                    keys.add(key)
            frequency.update(keys)
            country_languages[canonical_key(country_name)] = (country_name, keys)

        languages = {
            key: Language(name=display_names[key], rarity_score=rarity_score(count))
            for key, count in frequency.items()
        }
        countries = [
            Country(name=name, languages=frozenset(languages[key] for key in keys))
            for name, keys in country_languages.values()
        ]
        return cls(countries, languages.values())

    # Lookups

    def lookup_language(self, name: str) -> Language | None:
        return self._languages.get(canonical_key(name))

    def lookup_country(self, name: str) -> Country | None:
        return self._countries.get(canonical_key(name))

    def lookup_country_flexible(self, name: str) -> Country | None:
        """Exact match first, then a match on the normalized name."""
        country = self.lookup_country(name)
        if country is not None:
            return country
        return self._flexible.get(normalize_name(name))

    # Collections

    @property
    def countries(self) -> tuple[Country, ...]:
        return tuple(self._countries.values())

    @property
    def languages(self) -> tuple[Language, ...]:
        return tuple(self._languages.values())

    def countries_speaking(self, language: Language) -> list[Country]:
        return [c for c in self._countries.values() if c.has_language(language)]

    def __len__(self) -> int:
        return len(self._countries)

    def __contains__(self, name: str) -> bool:
        return self.lookup_country(name) is not None
