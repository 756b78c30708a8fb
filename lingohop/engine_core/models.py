"""
Value types - languages, countries and recorded moves.

Design principles:
- Immutable: created once during ingestion, never mutated
- Case-insensitive identity: names are folded to a canonical key
  that drives equality and hashing
"""

from __future__ import annotations
from dataclasses import dataclass, field


def canonical_key(name: str) -> str:
    """Canonical identity key for a country or language name."""
    return name.strip().casefold()


@dataclass(frozen=True, eq=False)
class Language:
    """
    An official language and the points it is worth per streak step.

    Two languages are the same entity when their names match
    case-insensitively; the rarity score plays no part in identity.
    """
    name: str
    rarity_score: int = 1
    key: str = field(init=False, repr=False)

    def __post_init__(self):
        if self.rarity_score < 1:
            raise ValueError(f"rarity_score must be >= 1, got {self.rarity_score}")
        object.__setattr__(self, "key", canonical_key(self.name))

    def __hash__(self):
        return hash(self.key)

    def __eq__(self, other):
        if not isinstance(other, Language):
            return NotImplemented
        return self.key == other.key

    def __str__(self):
        return self.name


@dataclass(frozen=True, eq=False)
class Country:
    """
    A country and the official languages it speaks.

    The language set is frozen at construction.
    """
    name: str
    languages: frozenset[Language] = field(default_factory=frozenset)
    key: str = field(init=False, repr=False)

    def __post_init__(self):
        object.__setattr__(self, "languages", frozenset(self.languages))
        object.__setattr__(self, "key", canonical_key(self.name))

    def has_language(self, language: Language | None) -> bool:
        """Check if this country speaks the given language."""
        return language is not None and language in self.languages

    def shared_languages(self, other: Country) -> frozenset[Language]:
        """Languages spoken by both this country and another."""
        return self.languages & other.languages

    def sorted_languages(self) -> list[Language]:
        """Languages ordered by name, for stable display."""
        return sorted(self.languages, key=lambda lang: lang.key)

    def __hash__(self):
        return hash(self.key)

    def __eq__(self, other):
        if not isinstance(other, Country):
            return NotImplemented
        return self.key == other.key

    def __str__(self):
        return self.name


@dataclass(frozen=True)
class GameMove:
    """
    One resolved step in the game history.

    The synthetic starting move has no language and scores zero.
    """
    country: Country
    language: Language | None = None
    points: int = 0

    @classmethod
    def start(cls, country: Country) -> GameMove:
        """Factory for the zero-point starting placement."""
        return cls(country=country, language=None, points=0)

    @property
    def is_start(self) -> bool:
        return self.language is None

