"""
Game State - Mutable per-session aggregate.

The state is a plain data holder with controlled mutators.
It performs no validation: the engine decides what is legal
and the state trusts its caller.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any

from .models import Country, GameMove, Language
from ..config import DEFAULT_RULES


@dataclass
class GameState:
    """
    Complete state of one game at a point in time.

    Invariants maintained by the mutators:
    - current_country is always in used_countries
    - moves starts with the synthetic start move and is append-only
    - total_score equals the sum of points over moves
    """
    current_country: Country
    max_moves: int = DEFAULT_RULES.max_moves

    current_language: Language | None = None
    current_streak: int = 0
    total_score: int = 0

    moves: list[GameMove] = field(default_factory=list)
    used_countries: set[Country] = field(default_factory=set)
    language_usage: dict[Language, int] = field(default_factory=dict)

    def __post_init__(self):
        self.used_countries.add(self.current_country)
        if not self.moves:
            self.moves.append(GameMove.start(self.current_country))

    # Queries

    @property
    def scored_moves(self) -> int:
        """Moves made so far, excluding the starting placement."""
        return len(self.moves) - 1

    @property
    def moves_remaining(self) -> int:
        return max(0, self.max_moves - self.scored_moves)

    @property
    def has_moves_remaining(self) -> bool:
        return self.moves_remaining > 0

    def is_country_used(self, country: Country) -> bool:
        return country in self.used_countries

    def usage_of(self, language: Language) -> int:
        """How many moves have used this language."""
        return self.language_usage.get(language, 0)

    # Mutators

    def set_current_country(self, country: Country):
        """Move to a country, marking it used."""
        self.current_country = country
        self.used_countries.add(country)

    def set_current_language(self, language: Language | None):
        self.current_language = language

    def set_current_streak(self, streak: int):
        self.current_streak = streak

    def add_points(self, points: int):
        self.total_score += points

    def add_move(self, move: GameMove):
        self.moves.append(move)

    def increment_language_usage(self, language: Language):
        self.language_usage[language] = self.usage_of(language) + 1

    def set_max_moves(self, max_moves: int):
        self.max_moves = max_moves

    def snapshot(self) -> dict[str, Any]:
        """Plain-data view of the state for rendering and serialization."""
        return {
            "current_country": self.current_country.name,
            "current_country_languages": [
                lang.name for lang in self.current_country.sorted_languages()
            ],
            "current_language": (
                self.current_language.name if self.current_language else None
            ),
            "current_streak": self.current_streak,
            "total_score": self.total_score,
            "moves_remaining": self.moves_remaining,
            "max_moves": self.max_moves,
            "moves": [
                {
                    "country": move.country.name,
                    "language": move.language.name if move.language else None,
                    "points": move.points,
                }
                for move in self.moves
            ],
            "used_countries": sorted(c.name for c in self.used_countries),
            "language_usage": {
                lang.name: count
                for lang, count in sorted(
                    self.language_usage.items(), key=lambda item: item[0].key
                )
            },
        }
