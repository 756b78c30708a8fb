"""
Lingohop - Country/Language Streak Game Engine

A turn-based word-association game: hop between countries by naming a
language they share, and build streaks in one language for bigger scores.
The package provides:
- Country/language data ingestion with rarity scoring
- The move-resolution state machine
- In-memory sessions
- A REST API and a console client
"""

__version__ = "0.1.0"
