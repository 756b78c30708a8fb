"""
Pytest fixtures for Lingohop tests.
"""

import pytest

from ..data.repository import Repository
from ..engine_core.engine import GameEngine
from ..session import SessionManager


WORLD_PAIRS = [
    ("France", ["French"]),
    ("Belgium", ["French", "Dutch", "German"]),
    ("Switzerland", ["French", "German", "Italian", "Romansh"]),
    ("Canada", ["English", "French"]),
    ("Senegal", ["French"]),
    ("Monaco", ["French"]),
    ("Luxembourg", ["French", "German", "Luxembourgish"]),
    ("Haiti", ["French", "Haitian Creole"]),
    ("Côte d'Ivoire", ["French"]),
    ("Germany", ["German"]),
    ("Austria", ["German"]),
    ("Italy", ["Italian"]),
    ("Netherlands", ["Dutch"]),
    ("United Kingdom", ["English"]),
    ("Ireland", ["English", "Irish"]),
    ("The Bahamas", ["English"]),
    ("Trinidad and Tobago", ["English"]),
]


def make_repository(pairs) -> Repository:
    return Repository.from_pairs(pairs)


def make_engine(repository: Repository, start: str, **kwargs) -> GameEngine:
    """Engine whose game starts in a chosen country."""
    engine = GameEngine(repository, seed=kwargs.pop("seed", 1), **kwargs)
    engine.reset_game(repository.lookup_country(start))
    return engine


def wide_pairs(num_countries: int = 40, num_languages: int = 6):
    """Many countries all speaking the same handful of languages."""
    languages = [f"lang{i}" for i in range(num_languages)]
    return [(f"Country {i:02d}", languages) for i in range(num_countries)]


@pytest.fixture
def world() -> Repository:
    """Small real-world-ish repository."""
    return make_repository(WORLD_PAIRS)


@pytest.fixture
def engine(world: Repository) -> GameEngine:
    """Normal-mode engine starting in Canada (English and French)."""
    return make_engine(world, "Canada")


@pytest.fixture
def wide_engine() -> GameEngine:
    """Engine with enough countries to play a full 30-move game."""
    repository = make_repository(wide_pairs())
    return make_engine(repository, "Country 00")


@pytest.fixture
def session_manager(world: Repository) -> SessionManager:
    return SessionManager(world)


@pytest.fixture
def csv_file(tmp_path):
    """A CSV on disk with extra columns and mixed separators."""
    path = tmp_path / "countries.csv"
    path.write_text(
        "Code, COUNTRY ,language,Population\n"
        "FR,France,French,68\n"
        "BE,Belgium,French; Dutch|German,11\n"
        "CA,Canada,\"English, French\",38\n"
        "DE,Germany,German,83\n",
        encoding="utf-8",
    )
    return path
