"""
Tests for the repository (scoring and lookups).
"""

import pytest

from ..data.repository import Repository, normalize_name, rarity_score


class TestRarityScore:
    """Tests for the rarity formula."""

    @pytest.mark.parametrize(
        "frequency, expected",
        [(1, 5), (2, 4), (3, 3), (4, 2), (5, 2), (9, 1), (50, 1)],
    )
    def test_formula(self, frequency, expected):
        assert rarity_score(frequency) == expected

    def test_scores_from_ingestion(self, world):
        """One speaker scores 5, nine speakers score 1."""
        assert world.lookup_language("romansh").rarity_score == 5
        assert world.lookup_language("french").rarity_score == 1
        assert world.lookup_language("dutch").rarity_score == 4
        assert world.lookup_language("english").rarity_score == 2


class TestFromPairs:
    """Tests for building a repository from raw pairs."""

    def test_languages_lowercased(self, world):
        assert {lang.name for lang in world.languages} >= {"french", "haitian creole"}

    def test_duplicates_within_row_counted_once(self):
        repo = Repository.from_pairs([("France", ["French", "french", " FRENCH "])])
        assert repo.lookup_language("french").rarity_score == 5

    def test_casefold_spellings_share_frequency(self):
        repo = Repository.from_pairs([
            ("A", ["Straße"]),
            ("B", ["STRASSE"]),
            ("C", ["x"]),
        ])
        language = repo.lookup_language("strasse")

        assert len(repo.languages) == 2
        assert language.name == "straße"
        assert language.rarity_score == rarity_score(2) == 4
        assert language in repo.lookup_country("B").languages

    def test_blank_language_names_ignored(self):
        repo = Repository.from_pairs([("Nowhere", ["", "  "]), ("France", ["French"])])
        assert repo.lookup_country("Nowhere").languages == frozenset()
        assert len(repo.languages) == 1

    def test_repeated_country_keeps_last_row(self):
        repo = Repository.from_pairs([
            ("France", ["French"]),
            ("france", ["French", "Occitan"]),
        ])
        assert len(repo) == 1
        assert repo.lookup_country("France").has_language(repo.lookup_language("occitan"))
        # Both rows count toward frequency
        assert repo.lookup_language("french").rarity_score == rarity_score(2)

    def test_countries_share_language_instances(self, world):
        french = world.lookup_language("french")
        assert french in world.lookup_country("Belgium").languages
        assert len(world.countries_speaking(french)) == 9


class TestLookups:
    """Tests for exact and flexible lookups."""

    def test_exact_lookup_ignores_case(self, world):
        assert world.lookup_country("BELGIUM").name == "Belgium"
        assert world.lookup_language("FrEnCh").name == "french"

    def test_missing_returns_none(self, world):
        assert world.lookup_country("Atlantis") is None
        assert world.lookup_language("Elvish") is None
        assert world.lookup_country_flexible("Atlantis") is None

    def test_exact_lookup_is_strict(self, world):
        assert world.lookup_country("Bahamas") is None

    @pytest.mark.parametrize(
        "typed, expected",
        [
            ("  belgium ", "Belgium"),
            ("Bahamas", "The Bahamas"),
            ("the bahamas.", "The Bahamas"),
            ("Cote d'Ivoire", "Côte d'Ivoire"),
            ("cote divoire", "Côte d'Ivoire"),
            ("Trinidad & Tobago", "Trinidad and Tobago"),
            ("united   kingdom", "United Kingdom"),
        ],
    )
    def test_flexible_lookup(self, world, typed, expected):
        assert world.lookup_country_flexible(typed).name == expected

    def test_contains_and_len(self, world):
        assert "France" in world
        assert "Atlantis" not in world
        assert len(world) == 17


class TestNormalizeName:
    def test_normalize(self):
        assert normalize_name("  Côte d'Ivoire ") == "cote divoire"
        assert normalize_name("The Gambia") == "gambia"
        assert normalize_name("Bosnia & Herzegovina") == "bosnia and herzegovina"
