"""
Tests for CSV ingestion.
"""

import pytest

from ..data.loader import DataConfigError, load_repository, load_rows, split_languages


class TestSplitLanguages:
    def test_all_separators(self):
        assert split_languages("French, Dutch;German|Luxembourgish") == [
            "french", "dutch", "german", "luxembourgish",
        ]

    def test_blank_parts_dropped(self):
        assert split_languages(" ,;| ") == []
        assert split_languages("") == []


class TestLoadRows:
    """Tests for building a repository from CSV rows."""

    def test_headers_matched_case_insensitively(self):
        repo = load_rows([
            [" country ", "LANGUAGE"],
            ["France", "French"],
        ])
        assert repo.lookup_country("France") is not None

    def test_missing_language_column_is_fatal(self):
        with pytest.raises(DataConfigError, match="Country.*Language"):
            load_rows([["Country", "Languages"], ["France", "French"]])

    def test_missing_country_column_is_fatal(self):
        with pytest.raises(DataConfigError):
            load_rows([["Nation", "Language"], ["France", "French"]])

    def test_empty_input_is_fatal(self):
        with pytest.raises(DataConfigError):
            load_rows([])

    def test_config_error_is_value_error(self):
        assert issubclass(DataConfigError, ValueError)

    def test_bad_rows_skipped(self, caplog):
        repo = load_rows([
            ["Country", "Language"],
            ["", "French"],
            ["Short"],
            ["", ""],
            ["France", "French"],
        ])
        assert len(repo) == 1
        assert "no country" in caplog.text
        assert "short row" in caplog.text


class TestLoadRepository:
    """Tests for reading a CSV file from disk."""

    def test_load_file(self, csv_file):
        repo = load_repository(csv_file)

        assert len(repo) == 4
        belgium = repo.lookup_country("Belgium")
        assert {lang.name for lang in belgium.languages} == {"french", "dutch", "german"}
        canada = repo.lookup_country("Canada")
        assert {lang.name for lang in canada.languages} == {"english", "french"}

    def test_scores_follow_frequency(self, csv_file):
        repo = load_repository(csv_file)

        assert repo.lookup_language("french").rarity_score == 3  # 3 countries
        assert repo.lookup_language("german").rarity_score == 4  # 2 countries
        assert repo.lookup_language("english").rarity_score == 5  # 1 country

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_repository(tmp_path / "nope.csv")

    def test_byte_order_mark_ignored(self, tmp_path):
        path = tmp_path / "bom.csv"
        path.write_text("\ufeffCountry,Language\nFrance,French\n", encoding="utf-8")
        assert load_repository(path).lookup_country("France") is not None
