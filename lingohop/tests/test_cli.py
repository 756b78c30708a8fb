"""
Tests for the command-line interface.
"""

import io

import pytest

from ..cli import ConsoleObserver, format_state, main, run_loop


class TestRunLoop:
    """Tests for console play."""

    def test_play_commands(self, engine):
        out = io.StringIO()

        state = run_loop(
            engine,
            ["lang french", "go France", "go Belgium", "status", "quit", "go Senegal"],
            out=out,
        )

        text = out.getvalue()
        assert "Selected french." in text
        assert "Streak continued with french. +2 points" in text
        assert "Country: Belgium" in text
        assert state.total_score == 3
        # Commands after quit are ignored
        assert state.current_country.name == "Belgium"
        assert text.rstrip().endswith("Final score: 3")

    def test_errors_are_printed(self, engine):
        out = io.StringIO()

        run_loop(engine, ["go France", "lang elvish", "dance", ""], out=out)

        text = out.getvalue()
        assert "No language selected" in text
        assert "Language not found: elvish" in text
        assert "Unknown command: dance" in text

    def test_mode_and_reset(self, engine):
        out = io.StringIO()

        run_loop(engine, ["mode hard", "reset"], out=out)

        assert engine.hard_mode
        assert "Mode set to hard" in out.getvalue()
        assert "Mode: hard" in format_state(engine)

    def test_console_observer(self, engine):
        out = io.StringIO()
        engine.add_observer(ConsoleObserver(out=out))

        run_loop(engine, ["lang french", "go France"], out=io.StringIO())

        assert out.getvalue().splitlines() == ["-> Now in Canada", "-> Now in France"]


class TestMain:
    """Tests for the argparse entry point."""

    def test_languages_command(self, csv_file, capsys):
        main(["languages", str(csv_file)])

        lines = capsys.readouterr().out.splitlines()
        scores = [int(line.split()[1]) for line in lines]
        assert scores == sorted(scores, reverse=True)
        assert lines[0].startswith("dutch")
        assert "(3 countries)" in lines[-1]

    def test_missing_file_exits(self, tmp_path, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["languages", str(tmp_path / "missing.csv")])

        assert exc_info.value.code == 1
        assert "File not found" in capsys.readouterr().out

    def test_bad_columns_exit(self, tmp_path, capsys):
        path = tmp_path / "bad.csv"
        path.write_text("Nation,Tongue\nFrance,French\n", encoding="utf-8")

        with pytest.raises(SystemExit):
            main(["languages", str(path)])
        assert "Country" in capsys.readouterr().out

    def test_no_command_prints_help(self):
        with pytest.raises(SystemExit):
            main([])
