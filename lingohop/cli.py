"""
Lingohop CLI - Command-line interface for the engine.

Usage:
    lingohop play <data_file>          Play in the console
    lingohop languages <data_file>     Show languages and rarity scores
    lingohop serve <data_file>         Run the REST API
"""

import argparse
import logging
import sys

from .engine_core import GameEngine, GameObserver, GameState
from .config import DEFAULT_RULES

PLAY_HELP = """Commands:
  lang <language>   select a language spoken here
  go <country>      move to a country with the selected language
  status            show the current position
  mode hard|normal  switch difficulty
  reset             start a new game
  help              show this help
  quit              leave the game"""


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Lingohop - hop between countries by shared language",
        prog="lingohop",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Play command
    play_parser = subparsers.add_parser("play", help="Play in the console")
    play_parser.add_argument("data_file", help="CSV with Country and Language columns")
    play_parser.add_argument("--hard", action="store_true", help="4 uses per language instead of 7")
    play_parser.add_argument("--seed", type=int, default=None, help="Random seed")
    play_parser.add_argument(
        "--max-moves", type=int, default=DEFAULT_RULES.max_moves, help="Move budget"
    )

    # Languages command
    languages_parser = subparsers.add_parser("languages", help="Show rarity scores")
    languages_parser.add_argument("data_file", help="CSV with Country and Language columns")

    # Serve command
    serve_parser = subparsers.add_parser("serve", help="Run the REST API")
    serve_parser.add_argument("data_file", help="CSV with Country and Language columns")
    serve_parser.add_argument("--host", default="127.0.0.1")
    serve_parser.add_argument("--port", type=int, default=8000)

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "play":
        cmd_play(args)
    elif args.command == "languages":
        cmd_languages(args)
    elif args.command == "serve":
        cmd_serve(args)
    else:
        parser.print_help()
        sys.exit(1)


def _load(data_file):
    """Load the dataset or exit with a message."""
    from .data import DataConfigError, load_repository

    try:
        return load_repository(data_file)
    except FileNotFoundError:
        print(f"Error: File not found: {data_file}")
        sys.exit(1)
    except DataConfigError as e:
        print(f"Error: {e}")
        sys.exit(1)


def cmd_play(args):
    """Play an interactive game."""
    repository = _load(args.data_file)
    engine = GameEngine(
        repository,
        rules=DEFAULT_RULES.with_max_moves(args.max_moves),
        hard_mode=args.hard,
        seed=args.seed,
    )
    engine.add_observer(ConsoleObserver())

    print("Welcome to Lingohop!")
    print(PLAY_HELP)
    print()
    print(format_state(engine))
    run_loop(engine, _prompt_lines())


def cmd_languages(args):
    """Print languages ordered by rarity."""
    repository = _load(args.data_file)
    languages = sorted(repository.languages, key=lambda lang: (-lang.rarity_score, lang.key))
    for lang in languages:
        count = len(repository.countries_speaking(lang))
        print(f"{lang.name:<30} {lang.rarity_score:>3} pts  ({count} countries)")


def cmd_serve(args):
    """Run the REST API with uvicorn."""
    import uvicorn
    from .api import APIService, create_app
    from .session import SessionManager

    repository = _load(args.data_file)
    app = create_app(service=APIService(SessionManager(repository)))
    uvicorn.run(app, host=args.host, port=args.port)


# =============================================================================
# Console play
# =============================================================================

class ConsoleObserver(GameObserver):
    """Prints a short status line whenever the position changes."""

    def __init__(self, out=None):
        self.out = out
        self._last_country = None

    def on_game_state_changed(self, state: GameState):
        if state.current_country != self._last_country:
            self._last_country = state.current_country
            print(f"-> Now in {state.current_country.name}", file=self.out or sys.stdout)


def format_state(engine: GameEngine) -> str:
    """Multi-line summary of the current position."""
    state = engine.get_game_state()
    mode = "hard" if engine.hard_mode else "normal"
    available = ", ".join(
        f"{lang.name} ({lang.rarity_score})" for lang in engine.available_languages()
    )
    language = state.current_language.name if state.current_language else "none"
    return "\n".join([
        f"Country: {state.current_country.name}",
        f"Languages: {available or 'none left'}",
        f"Selected: {language}  Streak: {state.current_streak}",
        f"Score: {state.total_score}  Moves remaining: "
        f"{state.moves_remaining} of {state.max_moves}  Mode: {mode}",
    ])


def _prompt_lines():
    while True:
        try:
            yield input("> ")
        except EOFError:
            return


def run_loop(engine: GameEngine, lines, out=None):
    """
    Drive the engine from text commands until quit or input runs out.

    Returns the final game state.
    """
    out = out or sys.stdout

    for line in lines:
        command, _, arg = line.strip().partition(" ")
        command = command.lower()
        arg = arg.strip()

        if not command:
            continue
        if command in ("quit", "exit"):
            break
        elif command == "help":
            print(PLAY_HELP, file=out)
        elif command == "status":
            print(format_state(engine), file=out)
        elif command == "reset":
            engine.reset_game()
            print(format_state(engine), file=out)
        elif command == "mode" and arg.lower() in ("hard", "normal"):
            engine.set_hard_mode(arg.lower() == "hard")
            print(f"Mode set to {arg.lower()}", file=out)
        elif command == "lang" and arg:
            print(engine.select_language_by_name(arg).message, file=out)
        elif command == "go" and arg:
            print(engine.move_to(arg).message, file=out)
        else:
            print(f"Unknown command: {line.strip()}. Type 'help'.", file=out)

    state = engine.get_game_state()
    print(f"Final score: {state.total_score}", file=out)
    return state


if __name__ == "__main__":
    main()
