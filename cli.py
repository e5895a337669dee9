"""
cli.py
======
Command-line interface for Detective Quest: Mansion Investigation.

Provides the text-based game loop. All game logic is delegated to
DetectiveQuestGame; this module only handles I/O.

Usage:
    python cli.py
    detective-quest            (after `pip install -e .`)

Commands during play (single character, case-insensitive):
    e / l   : go to the room on the left
    d / r   : go to the room on the right
    s / q   : leave the exploration

When the exploration ends you are asked to name the culprit. Leave the line
empty to skip the judgment.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

from dotenv import load_dotenv

from case_data import CASE_FILE
from config import GAME_CONFIG, GameConfig, load_config
from game_engine import DetectiveQuestGame
from models import CatalogError, EndReason
from ui_helpers import (
    describe_clues,
    describe_end,
    describe_menu,
    describe_verdict,
    describe_visit,
)

logger = logging.getLogger("detective_quest.cli")


def _print_lines(lines) -> None:
    for line in lines:
        print(line)


def _read(prompt: str) -> Optional[str]:
    """One line of input, or None when the stream is closed or interrupted."""
    try:
        return input(prompt)
    except (EOFError, KeyboardInterrupt):
        print()
        return None


def run_cli(config: GameConfig = GAME_CONFIG) -> int:
    """
    Main CLI game loop.

    Prints the case briefing, walks the mansion until a leaf is reached, the
    player quits, or input runs out, lists the collected clues in ascending
    order, then asks for the accusation and prints the verdict.

    Returns:
        Process exit status. Always 0; fatal errors propagate to main().
    """
    with DetectiveQuestGame(config=config) as game:
        # --- Case briefing banner ---
        print("\n" + "=" * 60)
        print(f"   {CASE_FILE['title'].upper()}")
        print("=" * 60)
        print(CASE_FILE["summary"])
        print("-" * 60)

        print()
        _print_lines(describe_visit(game.start()))

        while not game.ended:
            print()
            _print_lines(describe_menu(game.menu()))
            raw = _read("Choice: ")
            if raw is None:
                game.close_input()
                print(describe_end(EndReason.INPUT_CLOSED))
                break

            result = game.handle(raw)
            if result.error:
                print(result.error)
                continue
            if result.report is not None:
                print()
                _print_lines(describe_visit(result.report))
            elif result.ended:
                print(describe_end(game.state.end_reason))

        print()
        _print_lines(describe_clues(game.collected_clues()))

        if game.state.end_reason is EndReason.INPUT_CLOSED:
            line = None
        else:
            print()
            line = _read("Who is the culprit? ")

        accusation = game.accuse(line)
        print()
        if accusation is None:
            print("No accusation made. The case stays open.")
        else:
            _print_lines(describe_verdict(accusation, game.suspect_tally()))

    return 0


def main() -> int:
    """
    Console entry point.

    Loads ``.env``, applies environment overrides, configures logging, then
    runs the game. Invalid catalogs and allocation failures are fatal and
    yield exit status 1.
    """
    load_dotenv()
    config = load_config()

    # Configure logging at the entry point so all detective_quest.* loggers
    # emit to stderr at the configured level. Swap the handler here to
    # redirect logs without touching any other module.
    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    try:
        return run_cli(config)
    except (CatalogError, MemoryError) as exc:
        logger.error("Fatal error while setting up the mansion: %s", exc, exc_info=True)
        print(f"Error: the game cannot start ({exc.__class__.__name__}).")
        return 1


if __name__ == "__main__":
    sys.exit(main())
