"""
config.py
=========
Central configuration module for Detective Quest: Mansion Investigation.

All tunable constants (hash-index sizing, navigation key bindings, log level)
live here so they can be adjusted without touching the data structures or the
game engine.

The verdict threshold is deliberately NOT here: it is a fixed rule of the game
and lives next to the evaluator in verdict.py.

Usage:
    from config import GAME_CONFIG, load_config
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, replace


logger = logging.getLogger("detective_quest.config")


# ---------------------------------------------------------------------------
# Environment variable names
# ---------------------------------------------------------------------------

ENV_BUCKETS   = "DETECTIVE_QUEST_BUCKETS"
ENV_LOG_LEVEL = "DETECTIVE_QUEST_LOG_LEVEL"


# ---------------------------------------------------------------------------
# Game parameters
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class GameConfig:
    """
    Top-level settings for one investigation session.

    Attributes:
        suspect_buckets: Number of buckets in the SuspectIndex hash table.
                         Fixed for the lifetime of the index (no resizing);
                         a prime spreads the clue hashes more evenly.
        left_keys:       Single-character commands that move to the left room
                         ("e" for esquerda, "l" for left).
        right_keys:      Commands that move to the right room
                         ("d" for direita, "r" for right).
        quit_keys:       Commands that end the exploration
                         ("s" for sair, "q" for quit).
        log_level:       Logging level name used by the entry points.
    """
    suspect_buckets: int = 31
    left_keys:       str = "el"
    right_keys:      str = "dr"
    quit_keys:       str = "sq"
    log_level:       str = "INFO"


# ---------------------------------------------------------------------------
# Singleton instance (import-ready)
# ---------------------------------------------------------------------------

GAME_CONFIG = GameConfig()


def load_config(base: GameConfig = GAME_CONFIG) -> GameConfig:
    """
    Return `base` with environment overrides applied.

    Entry points call ``load_dotenv()`` before this so values from a local
    ``.env`` file are visible through ``os.environ``.

    Recognised variables:
        DETECTIVE_QUEST_BUCKETS : positive integer bucket count.
        DETECTIVE_QUEST_LOG_LEVEL : any standard logging level name.

    Invalid values are logged and ignored; the base value is kept.
    """
    overrides: dict = {}

    raw_buckets = os.environ.get(ENV_BUCKETS)
    if raw_buckets:
        try:
            buckets = int(raw_buckets)
        except ValueError:
            buckets = 0
        if buckets >= 1:
            overrides["suspect_buckets"] = buckets
        else:
            logger.warning(
                "Ignoring %s=%r — expected a positive integer.", ENV_BUCKETS, raw_buckets
            )

    raw_level = os.environ.get(ENV_LOG_LEVEL)
    if raw_level:
        level = raw_level.strip().upper()
        if isinstance(logging.getLevelName(level), int):
            overrides["log_level"] = level
        else:
            logger.warning(
                "Ignoring %s=%r — not a logging level name.", ENV_LOG_LEVEL, raw_level
            )

    return replace(base, **overrides) if overrides else base
