"""
game_engine.py
==============
Core game engine for Detective Quest: Mansion Investigation.

Contains:
  DetectiveQuestGame: the single orchestrating class that builds and owns
                      the RoomGraph, ClueSet and SuspectIndex for one
                      session and exposes a clean API consumed by both the
                      Streamlit UI (app.py) and the CLI runner (cli.py).

Public API summary:
    game = DetectiveQuestGame()
    game.start()               → VisitReport for the entrance hall
    game.handle(raw)           → StepResult
    game.close_input()         → None (input failure == implicit quit)
    game.menu()                → [(key, label, room_id), ...]
    game.collected_clues()     → [clue, ...] ascending
    game.accuse(raw_line)      → AccusationResult | None
    game.reset()               → None
    game.close()               → None (releases all three structures once)

The game is also a context manager; ``with DetectiveQuestGame() as game:``
guarantees close() runs on every exit path.

Logging
-------
Every significant event is emitted through the standard ``logging`` module.
Configure the level and destination once at your entry point, e.g.:

    import logging
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

The logger name for this module is ``detective_quest.game_engine``.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Mapping, Optional, Tuple, Union

from case_data import CASE_FILE, ROOM_CLUES, ROOM_LAYOUT, ROOT_ROOM, SUSPECT_LINKS
from clue_set import ClueSet
from config import GAME_CONFIG, GameConfig
from exploration import ClueCatalog, ExplorationEngine, StepResult
from models import CatalogError, SessionState, VisitReport
from room_graph import LayoutRow, RoomGraph
from suspect_index import LinkRow, SuspectIndex
from verdict import AccusationResult, accuse, tally

logger = logging.getLogger("detective_quest.game_engine")


def _as_catalog(clues: Union[Mapping[str, str], ClueCatalog]) -> ClueCatalog:
    """Accept either a room→clue mapping or a ready-made lookup function."""
    if callable(clues):
        return clues
    for room_id, clue in clues.items():
        if not isinstance(clue, str) or not clue.strip():
            raise CatalogError(f"Room {room_id!r} has an empty clue in the catalog.")
    return clues.get


class DetectiveQuestGame:
    """
    Main game engine.

    Owns the three session structures and the ExplorationEngine that walks
    them. Front ends interact with this class exclusively.

    Attributes:
        config:     The GameConfig in effect.
        graph:      RoomGraph built from the layout table.
        clues:      ClueSet of clues collected this session.
        index:      SuspectIndex loaded from the suspect catalog.
        engine:     ExplorationEngine for the current walk.
        accusation: Result of the last accusation, or None.
    """

    def __init__(
        self,
        layout: Iterable[LayoutRow] = ROOM_LAYOUT,
        root_id: str = ROOT_ROOM,
        room_clues: Union[Mapping[str, str], ClueCatalog] = ROOM_CLUES,
        suspect_links: Iterable[LinkRow] = SUSPECT_LINKS,
        config: GameConfig = GAME_CONFIG,
    ) -> None:
        self.config = config
        self._closed = False
        self.accusation: Optional[AccusationResult] = None

        self._clue_for = _as_catalog(room_clues)
        self.graph = RoomGraph.from_layout(layout, root_id)
        try:
            self.index = SuspectIndex.from_links(suspect_links, config.suspect_buckets)
        except BaseException:
            # No partial state survives a failed build.
            self.graph.release()
            raise
        self.clues = ClueSet()

        if isinstance(room_clues, Mapping):
            self._check_catalog_consistency(room_clues)

        self.engine = self._new_engine()
        logger.info(
            "DetectiveQuestGame initialised — case_id=%s, rooms=%d, suspect links=%d",
            CASE_FILE.get("case_id", "unknown"),
            len(self.graph),
            len(self.index),
        )

    def _new_engine(self) -> ExplorationEngine:
        return ExplorationEngine(
            self.graph, self.clues, self.index, self._clue_for, self.config
        )

    def _check_catalog_consistency(self, room_clues: Mapping[str, str]) -> None:
        """Warn about catalog rows that can never matter during play."""
        for room_id, clue in room_clues.items():
            if room_id not in self.graph:
                logger.warning("Clue catalog names unknown room %r.", room_id)
            elif clue not in self.index:
                logger.warning(
                    "Clue %r in room %r implicates no suspect.", clue, room_id
                )

    # ------------------------------------------------------------------
    # Exploration
    # ------------------------------------------------------------------

    @property
    def state(self) -> SessionState:
        return self.engine.state

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def ended(self) -> bool:
        return self.engine.ended

    def _ensure_open(self) -> None:
        if self._closed:
            raise RuntimeError("DetectiveQuestGame is closed.")

    def start(self) -> VisitReport:
        self._ensure_open()
        return self.engine.start()

    def handle(self, raw: Optional[str]) -> StepResult:
        self._ensure_open()
        return self.engine.handle(raw)

    def close_input(self) -> None:
        self.engine.close_input()

    def menu(self) -> List[Tuple[str, str, Optional[str]]]:
        if self._closed:
            return []
        return self.engine.menu()

    def collected_clues(self) -> List[str]:
        """Clues collected so far, in ascending order."""
        return list(self.clues.in_order())

    def suspect_tally(self) -> Dict[str, int]:
        """Per-suspect count of collected clues, for the final report."""
        return tally(self.clues.in_order(), self.index)

    # ------------------------------------------------------------------
    # Accusation
    # ------------------------------------------------------------------

    def accuse(self, raw_line: Optional[str]) -> Optional[AccusationResult]:
        """
        Judge an accusation typed by the player.

        Surrounding whitespace and line terminators are trimmed first. An
        empty line means no judgment was requested: nothing is evaluated and
        None is returned.

        Returns:
            AccusationResult, or None for an empty accusation.
        """
        self._ensure_open()
        accused = (raw_line or "").strip()
        if not accused:
            logger.info("Empty accusation — no judgment requested.")
            return None

        if not self.engine.ended:
            logger.warning(
                "Accusation made before the exploration ended (room %r).",
                self.engine.current.id if self.engine.started else None,
            )

        self.accusation = accuse(self.clues.in_order(), self.index, accused)
        return self.accusation

    # ------------------------------------------------------------------
    # Reset / teardown
    # ------------------------------------------------------------------

    def reset(self) -> None:
        """
        Start a fresh walk on the same map.

        Clears the collected clues, the session state and the last accusation.
        The map and the suspect index are read-only during play and are kept.
        """
        self._ensure_open()
        logger.info("Game reset requested — clearing collected clues.")
        self.clues.clear()
        self.accusation = None
        self.engine = self._new_engine()

    def close(self) -> None:
        """Release graph, clue set and index. Safe to call more than once."""
        if self._closed:
            return
        self._closed = True
        if self.engine.started and not self.engine.ended:
            self.engine.close_input()
        rooms   = self.graph.release()
        nodes   = self.clues.clear()
        entries = self.index.clear()
        logger.info(
            "Session resources released — rooms=%d, clue nodes=%d, index entries=%d",
            rooms, nodes, entries,
        )

    def __enter__(self) -> "DetectiveQuestGame":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
