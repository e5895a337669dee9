"""
exploration.py
==============
Navigation state machine over the mansion map.

The state is the room the player is standing in; it starts at the root.
Every time a room is entered its clue (if the catalog lists one) is checked
against the ClueSet: a new clue is inserted and the suspect it implicates is
looked up and reported; a clue already held is reported as such and nothing
changes.

Transitions:
    go_left / go_right  move to the child on that side; refused (no state
                        change) when that side has no room.
    quit                ends the session from any non-terminal room.
    <anything else>     refused, no state change; the caller re-offers the
                        same menu.

Entering a leaf ends the session immediately, before any menu is built, so
front ends never offer moves that do not exist. Closing the input stream
counts as an implicit quit.

Only the ClueSet is mutated here. RoomGraph and SuspectIndex are read-only.

Logger name: ``detective_quest.exploration``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional, Tuple

from clue_set import ClueSet
from config import GAME_CONFIG, GameConfig
from models import EndReason, Room, SessionState, VisitReport
from room_graph import RoomGraph
from suspect_index import SuspectIndex

logger = logging.getLogger("detective_quest.exploration")


ClueCatalog = Callable[[str], Optional[str]]


class Command(str, Enum):
    GO_LEFT  = "go_left"
    GO_RIGHT = "go_right"
    QUIT     = "quit"


class SessionOverError(RuntimeError):
    """A command was sent after the session had already ended."""


def parse_command(raw: Optional[str], config: GameConfig = GAME_CONFIG) -> Optional[Command]:
    """
    Map one line of player input to a Command.

    Only a single character (surrounding whitespace ignored) is accepted,
    compared case-insensitively against the configured key sets.

    Returns:
        The Command, or None when the input is not recognised.
    """
    if raw is None:
        return None
    key = raw.strip().lower()
    if len(key) != 1:
        return None
    if key in config.left_keys:
        return Command.GO_LEFT
    if key in config.right_keys:
        return Command.GO_RIGHT
    if key in config.quit_keys:
        return Command.QUIT
    return None


@dataclass(frozen=True)
class StepResult:
    """
    Outcome of handling one player command.

    Attributes:
        command:  The parsed command, or None if the input was unrecognised.
        accepted: True if the command changed the state (moved or quit).
        error:    Human-readable reason the command was refused, else None.
        report:   VisitReport for the newly entered room after a move.
        ended:    True if the session is over after this step.
    """

    command:  Optional[Command]
    accepted: bool
    error:    Optional[str] = None
    report:   Optional[VisitReport] = None
    ended:    bool = False


class ExplorationEngine:
    """
    Drives one walk through a RoomGraph, collecting clues into a ClueSet.

    Public API:
        engine.start()            → VisitReport for the root
        engine.handle(raw)        → StepResult
        engine.close_input()      → None (implicit quit)
        engine.menu()             → [(key, label, room_id), ...]
        engine.current            → Room
        engine.state              → SessionState
    """

    def __init__(
        self,
        graph: RoomGraph,
        clues: ClueSet,
        index: SuspectIndex,
        clue_for: ClueCatalog,
        config: GameConfig = GAME_CONFIG,
    ) -> None:
        self.graph    = graph
        self.clues    = clues
        self.index    = index
        self.clue_for = clue_for
        self.config   = config
        self.state    = SessionState()
        self._current: Optional[Room] = None

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    @property
    def started(self) -> bool:
        return self._current is not None

    @property
    def current(self) -> Room:
        if self._current is None:
            raise RuntimeError("Exploration has not started; call start() first.")
        return self._current

    @property
    def ended(self) -> bool:
        return self.state.ended

    def start(self) -> VisitReport:
        """Place the player at the root and visit it."""
        if self.started:
            raise RuntimeError("Exploration already started.")
        logger.info("Exploration started at %r.", self.graph.root().id)
        return self._enter(self.graph.root())

    def close_input(self) -> None:
        """The input stream failed or closed; treat it as a quit."""
        if not self.state.ended:
            logger.info(
                "Input closed in room %r — ending exploration.",
                self._current.id if self._current else None,
            )
        self.state.finish(EndReason.INPUT_CLOSED)

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def handle(self, raw: Optional[str]) -> StepResult:
        """
        Apply one line of player input.

        Raises:
            SessionOverError: if the session has already ended.
        """
        if self.state.ended:
            raise SessionOverError(
                f"Session already ended ({self.state.end_reason.value})."
            )
        room = self.current
        command = parse_command(raw, self.config)

        if command is None:
            self.state.rejected_inputs += 1
            logger.warning("Unrecognised command %r in room %r.", raw, room.id)
            return StepResult(command=None, accepted=False, error="Invalid option!")

        if command is Command.QUIT:
            self.state.finish(EndReason.QUIT)
            logger.info("Player quit in room %r after %d moves.", room.id, self.state.moves)
            return StepResult(command=command, accepted=True, ended=True)

        if command is Command.GO_LEFT:
            target, side = self.graph.left(room), "left"
        else:
            target, side = self.graph.right(room), "right"

        if target is None:
            self.state.rejected_inputs += 1
            logger.warning("No room to the %s of %r.", side, room.id)
            return StepResult(
                command=command,
                accepted=False,
                error=f"There is no room to the {side}!",
            )

        self.state.moves += 1
        report = self._enter(target)
        return StepResult(
            command=command, accepted=True, report=report, ended=report.is_leaf
        )

    def menu(self) -> List[Tuple[str, str, Optional[str]]]:
        """
        Choices available from the current room, as (key, label, room_id).

        The key shown is the first character of each configured key set.
        Empty once the session has ended, in particular at a leaf.
        """
        if self.state.ended or self._current is None:
            return []
        room = self._current
        options: List[Tuple[str, str, Optional[str]]] = []
        if room.left is not None:
            options.append((self.config.left_keys[0], "Go left", room.left.id))
        if room.right is not None:
            options.append((self.config.right_keys[0], "Go right", room.right.id))
        options.append((self.config.quit_keys[0], "Leave the exploration", None))
        return options

    # ------------------------------------------------------------------
    # Room visit
    # ------------------------------------------------------------------

    def _enter(self, room: Room) -> VisitReport:
        self._current = room
        self.state.record_visit(room.id)

        # An empty string from the catalog means the room holds no clue.
        clue = self.clue_for(room.id) or None
        newly_collected = False
        suspect: Optional[str] = None

        if clue is not None:
            if self.clues.contains(clue):
                logger.info("Room %r: clue %r already collected.", room.id, clue)
            else:
                self.clues.insert(clue)
                newly_collected = True
                suspect = self.index.lookup(clue)
                logger.info(
                    "Room %r: collected clue %r (implicates %s).",
                    room.id, clue, suspect or "nobody",
                )

        exits = tuple(
            (side, child.id)
            for side, child in (("left", room.left), ("right", room.right))
            if child is not None
        )
        if room.is_leaf:
            self.state.finish(EndReason.LEAF)
            logger.info(
                "Leaf %r reached after %d moves — exploration over.",
                room.id, self.state.moves,
            )

        return VisitReport(
            room_id=room.id,
            clue=clue,
            newly_collected=newly_collected,
            suspect=suspect,
            is_leaf=room.is_leaf,
            exits=exits,
        )
