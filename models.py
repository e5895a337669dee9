"""
models.py
=========
Shared data models for Detective Quest: Mansion Investigation.

Contains:
  - RoomSpec / SuspectLink : Pydantic schemas validating catalog rows before
                             any structure is built from them.
  - Room                   : Frozen dataclass node of the mansion map.
  - EndReason              : Why an exploration session stopped.
  - VisitReport            : Facts produced by entering one room.
  - SessionState           : Mutable dataclass tracking per-session progress.

Keeping these in one module guarantees a single source of truth for data
shapes used across room_graph.py, exploration.py, game_engine.py and both
front ends.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple


# ---------------------------------------------------------------------------
# Pydantic catalog schemas
# ---------------------------------------------------------------------------

from pydantic import BaseModel, ConfigDict, Field, field_validator


class CatalogError(ValueError):
    """
    Raised when configuration data (map layout, clue or suspect catalog) is
    unusable. Always fatal: the game cannot start without a valid catalog.
    """


def _not_blank(value: str) -> str:
    # Identifiers match exactly across catalogs; only blank names are refused.
    if not value.strip():
        raise ValueError("identifier must not be blank")
    return value


class RoomSpec(BaseModel):
    """
    One row of the room layout table: a room and the ids of its children.

    Fields:
        id:    Unique room label, e.g. "Hall de Entrada".
        left:  Id of the left child room, or None.
        right: Id of the right child room, or None.
    """

    model_config = ConfigDict(frozen=True)

    id:    str = Field(min_length=1)
    left:  Optional[str] = None
    right: Optional[str] = None

    @field_validator("id")
    @classmethod
    def _id_not_blank(cls, value: str) -> str:
        return _not_blank(value)

    @field_validator("left", "right", mode="before")
    @classmethod
    def _blank_is_absent(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value


class SuspectLink(BaseModel):
    """
    One (clue, suspect) association from the suspect catalog.

    Fields:
        clue:    Clue identifier exactly as it appears in the room->clue table.
        suspect: Name of the person the clue implicates.
    """

    model_config = ConfigDict(frozen=True)

    clue:    str = Field(min_length=1)
    suspect: str = Field(min_length=1)

    @field_validator("clue", "suspect")
    @classmethod
    def _ids_not_blank(cls, value: str) -> str:
        return _not_blank(value)


# ---------------------------------------------------------------------------
# Map node
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Room:
    """
    A node in the navigable mansion map.

    Rooms are created once by RoomGraph.from_layout() and never mutated.
    Each room is referenced by exactly one parent, except the root which is
    held by the graph itself.

    Attributes:
        id:    Unique room label.
        left:  Left child room, or None.
        right: Right child room, or None.
    """

    id:    str
    left:  Optional["Room"] = field(default=None, repr=False)
    right: Optional["Room"] = field(default=None, repr=False)

    @property
    def is_leaf(self) -> bool:
        """True when the room has no exits; reaching it ends the session."""
        return self.left is None and self.right is None


# ---------------------------------------------------------------------------
# Session results
# ---------------------------------------------------------------------------

class EndReason(str, Enum):
    LEAF         = "leaf"
    QUIT         = "quit"
    INPUT_CLOSED = "input_closed"


@dataclass(frozen=True)
class VisitReport:
    """
    Everything the player is told after entering a room.

    Attributes:
        room_id:           Room just entered.
        clue:              Clue catalogued for this room, or None.
        newly_collected:   True if `clue` was added to the ClueSet on this visit;
                           False if there was no clue or it was already held.
        suspect:           Suspect implicated by a newly collected clue, or None.
                           Only reported, never acted upon.
        is_leaf:           True if the room has no exits (session ends here).
        exits:             (direction, room_id) pairs for the children present,
                           in left-then-right order. Empty for a leaf.
    """

    room_id:         str
    clue:            Optional[str] = None
    newly_collected: bool = False
    suspect:         Optional[str] = None
    is_leaf:         bool = False
    exits:           Tuple[Tuple[str, str], ...] = ()

    @property
    def already_collected(self) -> bool:
        return self.clue is not None and not self.newly_collected


@dataclass
class SessionState:
    """
    Mutable snapshot of the player's progress through the mansion.

    This object is owned by ExplorationEngine and mutated in place as the
    player moves. Front ends read it for status displays.

    Attributes:
        path:            Room ids visited, in order, starting with the root.
        moves:           Number of accepted left/right transitions.
        rejected_inputs: Number of commands refused (unknown key, missing room).
        ended:           True once a leaf is reached, the player quits, or the
                         input stream closes.
        end_reason:      Why the session ended, or None while it is running.
    """

    path:            List[str] = field(default_factory=list)
    moves:           int = 0
    rejected_inputs: int = 0
    ended:           bool = False
    end_reason:      Optional[EndReason] = None

    def record_visit(self, room_id: str) -> None:
        self.path.append(room_id)

    def finish(self, reason: EndReason) -> None:
        """Mark the session as over. The first recorded reason wins."""
        if not self.ended:
            self.ended      = True
            self.end_reason = reason

    def reset(self) -> None:
        """Reset all mutable fields to their initial values for a new run."""
        self.path            = []
        self.moves           = 0
        self.rejected_inputs = 0
        self.ended           = False
        self.end_reason      = None
