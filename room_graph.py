"""
room_graph.py
=============
The mansion map: an immutable binary tree of rooms.

The tree is built once from a declarative layout table of
``(room_id, left_id, right_id)`` rows, so editing the map never means
touching navigation code. After construction there is no mutation API;
the exploration engine only walks it through root() / left() / right().

Logger name: ``detective_quest.room_graph``.
"""

from __future__ import annotations

import logging
from collections import deque
from typing import Dict, Iterable, Iterator, List, Optional, Sequence, Union

from models import CatalogError, Room, RoomSpec

logger = logging.getLogger("detective_quest.room_graph")


LayoutRow = Union[RoomSpec, Sequence[Optional[str]]]


class MapLayoutError(CatalogError):
    """Raised when the layout table does not describe exactly one tree."""


def _parse_row(row: LayoutRow) -> RoomSpec:
    if isinstance(row, RoomSpec):
        return row
    try:
        room_id, left, right = row
        return RoomSpec(id=room_id, left=left, right=right)
    except (TypeError, ValueError) as exc:
        # pydantic.ValidationError is a ValueError subclass.
        raise MapLayoutError(f"Invalid layout row {row!r}: {exc}") from exc


class RoomGraph:
    """
    Immutable binary tree of Room nodes with one designated root.

    Build with RoomGraph.from_layout(); the constructor expects an already
    linked root and an id index and is not meant to be called directly.
    """

    def __init__(self, root: Room, rooms: Dict[str, Room]) -> None:
        self._root: Optional[Room] = root
        self._rooms: Dict[str, Room] = rooms

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def from_layout(cls, rows: Iterable[LayoutRow], root_id: str) -> "RoomGraph":
        """
        Build the tree from a layout table.

        Args:
            rows:    (id, left, right) rows or RoomSpec instances. Children
                     are referenced by id; None means "no room on that side".
            root_id: Id of the room where exploration starts.

        Returns:
            A fully linked RoomGraph.

        Raises:
            MapLayoutError: if a row is malformed, an id is duplicated, a child
                is unknown, a room has two parents, the root is missing or has
                a parent, or some room cannot be reached from the root (which
                also covers cycles).
        """
        specs: Dict[str, RoomSpec] = {}
        for row in rows:
            spec = _parse_row(row)
            if spec.id in specs:
                raise MapLayoutError(f"Duplicate room id {spec.id!r} in layout.")
            specs[spec.id] = spec

        if root_id not in specs:
            raise MapLayoutError(f"Root room {root_id!r} is not in the layout.")

        parent_of: Dict[str, str] = {}
        for spec in specs.values():
            for child in (spec.left, spec.right):
                if child is None:
                    continue
                if child not in specs:
                    raise MapLayoutError(
                        f"Room {spec.id!r} points to unknown room {child!r}."
                    )
                if child in parent_of:
                    raise MapLayoutError(
                        f"Room {child!r} has two parents: "
                        f"{parent_of[child]!r} and {spec.id!r}."
                    )
                parent_of[child] = spec.id

        if root_id in parent_of:
            raise MapLayoutError(
                f"Root room {root_id!r} is a child of {parent_of[root_id]!r}."
            )

        # Breadth-first order from the root. With one parent per room and a
        # parentless root this walk cannot loop.
        order: List[str] = []
        queue = deque([root_id])
        while queue:
            room_id = queue.popleft()
            order.append(room_id)
            spec = specs[room_id]
            queue.extend(c for c in (spec.left, spec.right) if c is not None)

        unreachable = sorted(set(specs) - set(order))
        if unreachable:
            raise MapLayoutError(
                f"Rooms not reachable from {root_id!r} (detached or cyclic): "
                f"{unreachable}"
            )

        # Link bottom-up: reversed BFS order always builds children first.
        rooms: Dict[str, Room] = {}
        for room_id in reversed(order):
            spec = specs[room_id]
            rooms[room_id] = Room(
                id=room_id,
                left=rooms.get(spec.left) if spec.left else None,
                right=rooms.get(spec.right) if spec.right else None,
            )

        graph = cls(rooms[root_id], rooms)
        logger.info(
            "RoomGraph built — root=%r, rooms=%d, height=%d",
            root_id, len(rooms), graph.height(),
        )
        return graph

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    def root(self) -> Room:
        if self._root is None:
            raise RuntimeError("RoomGraph has been released.")
        return self._root

    @staticmethod
    def left(room: Room) -> Optional[Room]:
        return room.left

    @staticmethod
    def right(room: Room) -> Optional[Room]:
        return room.right

    @staticmethod
    def is_leaf(room: Room) -> bool:
        return room.is_leaf

    def get(self, room_id: str) -> Optional[Room]:
        return self._rooms.get(room_id)

    def __contains__(self, room_id: object) -> bool:
        return room_id in self._rooms

    def __len__(self) -> int:
        return len(self._rooms)

    def __iter__(self) -> Iterator[Room]:
        """Rooms in breadth-first order from the root."""
        if self._root is None:
            return
        queue = deque([self._root])
        while queue:
            room = queue.popleft()
            yield room
            queue.extend(c for c in (room.left, room.right) if c is not None)

    def height(self) -> int:
        """
        Number of edges on the longest root-to-leaf path.

        This bounds how many left/right moves any session can make before it
        reaches a leaf. A single-room map has height 0; a released graph -1.
        """
        if self._root is None:
            return -1
        height = -1
        level = [self._root]
        while level:
            height += 1
            level = [c for r in level for c in (r.left, r.right) if c is not None]
        return height

    # ------------------------------------------------------------------
    # Teardown
    # ------------------------------------------------------------------

    def release(self) -> int:
        """
        Drop every room, children before parents.

        Uses an explicit stack so arbitrarily deep maps never hit the
        recursion limit. Idempotent: a second call releases nothing.

        Returns:
            Number of rooms released.
        """
        if self._root is None:
            return 0

        released = 0
        stack = [(self._root, False)]
        while stack:
            room, children_done = stack.pop()
            if children_done:
                self._rooms.pop(room.id, None)
                released += 1
                continue
            stack.append((room, True))
            for child in (room.right, room.left):
                if child is not None:
                    stack.append((child, False))

        self._root = None
        self._rooms.clear()
        logger.debug("RoomGraph released — %d rooms.", released)
        return released

    @property
    def released(self) -> bool:
        return self._root is None
