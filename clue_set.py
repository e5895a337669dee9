"""
clue_set.py
===========
Ordered set of collected clue identifiers.

An unbalanced binary search tree keyed by the clue string. Inserting an id
that is already present is a no-op, so each clue is recorded at most once no
matter how many times its room is visited. In-order traversal yields the
clues in ascending order, which is the order the game lists them in.

Ordering is exact and case-sensitive with no normalisation. Python compares
``str`` by code point, which is the same order as comparing the UTF-8 bytes,
so the tree is ordered byte-wise without re-encoding every key.

No rebalancing is done: the depth grows with the number of distinct clues
in insertion order. The clue catalog is small and fixed, so the degenerate
chain case is bounded by the catalog size.

Logger name: ``detective_quest.clue_set``.
"""

from __future__ import annotations

import logging
from typing import Iterable, Iterator, List, Optional

logger = logging.getLogger("detective_quest.clue_set")


class _Node:
    __slots__ = ("key", "left", "right")

    def __init__(self, key: str) -> None:
        self.key: str = key
        self.left: Optional[_Node] = None
        self.right: Optional[_Node] = None


class InOrderView:
    """
    Restartable, lazy view over a ClueSet in ascending order.

    Every ``iter()`` starts a fresh traversal, so the same view can be listed
    repeatedly (and reflects clues inserted since it was created).
    """

    __slots__ = ("_clues",)

    def __init__(self, clues: "ClueSet") -> None:
        self._clues = clues

    def __iter__(self) -> Iterator[str]:
        return self._clues._walk()

    def __len__(self) -> int:
        return len(self._clues)

    def __repr__(self) -> str:
        return f"InOrderView({list(self)!r})"


class ClueSet:
    """
    Binary-search-tree set of clue ids.

    Public API:
        clues.contains(cid)  → bool
        clues.insert(cid)    → bool   (True only when a node was created)
        clues.in_order()     → InOrderView of ids, ascending
        len(clues), cid in clues, iter(clues)
        clues.clear()        → int    (nodes released)
    """

    def __init__(self, clues: Iterable[str] = ()) -> None:
        self._root: Optional[_Node] = None
        self._size: int = 0
        for clue in clues:
            self.insert(clue)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def contains(self, clue: str) -> bool:
        node = self._root
        while node is not None:
            if clue == node.key:
                return True
            node = node.left if clue < node.key else node.right
        return False

    __contains__ = contains

    def __len__(self) -> int:
        return self._size

    def __bool__(self) -> bool:
        return self._size > 0

    def depth(self) -> int:
        """Number of nodes on the longest root-to-leaf path (0 when empty)."""
        depth = 0
        level: List[_Node] = [self._root] if self._root else []
        while level:
            depth += 1
            level = [c for n in level for c in (n.left, n.right) if c is not None]
        return depth

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def insert(self, clue: str) -> bool:
        """
        Add `clue` if absent.

        Walks from the root the same way contains() does; on reaching an
        empty child slot a new leaf is attached there.

        Returns:
            True if a new node was created, False if the clue was already
            present (the set is left unchanged).
        """
        if self._root is None:
            self._root = _Node(clue)
            self._size = 1
            logger.debug("ClueSet: inserted %r as root.", clue)
            return True

        node = self._root
        while True:
            if clue == node.key:
                logger.debug("ClueSet: %r already present — no-op.", clue)
                return False
            if clue < node.key:
                if node.left is None:
                    node.left = _Node(clue)
                    break
                node = node.left
            else:
                if node.right is None:
                    node.right = _Node(clue)
                    break
                node = node.right

        self._size += 1
        logger.debug("ClueSet: inserted %r (size=%d).", clue, self._size)
        return True

    def clear(self) -> int:
        """
        Release every node, children before parents.

        Returns:
            Number of nodes released.
        """
        released = 0
        stack = [(self._root, False)] if self._root else []
        while stack:
            node, children_done = stack.pop()
            if children_done:
                node.left = node.right = None
                released += 1
                continue
            stack.append((node, True))
            for child in (node.right, node.left):
                if child is not None:
                    stack.append((child, False))

        self._root = None
        self._size = 0
        if released:
            logger.debug("ClueSet released — %d nodes.", released)
        return released

    # ------------------------------------------------------------------
    # Traversal
    # ------------------------------------------------------------------

    def in_order(self) -> InOrderView:
        """Clue ids in ascending order; the canonical "list collected clues"."""
        return InOrderView(self)

    def __iter__(self) -> Iterator[str]:
        return self._walk()

    def _walk(self) -> Iterator[str]:
        stack: List[_Node] = []
        node = self._root
        while stack or node is not None:
            while node is not None:
                stack.append(node)
                node = node.left
            node = stack.pop()
            yield node.key
            node = node.right

    def __repr__(self) -> str:
        return f"ClueSet({list(self._walk())!r})"
