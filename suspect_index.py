"""
suspect_index.py
================
Hash index from clue id to the suspect that clue implicates.

A fixed-size array of buckets with separate chaining: each bucket holds a
singly linked list of entries, newest insertion at the head. The bucket
count is chosen at construction and never changes; the suspect catalog is
small and known up front, so there is no resizing.

Each clue maps to at most one suspect. upsert() on an existing clue
overwrites the suspect in place; it never adds a second entry. Overwrites
are silent to callers (there is no "new vs corrected" signal) and only
show up in DEBUG logs.

Logger name: ``detective_quest.suspect_index``.
"""

from __future__ import annotations

import logging
from typing import Iterable, Iterator, List, Optional, Tuple, Union

from models import CatalogError, SuspectLink

logger = logging.getLogger("detective_quest.suspect_index")


DEFAULT_BUCKETS = 31

LinkRow = Union[SuspectLink, Tuple[str, str]]


def string_hash(text: str) -> int:
    """
    djb2 over the UTF-8 bytes: ``h = h * 33 + byte``, kept to 32 bits.

    Deterministic across runs (unlike the built-in ``hash()`` for str, which
    is salted per process), so bucket placement is reproducible in tests.
    """
    h = 5381
    for byte in text.encode("utf-8"):
        h = ((h << 5) + h + byte) & 0xFFFFFFFF
    return h


class _Entry:
    __slots__ = ("clue", "suspect", "next")

    def __init__(self, clue: str, suspect: str, next_entry: Optional["_Entry"]) -> None:
        self.clue = clue
        self.suspect = suspect
        self.next = next_entry


class SuspectIndex:
    """
    Chained hash map: clue id → suspect name.

    Public API:
        index.upsert(clue, suspect)   → None
        index.lookup(clue)            → suspect | None
        len(index), clue in index
        index.suspects()              → sorted distinct suspect names
        index.clear()                 → int (entries released)
    """

    def __init__(self, bucket_count: int = DEFAULT_BUCKETS) -> None:
        if bucket_count < 1:
            raise ValueError(f"bucket_count must be >= 1, got {bucket_count}")
        self._buckets: List[Optional[_Entry]] = [None] * bucket_count
        self._size = 0

    @classmethod
    def from_links(
        cls,
        links: Iterable[LinkRow],
        bucket_count: int = DEFAULT_BUCKETS,
    ) -> "SuspectIndex":
        """
        Build an index from the suspect catalog, loading each pair via upsert().

        Later pairs for the same clue overwrite earlier ones.

        Raises:
            CatalogError: if a row is not a valid (clue, suspect) pair.
        """
        index = cls(bucket_count)
        for row in links:
            if not isinstance(row, SuspectLink):
                try:
                    clue, suspect = row
                    row = SuspectLink(clue=clue, suspect=suspect)
                except (TypeError, ValueError) as exc:
                    raise CatalogError(f"Invalid suspect link {row!r}: {exc}") from exc
            index.upsert(row.clue, row.suspect)

        logger.info(
            "SuspectIndex loaded — entries=%d, buckets=%d, longest_chain=%d",
            len(index), index.bucket_count, index.longest_chain(),
        )
        return index

    # ------------------------------------------------------------------
    # Core operations
    # ------------------------------------------------------------------

    def _bucket_of(self, clue: str) -> int:
        return string_hash(clue) % len(self._buckets)

    def upsert(self, clue: str, suspect: str) -> None:
        """
        Associate `clue` with `suspect`.

        Scans the clue's bucket first; an existing entry gets its suspect
        replaced in place. Otherwise a new entry is prepended to the chain.
        """
        slot = self._bucket_of(clue)
        entry = self._buckets[slot]
        while entry is not None:
            if entry.clue == clue:
                if entry.suspect != suspect:
                    logger.debug(
                        "SuspectIndex: %r re-associated %r -> %r.",
                        clue, entry.suspect, suspect,
                    )
                entry.suspect = suspect
                return
            entry = entry.next

        self._buckets[slot] = _Entry(clue, suspect, self._buckets[slot])
        self._size += 1

    def lookup(self, clue: str) -> Optional[str]:
        """Return the suspect implicated by `clue`, or None if unmapped."""
        entry = self._buckets[self._bucket_of(clue)]
        while entry is not None:
            if entry.clue == clue:
                return entry.suspect
            entry = entry.next
        return None

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    @property
    def bucket_count(self) -> int:
        return len(self._buckets)

    def __len__(self) -> int:
        return self._size

    def __contains__(self, clue: object) -> bool:
        return isinstance(clue, str) and self._find(clue) is not None

    def _find(self, clue: str) -> Optional[_Entry]:
        entry = self._buckets[self._bucket_of(clue)]
        while entry is not None and entry.clue != clue:
            entry = entry.next
        return entry

    def chain(self, slot: int) -> List[str]:
        """Clue ids stored in bucket `slot`, head first."""
        out: List[str] = []
        entry = self._buckets[slot]
        while entry is not None:
            out.append(entry.clue)
            entry = entry.next
        return out

    def longest_chain(self) -> int:
        return max((len(self.chain(i)) for i in range(len(self._buckets))), default=0)

    def items(self) -> Iterator[Tuple[str, str]]:
        """(clue, suspect) pairs in bucket order. No ordering guarantee."""
        for head in self._buckets:
            entry = head
            while entry is not None:
                yield entry.clue, entry.suspect
                entry = entry.next

    def suspects(self) -> List[str]:
        return sorted({suspect for _, suspect in self.items()})

    # ------------------------------------------------------------------
    # Teardown
    # ------------------------------------------------------------------

    def clear(self) -> int:
        """Unlink every chain. Returns the number of entries released."""
        released = 0
        for slot, head in enumerate(self._buckets):
            entry = head
            while entry is not None:
                nxt, entry.next = entry.next, None
                entry = nxt
                released += 1
            self._buckets[slot] = None
        self._size = 0
        if released:
            logger.debug("SuspectIndex released — %d entries.", released)
        return released
