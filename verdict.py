"""
verdict.py
==========
Deterministic, side-effect-free accusation judgment.

Counts how many collected clues implicate the accused (via the suspect
index) and applies the fixed threshold: two or more matching clues sustain
the accusation, anything less is insufficient.

Both the threshold and the comparison (exact, case-sensitive name match)
are rules of the game, not settings, which is why they are not in config.py.

Logger name: ``detective_quest.verdict``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, Optional, Tuple

from suspect_index import SuspectIndex

logger = logging.getLogger("detective_quest.verdict")


VERDICT_THRESHOLD = 2


class Verdict(str, Enum):
    SUSTAINED    = "sustained"
    INSUFFICIENT = "insufficient"


@dataclass(frozen=True)
class AccusationResult:
    """
    Final judgment on one accusation.

    Attributes:
        accused:          The name as submitted (after trimming).
        count:            Collected clues that implicate `accused`.
        verdict:          SUSTAINED when count >= VERDICT_THRESHOLD.
        supporting_clues: The matching clues, in the order they were counted.
    """

    accused:          str
    count:            int
    verdict:          Verdict
    supporting_clues: Tuple[str, ...] = ()

    @property
    def sustained(self) -> bool:
        return self.verdict is Verdict.SUSTAINED


def evaluate(
    clues: Iterable[str],
    index: SuspectIndex,
    accused: Optional[str],
) -> int:
    """
    Count the clues in `clues` whose suspect is exactly `accused`.

    Args:
        clues:   Collected clue ids (a ClueSet or any iterable). Order does not
                 affect the count.
        index:   Clue → suspect mapping.
        accused: Name to test. Empty or None always counts 0.

    Returns:
        Number of matching clues.

    Examples:
        >>> idx = SuspectIndex(); idx.upsert("a", "X"); idx.upsert("b", "X")
        >>> evaluate(["a", "b"], idx, "X")
        2
        >>> evaluate(["a", "b"], idx, "x")
        0
    """
    return len(_supporting(clues, index, accused))


def judge(count: int) -> Verdict:
    return Verdict.SUSTAINED if count >= VERDICT_THRESHOLD else Verdict.INSUFFICIENT


def accuse(
    clues: Iterable[str],
    index: SuspectIndex,
    accused: Optional[str],
) -> AccusationResult:
    """evaluate() + judge(), keeping the clues that supported the count."""
    name = accused or ""
    supporting = _supporting(clues, index, name)
    result = AccusationResult(
        accused=name,
        count=len(supporting),
        verdict=judge(len(supporting)),
        supporting_clues=supporting,
    )
    logger.info(
        "Accusation of %r — matching clues=%d, verdict=%s",
        name, result.count, result.verdict.value,
    )
    return result


def tally(clues: Iterable[str], index: SuspectIndex) -> Dict[str, int]:
    """
    Matching-clue count for every implicated suspect.

    Clues with no suspect in the index are ignored. Suspects with no collected
    clue do not appear.
    """
    counts: Dict[str, int] = {}
    for clue in clues:
        suspect = index.lookup(clue)
        if suspect is not None:
            counts[suspect] = counts.get(suspect, 0) + 1
    return counts


def _supporting(
    clues: Iterable[str],
    index: SuspectIndex,
    accused: Optional[str],
) -> Tuple[str, ...]:
    if not accused:
        return ()
    return tuple(clue for clue in clues if index.lookup(clue) == accused)
