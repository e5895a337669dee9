"""
ui_helpers.py
=============
Stateless presentation helpers shared by the CLI and the Streamlit UI.

These functions turn engine results into display text but carry no game
state of their own; they receive everything as arguments. Keeping them
separate from cli.py and app.py means both front ends report the same facts
and the wording can be tested without a terminal or a Streamlit session.

Contains:
  - describe_visit()   : VisitReport → lines of status text
  - describe_menu()    : menu tuples → lines of choices
  - describe_clues()   : ascending clue list → lines
  - describe_verdict() : AccusationResult → lines
  - build_css()        : returns the dark-noir CSS string for app.py
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from models import EndReason, VisitReport
from verdict import VERDICT_THRESHOLD, AccusationResult


# ---------------------------------------------------------------------------
# Exploration text
# ---------------------------------------------------------------------------

_END_MESSAGES: Dict[EndReason, str] = {
    EndReason.LEAF:         "No more paths to follow. Exploration over!",
    EndReason.QUIT:         "Leaving the exploration...",
    EndReason.INPUT_CLOSED: "Input closed. Leaving the exploration...",
}


def describe_visit(report: VisitReport) -> List[str]:
    """
    Status lines for a room the player just entered.

    Reports the room, whether a clue was found or had already been
    collected, the suspect a new clue implicates and, for a leaf, that
    the exploration is over.
    """
    lines = [f"You are in: **{report.room_id}**"]
    if report.clue is None:
        lines.append("Nothing of interest here.")
    elif report.newly_collected:
        lines.append(f"Clue found: \"{report.clue}\"")
        if report.suspect:
            lines.append(f"  This clue points to: {report.suspect}")
        else:
            lines.append("  This clue does not point to anyone yet.")
    else:
        lines.append(f"Clue \"{report.clue}\" was already collected.")
    if report.is_leaf:
        lines.append(_END_MESSAGES[EndReason.LEAF])
    return lines


def describe_end(reason: Optional[EndReason]) -> str:
    if reason is None:
        return ""
    return _END_MESSAGES[reason]


def describe_menu(options: Sequence[Tuple[str, str, Optional[str]]]) -> List[str]:
    """One line per choice, e.g. `` e - Go left (Sala de Estar)``."""
    lines = ["Where do you want to go?"]
    for key, label, room_id in options:
        suffix = f" ({room_id})" if room_id else ""
        lines.append(f" {key} - {label}{suffix}")
    return lines


def describe_clues(clues: Iterable[str]) -> List[str]:
    items = [f"  - {clue}" for clue in clues]
    if not items:
        return ["No clues were collected."]
    return [f"Collected clues ({len(items)}):"] + items


def describe_verdict(
    result: AccusationResult,
    counts: Optional[Dict[str, int]] = None,
) -> List[str]:
    """
    Final report for an accusation: matching-clue count and verdict.

    Args:
        result: Output of DetectiveQuestGame.accuse().
        counts: Optional per-suspect tally, appended as an evidence summary.
    """
    lines = [
        f"Accused: {result.accused}",
        f"Clues pointing to {result.accused}: {result.count}",
    ]
    for clue in result.supporting_clues:
        lines.append(f"  - {clue}")
    if result.sustained:
        lines.append(
            f"Accusation SUSTAINED — at least {VERDICT_THRESHOLD} clues "
            "support it. Case closed!"
        )
    else:
        lines.append(
            f"Evidence INSUFFICIENT — at least {VERDICT_THRESHOLD} matching "
            "clues are required."
        )
    if counts:
        lines.append("Evidence by suspect:")
        for suspect, count in sorted(counts.items(), key=lambda kv: (-kv[1], kv[0])):
            lines.append(f"  {suspect}: {count}")
    return lines


# ---------------------------------------------------------------------------
# Dark-noir CSS
# ---------------------------------------------------------------------------

def build_css() -> str:
    """
    Return the dark-noir CSS string injected into the Streamlit app.

    Returns:
        A raw CSS string (without <style> tags; the caller wraps it).
    """
    return """
    @import url('https://fonts.googleapis.com/css2?family=Special+Elite&family=Courier+Prime:wght@400;700&display=swap');

    html, body, .stApp, .main, .block-container {
        background: linear-gradient(180deg, #0a0a0a 0%, #141414 60%, #0d0d0d 100%) !important;
        color: #c0c0c0 !important;
    }
    [data-testid="stSidebar"], section[data-testid="stSidebar"] > div {
        background: #0d0d0d !important;
        border-right: 1px solid #222 !important;
    }

    .main-header {
        text-align: center; color: #8B0000;
        font-family: 'Special Elite', cursive;
        text-shadow: 2px 2px 4px #000; letter-spacing: 3px;
    }
    .sub-header {
        text-align: center; color: #666;
        font-family: 'Courier Prime', monospace; font-style: italic;
    }

    .room-card {
        background: linear-gradient(145deg, #1a1a1a, #2d2d2d);
        padding: 20px; border-radius: 5px;
        border-left: 4px solid #8B0000; border-top: 1px solid #333;
        box-shadow: 0 4px 15px rgba(0,0,0,0.5);
        font-family: 'Courier Prime', monospace;
    }
    .room-card h3 { color: #8B0000; font-family: 'Special Elite', cursive; letter-spacing: 2px; }

    .clue-item {
        font-family: 'Courier Prime', monospace; color: #c0c0c0;
        border-bottom: 1px dashed #333; padding: 4px 0;
    }
    .verdict-display {
        font-size: 48px; font-weight: bold; text-align: center;
        font-family: 'Special Elite', cursive; text-shadow: 2px 2px 4px #000;
    }
    .sidebar-header {
        color: #8B0000; font-family: 'Special Elite', cursive;
        letter-spacing: 2px; text-align: center; padding: 10px;
        border-bottom: 1px solid #333;
    }

    .stButton > button {
        background: linear-gradient(145deg, #2d2d2d, #1a1a1a);
        color: #c0c0c0; border: 1px solid #444;
        font-family: 'Courier Prime', monospace; min-height: 48px;
    }
    .stButton > button:hover { border-color: #8B0000; color: #8B0000; }
    .stButton > button[kind="primary"] {
        background: linear-gradient(145deg, #8B0000, #5a0000); color: #fff; border: none;
    }
    .stTextInput input {
        background-color: #141414 !important; color: #c0c0c0 !important;
        border: 1px solid #333 !important; font-family: 'Courier Prime', monospace;
    }
"""
