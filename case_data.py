"""
case_data.py
============
All catalog content for the mansion investigation.

Centralising the map and the evidence here means you can swap out the
entire case (rooms, clues, suspects) without touching any data structure,
engine, or UI logic.

To create a new case:
    1. Replace ROOM_LAYOUT / ROOT_ROOM with your map. Every row is
       (room, left child, right child); use None for a missing side.
       The rows must form exactly one tree rooted at ROOT_ROOM.
    2. Replace ROOM_CLUES with the clue found in each room. Rooms that are
       not listed hold no clue.
    3. Replace SUSPECT_LINKS with the (clue, suspect) pairs. Clue strings
       must match ROOM_CLUES exactly; lookups are case-sensitive.
"""

from __future__ import annotations

from typing import Dict, List, Optional, Tuple


# ---------------------------------------------------------------------------
# Mansion map
# ---------------------------------------------------------------------------

ROOT_ROOM: str = "Hall de Entrada"

ROOM_LAYOUT: List[Tuple[str, Optional[str], Optional[str]]] = [
    ("Hall de Entrada",   "Sala de Estar",  "Cozinha"),
    ("Sala de Estar",     "Biblioteca",     "Jardim de Inverno"),
    ("Cozinha",           "Despensa",       "Porão"),
    ("Biblioteca",        None,             None),
    ("Jardim de Inverno", None,             None),
    ("Despensa",          None,             None),
    ("Porão",             None,             None),
]
"""
Layout table read by RoomGraph.from_layout().

    Hall de Entrada
    ├── Sala de Estar
    │   ├── Biblioteca
    │   └── Jardim de Inverno
    └── Cozinha
        ├── Despensa
        └── Porão
"""


# ---------------------------------------------------------------------------
# Evidence catalogs
# ---------------------------------------------------------------------------

ROOM_CLUES: Dict[str, str] = {
    "Hall de Entrada":   "pegada molhada",
    "Sala de Estar":     "fio de cabelo",
    "Cozinha":           "faca sumida",
    "Biblioteca":        "bilhete rasgado",
    "Jardim de Inverno": "luva de couro",
    "Despensa":          "frasco de veneno",
    "Porão":             "lanterna apagada",
}
"""Room id → the single clue found there."""

SUSPECT_LINKS: List[Tuple[str, str]] = [
    ("pegada molhada",   "Avelar"),
    ("fio de cabelo",    "Beatriz"),
    ("faca sumida",      "Clara"),
    ("bilhete rasgado",  "Clara"),
    ("luva de couro",    "Avelar"),
    ("frasco de veneno", "Beatriz"),
    ("lanterna apagada", "Avelar"),
]
"""
(clue, suspect) pairs loaded into the SuspectIndex with upsert().

Every suspect is implicated by at least two clues, but no single root-to-leaf
path passes through all of them, so the route the player chooses decides
which accusations the evidence can sustain.
"""


# ---------------------------------------------------------------------------
# Case briefing (shown by both front ends)
# ---------------------------------------------------------------------------

CASE_FILE: Dict = {
    "case_id": "mansao_01",
    "title":   "Detective Quest — Exploração da Mansão",
    "summary": (
        "A storm has trapped the household in the mansion and the host has "
        "vanished. Walk the rooms, collect what you find, then name the "
        "person the evidence points to. Two matching clues are needed to "
        "sustain an accusation."
    ),
}