"""Shared fixtures: a small three-room case and the default mansion."""

import pytest

from clue_set import ClueSet
from game_engine import DetectiveQuestGame
from room_graph import RoomGraph
from suspect_index import SuspectIndex


SMALL_LAYOUT = [
    ("Hall", "Estar", None),
    ("Estar", "Biblioteca", None),
    ("Biblioteca", None, None),
]

SMALL_CLUES = {
    "Hall": "pegada molhada",
    "Estar": "fio de cabelo",
    "Biblioteca": "bilhete rasgado",
}

SMALL_LINKS = [
    ("pegada molhada", "Avelar"),
    ("fio de cabelo", "Beatriz"),
    ("bilhete rasgado", "Clara"),
]


@pytest.fixture()
def small_graph():
    return RoomGraph.from_layout(SMALL_LAYOUT, "Hall")


@pytest.fixture()
def small_index():
    return SuspectIndex.from_links(SMALL_LINKS, bucket_count=7)


@pytest.fixture()
def clues():
    return ClueSet()


@pytest.fixture()
def small_game():
    game = DetectiveQuestGame(
        layout=SMALL_LAYOUT,
        root_id="Hall",
        room_clues=SMALL_CLUES,
        suspect_links=SMALL_LINKS,
    )
    yield game
    game.close()


@pytest.fixture()
def mansion_game():
    game = DetectiveQuestGame()
    yield game
    game.close()
