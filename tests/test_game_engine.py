"""
End-to-end tests for DetectiveQuestGame.

These tests verify that:
1. A full walk collects clues and judges the accusation
2. Empty accusations request no judgment
3. Resources are released exactly once on every exit path
4. Invalid catalogs fail before any state is usable
"""

import pytest

from game_engine import DetectiveQuestGame
from models import CatalogError, EndReason
from room_graph import MapLayoutError
from verdict import Verdict


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


# =============================================================================
# END-TO-END SCENARIO
# =============================================================================

class TestHallToBiblioteca:
    """Hall → Estar → Biblioteca, collecting one clue per room."""

    def _walk(self, game):
        reports = [game.start()]
        reports.append(game.handle("e").report)
        reports.append(game.handle("e").report)
        return reports

    def test_walk_collects_all_three_clues(self, small_game):
        reports = self._walk(small_game)
        assert [r.room_id for r in reports] == ["Hall", "Estar", "Biblioteca"]
        assert [r.suspect for r in reports] == ["Avelar", "Beatriz", "Clara"]
        assert all(r.newly_collected for r in reports)
        assert reports[-1].is_leaf
        assert small_game.ended
        assert small_game.state.end_reason is EndReason.LEAF
        assert small_game.menu() == []
        assert small_game.collected_clues() == [
            "bilhete rasgado", "fio de cabelo", "pegada molhada",
        ]

    def test_accusing_avelar_is_insufficient(self, small_game):
        self._walk(small_game)
        result = small_game.accuse("Avelar\n")
        assert result.accused == "Avelar"
        assert result.count == 1
        assert result.verdict is Verdict.INSUFFICIENT
        assert small_game.accusation is result

    def test_suspect_tied_to_two_clues_is_sustained(self):
        links = [
            ("pegada molhada", "Avelar"),
            ("fio de cabelo", "Clara"),
            ("bilhete rasgado", "Clara"),
        ]
        with DetectiveQuestGame(
            layout=SMALL_LAYOUT, root_id="Hall",
            room_clues=SMALL_CLUES, suspect_links=links,
        ) as game:
            self._walk(game)
            result = game.accuse("  Clara  ")
            assert result.count == 2
            assert result.verdict is Verdict.SUSTAINED
            assert result.supporting_clues == ("bilhete rasgado", "fio de cabelo")

    @pytest.mark.parametrize("line", ["", "   ", "\n", None])
    def test_empty_accusation_requests_no_judgment(self, small_game, line):
        self._walk(small_game)
        assert small_game.accuse(line) is None
        assert small_game.accusation is None


class TestDefaultMansion:

    def test_conservatory_route_sustains_avelar(self, mansion_game):
        mansion_game.start()
        mansion_game.handle("e")
        mansion_game.handle("d")
        assert mansion_game.collected_clues() == [
            "fio de cabelo", "luva de couro", "pegada molhada",
        ]
        assert mansion_game.suspect_tally() == {"Avelar": 2, "Beatriz": 1}
        assert mansion_game.accuse("Avelar").sustained

    def test_quit_at_entrance_leaves_one_clue(self, mansion_game):
        mansion_game.start()
        mansion_game.handle("s")
        assert mansion_game.state.end_reason is EndReason.QUIT
        assert mansion_game.collected_clues() == ["pegada molhada"]
        assert not mansion_game.accuse("Avelar").sustained


# =============================================================================
# RESET AND RELEASE
# =============================================================================

class TestLifecycle:

    def test_reset_starts_a_fresh_walk(self, small_game):
        small_game.start()
        small_game.handle("e")
        small_game.accuse("Avelar")
        small_game.reset()
        assert small_game.collected_clues() == []
        assert small_game.accusation is None
        assert not small_game.engine.started
        report = small_game.start()
        assert report.newly_collected

    def test_close_releases_everything_once(self, small_game):
        small_game.start()
        small_game.close()
        assert small_game.closed
        assert small_game.graph.released
        assert len(small_game.clues) == 0
        assert len(small_game.index) == 0
        small_game.close()

    def test_close_mid_walk_counts_as_input_closed(self, small_game):
        small_game.start()
        small_game.close()
        assert small_game.state.end_reason is EndReason.INPUT_CLOSED

    def test_context_manager_releases_on_error(self):
        with pytest.raises(ZeroDivisionError):
            with DetectiveQuestGame() as game:
                game.start()
                1 / 0
        assert game.closed
        assert game.graph.released

    def test_operations_after_close_raise(self, small_game):
        small_game.close()
        with pytest.raises(RuntimeError, match="closed"):
            small_game.start()
        assert small_game.menu() == []


class TestInvalidCatalogs:

    def test_bad_layout(self):
        with pytest.raises(MapLayoutError):
            DetectiveQuestGame(layout=[("A", "B", None)], root_id="A")

    def test_bad_suspect_links_release_the_map(self, monkeypatch):
        released = []
        from room_graph import RoomGraph
        original = RoomGraph.release

        def spy(self):
            released.append(True)
            return original(self)

        monkeypatch.setattr(RoomGraph, "release", spy)
        with pytest.raises(CatalogError):
            DetectiveQuestGame(suspect_links=[("clue", "")])
        assert released == [True]

    def test_empty_clue_in_catalog(self):
        with pytest.raises(CatalogError, match="empty clue"):
            DetectiveQuestGame(room_clues={"Hall de Entrada": " "})

    def test_callable_clue_catalog(self):
        with DetectiveQuestGame(room_clues=lambda room: "poeira") as game:
            game.start()
            report = game.handle("e").report
            assert report.already_collected
            assert game.collected_clues() == ["poeira"]


class TestExactIdentifiers:
    """Identifiers match across catalogs only when spelled identically."""

    def test_padded_names_match_across_every_catalog(self):
        with DetectiveQuestGame(
            layout=[("Hall ", None, None)],
            root_id="Hall ",
            room_clues={"Hall ": "pegada "},
            suspect_links=[("pegada ", "Avelar")],
        ) as game:
            report = game.start()
            assert report.room_id == "Hall "
            assert report.newly_collected
            assert report.suspect == "Avelar"
            assert game.accuse("Avelar").count == 1

    def test_differently_spelled_clue_implicates_nobody(self):
        with DetectiveQuestGame(
            layout=[("Hall", None, None)],
            root_id="Hall",
            room_clues={"Hall": "pegada"},
            suspect_links=[("pegada ", "Avelar")],
        ) as game:
            assert game.start().suspect is None
