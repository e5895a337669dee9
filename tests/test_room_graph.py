"""
Tests for RoomGraph construction, navigation and teardown.

These tests verify that:
1. The layout table builds the expected tree
2. Every malformed layout is rejected before play starts
3. Height bounds traversal length
4. Release drops every room exactly once
"""

import pytest

from case_data import ROOM_LAYOUT, ROOT_ROOM
from models import CatalogError, RoomSpec
from room_graph import MapLayoutError, RoomGraph


# =============================================================================
# CONSTRUCTION
# =============================================================================

class TestFromLayout:

    def test_default_mansion(self):
        graph = RoomGraph.from_layout(ROOM_LAYOUT, ROOT_ROOM)
        root = graph.root()
        assert root.id == "Hall de Entrada"
        assert graph.left(root).id == "Sala de Estar"
        assert graph.right(root).id == "Cozinha"
        assert graph.left(graph.left(root)).id == "Biblioteca"
        assert graph.right(graph.right(root)).id == "Porão"
        assert len(graph) == 7
        assert graph.height() == 2

    def test_single_child_rooms(self, small_graph):
        root = small_graph.root()
        assert small_graph.right(root) is None
        assert small_graph.left(root).id == "Estar"
        assert small_graph.height() == 2

    def test_accepts_room_specs(self):
        graph = RoomGraph.from_layout(
            [RoomSpec(id="A", left="B"), RoomSpec(id="B")], "A"
        )
        assert graph.root().left.id == "B"

    def test_blank_child_means_absent(self):
        graph = RoomGraph.from_layout([("A", "", "  ")], "A")
        assert graph.is_leaf(graph.root())

    def test_single_room_map(self):
        graph = RoomGraph.from_layout([("Only", None, None)], "Only")
        assert graph.height() == 0
        assert graph.root().is_leaf

    def test_lookup_helpers(self, small_graph):
        assert "Estar" in small_graph
        assert "Cozinha" not in small_graph
        assert small_graph.get("Biblioteca").is_leaf
        assert [room.id for room in small_graph] == ["Hall", "Estar", "Biblioteca"]


class TestInvalidLayouts:
    """Every structural problem is a fatal MapLayoutError."""

    def test_error_is_a_catalog_error(self):
        assert issubclass(MapLayoutError, CatalogError)

    def test_duplicate_id(self):
        with pytest.raises(MapLayoutError, match="Duplicate room id"):
            RoomGraph.from_layout([("A", None, None), ("A", None, None)], "A")

    def test_missing_root(self):
        with pytest.raises(MapLayoutError, match="not in the layout"):
            RoomGraph.from_layout([("A", None, None)], "Z")

    def test_unknown_child(self):
        with pytest.raises(MapLayoutError, match="unknown room 'B'"):
            RoomGraph.from_layout([("A", "B", None)], "A")

    def test_two_parents(self):
        layout = [("A", "B", "C"), ("B", "D", None), ("C", "D", None), ("D", None, None)]
        with pytest.raises(MapLayoutError, match="two parents"):
            RoomGraph.from_layout(layout, "A")

    def test_root_with_parent(self):
        layout = [("A", "B", None), ("B", "A", None)]
        with pytest.raises(MapLayoutError, match="is a child of"):
            RoomGraph.from_layout(layout, "A")

    def test_detached_cycle(self):
        layout = [("A", None, None), ("B", "C", None), ("C", "B", None)]
        with pytest.raises(MapLayoutError, match="not reachable"):
            RoomGraph.from_layout(layout, "A")

    def test_self_loop(self):
        with pytest.raises(MapLayoutError):
            RoomGraph.from_layout([("A", None, None), ("B", "B", None)], "A")

    @pytest.mark.parametrize("row", [("A", None), ("", None, None), ("  ", None, None), 42])
    def test_malformed_row(self, row):
        with pytest.raises(MapLayoutError, match="Invalid layout row"):
            RoomGraph.from_layout([row], "A")


# =============================================================================
# TRAVERSAL BOUND AND TEARDOWN
# =============================================================================

class TestTraversalBound:

    @pytest.mark.parametrize("choices", [
        ("left", "left"), ("left", "right"), ("right", "left"), ("right", "right"),
    ])
    def test_any_path_reaches_leaf_within_height(self, choices):
        graph = RoomGraph.from_layout(ROOM_LAYOUT, ROOT_ROOM)
        room, steps = graph.root(), 0
        for side in choices:
            if room.is_leaf:
                break
            room = graph.left(room) if side == "left" else graph.right(room)
            steps += 1
        assert room.is_leaf
        assert steps <= graph.height()


class TestRelease:

    def test_release_counts_every_room(self):
        graph = RoomGraph.from_layout(ROOM_LAYOUT, ROOT_ROOM)
        assert graph.release() == 7
        assert graph.released
        assert len(graph) == 0
        assert graph.height() == -1

    def test_release_is_idempotent(self, small_graph):
        assert small_graph.release() == 3
        assert small_graph.release() == 0

    def test_root_unavailable_after_release(self, small_graph):
        small_graph.release()
        with pytest.raises(RuntimeError, match="released"):
            small_graph.root()

    def test_deep_chain_builds_and_releases_without_recursion(self):
        depth = 2000
        layout = [(f"r{i}", f"r{i + 1}", None) for i in range(depth)]
        layout.append((f"r{depth}", None, None))
        graph = RoomGraph.from_layout(layout, "r0")
        assert graph.height() == depth
        assert graph.release() == depth + 1
