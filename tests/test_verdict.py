"""
Tests for the accusation judgment.

These tests verify that:
1. Counting is exact and case-sensitive
2. The threshold of two clues decides the verdict
3. Empty accusations never count
"""

import pytest

from clue_set import ClueSet
from suspect_index import SuspectIndex
from verdict import VERDICT_THRESHOLD, Verdict, accuse, evaluate, judge, tally


@pytest.fixture()
def index():
    return SuspectIndex.from_links([
        ("pegada molhada", "X"),
        ("luva de couro", "X"),
        ("fio de cabelo", "Y"),
    ])


class TestThreshold:

    def test_threshold_is_two(self):
        assert VERDICT_THRESHOLD == 2

    @pytest.mark.parametrize("count,expected", [
        (0, Verdict.INSUFFICIENT),
        (1, Verdict.INSUFFICIENT),
        (2, Verdict.SUSTAINED),
        (3, Verdict.SUSTAINED),
    ])
    def test_judge(self, count, expected):
        assert judge(count) is expected

    def test_two_matching_clues_sustain(self, index):
        clues = ClueSet(["pegada molhada", "luva de couro"])
        assert evaluate(clues, index, "X") == 2
        assert accuse(clues, index, "X").verdict is Verdict.SUSTAINED

    def test_one_matching_clue_is_insufficient(self, index):
        clues = ClueSet(["pegada molhada", "fio de cabelo"])
        assert evaluate(clues, index, "X") == 1
        result = accuse(clues, index, "X")
        assert result.verdict is Verdict.INSUFFICIENT
        assert not result.sustained


class TestCounting:

    def test_case_sensitive_name_match(self, index):
        clues = ClueSet(["pegada molhada", "luva de couro"])
        assert evaluate(clues, index, "x") == 0

    @pytest.mark.parametrize("accused", ["", None])
    def test_empty_accusation_counts_zero(self, index, accused):
        clues = ClueSet(["pegada molhada", "luva de couro"])
        assert evaluate(clues, index, accused) == 0
        assert accuse(clues, index, accused).verdict is Verdict.INSUFFICIENT

    def test_unmapped_clues_ignored(self, index):
        clues = ClueSet(["pegada molhada", "chave perdida"])
        assert evaluate(clues, index, "X") == 1

    def test_order_does_not_matter(self, index):
        forward = ["pegada molhada", "fio de cabelo", "luva de couro"]
        assert evaluate(forward, index, "X") == evaluate(reversed(forward), index, "X")

    def test_supporting_clues_in_listing_order(self, index):
        clues = ClueSet(["pegada molhada", "fio de cabelo", "luva de couro"])
        result = accuse(clues.in_order(), index, "X")
        assert result.supporting_clues == ("luva de couro", "pegada molhada")

    def test_tally(self, index):
        clues = ClueSet(["pegada molhada", "fio de cabelo", "luva de couro", "chave"])
        assert tally(clues, index) == {"X": 2, "Y": 1}
