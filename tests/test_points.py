"""
Tests for the difficulty-tag point rule.
"""

import pytest

from bragging_rights.scoring.points import difficulty_for_message, points_for_message
from bragging_rights.utils import TAG_PATTERNS, first_line


class TestTagPatterns:
    """Tests for TAG_PATTERNS scan order."""

    def test_scan_order(self):
        assert [label for label, _ in TAG_PATTERNS] == ["Easy", "Medium", "Hard"]

    def test_requires_brackets(self):
        assert points_for_message("Easy fix") == 0
        assert points_for_message("(Hard) problem") == 0


class TestPointsForMessage:
    """Tests for points_for_message function."""

    @pytest.mark.parametrize("message, expected", [
        ("[Easy] two sum", 1),
        ("[Medium] LRU cache", 2),
        ("[Hard] median of arrays", 3),
        ("refactor helpers", 0),
        ("", 0),
    ])
    def test_single_tag(self, message, expected):
        assert points_for_message(message) == expected

    def test_case_insensitive(self):
        assert points_for_message("[easy] a") == 1
        assert points_for_message("[MEDIUM] b") == 2
        assert points_for_message("[hArD] c") == 3

    def test_hard_anywhere(self):
        assert points_for_message("solved [Hard] trapping rain water") == 3
        assert points_for_message("[WIP] [Hard] [v2] regex matching") == 3

    def test_multiple_tags_use_scan_order(self):
        # Easy -> Medium -> Hard scan, not last match
        assert points_for_message("[Medium] also [Hard] fix") == 2
        assert points_for_message("[Hard] then [Easy]") == 1

    def test_none_message(self):
        assert points_for_message(None) == 0


class TestDifficultyForMessage:
    """Tests for difficulty_for_message function."""

    def test_returns_label(self):
        assert difficulty_for_message("[medium] x") == "Medium"

    def test_untagged(self):
        assert difficulty_for_message("no tag") is None


class TestFirstLine:
    """Tests for first_line utility."""

    def test_multiline(self):
        assert first_line("[Easy] fix\n\nlonger body") == "[Easy] fix"

    def test_blank(self):
        assert first_line("   ") == ""
