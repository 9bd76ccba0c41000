"""Tests for fuzzy scoring, the default filter and grouping."""

import pytest

from palettekit.engine.scoring import best_score, default_filter, fuzzy_score, group_commands
from palettekit.models import Command


class TestFuzzyScore:
    """Tests for fuzzy_score."""

    def test_empty_query_scores_zero(self):
        assert fuzzy_score("Anything", "") == 0
        assert fuzzy_score("", "") == 0

    def test_case_insensitive(self):
        assert fuzzy_score("OPEN FILE", "open") == fuzzy_score("open file", "OPEN")

    def test_substring_at_start(self):
        assert fuzzy_score("Open File", "open") == 150

    def test_substring_at_word_boundary_has_position_penalty(self):
        assert fuzzy_score("Open File", "file") == 147.5

    def test_substring_mid_word(self):
        assert fuzzy_score("Profiles", "file") == 98.5

    @pytest.mark.parametrize("separator", ["-", "_", " "])
    def test_word_separators(self, separator):
        assert fuzzy_score(f"ab{separator}cd", "cd") == 150 - 1.5

    def test_subsequence_scoring(self):
        # p at 0 (+10 +10 word start), o at 2 (+10)
        assert fuzzy_score("Projects Open", "po") == 30

    def test_subsequence_consecutive_bonus(self):
        # a@0: 10 + 10 (start); c@2: 10; d@3: 10 + 15 (run)
        assert fuzzy_score("abcd", "acd") == 55

    def test_no_match_returns_none(self):
        assert fuzzy_score("Save File", "zzz") is None
        assert fuzzy_score("abc", "cba") is None

    def test_query_longer_than_text(self):
        assert fuzzy_score("ab", "abc") is None

    def test_substring_outranks_subsequence(self):
        assert fuzzy_score("New Project", "proj") > fuzzy_score("Projects Open", "po")

    def test_word_boundary_outranks_mid_word(self):
        assert fuzzy_score("Open File", "file") > fuzzy_score("Profiles", "file")

    def test_deterministic(self):
        scores = {fuzzy_score("Toggle Sidebar", "tsb") for _ in range(5)}
        assert len(scores) == 1


class TestBestScore:
    def test_uses_best_of_label_and_keywords(self):
        command = Command(id="x", label="Preferences", keywords=("settings", "config"))
        assert best_score(command, "settings") == 150

    def test_none_when_nothing_matches(self):
        assert best_score(Command(id="x", label="Quit"), "zzz") is None


class TestDefaultFilter:
    """Tests for default_filter."""

    def test_empty_query_returns_items_in_order(self, nested_commands):
        assert default_filter(nested_commands, "") == nested_commands

    def test_file_query_keeps_tie_order(self, file_commands):
        result = default_filter(file_commands, "file")
        assert [c.id for c in result] == ["1", "2"]

    def test_open_query(self, file_commands):
        assert [c.id for c in default_filter(file_commands, "open")] == ["1"]

    def test_no_matches(self, file_commands):
        assert default_filter(file_commands, "zzz") == []

    def test_sorted_by_score(self):
        items = [
            Command(id="mid", label="Profiles"),
            Command(id="start", label="File Menu"),
        ]
        assert [c.id for c in default_filter(items, "file")] == ["start", "mid"]

    def test_keyword_match(self, nested_commands):
        assert [c.id for c in default_filter(nested_commands, "load")] == ["open"]

    def test_every_result_matches(self, nested_commands):
        for query in ["o", "fi", "thm", "xyz", "new"]:
            for command in default_filter(nested_commands, query):
                assert best_score(command, query) is not None

    def test_does_not_flatten_children(self, nested_commands):
        assert default_filter(nested_commands, "dark") == []


class TestGroupCommands:
    def test_groups_in_first_seen_order(self, nested_commands):
        groups = group_commands(nested_commands)
        assert [g.group for g in groups] == ["Project", "File", None, "Appearance"]
        assert [c.id for c in groups[1].commands] == ["open", "save"]

    def test_empty(self):
        assert group_commands([]) == []
