"""
Unit tests for diff.engine and diff.report.
"""

import json

from marathonphysics.diff.engine import DiffEngine, flatten
from marathonphysics.diff.report import format_diff


def _doc(**classes):
    return dict(classes)


OLD = _doc(
    monster_definitions={
        "Tick": {"vitality": 20, "flags": {"flies": False}, "immunities": [1]},
        "Fighter": {"vitality": 40, "flags": {"flies": False}, "immunities": []},
    },
    weapon_definitions={
        "Pistol": {"weapon_class": "normal"},
    },
)

NEW = _doc(
    monster_definitions={
        "Tick": {"vitality": 25, "flags": {"flies": True}, "immunities": [1]},
        "Drone": {"vitality": None, "flags": {"flies": True}, "immunities": []},
    },
    weapon_definitions={
        "Pistol": {"weapon_class": "normal"},
    },
)


class TestFlatten:

    def test_flatten_when_nested_then_dotted_keys(self):
        assert flatten({"a": 1, "b": {"c": 2, "d": {"e": 3}}}) == {"a": 1, "b.c": 2, "b.d.e": 3}

    def test_flatten_when_list_value_then_kept_whole(self):
        assert flatten({"bits": [0, 3]}) == {"bits": [0, 3]}


class TestDiffEngine:

    def test_compare_when_identical_then_no_changes(self):
        result = DiffEngine().compare(OLD, OLD)
        assert result.total_changes == 0

    def test_compare_when_records_differ_then_added_removed_modified(self):
        result = DiffEngine().compare(OLD, NEW)
        assert result.added == [("monster_definitions", "Drone")]
        assert result.removed == [("monster_definitions", "Fighter")]
        assert result.modified == [("monster_definitions", "Tick")]
        assert result.total_changes == 3

    def test_compare_when_modified_then_field_changes_in_record_order(self):
        result = DiffEngine().compare(OLD, NEW)
        changes = result.field_changes[("monster_definitions", "Tick")]
        assert [(c.field_name, c.old_value, c.new_value) for c in changes] == [
            ("vitality", 20, 25),
            ("flags.flies", False, True),
        ]

    def test_compare_when_class_filter_then_other_classes_ignored(self):
        result = DiffEngine().compare(OLD, NEW, class_name="weapon_definitions")
        assert result.total_changes == 0

    def test_compare_when_class_missing_on_one_side_then_all_records_added(self):
        result = DiffEngine().compare({}, {"effect_definitions": {"0": {}, "1": {}}})
        assert result.added == [("effect_definitions", "0"), ("effect_definitions", "1")]


class TestFormatDiff:

    def test_format_text_when_changes_then_sections_listed(self):
        text = format_diff(DiffEngine().compare(OLD, NEW), "old.phyA", "new.phyA")
        assert text.startswith("Diff: old.phyA -> new.phyA")
        assert "=== ADDED (1) ===" in text
        assert "=== REMOVED (1) ===" in text
        assert "=== MODIFIED (1) ===" in text
        assert "vitality: 20 -> 25" in text

    def test_format_text_when_value_none_then_placeholder(self):
        old = {"monster_definitions": {"0": {"vitality": 5}}}
        new = {"monster_definitions": {"0": {"vitality": None}}}
        text = format_diff(DiffEngine().compare(old, new), "a", "b")
        assert "vitality: 5 -> (none)" in text

    def test_format_json_when_changes_then_parseable(self):
        data = json.loads(format_diff(DiffEngine().compare(OLD, NEW), "a", "b", fmt="json"))
        assert data["added"] == [{"class": "monster_definitions", "label": "Drone"}]
        assert data["modified"][0]["changes"][0] == {"field": "vitality", "old": 20, "new": 25}
