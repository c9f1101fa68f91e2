"""
Unit tests for export.json_export: document assembly and serialization.
"""

import json
import logging

from marathonphysics.export.json_export import assemble_document, export_json
from marathonphysics.names.loader import NameTable
from marathonphysics.physics.layouts import schema_for
from marathonphysics.physics.reader import decode_physics
from marathonphysics.physics.records import FormatVariant

M2 = FormatVariant.MARATHON_TWO


class TestAssembleDocument:

    def test_assemble_when_no_names_then_labels_are_index_strings(self, make_physics):
        physics = decode_physics(make_physics(M2), M2)
        document = assemble_document(physics)

        index = 0
        for spec in schema_for(M2):
            labels = list(document[spec.name])
            assert labels == [str(i) for i in range(index, index + spec.record_count)]
            index += spec.record_count

    def test_assemble_when_decoded_then_class_order_matches_layout(self, make_physics):
        document = assemble_document(decode_physics(make_physics(M2), M2))
        assert list(document) == [spec.name for spec in schema_for(M2)]

    def test_assemble_when_names_then_global_index_spans_classes(self, make_physics):
        # Line 47 is the first effect in Marathon 2 (after 47 monsters)
        lines = ["Marine"] + [""] * 46 + ["Rocket Explosion"]
        document = assemble_document(decode_physics(make_physics(M2), M2), NameTable.from_lines(lines))

        assert list(document["monster_definitions"])[0] == "Marine"
        assert list(document["monster_definitions"])[1] == "1"
        assert list(document["effect_definitions"])[0] == "Rocket Explosion"
        assert list(document["effect_definitions"])[1] == "48"

    def test_assemble_when_names_then_not_sorted(self, make_physics):
        lines = ["Zebra", "Aardvark"]
        document = assemble_document(decode_physics(make_physics(M2), M2), NameTable.from_lines(lines))
        assert list(document["monster_definitions"])[:3] == ["Zebra", "Aardvark", "2"]

    def test_assemble_when_duplicate_name_in_class_then_index_appended(self, make_physics, caplog):
        names = NameTable.from_lines(["Bob", "Bob"])
        with caplog.at_level(logging.WARNING):
            document = assemble_document(decode_physics(make_physics(M2), M2), names)
        monsters = document["monster_definitions"]
        assert list(monsters)[:2] == ["Bob", "Bob #1"]
        assert len(monsters) == 47
        assert "duplicate label" in caplog.text

    def test_assemble_when_suffixed_label_already_taken_then_no_record_lost(self, make_physics):
        names = NameTable.from_lines(["A", "A #2", "A"])
        document = assemble_document(decode_physics(make_physics(M2), M2), names)
        monsters = document["monster_definitions"]
        assert len(monsters) == 47
        labels = list(monsters)
        assert labels[:2] == ["A", "A #2"]
        assert labels[2] not in ("A", "A #2")
        assert labels[3] == "3"

    def test_assemble_when_names_collide_then_every_class_keeps_record_count(self, make_physics):
        names = NameTable.from_lines(["X", "X #1", "X", "X #2 #2", "X"] * 40)
        document = assemble_document(decode_physics(make_physics(M2), M2), names)
        assert [len(records) for records in document.values()] == [
            spec.record_count for spec in schema_for(M2)
        ]


class TestExportJson:

    def test_export_when_decoded_then_valid_json_with_string_labels(self, make_physics):
        text = export_json(assemble_document(decode_physics(make_physics(M2), M2)))
        data = json.loads(text)
        assert all(isinstance(label, str) for records in data.values() for label in records)
        assert len(data["weapon_definitions"]) == 10

    def test_export_when_run_twice_then_byte_identical(self, make_physics):
        names = NameTable.from_lines(["Alpha", "", "Gamma"])
        first = export_json(assemble_document(decode_physics(make_physics(M2), M2), names))
        second = export_json(assemble_document(decode_physics(make_physics(M2), M2), names))
        assert first == second

    def test_export_when_trailing_bytes_then_output_unchanged(self, make_physics):
        plain = export_json(assemble_document(decode_physics(make_physics(M2), M2)))
        padded = export_json(assemble_document(decode_physics(make_physics(M2, extra=b"\x00" * 100), M2)))
        assert plain == padded

    def test_export_when_indent_none_then_single_line(self, make_physics):
        text = export_json(assemble_document(decode_physics(make_physics(M2), M2)), indent=None)
        assert text.count("\n") == 1
        assert text.endswith("\n")

    def test_export_when_field_values_then_numbers_stay_numbers(self, make_physics):
        data = json.loads(export_json(assemble_document(decode_physics(make_physics(M2), M2))))
        monster = data["monster_definitions"]["0"]
        assert isinstance(monster["radius"], float)
        assert isinstance(monster["flags"]["flies"], bool)
        assert isinstance(monster["immunities"], list)
