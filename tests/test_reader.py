"""
Unit tests for physics.reader: whole-file decoding.
"""

import pytest

from marathonphysics.errors import TruncatedFile
from marathonphysics.physics.layouts import required_size, schema_for
from marathonphysics.physics.reader import PhysicsReader, check_length, decode_physics
from marathonphysics.physics.records import FormatVariant


class TestDecodePhysics:

    @pytest.mark.parametrize("variant", list(FormatVariant))
    def test_decode_physics_when_exact_length_then_every_class_has_record_count(self, variant, make_physics):
        physics = decode_physics(make_physics(variant), variant)
        expected = [(s.name, s.record_count) for s in schema_for(variant)]
        assert [(c.name, len(c.records)) for c in physics.classes] == expected
        assert physics.trailing_bytes == 0

    def test_decode_physics_when_decoded_then_class_offsets_are_contiguous(self, make_physics):
        physics = decode_physics(make_physics(FormatVariant.MARATHON_TWO), FormatVariant.MARATHON_TWO)
        pos = 0
        for decoded in physics.classes:
            assert decoded.offset == pos
            pos += decoded.spec.total_size

    @pytest.mark.parametrize("variant", list(FormatVariant))
    def test_decode_physics_when_one_byte_short_then_truncated(self, variant, make_physics):
        data = make_physics(variant)[:-1]
        with pytest.raises(TruncatedFile) as exc:
            decode_physics(data, variant)
        assert exc.value.class_name == "weapon_definitions"
        assert exc.value.available == required_size(variant) - 1

    def test_decode_physics_when_empty_then_truncated_at_first_class(self):
        with pytest.raises(TruncatedFile) as exc:
            decode_physics(b"", FormatVariant.MARATHON_ONE)
        assert exc.value.class_name == "monster_definitions"
        assert exc.value.offset == 0

    def test_decode_physics_when_truncated_mid_file_then_names_that_class(self, make_physics):
        classes = schema_for(FormatVariant.MARATHON_TWO)
        cut = classes[0].total_size + 10
        with pytest.raises(TruncatedFile) as exc:
            decode_physics(make_physics(FormatVariant.MARATHON_TWO)[:cut], FormatVariant.MARATHON_TWO)
        assert exc.value.class_name == "effect_definitions"
        assert exc.value.offset == classes[0].total_size

    def test_decode_physics_when_trailing_bytes_then_ignored(self, make_physics):
        variant = FormatVariant.MARATHON_TWO
        plain = decode_physics(make_physics(variant), variant)
        padded = decode_physics(make_physics(variant, extra=b"\xde\xad\xbe\xef" * 9), variant)
        assert padded.trailing_bytes == 36
        assert [c.records for c in padded.classes] == [c.records for c in plain.classes]

    def test_decode_physics_when_records_differ_then_decoded_independently(self, make_physics):
        physics = decode_physics(make_physics(FormatVariant.MARATHON_TWO), FormatVariant.MARATHON_TWO)
        monsters = physics.get_class("monster_definitions").records
        assert monsters[0] != monsters[1]


class TestCheckLength:

    def test_check_length_when_long_enough_then_returns_required(self, make_physics):
        variant = FormatVariant.MARATHON_ONE
        assert check_length(make_physics(variant, extra=b"\0"), schema_for(variant)) == required_size(variant)


class TestPhysicsReader:

    def test_read_when_file_valid_then_decodes(self, physics_file):
        physics = PhysicsReader(physics_file, FormatVariant.MARATHON_TWO).read()
        assert physics.variant is FormatVariant.MARATHON_TWO
        assert physics.record_count == 47 + 69 + 39 + 2 + 10

    def test_read_when_file_missing_then_os_error(self, tmp_path):
        with pytest.raises(OSError):
            PhysicsReader(tmp_path / "missing", FormatVariant.MARATHON_TWO).read()

    def test_read_when_wrong_variant_and_file_too_short_then_truncated(self, tmp_path, make_physics):
        path = tmp_path / "Physics"
        path.write_bytes(make_physics(FormatVariant.MARATHON_ONE))
        with pytest.raises(TruncatedFile):
            PhysicsReader(path, FormatVariant.MARATHON_TWO).read()
