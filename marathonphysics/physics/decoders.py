"""Field decoding for fixed-size physics records.

Each record is a byte slice of exactly `record_size` bytes. Fields are read
big-endian at their declared offsets, the optional sentinel and any sub-field
shift/mask are applied, then the field's conversion rule.
"""
from __future__ import annotations

import struct
from typing import Any

from marathonphysics.errors import MalformedRecord
from marathonphysics.physics import units
from marathonphysics.physics.constants import WORLD_ONE
from marathonphysics.physics.enums import lookup_enum
from marathonphysics.physics.records import ConversionRule, DecodedRecord, FieldSpec, RecordClassSpec

# Struct formats (big-endian), keyed by (width, signed)
_FORMATS: dict[tuple[int, bool], struct.Struct] = {
    (1, False): struct.Struct(">B"),
    (1, True): struct.Struct(">b"),
    (2, False): struct.Struct(">H"),
    (2, True): struct.Struct(">h"),
    (4, False): struct.Struct(">I"),
    (4, True): struct.Struct(">i"),
}

_DISTANCE_RULES = {
    ConversionRule.DISTANCE: units.to_world_units,
    ConversionRule.VELOCITY: units.to_velocity,
    ConversionRule.ACCELERATION: units.to_acceleration,
}


def read_raw(data: bytes, spec: FieldSpec) -> int:
    """Read a field's stored integer."""
    return _FORMATS[(spec.width, spec.signed)].unpack_from(data, spec.offset)[0]


def convert(raw: int, spec: FieldSpec) -> Any:
    """Apply a field's conversion rule to a raw (already shifted/masked) value."""
    rule = spec.rule
    if rule is ConversionRule.IDENTITY:
        return raw
    if rule is ConversionRule.ANGLE:
        return units.to_degrees(raw, spec.scale or 1)
    if rule in _DISTANCE_RULES:
        return _DISTANCE_RULES[rule](raw, spec.scale or WORLD_ONE)
    if rule is ConversionRule.FIXED:
        return units.from_fixed(raw, spec.scale)
    if rule is ConversionRule.FLAGS:
        return units.decode_flags(raw, spec.names)
    if rule is ConversionRule.BITFIELD:
        return units.set_bits(raw, spec.width)
    if rule is ConversionRule.ENUM:
        return lookup_enum(spec.names, raw)
    raise ValueError(f"unknown conversion rule {rule!r}")


def decode_field(data: bytes, spec: FieldSpec) -> Any:
    raw = read_raw(data, spec)
    # NONE is stored as -1; any value with the top bit set counts as absent
    if spec.optional and raw & (1 << (spec.width * 8 - 1)):
        return None
    if spec.shift:
        raw >>= spec.shift
    if spec.mask is not None:
        raw &= spec.mask
    return convert(raw, spec)


def decode_record(data: bytes, spec: RecordClassSpec, offset: int | None = None) -> DecodedRecord:
    """Decode one record slice into a field name -> value mapping.

    `offset` is the slice's position in the file, used only for error messages.
    """
    if len(data) != spec.record_size:
        raise MalformedRecord(
            spec.name,
            f"slice is {len(data)} bytes, expected {spec.record_size}",
            offset,
        )

    record: DecodedRecord = {}
    for fs in spec.fields:
        _insert(record, fs.path, decode_field(data, fs))
    for name in spec.null_when:
        _null_group(record, tuple(name.split(".")))
    return record


def _null_group(record: DecodedRecord, path: tuple[str, ...]) -> None:
    # e.g. an attack with no projectile type is no attack at all
    parent = record
    for key in path[:-2]:
        parent = parent[key]
    group = parent[path[-2]]
    if group is not None and group[path[-1]] is None:
        parent[path[-2]] = None


def _insert(record: DecodedRecord, path: tuple[str, ...], value: Any) -> None:
    target = record
    for key in path[:-1]:
        target = target.setdefault(key, {})
    target[path[-1]] = value
