"""Per-variant layout lookup with a one-time consistency check."""
from __future__ import annotations

import logging

from marathonphysics.errors import MalformedRecord
from marathonphysics.physics import m1, m2
from marathonphysics.physics.constants import FIELD_WIDTHS
from marathonphysics.physics.records import ConversionRule, FormatVariant, RecordClassSpec

logger = logging.getLogger(__name__)

_LAYOUTS: dict[FormatVariant, tuple[RecordClassSpec, ...]] = {
    FormatVariant.MARATHON_ONE: m1.RECORD_CLASSES,
    FormatVariant.MARATHON_TWO: m2.RECORD_CLASSES,
}

_validated: set[FormatVariant] = set()


def schema_for(variant: FormatVariant) -> tuple[RecordClassSpec, ...]:
    """Record classes of `variant`, in the order they appear in the file."""
    classes = _LAYOUTS[variant]
    if variant not in _validated:
        validate_schema(classes)
        _validated.add(variant)
        logger.debug(f"Validated {variant.value} layout: {len(classes)} record classes")
    return classes


def required_size(variant: FormatVariant) -> int:
    """Minimum byte length of a physics file of this variant."""
    return sum(spec.total_size for spec in schema_for(variant))


def validate_schema(classes: tuple[RecordClassSpec, ...]) -> None:
    """Raise MalformedRecord if any layout is inconsistent."""
    seen: set[str] = set()
    for spec in classes:
        if spec.name in seen:
            raise MalformedRecord(spec.name, "record class declared twice")
        seen.add(spec.name)

        if spec.record_size <= 0 or spec.record_count < 0:
            raise MalformedRecord(
                spec.name,
                f"bad size/count {spec.record_size}x{spec.record_count}",
            )

        names: set[str] = set()
        for fs in spec.fields:
            if fs.name in names:
                raise MalformedRecord(spec.name, f"field {fs.name!r} declared twice", fs.offset)
            names.add(fs.name)

            if fs.width not in FIELD_WIDTHS:
                raise MalformedRecord(spec.name, f"field {fs.name!r} has width {fs.width}", fs.offset)
            if fs.offset < 0 or fs.end > spec.record_size:
                raise MalformedRecord(
                    spec.name,
                    f"field {fs.name!r} spans {fs.offset}..{fs.end}, "
                    f"record is {spec.record_size} bytes",
                    fs.offset,
                )
            if fs.rule in (ConversionRule.FLAGS, ConversionRule.ENUM) and not fs.names:
                raise MalformedRecord(spec.name, f"field {fs.name!r} needs names for {fs.rule.value}", fs.offset)
            if fs.rule is ConversionRule.FIXED and not fs.scale:
                raise MalformedRecord(spec.name, f"fixed point field {fs.name!r} has no scale", fs.offset)
            if fs.scale is not None and fs.scale <= 0:
                raise MalformedRecord(spec.name, f"field {fs.name!r} has scale {fs.scale}", fs.offset)

        _check_nesting(spec, names)

        for name in spec.null_when:
            if name not in names or "." not in name:
                raise MalformedRecord(spec.name, f"null_when names {name!r}, which is not a nested field")
            if not spec.get_field(name).optional:
                raise MalformedRecord(spec.name, f"null_when field {name!r} is not optional")


def _check_nesting(spec: RecordClassSpec, names: set[str]) -> None:
    # "a" and "a.b" cannot both be leaves
    for name in names:
        parts = name.split(".")
        for i in range(1, len(parts)):
            prefix = ".".join(parts[:i])
            if prefix in names:
                raise MalformedRecord(spec.name, f"field {name!r} nests under leaf field {prefix!r}")
