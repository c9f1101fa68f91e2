"""Layout types: format variants, field specs and record class specs."""
from __future__ import annotations

import enum
from dataclasses import dataclass, field, replace
from typing import Any, Optional

# One decoded record: field name -> converted value (nested for dotted names)
DecodedRecord = dict[str, Any]


class FormatVariant(enum.Enum):
    """Which physics file layout to decode."""
    MARATHON_ONE = "m1"
    MARATHON_TWO = "m2"

    @classmethod
    def from_name(cls, name: str) -> "FormatVariant":
        return cls(name.lower())


class ConversionRule(enum.Enum):
    IDENTITY = "identity"
    ANGLE = "angle"
    DISTANCE = "distance"
    VELOCITY = "velocity"
    ACCELERATION = "acceleration"
    FIXED = "fixed"          # raw / scale
    FLAGS = "flags"          # bit i -> names[i]
    BITFIELD = "bitfield"    # list of set bit indices
    ENUM = "enum"            # value -> names[value]


@dataclass(frozen=True, slots=True)
class FieldSpec:
    """One field of a fixed-size record."""
    name: str               # dotted names nest, e.g. "damage.base"
    offset: int             # byte offset within the record
    width: int              # 1, 2 or 4 bytes
    signed: bool = False
    rule: ConversionRule = ConversionRule.IDENTITY
    scale: Optional[int] = None
    optional: bool = False  # negative stored value means "none"
    shift: int = 0
    mask: Optional[int] = None
    names: tuple[str, ...] = ()

    @property
    def end(self) -> int:
        return self.offset + self.width

    @property
    def path(self) -> tuple[str, ...]:
        return tuple(self.name.split("."))


@dataclass(frozen=True, slots=True)
class RecordClassSpec:
    """A named group of same-layout records stored back to back."""
    name: str
    fields: tuple[FieldSpec, ...]
    record_size: int
    record_count: int
    description: str = field(default="", compare=False)
    # dotted fields whose NONE value nulls out their whole group
    null_when: tuple[str, ...] = ()

    @property
    def total_size(self) -> int:
        return self.record_size * self.record_count

    def get_field(self, name: str) -> FieldSpec:
        """Get the field spec with the given (dotted) name."""
        for spec in self.fields:
            if spec.name == name:
                return spec
        raise KeyError(f"{self.name} has no field {name!r}")


# Layout building blocks. Fields are declared in stream order without offsets;
# pack() assigns offsets. padding() advances without emitting a field and
# Overlay re-reads the previous field's bytes under another name.

@dataclass(frozen=True, slots=True)
class Overlay:
    spec: FieldSpec


def u8(name: str, rule: ConversionRule = ConversionRule.IDENTITY, **kw) -> FieldSpec:
    return FieldSpec(name, -1, 1, False, rule, **kw)


def u16(name: str, rule: ConversionRule = ConversionRule.IDENTITY, **kw) -> FieldSpec:
    return FieldSpec(name, -1, 2, False, rule, **kw)


def i16(name: str, rule: ConversionRule = ConversionRule.IDENTITY, **kw) -> FieldSpec:
    return FieldSpec(name, -1, 2, True, rule, **kw)


def u32(name: str, rule: ConversionRule = ConversionRule.IDENTITY, **kw) -> FieldSpec:
    return FieldSpec(name, -1, 4, False, rule, **kw)


def i32(name: str, rule: ConversionRule = ConversionRule.IDENTITY, **kw) -> FieldSpec:
    return FieldSpec(name, -1, 4, True, rule, **kw)


def padding(width: int) -> FieldSpec:
    return FieldSpec("", -1, width)


def pack(*entries: FieldSpec | Overlay) -> tuple[FieldSpec, ...]:
    """Assign consecutive byte offsets to field entries."""
    fields: list[FieldSpec] = []
    pos = 0
    last_offset = 0
    for entry in entries:
        if isinstance(entry, Overlay):
            fields.append(replace(entry.spec, offset=last_offset))
            continue
        if entry.name:
            fields.append(replace(entry, offset=pos))
            last_offset = pos
        pos += entry.width
    return tuple(fields)
