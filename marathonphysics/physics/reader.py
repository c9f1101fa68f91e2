"""Whole-file decoder for Marathon physics files.

A physics file is the variant's record classes stored back to back with no
headers: record_count * record_size bytes per class, in layout order. The
variant is always given by the caller, never sniffed from the data.

Bytes past the end of the last class are ignored (old files may carry
vendor padding); they are reported as `trailing_bytes` and logged.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator

from marathonphysics.errors import TruncatedFile
from marathonphysics.physics.decoders import decode_record
from marathonphysics.physics.layouts import schema_for
from marathonphysics.physics.records import DecodedRecord, FormatVariant, RecordClassSpec

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class DecodedClass:
    """All records of one class, in file order."""
    spec: RecordClassSpec
    offset: int                  # byte offset of the first record
    records: list[DecodedRecord] = field(default_factory=list)

    @property
    def name(self) -> str:
        return self.spec.name


@dataclass(slots=True)
class DecodedPhysics:
    """Result of decoding one physics file."""
    variant: FormatVariant
    classes: list[DecodedClass] = field(default_factory=list)
    trailing_bytes: int = 0

    @property
    def record_count(self) -> int:
        return sum(len(c.records) for c in self.classes)

    def get_class(self, name: str) -> DecodedClass:
        for decoded in self.classes:
            if decoded.name == name:
                return decoded
        raise KeyError(name)


def check_length(data: bytes, classes: tuple[RecordClassSpec, ...]) -> int:
    """Verify `data` covers every class. Returns the number of bytes required."""
    pos = 0
    for spec in classes:
        if pos + spec.total_size > len(data):
            raise TruncatedFile(spec.name, pos, spec.total_size, len(data))
        pos += spec.total_size
    return pos


def iter_records(data: bytes, spec: RecordClassSpec, start: int) -> Iterator[DecodedRecord]:
    """Decode the records of one class starting at byte `start`."""
    size = spec.record_size
    for i in range(spec.record_count):
        pos = start + i * size
        yield decode_record(data[pos:pos + size], spec, pos)


def decode_physics(data: bytes, variant: FormatVariant) -> DecodedPhysics:
    """Decode every record class of `variant` from `data`."""
    classes = schema_for(variant)
    # Check the full length up front so a short file fails before any decoding
    required = check_length(data, classes)

    result = DecodedPhysics(variant=variant)
    pos = 0
    for spec in classes:
        decoded = DecodedClass(spec=spec, offset=pos, records=list(iter_records(data, spec, pos)))
        logger.debug(f"{spec.name}: {len(decoded.records)} records at offset {pos}")
        result.classes.append(decoded)
        pos += spec.total_size

    result.trailing_bytes = len(data) - required
    if result.trailing_bytes:
        logger.info(f"Ignoring {result.trailing_bytes} trailing bytes after offset {required}")
    return result


class PhysicsReader:
    """Reads and decodes a physics file of a given variant."""

    def __init__(self, path: Path, variant: FormatVariant):
        self.path = path
        self.variant = variant

    def read(self) -> DecodedPhysics:
        with open(self.path, "rb") as f:
            data = f.read()
        logger.info(f"Read {len(data):,} bytes from {self.path}")
        return decode_physics(data, self.variant)


def main():
    """Quick test: decode a physics file and print record counts per class."""
    import sys
    if len(sys.argv) < 3:
        print("Usage: python -m marathonphysics.physics.reader <m1|m2> <path/to/physics>")
        sys.exit(1)

    variant = FormatVariant.from_name(sys.argv[1])
    path = Path(sys.argv[2])
    physics = PhysicsReader(path, variant).read()

    print(f"{'Class':<24} {'Offset':>8} {'Records':>8}")
    print("-" * 42)
    for decoded in physics.classes:
        print(f"{decoded.name:<24} {decoded.offset:>8,} {len(decoded.records):>8,}")
    print(f"\nTotal records: {physics.record_count:,}")
    if physics.trailing_bytes:
        print(f"Trailing bytes ignored: {physics.trailing_bytes:,}")


if __name__ == "__main__":
    main()
