"""Exceptions raised while decoding physics files."""
from __future__ import annotations

from pathlib import Path
from typing import Optional


class PhysicsError(Exception):
    """Base class for decode failures reported to the user."""


class TruncatedFile(PhysicsError, ValueError):
    """The input is shorter than the selected variant's layout requires."""

    def __init__(self, class_name: str, offset: int, required: int, available: int):
        self.class_name = class_name
        self.offset = offset
        self.required = required
        self.available = available
        super().__init__(
            f"truncated physics file: {class_name} needs bytes {offset}..{offset + required} "
            f"but the file ends at {available}"
        )


class MalformedRecord(PhysicsError, ValueError):
    """A record slice or field layout disagrees with its record size.

    Indicates a defect in a layout table, not bad input.
    """

    def __init__(self, class_name: str, message: str, offset: Optional[int] = None):
        self.class_name = class_name
        self.offset = offset
        where = f" at byte {offset}" if offset is not None else ""
        super().__init__(f"malformed {class_name} record{where}: {message}")


class NameFileUnreadable(PhysicsError, OSError):
    """A name database was requested but could not be read."""

    def __init__(self, path: Path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"unable to read name database {path}: {reason}")

    def __str__(self) -> str:
        return f"unable to read name database {self.path}: {self.reason}"
