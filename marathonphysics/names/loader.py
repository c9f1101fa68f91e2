"""Name database: human-readable labels for records by global index.

Format: plain text, one name per line. Line N (0-indexed) names the Nth
record of the physics file, counting across all record classes in file
order. Blank lines, and indices past the end of the file, fall back to the
record's numeric index.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Optional

from marathonphysics.errors import NameFileUnreadable

logger = logging.getLogger(__name__)


class NameTable:
    """Index-addressed optional names."""

    def __init__(self, names: Optional[list[Optional[str]]] = None):
        self.names: list[Optional[str]] = names if names is not None else []

    @classmethod
    def empty(cls) -> "NameTable":
        return cls()

    @classmethod
    def from_lines(cls, lines: Iterable[str]) -> "NameTable":
        """Build from text lines; blank lines become gaps."""
        names: list[Optional[str]] = []
        for line in lines:
            line = line.strip()
            names.append(line or None)
        return cls(names)

    @classmethod
    def load(cls, path: Path) -> "NameTable":
        """Load a name file. Any read failure is NameFileUnreadable."""
        try:
            data = Path(path).read_bytes()
        except OSError as e:
            raise NameFileUnreadable(Path(path), e.strerror or str(e)) from e

        # Only "\n" ends a line; str.splitlines() would also split on U+2028, \x0c etc.
        lines = data.decode("utf-8", errors="replace").split("\n")
        if lines[-1] == "":
            lines.pop()
        table = cls.from_lines(line.removesuffix("\r") for line in lines)
        logger.info(f"Loaded {table.count} names ({len(table)} lines) from {path}")
        return table

    def lookup(self, index: int) -> Optional[str]:
        """Name at `index`, or None if absent or blank."""
        if 0 <= index < len(self.names):
            return self.names[index]
        return None

    def label(self, index: int) -> str:
        """Name at `index`, falling back to the index as a decimal string."""
        name = self.lookup(index)
        return name if name is not None else str(index)

    @property
    def count(self) -> int:
        """Number of non-blank names."""
        return sum(1 for name in self.names if name is not None)

    def __len__(self) -> int:
        return len(self.names)


def load_names(path: Optional[Path]) -> NameTable:
    """Load `path` if given, else an empty table (all labels numeric)."""
    if path is None:
        return NameTable.empty()
    return NameTable.load(path)
