"""Compare two decoded physics documents record by record."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from marathonphysics.export.json_export import PhysicsDocument


@dataclass
class FieldChange:
    """A single field-level change between two versions of a record."""
    class_name: str
    label: str
    field_name: str
    old_value: Any
    new_value: Any


@dataclass
class DiffResult:
    # (class_name, label) pairs present on one side only
    added: list[tuple[str, str]] = field(default_factory=list)
    removed: list[tuple[str, str]] = field(default_factory=list)
    field_changes: dict[tuple[str, str], list[FieldChange]] = field(default_factory=dict)

    @property
    def modified(self) -> list[tuple[str, str]]:
        return list(self.field_changes)

    @property
    def total_changes(self) -> int:
        return len(self.added) + len(self.removed) + len(self.field_changes)


def flatten(record: dict[str, Any], prefix: str = "") -> dict[str, Any]:
    """Nested record -> {"a.b": value}. Lists stay as values."""
    flat: dict[str, Any] = {}
    for key, value in record.items():
        name = f"{prefix}{key}"
        if isinstance(value, dict):
            flat.update(flatten(value, f"{name}."))
        else:
            flat[name] = value
    return flat


class DiffEngine:
    """Find added, removed, and modified records between two documents."""

    def compare(self, old: PhysicsDocument, new: PhysicsDocument,
                class_name: Optional[str] = None) -> DiffResult:
        result = DiffResult()

        for cname in _ordered_union(old, new):
            if class_name is not None and cname != class_name:
                continue
            old_records = old.get(cname, {})
            new_records = new.get(cname, {})

            for label in _ordered_union(old_records, new_records):
                if label not in old_records:
                    result.added.append((cname, label))
                elif label not in new_records:
                    result.removed.append((cname, label))
                else:
                    changes = self._diff_fields(cname, label, old_records[label], new_records[label])
                    if changes:
                        result.field_changes[(cname, label)] = changes

        return result

    def _diff_fields(self, class_name: str, label: str,
                     old_record: dict[str, Any], new_record: dict[str, Any]) -> list[FieldChange]:
        old_fields = flatten(old_record)
        new_fields = flatten(new_record)

        changes = []
        for name in _ordered_union(old_fields, new_fields):
            old_val = old_fields.get(name)
            new_val = new_fields.get(name)
            if old_val != new_val:
                changes.append(FieldChange(
                    class_name=class_name,
                    label=label,
                    field_name=name,
                    old_value=old_val,
                    new_value=new_val,
                ))
        return changes


def _ordered_union(first: dict, second: dict) -> list:
    # keys of `first` in order, then keys only in `second`
    keys = list(first)
    keys.extend(k for k in second if k not in first)
    return keys
