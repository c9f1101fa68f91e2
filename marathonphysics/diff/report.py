"""Format diff results as text or JSON."""
from __future__ import annotations

import json
from typing import Any

from marathonphysics.diff.engine import DiffResult


def format_diff(result: DiffResult, old_label: str, new_label: str, fmt: str = "text") -> str:
    """Format a diff result in the specified format."""
    if fmt == "json":
        return _format_json(result, old_label, new_label)
    return _format_text(result, old_label, new_label)


def _value(value: Any) -> str:
    if value is None:
        return "(none)"
    if isinstance(value, float):
        return f"{value:g}"
    return str(value)


def _format_text(result: DiffResult, old_label: str, new_label: str) -> str:
    lines = []
    lines.append(f"Diff: {old_label} -> {new_label}")
    lines.append(f"Added: {len(result.added)}  Removed: {len(result.removed)}  Modified: {len(result.modified)}")
    lines.append("")

    if result.added:
        lines.append(f"=== ADDED ({len(result.added)}) ===")
        for class_name, label in result.added:
            lines.append(f"  + {class_name:<24}  {label}")
        lines.append("")

    if result.removed:
        lines.append(f"=== REMOVED ({len(result.removed)}) ===")
        for class_name, label in result.removed:
            lines.append(f"  - {class_name:<24}  {label}")
        lines.append("")

    if result.field_changes:
        lines.append(f"=== MODIFIED ({len(result.field_changes)}) ===")
        for (class_name, label), changes in result.field_changes.items():
            lines.append(f"  ~ {class_name:<24}  {label}")
            for change in changes:
                lines.append(f"      {change.field_name}: {_value(change.old_value)} -> {_value(change.new_value)}")

    return "\n".join(lines)


def _format_json(result: DiffResult, old_label: str, new_label: str) -> str:
    data = {
        "old": old_label,
        "new": new_label,
        "added": [{"class": c, "label": label} for c, label in result.added],
        "removed": [{"class": c, "label": label} for c, label in result.removed],
        "modified": [
            {
                "class": class_name,
                "label": label,
                "changes": [
                    {"field": ch.field_name, "old": ch.old_value, "new": ch.new_value}
                    for ch in changes
                ],
            }
            for (class_name, label), changes in result.field_changes.items()
        ],
    }
    return json.dumps(data, indent=2, ensure_ascii=False)
