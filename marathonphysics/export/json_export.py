"""Assemble decoded physics into a labelled document and export it as JSON."""
from __future__ import annotations

import json
import logging
from typing import Any, Optional

from marathonphysics.names.loader import NameTable
from marathonphysics.physics.reader import DecodedPhysics

logger = logging.getLogger(__name__)

# class name -> label -> record
PhysicsDocument = dict[str, dict[str, dict[str, Any]]]


def assemble_document(physics: DecodedPhysics, names: Optional[NameTable] = None) -> PhysicsDocument:
    """Key every record by class name then label, preserving file order.

    Labels come from `names` by global index (all classes, file order).
    A name repeated within a class gets its index appended so no record
    is dropped.
    """
    if names is None:
        names = NameTable.empty()

    document: PhysicsDocument = {}
    index = 0
    for decoded in physics.classes:
        entries: dict[str, dict[str, Any]] = {}
        for record in decoded.records:
            label = names.label(index)
            if label in entries:
                label = _unique_label(entries, label, index, decoded.name)
            entries[label] = record
            index += 1
        document[decoded.name] = entries

    logger.info(f"Assembled {index} records in {len(document)} classes")
    return document


def _unique_label(entries: dict[str, Any], label: str, index: int, class_name: str) -> str:
    # "<name> #<index>" can itself be a name from the file; extend until free
    unique = f"{label} #{index}"
    while unique in entries:
        unique = f"{unique} #{index}"
    logger.warning(f"{class_name}: duplicate label {label!r} for record {index}, using {unique!r}")
    return unique


def export_json(document: PhysicsDocument, indent: Optional[int] = 2) -> str:
    """Serialize a document. Key order is preserved, never sorted."""
    return json.dumps(document, indent=indent, ensure_ascii=False) + "\n"
