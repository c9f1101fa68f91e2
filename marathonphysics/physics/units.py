"""Conversions from stored integers to physical quantities.

Angles are fractions of FULL_CIRCLE, distances are fractions of WORLD_ONE.
Velocities and accelerations keep the tick as their time basis
(world units per tick, world units per tick per tick).
"""
from __future__ import annotations

from marathonphysics.physics.constants import FULL_CIRCLE, WORLD_ONE


def to_degrees(raw: int, scale: int = 1) -> float:
    """Angle units (optionally fixed point with `scale`) to degrees. FULL_CIRCLE maps to 360.0."""
    return raw * 360.0 / (FULL_CIRCLE * scale)


def to_world_units(raw: int, scale: int = WORLD_ONE) -> float:
    """Internal distance units to world units."""
    return raw / scale


def to_velocity(raw: int, scale: int = WORLD_ONE) -> float:
    """World units per tick."""
    return to_world_units(raw, scale)


def to_acceleration(raw: int, scale: int = WORLD_ONE) -> float:
    """World units per tick per tick."""
    return to_world_units(raw, scale)


def from_fixed(raw: int, scale: int) -> float:
    """Generic fixed point: raw / scale."""
    if scale <= 0:
        raise ValueError(f"fixed point scale must be positive, got {scale}")
    return raw / scale


def set_bits(raw: int, width: int) -> list[int]:
    """Indices of the set bits in a `width`-byte word, lowest first."""
    return [bit for bit in range(width * 8) if raw & (1 << bit)]


def decode_flags(raw: int, names: tuple[str, ...]) -> dict[str, bool]:
    """Map bit i of `raw` to names[i]."""
    return {name: bool(raw & (1 << bit)) for bit, name in enumerate(names)}
