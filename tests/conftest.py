import struct

import pytest

from marathonphysics import profiles
from marathonphysics.physics.layouts import required_size
from marathonphysics.physics.records import FormatVariant, RecordClassSpec


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Point the config file at a temp path so tests never read the user's config."""
    config_path = tmp_path / "config" / "config.toml"
    monkeypatch.setattr(profiles, "get_config_path", lambda: config_path)
    return config_path


def _pattern(size: int, seed: int = 0) -> bytes:
    return bytes((i * 7 + seed) % 256 for i in range(size))


@pytest.fixture
def make_physics():
    """Build a physics file of exactly the variant's required size (plus `extra`)."""
    def _make(variant: FormatVariant, seed: int = 0, extra: bytes = b"") -> bytes:
        return _pattern(required_size(variant), seed) + extra
    return _make


@pytest.fixture
def put_field():
    """Store a raw integer into a record buffer at a field's offset."""
    def _put(buf: bytearray, spec: RecordClassSpec, name: str, raw: int) -> None:
        fs = spec.get_field(name)
        signed = fs.signed or raw < 0
        code = {1: "b", 2: "h", 4: "i"}[fs.width] if signed else {1: "B", 2: "H", 4: "I"}[fs.width]
        struct.pack_into(">" + code, buf, fs.offset, raw)
    return _put


@pytest.fixture
def physics_file(tmp_path, make_physics):
    """Write a valid Marathon 2 physics file to disk."""
    path = tmp_path / "Physics.phyA"
    path.write_bytes(make_physics(FormatVariant.MARATHON_TWO))
    return path
