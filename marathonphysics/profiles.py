"""Config file: per-variant name databases and output defaults."""
from __future__ import annotations

import sys
from dataclasses import dataclass, field
from pathlib import Path

import click

from marathonphysics import config as _config
from marathonphysics.config import DEFAULT_INDENT
from marathonphysics.physics.records import FormatVariant

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib


@dataclass
class VariantProfile:
    variant: FormatVariant
    namedb: Path | None = None


@dataclass
class Config:
    indent: int = DEFAULT_INDENT
    variants: dict[FormatVariant, VariantProfile] = field(default_factory=dict)


def get_config_path() -> Path:
    return _config.get_config_path()


def load_config() -> Config:
    """Read TOML config. Returns empty Config if file missing."""
    path = get_config_path()
    if not path.exists():
        return Config()

    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise click.UsageError(f"Invalid config file {path}: {e}")

    indent = data.get("indent", DEFAULT_INDENT)
    if isinstance(indent, bool) or not isinstance(indent, int):
        raise click.UsageError(f"Invalid config file {path}: indent must be an integer, got {indent!r}")
    config = Config(indent=indent)

    variants = data.get("variants", {})
    if not isinstance(variants, dict):
        raise click.UsageError(f"Invalid config file {path}: [variants] must be a table")
    for name, info in variants.items():
        try:
            variant = FormatVariant.from_name(name)
        except ValueError:
            raise click.UsageError(f"Unknown variant '{name}' in {path}. Use m1 or m2.")
        if not isinstance(info, dict):
            raise click.UsageError(f"Invalid config file {path}: [variants.{name}] must be a table")
        namedb = info.get("namedb")
        if namedb is not None and not isinstance(namedb, str):
            raise click.UsageError(f"Invalid config file {path}: variants.{name}.namedb must be a string")
        config.variants[variant] = VariantProfile(
            variant=variant,
            namedb=Path(namedb) if namedb else None,
        )
    return config


def save_config(config: Config) -> Path:
    """Write config to TOML using literal strings for paths."""
    path = get_config_path()
    path.parent.mkdir(parents=True, exist_ok=True)

    lines: list[str] = [f"indent = {config.indent}", ""]

    for variant, profile in config.variants.items():
        lines.append(f"[variants.{variant.value}]")
        if profile.namedb is not None:
            # Use TOML literal strings (single quotes) so backslashes aren't escapes
            lines.append(f"namedb = '{profile.namedb}'")
        lines.append("")

    path.write_text("\n".join(lines), encoding="utf-8")
    return path


def resolve_namedb(namedb: Path | None, variant: FormatVariant,
                   config: Config | None = None) -> Path | None:
    """Resolve name database path: --namedb > configured variant namedb > none.

    Existence is not checked here; a path that cannot be read fails when loaded.
    """
    if namedb is not None:
        return namedb
    if config is None:
        config = load_config()
    profile = config.variants.get(variant)
    return profile.namedb if profile else None


def resolve_indent(indent: int | None, config: Config | None = None) -> int | None:
    """--indent > config indent. Zero or less means compact output."""
    if indent is None:
        if config is None:
            config = load_config()
        indent = config.indent
    return indent if indent > 0 else None
