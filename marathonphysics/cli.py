"""Click CLI for the Marathon physics converter."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import click

from marathonphysics.errors import PhysicsError
from marathonphysics.physics.records import FormatVariant
from marathonphysics.profiles import (
    Config,
    VariantProfile,
    load_config,
    resolve_indent,
    resolve_namedb,
    save_config,
)

logger = logging.getLogger(__name__)

_VARIANT_CHOICE = click.Choice([v.value for v in FormatVariant], case_sensitive=False)

_LOG_LEVELS = {0: logging.WARNING, 1: logging.INFO}


@click.group()
@click.option("--verbose", "-v", count=True, help="Log progress to stderr (-vv for debug)")
@click.version_option(package_name="marathonphysics")
def cli(verbose: int):
    """mphys - Marathon physics file converter.

    Decode Marathon 1 and Marathon 2 physics files into JSON for
    inspecting and diffing physics tuning data.
    """
    logging.basicConfig(
        level=_LOG_LEVELS.get(verbose, logging.DEBUG),
        format="%(levelname)s %(name)s: %(message)s",
    )


def _decode_document(physics_path: Path, variant: FormatVariant, namedb: Optional[Path],
                     config: Optional[Config] = None):
    """Read, decode and label a physics file. Raises ClickException on failure."""
    from marathonphysics.export.json_export import assemble_document
    from marathonphysics.names.loader import load_names
    from marathonphysics.physics.reader import PhysicsReader

    namedb = resolve_namedb(namedb, variant, config)
    try:
        # Names first: an unreadable name file fails before the physics file is touched
        names = load_names(namedb)
        physics = PhysicsReader(physics_path, variant).read()
    except PhysicsError as e:
        raise click.ClickException(str(e))
    except OSError as e:
        raise click.ClickException(f"unable to read {physics_path}: {e.strerror or e}")

    logger.info(f"Decoded {physics.record_count} records from {physics_path}")
    return assemble_document(physics, names)


def _convert(variant: FormatVariant, physics_path: Path, namedb: Optional[Path],
             output: Optional[Path], indent: Optional[int]):
    from marathonphysics.export.json_export import export_json

    config = load_config()
    document = _decode_document(physics_path, variant, namedb, config)
    # Serialize fully before writing anything
    data = export_json(document, indent=resolve_indent(indent, config))

    if output:
        try:
            output.write_text(data, encoding="utf-8")
        except OSError as e:
            raise click.ClickException(f"unable to write {output}: {e.strerror or e}")
        click.echo(f"Exported to {output}", err=True)
    else:
        click.echo(data, nl=False)


_physics_argument = click.argument(
    "physics_path", type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
_namedb_option = click.option(
    "--namedb", type=click.Path(path_type=Path), default=None,
    help="Name database: one name per line, line N names record N (default: from config)",
)
_output_option = click.option(
    "--output", "-o", type=click.Path(dir_okay=False, path_type=Path), default=None,
    help="Output file path (default: stdout)",
)
_indent_option = click.option(
    "--indent", type=int, default=None,
    help="JSON indentation; 0 for compact output (default: from config, else 2)",
)


@cli.command("convert-m1-physics")
@_physics_argument
@_namedb_option
@_output_option
@_indent_option
def convert_m1_physics(physics_path: Path, namedb: Optional[Path], output: Optional[Path],
                       indent: Optional[int]):
    """Convert a Marathon 1 physics file into JSON."""
    _convert(FormatVariant.MARATHON_ONE, physics_path, namedb, output, indent)


@cli.command("convert-m2-physics")
@_physics_argument
@_namedb_option
@_output_option
@_indent_option
def convert_m2_physics(physics_path: Path, namedb: Optional[Path], output: Optional[Path],
                       indent: Optional[int]):
    """Convert a Marathon 2 physics file into JSON."""
    _convert(FormatVariant.MARATHON_TWO, physics_path, namedb, output, indent)


@cli.command()
@click.argument("variant", type=_VARIANT_CHOICE)
@click.option("--fields", "show_fields", is_flag=True, help="List every field with its offset and rule")
def layout(variant: str, show_fields: bool):
    """Show the record layout of a physics file variant."""
    from marathonphysics.physics.layouts import required_size, schema_for

    fv = FormatVariant.from_name(variant)
    classes = schema_for(fv)

    click.echo(f"{'Class':<24} {'Offset':>7} {'Size':>5} {'Count':>6} {'Bytes':>7} {'Fields':>7}  Description")
    click.echo("-" * 96)
    pos = 0
    for spec in classes:
        click.echo(f"{spec.name:<24} {pos:>7,} {spec.record_size:>5} {spec.record_count:>6} "
                   f"{spec.total_size:>7,} {len(spec.fields):>7}  {spec.description}")
        if show_fields:
            for fs in spec.fields:
                kind = f"{'i' if fs.signed else 'u'}{fs.width * 8}"
                extra = f" /{fs.scale}" if fs.scale else ""
                opt = " optional" if fs.optional else ""
                click.echo(f"    {fs.offset:>4}  {kind:<4} {fs.rule.value:<12} {fs.name}{extra}{opt}")
        pos += spec.total_size
    click.echo(f"\nRequired file size: {required_size(fv):,} bytes")


@cli.command()
@click.argument("variant", type=_VARIANT_CHOICE)
@click.argument("old_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("new_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@_namedb_option
@click.option("--format", "fmt", type=click.Choice(["text", "json"]), default="text")
@click.option("--class", "class_name", default=None, help="Only compare one record class")
def diff(variant: str, old_path: Path, new_path: Path, namedb: Optional[Path],
         fmt: str, class_name: Optional[str]):
    """Compare two physics files of the same variant."""
    from marathonphysics.diff.engine import DiffEngine
    from marathonphysics.diff.report import format_diff

    fv = FormatVariant.from_name(variant)
    config = load_config()
    old_doc = _decode_document(old_path, fv, namedb, config)
    new_doc = _decode_document(new_path, fv, namedb, config)

    if class_name is not None and class_name not in old_doc:
        available = ", ".join(old_doc)
        raise click.UsageError(f"Unknown record class '{class_name}'. Available: {available}")

    result = DiffEngine().compare(old_doc, new_doc, class_name)
    click.echo(format_diff(result, str(old_path), str(new_path), fmt))


@cli.command()
def init():
    """Set up name databases for each variant (interactive)."""
    config = load_config()

    if config.variants:
        click.echo("Current configuration:")
        for variant, p in config.variants.items():
            click.echo(f"  {variant.value}: {p.namedb or '(no name database)'}")
        click.echo()
        if not click.confirm("Overwrite existing configuration?", default=False):
            click.echo("Aborted.")
            return
        config = Config(indent=config.indent)

    click.echo("Set up mphys. Each variant can have a default name database (leave blank for none).\n")

    for variant in FormatVariant:
        while True:
            raw = click.prompt(f"Name database for {variant.value}", default="", show_default=False)
            raw = raw.strip().strip('"').strip("'")
            if not raw:
                break
            path = Path(raw)
            if path.is_file():
                config.variants[variant] = VariantProfile(variant=variant, namedb=path)
                break
            click.echo(f"File not found: {path}")

    config.indent = click.prompt("JSON indentation", default=config.indent, type=int)

    saved_path = save_config(config)
    click.echo(f"\nConfig saved to {saved_path}\n")

    click.echo("Example commands:")
    click.echo("  mphys convert-m2-physics Physics.phyA > physics.json")
    click.echo("  mphys layout m1")
    click.echo("  mphys diff m2 old.phyA new.phyA")
