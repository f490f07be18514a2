"""
Mappings CLI
=============

Click-based command-line interface for the mapping translation engine.

Usage::

    alloy-mappings parse client_mappings.txt
    alloy-mappings parse client_mappings.txt --output table.json
    alloy-mappings parse client_mappings.txt --format all
    alloy-mappings lookup client_mappings.txt net.minecraft.world.entity.Entity
    alloy-mappings lookup client_mappings.txt abc --namespace obfuscated --member a
    alloy-mappings remap client_mappings.txt "(Lnet/minecraft/world/entity/Entity;)V"
    alloy-mappings encode void int net.minecraft.world.entity.Entity

A mapping file that cannot be read or parsed is reported and the command
exits with status 1; no command ever runs against a partial table.

References:
    - Click Documentation. https://click.palletsprojects.com/
"""

from __future__ import annotations

import json
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

import click
from rich.markup import escape

from shared.config import AlloyConfig
from shared.console import AlloyConsole
from shared.logger import AlloyLogger

from mappings.core.descriptor import to_descriptor, to_method_descriptor
from mappings.core.engine import MappingEngine
from mappings.core.errors import MalformedMappingError, MappingError
from mappings.core.models import Namespace, RemapDirection
from mappings.core.symbol_table import SymbolTable
from mappings.output.console import MappingsConsoleOutput
from mappings.output.report import MappingsReportGenerator


_NAMESPACE_CHOICES = {
    "any": None,
    "deobfuscated": Namespace.DEOBFUSCATED,
    "obfuscated": Namespace.OBFUSCATED,
}

_DIRECTION_CHOICES = {
    "obfuscated": RemapDirection.TO_OBFUSCATED,
    "deobfuscated": RemapDirection.TO_DEOBFUSCATED,
}

_OUTPUT_FORMATS = ["console", "json", "all"]


# ===================================================================== #
#  CLI Group
# ===================================================================== #

@click.group()
@click.option(
    "--config", "-c",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="Path to an Alloy configuration file (TOML).",
)
@click.option(
    "--verbose", "-v",
    is_flag=True,
    default=False,
    help="Enable debug logging.",
)
@click.option(
    "--quiet", "-q",
    is_flag=True,
    default=False,
    help="Suppress log and console output; machine output is still printed.",
)
@click.pass_context
def cli(
    ctx: click.Context,
    config: Optional[str],
    verbose: bool,
    quiet: bool,
) -> None:
    """Alloy Mappings -- ProGuard mapping translation engine.

    Parse mapping files, look up classes and members in either namespace,
    and translate type descriptors between namespaces.
    """
    ctx.ensure_object(dict)

    alloy_config = AlloyConfig.load(config)
    settings = alloy_config.global_settings
    logger = AlloyLogger(
        "mappings.cli",
        log_level="DEBUG" if verbose else settings.log_level,
        log_file=settings.log_file,
        json_logs=settings.log_json,
        console_output=not quiet,
    )
    console = AlloyConsole(quiet=quiet)

    ctx.obj["config"] = alloy_config
    ctx.obj["console"] = console
    ctx.obj["engine"] = MappingEngine(alloy_config, logger)
    ctx.obj["display"] = MappingsConsoleOutput(console)


def _load_table(ctx: click.Context, file: str) -> SymbolTable:
    """Load *file* or abort the command with exit status 1."""
    engine: MappingEngine = ctx.obj["engine"]
    console: AlloyConsole = ctx.obj["console"]
    try:
        with console.status(f"Parsing {file}..."):
            return engine.load(file)
    except MalformedMappingError as exc:
        console.error(
            f"Malformed mapping file {file} at line {exc.line_number}: "
            f"{exc.reason}"
        )
        console.print(f"  [alloy.dim]{escape(exc.line)}[/alloy.dim]")
    except (MappingError, OSError, UnicodeDecodeError) as exc:
        console.error(f"Cannot load mapping file {file}: {exc}")
    sys.exit(1)


# ===================================================================== #
#  Subcommands
# ===================================================================== #

@cli.command()
@click.argument("file", type=click.Path(dir_okay=False))
@click.option(
    "--format", "-f",
    "output_format",
    type=click.Choice(_OUTPUT_FORMATS, case_sensitive=False),
    default=None,
    help="Output format.  Default: [mappings] output_format from the config.",
)
@click.option(
    "--json", "json_output",
    is_flag=True,
    default=False,
    help="Print the full table as JSON to stdout.",
)
@click.option(
    "--output", "-o",
    "output_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="JSON report path.  Default: a timestamped file in the output directory.",
)
@click.pass_context
def parse(
    ctx: click.Context,
    file: str,
    output_format: Optional[str],
    json_output: bool,
    output_path: Optional[str],
) -> None:
    """Parse FILE and summarise the resulting symbol table."""
    config: AlloyConfig = ctx.obj["config"]
    console: AlloyConsole = ctx.obj["console"]
    fmt = (output_format or config.mappings.output_format).lower()
    if fmt not in _OUTPUT_FORMATS:
        raise click.BadParameter(
            f"unknown output_format {fmt!r} in configuration",
            param_hint="[mappings] output_format",
        )

    table = _load_table(ctx, file)
    reporter = MappingsReportGenerator()

    if json_output:
        click.echo(json.dumps(reporter.build_report(table, file), indent=2))
        return

    if len(table) == 0:
        console.warning(f"No class mappings found in {file}")

    if fmt in ("console", "all"):
        ctx.obj["display"].display_summary(table.stats, file)

    if fmt in ("json", "all") or output_path:
        json_path = output_path or _default_output_path(
            config.global_settings.output_dir
        )
        path = reporter.generate_json(table, json_path, source=file)
        console.success(f"JSON report saved: {path}")

    if fmt == "json":
        stats = table.stats
        console.blank()
        console.info(
            f"Parsed {stats.class_count:,} classes, {stats.field_count:,} fields "
            f"and {stats.method_count:,} methods"
        )


def _default_output_path(output_dir: str) -> str:
    """Timestamped report path inside *output_dir*."""
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    directory = Path(output_dir)
    directory.mkdir(parents=True, exist_ok=True)
    return str(directory / f"alloy_mappings_{timestamp}.json")


@cli.command()
@click.argument("file", type=click.Path(dir_okay=False))
@click.argument("name")
@click.option(
    "--member", "-m",
    default=None,
    help="Member (field or method) name to look up within the class.",
)
@click.option(
    "--descriptor", "-d",
    default=None,
    help="Member descriptor, in the same namespace as the names.",
)
@click.option(
    "--namespace", "-n",
    type=click.Choice(list(_NAMESPACE_CHOICES), case_sensitive=False),
    default="any",
    help="Namespace of NAME and --member.  Default: try both.",
)
@click.pass_context
def lookup(
    ctx: click.Context,
    file: str,
    name: str,
    member: Optional[str],
    descriptor: Optional[str],
    namespace: str,
) -> None:
    """Look up class NAME (and optionally one member) in FILE."""
    table = _load_table(ctx, file)
    console: AlloyConsole = ctx.obj["console"]
    display: MappingsConsoleOutput = ctx.obj["display"]
    ns = _NAMESPACE_CHOICES[namespace.lower()]

    class_mapping = table.find_class(name, ns)
    if class_mapping is None:
        console.error(f"No class named {name!r} in {file}")
        sys.exit(1)

    if member is None:
        display.display_class(class_mapping)
        return

    found = table.find_member(class_mapping, member, ns, descriptor)
    if found is None:
        console.error(
            f"No member named {member!r} in {class_mapping.deobfuscated_name}"
        )
        sys.exit(1)
    display.display_member(class_mapping, found)


@cli.command()
@click.argument("file", type=click.Path(dir_okay=False))
@click.argument("descriptor")
@click.option(
    "--to", "target",
    type=click.Choice(list(_DIRECTION_CHOICES), case_sensitive=False),
    default="obfuscated",
    help="Namespace to translate DESCRIPTOR into.  Default: obfuscated.",
)
@click.option(
    "--plain", "-p",
    is_flag=True,
    default=False,
    help="Print only the remapped descriptor.",
)
@click.pass_context
def remap(
    ctx: click.Context,
    file: str,
    descriptor: str,
    target: str,
    plain: bool,
) -> None:
    """Translate the class references in DESCRIPTOR using FILE."""
    table = _load_table(ctx, file)
    direction = _DIRECTION_CHOICES[target.lower()]
    remapped = table.remap_descriptor(descriptor, direction)

    if plain:
        click.echo(remapped)
        return
    ctx.obj["display"].display_remap(descriptor, remapped, direction)


@cli.command()
@click.argument("type_name")
@click.argument("param_types", nargs=-1)
@click.option(
    "--field", "-f",
    "field_type",
    is_flag=True,
    default=False,
    help="Encode TYPE_NAME as a field descriptor instead of a method return type.",
)
def encode(type_name: str, param_types: tuple[str, ...], field_type: bool) -> None:
    """Print the JVM descriptor for source type names.

    TYPE_NAME is the return type; PARAM_TYPES are the parameter types in
    declaration order.  With --field, TYPE_NAME alone is encoded.
    """
    if field_type:
        if param_types:
            raise click.UsageError("--field takes exactly one type name.")
        click.echo(to_descriptor(type_name))
        return
    click.echo(to_method_descriptor(type_name, param_types))


# ---------------------------------------------------------------------------
# Module entry point
# ---------------------------------------------------------------------------

def main() -> None:
    """Entry point for ``alloy-mappings`` and ``python -m mappings``."""
    cli(obj={})


if __name__ == "__main__":
    main()
