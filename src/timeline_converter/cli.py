"""
Command-line interface for timeline-converter.

Provides commands for converting location-history exports, inspecting
their format, and managing default settings.
"""

import logging
import sys

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as get_version
from pathlib import Path
from typing import Any

import click

from click.core import ParameterSource

from timeline_converter.config import (
    SETTINGS,
    get_config_path,
    get_output_defaults,
    get_processing_defaults,
    load_config,
    set_setting,
    unset_setting,
)
from timeline_converter.constants import MAX_RECORDS_PER_CHUNK
from timeline_converter.export import build_artifacts, write_artifacts
from timeline_converter.logging_config import setup_logging
from timeline_converter.models.results import ConversionResult, ProcessingOptions
from timeline_converter.parsers.base import UnrecognizedFormatError
from timeline_converter.parsers.register_all import register_all_parsers
from timeline_converter.parsers.registry import parser_registry
from timeline_converter.processing.pipeline import (
    ConversionError,
    convert_files,
    load_document,
)

logger = logging.getLogger(__name__)

try:
    __version__ = get_version("timeline-converter")
except PackageNotFoundError:
    __version__ = "dev"

MAX_DIAGNOSTICS_SHOWN = 20


def _from_flag_or_default(ctx: click.Context, name: str, value: Any, fallback: Any) -> Any:
    """Use the flag if given on the command line, else the configured default."""
    source = ctx.get_parameter_source(name)
    if source is None or source == ParameterSource.DEFAULT:
        return fallback
    return value


def _print_summary(result: ConversionResult, options: ProcessingOptions) -> None:
    counts = result.counts
    stats = result.stats

    click.echo(f"✓ Original records: {counts.original}")
    click.echo(f"✓ Final records:    {counts.final}")
    click.echo(f"  Visits: {counts.visit_count}  Activities: {counts.activity_count}")

    if options.remove_activities or options.remove_duplicates:
        click.echo("\n🧹 Cleaning:")
        if options.remove_activities:
            click.echo(f"  • Removed activities: {stats.removed_activities}")
        if options.remove_duplicates:
            click.echo(f"  • Removed duplicates: {stats.removed_duplicates}")
        click.echo(
            f"  • Total removed: {stats.total_removed} records "
            f"({counts.removed_percent}%)"
        )

    if result.skipped_segments:
        click.echo(f"\nSkipped {result.skipped_segments} segment(s) of unrecognized shape")

    if result.diagnostics:
        click.echo(f"\n⚠️  {len(result.diagnostics)} segment(s) could not be converted:")
        for diagnostic in result.diagnostics[:MAX_DIAGNOSTICS_SHOWN]:
            click.echo(f"  - {diagnostic}")
        hidden = len(result.diagnostics) - MAX_DIAGNOSTICS_SHOWN
        if hidden > 0:
            click.echo(f"  ... and {hidden} more (see log file)")


@click.group()
@click.version_option(__version__, prog_name="timeline-converter")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
@click.option("--quiet", "-q", is_flag=True, help="Only log warnings and errors")
def cli(verbose: bool, quiet: bool) -> None:
    """Timeline Converter: merge and convert location-history exports."""
    setup_logging(verbose=verbose, quiet=quiet)


@cli.command()
@click.argument(
    "files",
    nargs=-1,
    required=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "--output-dir",
    "-o",
    type=click.Path(file_okay=False, path_type=Path),
    help="Directory for output files (default: config or current directory)",
)
@click.option("--basename", help="Output file name stem (default: timeline_converted)")
@click.option(
    "--remove-activities/--keep-activities",
    default=True,
    help="Drop movement records (default: on)",
)
@click.option(
    "--dedup/--no-dedup",
    "remove_duplicates",
    default=True,
    help="Merge duplicate place visits (default: on)",
)
@click.option(
    "--split/--no-split",
    "split_files",
    default=False,
    help=f"Split CSV/KML into files of {MAX_RECORDS_PER_CHUNK} records (default: off)",
)
@click.option("--dry-run", is_flag=True, help="Show results without writing files")
@click.pass_context
def convert(
    ctx: click.Context,
    files: tuple[Path, ...],
    output_dir: Path | None,
    basename: str | None,
    remove_activities: bool,
    remove_duplicates: bool,
    split_files: bool,
    dry_run: bool,
) -> None:
    """Convert and merge Timeline exports into CSV, KML and JSON."""
    defaults = get_processing_defaults()
    options = ProcessingOptions(
        remove_activities=_from_flag_or_default(
            ctx, "remove_activities", remove_activities, defaults.remove_activities
        ),
        remove_duplicates=_from_flag_or_default(
            ctx, "remove_duplicates", remove_duplicates, defaults.remove_duplicates
        ),
        split_files=_from_flag_or_default(
            ctx, "split_files", split_files, defaults.split_files
        ),
    )
    default_dir, default_basename = get_output_defaults()

    click.echo(f"📂 Processing {len(files)} file(s)...")
    try:
        result = convert_files(list(files), options)
    except ConversionError as e:
        logger.debug("Conversion failed", exc_info=True)
        raise click.ClickException(f"Error processing files: {e}") from e

    _print_summary(result, options)
    artifacts = build_artifacts(result.records, split_files=options.split_files)

    if result.counts.final > MAX_RECORDS_PER_CHUNK and not artifacts.is_split:
        click.echo(
            f"\n⚠️  Note: {result.counts.final} records. Google My Maps limits imports "
            f"to {MAX_RECORDS_PER_CHUNK:,} rows; use --split to chunk the CSV/KML output."
        )
    elif artifacts.is_split:
        sizes = ", ".join(str(size) for size in artifacts.chunk_sizes)
        click.echo(f"\n✂️  Split into {len(artifacts.chunk_sizes)} parts ({sizes})")

    if dry_run:
        click.echo("\n🔍 DRY RUN MODE - No files written")
        return

    target_dir = output_dir or Path(default_dir)
    written = write_artifacts(artifacts, target_dir, basename or default_basename)
    click.echo(f"\n💾 Wrote {len(written)} file(s) to {target_dir}:")
    for path in written:
        click.echo(f"  {path.name}")


@cli.command()
@click.argument(
    "files",
    nargs=-1,
    required=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
def detect(files: tuple[Path, ...]) -> None:
    """Show which export format each file uses."""
    register_all_parsers()
    failures = 0

    for path in files:
        try:
            document = load_document(path)
            parser = parser_registry.require_parser(document)
        except ConversionError as e:
            click.echo(f"❌ {e}")
            failures += 1
            continue
        except UnrecognizedFormatError as e:
            click.echo(f"❌ {path.name}: {e}")
            failures += 1
            continue

        result = parser.detect(document)
        click.echo(
            f"✓ {path.name}: {parser.dialect.value} "
            f"({parser.metadata.source_platform}, {result.segment_count} entries)"
        )

    if failures:
        sys.exit(1)


@cli.command("parsers")
def list_parsers() -> None:
    """List supported input formats, in detection order."""
    register_all_parsers()
    for parser_id, info in parser_registry.get_parser_info().items():
        click.echo(f"  - {parser_id}: {info['description']} [{info['platform']}]")


@cli.group()
def config() -> None:
    """Manage default settings."""
    pass


@config.command("show")
def config_show() -> None:
    """Show the config file location and effective defaults."""
    config_path = get_config_path()
    click.echo(f"Config file: {config_path}")
    if not load_config():
        click.echo("  (no settings saved, using built-in defaults)")

    options = get_processing_defaults()
    directory, basename = get_output_defaults()
    click.echo("\n[processing]")
    for name, value in options.model_dump().items():
        click.echo(f"  {name} = {str(value).lower()}")
    click.echo("\n[output]")
    click.echo(f"  directory = {directory}")
    click.echo(f"  basename = {basename}")


@config.command("set")
@click.argument("key", type=click.Choice(sorted(SETTINGS)))
@click.argument("value")
def config_set(key: str, value: str) -> None:
    """Save a default setting, e.g. processing.split_files true."""
    try:
        set_setting(key, value)
    except ValueError as e:
        raise click.ClickException(str(e)) from e
    except PermissionError as e:
        raise click.ClickException(f"Cannot write config: {e}") from e
    click.echo(f"✓ Set {key} = {value}")


@config.command("unset")
@click.argument("key", type=click.Choice(sorted(SETTINGS)))
def config_unset(key: str) -> None:
    """Remove a saved setting."""
    if unset_setting(key):
        click.echo(f"✓ Removed {key}")
    else:
        click.echo(f"{key} was not set")


if __name__ == "__main__":
    cli()
