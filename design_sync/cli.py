"""Click-based command line interface for design-sync."""

import sys
from pathlib import Path
from typing import Any, NoReturn

import click

from . import __version__
from .config import SyncConfig, load_sync_config
from .drift.guard import DriftGuard
from .drift.reporter import get_reporter
from .errors import DesignSyncError, DriftCheckFailed
from .pipeline import build_theme, generate_document, load_registry_from_config, write_theme
from .sync_logging import get_logger, setup_logging


def common_options(f: Any) -> Any:
    """Options shared by every command."""
    f = click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")(f)
    f = click.option("--quiet", "-q", is_flag=True, help="Suppress non-error output")(f)
    f = click.option(
        "--config", type=click.Path(exists=True), help="Configuration file path"
    )(f)
    return f


def _fail(error: DesignSyncError) -> NoReturn:
    click.echo(error.format(use_color=sys.stderr.isatty()), err=True)
    sys.exit(error.exit_code)


def _setup(verbose: bool, quiet: bool, config: str | None) -> SyncConfig:
    if quiet and verbose:
        click.echo("Error: --quiet and --verbose are mutually exclusive", err=True)
        sys.exit(1)
    try:
        config_obj = load_sync_config(config_path=Path(config) if config else None)
    except DesignSyncError as e:
        setup_logging(quiet=quiet, verbose=verbose)
        _fail(e)
    setup_logging(
        level=config_obj.logging.level,
        quiet=quiet,
        verbose=verbose,
        log_file=config_obj.resolve(config_obj.logging.file),
        log_format=config_obj.logging.format,
    )
    return config_obj


@click.group()
@click.version_option(version=__version__)
def cli() -> None:
    """design-sync - keep design mockups in sync with component styling."""


@cli.command("build-theme")
@common_options
@click.option(
    "--output", "-o", type=click.Path(), help="Theme data path (default: paths.themeData)"
)
def build_theme_command(verbose: bool, quiet: bool, config: str | None, output: str | None):
    """Resolve the CSS theme sources and write the theme data artifact."""
    config_obj = _setup(verbose, quiet, config)
    try:
        snapshot = build_theme(config_obj)
        path = write_theme(config_obj, snapshot, Path(output) if output else None)
    except DesignSyncError as e:
        _fail(e)

    if not quiet:
        spacing = snapshot.spacing
        click.echo(f"Wrote theme data to {path}")
        click.echo(
            f"  spacing base {spacing.base_unit_px:g}px, "
            f"{len(snapshot.border_radius)} radii, "
            f"{len(snapshot.font_size)} font sizes, "
            f"{len(snapshot.shadows)} shadows"
        )


@cli.command()
@common_options
@click.argument("name", required=False)
@click.option("--all", "all_components", is_flag=True, help="Generate every component")
@click.option(
    "--output", "-o", type=click.Path(), help="Scene document path (default: paths.output)"
)
def generate(
    verbose: bool,
    quiet: bool,
    config: str | None,
    name: str | None,
    all_components: bool,
    output: str | None,
):
    """Generate the variant matrix scene for one component or --all."""
    if bool(name) == all_components:
        click.echo("Error: pass exactly one of NAME or --all", err=True)
        sys.exit(1)

    config_obj = _setup(verbose, quiet, config)
    try:
        result, path = generate_document(
            config_obj,
            names=[name] if name else None,
            output=Path(output) if output else None,
        )
    except DesignSyncError as e:
        _fail(e)

    if not quiet:
        for matrix in result.results:
            click.echo(
                f"  {matrix.component}: {len(matrix.cells)} variants "
                f"({len(matrix.rows)}x{len(matrix.cols)}, {len(matrix.sections)} modes)"
            )
        click.echo(f"Wrote {len(result.results)} component(s) to {path}")


@cli.command("check-drift")
@common_options
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Report format",
)
@click.option("--no-sync", is_flag=True, help="Skip registry and theme data sync rules")
@click.argument("files", nargs=-1, type=click.Path())
def check_drift(
    verbose: bool,
    quiet: bool,
    config: str | None,
    output_format: str,
    no_sync: bool,
    files: tuple[str, ...],
):
    """Check sources for values that drifted from the canonical constants.

    FILES defaults to the drift.sources globs from the configuration.
    """
    config_obj = _setup(verbose, quiet, config)
    logger = get_logger()
    try:
        snapshot = registry = None
        if not no_sync and (config_obj.drift.sync or config_obj.drift.check_theme_data):
            snapshot = build_theme(config_obj)
            if any(entry.kind == "map" for entry in config_obj.drift.sync):
                registry = load_registry_from_config(config_obj)
        guard = DriftGuard.from_config(config_obj, snapshot, registry)
    except DesignSyncError as e:
        _fail(e)

    sources = [Path(f) for f in files] or guard.collect_sources(config_obj.drift.sources)
    report = guard.check(sources)

    for violation in report.soft:
        logger.warning(f"{violation.file}: {violation.rule_id} {violation.message}")
    if output_format == "json" or not quiet or report.has_hard:
        get_reporter(output_format).report(report)

    if report.has_hard:
        _fail(DriftCheckFailed(len(report.hard)))


def main() -> None:
    """Console script entry point."""
    cli()


if __name__ == "__main__":
    main()
