"""
linecount-indexer - Command line entry point (Click).

Commands:
- index ROOT...   : Index roots va in cay metrics (Ctrl-C de cancel)
- presets         : Liet ke built-in presets
- use-preset NAME : Ap dung preset vao settings file
- symbol-sets     : Liet ke indicator symbol sets
- toggle          : Bat/tat indexer trong settings

Settings file (~/.linecount-indexer/settings.json) cung cap defaults,
options tren command line ghi de chung cho lan chay hien tai.
"""

import dataclasses
import sys
from pathlib import Path
from typing import Optional, Tuple

import click

from config.counting_config import (
    ConfigError,
    CountingConfig,
    CountMode,
    apply_symbol_set,
    create_thresholds_with_symbols,
    limit_thresholds,
    normalize_extensions,
    parse_threshold_values,
)
from config.paths import APP_NAME
from config.presets import (
    INDICATOR_SYMBOL_SETS,
    BUILT_IN_PRESETS,
    get_preset,
    get_preset_names,
    get_symbol_set_names,
)
from core.logging_config import cleanup_old_logs, flush_logs, set_debug_mode
from core.utils.file_scanner import FileScanner
from services.indexing_controller import IndexingController, IndexingProgress, IndexingState
from services.metrics_display import render_tree
from services.settings_manager import (
    SettingsConfigProvider,
    apply_preset,
    load_app_settings,
    update_app_setting,
)

__version__ = "0.1.0"

# Exit codes
EXIT_FAILED = 1
EXIT_INTERRUPTED = 130

# Interval poll controller.wait() de Ctrl-C duoc xu ly kip thoi
_WAIT_POLL_SECONDS = 0.1


def _resolve_config(
    base: CountingConfig,
    mode: Optional[str],
    extensions: Tuple[str, ...],
    thresholds: Optional[str],
    symbol_set: Optional[str],
) -> CountingConfig:
    """Ap dung cac override tu command line len config snapshot."""
    config = base
    if mode:
        config = dataclasses.replace(config, count_mode=CountMode(mode))
    if extensions:
        config = dataclasses.replace(
            config, supported_extensions=normalize_extensions(extensions)
        )

    set_name = symbol_set or config.indicator_symbol_set
    if thresholds is not None:
        values, warning = limit_thresholds(parse_threshold_values(thresholds))
        if warning:
            click.echo(f"Warning: {warning}", err=True)
        config = dataclasses.replace(
            config,
            thresholds=create_thresholds_with_symbols(values, set_name),
            indicator_symbol_set=set_name,
        )
    elif symbol_set:
        config = dataclasses.replace(
            config,
            thresholds=apply_symbol_set(config.thresholds, set_name),
            indicator_symbol_set=set_name,
        )
    return config


def _print_progress(progress: IndexingProgress) -> None:
    click.echo(f"  {progress.message}", err=True)


@click.group()
@click.version_option(version=__version__, prog_name=APP_NAME)
@click.option("--debug", is_flag=True, help="Enable debug logging")
def main(debug: bool) -> None:
    """linecount-indexer - Line/token metrics with size indicators for source trees."""
    cleanup_old_logs()
    if debug:
        set_debug_mode(True)


@main.command()
@click.argument(
    "roots",
    nargs=-1,
    required=True,
    type=click.Path(exists=True, file_okay=False, path_type=Path),
)
@click.option(
    "-m",
    "--mode",
    type=click.Choice([m.value for m in CountMode]),
    help="Count used to pick indicators",
)
@click.option(
    "-p",
    "--preset",
    type=click.Choice(get_preset_names()),
    help="Use a built-in preset instead of the saved settings",
)
@click.option(
    "-e",
    "--ext",
    "extensions",
    multiple=True,
    help="Supported extension (repeatable, e.g. -e .py -e .md)",
)
@click.option(
    "-x",
    "--exclude",
    "excludes",
    multiple=True,
    help="Extra exclude pattern in gitignore syntax (repeatable)",
)
@click.option(
    "--gitignore/--no-gitignore",
    default=None,
    help="Respect the root's .gitignore",
)
@click.option(
    "-t",
    "--thresholds",
    help="Comma separated threshold values (e.g. '0,100,500')",
)
@click.option(
    "--symbol-set",
    type=click.Choice(get_symbol_set_names()),
    help="Indicator symbol set for the thresholds",
)
@click.option("--force", is_flag=True, help="Recount files that are already cached")
@click.option(
    "-d",
    "--depth",
    type=click.IntRange(min=0),
    help="Maximum tree depth to print",
)
@click.option("--batch-size", type=click.IntRange(min=1), help="Files counted per batch")
@click.option("-q", "--quiet", is_flag=True, help="Do not print progress messages")
def index(
    roots: Tuple[Path, ...],
    mode: Optional[str],
    preset: Optional[str],
    extensions: Tuple[str, ...],
    excludes: Tuple[str, ...],
    gitignore: Optional[bool],
    thresholds: Optional[str],
    symbol_set: Optional[str],
    force: bool,
    depth: Optional[int],
    batch_size: Optional[int],
    quiet: bool,
) -> None:
    """Index ROOTS and print their metrics trees."""
    settings = load_app_settings()
    if not settings.enabled:
        click.echo("Indexing is disabled. Run 'toggle' to enable it.", err=True)
        sys.exit(EXIT_FAILED)

    base = get_preset(preset) if preset else SettingsConfigProvider().get_config()
    try:
        config = _resolve_config(base, mode, extensions, thresholds, symbol_set)
    except ConfigError as e:
        raise click.UsageError(str(e))

    scanner = FileScanner(
        excluded_patterns=settings.get_excluded_patterns_list() + list(excludes),
        use_gitignore=settings.use_gitignore if gitignore is None else gitignore,
    )
    controller = IndexingController(
        config,
        roots=[str(root) for root in roots],
        discovery=scanner,
        batch_size=batch_size or settings.batch_size,
        on_progress=None if quiet else _print_progress,
    )

    controller.start_indexing(force_refresh=force)
    try:
        while not controller.wait(timeout=_WAIT_POLL_SECONDS):
            pass
    except KeyboardInterrupt:
        controller.cancel_indexing()
        controller.wait()
        click.echo("\nIndexing cancelled.", err=True)
        flush_logs()
        sys.exit(EXIT_INTERRUPTED)

    for root in controller.roots:
        directory = controller.get_directory_metrics(root)
        if directory is None:
            click.echo(f"{root}: no metrics", err=True)
            continue
        for line in render_tree(directory, config.count_mode, max_depth=depth):
            click.echo(line)

    flush_logs()
    if controller.last_outcome == IndexingState.CANCELED:
        sys.exit(EXIT_INTERRUPTED)


@main.command()
def presets() -> None:
    """List built-in presets."""
    selected = load_app_settings().selected_preset
    for name, config in BUILT_IN_PRESETS.items():
        marker = "*" if name == selected else " "
        click.echo(
            f"{marker} {name:<14} {config.count_mode.value:<7} "
            f"{', '.join(config.supported_extensions)}"
        )


@main.command(name="use-preset")
@click.argument("name")
def use_preset(name: str) -> None:
    """Save built-in preset NAME as the current counting settings."""
    try:
        apply_preset(name)
    except ConfigError as e:
        raise click.BadParameter(str(e), param_hint="NAME")
    click.echo(f"Preset '{name}' applied.")


@main.command(name="symbol-sets")
def symbol_sets() -> None:
    """List indicator symbol sets."""
    for symbol_set in INDICATOR_SYMBOL_SETS.values():
        click.echo(f"{symbol_set.name:<22} {' '.join(symbol_set.symbols)}")


@main.command()
def toggle() -> None:
    """Enable or disable the indexer."""
    enabled = not load_app_settings().enabled
    if not update_app_setting(enabled=enabled):
        click.echo("Could not save settings.", err=True)
        sys.exit(EXIT_FAILED)
    click.echo(f"Indexer {'enabled' if enabled else 'disabled'}.")


if __name__ == "__main__":
    main()
