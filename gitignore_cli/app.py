"""Typer CLI entrypoint for gitignore-cli."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

import httpx
import typer
from rich import box
from rich.console import Console
from rich.table import Table

from . import __version__
from .config import ConfigRepository, GlobalConfig
from .engine import CatalogFetcher, FetchCoordinator, Fetcher, TemplateDownloader
from .errors import CatalogError, ConfigError, PersistenceError
from .infra import GitignoreWriter
from .logging_conf import configure_logging
from .ui import ConsoleReporter

USAGE = "Usage:    gitignore <lang> [...langs]\nExample:  gitignore node sass"

CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}

app = typer.Typer(
    help=USAGE,
    add_completion=False,
    rich_markup_mode=None,
    context_settings=CONTEXT_SETTINGS,
)

console = Console(highlight=False)


@dataclass
class AppState:
    config: GlobalConfig
    fetcher: Fetcher
    coordinator: FetchCoordinator
    reporter: ConsoleReporter
    writer: GitignoreWriter

    def close(self) -> None:
        self.fetcher.close()


def build_state(config: GlobalConfig, client: httpx.Client | None = None) -> AppState:
    reporter = ConsoleReporter(console)
    fetcher = Fetcher(config, client=client)
    coordinator = FetchCoordinator(
        config,
        CatalogFetcher(config, fetcher),
        TemplateDownloader(config, fetcher),
        reporter=reporter,
    )
    writer = GitignoreWriter(config.output_path, overwrite=config.overwrite)
    return AppState(
        config=config,
        fetcher=fetcher,
        coordinator=coordinator,
        reporter=reporter,
        writer=writer,
    )


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"Gitignore CLI {__version__}", markup=False)
        raise typer.Exit(code=0)


def _render_catalog_table(names: List[str]) -> Table:
    table = Table(title=f"Available templates · {len(names)}", box=box.SIMPLE_HEAD)
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("Key", style="dim")
    for name in names:
        table.add_row(name, name.lower())
    return table


@app.command(help=USAGE, no_args_is_help=False, context_settings=CONTEXT_SETTINGS)
def main(
    ctx: typer.Context,
    names: Optional[List[str]] = typer.Argument(
        None, help="Template names (case-insensitive), e.g. node python.", show_default=False
    ),
    version: bool = typer.Option(
        False,
        "-v",
        "--version",
        help="Print the gitignore version.",
        callback=_version_callback,
        is_eager=True,
    ),
    overwrite: bool = typer.Option(
        False, "--overwrite", help="Replace the target file instead of appending to it."
    ),
    output: Optional[Path] = typer.Option(
        None, "--output", "-o", help="Target file (default: ./.gitignore).", show_default=False
    ),
    ordered: bool = typer.Option(
        False, "--ordered", help="Merge templates in argument order instead of completion order."
    ),
    list_templates: bool = typer.Option(
        False, "--list", help="List the available templates and exit."
    ),
    config_file: Optional[Path] = typer.Option(
        None, "--config", help="Load settings from a YAML/JSON file.", show_default=False
    ),
    verbose: bool = typer.Option(False, "--verbose", help="Enable debug logging."),
) -> None:
    if not names and not list_templates:
        console.print(ctx.get_help(), markup=False)
        raise typer.Exit(code=0)

    try:
        config = ConfigRepository().load(
            config_file,
            overwrite=overwrite or None,
            output_path=output,
            ordered_output=ordered or None,
        )
    except ConfigError as exc:
        console.print(f"> {exc}", style="red", markup=False)
        raise typer.Exit(code=2)

    logger = configure_logging(verbose=verbose, log_file=config.log_file)
    state = build_state(config)
    try:
        if list_templates:
            _list_catalog(state)
            return
        _run(state, names or [])
    finally:
        state.close()
        logger.debug("run_finished")


def _list_catalog(state: AppState) -> None:
    try:
        catalog = state.coordinator.catalog_fetcher.fetch_catalog()
    except CatalogError as exc:
        state.reporter.error("Failed to download choices")
        console.print(str(exc), style="red", markup=False)
        raise typer.Exit(code=1)
    console.print(_render_catalog_table(catalog.names()))


def _run(state: AppState, names: List[str]) -> None:
    state.reporter.start(state.config.repository)
    try:
        summary = state.coordinator.run(names)
    except CatalogError as exc:
        state.reporter.error("Failed to download choices")
        console.print(str(exc), style="red", markup=False)
        raise typer.Exit(code=1)

    try:
        path = state.writer.write(summary.content)
    except PersistenceError as exc:
        state.reporter.error(f"Failed to save content to {state.config.output_path.name}")
        console.print(str(exc), style="red", markup=False)
        raise typer.Exit(code=1)

    state.reporter.finished(summary.success_count, path)


def cli() -> None:
    app()


if __name__ == "__main__":  # pragma: no cover
    cli()
