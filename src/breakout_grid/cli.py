"""
breakout-grid command line interface.

``breakout-grid build``          : Write the generated stylesheet to disk.
``breakout-grid check-version``  : Verify built files embed the current version.
``breakout-grid export``         : Print the copy/paste ``:root`` config block.
``breakout-grid parse``          : Parse stylesheet text into config JSON.
``breakout-grid tokens``         : List the token schema.
"""

from __future__ import annotations

import json
import logging
import os
import sys
from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ._version import get_version
from .build import build_css, verify_versions
from .errors import BreakoutGridError
from .generator import export_config_block
from .parser import parse_config
from .schema import TOKENS, GridConfig
from .settings import GridSettings, load_settings
from .storage import SnapshotStore

app = typer.Typer(help="Breakout grid CSS generator and config tools")

console = Console()
err_console = Console(stderr=True)

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def _configure_logging(verbose: bool) -> None:
    level_name = "DEBUG" if verbose else os.getenv("LOG_LEVEL", "WARNING").upper()
    logging.basicConfig(level=getattr(logging, level_name, logging.WARNING), format=LOG_FORMAT)


def version_callback(value: bool) -> None:
    if value:
        typer.echo(f"breakout-grid {get_version()}")
        raise typer.Exit()


@app.callback()
def main_callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
    version: bool = typer.Option(
        False,
        "--version",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
) -> None:
    """Breakout grid CSS generator and config tools."""
    _configure_logging(verbose)


def _settings(project_root: Path) -> GridSettings:
    try:
        return load_settings(project_root.resolve())
    except BreakoutGridError as e:
        err_console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e


@app.command(name="build")
def build_command(
    project_root: Path = typer.Option(".", "--project", "-p", help="Project root directory"),
    output: Path | None = typer.Option(None, "--output", "-o", help="Output CSS file"),
    version_tag: str | None = typer.Option(None, "--version-tag", help="Version to embed"),
    from_snapshot: bool = typer.Option(
        False, "--from-snapshot", help="Build from the saved editor config"
    ),
) -> None:
    """Generate the breakout grid stylesheet and write it to disk."""
    settings = _settings(project_root)
    config = settings.tokens

    if from_snapshot and settings.storage_dir is not None:
        saved = SnapshotStore(settings.storage_dir).load_config()
        if saved is None:
            err_console.print("[yellow]No saved config found, using project tokens[/yellow]")
        else:
            config = saved.merged_over(config)

    output_path = output or settings.output_path
    version = version_tag or settings.version
    build_css(output_path, config, version)
    console.print(f"[green]Generated[/green] {escape(str(output_path))} (v{escape(version)})")


@app.command(name="check-version")
def check_version_command(
    files: list[Path] | None = typer.Argument(None, help="Built files to check"),
    project_root: Path = typer.Option(".", "--project", "-p", help="Project root directory"),
    expected: str | None = typer.Option(None, "--expected", help="Expected version tag"),
) -> None:
    """Verify that built CSS files embed the current version."""
    settings = _settings(project_root)
    expected_version = expected or settings.version
    paths = list(files) if files else settings.check_paths

    results = verify_versions(paths, expected_version)
    failed = False
    for result in results:
        name = escape(str(result.path))
        if result.ok:
            console.print(f"  [green]ok[/green]       {name}: v{escape(result.found or '')}")
        else:
            failed = True
            console.print(f"  [red]{result.status.value}[/red] {name}: {escape(result.detail)}")

    if failed:
        console.print(
            "\n[yellow]Built files are out of sync. Run 'breakout-grid build' to regenerate them.[/yellow]"
        )
        raise typer.Exit(code=1)

    console.print("\n[green]All built files have the correct version.[/green]")


@app.command(name="export")
def export_command(
    input_file: Path | None = typer.Option(
        None, "--input", "-i", help="Stylesheet or pasted config to read"
    ),
    project_root: Path = typer.Option(".", "--project", "-p", help="Project root directory"),
    from_snapshot: bool = typer.Option(
        False, "--from-snapshot", help="Export the saved editor config"
    ),
) -> None:
    """Print the :root config block for copy/paste."""
    settings = _settings(project_root)
    config: GridConfig = settings.tokens

    if input_file is not None:
        try:
            config = parse_config(input_file.read_text(encoding="utf-8"))
        except BreakoutGridError as e:
            err_console.print(f"[red]Error: {escape(str(e))}[/red]")
            raise typer.Exit(code=1) from e
    elif from_snapshot and settings.storage_dir is not None:
        config = SnapshotStore(settings.storage_dir).load_config() or config

    typer.echo(export_config_block(config))


@app.command(name="parse")
def parse_command(
    input_file: Path = typer.Argument(..., help="Stylesheet or pasted config ('-' for stdin)"),
    complete: bool = typer.Option(False, "--complete", help="Fill missing tokens from defaults"),
) -> None:
    """Parse stylesheet text and print the recovered config as JSON."""
    text = sys.stdin.read() if str(input_file) == "-" else input_file.read_text(encoding="utf-8")
    try:
        config = parse_config(text)
    except BreakoutGridError as e:
        err_console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e

    if complete:
        config = config.complete()
    typer.echo(json.dumps(config.to_json_dict(), indent=2))


@app.command(name="tokens")
def tokens_command() -> None:
    """List every token with its default and custom property."""
    table = Table(title="Breakout grid tokens")
    table.add_column("Token", style="cyan")
    table.add_column("Default")
    table.add_column("Variable")
    table.add_column("Description", style="dim")

    for token in TOKENS:
        table.add_row(token.name, token.default, token.css_var, escape(token.description))

    console.print(table)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
