"""CLI entry point for mdbake."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Annotated

import typer
import yaml
from rich import print as rprint
from rich.logging import RichHandler
from rich.markup import escape
from rich.syntax import Syntax
from rich.table import Table

from mdbake.build import (
    BuildError,
    BuildReport,
    SiteBuilder,
    prepare_output_root,
    resolve_source_root,
)
from mdbake.config import MdbakeConfig, load_config
from mdbake.config.loader import DEFAULT_CONFIG_TEMPLATE
from mdbake.render import Profile, options_from_config

app = typer.Typer(
    name="mdbake",
    help="Bake a directory of markdown into a mirrored tree of HTML pages.",
)

config_app = typer.Typer(help="Manage mdbake configuration.")
app.add_typer(config_app, name="config")

_LOG_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "error": logging.ERROR,
}

# Global state
_config: MdbakeConfig | None = None


def _get_config() -> MdbakeConfig:
    if _config is None:
        return load_config()
    return _config


@app.callback()
def main(
    config: Annotated[
        str | None, typer.Option("--config", "-c", help="Path to mdbake.yaml")
    ] = None,
) -> None:
    """Global options."""
    global _config
    try:
        _config = load_config(config)
    except ValueError as e:
        rprint(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)


def _setup_logging(level: str) -> None:
    logging.basicConfig(
        level=_LOG_LEVELS[level],
        format="%(message)s",
        handlers=[RichHandler(show_path=False)],
        force=True,
    )


def _display_report(report: BuildReport) -> None:
    """Summarize a finished build as a Rich table, then list skipped files."""
    table = Table(title="Build")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right", style="green")
    table.add_row("Written", str(report.written))
    table.add_row("Skipped", str(len(report.skipped)))
    table.add_row("Duration", f"{report.duration:.2f}s")
    rprint(table)

    for skipped in report.skipped:
        rprint(
            f"  [yellow]skipped:[/yellow] {escape(str(skipped.file))} "
            f"({skipped.reason.value}): {escape(skipped.error)}"
        )


@app.command()
def build(
    src_dir: str = typer.Argument(..., help="Directory of markdown files to convert"),
    out_dir: Annotated[
        str | None, typer.Option("--out-dir", "-o", help="Directory to place HTML files into")
    ] = None,
    stylesheet: Annotated[
        str | None, typer.Option("--stylesheet", "-s", help="Stylesheet to bake into every page")
    ] = None,
    profile: Annotated[
        Profile | None, typer.Option("--profile", "-p", help="Operating mode: full or plain")
    ] = None,
    trailer: Annotated[
        bool | None,
        typer.Option("--trailer/--no-trailer", help="Append the bundled HTML trailer"),
    ] = None,
    dry_run: Annotated[bool, typer.Option("--dry-run", help="Show what would be written")] = False,
    log_level: Annotated[
        str | None, typer.Option("--log-level", help="debug, info, warn or error")
    ] = None,
) -> None:
    """Convert a markdown tree into a mirrored HTML tree."""
    cfg = _get_config()
    level = log_level or cfg.log_level
    if level not in _LOG_LEVELS:
        rprint(f"[red]Error:[/red] Unknown log level '{escape(level)}'")
        raise typer.Exit(1)
    _setup_logging(level)

    active = profile or Profile(cfg.profile)
    target = out_dir or cfg.out_dir

    try:
        source_root = resolve_source_root(src_dir)
    except BuildError as e:
        rprint(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    try:
        options = options_from_config(cfg, profile=active, stylesheet=stylesheet, trailer=trailer)
    except ValueError as e:
        rprint(f"[red]Error:[/red] Invalid markdown options: {escape(str(e))}")
        raise typer.Exit(1)

    if dry_run:
        builder = SiteBuilder(source_root, Path(target).absolute(), options)
        pairs = builder.plan()
        if not pairs:
            rprint("[yellow]No .md files found.[/yellow]")
            raise typer.Exit(0)
        table = Table(title="Dry run: files that would be written")
        table.add_column("Source", style="cyan")
        table.add_column("Destination", style="green")
        for src, dest in pairs:
            table.add_row(escape(str(src.relative_to(source_root))), escape(str(dest)))
        rprint(table)
        return

    try:
        output_root = prepare_output_root(target)
    except BuildError as e:
        rprint(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    def _echo(src: Path, dest: Path) -> None:
        rel = escape(str(src.relative_to(source_root)))
        rprint(f"[green]Converted[/green] {rel} -> {escape(str(dest))}")

    builder = SiteBuilder(
        source_root,
        output_root,
        options,
        atomic_writes=cfg.atomic_writes,
        on_written=_echo if active is Profile.plain else None,
    )
    report = builder.run()
    _display_report(report)


@config_app.command("show")
def config_show() -> None:
    """Show current resolved configuration."""
    cfg = _get_config()
    rprint(Syntax(yaml.dump(cfg.model_dump(), default_flow_style=False), "yaml"))


@config_app.command("init")
def config_init(
    force: bool = typer.Option(False, "--force", help="Overwrite existing config"),
) -> None:
    """Create default mdbake.yaml in current directory."""
    target = Path("mdbake.yaml")
    if target.exists() and not force:
        rprint("[yellow]mdbake.yaml already exists.[/yellow] Use --force to overwrite.")
        raise typer.Exit(1)
    target.write_text(DEFAULT_CONFIG_TEMPLATE)
    rprint(f"[green]Created[/green] {target}")
