"""Entry point for wog."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional

import typer
from loguru import logger
from rich.console import Console

from wog_cli import __version__
from wog_cli.commands.export import export_command
from wog_cli.commands.parse import parse_command
from wog_cli.commands.presets import presets_command
from wog_cli.commands.share import decode_command, encode_command, share_command
from wog_cli.commands.spin import history_command, spin_command
from wog_cli.core.config import ConfigError, default_config_path, load_config
from wog_cli.core.state import CLIState

app = typer.Typer(
    add_completion=False,
    help="Wheel of Gains: weighted workout picker and share-link codec",
    invoke_without_command=True,
)


def _setup_logging(verbose: bool = False, quiet: bool = False) -> None:
    """Route library logs to stderr at a level matching the CLI flags."""
    logger.remove()
    level = "DEBUG" if verbose else "ERROR" if quiet else "WARNING"
    # Resolve sys.stderr per message; test runners swap it between invocations.
    logger.add(
        lambda message: sys.stderr.write(message),
        format="{level: <8} | {name}:{line} - {message}",
        level=level,
        colorize=False,
    )


@app.callback()
def main_callback(
    ctx: typer.Context,
    json_output: bool = typer.Option(False, "--json", help="Output JSON where available"),
    plain_output: bool = typer.Option(
        False,
        "--plain",
        help="Output plain text (no rich formatting/tables)",
    ),
    config: Optional[Path] = typer.Option(None, "--config", help="Path to config file"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Quiet output"),
    version: bool = typer.Option(False, "--version", help="Show version and exit"),
) -> None:
    """Initialize global CLI state."""
    if version:
        typer.echo(__version__)
        raise typer.Exit(code=0)

    if json_output and plain_output:
        typer.echo("Options --json and --plain are mutually exclusive.")
        raise typer.Exit(code=2)

    _setup_logging(verbose=verbose, quiet=quiet)

    cfg_path = (config or default_config_path()).expanduser().resolve()
    try:
        cfg = load_config(cfg_path)
    except ConfigError as exc:
        typer.echo(f"Config error: {exc}")
        raise typer.Exit(code=2)

    console = Console(
        quiet=quiet,
        no_color=plain_output,
        log_time=False,
        log_path=False,
    )
    ctx.obj = CLIState(
        json_output=(json_output and not plain_output),
        plain_output=plain_output,
        verbose=verbose,
        quiet=quiet,
        config_path=cfg_path,
        config=cfg,
        console=console,
    )

    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit(code=0)


app.command("parse")(parse_command)
app.command("encode")(encode_command)
app.command("decode")(decode_command)
app.command("share")(share_command)
app.command("spin")(spin_command)
app.command("history")(history_command)
app.command("presets")(presets_command)
app.command("export")(export_command)


def main() -> None:
    """Console script entrypoint."""
    app()


if __name__ == "__main__":
    main()
