"""Entry point for machine-scan."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from machine_scan import __version__
from machine_scan.commands import catalog as catalog_commands
from machine_scan.commands import config as config_commands
from machine_scan.commands.scan import scan_command
from machine_scan.core.config import ConfigError, default_config_path, load_config
from machine_scan.core.state import CLIState
from machine_scan.utils.logs import configure_logging

app = typer.Typer(
    add_completion=False,
    help="Recognize gym machines from photos",
    invoke_without_command=True,
)


def _build_state(
    config_path: Path,
    json_output: bool,
    plain_output: bool,
    verbose: bool,
    quiet: bool,
) -> CLIState:
    try:
        cfg = load_config(config_path)
    except ConfigError as exc:
        typer.echo(f"Config error: {exc}")
        raise typer.Exit(code=2)

    console = Console(quiet=quiet, no_color=plain_output, log_time=False, log_path=False)
    configure_logging(console, verbose=verbose, quiet=quiet)
    return CLIState(
        json_output=json_output,
        plain_output=plain_output,
        verbose=verbose,
        quiet=quiet,
        config_path=config_path,
        config=cfg,
        console=console,
    )


@app.callback()
def main_callback(
    ctx: typer.Context,
    json_output: bool = typer.Option(False, "--json", help="Print results as JSON"),
    plain_output: bool = typer.Option(
        False,
        "--plain",
        help="Print tab-separated text instead of tables",
    ),
    config: Optional[Path] = typer.Option(None, "--config", help="TOML or JSON config file"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logs on stderr"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Only report errors"),
    version: bool = typer.Option(False, "--version", help="Show version and exit"),
) -> None:
    """Load config, set up logging and pick the output mode."""
    if version:
        typer.echo(__version__)
        raise typer.Exit(code=0)

    if json_output and plain_output:
        typer.echo("Options --json and --plain are mutually exclusive.")
        raise typer.Exit(code=2)

    cfg_path = (config or default_config_path()).expanduser().resolve()
    ctx.obj = _build_state(cfg_path, json_output, plain_output, verbose, quiet)

    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit(code=0)


app.command("scan")(scan_command)
app.add_typer(catalog_commands.app, name="catalog")
app.add_typer(config_commands.app, name="config")


def main() -> None:
    """Console script entrypoint."""
    app()


if __name__ == "__main__":
    main()
