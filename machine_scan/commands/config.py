"""Configuration commands."""

from __future__ import annotations

import typer

from machine_scan.commands.common import get_state, print_json_payload
from machine_scan.core.config import DEFAULT_CONFIG, resolve_service_url, save_config

app = typer.Typer(help="Inspect or create the config file")


@app.command("show")
def show_command(ctx: typer.Context) -> None:
    """Print the effective configuration."""
    state = get_state(ctx)
    payload = {
        "config_path": str(state.config_path),
        "service_url": resolve_service_url(state.config),
        "config": state.config,
    }
    print_json_payload(state, payload)


@app.command("init")
def init_command(
    ctx: typer.Context,
    force: bool = typer.Option(False, "--force", help="Overwrite an existing config file"),
) -> None:
    """Write a config file with default settings."""
    state = get_state(ctx)
    if state.config_path.exists() and not force:
        typer.echo(f"Config already exists at {state.config_path} (use --force to overwrite)")
        raise typer.Exit(code=1)

    path = save_config(DEFAULT_CONFIG, state.config_path)
    if state.json_output:
        print_json_payload(state, {"status": "created", "path": str(path)})
        return
    state.console.print(f"Wrote config to {path}")
