"""Shared command helpers."""

from __future__ import annotations

import json
from typing import Any

import typer

from machine_scan.core.catalog import CatalogError, MachineCatalog, catalog_from_config
from machine_scan.core.scanner import MachineScanner, build_scanner
from machine_scan.core.state import CLIState


def get_state(ctx: typer.Context) -> CLIState:
    """Extract validated CLI state from Typer context."""
    state = ctx.obj
    if not isinstance(state, CLIState):
        raise typer.Exit(code=2)
    return state


def load_catalog(state: CLIState) -> MachineCatalog:
    """Load the configured catalog or exit with a readable error."""
    try:
        return catalog_from_config(state.config)
    except CatalogError as exc:
        typer.echo(f"Catalog error: {exc}")
        raise typer.Exit(code=2)


def create_scanner(state: CLIState) -> MachineScanner:
    """Build the recognition pipeline from loaded configuration."""
    return build_scanner(state.config, catalog=load_catalog(state))


def print_json_payload(state: CLIState, payload: Any) -> None:
    """Print JSON payload with plain-mode fallback for piping."""
    if state.plain_output:
        typer.echo(json.dumps(payload, separators=(",", ":")))
        return
    state.console.print_json(data=payload)
