"""Catalog browsing commands."""

from __future__ import annotations

from typing import List

import typer

from machine_scan.commands.common import get_state, load_catalog, print_json_payload
from machine_scan.core.models import Machine
from machine_scan.core.recognition import describe_machine
from machine_scan.core.state import CLIState
from machine_scan.utils.formatting import format_synonyms, machines_table

app = typer.Typer(help="Browse the machine catalog")


def _print_machines(state: CLIState, machines: List[Machine], title: str) -> None:
    if state.output_mode == "json":
        print_json_payload(state, {"machines": [machine.to_dict() for machine in machines]})
        return

    if state.output_mode == "plain":
        for machine in machines:
            typer.echo(f"{machine.id}\t{machine.name}\t{machine.muscle_group}\t{machine.workout_id}")
        return

    state.console.print(machines_table(machines, title=title))


@app.command("list")
def list_command(ctx: typer.Context) -> None:
    """List every machine in catalog order."""
    state = get_state(ctx)
    catalog = load_catalog(state)
    _print_machines(state, catalog.all_machines(), title=f"{len(catalog)} machines")


@app.command("search")
def search_command(
    ctx: typer.Context,
    query: str = typer.Argument("", help="Text to match in name, type, muscle group or synonyms"),
) -> None:
    """Search machines by name, type, muscle group or synonym."""
    state = get_state(ctx)
    matches = load_catalog(state).search(query)
    if not matches and state.output_mode != "json":
        typer.echo(f"No machines match '{query}'")
        raise typer.Exit(code=1)
    _print_machines(state, matches, title=f"Matches for '{query}'")


@app.command("show")
def show_command(
    ctx: typer.Context,
    query: str = typer.Argument(..., help="Machine ID, workout ID or name"),
) -> None:
    """Show one machine, looked up by id, workout id, then name."""
    state = get_state(ctx)
    catalog = load_catalog(state)
    machine = (
        catalog.get_by_id(query)
        or catalog.get_by_workout_id(query)
        or catalog.get_by_name(query)
    )
    if machine is None:
        typer.echo(f"Machine not found: {query}")
        raise typer.Exit(code=1)

    payload = machine.to_dict()
    payload["description"] = describe_machine(machine)
    if state.output_mode == "json":
        print_json_payload(state, payload)
        return

    if state.output_mode == "plain":
        for key, value in payload.items():
            if isinstance(value, list):
                value = ",".join(value)
            typer.echo(f"{key}\t{value}")
        return

    state.console.print(f"[bold]{machine.name}[/bold] ({machine.id})")
    state.console.print(f"Type: {machine.type}")
    state.console.print(f"Muscle group: {machine.muscle_group}")
    state.console.print(f"Workout: {machine.workout_id}")
    state.console.print(f"Synonyms: {format_synonyms(machine.synonyms)}")
    state.console.print(f"Description: {payload['description']}")
