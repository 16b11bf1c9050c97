"""Machine scan command."""

from __future__ import annotations

import asyncio
import json
from pathlib import Path
from typing import Any, Dict, Optional

import typer
from PIL import UnidentifiedImageError

from machine_scan.commands.common import create_scanner, get_state, print_json_payload
from machine_scan.core.arbiter import process_results
from machine_scan.core.encoder import load_image
from machine_scan.utils.formatting import format_confidence, result_lines, results_table
from machine_scan.utils.parsing import InputError, load_mapping_file


def scan_command(
    ctx: typer.Context,
    image: Path = typer.Argument(..., exists=True, dir_okay=False, help="Photo of the machine"),
    hint: Optional[str] = typer.Option(None, help="Free-text hint, e.g. the name on the machine"),
    profile: Optional[Path] = typer.Option(None, exists=True, dir_okay=False, help="JSON/YAML user profile"),
    session: Optional[Path] = typer.Option(None, exists=True, dir_okay=False, help="JSON/YAML session request"),
    output_file: Optional[Path] = typer.Option(None, "--output", help="Write results JSON to file"),
    show_all: bool = typer.Option(False, "--all", help="List every result, not just the top choices"),
) -> None:
    """Identify the machine in a photo and suggest the workout to open."""
    state = get_state(ctx)

    try:
        user_profile = load_mapping_file(profile)
        session_context = load_mapping_file(session)
    except InputError as exc:
        raise typer.BadParameter(str(exc))

    try:
        frame = load_image(image)
    except (UnidentifiedImageError, OSError) as exc:
        raise typer.BadParameter(f"Cannot read image {image}: {exc}")

    scanner = create_scanner(state)
    results = asyncio.run(
        scanner.recognize(
            frame,
            user_profile=user_profile,
            session_context=session_context,
            hint=hint,
        )
    )
    decision = process_results(results)

    workout_id = (
        scanner.catalog.workout_id_for(decision.best_match.machine_id)
        if decision.best_match
        else None
    )
    report: Dict[str, Any] = {
        **decision.to_dict(),
        "workoutId": workout_id,
        "results": [result.to_dict() for result in results],
    }

    if output_file:
        output_file.write_text(json.dumps(report, indent=2) + "\n")

    if state.output_mode == "json":
        print_json_payload(state, report)
        return

    shown = results if show_all else decision.alternatives

    if state.output_mode == "plain":
        typer.echo(f"auto_navigate\t{str(decision.should_auto_navigate).lower()}")
        if workout_id:
            typer.echo(f"workout_id\t{workout_id}")
        for line in result_lines(shown):
            typer.echo(line)
        return

    if decision.best_match:
        match = decision.best_match
        state.console.print(
            f"[green]Recognized {match.name}[/green] ({format_confidence(match.confidence)})"
        )
        state.console.print(f"Opening workout: {workout_id}")
    elif results and results[0].confidence > 0:
        state.console.print("[yellow]Not sure which machine this is. Did you mean:[/yellow]")
    else:
        state.console.print(f"[yellow]{results[0].reasoning}[/yellow]")

    state.console.print(results_table(shown, title="All machines" if show_all else "Top choices"))
