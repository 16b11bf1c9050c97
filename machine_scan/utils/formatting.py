"""Formatting helpers used by console output."""

from __future__ import annotations

from typing import Iterable, List

from rich.table import Table

from machine_scan.core.models import Machine, RecognitionResult


def format_confidence(confidence: float) -> str:
    """Format confidence as a whole percentage, or "browse" when zero."""
    if confidence <= 0:
        return "browse"
    return f"{round(confidence * 100)}%"


def format_synonyms(synonyms: Iterable[str]) -> str:
    items = [item for item in synonyms if item]
    return ", ".join(items) if items else "-"


def machines_table(machines: Iterable[Machine], title: str = "Machines") -> Table:
    table = Table(title=title)
    table.add_column("ID")
    table.add_column("Name")
    table.add_column("Type")
    table.add_column("Muscle group")
    table.add_column("Workout")
    for machine in machines:
        table.add_row(machine.id, machine.name, machine.type, machine.muscle_group, machine.workout_id)
    return table


def results_table(results: Iterable[RecognitionResult], title: str = "Results") -> Table:
    table = Table(title=title)
    table.add_column("#", justify="right")
    table.add_column("Machine")
    table.add_column("Confidence", justify="right")
    table.add_column("Reasoning")
    for index, result in enumerate(results, 1):
        table.add_row(str(index), result.name, format_confidence(result.confidence), result.reasoning)
    return table


def result_lines(results: Iterable[RecognitionResult]) -> List[str]:
    """Tab-separated rows for plain output."""
    return [
        f"{result.machine_id}\t{result.confidence:.2f}\t{result.name}\t{result.reasoning}"
        for result in results
    ]
