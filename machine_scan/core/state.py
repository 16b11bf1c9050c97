"""Per-invocation state shared by machine-scan commands."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict

from rich.console import Console


@dataclass
class CLIState:
    """Global flags, the loaded config and the console for one run."""

    json_output: bool
    plain_output: bool
    verbose: bool
    quiet: bool
    config_path: Path
    config: Dict[str, Any]
    console: Console

    @property
    def output_mode(self) -> str:
        """One of ``json``, ``plain`` or ``rich``."""
        if self.json_output:
            return "json"
        if self.plain_output:
            return "plain"
        return "rich"
