"""Input parsing helpers for CLI-supplied files."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Optional

import yaml


class InputError(ValueError):
    """Raised when an input file cannot be used."""


def load_mapping_file(path: Optional[Path]) -> Optional[Dict[str, Any]]:
    """Load a JSON or YAML object from disk; None when no path is given."""
    if path is None:
        return None

    text = path.read_text()
    try:
        if path.suffix.lower() in {".yaml", ".yml"}:
            raw_data = yaml.safe_load(text)
        else:
            raw_data = json.loads(text)
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise InputError(f"Could not parse {path}: {exc}") from exc

    if raw_data is None:
        return {}
    if not isinstance(raw_data, dict):
        raise InputError(f"{path} must contain an object at the root")
    return raw_data
