"""Machine catalog and lookup helpers."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Sequence

import yaml

from machine_scan.core.config import resolve_catalog_file
from machine_scan.core.models import Machine


class CatalogError(RuntimeError):
    """Raised when a catalog cannot be built or loaded."""


def _machine(
    machine_id: str,
    name: str,
    machine_type: str,
    muscle_group: str,
    workout_id: str,
    synonyms: Sequence[str] = (),
) -> Machine:
    return Machine(
        id=machine_id,
        name=name,
        type=machine_type,
        muscle_group=muscle_group,
        image_url=f"/images/machines/{workout_id}.png",
        workout_id=workout_id,
        synonyms=tuple(synonyms),
    )


DEFAULT_MACHINES: Sequence[Machine] = (
    _machine("MCH-CHEST-PRESS", "Chest Press Machine", "Chest Press", "chest", "chest-press",
             ["chest press", "seated chest press"]),
    _machine("MCH-PEC-DECK", "Pec Deck (Butterfly) Machine", "Pec Deck", "chest", "pec-deck",
             ["pec deck", "butterfly", "pec fly"]),
    _machine("MCH-INCLINE-CHEST", "Incline Chest Press", "Incline Press", "chest",
             "incline-chest-press", ["incline chest", "incline press"]),
    _machine("MCH-CABLE-CROSSOVER", "Cable Crossover Machine", "Cable System", "chest",
             "cable-crossover", ["cable crossover", "cable fly", "functional trainer"]),
    _machine("MCH-LAT-PULLDOWN", "Lat Pulldown Machine", "Lat Pulldown", "back", "lat-pulldown",
             ["lat pulldown", "lat pull down", "pulldown"]),
    _machine("MCH-SEATED-ROW", "Seated Row Machine", "Seated Row", "back", "seated-row",
             ["seated row", "cable row"]),
    _machine("MCH-LEG-PRESS", "Leg Press Machine", "Leg Press", "legs", "leg-press",
             ["leg press", "seated leg press"]),
    _machine("MCH-LEG-EXTENSION", "Leg Extension Machine", "Leg Extension", "legs",
             "leg-extension", ["leg extension", "quad extension"]),
    _machine("MCH-LEG-CURL", "Leg Curl Machine", "Leg Curl", "legs", "leg-curl",
             ["leg curl", "hamstring curl", "lying leg curl"]),
    _machine("MCH-SHOULDER-PRESS", "Shoulder Press Machine", "Shoulder Press", "shoulders",
             "shoulder-press", ["shoulder press", "overhead press"]),
    _machine("MCH-ASSISTED-DIP", "Assisted Dip Machine", "Dip", "arms", "assisted-dip",
             ["assisted dip", "dip assist", "assisted pull-up"]),
    _machine("MCH-TREADMILL", "Treadmill", "Cardio", "cardio", "treadmill",
             ["running machine", "treadmill"]),
    _machine("MCH-INDOOR-CYCLING-BIKE", "Indoor Cycling Bike", "Cardio", "cardio",
             "indoor-cycling", ["spin bike", "stationary bike", "exercise bike"]),
    _machine("MCH-ELLIPTICAL", "Elliptical Trainer", "Cardio", "cardio", "elliptical",
             ["elliptical", "cross trainer"]),
    _machine("MCH-ROWING-MACHINE", "Rowing Machine", "Cardio", "cardio", "rowing",
             ["rower", "erg", "indoor rower"]),
)


class MachineCatalog:
    """Read-only registry of recognizable machines, kept in declaration order."""

    def __init__(self, machines: Sequence[Machine]) -> None:
        self._machines = tuple(machines)
        self._by_id: Dict[str, Machine] = {}
        for machine in self._machines:
            if machine.id in self._by_id:
                raise CatalogError(f"Duplicate machine id in catalog: {machine.id}")
            self._by_id[machine.id] = machine

    def __len__(self) -> int:
        return len(self._machines)

    def __iter__(self) -> Iterator[Machine]:
        return iter(self._machines)

    def __contains__(self, machine_id: object) -> bool:
        return machine_id in self._by_id

    def all_machines(self) -> List[Machine]:
        return list(self._machines)

    def get_by_id(self, machine_id: str) -> Optional[Machine]:
        return self._by_id.get(machine_id)

    def get_by_name(self, query: str) -> Optional[Machine]:
        """Fuzzy lookup: name contains query, or a synonym contains query."""
        needle = query.strip().lower()
        for machine in self._machines:
            if needle in machine.name.lower():
                return machine
            if any(needle in synonym.lower() for synonym in machine.synonyms):
                return machine
        return None

    def get_by_workout_id(self, workout_id: str) -> Optional[Machine]:
        for machine in self._machines:
            if machine.workout_id == workout_id:
                return machine
        return None

    def workout_id_for(self, machine_id: str) -> Optional[str]:
        machine = self.get_by_id(machine_id)
        return machine.workout_id if machine else None

    def search(self, query: str) -> List[Machine]:
        """Substring search over name, type, muscle group and synonyms."""
        needle = query.strip().lower()
        if not needle:
            return self.all_machines()

        matches: List[Machine] = []
        for machine in self._machines:
            fields = [machine.name, machine.type, machine.muscle_group, *machine.synonyms]
            if any(needle in value.lower() for value in fields):
                matches.append(machine)
        return matches


def default_catalog() -> MachineCatalog:
    """Catalog of machines known to the app out of the box."""
    return MachineCatalog(DEFAULT_MACHINES)


def _pick(entry: Dict[str, Any], *keys: str) -> Any:
    for key in keys:
        if entry.get(key) is not None:
            return entry[key]
    return None


def machine_from_dict(entry: Dict[str, Any]) -> Machine:
    """Build a machine from a catalog file entry (camelCase or snake_case)."""
    missing = [key for key in ("id", "name", "type") if not entry.get(key)]
    if missing:
        raise CatalogError(f"Catalog entry missing {', '.join(missing)}: {entry!r}")

    workout_id = _pick(entry, "workoutId", "workout_id") or str(entry["id"]).lower()
    synonyms = entry.get("synonyms") or []
    if isinstance(synonyms, str):
        synonyms = [synonyms]

    return Machine(
        id=str(entry["id"]),
        name=str(entry["name"]),
        type=str(entry["type"]),
        muscle_group=str(_pick(entry, "muscleGroup", "muscle_group") or "other"),
        image_url=str(
            _pick(entry, "imageUrl", "image_url") or f"/images/machines/{workout_id}.png"
        ),
        workout_id=str(workout_id),
        synonyms=tuple(str(item) for item in synonyms),
    )


def load_catalog_file(path: Path) -> MachineCatalog:
    """Load a catalog from a JSON or YAML list of machine objects."""
    try:
        text = path.read_text()
    except OSError as exc:
        raise CatalogError(f"Cannot read catalog file {path}: {exc}") from exc

    try:
        if path.suffix.lower() in {".yaml", ".yml"}:
            raw_data = yaml.safe_load(text)
        else:
            raw_data = json.loads(text)
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise CatalogError(f"Invalid catalog file {path}: {exc}") from exc

    if isinstance(raw_data, dict):
        raw_data = raw_data.get("machines")
    if not isinstance(raw_data, list):
        raise CatalogError(f"Catalog file {path} must contain a list of machines")

    machines = [machine_from_dict(item) for item in raw_data if isinstance(item, dict)]
    if not machines:
        raise CatalogError(f"Catalog file {path} contains no machines")
    return MachineCatalog(machines)


def catalog_from_config(config: Dict[str, Any]) -> MachineCatalog:
    """Use the configured catalog file when set, otherwise the built-in one."""
    path = resolve_catalog_file(config)
    if path is None:
        return default_catalog()
    return load_catalog_file(path)
