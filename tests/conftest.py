from __future__ import annotations

import json
import random
from pathlib import Path
from typing import Any, Dict, List, Optional

import pytest
from typer.testing import CliRunner

from machine_scan.core.catalog import MachineCatalog
from machine_scan.core.models import Machine


class FakeCapability:
    """Records requests and replays a canned response or error."""

    def __init__(
        self,
        response: Optional[Dict[str, Any]] = None,
        error: Optional[Exception] = None,
    ) -> None:
        self.response = response
        self.error = error
        self.requests: List[Dict[str, Any]] = []

    async def classify(self, request: Dict[str, Any]) -> Dict[str, Any]:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return self.response  # type: ignore[return-value]


class FixedJitter:
    """Stands in for random.Random with a constant uniform() draw."""

    def __init__(self, value: float) -> None:
        self.value = value

    def uniform(self, low: float, high: float) -> float:
        return self.value


@pytest.fixture()
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture()
def chest_press() -> Machine:
    return Machine(
        id="chest-press-id",
        name="Chest Press",
        type="Chest Press",
        muscle_group="chest",
        image_url="/img/chest-press.png",
        workout_id="chest-press",
        synonyms=("seated chest press",),
    )


@pytest.fixture()
def incline_press() -> Machine:
    return Machine(
        id="incline-chest-press-id",
        name="Incline Chest Press",
        type="Incline Press",
        muscle_group="chest",
        image_url="/img/incline.png",
        workout_id="incline-chest-press",
        synonyms=("incline press",),
    )


@pytest.fixture()
def small_catalog(chest_press: Machine, incline_press: Machine) -> MachineCatalog:
    return MachineCatalog(
        [
            chest_press,
            Machine(
                id="lat-pulldown-id",
                name="Lat Pulldown",
                type="Lat Pulldown",
                muscle_group="back",
                image_url="/img/lat.png",
                workout_id="lat-pulldown",
                synonyms=("wide grip pulldown",),
            ),
            incline_press,
            Machine(
                id="treadmill-id",
                name="Treadmill",
                type="Cardio",
                muscle_group="cardio",
                image_url="/img/treadmill.png",
                workout_id="treadmill",
            ),
        ]
    )


@pytest.fixture()
def seeded_rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture()
def write_temp_json(tmp_path: Path):
    def _write(name: str, payload: Any) -> Path:
        path = tmp_path / name
        path.write_text(json.dumps(payload, indent=2) + "\n")
        return path

    return _write


@pytest.fixture()
def write_temp_text(tmp_path: Path):
    def _write(name: str, content: str) -> Path:
        path = tmp_path / name
        path.write_text(content.strip() + "\n")
        return path

    return _write


@pytest.fixture()
def make_capability():
    def _make(
        response: Optional[Dict[str, Any]] = None,
        error: Optional[Exception] = None,
    ) -> FakeCapability:
        return FakeCapability(response=response, error=error)

    return _make


@pytest.fixture()
def fixed_jitter():
    return FixedJitter
