"""Similar-machine suggestions for an accepted candidate."""

from __future__ import annotations

import random
from typing import List, Optional

from machine_scan.core.catalog import MachineCatalog
from machine_scan.core.constants import (
    ALTERNATIVE_FLOOR,
    ALTERNATIVE_JITTER,
    ALTERNATIVE_OFFSET,
    MAX_ALTERNATIVES,
)
from machine_scan.core.models import RecognitionResult


class AlternativesGenerator:
    """Proposes same-muscle-group machines with lowered confidence.

    The confidence of each suggestion is jittered; pass a seeded
    ``random.Random`` for repeatable output.
    """

    def __init__(self, catalog: MachineCatalog, rng: Optional[random.Random] = None) -> None:
        self.catalog = catalog
        self.rng = rng or random.Random()

    def alternatives_for(self, machine_id: str, base_confidence: float) -> List[RecognitionResult]:
        accepted = self.catalog.get_by_id(machine_id)
        if accepted is None:
            return []

        similar = [
            machine
            for machine in self.catalog
            if machine.muscle_group == accepted.muscle_group and machine.id != accepted.id
        ][:MAX_ALTERNATIVES]

        results: List[RecognitionResult] = []
        for machine in similar:
            jitter = self.rng.uniform(0, ALTERNATIVE_JITTER)
            results.append(
                RecognitionResult(
                    machine_id=machine.id,
                    name=machine.name,
                    confidence=max(ALTERNATIVE_FLOOR, base_confidence - ALTERNATIVE_OFFSET - jitter),
                    image_url=machine.image_url,
                    reasoning=f"similar {accepted.muscle_group} machine",
                )
            )
        return results
