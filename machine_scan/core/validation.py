"""Cross-check reported machine features against known physical layouts."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Optional

from machine_scan.core.constants import FEATURE_INVARIANTS, VALIDATION_FLOOR, VALIDATION_PENALTY
from machine_scan.core.models import FeatureSet

logger = logging.getLogger(__name__)


class FeatureValidator:
    """Demotes candidates whose reported features contradict their machine type."""

    def __init__(self, invariants: Mapping[str, Mapping[str, Any]] = FEATURE_INVARIANTS) -> None:
        self.invariants: Dict[str, Dict[str, Any]] = {
            machine_id: dict(expected) for machine_id, expected in invariants.items()
        }

    def mismatches(self, machine_id: str, features: Optional[FeatureSet]) -> List[str]:
        """Attributes whose reported value contradicts the expected one."""
        expected = self.invariants.get(machine_id)
        if features is None or not expected:
            return []
        return [
            attr
            for attr, value in expected.items()
            if features.is_known(attr) and features.get(attr) != value
        ]

    def validate(self, machine_id: str, features: Optional[FeatureSet], confidence: float) -> float:
        """Return the confidence, penalized when any invariant is contradicted."""
        conflicts = self.mismatches(machine_id, features)
        if not conflicts:
            return confidence

        adjusted = max(VALIDATION_FLOOR, confidence - VALIDATION_PENALTY)
        logger.debug(
            "Features %s contradict %s; confidence %.2f -> %.2f",
            ", ".join(conflicts),
            machine_id,
            confidence,
            adjusted,
        )
        return adjusted
