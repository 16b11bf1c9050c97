"""Lightweight data models shared by the recognition pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple, Union

from machine_scan.core.constants import FEATURE_ATTRIBUTES, UNKNOWN_FEATURE

FeatureValue = Union[bool, str, None]

_TRUE_WORDS = {"true", "yes", "y", "1"}
_FALSE_WORDS = {"false", "no", "n", "0"}


@dataclass(frozen=True)
class Machine:
    """Canonical catalog entry."""

    id: str
    name: str
    type: str
    muscle_group: str
    image_url: str
    workout_id: str
    synonyms: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "type": self.type,
            "synonyms": list(self.synonyms),
            "muscleGroup": self.muscle_group,
            "imageUrl": self.image_url,
            "workoutId": self.workout_id,
        }


@dataclass(frozen=True)
class RecognitionResult:
    """One ranked candidate from a recognition call."""

    machine_id: str
    name: str
    confidence: float
    image_url: str
    reasoning: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "machineId": self.machine_id,
            "name": self.name,
            "confidence": self.confidence,
            "imageUrl": self.image_url,
            "reasoning": self.reasoning,
        }


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.title() for part in rest)


def _normalize_feature(raw: Any) -> FeatureValue:
    if raw is None or isinstance(raw, bool):
        return raw
    if isinstance(raw, (int, float)):
        return bool(raw)
    text = str(raw).strip().lower()
    if not text:
        return None
    if text in _TRUE_WORDS:
        return True
    if text in _FALSE_WORDS:
        return False
    return text


@dataclass(frozen=True)
class FeatureSet:
    """Structural attributes reported alongside a candidate.

    ``None`` means the attribute was not reported; ``"unknown"`` means the
    classifier looked but could not tell. Neither counts against a candidate.
    """

    has_handles: FeatureValue = None
    has_arm_pads: FeatureValue = None
    motion_axis: FeatureValue = None
    seat_back_angle: FeatureValue = None
    has_overhead_cable: FeatureValue = None

    @classmethod
    def from_payload(cls, payload: Any) -> Optional["FeatureSet"]:
        """Build from a service payload with camelCase or snake_case keys."""
        if not isinstance(payload, dict):
            return None
        values: Dict[str, FeatureValue] = {}
        for attr in FEATURE_ATTRIBUTES:
            raw = payload.get(attr, payload.get(_camel(attr)))
            values[attr] = _normalize_feature(raw)
        return cls(**values)

    def get(self, attr: str) -> FeatureValue:
        return getattr(self, attr, None)

    def is_known(self, attr: str) -> bool:
        value = self.get(attr)
        return value is not None and value != UNKNOWN_FEATURE


@dataclass(frozen=True)
class MachineAnalysis:
    """Structured best guess returned by the vision service."""

    confidence: float
    machine_id: Optional[str] = None
    machine_name: Optional[str] = None
    reasoning: Optional[str] = None
    features: Optional[FeatureSet] = None


@dataclass(frozen=True)
class ScanDecision:
    """What the caller should do with a result list."""

    best_match: Optional[RecognitionResult]
    alternatives: List[RecognitionResult] = field(default_factory=list)
    should_auto_navigate: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "bestMatch": self.best_match.to_dict() if self.best_match else None,
            "alternatives": [result.to_dict() for result in self.alternatives],
            "shouldAutoNavigate": self.should_auto_navigate,
        }
