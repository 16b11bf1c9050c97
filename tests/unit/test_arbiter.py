from __future__ import annotations

import pytest

from machine_scan.core.alternatives import AlternativesGenerator
from machine_scan.core.arbiter import Arbiter, alternatives_to_show, best_match, process_results
from machine_scan.core.catalog import default_catalog
from machine_scan.core.constants import (
    ACCEPT_THRESHOLD,
    AUTO_NAVIGATE_THRESHOLD,
    DEFAULT_MATCH_REASONING,
    DEFAULT_UNCERTAIN_REASONING,
    SERVICE_FAILURE_REASONING,
    UNKNOWN_MACHINE_ID,
)
from machine_scan.core.models import FeatureSet, MachineAnalysis, RecognitionResult
from machine_scan.core.validation import FeatureValidator


@pytest.fixture()
def arbiter(small_catalog, fixed_jitter) -> Arbiter:
    return Arbiter(
        catalog=small_catalog,
        validator=FeatureValidator({"chest-press-id": {"has_arm_pads": False}}),
        alternatives=AlternativesGenerator(small_catalog, rng=fixed_jitter(0.05)),
    )


def _result(confidence: float, machine_id: str = "m") -> RecognitionResult:
    return RecognitionResult(
        machine_id=machine_id,
        name=machine_id,
        confidence=confidence,
        image_url="/img.png",
        reasoning="r",
    )


def _assert_fallback(results, small_catalog, reasoning: str) -> None:
    sentinel = results[0]
    assert sentinel.machine_id == UNKNOWN_MACHINE_ID
    assert sentinel.confidence == 0
    assert sentinel.reasoning == reasoning
    browsable = results[1:]
    assert [r.machine_id for r in browsable] == [m.id for m in small_catalog]
    assert all(r.confidence == 0 for r in browsable)
    assert [r.reasoning for r in browsable] == [f"Browse {m.name}" for m in small_catalog]


def test_thresholds_are_distinct() -> None:
    assert ACCEPT_THRESHOLD == 0.6
    assert AUTO_NAVIGATE_THRESHOLD == 0.85


def test_accepted_candidate_leads_with_alternatives(arbiter) -> None:
    results = arbiter.decide(
        MachineAnalysis(confidence=0.92, machine_id="chest-press-id", reasoning="handles at chest")
    )
    assert [r.machine_id for r in results] == ["chest-press-id", "incline-chest-press-id"]
    primary = results[0]
    assert primary.confidence == 0.92
    assert primary.name == "Chest Press"
    assert primary.image_url == "/img/chest-press.png"
    assert primary.reasoning == "handles at chest"
    assert results[1].confidence == pytest.approx(0.67)


def test_accepted_candidate_uses_service_label_and_default_reasoning(arbiter) -> None:
    results = arbiter.decide(
        MachineAnalysis(confidence=0.7, machine_id="lat-pulldown-id", machine_name="Lat pull-down")
    )
    assert len(results) == 1
    assert results[0].name == "Lat pull-down"
    assert results[0].reasoning == DEFAULT_MATCH_REASONING


def test_acceptance_boundary(arbiter, small_catalog) -> None:
    accepted = arbiter.decide(MachineAnalysis(confidence=0.6, machine_id="treadmill-id"))
    assert accepted[0].machine_id == "treadmill-id"

    rejected = arbiter.decide(MachineAnalysis(confidence=0.59, machine_id="treadmill-id", reasoning="blurry"))
    _assert_fallback(rejected, small_catalog, "blurry")


def test_low_confidence_without_reasoning_uses_default(arbiter, small_catalog) -> None:
    results = arbiter.decide(MachineAnalysis(confidence=0.4))
    _assert_fallback(results, small_catalog, DEFAULT_UNCERTAIN_REASONING)


def test_unknown_catalog_id_is_treated_as_uncertain(arbiter, small_catalog) -> None:
    results = arbiter.decide(
        MachineAnalysis(confidence=0.99, machine_id="MCH-SMITH-MACHINE", reasoning="smith machine rails")
    )
    _assert_fallback(results, small_catalog, "smith machine rails")


def test_service_failure_uses_fixed_message(arbiter, small_catalog) -> None:
    _assert_fallback(arbiter.decide(None), small_catalog, SERVICE_FAILURE_REASONING)


def test_feature_mismatch_demotes_below_acceptance(arbiter, small_catalog) -> None:
    results = arbiter.decide(
        MachineAnalysis(
            confidence=0.9,
            machine_id="chest-press-id",
            reasoning="looks like a chest press",
            features=FeatureSet(has_arm_pads=True),
        )
    )
    _assert_fallback(results, small_catalog, "looks like a chest press")


def test_feature_mismatch_can_still_surface(arbiter) -> None:
    results = arbiter.decide(
        MachineAnalysis(confidence=1.0, machine_id="chest-press-id", features=FeatureSet(has_arm_pads=True))
    )
    assert results[0].machine_id == "chest-press-id"
    assert results[0].confidence == pytest.approx(0.6)
    assert best_match(results) is None


class _SequenceJitter:
    def __init__(self, values) -> None:  # type: ignore[no-untyped-def]
        self.values = list(values)

    def uniform(self, low: float, high: float) -> float:
        return self.values.pop(0)


def test_results_are_ordered_by_descending_confidence() -> None:
    catalog = default_catalog()
    arbiter = Arbiter(
        catalog=catalog,
        validator=FeatureValidator(),
        alternatives=AlternativesGenerator(catalog, rng=_SequenceJitter([0.09, 0.01])),
    )
    results = arbiter.decide(MachineAnalysis(confidence=0.95, machine_id="MCH-CHEST-PRESS"))
    confidences = [r.confidence for r in results]
    assert confidences == sorted(confidences, reverse=True)
    assert [r.machine_id for r in results[1:]] == ["MCH-INCLINE-CHEST", "MCH-PEC-DECK"]


def test_best_match_threshold_boundary() -> None:
    assert best_match([_result(0.85)]) is not None
    assert best_match([_result(0.849999)]) is None
    assert best_match([]) is None


def test_best_match_only_considers_first_result() -> None:
    assert best_match([_result(0.5, "a"), _result(0.9, "b")]) is None


def test_alternatives_to_show_includes_primary() -> None:
    results = [_result(0.9, "a"), _result(0.7, "b"), _result(0.65, "c"), _result(0.0, "d")]
    shown = alternatives_to_show(results)
    assert [r.machine_id for r in shown] == ["a", "b", "c"]
    assert alternatives_to_show(results[:1]) == results[:1]


def test_process_results_composes_queries() -> None:
    results = [_result(0.9, "a"), _result(0.68, "b")]
    decision = process_results(results)
    assert decision.best_match == results[0]
    assert decision.alternatives == results
    assert decision.should_auto_navigate is True

    uncertain = process_results([_result(0.7, "a")])
    assert uncertain.best_match is None
    assert uncertain.should_auto_navigate is False
    assert uncertain.to_dict()["bestMatch"] is None
