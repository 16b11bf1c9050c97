from __future__ import annotations

import pytest

from machine_scan.core.catalog import default_catalog
from machine_scan.core.constants import FEATURE_INVARIANTS
from machine_scan.core.models import FeatureSet
from machine_scan.core.validation import FeatureValidator


def test_invariant_table_only_names_catalog_machines() -> None:
    catalog = default_catalog()
    assert all(machine_id in catalog for machine_id in FEATURE_INVARIANTS)


def test_missing_features_pass_through() -> None:
    validator = FeatureValidator()
    assert validator.validate("MCH-CHEST-PRESS", None, 0.77) == 0.77


def test_machine_without_invariants_passes_through() -> None:
    validator = FeatureValidator()
    features = FeatureSet(has_handles=False, motion_axis="sideways")
    assert validator.validate("MCH-TREADMILL", features, 0.81) == 0.81


def test_contradicting_attribute_is_penalized() -> None:
    validator = FeatureValidator()
    features = FeatureSet(has_arm_pads=True)
    assert validator.mismatches("MCH-CHEST-PRESS", features) == ["has_arm_pads"]
    assert validator.validate("MCH-CHEST-PRESS", features, 0.92) == pytest.approx(max(0.3, 0.92 - 0.4))


def test_penalty_never_drops_below_floor() -> None:
    validator = FeatureValidator()
    features = FeatureSet(motion_axis="horizontal")
    assert validator.validate("MCH-LAT-PULLDOWN", features, 0.55) == 0.3


def test_multiple_mismatches_penalize_once() -> None:
    validator = FeatureValidator()
    features = FeatureSet(motion_axis="horizontal", seat_back_angle="upright", has_handles=False)
    assert len(validator.mismatches("MCH-INCLINE-CHEST", features)) == 3
    assert validator.validate("MCH-INCLINE-CHEST", features, 0.95) == pytest.approx(0.55)


def test_unknown_attributes_are_never_mismatches() -> None:
    validator = FeatureValidator()
    features = FeatureSet(
        has_handles="unknown",
        has_arm_pads="unknown",
        motion_axis="unknown",
        seat_back_angle="unknown",
        has_overhead_cable="unknown",
    )
    assert validator.validate("MCH-CHEST-PRESS", features, 0.88) == 0.88


def test_matching_attributes_keep_confidence() -> None:
    validator = FeatureValidator()
    features = FeatureSet(has_handles=True, motion_axis="inclined", seat_back_angle="incline")
    assert validator.validate("MCH-INCLINE-CHEST", features, 0.9) == 0.9


def test_custom_invariant_table() -> None:
    validator = FeatureValidator({"rig": {"has_overhead_cable": True}})
    assert validator.validate("rig", FeatureSet(has_overhead_cable=False), 0.8) == pytest.approx(0.4)
    assert validator.validate("MCH-CHEST-PRESS", FeatureSet(has_arm_pads=True), 0.8) == 0.8


def test_feature_set_from_payload_normalizes_values() -> None:
    features = FeatureSet.from_payload(
        {
            "hasHandles": "yes",
            "has_arm_pads": "No",
            "motionAxis": " Vertical ",
            "seatBackAngle": "",
            "hasOverheadCable": 1,
        }
    )
    assert features == FeatureSet(
        has_handles=True,
        has_arm_pads=False,
        motion_axis="vertical",
        seat_back_angle=None,
        has_overhead_cable=True,
    )
    assert features.is_known("has_handles")
    assert not features.is_known("seat_back_angle")
    assert FeatureSet.from_payload(["not", "a", "dict"]) is None
