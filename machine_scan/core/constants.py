"""Static constants and lookup tables for machine recognition."""

from __future__ import annotations

SERVICE_BASE_URL = "http://127.0.0.1:54321/functions/v1"
SERVICE_ENDPOINT = "/analyzeMachine"

UNKNOWN_MACHINE_ID = "unknown"
UNKNOWN_MACHINE_NAME = "Unknown Machine"
UNKNOWN_IMAGE_URL = "/images/machines/unknown.png"
UNKNOWN_FEATURE = "unknown"

IMAGE_FORMAT = "jpeg"
JPEG_QUALITY = 0.9

# Minimum validated confidence for a candidate to become the primary result.
ACCEPT_THRESHOLD = 0.6
# Minimum confidence for the first result to drive navigation on its own.
AUTO_NAVIGATE_THRESHOLD = 0.85
ALTERNATIVES_TO_SHOW = 3

VALIDATION_PENALTY = 0.4
VALIDATION_FLOOR = 0.3

MAX_ALTERNATIVES = 2
ALTERNATIVE_OFFSET = 0.2
ALTERNATIVE_JITTER = 0.1
ALTERNATIVE_FLOOR = 0.3

DEFAULT_MATCH_REASONING = "Matched from visual analysis"
DEFAULT_UNCERTAIN_REASONING = "Could not identify the machine with enough confidence"
SERVICE_FAILURE_REASONING = (
    "Machine recognition is unavailable right now. Pick your machine from the list."
)

FEATURE_ATTRIBUTES = (
    "has_handles",
    "has_arm_pads",
    "motion_axis",
    "seat_back_angle",
    "has_overhead_cable",
)

# Hand-maintained; keep in step with DEFAULT_MACHINES in catalog.py.
MACHINE_DESCRIPTIONS = {
    "MCH-CHEST-PRESS": (
        "Seated machine with horizontal pressing motion with handles at chest level, "
        "slightly reclined seat back"
    ),
    "MCH-PEC-DECK": (
        "Seated machine with vertical arm pads swinging together in a butterfly arc "
        "in front of the chest"
    ),
    "MCH-INCLINE-CHEST": (
        "Seated press with significant upward angle, seat back at 30-45 degree incline, "
        "handles above chest level"
    ),
    "MCH-LAT-PULLDOWN": (
        "Seated pull-down station with a wide overhead bar on a cable, thigh pads "
        "holding the user in place"
    ),
    "MCH-SEATED-ROW": (
        "Seated horizontal pulling machine with chest pad or foot plate and a low "
        "cable handle"
    ),
    "MCH-LEG-PRESS": "Angled seat with large foot plate pushed away from the body",
    "MCH-LEG-EXTENSION": (
        "Seated machine with padded shin roller, knee straightening motion"
    ),
    "MCH-LEG-CURL": "Lying or seated machine with padded roller behind the ankles",
    "MCH-SHOULDER-PRESS": (
        "Seated overhead pressing machine, upright seat back, handles at shoulder height"
    ),
    "MCH-CABLE-CROSSOVER": (
        "Tall dual-tower cable station with adjustable pulleys on both sides"
    ),
    "MCH-TREADMILL": "Cardio machine with moving belt deck and side rails for walking or running",
    "MCH-INDOOR-CYCLING-BIKE": (
        "Seated cardio bike with pedals, handlebars and a front flywheel"
    ),
    "MCH-ELLIPTICAL": (
        "Standing cardio machine with oval foot pedals and moving arm handles"
    ),
    "MCH-ROWING-MACHINE": (
        "Low-profile rail with sliding seat, flywheel housing and pull handle"
    ),
}

# Expected structural features per machine id. Machines without an entry are
# never penalized.
FEATURE_INVARIANTS = {
    "MCH-CHEST-PRESS": {
        "has_handles": True,
        "has_arm_pads": False,
        "motion_axis": "horizontal",
        "seat_back_angle": "slight_recline",
    },
    "MCH-INCLINE-CHEST": {
        "has_handles": True,
        "motion_axis": "inclined",
        "seat_back_angle": "incline",
    },
    "MCH-PEC-DECK": {
        "has_arm_pads": True,
        "has_overhead_cable": False,
    },
    "MCH-SHOULDER-PRESS": {
        "has_handles": True,
        "motion_axis": "vertical",
        "seat_back_angle": "upright",
    },
    "MCH-LAT-PULLDOWN": {
        "has_overhead_cable": True,
        "motion_axis": "vertical",
    },
    "MCH-SEATED-ROW": {
        "has_handles": True,
        "motion_axis": "horizontal",
        "has_overhead_cable": False,
    },
}
