"""
Suggested rest durations by exercise type.

Heavy barbell compounds get the longest rest, isolation work the shortest.
Anything unrecognized falls back to the user's configured default.
"""

from typing import Tuple

from backend.core.rest_timer import clamp_rest_seconds

HEAVY_COMPOUND_REST_SECONDS = 180
COMPOUND_REST_SECONDS = 120
ISOLATION_REST_SECONDS = 60

HEAVY_COMPOUND_KEYWORDS: Tuple[str, ...] = (
    "squat",
    "deadlift",
    "bench press",
    "overhead press",
    "military press",
    "clean",
    "snatch",
)

COMPOUND_KEYWORDS: Tuple[str, ...] = (
    "row",
    "pull-up",
    "pullup",
    "chin-up",
    "chinup",
    "lunge",
    "dip",
    "press",
    "hip thrust",
    "pulldown",
)

ISOLATION_KEYWORDS: Tuple[str, ...] = (
    "curl",
    "raise",
    "extension",
    "fly",
    "flye",
    "kickback",
    "shrug",
    "calf",
    "crunch",
)


def suggest_rest_seconds(exercise_name: str, default_seconds: int) -> int:
    """
    Suggest a rest duration for an exercise.

    Checked most specific first, so "Leg Extension" is isolation while
    "Bench Press" is a heavy compound rather than a generic press.

    Args:
        exercise_name: Exercise name (any capitalization)
        default_seconds: Fallback for unrecognized exercises

    Returns:
        Rest duration in seconds, clamped to the rest timer bounds
    """
    name = exercise_name.strip().casefold()

    if any(keyword in name for keyword in ISOLATION_KEYWORDS):
        seconds = ISOLATION_REST_SECONDS
    elif any(keyword in name for keyword in HEAVY_COMPOUND_KEYWORDS):
        seconds = HEAVY_COMPOUND_REST_SECONDS
    elif any(keyword in name for keyword in COMPOUND_KEYWORDS):
        seconds = COMPOUND_REST_SECONDS
    else:
        seconds = default_seconds

    return clamp_rest_seconds(seconds)
