"""
Set scoring for personal records and progress history.

One formula is used everywhere a set is compared: live PR detection,
per-session history, breakthroughs and the PR timeline.

- Weighted sets are scored by estimated 1RM (Brzycki).
- Bodyweight sets (weight == 0) are scored by rep count.
"""

# Brzycki is only applied up to this rep count; beyond it the raw weight is used.
BRZYCKI_MAX_REPS = 10


def estimate_one_rep_max(weight: float, reps: int) -> float:
    """
    Estimate 1RM using the Brzycki formula.

    Formula: 1RM = weight * 36 / (37 - reps)

    Sets above 10 reps fall back to the raw weight, since the formula
    degenerates at high rep counts. Bodyweight sets have no 1RM and
    return 0.

    Args:
        weight: Weight lifted (0 = bodyweight)
        reps: Number of reps completed

    Returns:
        Estimated 1RM (unrounded)
    """
    if reps <= 0 or weight <= 0:
        return 0.0
    if reps > BRZYCKI_MAX_REPS:
        return float(weight)

    return weight * 36.0 / (37.0 - reps)


def set_score(weight: float, reps: int) -> float:
    """
    Comparison score for a set: reps for bodyweight, estimated 1RM otherwise.

    Args:
        weight: Weight lifted (0 = bodyweight)
        reps: Number of reps completed

    Returns:
        Score used to rank sets of the same exercise
    """
    if weight == 0:
        return float(reps)
    return estimate_one_rep_max(weight, reps)


def round_for_display(value: float) -> float:
    """Round a score or 1RM to 1 decimal place for display."""
    return round(value, 1)
