"""
Exercise name normalization.

Exercise names typed by the user are the only link between logged sets,
stored personal records, and cached history. Every lookup goes through
normalize_exercise_name() so "Bench Press", " bench press " and
"BENCH PRESS" all resolve to the same key.
"""


def normalize_exercise_name(name: str) -> str:
    """
    Normalize an exercise name for use as a lookup key.

    Strips surrounding whitespace and case-folds. casefold() is
    locale-independent, so the key is stable regardless of device locale.

    Examples:
        >>> normalize_exercise_name("  Bench Press ")
        'bench press'
    """
    return name.strip().casefold()
