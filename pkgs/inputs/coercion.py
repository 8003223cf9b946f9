"""
Coercion of raw form input into numbers.

Text fields are edited one keystroke at a time, so a handful of incomplete
strings ("", "-", ".", "-.") are legitimate interim values. They are kept as
typed and read as 0 when the engine runs.
"""
import math
from typing import Any, Union

PLACEHOLDERS = frozenset({'', '-', '.', '-.'})

RawValue = Union[str, int, float]


def _parse_finite(value: Any):
    """Return the finite float for value, or None if it has none."""
    if isinstance(value, bool):
        return None
    try:
        parsed = float(value)
    except (TypeError, ValueError):
        return None
    return parsed if math.isfinite(parsed) else None


def accept_numeric_text(value: RawValue) -> bool:
    """True for an in-progress placeholder or a value that parses as a finite number."""
    if isinstance(value, str) and value in PLACEHOLDERS:
        return True
    return _parse_finite(value) is not None


def handle_numeric_input(value: RawValue, previous: RawValue) -> RawValue:
    """Keep the new value if acceptable, otherwise silently keep the previous one."""
    return value if accept_numeric_text(value) else previous


def safe_parse_float(value: RawValue) -> float:
    """Convert a raw value to a float, reading placeholders and garbage as 0."""
    if isinstance(value, str) and value in PLACEHOLDERS:
        return 0.0
    parsed = _parse_finite(value)
    return 0.0 if parsed is None else parsed
