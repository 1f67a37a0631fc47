"""
Yield accuracy tolerance.

A calculated yield is compared against an expected or benchmark value; a
relative deviation above the tolerance flags the result. Flagging never
rejects: the calculated value is still returned to the caller.

Formula:
    deviation = |calculated - expected| / expected
"""

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_ACCURACY_TOLERANCE: float = 0.10


@dataclass(frozen=True)
class AccuracyCheck:
    """Outcome of comparing a calculated value against a benchmark."""

    calculated: float
    expected: float
    deviation: float
    tolerance: float

    @property
    def flagged(self) -> bool:
        return self.deviation > self.tolerance


def relative_deviation(calculated: float, expected: float) -> float:
    """
    Relative deviation of *calculated* from *expected*.

    Raises:
        ValueError: If *expected* is not strictly positive.
    """
    if expected <= 0:
        raise ValueError(f"expected must be positive, got {expected}")
    return abs(calculated - expected) / expected


def check_accuracy(
    calculated: float,
    expected: float,
    tolerance: float = DEFAULT_ACCURACY_TOLERANCE,
) -> AccuracyCheck:
    """
    Compare *calculated* against *expected* within a relative *tolerance*.

    Args:
        calculated: The engine's computed value.
        expected: The benchmark value; must be positive.
        tolerance: Maximum allowed relative deviation, in [0, 1].

    Returns:
        AccuracyCheck; ``flagged`` is True when the deviation exceeds the
        tolerance.

    Raises:
        ValueError: If tolerance is outside [0, 1] or expected is not positive.
    """
    if not (0.0 <= tolerance <= 1.0):
        raise ValueError(f"tolerance must be in [0, 1], got {tolerance}")
    return AccuracyCheck(
        calculated=calculated,
        expected=expected,
        deviation=relative_deviation(calculated, expected),
        tolerance=tolerance,
    )
