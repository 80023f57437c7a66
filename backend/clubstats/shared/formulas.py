"""
Shared numeric formulas.

Rates are percentages; every helper guards its denominator and returns 0
instead of NaN/inf.
"""

import math


def percentage(part: float, whole: float) -> float:
    """part / whole * 100, or 0.0 when whole is zero."""
    if not whole:
        return 0.0
    return part / whole * 100


def round_1(value: float) -> float:
    """
    Round to one decimal place, halves away from zero.

    Python's round() uses banker's rounding (round(0.25, 1) == 0.2);
    dashboard figures round halves up (0.25 -> 0.3).
    """
    if value < 0:
        return -round_1(-value)
    return math.floor(value * 10 + 0.5) / 10


def rate(part: float, whole: float) -> float:
    """Percentage rounded to one decimal."""
    return round_1(percentage(part, whole))


def relative_change(current: float, previous: float) -> float:
    """
    Relative change of current against previous, in percent.

    Returns 0.0 when previous is zero.
    """
    if not previous:
        return 0.0
    return (current - previous) / previous * 100
