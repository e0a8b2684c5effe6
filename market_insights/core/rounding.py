# market_insights/core/rounding.py
# -----------------------------------------------------------------------------
# Display rounding (half-up) and count-to-percentage
# -----------------------------------------------------------------------------
import math


def round_half_up(value: float, ndigits: int = 0) -> float:
    """
    Half-up rounding (2.5 -> 3, 0.25 -> 0.3 with ndigits=1).
    Display values are rounded this way, not with the built-in banker's round().
    """
    factor = 10**ndigits
    return math.floor(value * factor + 0.5) / factor


def percent(count: int, total: int) -> int:
    """count/total as a whole percentage, half-up."""
    return int(round_half_up((count / total) * 100))
