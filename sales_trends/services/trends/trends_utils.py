import math
from typing import Sequence

# Days of history that make up the baseline / moving-average window
TRAILING_WINDOW_DAYS = 90


def round2(value: float) -> float:
    """Round half-up to 2 decimals (0.125 -> 0.13, -0.125 -> -0.12)."""
    return math.floor(value * 100 + 0.5) / 100


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def trailing_window(values: Sequence[float], size: int = TRAILING_WINDOW_DAYS) -> list[float]:
    """Last ``size`` values, or all of them if the series is shorter."""
    if size <= 0:
        return []
    return list(values[-size:])


def trailing_mean(values: Sequence[float], size: int = TRAILING_WINDOW_DAYS) -> float:
    window = trailing_window(values, size)
    return sum(window) / (len(window) or 1)
