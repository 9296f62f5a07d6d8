import math
from typing import Sequence
import numpy as np
from sales_trends.services.trends.trends_utils import round2

Z_95 = 1.96


def residual_std(window: Sequence[float], baseline: float, legacy: bool = False) -> float:
    """
    Root mean square of the residuals ``value - baseline`` over ``window``.

    Only the trailing window is used, and ``baseline`` is its flat mean rather
    than the fitted model. For a Holt-Winters forecast the weekly swing is
    therefore counted as dispersion, so bounds on a strongly seasonal series
    are wide (off-peak days typically get a lower bound of 0).

    ``legacy`` reproduces the residuals of earlier releases, which compared each
    value with itself and therefore always produced zero-width intervals.
    """
    values = np.asarray(window, dtype=float)
    if values.size == 0:
        return 0.0
    reference = values if legacy else baseline
    residuals = np.abs(values - reference)
    return float(math.sqrt(np.mean(residuals ** 2)))


def bounds(pred: float, std: float) -> tuple[float, float]:
    """95% interval around ``pred``; the lower bound is clamped at 0."""
    lower = max(0.0, round2(pred - Z_95 * std))
    upper = round2(pred + Z_95 * std)
    return lower, upper
