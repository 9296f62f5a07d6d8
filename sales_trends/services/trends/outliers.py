import math
from typing import Sequence
import numpy as np
from sales_trends.schemas.trends import DailyPoint

IQR_FENCE = 1.5


def quartiles(values: Sequence[float]) -> tuple[float, float]:
    """
    Q1/Q3 by plain rank selection: ``sorted[floor(n * 0.25)]`` and
    ``sorted[floor(n * 0.75)]``. No interpolation between ranks, so the
    fences match predictions already stored by earlier releases.
    """
    n = len(values)
    if n == 0:
        return 0.0, 0.0
    ordered = np.sort(np.asarray(values, dtype=float))
    return float(ordered[math.floor(n * 0.25)]), float(ordered[math.floor(n * 0.75)])


def detect_outliers(points: Sequence[DailyPoint]) -> list:
    """Dates whose value lies outside [Q1 - 1.5 IQR, Q3 + 1.5 IQR]."""
    q1, q3 = quartiles([p.value for p in points])
    iqr = q3 - q1
    upper = q3 + IQR_FENCE * iqr
    lower = q1 - IQR_FENCE * iqr
    return [p.date for p in points if p.value > upper or p.value < lower]
