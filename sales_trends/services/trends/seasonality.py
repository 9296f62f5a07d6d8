from typing import Dict
import pandas as pd


def weekday_averages(series: pd.Series) -> Dict[int, float]:
    """
    Mean value per weekday, keyed Sunday=0 .. Saturday=6.
    A weekday with no observations averages to 0.
    """
    weekday = (series.index.dayofweek + 1) % 7
    grouped = series.groupby(weekday).agg(["sum", "count"])
    averages = {}
    for dow in range(7):
        if dow in grouped.index:
            averages[dow] = float(grouped.at[dow, "sum"]) / int(grouped.at[dow, "count"] or 1)
        else:
            averages[dow] = 0.0
    return averages


def seasonality_strength(averages: Dict[int, float]) -> float:
    """Ratio of the busiest weekday's average to the mean weekday average."""
    dow_mean = sum(averages.values()) / 7
    if dow_mean == 0:
        return 0.0
    return max(averages.values()) / dow_mean
