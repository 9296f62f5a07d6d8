from datetime import date, timedelta
from enum import Enum
from typing import Optional, Sequence
from sales_trends.schemas.trends import SeriesStats
from sales_trends.services.trends.trends_utils import round2, trailing_mean

SEASON_LENGTH = 7
HW_ALPHA = 0.4
HW_BETA = 0.05
HW_GAMMA = 0.2

# Auto selection only considers Holt-Winters above these
AUTO_MIN_SERIES_LENGTH = 60
AUTO_MIN_SEASONALITY = 1.1


class ModelKind(str, Enum):
    AUTO = "auto"
    HOLT_WINTERS_WEEKLY = "holt-winters-weekly"
    MOVING_AVERAGE = "moving-average-fallback"


def resolve_model(stats: SeriesStats, method: str, min_history: int, series_length: int) -> tuple[ModelKind, str]:
    """
    Picks the model for a request and the reason recorded next to each forecast.

    ``method`` is the caller's choice: ``auto`` lets the weekly seasonality
    decide, ``holt-winters-weekly`` forces the seasonal model, anything else
    means moving average. Short histories always get the moving average.
    """
    if stats.non_empty_days < min_history:
        return (
            ModelKind.MOVING_AVERAGE,
            f"insufficient_history: only {stats.non_empty_days} non-empty days (<{min_history})",
        )
    if method == ModelKind.HOLT_WINTERS_WEEKLY.value:
        return ModelKind.HOLT_WINTERS_WEEKLY, ModelKind.HOLT_WINTERS_WEEKLY.value
    if (
        method == ModelKind.AUTO.value
        and series_length >= AUTO_MIN_SERIES_LENGTH
        and stats.seasonality_strength > AUTO_MIN_SEASONALITY
    ):
        return ModelKind.HOLT_WINTERS_WEEKLY, ModelKind.HOLT_WINTERS_WEEKLY.value
    return ModelKind.MOVING_AVERAGE, ModelKind.MOVING_AVERAGE.value


def holt_winters_additive(
    values: Sequence[float],
    horizon: int,
    season_length: int = SEASON_LENGTH,
    alpha: float = HW_ALPHA,
    beta: float = HW_BETA,
    gamma: float = HW_GAMMA,
) -> Optional[list[float]]:
    """
    Additive Holt-Winters forecast for ``horizon`` steps.

    Needs at least two full seasons of history, otherwise returns None.
    Level starts at the first season's mean, trend at the change between the
    first two season means per step, and each seasonal index at the mean
    deviation of that position across all complete seasons. The smoothing
    pass runs over the whole series before forecasting. Forecasts are floored
    at 0 and rounded to 2 decimals.
    """
    m = season_length
    n = len(values)
    if n < m * 2:
        return None

    seasons = n // m
    season_averages = [sum(values[i * m:(i + 1) * m]) / m for i in range(seasons)]
    level = season_averages[0]
    trend = (season_averages[1] - season_averages[0]) / m

    seasonals = []
    for i in range(m):
        deviation = sum(values[j * m + i] - season_averages[j] for j in range(seasons))
        seasonals.append(deviation / seasons)

    for i, value in enumerate(values):
        seasonal = seasonals[i % m]
        last_level = level
        level = alpha * (value - seasonal) + (1 - alpha) * (level + trend)
        trend = beta * (level - last_level) + (1 - beta) * trend
        seasonals[i % m] = gamma * (value - level) + (1 - gamma) * seasonal

    forecasts = []
    for h in range(1, horizon + 1):
        point = level + h * trend + seasonals[(n + h - 1) % m]
        forecasts.append(max(0.0, round2(point)))
    return forecasts


def moving_average_forecast(values: Sequence[float], horizon: int) -> list[float]:
    """The trailing-window mean repeated for every horizon day."""
    return [round2(trailing_mean(values))] * horizon


def forecast(values: Sequence[float], model: ModelKind, horizon: int) -> tuple[ModelKind, list[float]]:
    """
    Runs the resolved model. Holt-Winters on a series shorter than two seasons
    degrades to the moving average; the returned kind is the model actually used.
    """
    if model == ModelKind.HOLT_WINTERS_WEEKLY:
        predictions = holt_winters_additive(values, horizon)
        if predictions is not None:
            return ModelKind.HOLT_WINTERS_WEEKLY, predictions
    return ModelKind.MOVING_AVERAGE, moving_average_forecast(values, horizon)


def forecast_dates(end: date, horizon: int) -> list[date]:
    return [end + timedelta(days=h) for h in range(1, horizon + 1)]
