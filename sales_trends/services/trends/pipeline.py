from datetime import date, datetime, timedelta, timezone, tzinfo
from typing import Iterable, Optional
from dateutil import tz
from sales_trends.core.config import settings
from sales_trends.lib.exceptions import ValidationError
from sales_trends.lib.logger import log
from sales_trends.schemas.trends import (
    SalesRecord,
    TrendsRequest,
    SeriesStats,
    ForecastPoint,
    ResultPayload,
)
from sales_trends.services.trends.series import aggregate_daily, fill_gaps, to_daily_points
from sales_trends.services.trends.outliers import detect_outliers, quartiles
from sales_trends.services.trends.seasonality import weekday_averages, seasonality_strength
from sales_trends.services.trends.forecaster import resolve_model, forecast, forecast_dates
from sales_trends.services.trends.intervals import residual_std, bounds
from sales_trends.services.trends.recommendations import recommend
from sales_trends.services.trends.trends_utils import trailing_window, trailing_mean

SUPPORTED_GRANULARITIES = ("daily",)


def resolve_zone(name: str) -> tzinfo:
    zone = tz.gettz(name)
    if zone is None:
        raise ValidationError("timezone", f"unknown time zone '{name}'")
    return zone


def resolve_range(params: TrendsRequest, zone: tzinfo, now: datetime, lookback_days: int) -> tuple[date, date]:
    end = params.end or now.astimezone(zone).date()
    start = params.start or end - timedelta(days=lookback_days)
    return start, end


def validate_request(params: TrendsRequest, start: date, end: date) -> None:
    """Raises ValidationError for the first malformed field."""
    if end < start:
        raise ValidationError("end", f"end ({end}) is before start ({start})")
    if params.horizon < 1:
        raise ValidationError("horizon", "must be a positive number of days")
    if params.min_history < 0:
        raise ValidationError("minHistory", "must not be negative")
    if params.granularity not in SUPPORTED_GRANULARITIES:
        raise ValidationError("granularity", f"only {', '.join(SUPPORTED_GRANULARITIES)} is supported")
    if params.thresholds.decrease >= params.thresholds.increase:
        raise ValidationError("thresholds", "decrease must be lower than increase")


def forecast_trends(
    sales: Iterable[SalesRecord],
    params: TrendsRequest,
    zone: Optional[tzinfo] = None,
    now: Optional[datetime] = None,
    legacy_residuals: Optional[bool] = None,
    lookback_days: Optional[int] = None,
) -> ResultPayload:
    """
    Runs the whole forecast for one request, without touching any storage.

    Sales are bucketed per local day, short gaps interpolated, outliers flagged,
    the model resolved from the weekly seasonality, and every forecast day gets
    95% bounds and a recommended action relative to the trailing baseline.
    """
    zone = zone or resolve_zone(settings.TIMEZONE)
    now = now or datetime.now(timezone.utc)
    legacy_residuals = settings.LEGACY_RESIDUALS if legacy_residuals is None else legacy_residuals
    lookback_days = settings.DEFAULT_LOOKBACK_DAYS if lookback_days is None else lookback_days

    start, end = resolve_range(params, zone, now, lookback_days)
    validate_request(params, start, end)

    daily = aggregate_daily(sales, start, end, zone)
    raw_values = daily.tolist()
    non_empty_days = sum(1 for v in raw_values if v > 0)

    values = fill_gaps(raw_values)
    daily[:] = values
    series = to_daily_points(daily.index, values)

    q1, q3 = quartiles(values)
    averages = weekday_averages(daily)
    stats = SeriesStats(
        q1=q1,
        q3=q3,
        iqr=q3 - q1,
        weekday_averages=averages,
        seasonality_strength=seasonality_strength(averages),
        non_empty_days=non_empty_days,
    )
    outliers = detect_outliers(series)

    resolved, reason = resolve_model(stats, params.method, params.min_history, len(values))
    model, preds = forecast(values, resolved, params.horizon)
    if model != resolved:
        reason = model.value
    log.info(
        f"Forecasting {params.horizon} days from {len(values)} days of history "
        f"({non_empty_days} with sales): model={model.value}, "
        f"seasonality={stats.seasonality_strength:.3f}, outliers={len(outliers)}"
    )

    window = trailing_window(values)
    baseline = trailing_mean(values)
    std = residual_std(window, baseline, legacy=legacy_residuals)

    predictions = []
    for day, pred in zip(forecast_dates(end, params.horizon), preds):
        lower, upper = bounds(pred, std)
        predictions.append(ForecastPoint(
            date=day,
            pred=pred,
            lower95=lower,
            upper95=upper,
            model=model.value,
            reason=reason,
            recommended_action=recommend(pred, baseline, params.thresholds),
        ))

    request_params = params.model_dump(mode="json", by_alias=True)
    request_params.update(start=start.isoformat(), end=end.isoformat())

    return ResultPayload(
        generated_at=now,
        params=request_params,
        series=series,
        predictions=predictions,
        outliers=outliers,
    )
