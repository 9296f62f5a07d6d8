"""Tests for model resolution, Holt-Winters and the moving-average fallback."""
from datetime import date

import pytest

from sales_trends.schemas.trends import SeriesStats
from sales_trends.services.trends.forecaster import (
    ModelKind,
    resolve_model,
    holt_winters_additive,
    moving_average_forecast,
    forecast,
    forecast_dates,
)


def _stats(non_empty_days=120, strength=1.0):
    return SeriesStats(
        q1=0.0,
        q3=0.0,
        iqr=0.0,
        weekday_averages={d: 0.0 for d in range(7)},
        seasonality_strength=strength,
        non_empty_days=non_empty_days,
    )


def _weekly(weeks=20, peak=300.0, base=100.0):
    return [peak if i % 7 == 0 else base for i in range(weeks * 7)]


class TestResolveModel:
    def test_insufficient_history_forces_moving_average(self):
        model, reason = resolve_model(_stats(non_empty_days=30, strength=3.0), "holt-winters-weekly", 90, 365)
        assert model == ModelKind.MOVING_AVERAGE
        assert reason == "insufficient_history: only 30 non-empty days (<90)"

    def test_auto_picks_holt_winters_for_strong_weekly_pattern(self):
        model, reason = resolve_model(_stats(strength=1.5), "auto", 90, 120)
        assert model == ModelKind.HOLT_WINTERS_WEEKLY
        assert reason == "holt-winters-weekly"

    def test_auto_needs_sixty_days(self):
        model, _ = resolve_model(_stats(strength=1.5), "auto", 0, 59)
        assert model == ModelKind.MOVING_AVERAGE

    def test_auto_needs_strength_above_threshold(self):
        model, reason = resolve_model(_stats(strength=1.1), "auto", 90, 120)
        assert model == ModelKind.MOVING_AVERAGE
        assert reason == "moving-average-fallback"

    def test_explicit_holt_winters_skips_seasonality_check(self):
        model, _ = resolve_model(_stats(strength=1.0), "holt-winters-weekly", 90, 30)
        assert model == ModelKind.HOLT_WINTERS_WEEKLY

    def test_unknown_method_means_moving_average(self):
        model, _ = resolve_model(_stats(strength=5.0), "prophet", 90, 365)
        assert model == ModelKind.MOVING_AVERAGE


class TestHoltWinters:
    def test_needs_two_seasons(self):
        assert holt_winters_additive([100.0] * 13, horizon=7) is None
        assert holt_winters_additive([100.0] * 14, horizon=7) is not None

    def test_reproduces_weekly_pattern(self):
        preds = holt_winters_additive(_weekly(), horizon=14)
        assert len(preds) == 14
        # history ends on a Sunday, so steps 1 and 8 are Mondays
        assert preds[0] == pytest.approx(300.0, abs=0.05)
        assert preds[7] == pytest.approx(300.0, abs=0.05)
        assert preds[2] == pytest.approx(100.0, abs=0.05)

    def test_is_deterministic(self):
        values = [100 + (i % 7) * 13.7 + (i % 5) * 2.1 for i in range(150)]
        assert holt_winters_additive(values, 30) == holt_winters_additive(values, 30)

    def test_forecasts_are_floored_at_zero(self):
        values = [max(0.0, 500 - 5 * i) for i in range(98)]
        preds = holt_winters_additive(values, 60)
        assert all(p >= 0 for p in preds)

    def test_forecasts_are_rounded(self):
        values = [100 + (i % 7) * 3.333 for i in range(70)]
        for p in holt_winters_additive(values, 10):
            assert round(p, 2) == p


class TestMovingAverage:
    def test_constant_series(self):
        assert moving_average_forecast([42.5] * 120, 5) == [42.5] * 5

    def test_uses_trailing_ninety_days(self):
        values = [1000.0] * 10 + [100.0] * 90
        assert moving_average_forecast(values, 3) == [100.0] * 3

    def test_short_series_uses_all_values(self):
        assert moving_average_forecast([10.0, 20.0, 30.0], 2) == [20.0, 20.0]

    def test_empty_series_forecasts_zero(self):
        assert moving_average_forecast([], 2) == [0.0, 0.0]


def test_short_series_falls_back_from_holt_winters():
    model, preds = forecast([50.0] * 10, ModelKind.HOLT_WINTERS_WEEKLY, 3)
    assert model == ModelKind.MOVING_AVERAGE
    assert preds == [50.0, 50.0, 50.0]


def test_forecast_dates_follow_end():
    assert forecast_dates(date(2024, 2, 28), 3) == [date(2024, 2, 29), date(2024, 3, 1), date(2024, 3, 2)]
