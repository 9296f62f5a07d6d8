"""Tests for the weekday averages and seasonality strength."""
import pandas as pd
import pytest

from sales_trends.services.trends.seasonality import weekday_averages, seasonality_strength


def _series(values, start="2024-01-01"):
    # 2024-01-01 is a Monday
    return pd.Series(values, index=pd.date_range(start, periods=len(values), freq="D"), dtype=float)


def test_weekdays_are_keyed_from_sunday():
    averages = weekday_averages(_series([1, 2, 3, 4, 5, 6, 7]))
    assert averages == {0: 7.0, 1: 1.0, 2: 2.0, 3: 3.0, 4: 4.0, 5: 5.0, 6: 6.0}


def test_missing_weekdays_average_to_zero():
    averages = weekday_averages(_series([10, 20]))
    assert averages[1] == 10.0
    assert averages[2] == 20.0
    assert averages[0] == 0.0


def test_constant_series_has_unit_strength():
    averages = weekday_averages(_series([100.0] * 28))
    assert seasonality_strength(averages) == pytest.approx(1.0)


def test_monday_peak_strength():
    values = [300 if i % 7 == 0 else 100 for i in range(140)]
    averages = weekday_averages(_series(values))
    assert averages[1] == 300.0
    assert seasonality_strength(averages) == pytest.approx(300 / (900 / 7))
    assert seasonality_strength(averages) > 1.1


def test_zero_series_strength_is_zero():
    assert seasonality_strength(weekday_averages(_series([0.0] * 14))) == 0.0
