from datetime import date, tzinfo
from typing import Iterable
import pandas as pd
from sales_trends.schemas.trends import SalesRecord, DailyPoint
from sales_trends.services.trends.trends_utils import round2

MAX_INTERPOLATED_GAP = 2


def aggregate_daily(sales: Iterable[SalesRecord], start: date, end: date, zone: tzinfo) -> pd.Series:
    """
    Buckets sales into one revenue total per local calendar day in [start, end].

    Timestamps are shifted into ``zone`` before truncation; naive timestamps are
    read as UTC. Days without sales are 0. An inverted range gives an empty series.
    """
    index = pd.date_range(start=start, end=end, freq="D", name="date", unit="ns")
    records = [{"created_at": s.created_at, "total_price": s.total_price} for s in sales]
    if not records or index.empty:
        return pd.Series(0.0, index=index, name="value")

    df = pd.DataFrame.from_records(records)
    stamps = pd.to_datetime(df["created_at"], utc=True)
    df["day"] = stamps.dt.tz_convert(zone).dt.tz_localize(None).dt.normalize().astype("datetime64[ns]")
    df["total_price"] = pd.to_numeric(df["total_price"], errors="coerce").fillna(0.0)

    per_day = df.groupby("day")["total_price"].sum()
    return per_day.reindex(index, fill_value=0.0).astype(float).rename("value")


def fill_gaps(values: list[float], max_gap: int = MAX_INTERPOLATED_GAP) -> list[float]:
    """
    Linearly interpolates zero runs of at most ``max_gap`` days.

    A run starting at ``i`` and ending before the non-zero point ``j`` is filled
    from the value at ``i - 1`` (or the value at ``j`` at the very start of the
    series) towards the value at ``j``. Longer runs are kept as no-sales days.
    """
    filled = list(values)
    n = len(filled)
    i = 0
    while i < n:
        if filled[i] == 0:
            j = i + 1
            while j < n and filled[j] == 0 and j - i <= max_gap:
                j += 1
            if j < n and filled[j] != 0 and j - i <= max_gap:
                prev_val = filled[i - 1] if i >= 1 else filled[j]
                next_val = filled[j]
                gap = j - i + 1
                for k in range(i, j):
                    t = (k - (i - 1)) / gap
                    filled[k] = round2(prev_val * (1 - t) + next_val * t)
                i = j
        i += 1
    return filled


def to_daily_points(index: pd.DatetimeIndex, values: list[float]) -> list[DailyPoint]:
    return [DailyPoint(date=ts.date(), value=value) for ts, value in zip(index, values)]
