from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Optional, Dict, Any, List
from datetime import date, datetime, timezone
from dateutil import tz
from dateutil.parser import isoparse
from sales_trends.core.config import settings

class SalesRecord(BaseModel):
    """A single sale as read from the store. Only the fields the forecast needs."""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    created_at: datetime = Field(alias="createdAt")
    total_price: float = Field(0.0, alias="totalPrice")

    @field_validator("total_price", mode="before")
    @classmethod
    def _missing_price_is_zero(cls, value: Any) -> Any:
        return 0.0 if value in (None, "") else value

class Thresholds(BaseModel):
    increase: float = settings.INCREASE_THRESHOLD
    decrease: float = settings.DECREASE_THRESHOLD

class TrendsRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    start: Optional[date] = None
    end: Optional[date] = None
    granularity: str = "daily"
    horizon: int = settings.DEFAULT_HORIZON
    method: str = "auto"
    min_history: int = Field(settings.DEFAULT_MIN_HISTORY, alias="minHistory")
    thresholds: Thresholds = Field(default_factory=Thresholds)
    store_db: bool = Field(False, alias="storeDb")
    notify: bool = False

    @field_validator("start", "end", mode="before")
    @classmethod
    def _timestamp_to_local_day(cls, value: Any) -> Any:
        """Full ISO timestamps (e.g. ``2024-04-29T22:15:00.000Z``) become the local calendar day."""
        if isinstance(value, str) and len(value) > 10:
            value = isoparse(value)
        if isinstance(value, datetime):
            if value.tzinfo is None:
                value = value.replace(tzinfo=timezone.utc)
            return value.astimezone(tz.gettz(settings.TIMEZONE) or timezone.utc).date()
        return value

class DailyPoint(BaseModel):
    date: date
    value: float

class SeriesStats(BaseModel):
    q1: float
    q3: float
    iqr: float
    weekday_averages: Dict[int, float]
    seasonality_strength: float
    non_empty_days: int

class ForecastPoint(BaseModel):
    date: date
    pred: float
    lower95: float
    upper95: float
    model: str
    reason: str
    recommended_action: Optional[str] = None

class ResultPayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    generated_at: datetime = Field(alias="generatedAt")
    params: Dict[str, Any]
    series: List[DailyPoint]
    predictions: List[ForecastPoint]
    outliers: List[date]

    def to_json_dict(self) -> Dict[str, Any]:
        """Wire shape of the payload (camelCase ``generatedAt``, ISO dates)."""
        return self.model_dump(mode="json", by_alias=True)
