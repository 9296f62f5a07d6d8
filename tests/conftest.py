"""Shared test fixtures."""
from datetime import date, datetime, time, timedelta, timezone
from typing import Optional, Sequence

import pytest
from dateutil import tz

from sales_trends.schemas.trends import SalesRecord, ResultPayload
from sales_trends.services.storage.base import IStorage
from sales_trends.services.trends.sinks import ISink, payload_filename


class InMemoryStorage(IStorage):
    def __init__(self, sales: Optional[list[SalesRecord]] = None, fail: bool = False):
        self.sales = sales or []
        self.settings: dict[str, str] = {}
        self.fail = fail

    def get_sales(self) -> list[SalesRecord]:
        if self.fail:
            raise ConnectionError("database unreachable")
        return list(self.sales)

    def get_setting(self, key: str) -> Optional[str]:
        return self.settings.get(key)

    def set_setting(self, key: str, value: str) -> None:
        self.settings[key] = value


class MemorySink(ISink):
    def __init__(self):
        self.saved: list[ResultPayload] = []

    def save(self, payload: ResultPayload) -> str:
        self.saved.append(payload)
        return f"memory:{payload_filename(payload)}"


def make_sales(start: date, values: Sequence[float]) -> list[SalesRecord]:
    """One sale per non-zero day, at 10:00 Lusaka time (08:00 UTC)."""
    sales = []
    for offset, value in enumerate(values):
        if not value:
            continue
        day = start + timedelta(days=offset)
        sales.append(SalesRecord(
            created_at=datetime.combine(day, time(8, 0), tzinfo=timezone.utc),
            total_price=value,
        ))
    return sales


@pytest.fixture
def lusaka():
    return tz.gettz("Africa/Lusaka")


@pytest.fixture
def storage():
    return InMemoryStorage()


@pytest.fixture
def memory_sink():
    return MemorySink()
