"""Tests for the SQL and JSON file storage backends."""
import json
from datetime import datetime, timezone

import pytest
from sqlalchemy import create_engine, text
from sqlalchemy.orm import Session

from sales_trends.lib.exceptions import StorageError
from sales_trends.services.storage.json_storage import JsonFileStorage
from sales_trends.services.storage.sql_storage import SqlStorage


@pytest.fixture
def db():
    engine = create_engine("sqlite://")
    with engine.begin() as conn:
        conn.execute(text(
            "CREATE TABLE sales (id INTEGER PRIMARY KEY, quantity INTEGER, "
            "total_price NUMERIC, created_at TEXT)"
        ))
        conn.execute(text(
            "CREATE TABLE settings (id INTEGER PRIMARY KEY, key TEXT NOT NULL, "
            "value TEXT NOT NULL, updated_at TEXT)"
        ))
        conn.execute(text(
            "INSERT INTO sales (quantity, total_price, created_at) VALUES "
            "(2, 12.5, '2024-01-01T08:00:00'), (1, 7.5, '2024-01-02T09:30:00+00:00')"
        ))
    session = Session(engine)
    yield session
    session.close()


class TestSqlStorage:
    def test_reads_sales(self, db):
        sales = SqlStorage(db).get_sales()
        assert len(sales) == 2
        assert sorted(s.total_price for s in sales) == [7.5, 12.5]
        assert {s.created_at.date().isoformat() for s in sales} == {"2024-01-01", "2024-01-02"}

    def test_missing_setting(self, db):
        assert SqlStorage(db).get_setting("nope") is None

    def test_setting_upsert(self, db):
        storage = SqlStorage(db)
        storage.set_setting("predictions:trends_2024-01-03.json", "{}")
        storage.set_setting("predictions:trends_2024-01-03.json", '{"v": 2}')

        assert storage.get_setting("predictions:trends_2024-01-03.json") == '{"v": 2}'
        count = db.execute(text("SELECT COUNT(*) FROM settings")).scalar_one()
        assert count == 1


class TestJsonFileStorage:
    def test_reads_sales_and_settings(self, tmp_path):
        path = tmp_path / "storage.json"
        path.write_text(json.dumps({
            "sales": [
                {"id": 1, "quantity": 3, "totalPrice": "30.00", "createdAt": "2024-01-01T08:00:00.000Z"},
                {"id": 2, "quantity": 1, "totalPrice": None, "createdAt": "2024-01-02T08:00:00.000Z"},
            ],
            "settings": {"currency": "ZMW"},
        }))
        storage = JsonFileStorage(path)

        sales = storage.get_sales()
        assert [s.total_price for s in sales] == [30.0, 0.0]
        assert sales[0].created_at == datetime(2024, 1, 1, 8, tzinfo=timezone.utc)
        assert storage.get_setting("currency") == "ZMW"

    def test_missing_file_is_empty(self, tmp_path):
        storage = JsonFileStorage(tmp_path / "missing.json")
        assert storage.get_sales() == []
        assert storage.get_setting("anything") is None

    def test_set_setting_persists(self, tmp_path):
        path = tmp_path / "data" / "storage.json"
        JsonFileStorage(path).set_setting("predictions:x", "{}")

        assert JsonFileStorage(path).get_setting("predictions:x") == "{}"

    def test_corrupt_file_raises(self, tmp_path):
        path = tmp_path / "storage.json"
        path.write_text("{not json")
        with pytest.raises(StorageError):
            JsonFileStorage(path).get_sales()
