"""Tests for the predict-trends command line."""
import json
from datetime import date

import pytest

from sales_trends import cli
from sales_trends.core.config import settings

from conftest import InMemoryStorage, make_sales


@pytest.fixture
def storage(monkeypatch, tmp_path):
    storage = InMemoryStorage(make_sales(date(2024, 1, 1), [100.0] * 120))

    def fake_storage():
        yield storage

    monkeypatch.setattr(cli, "get_storage", fake_storage)
    monkeypatch.setattr(cli, "setup_logging", lambda stream: None)
    monkeypatch.setattr(settings, "PREDICTIONS_DIR", str(tmp_path / "predictions"))
    monkeypatch.setattr(settings, "AWS_S3_BUCKET", None)
    return storage


def test_prints_full_payload(storage, capsys, tmp_path):
    code = cli.main(["--start", "2024-01-01", "--end", "2024-04-29", "--horizon", "5"])

    assert code == 0
    payload = json.loads(capsys.readouterr().out)
    assert len(payload["predictions"]) == 5
    assert len(payload["series"]) == 120
    assert list((tmp_path / "predictions").glob("trends_*.json"))


def test_output_file_and_flags(storage, capsys, tmp_path):
    output = tmp_path / "out.json"
    code = cli.main([
        "--start", "2024-01-01",
        "--end", "2024-04-29",
        "--horizon", "2",
        "--min-history", "10",
        "--threshold-increase", "0.5",
        "--store-db",
        "--notify",
        "--output", str(output),
    ])

    assert code == 0
    written = json.loads(output.read_text())
    assert written["params"]["minHistory"] == 10
    assert written["params"]["thresholds"] == {"increase": 0.5, "decrease": -0.15}
    assert any(k.startswith("predictions:trends_") for k in storage.settings)
    assert any(k.startswith("predictions-notify:") for k in storage.settings)


def test_invalid_range_exits_non_zero(storage, capsys):
    code = cli.main(["--start", "2024-02-01", "--end", "2024-01-01"])
    assert code == 1
    assert capsys.readouterr().out == ""


def test_request_from_args_keeps_defaults():
    args = cli.build_parser().parse_args(["--method", "holt-winters-weekly"])
    request = cli.request_from_args(args)
    assert request.method == "holt-winters-weekly"
    assert request.horizon == 30
    assert request.min_history == 90
    assert request.store_db is False
