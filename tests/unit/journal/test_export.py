"""Tests for ReportExporter: JSON and CSV rendering."""

import csv
import io
import json

import pytest

from journal_analytics import compute_complete_analytics
from journal_analytics.journal.export import ReportExporter

from .conftest import make_execution, make_series


@pytest.fixture
def report():
    positions = make_series([100, -50, 20])
    return compute_complete_analytics(
        positions, [make_execution(p.id, fee="1") for p in positions], starting_balance=1000
    )


@pytest.fixture
def exporter():
    return ReportExporter()


class TestJsonExport:
    def test_camel_case_keys(self, exporter, report):
        payload = json.loads(exporter.to_json(report))
        assert payload["core"]["grossPnL"] == pytest.approx(70.0)
        assert payload["volumeAndFees"]["feePercentOfPnL"] == pytest.approx(3 / 70 * 100)
        assert payload["equityCurve"][0]["cumulativePnL"] == pytest.approx(100.0)
        assert payload["riskScore"]["level"] in {
            "CONSERVATIVE",
            "BALANCED",
            "AGGRESSIVE",
            "RECKLESS",
        }

    def test_compact(self, exporter, report):
        assert "\n" not in exporter.to_json(report, indent=None)


class TestCsvExport:
    def test_equity_curve(self, exporter, report):
        rows = list(csv.DictReader(io.StringIO(exporter.equity_curve_csv(report.equity_curve))))
        assert len(rows) == 3
        assert list(rows[0]) == ["timestamp", "trade_number", "equity", "cumulative_pnl"]
        assert [float(r["equity"]) for r in rows] == [1100.0, 1050.0, 1070.0]
        assert rows[2]["trade_number"] == "3"

    def test_daily(self, exporter, report):
        text = exporter.daily_performance_csv(report.daily_performance)
        rows = list(csv.DictReader(io.StringIO(text)))
        assert len(rows) == 1
        assert float(rows[0]["pnl"]) == pytest.approx(70.0)
        assert rows[0]["trade_count"] == "3"

    def test_empty_has_header_only(self, exporter):
        assert exporter.equity_curve_csv([]).strip() == (
            "timestamp,trade_number,equity,cumulative_pnl"
        )

    def test_decimal_places(self, report):
        text = ReportExporter(decimal_places=1).daily_performance_csv(report.daily_performance)
        row = next(csv.DictReader(io.StringIO(text)))
        assert row["win_rate"] == "66.7"
