"""Tests for daily, hourly and order-type performance buckets."""

from datetime import datetime, timedelta, timezone

import pytest

from journal_analytics.core.enums import OrderType, PositionStatus
from journal_analytics.journal.normalizer import normalize
from journal_analytics.journal.session_analysis import (
    UNKNOWN_ORDER_TYPE,
    daily_performance,
    hourly_performance,
    order_type_performance,
)

from .conftest import T0, make_execution, make_position, views


class TestDailyPerformance:
    def test_groups_by_close_date_sorted(self):
        day2 = datetime(2024, 1, 2, 9, tzinfo=timezone.utc)
        day1 = datetime(2024, 1, 1, 23, tzinfo=timezone.utc)
        positions = views(
            [
                make_position(30, day2, total_volume="300"),
                make_position(10, day1, total_volume="100"),
                make_position(-20, day1 + timedelta(minutes=30), total_volume="100"),
            ]
        )
        daily = daily_performance(positions)
        assert [d.date for d in daily] == ["2024-01-01", "2024-01-02"]
        first = daily[0]
        assert first.trade_count == 2
        assert first.pnl == pytest.approx(-10.0)
        assert first.volume == pytest.approx(200.0)
        assert first.win_rate == pytest.approx(50.0)
        assert first.avg_pnl == pytest.approx(-5.0)

    def test_empty(self):
        assert daily_performance(()) == []


class TestHourlyPerformance:
    def test_always_24_buckets(self):
        hourly = hourly_performance(views([make_position(10, T0)]))
        assert len(hourly) == 24
        assert [h.hour for h in hourly] == list(range(24))
        assert hourly[12].trade_count == 1
        assert hourly[12].pnl == pytest.approx(10.0)
        assert hourly[11].trade_count == 0
        assert hourly[11].win_rate == 0.0

    def test_empty_still_24(self):
        assert len(hourly_performance(())) == 24


class TestOrderTypePerformance:
    def test_first_execution_decides(self):
        positions = [
            make_position(10, T0, position_id="p1"),
            make_position(-5, T0, position_id="p2"),
            make_position(20, T0, position_id="p3"),
        ]
        executions = [
            make_execution("p1", order_type=OrderType.LIMIT),
            make_execution("p1", order_type=OrderType.STOP),
            make_execution("p2", order_type=OrderType.MARKET),
            make_execution(None, order_type=OrderType.STOP),
        ]
        journal = normalize(positions, executions)
        stats = order_type_performance(journal.positions, journal.executions)
        by_type = {s.order_type: s for s in stats}
        assert [s.order_type for s in stats] == ["LIMIT", "MARKET", UNKNOWN_ORDER_TYPE]
        assert by_type["LIMIT"].pnl == pytest.approx(10.0)
        assert by_type["MARKET"].win_rate == 0.0
        assert by_type[UNKNOWN_ORDER_TYPE].trade_count == 1
        assert "STOP" not in by_type

    def test_open_positions_ignored(self):
        journal = normalize(
            [make_position(status=PositionStatus.OPEN, position_id="o1")],
            [make_execution("o1")],
        )
        assert order_type_performance(journal.positions, journal.executions) == []
