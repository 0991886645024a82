"""Time-bucketed performance — by calendar day, UTC hour and order type.

Answers questions like "Which hours am I losing money in?" or "Do my
limit orders outperform market orders?".  All three groupings look at
CLOSED positions only and are independent of each other.

Usage::

    daily = daily_performance(journal.positions)
    hourly = hourly_performance(journal.positions)      # always 24 buckets
    by_type = order_type_performance(journal.positions, journal.executions)
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from typing import Sequence

from .normalizer import ExecutionView, PositionView, sort_by_close
from .report import DailyStats, HourlyStats, OrderTypeStats

UNKNOWN_ORDER_TYPE = "UNKNOWN"


@dataclass
class _BucketStats:
    """Accumulator for a time bucket."""

    trades: int = 0
    wins: int = 0
    total_pnl: float = 0.0
    total_volume: float = 0.0

    def record(self, trade: PositionView) -> None:
        self.trades += 1
        self.total_pnl += trade.pnl
        self.total_volume += trade.total_volume
        if trade.pnl > 0:
            self.wins += 1

    @property
    def win_rate(self) -> float:
        return self.wins / self.trades * 100 if self.trades else 0.0

    @property
    def avg_pnl(self) -> float:
        return self.total_pnl / self.trades if self.trades else 0.0


def daily_performance(positions: Sequence[PositionView]) -> list[DailyStats]:
    """Per ISO date of ``closed_at`` (UTC), sorted ascending."""
    by_date: dict[str, _BucketStats] = defaultdict(_BucketStats)
    for trade in sort_by_close(positions):
        by_date[trade.closed_at.date().isoformat()].record(trade)

    return [
        DailyStats(
            date=day,
            pnl=stats.total_pnl,
            volume=stats.total_volume,
            trade_count=stats.trades,
            win_rate=stats.win_rate,
            avg_pnl=stats.avg_pnl,
        )
        for day, stats in sorted(by_date.items())
    ]


def hourly_performance(positions: Sequence[PositionView]) -> list[HourlyStats]:
    """Per UTC hour of ``closed_at``.  All 24 hours are always reported."""
    by_hour = [_BucketStats() for _ in range(24)]
    for trade in sort_by_close(positions):
        by_hour[trade.closed_at.hour].record(trade)

    return [
        HourlyStats(
            hour=hour,
            pnl=stats.total_pnl,
            trade_count=stats.trades,
            avg_pnl=stats.avg_pnl,
            win_rate=stats.win_rate,
        )
        for hour, stats in enumerate(by_hour)
    ]


def resolve_order_types(executions: Sequence[ExecutionView]) -> dict[str, str]:
    """Map position id to the order type of its first execution.

    "First" is execution order as supplied, not block time.
    """
    order_types: dict[str, str] = {}
    for execution in executions:
        if execution.position_id and execution.position_id not in order_types:
            order_types[execution.position_id] = execution.order_type.value
    return order_types


def order_type_performance(
    positions: Sequence[PositionView],
    executions: Sequence[ExecutionView],
) -> list[OrderTypeStats]:
    """Per entry order type; positions without executions go to ``UNKNOWN``.

    Buckets appear in the order their first position appears in the input.
    """
    order_types = resolve_order_types(executions)
    by_type: dict[str, _BucketStats] = {}
    for trade in positions:
        if not trade.is_closed:
            continue
        key = order_types.get(trade.id, UNKNOWN_ORDER_TYPE)
        by_type.setdefault(key, _BucketStats()).record(trade)

    return [
        OrderTypeStats(
            order_type=order_type,
            pnl=stats.total_pnl,
            trade_count=stats.trades,
            win_rate=stats.win_rate,
            avg_pnl=stats.avg_pnl,
        )
        for order_type, stats in by_type.items()
    ]
