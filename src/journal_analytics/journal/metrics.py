"""Core trade metrics: PnL, win rate, sides, durations, extremes, fees.

Position-based metrics only look at CLOSED positions.  Volume and fee
totals come from executions, since open positions still pay fees and
generate volume.  Any ratio or average with a zero denominator is 0.
"""

from __future__ import annotations

import math
from collections import Counter
from typing import Sequence

from ..core.enums import TradeOutcome
from .normalizer import ExecutionView, PositionView, closed_positions
from .report import (
    AvgWinLoss,
    CoreMetrics,
    DurationMetrics,
    ExtremeMetrics,
    LongShortMetrics,
    VolumeAndFees,
    WinRateMetrics,
)


def _ratio(numerator: float, denominator: float) -> float:
    return numerator / denominator if denominator != 0 else 0.0


def _pct(numerator: float, denominator: float) -> float:
    return _ratio(numerator, denominator) * 100.0


def clamp(value: float, low: float = 0.0, high: float = 100.0) -> float:
    return max(low, min(high, value))


def round_half_up(value: float, digits: int = 0) -> float:
    """Round halves toward +inf (2.5 -> 3, -2.5 -> -2), unlike ``round()``."""
    scale = 10 ** digits
    return math.floor(value * scale + 0.5) / scale


def gross_pnl(positions: Sequence[PositionView]) -> float:
    return sum(p.pnl for p in closed_positions(positions))


def win_rate_pct(positions: Sequence[PositionView]) -> float:
    """Percentage of *positions* with positive PnL (no status filtering)."""
    wins = sum(1 for p in positions if p.pnl > 0)
    return _pct(wins, len(positions))


def compute_core_metrics(
    positions: Sequence[PositionView],
    executions: Sequence[ExecutionView],
) -> CoreMetrics:
    gross = gross_pnl(positions)
    total_fees = sum(e.fee for e in executions)
    return CoreMetrics(
        gross_pnl=gross,
        net_pnl=gross - total_fees,
        total_fees=total_fees,
        total_volume=sum(e.notional for e in executions),
        trade_count=len(closed_positions(positions)),
    )


def compute_win_rate(positions: Sequence[PositionView]) -> WinRateMetrics:
    closed = closed_positions(positions)
    total = len(closed)
    if total == 0:
        return WinRateMetrics()

    outcomes = Counter(p.outcome for p in closed)
    wins = outcomes[TradeOutcome.WIN]
    losses = outcomes[TradeOutcome.LOSS]
    breakevens = outcomes[TradeOutcome.BREAKEVEN]

    return WinRateMetrics(
        win_rate=wins / total * 100,
        loss_rate=losses / total * 100,
        breakeven_rate=breakevens / total * 100,
        win_count=wins,
        loss_count=losses,
        breakeven_count=breakevens,
        total_trades=total,
    )


def compute_avg_win_loss(positions: Sequence[PositionView]) -> AvgWinLoss:
    closed = closed_positions(positions)
    wins = [p.pnl for p in closed if p.pnl > 0]
    losses = [p.pnl for p in closed if p.pnl < 0]

    avg_win = _ratio(sum(wins), len(wins))
    avg_loss = _ratio(sum(losses), len(losses))

    return AvgWinLoss(
        avg_win=avg_win,
        avg_loss=avg_loss,
        win_loss_ratio=_ratio(avg_win, abs(avg_loss)),
    )


def compute_expectancy(positions: Sequence[PositionView]) -> float:
    """Mean realized PnL per closed trade."""
    closed = closed_positions(positions)
    return _ratio(sum(p.pnl for p in closed), len(closed))


def compute_long_short(positions: Sequence[PositionView]) -> LongShortMetrics:
    closed = closed_positions(positions)
    longs = [p for p in closed if p.is_long]
    shorts = [p for p in closed if not p.is_long]

    long_pnl = sum(p.pnl for p in longs)
    short_pnl = sum(p.pnl for p in shorts)

    return LongShortMetrics(
        long_count=len(longs),
        short_count=len(shorts),
        long_pnl=long_pnl,
        short_pnl=short_pnl,
        count_ratio=_ratio(len(longs), len(shorts)),
        pnl_ratio=_ratio(long_pnl, abs(short_pnl)),
    )


def compute_duration(positions: Sequence[PositionView]) -> DurationMetrics:
    durations = [
        p.duration_seconds
        for p in closed_positions(positions)
        if p.duration_seconds is not None
    ]
    if not durations:
        return DurationMetrics()

    avg = sum(durations) / len(durations)
    ordered = sorted(durations)

    return DurationMetrics(
        avg_duration_seconds=avg,
        avg_duration_hours=avg / 3600,
        avg_duration_days=avg / 86400,
        # Upper median for even counts
        median_duration_seconds=ordered[len(ordered) // 2],
        shortest_trade=ordered[0],
        longest_trade=ordered[-1],
    )


def compute_extremes(positions: Sequence[PositionView]) -> ExtremeMetrics:
    closed = closed_positions(positions)
    if not closed:
        return ExtremeMetrics()

    # Ties keep the first trade encountered
    best = closed[0]
    worst = closed[0]
    for p in closed[1:]:
        if p.pnl > best.pnl:
            best = p
        if p.pnl < worst.pnl:
            worst = p

    return ExtremeMetrics(
        largest_gain=best.pnl,
        largest_loss=worst.pnl,
        largest_gain_symbol=best.symbol,
        largest_loss_symbol=worst.symbol,
        largest_gain_date=best.closed_at,
        largest_loss_date=worst.closed_at,
    )


def compute_volume_and_fees(
    executions: Sequence[ExecutionView],
    positions: Sequence[PositionView],
) -> VolumeAndFees:
    total_volume = sum(e.notional for e in executions)
    total_fees = sum(e.fee for e in executions)
    maker_fees = sum(e.fee for e in executions if e.is_maker)
    taker_fees = sum(e.fee for e in executions if not e.is_maker)
    closed = closed_positions(positions)
    gross = sum(p.pnl for p in closed)

    return VolumeAndFees(
        total_volume=total_volume,
        total_fees=total_fees,
        fee_percent_of_pnl=_pct(total_fees, abs(gross)),
        fee_percent_of_volume=_pct(total_fees, total_volume),
        avg_fee_per_trade=_ratio(total_fees, len(closed)),
        maker_fees=maker_fees,
        taker_fees=taker_fees,
    )
