"""Equity curve and drawdown analysis.

The equity curve walks closed positions in close order and accumulates
realized PnL on top of a starting balance.  The drawdown pass tracks the
running peak of that curve.  "Current" drawdown is measured at the last
point of the supplied curve, never against wall-clock time.
"""

from __future__ import annotations

import logging
from typing import Sequence

import numpy as np

from .normalizer import PositionView, sort_by_close
from .report import DrawdownMetrics, EquityPoint

logger = logging.getLogger(__name__)

DEFAULT_STARTING_BALANCE = 10_000.0


def build_equity_curve(
    positions: Sequence[PositionView],
    starting_balance: float = DEFAULT_STARTING_BALANCE,
) -> list[EquityPoint]:
    """One point per CLOSED position, ordered by ``closed_at`` (stable)."""
    curve: list[EquityPoint] = []
    cumulative = 0.0
    for number, trade in enumerate(sort_by_close(positions), start=1):
        cumulative += trade.pnl
        curve.append(
            EquityPoint(
                timestamp=trade.closed_at,
                equity=starting_balance + cumulative,
                cumulative_pnl=cumulative,
                trade_number=number,
            )
        )
    return curve


def drawdown_series(curve: Sequence[EquityPoint]) -> np.ndarray:
    """Drawdown percentage from the running peak at every curve point."""
    if not curve:
        return np.zeros(0)
    eq = np.array([p.equity for p in curve], dtype=float)
    running_max = np.maximum.accumulate(eq)
    safe_peak = np.where(running_max > 0, running_max, 1.0)
    return np.where(running_max > 0, (running_max - eq) / safe_peak * 100.0, 0.0)


def analyze_drawdown(curve: Sequence[EquityPoint]) -> DrawdownMetrics:
    """Max and current drawdown of an equity curve.

    ``max_drawdown`` is a percentage of the peak, ``max_drawdown_value``
    the same decline in currency, dated at the point where it was reached.
    """
    if not curve:
        return DrawdownMetrics()

    eq = np.array([p.equity for p in curve], dtype=float)
    running_max = np.maximum.accumulate(eq)
    dd = drawdown_series(curve)

    # argmax returns the first occurrence, i.e. the earliest worst point
    worst = int(np.argmax(dd))
    max_dd = float(dd[worst])

    current_peak = float(running_max[-1])
    current_equity = float(eq[-1])
    current_dd = (
        (current_peak - current_equity) / current_peak * 100.0
        if current_peak > 0
        else 0.0
    )

    if max_dd <= 0:
        return DrawdownMetrics(current_drawdown=current_dd)

    logger.debug(
        "Max drawdown %.2f%% at trade #%d", max_dd, curve[worst].trade_number
    )
    return DrawdownMetrics(
        max_drawdown=max_dd,
        max_drawdown_value=float(running_max[worst] - eq[worst]),
        current_drawdown=current_dd,
        max_drawdown_date=curve[worst].timestamp,
    )
