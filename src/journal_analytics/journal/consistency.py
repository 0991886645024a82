"""Consistency score — how stable trading results are over time.

Each component scores the stability of a bucketed series as
``(1 - stddev / |mean|) * 100`` (population stddev), floored at 0:

    Component                    Weight   Series
    ───────────────────────────────────────────────────────────────
    Win rate stability           25%      win rate per ISO week
    PnL variance                 25%      total PnL per calendar day
    Trade frequency regularity   20%      trade count per ISO week
    Drawdown recovery time       15%      100 - 10 * avg days loss->win
    Profit factor stability      15%      profit factor per month
"""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import Callable, Sequence

import numpy as np

from ..core.config import ConsistencyConfig
from .metrics import clamp, round_half_up, win_rate_pct
from .normalizer import PositionView, sort_by_close
from .report import ConsistencyComponents, ConsistencyScore

logger = logging.getLogger(__name__)

NOT_ENOUGH_TRADES = "Need at least {n} trades to calculate consistency score."

# Profit factor reported for a month with wins but no losses
NO_LOSS_PROFIT_FACTOR = 999.0

_BANDS: list[tuple[float, str]] = [
    (70.0, "Excellent consistency! You trade like a professional."),
    (50.0, "Good consistency. Focus on maintaining regular trading patterns."),
    (30.0, "Moderate consistency. Work on stabilizing your win rate and PnL."),
]
_LOW_CONSISTENCY = (
    "Low consistency. Your results are too volatile. Focus on a proven strategy."
)


def stability(values: Sequence[float]) -> float:
    """``(1 - sd/|mean|) * 100``; 0 for an empty series or zero mean."""
    if not values:
        return 0.0
    arr = np.asarray(values, dtype=float)
    mean = abs(float(np.mean(arr)))
    if mean == 0:
        return 0.0
    return (1.0 - float(np.std(arr)) / mean) * 100.0


def _iso_week(trade: PositionView) -> str:
    year, week, _ = trade.closed_at.isocalendar()
    return f"{year}-W{week:02d}"


def _group(
    trades: Sequence[PositionView], key: Callable[[PositionView], str]
) -> list[list[PositionView]]:
    buckets: dict[str, list[PositionView]] = defaultdict(list)
    for trade in trades:
        buckets[key(trade)].append(trade)
    return list(buckets.values())


def profit_factor(trades: Sequence[PositionView]) -> float:
    total_wins = sum(t.pnl for t in trades if t.pnl > 0)
    total_losses = abs(sum(t.pnl for t in trades if t.pnl < 0))
    if total_losses > 0:
        return total_wins / total_losses
    return NO_LOSS_PROFIT_FACTOR if total_wins > 0 else 1.0


def average_recovery_days(chronological: Sequence[PositionView]) -> float:
    """Mean days from each losing trade to the next winning trade.

    Losses never followed by a win (and the final trade) are ignored.
    """
    recoveries: list[float] = []
    for i, trade in enumerate(chronological[:-1]):
        if trade.pnl >= 0:
            continue
        for later in chronological[i + 1:]:
            if later.pnl > 0:
                elapsed = later.closed_at - trade.closed_at
                recoveries.append(elapsed.total_seconds() / 86_400)
                break
    return sum(recoveries) / len(recoveries) if recoveries else 0.0


class ConsistencyScorer:
    """Weighted composite consistency score.

    Parameters
    ----------
    config : ConsistencyConfig | None
        Minimum trade count, component weights and recovery penalty.
    """

    def __init__(self, config: ConsistencyConfig | None = None) -> None:
        self._config = config or ConsistencyConfig()

    @staticmethod
    def recommend(overall: float) -> str:
        for floor, message in _BANDS:
            if overall >= floor:
                return message
        return _LOW_CONSISTENCY

    def score(self, positions: Sequence[PositionView]) -> ConsistencyScore:
        cfg = self._config
        trades = sort_by_close(positions)
        if len(trades) < cfg.min_trades:
            return ConsistencyScore(
                recommendation=NOT_ENOUGH_TRADES.format(n=cfg.min_trades),
            )

        weeks = _group(trades, _iso_week)
        days = _group(trades, lambda t: t.closed_at.date().isoformat())
        months = _group(trades, lambda t: t.closed_at.strftime("%Y-%m"))

        recovery_days = average_recovery_days(trades)
        components = {
            "win_rate_stability": stability([win_rate_pct(w) for w in weeks]),
            "pnl_variance": stability([sum(t.pnl for t in d) for d in days]),
            "trade_frequency_regularity": stability([len(w) for w in weeks]),
            "drawdown_recovery_time": 100.0 - cfg.recovery_penalty_per_day * recovery_days,
            "profit_factor_stability": stability([profit_factor(m) for m in months]),
        }
        components = {name: max(value, 0.0) for name, value in components.items()}

        overall = clamp(
            components["win_rate_stability"] * cfg.win_rate_weight
            + components["pnl_variance"] * cfg.pnl_weight
            + components["trade_frequency_regularity"] * cfg.frequency_weight
            + components["drawdown_recovery_time"] * cfg.recovery_weight
            + components["profit_factor_stability"] * cfg.profit_factor_weight
        )

        logger.debug(
            "Consistency %.1f over %d weeks / %d days / %d months (recovery %.2fd)",
            overall,
            len(weeks),
            len(days),
            len(months),
            recovery_days,
        )

        return ConsistencyScore(
            overall=int(round_half_up(overall)),
            components=ConsistencyComponents(
                **{name: round_half_up(value) for name, value in components.items()}
            ),
            recommendation=self.recommend(overall),
        )
