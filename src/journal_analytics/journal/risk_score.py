"""Risk score — how aggressive a trading style is, on a 0-100 scale.

Five components are computed independently, clamped to [0, 100] and
combined with fixed weights:

    Component                    Weight   Measures
    ───────────────────────────────────────────────────────────────
    Drawdown severity            30%      current DD relative to max DD
    Position sizing consistency  20%      CV of max position size
    Overtrading index            20%      trades per profitable trade
    Win streak volatility        15%      CV of win/loss streak lengths
    Fee burn rate                15%      fees as % of account balance

Usage::

    scorer = RiskScorer()
    result = scorer.score(journal.positions, journal.executions, 10_000)
    print(result.level, result.overall)
"""

from __future__ import annotations

import logging
import math
from typing import Sequence

import numpy as np

from ..core.config import RiskConfig
from ..core.enums import RiskLevel
from .equity import analyze_drawdown, build_equity_curve
from .metrics import clamp, round_half_up
from .normalizer import ExecutionView, PositionView, sort_by_close
from .report import RiskComponents, RiskScore

logger = logging.getLogger(__name__)

NOT_ENOUGH_DATA = "Not enough data to calculate risk score."

_RECOMMENDATIONS: dict[RiskLevel, str] = {
    RiskLevel.CONSERVATIVE: (
        "Your trading style is conservative. Consider increasing position "
        "sizes for better returns."
    ),
    RiskLevel.BALANCED: (
        "Your risk profile is balanced. Maintain this approach for "
        "consistent results."
    ),
    RiskLevel.AGGRESSIVE: (
        "You are trading aggressively. Monitor your drawdowns and position "
        "sizing."
    ),
    RiskLevel.RECKLESS: (
        "WARNING: Your trading is reckless. Reduce position sizes and trade "
        "frequency immediately."
    ),
}

_SECONDS_PER_DAY = 86_400


def coefficient_of_variation(values: Sequence[float]) -> float:
    """Population stddev / mean, as a percentage.  0 when mean <= 0."""
    if not values:
        return 0.0
    arr = np.asarray(values, dtype=float)
    mean = float(np.mean(arr))
    if mean <= 0:
        return 0.0
    return float(np.std(arr)) / mean * 100.0


def active_day_span(chronological: Sequence[PositionView]) -> int:
    """Whole days between first and last close, at least 1."""
    if not chronological:
        return 1
    span = chronological[-1].closed_at - chronological[0].closed_at
    return max(1, math.ceil(span.total_seconds() / _SECONDS_PER_DAY))


def streak_lengths(chronological: Sequence[PositionView]) -> list[int]:
    """Lengths of consecutive win / non-win runs, in close order."""
    lengths: list[int] = []
    current_won: bool | None = None
    run = 0
    for trade in chronological:
        won = trade.pnl > 0
        if won == current_won:
            run += 1
        else:
            if current_won is not None:
                lengths.append(run)
            current_won = won
            run = 1
    if current_won is not None:
        lengths.append(run)
    return lengths


class RiskScorer:
    """Weighted composite risk score.

    Parameters
    ----------
    config : RiskConfig | None
        Component weights and level thresholds.  Defaults to
        30/20/20/15/15 weights and 30/60/80 level cut-offs.
    """

    def __init__(self, config: RiskConfig | None = None) -> None:
        self._config = config or RiskConfig()

    def classify(self, overall: float) -> RiskLevel:
        cfg = self._config
        if overall <= cfg.conservative_max:
            return RiskLevel.CONSERVATIVE
        if overall <= cfg.balanced_max:
            return RiskLevel.BALANCED
        if overall <= cfg.aggressive_max:
            return RiskLevel.AGGRESSIVE
        return RiskLevel.RECKLESS

    def score(
        self,
        positions: Sequence[PositionView],
        executions: Sequence[ExecutionView],
        account_balance: float = 10_000.0,
    ) -> RiskScore:
        chronological = sort_by_close(positions)
        if not chronological:
            return RiskScore(
                overall=0,
                level=RiskLevel.CONSERVATIVE,
                components=RiskComponents(),
                recommendation=NOT_ENOUGH_DATA,
            )

        # Drawdown severity
        drawdown = analyze_drawdown(
            build_equity_curve(chronological, account_balance)
        )
        drawdown_severity = (
            drawdown.current_drawdown / drawdown.max_drawdown * 100
            if drawdown.max_drawdown > 0
            else 0.0
        )

        # Position sizing consistency
        sizing = coefficient_of_variation([p.max_size for p in chronological])

        # Overtrading index
        days = active_day_span(chronological)
        trades_per_day = len(chronological) / days
        profitable = sum(1 for p in chronological if p.pnl > 0)
        profitable_per_day = profitable / days
        overtrading = (
            trades_per_day / profitable_per_day * 100
            if profitable_per_day > 0
            else 100.0
        )

        # Win streak volatility
        streaks = coefficient_of_variation(streak_lengths(chronological))

        # Fee burn rate
        total_fees = sum(e.fee for e in executions)
        fee_burn = total_fees / account_balance * 100 if account_balance > 0 else 0.0

        components = {
            "drawdown_severity": clamp(drawdown_severity),
            "position_sizing_consistency": clamp(sizing),
            "overtrading_index": clamp(overtrading),
            "win_streak_volatility": clamp(streaks),
            "fee_burn_rate": clamp(fee_burn),
        }

        cfg = self._config
        weighted = (
            components["drawdown_severity"] * cfg.drawdown_weight
            + components["position_sizing_consistency"] * cfg.sizing_weight
            + components["overtrading_index"] * cfg.overtrading_weight
            + components["win_streak_volatility"] * cfg.streak_weight
            + components["fee_burn_rate"] * cfg.fee_burn_weight
        )
        overall = clamp(weighted)
        level = self.classify(overall)

        logger.debug(
            "Risk score %.1f (%s) over %d trades / %d days",
            overall,
            level.value,
            len(chronological),
            days,
        )

        return RiskScore(
            overall=int(round_half_up(overall)),
            level=level,
            components=RiskComponents(
                **{name: round_half_up(value) for name, value in components.items()}
            ),
            recommendation=_RECOMMENDATIONS[level],
        )
