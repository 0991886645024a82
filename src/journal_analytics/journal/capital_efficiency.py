"""Capital efficiency: net PnL per unit of capital deployed."""

from __future__ import annotations

import logging
from typing import Sequence

from ..core.enums import EfficiencyLevel
from .metrics import gross_pnl, round_half_up
from .normalizer import ExecutionView, PositionView, closed_positions
from .report import CapitalEfficiency

logger = logging.getLogger(__name__)

NO_CLOSED_POSITIONS = "No closed positions to analyze."

# Upper bounds (exclusive) of each level, in score percent
_LEVELS: list[tuple[float, EfficiencyLevel]] = [
    (5.0, EfficiencyLevel.INEFFICIENT),
    (15.0, EfficiencyLevel.AVERAGE),
    (30.0, EfficiencyLevel.GOOD),
]

_RECOMMENDATIONS: dict[EfficiencyLevel, str] = {
    EfficiencyLevel.INEFFICIENT: (
        "Your capital efficiency is low. You may be overtrading or using "
        "poor position sizing."
    ),
    EfficiencyLevel.AVERAGE: (
        "Average capital efficiency. Focus on quality trades over quantity."
    ),
    EfficiencyLevel.GOOD: (
        "Good capital efficiency! You are converting capital to profit "
        "effectively."
    ),
    EfficiencyLevel.EXCELLENT: (
        "Excellent capital efficiency! You are maximizing returns on "
        "deployed capital."
    ),
}


def classify_efficiency(score: float) -> EfficiencyLevel:
    for upper, level in _LEVELS:
        if score < upper:
            return level
    return EfficiencyLevel.EXCELLENT


class CapitalEfficiencyScorer:
    """Score = net PnL / total volume of closed positions * 100."""

    def score(
        self,
        positions: Sequence[PositionView],
        executions: Sequence[ExecutionView],
    ) -> CapitalEfficiency:
        closed = closed_positions(positions)
        if not closed:
            return CapitalEfficiency(recommendation=NO_CLOSED_POSITIONS)

        deployed = sum(p.total_volume for p in closed)
        net = gross_pnl(closed) - sum(e.fee for e in executions)
        raw = net / deployed * 100 if deployed > 0 else 0.0
        # The level is read off the reported (2dp) score
        score = round_half_up(raw, 2)
        level = classify_efficiency(score)

        logger.debug(
            "Capital efficiency %.2f%% (%s) on %.2f deployed",
            score,
            level.value,
            deployed,
        )
        return CapitalEfficiency(
            score=score,
            level=level,
            total_capital_deployed=deployed,
            net_pnl=net,
            recommendation=_RECOMMENDATIONS[level],
        )
