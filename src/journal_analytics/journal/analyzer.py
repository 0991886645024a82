"""Journal analyzer — assembles every component into one report.

Inputs are converted once by the normalizer, the equity curve is built
once and fed to the drawdown pass, and every other component runs
independently over the same immutable snapshot.

Usage::

    report = compute_complete_analytics(positions, executions, 10_000)
    print(report.risk_score.level, report.core.net_pnl)
"""

from __future__ import annotations

import logging
from typing import Iterable

from ..core.config import AnalyticsSettings
from ..core.models import Execution, Position
from .capital_efficiency import CapitalEfficiencyScorer
from .consistency import ConsistencyScorer
from .equity import analyze_drawdown, build_equity_curve
from .metrics import (
    compute_avg_win_loss,
    compute_core_metrics,
    compute_duration,
    compute_expectancy,
    compute_extremes,
    compute_long_short,
    compute_volume_and_fees,
    compute_win_rate,
)
from .normalizer import NormalizedJournal, normalize
from .overtrading import OvertradingDetector
from .report import AdvancedAnalytics, CompleteAnalytics
from .risk_score import RiskScorer
from .session_analysis import (
    daily_performance,
    hourly_performance,
    order_type_performance,
)

logger = logging.getLogger(__name__)


def _resolve_settings(
    settings: AnalyticsSettings | None,
    starting_balance: float | None,
    account_balance: float | None,
) -> tuple[AnalyticsSettings, float, float]:
    settings = settings or AnalyticsSettings()
    starting = (
        starting_balance if starting_balance is not None else settings.starting_balance
    )
    if account_balance is None:
        account_balance = settings.account_balance
    account = account_balance if account_balance is not None else starting
    return settings, starting, account


def _advanced(
    journal: NormalizedJournal,
    settings: AnalyticsSettings,
    account_balance: float,
) -> AdvancedAnalytics:
    risk = RiskScorer(settings.risk).score(
        journal.positions, journal.executions, account_balance
    )
    logger.debug("Risk score computed: %d (%s)", risk.overall, risk.level.value)

    signals = OvertradingDetector(settings.overtrading).detect(journal.positions)
    logger.debug("Overtrading signals: %d", len(signals))

    consistency = ConsistencyScorer(settings.consistency).score(journal.positions)
    logger.debug("Consistency score computed: %d", consistency.overall)

    efficiency = CapitalEfficiencyScorer().score(journal.positions, journal.executions)
    logger.debug(
        "Capital efficiency computed: %.2f (%s)",
        efficiency.score,
        efficiency.level.value,
    )

    return AdvancedAnalytics(
        risk_score=risk,
        overtrading_signals=signals,
        consistency_score=consistency,
        capital_efficiency=efficiency,
    )


def analyze_journal(
    journal: NormalizedJournal,
    starting_balance: float | None = None,
    account_balance: float | None = None,
    settings: AnalyticsSettings | None = None,
) -> CompleteAnalytics:
    """Full report over an already-normalized journal."""
    settings, starting, account = _resolve_settings(
        settings, starting_balance, account_balance
    )
    positions, executions = journal.positions, journal.executions

    curve = build_equity_curve(positions, starting)
    advanced = _advanced(journal, settings, account)

    report = CompleteAnalytics(
        core=compute_core_metrics(positions, executions),
        win_rate=compute_win_rate(positions),
        avg_win_loss=compute_avg_win_loss(positions),
        long_short=compute_long_short(positions),
        duration=compute_duration(positions),
        extremes=compute_extremes(positions),
        volume_and_fees=compute_volume_and_fees(executions, positions),
        expectancy=compute_expectancy(positions),
        equity_curve=curve,
        drawdown=analyze_drawdown(curve),
        daily_performance=daily_performance(positions),
        hourly_performance=hourly_performance(positions),
        order_type_performance=order_type_performance(positions, executions),
        risk_score=advanced.risk_score,
        overtrading_signals=advanced.overtrading_signals,
        consistency_score=advanced.consistency_score,
        capital_efficiency=advanced.capital_efficiency,
    )

    logger.info(
        "Analytics complete: %d positions (%d closed), %d executions, "
        "net PnL %.2f, %d signals",
        len(positions),
        report.core.trade_count,
        len(executions),
        report.core.net_pnl,
        len(report.overtrading_signals),
    )
    return report


def compute_complete_analytics(
    positions: Iterable[Position],
    executions: Iterable[Execution] = (),
    starting_balance: float | None = None,
    account_balance: float | None = None,
    settings: AnalyticsSettings | None = None,
) -> CompleteAnalytics:
    """Every metric, the equity curve and the behavioral scores.

    Parameters
    ----------
    positions, executions
        Raw snapshot records.  Never mutated.
    starting_balance
        Seeds the equity curve.  Defaults to ``settings.starting_balance``
        (10 000).
    account_balance
        Used by the risk score.  Defaults to the starting balance.
    settings
        Thresholds and weights; defaults are used when omitted.

    Raises
    ------
    InvalidInputError
        A monetary field is not a finite number, or a CLOSED position has
        no close time or realized PnL.
    """
    return analyze_journal(
        normalize(positions, executions),
        starting_balance=starting_balance,
        account_balance=account_balance,
        settings=settings,
    )


def compute_advanced_analytics(
    positions: Iterable[Position],
    executions: Iterable[Execution] = (),
    starting_balance: float | None = None,
    account_balance: float | None = None,
    settings: AnalyticsSettings | None = None,
) -> AdvancedAnalytics:
    """Only the behavioral scores: risk, overtrading, consistency, efficiency.

    Balances resolve exactly as in :func:`compute_complete_analytics`, so
    the scores match the full report for the same inputs.
    """
    settings, _, account = _resolve_settings(
        settings, starting_balance, account_balance
    )
    journal = normalize(positions, executions)
    advanced = _advanced(journal, settings, account)
    logger.info(
        "Advanced analytics complete: %d positions, %d signals",
        len(journal.positions),
        len(advanced.overtrading_signals),
    )
    return advanced
