"""Overtrading detector — behavioral pattern heuristics over closed trades.

Overtrading is one of the most common and destructive trading behaviours;
catching it early prevents unnecessary fee burn and emotional
decision-making.  Four independent heuristics run over the same
close-ordered trade sequence:

    Signal             Severity  Trigger
    ──────────────────────────────────────────────────────────────────
    REVENGE_TRADING    HIGH      loss followed by >=3 closes within 30 min
    CHASING            MEDIUM    symbol with >=2 losses among >=4 trades
    FATIGUE_TRADING    HIGH      >10 trades in a day, 2nd-half win rate
                                 more than 20 points below the 1st half
    FOMO_CLUSTERING    MEDIUM    >=5 same-side closes within 1 hour

Revenge trading and FOMO clustering report at most one signal per
dataset (the earliest).  Chasing and fatigue report one signal per
qualifying symbol / day.

Usage::

    detector = OvertradingDetector()
    for signal in detector.detect(journal.positions):
        print(signal.type, signal.message)
"""

from __future__ import annotations

import logging
from collections import defaultdict
from datetime import timedelta
from typing import Sequence

from ..core.config import OvertradingConfig
from .metrics import win_rate_pct
from .normalizer import PositionView, sort_by_close
from .report import (
    ChasingData,
    ChasingSignal,
    FatigueTradingData,
    FatigueTradingSignal,
    FomoClusteringData,
    FomoClusteringSignal,
    OvertradingSignal,
    RevengeTradingData,
    RevengeTradingSignal,
)

logger = logging.getLogger(__name__)


def _describe_window(minutes: float) -> str:
    if minutes >= 60 and minutes % 60 == 0:
        hours = int(minutes // 60)
        return "1 hour" if hours == 1 else f"{hours} hours"
    return f"{minutes:g} minutes"


def _closes_within(
    trades: Sequence[PositionView], anchor: int, window: timedelta
) -> list[PositionView]:
    """Trades closing strictly after ``trades[anchor]`` and inside *window*."""
    start = trades[anchor].closed_at
    following: list[PositionView] = []
    for trade in trades[anchor + 1:]:
        elapsed = trade.closed_at - start
        if elapsed >= window:
            break
        if elapsed > timedelta(0):
            following.append(trade)
    return following


class OvertradingDetector:
    """Detect undisciplined trading patterns.

    Parameters
    ----------
    config : OvertradingConfig | None
        Window lengths and count thresholds.  Defaults reproduce the
        thresholds in the module docstring.
    """

    def __init__(self, config: OvertradingConfig | None = None) -> None:
        self._config = config or OvertradingConfig()

    def detect(self, positions: Sequence[PositionView]) -> list[OvertradingSignal]:
        """Run all four heuristics over the CLOSED positions."""
        trades = sort_by_close(positions)
        signals: list[OvertradingSignal] = []

        revenge = self.detect_revenge_trading(trades)
        if revenge is not None:
            signals.append(revenge)
        signals.extend(self.detect_chasing(trades))
        signals.extend(self.detect_fatigue(trades))
        fomo = self.detect_fomo_clustering(trades)
        if fomo is not None:
            signals.append(fomo)

        for signal in signals:
            logger.warning(
                "Overtrading signal %s (%s): %s",
                signal.type.value,
                signal.severity.value,
                signal.message,
            )
        return signals

    # ------------------------------------------------------------------ #
    # Heuristics (each expects close-ordered trades)                      #
    # ------------------------------------------------------------------ #

    def detect_revenge_trading(
        self, trades: Sequence[PositionView]
    ) -> RevengeTradingSignal | None:
        cfg = self._config
        window = timedelta(minutes=cfg.revenge_window_minutes)

        for i, trade in enumerate(trades):
            if trade.pnl >= 0:
                continue
            following = _closes_within(trades, i, window)
            if len(following) >= cfg.revenge_min_trades:
                return RevengeTradingSignal(
                    message=(
                        f"You opened {len(following)} trades within "
                        f"{_describe_window(cfg.revenge_window_minutes)} after a "
                        f"${abs(trade.pnl):.2f} loss. Take a break."
                    ),
                    data=RevengeTradingData(
                        loss_amount=trade.pnl,
                        subsequent_trades=len(following),
                    ),
                )
        return None

    def detect_chasing(self, trades: Sequence[PositionView]) -> list[ChasingSignal]:
        cfg = self._config
        by_symbol: dict[str, list[PositionView]] = defaultdict(list)
        for trade in trades:
            by_symbol[trade.symbol].append(trade)

        signals: list[ChasingSignal] = []
        for symbol, group in by_symbol.items():
            losses = sum(1 for t in group if t.pnl < 0)
            if losses >= cfg.chasing_min_losses and len(group) >= cfg.chasing_min_trades:
                signals.append(
                    ChasingSignal(
                        message=(
                            f"You're chasing {symbol} after {losses} losses. "
                            "Consider moving on to a different symbol."
                        ),
                        data=ChasingData(symbol=symbol, losses=losses, total=len(group)),
                    )
                )
        return signals

    def detect_fatigue(
        self, trades: Sequence[PositionView]
    ) -> list[FatigueTradingSignal]:
        cfg = self._config
        by_day: dict[str, list[PositionView]] = defaultdict(list)
        for trade in trades:
            by_day[trade.closed_at.date().isoformat()].append(trade)

        signals: list[FatigueTradingSignal] = []
        for day, group in by_day.items():
            if len(group) <= cfg.fatigue_min_trades:
                continue
            half = len(group) // 2
            first_wr = win_rate_pct(group[:half])
            second_wr = win_rate_pct(group[half:])
            if second_wr < first_wr - cfg.fatigue_win_rate_drop:
                signals.append(
                    FatigueTradingSignal(
                        message=(
                            f"You made {len(group)} trades on {day}. Your win rate "
                            f"dropped from {first_wr:.0f}% to {second_wr:.0f}%. "
                            "You may be fatigued."
                        ),
                        data=FatigueTradingData(
                            date=day,
                            trade_count=len(group),
                            win_rate_drop=first_wr - second_wr,
                        ),
                    )
                )
        return signals

    def detect_fomo_clustering(
        self, trades: Sequence[PositionView]
    ) -> FomoClusteringSignal | None:
        cfg = self._config
        window = timedelta(minutes=cfg.fomo_window_minutes)

        for i, trade in enumerate(trades):
            following = _closes_within(trades, i, window)
            if len(following) < cfg.fomo_min_trades:
                continue
            if all(t.side == trade.side for t in following):
                count = len(following) + 1
                return FomoClusteringSignal(
                    message=(
                        f"You opened {count} {trade.side.value} positions within "
                        f"{_describe_window(cfg.fomo_window_minutes)}. "
                        "This may be FOMO."
                    ),
                    data=FomoClusteringData(side=trade.side.value, count=count),
                )
        return None
