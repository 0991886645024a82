"""Report models — the output contract consumed by the dashboard.

Attribute names are snake_case; ``model_dump(by_alias=True)`` produces the
camelCase keys the presentation layer expects (``grossPnL``, ``winRate``,
``equityCurve`` ...).

Overtrading signals form a tagged union keyed by ``type`` with one payload
model per signal kind.
"""

from __future__ import annotations

from datetime import datetime
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from ..core.enums import EfficiencyLevel, RiskLevel, Severity, SignalType


class ReportModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    def to_dict(self) -> dict:
        """JSON-ready dict with the dashboard's camelCase keys."""
        return self.model_dump(by_alias=True, mode="json")


# ---------------------------------------------------------------------------
# Core metrics
# ---------------------------------------------------------------------------

class CoreMetrics(ReportModel):
    gross_pnl: float = Field(0.0, alias="grossPnL")
    net_pnl: float = Field(0.0, alias="netPnL")
    total_fees: float = 0.0
    total_volume: float = 0.0
    trade_count: int = 0


class WinRateMetrics(ReportModel):
    win_rate: float = 0.0  # Percent, 0-100
    loss_rate: float = 0.0
    breakeven_rate: float = 0.0
    win_count: int = 0
    loss_count: int = 0
    breakeven_count: int = 0
    total_trades: int = 0


class AvgWinLoss(ReportModel):
    avg_win: float = 0.0
    avg_loss: float = 0.0  # Signed, negative when there are losers
    win_loss_ratio: float = 0.0


class LongShortMetrics(ReportModel):
    long_count: int = 0
    short_count: int = 0
    long_pnl: float = Field(0.0, alias="longPnL")
    short_pnl: float = Field(0.0, alias="shortPnL")
    count_ratio: float = 0.0
    pnl_ratio: float = 0.0


class DurationMetrics(ReportModel):
    avg_duration_seconds: float = 0.0
    avg_duration_hours: float = 0.0
    avg_duration_days: float = 0.0
    median_duration_seconds: float = 0.0
    shortest_trade: float = 0.0
    longest_trade: float = 0.0


class ExtremeMetrics(ReportModel):
    largest_gain: float = 0.0
    largest_loss: float = 0.0
    largest_gain_symbol: str = ""
    largest_loss_symbol: str = ""
    largest_gain_date: datetime | None = None
    largest_loss_date: datetime | None = None


class VolumeAndFees(ReportModel):
    total_volume: float = 0.0
    total_fees: float = 0.0
    fee_percent_of_pnl: float = Field(0.0, alias="feePercentOfPnL")
    fee_percent_of_volume: float = 0.0
    avg_fee_per_trade: float = 0.0
    maker_fees: float = 0.0
    taker_fees: float = 0.0


# ---------------------------------------------------------------------------
# Equity & drawdown
# ---------------------------------------------------------------------------

class EquityPoint(ReportModel):
    timestamp: datetime
    equity: float
    cumulative_pnl: float = Field(alias="cumulativePnL")
    trade_number: int


class DrawdownMetrics(ReportModel):
    max_drawdown: float = 0.0  # Percent of peak
    max_drawdown_value: float = 0.0  # Currency
    current_drawdown: float = 0.0
    max_drawdown_date: datetime | None = None


# ---------------------------------------------------------------------------
# Time buckets
# ---------------------------------------------------------------------------

class DailyStats(ReportModel):
    date: str
    pnl: float = 0.0
    volume: float = 0.0
    trade_count: int = 0
    win_rate: float = 0.0
    avg_pnl: float = Field(0.0, alias="avgPnL")


class HourlyStats(ReportModel):
    hour: int
    pnl: float = 0.0
    trade_count: int = 0
    avg_pnl: float = Field(0.0, alias="avgPnL")
    win_rate: float = 0.0


class OrderTypeStats(ReportModel):
    order_type: str
    pnl: float = 0.0
    trade_count: int = 0
    win_rate: float = 0.0
    avg_pnl: float = Field(0.0, alias="avgPnL")


# ---------------------------------------------------------------------------
# Behavioral scores
# ---------------------------------------------------------------------------

class RiskComponents(ReportModel):
    drawdown_severity: float = 0.0
    position_sizing_consistency: float = 0.0
    overtrading_index: float = 0.0
    win_streak_volatility: float = 0.0
    fee_burn_rate: float = 0.0


class RiskScore(ReportModel):
    overall: int = 0
    level: RiskLevel = RiskLevel.CONSERVATIVE
    components: RiskComponents = Field(default_factory=RiskComponents)
    recommendation: str = ""


class ConsistencyComponents(ReportModel):
    win_rate_stability: float = 0.0
    pnl_variance: float = 0.0
    trade_frequency_regularity: float = 0.0
    drawdown_recovery_time: float = 0.0
    profit_factor_stability: float = 0.0


class ConsistencyScore(ReportModel):
    overall: int = 0
    components: ConsistencyComponents = Field(default_factory=ConsistencyComponents)
    recommendation: str = ""


class CapitalEfficiency(ReportModel):
    score: float = 0.0
    level: EfficiencyLevel = EfficiencyLevel.INEFFICIENT
    total_capital_deployed: float = 0.0
    net_pnl: float = Field(0.0, alias="netPnL")
    recommendation: str = ""


# ---------------------------------------------------------------------------
# Overtrading signals (tagged union on ``type``)
# ---------------------------------------------------------------------------

class RevengeTradingData(ReportModel):
    loss_amount: float
    subsequent_trades: int


class ChasingData(ReportModel):
    symbol: str
    losses: int
    total: int


class FatigueTradingData(ReportModel):
    date: str
    trade_count: int
    win_rate_drop: float  # Percentage points, first half minus second half


class FomoClusteringData(ReportModel):
    side: str
    count: int  # Anchor trade included


class RevengeTradingSignal(ReportModel):
    type: Literal[SignalType.REVENGE_TRADING] = SignalType.REVENGE_TRADING
    severity: Severity = Severity.HIGH
    message: str
    data: RevengeTradingData


class ChasingSignal(ReportModel):
    type: Literal[SignalType.CHASING] = SignalType.CHASING
    severity: Severity = Severity.MEDIUM
    message: str
    data: ChasingData


class FatigueTradingSignal(ReportModel):
    type: Literal[SignalType.FATIGUE_TRADING] = SignalType.FATIGUE_TRADING
    severity: Severity = Severity.HIGH
    message: str
    data: FatigueTradingData


class FomoClusteringSignal(ReportModel):
    type: Literal[SignalType.FOMO_CLUSTERING] = SignalType.FOMO_CLUSTERING
    severity: Severity = Severity.MEDIUM
    message: str
    data: FomoClusteringData


OvertradingSignal = Annotated[
    Union[
        RevengeTradingSignal,
        ChasingSignal,
        FatigueTradingSignal,
        FomoClusteringSignal,
    ],
    Field(discriminator="type"),
]


# ---------------------------------------------------------------------------
# Composite reports
# ---------------------------------------------------------------------------

class AdvancedAnalytics(ReportModel):
    """Behavioral-only variant of the report."""

    risk_score: RiskScore
    overtrading_signals: list[OvertradingSignal] = Field(default_factory=list)
    consistency_score: ConsistencyScore
    capital_efficiency: CapitalEfficiency


class CompleteAnalytics(ReportModel):
    """Full performance, risk and behavioral report."""

    core: CoreMetrics
    win_rate: WinRateMetrics
    avg_win_loss: AvgWinLoss
    long_short: LongShortMetrics
    duration: DurationMetrics
    extremes: ExtremeMetrics
    volume_and_fees: VolumeAndFees
    expectancy: float = 0.0
    equity_curve: list[EquityPoint] = Field(default_factory=list)
    drawdown: DrawdownMetrics
    daily_performance: list[DailyStats] = Field(default_factory=list)
    hourly_performance: list[HourlyStats] = Field(default_factory=list)
    order_type_performance: list[OrderTypeStats] = Field(default_factory=list)
    risk_score: RiskScore
    overtrading_signals: list[OvertradingSignal] = Field(default_factory=list)
    consistency_score: ConsistencyScore
    capital_efficiency: CapitalEfficiency
