"""Enumerations used across the analytics engine."""

from enum import Enum


class PositionStatus(str, Enum):
    OPEN = "OPEN"
    CLOSED = "CLOSED"
    LIQUIDATED = "LIQUIDATED"


class Side(str, Enum):
    BUY = "BUY"
    SELL = "SELL"
    LONG = "LONG"
    SHORT = "SHORT"

    @property
    def is_long(self) -> bool:
        return self in (Side.BUY, Side.LONG)


class InstrumentType(str, Enum):
    SPOT = "SPOT"
    PERP = "PERP"  # Perpetual futures
    OPTION = "OPTION"


class OrderType(str, Enum):
    MARKET = "MARKET"
    LIMIT = "LIMIT"
    STOP = "STOP"
    LIQUIDATION = "LIQUIDATION"


class TradeOutcome(str, Enum):
    WIN = "WIN"
    LOSS = "LOSS"
    BREAKEVEN = "BREAKEVEN"


class RiskLevel(str, Enum):
    CONSERVATIVE = "CONSERVATIVE"
    BALANCED = "BALANCED"
    AGGRESSIVE = "AGGRESSIVE"
    RECKLESS = "RECKLESS"


class EfficiencyLevel(str, Enum):
    INEFFICIENT = "INEFFICIENT"
    AVERAGE = "AVERAGE"
    GOOD = "GOOD"
    EXCELLENT = "EXCELLENT"


class SignalType(str, Enum):
    REVENGE_TRADING = "REVENGE_TRADING"
    CHASING = "CHASING"
    FATIGUE_TRADING = "FATIGUE_TRADING"
    FOMO_CLUSTERING = "FOMO_CLUSTERING"


class Severity(str, Enum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"


class DateRange(str, Enum):
    D7 = "7d"
    D30 = "30d"
    D90 = "90d"
    YTD = "ytd"
    ALL = "all"

    @property
    def days(self) -> int | None:
        mapping = {"7d": 7, "30d": 30, "90d": 90}
        return mapping.get(self.value)
