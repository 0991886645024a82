"""Input domain models handed over by the persistence layer.

Monetary fields stay as the decimal strings they are stored as; the
conversion to floats happens once, in :mod:`journal_analytics.journal.normalizer`.
Keys are accepted in the persistence layer's camelCase form as well as
in snake_case.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from .enums import InstrumentType, OrderType, PositionStatus, Side

_INPUT_CONFIG = ConfigDict(
    alias_generator=to_camel,
    populate_by_name=True,
    frozen=True,
)


def _decimal_text(v: Any) -> Any:
    """Keep decimal fields as text; numbers are stored as their string form."""
    if isinstance(v, bool):
        return v
    if isinstance(v, (int, float, Decimal)):
        return str(v)
    return v


class Position(BaseModel):
    """A reconciled round-trip (or still open) trade."""

    model_config = _INPUT_CONFIG

    id: str
    account_id: str
    symbol: str
    status: PositionStatus
    side: Side
    opened_at: datetime
    closed_at: datetime | None = None

    avg_entry_price: str
    avg_exit_price: str | None = None
    max_size: str
    total_volume: str
    total_fees: str
    realized_pnl: str | None = Field(default=None, alias="realizedPnL")
    holding_period_seconds: str | None = None
    r_multiple: str | None = None

    @field_validator(
        "avg_entry_price",
        "avg_exit_price",
        "max_size",
        "total_volume",
        "total_fees",
        "realized_pnl",
        "holding_period_seconds",
        "r_multiple",
        mode="before",
    )
    @classmethod
    def decimal_as_text(cls, v: Any) -> Any:
        return _decimal_text(v)


class Execution(BaseModel):
    """One fill (entry or exit leg) of a position."""

    model_config = _INPUT_CONFIG

    id: str
    account_id: str
    position_id: str | None = None  # Unlinked fills are allowed
    sig: str  # Unique ledger reference
    block_time: datetime
    symbol: str
    side: Side
    type: InstrumentType
    order_type: OrderType
    price: str
    size: str
    notional: str
    fee: str
    fee_asset: str | None = None
    is_maker: bool = False

    @field_validator("price", "size", "notional", "fee", mode="before")
    @classmethod
    def decimal_as_text(cls, v: Any) -> Any:
        return _decimal_text(v)


class JournalSnapshot(BaseModel):
    """Immutable input triple: positions, executions and balances."""

    model_config = _INPUT_CONFIG

    positions: tuple[Position, ...] = ()
    executions: tuple[Execution, ...] = ()
    starting_balance: float | None = None
    account_balance: float | None = None
