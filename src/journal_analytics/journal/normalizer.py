"""Normalizer — the single decimal-string to float boundary.

Positions and executions arrive with monetary fields as arbitrary
precision decimal strings.  Statistics are computed on floats, so every
field is converted here exactly once.  The conversion is lossy, which is
acceptable for analytics and never used for ledger reconciliation.

A value that cannot be read as a finite number, or a CLOSED position
without ``closed_at`` / ``realized_pnl``, is an upstream integrity
violation and raises :class:`InvalidInputError` instead of defaulting.

Usage::

    journal = normalize(positions, executions)
    for trade in journal.chronological:
        print(trade.closed_at, trade.pnl)
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import Iterable, cast

from ..core.enums import (
    InstrumentType,
    OrderType,
    PositionStatus,
    Side,
    TradeOutcome,
)
from ..core.errors import InvalidInputError
from ..core.models import Execution, Position

logger = logging.getLogger(__name__)


def to_float(value: str | None, *, field: str, record_id: str = "") -> float | None:
    """Convert a stored decimal string to ``float``.

    ``None`` (an absent optional field) is passed through unchanged.
    """
    if value is None:
        return None
    try:
        parsed = Decimal(str(value).strip())
    except (InvalidOperation, ValueError) as exc:
        raise InvalidInputError(
            f"Record {record_id!r}: field {field!r} is not a number: {value!r}",
            record_id=record_id,
            field=field,
        ) from exc
    # Out-of-range decimals become inf as floats
    result = float(parsed) if parsed.is_finite() else math.nan
    if not math.isfinite(result):
        raise InvalidInputError(
            f"Record {record_id!r}: field {field!r} is not finite: {value!r}",
            record_id=record_id,
            field=field,
        )
    return result


def _required(value: str, *, field: str, record_id: str) -> float:
    return cast(float, to_float(value, field=field, record_id=record_id))


def as_utc(ts: datetime) -> datetime:
    """Return *ts* as an aware UTC datetime; naive values are taken as UTC."""
    if ts.tzinfo is None:
        return ts.replace(tzinfo=timezone.utc)
    return ts.astimezone(timezone.utc)


@dataclass(frozen=True)
class PositionView:
    """Computation-ready view of a :class:`Position`."""

    id: str
    account_id: str
    symbol: str
    status: PositionStatus
    side: Side
    opened_at: datetime
    closed_at: datetime | None
    avg_entry_price: float
    avg_exit_price: float | None
    max_size: float
    total_volume: float
    total_fees: float
    realized_pnl: float | None
    holding_period_seconds: float | None
    r_multiple: float | None

    @property
    def is_closed(self) -> bool:
        return self.status == PositionStatus.CLOSED

    @property
    def is_long(self) -> bool:
        return self.side.is_long

    @property
    def pnl(self) -> float:
        """Realized PnL, zero while the position is still open."""
        return self.realized_pnl if self.realized_pnl is not None else 0.0

    @property
    def outcome(self) -> TradeOutcome:
        if self.pnl > 0:
            return TradeOutcome.WIN
        if self.pnl < 0:
            return TradeOutcome.LOSS
        return TradeOutcome.BREAKEVEN

    @property
    def duration_seconds(self) -> float | None:
        if self.closed_at is None:
            return None
        return (self.closed_at - self.opened_at).total_seconds()


@dataclass(frozen=True)
class ExecutionView:
    """Computation-ready view of an :class:`Execution`."""

    id: str
    account_id: str
    position_id: str | None
    sig: str
    block_time: datetime
    symbol: str
    side: Side
    type: InstrumentType
    order_type: OrderType
    price: float
    size: float
    notional: float
    fee: float
    fee_asset: str | None
    is_maker: bool


def normalize_position(position: Position) -> PositionView:
    """Convert one position, validating the CLOSED invariants."""
    rid = position.id
    realized = to_float(position.realized_pnl, field="realizedPnL", record_id=rid)

    if position.status == PositionStatus.CLOSED:
        if position.closed_at is None:
            raise InvalidInputError(
                f"Closed position {rid!r} has no closedAt",
                record_id=rid,
                field="closedAt",
            )
        if realized is None:
            raise InvalidInputError(
                f"Closed position {rid!r} has no realizedPnL",
                record_id=rid,
                field="realizedPnL",
            )

    return PositionView(
        id=rid,
        account_id=position.account_id,
        symbol=position.symbol,
        status=position.status,
        side=position.side,
        opened_at=as_utc(position.opened_at),
        closed_at=as_utc(position.closed_at) if position.closed_at else None,
        avg_entry_price=_required(
            position.avg_entry_price, field="avgEntryPrice", record_id=rid
        ),
        avg_exit_price=to_float(
            position.avg_exit_price, field="avgExitPrice", record_id=rid
        ),
        max_size=_required(position.max_size, field="maxSize", record_id=rid),
        total_volume=_required(
            position.total_volume, field="totalVolume", record_id=rid
        ),
        total_fees=_required(position.total_fees, field="totalFees", record_id=rid),
        realized_pnl=realized,
        holding_period_seconds=to_float(
            position.holding_period_seconds,
            field="holdingPeriodSeconds",
            record_id=rid,
        ),
        r_multiple=to_float(position.r_multiple, field="rMultiple", record_id=rid),
    )


def normalize_execution(execution: Execution) -> ExecutionView:
    rid = execution.id
    return ExecutionView(
        id=rid,
        account_id=execution.account_id,
        position_id=execution.position_id,
        sig=execution.sig,
        block_time=as_utc(execution.block_time),
        symbol=execution.symbol,
        side=execution.side,
        type=execution.type,
        order_type=execution.order_type,
        price=_required(execution.price, field="price", record_id=rid),
        size=_required(execution.size, field="size", record_id=rid),
        notional=_required(execution.notional, field="notional", record_id=rid),
        fee=_required(execution.fee, field="fee", record_id=rid),
        fee_asset=execution.fee_asset,
        is_maker=execution.is_maker,
    )


def closed_positions(positions: Iterable[PositionView]) -> tuple[PositionView, ...]:
    """Positions with ``status == CLOSED``, in input order."""
    return tuple(p for p in positions if p.is_closed)


def sort_by_close(positions: Iterable[PositionView]) -> tuple[PositionView, ...]:
    """Closed positions with a close time, stably sorted by ``closed_at``.

    Always returns a new tuple; the input is never reordered.
    """
    dated = [p for p in positions if p.is_closed and p.closed_at is not None]
    return tuple(sorted(dated, key=lambda p: p.closed_at))


@dataclass(frozen=True)
class NormalizedJournal:
    """All inputs converted once, shared read-only by every component."""

    positions: tuple[PositionView, ...]
    executions: tuple[ExecutionView, ...]

    @property
    def closed(self) -> tuple[PositionView, ...]:
        return closed_positions(self.positions)

    @property
    def chronological(self) -> tuple[PositionView, ...]:
        return sort_by_close(self.positions)

    @property
    def total_execution_fees(self) -> float:
        return sum(e.fee for e in self.executions)


def normalize(
    positions: Iterable[Position],
    executions: Iterable[Execution] = (),
) -> NormalizedJournal:
    """Convert a raw snapshot into a :class:`NormalizedJournal`."""
    journal = NormalizedJournal(
        positions=tuple(normalize_position(p) for p in positions),
        executions=tuple(normalize_execution(e) for e in executions),
    )
    logger.debug(
        "Normalized %d positions (%d closed), %d executions",
        len(journal.positions),
        len(journal.closed),
        len(journal.executions),
    )
    return journal
