"""Shared factories for journal tests."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from itertools import count
from typing import Sequence

from journal_analytics.core.enums import (
    InstrumentType,
    OrderType,
    PositionStatus,
    Side,
)
from journal_analytics.core.models import Execution, Position
from journal_analytics.journal.normalizer import PositionView, normalize

T0 = datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)

_ids = count(1)


def make_position(
    pnl: float | str | None = 0.0,
    closed_at: datetime | None = T0,
    *,
    position_id: str | None = None,
    symbol: str = "SOL-PERP",
    side: Side = Side.LONG,
    status: PositionStatus = PositionStatus.CLOSED,
    opened_at: datetime | None = None,
    max_size: str = "1",
    total_volume: str = "1000",
    total_fees: str = "0",
) -> Position:
    """Build a position; an OPEN status drops close time and PnL."""
    if status == PositionStatus.OPEN:
        closed_at = None
        pnl = None
    if opened_at is None:
        opened_at = (closed_at or T0) - timedelta(hours=1)
    return Position(
        id=position_id or f"pos-{next(_ids)}",
        account_id="acct-1",
        symbol=symbol,
        status=status,
        side=side,
        opened_at=opened_at,
        closed_at=closed_at,
        avg_entry_price="100",
        avg_exit_price="101" if closed_at else None,
        max_size=max_size,
        total_volume=total_volume,
        total_fees=total_fees,
        realized_pnl=None if pnl is None else str(pnl),
    )


def make_execution(
    position_id: str | None = None,
    *,
    fee: str = "0",
    notional: str = "1000",
    is_maker: bool = False,
    order_type: OrderType = OrderType.MARKET,
    block_time: datetime = T0,
    symbol: str = "SOL-PERP",
    side: Side = Side.BUY,
) -> Execution:
    n = next(_ids)
    return Execution(
        id=f"exec-{n}",
        account_id="acct-1",
        position_id=position_id,
        sig=f"sig-{n}",
        block_time=block_time,
        symbol=symbol,
        side=side,
        type=InstrumentType.PERP,
        order_type=order_type,
        price="100",
        size="10",
        notional=notional,
        fee=fee,
        is_maker=is_maker,
    )


def make_series(
    pnls: Sequence[float],
    *,
    start: datetime = T0,
    spacing: timedelta = timedelta(hours=1),
    **kwargs,
) -> list[Position]:
    """Closed positions with the given PnLs, closing *spacing* apart."""
    return [
        make_position(pnl, start + spacing * i, **kwargs)
        for i, pnl in enumerate(pnls)
    ]


def views(positions: Sequence[Position]) -> tuple[PositionView, ...]:
    return normalize(positions).positions
