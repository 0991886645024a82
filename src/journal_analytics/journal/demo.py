"""Deterministic demo journal, for rendering reports without a database.

Trades are spread over consecutive hours from *start*, mostly closed,
each with an entry fill and (when closed) an exit fill.  The same seed
always yields the same snapshot.
"""

from __future__ import annotations

import logging
import random
from datetime import datetime, timedelta, timezone

from ..core.enums import InstrumentType, OrderType, PositionStatus, Side
from ..core.models import Execution, JournalSnapshot, Position

logger = logging.getLogger(__name__)

DEMO_SYMBOLS = ("SOL-PERP", "BTC-PERP", "ETH-PERP", "JUP-PERP")
DEMO_ACCOUNT = "demo-account"
DEMO_START = datetime(2024, 1, 1, tzinfo=timezone.utc)

_FEE_RATE = 0.0005  # Per leg, on notional
_WIN_PROBABILITY = 0.6
_CLOSED_PROBABILITY = 0.9


def _fmt(value: float) -> str:
    return f"{value:.4f}"


def generate_demo_journal(
    n_trades: int = 50,
    seed: int = 42,
    start: datetime | None = None,
    starting_balance: float = 10_000.0,
) -> JournalSnapshot:
    """Build a seeded snapshot of *n_trades* positions and their fills."""
    if n_trades < 0:
        raise ValueError(f"n_trades must be non-negative, got {n_trades}")

    rng = random.Random(seed)
    clock = start or DEMO_START
    positions: list[Position] = []
    executions: list[Execution] = []

    for i in range(n_trades):
        symbol = rng.choice(DEMO_SYMBOLS)
        side = Side.LONG if rng.random() > 0.5 else Side.SHORT
        entry_price = rng.uniform(10, 110)
        size = rng.uniform(0.5, 10)
        notional = entry_price * size
        fee = notional * _FEE_RATE
        entry_type = rng.choice((OrderType.MARKET, OrderType.LIMIT))

        opened_at = clock + timedelta(minutes=rng.randint(0, 90))
        clock = opened_at + timedelta(minutes=rng.randint(15, 240))
        is_closed = i < n_trades - 1 and rng.random() < _CLOSED_PROBABILITY
        closed_at = clock if is_closed else None

        position_id = f"demo-pos-{i:04d}"
        executions.append(
            Execution(
                id=f"demo-exec-{i:04d}-entry",
                account_id=DEMO_ACCOUNT,
                position_id=position_id,
                sig=f"demo-sig-{i:04d}-entry",
                block_time=opened_at,
                symbol=symbol,
                side=Side.BUY if side.is_long else Side.SELL,
                type=InstrumentType.PERP,
                order_type=entry_type,
                price=_fmt(entry_price),
                size=_fmt(size),
                notional=_fmt(notional),
                fee=_fmt(fee),
                fee_asset="USDC",
                is_maker=entry_type == OrderType.LIMIT,
            )
        )
        fields = {
            "avg_exit_price": None,
            "realized_pnl": None,
            "holding_period_seconds": None,
            "total_volume": _fmt(notional),
            "total_fees": _fmt(fee),
        }
        if closed_at is not None:
            won = rng.random() < _WIN_PROBABILITY
            move = rng.uniform(0, 0.1) if won else -rng.uniform(0, 0.05)
            exit_price = entry_price * (1 + move if side.is_long else 1 - move)
            pnl = (exit_price - entry_price) * size
            if not side.is_long:
                pnl = -pnl
            exit_fee = exit_price * size * _FEE_RATE
            fields.update(
                avg_exit_price=_fmt(exit_price),
                realized_pnl=_fmt(pnl - fee - exit_fee),
                holding_period_seconds=str(int((closed_at - opened_at).total_seconds())),
                total_volume=_fmt(notional + exit_price * size),
                total_fees=_fmt(fee + exit_fee),
            )
            exit_type = OrderType.STOP if not won and rng.random() < 0.5 else OrderType.LIMIT
            executions.append(
                Execution(
                    id=f"demo-exec-{i:04d}-exit",
                    account_id=DEMO_ACCOUNT,
                    position_id=position_id,
                    sig=f"demo-sig-{i:04d}-exit",
                    block_time=closed_at,
                    symbol=symbol,
                    side=Side.SELL if side.is_long else Side.BUY,
                    type=InstrumentType.PERP,
                    order_type=exit_type,
                    price=_fmt(exit_price),
                    size=_fmt(size),
                    notional=_fmt(exit_price * size),
                    fee=_fmt(exit_fee),
                    fee_asset="USDC",
                    is_maker=exit_type == OrderType.LIMIT,
                )
            )

        positions.append(
            Position(
                id=position_id,
                account_id=DEMO_ACCOUNT,
                symbol=symbol,
                status=PositionStatus.CLOSED if is_closed else PositionStatus.OPEN,
                side=side,
                opened_at=opened_at,
                closed_at=closed_at,
                avg_entry_price=_fmt(entry_price),
                max_size=_fmt(size),
                **fields,
            )
        )

    logger.debug("Generated demo journal: %d positions, seed=%d", len(positions), seed)
    return JournalSnapshot(
        positions=tuple(positions),
        executions=tuple(executions),
        starting_balance=starting_balance,
    )
