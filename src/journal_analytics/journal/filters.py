"""Journal filters: narrow a snapshot before it is analyzed.

Mirrors the dashboard filter bar: symbol, side, entry order type and a
relative date range.  The date range is anchored to an explicit
``as_of`` timestamp (by default the latest timestamp in the snapshot),
so the same snapshot and filter always select the same trades.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta
from typing import Sequence

from pydantic import BaseModel, ConfigDict, field_validator

from ..core.enums import DateRange, OrderType, Side
from ..core.models import Execution, JournalSnapshot, Position
from .normalizer import as_utc

logger = logging.getLogger(__name__)


def position_time(position: Position) -> datetime:
    """Close time for finished positions, open time otherwise (UTC)."""
    return as_utc(position.closed_at or position.opened_at)


def latest_timestamp(snapshot: JournalSnapshot) -> datetime | None:
    stamps = [position_time(p) for p in snapshot.positions]
    stamps.extend(as_utc(e.block_time) for e in snapshot.executions)
    return max(stamps) if stamps else None


def symbol_matches(symbol: str, wanted: str) -> bool:
    """Exact match, or match on the base asset (``SOL`` matches ``SOL-PERP``)."""
    symbol, wanted = symbol.upper(), wanted.upper()
    return symbol == wanted or symbol.split("-", 1)[0] == wanted


class JournalFilter(BaseModel):
    """Criteria for narrowing a journal.  ``None`` means "any"."""

    model_config = ConfigDict(frozen=True)

    symbol: str | None = None
    side: Side | None = None
    order_type: OrderType | None = None
    date_range: DateRange = DateRange.ALL

    @field_validator("symbol")
    @classmethod
    def blank_symbol_is_any(cls, v: str | None) -> str | None:
        if v is None or not v.strip() or v.strip().lower() == "all":
            return None
        return v.strip()

    @field_validator("side", mode="before")
    @classmethod
    def side_case_insensitive(cls, v: object) -> object:
        if isinstance(v, str):
            return None if v.lower() == "all" else v.upper()
        return v

    @field_validator("order_type", mode="before")
    @classmethod
    def order_type_case_insensitive(cls, v: object) -> object:
        if isinstance(v, str):
            return None if v.lower() == "all" else v.upper()
        return v

    # ------------------------------------------------------------------ #
    # Predicates                                                          #
    # ------------------------------------------------------------------ #

    def window_start(self, as_of: datetime) -> datetime | None:
        if self.date_range is DateRange.ALL:
            return None
        if self.date_range is DateRange.YTD:
            return as_of.replace(month=1, day=1, hour=0, minute=0, second=0, microsecond=0)
        return as_of - timedelta(days=self.date_range.days)

    def _in_window(self, ts: datetime, start: datetime | None, as_of: datetime) -> bool:
        ts = as_utc(ts)
        if start is not None and ts < start:
            return False
        return ts <= as_of

    def _side_matches(self, side: Side) -> bool:
        return self.side is None or side.is_long == self.side.is_long

    # ------------------------------------------------------------------ #
    # Application                                                         #
    # ------------------------------------------------------------------ #

    def apply(
        self,
        snapshot: JournalSnapshot,
        as_of: datetime | None = None,
    ) -> JournalSnapshot:
        """Return a new snapshot holding only the matching records."""
        anchor = as_utc(as_of) if as_of is not None else latest_timestamp(snapshot)
        if anchor is None:
            return snapshot
        start = self.window_start(anchor)
        entry_types = _entry_order_types(snapshot.executions)

        positions = tuple(
            p
            for p in snapshot.positions
            if (self.symbol is None or symbol_matches(p.symbol, self.symbol))
            and self._side_matches(p.side)
            and (self.order_type is None or entry_types.get(p.id) == self.order_type)
            and self._in_window(position_time(p), start, anchor)
        )
        kept_ids = {p.id for p in positions}

        executions = tuple(
            e
            for e in snapshot.executions
            if e.position_id in kept_ids
            or (
                e.position_id is None
                and (self.symbol is None or symbol_matches(e.symbol, self.symbol))
                and self._in_window(e.block_time, start, anchor)
            )
        )

        logger.debug(
            "Filter %s kept %d/%d positions, %d/%d executions",
            self.model_dump(exclude_defaults=True),
            len(positions),
            len(snapshot.positions),
            len(executions),
            len(snapshot.executions),
        )
        return snapshot.model_copy(
            update={"positions": positions, "executions": executions}
        )


def _entry_order_types(executions: Sequence[Execution]) -> dict[str, OrderType]:
    types: dict[str, OrderType] = {}
    for execution in executions:
        if execution.position_id and execution.position_id not in types:
            types[execution.position_id] = execution.order_type
    return types
