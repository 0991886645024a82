"""Report export — JSON for the presentation layer, CSV for spreadsheets.

Usage::

    exporter = ReportExporter()
    json_str = exporter.to_json(report)
    csv_str = exporter.equity_curve_csv(report.equity_curve)
"""

from __future__ import annotations

import csv
import io
import json
import logging
from typing import Any, Sequence

from .report import DailyStats, EquityPoint, ReportModel

logger = logging.getLogger(__name__)

_EQUITY_COLUMNS = ["timestamp", "trade_number", "equity", "cumulative_pnl"]

_DAILY_COLUMNS = ["date", "pnl", "volume", "trade_count", "win_rate", "avg_pnl"]


class ReportExporter:
    """Render analytics reports as JSON or CSV strings.

    Parameters
    ----------
    decimal_places : int
        Rounding precision for CSV numeric fields.  Default 4.
    """

    def __init__(self, *, decimal_places: int = 4) -> None:
        self._dp = decimal_places

    # ------------------------------------------------------------------ #
    # JSON Export                                                          #
    # ------------------------------------------------------------------ #

    def to_json(self, report: ReportModel, *, indent: int | None = 2) -> str:
        """Serialize a report with the camelCase keys consumers expect."""
        return json.dumps(report.to_dict(), indent=indent)

    # ------------------------------------------------------------------ #
    # CSV Export                                                           #
    # ------------------------------------------------------------------ #

    def equity_curve_csv(self, curve: Sequence[EquityPoint]) -> str:
        rows = [
            {
                "timestamp": point.timestamp.isoformat(),
                "trade_number": point.trade_number,
                "equity": self._round(point.equity),
                "cumulative_pnl": self._round(point.cumulative_pnl),
            }
            for point in curve
        ]
        return self._write_csv(_EQUITY_COLUMNS, rows)

    def daily_performance_csv(self, daily: Sequence[DailyStats]) -> str:
        rows = [
            {
                "date": day.date,
                "pnl": self._round(day.pnl),
                "volume": self._round(day.volume),
                "trade_count": day.trade_count,
                "win_rate": self._round(day.win_rate),
                "avg_pnl": self._round(day.avg_pnl),
            }
            for day in daily
        ]
        return self._write_csv(_DAILY_COLUMNS, rows)

    # ------------------------------------------------------------------ #
    # Private helpers                                                      #
    # ------------------------------------------------------------------ #

    def _round(self, value: float) -> float:
        return round(value, self._dp)

    def _write_csv(self, columns: list[str], rows: list[dict[str, Any]]) -> str:
        buf = io.StringIO()
        writer = csv.DictWriter(buf, fieldnames=columns, lineterminator="\n")
        writer.writeheader()
        writer.writerows(rows)
        logger.debug("Exported %d CSV rows", len(rows))
        return buf.getvalue()
