"""CLI entry point for the journal analytics engine."""

from __future__ import annotations

from pathlib import Path

import click

from .core.config import AnalyticsSettings, load_settings
from .core.enums import DateRange, OrderType
from .core.errors import AnalyticsError
from .core.file_io import load_snapshot
from .core.models import JournalSnapshot
from .journal.analyzer import analyze_journal, compute_advanced_analytics
from .journal.demo import generate_demo_journal
from .journal.export import ReportExporter
from .journal.filters import JournalFilter
from .journal.normalizer import normalize
from .observability.logger import get_logger, new_trace_id, setup_logging

log = get_logger(__name__)

_SIDE_CHOICES = ["long", "short", "all"]
_ORDER_TYPE_CHOICES = [t.value.lower() for t in OrderType] + ["all"]
_DATE_RANGE_CHOICES = [r.value for r in DateRange]


def _settings(config: str | None) -> AnalyticsSettings:
    settings = load_settings(config)
    setup_logging(
        settings.observability.log_level,
        settings.observability.log_format,
    )
    new_trace_id()
    return settings


def _emit(text: str, output: str | None) -> None:
    if output:
        Path(output).write_text(text, encoding="utf-8")
        log.info("report_written", path=output)
    else:
        click.echo(text)


def _filtered(
    snapshot: JournalSnapshot,
    symbol: str | None,
    side: str,
    order_type: str,
    date_range: str,
) -> JournalSnapshot:
    criteria = JournalFilter(
        symbol=symbol, side=side, order_type=order_type, date_range=date_range
    )
    return criteria.apply(snapshot)


@click.group()
def main() -> None:
    """Trading journal analytics."""


@main.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
@click.option("--starting-balance", type=float, default=None, help="Equity curve starting balance")
@click.option("--account-balance", type=float, default=None, help="Balance used for the risk score")
@click.option("--advanced-only", is_flag=True, help="Only risk, overtrading, consistency and efficiency")
@click.option("--symbol", default=None, help="Symbol or base asset (e.g. SOL)")
@click.option("--side", type=click.Choice(_SIDE_CHOICES, case_sensitive=False), default="all")
@click.option("--order-type", type=click.Choice(_ORDER_TYPE_CHOICES, case_sensitive=False), default="all")
@click.option("--date-range", type=click.Choice(_DATE_RANGE_CHOICES, case_sensitive=False), default="all")
@click.option("--config", default=None, help="Config file path")
@click.option("--output", default=None, help="Write the report here instead of stdout")
def analyze(
    path: str,
    starting_balance: float | None,
    account_balance: float | None,
    advanced_only: bool,
    symbol: str | None,
    side: str,
    order_type: str,
    date_range: str,
    config: str | None,
    output: str | None,
) -> None:
    """Analyze a journal snapshot (JSON) and print the report."""
    try:
        settings = _settings(config)
        snapshot = _filtered(
            load_snapshot(path), symbol, side, order_type, date_range
        )
        # Explicit flags win over the snapshot, which wins over settings
        starting = starting_balance if starting_balance is not None else snapshot.starting_balance
        account = account_balance if account_balance is not None else snapshot.account_balance

        if advanced_only:
            report = compute_advanced_analytics(
                snapshot.positions,
                snapshot.executions,
                starting_balance=starting,
                account_balance=account,
                settings=settings,
            )
        else:
            report = analyze_journal(
                normalize(snapshot.positions, snapshot.executions),
                starting_balance=starting,
                account_balance=account,
                settings=settings,
            )
    except AnalyticsError as exc:
        raise click.ClickException(str(exc)) from exc

    _emit(ReportExporter().to_json(report), output)


@main.command()
@click.option("--trades", default=50, type=int, help="Number of demo positions")
@click.option("--seed", default=42, type=int, help="Random seed")
@click.option("--config", default=None, help="Config file path")
@click.option("--output", default=None, help="Write the report here instead of stdout")
def demo(trades: int, seed: int, config: str | None, output: str | None) -> None:
    """Print the report for a generated demo journal."""
    try:
        settings = _settings(config)
    except AnalyticsError as exc:
        raise click.ClickException(str(exc)) from exc
    if trades < 0:
        raise click.BadParameter("must be non-negative", param_hint="--trades")

    snapshot = generate_demo_journal(trades, seed=seed)
    report = analyze_journal(
        normalize(snapshot.positions, snapshot.executions),
        starting_balance=snapshot.starting_balance,
        settings=settings,
    )
    _emit(ReportExporter().to_json(report), output)


@main.command("export-csv")
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
@click.option("--what", type=click.Choice(["equity", "daily"]), default="equity", help="Table to export")
@click.option("--starting-balance", type=float, default=None, help="Equity curve starting balance")
@click.option("--config", default=None, help="Config file path")
@click.option("--output", default=None, help="Write the CSV here instead of stdout")
def export_csv(
    path: str,
    what: str,
    starting_balance: float | None,
    config: str | None,
    output: str | None,
) -> None:
    """Export the equity curve or daily performance as CSV."""
    try:
        settings = _settings(config)
        snapshot = load_snapshot(path)
        starting = starting_balance if starting_balance is not None else snapshot.starting_balance
        report = analyze_journal(
            normalize(snapshot.positions, snapshot.executions),
            starting_balance=starting,
            account_balance=snapshot.account_balance,
            settings=settings,
        )
    except AnalyticsError as exc:
        raise click.ClickException(str(exc)) from exc

    exporter = ReportExporter()
    if what == "equity":
        text = exporter.equity_curve_csv(report.equity_curve)
    else:
        text = exporter.daily_performance_csv(report.daily_performance)
    _emit(text, output)


if __name__ == "__main__":
    main()
