"""Property tests for analytics invariants.

Uses hypothesis to verify, over arbitrary closed-trade histories:
- Win, loss and breakeven rates always sum to 100%
- The equity curve has one point per closed trade, in time order
- Max drawdown bounds the drawdown at every point
- Scores stay inside their documented ranges
- Inputs are never reordered and reports are deterministic
"""

from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest
from hypothesis import given, settings, strategies as st

from journal_analytics import compute_complete_analytics
from journal_analytics.core.enums import PositionStatus, Side
from journal_analytics.core.models import Position
from journal_analytics.journal.capital_efficiency import classify_efficiency
from journal_analytics.journal.consistency import ConsistencyScorer
from journal_analytics.journal.equity import analyze_drawdown, build_equity_curve, drawdown_series
from journal_analytics.journal.metrics import compute_win_rate
from journal_analytics.journal.normalizer import normalize
from journal_analytics.journal.risk_score import RiskScorer

T0 = datetime(2024, 1, 1, tzinfo=timezone.utc)

trade = st.tuples(
    st.decimals(min_value=Decimal("-1000"), max_value=Decimal("1000"), places=2),
    st.integers(min_value=0, max_value=60 * 24 * 60),  # Close offset, minutes
    st.sampled_from([Side.BUY, Side.SELL, Side.LONG, Side.SHORT]),
    st.decimals(min_value=Decimal("0.01"), max_value=Decimal("100"), places=2),
)


def _positions(trades, status=PositionStatus.CLOSED):
    positions = []
    for i, (pnl, offset, side, size) in enumerate(trades):
        closed_at = T0 + timedelta(minutes=offset)
        positions.append(
            Position(
                id=f"p{i}",
                account_id="acct",
                symbol="SOL-PERP" if i % 2 else "BTC-PERP",
                status=status,
                side=side,
                opened_at=closed_at - timedelta(minutes=30),
                closed_at=closed_at,
                avg_entry_price="100",
                max_size=str(size),
                total_volume=str(size * 100),
                total_fees="0",
                realized_pnl=str(pnl),
            )
        )
    return positions


@given(trades=st.lists(trade, min_size=1, max_size=40))
@settings(max_examples=100)
def test_rates_sum_to_hundred(trades):
    wr = compute_win_rate(normalize(_positions(trades)).positions)
    assert wr.win_rate + wr.loss_rate + wr.breakeven_rate == pytest.approx(100.0, abs=1e-9)
    assert wr.win_count + wr.loss_count + wr.breakeven_count == len(trades)


@given(trades=st.lists(trade, max_size=40))
@settings(max_examples=100)
def test_equity_curve_shape(trades):
    curve = build_equity_curve(normalize(_positions(trades)).positions)
    assert len(curve) == len(trades)
    stamps = [p.timestamp for p in curve]
    assert stamps == sorted(stamps)
    assert [p.trade_number for p in curve] == list(range(1, len(trades) + 1))


@given(trades=st.lists(trade, min_size=1, max_size=40))
@settings(max_examples=100)
def test_max_drawdown_bounds_every_point(trades):
    curve = build_equity_curve(normalize(_positions(trades)).positions)
    dd = analyze_drawdown(curve)
    assert all(dd.max_drawdown >= point - 1e-9 for point in drawdown_series(curve))
    assert dd.max_drawdown >= dd.current_drawdown - 1e-9


@given(
    pnls=st.lists(
        st.decimals(min_value=Decimal("0.01"), max_value=Decimal("500"), places=2),
        min_size=1,
        max_size=30,
    )
)
def test_rising_equity_has_no_drawdown(pnls):
    trades = [(pnl, i * 10, Side.LONG, Decimal("1")) for i, pnl in enumerate(pnls)]
    dd = analyze_drawdown(build_equity_curve(normalize(_positions(trades)).positions))
    assert dd.max_drawdown == 0.0
    assert dd.current_drawdown == 0.0


@given(trades=st.lists(trade, min_size=1, max_size=40))
@settings(max_examples=100)
def test_risk_score_bounded(trades):
    result = RiskScorer().score(normalize(_positions(trades)).positions, ())
    assert 0 <= result.overall <= 100
    for value in result.components.model_dump().values():
        assert 0.0 <= value <= 100.0


@given(trades=st.lists(trade, max_size=9))
def test_consistency_needs_ten_trades(trades):
    profitable = [(abs(pnl) + 1, offset, side, size) for pnl, offset, side, size in trades]
    assert ConsistencyScorer().score(normalize(_positions(profitable)).positions).overall == 0


@given(trades=st.lists(trade, min_size=10, max_size=40))
@settings(max_examples=50)
def test_consistency_bounded(trades):
    result = ConsistencyScorer().score(normalize(_positions(trades)).positions)
    assert 0 <= result.overall <= 100
    for value in result.components.model_dump().values():
        assert value >= 0.0


@given(trades=st.lists(trade, max_size=25))
@settings(max_examples=50, deadline=None)
def test_report_is_pure(trades):
    positions = _positions(trades)
    before = [p.id for p in positions]
    first = compute_complete_analytics(positions, []).to_dict()
    second = compute_complete_analytics(positions, []).to_dict()
    assert [p.id for p in positions] == before
    assert first == second
    efficiency = first["capitalEfficiency"]
    if trades:
        assert efficiency["level"] == classify_efficiency(efficiency["score"]).value
