"""Tests for the consistency score."""

from datetime import datetime, timedelta, timezone

import pytest

from journal_analytics.core.config import ConsistencyConfig
from journal_analytics.journal.consistency import (
    NO_LOSS_PROFIT_FACTOR,
    ConsistencyScorer,
    average_recovery_days,
    profit_factor,
    stability,
)

from .conftest import make_series, views

MONDAY = datetime(2024, 1, 1, 10, 0, tzinfo=timezone.utc)
DAY = timedelta(days=1)


@pytest.fixture
def scorer():
    return ConsistencyScorer()


class TestHelpers:
    def test_stability(self):
        assert stability([10, 10, 10]) == pytest.approx(100.0)
        assert stability([10, 30]) == pytest.approx(50.0)
        assert stability([-10, -30]) == pytest.approx(50.0)
        assert stability([5, -5]) == 0.0
        assert stability([]) == 0.0

    def test_profit_factor(self):
        assert profit_factor(views(make_series([20, 10, -10]))) == pytest.approx(3.0)
        assert profit_factor(views(make_series([5, 5]))) == NO_LOSS_PROFIT_FACTOR
        assert profit_factor(views(make_series([0, 0]))) == 1.0

    def test_average_recovery_days(self):
        # Losses on days 0, 3, 4 recover on days 2, 5, 5; the final loss is ignored
        trades = views(make_series([-1, 0, 1, -1, -1, 1, -1], start=MONDAY, spacing=DAY))
        assert average_recovery_days(trades) == pytest.approx(5 / 3)

    def test_no_recovery_needed(self):
        assert average_recovery_days(views(make_series([1, 2, 3]))) == 0.0


class TestConsistencyScore:
    def test_needs_ten_trades(self, scorer):
        result = scorer.score(views(make_series([1000] * 9, spacing=DAY)))
        assert result.overall == 0
        assert result.components.win_rate_stability == 0.0
        assert result.recommendation == (
            "Need at least 10 trades to calculate consistency score."
        )

    def test_perfectly_regular_trader(self, scorer):
        # One +10 trade per day for two full ISO weeks
        result = scorer.score(views(make_series([10] * 14, start=MONDAY, spacing=DAY)))
        c = result.components
        assert c.win_rate_stability == 100.0
        assert c.pnl_variance == 100.0
        assert c.trade_frequency_regularity == 100.0
        assert c.drawdown_recovery_time == 100.0
        assert c.profit_factor_stability == 100.0
        assert result.overall == 100
        assert result.recommendation == (
            "Excellent consistency! You trade like a professional."
        )

    def test_components_floored_at_zero(self, scorer):
        # Daily PnL alternates +100/-100: mean 0, so no PnL stability at all
        pnls = [100, -100] * 6
        result = scorer.score(views(make_series(pnls, start=MONDAY, spacing=DAY)))
        assert result.components.pnl_variance == 0.0
        assert 0 <= result.overall <= 100

    def test_slow_recovery_penalized(self, scorer):
        pnls = [-10] + [0] * 8 + [10, 10]
        result = scorer.score(views(make_series(pnls, start=MONDAY, spacing=DAY)))
        # Loss on day 0 recovers on day 9
        assert result.components.drawdown_recovery_time == 10.0

    def test_custom_minimum(self):
        scorer = ConsistencyScorer(ConsistencyConfig(min_trades=3))
        result = scorer.score(views(make_series([10] * 3, start=MONDAY, spacing=DAY)))
        assert result.overall > 0


class TestRecommendation:
    @pytest.mark.parametrize(
        "overall, prefix",
        [
            (70, "Excellent consistency!"),
            (69.9, "Good consistency."),
            (50, "Good consistency."),
            (30, "Moderate consistency."),
            (29.9, "Low consistency."),
        ],
    )
    def test_bands(self, overall, prefix):
        assert ConsistencyScorer.recommend(overall).startswith(prefix)
