"""Tests for the weighted risk score."""

from datetime import timedelta

import pytest

from journal_analytics.core.config import RiskConfig
from journal_analytics.core.enums import RiskLevel
from journal_analytics.journal.normalizer import normalize
from journal_analytics.journal.risk_score import (
    NOT_ENOUGH_DATA,
    RiskScorer,
    active_day_span,
    coefficient_of_variation,
    streak_lengths,
)

from .conftest import T0, make_execution, make_series, views


@pytest.fixture
def scorer():
    return RiskScorer()


class TestHelpers:
    def test_streak_lengths(self):
        trades = views(make_series([5, 3, -1, 0, 8]))
        assert streak_lengths(trades) == [2, 2, 1]

    def test_streak_lengths_empty(self):
        assert streak_lengths(()) == []

    def test_coefficient_of_variation(self):
        assert coefficient_of_variation([]) == 0.0
        assert coefficient_of_variation([2, 2, 2]) == 0.0
        # Population stddev of [1, 3] is 1, mean 2
        assert coefficient_of_variation([1, 3]) == pytest.approx(50.0)

    def test_active_day_span(self):
        assert active_day_span(views(make_series([1, 1]))) == 1
        spaced = views(make_series([1, 1], spacing=timedelta(hours=36)))
        assert active_day_span(spaced) == 2


class TestClassification:
    @pytest.mark.parametrize(
        "overall, level",
        [
            (0, RiskLevel.CONSERVATIVE),
            (30, RiskLevel.CONSERVATIVE),
            (30.5, RiskLevel.BALANCED),
            (60, RiskLevel.BALANCED),
            (80, RiskLevel.AGGRESSIVE),
            (80.1, RiskLevel.RECKLESS),
        ],
    )
    def test_thresholds(self, scorer, overall, level):
        assert scorer.classify(overall) == level


class TestRiskScore:
    def test_empty_default(self, scorer):
        result = scorer.score((), ())
        assert result.overall == 0
        assert result.level == RiskLevel.CONSERVATIVE
        assert result.recommendation == NOT_ENOUGH_DATA
        assert result.recommendation == "Not enough data to calculate risk score."
        assert result.components.drawdown_severity == 0.0

    def test_all_winners_only_overtrading_component(self, scorer):
        result = scorer.score(views(make_series([10, 10, 10, 10])), ())
        assert result.components.overtrading_index == 100.0
        assert result.components.drawdown_severity == 0.0
        assert result.components.position_sizing_consistency == 0.0
        assert result.components.win_streak_volatility == 0.0
        assert result.overall == 20
        assert result.level == RiskLevel.CONSERVATIVE
        assert result.recommendation.startswith("Your trading style is conservative.")

    def test_losing_streak_with_fees(self, scorer):
        journal = normalize(
            make_series([-100, -100]),
            [make_execution(fee="30"), make_execution(fee="20")],
        )
        result = scorer.score(journal.positions, journal.executions, 1000.0)
        # 100*.30 + 100*.20 + 5*.15 = 50.75
        assert result.components.drawdown_severity == 100.0
        assert result.components.overtrading_index == 100.0
        assert result.components.fee_burn_rate == 5.0
        assert result.overall == 51
        assert result.level == RiskLevel.BALANCED

    def test_components_clamped_before_weighting(self, scorer):
        journal = normalize(make_series([10]), [make_execution(fee="5000")])
        result = scorer.score(journal.positions, journal.executions, 1000.0)
        assert result.components.fee_burn_rate == 100.0
        # fee 100*.15 + overtrading 100*.20
        assert result.overall == 35

    def test_custom_weights(self):
        scorer = RiskScorer(
            RiskConfig(
                drawdown_weight=0,
                sizing_weight=0,
                overtrading_weight=1,
                streak_weight=0,
                fee_burn_weight=0,
            )
        )
        result = scorer.score(views(make_series([-5, -5])), ())
        assert result.overall == 100
        assert result.level == RiskLevel.RECKLESS

    def test_sizing_variation(self, scorer):
        trades = views(
            make_series([10], max_size="1") + make_series([10], max_size="3", start=T0 + timedelta(hours=5))
        )
        result = scorer.score(trades, ())
        assert result.components.position_sizing_consistency == 50.0
