"""Tests for the seeded demo journal."""

from datetime import datetime, timezone

import pytest

from journal_analytics import compute_complete_analytics
from journal_analytics.core.enums import PositionStatus
from journal_analytics.journal.demo import generate_demo_journal


class TestDemoJournal:
    def test_deterministic_for_seed(self):
        assert generate_demo_journal(30, seed=7) == generate_demo_journal(30, seed=7)

    def test_seed_changes_output(self):
        assert generate_demo_journal(30, seed=1) != generate_demo_journal(30, seed=2)

    def test_shape(self):
        snapshot = generate_demo_journal(40, seed=3)
        assert len(snapshot.positions) == 40
        closed = [p for p in snapshot.positions if p.status == PositionStatus.CLOSED]
        assert closed
        # One entry fill per position plus one exit fill per closed position
        assert len(snapshot.executions) == 40 + len(closed)
        assert snapshot.positions[-1].status == PositionStatus.OPEN

    def test_custom_start(self):
        start = datetime(2025, 3, 1, tzinfo=timezone.utc)
        snapshot = generate_demo_journal(5, seed=1, start=start)
        assert all(p.opened_at >= start for p in snapshot.positions)

    def test_analyzes_cleanly(self):
        snapshot = generate_demo_journal(60, seed=42)
        report = compute_complete_analytics(
            snapshot.positions, snapshot.executions, snapshot.starting_balance
        )
        assert report.core.trade_count == len(report.equity_curve)
        assert report.core.trade_count > 0

    def test_negative_count_rejected(self):
        with pytest.raises(ValueError):
            generate_demo_journal(-1)
