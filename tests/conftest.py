"""Shared fixtures for the journal-analytics test suite."""

from __future__ import annotations

import pytest

from journal_analytics.core.config import AnalyticsSettings


@pytest.fixture
def default_settings() -> AnalyticsSettings:
    return AnalyticsSettings()
