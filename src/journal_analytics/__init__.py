"""Analytics engine for a reconciled trading journal."""

from .core.errors import AnalyticsError, ConfigError, InvalidInputError
from .journal.analyzer import compute_advanced_analytics, compute_complete_analytics

__version__ = "0.1.0"

__all__ = [
    "AnalyticsError",
    "ConfigError",
    "InvalidInputError",
    "compute_complete_analytics",
    "compute_advanced_analytics",
]
