"""Custom exception hierarchy for the analytics engine."""


class AnalyticsError(Exception):
    """Base exception for all analytics errors."""


# --- Configuration ---
class ConfigError(AnalyticsError):
    """Invalid or missing configuration."""


# --- Data ---
class InvalidInputError(AnalyticsError):
    """Upstream data-integrity violation.

    Raised for a monetary field that is not a finite number, or a CLOSED
    position missing ``closed_at`` / ``realized_pnl``.
    """

    def __init__(self, message: str, *, record_id: str = "", field: str = ""):
        self.record_id = record_id
        self.field = field
        super().__init__(message)
