"""Configuration management.

Loads from TOML config files + environment variables.
Uses pydantic-settings for validation and env var overriding.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings

from .errors import ConfigError


# ---------------------------------------------------------------------------
# Sub-configs
# ---------------------------------------------------------------------------

class OvertradingConfig(BaseModel):
    revenge_window_minutes: float = 30.0
    revenge_min_trades: int = 3  # Trades after the loss inside the window
    chasing_min_losses: int = 2
    chasing_min_trades: int = 4
    fatigue_min_trades: int = 10  # Strictly more than this per day
    fatigue_win_rate_drop: float = 20.0  # Percentage points
    fomo_window_minutes: float = 60.0
    fomo_min_trades: int = 5  # Same-side trades after the anchor


class RiskConfig(BaseModel):
    drawdown_weight: float = 0.30
    sizing_weight: float = 0.20
    overtrading_weight: float = 0.20
    streak_weight: float = 0.15
    fee_burn_weight: float = 0.15
    conservative_max: float = 30.0
    balanced_max: float = 60.0
    aggressive_max: float = 80.0

    @field_validator(
        "drawdown_weight",
        "sizing_weight",
        "overtrading_weight",
        "streak_weight",
        "fee_burn_weight",
    )
    @classmethod
    def weight_must_be_fraction(cls, v: float) -> float:
        if v < 0 or v > 1:
            raise ValueError(f"Weight must be within 0-1, got {v}")
        return v


class ConsistencyConfig(BaseModel):
    min_trades: int = 10
    win_rate_weight: float = 0.25
    pnl_weight: float = 0.25
    frequency_weight: float = 0.20
    recovery_weight: float = 0.15
    profit_factor_weight: float = 0.15
    recovery_penalty_per_day: float = 10.0


class ObservabilityConfig(BaseModel):
    log_level: str = "INFO"
    log_format: str = "json"  # "json" or "console"

    @field_validator("log_format")
    @classmethod
    def format_must_be_known(cls, v: str) -> str:
        if v not in ("json", "console"):
            raise ValueError(f"log_format must be 'json' or 'console', got '{v}'")
        return v


# ---------------------------------------------------------------------------
# Top-level settings
# ---------------------------------------------------------------------------

class AnalyticsSettings(BaseSettings):
    """Top-level analytics settings.

    Loaded from TOML config files, overridden by environment variables.
    """

    starting_balance: float = 10_000.0
    account_balance: float | None = None  # Falls back to starting_balance

    overtrading: OvertradingConfig = Field(default_factory=OvertradingConfig)
    risk: RiskConfig = Field(default_factory=RiskConfig)
    consistency: ConsistencyConfig = Field(default_factory=ConsistencyConfig)
    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)

    model_config = {"env_prefix": "JOURNAL_ANALYTICS_", "env_nested_delimiter": "__"}

    @property
    def effective_account_balance(self) -> float:
        if self.account_balance is None:
            return self.starting_balance
        return self.account_balance


def load_settings(
    config_path: str | Path | None = None,
    overrides: dict[str, Any] | None = None,
) -> AnalyticsSettings:
    """Load settings from TOML file + env vars.

    Args:
        config_path: Path to TOML config file (optional).
        overrides: Dict of overrides to apply on top.
    """
    data: dict[str, Any] = {}

    if config_path:
        path = Path(config_path)
        if not path.exists():
            raise ConfigError(f"Config file not found: {path}")
        import tomli

        try:
            with open(path, "rb") as f:
                data = tomli.load(f)
        except tomli.TOMLDecodeError as exc:
            raise ConfigError(f"Invalid TOML in {path}: {exc}") from exc

    if overrides:
        data.update({k: v for k, v in overrides.items() if v is not None})

    try:
        return AnalyticsSettings(**data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid analytics settings: {exc}") from exc
