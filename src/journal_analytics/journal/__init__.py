"""Trading Journal Analytics — statistics over a reconciled trade snapshot.

Converts stored positions and executions once, then computes performance
metrics and behavioral scores over the immutable snapshot.

Key components
--------------
**Core metrics**

NormalizedJournal        Decimal-string inputs converted to floats once
compute_core_metrics     PnL, fees, volume and trade count (plus win rate,
                         long/short, duration, extremes, fee helpers)
build_equity_curve       Starting balance plus cumulative realized PnL
analyze_drawdown         Max and current drawdown from the running peak

**Time buckets**

daily_performance        Per calendar day (UTC)
hourly_performance       Per UTC hour, always 24 buckets
order_type_performance   Per entry order type

**Behavioral scores**

RiskScorer               Weighted 0-100 risk composite
OvertradingDetector      Revenge, chasing, fatigue and FOMO heuristics
ConsistencyScorer        Stability of results over weeks, days and months
CapitalEfficiencyScorer  Net PnL per unit of deployed capital

**Tooling**

JournalFilter            Symbol / side / order type / date range filters
ReportExporter           JSON and CSV export
generate_demo_journal    Seeded demo snapshot
"""

from .analyzer import analyze_journal, compute_advanced_analytics, compute_complete_analytics
from .capital_efficiency import CapitalEfficiencyScorer
from .consistency import ConsistencyScorer
from .demo import generate_demo_journal
from .equity import analyze_drawdown, build_equity_curve
from .export import ReportExporter
from .filters import JournalFilter
from .metrics import compute_core_metrics
from .normalizer import NormalizedJournal, normalize
from .overtrading import OvertradingDetector
from .report import AdvancedAnalytics, CompleteAnalytics
from .risk_score import RiskScorer
from .session_analysis import daily_performance, hourly_performance, order_type_performance

__all__ = [
    "AdvancedAnalytics",
    "CompleteAnalytics",
    "NormalizedJournal",
    "normalize",
    "compute_core_metrics",
    "build_equity_curve",
    "analyze_drawdown",
    "daily_performance",
    "hourly_performance",
    "order_type_performance",
    "RiskScorer",
    "OvertradingDetector",
    "ConsistencyScorer",
    "CapitalEfficiencyScorer",
    "analyze_journal",
    "compute_complete_analytics",
    "compute_advanced_analytics",
    "JournalFilter",
    "ReportExporter",
    "generate_demo_journal",
]
