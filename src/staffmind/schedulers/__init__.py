"""
StaffMind - Schedulers

This package contains the allocation and analysis algorithms:

- Scoring: Per worker/project sub-scores and strategy weighting
- AllocationSelector: Team sizing, ranking, timeline and confidence
- CapacityForecaster: Rolling weekly capacity projection
- WorkloadBalanceAnalyzer: Worker balance and framework capacity
- InsightGenerator: Predictive insights and allocation analytics
"""

from .allocation_selector import AllocationSelector
from .capacity_forecaster import CapacityForecast, CapacityForecaster
from .insight_generator import AllocationAnalytics, InsightGenerator, PredictiveInsight
from .workload_balancer import FrameworkCapacity, WorkloadBalance, WorkloadBalanceAnalyzer

__all__ = [
    "AllocationSelector",
    "CapacityForecaster",
    "CapacityForecast",
    "WorkloadBalanceAnalyzer",
    "WorkloadBalance",
    "FrameworkCapacity",
    "InsightGenerator",
    "PredictiveInsight",
    "AllocationAnalytics",
]
