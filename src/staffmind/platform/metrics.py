"""
Prometheus counters for the allocation engine.

Exposed through the `/metrics` mount of the API application.
"""

from prometheus_client import Counter

ALLOCATIONS_TOTAL = Counter(
    "staffmind_allocations_total",
    "Allocations computed and stored",
    ["strategy"],
)

ADVISORY_FALLBACKS_TOTAL = Counter(
    "staffmind_advisory_fallbacks_total",
    "Allocations that fell back to deterministic recommendations",
)

REBALANCE_ACTIONS_TOTAL = Counter(
    "staffmind_rebalance_actions_total",
    "Advisory rebalance actions emitted",
    ["rule"],
)
