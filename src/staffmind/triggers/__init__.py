"""
StaffMind - Rebalancing Rule Engine

Priority-ordered condition -> action rules evaluated over a workload
balance snapshot. Conditions are JSONLogic; actions are advisory.
"""

from .engine.rebalancer import RebalanceResult, RebalancingRuleEngine
from .repository import RuleRepository, load_rules
from .schemas import AllocationRule, RuleKind, RuleScope

__all__ = [
    "AllocationRule",
    "RuleKind",
    "RuleScope",
    "RuleRepository",
    "load_rules",
    "RebalancingRuleEngine",
    "RebalanceResult",
]
