from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from staffmind.domain.models import Allocation, Project, Worker
from staffmind.schedulers.workload_balancer import FrameworkCapacity, WorkloadBalance


@dataclass
class RebalanceAction:
    """One advisory action emitted by a firing rule."""
    rule_id: str
    rule_kind: str
    description: str
    framework: Optional[str] = None
    project_id: Optional[str] = None
    # Workers whose simulated load is relieved by this action
    relieved_worker_ids: List[str] = field(default_factory=list)
    # Workers receiving work or training
    target_worker_ids: List[str] = field(default_factory=list)


@dataclass
class RebalanceSnapshot:
    """Consistent view of roster, store and analysis for one rebalance pass."""
    workers: List[Worker]
    projects: List[Project]
    allocations: List[Allocation]
    balances: List[WorkloadBalance]
    capacities: List[FrameworkCapacity]

    def worker(self, worker_id: str) -> Optional[Worker]:
        return next((w for w in self.workers if w.id == worker_id), None)

    def balance(self, worker_id: str) -> Optional[WorkloadBalance]:
        return next((b for b in self.balances if b.worker_id == worker_id), None)

    def capacity(self, framework: str) -> Optional[FrameworkCapacity]:
        return next((c for c in self.capacities if c.name == framework), None)


class ActionContext:
    """
    Context passed to an action execution.
    Contains the firing rule, the evaluated scope data and the snapshot.
    """
    def __init__(self, rule_id: str, rule_kind: str, rule_name: str,
                 scope_data: Dict[str, Any], snapshot: RebalanceSnapshot):
        self.rule_id = rule_id
        self.rule_kind = rule_kind
        self.rule_name = rule_name
        self.scope_data = scope_data
        self.snapshot = snapshot


class Action(ABC):
    """
    Base class for advisory actions triggered by rebalancing rules.
    """

    @property
    @abstractmethod
    def type_name(self) -> str:
        """The identifier for this action type (e.g., 'redistribute_work')."""
        pass

    @abstractmethod
    async def execute(self, config: Dict[str, Any], context: ActionContext) -> List[RebalanceAction]:
        """
        Execute the action.

        Args:
            config: The action configuration from the rule
            context: The firing scope and analysis snapshot

        Returns:
            Advisory actions; an empty list when nothing applicable was found
        """
        pass
