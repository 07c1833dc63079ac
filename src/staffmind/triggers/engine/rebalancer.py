import logging
from dataclasses import asdict, dataclass, field, replace
from statistics import mean
from typing import Any, Dict, List, Optional

from staffmind.schedulers.base import clamp
from staffmind.schedulers.workload_balancer import WorkloadBalance, burnout_risk_for
from staffmind.triggers.actions.base import ActionContext, RebalanceAction, RebalanceSnapshot
from staffmind.triggers.actions.registry import ActionRegistry, default_registry
from staffmind.triggers.actions.workload_smoothing import find_underloaded_peers
from staffmind.triggers.engine.evaluator import ConditionEvaluator
from staffmind.triggers.repository import RuleRepository
from staffmind.triggers.schemas import AllocationRule, RuleScope

logger = logging.getLogger(__name__)

RELIEF_MIN_LOAD = 60.0
RELIEF_MAX_LOAD = 85.0


@dataclass
class RebalanceResult:
    """Outcome of one rebalance pass. Loads in adjusted_balances are estimates."""
    actions_applied: List[str] = field(default_factory=list)
    actions: List[RebalanceAction] = field(default_factory=list)
    fired_rules: List[str] = field(default_factory=list)
    adjusted_balances: List[WorkloadBalance] = field(default_factory=list)


class RebalancingRuleEngine:
    """
    Evaluates enabled rebalancing rules against an analysis snapshot.

    Rules run in ascending priority order and several may fire in one pass.
    Relief is simulated on copies of the snapshot's balances, which are
    always derived from ground truth, so repeated passes never compound it.
    """

    def __init__(
        self,
        repository: RuleRepository,
        registry: Optional[ActionRegistry] = None,
        evaluator: Optional[ConditionEvaluator] = None,
        relief_factor: float = 0.85,
    ):
        self.repository = repository
        self.registry = registry or default_registry()
        self.evaluator = evaluator or ConditionEvaluator()
        self.relief_factor = relief_factor

    async def evaluate(self, snapshot: RebalanceSnapshot) -> RebalanceResult:
        actions: List[RebalanceAction] = []
        fired: List[str] = []

        for rule in self.repository.list_enabled():
            emitted = await self._evaluate_rule(rule, snapshot)
            if emitted:
                fired.append(rule.id)
                actions.extend(emitted)

        relieved = {wid for action in actions for wid in action.relieved_worker_ids}
        adjusted = [self._relieve(b) if b.worker_id in relieved else replace(b) for b in snapshot.balances]

        logger.info(
            f"Rebalance pass: {len(fired)} rule(s) fired, {len(actions)} action(s), "
            f"{len(relieved)} worker(s) relieved"
        )

        return RebalanceResult(
            actions_applied=[a.description for a in actions],
            actions=actions,
            fired_rules=fired,
            adjusted_balances=adjusted,
        )

    async def _evaluate_rule(self, rule: AllocationRule, snapshot: RebalanceSnapshot) -> List[RebalanceAction]:
        handler = self.registry.get(rule.action_type)
        emitted: List[RebalanceAction] = []

        for scope_data in self.scope_contexts(rule.kind.scope, snapshot):
            if not self.evaluator.evaluate(rule.condition, scope_data):
                continue

            logger.debug(f"Rule {rule.id} matched scope {scope_data.get('framework', 'team')}")
            context = ActionContext(
                rule_id=rule.id,
                rule_kind=rule.kind.value,
                rule_name=rule.name,
                scope_data=scope_data,
                snapshot=snapshot,
            )
            emitted.extend(await handler.execute(rule.action, context))

        return emitted

    def scope_contexts(self, scope: RuleScope, snapshot: RebalanceSnapshot) -> List[Dict[str, Any]]:
        if scope == RuleScope.FRAMEWORK:
            contexts = []
            for capacity in snapshot.capacities:
                data = asdict(capacity)
                data["framework"] = capacity.name
                contexts.append(data)
            return contexts

        if not snapshot.balances:
            return []

        loads = [b.current_load for b in snapshot.balances]
        mean_load = mean(loads)
        heaviest = sorted(snapshot.balances, key=lambda b: (-b.current_load, b.worker_id))[0]
        peers = find_underloaded_peers(snapshot, heaviest.worker_id, mean_load)

        return [{
            "max_load": heaviest.current_load,
            "mean_load": mean_load,
            "load_spread": heaviest.current_load - mean_load,
            "overloaded_worker_id": heaviest.worker_id,
            "has_compatible_underloaded": bool(peers),
        }]

    def _relieve(self, balance: WorkloadBalance) -> WorkloadBalance:
        load = clamp(balance.current_load * self.relief_factor, RELIEF_MIN_LOAD, RELIEF_MAX_LOAD)
        return replace(
            balance,
            current_load=round(load, 1),
            utilization_gap=round(load - balance.optimal_load, 1),
            burnout_risk=burnout_risk_for(load),
        )
