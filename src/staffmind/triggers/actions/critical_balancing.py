import logging
from typing import List, Optional

from staffmind.domain.models import Priority, Project
from .base import Action, ActionContext, RebalanceAction, RebalanceSnapshot

logger = logging.getLogger(__name__)


class ReassignCapacityAction(Action):
    """
    Moves capacity from a non-critical project toward a critical-path framework.

    Donors are open projects that are not critical priority and whose own
    framework is not on the critical path. The framework's experts are the
    workers relieved by the extra capacity.
    """

    @property
    def type_name(self) -> str:
        return "reassign_capacity"

    async def execute(self, config: dict, context: ActionContext) -> List[RebalanceAction]:
        snapshot = context.snapshot
        framework = context.scope_data["framework"]
        utilization = context.scope_data.get("team_utilization", 0.0)

        experts = sorted(
            (w for w in snapshot.workers if framework in w.expertise_set),
            key=lambda w: (-w.workload, w.id),
        )
        relieved = [w.id for w in experts]

        donor = self._pick_donor(snapshot, framework)
        if donor is None:
            logger.info(f"No donor project available for critical framework {framework}")
            return [RebalanceAction(
                rule_id=context.rule_id,
                rule_kind=context.rule_kind,
                framework=framework,
                description=(
                    f"No non-critical donor project available; escalate staffing for "
                    f"{framework} at {utilization:.0f}% utilization"
                ),
            )]

        donor_allocation = next(
            (a for a in snapshot.allocations if a.project_id == donor.id), None
        )
        movable = []
        if donor_allocation:
            for worker_id in donor_allocation.worker_ids:
                worker = snapshot.worker(worker_id)
                if worker is not None and framework in worker.expertise_set:
                    movable.append(worker_id)
            movable.sort()

        return [RebalanceAction(
            rule_id=context.rule_id,
            rule_kind=context.rule_kind,
            framework=framework,
            project_id=donor.id,
            description=(
                f"Reassign capacity from '{donor.name or donor.id}' ({donor.framework}, "
                f"{donor.priority.value} priority) toward {framework} at {utilization:.0f}% utilization"
            ),
            relieved_worker_ids=relieved,
            target_worker_ids=movable,
        )]

    def _pick_donor(self, snapshot: RebalanceSnapshot, framework: str) -> Optional[Project]:
        candidates = []
        for project in snapshot.projects:
            if not project.is_open or project.framework == framework:
                continue
            if project.priority == Priority.CRITICAL:
                continue
            capacity = snapshot.capacity(project.framework)
            if capacity is not None and capacity.critical_path:
                continue
            candidates.append(project)

        if not candidates:
            return None
        candidates.sort(key=lambda p: (p.priority.rank, p.risk_level, p.id))
        return candidates[0]
