from typing import List, Optional

from staffmind.domain.models import Worker
from .base import Action, ActionContext, RebalanceAction, RebalanceSnapshot

UNDERLOAD_MARGIN = 15.0


def find_underloaded_peers(
    snapshot: RebalanceSnapshot,
    worker_id: str,
    mean_load: float,
    margin: float = UNDERLOAD_MARGIN,
) -> List[Worker]:
    """Workers sharing expertise with worker_id whose load is below mean - margin, lightest first."""
    source = snapshot.worker(worker_id)
    if source is None:
        return []

    peers = [
        w for w in snapshot.workers
        if w.id != worker_id
        and w.expertise_set & source.expertise_set
        and w.workload < mean_load - margin
    ]
    peers.sort(key=lambda w: (w.workload, w.id))
    return peers


class RedistributeWorkAction(Action):
    """
    Moves low-complexity work from the most loaded worker to a compatible,
    under-loaded peer.
    """

    DEFAULT_MAX_COMPLEXITY = 5

    @property
    def type_name(self) -> str:
        return "redistribute_work"

    async def execute(self, config: dict, context: ActionContext) -> List[RebalanceAction]:
        snapshot = context.snapshot
        overloaded_id = context.scope_data["overloaded_worker_id"]
        mean_load = context.scope_data["mean_load"]
        max_complexity = int(config.get("max_complexity", self.DEFAULT_MAX_COMPLEXITY))

        peers = find_underloaded_peers(snapshot, overloaded_id, mean_load)
        if not peers:
            return []

        source = snapshot.worker(overloaded_id)
        target = peers[0]
        project = self._low_complexity_project(snapshot, overloaded_id, max_complexity)

        if project is not None:
            description = (
                f"Move '{project.name or project.id}' (complexity {project.complexity}) from "
                f"{source.name or source.id} ({source.workload:.0f}%) to "
                f"{target.name or target.id} ({target.workload:.0f}%)"
            )
        else:
            description = (
                f"Shift low-complexity work from {source.name or source.id} "
                f"({source.workload:.0f}%) to {target.name or target.id} ({target.workload:.0f}%)"
            )

        return [RebalanceAction(
            rule_id=context.rule_id,
            rule_kind=context.rule_kind,
            project_id=project.id if project else None,
            description=description,
            relieved_worker_ids=[overloaded_id],
            target_worker_ids=[target.id],
        )]

    def _low_complexity_project(self, snapshot: RebalanceSnapshot, worker_id: str, max_complexity: int):
        project_index = {p.id: p for p in snapshot.projects}
        candidates = []
        for allocation in snapshot.allocations:
            if worker_id not in allocation.worker_ids:
                continue
            project = project_index.get(allocation.project_id)
            if project and project.is_open and project.complexity <= max_complexity:
                candidates.append(project)

        if not candidates:
            return None
        candidates.sort(key=lambda p: (p.complexity, p.id))
        return candidates[0]
