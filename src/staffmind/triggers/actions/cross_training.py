from typing import List

from .base import Action, ActionContext, RebalanceAction


class CrossTrainingAction(Action):
    """
    Recommends the strongest performers lacking a framework for cross-training.

    Advisory only: nobody's load is adjusted.
    """

    DEFAULT_CANDIDATES = 2

    @property
    def type_name(self) -> str:
        return "recommend_cross_training"

    async def execute(self, config: dict, context: ActionContext) -> List[RebalanceAction]:
        framework = context.scope_data["framework"]
        gap = context.scope_data.get("expertise_gap", 0.0)
        limit = int(config.get("candidates", self.DEFAULT_CANDIDATES))

        candidates = sorted(
            (w for w in context.snapshot.workers if framework not in w.expertise_set),
            key=lambda w: (-w.performance_score, w.id),
        )[:limit]
        if not candidates:
            return []

        names = ", ".join(w.name or w.id for w in candidates)
        return [RebalanceAction(
            rule_id=context.rule_id,
            rule_kind=context.rule_kind,
            framework=framework,
            description=f"Cross-train {names} in {framework} to close a {gap:.0f}% expertise gap",
            target_worker_ids=[w.id for w in candidates],
        )]
