from typing import Dict, List
import logging
from .base import Action

logger = logging.getLogger(__name__)


class ActionRegistry:
    """
    Registry for available action types.
    """

    def __init__(self):
        self._actions: Dict[str, Action] = {}

    def register(self, action: Action) -> None:
        """Register an action handler."""
        name = action.type_name
        if name in self._actions:
            logger.warning(f"Action type '{name}' already registered. Overwriting.")
        self._actions[name] = action
        logger.debug(f"Registered action handler for type: '{name}'")

    def get(self, type_name: str) -> Action:
        """Get an action handler by type."""
        handler = self._actions.get(type_name)
        if not handler:
            raise ValueError(f"Action type '{type_name}' not found. Registered: {list(self._actions.keys())}")
        return handler

    def types(self) -> List[str]:
        return sorted(self._actions)


from .critical_balancing import ReassignCapacityAction
from .cross_training import CrossTrainingAction
from .workload_smoothing import RedistributeWorkAction


def default_registry() -> ActionRegistry:
    registry = ActionRegistry()
    registry.register(ReassignCapacityAction())
    registry.register(CrossTrainingAction())
    registry.register(RedistributeWorkAction())
    return registry
