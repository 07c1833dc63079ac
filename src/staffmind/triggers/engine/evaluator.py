import logging
from typing import Dict, Any

import json_logic

logger = logging.getLogger(__name__)


class ConditionEvaluator:
    """
    Evaluates JSONLogic rule conditions against an analysis context.
    """

    def evaluate(self, condition: Dict[str, Any], data: Dict[str, Any]) -> bool:
        """
        Evaluate a JSONLogic condition against the provided context.

        Args:
            condition: The JSONLogic rule (e.g. {">": [{"var": "expertise_gap"}, 60]})
            data: Context to evaluate against (e.g. {"expertise_gap": 80, ...})

        Returns:
            bool: True if condition matches, False otherwise.
        """
        try:
            result = json_logic.jsonLogic(condition, data)
            return bool(result)
        except Exception as e:
            # Conditions are validated when rules are loaded; a failure here
            # means the context is missing data, so the rule does not fire.
            logger.error(f"Error evaluating condition {condition}: {e}", exc_info=True)
            return False

    def validate_condition(self, condition: Dict[str, Any]) -> bool:
        """
        Validate that a condition is a usable JSONLogic structure.

        json_logic has no strict validator, so we check the shape and do a
        dry run against empty data.
        """
        if not isinstance(condition, dict) or len(condition) != 1:
            return False

        try:
            json_logic.jsonLogic(condition, {})
        except ValueError:
            # Unrecognized operation
            return False
        except (TypeError, ArithmeticError):
            # Vars resolve to null in a dry run; the structure is still usable.
            return True
        return True
