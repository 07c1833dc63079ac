import threading
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Union

import yaml

from staffmind.triggers.schemas import AllocationRule

DEFAULT_RULES_PATH = Path(__file__).parent / "default_rules.yaml"


def load_rules(path: Union[str, Path, None] = None) -> List[AllocationRule]:
    """
    Load and validate rules from a YAML file.

    Validation happens here, once, so malformed conditions or mismatched
    action types fail at startup rather than during a rebalance pass.
    """
    filepath = Path(path) if path else DEFAULT_RULES_PATH
    with open(filepath, 'r', encoding='utf-8') as f:
        config: Dict[str, Any] = yaml.safe_load(f) or {}
    return [AllocationRule.model_validate(item) for item in config.get("rules", [])]


class RuleRepository:
    """Holds the rule set; only the enabled flag is mutable."""

    def __init__(self, rules: Optional[Iterable[AllocationRule]] = None):
        self._lock = threading.Lock()
        self._rules: Dict[str, AllocationRule] = {}
        for rule in (rules if rules is not None else load_rules()):
            if rule.id in self._rules:
                raise ValueError(f"Duplicate rule id '{rule.id}'")
            self._rules[rule.id] = rule

    def get(self, rule_id: str) -> Optional[AllocationRule]:
        return self._rules.get(rule_id)

    def list(self) -> List[AllocationRule]:
        """All rules in evaluation order."""
        return sorted(self._rules.values(), key=lambda r: (r.priority, r.id))

    def list_enabled(self) -> List[AllocationRule]:
        return [r for r in self.list() if r.enabled]

    def set_enabled(self, rule_id: str, enabled: bool) -> AllocationRule:
        with self._lock:
            rule = self._rules.get(rule_id)
            if rule is None:
                raise KeyError(f"Rule {rule_id} not found")
            updated = rule.model_copy(update={"enabled": enabled})
            self._rules[rule_id] = updated
            return updated
