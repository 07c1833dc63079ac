import pytest
from pydantic import ValidationError

from staffmind.triggers.repository import RuleRepository, load_rules
from staffmind.triggers.schemas import AllocationRule, RuleKind, RuleScope


def rule_data(**overrides):
    data = {
        "id": "r1",
        "name": "Cross-training",
        "kind": "expertise_cross_training",
        "priority": 1,
        "condition": {">": [{"var": "expertise_gap"}, 60]},
        "action": {"type": "recommend_cross_training"},
    }
    data.update(overrides)
    return data


def test_default_rules_loaded_in_priority_order():
    repo = RuleRepository()
    rules = repo.list()

    assert [r.id for r in rules] == [
        "rule_critical_framework",
        "rule_cross_training",
        "rule_workload_smoothing",
    ]
    assert [r.kind for r in rules] == [
        RuleKind.CRITICAL_FRAMEWORK_BALANCING,
        RuleKind.EXPERTISE_CROSS_TRAINING,
        RuleKind.WORKLOAD_SMOOTHING,
    ]
    assert all(r.enabled for r in rules)
    assert [r.success_rate for r in rules] == [87, 78, 82]


def test_rule_scopes():
    assert RuleKind.CRITICAL_FRAMEWORK_BALANCING.scope == RuleScope.FRAMEWORK
    assert RuleKind.EXPERTISE_CROSS_TRAINING.scope == RuleScope.FRAMEWORK
    assert RuleKind.WORKLOAD_SMOOTHING.scope == RuleScope.TEAM


def test_set_enabled():
    repo = RuleRepository()

    updated = repo.set_enabled("rule_cross_training", False)

    assert updated.enabled is False
    assert repo.get("rule_cross_training").enabled is False
    assert [r.id for r in repo.list_enabled()] == ["rule_critical_framework", "rule_workload_smoothing"]

    repo.set_enabled("rule_cross_training", True)
    assert len(repo.list_enabled()) == 3


def test_set_enabled_unknown_rule():
    with pytest.raises(KeyError):
        RuleRepository().set_enabled("missing", False)


def test_duplicate_ids_rejected():
    rule = AllocationRule.model_validate(rule_data())
    with pytest.raises(ValueError):
        RuleRepository([rule, rule])


def test_invalid_condition_rejected():
    with pytest.raises(ValidationError):
        AllocationRule.model_validate(rule_data(condition={"bogus_op": [1, 2]}))


def test_action_must_match_kind():
    with pytest.raises(ValidationError):
        AllocationRule.model_validate(rule_data(action={"type": "redistribute_work"}))


def test_action_type_required():
    with pytest.raises(ValidationError):
        AllocationRule.model_validate(rule_data(action={}))


def test_load_rules_from_file(tmp_path):
    path = tmp_path / "rules.yaml"
    path.write_text(
        "rules:\n"
        "  - id: only\n"
        "    name: Smoothing\n"
        "    kind: workload_smoothing\n"
        "    priority: 5\n"
        "    enabled: false\n"
        "    condition: {'>': [{var: load_spread}, 30]}\n"
        "    action: {type: redistribute_work, max_complexity: 3}\n",
        encoding="utf-8",
    )

    [rule] = load_rules(path)

    assert rule.id == "only"
    assert rule.enabled is False
    assert rule.action_type == "redistribute_work"
    assert rule.action["max_complexity"] == 3


def test_empty_file(tmp_path):
    path = tmp_path / "rules.yaml"
    path.write_text("", encoding="utf-8")
    assert load_rules(path) == []
