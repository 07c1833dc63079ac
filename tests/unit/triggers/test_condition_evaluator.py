from staffmind.triggers.engine.evaluator import ConditionEvaluator
import pytest

@pytest.fixture
def evaluator():
    return ConditionEvaluator()

def test_simple_comparison(evaluator):
    condition = {">": [{"var": "expertise_gap"}, 60]}

    assert evaluator.evaluate(condition, {"expertise_gap": 80}) is True
    assert evaluator.evaluate(condition, {"expertise_gap": 40}) is False

def test_critical_framework_condition(evaluator):
    condition = {
        "and": [
            {"var": "critical_path"},
            {">": [{"var": "team_utilization"}, 90]}
        ]
    }

    assert evaluator.evaluate(condition, {"critical_path": True, "team_utilization": 95}) is True
    assert evaluator.evaluate(condition, {"critical_path": False, "team_utilization": 95}) is False
    assert evaluator.evaluate(condition, {"critical_path": True, "team_utilization": 85}) is False

def test_in_operator(evaluator):
    condition = {"in": [{"var": "framework"}, ["FDA QSR", "EU MDR"]]}

    assert evaluator.evaluate(condition, {"framework": "FDA QSR"}) is True
    assert evaluator.evaluate(condition, {"framework": "HIPAA"}) is False

def test_missing_data(evaluator):
    condition = {">": [{"var": "load_spread"}, 20]}
    # Missing var compares as null and does not fire
    assert evaluator.evaluate(condition, {}) is False

def test_validate_condition(evaluator):
    assert evaluator.validate_condition({">": [{"var": "expertise_gap"}, 60]}) is True
    assert evaluator.validate_condition({"var": "critical_path"}) is True

    assert evaluator.validate_condition("not a dict") is False
    assert evaluator.validate_condition({}) is False
    assert evaluator.validate_condition({">": [1, 2], "<": [1, 2]}) is False
    assert evaluator.validate_condition({"no_such_operator": [1, 2]}) is False

def test_workload_smoothing_condition(evaluator):
    condition = {
        "and": [
            {">": [{"var": "load_spread"}, 20]},
            {"var": "has_compatible_underloaded"}
        ]
    }

    assert evaluator.validate_condition(condition) is True
    assert evaluator.evaluate(condition, {"load_spread": 25.0, "has_compatible_underloaded": True}) is True
    assert evaluator.evaluate(condition, {"load_spread": 25.0, "has_compatible_underloaded": False}) is False

def test_default_rule_conditions_are_valid(evaluator):
    from staffmind.triggers import RuleRepository

    rules = RuleRepository().list()
    assert len(rules) == 3
    for rule in rules:
        assert evaluator.validate_condition(rule.condition) is True
