"""
Tests for rule configuration loading.
"""

import json

import pytest
from sanctifai.rules import (
    DEFAULT_RULES,
    Rule,
    RuleConfigError,
    load_rules,
    rules_from_data,
)


RULES_JSON = [
    {
        "id": "explicit-language",
        "title": "Explicit Language",
        "description": "Profanity.",
        "category": "language",
        "weight": -25,
        "anchors": ["eph-4-29"],
    },
    {
        "id": "worship",
        "title": "Worship",
        "description": "Praise.",
        "category": "worship",
        "weight": 30,
    },
    {
        "id": "some-future-rule",
        "title": "Future",
        "description": "Not known to this scorer yet.",
        "category": "misc",
        "weight": 5,
        "anchors": [],
    },
]


class TestRulesFromData:
    def test_valid_list(self):
        rules = rules_from_data(RULES_JSON)
        assert [r.id for r in rules] == ["explicit-language", "worship", "some-future-rule"]
        assert rules[0].anchors == ("eph-4-29",)
        assert rules[1].anchors == ()

    def test_wrapped_object(self):
        rules = rules_from_data({"rules": RULES_JSON})
        assert len(rules) == 3

    def test_duplicate_id(self):
        with pytest.raises(RuleConfigError, match="Duplicate"):
            rules_from_data([RULES_JSON[0], RULES_JSON[0]])

    def test_missing_id(self):
        with pytest.raises(RuleConfigError):
            rules_from_data([{"title": "no id", "weight": 1}])

    @pytest.mark.parametrize("weight", ["10", None, True, [1]])
    def test_bad_weight(self, weight):
        with pytest.raises(RuleConfigError):
            rules_from_data([{"id": "x", "weight": weight}])

    def test_bad_anchors(self):
        with pytest.raises(RuleConfigError):
            rules_from_data([{"id": "x", "weight": 1, "anchors": "eph-4-29"}])

    def test_not_a_list(self):
        with pytest.raises(RuleConfigError):
            rules_from_data("explicit-language")

    def test_entry_not_an_object(self):
        with pytest.raises(RuleConfigError):
            rules_from_data(["explicit-language"])

    def test_config_error_is_value_error(self):
        assert issubclass(RuleConfigError, ValueError)


class TestLoadRules:
    def test_load_from_file(self, tmp_path):
        path = tmp_path / "rules.json"
        path.write_text(json.dumps(RULES_JSON), encoding="utf-8")
        rules = load_rules(path)
        assert rules == rules_from_data(RULES_JSON)

    def test_missing_file(self, tmp_path):
        with pytest.raises(RuleConfigError, match="not found"):
            load_rules(tmp_path / "nope.json")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "rules.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(RuleConfigError, match="not valid JSON"):
            load_rules(str(path))


class TestRule:
    def test_round_trip_dict(self):
        rule = DEFAULT_RULES[0]
        assert Rule.from_dict(rule.to_dict()) == rule

    def test_default_rule_ids_unique(self):
        ids = [r.id for r in DEFAULT_RULES]
        assert len(ids) == len(set(ids))

    def test_rule_is_immutable(self):
        with pytest.raises(Exception):
            DEFAULT_RULES[0].weight = 100
