import pytest

from settings_core.conditional import Conditional, is_visible
from settings_core.errors import DefinitionError


def test_from_config_defaults_operator_and_joins_lists():
    cond = Conditional.from_config({"field": "mode", "value": ["a", "b"], "operator": "in"})
    assert cond == Conditional(field="mode", value="a,b", operator="in")
    assert Conditional.from_config({"field": "mode", "value": True}).operator == "=="
    assert Conditional.from_config({"field": "mode", "value": True}).value == "1"


@pytest.mark.parametrize(
    "config",
    [
        "mode",
        {"value": "x"},
        {"field": "", "value": "x"},
        {"field": "mode"},
        {"field": "mode", "value": "x", "operator": "~="},
        {"field": "mode", "value": {"nested": 1}},
    ],
)
def test_from_config_rejects_malformed_rules(config):
    with pytest.raises(DefinitionError):
        Conditional.from_config(config)


def test_data_attributes_pass_the_rule_through():
    cond = Conditional(field="mode", value="a,b", operator="not in")
    assert cond.to_data_attributes() == {
        "data-conditional": "mode",
        "data-conditional-value": "a,b",
        "data-conditional-operator": "not in",
    }


def test_equality_operators_compare_as_text():
    assert is_visible(Conditional("enabled", "1"), True) is True
    assert is_visible(Conditional("enabled", "1"), False) is False
    assert is_visible(Conditional("enabled", "0"), False) is True
    assert is_visible(Conditional("count", "3"), 3) is True
    assert is_visible(Conditional("mode", "email", "!="), "phone") is True


def test_in_operators_keep_list_and_scalar_branches():
    # scalar current value: membership in the comma-split rule value
    assert is_visible(Conditional("mode", "email,phone", "in"), "phone") is True
    assert is_visible(Conditional("mode", "email,phone", "in"), "none") is False
    assert is_visible(Conditional("mode", "email,phone", "not in"), "none") is True
    # list current value (multiselect): the rule value must be a member
    assert is_visible(Conditional("tags", "b", "in"), ["a", "b"]) is True
    assert is_visible(Conditional("tags", "c", "in"), ["a", "b"]) is False
    assert is_visible(Conditional("tags", "c", "not in"), ["a", "b"]) is True
