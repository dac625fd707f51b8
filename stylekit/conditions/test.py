"""Tests for the condition evaluator."""

import pytest

from stylekit.schema import Condition, ConditionOperator, InvalidFieldDefinition

from .lib import evaluate, normalize_condition, resolve_reference

SCOPE = ("icon",)


def _settings(**icon_values) -> dict:
    return {"icon": dict(icon_values), "colors": {"enable_link": True}}


class TestNormalizeCondition:
    """Tests for normalize_condition."""

    @pytest.mark.unit
    def test_none_is_empty(self):
        """No declaration means no conditions."""
        assert normalize_condition(None) == ()
        assert normalize_condition({}) == ()

    @pytest.mark.unit
    def test_explicit_form(self):
        """Explicit field/op/value mappings become one condition."""
        (condition,) = normalize_condition({"field": "size", "op": "gt", "value": 3})
        assert condition.field == "size"
        assert condition.op == ConditionOperator.GT

    @pytest.mark.unit
    def test_multi_key_is_implicit_and(self):
        """Multi-key mappings become equality checks in key order."""
        conditions = normalize_condition({"show_icon": True, "size": "large"})
        assert [(c.field, c.op, c.value) for c in conditions] == [
            ("show_icon", ConditionOperator.EQ, True),
            ("size", ConditionOperator.EQ, "large"),
        ]

    @pytest.mark.unit
    def test_operator_pair(self):
        """[op, value] pairs set the operator."""
        (condition,) = normalize_condition({"spacer_type": ["in", ["horizontal", "both"]]})
        assert condition.op == ConditionOperator.IN
        assert condition.value == ["horizontal", "both"]

    @pytest.mark.unit
    def test_sequence_flattens(self):
        """Sequences of declarations are flattened."""
        conditions = normalize_condition(
            [Condition(field="a", value=1), {"b": 2}]
        )
        assert [c.field for c in conditions] == ["a", "b"]

    @pytest.mark.unit
    def test_invalid_operator_rejected(self):
        """Unknown operators are declaration errors."""
        with pytest.raises(InvalidFieldDefinition):
            normalize_condition({"field": "a", "op": "gte", "value": 1})

    @pytest.mark.unit
    def test_unsupported_shape_rejected(self):
        """Bare strings are not conditions."""
        with pytest.raises(InvalidFieldDefinition):
            normalize_condition("show_icon")


class TestEvaluate:
    """Tests for evaluate."""

    @pytest.mark.unit
    def test_sibling_lookup(self):
        """Bare keys resolve within the field's own group."""
        condition = Condition(field="show_icon", value=True)
        assert evaluate(condition, _settings(show_icon=True), SCOPE)
        assert not evaluate(condition, _settings(show_icon=False), SCOPE)

    @pytest.mark.unit
    def test_sibling_lookup_does_not_search_other_groups(self):
        """A bare key never matches a field in another group."""
        condition = Condition(field="enable_link", value=True)
        assert not evaluate(condition, _settings(), SCOPE)

    @pytest.mark.unit
    def test_dotted_key_crosses_groups(self):
        """Dotted keys resolve from the tree root."""
        condition = Condition(field="colors.enable_link", value=True)
        assert evaluate(condition, _settings(), SCOPE)

    @pytest.mark.unit
    def test_eq_is_strict(self):
        """Booleans never equal numbers."""
        condition = Condition(field="show_icon", value=True)
        assert not evaluate(condition, _settings(show_icon=1), SCOPE)

    @pytest.mark.unit
    def test_neq(self):
        """neq inverts equality for defined values."""
        condition = Condition(field="style", op="neq", value="flat")
        assert evaluate(condition, _settings(style="outline"), SCOPE)
        assert not evaluate(condition, _settings(style="flat"), SCOPE)

    @pytest.mark.unit
    def test_gt_lt(self):
        """Numeric comparisons accept numeric strings."""
        assert evaluate({"field": "size", "op": "gt", "value": 3}, _settings(size=4), SCOPE)
        assert evaluate({"field": "size", "op": "lt", "value": 3}, _settings(size="2"), SCOPE)

    @pytest.mark.unit
    def test_gt_incomparable_is_false(self):
        """Non-numeric values never satisfy gt or lt."""
        condition = {"field": "size", "op": "gt", "value": 3}
        assert not evaluate(condition, _settings(size="large"), SCOPE)
        assert not evaluate(condition, _settings(size=True), SCOPE)

    @pytest.mark.unit
    def test_in(self):
        """in checks membership in a list."""
        condition = {"field": "kind", "op": "in", "value": ["a", "b"]}
        assert evaluate(condition, _settings(kind="a"), SCOPE)
        assert not evaluate(condition, _settings(kind="c"), SCOPE)

    @pytest.mark.unit
    def test_in_with_non_list_is_false(self):
        """in against a scalar comparison value never holds."""
        condition = {"field": "kind", "op": "in", "value": "abc"}
        assert not evaluate(condition, _settings(kind="a"), SCOPE)

    @pytest.mark.unit
    @pytest.mark.parametrize("op", ["eq", "gt", "lt", "in"])
    def test_undefined_is_false(self, op):
        """Undefined references fail every operator but neq."""
        condition = {"field": "missing", "op": op, "value": [1]}
        assert not evaluate(condition, _settings(), SCOPE)

    @pytest.mark.unit
    def test_undefined_neq_non_empty_is_true(self):
        """neq against a non-empty value holds for undefined references."""
        assert evaluate({"field": "missing", "op": "neq", "value": "x"}, _settings(), SCOPE)
        assert not evaluate({"field": "missing", "op": "neq", "value": ""}, _settings(), SCOPE)

    @pytest.mark.unit
    def test_none_counts_as_undefined(self):
        """A stored None behaves like an absent value."""
        condition = Condition(field="show_icon", value=None)
        assert not evaluate(condition, _settings(show_icon=None), SCOPE)

    @pytest.mark.unit
    def test_all_conditions_must_hold(self):
        """Sequences are combined with AND."""
        condition = {"show_icon": True, "size": "large"}
        assert evaluate(condition, _settings(show_icon=True, size="large"), SCOPE)
        assert not evaluate(condition, _settings(show_icon=True, size="small"), SCOPE)

    @pytest.mark.unit
    def test_responsive_reference_uses_desktop(self):
        """Responsive references compare their desktop value."""
        condition = Condition(field="columns", op="gt", value=2)
        settings = _settings(columns={"desktop": 3, "mobile": 1})
        assert evaluate(condition, settings, SCOPE)

    @pytest.mark.unit
    def test_empty_condition_holds(self):
        """No conditions means visible."""
        assert evaluate((), None)

    @pytest.mark.unit
    def test_non_mapping_settings_never_raise(self):
        """Malformed trees resolve to undefined."""
        condition = Condition(field="show_icon", value=True)
        assert not evaluate(condition, {"icon": "oops"}, SCOPE)


class TestResolveReference:
    """Tests for resolve_reference."""

    @pytest.mark.unit
    def test_scoped_and_rooted(self):
        """Scope applies to bare keys only."""
        settings = {"tab": {"group": {"a": 1}}, "other": {"b": 2}}
        assert resolve_reference("a", settings, ("tab", "group")) == 1
        assert resolve_reference("other.b", settings, ("tab", "group")) == 2
