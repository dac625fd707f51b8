"""Condition evaluation over settings trees.

Conditions gate a field's visibility: a field whose conditions do not all
hold contributes no CSS and no attributes. Evaluation is a pure predicate
and never raises on stored data; malformed declarations are rejected when
the field is built.
"""

from collections.abc import Mapping, Sequence
from typing import Any

from pydantic import ValidationError

from stylekit.core import get_logger
from stylekit.schema import (
    MISSING,
    Breakpoint,
    Condition,
    ConditionOperator,
    FieldDefinition,
    InvalidFieldDefinition,
    is_responsive_value,
    lookup_path,
    split_path,
)

logger = get_logger("conditions")

_CONDITION_KEYS = frozenset({"field", "op", "operator", "value"})
_OPERATOR_NAMES = frozenset(op.value for op in ConditionOperator)


# =============================================================================
# Normalization
# =============================================================================


def normalize_condition(condition: Any) -> tuple[Condition, ...]:
    """Normalize a condition declaration into a tuple of Conditions.

    Accepted forms:
        - None: no condition
        - Condition instance
        - {"field": "show_icon", "value": True, "op": "eq"}
        - {"show_icon": True, "size": "large"}: implicit AND of equality
        - {"spacer_type": ["in", ["horizontal", "both"]]}: operator pair
        - A sequence of any of the above (implicit AND)

    Raises:
        InvalidFieldDefinition: If the declaration cannot be interpreted.
    """
    if condition is None:
        return ()
    if isinstance(condition, Condition):
        return (condition,)
    if isinstance(condition, Mapping):
        return _normalize_mapping(condition)
    if isinstance(condition, Sequence) and not isinstance(condition, (str, bytes)):
        normalized: list[Condition] = []
        for item in condition:
            normalized.extend(normalize_condition(item))
        return tuple(normalized)
    raise InvalidFieldDefinition(
        f"Unsupported condition declaration: {condition!r}"
    )


def _normalize_mapping(condition: Mapping[str, Any]) -> tuple[Condition, ...]:
    if not condition:
        return ()

    try:
        if "field" in condition and set(condition) <= _CONDITION_KEYS:
            op = condition.get("op", condition.get("operator", ConditionOperator.EQ))
            return (
                Condition(
                    field=condition["field"],
                    op=op,
                    value=condition.get("value"),
                ),
            )

        conditions = []
        for key, expected in condition.items():
            if _is_operator_pair(expected):
                conditions.append(Condition(field=key, op=expected[0], value=expected[1]))
            else:
                conditions.append(Condition(field=key, value=expected))
        return tuple(conditions)
    except ValidationError as e:
        raise InvalidFieldDefinition(f"Invalid condition {dict(condition)!r}: {e}") from e


def _is_operator_pair(expected: Any) -> bool:
    return (
        isinstance(expected, (list, tuple))
        and len(expected) == 2
        and isinstance(expected[0], str)
        and expected[0] in _OPERATOR_NAMES
    )


# =============================================================================
# Evaluation
# =============================================================================


def evaluate(
    condition: Condition | Sequence[Condition] | Mapping[str, Any] | None,
    settings: Mapping[str, Any] | None,
    scope: Sequence[str] = (),
) -> bool:
    """Evaluate a condition against a settings tree.

    Bare field keys resolve against siblings in ``scope`` (the group path
    of the conditional field). Dotted keys resolve from the tree root.
    A sequence of conditions holds only if every member holds.

    Args:
        condition: Condition, conditions, or a mapping declaration.
        settings: The settings tree (usually overlaid on defaults).
        scope: Group path of the field that carries the condition.

    Returns:
        bool: True if every condition holds; True for no conditions.
    """
    conditions = normalize_condition(condition)
    tree = settings or {}
    return all(_evaluate_one(c, tree, tuple(scope)) for c in conditions)


def is_visible(
    definition: FieldDefinition,
    settings: Mapping[str, Any] | None,
    scope: Sequence[str] = (),
) -> bool:
    """Check whether a field's conditions hold for the given settings."""
    if not definition.condition:
        return True
    return evaluate(definition.condition, settings, scope)


def resolve_reference(
    field: str, settings: Mapping[str, Any], scope: Sequence[str] = ()
) -> Any:
    """Resolve the value a condition refers to, or MISSING."""
    parts = split_path(field)
    if len(parts) > 1:
        return lookup_path(settings, parts)
    return lookup_path(settings, (*scope, *parts))


def _evaluate_one(condition: Condition, settings: Mapping[str, Any], scope: tuple) -> bool:
    actual = resolve_reference(condition.field, settings, scope)
    if is_responsive_value(actual):
        actual = actual[Breakpoint.DESKTOP.value]

    op = ConditionOperator(condition.op)
    expected = condition.value

    if actual is MISSING or actual is None:
        logger.debug(f"Condition on undefined field '{condition.field}'")
        return op == ConditionOperator.NEQ and _is_non_empty(expected)

    if op == ConditionOperator.EQ:
        return _strict_equal(actual, expected)
    if op == ConditionOperator.NEQ:
        return not _strict_equal(actual, expected)
    if op in (ConditionOperator.GT, ConditionOperator.LT):
        left, right = _as_number(actual), _as_number(expected)
        if left is None or right is None:
            return False
        return left > right if op == ConditionOperator.GT else left < right
    if op == ConditionOperator.IN:
        return _contains(expected, actual)
    return False


def _strict_equal(actual: Any, expected: Any) -> bool:
    """Equality without bool/number coercion (True != 1)."""
    if isinstance(actual, bool) != isinstance(expected, bool):
        return False
    return actual == expected


def _contains(container: Any, actual: Any) -> bool:
    if not isinstance(container, (list, tuple, set, frozenset)):
        return False
    if isinstance(actual, (list, tuple)):
        return any(_contains(container, item) for item in actual)
    return any(_strict_equal(actual, item) for item in container)


def _as_number(value: Any) -> float | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError:
            return None
    return None


def _is_non_empty(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, (str, list, tuple, dict, set)):
        return len(value) > 0
    return True


__all__ = [
    "evaluate",
    "is_visible",
    "normalize_condition",
    "resolve_reference",
]
