"""Condition evaluator for field visibility."""

from stylekit.conditions.lib import (
    evaluate,
    is_visible,
    normalize_condition,
    resolve_reference,
)

__all__ = [
    "evaluate",
    "is_visible",
    "normalize_condition",
    "resolve_reference",
]
