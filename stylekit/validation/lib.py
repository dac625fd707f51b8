"""Settings validation against a control schema.

Checks a stored settings tree for values the editor should not have
produced: missing required values, out-of-range numbers, malformed
colours, unknown options and shape mismatches. The compiler never needs
this (malformed values fall back to defaults); it is for editors and
import tooling that want to report problems.
"""

import re
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from stylekit.conditions import is_visible
from stylekit.schema import (
    MISSING,
    Breakpoint,
    ControlSchema,
    FieldCategory,
    FieldDefinition,
    FieldType,
    Tab,
    is_responsive_value,
    lookup_path,
)

_HEX_COLOR = re.compile(r"^#(?:[0-9a-fA-F]{3,4}|[0-9a-fA-F]{6}|[0-9a-fA-F]{8})$")
_FUNC_COLOR = re.compile(r"^(?:rgba?|hsla?)\(\s*[^()]+\)$")
_COLOR_KEYWORDS = frozenset({"transparent", "inherit", "initial", "currentcolor"})

_SIDES = ("top", "right", "bottom", "left")


@dataclass
class ValidationError:
    """Represents a validation error in a settings tree.

    Attributes:
        path: Dotted key path of the offending value.
        message: Human-readable error description.
        error_type: Category of the error.
    """

    path: str
    message: str
    error_type: str


def validate_settings(
    schema: ControlSchema, settings: Mapping[str, Any] | None
) -> list[ValidationError]:
    """Validate a settings tree against a schema.

    Performs the following checks:
        - Keys that name no tab, group or field
        - Required fields with neither a value nor a default
        - Numbers that are non-numeric or outside min/max
        - Colours that are not hex, rgb(a), hsl(a) or a keyword
        - Select and alignment values outside their options
        - Structured and composite values of the wrong shape

    Hidden fields (condition unmet) are not checked. Responsive values
    are checked per breakpoint.

    Args:
        schema: The control schema.
        settings: Stored settings tree.

    Returns:
        list[ValidationError]: Errors found (empty if valid).

    Example:
        >>> errors = validate_settings(widget.get_style_fields(), settings)
        >>> for e in errors:
        ...     print(f"{e.path}: {e.message}")
    """
    settings = settings or {}
    errors = _unknown_keys(schema, settings)
    effective = schema.apply_defaults(settings)

    for entry in schema.iter_fields():
        definition = entry.field
        if not is_visible(definition, effective, entry.scope):
            continue

        value = lookup_path(settings, entry.path)
        if value is MISSING or _is_blank(value):
            if definition.required and _is_blank(definition.default):
                errors.append(
                    ValidationError(
                        path=entry.key_path,
                        message=f"'{definition.label}' is required",
                        error_type="required",
                    )
                )
            continue

        if is_responsive_value(value):
            if not definition.responsive:
                errors.append(
                    ValidationError(
                        path=entry.key_path,
                        message="Field does not accept per-breakpoint values",
                        error_type="not_responsive",
                    )
                )
                continue
            for bp in Breakpoint:
                if bp.value in value and not _is_blank(value[bp.value]):
                    errors.extend(
                        _validate_value(definition, value[bp.value], f"{entry.key_path}.{bp.value}")
                    )
        else:
            errors.extend(_validate_value(definition, value, entry.key_path))

    return errors


def is_valid_settings(schema: ControlSchema, settings: Mapping[str, Any] | None) -> bool:
    """Check if a settings tree is valid.

    Example:
        >>> if is_valid_settings(schema, settings):
        ...     save(settings)
    """
    return not validate_settings(schema, settings)


def is_valid_color(value: Any) -> bool:
    """Check a colour string: hex, rgb(a), hsl(a) or a CSS keyword."""
    if not isinstance(value, str):
        return False
    value = value.strip()
    return bool(
        _HEX_COLOR.match(value)
        or _FUNC_COLOR.match(value)
        or value.lower() in _COLOR_KEYWORDS
    )


def _is_blank(value: Any) -> bool:
    return value is None or value == ""


def _error(path: str, message: str, error_type: str) -> list[ValidationError]:
    return [ValidationError(path=path, message=message, error_type=error_type)]


def _unknown_keys(schema: ControlSchema, settings: Mapping[str, Any]) -> list[ValidationError]:
    errors: list[ValidationError] = []
    containers: dict[str, set[str]] = {}
    for item in schema.items:
        if isinstance(item, Tab):
            containers[item.key] = {g.key for g in item.groups}
            for group in item.groups:
                containers[f"{item.key}.{group.key}"] = {f.key for f in group.fields}
        else:
            containers[item.key] = {f.key for f in item.fields}

    def _check(node: Mapping[str, Any], prefix: str, allowed: set[str]) -> None:
        for key, child in node.items():
            path = f"{prefix}.{key}" if prefix else str(key)
            if key not in allowed:
                errors.append(
                    ValidationError(path=path, message=f"Unknown setting '{path}'", error_type="unknown_key")
                )
            elif path in containers and isinstance(child, Mapping):
                _check(child, path, containers[path])

    top_level = {item.key for item in schema.items}
    _check(settings, "", top_level)
    return errors


def _as_number(value: Any) -> float | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return None
    return None


def _check_range(definition: FieldDefinition, number: float, path: str) -> list[ValidationError]:
    if definition.min is not None and number < definition.min:
        return _error(path, f"{number:g} is below the minimum {definition.min:g}", "out_of_range")
    if definition.max is not None and number > definition.max:
        return _error(path, f"{number:g} is above the maximum {definition.max:g}", "out_of_range")
    return []


def _validate_value(definition: FieldDefinition, value: Any, path: str) -> list[ValidationError]:
    field_type = definition.type
    category = definition.category

    if field_type == FieldType.TOGGLE:
        if not isinstance(value, bool):
            return _error(path, f"Expected true or false, got {value!r}", "invalid_type")
        return []

    if field_type == FieldType.NUMBER:
        number = _as_number(value)
        if number is None:
            return _error(path, f"Expected a number, got {value!r}", "invalid_number")
        return _check_range(definition, number, path)

    if category == FieldCategory.COLOR:
        if not is_valid_color(value):
            return _error(path, f"Invalid colour {value!r}", "invalid_color")
        return []

    if definition.meta.choice_like and definition.options:
        if value not in definition.option_values:
            return _error(path, f"{value!r} is not one of the allowed options", "invalid_option")
        return []

    if category == FieldCategory.SCALAR:
        if not isinstance(value, (str, int, float)):
            return _error(path, f"Expected a scalar, got {type(value).__name__}", "invalid_type")
        return []

    if category == FieldCategory.DIMENSION:
        if not isinstance(value, Mapping):
            return _error(path, "Expected a mapping of sides", "invalid_shape")
        errors: list[ValidationError] = []
        for side in _SIDES:
            number = _as_number(value.get(side))
            if number is not None:
                errors.extend(_check_range(definition, number, f"{path}.{side}"))
        unit = value.get("unit")
        if unit and definition.units and unit not in definition.units:
            errors.extend(_error(f"{path}.unit", f"Unit {unit!r} is not allowed", "invalid_unit"))
        return errors

    if field_type == FieldType.REPEATER:
        if not isinstance(value, list):
            return _error(path, "Expected a list of items", "invalid_shape")
        return []

    if field_type == FieldType.ICON:
        if not isinstance(value, str):
            return _error(path, "Expected an icon class string", "invalid_shape")
        return []

    if not isinstance(value, Mapping):
        return _error(path, f"Expected a mapping for {field_type.value}", "invalid_shape")
    if category == FieldCategory.COMPOSITE:
        return _composite_colors(value, path)
    return []


def _composite_colors(value: Mapping[str, Any], path: str) -> list[ValidationError]:
    """Check the colour members of composite groups."""
    errors: list[ValidationError] = []
    candidates = [("color", value.get("color"))]
    for section in ("hover", "border", "shadow"):
        child = value.get(section)
        if isinstance(child, Mapping):
            candidates.append((f"{section}.color", child.get("color")))
    for key, color in candidates:
        if not _is_blank(color) and not is_valid_color(color):
            errors.extend(_error(f"{path}.{key}", f"Invalid colour {color!r}", "invalid_color"))
    return errors


__all__ = [
    "ValidationError",
    "is_valid_color",
    "is_valid_settings",
    "validate_settings",
]
