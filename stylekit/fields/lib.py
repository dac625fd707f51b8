"""Fluent, immutable builder for FieldDefinitions.

Every setter returns a new builder, so partially configured builders can
be shared and specialised without aliasing:

    >>> base = number().set_unit("px").set_range(0, 100)
    >>> width = base.set_label("Width").build("width")
    >>> height = base.set_label("Height").build("height")

Setters validate their argument against the declared field type and raise
InvalidFieldDefinition on mismatch. build() raises MissingRequiredAttribute
when the key or label is missing.
"""

import re
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field, replace
from typing import Any

from pydantic import ValidationError

from stylekit.conditions import normalize_condition
from stylekit.schema import (
    AlignmentAxis,
    CompositeRule,
    Condition,
    ConditionOperator,
    FieldCategory,
    FieldDefinition,
    FieldOption,
    FieldType,
    FieldTypeMeta,
    InvalidFieldDefinition,
    MissingRequiredAttribute,
    TemplateRule,
    get_field_type_meta,
    get_typed_default,
    is_responsive_value,
    resolve_field_type,
)

_KEY_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_\-]*$")
_UNSET: Any = object()

_SPACING_UNITS = ("px", "em", "rem", "%")
_ZERO_SIDES = {"top": 0, "right": 0, "bottom": 0, "left": 0}


@dataclass(frozen=True)
class FieldBuilder:
    """Immutable builder producing a FieldDefinition.

    Attributes mirror FieldDefinition. ``type`` keeps the raw value when
    it does not name a known FieldType so that build() can report it.
    """

    type: FieldType | str
    key: str | None = None
    label: str | None = None
    default: Any = _UNSET
    unit: str | None = None
    units: tuple[str, ...] = field(default_factory=tuple)
    min: float | None = None
    max: float | None = None
    step: float | None = None
    options: tuple[FieldOption, ...] = field(default_factory=tuple)
    responsive: bool = False
    condition: tuple[Condition, ...] = field(default_factory=tuple)
    selectors: tuple[TemplateRule | CompositeRule, ...] = field(default_factory=tuple)
    description: str = ""
    placeholder: str = ""
    required: bool = False
    class_template: str | None = None
    style_template: str | None = None
    axis: AlignmentAxis | None = None

    def __post_init__(self) -> None:
        resolved = resolve_field_type(self.type)
        if resolved is not None:
            object.__setattr__(self, "type", resolved)

    # -------------------------------------------------------------------------
    # Identity
    # -------------------------------------------------------------------------

    def set_key(self, key: str) -> "FieldBuilder":
        if not isinstance(key, str) or not _KEY_RE.match(key):
            raise InvalidFieldDefinition(
                f"Invalid field key {key!r}: use letters, digits, '_' or '-', no dots"
            )
        return replace(self, key=key)

    def set_label(self, label: str) -> "FieldBuilder":
        if not isinstance(label, str) or not label.strip():
            raise InvalidFieldDefinition("Field label must be a non-empty string")
        return replace(self, label=label)

    def set_description(self, description: str) -> "FieldBuilder":
        return replace(self, description=str(description))

    def set_placeholder(self, placeholder: str) -> "FieldBuilder":
        return replace(self, placeholder=str(placeholder))

    def set_required(self, required: bool = True) -> "FieldBuilder":
        return replace(self, required=bool(required))

    # -------------------------------------------------------------------------
    # Values
    # -------------------------------------------------------------------------

    def set_default(self, default: Any) -> "FieldBuilder":
        """Set the value used when the settings tree holds nothing.

        Responsive defaults ({"desktop": ..., "mobile": ...}) are checked
        per breakpoint.
        """
        meta = self._meta()
        if is_responsive_value(default):
            for value in default.values():
                _check_value_shape(meta, value)
        else:
            _check_value_shape(meta, default)
        return replace(self, default=default)

    def set_responsive(self, responsive: bool = True) -> "FieldBuilder":
        return replace(self, responsive=bool(responsive))

    def set_unit(self, unit: str) -> "FieldBuilder":
        meta = self._meta()
        if not meta.supports_unit:
            raise InvalidFieldDefinition(f"{meta.type.value} fields do not take a unit")
        if not isinstance(unit, str):
            raise InvalidFieldDefinition(f"Unit must be a string, got {unit!r}")
        return replace(self, unit=unit)

    def set_units(self, units: Sequence[str]) -> "FieldBuilder":
        """Declare the units an editor may offer; the first becomes the unit."""
        meta = self._meta()
        if not meta.supports_unit:
            raise InvalidFieldDefinition(f"{meta.type.value} fields do not take a unit")
        units = tuple(units)
        if not units or not all(isinstance(u, str) for u in units):
            raise InvalidFieldDefinition("Units must be a non-empty list of strings")
        return replace(self, units=units, unit=self.unit or units[0])

    def set_min(self, minimum: float) -> "FieldBuilder":
        self._require_range()
        return replace(self, min=_as_bound("min", minimum))

    def set_max(self, maximum: float) -> "FieldBuilder":
        self._require_range()
        return replace(self, max=_as_bound("max", maximum))

    def set_step(self, step: float) -> "FieldBuilder":
        self._require_range()
        value = _as_bound("step", step)
        if value <= 0:
            raise InvalidFieldDefinition(f"step must be positive, got {step!r}")
        return replace(self, step=value)

    def set_range(
        self, minimum: float, maximum: float, step: float | None = None
    ) -> "FieldBuilder":
        builder = self.set_min(minimum).set_max(maximum)
        return builder.set_step(step) if step is not None else builder

    def set_options(self, options: Mapping[Any, str] | Sequence[Any]) -> "FieldBuilder":
        """Set the choices of a choice-like field.

        Accepts {value: label} mappings, FieldOption instances,
        (value, label) pairs, {"value", "label"} dicts, or bare values.
        """
        meta = self._meta()
        if not meta.choice_like:
            raise InvalidFieldDefinition(f"{meta.type.value} fields do not take options")
        parsed = _parse_options(options)
        if not parsed:
            raise InvalidFieldDefinition("Options must not be empty")
        return replace(self, options=parsed)

    # -------------------------------------------------------------------------
    # Conditions
    # -------------------------------------------------------------------------

    def set_condition(self, condition: Any) -> "FieldBuilder":
        """Replace the field's visibility conditions (see normalize_condition)."""
        return replace(self, condition=normalize_condition(condition))

    def depends_on(
        self,
        field_key: str,
        value: Any,
        op: ConditionOperator | str = ConditionOperator.EQ,
    ) -> "FieldBuilder":
        """Add one more condition; all conditions must hold."""
        added = normalize_condition({"field": field_key, "op": op, "value": value})
        return replace(self, condition=self.condition + added)

    # -------------------------------------------------------------------------
    # CSS mapping
    # -------------------------------------------------------------------------

    def set_selectors(self, selectors: Any) -> "FieldBuilder":
        """Set the CSS selector rules.

        Scalar, dimension and alignment fields take a {selector: template}
        mapping (or TemplateRule instances). Composite groups take a list
        of selectors; their resolver emits the declarations. Typography
        groups also accept a template mapping over their FONT_* tokens.
        Structured types never produce CSS.
        """
        meta = self._meta()
        if not meta.accepts_selectors:
            raise InvalidFieldDefinition(
                f"{meta.type.value} fields are consumed by markup and take no selectors"
            )
        if meta.is_composite and not (meta.tokens and isinstance(selectors, Mapping)):
            rules = _parse_composite_rules(meta, selectors)
        else:
            rules = _parse_template_rules(meta, selectors)
        return replace(self, selectors=rules)

    def set_class_template(self, template: str) -> "FieldBuilder":
        """Map the field to a wrapper class, e.g. "align-{{VALUE}}"."""
        self._require_attribute_mapping()
        return replace(self, class_template=_non_empty("class template", template))

    def set_style_template(self, template: str) -> "FieldBuilder":
        """Map the field to an inline declaration, e.g. "height: {{VALUE}}{{UNIT}}"."""
        self._require_attribute_mapping()
        return replace(self, style_template=_non_empty("style template", template))

    def set_axis(self, axis: AlignmentAxis | str) -> "FieldBuilder":
        meta = self._meta()
        if meta.type != FieldType.ALIGNMENT:
            raise InvalidFieldDefinition(f"{meta.type.value} fields do not take an axis")
        try:
            return replace(self, axis=AlignmentAxis(axis))
        except ValueError as e:
            raise InvalidFieldDefinition(f"Unknown alignment axis {axis!r}") from e

    # -------------------------------------------------------------------------
    # Presets
    # -------------------------------------------------------------------------

    def as_padding(self) -> "FieldBuilder":
        self._require_type(FieldType.DIMENSION, "as_padding")
        return self.set_units(_SPACING_UNITS).set_range(0, 200).set_default(dict(_ZERO_SIDES))

    def as_margin(self) -> "FieldBuilder":
        self._require_type(FieldType.DIMENSION, "as_margin")
        return self.set_units(_SPACING_UNITS).set_range(-200, 200).set_default(dict(_ZERO_SIDES))

    def as_border_radius(self) -> "FieldBuilder":
        self._require_type(FieldType.DIMENSION, "as_border_radius")
        return self.set_units(_SPACING_UNITS).set_range(0, 100).set_default(dict(_ZERO_SIDES))

    def as_text_align(self) -> "FieldBuilder":
        self._require_type(FieldType.ALIGNMENT, "as_text_align")
        return (
            self.set_axis(AlignmentAxis.TEXT_ALIGN)
            .set_options(["none", "left", "center", "right", "justify"])
            .set_default("left")
        )

    def as_flex_align(self) -> "FieldBuilder":
        self._require_type(FieldType.ALIGNMENT, "as_flex_align")
        return (
            self.set_axis(AlignmentAxis.JUSTIFY_CONTENT)
            .set_options(["flex-start", "center", "flex-end"])
            .set_default("flex-start")
        )

    def as_element_align(self) -> "FieldBuilder":
        self._require_type(FieldType.ALIGNMENT, "as_element_align")
        return (
            self.set_axis(AlignmentAxis.ALIGN_ITEMS)
            .set_options(["flex-start", "center", "flex-end"])
            .set_default("flex-start")
        )

    # -------------------------------------------------------------------------
    # Build
    # -------------------------------------------------------------------------

    def build(self, key: str | None = None) -> FieldDefinition:
        """Build the immutable FieldDefinition.

        Args:
            key: Optional key, overriding any key set earlier.

        Raises:
            InvalidFieldDefinition: Unknown type, or min greater than max.
            MissingRequiredAttribute: Key or label absent.
        """
        builder = self.set_key(key) if key is not None else self
        meta = builder._meta()

        if builder.key is None:
            raise MissingRequiredAttribute("key", meta.type.value)
        if builder.label is None:
            raise MissingRequiredAttribute("label", meta.type.value)
        if builder.min is not None and builder.max is not None and builder.min > builder.max:
            raise InvalidFieldDefinition(
                f"Field '{builder.key}': min ({builder.min}) is greater than max ({builder.max})"
            )

        default = builder.default
        if default is _UNSET:
            default = get_typed_default(meta.type)

        axis = builder.axis
        if meta.type == FieldType.ALIGNMENT and axis is None:
            axis = AlignmentAxis.TEXT_ALIGN

        try:
            return FieldDefinition(
                key=builder.key,
                type=meta.type,
                label=builder.label,
                default=default,
                unit=builder.unit,
                units=builder.units,
                min=builder.min,
                max=builder.max,
                step=builder.step,
                options=builder.options,
                responsive=builder.responsive,
                condition=builder.condition,
                selectors=builder.selectors,
                description=builder.description,
                placeholder=builder.placeholder,
                required=builder.required,
                class_template=builder.class_template,
                style_template=builder.style_template,
                axis=axis,
            )
        except ValidationError as e:
            raise InvalidFieldDefinition(f"Field '{builder.key}': {e}") from e

    # -------------------------------------------------------------------------
    # Internal checks
    # -------------------------------------------------------------------------

    def _meta(self) -> FieldTypeMeta:
        if not isinstance(self.type, FieldType):
            raise InvalidFieldDefinition(f"Unknown field type '{self.type}'")
        return get_field_type_meta(self.type)

    def _require_range(self) -> None:
        meta = self._meta()
        if not meta.supports_range:
            raise InvalidFieldDefinition(
                f"{meta.type.value} fields do not take min/max/step"
            )

    def _require_type(self, field_type: FieldType, preset: str) -> None:
        if self._meta().type != field_type:
            raise InvalidFieldDefinition(f"{preset}() applies to {field_type.value} fields only")

    def _require_attribute_mapping(self) -> None:
        meta = self._meta()
        if meta.category in (FieldCategory.STRUCTURED, FieldCategory.COMPOSITE):
            raise InvalidFieldDefinition(
                f"{meta.type.value} fields cannot map to inline attributes"
            )


# =============================================================================
# Argument parsing helpers
# =============================================================================


def _check_value_shape(meta: FieldTypeMeta, value: Any) -> None:
    """Reject defaults whose shape cannot belong to the field type."""
    if value is None:
        return
    field_type = meta.type
    if field_type == FieldType.TOGGLE:
        ok = isinstance(value, bool)
    elif field_type == FieldType.NUMBER:
        ok = value == "" or (isinstance(value, (int, float)) and not isinstance(value, bool))
    elif meta.category in (FieldCategory.COLOR, FieldCategory.ALIGNMENT):
        ok = isinstance(value, str)
    elif meta.category in (FieldCategory.DIMENSION, FieldCategory.COMPOSITE):
        ok = isinstance(value, Mapping)
    elif meta.category == FieldCategory.SCALAR:
        ok = isinstance(value, (str, int, float, bool))
    else:
        ok = True
    if not ok:
        raise InvalidFieldDefinition(
            f"Default {value!r} does not fit a {field_type.value} field"
        )


def _as_bound(name: str, value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidFieldDefinition(f"{name} must be a number, got {value!r}")
    return value


def _non_empty(name: str, value: Any) -> str:
    if not isinstance(value, str) or not value.strip():
        raise InvalidFieldDefinition(f"{name} must be a non-empty string")
    return value


def _parse_options(options: Any) -> tuple[FieldOption, ...]:
    if isinstance(options, Mapping):
        items = [(value, label) for value, label in options.items()]
    elif isinstance(options, Sequence) and not isinstance(options, (str, bytes)):
        items = []
        for option in options:
            if isinstance(option, FieldOption):
                items.append((option.value, option.label))
            elif isinstance(option, Mapping) and "value" in option:
                items.append((option["value"], option.get("label", str(option["value"]))))
            elif isinstance(option, (list, tuple)) and len(option) == 2:
                items.append((option[0], option[1]))
            else:
                items.append((option, str(option)))
    else:
        raise InvalidFieldDefinition(f"Unsupported options declaration: {options!r}")

    try:
        return tuple(FieldOption(value=value, label=str(label)) for value, label in items)
    except ValidationError as e:
        raise InvalidFieldDefinition(f"Invalid options: {e}") from e


def _parse_template_rules(meta: FieldTypeMeta, selectors: Any) -> tuple[TemplateRule, ...]:
    if isinstance(selectors, Mapping):
        pairs = list(selectors.items())
    elif isinstance(selectors, Sequence) and not isinstance(selectors, (str, bytes)):
        pairs = []
        for rule in selectors:
            if isinstance(rule, TemplateRule):
                pairs.append((rule.selector, rule.template))
            else:
                raise InvalidFieldDefinition(
                    f"{meta.type.value} selectors need a template per selector, got {rule!r}"
                )
    else:
        raise InvalidFieldDefinition(f"Unsupported selectors declaration: {selectors!r}")

    rules = []
    for selector, template in pairs:
        if not isinstance(selector, str) or not isinstance(template, str):
            raise InvalidFieldDefinition(
                f"Selector rules must map strings to strings, got {selector!r}: {template!r}"
            )
        try:
            rules.append(TemplateRule(selector=selector, template=template))
        except ValidationError as e:
            raise InvalidFieldDefinition(f"Invalid selector rule: {e}") from e
    return tuple(rules)


def _parse_composite_rules(meta: FieldTypeMeta, selectors: Any) -> tuple[CompositeRule, ...]:
    if isinstance(selectors, Mapping) or isinstance(selectors, (str, bytes)):
        raise InvalidFieldDefinition(
            f"{meta.type.value} fields take a list of selectors, not templates"
        )
    if not isinstance(selectors, Sequence):
        raise InvalidFieldDefinition(f"Unsupported selectors declaration: {selectors!r}")

    rules: list[CompositeRule] = []
    plain: list[str] = []
    for item in selectors:
        if isinstance(item, CompositeRule):
            rules.append(item)
        elif isinstance(item, str) and item.strip():
            plain.append(item)
        else:
            raise InvalidFieldDefinition(f"Invalid selector {item!r}")
    if plain:
        rules.append(CompositeRule(selectors=tuple(plain)))
    return tuple(rules)


# =============================================================================
# Factories
# =============================================================================


def create_field(field_type: FieldType | str) -> FieldBuilder:
    """Create a builder for any field type by name."""
    return FieldBuilder(type=field_type)


def text() -> FieldBuilder:
    return FieldBuilder(FieldType.TEXT)


def textarea() -> FieldBuilder:
    return FieldBuilder(FieldType.TEXTAREA)


def url() -> FieldBuilder:
    return FieldBuilder(FieldType.URL)


def select() -> FieldBuilder:
    return FieldBuilder(FieldType.SELECT)


def toggle() -> FieldBuilder:
    return FieldBuilder(FieldType.TOGGLE)


def number() -> FieldBuilder:
    return FieldBuilder(FieldType.NUMBER)


def color() -> FieldBuilder:
    return FieldBuilder(FieldType.COLOR)


def dimension() -> FieldBuilder:
    """Dimension fields are responsive unless told otherwise."""
    return FieldBuilder(FieldType.DIMENSION, responsive=True)


def background_group() -> FieldBuilder:
    return FieldBuilder(FieldType.BACKGROUND_GROUP)


def typography_group() -> FieldBuilder:
    return FieldBuilder(FieldType.TYPOGRAPHY_GROUP)


def border_shadow_group() -> FieldBuilder:
    return FieldBuilder(FieldType.BORDER_SHADOW_GROUP)


def alignment() -> FieldBuilder:
    return FieldBuilder(FieldType.ALIGNMENT)


def icon() -> FieldBuilder:
    return FieldBuilder(FieldType.ICON)


def image() -> FieldBuilder:
    return FieldBuilder(FieldType.IMAGE)


def repeater() -> FieldBuilder:
    return FieldBuilder(FieldType.REPEATER)


def link_group() -> FieldBuilder:
    return FieldBuilder(FieldType.LINK_GROUP)


__all__ = [
    "FieldBuilder",
    "alignment",
    "background_group",
    "border_shadow_group",
    "color",
    "create_field",
    "dimension",
    "icon",
    "image",
    "link_group",
    "number",
    "repeater",
    "select",
    "text",
    "textarea",
    "toggle",
    "typography_group",
    "url",
]
