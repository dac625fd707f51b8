"""Value resolvers: stored values to interpolation tokens and declarations.

Each field type is handled by exactly one resolver class, registered with
@register_resolver and looked up with get_resolver(). Resolvers never raise
on stored data: a value with the wrong shape falls back to the field's
default, then to the type's typed default.

Two outputs exist:
    - tokens(): {"VALUE": ..., "UNIT": ...} for template selector rules
    - blocks(): whole declaration sets for composite selector rules
"""

import copy
import re
from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from stylekit.core import get_logger
from stylekit.schema import (
    DEFAULT_TYPOGRAPHY,
    AlignmentAxis,
    Breakpoint,
    FieldDefinition,
    FieldType,
    get_typed_default,
    is_responsive_value,
)

logger = get_logger("resolvers")

TOKEN_PATTERN = re.compile(r"\{\{\s*([A-Z][A-Z_]*(?:\.[A-Z_]+)?)\s*\}\}")

_SIDES = ("top", "right", "bottom", "left")


@dataclass(frozen=True)
class DeclarationBlock:
    """Declarations emitted for each selector of a composite rule.

    Attributes:
        declarations: Complete "property: value;" strings.
        suffix: Appended to every selector, e.g. ":hover".
    """

    declarations: tuple[str, ...]
    suffix: str = ""


@dataclass
class RenderedTemplate:
    """Result of token substitution.

    Attributes:
        text: Template with every token replaced.
        unknown_tokens: Tokens the resolver did not provide (replaced by "").
    """

    text: str
    unknown_tokens: list[str] = field(default_factory=list)


# =============================================================================
# Formatting helpers
# =============================================================================


def format_scalar(value: Any) -> str:
    """Format a scalar for CSS output.

    None becomes "", booleans become "true"/"false", and integral floats
    drop their decimal part (12.0 -> "12").
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _is_numeric(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, (int, float)):
        return True
    if isinstance(value, str):
        try:
            float(value)
        except ValueError:
            return False
        return True
    return False


def _is_zero(value: Any) -> bool:
    return _is_numeric(value) and float(value) == 0


def _measure(value: Any, default_unit: str = "px") -> str:
    """Format {"value": 16, "unit": "px"} or a bare number as a CSS length."""
    if isinstance(value, Mapping):
        amount = value.get("value")
        if amount is None or amount == "":
            return ""
        unit = value.get("unit")
        unit = default_unit if unit is None else unit
        return f"{format_scalar(amount)}{unit if _is_numeric(amount) else ''}"
    if _is_numeric(value) and not isinstance(value, str):
        return f"{format_scalar(value)}{default_unit}"
    return format_scalar(value)


def _measure_amount(value: Any) -> Any:
    return value.get("value") if isinstance(value, Mapping) else value


def render_template(template: str, tokens: Mapping[str, str]) -> RenderedTemplate:
    """Substitute {{TOKEN}} placeholders.

    Unknown tokens are replaced with an empty string and reported.
    """
    unknown: list[str] = []

    def _replace(match: re.Match) -> str:
        name = match.group(1)
        if name in tokens:
            return tokens[name]
        unknown.append(name)
        return ""

    return RenderedTemplate(text=TOKEN_PATTERN.sub(_replace, template), unknown_tokens=unknown)


# =============================================================================
# Resolver base class and registry
# =============================================================================


class ValueResolver(ABC):
    """Abstract base class for field value resolvers.

    Subclasses must implement:
        - field_types: Field types the resolver handles
        - accepts: Shape check for a stored (non-responsive) value
        - tokens: Token set for template rules
    Composite resolvers also implement blocks().
    """

    @property
    @abstractmethod
    def field_types(self) -> frozenset[FieldType]:
        """Field types handled by this resolver."""
        ...

    @abstractmethod
    def accepts(self, value: Any) -> bool:
        """Check whether a stored value has the shape this resolver reads."""
        ...

    @abstractmethod
    def tokens(self, definition: FieldDefinition, value: Any) -> dict[str, str] | None:
        """Build the token set for a normalized value.

        Returns:
            Token mapping, or None when the value resolves to nothing.
        """
        ...

    def blocks(self, definition: FieldDefinition, value: Any) -> list[DeclarationBlock]:
        """Build declaration blocks for composite selector rules."""
        return []

    def normalize(self, definition: FieldDefinition, value: Any) -> Any:
        """Return the value if well-formed, else the field's typed fallback.

        None passes through: it means "nothing to emit".
        """
        if value is None or self.accepts(value):
            return value
        logger.debug(
            f"Field '{definition.key}' holds malformed {definition.type.value} "
            f"value {value!r}; using default"
        )
        return self.fallback(definition)

    def fallback(self, definition: FieldDefinition) -> Any:
        default = definition.default
        if is_responsive_value(default):
            default = default[Breakpoint.DESKTOP.value]
        if default is not None and self.accepts(default):
            return copy.deepcopy(default)
        return get_typed_default(definition.type)


_registry: dict[FieldType, ValueResolver] = {}


def register_resolver(resolver_cls: type[ValueResolver]) -> type[ValueResolver]:
    """Register a resolver class for each field type it handles.

    Example:
        >>> @register_resolver
        ... class MyResolver(ValueResolver):
        ...     field_types = frozenset({FieldType.TEXT})
        ...     ...
    """
    resolver = resolver_cls()
    for field_type in resolver.field_types:
        _registry[field_type] = resolver
    return resolver_cls


def get_resolver(field_type: FieldType | str) -> ValueResolver:
    """Get the resolver for a field type.

    Raises:
        KeyError: If no resolver handles the type.
    """
    try:
        return _registry[FieldType(field_type)]
    except (KeyError, ValueError):
        available = ", ".join(sorted(t.value for t in _registry))
        raise KeyError(
            f"No resolver for field type '{field_type}'. Available: {available}"
        ) from None


def list_resolvers() -> dict[str, str]:
    """Map each registered field type to its resolver class name."""
    return {t.value: type(r).__name__ for t, r in sorted(_registry.items(), key=lambda i: i[0].value)}


def resolve_tokens(definition: FieldDefinition, value: Any) -> dict[str, str] | None:
    """Normalize a value and build its token set in one call."""
    resolver = get_resolver(definition.type)
    return resolver.tokens(definition, resolver.normalize(definition, value))


# =============================================================================
# Scalar types
# =============================================================================


@register_resolver
class ScalarResolver(ValueResolver):
    """text, textarea, url, select, toggle and number."""

    field_types = frozenset(
        {
            FieldType.TEXT,
            FieldType.TEXTAREA,
            FieldType.URL,
            FieldType.SELECT,
            FieldType.TOGGLE,
            FieldType.NUMBER,
        }
    )

    def accepts(self, value: Any) -> bool:
        return isinstance(value, (str, int, float, bool))

    def tokens(self, definition, value):
        return {"VALUE": format_scalar(value), "UNIT": definition.unit or ""}


@register_resolver
class ColorResolver(ValueResolver):
    field_types = frozenset({FieldType.COLOR})

    def accepts(self, value: Any) -> bool:
        return isinstance(value, str)

    def tokens(self, definition, value):
        return {"VALUE": format_scalar(value).strip()}


@register_resolver
class DimensionResolver(ValueResolver):
    """Four sides plus a unit.

    Missing sides resolve to 0. The unit comes from the stored value, then
    the field declaration, then "px". VALUE is the four-side shorthand.
    """

    field_types = frozenset({FieldType.DIMENSION})

    def accepts(self, value: Any) -> bool:
        return isinstance(value, Mapping) and not is_responsive_value(value)

    def tokens(self, definition, value):
        unit = value.get("unit") or definition.unit or "px"
        sides = {}
        for side in _SIDES:
            raw = value.get(side)
            sides[side] = "0" if raw is None or raw == "" else format_scalar(raw)

        shorthand = " ".join(
            f"{sides[side]}{unit}" if _is_numeric(sides[side]) else sides[side]
            for side in _SIDES
        )
        return {
            "VALUE": shorthand,
            "VALUE.TOP": sides["top"],
            "VALUE.RIGHT": sides["right"],
            "VALUE.BOTTOM": sides["bottom"],
            "VALUE.LEFT": sides["left"],
            "UNIT": unit,
        }


@register_resolver
class AlignmentResolver(ValueResolver):
    """Alignment keyword mapped onto the field's CSS axis.

    "none" resolves to nothing; "" is an empty VALUE like any other.
    """

    field_types = frozenset({FieldType.ALIGNMENT})

    _FLEX_VALUES = {
        "left": "flex-start",
        "start": "flex-start",
        "right": "flex-end",
        "end": "flex-end",
        "justify": "space-between",
    }
    _TEXT_VALUES = {
        "flex-start": "left",
        "start": "left",
        "flex-end": "right",
        "end": "right",
    }

    def accepts(self, value: Any) -> bool:
        return isinstance(value, str)

    def tokens(self, definition, value):
        keyword = value.strip()
        if keyword == "none":
            return None

        axis = AlignmentAxis(definition.axis or AlignmentAxis.TEXT_ALIGN)
        if axis == AlignmentAxis.TEXT_ALIGN:
            mapped = self._TEXT_VALUES.get(keyword, keyword)
        else:
            mapped = self._FLEX_VALUES.get(keyword, keyword)
        return {"VALUE": mapped, "PROPERTY": axis.value}


# =============================================================================
# Composite groups
# =============================================================================


@register_resolver
class TypographyResolver(ValueResolver):
    """Typography group: FONT_* tokens and a declaration set.

    For tokens, keys absent from the stored value fall back to the field
    default and then to the stock typography. The declaration set merges
    only the field default, so stock values never add declarations.
    """

    field_types = frozenset({FieldType.TYPOGRAPHY_GROUP})

    def accepts(self, value: Any) -> bool:
        return isinstance(value, Mapping) and not is_responsive_value(value)

    def _merged(self, definition: FieldDefinition, value: Mapping[str, Any]) -> dict[str, Any]:
        merged = dict(DEFAULT_TYPOGRAPHY)
        default = self.fallback(definition)
        if isinstance(default, Mapping):
            merged.update(default)
        merged.update(value)
        return merged

    def tokens(self, definition, value):
        typo = self._merged(definition, value)
        return {
            "FONT_FAMILY": format_scalar(typo.get("font_family")),
            "FONT_SIZE": _measure(typo.get("font_size")),
            "FONT_WEIGHT": format_scalar(typo.get("font_weight")),
            "LINE_HEIGHT": _measure(typo.get("line_height"), default_unit=""),
            "LETTER_SPACING": _measure(typo.get("letter_spacing")),
            "WORD_SPACING": _measure(typo.get("word_spacing")),
            "TEXT_TRANSFORM": format_scalar(typo.get("text_transform")),
            "FONT_STYLE": format_scalar(typo.get("font_style")),
        }

    def blocks(self, definition, value):
        merged = {}
        default = definition.default
        if is_responsive_value(default):
            default = default[Breakpoint.DESKTOP.value]
        if isinstance(default, Mapping):
            merged.update(default)
        merged.update(value)
        typo = {key: val for key, val in merged.items() if val is not None}
        declarations: list[str] = []

        family = typo.get("font_family")
        if family and family != "inherit":
            declarations.append(f"font-family: {family};")

        size = _measure(typo.get("font_size"))
        if size:
            declarations.append(f"font-size: {size};")

        weight = typo.get("font_weight")
        if weight not in (None, ""):
            declarations.append(f"font-weight: {format_scalar(weight)};")

        for key, prop, neutral in (
            ("font_style", "font-style", "normal"),
            ("text_transform", "text-transform", "none"),
            ("text_decoration", "text-decoration", "none"),
        ):
            setting = typo.get(key)
            if setting and setting != neutral:
                declarations.append(f"{prop}: {setting};")

        line_height = _measure(typo.get("line_height"), default_unit="")
        if line_height:
            declarations.append(f"line-height: {line_height};")

        for key, prop in (("letter_spacing", "letter-spacing"), ("word_spacing", "word-spacing")):
            setting = typo.get(key)
            amount = _measure_amount(setting)
            if amount not in (None, "") and not _is_zero(amount):
                declarations.append(f"{prop}: {_measure(setting)};")

        return [DeclarationBlock(tuple(declarations))] if declarations else []


@register_resolver
class BackgroundResolver(ValueResolver):
    """Background group branching on type: none, color, gradient or image.

    A non-empty hover colour adds a ":hover" block.
    """

    field_types = frozenset({FieldType.BACKGROUND_GROUP})

    def accepts(self, value: Any) -> bool:
        return isinstance(value, Mapping) and not is_responsive_value(value)

    def tokens(self, definition, value):
        return {}

    def blocks(self, definition, value):
        blocks: list[DeclarationBlock] = []
        kind = value.get("type") or "none"

        if kind == "color":
            declarations = self._color(value)
        elif kind == "gradient":
            declarations = self._gradient(value.get("gradient"))
        elif kind == "image":
            declarations = self._image(value.get("image"))
        else:
            declarations = []
        if declarations:
            blocks.append(DeclarationBlock(tuple(declarations)))

        hover = value.get("hover")
        if isinstance(hover, Mapping) and hover.get("color"):
            blocks.append(
                DeclarationBlock((f"background-color: {hover['color']};",), suffix=":hover")
            )
        return blocks

    @staticmethod
    def _color(value: Mapping[str, Any]) -> list[str]:
        color = value.get("color")
        return [f"background-color: {color};"] if color else []

    @staticmethod
    def _gradient(gradient: Any) -> list[str]:
        if not isinstance(gradient, Mapping):
            return []
        stops = [
            f"{stop.get('color')} {format_scalar(stop.get('position', 0))}%"
            for stop in gradient.get("colorStops") or []
            if isinstance(stop, Mapping) and stop.get("color")
        ]
        if not stops:
            return []
        kind = gradient.get("type", "linear")
        if kind == "radial":
            return [f"background: radial-gradient(circle, {', '.join(stops)});"]
        if kind == "linear":
            angle = format_scalar(gradient.get("angle", 135))
            return [f"background: linear-gradient({angle}deg, {', '.join(stops)});"]
        return []

    @staticmethod
    def _image(image: Any) -> list[str]:
        if not isinstance(image, Mapping) or not image.get("url"):
            return []
        return [
            f"background-image: url('{image['url']}');",
            f"background-size: {image.get('size') or 'cover'};",
            f"background-position: {image.get('position') or 'center center'};",
            f"background-repeat: {image.get('repeat') or 'no-repeat'};",
        ]


@register_resolver
class BorderShadowResolver(ValueResolver):
    """Border width/style/colour, radius and a single box shadow."""

    field_types = frozenset({FieldType.BORDER_SHADOW_GROUP})

    def accepts(self, value: Any) -> bool:
        return isinstance(value, Mapping) and not is_responsive_value(value)

    def tokens(self, definition, value):
        return {}

    def blocks(self, definition, value):
        declarations = self._border(value.get("border")) + self._shadow(value.get("shadow"))
        return [DeclarationBlock(tuple(declarations))] if declarations else []

    @staticmethod
    def _sides(value: Mapping[str, Any], aliases: tuple[str, ...] = ()) -> list[Any]:
        sides = []
        for index, side in enumerate(_SIDES):
            raw = value.get(side)
            if raw is None and aliases:
                raw = value.get(aliases[index])
            sides.append(0 if raw in (None, "") else raw)
        return sides

    def _border(self, border: Any) -> list[str]:
        if not isinstance(border, Mapping):
            return []
        declarations: list[str] = []

        width = border.get("width")
        if isinstance(width, Mapping):
            sides = self._sides(width)
            if not all(_is_zero(side) for side in sides):
                unit = width.get("unit") or "px"
                declarations.append(
                    "border-width: " + " ".join(f"{format_scalar(s)}{unit}" for s in sides) + ";"
                )
                declarations.append(f"border-style: {border.get('style') or 'solid'};")
                if border.get("color"):
                    declarations.append(f"border-color: {border['color']};")

        radius = border.get("radius")
        if isinstance(radius, Mapping):
            corners = self._sides(
                radius, aliases=("top-left", "top-right", "bottom-right", "bottom-left")
            )
            if not all(_is_zero(corner) for corner in corners):
                unit = radius.get("unit") or "px"
                declarations.append(
                    "border-radius: "
                    + " ".join(f"{format_scalar(c)}{unit}" for c in corners)
                    + ";"
                )
        return declarations

    @staticmethod
    def _shadow(shadow: Any) -> list[str]:
        if not isinstance(shadow, Mapping) or (shadow.get("type") or "none") == "none":
            return []
        parts = [
            f"{format_scalar(shadow.get('x_offset', 0))}px",
            f"{format_scalar(shadow.get('y_offset', 2))}px",
            f"{format_scalar(shadow.get('blur_radius', 4))}px",
            f"{format_scalar(shadow.get('spread_radius', 0))}px",
            str(shadow.get("color") or "rgba(0,0,0,0.1)"),
        ]
        inset = "inset " if shadow.get("inset") or shadow.get("type") == "inner" else ""
        return [f"box-shadow: {inset}{' '.join(parts)};"]


# =============================================================================
# Markup-only types
# =============================================================================


@register_resolver
class StructuredResolver(ValueResolver):
    """icon, image, repeater and link_group: consumed by render() only."""

    field_types = frozenset(
        {FieldType.ICON, FieldType.IMAGE, FieldType.REPEATER, FieldType.LINK_GROUP}
    )

    def accepts(self, value: Any) -> bool:
        return True

    def tokens(self, definition, value):
        return {}


__all__ = [
    "TOKEN_PATTERN",
    "AlignmentResolver",
    "BackgroundResolver",
    "BorderShadowResolver",
    "ColorResolver",
    "DeclarationBlock",
    "DimensionResolver",
    "RenderedTemplate",
    "ScalarResolver",
    "StructuredResolver",
    "TypographyResolver",
    "ValueResolver",
    "format_scalar",
    "get_resolver",
    "list_resolvers",
    "register_resolver",
    "render_template",
    "resolve_tokens",
]
