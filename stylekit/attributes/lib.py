"""Wrapper class and inline style attributes from general settings.

Fields opt in by declaring a ``class_template`` or ``style_template``.
Unlike the CSS compiler there is no {{WRAPPER}} scoping and no media
queries: responsive values contribute their desktop entry only.
"""

import html
from collections.abc import Iterable, Iterator, Mapping
from typing import Any

from stylekit.conditions import is_visible
from stylekit.core import get_logger
from stylekit.resolvers import get_resolver, render_template
from stylekit.schema import (
    Breakpoint,
    ControlSchema,
    FieldEntry,
    FieldType,
    is_responsive_value,
    lookup_path,
)

logger = get_logger("attributes")


def _template_values(
    schema: ControlSchema,
    settings: Mapping[str, Any] | None,
    attribute: str,
) -> Iterator[tuple[FieldEntry, str, Any, dict[str, str]]]:
    """Yield (entry, template, value, tokens) for visible opted-in fields."""
    effective = schema.apply_defaults(settings)
    for entry in schema.iter_fields():
        definition = entry.field
        template = getattr(definition, attribute)
        if not template:
            continue
        if not is_visible(definition, effective, entry.scope):
            continue

        value = lookup_path(effective, entry.path)
        if is_responsive_value(value):
            value = value[Breakpoint.DESKTOP.value]
        resolver = get_resolver(definition.type)
        value = resolver.normalize(definition, value)
        if value is None:
            continue
        tokens = resolver.tokens(definition, value)
        if tokens is None:
            continue
        yield entry, template, value, tokens


def _render(entry: FieldEntry, template: str, tokens: Mapping[str, str]) -> str:
    rendered = render_template(template, tokens)
    for name in rendered.unknown_tokens:
        logger.warning(f"Unknown token '{name}' in attribute template of '{entry.key_path}'")
    return rendered.text.strip()


def build_css_classes(
    schema: ControlSchema,
    settings: Mapping[str, Any] | None,
    base_classes: Iterable[str] = (),
) -> str:
    """Build the wrapper's class list.

    A toggle contributes its class only when true; other fields only when
    their VALUE is non-empty. Classes are de-duplicated, first occurrence
    wins.

    Returns:
        Space-separated class names.
    """
    classes: list[str] = []
    seen: set[str] = set()

    def _add(names: Iterable[str]) -> None:
        for name in names:
            if name and name not in seen:
                seen.add(name)
                classes.append(name)

    for base in base_classes:
        _add(str(base).split())

    for entry, template, value, tokens in _template_values(schema, settings, "class_template"):
        if entry.field.type == FieldType.TOGGLE:
            if value is not True:
                continue
        elif not tokens.get("VALUE"):
            continue
        _add(_render(entry, template, tokens).split())

    return " ".join(classes)


def generate_style_attribute(schema: ControlSchema, settings: Mapping[str, Any] | None) -> str:
    """Build the wrapper's inline style declarations.

    Toggles contribute only when true and empty values are skipped.

    Returns:
        Declarations joined with "; ", without a trailing semicolon.
    """
    declarations: list[str] = []
    for entry, template, value, tokens in _template_values(schema, settings, "style_template"):
        if entry.field.type == FieldType.TOGGLE:
            if value is not True:
                continue
        elif "VALUE" in tokens and tokens["VALUE"] == "":
            continue
        text = _render(entry, template, tokens).rstrip(";").strip()
        if text:
            declarations.append(text)
    return "; ".join(declarations)


def format_html_attribute(name: str, value: str) -> str:
    """Render name="value" with HTML escaping; empty values render nothing."""
    if not value:
        return ""
    return f'{name}="{html.escape(value, quote=True)}"'


__all__ = [
    "build_css_classes",
    "format_html_attribute",
    "generate_style_attribute",
]
