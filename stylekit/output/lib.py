"""Output formatting for schema inspection and widget previews.

Generates human-readable text representations of control schemas and
bundles the compiled artefacts of a widget instance for review.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from stylekit.css import CompilerOptions, CompileWarning
from stylekit.schema import ControlSchema, FieldDefinition, Group, Tab
from stylekit.widgets import WidgetRegistry


@dataclass
class WidgetOutput:
    """Complete output for one widget instance.

    Attributes:
        widget_type: Widget identifier.
        widget_id: DOM id the CSS is scoped to.
        text_tree: Human-readable tree of the style schema.
        css: Compiled CSS.
        css_classes: Wrapper class list.
        style_attribute: Wrapper inline style.
        html: Rendered markup.
        warnings: Compiler warnings.
    """

    widget_type: str
    widget_id: str
    text_tree: str
    css: str
    css_classes: str
    style_attribute: str
    html: str
    warnings: list[CompileWarning] = field(default_factory=list)


def format_schema_tree(schema: ControlSchema, title: str | None = None) -> str:
    """Format a ControlSchema as a human-readable tree.

    Example output:
        style
        ├── Spacing (spacing)
        │   └── Padding (padding) [dimension, responsive, css]
        └── Normal State (normal) [tab]
            └── Text Color (text_styling)
                └── Text Color (text_color) [color, css]

    Args:
        schema: Schema to format.
        title: Root line; defaults to the schema category.

    Returns:
        Formatted tree string.
    """
    lines = [title or schema.category.value]
    items = list(schema.items)
    for i, item in enumerate(items):
        _format_item(item, lines, "", is_last=i == len(items) - 1)
    return "\n".join(lines)


def _format_item(
    item: Tab | Group | FieldDefinition,
    lines: list[str],
    prefix: str,
    is_last: bool,
) -> None:
    """Recursively format a tab, group or field."""
    connector = "└── " if is_last else "├── "
    child_prefix = prefix + ("    " if is_last else "│   ")

    if isinstance(item, Tab):
        lines.append(f"{prefix}{connector}{item.label or item.key} ({item.key}) [tab]")
        children = list(item.groups)
    elif isinstance(item, Group):
        lines.append(f"{prefix}{connector}{item.label or item.key} ({item.key})")
        children = list(item.fields)
    else:
        lines.append(f"{prefix}{connector}{item.label} ({item.key}) [{', '.join(_markers(item))}]")
        children = []

    for i, child in enumerate(children):
        _format_item(child, lines, child_prefix, is_last=i == len(children) - 1)


def _markers(definition: FieldDefinition) -> list[str]:
    markers = [definition.type.value]
    if definition.responsive:
        markers.append("responsive")
    if definition.condition:
        markers.append("conditional")
    if definition.selectors:
        markers.append("css")
    if definition.class_template:
        markers.append("class")
    if definition.style_template:
        markers.append("style")
    return markers


class OutputGenerator:
    """Generates complete output for widget instances.

    Produces the schema tree, CSS, wrapper attributes and markup for a
    widget from a registry.
    """

    def __init__(self, registry: WidgetRegistry, options: CompilerOptions | None = None):
        """Initialize generator.

        Args:
            registry: Registry the widgets are looked up in.
            options: Compiler options; defaults to CompilerOptions().
        """
        self._registry = registry
        self._options = options or CompilerOptions()

    def generate(
        self,
        widget_type: str,
        widget_id: str,
        settings: Mapping[str, Any] | None = None,
        section_id: str | None = None,
    ) -> WidgetOutput:
        """Generate output for one widget instance.

        Raises:
            KeyError: If the widget type is not registered.
        """
        widget = self._registry.get(widget_type)
        result = widget.compile_css(widget_id, settings, section_id, self._options)
        return WidgetOutput(
            widget_type=widget_type,
            widget_id=widget_id,
            text_tree=format_schema_tree(widget.get_style_fields(), title=f"{widget.name} (style)"),
            css=result.css,
            css_classes=widget.build_css_classes(settings),
            style_attribute=widget.generate_style_attribute(settings),
            html=widget.render(settings, widget_id=widget_id),
            warnings=result.warnings,
        )


__all__ = [
    "OutputGenerator",
    "WidgetOutput",
    "format_schema_tree",
]
