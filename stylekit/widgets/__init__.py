"""Widget abstraction, registry and built-in widgets."""

from stylekit.widgets.lib import (
    TemplateRenderer,
    Widget,
    WidgetCategory,
    WidgetInstance,
    WidgetRegistry,
    create_default_registry,
    generate_page_css,
    wrapper_attributes,
)
from stylekit.widgets.button import ButtonWidget
from stylekit.widgets.heading import HeadingWidget
from stylekit.widgets.spacer import SpacerWidget

__all__ = [
    # Base class
    "Widget",
    "WidgetCategory",
    "TemplateRenderer",
    "wrapper_attributes",
    # Registry
    "WidgetRegistry",
    "create_default_registry",
    # Page CSS
    "WidgetInstance",
    "generate_page_css",
    # Built-in widgets
    "ButtonWidget",
    "HeadingWidget",
    "SpacerWidget",
]
