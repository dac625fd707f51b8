"""Wrapper attribute builders (class list and inline style)."""

from stylekit.attributes.lib import (
    build_css_classes,
    format_html_attribute,
    generate_style_attribute,
)

__all__ = [
    "build_css_classes",
    "format_html_attribute",
    "generate_style_attribute",
]
