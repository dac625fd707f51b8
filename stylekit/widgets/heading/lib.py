"""Heading widget: an h1-h6 element with typography and colour controls."""

import html
from collections.abc import Mapping
from typing import Any

from stylekit import fields
from stylekit.controls import ControlSchemaBuilder
from stylekit.schema import ControlSchema, SettingsCategory
from stylekit.widgets.lib import Widget, WidgetCategory, wrapper_attributes

HEADING_LEVELS = ("h1", "h2", "h3", "h4", "h5", "h6")
LINK_TARGETS = ("_self", "_blank", "_parent", "_top")


class HeadingWidget(Widget):
    """Heading element (H1-H6).

    General settings:
        content.heading_text, content.heading_level, content.text_align,
        link.link
    Style settings:
        typography.heading_typography, colors.text_color,
        colors.hover_color, spacing.margin
    """

    template = "widgets/heading"

    @property
    def widget_type(self) -> str:
        return "heading"

    @property
    def name(self) -> str:
        return "Heading"

    @property
    def description(self) -> str:
        return "Heading elements (H1-H6) with typography and colour controls"

    @property
    def category(self) -> WidgetCategory:
        return WidgetCategory.CORE

    @property
    def tags(self) -> tuple[str, ...]:
        return ("heading", "title", "text", "typography", *HEADING_LEVELS)

    def build_general_fields(self) -> ControlSchema:
        return (
            ControlSchemaBuilder(SettingsCategory.GENERAL)
            .add_group("content", "Content Settings")
            .register_field(
                "heading_text",
                fields.text()
                .set_label("Heading Text")
                .set_default("Your Heading Text")
                .set_required()
                .set_placeholder("Enter your heading text"),
            )
            .register_field(
                "heading_level",
                fields.select()
                .set_label("Heading Level")
                .set_options(
                    {
                        "h1": "H1 - Main Title",
                        "h2": "H2 - Section Title",
                        "h3": "H3 - Subsection Title",
                        "h4": "H4 - Minor Heading",
                        "h5": "H5 - Small Heading",
                        "h6": "H6 - Smallest Heading",
                    }
                )
                .set_default("h2")
                .set_class_template("heading-{{VALUE}}"),
            )
            .register_field(
                "text_align",
                fields.alignment()
                .set_label("Text Alignment")
                .as_text_align()
                .set_class_template("align-{{VALUE}}"),
            )
            .end_group()
            .add_group("link", "Link Settings")
            .register_field("link", fields.link_group().set_label("Heading Link"))
            .end_group()
            .get_fields()
        )

    def build_style_fields(self) -> ControlSchema:
        return (
            ControlSchemaBuilder(SettingsCategory.STYLE)
            .add_group("typography", "Typography")
            .register_field(
                "heading_typography",
                fields.typography_group()
                .set_label("Typography")
                .set_responsive()
                .set_selectors(["{{WRAPPER}} .heading-element"]),
            )
            .end_group()
            .add_group("colors", "Colors")
            .register_field(
                "text_color",
                fields.color()
                .set_label("Text Color")
                .set_default(None)
                .set_selectors({"{{WRAPPER}} .heading-element": "color: {{VALUE}};"}),
            )
            .register_field(
                "hover_color",
                fields.color()
                .set_label("Hover Color")
                .set_default(None)
                .set_selectors({"{{WRAPPER}} .heading-element:hover": "color: {{VALUE}};"}),
            )
            .end_group()
            .add_group("spacing", "Spacing")
            .register_field(
                "margin",
                fields.dimension()
                .set_label("Margin")
                .as_margin()
                .set_selectors({"{{WRAPPER}} .heading-element": "margin: {{VALUE}};"}),
            )
            .end_group()
            .get_fields()
        )

    def render_html(self, context: Mapping[str, Any]) -> str:
        content = context["general"]["content"]
        level = content.get("heading_level")
        if level not in HEADING_LEVELS:
            level = "h2"
        text = html.escape(str(content.get("heading_text") or ""))
        inner = f'<{level} class="heading-element">{text}</{level}>'

        link = context["general"]["link"].get("link") or {}
        if isinstance(link, Mapping) and link.get("url"):
            target = link.get("target") if link.get("target") in LINK_TARGETS else "_self"
            rel = ' rel="nofollow"' if link.get("nofollow") else ""
            inner = (
                f'<a href="{html.escape(str(link["url"]), quote=True)}" '
                f'target="{target}"{rel}>{inner}</a>'
            )

        return f"<div {wrapper_attributes(context)}>{inner}</div>"


__all__ = ["HEADING_LEVELS", "HeadingWidget"]
