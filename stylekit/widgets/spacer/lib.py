"""Spacer widget: responsive empty space between blocks."""

from collections.abc import Mapping
from typing import Any

from stylekit import fields
from stylekit.controls import ControlSchemaBuilder
from stylekit.schema import ControlSchema, SettingsCategory
from stylekit.widgets.lib import Widget, WidgetCategory, wrapper_attributes


def _px(label: str, default: Any, maximum: int):
    return (
        fields.number()
        .set_label(label)
        .set_unit("px")
        .set_range(0, maximum)
        .set_default(default)
        .set_responsive()
    )


class SpacerWidget(Widget):
    @property
    def widget_type(self) -> str:
        return "spacer"

    @property
    def name(self) -> str:
        return "Spacer"

    @property
    def description(self) -> str:
        return "Vertical or horizontal spacing with per-device sizes and visibility"

    @property
    def category(self) -> WidgetCategory:
        return WidgetCategory.LAYOUT

    @property
    def tags(self) -> tuple[str, ...]:
        return ("spacer", "spacing", "gap", "layout")

    def build_general_fields(self) -> ControlSchema:
        return (
            ControlSchemaBuilder(SettingsCategory.GENERAL)
            .add_group("responsive", "Responsive Behavior")
            .register_field(
                "hide_on_desktop",
                fields.toggle().set_label("Hide on Desktop").set_default(False).set_class_template("hide-desktop"),
            )
            .register_field(
                "hide_on_tablet",
                fields.toggle().set_label("Hide on Tablet").set_default(False).set_class_template("hide-tablet"),
            )
            .register_field(
                "hide_on_mobile",
                fields.toggle().set_label("Hide on Mobile").set_default(False).set_class_template("hide-mobile"),
            )
            .end_group()
            .add_group("advanced_options", "Advanced Options")
            .register_field(
                "spacer_type",
                fields.select()
                .set_label("Spacer Type")
                .set_options({"vertical": "Vertical Spacing", "horizontal": "Horizontal Spacing", "both": "Both Directions"})
                .set_default("vertical")
                .set_class_template("spacer-{{VALUE}}"),
            )
            .register_field(
                "inline_spacer",
                fields.toggle()
                .set_label("Inline Spacer")
                .set_default(False)
                .depends_on("spacer_type", ["horizontal", "both"], op="in")
                .set_style_template("display: inline-block;"),
            )
            .end_group()
            .get_fields()
        )

    def build_style_fields(self) -> ControlSchema:
        return (
            ControlSchemaBuilder(SettingsCategory.STYLE)
            .add_group("spacing", "Spacing")
            .register_field(
                "height",
                _px("Height", 50, 500).set_selectors(
                    {"{{WRAPPER}} .spacer-element": "height: {{VALUE}}{{UNIT}};"}
                ),
            )
            .register_field(
                "max_height",
                _px("Maximum Height", None, 1000).set_selectors(
                    {"{{WRAPPER}} .spacer-element": "max-height: {{VALUE}}{{UNIT}};"}
                ),
            )
            .register_field(
                "horizontal_width",
                _px("Horizontal Width", None, 500).set_selectors(
                    {"{{WRAPPER}} .spacer-element": "width: {{VALUE}}{{UNIT}};"}
                ),
            )
            .end_group()
            .add_group("appearance", "Appearance")
            .register_field(
                "show_background",
                fields.toggle().set_label("Show Background").set_default(False),
            )
            .register_field(
                "background_color",
                fields.color()
                .set_label("Background Color")
                .set_default("#F3F4F6")
                .set_condition({"show_background": True})
                .set_selectors({"{{WRAPPER}} .spacer-element": "background-color: {{VALUE}};"}),
            )
            .end_group()
            .get_fields()
        )

    def render_html(self, context: Mapping[str, Any]) -> str:
        return f'<div {wrapper_attributes(context)}><div class="spacer-element"></div></div>'


__all__ = ["SpacerWidget"]
