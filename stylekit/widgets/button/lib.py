"""Button widget: a styled link with normal and hover state tabs."""

import html
from collections.abc import Mapping
from typing import Any

from stylekit import fields
from stylekit.controls import ControlSchemaBuilder
from stylekit.schema import ControlSchema, SettingsCategory
from stylekit.widgets.lib import Widget, WidgetCategory, wrapper_attributes

BUTTON_TYPES = {
    "primary": "Primary Button",
    "secondary": "Secondary Button",
    "success": "Success Button",
    "danger": "Danger Button",
}


class ButtonWidget(Widget):
    """Call-to-action button.

    The style schema groups colours in "normal" and "hover" tabs, so
    stored style settings look like ``{"normal": {"text_styling": {...}}}``.
    """

    template = "widgets/button"

    @property
    def widget_type(self) -> str:
        return "button"

    @property
    def name(self) -> str:
        return "Button"

    @property
    def description(self) -> str:
        return "Call-to-action button with type, size and state colours"

    @property
    def category(self) -> WidgetCategory:
        return WidgetCategory.CORE

    @property
    def tags(self) -> tuple[str, ...]:
        return ("button", "link", "cta", "action")

    def build_general_fields(self) -> ControlSchema:
        return (
            ControlSchemaBuilder(SettingsCategory.GENERAL)
            .add_group("content", "Content")
            .register_field(
                "text",
                fields.text().set_label("Button Text").set_default("Click me").set_required(),
            )
            .register_field("url", fields.url().set_label("Link").set_default("#"))
            .register_field(
                "open_in_new_tab",
                fields.toggle().set_label("Open in new tab").set_default(False),
            )
            .end_group()
            .add_group("type", "Button Type")
            .register_field(
                "button_type",
                fields.select()
                .set_label("Type")
                .set_options(BUTTON_TYPES)
                .set_default("primary")
                .set_class_template("button-{{VALUE}}"),
            )
            .register_field(
                "size",
                fields.select()
                .set_label("Size")
                .set_options({"small": "Small", "normal": "Normal", "large": "Large"})
                .set_default("normal")
                .set_class_template("button-size-{{VALUE}}"),
            )
            .end_group()
            .add_group("layout", "Layout")
            .register_field(
                "alignment",
                fields.alignment()
                .set_label("Alignment")
                .set_options(["left", "center", "right"])
                .set_default("left")
                .set_class_template("text-{{VALUE}}"),
            )
            .register_field(
                "width",
                fields.select()
                .set_label("Width")
                .set_options({"auto": "Auto", "full": "Full Width"})
                .set_default("auto"),
            )
            .register_field(
                "full_width",
                fields.toggle()
                .set_label("Stretch")
                .set_default(True)
                .set_condition({"width": "full"})
                .set_class_template("w-full"),
            )
            .end_group()
            .get_fields()
        )

    def build_style_fields(self) -> ControlSchema:
        return (
            ControlSchemaBuilder(SettingsCategory.STYLE)
            .add_group("spacing", "Spacing")
            .register_field(
                "padding",
                fields.dimension()
                .set_label("Padding")
                .set_units(["px", "em", "%"])
                .set_default({"top": 12, "right": 24, "bottom": 12, "left": 24})
                .set_selectors(
                    {
                        "{{WRAPPER}} .simple-button": (
                            "padding: {{VALUE.TOP}}{{UNIT}} {{VALUE.RIGHT}}{{UNIT}} "
                            "{{VALUE.BOTTOM}}{{UNIT}} {{VALUE.LEFT}}{{UNIT}};"
                        )
                    }
                ),
            )
            .end_group()
            .add_tab("normal", "Normal State")
            .add_group("text_styling", "Text Color")
            .register_field(
                "text_color",
                fields.color()
                .set_label("Text Color")
                .set_default("#FFFFFF")
                .set_selectors({"{{WRAPPER}} .simple-button": "color: {{VALUE}};"}),
            )
            .register_field(
                "background",
                fields.background_group()
                .set_label("Background")
                .set_default({"type": "color", "color": "#3B82F6"})
                .set_selectors(["{{WRAPPER}} .simple-button"]),
            )
            .register_field(
                "border",
                fields.border_shadow_group()
                .set_label("Border & Shadow")
                .set_selectors(["{{WRAPPER}} .simple-button"]),
            )
            .end_group()
            .end_tab()
            .add_tab("hover", "Hover State")
            .add_group("hover_colors", "Hover Colors")
            .register_field(
                "hover_text_color",
                fields.color()
                .set_label("Text Color")
                .set_default(None)
                .set_selectors({"{{WRAPPER}} .simple-button:hover": "color: {{VALUE}};"}),
            )
            .register_field(
                "hover_background",
                fields.background_group()
                .set_label("Background")
                .set_selectors(["{{WRAPPER}} .simple-button:hover"]),
            )
            .end_group()
            .end_tab()
            .get_fields()
        )

    def render_html(self, context: Mapping[str, Any]) -> str:
        content = context["general"]["content"]
        text = html.escape(str(content.get("text") or "Click me"))
        url = html.escape(str(content.get("url") or "#"), quote=True)
        target = ' target="_blank" rel="noopener"' if content.get("open_in_new_tab") is True else ""
        return (
            f"<div {wrapper_attributes(context)}>"
            f'<a class="simple-button" href="{url}"{target}>{text}</a>'
            f"</div>"
        )


__all__ = ["BUTTON_TYPES", "ButtonWidget"]
