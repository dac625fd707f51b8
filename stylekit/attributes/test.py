"""Tests for wrapper attribute builders."""

import pytest

from stylekit import fields
from stylekit.controls import ControlSchemaBuilder

from .lib import build_css_classes, format_html_attribute, generate_style_attribute


def _general_schema():
    return (
        ControlSchemaBuilder()
        .add_group("layout", "Layout")
        .register_field(
            "full_width",
            fields.toggle().set_label("Full width").set_default(False).set_class_template("is-full-width"),
        )
        .register_field(
            "size",
            fields.select()
            .set_label("Size")
            .set_options({"": "Default", "sm": "Small", "lg": "Large"})
            .set_default("")
            .set_class_template("size-{{VALUE}}"),
        )
        .register_field(
            "variant",
            fields.text().set_label("Variant").set_default("primary").set_class_template("btn-{{VALUE}}"),
        )
        .register_field(
            "z_index",
            fields.number().set_label("Z").set_default("").set_style_template("z-index: {{VALUE}};"),
        )
        .register_field(
            "opacity",
            fields.number()
            .set_label("Opacity")
            .set_default(1)
            .set_responsive()
            .set_style_template("opacity: {{VALUE}};"),
        )
        .end_group()
        .get_fields()
    )


class TestBuildCssClasses:
    """Tests for build_css_classes."""

    @pytest.mark.unit
    def test_defaults(self):
        """Only fields with a non-empty value contribute."""
        assert build_css_classes(_general_schema(), {}) == "btn-primary"

    @pytest.mark.unit
    def test_toggle_and_select(self):
        settings = {"layout": {"full_width": True, "size": "lg"}}
        assert build_css_classes(_general_schema(), settings) == "is-full-width size-lg btn-primary"

    @pytest.mark.unit
    def test_base_classes_first_and_deduplicated(self):
        """Base classes lead and repeated classes are dropped."""
        classes = build_css_classes(
            _general_schema(),
            {"layout": {"variant": "primary"}},
            base_classes=("stylekit-widget", "btn-primary"),
        )
        assert classes == "stylekit-widget btn-primary"

    @pytest.mark.unit
    def test_condition_honoured(self):
        schema = (
            ControlSchemaBuilder()
            .add_group("layout")
            .register_field("sticky", fields.toggle().set_label("Sticky").set_default(False))
            .register_field(
                "offset",
                fields.text()
                .set_label("Offset")
                .set_default("top")
                .set_condition({"sticky": True})
                .set_class_template("sticky-{{VALUE}}"),
            )
            .end_group()
            .get_fields()
        )
        assert build_css_classes(schema, {}) == ""
        assert build_css_classes(schema, {"layout": {"sticky": True}}) == "sticky-top"


class TestGenerateStyleAttribute:
    """Tests for generate_style_attribute."""

    @pytest.mark.unit
    def test_defaults(self):
        """Empty values are skipped and trailing semicolons stripped."""
        assert generate_style_attribute(_general_schema(), {}) == "opacity: 1"

    @pytest.mark.unit
    def test_joined(self):
        settings = {"layout": {"z_index": 5, "opacity": 0.5}}
        assert generate_style_attribute(_general_schema(), settings) == "z-index: 5; opacity: 0.5"

    @pytest.mark.unit
    def test_responsive_uses_desktop(self):
        """Inline styles cannot vary per breakpoint."""
        settings = {"layout": {"opacity": {"desktop": 0.8, "mobile": 0.2}}}
        assert generate_style_attribute(_general_schema(), settings) == "opacity: 0.8"


class TestFormatHtmlAttribute:
    """Tests for format_html_attribute."""

    @pytest.mark.unit
    def test_escapes(self):
        assert format_html_attribute("style", 'font-family: "A"') == 'style="font-family: &quot;A&quot;"'

    @pytest.mark.unit
    def test_empty(self):
        assert format_html_attribute("class", "") == ""
