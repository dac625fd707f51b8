"""Tests for the CSS compiler."""

import pytest

from stylekit import fields
from stylekit.controls import ControlSchemaBuilder
from stylekit.schema import FieldType, SettingsCategory

from . import lib
from .lib import (
    CompilerOptions,
    build_wrapper,
    compile_css,
    generate_css,
)


def _schema(*registrations, group: str = "style"):
    builder = ControlSchemaBuilder(SettingsCategory.STYLE).add_group(group, "Style")
    for key, field_builder in registrations:
        builder = builder.register_field(key, field_builder)
    return builder.end_group().get_fields()


def _title_color(default: str = "#000000"):
    return (
        fields.color()
        .set_label("Title color")
        .set_default(default)
        .set_selectors({"{{WRAPPER}} .title": "color: {{VALUE}};"})
    )


def _padding():
    return (
        fields.dimension()
        .set_label("Padding")
        .as_padding()
        .set_selectors({"{{WRAPPER}} .box": "padding: {{VALUE}};"})
    )


def _sides(top, right, bottom, left, unit="px"):
    return {"top": top, "right": right, "bottom": bottom, "left": left, "unit": unit}


class TestOutputFormat:
    """Tests for rule formatting."""

    @pytest.mark.unit
    def test_single_rule(self):
        """A template rule formats as an indented block."""
        schema = _schema(("title_color", _title_color()))
        css = generate_css("widget-1", schema, {"style": {"title_color": "#ff0000"}})
        assert css == "#widget-1 .title {\n  color: #ff0000;\n}"

    @pytest.mark.unit
    def test_rules_separated_by_blank_line(self):
        """Consecutive rules are separated by an empty line."""
        schema = _schema(
            ("title_color", _title_color()),
            ("padding", _padding()),
        )
        css = generate_css(
            "w", schema, {"style": {"title_color": "#111", "padding": _sides(1, 2, 3, 4)}}
        )
        assert css == (
            "#w .title {\n  color: #111;\n}\n\n"
            "#w .box {\n  padding: 1px 2px 3px 4px;\n}"
        )

    @pytest.mark.unit
    def test_minify(self):
        """Minified output drops all formatting whitespace."""
        schema = _schema(("title_color", _title_color()))
        css = generate_css(
            "w",
            schema,
            {"style": {"title_color": "#fff"}},
            options=CompilerOptions(minify=True),
        )
        assert css == "#w .title{color:#fff;}"

    @pytest.mark.unit
    def test_missing_semicolon_added(self):
        """Templates without a trailing semicolon are terminated."""
        field = fields.color().set_label("C").set_selectors({"{{WRAPPER}}": "color: {{VALUE}}"})
        css = generate_css("w", _schema(("c", field)), {"style": {"c": "red"}})
        assert "color: red;" in css


class TestScoping:
    """Tests for {{WRAPPER}} substitution."""

    @pytest.mark.unit
    def test_widget_scope(self):
        schema = _schema(("title_color", _title_color()))
        css = generate_css("widget-42", schema, {})
        assert css.startswith("#widget-42 .title {")

    @pytest.mark.unit
    def test_section_scope(self):
        """A section id is prefixed to the widget id."""
        schema = _schema(("title_color", _title_color()))
        css = generate_css("widget-42", schema, {}, section_id="sec-7")
        assert css.startswith("#sec-7 #widget-42 .title {")

    @pytest.mark.unit
    def test_wrapper(self):
        assert build_wrapper("widget-42") == "#widget-42"
        assert build_wrapper("#widget-42", "#sec-7") == "#sec-7 #widget-42"

    @pytest.mark.unit
    def test_empty_widget_id(self):
        """An empty widget id is a programmer error."""
        with pytest.raises(ValueError):
            build_wrapper("  ")


class TestValues:
    """Tests for value lookup and fallback."""

    @pytest.mark.unit
    def test_dimension_shorthand(self):
        """A stored dimension renders as a four-side shorthand."""
        schema = _schema(("padding", _padding()))
        css = generate_css("w", schema, {"style": {"padding": _sides(12, 24, 12, 24)}})
        assert "padding: 12px 24px 12px 24px;" in css

    @pytest.mark.unit
    def test_default_fallback_equivalence(self):
        """Omitting a field compiles like supplying its default."""
        schema = _schema(
            ("title_color", _title_color("#abcdef")),
            ("padding", _padding()),
        )
        explicit = {"style": {"title_color": "#abcdef", "padding": _sides(0, 0, 0, 0)}}
        assert generate_css("w", schema, {}) == generate_css("w", schema, explicit)

    @pytest.mark.unit
    def test_none_contributes_nothing(self):
        """A stored None suppresses the field."""
        schema = _schema(("title_color", _title_color()))
        assert generate_css("w", schema, {"style": {"title_color": None}}) == ""

    @pytest.mark.unit
    def test_empty_value_still_emits(self):
        """An empty string is a value, not an absence."""
        schema = _schema(("title_color", _title_color()))
        css = generate_css("w", schema, {"style": {"title_color": ""}})
        assert "color: ;" in css

    @pytest.mark.unit
    def test_empty_alignment_still_emits(self):
        """Alignment follows the same rule as scalar and colour fields."""
        align = fields.alignment().set_label("Align").set_selectors(
            {"{{WRAPPER}} .x": "text-align: {{VALUE}};"}
        )
        schema = _schema(("align", align), ("title_color", _title_color()))
        css = generate_css("w", schema, {"style": {"align": "", "title_color": ""}})
        assert css == "#w .x {\n  text-align: ;\n}\n\n#w .title {\n  color: ;\n}"

    @pytest.mark.unit
    def test_malformed_value_uses_default(self):
        """A malformed stored value falls back to the field default."""
        schema = _schema(("padding", _padding()))
        css = generate_css("w", schema, {"style": {"padding": "oops"}})
        assert "padding: 0px 0px 0px 0px;" in css

    @pytest.mark.unit
    def test_missing_side_is_zero(self):
        schema = _schema(("padding", _padding()))
        css = generate_css("w", schema, {"style": {"padding": {"top": 5, "unit": "em"}}})
        assert "padding: 5em 0em 0em 0em;" in css

    @pytest.mark.unit
    def test_empty_selectors_contribute_nothing(self):
        """Fields without selector rules produce no CSS."""
        schema = _schema(("label", fields.text().set_label("Label")))
        result = compile_css("w", schema, {"style": {"label": "hello"}})
        assert result.css == ""
        assert result.rule_count == 0


class TestCascade:
    """Tests for declaration order."""

    @pytest.mark.unit
    def test_declaration_order(self):
        """Later fields targeting the same selector come later."""
        first = fields.color().set_label("A").set_selectors({"{{WRAPPER}} a": "color: {{VALUE}};"})
        second = fields.color().set_label("B").set_selectors({"{{WRAPPER}} a": "color: {{VALUE}};"})
        schema = _schema(("first", first), ("second", second))
        css = generate_css("w", schema, {"style": {"first": "red", "second": "blue"}})
        assert css.index("color: red;") < css.index("color: blue;")
        assert css.count("#w a {") == 2

    @pytest.mark.unit
    def test_deterministic(self):
        """Identical inputs produce identical output."""
        schema = _schema(("title_color", _title_color()), ("padding", _padding()))
        settings = {
            "style": {
                "title_color": "#123456",
                "padding": {"desktop": _sides(10, 10, 10, 10), "mobile": _sides(2, 2, 2, 2)},
            }
        }
        assert generate_css("w", schema, settings) == generate_css("w", schema, settings)

    @pytest.mark.unit
    def test_tabs_traverse_in_order(self):
        """Tabs and their groups are walked depth-first."""
        schema = (
            ControlSchemaBuilder(SettingsCategory.STYLE)
            .add_tab("normal", "Normal")
            .add_group("colors", "Colors")
            .register_field("text", _title_color())
            .end_group()
            .end_tab()
            .add_group("extra", "Extra")
            .register_field("padding", _padding())
            .end_group()
            .get_fields()
        )
        css = generate_css(
            "w",
            schema,
            {"normal": {"colors": {"text": "#222"}}, "extra": {"padding": _sides(1, 1, 1, 1)}},
        )
        assert css.index("color: #222;") < css.index("padding: 1px 1px 1px 1px;")


class TestResponsive:
    """Tests for breakpoint expansion."""

    @pytest.mark.unit
    def test_mobile_media_block(self):
        """Desktop is unscoped and mobile goes in a max-width query."""
        schema = _schema(("padding", _padding()))
        settings = {"style": {"padding": {"desktop": _sides(20, 20, 20, 20), "mobile": _sides(5, 5, 5, 5)}}}
        css = generate_css("w", schema, settings)
        assert css == (
            "#w .box {\n  padding: 20px 20px 20px 20px;\n}\n\n"
            "@media (max-width: 767px) {\n"
            "  #w .box {\n    padding: 5px 5px 5px 5px;\n  }\n"
            "}"
        )

    @pytest.mark.unit
    def test_tablet_before_mobile(self):
        schema = _schema(("padding", _padding()))
        settings = {
            "style": {
                "padding": {
                    "mobile": _sides(1, 1, 1, 1),
                    "desktop": _sides(3, 3, 3, 3),
                    "tablet": _sides(2, 2, 2, 2),
                }
            }
        }
        css = generate_css("w", schema, settings)
        assert css.index("3px") < css.index("(max-width: 1023px)") < css.index("(max-width: 767px)")

    @pytest.mark.unit
    def test_custom_breakpoints(self):
        schema = _schema(("padding", _padding()))
        settings = {"style": {"padding": {"desktop": _sides(2, 2, 2, 2), "mobile": _sides(1, 1, 1, 1)}}}
        css = generate_css("w", schema, settings, options=CompilerOptions(mobile_max_width=600))
        assert "@media (max-width: 600px)" in css

    @pytest.mark.unit
    def test_non_responsive_field_uses_desktop(self):
        """A breakpoint map on a non-responsive field compiles its desktop value."""
        field = _title_color()
        schema = _schema(("title_color", field))
        css = generate_css("w", schema, {"style": {"title_color": {"desktop": "red", "mobile": "blue"}}})
        assert "color: red;" in css
        assert "@media" not in css

    @pytest.mark.unit
    def test_options_from_environment(self, monkeypatch):
        monkeypatch.setenv("STYLEKIT_TABLET_MAX_WIDTH", "900")
        monkeypatch.setenv("STYLEKIT_MOBILE_MAX_WIDTH", "600")
        monkeypatch.setenv("STYLEKIT_CSS_MINIFY", "true")
        options = CompilerOptions.from_environment()
        assert options == CompilerOptions(tablet_max_width=900, mobile_max_width=600, minify=True)


class TestConditions:
    """Tests for condition gating."""

    def _schema(self):
        show_icon = fields.toggle().set_label("Show icon").set_default(False)
        icon_color = (
            fields.color()
            .set_label("Icon color")
            .set_default("#333333")
            .set_condition({"show_icon": True})
            .set_selectors({"{{WRAPPER}} .icon": "color: {{VALUE}};"})
        )
        return _schema(("show_icon", show_icon), ("icon_color", icon_color))

    @pytest.mark.unit
    def test_hidden_by_default(self):
        """The sibling toggle defaults to off, so nothing is emitted."""
        assert generate_css("w", self._schema(), {"style": {"icon_color": "red"}}) == ""

    @pytest.mark.unit
    def test_shown_when_met(self):
        css = generate_css("w", self._schema(), {"style": {"show_icon": True, "icon_color": "red"}})
        assert "#w .icon {\n  color: red;\n}" == css


class TestComposite:
    """Tests for composite resolvers in the compiler."""

    @pytest.mark.unit
    def test_typography(self):
        field = fields.typography_group().set_label("Type").set_selectors(["{{WRAPPER}} .title"])
        schema = _schema(("typography", field))
        css = generate_css(
            "w", schema, {"style": {"typography": {"font_size": {"value": 24, "unit": "px"}}}}
        )
        assert css.startswith("#w .title {")
        assert "font-size: 24px;" in css

    @pytest.mark.unit
    def test_background_hover(self):
        """A hover colour adds a :hover rule after the base rule."""
        field = fields.background_group().set_label("Bg").set_selectors(["{{WRAPPER}} .btn"])
        schema = _schema(("background", field))
        css = generate_css(
            "w",
            schema,
            {"style": {"background": {"type": "color", "color": "#fff", "hover": {"color": "#000"}}}},
        )
        assert css.index("#w .btn {") < css.index("#w .btn:hover {")
        assert "background-color: #000;" in css


class TestWarnings:
    """Tests for compile warnings and per-field isolation."""

    @pytest.mark.unit
    def test_unknown_token(self):
        """Unknown tokens render empty and are reported."""
        field = (
            fields.color()
            .set_label("C")
            .set_selectors({"{{WRAPPER}}": "color: {{VALUE}}; border-color: {{NOPE}};"})
        )
        result = compile_css("w", _schema(("c", field)), {"style": {"c": "red"}})
        assert "border-color: ;" in result.css
        assert result.has_warnings
        (warning,) = result.warnings
        assert warning.field_path == "style.c"
        assert "NOPE" in warning.message

    @pytest.mark.unit
    def test_failing_field_is_isolated(self, monkeypatch):
        """A field that raises is skipped and its siblings still compile."""
        real = lib.get_resolver

        def flaky(field_type):
            if FieldType(field_type) == FieldType.COLOR:
                raise RuntimeError("boom")
            return real(field_type)

        monkeypatch.setattr(lib, "get_resolver", flaky)
        schema = _schema(("title_color", _title_color()), ("padding", _padding()))
        result = compile_css("w", schema, {"style": {"padding": _sides(1, 1, 1, 1)}})
        assert "padding: 1px 1px 1px 1px;" in result.css
        assert "color" not in result.css
        (warning,) = result.warnings
        assert warning.field_path == "style.title_color"
        assert "boom" in warning.message


class TestSharedSchema:
    """End-to-end checks against the shared style schema fixture."""

    @pytest.mark.unit
    def test_condition_and_scope(self, style_schema):
        settings = {"spacing": {"padding": _sides(12, 24, 12, 24)}, "icon": {"show_icon": True}}
        css = generate_css("widget-42", style_schema, settings, section_id="sec-7")
        assert css == (
            "#sec-7 #widget-42 .box {\n  padding: 12px 24px 12px 24px;\n}\n\n"
            "#sec-7 #widget-42 .icon {\n  color: #333333;\n}"
        )

    @pytest.mark.unit
    def test_hidden_icon(self, style_schema):
        css = generate_css("widget-42", style_schema, {})
        assert css == "#widget-42 .box {\n  padding: 0px 0px 0px 0px;\n}"
