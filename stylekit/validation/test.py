"""Unit tests for settings validation."""

import pytest

from stylekit import fields
from stylekit.controls import ControlSchemaBuilder
from stylekit.validation import ValidationError, is_valid_color, is_valid_settings, validate_settings


@pytest.fixture
def schema():
    return (
        ControlSchemaBuilder()
        .add_group("content", "Content")
        .register_field("title", fields.text().set_label("Title").set_required())
        .register_field("level", fields.select().set_label("Level").set_options(["h1", "h2", "h3"]).set_default("h2"))
        .register_field("show_icon", fields.toggle().set_label("Show icon").set_default(False))
        .register_field(
            "icon_size",
            fields.number().set_label("Icon size").set_range(8, 64).set_default(16).set_condition({"show_icon": True}),
        )
        .end_group()
        .add_group("style", "Style")
        .register_field("color", fields.color().set_label("Color").set_default("#000"))
        .register_field("padding", fields.dimension().set_label("Padding").as_padding())
        .register_field("background", fields.background_group().set_label("Background"))
        .end_group()
        .get_fields()
    )


class TestValidateSettings:
    """Tests for validate_settings function."""

    @pytest.mark.unit
    def test_valid(self, schema):
        """Well-formed settings pass validation."""
        settings = {
            "content": {"title": "Hello", "level": "h1"},
            "style": {"color": "rgba(0, 0, 0, 0.5)", "padding": {"top": 10, "unit": "px"}},
        }
        assert validate_settings(schema, settings) == []
        assert is_valid_settings(schema, settings)

    @pytest.mark.unit
    def test_required(self, schema):
        """A required field without value or default is reported."""
        errors = validate_settings(schema, {})
        assert errors == [ValidationError("content.title", "'Title' is required", "required")]

    @pytest.mark.unit
    def test_invalid_option(self, schema):
        errors = validate_settings(schema, {"content": {"title": "x", "level": "h9"}})
        assert [e.error_type for e in errors] == ["invalid_option"]
        assert errors[0].path == "content.level"

    @pytest.mark.unit
    def test_hidden_field_not_checked(self, schema):
        """Fields hidden by their condition are skipped."""
        settings = {"content": {"title": "x", "icon_size": 500}}
        assert validate_settings(schema, settings) == []

    @pytest.mark.unit
    def test_out_of_range(self, schema):
        settings = {"content": {"title": "x", "show_icon": True, "icon_size": 500}}
        (error,) = validate_settings(schema, settings)
        assert error.error_type == "out_of_range"
        assert error.path == "content.icon_size"

    @pytest.mark.unit
    def test_non_numeric(self, schema):
        settings = {"content": {"title": "x", "show_icon": True, "icon_size": "big"}}
        (error,) = validate_settings(schema, settings)
        assert error.error_type == "invalid_number"

    @pytest.mark.unit
    def test_toggle_type(self, schema):
        (error,) = validate_settings(schema, {"content": {"title": "x", "show_icon": "yes"}})
        assert error.error_type == "invalid_type"

    @pytest.mark.unit
    def test_invalid_color(self, schema):
        (error,) = validate_settings(schema, {"content": {"title": "x"}, "style": {"color": "blue-ish"}})
        assert error.error_type == "invalid_color"

    @pytest.mark.unit
    def test_dimension_shape_and_range(self, schema):
        """Dimension values must be mappings with sides in range."""
        bad_shape = validate_settings(schema, {"content": {"title": "x"}, "style": {"padding": "10px"}})
        assert [e.error_type for e in bad_shape] == ["invalid_shape"]

        bad_side = validate_settings(
            schema, {"content": {"title": "x"}, "style": {"padding": {"left": 500, "unit": "vw"}}}
        )
        assert {(e.path, e.error_type) for e in bad_side} == {
            ("style.padding.left", "out_of_range"),
            ("style.padding.unit", "invalid_unit"),
        }

    @pytest.mark.unit
    def test_responsive_per_breakpoint(self, schema):
        """Each breakpoint entry is validated with its own path."""
        settings = {
            "content": {"title": "x"},
            "style": {"padding": {"desktop": {"top": 10}, "mobile": {"top": 300}}},
        }
        (error,) = validate_settings(schema, settings)
        assert error.path == "style.padding.mobile.top"

    @pytest.mark.unit
    def test_not_responsive(self, schema):
        settings = {"content": {"title": "x"}, "style": {"color": {"desktop": "#fff"}}}
        (error,) = validate_settings(schema, settings)
        assert error.error_type == "not_responsive"

    @pytest.mark.unit
    def test_composite_color(self, schema):
        settings = {
            "content": {"title": "x"},
            "style": {"background": {"type": "color", "color": "#fff", "hover": {"color": "nope"}}},
        }
        (error,) = validate_settings(schema, settings)
        assert error.path == "style.background.hover.color"

    @pytest.mark.unit
    def test_unknown_keys(self, schema):
        """Keys naming no group or field are reported."""
        settings = {"content": {"title": "x", "subtitle": "y"}, "advanced": {}}
        errors = validate_settings(schema, settings)
        assert {(e.path, e.error_type) for e in errors} == {
            ("content.subtitle", "unknown_key"),
            ("advanced", "unknown_key"),
        }


class TestStructuredFields:
    """Tests for icon and link values."""

    @pytest.fixture
    def schema(self):
        return (
            ControlSchemaBuilder()
            .add_group("content", "Content")
            .register_field("icon", fields.icon().set_label("Icon"))
            .register_field("link", fields.link_group().set_label("Link"))
            .end_group()
            .get_fields()
        )

    @pytest.mark.unit
    def test_icon_class_string(self, schema):
        """Icons are stored as class strings."""
        assert validate_settings(schema, {"content": {"icon": "fas fa-star"}}) == []

    @pytest.mark.unit
    def test_icon_mapping_rejected(self, schema):
        (error,) = validate_settings(schema, {"content": {"icon": {"name": "star"}}})
        assert (error.path, error.error_type) == ("content.icon", "invalid_shape")

    @pytest.mark.unit
    def test_link_requires_mapping(self, schema):
        (error,) = validate_settings(schema, {"content": {"link": "https://example.com"}})
        assert (error.path, error.error_type) == ("content.link", "invalid_shape")


class TestIsValidColor:
    """Tests for is_valid_color."""

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "value",
        ["#fff", "#ffffff", "#ffffff80", "rgb(0, 0, 0)", "rgba(0,0,0,0.1)", "hsl(120, 50%, 50%)", "transparent"],
    )
    def test_valid(self, value):
        assert is_valid_color(value)

    @pytest.mark.unit
    @pytest.mark.parametrize("value", ["fff", "#ggg", "rgb(0,0,0", 12, None])
    def test_invalid(self, value):
        assert not is_valid_color(value)
