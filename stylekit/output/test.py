"""Tests for output module."""

import pytest

from stylekit import fields
from stylekit.controls import ControlSchemaBuilder
from stylekit.schema import SettingsCategory
from stylekit.widgets import create_default_registry
from stylekit.output import OutputGenerator, WidgetOutput, format_schema_tree


@pytest.fixture
def sample_schema():
    """Create sample schema for testing."""
    return (
        ControlSchemaBuilder(SettingsCategory.STYLE)
        .add_group("spacing", "Spacing")
        .register_field(
            "padding",
            fields.dimension().set_label("Padding").as_padding().set_selectors({"{{WRAPPER}}": "padding: {{VALUE}};"}),
        )
        .end_group()
        .add_tab("normal", "Normal State")
        .add_group("colors", "Colors")
        .register_field("show", fields.toggle().set_label("Show"))
        .register_field(
            "color",
            fields.color().set_label("Color").set_condition({"show": True}).set_selectors({"{{WRAPPER}}": "color: {{VALUE}};"}),
        )
        .end_group()
        .end_tab()
        .get_fields()
    )


class TestFormatSchemaTree:
    """Tests for format_schema_tree function."""

    @pytest.mark.unit
    def test_tree(self, sample_schema):
        """Test formatting a schema with a tab."""
        assert format_schema_tree(sample_schema) == "\n".join(
            [
                "style",
                "├── Spacing (spacing)",
                "│   └── Padding (padding) [dimension, responsive, css]",
                "└── Normal State (normal) [tab]",
                "    └── Colors (colors)",
                "        ├── Show (show) [toggle]",
                "        └── Color (color) [color, conditional, css]",
            ]
        )

    @pytest.mark.unit
    def test_title(self, sample_schema):
        assert format_schema_tree(sample_schema, title="Demo").splitlines()[0] == "Demo"

    @pytest.mark.unit
    def test_empty_schema(self):
        schema = ControlSchemaBuilder().get_fields()
        assert format_schema_tree(schema) == "general"


class TestOutputGenerator:
    """Tests for OutputGenerator class."""

    @pytest.mark.unit
    def test_generate(self):
        """Test generating a complete bundle for a built-in widget."""
        generator = OutputGenerator(create_default_registry())
        output = generator.generate("spacer", "s-1", {"style": {"spacing": {"height": 10}}})
        assert isinstance(output, WidgetOutput)
        assert output.css == "#s-1 .spacer-element {\n  height: 10px;\n}"
        assert output.css_classes.startswith("stylekit-widget stylekit-spacer")
        assert output.html.startswith('<div id="s-1"')
        assert output.text_tree.splitlines()[0] == "Spacer (style)"
        assert output.warnings == []

    @pytest.mark.unit
    def test_unknown_widget(self, registry):
        generator = OutputGenerator(registry)
        with pytest.raises(KeyError):
            generator.generate("carousel", "c-1")
