"""Tests for the editor boundary."""

import json

import pytest

from stylekit import fields
from stylekit.controls import ControlSchemaBuilder
from stylekit.schema import FieldType, InvalidSchemaStructure, SettingsCategory

from .lib import FieldDescriptor, FieldWarning, describe_schema, render_field_warning


def _serialized():
    schema = (
        ControlSchemaBuilder(SettingsCategory.STYLE)
        .add_tab("normal", "Normal")
        .add_group("colors", "Colors")
        .register_field("text_color", fields.color().set_label("Text"))
        .register_field("hover_color", fields.color().set_label("Hover"))
        .end_group()
        .end_tab()
        .add_group("spacing", "Spacing")
        .register_field("padding", fields.dimension().set_label("Padding").as_padding())
        .end_group()
        .get_fields()
    )
    return schema.model_dump(mode="json")


class TestDescribeSchema:
    """Tests for describe_schema."""

    @pytest.mark.unit
    def test_round_trip(self):
        """A dumped schema parses back into descriptors."""
        described = describe_schema(_serialized())
        assert described.category == "style"
        assert [g.path for g in described.groups] == ["normal.colors", "spacing"]
        assert described.field_paths() == [
            "normal.colors.text_color",
            "normal.colors.hover_color",
            "spacing.padding",
        ]
        assert not described.has_warnings
        padding = described.groups[1].fields[0]
        assert padding.definition.type == FieldType.DIMENSION
        assert padding.definition.responsive

    @pytest.mark.unit
    def test_accepts_json_text(self):
        described = describe_schema(json.dumps(_serialized()))
        assert len(described.groups) == 2

    @pytest.mark.unit
    def test_unknown_type_degrades(self):
        """An unknown type becomes a warning and siblings still parse."""
        data = _serialized()
        data["items"][0]["groups"][0]["fields"][0]["type"] = "gradient_picker"
        described = describe_schema(data)

        entries = described.groups[0].entries
        assert isinstance(entries[0], FieldWarning)
        assert isinstance(entries[1], FieldDescriptor)
        (warning,) = described.warnings
        assert warning.path == "normal.colors.text_color"
        assert warning.field_type == "gradient_picker"
        assert warning.message == "Unknown field type: gradient_picker"
        assert described.field_paths() == ["normal.colors.hover_color", "spacing.padding"]

    @pytest.mark.unit
    def test_invalid_field_degrades(self):
        """A known type with a broken definition also degrades to a warning."""
        data = _serialized()
        data["items"][1]["fields"][0]["label"] = ""
        described = describe_schema(data)
        (warning,) = described.warnings
        assert warning.path == "spacing.padding"
        assert warning.message.startswith("Invalid dimension field")

    @pytest.mark.unit
    def test_malformed_skeleton(self):
        """Structural damage is not recoverable."""
        with pytest.raises(InvalidSchemaStructure):
            describe_schema({"items": [{"kind": "panel", "key": "x"}]})
        with pytest.raises(InvalidSchemaStructure):
            describe_schema("{not json")
        with pytest.raises(InvalidSchemaStructure):
            describe_schema({"items": [{"kind": "group", "fields": []}]})


class TestRenderFieldWarning:
    """Tests for render_field_warning."""

    @pytest.mark.unit
    def test_names_key_and_type(self):
        html = render_field_warning(
            FieldWarning(path="style.icon", field_type="<svg>", message="Unknown field type: <svg>")
        )
        assert 'data-field="style.icon"' in html
        assert "Unknown field type: &lt;svg&gt;" in html
        assert "Field key: icon" in html
        assert 'role="alert"' in html
