"""Tests for the control schema builder."""

import pytest

from stylekit import fields
from stylekit.schema import (
    DuplicateFieldKey,
    DuplicateGroupKey,
    Group,
    InvalidFieldDefinition,
    InvalidSchemaStructure,
    MissingRequiredAttribute,
    SettingsCategory,
    Tab,
)

from .lib import ControlSchemaBuilder


def _color(label: str = "Color"):
    return fields.color().set_label(label)


class TestGroups:
    """Tests for group declarations."""

    @pytest.mark.unit
    def test_simple_schema(self):
        """Groups collect fields in declaration order."""
        schema = (
            ControlSchemaBuilder(SettingsCategory.STYLE)
            .add_group("colors", "Colors")
            .register_field("text_color", _color("Text"))
            .register_field("hover_color", _color("Hover"))
            .end_group()
            .get_fields()
        )
        assert schema.category == SettingsCategory.STYLE
        (group,) = schema.items
        assert isinstance(group, Group)
        assert [f.key for f in group.fields] == ["text_color", "hover_color"]

    @pytest.mark.unit
    def test_register_definition(self):
        """Built definitions register when the key matches."""
        definition = _color().build("text_color")
        schema = (
            ControlSchemaBuilder()
            .add_group("colors")
            .register_field("text_color", definition)
            .end_group()
            .get_fields()
        )
        assert schema.get_field("colors.text_color") == definition

    @pytest.mark.unit
    def test_register_definition_key_mismatch(self):
        """A definition built under another key is rejected."""
        builder = ControlSchemaBuilder().add_group("colors")
        with pytest.raises(InvalidFieldDefinition):
            builder.register_field("other", _color().build("text_color"))

    @pytest.mark.unit
    def test_register_rejects_other_objects(self):
        """Only builders and definitions register."""
        builder = ControlSchemaBuilder().add_group("colors")
        with pytest.raises(InvalidFieldDefinition):
            builder.register_field("text_color", {"type": "color"})

    @pytest.mark.unit
    def test_build_errors_propagate(self):
        """Builder errors surface from register_field."""
        builder = ControlSchemaBuilder().add_group("colors")
        with pytest.raises(MissingRequiredAttribute):
            builder.register_field("text_color", fields.color())

    @pytest.mark.unit
    def test_duplicate_field_registers_neither(self):
        """A duplicate key raises and leaves neither field in the group."""
        builder = (
            ControlSchemaBuilder()
            .add_group("colors", "Colors")
            .register_field("text_color", _color("First"))
            .register_field("border_color", _color("Border"))
        )
        with pytest.raises(DuplicateFieldKey) as exc_info:
            builder.register_field("text_color", _color("Second"))
        assert exc_info.value.group == "colors"

        schema = builder.end_group().get_fields()
        assert schema.field_paths() == ["colors.border_color"]

    @pytest.mark.unit
    def test_same_field_key_in_different_groups(self):
        """Field keys only need to be unique within their group."""
        schema = (
            ControlSchemaBuilder()
            .add_group("normal")
            .register_field("color", _color())
            .end_group()
            .add_group("hover")
            .register_field("color", _color())
            .end_group()
            .get_fields()
        )
        assert schema.field_paths() == ["normal.color", "hover.color"]

    @pytest.mark.unit
    def test_duplicate_group_key(self):
        """Group keys are unique within their scope."""
        builder = (
            ControlSchemaBuilder()
            .add_group("colors")
            .register_field("a", _color())
            .end_group()
        )
        with pytest.raises(DuplicateGroupKey):
            builder.add_group("colors")


class TestTabs:
    """Tests for tab declarations."""

    @pytest.fixture
    def tabbed(self):
        return (
            ControlSchemaBuilder(SettingsCategory.STYLE)
            .add_tab("normal", "Normal")
            .add_group("colors", "Colors")
            .register_field("color", _color())
            .end_group()
            .end_tab()
            .add_tab("hover", "Hover")
            .add_group("colors", "Colors")
            .register_field("color", _color())
            .end_group()
            .end_tab()
            .get_fields()
        )

    @pytest.mark.unit
    def test_tabs_contain_groups(self, tabbed):
        """Tabs hold their groups; group keys may repeat across tabs."""
        assert [type(item) for item in tabbed.items] == [Tab, Tab]
        assert tabbed.field_paths() == ["normal.colors.color", "hover.colors.color"]

    @pytest.mark.unit
    def test_group_cannot_contain_tab(self):
        """Opening a tab inside a group fails."""
        builder = ControlSchemaBuilder().add_group("colors")
        with pytest.raises(InvalidSchemaStructure, match="inside group"):
            builder.add_tab("hover")

    @pytest.mark.unit
    def test_tabs_do_not_nest(self):
        """Opening a tab inside a tab fails."""
        builder = ControlSchemaBuilder().add_tab("normal")
        with pytest.raises(InvalidSchemaStructure):
            builder.add_tab("hover")

    @pytest.mark.unit
    def test_tab_and_group_share_root_namespace(self):
        """A tab cannot reuse a root group key."""
        builder = (
            ControlSchemaBuilder()
            .add_group("colors")
            .register_field("a", _color())
            .end_group()
        )
        with pytest.raises(DuplicateGroupKey):
            builder.add_tab("colors")

    @pytest.mark.unit
    def test_empty_tab(self):
        """Tabs need at least one group."""
        with pytest.raises(InvalidSchemaStructure, match="no groups"):
            ControlSchemaBuilder().add_tab("normal").end_tab()


class TestStructureErrors:
    """Tests for out-of-order structural calls."""

    @pytest.mark.unit
    def test_register_without_group(self):
        """Fields need an open group."""
        with pytest.raises(InvalidSchemaStructure):
            ControlSchemaBuilder().register_field("a", _color())

    @pytest.mark.unit
    def test_end_group_without_group(self):
        """end_group needs an open group."""
        with pytest.raises(InvalidSchemaStructure):
            ControlSchemaBuilder().end_group()

    @pytest.mark.unit
    def test_end_tab_with_open_group(self):
        """end_tab refuses to close over an open group."""
        builder = ControlSchemaBuilder().add_tab("normal").add_group("colors")
        with pytest.raises(InvalidSchemaStructure):
            builder.end_tab()

    @pytest.mark.unit
    def test_nested_groups(self):
        """Groups do not nest."""
        with pytest.raises(InvalidSchemaStructure):
            ControlSchemaBuilder().add_group("a").add_group("b")

    @pytest.mark.unit
    def test_empty_group(self):
        """Groups need at least one field."""
        with pytest.raises(InvalidSchemaStructure, match="no fields"):
            ControlSchemaBuilder().add_group("colors").end_group()

    @pytest.mark.unit
    def test_unclosed_scopes(self):
        """get_fields refuses unclosed groups and tabs."""
        with pytest.raises(InvalidSchemaStructure, match="never closed"):
            ControlSchemaBuilder().add_group("colors").get_fields()
        with pytest.raises(InvalidSchemaStructure, match="never closed"):
            ControlSchemaBuilder().add_tab("normal").get_fields()

    @pytest.mark.unit
    def test_empty_schema(self):
        """A schema without groups is valid."""
        assert ControlSchemaBuilder().get_fields().is_empty()
