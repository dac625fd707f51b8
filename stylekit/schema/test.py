"""Tests for the schema module."""

import pytest
from pydantic import ValidationError

from .lib import (
    FIELD_TYPE_REGISTRY,
    MISSING,
    CompositeRule,
    Condition,
    ConditionOperator,
    ControlSchema,
    DuplicateFieldKey,
    FieldCategory,
    FieldDefinition,
    FieldType,
    Group,
    InvalidFieldDefinition,
    MissingRequiredAttribute,
    SchemaError,
    SettingsCategory,
    Tab,
    TemplateRule,
    export_field_type_catalog,
    export_json_schema,
    get_field_types_by_category,
    get_typed_default,
    is_responsive_value,
    lookup_path,
    resolve_field_type,
    set_path,
)


def _field(key: str, field_type: FieldType = FieldType.TEXT, **kwargs) -> FieldDefinition:
    return FieldDefinition(key=key, type=field_type, label=key.title(), **kwargs)


@pytest.fixture
def tabbed_schema() -> ControlSchema:
    """Schema with a root group followed by a tab of two groups."""
    return ControlSchema(
        category=SettingsCategory.STYLE,
        items=(
            Group(key="spacing", label="Spacing", fields=(_field("gap", default="4"),)),
            Tab(
                key="normal",
                label="Normal",
                groups=(
                    Group(key="colors", label="Colors", fields=(_field("text"),)),
                    Group(
                        key="box",
                        label="Box",
                        fields=(_field("width", FieldType.NUMBER, default=10),),
                    ),
                ),
            ),
        ),
    )


class TestFieldTypeRegistry:
    """Tests for the field type catalog."""

    @pytest.mark.unit
    def test_every_type_registered(self):
        """Every FieldType has metadata."""
        for field_type in FieldType:
            assert field_type in FIELD_TYPE_REGISTRY
            assert FIELD_TYPE_REGISTRY[field_type].type == field_type

    @pytest.mark.unit
    def test_structured_types_reject_selectors(self):
        """Structured types never accept selectors."""
        structured = get_field_types_by_category(FieldCategory.STRUCTURED)
        assert set(structured) == {
            FieldType.ICON,
            FieldType.IMAGE,
            FieldType.REPEATER,
            FieldType.LINK_GROUP,
        }
        for field_type in structured:
            assert not FIELD_TYPE_REGISTRY[field_type].accepts_selectors

    @pytest.mark.unit
    def test_choice_like_types(self):
        """Only select and alignment accept options."""
        choice_like = {t for t, m in FIELD_TYPE_REGISTRY.items() if m.choice_like}
        assert choice_like == {FieldType.SELECT, FieldType.ALIGNMENT}

    @pytest.mark.unit
    def test_typed_default_is_a_copy(self):
        """Mutating a typed default does not leak into the registry."""
        default = get_typed_default(FieldType.DIMENSION)
        default["top"] = 99
        assert get_typed_default(FieldType.DIMENSION)["top"] == 0

    @pytest.mark.unit
    def test_resolve_field_type(self):
        """Raw names resolve case-insensitively; unknown names give None."""
        assert resolve_field_type("Dimension") == FieldType.DIMENSION
        assert resolve_field_type(FieldType.COLOR) == FieldType.COLOR
        assert resolve_field_type("gradient_picker") is None


class TestModels:
    """Tests for the pydantic models."""

    @pytest.mark.unit
    def test_field_definition_is_frozen(self):
        """Built definitions are immutable."""
        definition = _field("title")
        with pytest.raises(ValidationError):
            definition.label = "Other"

    @pytest.mark.unit
    def test_min_greater_than_max_rejected(self):
        """The model rejects inverted ranges."""
        with pytest.raises(ValidationError):
            _field("size", FieldType.NUMBER, min=10, max=1)

    @pytest.mark.unit
    def test_dotted_key_rejected(self):
        """Keys cannot contain path separators."""
        with pytest.raises(ValidationError):
            _field("a.b")

    @pytest.mark.unit
    def test_selector_rules_discriminated(self):
        """Selector rules round-trip through their discriminator."""
        definition = _field(
            "font",
            FieldType.TYPOGRAPHY_GROUP,
            selectors=(CompositeRule(selectors=("{{WRAPPER}} h2",)),),
        )
        restored = FieldDefinition.model_validate(definition.model_dump(mode="json"))
        assert isinstance(restored.selectors[0], CompositeRule)

        color = _field(
            "color",
            FieldType.COLOR,
            selectors=(TemplateRule(selector="{{WRAPPER}}", template="color: {{VALUE}};"),),
        )
        assert color.has_css

    @pytest.mark.unit
    def test_condition_default_operator(self):
        """Conditions default to equality."""
        assert Condition(field="show_icon", value=True).op == ConditionOperator.EQ

    @pytest.mark.unit
    def test_schema_round_trip(self, tabbed_schema):
        """Serialized schemas validate back to an equal model."""
        data = tabbed_schema.model_dump(mode="json")
        assert ControlSchema.model_validate(data) == tabbed_schema


class TestControlSchema:
    """Tests for ControlSchema traversal helpers."""

    @pytest.mark.unit
    def test_iter_fields_declaration_order(self, tabbed_schema):
        """Fields are yielded depth-first in declaration order."""
        assert tabbed_schema.field_paths() == [
            "spacing.gap",
            "normal.colors.text",
            "normal.box.width",
        ]

    @pytest.mark.unit
    def test_get_field(self, tabbed_schema):
        """Fields resolve by dotted path."""
        assert tabbed_schema.get_field("normal.box.width").type == FieldType.NUMBER
        assert tabbed_schema.get_field("box.width") is None

    @pytest.mark.unit
    def test_defaults_tree(self, tabbed_schema):
        """Defaults are nested like the settings tree."""
        assert tabbed_schema.defaults() == {
            "spacing": {"gap": "4"},
            "normal": {"colors": {"text": None}, "box": {"width": 10}},
        }

    @pytest.mark.unit
    def test_apply_defaults_keeps_stored_values(self, tabbed_schema):
        """Stored values win over defaults and are not mutated."""
        stored = {"normal": {"box": {"width": 20}}}
        merged = tabbed_schema.apply_defaults(stored)
        assert merged["normal"]["box"]["width"] == 20
        assert merged["spacing"]["gap"] == "4"
        assert stored == {"normal": {"box": {"width": 20}}}


class TestPaths:
    """Tests for settings tree path helpers."""

    @pytest.mark.unit
    def test_lookup_missing(self):
        """Absent segments yield MISSING, stored None stays None."""
        tree = {"group": {"field": None}}
        assert lookup_path(tree, "group.field") is None
        assert lookup_path(tree, "group.other") is MISSING
        assert lookup_path(tree, "group.field.deeper") is MISSING

    @pytest.mark.unit
    def test_set_path_creates_levels(self):
        """Intermediate dicts are created on demand."""
        tree: dict = {}
        set_path(tree, ("tab", "group", "field"), 1)
        assert tree == {"tab": {"group": {"field": 1}}}

    @pytest.mark.unit
    def test_responsive_value_detection(self):
        """Only breakpoint maps with a desktop entry are responsive."""
        assert is_responsive_value({"desktop": 1, "mobile": 2})
        assert not is_responsive_value({"mobile": 2})
        assert not is_responsive_value({"top": 1, "desktop": 2})
        assert not is_responsive_value({})
        assert not is_responsive_value(5)


class TestErrors:
    """Tests for the error hierarchy."""

    @pytest.mark.unit
    def test_hierarchy(self):
        """Missing attributes are invalid definitions; all are schema errors."""
        assert issubclass(MissingRequiredAttribute, InvalidFieldDefinition)
        assert issubclass(DuplicateFieldKey, SchemaError)

    @pytest.mark.unit
    def test_messages(self):
        """Errors carry readable messages and attributes."""
        error = DuplicateFieldKey("color", "colors")
        assert error.key == "color"
        assert "colors" in str(error)
        assert "label" in str(MissingRequiredAttribute("label", "text"))


class TestExport:
    """Tests for schema export."""

    @pytest.mark.unit
    def test_json_schema(self):
        """JSON schema exposes the model's properties."""
        schema = export_json_schema()
        assert "items" in schema["properties"]

    @pytest.mark.unit
    def test_catalog(self):
        """Catalog lists every field type."""
        catalog = export_field_type_catalog()
        assert len(catalog["field_types"]) == len(FieldType)
        assert catalog["breakpoints"] == ["desktop", "tablet", "mobile"]
