"""Tests for the FieldDefinition builder."""

import pytest

from stylekit.schema import (
    AlignmentAxis,
    CompositeRule,
    ConditionOperator,
    FieldType,
    InvalidFieldDefinition,
    MissingRequiredAttribute,
    TemplateRule,
)

from .lib import (
    FieldBuilder,
    alignment,
    background_group,
    color,
    create_field,
    dimension,
    icon,
    number,
    select,
    text,
    toggle,
    typography_group,
)


class TestImmutability:
    """Tests for builder immutability."""

    @pytest.mark.unit
    def test_setters_return_new_builders(self):
        """Setters never mutate the receiver."""
        base = number().set_unit("px")
        wide = base.set_max(500)
        assert base.max is None
        assert wide.max == 500
        assert wide is not base

    @pytest.mark.unit
    def test_shared_base(self):
        """A partially configured builder can seed several fields."""
        base = number().set_unit("px").set_range(0, 100)
        width = base.set_label("Width").build("width")
        height = base.set_label("Height").build("height")
        assert (width.key, height.key) == ("width", "height")
        assert width.max == height.max == 100


class TestBuild:
    """Tests for build()."""

    @pytest.mark.unit
    def test_missing_key(self):
        """Building without a key fails."""
        with pytest.raises(MissingRequiredAttribute) as exc_info:
            text().set_label("Title").build()
        assert exc_info.value.attribute == "key"

    @pytest.mark.unit
    def test_missing_label(self):
        """Building without a label fails."""
        with pytest.raises(MissingRequiredAttribute) as exc_info:
            text().build("title")
        assert exc_info.value.attribute == "label"

    @pytest.mark.unit
    def test_missing_attribute_is_invalid_definition(self):
        """MissingRequiredAttribute is an InvalidFieldDefinition."""
        with pytest.raises(InvalidFieldDefinition):
            text().build("title")

    @pytest.mark.unit
    def test_min_greater_than_max(self):
        """Inverted ranges are rejected at build time."""
        builder = number().set_label("Size").set_min(10).set_max(1)
        with pytest.raises(InvalidFieldDefinition, match="greater than max"):
            builder.build("size")

    @pytest.mark.unit
    def test_unknown_type(self):
        """Unknown types fail at build time."""
        with pytest.raises(InvalidFieldDefinition, match="Unknown field type"):
            create_field("gradient_picker").set_label("Gradient").build("g")

    @pytest.mark.unit
    def test_type_names_resolve(self):
        """String type names resolve to FieldType."""
        assert create_field("color").type == FieldType.COLOR

    @pytest.mark.unit
    def test_typed_default_applied(self):
        """Unset defaults use the type's default."""
        definition = dimension().set_label("Margin").build("margin")
        assert definition.default == {"top": 0, "right": 0, "bottom": 0, "left": 0}
        assert toggle().set_label("On").build("on").default is False

    @pytest.mark.unit
    def test_invalid_key(self):
        """Dotted keys are rejected."""
        with pytest.raises(InvalidFieldDefinition):
            text().set_key("group.title")


class TestTypeValidation:
    """Tests for per-type setter validation."""

    @pytest.mark.unit
    def test_options_only_for_choice_types(self):
        """Options are rejected on non-choice types."""
        with pytest.raises(InvalidFieldDefinition, match="options"):
            text().set_options({"a": "A"})

    @pytest.mark.unit
    def test_option_forms(self):
        """Mappings, pairs and bare values all parse."""
        assert select().set_options({"h1": "H1"}).options[0].label == "H1"
        assert select().set_options([("a", "A")]).options[0].value == "a"
        assert select().set_options(["x"]).options[0].label == "x"
        assert select().set_options([{"value": 1, "label": "One"}]).options[0].value == 1

    @pytest.mark.unit
    def test_empty_options_rejected(self):
        """Choice fields need at least one option."""
        with pytest.raises(InvalidFieldDefinition):
            select().set_options([])

    @pytest.mark.unit
    def test_unit_rejected_for_color(self):
        """Colours take no unit."""
        with pytest.raises(InvalidFieldDefinition, match="unit"):
            color().set_unit("px")

    @pytest.mark.unit
    def test_range_only_for_numeric_types(self):
        """min/max/step are rejected on text."""
        with pytest.raises(InvalidFieldDefinition):
            text().set_min(0)

    @pytest.mark.unit
    def test_non_positive_step(self):
        """Steps must be positive."""
        with pytest.raises(InvalidFieldDefinition):
            number().set_step(0)

    @pytest.mark.unit
    def test_bool_bound_rejected(self):
        """Booleans are not numeric bounds."""
        with pytest.raises(InvalidFieldDefinition):
            number().set_min(True)

    @pytest.mark.unit
    def test_default_shape(self):
        """Defaults must fit the type."""
        with pytest.raises(InvalidFieldDefinition):
            dimension().set_default(12)
        with pytest.raises(InvalidFieldDefinition):
            toggle().set_default("yes")
        with pytest.raises(InvalidFieldDefinition):
            number().set_default(True)

    @pytest.mark.unit
    def test_responsive_default_checked_per_breakpoint(self):
        """Each breakpoint of a responsive default is validated."""
        builder = dimension().set_default({"desktop": {"top": 1}, "mobile": {"top": 0}})
        assert "mobile" in builder.default
        with pytest.raises(InvalidFieldDefinition):
            dimension().set_default({"desktop": {"top": 1}, "mobile": 3})

    @pytest.mark.unit
    def test_axis_only_for_alignment(self):
        """Axis applies to alignment fields only."""
        assert alignment().set_axis("justify-content").axis == AlignmentAxis.JUSTIFY_CONTENT
        with pytest.raises(InvalidFieldDefinition):
            text().set_axis("text-align")
        with pytest.raises(InvalidFieldDefinition):
            alignment().set_axis("vertical")

    @pytest.mark.unit
    def test_alignment_axis_defaults_to_text_align(self):
        """Alignment fields without an axis drive text-align."""
        definition = alignment().set_label("Align").build("align")
        assert definition.axis == AlignmentAxis.TEXT_ALIGN


class TestSelectors:
    """Tests for set_selectors."""

    @pytest.mark.unit
    def test_template_mapping(self):
        """Mappings become template rules in declaration order."""
        builder = color().set_selectors(
            {"{{WRAPPER}} a": "color: {{VALUE}};", "{{WRAPPER}} b": "fill: {{VALUE}};"}
        )
        assert [r.selector for r in builder.selectors] == ["{{WRAPPER}} a", "{{WRAPPER}} b"]
        assert all(isinstance(r, TemplateRule) for r in builder.selectors)

    @pytest.mark.unit
    def test_composite_list(self):
        """Composite groups take a list of selectors."""
        builder = typography_group().set_selectors(["{{WRAPPER}} h1", "{{WRAPPER}} h2"])
        (rule,) = builder.selectors
        assert isinstance(rule, CompositeRule)
        assert rule.selectors == ("{{WRAPPER}} h1", "{{WRAPPER}} h2")

    @pytest.mark.unit
    def test_composite_rejects_templates(self):
        """Composite groups do not take templates."""
        with pytest.raises(InvalidFieldDefinition):
            background_group().set_selectors({"{{WRAPPER}}": "background: red;"})

    @pytest.mark.unit
    def test_typography_accepts_token_templates(self):
        """Typography groups may map FONT_* tokens into templates."""
        builder = typography_group().set_selectors(
            {"{{WRAPPER}} h2": "font-size: {{FONT_SIZE}};"}
        )
        assert isinstance(builder.selectors[0], TemplateRule)

    @pytest.mark.unit
    def test_scalar_rejects_bare_list(self):
        """Scalar fields need a template per selector."""
        with pytest.raises(InvalidFieldDefinition):
            color().set_selectors(["{{WRAPPER}}"])

    @pytest.mark.unit
    def test_structured_rejects_selectors(self):
        """Structured fields never produce CSS."""
        with pytest.raises(InvalidFieldDefinition):
            icon().set_selectors({"{{WRAPPER}}": "content: {{VALUE}};"})

    @pytest.mark.unit
    def test_empty_selectors_allowed(self):
        """An empty selector list is valid and produces nothing."""
        assert color().set_selectors({}).selectors == ()


class TestConditions:
    """Tests for set_condition and depends_on."""

    @pytest.mark.unit
    def test_set_condition_mapping(self):
        """Mapping conditions normalize into Condition models."""
        builder = color().set_condition({"enable_link": True})
        assert builder.condition[0].field == "enable_link"

    @pytest.mark.unit
    def test_depends_on_appends(self):
        """depends_on adds to existing conditions."""
        builder = color().set_condition({"a": 1}).depends_on("b", 3, op="gt")
        assert [c.field for c in builder.condition] == ["a", "b"]
        assert builder.condition[1].op == ConditionOperator.GT


class TestPresets:
    """Tests for dimension and alignment presets."""

    @pytest.mark.unit
    def test_dimension_responsive_by_default(self):
        """dimension() starts responsive."""
        assert dimension().responsive is True
        assert dimension().set_responsive(False).responsive is False

    @pytest.mark.unit
    def test_as_padding(self):
        """Padding preset sets units, range and zero default."""
        builder = dimension().as_padding()
        assert builder.units == ("px", "em", "rem", "%")
        assert builder.unit == "px"
        assert (builder.min, builder.max) == (0, 200)

    @pytest.mark.unit
    def test_as_margin_allows_negative(self):
        """Margin preset allows negative values."""
        assert dimension().as_margin().min == -200

    @pytest.mark.unit
    def test_as_border_radius(self):
        """Border radius preset caps at 100."""
        assert dimension().as_border_radius().max == 100

    @pytest.mark.unit
    def test_alignment_presets(self):
        """Alignment presets pick axis, options and default."""
        assert alignment().as_text_align().default == "left"
        assert alignment().as_flex_align().axis == AlignmentAxis.JUSTIFY_CONTENT
        assert alignment().as_element_align().axis == AlignmentAxis.ALIGN_ITEMS

    @pytest.mark.unit
    def test_preset_type_mismatch(self):
        """Presets refuse other field types."""
        with pytest.raises(InvalidFieldDefinition):
            number().as_padding()
        with pytest.raises(InvalidFieldDefinition):
            dimension().as_text_align()


class TestAttributeTemplates:
    """Tests for class and style templates."""

    @pytest.mark.unit
    def test_templates_set(self):
        """Scalar fields accept class and style templates."""
        builder = select().set_class_template("size-{{VALUE}}").set_style_template(
            "height: {{VALUE}}{{UNIT}}"
        )
        assert builder.class_template == "size-{{VALUE}}"

    @pytest.mark.unit
    def test_composite_rejects_attribute_templates(self):
        """Composite groups cannot map to inline attributes."""
        with pytest.raises(InvalidFieldDefinition):
            background_group().set_style_template("background: {{VALUE}}")

    @pytest.mark.unit
    def test_builder_positional_type(self):
        """FieldBuilder accepts the type positionally."""
        assert FieldBuilder(FieldType.URL).type == FieldType.URL
