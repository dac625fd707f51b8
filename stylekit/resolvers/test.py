"""Tests for value resolvers."""

import pytest

from stylekit import fields
from stylekit.schema import FieldType

from .lib import (
    DeclarationBlock,
    ValueResolver,
    format_scalar,
    get_resolver,
    list_resolvers,
    render_template,
    resolve_tokens,
)


def _declarations(definition, value) -> list[str]:
    resolver = get_resolver(definition.type)
    blocks = resolver.blocks(definition, resolver.normalize(definition, value))
    return [d for block in blocks for d in block.declarations]


class TestRegistry:
    """Tests for the resolver registry."""

    @pytest.mark.unit
    def test_every_field_type_has_a_resolver(self):
        """Dispatch covers the whole field type catalog."""
        for field_type in FieldType:
            assert isinstance(get_resolver(field_type), ValueResolver)
        assert set(list_resolvers()) == {t.value for t in FieldType}

    @pytest.mark.unit
    def test_unknown_type(self):
        """Unknown types raise KeyError listing the available ones."""
        with pytest.raises(KeyError, match="Available"):
            get_resolver("gradient_picker")


class TestFormatting:
    """Tests for scalar formatting and template rendering."""

    @pytest.mark.unit
    @pytest.mark.parametrize(
        ("value", "expected"),
        [(None, ""), (True, "true"), (False, "false"), (12.0, "12"), (1.5, "1.5"), ("a", "a")],
    )
    def test_format_scalar(self, value, expected):
        """Scalars format predictably."""
        assert format_scalar(value) == expected

    @pytest.mark.unit
    def test_render_template_reports_unknown_tokens(self):
        """Unknown tokens become empty and are reported."""
        rendered = render_template("color: {{VALUE}}{{BOGUS}};", {"VALUE": "red"})
        assert rendered.text == "color: red;"
        assert rendered.unknown_tokens == ["BOGUS"]

    @pytest.mark.unit
    def test_render_template_dotted_tokens(self):
        """Dotted tokens are matched whole."""
        rendered = render_template("{{VALUE.TOP}}/{{VALUE}}", {"VALUE.TOP": "1", "VALUE": "x"})
        assert rendered.text == "1/x"


class TestScalarResolvers:
    """Tests for scalar and colour resolvers."""

    @pytest.mark.unit
    def test_value_and_unit(self):
        """Scalars produce VALUE and the declared UNIT."""
        definition = fields.number().set_label("Size").set_unit("px").build("size")
        assert resolve_tokens(definition, 14) == {"VALUE": "14", "UNIT": "px"}

    @pytest.mark.unit
    def test_unit_empty_when_undeclared(self):
        """UNIT is empty without a declared unit."""
        definition = fields.text().set_label("Shadow").build("shadow")
        assert resolve_tokens(definition, "none")["UNIT"] == ""

    @pytest.mark.unit
    def test_malformed_scalar_uses_default(self):
        """A mapping stored in a number field falls back to its default."""
        definition = fields.number().set_label("Size").set_default(4).build("size")
        assert resolve_tokens(definition, {"oops": 1})["VALUE"] == "4"

    @pytest.mark.unit
    def test_color(self):
        """Colours produce VALUE only."""
        definition = fields.color().set_label("Color").build("color")
        assert resolve_tokens(definition, "#fff") == {"VALUE": "#fff"}

    @pytest.mark.unit
    def test_color_trimmed(self):
        definition = fields.color().set_label("Color").build("color")
        assert resolve_tokens(definition, "  #3B82F6 \n") == {"VALUE": "#3B82F6"}


class TestDimensionResolver:
    """Tests for the dimension resolver."""

    @pytest.fixture
    def padding(self):
        return fields.dimension().set_label("Padding").build("padding")

    @pytest.mark.unit
    def test_sides_and_unit(self, padding):
        """Each side becomes a token; the value's unit wins."""
        tokens = resolve_tokens(padding, {"top": 12, "right": 24, "bottom": 12, "left": 24, "unit": "em"})
        assert tokens["VALUE.TOP"] == "12"
        assert tokens["VALUE.RIGHT"] == "24"
        assert tokens["UNIT"] == "em"
        assert tokens["VALUE"] == "12em 24em 12em 24em"

    @pytest.mark.unit
    def test_missing_side_is_zero(self, padding):
        """Absent sides resolve to 0."""
        tokens = resolve_tokens(padding, {"top": 5, "unit": "px"})
        assert tokens["VALUE.LEFT"] == "0"
        assert tokens["VALUE"] == "5px 0px 0px 0px"

    @pytest.mark.unit
    def test_unit_fallbacks(self):
        """Unit falls back to the field unit, then px."""
        with_unit = fields.dimension().set_label("M").set_unit("rem").build("m")
        assert resolve_tokens(with_unit, {"top": 1})["UNIT"] == "rem"
        without = fields.dimension().set_label("M").build("m")
        assert resolve_tokens(without, {"top": 1})["UNIT"] == "px"

    @pytest.mark.unit
    def test_scalar_value_falls_back(self):
        """A scalar stored in a dimension field uses the field default."""
        definition = (
            fields.dimension()
            .set_label("Padding")
            .set_default({"top": 3, "right": 3, "bottom": 3, "left": 3})
            .build("padding")
        )
        assert resolve_tokens(definition, 12)["VALUE.TOP"] == "3"

    @pytest.mark.unit
    def test_keyword_sides_keep_no_unit(self, padding):
        """Non-numeric sides appear verbatim in the shorthand."""
        tokens = resolve_tokens(padding, {"top": 0, "right": "auto", "bottom": 0, "left": "auto"})
        assert tokens["VALUE"] == "0px auto 0px auto"


class TestAlignmentResolver:
    """Tests for the alignment resolver."""

    @pytest.mark.unit
    def test_text_align(self):
        """text-align passes keywords through."""
        definition = fields.alignment().set_label("Align").as_text_align().build("align")
        assert resolve_tokens(definition, "center") == {"VALUE": "center", "PROPERTY": "text-align"}

    @pytest.mark.unit
    def test_flex_axis_maps_keywords(self):
        """Flex axes translate left/right to flex-start/flex-end."""
        definition = fields.alignment().set_label("Align").as_flex_align().build("align")
        assert resolve_tokens(definition, "left")["VALUE"] == "flex-start"
        assert resolve_tokens(definition, "right")["VALUE"] == "flex-end"
        assert resolve_tokens(definition, "left")["PROPERTY"] == "justify-content"

    @pytest.mark.unit
    def test_text_axis_maps_flex_keywords(self):
        """text-align translates flex keywords back."""
        definition = fields.alignment().set_label("Align").build("align")
        assert resolve_tokens(definition, "flex-end")["VALUE"] == "right"

    @pytest.mark.unit
    def test_none_resolves_to_nothing(self):
        """The none keyword disables output."""
        definition = fields.alignment().set_label("Align").build("align")
        assert resolve_tokens(definition, "none") is None

    @pytest.mark.unit
    def test_empty_keeps_property(self):
        """An empty keyword is an empty VALUE, not an absence."""
        definition = fields.alignment().set_label("Align").as_flex_align().build("align")
        assert resolve_tokens(definition, "") == {"VALUE": "", "PROPERTY": "justify-content"}


class TestTypographyResolver:
    """Tests for the typography resolver."""

    @pytest.fixture
    def typography(self):
        return fields.typography_group().set_label("Typography").build("typography")

    @pytest.mark.unit
    def test_declarations_skip_neutral_values(self, typography):
        """inherit, normal, none and zero spacing emit nothing."""
        declarations = _declarations(
            typography,
            {
                "font_family": "inherit",
                "font_size": {"value": 24, "unit": "px"},
                "font_weight": "700",
                "font_style": "normal",
                "text_transform": "uppercase",
                "line_height": {"value": 1.2, "unit": "em"},
                "letter_spacing": {"value": 0, "unit": "px"},
            },
        )
        assert declarations == [
            "font-size: 24px;",
            "font-weight: 700;",
            "text-transform: uppercase;",
            "line-height: 1.2em;",
        ]

    @pytest.mark.unit
    def test_nonzero_spacing(self, typography):
        """Non-zero spacing is emitted with its unit."""
        declarations = _declarations(typography, {"letter_spacing": {"value": 2, "unit": "px"}})
        assert declarations == ["letter-spacing: 2px;"]

    @pytest.mark.unit
    def test_tokens_fill_from_defaults(self, typography):
        """Tokens absent from the value come from the stock typography."""
        tokens = resolve_tokens(typography, {"font_weight": "600"})
        assert tokens["FONT_WEIGHT"] == "600"
        assert tokens["FONT_SIZE"] == "16px"
        assert tokens["LINE_HEIGHT"] == "1.4em"

    @pytest.mark.unit
    def test_declarations_merge_field_default(self):
        """Declared defaults fill keys the stored value leaves out."""
        definition = (
            fields.typography_group()
            .set_label("Typography")
            .set_default({"font_weight": "700", "text_transform": "uppercase"})
            .build("typography")
        )
        declarations = _declarations(definition, {"font_size": {"value": 24, "unit": "px"}})
        assert declarations == [
            "font-size: 24px;",
            "font-weight: 700;",
            "text-transform: uppercase;",
        ]


class TestBackgroundResolver:
    """Tests for the background resolver."""

    @pytest.fixture
    def background(self):
        return fields.background_group().set_label("Background").build("background")

    @pytest.mark.unit
    def test_color(self, background):
        """Colour backgrounds emit background-color."""
        assert _declarations(background, {"type": "color", "color": "#123456"}) == [
            "background-color: #123456;"
        ]

    @pytest.mark.unit
    def test_linear_gradient(self, background):
        """Linear gradients use angle and colour stops."""
        value = {
            "type": "gradient",
            "gradient": {
                "type": "linear",
                "angle": 90,
                "colorStops": [{"color": "#000", "position": 0}, {"color": "#fff", "position": 100}],
            },
        }
        assert _declarations(background, value) == [
            "background: linear-gradient(90deg, #000 0%, #fff 100%);"
        ]

    @pytest.mark.unit
    def test_radial_gradient(self, background):
        """Radial gradients are circles."""
        value = {
            "type": "gradient",
            "gradient": {"type": "radial", "colorStops": [{"color": "red", "position": 10}]},
        }
        assert _declarations(background, value) == ["background: radial-gradient(circle, red 10%);"]

    @pytest.mark.unit
    def test_image(self, background):
        """Image backgrounds emit the four image properties."""
        value = {"type": "image", "image": {"url": "/a.png"}}
        assert _declarations(background, value) == [
            "background-image: url('/a.png');",
            "background-size: cover;",
            "background-position: center center;",
            "background-repeat: no-repeat;",
        ]

    @pytest.mark.unit
    def test_none_and_image_without_url(self, background):
        """No type or an image without URL emits nothing."""
        assert _declarations(background, {"type": "none"}) == []
        assert _declarations(background, {"type": "image", "image": {"url": ""}}) == []

    @pytest.mark.unit
    def test_hover_block(self, background):
        """A hover colour adds a :hover block after the base block."""
        resolver = get_resolver(FieldType.BACKGROUND_GROUP)
        blocks = resolver.blocks(
            background, {"type": "color", "color": "#000", "hover": {"color": "#111"}}
        )
        assert blocks == [
            DeclarationBlock(("background-color: #000;",)),
            DeclarationBlock(("background-color: #111;",), suffix=":hover"),
        ]


class TestBorderShadowResolver:
    """Tests for the border and shadow resolver."""

    @pytest.fixture
    def border(self):
        return fields.border_shadow_group().set_label("Border").build("border")

    @pytest.mark.unit
    def test_default_emits_nothing(self, border):
        """Zero widths, zero radius and no shadow produce nothing."""
        assert _declarations(border, border.default) == []

    @pytest.mark.unit
    def test_border_and_radius(self, border):
        """Widths, style, colour and radius are emitted in px."""
        value = {
            "border": {
                "width": {"top": 1, "right": 1, "bottom": 2, "left": 1},
                "style": "dashed",
                "color": "#ccc",
                "radius": {"top": 4, "right": 4, "bottom": 4, "left": 4},
            }
        }
        assert _declarations(border, value) == [
            "border-width: 1px 1px 2px 1px;",
            "border-style: dashed;",
            "border-color: #ccc;",
            "border-radius: 4px 4px 4px 4px;",
        ]

    @pytest.mark.unit
    def test_shadow_defaults_and_inset(self, border):
        """Shadows fill missing offsets and honour inset."""
        value = {"shadow": {"type": "drop", "inset": True}}
        assert _declarations(border, value) == ["box-shadow: inset 0px 2px 4px 0px rgba(0,0,0,0.1);"]

    @pytest.mark.unit
    def test_corner_aliases(self, border):
        """Radius accepts corner names."""
        value = {"border": {"radius": {"top-left": 2, "bottom-right": 2}}}
        assert _declarations(border, value) == ["border-radius: 2px 0px 2px 0px;"]


class TestStructuredResolver:
    """Tests for markup-only types."""

    @pytest.mark.unit
    def test_no_tokens(self):
        """Structured types produce no tokens or blocks."""
        definition = fields.icon().set_label("Icon").build("icon")
        assert resolve_tokens(definition, "las la-star") == {}
        assert _declarations(definition, "las la-star") == []
