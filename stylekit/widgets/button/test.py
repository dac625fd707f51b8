"""Tests for the button widget."""

import pytest

from .lib import ButtonWidget


@pytest.fixture
def widget():
    return ButtonWidget()


class TestButtonCss:
    """Tests for button CSS output."""

    @pytest.mark.unit
    def test_defaults(self, widget):
        css = widget.generate_css("btn-1", {})
        assert "#btn-1 .simple-button {\n  padding: 12px 24px 12px 24px;\n}" in css
        assert "color: #FFFFFF;" in css
        assert "background-color: #3B82F6;" in css
        assert ":hover" not in css

    @pytest.mark.unit
    def test_padding_unit(self, widget):
        settings = {"style": {"spacing": {"padding": {"top": 1, "right": 2, "bottom": 1, "left": 2, "unit": "em"}}}}
        assert "padding: 1em 2em 1em 2em;" in widget.generate_css("b", settings)

    @pytest.mark.unit
    def test_hover_tab(self, widget):
        """Hover settings live under the hover tab."""
        settings = {
            "style": {
                "hover": {
                    "hover_colors": {
                        "hover_text_color": "#000000",
                        "hover_background": {"type": "color", "color": "#1E40AF"},
                    }
                }
            }
        }
        css = widget.generate_css("b", settings)
        assert "#b .simple-button:hover {\n  color: #000000;\n}" in css
        assert "#b .simple-button:hover {\n  background-color: #1E40AF;\n}" in css

    @pytest.mark.unit
    def test_border(self, widget):
        settings = {
            "style": {
                "normal": {
                    "text_styling": {
                        "border": {"border": {"width": {"top": 2, "right": 2, "bottom": 2, "left": 2}, "style": "solid", "color": "#000"}}
                    }
                }
            }
        }
        css = widget.generate_css("b", settings)
        assert "border-style: solid;" in css


class TestButtonAttributes:
    """Tests for button classes and HTML."""

    @pytest.mark.unit
    def test_default_classes(self, widget):
        assert widget.build_css_classes({}) == (
            "stylekit-widget stylekit-button button-primary button-size-normal text-left"
        )

    @pytest.mark.unit
    def test_full_width(self, widget):
        settings = {"general": {"type": {"button_type": "danger"}, "layout": {"width": "full"}}}
        assert widget.build_css_classes(settings).split()[-1] == "w-full"
        assert "button-danger" in widget.build_css_classes(settings)

    @pytest.mark.unit
    def test_render_new_tab(self, widget):
        settings = {"general": {"content": {"text": "Buy", "url": "/shop", "open_in_new_tab": True}}}
        html = widget.render(settings)
        assert '<a class="simple-button" href="/shop" target="_blank" rel="noopener">Buy</a>' in html

    @pytest.mark.unit
    def test_validate(self, widget):
        errors = widget.validate_settings({"general": {"type": {"size": "huge"}}})
        assert [(e.path, e.error_type) for e in errors] == [("general.type.size", "invalid_option")]
