"""Tests for the spacer widget."""

import pytest

from .lib import SpacerWidget


@pytest.fixture
def widget():
    return SpacerWidget()


class TestSpacer:
    """Tests for spacer CSS and attributes."""

    @pytest.mark.unit
    def test_default_css(self, widget):
        """Only the height has a default; the background is hidden."""
        assert widget.generate_css("s", {}) == "#s .spacer-element {\n  height: 50px;\n}"

    @pytest.mark.unit
    def test_responsive_height(self, widget):
        settings = {"style": {"spacing": {"height": {"desktop": 80, "tablet": 40, "mobile": 20}}}}
        assert widget.generate_css("s", settings) == (
            "#s .spacer-element {\n  height: 80px;\n}\n\n"
            "@media (max-width: 1023px) {\n  #s .spacer-element {\n    height: 40px;\n  }\n}\n\n"
            "@media (max-width: 767px) {\n  #s .spacer-element {\n    height: 20px;\n  }\n}"
        )

    @pytest.mark.unit
    def test_background_condition(self, widget):
        settings = {"style": {"appearance": {"show_background": True}}}
        assert "background-color: #F3F4F6;" in widget.generate_css("s", settings)

    @pytest.mark.unit
    def test_visibility_classes(self, widget):
        settings = {"general": {"responsive": {"hide_on_mobile": True}}}
        assert widget.build_css_classes(settings) == (
            "stylekit-widget stylekit-spacer hide-mobile spacer-vertical"
        )

    @pytest.mark.unit
    def test_inline_style(self, widget):
        """The inline toggle only applies to horizontal spacers."""
        vertical = {"general": {"advanced_options": {"inline_spacer": True}}}
        assert widget.generate_style_attribute(vertical) == ""
        horizontal = {"general": {"advanced_options": {"spacer_type": "horizontal", "inline_spacer": True}}}
        assert widget.generate_style_attribute(horizontal) == "display: inline-block"

    @pytest.mark.unit
    def test_render(self, widget):
        assert widget.render({}, widget_id="s-1") == (
            '<div id="s-1" class="stylekit-widget stylekit-spacer spacer-vertical">'
            '<div class="spacer-element"></div></div>'
        )
