"""Tests for the heading widget."""

import pytest

from .lib import HeadingWidget


@pytest.fixture
def widget():
    return HeadingWidget()


class TestHeadingCss:
    """Tests for heading CSS output."""

    @pytest.mark.unit
    def test_defaults(self, widget):
        """Default typography and margin compile; unset colours do not."""
        css = widget.generate_css("widget-42", {})
        assert css == (
            "#widget-42 .heading-element {\n"
            "  font-size: 16px;\n"
            "  font-weight: 400;\n"
            "  line-height: 1.4em;\n"
            "}\n\n"
            "#widget-42 .heading-element {\n"
            "  margin: 0px 0px 0px 0px;\n"
            "}"
        )

    @pytest.mark.unit
    def test_colors(self, widget):
        settings = {"style": {"colors": {"text_color": "#222222", "hover_color": "#ff6600"}}}
        css = widget.generate_css("h", settings, section_id="sec-7")
        assert "#sec-7 #h .heading-element {\n  color: #222222;\n}" in css
        assert "#sec-7 #h .heading-element:hover {\n  color: #ff6600;\n}" in css

    @pytest.mark.unit
    def test_responsive_typography(self, widget):
        settings = {
            "style": {
                "typography": {
                    "heading_typography": {
                        "desktop": {"font_size": {"value": 40, "unit": "px"}},
                        "mobile": {"font_size": {"value": 24, "unit": "px"}},
                    }
                }
            }
        }
        css = widget.generate_css("h", settings)
        assert css.index("font-size: 40px;") < css.index("@media (max-width: 767px)")
        assert css.index("@media (max-width: 767px)") < css.index("font-size: 24px;")


class TestHeadingRender:
    """Tests for heading HTML."""

    @pytest.mark.unit
    def test_default_render(self, widget):
        assert widget.render() == (
            '<div class="stylekit-widget stylekit-heading heading-h2 align-left">'
            '<h2 class="heading-element">Your Heading Text</h2></div>'
        )

    @pytest.mark.unit
    def test_level_and_escaping(self, widget):
        html = widget.render({"general": {"content": {"heading_text": "<b>Hi</b>", "heading_level": "h4"}}})
        assert '<h4 class="heading-element">&lt;b&gt;Hi&lt;/b&gt;</h4>' in html

    @pytest.mark.unit
    def test_invalid_level_falls_back(self, widget):
        html = widget.render({"general": {"content": {"heading_level": "h9"}}})
        assert "<h2 " in html

    @pytest.mark.unit
    def test_link(self, widget):
        settings = {
            "general": {"link": {"link": {"url": "https://example.test", "target": "_blank", "nofollow": True}}}
        }
        html = widget.render(settings, widget_id="h-1")
        assert html.startswith('<div id="h-1" ')
        assert '<a href="https://example.test" target="_blank" rel="nofollow">' in html

    @pytest.mark.unit
    def test_alignment_none_adds_no_class(self, widget):
        classes = widget.build_css_classes({"general": {"content": {"text_align": "none"}}})
        assert classes == "stylekit-widget stylekit-heading heading-h2"
