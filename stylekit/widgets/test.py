"""Tests for the widget base class, registry and page CSS."""

import pytest

from stylekit import fields
from stylekit.controls import ControlSchemaBuilder
from stylekit.css import CompilerOptions
from stylekit.schema import SettingsCategory

from .lib import (
    TemplateRenderer,
    Widget,
    WidgetCategory,
    WidgetInstance,
    WidgetRegistry,
    create_default_registry,
    generate_page_css,
    wrapper_attributes,
)


class BadgeWidget(Widget):
    """Minimal widget used to exercise the base class."""

    template = "widgets/badge"
    builds = 0

    @property
    def widget_type(self) -> str:
        return "badge"

    @property
    def name(self) -> str:
        return "Badge"

    @property
    def description(self) -> str:
        return "Small label"

    @property
    def category(self) -> WidgetCategory:
        return WidgetCategory.ADVANCED

    def build_general_fields(self):
        return (
            ControlSchemaBuilder(SettingsCategory.GENERAL)
            .add_group("content", "Content")
            .register_field("label", fields.text().set_label("Label").set_default("New").set_required())
            .register_field(
                "pill",
                fields.toggle().set_label("Pill").set_default(False).set_class_template("badge-pill"),
            )
            .end_group()
            .get_fields()
        )

    def build_style_fields(self):
        type(self).builds += 1
        return (
            ControlSchemaBuilder(SettingsCategory.STYLE)
            .add_group("colors", "Colors")
            .register_field(
                "color",
                fields.color()
                .set_label("Color")
                .set_default("#111111")
                .set_selectors({"{{WRAPPER}} .badge": "color: {{VALUE}};"}),
            )
            .end_group()
            .get_fields()
        )

    def render_html(self, context):
        return f"<span {wrapper_attributes(context)}>{context['general']['content']['label']}</span>"


class RecordingRenderer:
    def __init__(self):
        self.calls = []

    def render(self, template, context):
        self.calls.append((template, context))
        return f"<{template}>"


class TestWidget:
    """Tests for the Widget base class."""

    @pytest.mark.unit
    def test_schemas_cached_per_class(self):
        """Style schemas are built once and shared across instances."""
        first, second = BadgeWidget(), BadgeWidget()
        before = BadgeWidget.builds
        schema = first.get_style_fields()
        assert second.get_style_fields() is schema
        assert BadgeWidget.builds - before <= 1

    @pytest.mark.unit
    def test_generate_css_uses_style_section(self):
        css = BadgeWidget().generate_css("badge-1", {"style": {"colors": {"color": "#f00"}}})
        assert css == "#badge-1 .badge {\n  color: #f00;\n}"

    @pytest.mark.unit
    def test_generate_css_defaults(self):
        """Missing sections compile from defaults."""
        assert "color: #111111;" in BadgeWidget().generate_css("b", None)

    @pytest.mark.unit
    def test_css_classes(self):
        widget = BadgeWidget()
        assert widget.build_css_classes({}) == "stylekit-widget stylekit-badge"
        assert (
            widget.build_css_classes({"general": {"content": {"pill": True}}})
            == "stylekit-widget stylekit-badge badge-pill"
        )

    @pytest.mark.unit
    def test_class_prefix_from_environment(self, monkeypatch):
        monkeypatch.setenv("STYLEKIT_WIDGET_CLASS_PREFIX", "xgp")
        assert BadgeWidget().base_classes() == ("xgp-widget", "xgp-badge")

    @pytest.mark.unit
    def test_validate_settings_prefixes_section(self):
        errors = BadgeWidget().validate_settings({"style": {"colors": {"color": "nope"}}})
        assert [e.path for e in errors] == ["style.colors.color"]

    @pytest.mark.unit
    def test_render_manual(self):
        """Without a renderer the manual builder is used."""
        html = BadgeWidget().render({"general": {"content": {"label": "Hot"}}}, widget_id="b-1")
        assert html == '<span id="b-1" class="stylekit-widget stylekit-badge">Hot</span>'

    @pytest.mark.unit
    def test_render_with_template_renderer(self):
        """An injected renderer receives the template and context."""
        renderer = RecordingRenderer()
        assert isinstance(renderer, TemplateRenderer)
        html = BadgeWidget(renderer=renderer).render({}, widget_id="b-2")
        assert html == "<widgets/badge>"
        ((template, context),) = renderer.calls
        assert template == "widgets/badge"
        assert context["widget_id"] == "b-2"
        assert context["general"]["content"]["label"] == "New"

    @pytest.mark.unit
    def test_default_settings(self):
        defaults = BadgeWidget().default_settings()
        assert defaults == {
            "general": {"content": {"label": "New", "pill": False}},
            "style": {"colors": {"color": "#111111"}},
        }


class TestWidgetRegistry:
    """Tests for WidgetRegistry."""

    @pytest.mark.unit
    def test_register_and_get(self):
        registry = WidgetRegistry()
        widget = registry.register(BadgeWidget)
        assert registry.get("badge") is widget
        assert "badge" in registry
        assert len(registry) == 1

    @pytest.mark.unit
    def test_duplicate(self):
        registry = WidgetRegistry()
        registry.register(BadgeWidget())
        with pytest.raises(ValueError, match="already registered"):
            registry.register(BadgeWidget)

    @pytest.mark.unit
    def test_unknown(self):
        with pytest.raises(KeyError, match="Available"):
            WidgetRegistry().get("carousel")

    @pytest.mark.unit
    def test_registries_are_independent(self):
        """Registries hold no shared state."""
        first, second = create_default_registry(), WidgetRegistry()
        assert first.list_types() == ["button", "heading", "spacer"]
        assert second.list_types() == []

    @pytest.mark.unit
    def test_by_category(self):
        registry = create_default_registry()
        assert [w.widget_type for w in registry.by_category("layout")] == ["spacer"]

    @pytest.mark.unit
    def test_renderer_passed_to_classes(self):
        renderer = RecordingRenderer()
        registry = WidgetRegistry(renderer=renderer)
        registry.register(BadgeWidget)
        registry.get("badge").render({})
        assert len(renderer.calls) == 1


class TestGeneratePageCss:
    """Tests for generate_page_css."""

    @pytest.mark.unit
    def test_instances_in_order(self):
        registry = WidgetRegistry()
        registry.register(BadgeWidget)
        result = generate_page_css(
            registry,
            [
                WidgetInstance("badge", "b-1", {"style": {"colors": {"color": "red"}}}),
                WidgetInstance("badge", "b-2", {}, section_id="sec-1"),
            ],
        )
        assert result.css == (
            "#b-1 .badge {\n  color: red;\n}\n\n"
            "#sec-1 #b-2 .badge {\n  color: #111111;\n}"
        )
        assert result.rule_count == 2

    @pytest.mark.unit
    def test_unknown_widget_skipped(self):
        registry = WidgetRegistry()
        registry.register(BadgeWidget)
        result = generate_page_css(
            registry,
            [WidgetInstance("carousel", "c-1"), WidgetInstance("badge", "b-1")],
            options=CompilerOptions(minify=True),
        )
        assert result.css == "#b-1 .badge{color:#111111;}"
        (warning,) = result.warnings
        assert warning.field_path == "c-1"
