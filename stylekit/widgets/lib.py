"""Widget abstraction, explicit registry and page-level CSS.

A widget declares two control schemas, ``general`` (content and
behaviour, feeding the wrapper class and style attributes) and ``style``
(feeding the CSS compiler). Stored widget settings are shaped
``{"general": {...}, "style": {...}}``.
"""

import html
from abc import ABC, abstractmethod
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar, Protocol, runtime_checkable

from stylekit.attributes import build_css_classes, generate_style_attribute
from stylekit.config import get_widget_class_prefix
from stylekit.core import get_logger
from stylekit.css import CompilerOptions, CompileWarning, CSSResult, compile_css, join_css
from stylekit.schema import ControlSchema, SettingsCategory
from stylekit.validation import ValidationError, validate_settings

logger = get_logger("widgets")


class WidgetCategory(str, Enum):
    """Palette category a widget is listed under."""

    CORE = "core"
    LAYOUT = "layout"
    MEDIA = "media"
    FORM = "form"
    ADVANCED = "advanced"


@runtime_checkable
class TemplateRenderer(Protocol):
    """Renders a named template with a context.

    Injected into widgets; any template engine can sit behind it.
    """

    def render(self, template: str, context: Mapping[str, Any]) -> str: ...


# =============================================================================
# Widget base class
# =============================================================================


class Widget(ABC):
    """Abstract base class for widgets.

    Subclasses must implement:
        - widget_type, name, description, category, tags
        - build_general_fields / build_style_fields: schema declarations
        - render_html: manual HTML builder used without a template

    Schemas are built once per widget class and shared by all instances.

    Example:
        >>> class Divider(Widget):
        ...     widget_type = "divider"
        ...     ...
        >>> Divider().generate_css("widget-1", {"style": {...}})
    """

    template: ClassVar[str | None] = None
    _schema_cache: ClassVar[dict[SettingsCategory, ControlSchema]]

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        cls._schema_cache = {}

    def __init__(self, renderer: TemplateRenderer | None = None):
        self._renderer = renderer

    @property
    @abstractmethod
    def widget_type(self) -> str:
        """Widget identifier (e.g., 'heading')."""
        ...

    @property
    @abstractmethod
    def name(self) -> str:
        ...

    @property
    @abstractmethod
    def description(self) -> str:
        ...

    @property
    @abstractmethod
    def category(self) -> WidgetCategory:
        ...

    @property
    def tags(self) -> tuple[str, ...]:
        return ()

    @abstractmethod
    def build_general_fields(self) -> ControlSchema:
        """Declare the general (content) schema."""
        ...

    @abstractmethod
    def build_style_fields(self) -> ControlSchema:
        """Declare the style schema."""
        ...

    @abstractmethod
    def render_html(self, context: Mapping[str, Any]) -> str:
        """Build HTML without a template engine."""
        ...

    # -------------------------------------------------------------------------
    # Schemas
    # -------------------------------------------------------------------------

    def get_general_fields(self) -> ControlSchema:
        return self._schema(SettingsCategory.GENERAL, self.build_general_fields)

    def get_style_fields(self) -> ControlSchema:
        return self._schema(SettingsCategory.STYLE, self.build_style_fields)

    def _schema(self, category: SettingsCategory, build) -> ControlSchema:
        cache = type(self)._schema_cache
        if category not in cache:
            logger.debug(f"Building {category.value} schema for '{self.widget_type}'")
            cache[category] = build()
        return cache[category]

    def default_settings(self) -> dict[str, Any]:
        return {
            SettingsCategory.GENERAL.value: self.get_general_fields().defaults(),
            SettingsCategory.STYLE.value: self.get_style_fields().defaults(),
        }

    # -------------------------------------------------------------------------
    # Output
    # -------------------------------------------------------------------------

    def compile_css(
        self,
        widget_id: str,
        settings: Mapping[str, Any] | None,
        section_id: str | None = None,
        options: CompilerOptions | None = None,
    ) -> CSSResult:
        return compile_css(
            widget_id,
            self.get_style_fields(),
            _section(settings, SettingsCategory.STYLE),
            section_id=section_id,
            options=options,
        )

    def generate_css(
        self,
        widget_id: str,
        settings: Mapping[str, Any] | None,
        section_id: str | None = None,
        options: CompilerOptions | None = None,
    ) -> str:
        """Compile the style settings into CSS scoped to #widget_id."""
        return self.compile_css(widget_id, settings, section_id, options).css

    def base_classes(self, prefix: str | None = None) -> tuple[str, ...]:
        prefix = get_widget_class_prefix(prefix)
        return (f"{prefix}-widget", f"{prefix}-{self.widget_type}")

    def build_css_classes(self, settings: Mapping[str, Any] | None) -> str:
        return build_css_classes(
            self.get_general_fields(),
            _section(settings, SettingsCategory.GENERAL),
            base_classes=self.base_classes(),
        )

    def generate_style_attribute(self, settings: Mapping[str, Any] | None) -> str:
        return generate_style_attribute(
            self.get_general_fields(), _section(settings, SettingsCategory.GENERAL)
        )

    def validate_settings(self, settings: Mapping[str, Any] | None) -> list[ValidationError]:
        """Validate both sections; paths are prefixed with the section name."""
        errors: list[ValidationError] = []
        for category, schema in (
            (SettingsCategory.GENERAL, self.get_general_fields()),
            (SettingsCategory.STYLE, self.get_style_fields()),
        ):
            for error in validate_settings(schema, _section(settings, category)):
                error.path = f"{category.value}.{error.path}"
                errors.append(error)
        return errors

    def template_context(
        self, settings: Mapping[str, Any] | None, widget_id: str | None = None
    ) -> dict[str, Any]:
        """Context handed to a TemplateRenderer or render_html."""
        return {
            "widget_type": self.widget_type,
            "widget_id": widget_id,
            "general": self.get_general_fields().apply_defaults(
                _section(settings, SettingsCategory.GENERAL)
            ),
            "style": self.get_style_fields().apply_defaults(
                _section(settings, SettingsCategory.STYLE)
            ),
            "css_classes": self.build_css_classes(settings),
            "style_attribute": self.generate_style_attribute(settings),
        }

    def render(
        self, settings: Mapping[str, Any] | None = None, widget_id: str | None = None
    ) -> str:
        """Render the widget's HTML.

        Uses the injected TemplateRenderer when the widget names a
        template, otherwise the manual builder.
        """
        context = self.template_context(settings, widget_id)
        if self._renderer is not None and self.template:
            return self._renderer.render(self.template, context)
        return self.render_html(context)

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.widget_type,
            "name": self.name,
            "description": self.description,
            "category": self.category.value,
            "tags": list(self.tags),
        }


def _section(settings: Mapping[str, Any] | None, category: SettingsCategory) -> dict[str, Any]:
    if not settings:
        return {}
    section = settings.get(category.value)
    return dict(section) if isinstance(section, Mapping) else {}


def wrapper_attributes(context: Mapping[str, Any]) -> str:
    """Render id, class and style attributes for a widget's root element."""
    parts = []
    if context.get("widget_id"):
        parts.append(f'id="{html.escape(context["widget_id"], quote=True)}"')
    parts.append(f'class="{html.escape(context["css_classes"], quote=True)}"')
    if context.get("style_attribute"):
        parts.append(f'style="{html.escape(context["style_attribute"], quote=True)}"')
    return " ".join(parts)


# =============================================================================
# Registry
# =============================================================================


class WidgetRegistry:
    """Explicit registry of widget instances keyed by widget type.

    Example:
        >>> registry = WidgetRegistry()
        >>> registry.register(HeadingWidget)
        >>> registry.get("heading").generate_css("widget-1", settings)
    """

    def __init__(self, renderer: TemplateRenderer | None = None):
        self._renderer = renderer
        self._widgets: dict[str, Widget] = {}

    def register(self, widget: Widget | type[Widget]) -> Widget:
        """Register a widget instance or class.

        Classes are instantiated with the registry's renderer.

        Raises:
            ValueError: If the widget type is already registered.
        """
        if isinstance(widget, type):
            widget = widget(renderer=self._renderer)
        if widget.widget_type in self._widgets:
            raise ValueError(f"Widget type '{widget.widget_type}' is already registered")
        self._widgets[widget.widget_type] = widget
        return widget

    def get(self, widget_type: str) -> Widget:
        """Get a registered widget.

        Raises:
            KeyError: If no widget with that type is registered.
        """
        if widget_type not in self._widgets:
            available = ", ".join(self.list_types()) or "(none)"
            raise KeyError(f"Unknown widget type '{widget_type}'. Available: {available}")
        return self._widgets[widget_type]

    def list_types(self) -> list[str]:
        return sorted(self._widgets)

    def by_category(self, category: WidgetCategory | str) -> list[Widget]:
        category = WidgetCategory(category)
        return [w for w in self._widgets.values() if w.category == category]

    def __contains__(self, widget_type: object) -> bool:
        return widget_type in self._widgets

    def __iter__(self) -> Iterator[Widget]:
        return iter(self._widgets.values())

    def __len__(self) -> int:
        return len(self._widgets)


def create_default_registry(renderer: TemplateRenderer | None = None) -> WidgetRegistry:
    """Create a registry holding the built-in widgets."""
    from stylekit.widgets.button import ButtonWidget
    from stylekit.widgets.heading import HeadingWidget
    from stylekit.widgets.spacer import SpacerWidget

    registry = WidgetRegistry(renderer=renderer)
    for widget_cls in (HeadingWidget, ButtonWidget, SpacerWidget):
        registry.register(widget_cls)
    return registry


# =============================================================================
# Page CSS
# =============================================================================


@dataclass
class WidgetInstance:
    """A placed widget: its type, DOM id, stored settings and section."""

    widget_type: str
    widget_id: str
    settings: dict[str, Any] = field(default_factory=dict)
    section_id: str | None = None


def generate_page_css(
    registry: WidgetRegistry,
    instances: Iterable[WidgetInstance],
    options: CompilerOptions | None = None,
) -> CSSResult:
    """Compile every instance on a page, in order, into one stylesheet.

    Instances of unknown widget types are skipped with a warning. Warning
    paths are prefixed with the instance's widget id.
    """
    options = options or CompilerOptions()
    chunks: list[str] = []
    warnings: list[CompileWarning] = []
    rule_count = 0

    for instance in instances:
        if instance.widget_type not in registry:
            logger.warning(
                f"Skipping '{instance.widget_id}': unknown widget type '{instance.widget_type}'"
            )
            warnings.append(
                CompileWarning(
                    field_path=instance.widget_id,
                    message=f"Unknown widget type '{instance.widget_type}'",
                )
            )
            continue

        result = registry.get(instance.widget_type).compile_css(
            instance.widget_id, instance.settings, instance.section_id, options
        )
        chunks.append(result.css)
        rule_count += result.rule_count
        for warning in result.warnings:
            warning.field_path = f"{instance.widget_id}:{warning.field_path}"
            warnings.append(warning)

    return CSSResult(css=join_css(chunks, options), warnings=warnings, rule_count=rule_count)


__all__ = [
    "TemplateRenderer",
    "Widget",
    "WidgetCategory",
    "WidgetInstance",
    "WidgetRegistry",
    "create_default_registry",
    "generate_page_css",
    "wrapper_attributes",
]
