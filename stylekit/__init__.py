"""stylekit: widget style controls and scoped CSS generation."""

from stylekit.controls import ControlSchemaBuilder
from stylekit.css import CompilerOptions, CSSResult, compile_css, generate_css
from stylekit.schema import (
    ControlSchema,
    FieldDefinition,
    FieldType,
    SchemaError,
    export_json_schema,
)
from stylekit.validation import ValidationError, is_valid_settings, validate_settings
from stylekit.widgets import Widget, WidgetRegistry, create_default_registry

__all__ = [
    # Schema
    "ControlSchema",
    "ControlSchemaBuilder",
    "FieldDefinition",
    "FieldType",
    "SchemaError",
    "export_json_schema",
    # CSS
    "CompilerOptions",
    "CSSResult",
    "compile_css",
    "generate_css",
    # Validation
    "ValidationError",
    "is_valid_settings",
    "validate_settings",
    # Widgets
    "Widget",
    "WidgetRegistry",
    "create_default_registry",
]
