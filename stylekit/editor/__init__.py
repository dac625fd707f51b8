"""Editor boundary: schema descriptors and unknown-type warnings."""

from stylekit.editor.lib import (
    EditorSchema,
    FieldDescriptor,
    FieldWarning,
    GroupDescriptor,
    describe_schema,
    render_field_warning,
)
from stylekit.schema import export_json_schema

__all__ = [
    # Parsing
    "describe_schema",
    "EditorSchema",
    "GroupDescriptor",
    "FieldDescriptor",
    # Warnings
    "FieldWarning",
    "render_field_warning",
    # JSON Schema
    "export_json_schema",
]
