"""Schema module - authoritative source for widget control definitions.

This module provides:
- Field type catalog with rich metadata
- Immutable FieldDefinition / Group / Tab / ControlSchema models
- Settings tree path helpers
- Schema construction errors

Example usage:
    >>> from stylekit.schema import FieldType, get_field_type_meta
    >>> get_field_type_meta(FieldType.DIMENSION).tokens
    ('VALUE', 'VALUE.TOP', 'VALUE.RIGHT', 'VALUE.BOTTOM', 'VALUE.LEFT', 'UNIT')
"""

from .lib import (
    DEFAULT_BACKGROUND,
    DEFAULT_BORDER_SHADOW,
    DEFAULT_TYPOGRAPHY,
    DIMENSION_TOKENS,
    FIELD_TYPE_REGISTRY,
    MISSING,
    TYPOGRAPHY_TOKENS,
    AlignmentAxis,
    Breakpoint,
    CompositeRule,
    Condition,
    ConditionOperator,
    ControlSchema,
    DuplicateFieldKey,
    DuplicateGroupKey,
    FieldCategory,
    FieldDefinition,
    FieldEntry,
    FieldOption,
    FieldType,
    FieldTypeMeta,
    Group,
    InvalidFieldDefinition,
    InvalidSchemaStructure,
    MissingRequiredAttribute,
    SchemaError,
    SchemaItem,
    SelectorRule,
    SettingsCategory,
    Tab,
    TemplateRule,
    export_field_type_catalog,
    export_json_schema,
    get_field_category,
    get_field_type_meta,
    get_field_types_by_category,
    get_typed_default,
    is_responsive_value,
    lookup_path,
    resolve_field_type,
    set_path,
    split_path,
)

__all__ = [
    # Errors
    "SchemaError",
    "InvalidFieldDefinition",
    "MissingRequiredAttribute",
    "DuplicateFieldKey",
    "DuplicateGroupKey",
    "InvalidSchemaStructure",
    # Enums
    "AlignmentAxis",
    "Breakpoint",
    "ConditionOperator",
    "FieldCategory",
    "FieldType",
    "SettingsCategory",
    # Metadata
    "DEFAULT_BACKGROUND",
    "DEFAULT_BORDER_SHADOW",
    "DEFAULT_TYPOGRAPHY",
    "DIMENSION_TOKENS",
    "FIELD_TYPE_REGISTRY",
    "FieldTypeMeta",
    "TYPOGRAPHY_TOKENS",
    "get_field_category",
    "get_field_type_meta",
    "get_field_types_by_category",
    "get_typed_default",
    "resolve_field_type",
    # Models
    "CompositeRule",
    "Condition",
    "ControlSchema",
    "FieldDefinition",
    "FieldEntry",
    "FieldOption",
    "Group",
    "SchemaItem",
    "SelectorRule",
    "Tab",
    "TemplateRule",
    # Paths
    "MISSING",
    "is_responsive_value",
    "lookup_path",
    "set_path",
    "split_path",
    # Export
    "export_field_type_catalog",
    "export_json_schema",
]
