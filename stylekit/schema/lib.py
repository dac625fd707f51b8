"""Authoritative schema module for widget style controls.

This module is the single source of truth for the control data model:
- Field type catalog with rich metadata (tokens, capabilities, defaults)
- Immutable FieldDefinition / Group / Tab / ControlSchema models
- Settings tree path helpers shared by the compiler and evaluator
- The error hierarchy raised while constructing schemas

All schema-related queries should route through this module.
"""

import copy
from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

# =============================================================================
# Errors
# =============================================================================


class SchemaError(Exception):
    """Base class for schema construction errors.

    These are programmer errors raised while a widget declares its
    controls, never while compiling stored settings.
    """


class InvalidFieldDefinition(SchemaError, ValueError):
    """A field declaration is inconsistent with its type."""


class MissingRequiredAttribute(InvalidFieldDefinition):
    """A field was built without a required attribute (key or label)."""

    def __init__(self, attribute: str, field_type: str = ""):
        self.attribute = attribute
        self.field_type = field_type
        target = f" {field_type} field" if field_type else " field"
        super().__init__(f"Cannot build{target}: missing required '{attribute}'")


class DuplicateFieldKey(SchemaError, ValueError):
    """A field key was registered twice in the same group."""

    def __init__(self, key: str, group: str):
        self.key = key
        self.group = group
        super().__init__(f"Field '{key}' is already registered in group '{group}'")


class DuplicateGroupKey(SchemaError, ValueError):
    """A group or tab key was declared twice in the same scope."""

    def __init__(self, key: str, scope: str = "root"):
        self.key = key
        self.scope = scope
        super().__init__(f"Key '{key}' is already declared in scope '{scope}'")


class InvalidSchemaStructure(SchemaError, ValueError):
    """Tabs and groups were opened or closed out of order."""


# =============================================================================
# Enums
# =============================================================================


class FieldType(str, Enum):
    """Field types a widget may declare."""

    TEXT = "text"
    TEXTAREA = "textarea"
    URL = "url"
    SELECT = "select"
    TOGGLE = "toggle"
    NUMBER = "number"
    COLOR = "color"
    DIMENSION = "dimension"
    BACKGROUND_GROUP = "background_group"
    TYPOGRAPHY_GROUP = "typography_group"
    BORDER_SHADOW_GROUP = "border_shadow_group"
    ALIGNMENT = "alignment"
    ICON = "icon"
    IMAGE = "image"
    REPEATER = "repeater"
    LINK_GROUP = "link_group"


class FieldCategory(str, Enum):
    """How a field type's value reaches CSS.

    - SCALAR: single value substituted into templates
    - COLOR: single colour value
    - DIMENSION: four sides plus a unit
    - ALIGNMENT: enum value mapped per CSS axis
    - COMPOSITE: resolver emits whole declaration sets
    - STRUCTURED: consumed by render() only, never by CSS
    """

    SCALAR = "scalar"
    COLOR = "color"
    DIMENSION = "dimension"
    ALIGNMENT = "alignment"
    COMPOSITE = "composite"
    STRUCTURED = "structured"


class SettingsCategory(str, Enum):
    """Settings panel a schema belongs to."""

    GENERAL = "general"
    STYLE = "style"


class ConditionOperator(str, Enum):
    """Comparison operators supported by field conditions."""

    EQ = "eq"
    NEQ = "neq"
    GT = "gt"
    LT = "lt"
    IN = "in"


class AlignmentAxis(str, Enum):
    """CSS property an alignment field drives."""

    TEXT_ALIGN = "text-align"
    JUSTIFY_CONTENT = "justify-content"
    ALIGN_ITEMS = "align-items"


class Breakpoint(str, Enum):
    """Breakpoints a responsive value may carry, widest first."""

    DESKTOP = "desktop"
    TABLET = "tablet"
    MOBILE = "mobile"


# =============================================================================
# Field Type Metadata
# =============================================================================


@dataclass(frozen=True)
class FieldTypeMeta:
    """Rich metadata for a field type.

    Attributes:
        type: The field type.
        category: How values of this type reach CSS.
        description: Human-readable description.
        tokens: Template tokens the type's resolver produces.
        choice_like: Whether the type accepts a list of options.
        supports_unit: Whether a unit may be declared.
        supports_range: Whether min/max/step may be declared.
        default: Typed default used when neither the stored value nor
            the field default has a usable shape.
    """

    type: FieldType
    category: FieldCategory
    description: str
    tokens: tuple[str, ...] = field(default_factory=tuple)
    choice_like: bool = False
    supports_unit: bool = False
    supports_range: bool = False
    default: Any = None

    @property
    def accepts_selectors(self) -> bool:
        """Structured types never produce CSS."""
        return self.category != FieldCategory.STRUCTURED

    @property
    def is_composite(self) -> bool:
        return self.category == FieldCategory.COMPOSITE

    def to_dict(self) -> dict[str, Any]:
        """Convert metadata to dictionary for schema export."""
        return {
            "type": self.type.value,
            "category": self.category.value,
            "description": self.description,
            "tokens": list(self.tokens),
            "choice_like": self.choice_like,
            "supports_unit": self.supports_unit,
            "supports_range": self.supports_range,
            "default": copy.deepcopy(self.default),
        }


_SCALAR_TOKENS = ("VALUE", "UNIT")
_SIDES = ("top", "right", "bottom", "left")

DIMENSION_TOKENS = (
    "VALUE",
    "VALUE.TOP",
    "VALUE.RIGHT",
    "VALUE.BOTTOM",
    "VALUE.LEFT",
    "UNIT",
)

TYPOGRAPHY_TOKENS = (
    "FONT_FAMILY",
    "FONT_SIZE",
    "FONT_WEIGHT",
    "LINE_HEIGHT",
    "LETTER_SPACING",
    "WORD_SPACING",
    "TEXT_TRANSFORM",
    "FONT_STYLE",
)

DEFAULT_TYPOGRAPHY: dict[str, Any] = {
    "font_family": "inherit",
    "font_size": {"value": 16, "unit": "px"},
    "font_weight": "400",
    "font_style": "normal",
    "text_transform": "none",
    "text_decoration": "none",
    "line_height": {"value": 1.4, "unit": "em"},
    "letter_spacing": {"value": 0, "unit": "px"},
    "word_spacing": {"value": 0, "unit": "px"},
}

DEFAULT_BACKGROUND: dict[str, Any] = {
    "type": "none",
    "color": "#000000",
    "gradient": {
        "type": "linear",
        "angle": 135,
        "colorStops": [
            {"color": "#667EEA", "position": 0},
            {"color": "#764BA2", "position": 100},
        ],
    },
    "image": {
        "url": "",
        "size": "cover",
        "position": "center center",
        "repeat": "no-repeat",
        "attachment": "scroll",
    },
    "hover": {"color": ""},
}

DEFAULT_BORDER_SHADOW: dict[str, Any] = {
    "border": {
        "style": "solid",
        "width": {"top": 0, "right": 0, "bottom": 0, "left": 0},
        "color": "#000000",
        "radius": {"top": 0, "right": 0, "bottom": 0, "left": 0},
    },
    "shadow": {
        "type": "none",
        "x_offset": 0,
        "y_offset": 2,
        "blur_radius": 4,
        "spread_radius": 0,
        "color": "rgba(0,0,0,0.1)",
        "inset": False,
    },
}


FIELD_TYPE_REGISTRY: dict[FieldType, FieldTypeMeta] = {
    FieldType.TEXT: FieldTypeMeta(
        type=FieldType.TEXT,
        category=FieldCategory.SCALAR,
        description="Single-line text input",
        tokens=_SCALAR_TOKENS,
        supports_unit=True,
        default="",
    ),
    FieldType.TEXTAREA: FieldTypeMeta(
        type=FieldType.TEXTAREA,
        category=FieldCategory.SCALAR,
        description="Multi-line text input",
        tokens=_SCALAR_TOKENS,
        supports_unit=True,
        default="",
    ),
    FieldType.URL: FieldTypeMeta(
        type=FieldType.URL,
        category=FieldCategory.SCALAR,
        description="URL input",
        tokens=_SCALAR_TOKENS,
        default="",
    ),
    FieldType.SELECT: FieldTypeMeta(
        type=FieldType.SELECT,
        category=FieldCategory.SCALAR,
        description="Choice from a fixed list of options",
        tokens=_SCALAR_TOKENS,
        choice_like=True,
        supports_unit=True,
        default="",
    ),
    FieldType.TOGGLE: FieldTypeMeta(
        type=FieldType.TOGGLE,
        category=FieldCategory.SCALAR,
        description="On/off switch",
        tokens=_SCALAR_TOKENS,
        default=False,
    ),
    FieldType.NUMBER: FieldTypeMeta(
        type=FieldType.NUMBER,
        category=FieldCategory.SCALAR,
        description="Numeric input with optional bounds and unit",
        tokens=_SCALAR_TOKENS,
        supports_unit=True,
        supports_range=True,
        default=0,
    ),
    FieldType.COLOR: FieldTypeMeta(
        type=FieldType.COLOR,
        category=FieldCategory.COLOR,
        description="Colour picker (hex, rgb(a), hsl(a))",
        tokens=("VALUE",),
        default="",
    ),
    FieldType.DIMENSION: FieldTypeMeta(
        type=FieldType.DIMENSION,
        category=FieldCategory.DIMENSION,
        description="Four-sided spacing value with a unit",
        tokens=DIMENSION_TOKENS,
        supports_unit=True,
        supports_range=True,
        default={"top": 0, "right": 0, "bottom": 0, "left": 0},
    ),
    FieldType.BACKGROUND_GROUP: FieldTypeMeta(
        type=FieldType.BACKGROUND_GROUP,
        category=FieldCategory.COMPOSITE,
        description="Background colour, gradient or image with hover colour",
        default=DEFAULT_BACKGROUND,
    ),
    FieldType.TYPOGRAPHY_GROUP: FieldTypeMeta(
        type=FieldType.TYPOGRAPHY_GROUP,
        category=FieldCategory.COMPOSITE,
        description="Font family, size, weight, spacing and transforms",
        tokens=TYPOGRAPHY_TOKENS,
        default=DEFAULT_TYPOGRAPHY,
    ),
    FieldType.BORDER_SHADOW_GROUP: FieldTypeMeta(
        type=FieldType.BORDER_SHADOW_GROUP,
        category=FieldCategory.COMPOSITE,
        description="Border width, style, colour, radius and box shadow",
        default=DEFAULT_BORDER_SHADOW,
    ),
    FieldType.ALIGNMENT: FieldTypeMeta(
        type=FieldType.ALIGNMENT,
        category=FieldCategory.ALIGNMENT,
        description="Alignment choice mapped to text-align or flex alignment",
        tokens=("VALUE", "PROPERTY"),
        choice_like=True,
        default="",
    ),
    FieldType.ICON: FieldTypeMeta(
        type=FieldType.ICON,
        category=FieldCategory.STRUCTURED,
        description="Icon picker, consumed by widget markup",
        default="",
    ),
    FieldType.IMAGE: FieldTypeMeta(
        type=FieldType.IMAGE,
        category=FieldCategory.STRUCTURED,
        description="Image picker, consumed by widget markup",
        default={"url": "", "alt": ""},
    ),
    FieldType.REPEATER: FieldTypeMeta(
        type=FieldType.REPEATER,
        category=FieldCategory.STRUCTURED,
        description="Repeatable list of sub-items",
        default=[],
    ),
    FieldType.LINK_GROUP: FieldTypeMeta(
        type=FieldType.LINK_GROUP,
        category=FieldCategory.STRUCTURED,
        description="Link URL, target and rel attributes",
        default={"url": "", "target": "_self", "nofollow": False},
    ),
}


def get_field_type_meta(field_type: FieldType) -> FieldTypeMeta:
    """Get metadata for a field type.

    Args:
        field_type: The field type to look up.

    Returns:
        FieldTypeMeta for the type.

    Raises:
        KeyError: If the type has no registry entry.
    """
    return FIELD_TYPE_REGISTRY[FieldType(field_type)]


def get_field_category(field_type: FieldType) -> FieldCategory:
    """Get the CSS category for a field type."""
    return get_field_type_meta(field_type).category


def get_field_types_by_category(category: FieldCategory) -> list[FieldType]:
    """Get all field types in a category, in catalog order."""
    return [t for t, meta in FIELD_TYPE_REGISTRY.items() if meta.category == category]


def get_typed_default(field_type: FieldType) -> Any:
    """Get a fresh copy of the typed default for a field type."""
    return copy.deepcopy(get_field_type_meta(field_type).default)


def resolve_field_type(value: Any) -> FieldType | None:
    """Resolve a raw type name to a FieldType.

    Args:
        value: A FieldType or its string value ("dimension").

    Returns:
        The FieldType, or None if the name is unknown.
    """
    if isinstance(value, FieldType):
        return value
    try:
        return FieldType(str(value).strip().lower())
    except ValueError:
        return None


# =============================================================================
# Models
# =============================================================================

_KEY_PATTERN = r"^[A-Za-z_][A-Za-z0-9_\-]*$"


class Condition(BaseModel):
    """Visibility condition on a sibling (or dotted cross-group) field."""

    model_config = ConfigDict(frozen=True)

    field: str = Field(
        ...,
        min_length=1,
        description="Key of the referenced field; dotted paths start at the root",
    )
    op: ConditionOperator = Field(
        default=ConditionOperator.EQ,
        description="Comparison operator",
    )
    value: Any = Field(default=None, description="Value compared against")


class TemplateRule(BaseModel):
    """Selector with a declaration template containing {{TOKEN}} placeholders."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["template"] = "template"
    selector: str = Field(..., min_length=1, description="CSS selector template")
    template: str = Field(..., description="Declaration template")


class CompositeRule(BaseModel):
    """Selectors whose declarations are emitted by the field's resolver."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["composite"] = "composite"
    selectors: tuple[str, ...] = Field(
        ..., min_length=1, description="CSS selector templates"
    )


SelectorRule = Annotated[Union[TemplateRule, CompositeRule], Field(discriminator="kind")]


class FieldOption(BaseModel):
    """One choice of a choice-like field."""

    model_config = ConfigDict(frozen=True)

    value: str | int | float | bool = Field(..., description="Stored value")
    label: str = Field(..., description="Display label")


class FieldDefinition(BaseModel):
    """Immutable description of a single typed setting."""

    model_config = ConfigDict(frozen=True)

    key: str = Field(..., pattern=_KEY_PATTERN, description="Key within the group")
    type: FieldType = Field(..., description="Field type")
    label: str = Field(..., min_length=1, description="Editor label")
    default: Any = Field(default=None, description="Value used when unset")
    unit: str | None = Field(default=None, description="Unit for {{UNIT}}")
    units: tuple[str, ...] = Field(
        default_factory=tuple, description="Units the editor may offer"
    )
    min: float | None = Field(default=None, description="Lower bound")
    max: float | None = Field(default=None, description="Upper bound")
    step: float | None = Field(default=None, gt=0, description="Editor step")
    options: tuple[FieldOption, ...] = Field(
        default_factory=tuple, description="Choices for choice-like types"
    )
    responsive: bool = Field(
        default=False, description="Whether the value may vary per breakpoint"
    )
    condition: tuple[Condition, ...] = Field(
        default_factory=tuple,
        description="Visibility conditions, all of which must hold",
    )
    selectors: tuple[SelectorRule, ...] = Field(
        default_factory=tuple, description="CSS selector rules"
    )
    description: str = Field(default="", description="Editor help text")
    placeholder: str = Field(default="", description="Editor placeholder")
    required: bool = Field(default=False, description="Whether a value is required")
    class_template: str | None = Field(
        default=None, description="Class template for the wrapper class attribute"
    )
    style_template: str | None = Field(
        default=None, description="Declaration template for the inline style"
    )
    axis: AlignmentAxis | None = Field(
        default=None, description="CSS property driven by an alignment field"
    )

    @model_validator(mode="after")
    def _check_range(self) -> "FieldDefinition":
        if self.min is not None and self.max is not None and self.min > self.max:
            raise ValueError(f"min ({self.min}) is greater than max ({self.max})")
        return self

    @property
    def meta(self) -> FieldTypeMeta:
        return get_field_type_meta(self.type)

    @property
    def category(self) -> FieldCategory:
        return self.meta.category

    @property
    def option_values(self) -> list[Any]:
        return [option.value for option in self.options]

    @property
    def has_css(self) -> bool:
        """Whether this field can ever produce CSS rules."""
        return bool(self.selectors)


class Group(BaseModel):
    """Named, ordered set of fields."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["group"] = "group"
    key: str = Field(..., pattern=_KEY_PATTERN)
    label: str = ""
    fields: tuple[FieldDefinition, ...] = Field(default_factory=tuple)

    def get(self, key: str) -> FieldDefinition | None:
        for definition in self.fields:
            if definition.key == key:
                return definition
        return None


class Tab(BaseModel):
    """Named, ordered set of groups, e.g. "Normal" and "Hover" states."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["tab"] = "tab"
    key: str = Field(..., pattern=_KEY_PATTERN)
    label: str = ""
    groups: tuple[Group, ...] = Field(default_factory=tuple)

    def get(self, key: str) -> Group | None:
        for group in self.groups:
            if group.key == key:
                return group
        return None


SchemaItem = Annotated[Union[Tab, Group], Field(discriminator="kind")]


@dataclass(frozen=True)
class FieldEntry:
    """A field together with the group path it lives under.

    Attributes:
        scope: Keys of the enclosing tab (if any) and group.
        field: The field definition.
    """

    scope: tuple[str, ...]
    field: FieldDefinition

    @property
    def path(self) -> tuple[str, ...]:
        return (*self.scope, self.field.key)

    @property
    def key_path(self) -> str:
        return ".".join(self.path)


class ControlSchema(BaseModel):
    """Ordered Tab/Group/Field tree for one settings category of a widget."""

    model_config = ConfigDict(frozen=True)

    category: SettingsCategory = Field(default=SettingsCategory.GENERAL)
    items: tuple[SchemaItem, ...] = Field(default_factory=tuple)

    def iter_groups(self) -> Iterator[tuple[tuple[str, ...], Group]]:
        """Yield (scope, group) pairs depth-first in declaration order."""
        for item in self.items:
            if isinstance(item, Tab):
                for group in item.groups:
                    yield (item.key, group.key), group
            else:
                yield (item.key,), item

    def iter_fields(self) -> Iterator[FieldEntry]:
        """Yield every field depth-first in declaration order."""
        for scope, group in self.iter_groups():
            for definition in group.fields:
                yield FieldEntry(scope=scope, field=definition)

    def get_field(self, path: str | Sequence[str]) -> FieldDefinition | None:
        """Look up a field by its full key path ("group.field")."""
        target = split_path(path)
        for entry in self.iter_fields():
            if entry.path == target:
                return entry.field
        return None

    def field_paths(self) -> list[str]:
        return [entry.key_path for entry in self.iter_fields()]

    def defaults(self) -> dict[str, Any]:
        """Build a settings tree holding every field's declared default."""
        tree: dict[str, Any] = {}
        for entry in self.iter_fields():
            set_path(tree, entry.path, copy.deepcopy(entry.field.default))
        return tree

    def apply_defaults(self, settings: Mapping[str, Any] | None) -> dict[str, Any]:
        """Overlay stored settings on the declared defaults.

        Field values are replaced whole; only the tab/group levels merge.
        """
        tree = copy.deepcopy(dict(settings or {}))
        for entry in self.iter_fields():
            if lookup_path(tree, entry.path) is MISSING:
                set_path(tree, entry.path, copy.deepcopy(entry.field.default))
        return tree

    def is_empty(self) -> bool:
        return not self.items


# =============================================================================
# Settings Tree Paths
# =============================================================================


class _Missing:
    """Sentinel for a key path that is absent from a settings tree."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING: Any = _Missing()


def split_path(path: str | Sequence[str]) -> tuple[str, ...]:
    """Split a dotted key path into its segments."""
    if isinstance(path, str):
        return tuple(part for part in path.split(".") if part)
    return tuple(path)


def lookup_path(settings: Any, path: str | Sequence[str]) -> Any:
    """Look up a key path in a settings tree.

    Returns:
        The stored value, or MISSING if any segment is absent. A stored
        None is returned as None, not MISSING.
    """
    current = settings
    for part in split_path(path):
        if not isinstance(current, Mapping) or part not in current:
            return MISSING
        current = current[part]
    return current


def set_path(tree: dict[str, Any], path: str | Sequence[str], value: Any) -> None:
    """Set a value in a nested dict, creating intermediate levels."""
    parts = split_path(path)
    current = tree
    for part in parts[:-1]:
        child = current.get(part)
        if not isinstance(child, dict):
            child = {} if not isinstance(child, Mapping) else dict(child)
            current[part] = child
        current = child
    current[parts[-1]] = value


def is_responsive_value(value: Any) -> bool:
    """Check whether a stored value is a per-breakpoint map.

    A responsive value is a non-empty mapping whose keys are all
    breakpoint names and which carries a desktop entry.
    """
    if not isinstance(value, Mapping) or not value:
        return False
    names = {bp.value for bp in Breakpoint}
    return set(value) <= names and Breakpoint.DESKTOP.value in value


# =============================================================================
# Schema Export
# =============================================================================


def export_json_schema() -> dict[str, Any]:
    """Export the ControlSchema model as JSON Schema.

    Returns:
        dict: JSON Schema describing a serialized control schema.
    """
    return ControlSchema.model_json_schema()


def export_field_type_catalog() -> dict[str, Any]:
    """Export the field type catalog for editor integration."""
    return {
        "field_types": [meta.to_dict() for meta in FIELD_TYPE_REGISTRY.values()],
        "breakpoints": [bp.value for bp in Breakpoint],
        "operators": [op.value for op in ConditionOperator],
    }


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
