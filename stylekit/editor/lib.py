"""Editor boundary: serialized schemas in, control descriptors out.

An editor receives a schema as JSON (``ControlSchema.model_dump(mode="json")``)
and may be older or newer than the engine that produced it. Field types
it does not recognise must not break the panel: they become FieldWarning
entries, rendered inline, and parsing carries on with the siblings.
"""

import html
import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from pydantic import ValidationError

from stylekit.core import get_logger
from stylekit.schema import (
    FieldDefinition,
    InvalidSchemaStructure,
    SettingsCategory,
    resolve_field_type,
)

logger = get_logger("editor")


# =============================================================================
# Descriptors
# =============================================================================


@dataclass
class FieldWarning:
    """A field the editor cannot render.

    Attributes:
        path: Dotted key path of the field.
        field_type: The type string found in the schema.
        message: Human-readable explanation.
    """

    path: str
    field_type: str
    message: str

    @property
    def key(self) -> str:
        return self.path.rsplit(".", 1)[-1]


@dataclass
class FieldDescriptor:
    """A renderable field."""

    path: str
    definition: FieldDefinition

    @property
    def key(self) -> str:
        return self.definition.key

    def to_dict(self) -> dict[str, Any]:
        data = self.definition.model_dump(mode="json")
        data["path"] = self.path
        return data


@dataclass
class GroupDescriptor:
    """A group of entries in declaration order.

    Attributes:
        path: Dotted key path of the group ("group" or "tab.group").
        label: Display label.
        entries: Fields and warnings, interleaved as declared.
    """

    path: str
    label: str
    entries: list[FieldDescriptor | FieldWarning] = field(default_factory=list)

    @property
    def fields(self) -> list[FieldDescriptor]:
        return [e for e in self.entries if isinstance(e, FieldDescriptor)]


@dataclass
class EditorSchema:
    """Parsed schema as seen by an editor."""

    category: str
    groups: list[GroupDescriptor] = field(default_factory=list)

    @property
    def warnings(self) -> list[FieldWarning]:
        return [e for g in self.groups for e in g.entries if isinstance(e, FieldWarning)]

    @property
    def has_warnings(self) -> bool:
        return len(self.warnings) > 0

    def field_paths(self) -> list[str]:
        return [f.path for g in self.groups for f in g.fields]


# =============================================================================
# Parsing
# =============================================================================


def describe_schema(data: Mapping[str, Any] | str) -> EditorSchema:
    """Parse a serialized schema into editor descriptors.

    Args:
        data: A dict produced by ``model_dump(mode="json")`` or its JSON text.

    Returns:
        EditorSchema with one GroupDescriptor per group.

    Raises:
        InvalidSchemaStructure: If the tab/group skeleton itself is malformed.
    """
    if isinstance(data, str):
        try:
            data = json.loads(data)
        except json.JSONDecodeError as e:
            raise InvalidSchemaStructure(f"Schema is not valid JSON: {e}") from e
    if not isinstance(data, Mapping):
        raise InvalidSchemaStructure("Schema must be a JSON object")

    category = str(data.get("category") or SettingsCategory.GENERAL.value)
    items = data.get("items", [])
    if not isinstance(items, list):
        raise InvalidSchemaStructure("Schema 'items' must be a list")

    schema = EditorSchema(category=category)
    for item in items:
        kind = _require(item, "kind", "item")
        if kind == "tab":
            tab_key = _require(item, "key", "tab")
            for group in item.get("groups", []):
                schema.groups.append(_describe_group(group, prefix=f"{tab_key}."))
        elif kind == "group":
            schema.groups.append(_describe_group(item, prefix=""))
        else:
            raise InvalidSchemaStructure(f"Unknown schema item kind {kind!r}")

    if schema.has_warnings:
        logger.warning(f"Schema has {len(schema.warnings)} field(s) the editor cannot render")
    return schema


def _require(item: Any, key: str, what: str) -> Any:
    if not isinstance(item, Mapping) or not item.get(key):
        raise InvalidSchemaStructure(f"Schema {what} is missing '{key}'")
    return item[key]


def _describe_group(group: Any, prefix: str) -> GroupDescriptor:
    key = _require(group, "key", "group")
    path = f"{prefix}{key}"
    descriptor = GroupDescriptor(path=path, label=str(group.get("label") or ""))

    for raw in group.get("fields", []):
        field_key = _require(raw, "key", "field")
        field_path = f"{path}.{field_key}"
        field_type = str(raw.get("type", ""))

        if resolve_field_type(field_type) is None:
            logger.warning(f"Unknown field type '{field_type}' for '{field_path}'")
            descriptor.entries.append(
                FieldWarning(
                    path=field_path,
                    field_type=field_type,
                    message=f"Unknown field type: {field_type}",
                )
            )
            continue

        try:
            definition = FieldDefinition.model_validate(raw)
        except ValidationError as e:
            logger.warning(f"Invalid field '{field_path}': {e.error_count()} error(s)")
            descriptor.entries.append(
                FieldWarning(
                    path=field_path,
                    field_type=field_type,
                    message=f"Invalid {field_type} field: {e.errors()[0]['msg']}",
                )
            )
            continue
        descriptor.entries.append(FieldDescriptor(path=field_path, definition=definition))

    return descriptor


# =============================================================================
# Rendering
# =============================================================================


def render_field_warning(warning: FieldWarning) -> str:
    """Render a non-fatal inline warning naming the field key and type."""
    return (
        f'<div class="stylekit-field-warning" role="alert" '
        f'data-field="{html.escape(warning.path, quote=True)}">'
        f"{html.escape(warning.message)}"
        f"<small>Field key: {html.escape(warning.key)}</small>"
        f"</div>"
    )


__all__ = [
    "EditorSchema",
    "FieldDescriptor",
    "FieldWarning",
    "GroupDescriptor",
    "describe_schema",
    "render_field_warning",
]
