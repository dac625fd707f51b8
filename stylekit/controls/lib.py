"""Control schema builder.

Organizes FieldDefinitions into Groups, optionally nested under Tabs, and
produces the immutable ControlSchema for one settings category:

    >>> controls = ControlSchemaBuilder(SettingsCategory.STYLE)
    >>> schema = (
    ...     controls.add_group("colors", "Colors")
    ...     .register_field("text_color", fields.color().set_label("Text"))
    ...     .end_group()
    ...     .get_fields()
    ... )

Only one level of tab nesting exists: a Tab contains Groups, a Group never
contains a Tab. Structural mistakes raise immediately.
"""

from dataclasses import dataclass, field

from stylekit.core import get_logger
from stylekit.fields import FieldBuilder
from stylekit.schema import (
    ControlSchema,
    DuplicateFieldKey,
    DuplicateGroupKey,
    FieldDefinition,
    Group,
    InvalidFieldDefinition,
    InvalidSchemaStructure,
    SettingsCategory,
    Tab,
)

logger = get_logger("controls")


@dataclass
class _OpenScope:
    key: str
    label: str
    members: list = field(default_factory=list)


class ControlSchemaBuilder:
    """Stateful builder for a ControlSchema.

    Every structural method returns the builder so declarations chain.
    """

    def __init__(self, category: SettingsCategory | str = SettingsCategory.GENERAL):
        self.category = SettingsCategory(category)
        self._items: list[Tab | Group] = []
        self._tab: _OpenScope | None = None
        self._group: _OpenScope | None = None

    # -------------------------------------------------------------------------
    # Groups
    # -------------------------------------------------------------------------

    def add_group(self, key: str, label: str = "") -> "ControlSchemaBuilder":
        """Open a group at the root or inside the open tab."""
        if self._group is not None:
            raise InvalidSchemaStructure(
                f"Cannot open group '{key}': group '{self._group.key}' is still open"
            )
        if key in self._scope_keys():
            raise DuplicateGroupKey(key, self._scope_name())
        self._group = _OpenScope(key=key, label=label)
        return self

    def register_field(
        self, key: str, definition: FieldBuilder | FieldDefinition
    ) -> "ControlSchemaBuilder":
        """Append a field to the open group.

        A duplicate key leaves the group holding neither field.

        Raises:
            InvalidSchemaStructure: If no group is open.
            DuplicateFieldKey: If the key is already used in the group.
            InvalidFieldDefinition: If the field cannot be built.
        """
        if self._group is None:
            raise InvalidSchemaStructure(
                f"Cannot register field '{key}': no group is open"
            )

        fields = self._group.members
        if any(existing.key == key for existing in fields):
            fields[:] = [existing for existing in fields if existing.key != key]
            raise DuplicateFieldKey(key, self._group.key)

        if isinstance(definition, FieldBuilder):
            definition = definition.build(key)
        elif not isinstance(definition, FieldDefinition):
            raise InvalidFieldDefinition(
                f"Field '{key}' must be a FieldBuilder or FieldDefinition, "
                f"got {type(definition).__name__}"
            )
        elif definition.key != key:
            raise InvalidFieldDefinition(
                f"Field registered as '{key}' was built with key '{definition.key}'"
            )

        fields.append(definition)
        return self

    def end_group(self) -> "ControlSchemaBuilder":
        """Close the open group and attach it to its parent scope."""
        if self._group is None:
            raise InvalidSchemaStructure("end_group() called with no open group")
        if not self._group.members:
            raise InvalidSchemaStructure(f"Group '{self._group.key}' has no fields")

        group = Group(
            key=self._group.key,
            label=self._group.label,
            fields=tuple(self._group.members),
        )
        if self._tab is not None:
            self._tab.members.append(group)
        else:
            self._items.append(group)
        self._group = None
        return self

    # -------------------------------------------------------------------------
    # Tabs
    # -------------------------------------------------------------------------

    def add_tab(self, key: str, label: str = "") -> "ControlSchemaBuilder":
        """Open a tab at the schema root."""
        if self._group is not None:
            raise InvalidSchemaStructure(
                f"Cannot open tab '{key}' inside group '{self._group.key}'"
            )
        if self._tab is not None:
            raise InvalidSchemaStructure(
                f"Cannot open tab '{key}': tab '{self._tab.key}' is still open"
            )
        if key in self._root_keys():
            raise DuplicateGroupKey(key)
        self._tab = _OpenScope(key=key, label=label)
        return self

    def end_tab(self) -> "ControlSchemaBuilder":
        """Close the open tab."""
        if self._tab is None:
            raise InvalidSchemaStructure("end_tab() called with no open tab")
        if self._group is not None:
            raise InvalidSchemaStructure(
                f"Cannot close tab '{self._tab.key}': group '{self._group.key}' is still open"
            )
        if not self._tab.members:
            raise InvalidSchemaStructure(f"Tab '{self._tab.key}' has no groups")

        self._items.append(
            Tab(key=self._tab.key, label=self._tab.label, groups=tuple(self._tab.members))
        )
        self._tab = None
        return self

    # -------------------------------------------------------------------------
    # Result
    # -------------------------------------------------------------------------

    def get_fields(self) -> ControlSchema:
        """Return the finished, immutable ControlSchema.

        Raises:
            InvalidSchemaStructure: If a group or tab is still open.
        """
        if self._group is not None:
            raise InvalidSchemaStructure(f"Group '{self._group.key}' was never closed")
        if self._tab is not None:
            raise InvalidSchemaStructure(f"Tab '{self._tab.key}' was never closed")

        schema = ControlSchema(category=self.category, items=tuple(self._items))
        logger.debug(
            f"Built {self.category.value} schema with "
            f"{sum(1 for _ in schema.iter_fields())} field(s)"
        )
        return schema

    def _root_keys(self) -> set[str]:
        return {item.key for item in self._items}

    def _scope_keys(self) -> set[str]:
        if self._tab is not None:
            return {group.key for group in self._tab.members}
        return self._root_keys()

    def _scope_name(self) -> str:
        return self._tab.key if self._tab is not None else "root"


__all__ = ["ControlSchemaBuilder"]
