"""FieldDefinition builder micro API.

Example:
    >>> from stylekit import fields
    >>> padding = (
    ...     fields.dimension()
    ...     .set_label("Padding")
    ...     .as_padding()
    ...     .set_selectors({"{{WRAPPER}} .button": "padding: {{VALUE}};"})
    ...     .build("padding")
    ... )
"""

from stylekit.fields.lib import (
    FieldBuilder,
    alignment,
    background_group,
    border_shadow_group,
    color,
    create_field,
    dimension,
    icon,
    image,
    link_group,
    number,
    repeater,
    select,
    text,
    textarea,
    toggle,
    typography_group,
    url,
)

__all__ = [
    # Builder
    "FieldBuilder",
    "create_field",
    # Scalar factories
    "text",
    "textarea",
    "url",
    "select",
    "toggle",
    "number",
    "color",
    # Structured value factories
    "dimension",
    "alignment",
    "background_group",
    "typography_group",
    "border_shadow_group",
    # Markup-only factories
    "icon",
    "image",
    "repeater",
    "link_group",
]
