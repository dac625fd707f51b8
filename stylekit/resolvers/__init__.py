"""Value resolvers, one per field type, and template rendering."""

from stylekit.resolvers.lib import (
    TOKEN_PATTERN,
    AlignmentResolver,
    BackgroundResolver,
    BorderShadowResolver,
    ColorResolver,
    DeclarationBlock,
    DimensionResolver,
    RenderedTemplate,
    ScalarResolver,
    StructuredResolver,
    TypographyResolver,
    ValueResolver,
    format_scalar,
    get_resolver,
    list_resolvers,
    register_resolver,
    render_template,
    resolve_tokens,
)

__all__ = [
    # Base class and registry
    "ValueResolver",
    "register_resolver",
    "get_resolver",
    "list_resolvers",
    "resolve_tokens",
    # Resolvers
    "AlignmentResolver",
    "BackgroundResolver",
    "BorderShadowResolver",
    "ColorResolver",
    "DimensionResolver",
    "ScalarResolver",
    "StructuredResolver",
    "TypographyResolver",
    # Results
    "DeclarationBlock",
    "RenderedTemplate",
    # Templates
    "TOKEN_PATTERN",
    "format_scalar",
    "render_template",
]
