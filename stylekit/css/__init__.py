"""CSS compiler micro API."""

from stylekit.css.lib import (
    WRAPPER_TOKEN,
    CompilerOptions,
    CompileWarning,
    CSSResult,
    CSSRule,
    build_wrapper,
    compile_css,
    format_media,
    format_rule,
    generate_css,
    join_css,
    scope_selector,
)

__all__ = [
    # Compilation
    "compile_css",
    "generate_css",
    # Options and results
    "CompilerOptions",
    "CompileWarning",
    "CSSResult",
    "CSSRule",
    # Formatting
    "format_media",
    "format_rule",
    "join_css",
    # Scoping
    "WRAPPER_TOKEN",
    "build_wrapper",
    "scope_selector",
]
