"""CSS compiler: schema + settings tree -> scoped, breakpoint-aware CSS.

The compiler walks a ControlSchema depth-first in declaration order and,
for every visible field with selector rules, emits:

    1. the desktop rules, unscoped
    2. the tablet rules inside @media (max-width: <tablet>px)
    3. the mobile rules inside @media (max-width: <mobile>px)

Rules are never deduplicated; later declarations win through the normal
cascade. Compilation is pure: identical inputs give byte-identical output.
A field that fails to compile is logged, reported as a CompileWarning, and
skipped without affecting its siblings.
"""

import copy
import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from stylekit.conditions import is_visible
from stylekit.config import EnvVar, get_breakpoints, get_environment
from stylekit.core import get_logger
from stylekit.resolvers import get_resolver, render_template
from stylekit.schema import (
    MISSING,
    Breakpoint,
    ControlSchema,
    FieldEntry,
    TemplateRule,
    lookup_path,
)

logger = get_logger("css")

WRAPPER_TOKEN = "{{WRAPPER}}"

_BREAKPOINT_NAMES = frozenset(bp.value for bp in Breakpoint)


# =============================================================================
# Options and results
# =============================================================================


@dataclass(frozen=True)
class CompilerOptions:
    """Output options for the compiler.

    Attributes:
        tablet_max_width: Upper bound of the tablet breakpoint in px.
        mobile_max_width: Upper bound of the mobile breakpoint in px.
        minify: Emit rules without whitespace.
        indent: Indentation unit for formatted output.
    """

    tablet_max_width: int = 1023
    mobile_max_width: int = 767
    minify: bool = False
    indent: str = "  "

    @classmethod
    def from_environment(cls, minify: bool | None = None) -> "CompilerOptions":
        """Build options from STYLEKIT_* environment variables."""
        tablet, mobile = get_breakpoints()
        return cls(
            tablet_max_width=tablet,
            mobile_max_width=mobile,
            minify=get_environment(EnvVar.STYLEKIT_CSS_MINIFY, override=minify),
        )

    def media_query(self, breakpoint: Breakpoint) -> str | None:
        """Media query for a breakpoint; None for desktop."""
        if breakpoint == Breakpoint.TABLET:
            return f"(max-width: {self.tablet_max_width}px)"
        if breakpoint == Breakpoint.MOBILE:
            return f"(max-width: {self.mobile_max_width}px)"
        return None


@dataclass
class CompileWarning:
    """Problem encountered while compiling one field.

    Attributes:
        field_path: Dotted key path of the field.
        message: Human-readable explanation.
        selector: Selector template involved, if any.
    """

    field_path: str
    message: str
    selector: str | None = None


@dataclass
class CSSResult:
    """Compiled CSS and any warnings.

    Attributes:
        css: The CSS text.
        warnings: Per-field problems; the affected output was skipped or
            had empty token substitutions.
        rule_count: Number of selector rules emitted.
    """

    css: str
    warnings: list[CompileWarning] = field(default_factory=list)
    rule_count: int = 0

    @property
    def has_warnings(self) -> bool:
        return len(self.warnings) > 0


@dataclass(frozen=True)
class CSSRule:
    """A selector and its declarations."""

    selector: str
    declarations: tuple[str, ...]


# =============================================================================
# Selector scoping
# =============================================================================


def build_wrapper(widget_id: str, section_id: str | None = None) -> str:
    """Build the selector that replaces {{WRAPPER}}.

    Returns:
        "#<widget_id>", or "#<section_id> #<widget_id>" when a section is given.

    Raises:
        ValueError: If widget_id is empty.
    """
    widget = str(widget_id or "").strip().lstrip("#")
    if not widget:
        raise ValueError("widget_id must be a non-empty string")
    wrapper = f"#{widget}"
    section = str(section_id or "").strip().lstrip("#")
    if section:
        wrapper = f"#{section} {wrapper}"
    return wrapper


def scope_selector(selector: str, wrapper: str) -> str:
    return selector.replace(WRAPPER_TOKEN, wrapper).strip()


def _with_suffix(selector: str, suffix: str) -> str:
    if not suffix:
        return selector
    return ", ".join(f"{part.strip()}{suffix}" for part in selector.split(","))


def _declaration(text: str) -> str:
    text = text.strip()
    if not text:
        return ""
    return text if text.endswith(";") else f"{text};"


# =============================================================================
# Formatting
# =============================================================================


def format_rule(rule: CSSRule, options: CompilerOptions, level: int = 0) -> str:
    """Format one rule as text."""
    if options.minify:
        body = "".join(re.sub(r"\s*:\s*", ":", d, count=1) for d in rule.declarations)
        return f"{rule.selector}{{{body}}}"
    pad = options.indent * level
    lines = [f"{pad}{rule.selector} {{"]
    lines.extend(f"{pad}{options.indent}{d}" for d in rule.declarations)
    lines.append(f"{pad}}}")
    return "\n".join(lines)


def format_media(query: str, rules: Iterable[CSSRule], options: CompilerOptions) -> str:
    """Wrap formatted rules in an @media block."""
    if options.minify:
        return f"@media {query}{{{''.join(format_rule(r, options) for r in rules)}}}"
    inner = "\n\n".join(format_rule(r, options, level=1) for r in rules)
    return f"@media {query} {{\n{inner}\n}}"


def join_css(chunks: Iterable[str], options: CompilerOptions | None = None) -> str:
    """Concatenate formatted chunks in order."""
    options = options or CompilerOptions()
    separator = "" if options.minify else "\n\n"
    return separator.join(chunk for chunk in chunks if chunk)


# =============================================================================
# Compilation
# =============================================================================


def compile_css(
    widget_id: str,
    schema: ControlSchema,
    settings: Mapping[str, Any] | None,
    section_id: str | None = None,
    options: CompilerOptions | None = None,
) -> CSSResult:
    """Compile a widget instance's settings into scoped CSS.

    Args:
        widget_id: Instance id; {{WRAPPER}} becomes "#<widget_id>".
        schema: The widget's style (or general) schema.
        settings: Settings tree shaped like the schema's key paths.
        section_id: Optional section id prefixed to the wrapper.
        options: Breakpoints and formatting; defaults to CompilerOptions().

    Returns:
        CSSResult with the CSS text and per-field warnings.

    Example:
        >>> result = compile_css("widget-42", schema, {"spacing": {"padding": {...}}})
        >>> print(result.css)
    """
    options = options or CompilerOptions()
    wrapper = build_wrapper(widget_id, section_id)
    settings = settings or {}
    effective = schema.apply_defaults(settings)

    chunks: list[str] = []
    warnings: list[CompileWarning] = []
    rule_count = 0

    for entry in schema.iter_fields():
        if not entry.field.selectors:
            continue
        field_warnings: list[CompileWarning] = []
        try:
            field_chunks, count = _compile_field(
                entry, settings, effective, wrapper, options, field_warnings
            )
        except Exception as e:
            logger.warning(f"Skipping field '{entry.key_path}' for #{widget_id}: {e}")
            warnings.append(
                CompileWarning(
                    field_path=entry.key_path,
                    message=f"Field failed to compile: {e}",
                )
            )
            continue
        warnings.extend(field_warnings)
        chunks.extend(field_chunks)
        rule_count += count

    return CSSResult(css=join_css(chunks, options), warnings=warnings, rule_count=rule_count)


def generate_css(
    widget_id: str,
    schema: ControlSchema,
    settings: Mapping[str, Any] | None,
    section_id: str | None = None,
    options: CompilerOptions | None = None,
) -> str:
    """Compile and return only the CSS text (see compile_css)."""
    return compile_css(widget_id, schema, settings, section_id, options).css


def _compile_field(
    entry: FieldEntry,
    settings: Mapping[str, Any],
    effective: Mapping[str, Any],
    wrapper: str,
    options: CompilerOptions,
    warnings: list[CompileWarning],
) -> tuple[list[str], int]:
    definition = entry.field

    if not is_visible(definition, effective, entry.scope):
        logger.debug(f"Field '{entry.key_path}' hidden by its condition")
        return [], 0

    value = lookup_path(settings, entry.path)
    if value is MISSING:
        value = copy.deepcopy(definition.default)
    if value is None:
        return [], 0

    chunks: list[str] = []
    count = 0
    for breakpoint, breakpoint_value in _split_breakpoints(entry, value):
        rules = _field_rules(entry, breakpoint_value, wrapper, warnings)
        if not rules:
            continue
        count += len(rules)
        query = options.media_query(breakpoint)
        if query is None:
            chunks.extend(format_rule(rule, options) for rule in rules)
        else:
            chunks.append(format_media(query, rules, options))
    return chunks, count


def _split_breakpoints(entry: FieldEntry, value: Any) -> list[tuple[Breakpoint, Any]]:
    """Order a stored value by breakpoint: desktop, tablet, mobile.

    Non-responsive fields holding a breakpoint map use its desktop entry.
    """
    if not (isinstance(value, Mapping) and value and set(value) <= _BREAKPOINT_NAMES):
        return [(Breakpoint.DESKTOP, value)]
    if not entry.field.responsive:
        logger.debug(f"Field '{entry.key_path}' is not responsive; using desktop value")
        return [(Breakpoint.DESKTOP, value.get(Breakpoint.DESKTOP.value))]
    return [(bp, value[bp.value]) for bp in Breakpoint if bp.value in value]


def _field_rules(
    entry: FieldEntry,
    value: Any,
    wrapper: str,
    warnings: list[CompileWarning],
) -> list[CSSRule]:
    definition = entry.field
    resolver = get_resolver(definition.type)
    value = resolver.normalize(definition, value)
    if value is None:
        return []

    rules: list[CSSRule] = []
    tokens = None
    blocks = None
    for rule in definition.selectors:
        if isinstance(rule, TemplateRule):
            if tokens is None:
                tokens = resolver.tokens(definition, value) or {}
            if not tokens:
                continue
            rendered = render_template(rule.template, tokens)
            for name in rendered.unknown_tokens:
                logger.warning(
                    f"Unknown token '{{{{{name}}}}}' in template of '{entry.key_path}'"
                )
                warnings.append(
                    CompileWarning(
                        field_path=entry.key_path,
                        message=f"Unknown token '{name}' replaced with an empty string",
                        selector=rule.selector,
                    )
                )
            declaration = _declaration(rendered.text)
            if declaration:
                rules.append(CSSRule(scope_selector(rule.selector, wrapper), (declaration,)))
        else:
            if blocks is None:
                blocks = resolver.blocks(definition, value)
            for selector in rule.selectors:
                scoped = scope_selector(selector, wrapper)
                for block in blocks:
                    if block.declarations:
                        rules.append(CSSRule(_with_suffix(scoped, block.suffix), block.declarations))
    return rules


__all__ = [
    "WRAPPER_TOKEN",
    "CSSResult",
    "CSSRule",
    "CompileWarning",
    "CompilerOptions",
    "build_wrapper",
    "compile_css",
    "format_media",
    "format_rule",
    "generate_css",
    "join_css",
    "scope_selector",
]
