"""Centralized environment configuration management for stylekit.

Provides a unified interface for all environment variables with:
- Single `get_environment()` function for all configuration
- Type-safe enum with metadata (default, type, description)
- Consistent resolution: override > environment > default

Example:
    >>> from stylekit.config import EnvVar, get_environment
    >>>
    >>> # Get values with automatic type conversion
    >>> tablet = get_environment(EnvVar.STYLEKIT_TABLET_MAX_WIDTH)  # int
    >>> minify = get_environment(EnvVar.STYLEKIT_CSS_MINIFY)  # bool
    >>>
    >>> # Override at runtime
    >>> minify = get_environment(EnvVar.STYLEKIT_CSS_MINIFY, override=True)
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from enum import Enum
from typing import Any, overload

# =============================================================================
# Environment Variable Configuration
# =============================================================================


@dataclass(frozen=True)
class EnvConfig:
    """Metadata for an environment variable.

    Attributes:
        name: Environment variable name (e.g., "STYLEKIT_LOG_LEVEL").
        default: Default value if not set in environment.
        var_type: Python type for value conversion (str, int, bool).
        description: Human-readable description.
        category: Grouping category for documentation.
    """

    name: str
    default: Any
    var_type: type
    description: str = ""
    category: str = "general"


class EnvVar(Enum):
    """All environment variables used by stylekit.

    Each member contains an EnvConfig with name, default, type, and description.
    Use with `get_environment()` for type-safe access.

    Categories:
        - general: Logging and process-wide behaviour
        - css: CSS compiler output options
        - breakpoints: Responsive media query widths
        - widgets: Widget markup options
    """

    # -------------------------------------------------------------------------
    # General
    # -------------------------------------------------------------------------
    STYLEKIT_LOG_LEVEL = EnvConfig(
        name="STYLEKIT_LOG_LEVEL",
        default="INFO",
        var_type=str,
        description="Log level for the stylekit logger (DEBUG, INFO, WARNING)",
        category="general",
    )

    # -------------------------------------------------------------------------
    # CSS Output
    # -------------------------------------------------------------------------
    STYLEKIT_CSS_MINIFY = EnvConfig(
        name="STYLEKIT_CSS_MINIFY",
        default=False,
        var_type=bool,
        description="Emit minified CSS (no whitespace between rules)",
        category="css",
    )

    # -------------------------------------------------------------------------
    # Breakpoints (max-width in px, desktop-first cascade)
    # -------------------------------------------------------------------------
    STYLEKIT_TABLET_MAX_WIDTH = EnvConfig(
        name="STYLEKIT_TABLET_MAX_WIDTH",
        default=1023,
        var_type=int,
        description="Upper bound of the tablet breakpoint in px",
        category="breakpoints",
    )
    STYLEKIT_MOBILE_MAX_WIDTH = EnvConfig(
        name="STYLEKIT_MOBILE_MAX_WIDTH",
        default=767,
        var_type=int,
        description="Upper bound of the mobile breakpoint in px",
        category="breakpoints",
    )

    # -------------------------------------------------------------------------
    # Widgets
    # -------------------------------------------------------------------------
    STYLEKIT_WIDGET_CLASS_PREFIX = EnvConfig(
        name="STYLEKIT_WIDGET_CLASS_PREFIX",
        default="stylekit",
        var_type=str,
        description="Prefix for the base classes every widget wrapper carries",
        category="widgets",
    )


# =============================================================================
# Type Conversion Helpers
# =============================================================================


def _parse_bool(value: str) -> bool | None:
    """Parse string to boolean.

    Recognizes: true/false, 1/0, yes/no, on/off (case-insensitive).
    Returns None for unrecognized values.
    """
    normalized = value.lower().strip()
    if normalized in ("true", "1", "yes", "on"):
        return True
    if normalized in ("false", "0", "no", "off"):
        return False
    return None


def _convert_value(value: str | None, var_type: type, default: Any) -> Any:
    """Convert string value to target type.

    Args:
        value: Raw string value from environment (or None).
        var_type: Target Python type.
        default: Default value if conversion fails or value is None.

    Returns:
        Converted value or default.
    """
    if value is None:
        return default

    if var_type is str:
        return value

    if var_type is int:
        try:
            return int(value)
        except ValueError:
            return default

    if var_type is bool:
        result = _parse_bool(value)
        return result if result is not None else default

    return value


# =============================================================================
# Main Interface
# =============================================================================


@overload
def get_environment(env_var: EnvVar, override: int) -> int: ...
@overload
def get_environment(env_var: EnvVar, override: str) -> str: ...
@overload
def get_environment(env_var: EnvVar, override: bool) -> bool: ...
@overload
def get_environment(env_var: EnvVar, override: None = None) -> Any: ...


def get_environment(env_var: EnvVar, override: Any = None) -> Any:
    """Get environment variable value with type conversion.

    Resolution priority:
        1. Explicit override parameter (highest)
        2. Environment variable value
        3. Default from EnvConfig (lowest)

    Args:
        env_var: Environment variable enum member.
        override: Optional override value (bypasses env lookup).

    Returns:
        Value converted to the appropriate type (str, int, or bool).

    Example:
        >>> get_environment(EnvVar.STYLEKIT_MOBILE_MAX_WIDTH)
        767
        >>> get_environment(EnvVar.STYLEKIT_MOBILE_MAX_WIDTH, override=600)
        600
    """
    config: EnvConfig = env_var.value

    if override is not None:
        return override

    raw_value = os.environ.get(config.name)
    return _convert_value(raw_value, config.var_type, config.default)


def get_environment_info(env_var: EnvVar) -> EnvConfig:
    """Get metadata for an environment variable.

    Args:
        env_var: Environment variable enum member.

    Returns:
        EnvConfig with name, default, type, and description.
    """
    return env_var.value


def list_environment_variables(category: str | None = None) -> list[EnvVar]:
    """List environment variables, optionally filtered by category.

    Args:
        category: Category name ("general", "css", "breakpoints", "widgets").
            None returns every variable.

    Returns:
        List of EnvVar members in declaration order.
    """
    if category is None:
        return list(EnvVar)
    return [var for var in EnvVar if var.value.category == category]


# =============================================================================
# Convenience Functions
# =============================================================================


def get_breakpoints(
    tablet: int | None = None, mobile: int | None = None
) -> tuple[int, int]:
    """Get the (tablet, mobile) max-width breakpoints in px.

    Raises:
        ValueError: If the mobile breakpoint is not narrower than tablet.
    """
    tablet_px = get_environment(EnvVar.STYLEKIT_TABLET_MAX_WIDTH, override=tablet)
    mobile_px = get_environment(EnvVar.STYLEKIT_MOBILE_MAX_WIDTH, override=mobile)
    if mobile_px >= tablet_px:
        raise ValueError(
            f"Mobile breakpoint ({mobile_px}px) must be narrower than "
            f"tablet breakpoint ({tablet_px}px)"
        )
    return tablet_px, mobile_px


def get_log_level(override: str | None = None) -> int:
    """Get the configured log level as a logging constant.

    Unknown level names resolve to logging.INFO.
    """
    name = get_environment(EnvVar.STYLEKIT_LOG_LEVEL, override=override)
    level = logging.getLevelName(str(name).upper())
    return level if isinstance(level, int) else logging.INFO


def get_widget_class_prefix(override: str | None = None) -> str:
    """Get the prefix used for base widget wrapper classes."""
    return get_environment(EnvVar.STYLEKIT_WIDGET_CLASS_PREFIX, override=override)


__all__ = [
    "EnvConfig",
    "EnvVar",
    "get_breakpoints",
    "get_environment",
    "get_environment_info",
    "get_log_level",
    "get_widget_class_prefix",
    "list_environment_variables",
]
