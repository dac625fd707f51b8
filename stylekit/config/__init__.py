"""Centralized configuration management for stylekit.

Provides unified access to all configuration via the `get_environment()` function.

Example:
    >>> from stylekit.config import EnvVar, get_environment
    >>>
    >>> # Get any environment variable with automatic type conversion
    >>> width = get_environment(EnvVar.STYLEKIT_TABLET_MAX_WIDTH)  # int: 1023
    >>>
    >>> # List available variables by category
    >>> for var in list_environment_variables("breakpoints"):
    ...     info = get_environment_info(var)
    ...     print(f"{info.name}: {info.description}")

Environment Variable Categories:
    general: Logging
    css: CSS compiler output options
    breakpoints: Tablet and mobile max-width values
    widgets: Widget markup options
"""

from .lib import (
    # Core types
    EnvConfig,
    EnvVar,
    # Convenience functions
    get_breakpoints,
    # Main interface
    get_environment,
    get_environment_info,
    get_log_level,
    get_widget_class_prefix,
    # Introspection
    list_environment_variables,
)

__all__ = [
    # Core types
    "EnvConfig",
    "EnvVar",
    # Main interface
    "get_environment",
    "get_environment_info",
    # Convenience functions
    "get_breakpoints",
    "get_log_level",
    "get_widget_class_prefix",
    # Introspection
    "list_environment_variables",
]
