"""Settings validation module."""

from stylekit.validation.lib import (
    ValidationError,
    is_valid_color,
    is_valid_settings,
    validate_settings,
)

__all__ = [
    "ValidationError",
    "is_valid_color",
    "is_valid_settings",
    "validate_settings",
]
