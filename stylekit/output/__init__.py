"""Output generation module for schema inspection.

Provides human-readable representations of control schemas and
complete per-widget output bundles.
"""

from stylekit.output.lib import OutputGenerator, WidgetOutput, format_schema_tree

__all__ = [
    "format_schema_tree",
    "OutputGenerator",
    "WidgetOutput",
]
