"""Heading widget."""

from stylekit.widgets.heading.lib import HEADING_LEVELS, HeadingWidget

__all__ = ["HEADING_LEVELS", "HeadingWidget"]
