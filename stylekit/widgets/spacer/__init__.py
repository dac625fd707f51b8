"""Spacer widget."""

from stylekit.widgets.spacer.lib import SpacerWidget

__all__ = ["SpacerWidget"]
