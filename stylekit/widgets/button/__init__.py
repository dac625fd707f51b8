"""Button widget."""

from stylekit.widgets.button.lib import BUTTON_TYPES, ButtonWidget

__all__ = ["BUTTON_TYPES", "ButtonWidget"]
