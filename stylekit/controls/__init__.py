"""Control schema builder micro API."""

from stylekit.controls.lib import ControlSchemaBuilder

__all__ = ["ControlSchemaBuilder"]
