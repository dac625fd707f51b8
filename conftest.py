"""Root pytest configuration and fixtures.

This module provides:
- Environment setup (loads .env)
- Isolation from STYLEKIT_* variables set in the developer's shell
- Shared schema and widget fixtures
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Generator

import pytest
from dotenv import load_dotenv

from stylekit.config import EnvVar

if TYPE_CHECKING:
    from stylekit.schema import ControlSchema
    from stylekit.widgets import WidgetRegistry

# Load environment variables from .env file
load_dotenv()


# =============================================================================
# Environment Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Run every test against the documented configuration defaults.

    Tests that need a variable set it with monkeypatch.setenv.
    """
    for var in EnvVar:
        monkeypatch.delenv(var.value.name, raising=False)
    yield


# =============================================================================
# Common Test Fixtures
# =============================================================================


@pytest.fixture
def style_schema() -> ControlSchema:
    """Create a small style schema for testing.

    Returns:
        A schema with a spacing group and a conditional colour group.
    """
    from stylekit import fields
    from stylekit.controls import ControlSchemaBuilder
    from stylekit.schema import SettingsCategory

    return (
        ControlSchemaBuilder(SettingsCategory.STYLE)
        .add_group("spacing", "Spacing")
        .register_field(
            "padding",
            fields.dimension()
            .set_label("Padding")
            .as_padding()
            .set_selectors({"{{WRAPPER}} .box": "padding: {{VALUE}};"}),
        )
        .end_group()
        .add_group("icon", "Icon")
        .register_field("show_icon", fields.toggle().set_label("Show icon").set_default(False))
        .register_field(
            "icon_color",
            fields.color()
            .set_label("Icon color")
            .set_default("#333333")
            .set_condition({"show_icon": True})
            .set_selectors({"{{WRAPPER}} .icon": "color: {{VALUE}};"}),
        )
        .end_group()
        .get_fields()
    )


@pytest.fixture
def registry() -> WidgetRegistry:
    """Create a registry holding the built-in widgets."""
    from stylekit.widgets import create_default_registry

    return create_default_registry()
