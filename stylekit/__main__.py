"""CLI entry point for stylekit.

Inspect widget schemas and compile stored widget settings into CSS,
wrapper attributes and validation reports.
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

from stylekit.config import get_log_level
from stylekit.core import get_logger, setup_logging
from stylekit.css import CompilerOptions
from stylekit.output import format_schema_tree
from stylekit.schema import SettingsCategory
from stylekit.widgets import Widget, WidgetRegistry, create_default_registry

# Load environment variables from .env file
load_dotenv()

logger = get_logger("cli")


# =============================================================================
# Helpers
# =============================================================================


def _load_settings(path: Path | None) -> dict[str, Any] | None:
    """Read a JSON settings file; None when it cannot be used."""
    if path is None:
        return {}
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        logger.error(f"Settings file not found: {path}")
        return None
    except json.JSONDecodeError as e:
        logger.error(f"Settings file {path} is not valid JSON: {e}")
        return None
    if not isinstance(data, dict):
        logger.error(f"Settings file {path} must contain a JSON object")
        return None
    return data


def _get_widget(registry: WidgetRegistry, widget_type: str) -> Widget | None:
    try:
        return registry.get(widget_type)
    except KeyError as e:
        logger.error(str(e.args[0]))
        return None


def _emit(text: str, output: Path | None) -> None:
    if output:
        output.write_text(text, encoding="utf-8")
        logger.info(f"Saved to {output}")
    else:
        print(text)


# =============================================================================
# Commands
# =============================================================================


def cmd_widgets(args: argparse.Namespace, registry: WidgetRegistry) -> int:
    """List registered widgets."""
    widgets = registry.by_category(args.category) if args.category else list(registry)
    for widget in sorted(widgets, key=lambda w: w.widget_type):
        print(f"{widget.widget_type:<12} {widget.name:<12} [{widget.category.value}] {widget.description}")
    return 0


def cmd_schema(args: argparse.Namespace, registry: WidgetRegistry) -> int:
    """Print a widget's general or style schema."""
    widget = _get_widget(registry, args.widget)
    if widget is None:
        return 1

    if args.category == SettingsCategory.STYLE.value:
        schema = widget.get_style_fields()
    else:
        schema = widget.get_general_fields()

    if args.format == "json":
        print(schema.model_dump_json(indent=2))
    else:
        print(format_schema_tree(schema, title=f"{widget.name} ({schema.category.value})"))
    return 0


def cmd_css(args: argparse.Namespace, registry: WidgetRegistry) -> int:
    """Compile stored settings into CSS."""
    widget = _get_widget(registry, args.widget)
    settings = _load_settings(args.settings)
    if widget is None or settings is None:
        return 1

    try:
        options = CompilerOptions.from_environment(minify=True if args.minify else None)
        result = widget.compile_css(args.id, settings, section_id=args.section, options=options)
    except ValueError as e:
        logger.error(f"CSS generation failed: {e}")
        return 1

    for warning in result.warnings:
        logger.warning(f"{warning.field_path}: {warning.message}")
    _emit(result.css, args.output)
    logger.info(f"{result.rule_count} rule(s), {len(result.warnings)} warning(s)")
    return 0


def cmd_attrs(args: argparse.Namespace, registry: WidgetRegistry) -> int:
    """Print the wrapper class and style attributes."""
    widget = _get_widget(registry, args.widget)
    settings = _load_settings(args.settings)
    if widget is None or settings is None:
        return 1

    print(f"class: {widget.build_css_classes(settings)}")
    print(f"style: {widget.generate_style_attribute(settings)}")
    return 0


def cmd_render(args: argparse.Namespace, registry: WidgetRegistry) -> int:
    """Render a widget's HTML."""
    widget = _get_widget(registry, args.widget)
    settings = _load_settings(args.settings)
    if widget is None or settings is None:
        return 1

    _emit(widget.render(settings, widget_id=args.id), args.output)
    return 0


def cmd_validate(args: argparse.Namespace, registry: WidgetRegistry) -> int:
    """Validate stored settings; exit code 1 when errors are found."""
    widget = _get_widget(registry, args.widget)
    settings = _load_settings(args.settings)
    if widget is None or settings is None:
        return 1

    errors = widget.validate_settings(settings)
    if not errors:
        logger.info(f"Settings are valid for '{widget.widget_type}'")
        return 0
    for error in errors:
        print(f"{error.path}: {error.message} [{error.error_type}]")
    logger.error(f"{len(errors)} validation error(s)")
    return 1


# =============================================================================
# Argument parsing
# =============================================================================


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="python -m stylekit",
        description="Widget style controls and CSS generation",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        help="Log level (default: STYLEKIT_LOG_LEVEL or INFO)",
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    widgets_parser = subparsers.add_parser("widgets", help="List available widgets")
    widgets_parser.add_argument(
        "--category",
        "-c",
        type=str,
        default=None,
        help="Only list widgets of this category",
    )
    widgets_parser.set_defaults(handler=cmd_widgets)

    schema_parser = subparsers.add_parser("schema", help="Show a widget schema")
    schema_parser.add_argument("widget", type=str, help="Widget type")
    schema_parser.add_argument(
        "--category",
        type=str,
        default=SettingsCategory.STYLE.value,
        choices=[c.value for c in SettingsCategory],
        help="Settings category (default: style)",
    )
    schema_parser.add_argument(
        "--format",
        "-f",
        type=str,
        default="tree",
        choices=["tree", "json"],
        help="Output format (default: tree)",
    )
    schema_parser.set_defaults(handler=cmd_schema)

    def _settings_command(name: str, help_text: str, handler, with_id: bool = False):
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument("widget", type=str, help="Widget type")
        sub.add_argument(
            "--settings",
            "-s",
            type=Path,
            default=None,
            help="JSON settings file ({\"general\": ..., \"style\": ...})",
        )
        if with_id:
            sub.add_argument("--id", type=str, required=True, help="Widget DOM id")
        sub.set_defaults(handler=handler)
        return sub

    css_parser = _settings_command("css", "Compile settings into CSS", cmd_css, with_id=True)
    css_parser.add_argument("--section", type=str, default=None, help="Section DOM id")
    css_parser.add_argument("--minify", action="store_true", help="Minify output")
    css_parser.add_argument(
        "--output",
        "-o",
        type=Path,
        default=None,
        help="Output file path (prints to stdout if not specified)",
    )

    _settings_command("attrs", "Show wrapper class and style attributes", cmd_attrs)
    _settings_command("validate", "Validate a settings file", cmd_validate)

    render_parser = _settings_command("render", "Render widget HTML", cmd_render)
    render_parser.add_argument("--id", type=str, default=None, help="Widget DOM id")
    render_parser.add_argument(
        "--output",
        "-o",
        type=Path,
        default=None,
        help="Output file path (prints to stdout if not specified)",
    )

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not getattr(args, "handler", None):
        parser.print_help()
        return 1

    setup_logging(get_log_level(args.log_level))
    return args.handler(args, create_default_registry())


if __name__ == "__main__":
    sys.exit(main())
