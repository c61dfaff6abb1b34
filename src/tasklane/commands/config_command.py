"""Configuration management commands."""

import json
from typing import Annotated

import typer

from tasklane.services.config_service import get_config_service
from tasklane.utils.exit_codes import ERROR_INVALID_ARGS
from tasklane.utils.ui.formatters import format_output, format_success

from .decorators import AppError, command_wrapper

app = typer.Typer(help="Configuration management", no_args_is_help=True)


def _parse_value(raw: str):
    """Interpret CLI values as JSON when possible (numbers, booleans, null)."""
    try:
        return json.loads(raw)
    except json.JSONDecodeError:
        return raw


@app.command("show")
@command_wrapper
def show_config(
    output: Annotated[str, typer.Option("--output", "-o", help="Output format")] = "json",
) -> None:
    """Show the whole configuration."""
    config_service = get_config_service()
    format_output(config_service.config.model_dump(), output)


@app.command("get")
@command_wrapper
def get_config(key: Annotated[str, typer.Argument(help="Dotted key, e.g. storage.path")]) -> None:
    """Show one configuration value."""
    try:
        value = get_config_service().get(key)
    except KeyError as e:
        raise AppError(f"Unknown config key: {key}", ERROR_INVALID_ARGS) from e
    if hasattr(value, "model_dump"):
        value = value.model_dump()
    format_output(value, "json")


@app.command("set")
@command_wrapper
def set_config(
    key: Annotated[str, typer.Argument(help="Dotted key, e.g. pagination.default_limit")],
    value: Annotated[str, typer.Argument(help="New value")],
) -> None:
    """Set one configuration value."""
    try:
        get_config_service().set(key, _parse_value(value))
    except KeyError as e:
        raise AppError(f"Unknown config key: {key}", ERROR_INVALID_ARGS) from e
    format_success(f"{key} = {value}")


@app.command("reset")
@command_wrapper
def reset_config(
    key: Annotated[str | None, typer.Argument(help="Key to reset (all when omitted)")] = None,
) -> None:
    """Reset configuration to defaults."""
    try:
        get_config_service().reset(key)
    except KeyError as e:
        raise AppError(f"Unknown config key: {key}", ERROR_INVALID_ARGS) from e
    format_success(f"Reset {key or 'configuration'} to defaults")
