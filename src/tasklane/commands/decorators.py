"""Decorators for command functions."""

import asyncio
import functools
import inspect
import time
import traceback
from collections.abc import Callable

import typer
from pydantic import ValidationError

from tasklane.models import (
    TaskLaneError,
    TaskNotFoundError,
    TaskValidationError,
    VersionConflictError,
)
from tasklane.utils.exit_codes import (
    ERROR_CONFLICT,
    ERROR_GENERAL,
    ERROR_INVALID_ARGS,
    ERROR_NOT_FOUND,
    get_exit_code_name,
)
from tasklane.utils.logger import get_logger
from tasklane.utils.ui.formatters import format_error


class AppError(Exception):
    """Custom application error with exit code."""

    def __init__(self, message: str, exit_code: int = ERROR_GENERAL):
        super().__init__(message)
        self.exit_code = exit_code


def exit_code_for(error: TaskLaneError) -> int:
    """Map a task core failure to a CLI exit code."""
    if isinstance(error, TaskNotFoundError):
        return ERROR_NOT_FOUND
    if isinstance(error, VersionConflictError):
        return ERROR_CONFLICT
    if isinstance(error, TaskValidationError):
        return ERROR_INVALID_ARGS
    return ERROR_GENERAL


def _validation_message(error: ValidationError) -> str:
    parts = []
    for detail in error.errors():
        field = ".".join(str(p) for p in detail.get("loc", ()))
        parts.append(f"{field}: {detail.get('msg')}" if field else str(detail.get("msg")))
    return "; ".join(parts)


def command_wrapper(_func: Callable | None = None):
    """Decorator to wrap command functions with logging and error mapping."""

    def decorator(func: Callable):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            logger = get_logger()
            cmd = func.__name__
            start = time.monotonic()
            logger.info("command started: %s", cmd)
            try:
                if inspect.iscoroutinefunction(func):
                    result = asyncio.run(func(*args, **kwargs))
                else:
                    result = func(*args, **kwargs)

                elapsed = time.monotonic() - start
                logger.info("command completed: %s (%.3fs)", cmd, elapsed)
                return result

            except (AppError, TaskLaneError) as e:
                elapsed = time.monotonic() - start
                code = e.exit_code if isinstance(e, AppError) else exit_code_for(e)
                logger.error(
                    "command failed: %s (%.3fs) [%s] - %s",
                    cmd,
                    elapsed,
                    get_exit_code_name(code),
                    str(e),
                )
                format_error(str(e))
                raise typer.Exit(code=code) from e

            except ValidationError as e:
                elapsed = time.monotonic() - start
                message = _validation_message(e)
                logger.error(
                    "command failed: %s (%.3fs) [%s] - invalid input: %s",
                    cmd,
                    elapsed,
                    get_exit_code_name(ERROR_INVALID_ARGS),
                    message,
                )
                format_error(f"Invalid input: {message}")
                raise typer.Exit(code=ERROR_INVALID_ARGS) from e

            except typer.Exit:
                # Re-raise Typer's own exits (like --help or explicit Exit(0))
                raise

            except Exception as e:
                elapsed = time.monotonic() - start
                logger.error(
                    "command failed: %s (%.3fs) [%s] - %s\n%s",
                    cmd,
                    elapsed,
                    get_exit_code_name(ERROR_GENERAL),
                    str(e),
                    traceback.format_exc(),
                )
                # Generic fallback for unexpected crashes
                format_error(f"An unexpected error occurred: {str(e)}")
                raise typer.Exit(code=ERROR_GENERAL) from e

        return wrapper

    if _func is None:
        return decorator
    return decorator(_func)
