"""Typed failures raised by the task core.

Each failure carries the wire error ``code`` and the HTTP ``status_code`` a
front end should answer with. The core never reads ``status_code`` itself.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from tasklane.models.core import Task


class TaskLaneError(Exception):
    """Base exception for all tasklane errors."""

    code = "internal_error"
    status_code = 500


class TaskNotFoundError(TaskLaneError):
    """Raised when a referenced task does not exist."""

    code = "not_found"
    status_code = 404

    def __init__(self, task_id: str):
        super().__init__(f"Task not found: {task_id}")
        self.task_id = task_id


class VersionConflictError(TaskLaneError):
    """Raised when the caller's expected version differs from the stored one."""

    code = "conflict"
    status_code = 409

    def __init__(self, expected: int, actual: int):
        super().__init__(
            f"Version conflict - task has been modified (expected {expected}, got {actual})"
        )
        self.expected = expected
        self.actual = actual


class TaskValidationError(TaskLaneError):
    """Raised for malformed cursors, version tokens or sort fields."""

    code = "validation_error"
    status_code = 422


class StorageError(TaskLaneError):
    """Raised when the backing store cannot be read or written."""


def http_status_for(exc: BaseException) -> int:
    """Map an exception to the HTTP status a front end should return."""
    if isinstance(exc, TaskLaneError):
        return exc.status_code
    return 500


def etag_for(task: Task) -> str:
    """Return the version-bearing ETag header value for a task."""
    return f'"{task.version}"'
