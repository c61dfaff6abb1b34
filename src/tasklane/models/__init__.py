"""tasklane domain models.

This package contains Pydantic models that represent the core domain entities
of tasklane, plus the typed failures the core raises.
"""

from .config_models import AppConfig
from .core import (
    ChecklistItem,
    ChecklistItemCreate,
    ChecklistItemUpdate,
    DueAtRange,
    PageLinks,
    PaginationOptions,
    SortOption,
    Task,
    TaskCreate,
    TaskFilters,
    TaskPage,
    TaskPriority,
    TaskStatus,
    TaskUpdate,
)
from .exceptions import (
    StorageError,
    TaskLaneError,
    TaskNotFoundError,
    TaskValidationError,
    VersionConflictError,
)

__all__ = [
    # Task models
    "Task",
    "TaskCreate",
    "TaskUpdate",
    "TaskStatus",
    "TaskPriority",
    "ChecklistItem",
    "ChecklistItemCreate",
    "ChecklistItemUpdate",
    # Query models
    "TaskFilters",
    "DueAtRange",
    "SortOption",
    "PaginationOptions",
    "PageLinks",
    "TaskPage",
    # Failures
    "TaskLaneError",
    "TaskNotFoundError",
    "VersionConflictError",
    "TaskValidationError",
    "StorageError",
    # Config models
    "AppConfig",
]
