"""
Strategy Pattern: Storage Strategy Container

The StorageStrategyContext holds the storage strategy chosen at startup and
hands its repository to services, so nothing downstream branches on the backend.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path

from tasklane.repositories import TaskRepository


class StorageStrategy(ABC):
    """
    Abstract base class for storage strategies.

    A strategy owns the task repository implementation for one backend.
    """

    @abstractmethod
    def get_task_repository(self) -> TaskRepository:
        """Get task repository implementation for this strategy."""

    @property
    @abstractmethod
    def storage_type(self) -> str:
        """Get storage type identifier (for logging/debugging)."""


class MemoryStorageStrategy(StorageStrategy):
    """Process-local storage; everything is lost when the process exits."""

    def __init__(self):
        from tasklane.adapters.memory import InMemoryTaskRepository

        self._task_repo = InMemoryTaskRepository()

    def get_task_repository(self) -> TaskRepository:
        return self._task_repo

    @property
    def storage_type(self) -> str:
        return "memory"


class JsonFileStorageStrategy(StorageStrategy):
    """
    Single JSON file storage strategy.

    The repository is created lazily so that a corrupt store only fails the
    commands that actually touch tasks.
    """

    def __init__(self, path: str | Path):
        """
        Initialize JSON file strategy.

        Args:
            path: Path to the JSON store
        """
        self.path = Path(path)
        self._task_repo: TaskRepository | None = None

    def get_task_repository(self) -> TaskRepository:
        if self._task_repo is None:
            from tasklane.adapters.json_file import JsonFileTaskRepository

            self._task_repo = JsonFileTaskRepository(self.path)
        return self._task_repo

    @property
    def storage_type(self) -> str:
        return "json"


class StorageStrategyContext:
    """
    Strategy context that provides access to the task repository.

    Usage:
        # At startup
        context = StorageStrategyContext(JsonFileStorageStrategy("/path/tasks.json"))

        # In services
        service = TaskService(context.task_repository)
    """

    def __init__(self, strategy: StorageStrategy):
        self._strategy = strategy

    @property
    def task_repository(self) -> TaskRepository:
        """Get task repository from current strategy."""
        return self._strategy.get_task_repository()

    @property
    def storage_type(self) -> str:
        """Get storage type (for logging/debugging only)."""
        return self._strategy.storage_type

    @property
    def strategy(self) -> StorageStrategy:
        return self._strategy
