"""Repository abstraction layer for tasklane.

This module defines the abstract base class (interface) for task storage,
following the hexagonal architecture (Ports & Adapters) pattern.

The repository is a plain keyed container: it performs no validation and no
versioning. The lifecycle service owns every rule about what gets stored.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from tasklane.models import Task


class TaskRepository(ABC):
    """Abstract base class for task persistence operations.

    Holds two mappings: task id to the current Task value, and idempotency key
    to the task id it produced.
    """

    @abstractmethod
    async def put(self, task: Task) -> Task:
        """Insert or overwrite a task by its identifier.

        Args:
            task: Task value to store

        Returns:
            The stored Task

        Raises:
            NotImplementedError: Must be implemented by concrete adapter
        """
        raise NotImplementedError("TaskRepository.put() must be implemented by adapter")

    @abstractmethod
    async def get(self, task_id: str) -> Task | None:
        """Get a specific task by ID.

        Args:
            task_id: Unique identifier for the task

        Returns:
            Task object, or None when absent

        Raises:
            NotImplementedError: Must be implemented by concrete adapter
        """
        raise NotImplementedError("TaskRepository.get() must be implemented by adapter")

    @abstractmethod
    async def all(self) -> list[Task]:
        """Return a snapshot of every stored task in insertion order.

        Raises:
            NotImplementedError: Must be implemented by concrete adapter
        """
        raise NotImplementedError("TaskRepository.all() must be implemented by adapter")

    @abstractmethod
    async def delete(self, task_id: str) -> bool:
        """Remove a task.

        Args:
            task_id: Unique identifier for the task

        Returns:
            True if a task was removed

        Raises:
            NotImplementedError: Must be implemented by concrete adapter
        """
        raise NotImplementedError(
            "TaskRepository.delete() must be implemented by adapter"
        )

    @abstractmethod
    async def record_idempotency(self, key: str, task_id: str) -> None:
        """Remember which task an idempotency key produced.

        Raises:
            NotImplementedError: Must be implemented by concrete adapter
        """
        raise NotImplementedError(
            "TaskRepository.record_idempotency() must be implemented by adapter"
        )

    @abstractmethod
    async def lookup_idempotency(self, key: str) -> str | None:
        """Return the task id recorded for an idempotency key, if any.

        Raises:
            NotImplementedError: Must be implemented by concrete adapter
        """
        raise NotImplementedError(
            "TaskRepository.lookup_idempotency() must be implemented by adapter"
        )
