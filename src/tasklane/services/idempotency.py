"""Idempotent task creation.

A retried create carrying the same idempotency key returns the task the first
attempt produced instead of creating a duplicate.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from tasklane.models import StorageError, Task
from tasklane.repositories import TaskRepository


@dataclass(frozen=True)
class IdempotentResult:
    """Outcome of an idempotent create.

    Attributes:
        task: The created or previously created task
        replayed: True when the task came from an earlier call with the same key
    """

    task: Task
    replayed: bool


class IdempotencyCoordinator:
    """Runs creation at most once per idempotency key.

    The lookup, creation and recording all happen under ``lock`` so two
    concurrent calls with the same unseen key cannot both create a task.
    """

    def __init__(self, repository: TaskRepository, lock: asyncio.Lock | None = None):
        self.repository = repository
        self.lock = lock or asyncio.Lock()

    async def execute(
        self,
        key: str | None,
        factory: Callable[[], Awaitable[Task]],
    ) -> IdempotentResult:
        """Return the task recorded for ``key`` or create one with ``factory``.

        Args:
            key: Idempotency key; None or empty disables replay
            factory: Coroutine function that builds and stores a new task

        Returns:
            IdempotentResult with the task and whether it was replayed
        """
        async with self.lock:
            if key:
                existing_id = await self.repository.lookup_idempotency(key)
                if existing_id is not None:
                    existing = await self.repository.get(existing_id)
                    if existing is not None:
                        return IdempotentResult(task=existing, replayed=True)

            task = await factory()

            if key:
                try:
                    await self.repository.record_idempotency(key, task.id)
                except StorageError:
                    # A task without its key would be duplicated by a retry
                    await self.repository.delete(task.id)
                    raise

            return IdempotentResult(task=task, replayed=False)
