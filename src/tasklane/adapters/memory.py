"""In-memory implementation of TaskRepository."""

from __future__ import annotations

from tasklane.models import Task
from tasklane.repositories import TaskRepository


class InMemoryTaskRepository(TaskRepository):
    """Dictionary-backed task repository.

    Python dicts keep insertion order, and overwriting an existing key keeps
    its position, so ``all()`` is naturally in creation order.
    """

    def __init__(self, tasks: list[Task] | None = None):
        self._tasks: dict[str, Task] = {}
        self._idempotency: dict[str, str] = {}
        for task in tasks or []:
            self._tasks[task.id] = task

    async def put(self, task: Task) -> Task:
        self._tasks[task.id] = task
        return task

    async def get(self, task_id: str) -> Task | None:
        return self._tasks.get(task_id)

    async def all(self) -> list[Task]:
        return list(self._tasks.values())

    async def delete(self, task_id: str) -> bool:
        return self._tasks.pop(task_id, None) is not None

    async def record_idempotency(self, key: str, task_id: str) -> None:
        self._idempotency[key] = task_id

    async def lookup_idempotency(self, key: str) -> str | None:
        return self._idempotency.get(key)

    def __len__(self) -> int:
        return len(self._tasks)
