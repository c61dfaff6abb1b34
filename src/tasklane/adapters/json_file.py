"""Single JSON file implementation of TaskRepository.

The whole store lives in one document::

    {"tasks": [<task>, ...], "idempotency": {"<key>": "<task id>"}}

It is read once at construction and rewritten after every mutation.
"""

from __future__ import annotations

import json
import logging
from json import JSONDecodeError
from pathlib import Path

from pydantic import ValidationError

from tasklane.adapters.memory import InMemoryTaskRepository
from tasklane.models import StorageError, Task

logger = logging.getLogger(__name__)


class JsonFileTaskRepository(InMemoryTaskRepository):
    """Task repository persisted to a single JSON file."""

    def __init__(self, path: str | Path):
        """Initialize the repository.

        Args:
            path: JSON file location. A missing file means an empty store.

        Raises:
            StorageError: If the file exists but cannot be parsed
        """
        super().__init__()
        self.path = Path(path)
        self._load()

    def _load(self) -> None:
        if not self.path.exists():
            logger.debug("task store %s does not exist yet, starting empty", self.path)
            return

        try:
            with open(self.path, encoding="utf-8") as f:
                document = json.load(f)
            tasks = [Task.model_validate(item) for item in document.get("tasks", [])]
            idempotency = dict(document.get("idempotency", {}))
        except (OSError, JSONDecodeError, ValidationError, AttributeError, TypeError) as e:
            raise StorageError(f"Failed to load task store {self.path}: {e}") from e

        for task in tasks:
            self._tasks[task.id] = task
        self._idempotency.update(idempotency)
        logger.debug("loaded %d task(s) from %s", len(tasks), self.path)

    def _save(self) -> None:
        document = {
            "tasks": [task.to_wire() for task in self._tasks.values()],
            "idempotency": self._idempotency,
        }
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump(document, f, indent=2, ensure_ascii=False)
            tmp_path.replace(self.path)
        except OSError as e:
            raise StorageError(f"Failed to save task store {self.path}: {e}") from e
        logger.debug("saved %d task(s) to %s", len(self._tasks), self.path)

    async def put(self, task: Task) -> Task:
        previous = self._tasks.get(task.id)
        await super().put(task)
        try:
            self._save()
        except StorageError:
            if previous is None:
                del self._tasks[task.id]
            else:
                self._tasks[task.id] = previous
            raise
        return task

    async def delete(self, task_id: str) -> bool:
        # Rebuild the dict on rollback so the task keeps its position
        snapshot = dict(self._tasks)
        deleted = await super().delete(task_id)
        if deleted:
            try:
                self._save()
            except StorageError:
                self._tasks = snapshot
                raise
        return deleted

    async def record_idempotency(self, key: str, task_id: str) -> None:
        previous = self._idempotency.get(key)
        await super().record_idempotency(key, task_id)
        try:
            self._save()
        except StorageError:
            if previous is None:
                del self._idempotency[key]
            else:
                self._idempotency[key] = previous
            raise
