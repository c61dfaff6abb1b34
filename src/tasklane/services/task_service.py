"""Task service - Business logic for task operations.

This service layer sits between collaborators (CLI commands, HTTP handlers) and
the repository. It owns field defaulting, checklist identifiers, timestamps and
version bookkeeping, and composes the idempotency coordinator, the concurrency
guard and the query engine.
"""

from __future__ import annotations

import asyncio
from typing import Literal

from tasklane.models import (
    ChecklistItem,
    ChecklistItemUpdate,
    PaginationOptions,
    SortOption,
    Task,
    TaskCreate,
    TaskFilters,
    TaskNotFoundError,
    TaskPage,
    TaskUpdate,
)
from tasklane.repositories import TaskRepository
from tasklane.services.concurrency import ConcurrencyGuard, resolve_expected_version
from tasklane.services.idempotency import IdempotencyCoordinator, IdempotentResult
from tasklane.services.query_engine import DEFAULT_LIMIT, TaskQueryEngine
from tasklane.utils.clock import Clock, now_iso
from tasklane.utils.ids import IdGenerator

ChecklistIdPolicy = Literal["positional", "random"]


class TaskService:
    """Service for task business logic.

    Every mutation (update, complete, reopen) bumps ``version`` by exactly one
    and refreshes ``updated_at``, even when no field value changes.
    """

    def __init__(
        self,
        task_repository: TaskRepository,
        *,
        id_generator: IdGenerator | None = None,
        clock: Clock | None = None,
        checklist_id_policy: ChecklistIdPolicy = "positional",
        default_limit: int = DEFAULT_LIMIT,
    ):
        """Initialize the task service.

        Args:
            task_repository: TaskRepository implementation for data access
            id_generator: Source of task and checklist identifiers
            clock: Callable returning the current ISO-8601 timestamp
            checklist_id_policy: How checklist items without an id get one on
                update; "positional" reuses index-based ids, "random" mints new ones
            default_limit: Page size when the caller gives none
        """
        self.repository = task_repository
        self.id_generator = id_generator or IdGenerator()
        self.clock = clock or now_iso
        self.checklist_id_policy = checklist_id_policy
        self._lock = asyncio.Lock()
        self.idempotency = IdempotencyCoordinator(task_repository, self._lock)
        self.guard = ConcurrencyGuard()
        self.query_engine = TaskQueryEngine(default_limit=default_limit)

    async def create_task(
        self, task_data: TaskCreate, idempotency_key: str | None = None
    ) -> Task:
        """Create a new task, or replay the one created for ``idempotency_key``.

        Args:
            task_data: Validated creation payload
            idempotency_key: Optional key making retries safe

        Returns:
            The new (or replayed) Task
        """
        result = await self.create_task_with_result(task_data, idempotency_key)
        return result.task

    async def create_task_with_result(
        self, task_data: TaskCreate, idempotency_key: str | None = None
    ) -> IdempotentResult:
        """Like ``create_task`` but also reports whether the task was replayed."""

        async def factory() -> Task:
            return await self.repository.put(self._build_task(task_data))

        return await self.idempotency.execute(idempotency_key, factory)

    def _build_task(self, task_data: TaskCreate) -> Task:
        now = self.clock()
        return Task(
            id=self.id_generator.task_id(),
            list_id=task_data.list_id,
            title=task_data.title,
            description=task_data.description,
            status="open",
            priority=task_data.priority or "medium",
            due_at=task_data.due_at,
            completed_at=None,
            assignee_ids=list(task_data.assignees or []),
            tags=list(task_data.tags or []),
            # Items created with a task always start checked
            checklist=[
                ChecklistItem(
                    id=self.id_generator.positional_checklist_id(index),
                    title=item.title,
                    checked=True,
                )
                for index, item in enumerate(task_data.checklist or [])
            ],
            created_at=now,
            updated_at=now,
            version=1,
        )

    async def get_task(self, task_id: str) -> Task | None:
        """Get a specific task by ID.

        Returns:
            Task object, or None when it does not exist
        """
        return await self.repository.get(task_id)

    async def list_tasks(
        self,
        filters: TaskFilters | None = None,
        sort: SortOption | None = None,
        pagination: PaginationOptions | None = None,
    ) -> TaskPage:
        """List tasks with filtering, sorting and pagination."""
        tasks = await self.repository.all()
        return self.query_engine.query(tasks, filters, sort, pagination)

    async def update_task(
        self,
        task_id: str,
        updates: TaskUpdate,
        expected_version: int | None = None,
    ) -> Task:
        """Update an existing task.

        Args:
            task_id: Task ID to update
            updates: Fields to change; ``updates.version`` is the expected version
            expected_version: Expected version from a conditional header; ignored
                when ``updates.version`` is set

        Returns:
            Updated Task object

        Raises:
            TaskNotFoundError: If the task does not exist
            VersionConflictError: If the expected version is stale
        """
        async with self._lock:
            existing = await self._require(task_id)
            self.guard.check(
                existing.version,
                resolve_expected_version(updates.version, expected_version),
            )

            changes: dict = {}
            provided = updates.model_fields_set

            for field in ("title", "status", "priority"):
                value = getattr(updates, field)
                if field in provided and value is not None:
                    changes[field] = value

            for field in ("description", "due_at"):
                if field in provided:
                    changes[field] = getattr(updates, field)

            if updates.assignees is not None:
                changes["assignee_ids"] = list(updates.assignees)

            if updates.tags is not None:
                changes["tags"] = list(updates.tags)

            if updates.checklist is not None:
                changes["checklist"] = self._rebuild_checklist(updates.checklist)

            now = self.clock()
            # completed_at follows the last status written
            if "status" in changes:
                changes["completed_at"] = now if changes["status"] == "completed" else None

            return await self._save(existing, changes, now=now)

    def _rebuild_checklist(self, items: list[ChecklistItemUpdate]) -> list[ChecklistItem]:
        # Positional ids index into the new list and may repeat ids issued before
        rebuilt = []
        for index, item in enumerate(items):
            if item.id is not None:
                item_id = item.id
            elif self.checklist_id_policy == "random":
                item_id = self.id_generator.random_checklist_id()
            else:
                item_id = self.id_generator.positional_checklist_id(index)
            rebuilt.append(ChecklistItem(id=item_id, title=item.title, checked=item.checked))
        return rebuilt

    async def complete_task(self, task_id: str) -> Task:
        """Mark a task as completed.

        Raises:
            TaskNotFoundError: If the task does not exist
        """
        async with self._lock:
            existing = await self._require(task_id)
            now = self.clock()
            return await self._save(
                existing, {"status": "completed", "completed_at": now}, now=now
            )

    async def reopen_task(self, task_id: str) -> Task:
        """Reopen a task, clearing its completion timestamp.

        Raises:
            TaskNotFoundError: If the task does not exist
        """
        async with self._lock:
            existing = await self._require(task_id)
            return await self._save(existing, {"status": "open", "completed_at": None})

    async def _require(self, task_id: str) -> Task:
        task = await self.repository.get(task_id)
        if task is None:
            raise TaskNotFoundError(task_id)
        return task

    async def _save(self, existing: Task, changes: dict, now: str | None = None) -> Task:
        changes["updated_at"] = now or self.clock()
        changes["version"] = existing.version + 1
        return await self.repository.put(existing.model_copy(update=changes))


def get_task_service() -> TaskService:
    """Build a TaskService wired to the configured storage backend."""
    from tasklane.services.config_service import get_config_service

    config_service = get_config_service()
    config = config_service.config
    strategy_context = config_service.storage_strategy_context
    return TaskService(
        strategy_context.task_repository,
        checklist_id_policy=config.checklist.id_policy,
        default_limit=config.pagination.default_limit,
    )
