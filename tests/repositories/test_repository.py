"""Unit tests for the abstract TaskRepository in repository.py.

Tests the `raise NotImplementedError` bodies of each abstract method by creating
a concrete subclass that delegates straight back to `super()`.
"""

from __future__ import annotations

import pytest

from tasklane.models import Task
from tasklane.repositories.repository import TaskRepository


# ---------------------------------------------------------------------------
# Concrete pass-through implementation
# ---------------------------------------------------------------------------


class _ConcreteTaskRepo(TaskRepository):
    """Calls super() on every abstract method to hit the raise lines."""

    async def put(self, task: Task) -> Task:
        return await super().put(task)

    async def get(self, task_id: str) -> Task | None:
        return await super().get(task_id)

    async def all(self) -> list[Task]:
        return await super().all()

    async def delete(self, task_id: str) -> bool:
        return await super().delete(task_id)

    async def record_idempotency(self, key: str, task_id: str) -> None:
        return await super().record_idempotency(key, task_id)

    async def lookup_idempotency(self, key: str) -> str | None:
        return await super().lookup_idempotency(key)


@pytest.fixture
def task_repo():
    return _ConcreteTaskRepo()


def _task() -> Task:
    return Task(
        id="tsk_1",
        list_id="lst_1",
        title="x",
        created_at="2025-01-01T00:00:00+00:00",
        updated_at="2025-01-01T00:00:00+00:00",
    )


# ---------------------------------------------------------------------------
# TaskRepository - each abstract method raises NotImplementedError
# ---------------------------------------------------------------------------


class TestTaskRepositoryAbstractMethods:
    def test_cannot_instantiate_abstract_base(self):
        with pytest.raises(TypeError):
            TaskRepository()

    @pytest.mark.asyncio
    async def test_put_raises(self, task_repo):
        with pytest.raises(NotImplementedError, match="put"):
            await task_repo.put(_task())

    @pytest.mark.asyncio
    async def test_get_raises(self, task_repo):
        with pytest.raises(NotImplementedError, match="get"):
            await task_repo.get("some-id")

    @pytest.mark.asyncio
    async def test_all_raises(self, task_repo):
        with pytest.raises(NotImplementedError, match="all"):
            await task_repo.all()

    @pytest.mark.asyncio
    async def test_delete_raises(self, task_repo):
        with pytest.raises(NotImplementedError, match="delete"):
            await task_repo.delete("some-id")

    @pytest.mark.asyncio
    async def test_record_idempotency_raises(self, task_repo):
        with pytest.raises(NotImplementedError, match="record_idempotency"):
            await task_repo.record_idempotency("key", "tsk_1")

    @pytest.mark.asyncio
    async def test_lookup_idempotency_raises(self, task_repo):
        with pytest.raises(NotImplementedError, match="lookup_idempotency"):
            await task_repo.lookup_idempotency("key")
