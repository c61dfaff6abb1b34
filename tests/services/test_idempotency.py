"""Tests for IdempotencyCoordinator."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest

from tasklane.adapters.memory import InMemoryTaskRepository
from tasklane.models import StorageError, Task
from tasklane.services.idempotency import IdempotencyCoordinator


def _task(task_id: str = "tsk_1") -> Task:
    return Task(
        id=task_id,
        list_id="lst_1",
        title="Write report",
        created_at="2025-01-01T00:00:00+00:00",
        updated_at="2025-01-01T00:00:00+00:00",
    )


@pytest.fixture()
def repo():
    return InMemoryTaskRepository()


@pytest.fixture()
def coordinator(repo):
    return IdempotencyCoordinator(repo)


def _factory(repo, task_id="tsk_1"):
    async def create():
        return await repo.put(_task(task_id))

    return AsyncMock(side_effect=create)


@pytest.mark.asyncio
async def test_execute_without_key_always_runs_factory(coordinator, repo):
    factory = _factory(repo)

    result = await coordinator.execute(None, factory)

    assert result.replayed is False
    assert result.task.id == "tsk_1"
    factory.assert_awaited_once()


@pytest.mark.asyncio
async def test_execute_empty_key_is_treated_as_absent(coordinator, repo):
    await coordinator.execute("", _factory(repo))

    assert await repo.lookup_idempotency("") is None


@pytest.mark.asyncio
async def test_execute_unseen_key_records_mapping(coordinator, repo):
    await coordinator.execute("key-1", _factory(repo))

    assert await repo.lookup_idempotency("key-1") == "tsk_1"


@pytest.mark.asyncio
async def test_execute_seen_key_replays_without_running_factory(coordinator, repo):
    await coordinator.execute("key-1", _factory(repo))
    second_factory = _factory(repo, "tsk_2")

    result = await coordinator.execute("key-1", second_factory)

    assert result.replayed is True
    assert result.task.id == "tsk_1"
    second_factory.assert_not_awaited()
    assert len(repo) == 1


@pytest.mark.asyncio
async def test_execute_recreates_when_recorded_task_vanished(coordinator, repo):
    await coordinator.execute("key-1", _factory(repo))
    await repo.delete("tsk_1")

    result = await coordinator.execute("key-1", _factory(repo, "tsk_2"))

    assert result.replayed is False
    assert result.task.id == "tsk_2"
    assert await repo.lookup_idempotency("key-1") == "tsk_2"


@pytest.mark.asyncio
async def test_execute_failing_factory_records_nothing(coordinator, repo):
    factory = AsyncMock(side_effect=RuntimeError("boom"))

    with pytest.raises(RuntimeError):
        await coordinator.execute("key-1", factory)

    assert await repo.lookup_idempotency("key-1") is None


class _FailingKeyRepository(InMemoryTaskRepository):
    async def record_idempotency(self, key: str, task_id: str) -> None:
        raise StorageError("disk full")


@pytest.mark.asyncio
async def test_execute_unrecordable_key_removes_created_task():
    repo = _FailingKeyRepository()
    coordinator = IdempotencyCoordinator(repo)

    with pytest.raises(StorageError):
        await coordinator.execute("key-1", _factory(repo))

    assert await repo.all() == []
