"""Tests for the storage strategy container."""

from __future__ import annotations

import pytest

from tasklane.adapters.json_file import JsonFileTaskRepository
from tasklane.adapters.memory import InMemoryTaskRepository
from tasklane.models import StorageError
from tasklane.models.storage_strategy import (
    JsonFileStorageStrategy,
    MemoryStorageStrategy,
    StorageStrategyContext,
)


class TestMemoryStorageStrategy:
    def test_repository_is_reused(self):
        strategy = MemoryStorageStrategy()

        repo = strategy.get_task_repository()

        assert isinstance(repo, InMemoryTaskRepository)
        assert strategy.get_task_repository() is repo
        assert strategy.storage_type == "memory"


class TestJsonFileStorageStrategy:
    def test_repository_created_lazily(self, tmp_path):
        path = tmp_path / "tasks.json"
        path.write_text("corrupt", encoding="utf-8")

        strategy = JsonFileStorageStrategy(path)

        assert strategy.storage_type == "json"
        with pytest.raises(StorageError):
            strategy.get_task_repository()

    def test_repository_is_reused(self, tmp_path):
        strategy = JsonFileStorageStrategy(tmp_path / "tasks.json")

        repo = strategy.get_task_repository()

        assert isinstance(repo, JsonFileTaskRepository)
        assert strategy.get_task_repository() is repo


class TestStorageStrategyContext:
    def test_delegates_to_strategy(self):
        strategy = MemoryStorageStrategy()
        context = StorageStrategyContext(strategy)

        assert context.strategy is strategy
        assert context.storage_type == "memory"
        assert context.task_repository is strategy.get_task_repository()
