"""Shared test fixtures and configuration.

Provides deterministic identifiers and timestamps, an isolated in-memory store,
and keeps CLI tests away from the real platform directories.
"""

from __future__ import annotations

import logging
from unittest.mock import patch

import pytest

from tasklane.adapters.memory import InMemoryTaskRepository
from tasklane.models import TaskCreate
from tasklane.services.task_service import TaskService
from tasklane.utils.clock import FixedClock
from tasklane.utils.ids import SequentialIdGenerator


# ---------------------------------------------------------------------------
# Core fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def clock():
    return FixedClock()


@pytest.fixture()
def id_generator():
    return SequentialIdGenerator()


@pytest.fixture()
def repository():
    return InMemoryTaskRepository()


@pytest.fixture()
def service(repository, id_generator, clock):
    return TaskService(repository, id_generator=id_generator, clock=clock)


@pytest.fixture()
def make_create():
    """Build a TaskCreate with sensible defaults."""

    def _make(**overrides) -> TaskCreate:
        data = {"list_id": "lst_01", "title": "Revisar contrato"}
        data.update(overrides)
        return TaskCreate(**data)

    return _make


# ---------------------------------------------------------------------------
# CLI isolation
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def quiet_command_logger():
    """Keep command logging out of the user's log directory."""
    with patch(
        "tasklane.commands.decorators.get_logger",
        return_value=logging.getLogger("tasklane.tests"),
    ):
        yield


@pytest.fixture(autouse=True)
def isolated_platform_dirs(tmp_path):
    """Point config and data directories at *tmp_path* for every test.

    Task commands read their default output format from the cached config
    service, so the lru_cache is cleared on both sides of each test.
    """
    from tasklane.services.config_service import get_config_service

    tmpdir = str(tmp_path)
    get_config_service.cache_clear()
    with patch("tasklane.services.config_service.user_config_dir", return_value=tmpdir):
        with patch("tasklane.services.config_service.user_data_dir", return_value=tmpdir):
            yield tmp_path
    get_config_service.cache_clear()


@pytest.fixture()
def tmp_config(isolated_platform_dirs):
    """Provide a real ConfigService backed by a temporary directory."""
    from tasklane.services.config_service import ConfigService

    return ConfigService()
