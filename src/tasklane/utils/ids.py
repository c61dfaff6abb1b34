"""Identifier generation for tasks and checklist items."""

from __future__ import annotations

import itertools
import uuid

TASK_ID_PREFIX = "tsk_"
CHECKLIST_ID_PREFIX = "chk_"


class IdGenerator:
    """Generates task and checklist item identifiers.

    Task ids are ``tsk_`` followed by an upper-case uuid4 hex string.
    Positional checklist ids are ``chk_`` plus the zero-padded index of the item
    in its list, so they repeat across tasks and across checklist rewrites.
    """

    def task_id(self) -> str:
        return f"{TASK_ID_PREFIX}{uuid.uuid4().hex.upper()}"

    def positional_checklist_id(self, index: int) -> str:
        return f"{CHECKLIST_ID_PREFIX}{index:02d}"

    def random_checklist_id(self) -> str:
        return f"{CHECKLIST_ID_PREFIX}{uuid.uuid4().hex[:12]}"


class SequentialIdGenerator(IdGenerator):
    """Deterministic generator: ``tsk_0001``, ``tsk_0002``, ...

    Useful wherever identifiers must be predictable, such as in tests.
    """

    def __init__(self, start: int = 1):
        self._tasks = itertools.count(start)
        self._items = itertools.count(start)

    def task_id(self) -> str:
        return f"{TASK_ID_PREFIX}{next(self._tasks):04d}"

    def random_checklist_id(self) -> str:
        return f"{CHECKLIST_ID_PREFIX}r{next(self._items):04d}"
