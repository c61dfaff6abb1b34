"""Service layer for tasklane."""

from .concurrency import ConcurrencyGuard, parse_if_match, resolve_expected_version
from .idempotency import IdempotencyCoordinator, IdempotentResult
from .query_engine import TaskQueryEngine, decode_cursor, encode_cursor
from .task_service import TaskService, get_task_service

__all__ = [
    "TaskService",
    "get_task_service",
    "IdempotencyCoordinator",
    "IdempotentResult",
    "ConcurrencyGuard",
    "parse_if_match",
    "resolve_expected_version",
    "TaskQueryEngine",
    "encode_cursor",
    "decode_cursor",
]
