"""Adapters module - Repository implementations for different storage backends.

This package contains concrete implementations (adapters) for the repository interface:
- memory: process-local dictionaries (default, used by tests)
- json_file: the same dictionaries persisted to a single JSON file
"""

from .json_file import JsonFileTaskRepository
from .memory import InMemoryTaskRepository

__all__ = [
    "InMemoryTaskRepository",
    "JsonFileTaskRepository",
]
