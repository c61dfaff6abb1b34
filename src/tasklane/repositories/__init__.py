"""Repository interfaces."""

from tasklane.repositories.repository import TaskRepository

__all__ = ["TaskRepository"]
