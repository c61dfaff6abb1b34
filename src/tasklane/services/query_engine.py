"""Filtering, sorting and pagination over the in-memory task set."""

from __future__ import annotations

from collections.abc import Iterable

from tasklane.models import (
    PageLinks,
    PaginationOptions,
    SortOption,
    Task,
    TaskFilters,
    TaskPage,
    TaskValidationError,
)

DEFAULT_LIMIT = 50

# Wire name -> attribute name. Snake-case names are accepted as well.
SORTABLE_FIELDS = {
    "id": "id",
    "listId": "list_id",
    "title": "title",
    "description": "description",
    "status": "status",
    "priority": "priority",
    "dueAt": "due_at",
    "completedAt": "completed_at",
    "createdAt": "created_at",
    "updatedAt": "updated_at",
    "version": "version",
}


def encode_cursor(offset: int) -> str:
    """Encode a result offset as a cursor token."""
    return str(offset)


def decode_cursor(cursor: str) -> int:
    """Decode a cursor token back into a result offset.

    Raises:
        TaskValidationError: If the token is not a non-negative integer
    """
    token = cursor.strip()
    if not (token.isascii() and token.isdigit()):
        raise TaskValidationError(f"Invalid cursor: {cursor!r}")
    return int(token)


def resolve_sort_attribute(field: str) -> str:
    """Map a sort field (wire or attribute name) to a Task attribute.

    Raises:
        TaskValidationError: If the field cannot be sorted on
    """
    if field in SORTABLE_FIELDS:
        return SORTABLE_FIELDS[field]
    if field in SORTABLE_FIELDS.values():
        return field
    raise TaskValidationError(f"Unsupported sort field: {field!r}")


class TaskQueryEngine:
    """Applies filters, a single-field sort and an offset window to tasks."""

    def __init__(self, default_limit: int = DEFAULT_LIMIT):
        self.default_limit = default_limit

    def query(
        self,
        tasks: Iterable[Task],
        filters: TaskFilters | None = None,
        sort: SortOption | None = None,
        pagination: PaginationOptions | None = None,
    ) -> TaskPage:
        """Return one page of tasks.

        Args:
            tasks: All tasks, in store order
            filters: Predicates that must all match
            sort: Sort option; store order is kept when None
            pagination: Page size and cursor

        Returns:
            TaskPage with the window and next/prev cursors
        """
        results = self.apply_filters(tasks, filters or TaskFilters())
        if sort is not None:
            results = self.apply_sort(results, sort)
        return self.apply_pagination(results, pagination)

    def apply_filters(self, tasks: Iterable[Task], filters: TaskFilters) -> list[Task]:
        return [task for task in tasks if self.matches(task, filters)]

    @staticmethod
    def matches(task: Task, filters: TaskFilters) -> bool:
        """Check a single task against every set filter."""
        if filters.status and task.status not in filters.status:
            return False

        if filters.list_id and task.list_id != filters.list_id:
            return False

        if filters.assignee_id and filters.assignee_id not in task.assignee_ids:
            return False

        if filters.tag and filters.tag not in task.tags:
            return False

        # A task without a due date never satisfies a range bound
        if filters.due_at is not None:
            gte, lte = filters.due_at.gte, filters.due_at.lte
            if gte or lte:
                if task.due_at is None:
                    return False
                if gte and task.due_at < gte:
                    return False
                if lte and task.due_at > lte:
                    return False

        if filters.q and not task.title.lower().startswith(filters.q.lower()):
            return False

        return True

    @staticmethod
    def apply_sort(tasks: list[Task], sort: SortOption) -> list[Task]:
        """Sort on one field with nulls last in both directions.

        The sort is stable, so tasks with equal keys keep store order.
        """
        attribute = resolve_sort_attribute(sort.field)

        present = [task for task in tasks if getattr(task, attribute) is not None]
        missing = [task for task in tasks if getattr(task, attribute) is None]

        present.sort(
            key=lambda task: getattr(task, attribute),
            reverse=sort.direction == "desc",
        )
        return present + missing

    def apply_pagination(
        self, tasks: list[Task], pagination: PaginationOptions | None
    ) -> TaskPage:
        pagination = pagination or PaginationOptions()
        limit = pagination.limit or self.default_limit

        if pagination.after is not None:
            offset = decode_cursor(pagination.after)
        elif pagination.before is not None:
            offset = decode_cursor(pagination.before)
        else:
            offset = 0

        window = tasks[offset : offset + limit]
        has_next = len(tasks) > offset + limit
        has_prev = offset > 0

        return TaskPage(
            data=window,
            links=PageLinks(
                next=encode_cursor(offset + limit) if has_next else None,
                prev=encode_cursor(max(0, offset - limit)) if has_prev else None,
            ),
        )
