"""Task domain models.

Field names are snake_case in Python and camelCase on the wire. Serialise with
``model_dump(by_alias=True)`` to get the JSON shape clients see.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

TaskStatus = Literal["open", "in_progress", "completed", "archived"]
TaskPriority = Literal["low", "medium", "high", "urgent"]
SortDirection = Literal["asc", "desc"]

TITLE_MAX_LENGTH = 240


class ChecklistItem(BaseModel):
    """One line item of a task checklist.

    Attributes:
        id: Identifier, stable once assigned
        title: Item text
        checked: Completion flag
    """

    id: str
    title: str
    checked: bool = True


class ChecklistItemCreate(BaseModel):
    """Checklist item supplied at task creation.

    Only the title is honoured; created items are always checked.
    """

    model_config = ConfigDict(extra="ignore")

    title: str = Field(min_length=1)


class ChecklistItemUpdate(BaseModel):
    """Checklist item supplied on update, with or without an identifier."""

    id: str | None = None
    title: str = Field(min_length=1)
    checked: bool = True


class Task(BaseModel):
    """Task model representing a complete task entity.

    Attributes:
        id: Unique identifier, prefixed with ``tsk_``
        list_id: Parent list identifier
        title: Task title (1-240 characters)
        description: Optional detailed description
        status: Workflow status
        priority: Priority level
        due_at: Optional ISO-8601 due timestamp
        completed_at: ISO-8601 completion timestamp, None unless completed
        assignee_ids: Ordered assignee identifiers
        tags: Ordered tags
        checklist: Ordered checklist items
        created_at: Creation timestamp
        updated_at: Last mutation timestamp
        version: Version for optimistic locking
    """

    model_config = ConfigDict(populate_by_name=True)

    id: str
    list_id: str = Field(alias="listId")
    title: str = Field(min_length=1, max_length=TITLE_MAX_LENGTH)
    description: str | None = None
    status: TaskStatus = "open"
    priority: TaskPriority = "medium"
    due_at: str | None = Field(default=None, alias="dueAt")
    completed_at: str | None = Field(default=None, alias="completedAt")
    assignee_ids: list[str] = Field(default_factory=list, alias="assigneeIds")
    tags: list[str] = Field(default_factory=list)
    checklist: list[ChecklistItem] = Field(default_factory=list)
    created_at: str = Field(alias="createdAt")
    updated_at: str = Field(alias="updatedAt")
    version: int = Field(default=1, ge=1)

    def to_wire(self) -> dict:
        """Return the camelCase JSON-ready representation."""
        return self.model_dump(mode="json", by_alias=True)


class TaskCreate(BaseModel):
    """Model for creating a new task.

    Attributes:
        list_id: Parent list identifier (required)
        title: Task title (required)
        description: Optional detailed description
        priority: Priority level, ``medium`` when omitted
        due_at: Optional ISO-8601 due timestamp
        assignees: Assignee identifiers (stored as ``assignee_ids``)
        tags: Tags
        checklist: Checklist items, titles only
    """

    model_config = ConfigDict(populate_by_name=True)

    list_id: str = Field(min_length=1, alias="listId")
    title: str = Field(min_length=1, max_length=TITLE_MAX_LENGTH)
    description: str | None = None
    priority: TaskPriority | None = None
    due_at: str | None = Field(default=None, alias="dueAt")
    assignees: list[str] | None = None
    tags: list[str] | None = None
    checklist: list[ChecklistItemCreate] | None = None


class TaskUpdate(BaseModel):
    """Model for updating an existing task.

    All fields are optional - only provided fields will be updated.
    ``version`` is the caller's expected version, not a field to write.
    """

    model_config = ConfigDict(populate_by_name=True)

    title: str | None = Field(default=None, min_length=1, max_length=TITLE_MAX_LENGTH)
    description: str | None = None
    status: TaskStatus | None = None
    priority: TaskPriority | None = None
    due_at: str | None = Field(default=None, alias="dueAt")
    assignees: list[str] | None = None
    tags: list[str] | None = None
    checklist: list[ChecklistItemUpdate] | None = None
    version: int | None = None


class DueAtRange(BaseModel):
    """Inclusive lexical bounds on ``due_at``."""

    gte: str | None = None
    lte: str | None = None


class TaskFilters(BaseModel):
    """Filters for querying tasks. All set filters must match.

    Attributes:
        status: Allowed statuses (empty or None means any)
        list_id: Exact list identifier
        assignee_id: Must be one of the task's assignees
        tag: Must be one of the task's tags
        due_at: Lexical range on the due timestamp
        q: Case-insensitive title prefix
    """

    model_config = ConfigDict(populate_by_name=True)

    status: list[TaskStatus] | None = None
    list_id: str | None = Field(default=None, alias="listId")
    assignee_id: str | None = Field(default=None, alias="assigneeId")
    tag: str | None = None
    due_at: DueAtRange | None = Field(default=None, alias="dueAt")
    q: str | None = None


class SortOption(BaseModel):
    """Single-field sort order."""

    field: str
    direction: SortDirection = "asc"

    @classmethod
    def parse(cls, value: str) -> SortOption:
        """Parse a sort expression such as ``-dueAt`` or ``title,-createdAt``.

        Only the first comma-separated token is applied.
        """
        token = value.split(",")[0].strip()
        if token.startswith("-"):
            return cls(field=token[1:], direction="desc")
        return cls(field=token, direction="asc")


class PaginationOptions(BaseModel):
    """Page size and position.

    Attributes:
        limit: Page size, the configured default when None
        after: Cursor of the page to fetch going forward
        before: Cursor of the page to fetch going backward
    """

    limit: int | None = Field(default=None, ge=1)
    after: str | None = None
    before: str | None = None


class PageLinks(BaseModel):
    """Cursors for neighbouring pages, None when there is no such page."""

    next: str | None = None
    prev: str | None = None


class TaskPage(BaseModel):
    """One page of query results."""

    data: list[Task] = Field(default_factory=list)
    links: PageLinks = Field(default_factory=PageLinks)

    def to_wire(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)
