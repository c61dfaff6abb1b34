"""Task management commands."""

from typing import Annotated

import typer

from tasklane.models import (
    DueAtRange,
    PaginationOptions,
    SortOption,
    TaskCreate,
    TaskFilters,
    TaskNotFoundError,
    TaskUpdate,
)
from tasklane.services.concurrency import parse_if_match
from tasklane.services.config_service import get_config_service
from tasklane.services.task_service import get_task_service
from tasklane.utils.exit_codes import ERROR_INVALID_ARGS
from tasklane.utils.ui.console import get_console
from tasklane.utils.ui.formatters import format_output, format_success

from .decorators import AppError, command_wrapper

app = typer.Typer(help="Task management commands", no_args_is_help=True)
console = get_console()

OutputOption = Annotated[
    str | None,
    typer.Option("--output", "-o", help="Output format (defaults to output.format)"),
]
JsonOption = Annotated[
    bool, typer.Option("--json", help="Output as JSON (alias for --output json)")
]


def _resolve_output(output: str | None, json_opt: bool) -> str:
    """Pick the output format: --json, then --output, then the configured default."""
    if json_opt:
        return "json"
    if output is not None:
        return output
    return get_config_service().config.output.format


@app.command("create")
@command_wrapper
async def create_task(
    list_id: Annotated[str, typer.Option("--list-id", help="Parent list ID")],
    title: Annotated[str, typer.Option("--title", help="Task title")],
    description: Annotated[
        str | None, typer.Option("--description", help="Task description")
    ] = None,
    priority: Annotated[
        str | None, typer.Option("--priority", help="low, medium, high or urgent")
    ] = None,
    due_at: Annotated[
        str | None, typer.Option("--due-at", help="Due timestamp (ISO-8601)")
    ] = None,
    assignees: Annotated[
        list[str] | None, typer.Option("--assignee", help="Assignee ID (repeatable)")
    ] = None,
    tags: Annotated[list[str] | None, typer.Option("--tag", help="Tag (repeatable)")] = None,
    checklist: Annotated[
        list[str] | None, typer.Option("--check", help="Checklist item title (repeatable)")
    ] = None,
    idempotency_key: Annotated[
        str | None,
        typer.Option("--idempotency-key", help="Key that makes retries safe"),
    ] = None,
    output: OutputOption = None,
    json_opt: JsonOption = False,
) -> None:
    """Create a task."""
    output = _resolve_output(output, json_opt)

    task_data = TaskCreate(
        list_id=list_id,
        title=title,
        description=description,
        priority=priority,
        due_at=due_at,
        assignees=assignees,
        tags=tags,
        checklist=[{"title": item} for item in checklist] if checklist else None,
    )

    task_service = get_task_service()
    result = await task_service.create_task_with_result(task_data, idempotency_key)

    if output in ("table", "pretty"):
        if result.replayed:
            format_success(f"Already created: {result.task.id} (idempotency key replayed)")
        else:
            format_success(f"Created: {result.task.id}")
    format_output(result.task.to_wire(), output)


@app.command("get")
@command_wrapper
async def get_task(
    task_id: Annotated[str, typer.Argument(help="Task ID")],
    output: OutputOption = None,
    json_opt: JsonOption = False,
) -> None:
    """Show a task."""
    output = _resolve_output(output, json_opt)

    task = await get_task_service().get_task(task_id)
    if task is None:
        raise TaskNotFoundError(task_id)
    format_output(task.to_wire(), output)


@app.command("list")
@command_wrapper
async def list_tasks(
    status: Annotated[
        str | None, typer.Option("--status", help="Comma-separated statuses")
    ] = None,
    list_id: Annotated[str | None, typer.Option("--list-id", help="Filter by list ID")] = None,
    assignee_id: Annotated[
        str | None, typer.Option("--assignee-id", help="Filter by assignee")
    ] = None,
    tag: Annotated[str | None, typer.Option("--tag", help="Filter by tag")] = None,
    due_gte: Annotated[
        str | None, typer.Option("--due-gte", help="Due at or after (ISO-8601)")
    ] = None,
    due_lte: Annotated[
        str | None, typer.Option("--due-lte", help="Due at or before (ISO-8601)")
    ] = None,
    q: Annotated[str | None, typer.Option("--q", help="Title prefix")] = None,
    sort: Annotated[
        str | None, typer.Option("--sort", help="Sort field, '-' prefix for descending")
    ] = None,
    limit: Annotated[int | None, typer.Option("--limit", help="Page size")] = None,
    after: Annotated[str | None, typer.Option("--after", help="Next page cursor")] = None,
    before: Annotated[
        str | None, typer.Option("--before", help="Previous page cursor")
    ] = None,
    output: OutputOption = None,
    json_opt: JsonOption = False,
) -> None:
    """List tasks."""
    output = _resolve_output(output, json_opt)

    filters = TaskFilters(
        status=[s.strip() for s in status.split(",") if s.strip()] if status else None,
        list_id=list_id,
        assignee_id=assignee_id,
        tag=tag,
        due_at=DueAtRange(gte=due_gte, lte=due_lte) if due_gte or due_lte else None,
        q=q,
    )
    sort_option = SortOption.parse(sort) if sort else None
    pagination = PaginationOptions(limit=limit, after=after, before=before)

    page = await get_task_service().list_tasks(filters, sort_option, pagination)
    format_output(page.to_wire(), output)


@app.command("update")
@command_wrapper
async def update_task(
    task_id: Annotated[str, typer.Argument(help="Task ID")],
    title: Annotated[str | None, typer.Option("--title", help="New title")] = None,
    description: Annotated[
        str | None, typer.Option("--description", help="New description")
    ] = None,
    status: Annotated[str | None, typer.Option("--status", help="New status")] = None,
    priority: Annotated[str | None, typer.Option("--priority", help="New priority")] = None,
    due_at: Annotated[str | None, typer.Option("--due-at", help="New due timestamp")] = None,
    assignees: Annotated[
        list[str] | None, typer.Option("--assignee", help="Replace assignees (repeatable)")
    ] = None,
    tags: Annotated[
        list[str] | None, typer.Option("--tag", help="Replace tags (repeatable)")
    ] = None,
    clear_description: Annotated[
        bool, typer.Option("--clear-description", help="Remove the description")
    ] = False,
    clear_due_at: Annotated[
        bool, typer.Option("--clear-due-at", help="Remove the due timestamp")
    ] = False,
    clear_tags: Annotated[bool, typer.Option("--clear-tags", help="Remove all tags")] = False,
    checklist: Annotated[
        list[str] | None,
        typer.Option("--check", help="Replace checklist with these titles (repeatable)"),
    ] = None,
    version: Annotated[
        int | None, typer.Option("--version", help="Expected current version")
    ] = None,
    if_match: Annotated[
        str | None, typer.Option("--if-match", help="Expected version as an ETag value")
    ] = None,
    output: OutputOption = None,
    json_opt: JsonOption = False,
) -> None:
    """Update fields of a task."""
    for flag, clear, value in (
        ("--clear-description", clear_description, description),
        ("--clear-due-at", clear_due_at, due_at),
        ("--clear-tags", clear_tags, tags),
    ):
        if clear and value is not None:
            raise AppError(f"{flag} cannot be combined with a new value", ERROR_INVALID_ARGS)
    output = _resolve_output(output, json_opt)

    fields: dict = {}
    for name, value in (
        ("title", title),
        ("description", description),
        ("status", status),
        ("priority", priority),
        ("due_at", due_at),
        ("assignees", assignees),
        ("tags", tags),
        ("version", version),
    ):
        if value is not None:
            fields[name] = value
    if clear_description:
        fields["description"] = None
    if clear_due_at:
        fields["due_at"] = None
    if clear_tags:
        fields["tags"] = []
    if checklist:
        fields["checklist"] = [{"title": item} for item in checklist]

    updates = TaskUpdate(**fields)
    task = await get_task_service().update_task(
        task_id, updates, expected_version=parse_if_match(if_match)
    )

    if output in ("table", "pretty"):
        format_success(f"Updated: {task.id} (version {task.version})")
    format_output(task.to_wire(), output)


@app.command("complete")
@command_wrapper
async def complete_task(
    task_id: Annotated[str, typer.Argument(help="Task ID")],
    output: OutputOption = None,
    json_opt: JsonOption = False,
) -> None:
    """Mark a task as completed."""
    output = _resolve_output(output, json_opt)

    task = await get_task_service().complete_task(task_id)
    if output in ("table", "pretty"):
        format_success(f"✓ Completed: {task.title}")
        console.print(f"[dim]To undo: tasklane reopen {task.id}[/dim]")
    else:
        format_output(
            {
                "id": task.id,
                "status": task.status,
                "completedAt": task.completed_at,
                "version": task.version,
            },
            output,
        )


@app.command("reopen")
@command_wrapper
async def reopen_task(
    task_id: Annotated[str, typer.Argument(help="Task ID")],
    output: OutputOption = None,
    json_opt: JsonOption = False,
) -> None:
    """Reopen a completed task."""
    output = _resolve_output(output, json_opt)

    task = await get_task_service().reopen_task(task_id)
    if output in ("table", "pretty"):
        format_success(f"↩ Reopened: {task.title}")
    else:
        format_output(task.to_wire(), output)
