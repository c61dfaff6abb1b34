"""Output formatters for different formats."""

import json
from typing import Any

import yaml
from rich.table import Table

from tasklane.utils.ui.console import get_console

console = get_console()

TASK_COLUMNS = ["id", "title", "status", "priority", "dueAt", "tags", "version"]

STATUS_STYLES = {
    "open": "white",
    "in_progress": "cyan",
    "completed": "green",
    "archived": "dim",
}

PRIORITY_STYLES = {
    "urgent": "bold red",
    "high": "bold orange3",
    "medium": "yellow",
    "low": "green",
}


def format_output(data: Any, output_format: str = "table") -> None:
    """Format and display output based on format."""
    if output_format == "json":
        print(json.dumps(data, indent=2, default=str, ensure_ascii=False))
    elif output_format == "yaml":
        print(yaml.dump(data, default_flow_style=False, sort_keys=False, allow_unicode=True))
    else:
        format_table(data)


def format_table(data: Any) -> None:
    """Format data as a table."""
    if not data:
        console.print("[yellow]No data to display[/yellow]")
        return

    if isinstance(data, dict) and "data" in data and "links" in data:
        format_task_page(data)
    elif isinstance(data, list):
        format_task_table(data)
    elif isinstance(data, dict):
        format_single_item(data)
    else:
        console.print(data)


def format_task_page(page: dict) -> None:
    """Format a page of tasks followed by its cursors."""
    format_task_table(page["data"])
    links = page.get("links") or {}
    if links.get("next"):
        console.print(f"[dim]Next page: --after {links['next']}[/dim]")
    if links.get("prev"):
        console.print(f"[dim]Previous page: --before {links['prev']}[/dim]")


def format_task_table(tasks: list[dict]) -> None:
    """Format a list of task dictionaries as a table."""
    if not tasks:
        console.print("[yellow]No tasks found[/yellow]")
        return

    table = Table(show_header=True, header_style="bold magenta")
    for col in TASK_COLUMNS:
        table.add_column(col)

    for task in tasks:
        row = []
        for col in TASK_COLUMNS:
            value = _format_value(task.get(col))
            if col == "status":
                value = f"[{STATUS_STYLES.get(task.get(col), 'white')}]{value}[/]"
            elif col == "priority":
                value = f"[{PRIORITY_STYLES.get(task.get(col), 'white')}]{value}[/]"
            row.append(value)
        table.add_row(*row)

    console.print(table)


def format_single_item(item: dict) -> None:
    """Format a single item as key-value pairs."""
    table = Table(show_header=False, box=None)
    table.add_column("Key", style="cyan")
    table.add_column("Value", style="white")

    for key, value in item.items():
        if key == "checklist" and isinstance(value, list):
            formatted_value = "\n".join(
                f"{'✓' if entry.get('checked') else '✗'} {entry.get('title')} ({entry.get('id')})"
                for entry in value
            ) or "-"
        else:
            formatted_value = _format_value(value)
        table.add_row(key, formatted_value)

    console.print(table)


def _format_value(value: Any) -> str:
    if isinstance(value, bool):
        return "✓" if value else "✗"
    if isinstance(value, list):
        return ", ".join(str(v) for v in value) or "-"
    if value is None:
        return "-"
    return str(value)


def format_error(message: str) -> None:
    """Format and display an error message."""
    console.print(f"[bold red]Error:[/bold red] {message}")


def format_success(message: str) -> None:
    """Format and display a success message."""
    console.print(f"[bold green]Success:[/bold green] {message}")
