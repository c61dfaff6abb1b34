"""Main entry point for the tasklane CLI."""

import typer

from tasklane import __version__
from tasklane.commands import config_command, tasks_command
from tasklane.utils.ui.console import get_console

app = typer.Typer(
    name="tasklane",
    help="Task management with optimistic concurrency and idempotent creation",
    no_args_is_help=True,
)

console = get_console()

app.add_typer(tasks_command.app, name="tasks", help="Task management commands")
app.add_typer(config_command.app, name="config", help="Configuration management")

# Lifecycle shortcuts: `tasklane complete ID` / `tasklane reopen ID`
app.command("complete")(tasks_command.complete_task)
app.command("reopen")(tasks_command.reopen_task)


@app.command()
def version() -> None:
    """Show version information."""
    console.print(f"[bold]tasklane[/bold] version [cyan]{__version__}[/cyan]")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
