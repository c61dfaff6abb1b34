"""CLI commands for tasklane."""
