"""CLI command groups for taskflow.

Command groups:
- calendar: Calendar synthesis (show, next)
- tasks: Task list views (tree, summary, alerts)
- notifications: Delivery settings, history and one-off sends

Each command group is a Typer app that gets registered
with the main app using app.add_typer().
"""

from taskflow.interfaces.cli.commands import calendar, notifications, tasks

__all__ = ["calendar", "tasks", "notifications"]
