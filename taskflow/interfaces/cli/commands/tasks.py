"""Task CLI commands.

Commands over an exported task list: the filtered hierarchy, the
dashboard summary and due-date alerts.
"""

from pathlib import Path
from typing import Optional

import typer
from pydantic import TypeAdapter

from taskflow.application import build_task_view, summarize_tasks
from taskflow.config import get_config
from taskflow.domain.notification import Notification, NotificationKind, derive_task_notifications
from taskflow.domain.shared.result import Ok
from taskflow.domain.task import (
    DueFilter,
    ForestRow,
    Task,
    TaskFilter,
    TaskTreeNode,
    flatten_forest,
    ingest_tasks,
    walk_forest,
)
from taskflow.interfaces.cli.common import (
    json_option,
    load_records,
    now_option,
    open_sink,
    print_header,
    print_info,
    print_rule,
    print_success,
    print_warning,
    resolve_now,
)

app = typer.Typer(help="Task list commands")

_forest_adapter = TypeAdapter(list[ForestRow])
_alerts_adapter = TypeAdapter(list[Notification])

_KIND_COLORS = {
    NotificationKind.OVERDUE: typer.colors.RED,
    NotificationKind.DUE_TODAY: typer.colors.YELLOW,
    NotificationKind.DUE_SOON: typer.colors.CYAN,
}


# =============================================================================
# Output Formatting Helpers
# =============================================================================


def format_task_line(task: Task) -> str:
    """Format a task for a one-line listing."""
    mark = "[x]" if task.completed else "[ ]"
    due_at = task.due_at()
    due = f"  due {due_at.value:%b %d, %Y %H:%M}" if isinstance(due_at, Ok) else ""
    return f"{mark} {task.text} ({task.tag_label}){due}"


def print_forest(forest: list[TaskTreeNode]) -> None:
    """Print a task forest, one indented line per task."""
    for node, depth in walk_forest(forest):
        indent = "  " * depth
        note = "  (parent cycle broken)" if node.cycle_broken else ""
        typer.echo(f"{indent}- {format_task_line(node.task)}{note}")


# =============================================================================
# Commands
# =============================================================================


@app.command("tree")
def tree(
    tasks: Path = typer.Argument(..., help="JSON file with the task list"),
    tag: Optional[str] = typer.Option(None, "--tag", help="Only tasks with this tag"),
    due: DueFilter = typer.Option(DueFilter.ALL, "--due", help="Due-date bucket"),
    hide_completed: bool = typer.Option(False, "--hide-completed", help="Hide completed tasks"),
    owner: Optional[str] = typer.Option(None, "--owner", help="Only tasks assigned to this user id"),
    now: Optional[str] = now_option,
    as_json: bool = json_option,
) -> None:
    """Show the task hierarchy, optionally filtered."""
    task_filter = TaskFilter(tag=tag, due=due, hide_completed=hide_completed, owner=owner)
    forest = build_task_view(ingest_tasks(load_records(tasks)), task_filter, resolve_now(now))

    if as_json:
        typer.echo(_forest_adapter.dump_json(flatten_forest(forest), indent=2).decode())
        return

    if not forest:
        print_info("No tasks match the current filters.")
        return
    print_forest(forest)


@app.command("summary")
def summary(
    tasks: Path = typer.Argument(..., help="JSON file with the task list"),
    now: Optional[str] = now_option,
    as_json: bool = json_option,
) -> None:
    """Show task statistics, upcoming and overdue tasks."""
    stats = summarize_tasks(ingest_tasks(load_records(tasks)), resolve_now(now))

    if as_json:
        typer.echo(stats.model_dump_json(indent=2))
        return

    if stats.total == 0:
        print_info("Add some tasks to see the summary!")
        return

    print_header("TASK SUMMARY")
    typer.echo(f"Total: {stats.total}  Completed: {stats.completed}  "
               f"Pending: {stats.on_track}  Overdue: {stats.overdue}")
    typer.echo(f"Completion rate: {stats.completion_rate}%  Overdue rate: {stats.overdue_rate}%")
    print_success(stats.performance_badge)

    print_rule()
    typer.echo("By tag:")
    for item in stats.by_tag:
        typer.echo(f"  {item.tag}: {item.count}")

    print_rule()
    typer.echo("Upcoming (next 7 days):")
    for task in stats.upcoming:
        typer.echo(f"  {format_task_line(task)}")
    if not stats.upcoming:
        typer.echo("  No upcoming tasks.")

    typer.echo("Overdue:")
    for task in stats.overdue_tasks:
        typer.echo(f"  {format_task_line(task)}")
    if not stats.overdue_tasks:
        typer.echo("  No overdue tasks.")


@app.command("alerts")
def alerts(
    tasks: Path = typer.Argument(..., help="JSON file with the task list"),
    now: Optional[str] = now_option,
    deliver: bool = typer.Option(
        False, "--deliver", help="Send alerts through the notification sink (recorded in history)"
    ),
    as_json: bool = json_option,
) -> None:
    """Show overdue, due-today and due-soon alerts."""
    config = get_config()
    task_list = ingest_tasks(load_records(tasks))
    reference = resolve_now(now)
    notifications = derive_task_notifications(task_list, reference, config.due_soon_days)

    if as_json:
        typer.echo(_alerts_adapter.dump_json(notifications, indent=2).decode())
    elif not notifications:
        print_info("Nothing is overdue or due soon.")
    else:
        for notification in notifications:
            label = notification.kind.value.upper()
            typer.echo(typer.style(f"{label:<10}", fg=_KIND_COLORS[notification.kind]) + notification.message)

    if deliver:
        sink = open_sink()
        try:
            delivered = sink.notify_tasks(task_list, reference, config.due_soon_days)
        finally:
            sink.close()
        if not delivered and notifications:
            print_warning("Notifications are muted; nothing delivered.")
