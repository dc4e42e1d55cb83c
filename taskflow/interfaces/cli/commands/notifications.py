"""Notification preference CLI commands.

View and change delivery settings, inspect or clear the history of shown
notifications, and send a one-off notification.
"""

from typing import Optional

import typer
from pydantic import TypeAdapter

from taskflow.domain.notification import HistoryEntry
from taskflow.interfaces.cli.common import (
    json_option,
    open_sink,
    print_header,
    print_info,
    print_success,
)

app = typer.Typer(help="Notification settings and history")

_history_adapter = TypeAdapter(list[HistoryEntry])


def _on_off(value: bool) -> str:
    return "on" if value else "off"


@app.command("settings")
def settings(
    sound: Optional[bool] = typer.Option(None, "--sound/--no-sound", help="Play a sound"),
    browser: Optional[bool] = typer.Option(None, "--browser/--no-browser", help="Show native notifications"),
    mute: Optional[bool] = typer.Option(None, "--mute/--unmute", help="Suppress every notification"),
    as_json: bool = json_option,
) -> None:
    """Show notification settings, or change them when options are given."""
    sink = open_sink(with_effects=False)
    changes = {
        key: value
        for key, value in (("sound", sound), ("browser_push", browser), ("mute", mute))
        if value is not None
    }
    current = sink.update_settings(**changes) if changes else sink.settings

    if as_json:
        typer.echo(current.model_dump_json(indent=2))
        return

    if changes:
        print_success("Notification settings updated.")
    typer.echo(f"Sound:   {_on_off(current.sound)}")
    typer.echo(f"Browser: {_on_off(current.browser_push)}")
    typer.echo(f"Mute:    {_on_off(current.mute)}")


@app.command("history")
def history(
    clear: bool = typer.Option(False, "--clear", help="Delete the notification history"),
    limit: Optional[int] = typer.Option(None, "--limit", "-n", min=1, help="Maximum entries to show"),
    as_json: bool = json_option,
) -> None:
    """Show recently shown notifications, newest first."""
    sink = open_sink(with_effects=False)
    if clear:
        sink.clear_history()
        print_success("Notification history cleared.")
        return

    entries = sink.history[:limit] if limit else sink.history
    if as_json:
        typer.echo(_history_adapter.dump_json(entries, indent=2).decode())
        return

    if not entries:
        print_info("No notifications yet.")
        return
    print_header(f"NOTIFICATION HISTORY ({len(entries)})")
    for entry in entries:
        typer.echo(f"{entry.timestamp:%Y-%m-%d %H:%M}  {entry.message}")


@app.command("send")
def send(
    message: str = typer.Argument(..., help="Text to show"),
    related: Optional[str] = typer.Option(None, "--related", help="Id of the related task or conversation"),
) -> None:
    """Send a notification through the sink."""
    sink = open_sink()
    try:
        entry_id = sink.notify(message, {"related_entity_id": related})
    finally:
        sink.close()
    if entry_id is None:
        print_info("Notifications are muted; nothing delivered.")
    else:
        typer.echo(typer.style(f"[notification] {message}", fg=typer.colors.CYAN))
