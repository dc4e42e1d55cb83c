"""Tests for the taskflow CLI."""

import json

import pytest
from typer.testing import CliRunner

from taskflow import __version__
from taskflow.interfaces.cli import app

runner = CliRunner()

NOW = "2024-03-06T12:00:00"

TASKS = [
    {"_id": "p", "text": "Launch", "dueDate": "2024-03-04", "tag": "Work"},
    {"_id": "c", "text": "Write notes", "dueDate": "2024-03-08", "parentTask": {"_id": "p", "text": "Launch"}},
    {"_id": "d", "text": "Archive", "completed": True},
]

SCHEDULES = [
    {
        "_id": "s1",
        "name": "Week",
        "blocks": [{"_id": "b1", "day": "Wednesday", "startTime": "23:00", "endTime": "01:00", "activity": "Night shift"}],
    }
]


@pytest.fixture
def files(tmp_path, taskflow_home):
    tasks = tmp_path / "tasks.json"
    schedules = tmp_path / "schedules.json"
    tasks.write_text(json.dumps(TASKS), encoding="utf-8")
    schedules.write_text(json.dumps(SCHEDULES), encoding="utf-8")
    return tasks, schedules


def test_version():
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert f"taskflow version {__version__}" in result.output


class TestCalendar:
    def test_show_json(self, files):
        tasks, schedules = files
        result = runner.invoke(
            app, ["calendar", "show", str(tasks), str(schedules), "--now", NOW, "--window-years", "0", "--json"]
        )

        assert result.exit_code == 0, result.output
        view = json.loads(result.output)
        assert [event["title"] for event in view["events"]] == ["Launch", "Night shift", "Write notes"]
        assert view["next_upcoming"]["title"] == "Night shift"

    def test_show_text_with_limit(self, files):
        tasks, schedules = files
        result = runner.invoke(
            app, ["calendar", "show", str(tasks), str(schedules), "--now", NOW, "-w", "0", "--upcoming", "-n", "1"]
        )

        assert result.exit_code == 0, result.output
        assert "CALENDAR (1 of 3 events)" in result.output
        assert "Night shift" in result.output
        assert "Write notes" not in result.output
        assert "Launch" not in result.output

    def test_next(self, files):
        tasks, _ = files
        result = runner.invoke(app, ["calendar", "next", str(tasks), "--now", NOW])

        assert result.exit_code == 0, result.output
        assert "NEXT UPCOMING" in result.output
        assert "Write notes" in result.output

    def test_now_from_environment(self, files, monkeypatch):
        tasks, _ = files
        monkeypatch.setenv("TASKFLOW_NOW", "2024-03-10T00:00:00")
        result = runner.invoke(app, ["calendar", "next", str(tasks)])

        assert result.exit_code == 0, result.output
        assert "No upcoming tasks" in result.output

    def test_missing_file(self, tmp_path, taskflow_home):
        result = runner.invoke(app, ["calendar", "show", str(tmp_path / "missing.json")])
        assert result.exit_code == 1

    def test_bad_now(self, files):
        tasks, _ = files
        result = runner.invoke(app, ["calendar", "show", str(tasks), "--now", "yesterday"])
        assert result.exit_code == 1


class TestTasks:
    def test_tree(self, files):
        tasks, _ = files
        result = runner.invoke(app, ["tasks", "tree", str(tasks), "--now", NOW])

        assert result.exit_code == 0, result.output
        lines = result.output.splitlines()
        assert lines[0].startswith("- [ ] Launch (Work)")
        assert lines[1].startswith("  - [ ] Write notes (General)")
        assert lines[2].startswith("- [x] Archive")

    def test_tree_filters_json(self, files):
        tasks, _ = files
        result = runner.invoke(app, ["tasks", "tree", str(tasks), "--now", NOW, "--due", "due-this-week", "--json"])

        assert result.exit_code == 0, result.output
        rows = json.loads(result.output)
        assert [(row["task"]["id"], row["depth"], row["parent_id"]) for row in rows] == [("c", 0, None)]

    def test_tree_deep_chain(self, tmp_path, taskflow_home):
        chain = [{"_id": "t0", "text": "Task 0"}]
        chain += [{"_id": f"t{i}", "text": f"Task {i}", "parentTask": f"t{i - 1}"} for i in range(1, 400)]
        tasks = tmp_path / "chain.json"
        tasks.write_text(json.dumps(chain), encoding="utf-8")

        as_json = runner.invoke(app, ["tasks", "tree", str(tasks), "--now", NOW, "--json"])
        assert as_json.exit_code == 0, as_json.output
        rows = json.loads(as_json.output)
        assert [row["depth"] for row in rows] == list(range(400))

        as_text = runner.invoke(app, ["tasks", "tree", str(tasks), "--now", NOW])
        assert as_text.exit_code == 0, as_text.output
        assert as_text.output.splitlines()[-1].startswith("  " * 399 + "- [ ] Task 399")

    def test_summary_json(self, files):
        tasks, _ = files
        result = runner.invoke(app, ["tasks", "summary", str(tasks), "--now", NOW, "--json"])

        assert result.exit_code == 0, result.output
        summary = json.loads(result.output)
        assert (summary["total"], summary["completed"], summary["overdue"]) == (3, 1, 1)
        assert summary["completion_rate"] == 33

    def test_alerts(self, files):
        tasks, _ = files
        result = runner.invoke(app, ["tasks", "alerts", str(tasks), "--now", NOW])

        assert result.exit_code == 0, result.output
        assert "Launch is overdue (was due 2 days ago)" in result.output
        assert "Write notes is due in 2 days" in result.output

    def test_alerts_deliver_records_history(self, files):
        tasks, _ = files
        result = runner.invoke(app, ["tasks", "alerts", str(tasks), "--now", NOW, "--deliver"])
        assert result.exit_code == 0, result.output

        history = runner.invoke(app, ["notifications", "history", "--json"])
        assert history.exit_code == 0, history.output
        messages = [entry["message"] for entry in json.loads(history.output)]
        assert messages == ["Write notes is due in 2 days", "Launch is overdue (was due 2 days ago)"]


class TestNotifications:
    def test_settings_round_trip(self, taskflow_home):
        result = runner.invoke(app, ["notifications", "settings", "--mute", "--no-sound"])
        assert result.exit_code == 0, result.output
        assert "Notification settings updated." in result.output

        shown = runner.invoke(app, ["notifications", "settings", "--json"])
        assert json.loads(shown.output) == {"sound": False, "browser_push": False, "mute": True}

        stored = json.loads((taskflow_home / "preferences.json").read_text(encoding="utf-8"))
        assert stored["notifSettings"]["mute"] is True

    def test_send_and_clear(self, taskflow_home):
        sent = runner.invoke(app, ["notifications", "send", "Standup now", "--related", "t1"])
        assert sent.exit_code == 0, sent.output
        assert "Standup now" in sent.output

        history = runner.invoke(app, ["notifications", "history"])
        assert "NOTIFICATION HISTORY (1)" in history.output
        assert "Standup now" in history.output

        cleared = runner.invoke(app, ["notifications", "history", "--clear"])
        assert cleared.exit_code == 0
        assert "No notifications yet." in runner.invoke(app, ["notifications", "history"]).output

    def test_send_while_muted(self, taskflow_home):
        runner.invoke(app, ["notifications", "settings", "--mute"])
        result = runner.invoke(app, ["notifications", "send", "Quiet please"])

        assert result.exit_code == 0
        assert "muted" in result.output
        assert json.loads(runner.invoke(app, ["notifications", "history", "--json"]).output) == []
