"""Task application service.

Derived views over a task list: the filtered forest shown by task list
screens and the summary statistics shown on the dashboard.
All functions are pure - no I/O, no side effects.
"""

from collections import Counter
from datetime import datetime

from pydantic import BaseModel, Field, computed_field

from taskflow.domain.shared.result import Ok
from taskflow.domain.task import Task, TaskFilter, TaskTreeNode, build_forest, filter_tasks
from taskflow.domain.types import align_to

UPCOMING_DAYS = 7


class TagCount(BaseModel):
    tag: str
    count: int


class TaskSummary(BaseModel):
    """Statistics about a task list.

    Overdue tasks are counted within pending; ``on_track`` is the pending
    count without them.
    """

    total: int
    completed: int
    pending: int
    overdue: int
    by_tag: list[TagCount] = Field(default_factory=list)
    upcoming: list[Task] = Field(default_factory=list)
    overdue_tasks: list[Task] = Field(default_factory=list)

    @computed_field
    @property
    def on_track(self) -> int:
        return self.pending - self.overdue

    @computed_field
    @property
    def completion_rate(self) -> int:
        """Completion percentage, rounded to a whole number."""
        if self.total == 0:
            return 0
        return round(self.completed / self.total * 100)

    @computed_field
    @property
    def overdue_rate(self) -> int:
        """Overdue percentage, rounded to a whole number."""
        if self.total == 0:
            return 0
        return round(self.overdue / self.total * 100)

    @computed_field
    @property
    def performance_badge(self) -> str:
        rate = self.completion_rate
        if self.total > 0 and rate == 100:
            return "Excellent! All tasks completed!"
        if rate >= 80:
            return "Great job! Keep it up!"
        if rate >= 50:
            return "Good progress, but room to improve."
        return "Let's get more tasks done!"


def _due_day_offset(task: Task, now: datetime) -> int | None:
    due = task.due_at()
    if not isinstance(due, Ok):
        return None
    return (align_to(due.value, now).date() - now.date()).days


def _due_sort_key(task: Task, now: datetime) -> datetime:
    return align_to(task.due_at().value, now)


def summarize_tasks(tasks: list[Task], now: datetime) -> TaskSummary:
    """Calculate dashboard statistics for a task list.

    Args:
        tasks: Tasks to summarise.
        now: Reference instant for the overdue and upcoming buckets.

    Returns:
        TaskSummary with counts, tag breakdown and due-date lists.
    """
    overdue_tasks: list[Task] = []
    upcoming: list[Task] = []
    for task in tasks:
        if task.completed:
            continue
        offset = _due_day_offset(task, now)
        if offset is None:
            continue
        if offset < 0:
            overdue_tasks.append(task)
        elif offset < UPCOMING_DAYS:
            upcoming.append(task)

    tag_counts = Counter(task.tag_label for task in tasks)
    completed = sum(1 for task in tasks if task.completed)

    return TaskSummary(
        total=len(tasks),
        completed=completed,
        pending=len(tasks) - completed,
        overdue=len(overdue_tasks),
        by_tag=[TagCount(tag=tag, count=count) for tag, count in tag_counts.items()],
        upcoming=sorted(upcoming, key=lambda task: _due_sort_key(task, now)),
        overdue_tasks=sorted(overdue_tasks, key=lambda task: _due_sort_key(task, now)),
    )


def build_task_view(
    tasks: list[Task],
    task_filter: TaskFilter | None = None,
    now: datetime | None = None,
) -> list[TaskTreeNode]:
    """Filter a task list and build the forest shown by task list screens.

    Children whose parent was filtered out appear as roots.

    Args:
        tasks: Full task list.
        task_filter: Active view filters; no filtering if not provided.
        now: Reference instant for due-date filters. Defaults to local now.

    Returns:
        Root nodes of the filtered forest.
    """
    if task_filter is not None:
        tasks = filter_tasks(tasks, task_filter, now or datetime.now())
    return build_forest(tasks)
