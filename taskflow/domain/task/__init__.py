"""Task domain - task snapshots and their hierarchy.

All exports are pure (no I/O, no side effects).

Key Types:
    Task - Normalised task snapshot
    TaskTreeNode - Task with materialised children
    ForestRow - One forest node in flat form
    TaskFilter / DueFilter - Task list view filters

Functions:
    ingest_tasks - Validate raw backend records
    build_forest - Flat list to ordered forest
    walk_forest / flatten_forest / fold_forest / find_node / count_nodes - Forest traversal
    filter_tasks - Apply view filters to a flat list
"""

from .filters import ALL_TAGS, DueFilter, TaskFilter, filter_tasks, matches_due
from .models import DEFAULT_TAG, ForestRow, Task, TaskTreeNode, ingest_tasks
from .tree import build_forest, count_nodes, find_node, flatten_forest, fold_forest, walk_forest

__all__ = [
    # Models
    "DEFAULT_TAG",
    "Task",
    "TaskTreeNode",
    "ForestRow",
    "ingest_tasks",
    # Forest
    "build_forest",
    "walk_forest",
    "flatten_forest",
    "fold_forest",
    "find_node",
    "count_nodes",
    # Filters
    "ALL_TAGS",
    "DueFilter",
    "TaskFilter",
    "filter_tasks",
    "matches_due",
]
