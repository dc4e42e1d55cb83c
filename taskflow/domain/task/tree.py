"""Task forest construction and traversal.

All functions in this module are pure - no I/O, no side effects.
They take a flat task list in and return freshly built nodes out.
"""

import logging
from collections.abc import Callable, Iterator
from typing import TypeVar

from .models import ForestRow, Task, TaskTreeNode

logger = logging.getLogger(__name__)

T = TypeVar("T")


# =============================================================================
# Construction
# =============================================================================


def _resolve_parents(tasks: list[Task]) -> tuple[dict[str, str | None], set[str]]:
    """Map each task id to the parent it will hang under.

    A parent counts only if it is part of the same input list. Parent
    chains that loop back on themselves are broken by promoting the
    earliest cycle member (in input order) to a root.

    Returns:
        (parent_of, broken) where broken holds the ids promoted to break a cycle
    """
    position = {task.id: i for i, task in enumerate(tasks)}
    parent_of: dict[str, str | None] = {
        task.id: task.parent_id if task.parent_id in position else None
        for task in tasks
    }

    broken: set[str] = set()
    settled: set[str] = set()
    for task in tasks:
        path: list[str] = []
        on_path: dict[str, int] = {}
        current = task.id
        while current is not None and current not in settled:
            if current in on_path:
                cycle = path[on_path[current]:]
                breaker = min(cycle, key=position.__getitem__)
                parent_of[breaker] = None
                broken.add(breaker)
                logger.warning(
                    f"Parent cycle among tasks {cycle}; promoting {breaker} to a root"
                )
                break
            on_path[current] = len(path)
            path.append(current)
            current = parent_of[current]
        settled.update(path)

    return parent_of, broken


def build_forest(tasks: list[Task]) -> list[TaskTreeNode]:
    """Build an ordered forest from a flat task list.

    Tasks whose parent is missing from the list (deleted, or filtered out
    of the current view) become roots. Children keep input order; callers
    wanting another order must sort the flat list first.

    Args:
        tasks: Flat list of tasks

    Returns:
        Root nodes in input order, each with nested children
    """
    nodes: dict[str, TaskTreeNode] = {}
    unique: list[Task] = []
    for task in tasks:
        if task.id in nodes:
            logger.warning(f"Duplicate task id {task.id}; keeping the first occurrence")
            continue
        nodes[task.id] = TaskTreeNode(task=task)
        unique.append(task)

    parent_of, broken = _resolve_parents(unique)

    roots: list[TaskTreeNode] = []
    for task in unique:
        node = nodes[task.id]
        parent_id = parent_of[task.id]
        if task.id in broken:
            node.cycle_broken = True
        if parent_id is None:
            roots.append(node)
        else:
            nodes[parent_id].children.append(node)
    return roots


# =============================================================================
# Traversal
# =============================================================================


def walk_forest(forest: list[TaskTreeNode]) -> Iterator[tuple[TaskTreeNode, int]]:
    """Yield (node, depth) pairs in depth-first, parent-first order."""
    stack = [(node, 0) for node in reversed(forest)]
    while stack:
        node, depth = stack.pop()
        yield node, depth
        stack.extend((child, depth + 1) for child in reversed(node.children))


def flatten_forest(forest: list[TaskTreeNode]) -> list[ForestRow]:
    """Flatten a forest into parent-first rows.

    ``parent_id`` is the node the row hangs under in this forest, which is
    None for roots even when the task names a missing or cyclic parent.
    """
    rows: list[ForestRow] = []
    stack: list[tuple[TaskTreeNode, int, str | None]] = [(node, 0, None) for node in reversed(forest)]
    while stack:
        node, depth, parent_id = stack.pop()
        rows.append(ForestRow(task=node.task, depth=depth, parent_id=parent_id, cycle_broken=node.cycle_broken))
        stack.extend((child, depth + 1, node.task.id) for child in reversed(node.children))
    return rows


def fold_forest(
    forest: list[TaskTreeNode],
    initial: T,
    f: Callable[[T, TaskTreeNode, int], T],
) -> T:
    """Fold over every node in the forest.

    Args:
        forest: Root nodes to fold over
        initial: Starting accumulator value
        f: Function (accumulator, node, depth) -> new_accumulator

    Returns:
        Final accumulated value after visiting all nodes
    """
    result = initial
    for node, depth in walk_forest(forest):
        result = f(result, node, depth)
    return result


def find_node(
    forest: list[TaskTreeNode],
    predicate: Callable[[TaskTreeNode], bool],
) -> TaskTreeNode | None:
    """Find the first node matching a predicate (depth-first)."""
    for node, _ in walk_forest(forest):
        if predicate(node):
            return node
    return None


def count_nodes(forest: list[TaskTreeNode]) -> int:
    """Count every node in the forest."""
    return fold_forest(forest, 0, lambda acc, node, depth: acc + 1)
