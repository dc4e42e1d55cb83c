"""Tests for task ingestion, forest construction and task filters."""

import json
import logging
from datetime import datetime

from pydantic import TypeAdapter

from taskflow.application import build_task_view
from taskflow.domain.task import (
    DueFilter,
    ForestRow,
    Task,
    TaskFilter,
    build_forest,
    count_nodes,
    filter_tasks,
    find_node,
    flatten_forest,
    ingest_tasks,
    walk_forest,
)


def _ids(forest):
    return [node.task.id for node in forest]


class TestIngestion:
    def test_normalises_wire_format(self):
        task = Task.model_validate(
            {
                "_id": 5,
                "text": "Write report",
                "dueDate": "2024-03-01T09:30:00",
                "parentTask": {"_id": "p1", "text": "Quarterly review"},
                "owner": {"_id": "u1", "username": "sam"},
                "unknownField": True,
            }
        )

        assert task.id == "5"
        assert task.due_date == datetime(2024, 3, 1, 9, 30)
        assert task.parent_id == "p1"
        assert task.parent_text == "Quarterly review"
        assert task.owner == "u1"

    def test_plain_parent_id(self):
        assert Task.model_validate({"_id": "2", "text": "Child", "parentTask": 1}).parent_id == "1"

    def test_unparseable_due_date_is_kept(self):
        task = Task.model_validate({"_id": "1", "text": "Odd", "dueDate": "soon"})
        assert task.due_date == "soon"
        assert task.due_at().error.startswith("Task 1 has an invalid due date")

    def test_tag_label_defaults_to_general(self):
        assert Task.model_validate({"_id": "1", "text": "a", "tag": "  "}).tag_label == "General"
        assert Task.model_validate({"_id": "1", "text": "a", "tag": "Work"}).tag_label == "Work"

    def test_malformed_records_are_skipped(self, caplog):
        with caplog.at_level(logging.WARNING):
            tasks = ingest_tasks([{"_id": "1", "text": "ok"}, {"_id": "2"}, {"text": "no id"}])

        assert [task.id for task in tasks] == ["1"]
        assert "malformed task record #1" in caplog.text


class TestBuildForest:
    def test_dangling_parent_becomes_root(self):
        tasks = ingest_tasks(
            [
                {"_id": 1, "text": "one", "parentTask": None},
                {"_id": 2, "text": "two", "parentTask": 1},
                {"_id": 3, "text": "three", "parentTask": "missing"},
            ]
        )
        forest = build_forest(tasks)

        assert _ids(forest) == ["1", "3"]
        assert _ids(forest[0].children) == ["2"]
        assert forest[1].is_leaf()

    def test_children_keep_input_order(self):
        tasks = ingest_tasks(
            [
                {"_id": "c2", "text": "second", "parentTask": "p"},
                {"_id": "p", "text": "parent"},
                {"_id": "c1", "text": "first", "parentTask": "p"},
            ]
        )
        forest = build_forest(tasks)

        assert _ids(forest) == ["p"]
        assert _ids(forest[0].children) == ["c2", "c1"]

    def test_nested_levels(self):
        tasks = ingest_tasks(
            [
                {"_id": "a", "text": "a"},
                {"_id": "b", "text": "b", "parentTask": "a"},
                {"_id": "c", "text": "c", "parentTask": "b"},
            ]
        )
        forest = build_forest(tasks)

        assert [(node.task.id, depth) for node, depth in walk_forest(forest)] == [("a", 0), ("b", 1), ("c", 2)]
        assert count_nodes(forest) == 3
        assert find_node(forest, lambda node: node.task.id == "c").task.text == "c"
        assert find_node(forest, lambda node: node.task.id == "z") is None

    def test_cycle_is_broken_at_first_member(self, caplog):
        tasks = ingest_tasks(
            [
                {"_id": "x", "text": "x", "parentTask": "z"},
                {"_id": "y", "text": "y", "parentTask": "x"},
                {"_id": "z", "text": "z", "parentTask": "y"},
                {"_id": "w", "text": "w", "parentTask": "y"},
            ]
        )
        with caplog.at_level(logging.WARNING):
            forest = build_forest(tasks)

        assert _ids(forest) == ["x"]
        assert forest[0].cycle_broken is True
        assert count_nodes(forest) == 4
        assert "promoting x to a root" in caplog.text

    def test_self_parent(self):
        forest = build_forest(ingest_tasks([{"_id": "a", "text": "a", "parentTask": "a"}]))

        assert _ids(forest) == ["a"]
        assert forest[0].cycle_broken is True
        assert forest[0].is_leaf()

    def test_duplicate_ids_keep_first(self, caplog):
        tasks = ingest_tasks([{"_id": "a", "text": "first"}, {"_id": "a", "text": "second"}])
        with caplog.at_level(logging.WARNING):
            forest = build_forest(tasks)

        assert [node.task.text for node in forest] == ["first"]
        assert "Duplicate task id a" in caplog.text

    def test_every_task_appears_once(self):
        tasks = ingest_tasks(
            [{"_id": str(i), "text": str(i), "parentTask": str((i * 7) % 10)} for i in range(10)]
        )
        forest = build_forest(tasks)
        seen = [node.task.id for node, _ in walk_forest(forest)]

        assert sorted(seen) == sorted(task.id for task in tasks)

    def test_flatten_uses_forest_parents(self):
        tasks = ingest_tasks(
            [
                {"_id": "x", "text": "x", "parentTask": "z"},
                {"_id": "y", "text": "y", "parentTask": "x"},
                {"_id": "z", "text": "z", "parentTask": "y"},
                {"_id": "w", "text": "w", "parentTask": "y"},
                {"_id": "v", "text": "v", "parentTask": "missing"},
            ]
        )
        rows = flatten_forest(build_forest(tasks))

        assert [(row.task.id, row.depth, row.parent_id, row.cycle_broken) for row in rows] == [
            ("x", 0, None, True),
            ("y", 1, "x", False),
            ("z", 2, "y", False),
            ("w", 2, "y", False),
            ("v", 0, None, False),
        ]

    def test_deep_chain_serialises_flat(self):
        chain = [{"_id": "t0", "text": "Task 0"}]
        chain += [{"_id": f"t{i}", "text": f"Task {i}", "parentTask": f"t{i - 1}"} for i in range(1, 400)]
        forest = build_forest(ingest_tasks(chain))

        rows = json.loads(TypeAdapter(list[ForestRow]).dump_json(flatten_forest(forest)))

        assert len(rows) == 400
        assert rows[-1]["depth"] == 399
        assert rows[-1]["parent_id"] == "t398"


class TestFilters:
    NOW = datetime(2024, 3, 6, 12, 0)  # Wednesday

    def _tasks(self):
        return ingest_tasks(
            [
                {"_id": "late", "text": "late", "dueDate": "2024-03-04", "tag": "Work"},
                {"_id": "today", "text": "today", "dueDate": "2024-03-06T18:00:00", "tag": "Home"},
                {"_id": "sat", "text": "sat", "dueDate": "2024-03-09", "tag": "Work", "completed": True},
                {"_id": "next", "text": "next", "dueDate": "2024-03-11", "owner": "u2"},
                {"_id": "none", "text": "none", "owner": {"_id": "u1"}},
            ]
        )

    def _select(self, **criteria):
        return [task.id for task in filter_tasks(self._tasks(), TaskFilter(**criteria), self.NOW)]

    def test_due_buckets(self):
        assert self._select(due=DueFilter.OVERDUE) == ["late"]
        assert self._select(due=DueFilter.DUE_TODAY) == ["today"]
        assert self._select(due=DueFilter.DUE_THIS_WEEK) == ["today", "sat"]
        assert self._select(due=DueFilter.NO_DUE_DATE) == ["none"]
        assert len(self._select()) == 5

    def test_tag_owner_and_completion(self):
        assert self._select(tag="Work") == ["late", "sat"]
        assert self._select(tag="All") == ["late", "today", "sat", "next", "none"]
        assert self._select(owner="u1") == ["none"]
        assert self._select(tag="Work", hide_completed=True) == ["late"]

    def test_filtered_out_parent_promotes_child(self):
        tasks = ingest_tasks(
            [
                {"_id": "p", "text": "parent", "completed": True},
                {"_id": "c", "text": "child", "parentTask": "p"},
            ]
        )
        forest = build_task_view(tasks, TaskFilter(hide_completed=True), self.NOW)

        assert _ids(forest) == ["c"]
