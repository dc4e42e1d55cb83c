"""Task domain models.

Snapshots of backend task records, normalised at the ingestion boundary so
the rest of the domain never has to branch on wire representation. Uses
Pydantic for validation and for serialising results back out.
"""

import logging
from collections.abc import Iterable, Mapping
from datetime import datetime
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from taskflow.domain.shared.result import Err, Ok, Result
from taskflow.domain.types import parse_datetime, reference_id

logger = logging.getLogger(__name__)

DEFAULT_TAG = "General"


class Task(BaseModel):
    """A unit of work as delivered by the backend.

    Accepts the backend's camelCase field names (``_id``, ``dueDate``,
    ``parentTask``) as well as the snake_case ones. ``parentTask`` and
    ``owner`` may be plain ids or expanded objects; both are reduced to an
    id string here.

    A due date that cannot be parsed is kept as its raw text so that
    consumers can report it; use ``due_at()`` to get a usable datetime.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    id: str = Field(validation_alias=AliasChoices("id", "_id"))
    text: str = Field(min_length=1)
    completed: bool = False
    due_date: datetime | str | None = Field(
        default=None, validation_alias=AliasChoices("due_date", "dueDate")
    )
    tag: str | None = None
    owner: str | None = None
    parent_id: str | None = None
    parent_text: str | None = None

    @model_validator(mode="before")
    @classmethod
    def _normalise_references(cls, data: Any) -> Any:
        if not isinstance(data, Mapping):
            return data
        data = dict(data)

        for key in ("id", "_id"):
            if key in data and data[key] is not None:
                data[key] = str(data[key])

        if "parentTask" in data or "parent_task" in data:
            parent = data.pop("parentTask", data.pop("parent_task", None))
            data.setdefault("parent_id", reference_id(parent))
            if isinstance(parent, Mapping) and parent.get("text"):
                data.setdefault("parent_text", parent["text"])
        elif data.get("parent_id") is not None:
            data["parent_id"] = reference_id(data["parent_id"])

        if "owner" in data:
            data["owner"] = reference_id(data["owner"])
        return data

    @field_validator("due_date", mode="before")
    @classmethod
    def _parse_due_date(cls, value: Any) -> Any:
        if value is None or value == "":
            return None
        result = parse_datetime(value)
        if isinstance(result, Ok):
            return result.value
        return str(value)

    def due_at(self) -> Result[datetime, str]:
        """Return the due date as a datetime.

        Returns:
            Ok(datetime) if the task has a valid due date, Err(str) if it has
            none or the stored value could not be parsed.
        """
        if self.due_date is None:
            return Err(f"Task {self.id} has no due date")
        if isinstance(self.due_date, datetime):
            return Ok(self.due_date)
        return Err(f"Task {self.id} has an invalid due date: {self.due_date!r}")

    @property
    def tag_label(self) -> str:
        """Tag for display, with untagged tasks grouped under "General"."""
        return self.tag.strip() if self.tag and self.tag.strip() else DEFAULT_TAG


class TaskTreeNode(BaseModel):
    """A task together with its materialised children.

    Nodes are rebuilt on every forest build and owned exclusively by the
    forest they belong to.
    """

    task: Task
    children: list["TaskTreeNode"] = Field(default_factory=list)
    cycle_broken: bool = False

    def is_leaf(self) -> bool:
        """Check if this node has no children."""
        return len(self.children) == 0


class ForestRow(BaseModel):
    """One node of a forest in flat, parent-first form.

    The shape the forest takes on the wire: a recursive node model can
    only be serialised as deep as pydantic's recursion guard allows.
    """

    task: Task
    depth: int
    parent_id: str | None = None
    cycle_broken: bool = False


def ingest_tasks(records: Iterable[Mapping[str, Any]]) -> list[Task]:
    """Validate raw task records, skipping the ones that are unusable.

    A record without an id or text cannot be rendered; it is logged and
    dropped rather than failing the whole batch.

    Args:
        records: Raw task dictionaries as returned by the backend.

    Returns:
        The valid tasks, in input order.
    """
    tasks: list[Task] = []
    for position, record in enumerate(records):
        try:
            tasks.append(Task.model_validate(record))
        except ValidationError as e:
            logger.warning(f"Skipping malformed task record #{position}: {e.error_count()} error(s)")
    return tasks
