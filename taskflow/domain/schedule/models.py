"""Weekly schedule models.

A Schedule owns a list of recurring weekly blocks. Block day and clock
fields are kept as the raw strings the backend stores; they are parsed
during recurrence expansion, where a bad value only costs the block (or
the single occurrence) it belongs to.
"""

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
    model_validator,
)

logger = logging.getLogger(__name__)


def _stringify_ids(data: Any) -> Any:
    if isinstance(data, Mapping):
        data = dict(data)
        for key in ("id", "_id"):
            if data.get(key) is not None:
                data[key] = str(data[key])
    return data


class ScheduleBlock(BaseModel):
    """One recurring weekly time slot.

    If end_time is earlier than start_time the block runs past midnight
    into the next day.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    id: str | None = Field(default=None, validation_alias=AliasChoices("id", "_id"))
    day: str
    start_time: str = Field(validation_alias=AliasChoices("start_time", "startTime"))
    end_time: str = Field(validation_alias=AliasChoices("end_time", "endTime"))
    activity: str = Field(min_length=1)
    location: str | None = None
    tag: str | None = None

    @model_validator(mode="before")
    @classmethod
    def _normalise_ids(cls, data: Any) -> Any:
        return _stringify_ids(data)


class Schedule(BaseModel):
    """A named set of weekly blocks.

    Blocks missing required fields are dropped individually so the rest
    of the schedule still renders.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    id: str | None = Field(default=None, validation_alias=AliasChoices("id", "_id"))
    name: str = ""
    blocks: list[ScheduleBlock] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def _normalise_ids(cls, data: Any) -> Any:
        return _stringify_ids(data)

    @field_validator("blocks", mode="before")
    @classmethod
    def _drop_malformed_blocks(cls, value: Any) -> Any:
        if value is None:
            return []
        if not isinstance(value, list):
            return value
        blocks = []
        for position, raw in enumerate(value):
            try:
                blocks.append(ScheduleBlock.model_validate(raw))
            except ValidationError as e:
                logger.warning(f"Skipping malformed schedule block #{position}: {e.error_count()} error(s)")
        return blocks


def ingest_schedules(records: Iterable[Mapping[str, Any]]) -> list[Schedule]:
    """Validate raw schedule records, skipping the ones that are unusable.

    Args:
        records: Raw schedule dictionaries as returned by the backend.

    Returns:
        The valid schedules, in input order.
    """
    schedules: list[Schedule] = []
    for position, record in enumerate(records):
        try:
            schedules.append(Schedule.model_validate(record))
        except ValidationError as e:
            logger.warning(f"Skipping malformed schedule record #{position}: {e.error_count()} error(s)")
    return schedules
