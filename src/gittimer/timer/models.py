"""Pydantic models for the persisted timer record."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field, field_validator, model_validator


class TimerState(str, Enum):
    """Lifecycle state of a timer record.

    Attributes:
        IDLE: Nothing started, or cleaned up after a successful commit.
        RUNNING: Started and still timing.
        STOPPED: Timing finished but the commit has not succeeded yet.
    """

    IDLE = "idle"
    RUNNING = "running"
    STOPPED = "stopped"


class TimerRecord(BaseModel):
    """Timer state for one repository.

    Attributes:
        name: Optional label given on start.
        start: When timing began, with local UTC offset.
        end: When timing stopped, with local UTC offset.
    """

    name: str | None = Field(default=None, description="Timer label")
    start: datetime | None = Field(default=None, description="Start timestamp")
    end: datetime | None = Field(default=None, description="End timestamp")

    @field_validator("start", "end")
    @classmethod
    def _localize(cls, value: datetime | None) -> datetime | None:
        # Naive timestamps (hand-edited files) are read as local time
        if value is not None and value.tzinfo is None:
            return value.astimezone()
        return value

    @model_validator(mode="after")
    def _check_order(self) -> "TimerRecord":
        if self.end is not None and self.start is None:
            raise ValueError("end is set but start is not")
        if self.start is not None and self.end is not None and self.end < self.start:
            raise ValueError(f"end {self.end.isoformat()} is before start {self.start.isoformat()}")
        return self
