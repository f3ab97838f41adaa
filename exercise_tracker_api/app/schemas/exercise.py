"""
Pydantic schemas for exercise log entries.

``ExerciseCreate`` holds the raw submitted values; casting ``duration``
and ``date`` to their stored types happens in the service layer so a
bad value is reported as a save error rather than a request
validation error.  ``ExerciseRead`` is the stored record, while
``ExerciseLogEntry``, ``ExerciseLog`` and ``ExerciseCreated`` are the
shapes returned by the endpoints, with dates rendered as calendar
strings such as ``Thu Jan 05 2023``.
"""

import datetime
from typing import List, Optional, Union

from pydantic import BaseModel, Field

Number = Union[int, float]


class ExerciseCreate(BaseModel):
    """Schema for logging a new exercise."""

    description: Optional[str] = Field(None, description="What was done")
    duration: Optional[Union[int, float, str]] = Field(None, description="Duration in minutes")
    date: Optional[Union[datetime.date, str]] = Field(
        None, description="Calendar date (YYYY-MM-DD); defaults to today"
    )


class ExerciseRead(BaseModel):
    """A stored exercise record."""

    id: str
    user_id: str
    description: Optional[str] = None
    duration: Optional[Number] = None
    date: datetime.date


class ExerciseLogEntry(BaseModel):
    description: Optional[str] = None
    duration: Optional[Number] = None
    date: str


class ExerciseLog(BaseModel):
    """Response body of the logs endpoint."""

    id: str = Field(..., alias="_id")
    username: Optional[str] = None
    count: int
    log: List[ExerciseLogEntry]

    model_config = {
        "populate_by_name": True,
    }


class ExerciseCreated(BaseModel):
    """Response body after logging an exercise.  ``_id`` is the user's id."""

    id: str = Field(..., alias="_id")
    username: Optional[str] = None
    description: Optional[str] = None
    duration: Optional[Number] = None
    date: str

    model_config = {
        "populate_by_name": True,
    }
