"""
Exercise endpoints, nested under a user.

* ``POST /api/users/{user_id}/exercises`` logs an exercise from the
  ``description``, ``duration`` and optional ``date`` form fields.
* ``GET /api/users/{user_id}/logs`` returns the user's log, filtered by
  the optional ``from``/``to`` dates and capped by ``limit``.

Logical failures keep status 200 and answer with a plain-text body
instead of the JSON object, so clients tell them apart by shape:
``Could not find user`` for an unknown id and ``There was an error
saving the exercise`` when the entry cannot be stored.
"""

import logging
import sqlite3
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import PlainTextResponse
from pydantic import ValidationError

from ...core.config import Settings
from ...core.db import Database
from ...core.errors import ExerciseTrackerError, UserNotFoundError
from ...schemas.exercise import ExerciseCreate, ExerciseCreated, ExerciseLog, ExerciseLogEntry
from ...services.exercise_service import (
    ExerciseService,
    format_calendar_date,
    parse_date_bound,
    parse_limit,
)
from ...services.user_service import UserService
from ..deps import get_db, get_settings, read_payload

logger = logging.getLogger(__name__)

USER_NOT_FOUND = "Could not find user"
EXERCISE_SAVE_ERROR = "There was an error saving the exercise"

router = APIRouter()


def _text_field(payload: dict, name: str) -> Optional[str]:
    value = payload.get(name)
    return None if value is None else str(value)


@router.post("/{user_id}/exercises", response_model=ExerciseCreated)
async def create_exercise(
    user_id: str,
    request: Request,
    db: Database = Depends(get_db),
):
    """Log an exercise for an existing user."""
    payload = await read_payload(request)
    try:
        data = ExerciseCreate(
            description=_text_field(payload, "description"),
            duration=payload.get("duration"),
            date=payload.get("date"),
        )
        user = await UserService.find_user_by_id(db, user_id)
        exercise = await ExerciseService.create_exercise(db, user.id, data)
    except UserNotFoundError:
        return PlainTextResponse(USER_NOT_FOUND)
    except (ExerciseTrackerError, ValidationError, sqlite3.Error):
        logger.exception("Error saving exercise for user %s", user_id)
        return PlainTextResponse(EXERCISE_SAVE_ERROR)
    return ExerciseCreated(
        id=user.id,
        username=user.username,
        description=exercise.description,
        duration=exercise.duration,
        date=format_calendar_date(exercise.date),
    )


@router.get("/{user_id}/logs", response_model=ExerciseLog)
async def get_logs(
    user_id: str,
    from_: Optional[str] = Query(None, alias="from", description="Earliest date, inclusive"),
    to: Optional[str] = Query(None, description="Latest date, inclusive"),
    limit: Optional[str] = Query(None, description="Maximum number of entries"),
    db: Database = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    """Return a user's exercise log.

    Unparseable dates are ignored and a missing or non-numeric ``limit``
    falls back to the configured default cap.
    """
    try:
        user = await UserService.find_user_by_id(db, user_id)
    except UserNotFoundError:
        return PlainTextResponse(USER_NOT_FOUND)

    exercises = await ExerciseService.query_exercises(
        db,
        user.id,
        from_date=parse_date_bound(from_),
        to_date=parse_date_bound(to),
        limit=parse_limit(limit, default=settings.default_log_limit),
    )
    log = [
        ExerciseLogEntry(
            description=exercise.description,
            duration=exercise.duration,
            date=format_calendar_date(exercise.date),
        )
        for exercise in exercises
    ]
    return ExerciseLog(id=user.id, username=user.username, count=len(log), log=log)
