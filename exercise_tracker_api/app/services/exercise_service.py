"""
Service layer for exercise log entries.

Exercises belong to exactly one user.  Creating one requires the user
to exist at that moment; nothing ties the two together afterwards.

Dates are stored as ISO ``YYYY-MM-DD`` text, so the inclusive
``from``/``to`` range filter of :meth:`ExerciseService.query_exercises`
is a plain string comparison in SQL.  Results come back in insertion
order and are capped by ``limit`` (``DEFAULT_LOG_LIMIT`` when the
caller gives no usable value).

A ``from``/``to`` bound or exercise date given as an ISO datetime with an
explicit offset is converted to UTC before its calendar date is taken,
so ``2023-01-31T23:00:00-05:00`` falls on 2023-02-01.  Naive datetimes
keep their own date.
"""

from __future__ import annotations

import datetime
import logging
import math
import re
import sqlite3
from typing import Any, List, Optional, Union

from ..core.db import Database, generate_id
from ..core.errors import ExerciseValidationError
from ..schemas.exercise import ExerciseCreate, ExerciseRead
from .user_service import UserService

logger = logging.getLogger(__name__)

DEFAULT_LOG_LIMIT = 500

# Range of a SQLite INTEGER
SQLITE_INT_MIN = -(2 ** 63)
SQLITE_INT_MAX = 2 ** 63 - 1

_LIMIT_PATTERN = re.compile(r"[+-]?[0-9]+")

_DAY_NAMES = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
_MONTH_NAMES = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)


def format_calendar_date(value: datetime.date) -> str:
    """Render a date as ``Www Mmm DD YYYY``, independent of the process locale."""
    return "%s %s %02d %04d" % (
        _DAY_NAMES[value.weekday()],
        _MONTH_NAMES[value.month - 1],
        value.day,
        value.year,
    )


def parse_calendar_date(value: Union[str, datetime.date]) -> datetime.date:
    """Parse ``YYYY-MM-DD`` or an ISO datetime into a date.

    Datetimes with an offset are moved to UTC first.

    Raises ``ValueError`` for anything else.
    """
    if isinstance(value, datetime.datetime):
        return _utc_date(value)
    if isinstance(value, datetime.date):
        return value
    text = str(value).strip()
    try:
        return datetime.date.fromisoformat(text)
    except ValueError:
        pass
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    return _utc_date(datetime.datetime.fromisoformat(text))


def _utc_date(value: datetime.datetime) -> datetime.date:
    if value.tzinfo is not None and value.utcoffset() is not None:
        value = value.astimezone(datetime.timezone.utc)
    return value.date()


def parse_date_bound(value: Optional[str]) -> Optional[datetime.date]:
    """Parse a ``from``/``to`` query value; missing or unparseable bounds become ``None``."""
    if not value:
        return None
    try:
        return parse_calendar_date(value)
    except ValueError:
        logger.debug("Ignoring unparseable date bound %r", value)
        return None


def parse_limit(value: Any, default: int = DEFAULT_LOG_LIMIT) -> int:
    """Coerce a ``limit`` query value to a positive integer.

    Missing, non-numeric and non-positive values fall back to ``default``
    instead of being rejected.  Only plain ASCII digits with an optional
    sign count as numeric; larger values than SQLite can bind are clamped.
    """
    if value is None:
        return default
    text = str(value).strip()
    if not _LIMIT_PATTERN.fullmatch(text):
        return default
    limit = int(text)
    if limit <= 0:
        return default
    return min(limit, SQLITE_INT_MAX)


def _cast_duration(value: Any) -> Optional[Union[int, float]]:
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    if isinstance(value, bool):
        raise ExerciseValidationError("duration", value)
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        raise ExerciseValidationError("duration", value)
    if not math.isfinite(number):
        raise ExerciseValidationError("duration", value)
    return _narrow_number(number)


def _narrow_number(number: float) -> Union[int, float]:
    # Integral values outside the SQLite INTEGER range stay floats (REAL).
    if number.is_integer() and SQLITE_INT_MIN <= number <= SQLITE_INT_MAX:
        return int(number)
    return number


def _cast_date(value: Any, today: datetime.date) -> datetime.date:
    if value is None or (isinstance(value, str) and not value.strip()):
        return today
    try:
        return parse_calendar_date(value)
    except ValueError:
        raise ExerciseValidationError("date", value)


class ExerciseService:
    """Service for creating and querying exercise log entries."""

    @classmethod
    async def create_exercise(
        cls,
        db: Database,
        user_id: str,
        data: ExerciseCreate,
        today: Optional[datetime.date] = None,
    ) -> ExerciseRead:
        """Persist an exercise for an existing user.

        Raises :class:`UserNotFoundError` if ``user_id`` does not resolve
        and :class:`ExerciseValidationError` if ``duration`` or ``date``
        cannot be cast.  Nothing is written in either case.
        """
        user = await UserService.find_user_by_id(db, user_id)
        duration = _cast_duration(data.duration)
        exercise_date = _cast_date(data.date, today or datetime.date.today())
        exercise_id = generate_id()
        with db.cursor() as cursor:
            cursor.execute(
                """
                INSERT INTO exercises (id, user_id, description, duration, date)
                VALUES (?, ?, ?, ?, ?)
                """,
                (exercise_id, user.id, data.description, duration, exercise_date.isoformat()),
            )
        logger.info("Logged exercise %s for user %s", exercise_id, user.id)
        return ExerciseRead(
            id=exercise_id,
            user_id=user.id,
            description=data.description,
            duration=duration,
            date=exercise_date,
        )

    @classmethod
    async def query_exercises(
        cls,
        db: Database,
        user_id: str,
        from_date: Optional[datetime.date] = None,
        to_date: Optional[datetime.date] = None,
        limit: Optional[int] = None,
    ) -> List[ExerciseRead]:
        """Return a user's exercises, optionally bounded by date, in insertion order.

        Both bounds are inclusive and combined with AND.  ``limit``
        defaults to ``DEFAULT_LOG_LIMIT``.
        """
        query = "SELECT * FROM exercises WHERE user_id = ?"
        params: list = [user_id]
        if from_date is not None:
            query += " AND date >= ?"
            params.append(from_date.isoformat())
        if to_date is not None:
            query += " AND date <= ?"
            params.append(to_date.isoformat())
        query += " ORDER BY seq ASC LIMIT ?"
        if limit is None or limit <= 0:
            limit = DEFAULT_LOG_LIMIT
        params.append(min(limit, SQLITE_INT_MAX))
        with db.cursor() as cursor:
            rows = cursor.execute(query, params).fetchall()
        return [cls._row_to_exercise_read(row) for row in rows]

    @staticmethod
    def _row_to_exercise_read(row: sqlite3.Row) -> ExerciseRead:
        duration = row["duration"]
        # REAL column; give integral minutes back as ints
        if isinstance(duration, float):
            duration = _narrow_number(duration)
        return ExerciseRead(
            id=row["id"],
            user_id=row["user_id"],
            description=row["description"],
            duration=duration,
            date=datetime.date.fromisoformat(row["date"]),
        )
