"""
User endpoints.

``GET /api/users`` lists every user as ``{_id, username}`` and
``POST /api/users`` registers a new one from the ``username`` form
field.  A failed save is logged and answered with a plain-text
message and status 200, the same way the other endpoints report
logical failures.
"""

import logging
import sqlite3
from typing import List

from fastapi import APIRouter, Depends, Request
from fastapi.responses import PlainTextResponse

from ...core.db import Database
from ...core.errors import ExerciseTrackerError
from ...schemas.user import UserCreate, UserRead
from ...services.user_service import UserService
from ..deps import get_db, read_payload

logger = logging.getLogger(__name__)

USER_SAVE_ERROR = "There was an error saving the user"

router = APIRouter()


@router.get("", response_model=List[UserRead])
async def list_users(db: Database = Depends(get_db)) -> List[UserRead]:
    """Return all users; an empty store gives an empty array."""
    return await UserService.list_users(db)


@router.post("", response_model=UserRead)
async def create_user(request: Request, db: Database = Depends(get_db)):
    """Register a user from the ``username`` form field."""
    payload = await read_payload(request)
    username = payload.get("username")
    data = UserCreate(username=None if username is None else str(username))
    try:
        user = await UserService.create_user(db, data.username)
    except (ExerciseTrackerError, sqlite3.Error):
        logger.exception("Error saving user %r", data.username)
        return PlainTextResponse(USER_SAVE_ERROR)
    return user
