"""
Top-level router for the API.

Aggregates the domain routers under the ``/api`` prefix applied in
``main.create_app``.  Exercise routes are nested under a user, so both
modules share the ``/users`` prefix.
"""

from fastapi import APIRouter

from .endpoints import exercises, users

router = APIRouter()

router.include_router(users.router, prefix="/users", tags=["users"])
router.include_router(exercises.router, prefix="/users", tags=["exercises"])
