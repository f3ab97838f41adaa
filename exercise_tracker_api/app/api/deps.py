"""
Request-scoped helpers shared by the endpoint modules.

``get_db`` and ``get_settings`` are FastAPI dependencies returning the
objects ``create_app`` stored on ``app.state``.  ``read_payload``
accepts URL-encoded forms (what HTML forms post) as well as JSON
objects and returns a plain dictionary of the submitted fields.
"""

from typing import Any, Dict

from fastapi import Request

from ..core.config import Settings
from ..core.db import Database


def get_db(request: Request) -> Database:
    return request.app.state.db


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


async def read_payload(request: Request) -> Dict[str, Any]:
    """Return the submitted fields of a form or JSON body.

    An empty or malformed JSON body yields an empty dictionary so the
    handler can apply its usual defaults.
    """
    content_type = request.headers.get("content-type", "")
    if content_type.startswith("application/json"):
        try:
            body = await request.json()
        except ValueError:
            return {}
        return body if isinstance(body, dict) else {}
    form = await request.form()
    return {key: value for key, value in form.items()}
