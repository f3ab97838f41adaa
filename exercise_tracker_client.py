"""Exercise tracker API client.

A thin wrapper around the four endpoints of the exercise tracker API,
built on the ``requests`` library.  Every high level method returns a
tuple ``(data, error)``: on success ``data`` holds the decoded JSON and
``error`` is ``None``; on failure ``data`` is ``None`` (or an empty
list) and ``error`` is a dictionary with ``status_code`` and
``message``.

The API reports logical failures (unknown user, failed save) with
status 200 and a plain-text body, so the client treats any non-JSON
success response as an error carrying that text.

Example::

    client = ExerciseTrackerClient(base_url="http://localhost:3000")
    user, error = client.create_user("fcc_test")
    client.add_exercise(user["_id"], "run", 30, date="2023-01-05")
    log, error = client.get_log(user["_id"], date_from="2023-01-01", limit=10)
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple, Union

import requests


logger = logging.getLogger(__name__)

Error = Dict[str, Any]


class ExerciseTrackerClient:
    """Client for the exercise tracker API."""

    def __init__(
        self,
        *,
        base_url: str,
        session: Optional[requests.Session] = None,
        timeout: float = 15,
    ) -> None:
        """Initialise the API client.

        Args:
            base_url: Base URL of the server, e.g. ``http://localhost:3000``.
            session: Optional requests session.  If not supplied a
                session will be created automatically.
            timeout: Seconds to wait for each request.
        """
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    # ------------------------------------------------------------------
    # Low level HTTP helper
    # ------------------------------------------------------------------
    def _request(
        self, method: str, path: str, *, params: Dict[str, Any] | None = None,
        form: Dict[str, Any] | None = None
    ) -> Tuple[Optional[Any], Optional[Error]]:
        """Perform an HTTP request and decode the JSON body.

        Returns ``(data, error)``.  A successful response whose body is
        not JSON is reported as an error with the body as message.
        """
        url = f"{self.base_url}{path}"
        try:
            logger.debug("Sending %s request to %s", method, url)
            response = self.session.request(
                method=method,
                url=url,
                params=params,
                data=form,
                timeout=self.timeout,
            )
            response.raise_for_status()
        except requests.HTTPError as exc:
            status = exc.response.status_code if exc.response is not None else None
            message = exc.response.text if exc.response is not None else ""
            logger.error("API request failed (%s): %s", status, message or exc)
            return None, {"status_code": status, "message": message or str(exc)}
        except requests.RequestException as exc:
            logger.error("API request failed: %s", exc)
            return None, {"status_code": None, "message": str(exc)}

        content_type = response.headers.get("content-type", "")
        if not content_type.startswith("application/json"):
            message = response.text
            logger.warning("API reported failure: %s", message)
            return None, {"status_code": response.status_code, "message": message}
        return response.json(), None

    # ------------------------------------------------------------------
    # Users
    # ------------------------------------------------------------------
    def list_users(self) -> Tuple[List[Dict[str, Any]], Optional[Error]]:
        """Return all users as ``{_id, username}`` dictionaries."""
        data, error = self._request("GET", "/api/users")
        if error:
            return [], error
        return data if isinstance(data, list) else [], None

    def create_user(self, username: str) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        """Register a user and return ``{_id, username}``."""
        return self._request("POST", "/api/users", form={"username": username})

    # ------------------------------------------------------------------
    # Exercises
    # ------------------------------------------------------------------
    def add_exercise(
        self,
        user_id: str,
        description: str,
        duration: Union[int, float, str],
        *,
        date: Optional[str] = None,
    ) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        """Log an exercise for ``user_id``.  ``date`` is ``YYYY-MM-DD``; today if omitted."""
        form: Dict[str, Any] = {"description": description, "duration": duration}
        if date:
            form["date"] = date
        return self._request("POST", f"/api/users/{user_id}/exercises", form=form)

    def get_log(
        self,
        user_id: str,
        *,
        date_from: Optional[str] = None,
        date_to: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        """Return ``{_id, username, count, log}`` for ``user_id``."""
        params: Dict[str, Any] = {}
        if date_from:
            params["from"] = date_from
        if date_to:
            params["to"] = date_to
        if limit is not None:
            params["limit"] = limit
        return self._request("GET", f"/api/users/{user_id}/logs", params=params or None)
