"""Tests for the requests based API client, driven through the test client."""

import pytest

from exercise_tracker_client import ExerciseTrackerClient


@pytest.fixture
def api(client):
    # TestClient speaks the same request interface as requests.Session.
    return ExerciseTrackerClient(base_url="", session=client)


def test_create_and_list_users(api):
    user, error = api.create_user("alice")

    assert error is None
    users, error = api.list_users()
    assert error is None
    assert users == [user]


def test_add_exercise_and_read_log(api):
    user, _ = api.create_user("alice")

    created, error = api.add_exercise(user["_id"], "run", 30, date="2023-01-15")
    assert error is None
    assert created["date"] == "Sun Jan 15 2023"

    api.add_exercise(user["_id"], "swim", 20, date="2023-02-01")
    log, error = api.get_log(user["_id"], date_from="2023-01-01", date_to="2023-01-31")

    assert error is None
    assert log["count"] == 1
    assert log["log"][0]["description"] == "run"


def test_plain_text_failure_becomes_error(api):
    data, error = api.get_log("0123456789abcdef01234567", limit=5)

    assert data is None
    assert error == {"status_code": 200, "message": "Could not find user"}
