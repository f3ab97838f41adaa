"""Tests for the exercise and log endpoints."""

import datetime

from exercise_tracker_api.app.services.exercise_service import format_calendar_date

MISSING_ID = "0123456789abcdef01234567"


def add_exercise(client, user_id, description="run", duration="30", date=None):
    form = {"description": description, "duration": duration}
    if date is not None:
        form["date"] = date
    return client.post(f"/api/users/{user_id}/exercises", data=form)


class TestCreateExercise:
    """Tests for POST /api/users/{id}/exercises."""

    def test_create_exercise_response_shape(self, client, user):
        response = add_exercise(client, user["_id"], "pushups", "30", "2023-01-05")

        assert response.status_code == 200
        assert response.json() == {
            "_id": user["_id"],
            "username": "fcc_test",
            "description": "pushups",
            "duration": 30,
            "date": "Thu Jan 05 2023",
        }

    def test_date_defaults_to_today(self, client, user):
        before = datetime.date.today()
        response = add_exercise(client, user["_id"])
        after = datetime.date.today()

        assert response.json()["date"] in {format_calendar_date(before), format_calendar_date(after)}

    def test_fractional_duration_preserved(self, client, user):
        response = add_exercise(client, user["_id"], duration="12.5", date="2023-01-05")

        assert response.json()["duration"] == 12.5

    def test_json_body(self, client, user):
        response = client.post(
            f"/api/users/{user['_id']}/exercises",
            json={"description": "swim", "duration": 45, "date": "2023-03-01"},
        )

        assert response.json()["description"] == "swim"
        assert response.json()["date"] == "Wed Mar 01 2023"

    def test_unknown_user_creates_nothing(self, client, user):
        response = add_exercise(client, MISSING_ID, date="2023-01-05")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/plain")
        assert response.text == "Could not find user"
        assert client.get(f"/api/users/{user['_id']}/logs").json()["count"] == 0

    def test_malformed_user_id(self, client):
        response = add_exercise(client, "not-an-id")

        assert response.text == "Could not find user"

    def test_non_numeric_duration_is_a_save_error(self, client, user):
        response = add_exercise(client, user["_id"], duration="half an hour")

        assert response.status_code == 200
        assert response.text == "There was an error saving the exercise"
        assert client.get(f"/api/users/{user['_id']}/logs").json()["log"] == []

    def test_huge_duration_is_stored(self, client, user):
        response = add_exercise(client, user["_id"], duration="1e20", date="2023-01-05")

        assert response.status_code == 200
        assert response.json()["duration"] == 1e20
        assert client.get(f"/api/users/{user['_id']}/logs").json()["log"][0]["duration"] == 1e20

    def test_invalid_date_is_a_save_error(self, client, user):
        response = add_exercise(client, user["_id"], date="yesterday-ish")

        assert response.text == "There was an error saving the exercise"


class TestExerciseLog:
    """Tests for GET /api/users/{id}/logs."""

    def test_log_contains_created_exercise(self, client, user):
        add_exercise(client, user["_id"], "pushups", "30", "2023-01-05")

        response = client.get(f"/api/users/{user['_id']}/logs")

        assert response.status_code == 200
        assert response.json() == {
            "_id": user["_id"],
            "username": "fcc_test",
            "count": 1,
            "log": [{"description": "pushups", "duration": 30, "date": "Thu Jan 05 2023"}],
        }

    def test_date_range_is_inclusive(self, client, user):
        for day in ["2022-12-31", "2023-01-01", "2023-01-15", "2023-01-31", "2023-02-01"]:
            add_exercise(client, user["_id"], description=day, date=day)

        body = client.get(
            f"/api/users/{user['_id']}/logs",
            params={"from": "2023-01-01", "to": "2023-01-31"},
        ).json()

        assert [entry["description"] for entry in body["log"]] == [
            "2023-01-01",
            "2023-01-15",
            "2023-01-31",
        ]
        assert body["count"] == 3

    def test_only_lower_bound(self, client, user):
        add_exercise(client, user["_id"], description="old", date="2022-06-01")
        add_exercise(client, user["_id"], description="new", date="2023-06-01")

        body = client.get(f"/api/users/{user['_id']}/logs", params={"from": "2023-01-01"}).json()

        assert [entry["description"] for entry in body["log"]] == ["new"]

    def test_only_upper_bound(self, client, user):
        add_exercise(client, user["_id"], description="old", date="2022-06-01")
        add_exercise(client, user["_id"], description="new", date="2023-06-01")

        body = client.get(f"/api/users/{user['_id']}/logs", params={"to": "2023-01-01"}).json()

        assert [entry["description"] for entry in body["log"]] == ["old"]

    def test_unparseable_bound_is_ignored(self, client, user):
        add_exercise(client, user["_id"], date="2023-01-05")

        body = client.get(f"/api/users/{user['_id']}/logs", params={"from": "garbage"}).json()

        assert body["count"] == 1

    def test_limit_caps_entries(self, client, user):
        for day in ["2023-01-01", "2023-01-02", "2023-01-03"]:
            add_exercise(client, user["_id"], description=day, date=day)

        body = client.get(f"/api/users/{user['_id']}/logs", params={"limit": "1"}).json()

        assert body["count"] == 1
        assert body["log"][0]["description"] == "2023-01-01"

    def test_oversized_limit_is_clamped(self, client, user):
        add_exercise(client, user["_id"], date="2023-01-05")

        response = client.get(
            f"/api/users/{user['_id']}/logs", params={"limit": "99999999999999999999"}
        )

        assert response.status_code == 200
        assert response.json()["count"] == 1

    def test_offset_datetime_bound_uses_utc_date(self, client, user):
        add_exercise(client, user["_id"], description="jan31", date="2023-01-31")
        add_exercise(client, user["_id"], description="feb01", date="2023-02-01")

        body = client.get(
            f"/api/users/{user['_id']}/logs", params={"from": "2023-01-31T23:00:00-05:00"}
        ).json()

        assert [entry["description"] for entry in body["log"]] == ["feb01"]

    def test_non_numeric_limit_falls_back_to_default(self, client, user):
        for day in ["2023-01-01", "2023-01-02"]:
            add_exercise(client, user["_id"], date=day)

        response = client.get(f"/api/users/{user['_id']}/logs", params={"limit": "abc"})

        assert response.status_code == 200
        assert response.json()["count"] == 2

    def test_logs_are_per_user(self, client, user):
        other = client.post("/api/users", data={"username": "other"}).json()
        add_exercise(client, user["_id"], description="mine", date="2023-01-05")
        add_exercise(client, other["_id"], description="theirs", date="2023-01-05")

        body = client.get(f"/api/users/{user['_id']}/logs").json()

        assert [entry["description"] for entry in body["log"]] == ["mine"]

    def test_unknown_user(self, client):
        response = client.get(f"/api/users/{MISSING_ID}/logs")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/plain")
        assert response.text == "Could not find user"
        assert client.get("/api/users").json() == []
