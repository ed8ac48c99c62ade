"""
HTTP behaviour of the /api/exercise routes and the error handlers.
"""

import time
from dataclasses import replace
from datetime import date

from sqlalchemy import func, select

from exercise_tracker.db import queries
from exercise_tracker.db.schema import exercises
from exercise_tracker.validation import to_calendar_string


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


def test_index_page(client):
    resp = client.get("/")
    assert resp.status_code == 200
    assert "Exercise tracker" in resp.text


def test_static_assets_under_public(client):
    resp = client.get("/public/style.css")

    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("text/css")


def test_unknown_route_is_plain_text_404(client):
    resp = client.get("/api/exercise/nope")

    assert resp.status_code == 404
    assert resp.text == "not found"
    assert resp.headers["content-type"].startswith("text/plain")


def test_new_user_and_list(client, make_user):
    alice = make_user("alice")
    bob = make_user("bob")

    assert set(alice) == {"id", "username"}
    assert alice["id"] != bob["id"]

    resp = client.get("/api/exercise/users")
    assert resp.status_code == 200
    listed = resp.json()
    assert [u["username"] for u in listed] == ["alice", "bob"]
    assert {u["id"] for u in listed} == {alice["id"], bob["id"]}
    assert all("created_at" in u for u in listed)


def test_new_user_accepts_json_body(client):
    resp = client.post("/api/exercise/new-user", json={"username": "carol"})

    assert resp.status_code == 200
    assert resp.json()["username"] == "carol"


def test_duplicate_username(client, make_user):
    make_user("alice")

    resp = client.post("/api/exercise/new-user", data={"username": "alice"})

    assert resp.status_code == 400
    assert resp.text == "Username already taken."
    assert len(client.get("/api/exercise/users").json()) == 1


def test_new_user_without_username(client):
    resp = client.post("/api/exercise/new-user", data={})

    assert resp.status_code == 400
    assert resp.text == "Path `username` is required."


def test_add_exercise(client, make_user):
    user = make_user("alice")

    resp = client.post(
        "/api/exercise/add",
        data={
            "userId": user["id"],
            "description": "run",
            "duration": "30",
            "date": "2020-01-01",
        },
    )

    assert resp.status_code == 200
    assert resp.json() == {
        "id": user["id"],
        "username": "alice",
        "date": "Wed Jan 01 2020",
        "duration": 30,
        "description": "run",
    }


def test_add_exercise_without_date_uses_today(client, make_user):
    user = make_user("alice")

    resp = client.post(
        "/api/exercise/add",
        data={"userId": user["id"], "description": "run", "duration": "5"},
    )

    assert resp.status_code == 200
    assert resp.json()["date"] == to_calendar_string(date.today())


def test_add_exercise_rejects_bad_duration(client, make_user):
    user = make_user("alice")

    resp = client.post(
        "/api/exercise/add",
        data={"userId": user["id"], "description": "run", "duration": "4.5"},
    )

    assert resp.status_code == 400
    assert resp.text == "Invalid duration type. Must be an int."


def test_add_exercise_rejects_bad_date(client, make_user):
    user = make_user("alice")

    resp = client.post(
        "/api/exercise/add",
        data={
            "userId": user["id"],
            "description": "run",
            "duration": "30",
            "date": "01/01/2020",
        },
    )

    assert resp.status_code == 400
    assert resp.text == "Invalid date format. Need to be yyyy-mm-dd"
    assert client.get("/api/exercise/log", params={"userId": user["id"]}).json()["log"] == []


def test_add_exercise_rejects_impossible_calendar_date(client, make_user):
    user = make_user("alice")

    resp = client.post(
        "/api/exercise/add",
        data={
            "userId": user["id"],
            "description": "run",
            "duration": "30",
            "date": "2020-19-39",
        },
    )

    assert resp.status_code == 400
    assert resp.text == "Invalid date format. Need to be yyyy-mm-dd"


def test_add_exercise_missing_description(client, make_user):
    user = make_user("alice")

    resp = client.post(
        "/api/exercise/add", data={"userId": user["id"], "duration": "30"}
    )

    assert resp.status_code == 400
    assert resp.text == "Path `description` is required."


def test_add_exercise_unknown_user(client, engine):
    resp = client.post(
        "/api/exercise/add",
        data={"userId": "f" * 24, "description": "run", "duration": "30"},
    )

    assert resp.status_code == 400
    assert resp.text == "Invalid userId."
    # the compensating delete leaves nothing behind
    with engine.connect() as conn:
        assert conn.execute(select(func.count()).select_from(exercises)).scalar_one() == 0


def test_log_requires_user_id(client):
    resp = client.get("/api/exercise/log")

    assert resp.status_code == 400
    assert resp.text == "Invalid userId."


def test_log_unknown_user(client):
    resp = client.get("/api/exercise/log", params={"userId": "missing"})

    assert resp.status_code == 400
    assert resp.text == "Invalid userId."


def test_log_filters_and_limit(client, make_user):
    user = make_user("alice")
    for day in ("2020-01-05", "2020-01-01", "2020-01-03", "2020-01-04", "2020-01-02"):
        resp = client.post(
            "/api/exercise/add",
            data={"userId": user["id"], "description": day, "duration": "10", "date": day},
        )
        assert resp.status_code == 200

    resp = client.get(
        "/api/exercise/log",
        params={"userId": user["id"], "from": "2020-01-02", "to": "2020-01-04"},
    )
    body = resp.json()
    assert resp.status_code == 200
    assert body["id"] == user["id"]
    assert body["username"] == "alice"
    assert body["count"] == 3
    assert [entry["description"] for entry in body["log"]] == [
        "2020-01-02",
        "2020-01-03",
        "2020-01-04",
    ]
    assert body["log"][0] == {
        "description": "2020-01-02",
        "duration": 10,
        "date": "Thu Jan 02 2020",
    }

    resp = client.get("/api/exercise/log", params={"userId": user["id"], "limit": "2"})
    body = resp.json()
    assert body["count"] == 2
    assert [entry["description"] for entry in body["log"]] == ["2020-01-01", "2020-01-02"]


def test_timeout_is_reported(app, client, monkeypatch):
    def slow(engine):
        time.sleep(0.5)
        return []

    monkeypatch.setattr(queries, "list_users", slow)
    app.state.settings = replace(app.state.settings, request_timeout_seconds=0.05)

    resp = client.get("/api/exercise/users")

    assert resp.status_code == 500
    assert resp.text == "timeout"


def test_missing_result_is_reported(client, monkeypatch):
    monkeypatch.setattr(queries, "list_users", lambda engine: None)

    resp = client.get("/api/exercise/users")

    assert resp.status_code == 500
    assert resp.text == "Missing callback argument"


def test_empty_user_list_is_not_missing_result(client):
    resp = client.get("/api/exercise/users")

    assert resp.status_code == 200
    assert resp.json() == []


def test_log_rejects_impossible_calendar_date(client, make_user):
    user = make_user("alice")

    resp = client.get(
        "/api/exercise/log", params={"userId": user["id"], "from": "2020-19-39"}
    )

    assert resp.status_code == 400
    assert resp.text == "Invalid date format. Need to be yyyy-mm-dd"


def test_add_exercise_duration_past_store_range(client, make_user):
    user = make_user("alice")

    resp = client.post(
        "/api/exercise/add",
        data={
            "userId": user["id"],
            "description": "run",
            "duration": "99999999999999999999",
        },
    )

    assert resp.status_code == 400
    assert resp.text == (
        'Cast to Number failed for value "99999999999999999999" at path "duration"'
    )


def test_log_limit_past_store_range(client, make_user):
    user = make_user("alice")
    client.post(
        "/api/exercise/add",
        data={"userId": user["id"], "description": "run", "duration": "10"},
    )

    resp = client.get(
        "/api/exercise/log",
        params={"userId": user["id"], "limit": "99999999999999999999"},
    )

    assert resp.status_code == 200
    assert resp.json()["count"] == 1


def test_malformed_json_body(client):
    resp = client.post(
        "/api/exercise/new-user",
        content="{not json",
        headers={"content-type": "application/json"},
    )

    assert resp.status_code == 400
    assert resp.text == "Invalid JSON body"
