import random

from conftest import PASSWORD, register


def test_calendar_walkthrough(client):
    assert register(client).status_code == 201
    login = client.post("/api/auth/login", json={"email": "alice@example.com", "password": PASSWORD})
    assert login.status_code == 200

    empty = client.get("/api/events")
    assert empty.status_code == 200
    assert empty.json() == []

    created = client.post("/api/events", json={"title": "Meeting", "date": "2025-01-10", "importance": "high"})
    assert created.status_code == 201
    event = created.json()
    assert event["title"] == "Meeting"
    assert event["importance"] == "high"
    assert event["isAllDay"] is False
    assert event["isNoDuration"] is False
    assert event["recurrence"] == "none"

    listed = client.get("/api/events")
    assert listed.status_code == 200
    assert [e["id"] for e in listed.json()] == [event["id"]]


def test_importance_defaults_to_medium(alice):
    event = alice.post("/api/events", json={"title": "Dentist", "date": "2025-02-01"}).json()
    assert event["importance"] == "medium"


def test_events_sorted_by_date_then_start_time(alice):
    payloads = [
        {"title": "late", "date": "2025-01-10", "startTime": "18:00"},
        {"title": "next day", "date": "2025-01-11", "startTime": "08:00"},
        {"title": "all day", "date": "2025-01-10", "isAllDay": True},
        {"title": "early", "date": "2025-01-10", "startTime": "09:30"},
        {"title": "previous", "date": "2025-01-09", "startTime": "23:00"},
    ]
    random.Random(7).shuffle(payloads)
    for payload in payloads:
        assert alice.post("/api/events", json=payload).status_code == 201

    titles = [e["title"] for e in alice.get("/api/events").json()]
    assert titles == ["previous", "all day", "early", "late", "next day"]


def test_list_events_by_date_range(alice):
    for day in ("2025-01-01", "2025-01-15", "2025-02-01"):
        alice.post("/api/events", json={"title": day, "date": day})

    response = alice.get("/api/events", params={"start": "2025-01-01", "end": "2025-01-31"})
    assert [e["title"] for e in response.json()] == ["2025-01-01", "2025-01-15"]

    assert alice.get("/api/events", params={"start": "January"}).status_code == 400


def test_event_validation(alice):
    missing = alice.post("/api/events", json={"date": "2025-01-10"})
    assert missing.status_code == 400
    assert "title" in missing.json()["detail"]

    blank = alice.post("/api/events", json={"title": "   ", "date": "2025-01-10"})
    assert blank.status_code == 400

    bad_date = alice.post("/api/events", json={"title": "x", "date": "2025-02-30"})
    assert bad_date.status_code == 400

    bad_time = alice.post("/api/events", json={"title": "x", "date": "2025-01-10", "startTime": "25:00"})
    assert bad_time.status_code == 400

    bad_importance = alice.post("/api/events", json={"title": "x", "date": "2025-01-10", "importance": "urgent"})
    assert bad_importance.status_code == 400


def test_all_day_and_no_duration_are_exclusive(alice):
    response = alice.post("/api/events", json={
        "title": "Confused", "date": "2025-01-10", "isAllDay": True, "isNoDuration": True,
    })
    assert response.status_code == 400
    assert "all-day" in response.json()["detail"]
    assert alice.get("/api/events").json() == []


def test_end_before_start_is_rejected(alice):
    response = alice.post("/api/events", json={
        "title": "Backwards", "date": "2025-01-10", "startTime": "10:00", "endTime": "09:00",
    })
    assert response.status_code == 400


def test_update_and_delete_event(alice):
    event = alice.post("/api/events", json={"title": "Lunch", "date": "2025-01-10"}).json()

    updated = alice.put(f"/api/events/{event['id']}", json={
        "title": "Long lunch", "date": "2025-01-10", "startTime": "12:00", "endTime": "14:00",
        "location": "Cafe", "recurrence": "weekly",
    })
    assert updated.status_code == 200
    assert updated.json()["title"] == "Long lunch"
    assert updated.json()["recurrence"] == "weekly"
    assert alice.get(f"/api/events/{event['id']}").json()["location"] == "Cafe"

    assert alice.delete(f"/api/events/{event['id']}").status_code == 200
    assert alice.delete(f"/api/events/{event['id']}").status_code == 404
    assert alice.get(f"/api/events/{event['id']}").status_code == 404


def test_events_are_private(alice, make_client):
    event = alice.post("/api/events", json={"title": "Secret", "date": "2025-01-10"}).json()

    bob = make_client()
    register(bob, email="bob@example.com", name="Bob")

    assert bob.get("/api/events").json() == []
    assert bob.get(f"/api/events/{event['id']}").status_code == 404
    assert bob.put(f"/api/events/{event['id']}", json={"title": "Mine", "date": "2025-01-10"}).status_code == 404
    assert bob.delete(f"/api/events/{event['id']}").status_code == 404
    assert alice.get(f"/api/events/{event['id']}").json()["title"] == "Secret"


def test_train_suggestions(alice):
    alice.post("/api/events", json={
        "title": "Board meeting", "date": "2025-01-10", "startTime": "10:00",
        "importance": "critical", "location": "Head office",
    })
    alice.post("/api/events", json={
        "title": "Coffee", "date": "2025-01-10", "startTime": "08:00",
        "importance": "low", "location": "Cafe",
    })
    # No location / other day: not suggested
    alice.post("/api/events", json={"title": "Call", "date": "2025-01-10", "startTime": "09:00"})
    alice.post("/api/events", json={
        "title": "Tomorrow", "date": "2025-01-11", "startTime": "09:00", "location": "Office",
    })

    response = alice.get("/api/events/train-suggestions", params={"date": "2025-01-10"})

    assert response.status_code == 200
    suggestions = response.json()
    assert [s["title"] for s in suggestions] == ["Coffee", "Board meeting"]
    assert suggestions[0]["arrivalTime"] == "07:55"
    assert suggestions[0]["departureTime"] == "07:25"
    assert suggestions[1]["arrivalTime"] == "09:30"
    assert suggestions[1]["departureTime"] == "09:00"
    assert suggestions[1]["durationMinutes"] == 30
