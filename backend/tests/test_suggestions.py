from datetime import datetime, timedelta, timezone

from conftest import register
from homepa.models.suggestion import Suggestion
from homepa.services.suggestion_service import suggestion_service


def create(client, **overrides):
    payload = {
        "type": "train",
        "content": "Leave at 08:30 for the 09:00 meeting",
        "context": {"source": ["calendar", "location"], "confidence": 0.8},
    }
    payload.update(overrides)
    return client.post("/api/suggestions", json=payload)


def test_create_and_list(alice):
    response = create(alice, metadata={"line": "Yamanote"})

    assert response.status_code == 201
    suggestion = response.json()
    assert suggestion["status"] == "pending"
    assert suggestion["context"]["source"] == ["calendar", "location"]
    assert suggestion["context"]["confidence"] == 0.8
    assert suggestion["context"]["timestamp"] is not None
    assert suggestion["metadata"] == {"line": "Yamanote"}

    create(alice, type="task", content="Pay rent")
    assert [s["type"] for s in alice.get("/api/suggestions").json()] == ["task", "train"]
    assert len(alice.get("/api/suggestions", params={"type": "task"}).json()) == 1


def test_confidence_must_be_a_probability(alice):
    response = create(alice, context={"source": [], "confidence": 1.5})
    assert response.status_code == 400


def test_accept_is_terminal(alice):
    suggestion = create(alice).json()

    accepted = alice.patch(f"/api/suggestions/{suggestion['id']}", json={"status": "accepted"})
    assert accepted.status_code == 200
    assert accepted.json()["status"] == "accepted"

    again = alice.patch(f"/api/suggestions/{suggestion['id']}", json={"status": "rejected"})
    assert again.status_code == 409


def test_only_accept_or_reject_allowed(alice):
    suggestion = create(alice).json()
    response = alice.patch(f"/api/suggestions/{suggestion['id']}", json={"status": "expired"})
    assert response.status_code == 400


def test_suggestions_are_private(alice, make_client):
    suggestion = create(alice).json()

    bob = make_client()
    register(bob, email="bob@example.com", name="Bob")

    assert bob.get("/api/suggestions").json() == []
    response = bob.patch(f"/api/suggestions/{suggestion['id']}", json={"status": "rejected"})
    assert response.status_code == 404


def test_stale_pending_suggestions_expire(alice, db_session):
    stale = create(alice, content="old").json()
    fresh = create(alice, content="new").json()
    decided = create(alice, content="done").json()
    alice.patch(f"/api/suggestions/{decided['id']}", json={"status": "rejected"})

    long_ago = datetime.now(timezone.utc) - timedelta(hours=100)
    for suggestion_id in (stale["id"], decided["id"]):
        db_session.query(Suggestion).filter(Suggestion.id == suggestion_id).update({Suggestion.created_at: long_ago})
    db_session.commit()

    assert suggestion_service.expire_stale(db_session, ttl_hours=72) == 1

    statuses = {s["content"]: s["status"] for s in alice.get("/api/suggestions").json()}
    assert statuses == {"old": "expired", "new": "pending", "done": "rejected"}


def test_scheduled_expiry_job(alice, db_session):
    from homepa.core.scheduler import expire_stale_suggestions_job

    stale = create(alice).json()
    long_ago = datetime.now(timezone.utc) - timedelta(days=30)
    db_session.query(Suggestion).filter(Suggestion.id == stale["id"]).update({Suggestion.created_at: long_ago})
    db_session.commit()

    expire_stale_suggestions_job()

    assert alice.get("/api/suggestions", params={"status": "expired"}).json()[0]["id"] == stale["id"]
