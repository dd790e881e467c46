from sqlalchemy.exc import OperationalError

from conftest import register


def test_create_and_list_memos_newest_first(alice):
    first = alice.post("/api/memos", json={"content": "  buy milk  "})
    assert first.status_code == 201
    assert first.json()["content"] == "buy milk"
    assert first.json()["category"] == "general"
    assert first.json()["tags"] == []
    assert first.json()["isProcessed"] is False

    second = alice.post("/api/memos", json={"content": "call mom", "category": "family", "tags": ["phone"]})
    assert second.status_code == 201

    memos = alice.get("/api/memos").json()
    assert [m["content"] for m in memos] == ["call mom", "buy milk"]
    assert memos[0]["tags"] == ["phone"]


def test_memo_content_is_required(alice):
    assert alice.post("/api/memos", json={"content": "   "}).status_code == 400
    assert alice.post("/api/memos", json={}).status_code == 400
    assert alice.get("/api/memos").json() == []


def test_update_memo_resets_missing_optional_fields(alice):
    memo = alice.post("/api/memos", json={"content": "draft", "category": "work", "tags": ["a"]}).json()

    response = alice.put(f"/api/memos/{memo['id']}", json={"content": "final"})

    assert response.status_code == 200
    assert response.json()["content"] == "final"
    assert response.json()["category"] == "general"
    assert response.json()["tags"] == []


def test_delete_memo_twice(alice):
    memo = alice.post("/api/memos", json={"content": "temporary"}).json()

    first = alice.delete(f"/api/memos/{memo['id']}")
    assert first.status_code == 200
    assert first.json()["success"] is True

    assert alice.delete(f"/api/memos/{memo['id']}").status_code == 404


def test_memos_are_private(alice, make_client):
    memo = alice.post("/api/memos", json={"content": "alice only"}).json()

    bob = make_client()
    register(bob, email="bob@example.com", name="Bob")

    assert bob.get("/api/memos").json() == []

    update = bob.put(f"/api/memos/{memo['id']}", json={"content": "hijacked"})
    delete = bob.delete(f"/api/memos/{memo['id']}")
    missing = bob.delete("/api/memos/999999")

    assert update.status_code == 404
    assert delete.status_code == 404
    # Someone else's memo and a nonexistent one are indistinguishable
    assert delete.json() == missing.json()
    assert [m["content"] for m in alice.get("/api/memos").json()] == ["alice only"]


def test_store_outage_maps_to_503(alice):
    from homepa.core.database import get_db
    from homepa.main import app

    def unavailable():
        raise OperationalError("SELECT 1", {}, Exception("connection refused"))

    app.dependency_overrides[get_db] = unavailable
    try:
        response = alice.post("/api/memos", json={"content": "lost"})
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == 503
    assert "connection refused" not in response.text
