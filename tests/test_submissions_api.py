# tests/test_submissions_api.py

"""
Tests for the submission HTTP endpoints.
"""

from fastapi.testclient import TestClient

from core.errors import Unavailable


NEW_GAME = {"metadata": {"title": "Pixel Quest", "description": "A tiny platformer", "tags": ["retro"]}}


def create_draft(client: TestClient, as_actor, developer) -> dict:
    as_actor.actor = developer
    response = client.post("/submissions/", json=NEW_GAME)
    assert response.status_code == 201, response.text
    return response.json()


def test_create_and_read(client: TestClient, as_actor, developer):
    body = create_draft(client, as_actor, developer)
    assert body["status"] == "draft"
    assert body["developer_id"] == developer.id
    assert body["version"] == 1

    response = client.get(f"/submissions/{body['id']}")
    assert response.status_code == 200
    assert response.json()["metadata"]["title"] == "Pixel Quest"


def test_unauthenticated_is_401(client: TestClient, as_actor):
    as_actor.actor = None
    response = client.post("/submissions/", json=NEW_GAME)
    assert response.status_code == 401
    assert response.json()["error"] == "unauthorized"
    assert response.headers["WWW-Authenticate"] == "Bearer"


def test_player_create_is_403_without_leaking_permission(client: TestClient, as_actor, player):
    as_actor.actor = player
    response = client.post("/submissions/", json=NEW_GAME)
    assert response.status_code == 403
    assert response.json()["detail"] == "Access denied"
    assert "submit_games" not in response.text


def test_moderation_flow(client: TestClient, as_actor, developer, admin):
    submission_id = create_draft(client, as_actor, developer)["id"]

    assert client.post(f"/submissions/{submission_id}/submit").json()["status"] == "submitted"

    as_actor.actor = admin
    assert client.post(f"/submissions/{submission_id}/start-review").json()["status"] == "in_review"

    response = client.post(f"/submissions/{submission_id}/reject", json={"reason": "missing age rating"})
    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "rejected"
    assert body["review_notes"][0]["severity"] == "critical"

    as_actor.actor = developer
    response = client.post(f"/submissions/{submission_id}/resubmit")
    assert response.json()["status"] == "draft"
    assert response.json()["version"] == 2
    assert len(response.json()["review_notes"]) == 2

    response = client.post(f"/submissions/{submission_id}/approve")
    assert response.status_code == 403


def test_publish_flow(client: TestClient, as_actor, developer, admin):
    submission_id = create_draft(client, as_actor, developer)["id"]
    client.post(f"/submissions/{submission_id}/submit")

    as_actor.actor = admin
    client.post(f"/submissions/{submission_id}/start-review")
    response = client.post(f"/submissions/{submission_id}/approve", json={"note": "Great fun"})
    assert response.json()["status"] == "approved"
    assert response.json()["review_notes"][0]["content"] == "Great fun"

    response = client.post(f"/submissions/{submission_id}/publish")
    assert response.status_code == 200
    assert response.json()["status"] == "published"


def test_invalid_transition_reports_current_status(client: TestClient, as_actor, developer, admin):
    submission_id = create_draft(client, as_actor, developer)["id"]

    as_actor.actor = admin
    response = client.post(f"/submissions/{submission_id}/publish")
    assert response.status_code == 409
    body = response.json()
    assert body["error"] == "invalid_transition"
    assert body["current_status"] == "draft"
    assert body["allowed_transitions"] == ["submit"]
    assert body["retryable"] is False


def test_empty_rejection_reason_is_422(client: TestClient, as_actor, developer, admin):
    submission_id = create_draft(client, as_actor, developer)["id"]
    client.post(f"/submissions/{submission_id}/submit")

    as_actor.actor = admin
    client.post(f"/submissions/{submission_id}/start-review")
    response = client.post(f"/submissions/{submission_id}/reject", json={"reason": "  "})
    assert response.status_code == 422
    assert response.json()["error"] == "validation_failed"
    assert client.get(f"/submissions/{submission_id}").json()["status"] == "in_review"


def test_not_found(client: TestClient, as_actor, admin):
    as_actor.actor = admin
    response = client.post("/submissions/nope/start-review")
    assert response.status_code == 404


def test_other_developer_cannot_read(client: TestClient, as_actor, developer, other_developer):
    submission_id = create_draft(client, as_actor, developer)["id"]
    as_actor.actor = other_developer
    assert client.get(f"/submissions/{submission_id}").status_code == 403


def test_update_and_delete(client: TestClient, as_actor, developer):
    submission_id = create_draft(client, as_actor, developer)["id"]

    response = client.patch(f"/submissions/{submission_id}", json={"title": "Pixel Quest DX"})
    assert response.status_code == 200
    assert response.json()["metadata"]["title"] == "Pixel Quest DX"

    response = client.delete(f"/submissions/{submission_id}")
    assert response.json() == {"status": "deleted", "submission_id": submission_id}
    assert client.get(f"/submissions/{submission_id}").status_code == 404


def test_update_with_null_title_is_rejected(client: TestClient, as_actor, developer):
    submission_id = create_draft(client, as_actor, developer)["id"]

    response = client.patch(f"/submissions/{submission_id}", json={"title": None})
    assert response.status_code == 422
    assert response.json()["error"] == "validation_failed"

    response = client.get(f"/submissions/{submission_id}")
    assert response.status_code == 200
    assert response.json()["metadata"]["title"] == "Pixel Quest"


def test_list_and_notes(client: TestClient, as_actor, developer, admin):
    submission_id = create_draft(client, as_actor, developer)["id"]
    client.post(f"/submissions/{submission_id}/submit")

    as_actor.actor = admin
    response = client.get("/submissions/", params={"status": "submitted"})
    assert [s["id"] for s in response.json()] == [submission_id]

    response = client.post(
        f"/submissions/{submission_id}/notes",
        json={"content": "Needs a privacy policy link", "severity": "warning"},
    )
    assert response.status_code == 200
    assert response.json()["review_notes"][-1]["severity"] == "warning"


def test_store_unavailable_is_503(client: TestClient, as_actor, admin, store, monkeypatch):
    def boom(submission_id):
        raise Unavailable()

    monkeypatch.setattr(store, "load", boom)
    as_actor.actor = admin
    response = client.post("/submissions/any/start-review")
    assert response.status_code == 503
    assert response.json()["retryable"] is True
