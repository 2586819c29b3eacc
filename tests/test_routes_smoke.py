"""Smoke tests for API routes."""

import uuid

import pytest
from conftest import FakeCompletionClient, FixedRandom
from fastapi import FastAPI
from fastapi.testclient import TestClient

from skill_sprint.api.routes import get_store, router
from skill_sprint.sprint.session import SessionStore, SprintSession


@pytest.fixture
def fake_client():
    return FakeCompletionClient()


@pytest.fixture
def store(fake_client):
    return SessionStore(
        lambda: SprintSession(
            fake_client, random_source=FixedRandom(index=1), spin_delay_seconds=0
        )
    )


@pytest.fixture
def client(store):
    app = FastAPI()
    app.include_router(router)
    app.dependency_overrides[get_store] = lambda: store
    with TestClient(app) as c:
        yield c


def _new_session(client) -> str:
    response = client.post("/api/sessions")
    assert response.status_code == 201
    return response.json()["session_id"]


def _to_dashboard(client, sid):
    client.post(f"/api/sessions/{sid}/profile", json={"resume_text": "Barista"})
    client.post(f"/api/sessions/{sid}/recommendations")
    client.post(f"/api/sessions/{sid}/spin")
    return client.post(f"/api/sessions/{sid}/accept")


class TestHealthCheck:
    def test_health_returns_ok(self, client):
        response = client.get("/api/health")
        assert response.status_code == 200
        assert response.json() == {"status": "ok"}


class TestSessions:
    def test_create_session(self, client, store):
        sid = _new_session(client)
        response = client.get(f"/api/sessions/{sid}")
        assert response.status_code == 200
        assert response.json()["state"]["view"] == "onboarding"
        assert len(store) == 1

    def test_session_not_found(self, client):
        response = client.get(f"/api/sessions/{uuid.uuid4()}")
        assert response.status_code == 404

    def test_session_invalid_id(self, client):
        response = client.get("/api/sessions/not-a-uuid")
        assert response.status_code == 400

    def test_delete_session(self, client, store):
        sid = _new_session(client)
        assert client.delete(f"/api/sessions/{sid}").status_code == 204
        assert client.get(f"/api/sessions/{sid}").status_code == 404
        assert client.delete(f"/api/sessions/{sid}").status_code == 404
        assert len(store) == 0

    def test_reading_is_idempotent(self, client):
        sid = _new_session(client)
        _to_dashboard(client, sid)
        first = client.get(f"/api/sessions/{sid}").json()["state"]
        second = client.get(f"/api/sessions/{sid}").json()["state"]
        assert first == second


class TestFlow:
    def test_profile_with_intent(self, client, fake_client):
        sid = _new_session(client)
        response = client.post(
            f"/api/sessions/{sid}/profile",
            json={"name": "Jo", "intent": "Just exploring",
                  "resume_text": "Former barista, good communicator"},
        )
        assert response.status_code == 200
        assert response.json()["state"]["view"] == "roulette"
        assert fake_client.calls[0][1] == "Former barista, good communicator"

    def test_invalid_intent(self, client):
        sid = _new_session(client)
        response = client.post(
            f"/api/sessions/{sid}/profile", json={"intent": "Get rich", "resume_text": "x"}
        )
        assert response.status_code == 422

    def test_accept_opens_dashboard(self, client):
        sid = _new_session(client)
        data = _to_dashboard(client, sid).json()
        assert data["state"]["view"] == "dashboard"
        assert data["view"]["skill_name"] == "SQL Basics"
        assert data["view"]["rival_score"] == 120

    def test_locked_project_conflict(self, client):
        sid = _new_session(client)
        _to_dashboard(client, sid)
        response = client.post(f"/api/sessions/{sid}/projects/2/open")
        assert response.status_code == 409

    def test_unknown_project(self, client):
        sid = _new_session(client)
        _to_dashboard(client, sid)
        response = client.post(f"/api/sessions/{sid}/projects/7/open")
        assert response.status_code == 404

    def test_wrong_view_conflict(self, client):
        sid = _new_session(client)
        response = client.post(f"/api/sessions/{sid}/spin")
        assert response.status_code == 409

    def test_grading_failure_is_bad_gateway(self, client, fake_client):
        sid = _new_session(client)
        _to_dashboard(client, sid)
        fake_client.fail.add("grade_submission")
        response = client.post(
            f"/api/sessions/{sid}/projects/1/submission", json={"text": "work"}
        )
        assert response.status_code == 502
        assert response.json()["detail"] == "AI analysis failed. Please try again."
        state = client.get(f"/api/sessions/{sid}").json()["state"]
        assert state["requests"]["grade_submission"]["status"] == "failed"
        assert state["sprint"]["user_score"] == 0

    def test_full_sprint(self, client):
        sid = _new_session(client)
        _to_dashboard(client, sid)
        client.post(f"/api/sessions/{sid}/projects/1/open")
        for project_id in (1, 2, 3):
            response = client.post(
                f"/api/sessions/{sid}/projects/{project_id}/submission", json={"text": "work"}
            )
            assert response.status_code == 200
        data = response.json()
        assert data["state"]["view"] == "sprint_summary"
        assert data["view"]["user_score"] == 270

        response = client.post(f"/api/sessions/{sid}/claim")
        assert response.json()["view"]["price"] == "$9.99/mo"

        response = client.post(f"/api/sessions/{sid}/restart")
        assert response.json()["state"]["view"] == "onboarding"
        assert response.json()["state"]["profile"] is None
