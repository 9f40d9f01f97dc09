"""Unit tests for the HTTP API"""

import pytest
from fastapi.testclient import TestClient

from conftest import StubWorker
from app.core.config import Settings
from app.main import create_app
from orchestration.orchestrator import APOLOGY_MESSAGE
from orchestration.types import AgentType


@pytest.fixture
def client():
    workers = [
        StubWorker(AgentType.LEAD_RESEARCH, result="Found 3 leads"),
        StubWorker(AgentType.INBOX_TRIAGE),
        StubWorker(AgentType.KNOWLEDGE_BASE, result="Hello!"),
    ]
    app = create_app(
        Settings(_env_file=None, llm_api_key=None),
        [(w.agent_type, (lambda w=w: w)) for w in workers],
    )
    with TestClient(app) as test_client:
        yield test_client


class TestChatEndpoint:
    """Test suite for POST /api/chat"""

    def test_chat_returns_response_and_trace(self, client):
        response = client.post("/api/chat", json={
            "message": "Looking for leads in sales navigator for CTOs",
            "session_id": "api-1",
        })

        assert response.status_code == 200
        data = response.json()
        assert data["session_id"] == "api-1"
        assert data["response"]["sender"] == "orchestrator"
        assert data["response"]["content"].endswith("Found 3 leads")
        assert len(data["response"]["suggestions"]) == 3
        assert "**What would you like to do next?**" in data["rendered"]
        assert [t["action"] for t in data["trace"]] == [
            "intent-classification",
            "routing-decision",
            "process-task",
            "support-task",
            "response-synthesis",
        ]

    def test_chat_rejects_empty_message(self, client):
        response = client.post("/api/chat", json={"message": ""})
        assert response.status_code == 422

    def test_chat_seeds_new_session(self, client):
        client.post("/api/chat", json={
            "message": "hello",
            "session_id": "api-2",
            "user_id": "u7",
            "user_profile": {"name": "Ada"},
        })

        session = client.get("/api/sessions/api-2").json()

        assert session["user_id"] == "u7"
        assert session["message_count"] == 2
        assert session["messages"][0]["content"] == "hello"
        assert session["messages"][1]["content"] == "Hello!"

    def test_apology_is_not_an_http_error(self, client):
        client.app.state.agent_system.get_orchestrator().classifier = None

        response = client.post("/api/chat", json={"message": "hello", "session_id": "api-3"})

        assert response.status_code == 200
        assert response.json()["response"]["content"] == APOLOGY_MESSAGE
        assert [t["action"] for t in response.json()["trace"]] == ["error-handling"]


class TestSessionEndpoints:
    """Test suite for /api/sessions"""

    def test_unknown_session_is_404(self, client):
        assert client.get("/api/sessions/nope").status_code == 404
        assert client.delete("/api/sessions/nope").status_code == 404

    def test_delete_session(self, client):
        client.post("/api/chat", json={"message": "hello", "session_id": "api-4"})

        response = client.delete("/api/sessions/api-4")

        assert response.status_code == 200
        assert response.json() == {"message": "Session api-4 cleared"}
        assert client.get("/api/sessions/api-4").status_code == 404


class TestHealthAndMode:
    """Test suite for /api/health and /api/mode"""

    def test_health(self, client):
        data = client.get("/api/health").json()

        assert data["status"] == "healthy"
        assert data["healthy"] is True
        assert set(data["agents"]) == {
            "orchestrator", "lead-research", "inbox-triage", "knowledge-base"
        }

    def test_switch_mode(self, client):
        response = client.post("/api/mode", json={"mode": "inbound"})

        assert response.status_code == 200
        assert response.json() == {"mode": "inbound", "active_team": ["inbox-triage"]}

    def test_invalid_mode(self, client):
        assert client.post("/api/mode", json={"mode": "sideways"}).status_code == 422


def test_requests_before_startup_get_503():
    app = create_app(Settings(_env_file=None), [])
    client = TestClient(app)

    assert client.get("/api/health").status_code == 503
