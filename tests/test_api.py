"""API tests for the FastAPI app (no network: Gemini is stubbed)."""
import pytest
import requests
from fastapi.testclient import TestClient

import app.main as main
from app.services.chat_service import ChatService
from app.services.gemini_service import GeminiService
from tests.conftest import StubResponse, StubSession, gemini_payload


@pytest.fixture
def gemini_session():
    return StubSession(StubResponse(json_data=gemini_payload("MITK has great labs and a digital library.")))


@pytest.fixture
def client(monkeypatch, faq_service, gemini_session):
    gemini = GeminiService(api_key="test-key", session=gemini_session)
    monkeypatch.setattr(main, "chat_service", ChatService(faq_service, gemini))
    return TestClient(main.app)


class TestHealth:
    def test_health(self, client):
        response = client.get("/api/health")

        assert response.status_code == 200
        data = response.json()
        assert set(data) == {"status", "message", "model", "time"}
        assert data["status"] == "OK"

    def test_root_lists_endpoints(self, client):
        assert "/api/chat" in client.get("/").json()["endpoints"]


class TestChat:
    def test_gemini_answer(self, client, gemini_session):
        response = client.post("/api/chat", json={
            "message": "Tell me about the labs",
            "history": [{"role": "user", "content": "Hi", "timestamp": "2026-01-01T00:00:00Z"}],
            "language": "en",
        })

        assert response.status_code == 200
        data = response.json()
        assert data["response"] == "MITK has great labs and a digital library."
        assert data["confidence"] == 93
        assert data["model"]
        transcript = gemini_session.calls[0]["json"]["contents"][0]["parts"][0]["text"]
        assert "Human: Hi\n\n" in transcript

    def test_exact_match_skips_gemini(self, client, gemini_session):
        response = client.post("/api/chat", json={"message": "ADMISSION PROCESS"})

        assert response.status_code == 200
        assert response.json() == {
            "response": "Admissions follow KCET/COMEDK counselling.",
            "confidence": 95,
            "model": "Local Dataset",
        }
        assert gemini_session.calls == []

    @pytest.mark.parametrize("body", [{"message": ""}, {"message": "   "}, {}, {"message": 42}, {"history": []}])
    def test_invalid_message(self, client, gemini_session, body):
        response = client.post("/api/chat", json=body)

        assert response.status_code == 400
        assert "error" in response.json()
        assert gemini_session.calls == []

    def test_upstream_error(self, monkeypatch, faq_service):
        session = StubSession(StubResponse(status_code=429, text="quota exceeded"))
        monkeypatch.setattr(main, "chat_service", ChatService(faq_service, GeminiService(api_key="k", session=session)))

        response = TestClient(main.app).post("/api/chat", json={"message": "Hi"})

        assert response.status_code == 500
        assert response.json()["error"] == "AI service error"
        assert "429" in response.json()["details"]

    def test_upstream_timeout(self, monkeypatch, faq_service):
        session = StubSession(error=requests.exceptions.Timeout())
        monkeypatch.setattr(main, "chat_service", ChatService(faq_service, GeminiService(api_key="k", session=session)))

        response = TestClient(main.app).post("/api/chat", json={"message": "Hi"})

        assert response.status_code == 500
        assert response.json()["error"] == "AI service error"

    def test_not_initialized(self, monkeypatch):
        monkeypatch.setattr(main, "chat_service", None)

        response = TestClient(main.app).post("/api/chat", json={"message": "Hi"})

        assert response.status_code == 503
        assert response.json()["error"]


class TestStartup:
    def test_missing_api_key_is_fatal(self, monkeypatch):
        monkeypatch.setattr(main, "GEMINI_API_KEY", "")

        with pytest.raises(RuntimeError, match="GEMINI_API_KEY"):
            with TestClient(main.app):
                pass

    def test_startup_builds_services(self, monkeypatch, tmp_path):
        monkeypatch.setattr(main, "GEMINI_API_KEY", "test-key")
        monkeypatch.setattr(main, "FAQ_DATASET_PATH", tmp_path / "missing.json")
        monkeypatch.setattr(main, "chat_service", None)

        with TestClient(main.app) as client:
            assert main.chat_service is not None
            assert len(main.faq_service) == 0
            assert client.get("/api/health").status_code == 200
