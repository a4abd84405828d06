"""Unit tests for the terminal client's backend connection."""
import pytest
import requests

from app.models import Message
from app.services.backend_client import BackendClient
from app.services.remote import RemoteModelError, RemoteTimeoutError
from tests.conftest import StubResponse, StubSession


class TestCheckHealth:
    def test_healthy(self):
        session = StubSession(StubResponse(json_data={"status": "OK", "message": "running"}))
        client = BackendClient("http://backend:3000/", probe_timeout=5, session=session)

        assert client.check_health() is True
        assert session.calls[0]["url"] == "http://backend:3000/api/health"
        assert session.calls[0]["timeout"] == 5

    def test_connection_refused(self):
        session = StubSession(error=requests.exceptions.ConnectionError("refused"))
        assert BackendClient(session=session).check_health() is False

    def test_probe_timeout(self):
        session = StubSession(error=requests.exceptions.Timeout())
        assert BackendClient(session=session).check_health() is False

    def test_non_2xx(self):
        session = StubSession(StubResponse(status_code=503, json_data={"error": "down"}))
        assert BackendClient(session=session).check_health() is False


class TestGenerate:
    def test_success(self):
        session = StubSession(StubResponse(json_data={"response": "Hi", "confidence": 91, "model": "Gemini"}))
        client = BackendClient("http://backend:3000", timeout=15, session=session)
        history = [Message(role="user", content="Hello"), {"role": "assistant"}]

        answer = client.generate("Courses?", history, language="kn")

        assert (answer.text, answer.confidence, answer.model) == ("Hi", 91, "Gemini")
        call = session.calls[0]
        assert call["url"] == "http://backend:3000/api/chat"
        assert call["timeout"] == 15
        assert call["json"] == {
            "message": "Courses?",
            "history": [{"role": "user", "content": "Hello"}],
            "language": "kn",
        }

    def test_error_body_details(self):
        session = StubSession(StubResponse(status_code=500, json_data={"error": "AI service error", "details": "quota"}))

        with pytest.raises(RemoteModelError) as exc_info:
            BackendClient(session=session).generate("Hi")

        assert exc_info.value.status_code == 500
        assert "quota" in str(exc_info.value)

    def test_error_without_json(self):
        session = StubSession(StubResponse(status_code=502, text="Bad Gateway", reason="Bad Gateway"))

        with pytest.raises(RemoteModelError, match="Bad Gateway"):
            BackendClient(session=session).generate("Hi")

    def test_timeout(self):
        session = StubSession(error=requests.exceptions.ReadTimeout())

        with pytest.raises(RemoteTimeoutError, match="AI service is slow"):
            BackendClient(session=session).generate("Hi")

    def test_malformed_payload(self):
        session = StubSession(StubResponse(status_code=200, text="not json"))

        with pytest.raises(RemoteModelError):
            BackendClient(session=session).generate("Hi")

    @pytest.mark.parametrize("data", [
        {"response": 123, "confidence": 90, "model": "Gemini"},
        {"response": "Hi", "confidence": 90, "model": 7},
        {"confidence": 90, "model": "Gemini"},
        {"response": None},
    ])
    def test_wrong_field_types(self, data):
        session = StubSession(StubResponse(json_data=data))

        with pytest.raises(RemoteModelError, match="malformed"):
            BackendClient(session=session).generate("Hi")

    def test_model_may_be_missing(self):
        session = StubSession(StubResponse(json_data={"response": "Hi"}))

        answer = BackendClient(session=session).generate("Hi")

        assert (answer.text, answer.model, answer.confidence) == ("Hi", "", None)

    @pytest.mark.parametrize("confidence", [True, False, "90", 90.5])
    def test_non_integer_confidence_is_ignored(self, confidence):
        session = StubSession(StubResponse(json_data={"response": "Hi", "confidence": confidence, "model": "Gemini"}))

        assert BackendClient(session=session).generate("Hi").confidence is None
