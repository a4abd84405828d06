"""Pytest configuration and shared fixtures."""
import json

import pytest

from app.models import FAQEntry
from app.services.faq_service import FAQService
from app.services.remote import RemoteAnswer, RemoteModelError

_NO_JSON = object()


class StubResponse:
    """Just enough of requests.Response for the clients under test."""

    def __init__(self, status_code=200, json_data=_NO_JSON, text=None, reason="OK"):
        self.status_code = status_code
        self._json_data = json_data
        if text is None:
            text = json.dumps(json_data) if json_data is not _NO_JSON else ""
        self.text = text
        self.reason = reason

    @property
    def ok(self):
        return 200 <= self.status_code < 400

    def json(self):
        if self._json_data is _NO_JSON:
            raise ValueError("No JSON body")
        return self._json_data


class StubSession:
    """Stands in for requests.Session: returns a canned response or raises a canned error."""

    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.calls = []

    def _respond(self, method, url, kwargs):
        self.calls.append({"method": method, "url": url, **kwargs})
        if self.error is not None:
            raise self.error
        return self.response

    def post(self, url, **kwargs):
        return self._respond("POST", url, kwargs)

    def get(self, url, **kwargs):
        return self._respond("GET", url, kwargs)


class FakeRemote:
    """A remote model that records what it was asked and answers (or fails) on demand."""

    def __init__(self, answer=None, error=None):
        self.answer = answer or RemoteAnswer(text="MITK offers BE and MBA programs.", model="Fake Gemini")
        self.error = error
        self.calls = []

    def generate(self, message, history, language="en"):
        self.calls.append({"message": message, "history": list(history), "language": language})
        if self.error is not None:
            raise self.error
        return self.answer


def gemini_payload(text):
    return {"candidates": [{"content": {"parts": [{"text": text}]}}]}


@pytest.fixture
def faq_entries():
    return [
        FAQEntry(question="Admission process", answer="Admissions follow KCET/COMEDK counselling."),
        FAQEntry(question="  Hostel Facilities ", answer="Separate hostels for boys and girls."),
        FAQEntry(question="Is there a bus?", answer="College buses run from Udupi and Kundapura."),
    ]


@pytest.fixture
def faq_service(faq_entries):
    return FAQService(faq_entries)


@pytest.fixture
def failing_remote():
    return FakeRemote(error=RemoteModelError("Backend error 500: boom", status_code=500))
