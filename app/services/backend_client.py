"""
BACKEND CLIENT MODULE
=====================

The terminal client's view of the backend:

  check_health()  GET  /api/health  (short timeout; any failure means "offline")
  generate(...)   POST /api/chat    (the remote path of the resolution pipeline)

generate() follows the same contract as GeminiService.generate(), so the
pipeline does not care which of the two it talks to.
"""

import logging
from typing import Any, Optional, Sequence

import requests

from app.services.remote import RemoteAnswer, RemoteModelError, RemoteTimeoutError, history_payload
from config import BACKEND_TIMEOUT_SECONDS, BACKEND_URL, HEALTH_PROBE_TIMEOUT_SECONDS

logger = logging.getLogger("MITK-AI")

CHAT_ENDPOINT = "/api/chat"
HEALTH_ENDPOINT = "/api/health"


class BackendClient:
    def __init__(
        self,
        base_url: str = BACKEND_URL,
        timeout: float = BACKEND_TIMEOUT_SECONDS,
        probe_timeout: float = HEALTH_PROBE_TIMEOUT_SECONDS,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.probe_timeout = probe_timeout
        self.session = session or requests.Session()

    def check_health(self) -> bool:
        """Return True only if /api/health answers 2xx within probe_timeout."""
        try:
            response = self.session.get(f"{self.base_url}{HEALTH_ENDPOINT}", timeout=self.probe_timeout)
        except requests.exceptions.RequestException as e:
            logger.warning(f"Backend connection failed: {e}")
            return False

        if not response.ok:
            logger.warning("Backend health check failed: HTTP %s", response.status_code)
            return False

        try:
            message = response.json().get("message", "")
        except (ValueError, AttributeError):
            message = ""
        logger.info("Backend connected: %s", message or "OK")
        return True

    def generate(self, message: str, history: Optional[Sequence[Any]] = None, language: str = "en") -> RemoteAnswer:
        """POST the message to /api/chat and return the backend's answer."""
        payload = {
            "message": message,
            "history": history_payload(history),
            "language": language,
        }
        try:
            response = self.session.post(f"{self.base_url}{CHAT_ENDPOINT}", json=payload, timeout=self.timeout)
        except requests.exceptions.Timeout as e:
            raise RemoteTimeoutError("Request timeout - AI service is slow") from e
        except requests.exceptions.RequestException as e:
            raise RemoteModelError(f"Cannot reach backend: {e}") from e

        if not response.ok:
            try:
                error_data = response.json()
            except ValueError:
                error_data = {}
            if not isinstance(error_data, dict):
                error_data = {}
            details = error_data.get("details") or error_data.get("error") or response.reason or ""
            raise RemoteModelError(
                f"Backend error {response.status_code}: {details}",
                status_code=response.status_code,
                body=response.text or "",
            )

        try:
            data = response.json()
        except ValueError as e:
            raise RemoteModelError("Backend returned a malformed payload", status_code=response.status_code) from e
        if not isinstance(data, dict):
            raise RemoteModelError("Backend returned a malformed payload", status_code=response.status_code)

        text = data.get("response")
        model = data.get("model")
        if not isinstance(text, str) or (model is not None and not isinstance(model, str)):
            raise RemoteModelError("Backend returned a malformed payload", status_code=response.status_code)

        confidence = data.get("confidence")
        if isinstance(confidence, bool) or not isinstance(confidence, int):
            confidence = None
        return RemoteAnswer(text=text, model=model or "", confidence=confidence)
