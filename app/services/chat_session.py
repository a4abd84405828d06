"""
CHAT SESSION MODULE
===================

The side-effecting shell around ResponsePipeline for one interactive user:

  - start():  clear history and probe the backend (GET /api/health). A failed
              probe marks the remote path unhealthy before the first message.
  - send():   one message at a time; records the user and assistant messages.
  - reset():  "new chat".
  - status_text / toggle_language(): what the presentation client shows.
"""

import logging
from typing import Optional

from app.models import ResolvedResponse
from app.services.backend_client import BackendClient
from app.services.pipeline import ResponsePipeline, SessionContext
from config import MAX_MESSAGE_LENGTH, TRANSLATIONS

logger = logging.getLogger("MITK-AI")


class ChatSession:
    def __init__(
        self,
        pipeline: ResponsePipeline,
        backend: Optional[BackendClient] = None,
        remote_enabled: bool = True,
        language: str = "en",
    ):
        self.pipeline = pipeline
        self.backend = backend
        self.context = SessionContext(remote_enabled=remote_enabled, language=language)
        self.is_processing = False
        self.last_response: Optional[ResolvedResponse] = None

    @property
    def history(self):
        return self.context.history

    @property
    def language(self) -> str:
        return self.context.language

    @property
    def strings(self) -> dict:
        return TRANSLATIONS.get(self.context.language, TRANSLATIONS["en"])

    @property
    def status_text(self) -> str:
        if not self.context.remote_enabled:
            return self.strings["status_local"]
        if self.context.remote_healthy:
            return self.strings["status_ready"]
        return self.strings["status_offline"]

    def start(self) -> bool:
        """Begin a fresh session and return whether the remote path is usable."""
        self.reset()
        if not self.context.remote_enabled:
            logger.info("Backend disabled in config; using local knowledge only")
            self.context.remote_healthy = False
            return False
        if self.backend is None:
            self.context.remote_healthy = self.pipeline.remote is not None
            return self.context.remote_healthy

        logger.info("Checking backend connection...")
        self.context.remote_healthy = self.backend.check_health()
        return self.context.remote_healthy

    def reset(self) -> None:
        self.context.history.clear()
        self.last_response = None
        logger.info("Conversation reset")

    def toggle_language(self) -> str:
        self.context.language = "kn" if self.context.language == "en" else "en"
        return self.context.language

    def send(self, message: str) -> ResolvedResponse:
        """Resolve one user message and append both sides of the turn to the history."""
        message = (message or "").strip()
        if not message:
            raise ValueError("Message is required")
        if len(message) > MAX_MESSAGE_LENGTH:
            raise ValueError(f"Message is too long (maximum {MAX_MESSAGE_LENGTH} characters)")
        if self.is_processing:
            raise RuntimeError("A message is already being processed")

        self.is_processing = True
        try:
            response = self.pipeline.resolve(message, self.context)
            self.context.history.add_user(message)
            self.context.history.add_assistant(response.text)
            self.last_response = response
            return response
        finally:
            self.is_processing = False
