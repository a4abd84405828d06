"""
RESPONSE RESOLUTION PIPELINE
============================

Turns one user message into one ResolvedResponse, trying each path in order:

  1. EXACT MATCH  - FAQ dataset hit -> confidence 95, source "Local Dataset". Done.
  2. REMOTE MODEL - only if the session allows it and the remote is healthy.
                    Success -> formatted HTML + confidence + model label. Done.
  3. ON FAILURE   - any RemoteModelError (HTTP error, timeout, malformed payload)
                    marks the remote unhealthy for the rest of the session.
                    The same request is never retried.
  4. FALLBACK     - keyword-routed local answer.

All per-session state lives on SessionContext; the pipeline itself keeps none,
so one pipeline can serve any number of sessions.
"""

import logging
from dataclasses import dataclass, field
from typing import Optional, Protocol, Sequence

from app.models import ConversationHistory, ResolvedResponse
from app.services.fallback_service import ASSISTANT_SOURCE, resolve_fallback
from app.services.faq_service import FAQService
from app.services.remote import RemoteAnswer, RemoteModelError, RemoteTimeoutError
from app.utils.confidence import score_confidence
from app.utils.formatting import format_ai_response
from config import CLIENT_HISTORY_WINDOW

logger = logging.getLogger("MITK-AI")

DATASET_SOURCE = "Local Dataset"
EXACT_MATCH_CONFIDENCE = 95
DEFAULT_REMOTE_LABEL = "Gemini AI"


class RemoteModel(Protocol):
    def generate(self, message: str, history: Sequence, language: str = "en") -> RemoteAnswer:
        ...


@dataclass
class SessionContext:
    """
    Everything the pipeline needs to know about the current session.

    - remote_enabled: the user/config allows the remote path at all.
    - remote_healthy: cleared by a failed health probe or a failed remote call.
    - language: answer language code ("en" or "kn").
    - history: conversation so far, NOT including the message being resolved.
    """
    remote_enabled: bool = True
    remote_healthy: bool = True
    language: str = "en"
    history: ConversationHistory = field(default_factory=ConversationHistory)

    @property
    def remote_available(self) -> bool:
        return self.remote_enabled and self.remote_healthy


class ResponsePipeline:
    """Exact match -> remote model -> local fallback."""

    def __init__(
        self,
        faq_service: Optional[FAQService] = None,
        remote: Optional[RemoteModel] = None,
        history_window: int = CLIENT_HISTORY_WINDOW,
    ):
        self.faq_service = faq_service or FAQService()
        self.remote = remote
        self.history_window = history_window

    def resolve(self, message: str, session: SessionContext) -> ResolvedResponse:
        """
        Resolve one message. Never raises for remote failures; the only side
        effect is clearing session.remote_healthy when the remote call fails.
        A blank message never reaches the remote and gets the default fallback.
        """
        if not isinstance(message, str) or not message.strip():
            return resolve_fallback("")

        answer = self.faq_service.find_answer(message)
        if answer is not None:
            logger.info("Exact match in local dataset")
            return ResolvedResponse(
                text=answer,
                confidence=EXACT_MATCH_CONFIDENCE,
                sources=[DATASET_SOURCE],
                model=DATASET_SOURCE,
            )

        if self.remote is not None and session.remote_available:
            try:
                remote_answer = self.remote.generate(
                    message,
                    session.history.recent(self.history_window),
                    language=session.language,
                )
            except RemoteTimeoutError as e:
                logger.warning(f"Remote model timed out, switching to local knowledge: {e}")
                session.remote_healthy = False
            except RemoteModelError as e:
                logger.warning(f"Remote model failed, switching to local knowledge: {e}")
                session.remote_healthy = False
            else:
                return self._from_remote(remote_answer)

        return resolve_fallback(message)

    @staticmethod
    def _from_remote(remote_answer: RemoteAnswer) -> ResolvedResponse:
        if remote_answer.confidence is not None:
            confidence = remote_answer.confidence
        else:
            confidence = score_confidence(remote_answer.text)
        return ResolvedResponse(
            text=format_ai_response(remote_answer.text),
            confidence=confidence,
            sources=[ASSISTANT_SOURCE, remote_answer.model or DEFAULT_REMOTE_LABEL],
            model=remote_answer.model or DEFAULT_REMOTE_LABEL,
        )
