"""
CHAT SERVICE MODULE
===================

Backend side of POST /api/chat. Given a message and the client's history:

  1. Exact match in the FAQ dataset -> answer with confidence 95, model "Local Dataset".
  2. Otherwise ask Gemini and score the answer with the confidence heuristic.

Remote errors are NOT handled here; they propagate so the endpoint can return
500 {error, details} and the client can fall back to local knowledge.
"""

import logging
from typing import Any, Optional, Sequence

from app.models import ChatResponse
from app.services.faq_service import FAQService
from app.services.gemini_service import GeminiService
from app.services.pipeline import DATASET_SOURCE, EXACT_MATCH_CONFIDENCE
from app.utils.confidence import score_confidence

logger = logging.getLogger("MITK-AI")


class ChatService:
    def __init__(self, faq_service: FAQService, gemini_service: GeminiService):
        self.faq_service = faq_service
        self.gemini_service = gemini_service

    def process_message(
        self,
        message: str,
        history: Optional[Sequence[Any]] = None,
        language: str = "en",
    ) -> ChatResponse:
        answer = self.faq_service.find_answer(message)
        if answer is not None:
            logger.info("Answered from local dataset")
            return ChatResponse(response=answer, confidence=EXACT_MATCH_CONFIDENCE, model=DATASET_SOURCE)

        remote_answer = self.gemini_service.generate(message, history, language=language)
        return ChatResponse(
            response=remote_answer.text,
            confidence=score_confidence(remote_answer.text),
            model=remote_answer.model,
        )
