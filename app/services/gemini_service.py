"""
GEMINI SERVICE MODULE
=====================

Calls the Google Gemini generateContent REST endpoint for POST /api/chat.

FLOW:
  1. build_transcript(message, history, language): system prompt, then the most
     recent history as alternating "Human:" / "Assistant:" turns, then the new
     message and a trailing "Assistant: " for the model to complete.
  2. generate(...): one POST with {contents, generationConfig}; read the answer at
     candidates[0].content.parts[0].text.

ERRORS:
  - Non-2xx status         -> RemoteModelError (carries status code and body)
  - Unparseable JSON       -> RemoteModelError
  - Connection failure     -> RemoteModelError
  - Timeout                -> RemoteTimeoutError
  A well-formed response without the answer path is NOT an error: the answer
  becomes NO_RESPONSE_TEXT.

No retries: a failed call is reported once and the caller decides what to do.
"""

import logging
from typing import Any, Optional, Sequence

import requests

from app.services.remote import (
    RemoteAnswer,
    RemoteModelError,
    RemoteTimeoutError,
    entry_role_and_content,
)
from app.utils.formatting import NO_RESPONSE_TEXT
from config import (
    GEMINI_API_BASE,
    GEMINI_API_KEY,
    GEMINI_MAX_OUTPUT_TOKENS,
    GEMINI_MODEL,
    GEMINI_MODEL_LABEL,
    GEMINI_TEMPERATURE,
    GEMINI_TIMEOUT_SECONDS,
    LANGUAGE_NAMES,
    MAX_HISTORY_MESSAGES,
    SYSTEM_PROMPT,
)

logger = logging.getLogger("MITK-AI")

_SPEAKERS = {"user": "Human", "assistant": "Assistant"}


def extract_answer_text(data: Any) -> str:
    """Return candidates[0].content.parts[0].text, or NO_RESPONSE_TEXT if any step is missing."""
    try:
        text = data["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError):
        return NO_RESPONSE_TEXT
    if not isinstance(text, str) or not text.strip():
        return NO_RESPONSE_TEXT
    return text


class GeminiService:
    """
    Thin client for one Gemini model. Holds no conversation state: everything
    the model sees is rebuilt from the arguments of each generate() call.
    """

    def __init__(
        self,
        api_key: str = GEMINI_API_KEY,
        model: str = GEMINI_MODEL,
        model_label: str = GEMINI_MODEL_LABEL,
        timeout: float = GEMINI_TIMEOUT_SECONDS,
        history_window: int = MAX_HISTORY_MESSAGES,
        system_prompt: str = SYSTEM_PROMPT,
        api_base: str = GEMINI_API_BASE,
        session: Optional[requests.Session] = None,
    ):
        if not api_key:
            raise ValueError("GEMINI_API_KEY is not set. Add it to your .env file.")
        self.api_key = api_key
        self.model = model
        self.model_label = model_label
        self.timeout = timeout
        self.history_window = history_window
        self.system_prompt = system_prompt
        self.api_base = api_base.rstrip("/")
        self.session = session or requests.Session()

    @property
    def endpoint(self) -> str:
        return f"{self.api_base}/models/{self.model}:generateContent"

    def build_transcript(self, message: str, history: Optional[Sequence[Any]] = None, language: str = "en") -> str:
        """Compose the single text prompt sent to the model (at most history_window past messages)."""
        transcript = self.system_prompt + "\n\n"

        if language and language != "en":
            language_name = LANGUAGE_NAMES.get(language, language)
            transcript += f"Respond in {language_name}.\n\n"

        recent = list(history or [])[-self.history_window:] if self.history_window > 0 else []
        for entry in recent:
            role, content = entry_role_and_content(entry)
            if not role or not content:
                continue
            speaker = _SPEAKERS.get(role)
            if speaker:
                transcript += f"{speaker}: {content}\n\n"

        transcript += f"Human: {message}\n\nAssistant: "
        return transcript

    def build_payload(self, transcript: str) -> dict:
        return {
            "contents": [{"parts": [{"text": transcript}]}],
            "generationConfig": {
                "temperature": GEMINI_TEMPERATURE,
                "maxOutputTokens": GEMINI_MAX_OUTPUT_TOKENS,
            },
        }

    def generate(self, message: str, history: Optional[Sequence[Any]] = None, language: str = "en") -> RemoteAnswer:
        """Send one generateContent request and return the answer text."""
        if not isinstance(message, str) or not message.strip():
            raise ValueError("Message must be non-empty text")

        payload = self.build_payload(self.build_transcript(message, history, language))

        try:
            response = self.session.post(
                self.endpoint,
                params={"key": self.api_key},
                json=payload,
                timeout=self.timeout,
            )
        except requests.exceptions.Timeout as e:
            logger.warning("Gemini request timed out after %.1fs", self.timeout)
            raise RemoteTimeoutError(f"Gemini API timed out after {self.timeout}s") from e
        except requests.exceptions.RequestException as e:
            logger.error(f"Gemini request failed: {e}")
            raise RemoteModelError(f"Gemini API request failed: {e}") from e

        if not response.ok:
            body = response.text or ""
            logger.error("Gemini API error %s: %s", response.status_code, body[:500])
            raise RemoteModelError(
                f"Gemini API error {response.status_code}: {body}",
                status_code=response.status_code,
                body=body,
            )

        try:
            data = response.json()
        except ValueError as e:
            logger.error("Gemini API returned a non-JSON body")
            raise RemoteModelError("Gemini API returned a malformed payload", status_code=response.status_code) from e

        text = extract_answer_text(data)
        logger.info(f"Gemini response generated ({len(text)} chars)")
        return RemoteAnswer(text=text, model=self.model_label)
