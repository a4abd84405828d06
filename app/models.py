"""
DATA MODELS MODULE
==================

This file defines the Pydantic models used for API requests and responses, plus
the conversation models the resolution pipeline works with. FastAPI uses the
wire models to validate incoming JSON and to serialize responses.

MODELS:
  HistoryItem         - One {role, content} entry sent along with POST /api/chat.
  ChatRequest         - Body of POST /api/chat (message + history + language).
  ChatResponse        - Body returned by POST /api/chat (response + confidence + model).
  ErrorResponse       - Body returned on any non-2xx from the API.
  HealthResponse      - Body returned by GET /api/health.
  Message             - Immutable message in a conversation, with a timestamp.
  ConversationHistory - Append-only, ordered list of Message.
  FAQEntry            - One question/answer pair from the local dataset.
  ResolvedResponse    - What the pipeline hands to the presentation client.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Iterator, List, Literal, Optional

from app.utils.time_info import get_iso_timestamp
from config import MAX_MESSAGE_LENGTH

# ==============================================================================
# WIRE MODELS (HTTP API)
# ==============================================================================

class HistoryItem(BaseModel):
    """
    A history entry as sent by a client. Both fields are optional: entries
    missing a role or content are skipped when the transcript is built.
    Extra keys (e.g. timestamp) are ignored.
    """
    role: Optional[str] = None
    content: Optional[str] = None


class ChatRequest(BaseModel):
    """
    Request body for POST /api/chat.

    - message: Required. Must be a non-empty string of at most MAX_MESSAGE_LENGTH
      characters (a blank message is rejected by the endpoint with 400).
    - history: Previous messages, oldest first. Only the most recent few are used.
    - language: Language code for the answer ("en" or "kn").
    """
    message: str = Field(..., min_length=1, max_length=MAX_MESSAGE_LENGTH)
    history: List[HistoryItem] = Field(default_factory=list)
    language: str = "en"


class ChatResponse(BaseModel):
    response: str
    confidence: int
    model: str


class ErrorResponse(BaseModel):
    error: str
    details: Optional[str] = None


class HealthResponse(BaseModel):
    status: str
    message: str
    model: str
    time: str


# ==============================================================================
# CONVERSATION MODELS
# ==============================================================================

class Message(BaseModel):
    """A single message in a conversation. Frozen: history entries are never edited."""
    model_config = ConfigDict(frozen=True)

    role: Literal["user", "assistant"]
    content: str
    timestamp: str = Field(default_factory=get_iso_timestamp)


class ConversationHistory(BaseModel):
    """
    Ordered, append-only conversation. Insertion order is chronology.
    Only recent(n) is ever sent to a remote model, so the transcript stays bounded
    however long the conversation gets.
    """
    messages: List[Message] = Field(default_factory=list)

    def append(self, message: Message) -> None:
        self.messages.append(message)

    def add_user(self, content: str) -> Message:
        message = Message(role="user", content=content)
        self.append(message)
        return message

    def add_assistant(self, content: str) -> Message:
        message = Message(role="assistant", content=content)
        self.append(message)
        return message

    def recent(self, n: int) -> List[Message]:
        """Return the last n messages (oldest first); an empty list when n <= 0."""
        if n <= 0:
            return []
        return list(self.messages[-n:])

    def clear(self) -> None:
        self.messages = []

    def __len__(self) -> int:
        return len(self.messages)

    def __iter__(self) -> Iterator[Message]:
        return iter(self.messages)


class FAQEntry(BaseModel):
    question: str
    answer: str


class ResolvedResponse(BaseModel):
    """
    A displayable answer.

    - text: HTML-formatted answer.
    - confidence: Heuristic score, always clamped into [0, 100].
    - sources: Labels shown next to the answer; never empty.
    - model: Which path produced it (e.g. "Local Dataset"), if known.
    """
    text: str
    confidence: int
    sources: List[str] = Field(..., min_length=1)
    model: Optional[str] = None

    @field_validator("confidence", mode="before")
    @classmethod
    def clamp_confidence(cls, value):
        return max(0, min(100, int(value)))
