"""
REMOTE MODEL CONTRACT
=====================

What the resolution pipeline expects from anything that answers remotely:
GeminiService (backend -> Gemini) and BackendClient (terminal client -> backend)
both return a RemoteAnswer or raise RemoteModelError.

RemoteTimeoutError is a RemoteModelError so callers that only care about
"remote failed" catch one type, while logs can still tell timeouts apart.
"""

from dataclasses import dataclass
from typing import Any, Optional, Sequence


@dataclass(frozen=True)
class RemoteAnswer:
    """Raw answer text plus the label of the model that produced it."""
    text: str
    model: str
    confidence: Optional[int] = None


class RemoteModelError(Exception):
    """The remote call failed: non-2xx status, unreadable payload, or network error."""

    def __init__(self, message: str, status_code: Optional[int] = None, body: str = ""):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class RemoteTimeoutError(RemoteModelError):
    """The remote call did not finish within its timeout and was abandoned."""


def entry_role_and_content(entry: Any) -> tuple:
    """
    Read (role, content) from a history entry that may be a dict, a HistoryItem,
    or a Message. Missing values come back as None.
    """
    if isinstance(entry, dict):
        return entry.get("role"), entry.get("content")
    return getattr(entry, "role", None), getattr(entry, "content", None)


def history_payload(history: Optional[Sequence[Any]]) -> list:
    """Serialize history entries to plain {role, content} dicts, dropping incomplete ones."""
    payload = []
    for entry in history or []:
        role, content = entry_role_and_content(entry)
        if not role or not content:
            continue
        payload.append({"role": role, "content": content})
    return payload
