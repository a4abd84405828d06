"""
FAQ SERVICE MODULE
==================

Loads the local question/answer dataset once at startup and answers exact
matches from it. Matching is case-insensitive and ignores leading/trailing
whitespace; there is no fuzzy or partial matching. Runs before any remote call.

DATASET FORMAT (dataset/mitk_faq.json):
  [
    {"question": "Admission process", "answer": "Admissions follow KCET/COMEDK..."},
    {"question": "Hostel facilities", "answer": "Separate hostels for boys and girls..."}
  ]

A missing file is normal (empty dataset). A broken file is logged and treated
as empty so the backend still starts.
"""

import json
import logging
from pathlib import Path
from typing import List, Optional

from pydantic import ValidationError

from app.models import FAQEntry
from config import FAQ_DATASET_PATH


logger = logging.getLogger("MITK-AI")


def _normalize(text: str) -> str:
    return (text or "").strip().lower()


def load_faq_entries(path: Path = FAQ_DATASET_PATH) -> List[FAQEntry]:
    """Read the dataset file and return its valid entries (empty list if missing or unreadable)."""
    path = Path(path)
    if not path.exists():
        logger.info("No FAQ dataset at %s; exact-match lookup disabled", path)
        return []

    try:
        with open(path, "r", encoding="utf-8") as f:
            raw = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        logger.error("Error reading FAQ dataset %s: %s", path, e)
        return []

    if not isinstance(raw, list):
        logger.error("FAQ dataset %s must contain a JSON list, got %s", path, type(raw).__name__)
        return []

    entries = []
    for i, item in enumerate(raw):
        try:
            entries.append(FAQEntry.model_validate(item))
        except ValidationError:
            logger.warning("Skipping invalid FAQ entry #%s in %s", i, path)

    logger.info(f"Loaded {len(entries)} FAQ entries from {path.name}")
    return entries


class FAQService:
    """Read-only, in-memory FAQ list with exact-match lookup."""

    def __init__(self, entries: Optional[List[FAQEntry]] = None):
        self._entries = list(entries or [])

    @classmethod
    def from_file(cls, path: Path = FAQ_DATASET_PATH) -> "FAQService":
        return cls(load_faq_entries(path))

    @property
    def entries(self) -> List[FAQEntry]:
        return list(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def find_answer(self, message: str) -> Optional[str]:
        """Return the answer whose question equals the message (case/whitespace-insensitive), else None."""
        needle = _normalize(message)
        if not needle:
            return None
        for entry in self._entries:
            if entry.answer and _normalize(entry.question) == needle:
                return entry.answer
        return None
