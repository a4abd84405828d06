"""
CONFIDENCE HEURISTIC
====================

Scores a remote model answer. This is not a probability: it is a fixed set of
bonuses on top of a base value, so the same text always gets the same score.

  base                                  85
  longer than 200 characters            +5
  mentions the institution short name   +5
  no "sorry" / "don't know" / "cannot"  +3
  capped at                             95
"""

import re

from config import INSTITUTION_SHORT_NAME

BASE_CONFIDENCE = 85
MAX_CONFIDENCE = 95
LENGTH_THRESHOLD = 200
LENGTH_BONUS = 5
NAME_BONUS = 5
CERTAINTY_BONUS = 3

UNCERTAINTY_PATTERN = re.compile(r"sorry|don['’]t know|cannot", re.IGNORECASE)


def score_confidence(text: str, short_name: str = INSTITUTION_SHORT_NAME) -> int:
    """Return a deterministic confidence score in [0, 95] for a remote answer."""
    text = text or ""
    confidence = BASE_CONFIDENCE
    if len(text) > LENGTH_THRESHOLD:
        confidence += LENGTH_BONUS
    if short_name and short_name.lower() in text.lower():
        confidence += NAME_BONUS
    if not UNCERTAINTY_PATTERN.search(text):
        confidence += CERTAINTY_BONUS
    return max(0, min(confidence, MAX_CONFIDENCE))
