"""
CONFIGURATION MODULE
====================

PURPOSE:
  Central place for all MITK AI Assistant settings: the Gemini API key and model,
  timeouts, history windows, the FAQ dataset path, institution facts, the system
  prompt, and the UI strings for each supported language.

WHAT THIS FILE DOES:
  - Loads environment variables from .env (so API keys stay out of code).
  - Exposes GEMINI_API_KEY, GEMINI_MODEL and the generateContent endpoint settings.
  - Defines how much conversation history is sent per request (server and client side).
  - Defines where the local FAQ dataset lives (dataset/mitk_faq.json by default).
  - Holds the institution facts used by the system prompt and the fallback answers.

USAGE:
  Import what you need: `from config import GEMINI_API_KEY, SYSTEM_PROMPT, FAQ_DATASET_PATH`
  All services import from here so behaviour is consistent.

NOTE:
  A missing GEMINI_API_KEY does not fail at import time; the backend refuses to
  start (see app.main.lifespan). The terminal client never needs the key.
"""

import os
import logging
from pathlib import Path
from dotenv import load_dotenv


# -----------------------------------------------------------------------------
# LOGGING
# -----------------------------------------------------------------------------
logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# ENVIRONMENT
# -----------------------------------------------------------------------------
# Load environment variables from .env file (if it exists).
load_dotenv()


def _env_int(name: str, default: int) -> int:
    """Read an integer setting; fall back to the default (with a warning) if it is not a number."""
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning("Invalid integer for %s=%r, using %s", name, raw, default)
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        logger.warning("Invalid number for %s=%r, using %s", name, raw, default)
        return default


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name, "").strip().lower()
    if not raw:
        return default
    return raw in ("1", "true", "yes", "on")


# -----------------------------------------------------------------------------
# BASE PATH
# -----------------------------------------------------------------------------
BASE_DIR = Path(__file__).parent

# ============================================================================
# LOCAL FAQ DATASET
# ============================================================================
# A JSON list of {"question": ..., "answer": ...} records. Loaded once at startup.
# If the file does not exist the exact-match step simply never matches.
FAQ_DATASET_PATH = Path(os.getenv("FAQ_DATASET_PATH", "").strip() or BASE_DIR / "dataset" / "mitk_faq.json")

# ============================================================================
# GEMINI API CONFIGURATION
# ============================================================================
# Gemini is the remote model behind POST /api/chat. The key is required by the backend.
GEMINI_API_KEY = os.getenv("GEMINI_API_KEY", "").strip()
GEMINI_MODEL = os.getenv("GEMINI_MODEL", "gemini-1.5-flash").strip()
# Label reported to clients as the "model" field and shown as a source.
GEMINI_MODEL_LABEL = os.getenv("GEMINI_MODEL_LABEL", "Google Gemini Pro (Free)").strip()
GEMINI_API_BASE = os.getenv("GEMINI_API_BASE", "https://generativelanguage.googleapis.com/v1beta").rstrip("/")
GEMINI_TEMPERATURE = _env_float("GEMINI_TEMPERATURE", 0.7)
GEMINI_MAX_OUTPUT_TOKENS = _env_int("GEMINI_MAX_OUTPUT_TOKENS", 600)
# Seconds before an in-flight generateContent call is abandoned.
GEMINI_TIMEOUT_SECONDS = _env_float("GEMINI_TIMEOUT_SECONDS", 30.0)

# Number of history messages (not turns) the backend puts into the transcript.
MAX_HISTORY_MESSAGES = _env_int("MAX_HISTORY_MESSAGES", 4)
# Number of history messages the client sends with each /api/chat request.
CLIENT_HISTORY_WINDOW = _env_int("CLIENT_HISTORY_WINDOW", 6)

# Maximum length (characters) for a single user message.
MAX_MESSAGE_LENGTH = 2_000

# ============================================================================
# SERVER / CLIENT CONFIGURATION
# ============================================================================
HOST = os.getenv("HOST", "0.0.0.0")
PORT = _env_int("PORT", 3000)

# Where the terminal client finds the backend. BACKEND_ENABLED=false forces local mode.
BACKEND_URL = os.getenv("BACKEND_URL", f"http://localhost:{PORT}").rstrip("/")
BACKEND_ENABLED = _env_bool("BACKEND_ENABLED", True)
BACKEND_TIMEOUT_SECONDS = _env_float("BACKEND_TIMEOUT_SECONDS", 15.0)
HEALTH_PROBE_TIMEOUT_SECONDS = _env_float("HEALTH_PROBE_TIMEOUT_SECONDS", 5.0)

# ============================================================================
# INSTITUTION FACTS
# ============================================================================
# Used by the system prompt, the fallback answers and the confidence heuristic.
INSTITUTION_NAME = os.getenv("INSTITUTION_NAME", "Moodlakatte Institute of Technology, Kundapura")
INSTITUTION_SHORT_NAME = os.getenv("INSTITUTION_SHORT_NAME", "MITK")
INSTITUTION_ESTABLISHED = "2004"
INSTITUTION_AFFILIATION = "Visvesvaraya Technological University (VTU), Belagavi"
INSTITUTION_ADDRESS = "Moodlakatte, Near Kundapura Railway Station, Udupi District, Karnataka - 576217"
INSTITUTION_PHONE = os.getenv("INSTITUTION_PHONE", "+91-8254-237630")
INSTITUTION_EMAIL = os.getenv("INSTITUTION_EMAIL", "info@mitkundapura.com")
INSTITUTION_WEBSITE = os.getenv("INSTITUTION_WEBSITE", "https://www.mitkundapura.com")

INSTITUTION_FACTS = {
    "name": INSTITUTION_NAME,
    "short_name": INSTITUTION_SHORT_NAME,
    "established": INSTITUTION_ESTABLISHED,
    "affiliation": INSTITUTION_AFFILIATION,
    "address": INSTITUTION_ADDRESS,
    "phone": INSTITUTION_PHONE,
    "email": INSTITUTION_EMAIL,
    "website": INSTITUTION_WEBSITE,
    "website_host": INSTITUTION_WEBSITE.split("://", 1)[-1].rstrip("/"),
}

# ============================================================================
# ASSISTANT PERSONALITY
# ============================================================================
# Sent at the top of every transcript. Facts come from INSTITUTION_FACTS.

_SYSTEM_PROMPT_BASE = """You are an intelligent AI assistant for {name} ({short_name}).
Be helpful, concise, and encouraging. Provide clear, structured answers with headings and bullet points when useful.

{short_name} INFORMATION:
- Name: {name} ({short_name})
- Established: {established}
- Affiliation: {affiliation}
- Location: {address}
- Contact: {phone}, {email}
- Website: {website}

Courses:
- CSE, ECE, ME, CE, AI/ML

Facilities:
- Labs, library, hostels, sports, Wi-Fi, transport, cafeteria, placement cell

Guidelines:
- Prefer facts relevant to {short_name}.
- If unsure about specific fees/dates, suggest contacting the college.
- Keep tone friendly and professional."""

SYSTEM_PROMPT = _SYSTEM_PROMPT_BASE.format(**INSTITUTION_FACTS)

# ============================================================================
# LANGUAGES
# ============================================================================
# Language codes accepted in ChatRequest.language and by the terminal client.
LANGUAGE_NAMES = {
    "en": "English",
    "kn": "Kannada",
}

TRANSLATIONS = {
    "en": {
        "welcome": f"Hello! I'm your {INSTITUTION_SHORT_NAME} AI Assistant, powered by Google Gemini AI. "
                   f"I can answer detailed questions about {INSTITUTION_NAME}.",
        "ask_anything": f"What would you like to know about {INSTITUTION_SHORT_NAME}?",
        "language": "English",
        "thinking": "Let me get that information for you...",
        "backend_offline": "AI service is offline. Using local knowledge base.",
        "status_ready": "AI Ready",
        "status_offline": "AI Offline",
        "status_local": "Local Mode",
    },
    "kn": {
        "welcome": "ನಮಸ್ಕಾರ! ನಾನು ನಿಮ್ಮ MITK AI ಸಹಾಯಕ. Google Gemini AI ಶಕ್ತಿಯಿಂದ ಚಾಲಿತ.",
        "ask_anything": "MITK ಬಗ್ಗೆ ನೀವು ಏನು ತಿಳಿದುಕೊಳ್ಳಲು ಬಯಸುತ್ತೀರಿ?",
        "language": "ಕನ್ನಡ",
        "thinking": "ಮಾಹಿತಿ ಹುಡುಕುತ್ತಿದ್ದೇನೆ...",
        "backend_offline": "AI ಸೇವೆ ಆಫ್ಲೈನ್. ಸ್ಥಳೀಯ ಜ್ಞಾನ ಬಳಸುತ್ತಿದ್ದೇನೆ.",
        "status_ready": "AI ಸಿದ್ಧ",
        "status_offline": "AI ಆಫ್ಲೈನ್",
        "status_local": "ಸ್ಥಳೀಯ ಮೋಡ್",
    },
}
