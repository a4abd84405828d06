"""
MITK AI ASSISTANT API
=====================

This module defines the FastAPI application and its HTTP endpoints. The browser
or terminal client talks to these; the backend talks to Gemini.

ENDPOINTS:
  GET  /              - Returns API name and list of endpoints.
  GET  /api/health    - Reachability probe used by clients at session start.
  POST /api/chat      - Answer one message: FAQ exact match first, otherwise Gemini.

ERRORS:
  Every non-2xx response body is {"error": ..., "details": ...}:
    400 - missing, empty or non-string message (Gemini is never called)
    500 - Gemini failed (HTTP error, timeout, malformed payload)
    503 - services not initialized

STARTUP:
  The lifespan function refuses to start without GEMINI_API_KEY, loads the FAQ
  dataset once, and builds the Gemini and Chat services.
"""


from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
import uvicorn
import logging

from app.models import ChatRequest, ChatResponse, ErrorResponse, HealthResponse
from app.services.chat_service import ChatService
from app.services.faq_service import FAQService
from app.services.gemini_service import GeminiService
from app.services.remote import RemoteModelError, RemoteTimeoutError, history_payload
from app.utils.time_info import get_iso_timestamp
from config import FAQ_DATASET_PATH, GEMINI_API_KEY, GEMINI_MODEL_LABEL, HOST, INSTITUTION_SHORT_NAME, PORT


# -----------------------------------------------------------------------------
# LOGGING
# -----------------------------------------------------------------------------
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s | %(levelname)-8s | %(name)-20s | %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S'
)
logger = logging.getLogger("MITK-AI")


# -----------------------------------------------------------------------------
# GLOBAL SERVICE REFERENCES
# -----------------------------------------------------------------------------
# Set during startup (lifespan) and used by all route handlers.
faq_service: FAQService = None
gemini_service: GeminiService = None
chat_service: ChatService = None


def _error(status_code: int, error: str, details: str = None) -> JSONResponse:
    body = ErrorResponse(error=error, details=details).model_dump(exclude_none=True)
    return JSONResponse(status_code=status_code, content=body)


# -------------------------------------------------------------------------
# LIFESPAN (STARTUP / SHUTDOWN)
# -------------------------------------------------------------------------


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    - STARTUP: validate the API key (fatal if missing), load the FAQ dataset,
      create GeminiService and ChatService.
    - SHUTDOWN: nothing to save; conversations are never persisted.
    """
    global faq_service, gemini_service, chat_service

    logger.info("=" * 60)
    logger.info(f"{INSTITUTION_SHORT_NAME} AI Assistant - Starting Up...")
    logger.info("=" * 60)

    try:
        if not GEMINI_API_KEY:
            raise RuntimeError(
                "GEMINI_API_KEY not found in environment variables. "
                "Get a key from https://makersuite.google.com/app/apikey"
            )

        logger.info("Loading FAQ dataset...")
        faq_service = FAQService.from_file(FAQ_DATASET_PATH)

        logger.info("Initializing Gemini service...")
        gemini_service = GeminiService(api_key=GEMINI_API_KEY)

        chat_service = ChatService(faq_service, gemini_service)

        logger.info("=" * 60)
        logger.info("Service Status:")
        logger.info(f"    - FAQ Dataset: {len(faq_service)} entries")
        logger.info(f"    - Gemini: {gemini_service.model}")
        logger.info("=" * 60)
        logger.info(f"API: http://localhost:{PORT}")
        logger.info(f"Health check: http://localhost:{PORT}/api/health")
        logger.info("=" * 60)
    except Exception as e:
        logger.error(f"Fatal error during startup: {e}", exc_info=True)
        raise

    yield

    logger.info("Shutting down. Goodbye!")


# -------------------------------------------------------------------------
# FASTAPI APP AND CORS
# -------------------------------------------------------------------------
app = FastAPI(
    title=f"{INSTITUTION_SHORT_NAME} AI Assistant API",
    description="Institutional chatbot backend with local FAQ and Gemini",
    lifespan=lifespan
)

# Allow any origin so the static front end can be served from anywhere.
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Invalid request bodies are 400 {error, details}, not FastAPI's default 422."""
    details = "; ".join(
        f"{'.'.join(str(part) for part in err.get('loc', ()))}: {err.get('msg', '')}"
        for err in exc.errors()
    )
    logger.warning(f"Rejected invalid request to {request.url.path}: {details}")
    return _error(400, "Message is required", details)


# =========================================================================
# API ENDPOINTS
# =========================================================================

@app.get("/")
async def root():
    """Return the API name and a short description of each endpoint."""
    return {
        "message": f"{INSTITUTION_SHORT_NAME} AI Assistant API",
        "endpoints": {
            "/api/chat": "Chat (local FAQ exact match, then Gemini)",
            "/api/health": "Reachability probe"
        }
    }


@app.get("/api/health", response_model=HealthResponse)
async def health():
    return HealthResponse(
        status="OK",
        message=f"{INSTITUTION_SHORT_NAME} AI Backend is running",
        model=GEMINI_MODEL_LABEL,
        time=get_iso_timestamp(),
    )


@app.post("/api/chat", response_model=ChatResponse)
def chat(request: ChatRequest):
    """
    Answer one message.

    REQUEST BODY:
    {
        "message": "What courses are offered?",
        "history": [{"role": "user", "content": "..."}, {"role": "assistant", "content": "..."}],
        "language": "en"
    }

    RESPONSE:
    {
        "response": "MITK offers ...",
        "confidence": 93,
        "model": "Google Gemini Pro (Free)"
    }

    Runs as a sync handler (thread pool) because the Gemini call blocks.
    """
    if not request.message.strip():
        return _error(400, "Message is required")

    if not chat_service:
        return _error(503, "Chat service not initialized")

    try:
        return chat_service.process_message(
            request.message,
            history_payload(request.history),
            language=request.language,
        )
    except RemoteTimeoutError as e:
        logger.error(f"Chat error (timeout): {e}")
        return _error(500, "AI service error", str(e))
    except RemoteModelError as e:
        logger.error(f"Chat error: {e}")
        return _error(500, "AI service error", str(e))


# -------------------------------------------------------------------------
# STANDALONE RUN (python -m app.main)
# -------------------------------------------------------------------------
def run():
    """Start the uvicorn server (same as run.py); used if someone does python -m app.main"""
    uvicorn.run(
        "app.main:app",
        host=HOST,
        port=PORT,
        reload=True,
        log_level="info"
    )

if __name__ == "__main__":
    run()
