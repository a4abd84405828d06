"""
MITK AI ASSISTANT APPLICATION PACKAGE
=====================================

Main Python package for the MITK AI Assistant backend and its resolution pipeline.

  from app.main import app
  from app.models import ChatRequest
  from app.services.pipeline import ResponsePipeline

FILE STRUCTURE:
  app/
    __init__.py   - This file; marks 'app' as a package.
    main.py       - FastAPI app and HTTP endpoints (/api/chat, /api/health).
    models.py     - Pydantic models for the API and for conversations.
    services/     - FAQ lookup, Gemini client, fallback answers, pipeline, sessions.
    utils/        - Helpers: confidence heuristic, HTML formatting, timestamps.
"""
