"""
SERVICES PACKAGE
=================

Business logic lives here. The API layer (app.main) and the terminal client
(chat_cli.py) call these services.

MODULES:
    faq_service      - Local dataset loading and exact-match lookup
    gemini_service   - Gemini generateContent client (backend side)
    backend_client   - /api/health probe and /api/chat client (client side)
    remote           - RemoteAnswer and the remote error types
    fallback_service - Keyword-routed local answers
    pipeline         - Exact match -> remote -> fallback resolution
    chat_session     - Per-user session shell around the pipeline
    chat_service     - Backend handling of POST /api/chat
"""
