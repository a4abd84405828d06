"""
RUN SCRIPT - Start the MITK AI Assistant backend
================================================

PURPOSE:
  Single entry point to start the backend.

WHAT IT DOES:
  - Imports the FastAPI app from app.main.
  - Runs it with uvicorn on HOST/PORT from config (default 0.0.0.0:3000).
  - reload=True restarts the server when Python files change (handy for development).

USAGE:
  python run.py

  Health check: http://localhost:3000/api/health
  API docs:     http://localhost:3000/docs

NOTE:
  Before running, set GEMINI_API_KEY in .env. Without it the server refuses to start.
"""

import uvicorn

from config import HOST, PORT

# ------------------------------------------------------------------------------
# ENTRY POINT
# ------------------------------------------------------------------------------
if __name__ == "__main__":
    uvicorn.run(
        "app.main:app",   # String path to the FastAPI app instance (module:variable).
        host=HOST,
        port=PORT,
        reload=True
    )
