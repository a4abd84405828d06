"""
MITK AI ASSISTANT - TERMINAL CLIENT
===================================

PURPOSE:
Command-line chat client for the MITK AI Assistant. It plays the role of the
browser front end: it probes the backend once at start, keeps the conversation
history, and answers from local knowledge whenever the backend is offline or fails.

USAGE:
    python chat_cli.py

    Start the backend first (python run.py) for AI answers. Without it the
    client still works in local knowledge-base mode.

COMMANDS:
    /new     - Start a new chat (clears history)
    /lang    - Switch between English and Kannada
    /status  - Show whether AI answers are available
    /details - Show confidence and sources of the last answer
    /quit or /exit - Exit
"""

import logging

from app.services.backend_client import BackendClient
from app.services.chat_session import ChatSession
from app.services.faq_service import FAQService
from app.services.pipeline import ResponsePipeline
from app.utils.formatting import html_to_text
from config import BACKEND_ENABLED, FAQ_DATASET_PATH, INSTITUTION_SHORT_NAME

logging.basicConfig(
    level=logging.WARNING,
    format='%(asctime)s | %(levelname)-8s | %(name)-20s | %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S'
)


# -----------------------------------------------------------------------------
# UI HELPERS
# -----------------------------------------------------------------------------

def print_header(session: ChatSession):
    strings = session.strings
    print("\n" + "=" * 60)
    print(f"{INSTITUTION_SHORT_NAME} AI Assistant")
    print("=" * 60)
    print(strings["welcome"])
    print(f"Status: {session.status_text}")
    if not session.context.remote_healthy:
        print(strings["backend_offline"])
    print("\nCommands: /new  /lang  /status  /details  /quit")
    print("=" * 60)
    print(strings["ask_anything"] + "\n")


def format_details(session: ChatSession) -> str:
    response = session.last_response
    if response is None:
        return "No answer yet"
    lines = [f"Confidence: {response.confidence}%", "Sources:"]
    lines.extend(f"  - {source}" for source in response.sources)
    return "\n".join(lines)


def get_user_input():
    try:
        return input("\nYou: ").strip()
    except (KeyboardInterrupt, EOFError):
        return None


def build_session() -> ChatSession:
    backend = BackendClient() if BACKEND_ENABLED else None
    pipeline = ResponsePipeline(faq_service=FAQService.from_file(FAQ_DATASET_PATH), remote=backend)
    return ChatSession(pipeline, backend=backend, remote_enabled=BACKEND_ENABLED)


# -----------------------------------------------------------------------------
# MAIN LOOP
# -----------------------------------------------------------------------------

def main():
    session = build_session()
    session.start()
    print_header(session)

    while True:
        user_input = get_user_input()
        if user_input is None or user_input in ["/quit", "/exit"]:
            print("\nGoodbye!")
            break
        if not user_input:
            continue

        if user_input == "/new":
            session.reset()
            print_header(session)
            continue
        elif user_input == "/lang":
            session.toggle_language()
            print(f"Language changed to {session.strings['language']}. {session.strings['ask_anything']}")
            continue
        elif user_input == "/status":
            print(f"Status: {session.status_text}")
            continue
        elif user_input == "/details":
            print(format_details(session))
            continue
        elif user_input.startswith("/"):
            print(f"Unknown command: {user_input}")
            continue

        was_healthy = session.context.remote_healthy
        print(session.strings["thinking"])
        try:
            response = session.send(user_input)
        except ValueError as e:
            print(f"Error: {e}")
            continue
        if was_healthy and not session.context.remote_healthy:
            print(f"[{session.strings['backend_offline']}]")
        print(f"\n{INSTITUTION_SHORT_NAME} AI ({response.confidence}%):\n{html_to_text(response.text)}")


if __name__ == "__main__":
    main()
