"""
RESPONSE FORMATTING
===================

Remote answers arrive as loosely markdown-styled text. format_ai_response()
turns them into the small HTML subset the fallback answers already use
(<h1>-<h3>, <strong>, <em>, <ul>/<li>, <p>). html_to_text() goes the other way
for the terminal client.
"""

import html
import re

NO_RESPONSE_TEXT = "Sorry, I could not generate a response."

_BOLD = re.compile(r"\*\*(.+?)\*\*")
_BULLET = re.compile(r"^[ \t]*[*-] (.+)$", re.MULTILINE)
_ITALIC = re.compile(r"\*(.+?)\*")
_H3 = re.compile(r"^### (.*)$", re.MULTILINE)
_H2 = re.compile(r"^## (.*)$", re.MULTILINE)
_H1 = re.compile(r"^# (.*)$", re.MULTILINE)
_LIST_RUN = re.compile(r"(?:<li>.*?</li>\n?)+")
_PARAGRAPH_BREAK = re.compile(r"\n{2,}")

_BLOCK_TAGS = re.compile(r"</?(?:p|h[1-6]|ul|ol|br)\s*/?>", re.IGNORECASE)
_LIST_ITEM = re.compile(r"<li>", re.IGNORECASE)
_ANY_TAG = re.compile(r"<[^>]+>")
_BLANK_LINES = re.compile(r"\n\s*\n+")


def _wrap_list(match: re.Match) -> str:
    items = match.group(0)
    trailing = "\n" if items.endswith("\n") else ""
    return f"<ul>{items.rstrip(chr(10))}</ul>{trailing}"


def format_ai_response(text: str) -> str:
    """Convert markdown-style emphasis, headers and bullets to HTML and normalize paragraphs."""
    if not text or not text.strip():
        return NO_RESPONSE_TEXT

    # Escape first so the model can never inject markup of its own.
    formatted = html.escape(text.strip().replace("\r\n", "\n"), quote=False)

    formatted = _BOLD.sub(r"<strong>\1</strong>", formatted)
    formatted = _BULLET.sub(r"<li>\1</li>", formatted)
    formatted = _ITALIC.sub(r"<em>\1</em>", formatted)
    formatted = _H3.sub(r"<h3>\1</h3>", formatted)
    formatted = _H2.sub(r"<h2>\1</h2>", formatted)
    formatted = _H1.sub(r"<h1>\1</h1>", formatted)
    formatted = _LIST_RUN.sub(_wrap_list, formatted)

    formatted = _PARAGRAPH_BREAK.sub("</p><p>", formatted)
    if not formatted.startswith("<h") and not formatted.startswith("<p>"):
        formatted = "<p>" + formatted
    if not formatted.endswith("</p>") and not formatted.endswith(">"):
        formatted = formatted + "</p>"
    return formatted


def html_to_text(markup: str) -> str:
    """Strip the HTML produced above (or by the fallback answers) down to readable plain text."""
    text = _LIST_ITEM.sub("\n- ", markup or "")
    text = _BLOCK_TAGS.sub("\n", text)
    text = _ANY_TAG.sub("", text)
    text = html.unescape(text)
    lines = [line.strip() for line in text.splitlines()]
    return _BLANK_LINES.sub("\n\n", "\n".join(lines)).strip()
