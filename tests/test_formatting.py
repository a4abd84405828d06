"""Unit tests for response formatting."""
from app.utils.formatting import NO_RESPONSE_TEXT, format_ai_response, html_to_text


class TestFormatAiResponse:
    def test_empty_text(self):
        assert format_ai_response("") == NO_RESPONSE_TEXT
        assert format_ai_response("   ") == NO_RESPONSE_TEXT

    def test_plain_text_is_wrapped_in_paragraph(self):
        assert format_ai_response("Hello there") == "<p>Hello there</p>"

    def test_bold_and_italic(self):
        formatted = format_ai_response("This is **very** *nice*")
        assert "<strong>very</strong>" in formatted
        assert "<em>nice</em>" in formatted

    def test_headers(self):
        formatted = format_ai_response("## Courses\nWe offer BE.")
        assert formatted.startswith("<h2>Courses</h2>")

    def test_bullets_become_a_list(self):
        formatted = format_ai_response("Programs:\n\n* CSE\n* ECE")
        assert "<ul><li>CSE</li>\n<li>ECE</li></ul>" in formatted

    def test_paragraph_breaks(self):
        assert format_ai_response("One\n\n\nTwo") == "<p>One</p><p>Two</p>"

    def test_markup_from_model_is_escaped(self):
        formatted = format_ai_response("<script>alert(1)</script>")
        assert "<script>" not in formatted
        assert "&lt;script&gt;" in formatted


class TestHtmlToText:
    def test_strips_tags_and_keeps_structure(self):
        text = html_to_text("<h3>Title</h3>\n<p><strong>Key:</strong> value</p><ul><li>a</li><li>b</li></ul>")
        assert "Title" in text
        assert "Key: value" in text
        assert "- a" in text
        assert "- b" in text
        assert "<" not in text

    def test_unescapes_entities(self):
        assert html_to_text("<p>AI &amp; ML</p>") == "AI & ML"
