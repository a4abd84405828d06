"""
UTILITIES PACKAGE
=================

Helpers used by the services (no HTTP, no business logic):

  confidence - score_confidence(text): heuristic 0-95 score for a remote answer.
  formatting - format_ai_response(text) to HTML; html_to_text(markup) for terminals.
  time_info  - get_iso_timestamp(): current UTC time for messages and /api/health.
"""
