"""Unit tests for the confidence heuristic."""
from hypothesis import given
from hypothesis import strategies as st

from app.utils.confidence import score_confidence


class TestScoreConfidence:
    def test_short_plain_answer(self):
        # base 85 + certainty 3
        assert score_confidence("The library opens at 9.") == 88

    def test_uncertain_short_answer_gets_base(self):
        assert score_confidence("Sorry, I don't know.") == 85

    def test_mentions_short_name(self):
        assert score_confidence("mitk has five departments.") == 93

    def test_long_answer(self):
        assert score_confidence("x" * 201) == 93
        assert score_confidence("x" * 200) == 88

    def test_capped_at_95(self):
        assert score_confidence("MITK " + "x" * 300) == 95

    def test_uncertainty_is_case_insensitive(self):
        assert score_confidence("I CANNOT say.") == 85
        assert score_confidence("I don’t know that.") == 85

    def test_empty_text(self):
        assert score_confidence("") == 88

    @given(st.text())
    def test_bounded_and_deterministic(self, text):
        """Property test: score is within [0, 95] and identical for identical text."""
        score = score_confidence(text)
        assert 0 <= score <= 95
        assert score == score_confidence(text)
