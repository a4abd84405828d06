"""Unit tests for FAQ loading and exact-match lookup."""
import json

from hypothesis import given
from hypothesis import strategies as st

from app.models import FAQEntry
from app.services.faq_service import FAQService, load_faq_entries


class TestLoadFaqEntries:
    """Tests for reading the dataset file."""

    def test_missing_file_gives_empty_list(self, tmp_path):
        assert load_faq_entries(tmp_path / "missing.json") == []

    def test_loads_valid_entries(self, tmp_path):
        path = tmp_path / "faq.json"
        path.write_text(json.dumps([{"question": "Q1", "answer": "A1"}, {"question": "Q2", "answer": "A2"}]))

        entries = load_faq_entries(path)

        assert [e.question for e in entries] == ["Q1", "Q2"]

    def test_invalid_json_gives_empty_list(self, tmp_path):
        path = tmp_path / "faq.json"
        path.write_text("{not json")

        assert load_faq_entries(path) == []

    def test_non_list_gives_empty_list(self, tmp_path):
        path = tmp_path / "faq.json"
        path.write_text(json.dumps({"question": "Q", "answer": "A"}))

        assert load_faq_entries(path) == []

    def test_skips_malformed_items(self, tmp_path):
        path = tmp_path / "faq.json"
        path.write_text(json.dumps([{"question": "Q1", "answer": "A1"}, "oops", {"question": "Q2"}]))

        entries = load_faq_entries(path)

        assert len(entries) == 1
        assert entries[0].answer == "A1"

    def test_from_file(self, tmp_path):
        path = tmp_path / "faq.json"
        path.write_text(json.dumps([{"question": "Q1", "answer": "A1"}]))

        assert len(FAQService.from_file(path)) == 1


class TestFindAnswer:
    """Tests for exact-match lookup."""

    def test_exact_match(self, faq_service):
        assert faq_service.find_answer("Admission process") == "Admissions follow KCET/COMEDK counselling."

    def test_ignores_case_and_whitespace(self, faq_service):
        assert faq_service.find_answer("   HOSTEL facilities\n") == "Separate hostels for boys and girls."

    def test_no_partial_match(self, faq_service):
        assert faq_service.find_answer("Admission") is None
        assert faq_service.find_answer("Admission process please") is None

    def test_blank_message(self, faq_service):
        assert faq_service.find_answer("   ") is None

    def test_empty_dataset_never_matches(self):
        assert FAQService().find_answer("Admission process") is None

    def test_entry_without_answer_is_ignored(self):
        service = FAQService([FAQEntry(question="Fees", answer="")])
        assert service.find_answer("fees") is None

    @given(
        st.sampled_from([str.upper, str.lower, str.title, str.swapcase]),
        st.text(alphabet=" \t\n", max_size=3),
        st.text(alphabet=" \t\n", max_size=3),
    )
    def test_any_casing_and_padding_matches(self, casing, left, right):
        """Property test: every entry matches its own question however it is cased or padded."""
        entries = [
            FAQEntry(question="Admission process", answer="A1"),
            FAQEntry(question="Is there a bus?", answer="A2"),
        ]
        service = FAQService(entries)
        for entry in entries:
            assert service.find_answer(left + casing(entry.question) + right) == entry.answer
