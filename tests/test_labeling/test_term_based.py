"""Tests for TermBasedLabeler and the shared labeler helpers."""

import pytest

from topicscope.labeling import BaseLabeler, LabelResult, TermBasedLabeler
from topicscope.topics import Topic


def _topic(terms, topic_id=7):
    return Topic(id=topic_id, document_indices=[], terms=terms)


@pytest.fixture
def labeler():
    return TermBasedLabeler()


class TestTermBasedLabeler:
    """Tests for TermBasedLabeler.generate_label()."""

    def test_two_leading_terms(self, labeler):
        topic = _topic(["machine", "learning", "neural", "network", "deep"])
        assert labeler.generate_label(topic) == "Machine & Learning"

    def test_no_terms(self, labeler):
        assert labeler.generate_label(_topic([], topic_id=7)) == "Topic 7"

    def test_single_qualifying_term(self, labeler):
        assert labeler.generate_label(_topic(["ai", "ml", "classification"])) == "Classification"

    def test_short_terms_skipped(self, labeler):
        """Terms of three characters or fewer are passed over."""
        assert labeler.generate_label(_topic(["gpu", "nvidia", "chips"])) == "Nvidia & Chips"

    def test_only_first_three_terms_considered(self, labeler):
        """Long terms past the third position are ignored."""
        topic = _topic(["ai", "ml", "gpu", "accelerators", "training"])
        assert labeler.generate_label(topic) == "Ai"

    def test_all_short_uses_top_term(self, labeler):
        assert labeler.generate_label(_topic(["ai", "ml", "nlp"])) == "Ai"

    def test_underscored_terms_capitalized_per_word(self, labeler):
        topic = _topic(["supply_chain", "semiconductor"])
        assert labeler.generate_label(topic) == "Supply Chain & Semiconductor"

    def test_describe(self, labeler):
        result = labeler.describe(_topic(["machine", "learning"]))
        assert result == LabelResult(label="Machine & Learning", source="terms")
        assert result.description is None


class TestHelpers:
    """Tests for BaseLabeler helpers."""

    @pytest.mark.parametrize(
        "phrase,expected",
        [
            ("machine learning", "Machine Learning"),
            ("supply_chain", "Supply Chain"),
            ("real-time", "Real Time"),
            ("GPU", "Gpu"),
        ],
    )
    def test_capitalize_phrase(self, phrase, expected):
        assert BaseLabeler.capitalize_phrase(phrase) == expected

    def test_select_representative_docs_first_k(self):
        assert BaseLabeler.select_representative_docs(["a", "b", "c", "d"], k=3) == ["a", "b", "c"]

    def test_select_representative_docs_short_input(self):
        assert BaseLabeler.select_representative_docs(["a", "b"], k=5) == ["a", "b"]
