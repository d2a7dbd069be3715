"""Deterministic labels built from a topic's top terms."""

from topicscope.labeling.base import BaseLabeler
from topicscope.topics.schemas import Topic

MIN_LABEL_TERM_LENGTH = 4


class TermBasedLabeler(BaseLabeler):
    """Names a topic after its two leading descriptive terms.

    Only the first three terms are considered, and terms of three characters
    or fewer are skipped unless nothing longer is available.

    Example:
        ["machine", "learning", "neural"] -> "Machine & Learning"
        ["ai", "ml", "classification"]    -> "Classification"
        []                                -> "Topic 7"
    """

    def generate_label(self, topic: Topic) -> str:
        if not topic.terms:
            return f"Topic {topic.id}"

        label_terms = [t for t in topic.terms[:3] if len(t) >= MIN_LABEL_TERM_LENGTH]
        if len(label_terms) >= 2:
            first = self.capitalize_phrase(label_terms[0])
            second = self.capitalize_phrase(label_terms[1])
            return f"{first} & {second}"
        if label_terms:
            return self.capitalize_phrase(label_terms[0])
        return self.capitalize_phrase(topic.terms[0])
