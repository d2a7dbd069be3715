"""Labeler interface and helpers shared by every labeling strategy."""

import re
from abc import ABC, abstractmethod
from typing import Sequence, TypeVar

from topicscope.labeling.schemas import LabelResult
from topicscope.topics.schemas import Topic

T = TypeVar("T")

_PHRASE_SEPARATORS = re.compile(r"[\s_-]+")


class BaseLabeler(ABC):
    """Turns a topic into a short human-readable label."""

    @abstractmethod
    def generate_label(self, topic: Topic) -> str:
        """Return a label for ``topic``."""

    def describe(self, topic: Topic) -> LabelResult:
        """Return the label plus whatever enrichment the strategy provides."""
        return LabelResult(label=self.generate_label(topic))

    @staticmethod
    def capitalize_phrase(phrase: str) -> str:
        """Capitalize each word of a phrase.

        >>> BaseLabeler.capitalize_phrase("machine_learning-ops model")
        'Machine Learning Ops Model'
        """
        return " ".join(
            piece.capitalize() for piece in _PHRASE_SEPARATORS.split(phrase) if piece
        )

    @staticmethod
    def select_representative_docs(documents: Sequence[T], k: int = 3) -> list[T]:
        """Take the first ``k`` items, or all of them when there are fewer."""
        return list(documents[:k])
