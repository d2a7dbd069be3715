"""Hybrid labeling: term-based baseline, LLM label when one is produced."""

import logging

from topicscope.labeling.base import BaseLabeler
from topicscope.labeling.config import LabelingConfig
from topicscope.labeling.llm_based import LLMLabeler
from topicscope.labeling.providers import TextGenerator
from topicscope.labeling.schemas import UNKNOWN_LABEL, LabelResult
from topicscope.labeling.term_based import TermBasedLabeler
from topicscope.topics.schemas import Topic

logger = logging.getLogger(__name__)


class HybridLabeler(BaseLabeler):
    """Computes the term-based label first, then tries the LLM.

    The LLM result wins whenever the LLM labeler reports success with a
    usable label. A reply that cleaned down to the unknown-label placeholder
    counts as a failure, so the term-based label is kept.
    """

    def __init__(
        self,
        provider: TextGenerator | None = None,
        config: LabelingConfig | None = None,
    ) -> None:
        self._term_labeler = TermBasedLabeler()
        self._llm_labeler = LLMLabeler(provider=provider, config=config)

    @property
    def llm_labeler(self) -> LLMLabeler:
        return self._llm_labeler

    def generate_label(self, topic: Topic) -> str:
        return self.describe(topic).label

    def describe(self, topic: Topic) -> LabelResult:
        baseline = self._term_labeler.describe(topic)
        enriched = self._llm_labeler.try_describe(topic)
        if enriched is None or enriched.label == UNKNOWN_LABEL:
            logger.debug(f"Topic {topic.id}: keeping term-based label {baseline.label!r}")
            return baseline
        return enriched
