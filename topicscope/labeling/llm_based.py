"""LLM topic labeling with term-based fallback.

The labeler sends a topic's distinctive terms and a few representative
documents to a text-generation backend and asks for a JSON answer. Every
failure on that path (no backend, open circuit, API error, bad JSON) ends in
the term-based label, so labeling never aborts a fit.

Usage:
    labeler = LLMLabeler()                      # picks a backend from LABELING_* keys
    labeler = LLMLabeler(provider=my_generator) # or inject one
    label = labeler.generate_label(topic)
"""

import json
import logging
import math
from typing import Any

from topicscope.labeling.base import BaseLabeler
from topicscope.labeling.config import LabelingConfig
from topicscope.labeling.prompts import LABEL_PROMPT
from topicscope.labeling.providers import TextGenerator, default_generator
from topicscope.labeling.schemas import UNKNOWN_LABEL, LabelResult
from topicscope.labeling.term_based import TermBasedLabeler
from topicscope.topics.schemas import Topic

logger = logging.getLogger(__name__)

_QUOTE_CHARS = "\"'`“”‘’"


class LLMLabeler(BaseLabeler):
    """Labels topics with a language model.

    The backend is resolved once, at construction. A provider that reports
    itself unavailable is treated the same as no provider.

    Args:
        provider: Text generator to use. Defaults to ``default_generator``.
        config: Labeling configuration.
    """

    def __init__(
        self,
        provider: TextGenerator | None = None,
        config: LabelingConfig | None = None,
    ) -> None:
        self._config = config or LabelingConfig()
        if provider is None:
            provider = default_generator(self._config)
        if provider is not None and not getattr(provider, "available", True):
            logger.info("Text generator %r is unavailable, using term-based labels", provider)
            provider = None
        self._provider = provider
        self._fallback = TermBasedLabeler()

    @property
    def provider(self) -> TextGenerator | None:
        """The resolved backend, or None."""
        return self._provider

    @property
    def has_provider(self) -> bool:
        return self._provider is not None

    def generate_label(self, topic: Topic) -> str:
        return self.describe(topic).label

    def describe(self, topic: Topic) -> LabelResult:
        result = self.try_describe(topic)
        if result is None:
            return self._fallback.describe(topic)
        return result

    def try_describe(self, topic: Topic) -> LabelResult | None:
        """Ask the backend for a label.

        Returns:
            The model's label, or None when no backend is configured or the
            call failed in any way.
        """
        if self._provider is None:
            return None

        if topic.embeddings.size:
            documents = topic.representative_docs(self._config.sample_documents)
        else:
            documents = self.select_representative_docs(
                topic.documents, self._config.sample_documents
            )

        try:
            analysis = self.analyze_with_llm(documents, topic.terms)
            return LabelResult(
                label=self.clean_label(analysis.get("label")),
                description=_optional_text(analysis.get("description")),
                themes=_themes(analysis.get("themes")),
                confidence=_confidence(analysis.get("confidence")),
                source="llm",
            )
        except Exception as e:
            logger.warning(f"LLM labeling failed for topic {topic.id}, using terms: {e}")
            return None

    def build_analysis_prompt(self, documents: list[str], terms: list[str]) -> str:
        """Format the labeling prompt for a set of sample documents and terms."""
        limit = self._config.document_truncate
        blocks = []
        for i, doc in enumerate(documents, start=1):
            text = doc if len(doc) <= limit else f"{doc[:limit]}..."
            blocks.append(f"Document {i}:\n{text}")
        return LABEL_PROMPT.format(
            terms=", ".join(terms[: self._config.prompt_terms]),
            documents="\n\n".join(blocks),
        )

    def analyze_with_llm(self, documents: list[str], terms: list[str]) -> dict[str, Any]:
        """Run the prompt through the backend and parse the JSON reply.

        Raises:
            RuntimeError: If no backend is configured.
            ValueError: If the reply is not a JSON object.
        """
        if self._provider is None:
            raise RuntimeError("No text generator configured")

        raw = self._provider.generate(
            self.build_analysis_prompt(documents, terms),
            max_tokens=self._config.max_tokens,
            temperature=self._config.temperature,
            response_format={"type": "json_object"},
        )
        data = json.loads(raw)
        if not isinstance(data, dict):
            raise ValueError(f"Expected a JSON object, got {type(data).__name__}")
        return data

    def clean_label(self, label: Any) -> str:
        """Normalize a model-produced label.

        Strips quotes and whitespace, keeps the first line and caps the
        length, marking truncation with '...'.
        """
        if label is None:
            return UNKNOWN_LABEL
        text = str(label).strip().strip(_QUOTE_CHARS).strip()
        text = text.splitlines()[0].strip() if text else ""
        text = text.strip(_QUOTE_CHARS).strip()
        if not text:
            return UNKNOWN_LABEL

        limit = self._config.max_label_length
        if len(text) > limit:
            text = text[: limit - 3].rstrip() + "..."
        return text


def _optional_text(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _themes(value: Any) -> list[str]:
    if not isinstance(value, (list, tuple)):
        return []
    return [str(theme).strip() for theme in value if theme and str(theme).strip()]


def _confidence(value: Any) -> float | None:
    if isinstance(value, bool):
        return None
    try:
        score = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(score):
        return None
    return min(max(score, 0.0), 1.0)
