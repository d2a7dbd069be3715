"""Topic labeling strategies.

Provides:
- TermBasedLabeler: Deterministic labels from top terms
- LLMLabeler: Language-model labels with term-based fallback
- HybridLabeler: Term-based baseline upgraded by the LLM when it succeeds
- OpenAIGenerator / AnthropicGenerator: Text-generation backends
- CircuitBreaker: Fail-fast wrapper for backend calls
"""

from topicscope.labeling.base import BaseLabeler
from topicscope.labeling.circuit_breaker import CircuitBreaker, CircuitOpenError, CircuitState
from topicscope.labeling.config import LabelingConfig
from topicscope.labeling.hybrid import HybridLabeler
from topicscope.labeling.llm_based import LLMLabeler
from topicscope.labeling.providers import (
    AnthropicGenerator,
    BaseTextGenerator,
    OpenAIGenerator,
    TextGenerator,
    default_generator,
)
from topicscope.labeling.schemas import UNKNOWN_LABEL, LabelResult
from topicscope.labeling.term_based import TermBasedLabeler

__all__ = [
    "AnthropicGenerator",
    "BaseLabeler",
    "BaseTextGenerator",
    "CircuitBreaker",
    "CircuitOpenError",
    "CircuitState",
    "HybridLabeler",
    "LLMLabeler",
    "LabelResult",
    "LabelingConfig",
    "OpenAIGenerator",
    "TermBasedLabeler",
    "TextGenerator",
    "UNKNOWN_LABEL",
    "default_generator",
]
