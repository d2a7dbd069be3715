"""
Distinctive-term extraction for topics.

Components:
- TermExtractorConfig: Tokenizer bounds, stop words and default term count
- TermExtractor: c-TF-IDF scoring of a topic's vocabulary against the corpus
"""

from topicscope.extraction.config import DEFAULT_STOP_WORDS, TermExtractorConfig
from topicscope.extraction.service import TermExtractor

__all__ = [
    "DEFAULT_STOP_WORDS",
    "TermExtractorConfig",
    "TermExtractor",
]
