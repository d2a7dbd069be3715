"""
Class-based TF-IDF (c-TF-IDF) term extraction.

Scores each term by how often it occurs inside one topic's documents,
weighted by how rare it is across the whole corpus:

    score(term) = tf_topic(term) * ln(N / df(term))

where tf is the summed occurrence count over the topic's documents, df is the
number of corpus documents containing the term at least once and N is the
corpus size. Terms missing from the corpus table get df = 1.
"""

import logging
import math
import re
from collections import Counter
from collections.abc import Iterable, Mapping, Sequence

from topicscope.extraction.config import TermExtractorConfig

logger = logging.getLogger(__name__)

_TOKEN_SPLIT = re.compile(r"\W+")


class TermExtractor:
    """
    Extracts distinctive vocabulary for a topic using c-TF-IDF.

    Usage:
        >>> extractor = TermExtractor()
        >>> extractor.extract_distinctive_terms(
        ...     topic_docs=["Ruby on Rails apps", "Ruby gems"],
        ...     all_docs=["Ruby on Rails apps", "Ruby gems", "Python apps"],
        ...     top_n=2,
        ... )
        ['rails', 'gems']

    The corpus document-frequency table can be computed once with
    compute_document_frequencies() and passed to every per-topic call.
    """

    def __init__(self, config: TermExtractorConfig | None = None):
        """
        Initialize the extractor.

        Args:
            config: Tokenizer bounds and stop words. If None, uses default config.
        """
        self.config = config or TermExtractorConfig()

    def tokenize(self, text: str) -> list[str]:
        """Lowercase, split on non-word runs and keep valid tokens in order."""
        return [word for word in _TOKEN_SPLIT.split(text.lower()) if self._is_valid(word)]

    def _is_valid(self, word: str) -> bool:
        return (
            self.config.min_word_length <= len(word) <= self.config.max_word_length
            and word not in self.config.stop_words
            and not word.isdigit()
        )

    def count_terms(self, documents: Iterable[str]) -> Counter[str]:
        """Summed term counts over documents, in first-encounter order."""
        counts: Counter[str] = Counter()
        for doc in documents:
            counts.update(self.tokenize(doc))
        return counts

    def compute_document_frequencies(self, documents: Iterable[str]) -> Counter[str]:
        """Number of documents containing each term at least once."""
        frequencies: Counter[str] = Counter()
        for doc in documents:
            frequencies.update(set(self.tokenize(doc)))
        return frequencies

    def score_terms(
        self,
        topic_docs: Sequence[str],
        all_docs: Sequence[str],
        top_n: int | None = None,
        doc_frequencies: Mapping[str, int] | None = None,
    ) -> list[tuple[str, float]]:
        """
        Score topic terms with c-TF-IDF.

        Args:
            topic_docs: Documents belonging to the topic.
            all_docs: The full corpus the topic was drawn from.
            top_n: Number of (term, score) pairs to return. Defaults to config.top_n.
            doc_frequencies: Precomputed corpus table from compute_document_frequencies().

        Returns:
            (term, score) pairs in descending score order. Equal scores keep the
            order in which terms were first seen in topic_docs.
        """
        top_n = self.config.top_n if top_n is None else top_n
        if not topic_docs or not all_docs or top_n <= 0:
            return []

        term_counts = self.count_terms(topic_docs)
        if doc_frequencies is None:
            doc_frequencies = self.compute_document_frequencies(all_docs)

        total_docs = float(len(all_docs))
        scores = [
            (term, tf * math.log(total_docs / (doc_frequencies.get(term) or 1)))
            for term, tf in term_counts.items()
        ]

        # sorted() is stable, so ties keep encounter order
        scores = sorted(scores, key=lambda pair: pair[1], reverse=True)
        return scores[:top_n]

    def extract_distinctive_terms(
        self,
        topic_docs: Sequence[str],
        all_docs: Sequence[str],
        top_n: int | None = None,
        doc_frequencies: Mapping[str, int] | None = None,
    ) -> list[str]:
        """
        Return the top_n most distinctive terms of a topic, best first.

        Args:
            topic_docs: Documents belonging to the topic.
            all_docs: The full corpus the topic was drawn from.
            top_n: Number of terms to return. Defaults to config.top_n.
            doc_frequencies: Precomputed corpus table from compute_document_frequencies().

        Returns:
            Terms ordered most to least distinctive. Empty for an empty topic.
        """
        return [
            term
            for term, _ in self.score_terms(
                topic_docs, all_docs, top_n=top_n, doc_frequencies=doc_frequencies
            )
        ]
