"""Quality metrics for discovered topics.

All functions are stateless and side-effect-free. Topic arguments are
duck-typed: anything with ``.terms`` (list of strings) and ``.size`` works.

- coherence: do a topic's top terms actually co-occur in its documents?
- distinctiveness: how many of its top terms are unique to the topic?
- diversity: how much vocabulary overlap is there across all topics?
- coverage: what share of the corpus landed in some topic?
"""

import itertools
import math
import re
from collections.abc import Sequence
from typing import Any

_TOKEN_SPLIT = re.compile(r"\W+")


def _npmi(joint: int, count_a: int, count_b: int, total: int) -> float:
    """Normalized pointwise mutual information from document counts, in [-1, 1]."""
    if joint == 0 or count_a == 0 or count_b == 0:
        return -1.0
    p_joint = joint / total
    if p_joint >= 1.0:
        return 1.0
    pmi = math.log(p_joint / ((count_a / total) * (count_b / total)))
    return max(-1.0, min(1.0, pmi / -math.log(p_joint)))


def compute_coherence(terms: Sequence[str], documents: Sequence[str], top_n: int = 10) -> float:
    """
    Document co-occurrence coherence of a topic's top terms.

    Averages NPMI over every pair of the top_n terms, counting co-occurrence
    at document level, and rescales the mean from [-1, 1] to [0, 1].

    Args:
        terms: Topic terms, most distinctive first.
        documents: The topic's documents.
        top_n: How many leading terms to score.

    Returns:
        Coherence in [0, 1]. 0.0 when fewer than two terms or no documents.
    """
    top_terms = list(dict.fromkeys(terms[:top_n]))
    if len(top_terms) < 2 or not documents:
        return 0.0

    doc_tokens = [set(_TOKEN_SPLIT.split(doc.lower())) for doc in documents]
    total = len(doc_tokens)
    counts = {term: sum(1 for tokens in doc_tokens if term in tokens) for term in top_terms}

    scores = []
    for term_a, term_b in itertools.combinations(top_terms, 2):
        joint = sum(1 for tokens in doc_tokens if term_a in tokens and term_b in tokens)
        scores.append(_npmi(joint, counts[term_a], counts[term_b], total))

    mean = sum(scores) / len(scores)
    return (mean + 1.0) / 2.0


def compute_distinctiveness(
    terms: Sequence[str],
    other_terms: Sequence[Sequence[str]],
    top_n: int = 10,
) -> float:
    """
    Share of a topic's top terms that no other topic has among its top terms.

    Args:
        terms: This topic's terms.
        other_terms: Term lists of every other topic.
        top_n: How many leading terms to compare per topic.

    Returns:
        Value in [0, 1]; 0.0 for a topic without terms.
    """
    top_terms = list(dict.fromkeys(terms[:top_n]))
    if not top_terms:
        return 0.0
    shared = {term for other in other_terms for term in other[:top_n]}
    unique = sum(1 for term in top_terms if term not in shared)
    return unique / len(top_terms)


def compute_diversity(topics: Sequence[Any], top_n: int = 10) -> float:
    """
    Proportion of unique words among all topics' top terms.

    1.0 means no two topics share a top term; values near 0 mean the topics
    repeat each other's vocabulary.
    """
    all_terms = [term for topic in topics for term in topic.terms[:top_n]]
    if not all_terms:
        return 0.0
    return len(set(all_terms)) / len(all_terms)


def compute_coverage(topics: Sequence[Any], total_documents: int) -> float:
    """Fraction of the corpus assigned to any topic (outliers excluded)."""
    if total_documents <= 0:
        return 0.0
    assigned = sum(topic.size for topic in topics)
    return assigned / total_documents
