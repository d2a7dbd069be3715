"""
topicscope: topic discovery over precomputed document embeddings.

Clusters embeddings, extracts distinctive terms with c-TF-IDF and labels
each topic, optionally with a language model.

Usage:
    >>> import topicscope
    >>> topics = topicscope.extract(embeddings, documents, clustering_method="kmeans", k=3)
"""

from typing import Any, Sequence

import numpy as np

from topicscope.engine import (
    ClusteringMethod,
    EngineConfig,
    LabelingMethod,
    ModelFormatError,
    ModelSerializer,
    NotFittedError,
    TopicEngine,
)
from topicscope.topics import Topic

__version__ = "0.1.0"


def extract(
    embeddings: Sequence[Sequence[float]] | np.ndarray,
    documents: Sequence[str],
    **options: Any,
) -> list[Topic]:
    """
    Fit a one-off engine and return its topics.

    Args:
        embeddings: One vector per document.
        documents: Document texts.
        **options: EngineConfig fields, e.g. clustering_method="kmeans", k=3.
    """
    engine = TopicEngine(EngineConfig(**options))
    return engine.fit(embeddings, documents)


__all__ = [
    "ClusteringMethod",
    "EngineConfig",
    "LabelingMethod",
    "ModelFormatError",
    "ModelSerializer",
    "NotFittedError",
    "Topic",
    "TopicEngine",
    "extract",
]
