"""Shared fixtures for engine tests."""

from unittest.mock import MagicMock

import numpy as np
import pytest

from topicscope.engine import EngineConfig, TopicEngine


@pytest.fixture
def kmeans_config():
    """k-means with term-based labels; 16-dim fixtures skip reduction."""
    return EngineConfig(
        clustering_method="kmeans",
        k=3,
        random_seed=42,
        labeling_method="term_based",
    )


@pytest.fixture
def kmeans_engine(kmeans_config):
    return TopicEngine(kmeans_config)


@pytest.fixture
def fitted_engine(kmeans_engine, sample_embeddings, sample_documents):
    kmeans_engine.fit(sample_embeddings, sample_documents)
    return kmeans_engine


@pytest.fixture
def mock_adapter(group_labels):
    """Clustering adapter stand-in labelling the three sample groups 0/1/2."""
    adapter = MagicMock()
    adapter.fit_predict.return_value = group_labels.copy()
    adapter.supports_approximate_predict = False
    return adapter


@pytest.fixture
def density_labels():
    """Two clusters plus outliers at positions 4, 9 and 14."""
    return np.array([0, 0, 0, 0, -1, 1, 1, 1, 1, -1, 1, 1, 0, 0, -1])
