"""Shared fixtures for labeling tests."""

import json
from unittest.mock import MagicMock

import numpy as np
import pytest

from topicscope.labeling import LabelingConfig
from topicscope.topics import Topic


@pytest.fixture
def labeling_config():
    """Config with no API keys so nothing reaches a real backend."""
    return LabelingConfig(openai_api_key=None, anthropic_api_key=None)


@pytest.fixture
def ml_topic():
    """Topic about machine learning with embeddings for representative docs."""
    return Topic(
        id=3,
        document_indices=[0, 1, 2, 3],
        documents=[
            "Neural networks learn layered representations",
            "Deep learning models need large training sets",
            "Machine learning pipelines in production",
            "Gradient descent tunes network weights",
        ],
        embeddings=np.array([[0.0, 1.0], [0.1, 0.9], [5.0, 5.0], [0.2, 1.1]]),
        terms=["machine", "learning", "neural", "network", "deep"],
    )


@pytest.fixture
def llm_response():
    return json.dumps(
        {
            "label": "Deep Learning Research",
            "description": "Documents about training neural networks.",
            "themes": ["neural networks", "training"],
            "confidence": 0.9,
        }
    )


@pytest.fixture
def mock_provider(llm_response):
    """Text generator stand-in returning a well-formed JSON label."""
    provider = MagicMock()
    provider.available = True
    provider.generate.return_value = llm_response
    return provider
