"""Pytest fixtures for topicscope tests."""

import numpy as np
import pytest

from topicscope.config.settings import Settings, get_settings


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch):
    """Keep API keys and overrides from the developer's shell out of tests."""
    for name in (
        "LABELING_OPENAI_API_KEY",
        "LABELING_ANTHROPIC_API_KEY",
        "TOPICS_CLUSTERING_METHOD",
        "TOPICS_LABELING_METHOD",
        "TOPICS_K",
    ):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def test_settings() -> Settings:
    """Settings configured for testing."""
    return Settings(environment="development", log_level="DEBUG")


@pytest.fixture
def sample_documents() -> list[str]:
    """15 texts in 3 thematic groups (5 each)."""
    return [
        # Group 0: GPUs (indices 0-4)
        "Nvidia announces next-generation GPU architecture for training",
        "New GPU accelerator delivers breakthrough training performance",
        "GPU computing power doubles with latest architecture release",
        "Nvidia GPU sales surge driven by datacenter demand",
        "GPU computing platform enables faster model training",
        # Group 1: Memory (indices 5-9)
        "HBM3E memory bandwidth reaches new highs for datacenter chips",
        "Samsung develops advanced memory bandwidth for accelerators",
        "Memory chip demand increases as bandwidth technology evolves",
        "Hynix memory production ramps up with higher bandwidth",
        "High bandwidth memory technology drives innovation",
        # Group 2: Manufacturing (indices 10-14)
        "TSMC expands chip manufacturing capacity in Arizona",
        "Semiconductor fabrication advances to smaller process nodes",
        "Intel foundry manufacturing services compete with TSMC",
        "Chip manufacturing yield improvements boost semiconductor output",
        "Advanced semiconductor manufacturing drives global supply",
    ]


@pytest.fixture
def sample_embeddings() -> np.ndarray:
    """
    15x16 synthetic embeddings with 3 well-separated groups.

    Rows 0-4, 5-9 and 10-14 sit close to three distinct centres, matching
    the grouping of sample_documents.
    """
    rng = np.random.RandomState(42)
    centers = np.eye(3, 16) * 10.0
    groups = [center + rng.randn(5, 16) * 0.1 for center in centers]
    return np.vstack(groups)


@pytest.fixture
def group_labels() -> np.ndarray:
    """True group of each sample row."""
    return np.repeat([0, 1, 2], 5)
