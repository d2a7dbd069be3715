"""
Partition-based clustering adapter backed by scikit-learn's KMeans.

Every row is assigned to one of exactly k clusters; there is no noise label.
"""

import logging
from typing import Any

import numpy as np

from topicscope.clustering.base import ClusteringAdapter

logger = logging.getLogger(__name__)


class PartitionClusteringAdapter(ClusteringAdapter):
    """
    K-means adapter with a fixed cluster count.

    Usage:
        >>> adapter = PartitionClusteringAdapter(k=3, random_seed=42)
        >>> labels = adapter.fit_predict(embeddings)
        >>> adapter.n_clusters, adapter.n_noise_points
        (3, 0)
    """

    def __init__(self, k: int = 5, random_seed: int | None = None, n_init: int = 10):
        """
        Initialize the adapter.

        Args:
            k: Number of clusters.
            random_seed: Seed for reproducible centroid initialisation.
            n_init: Number of k-means restarts; the best inertia wins.
        """
        super().__init__()
        if k < 1:
            raise ValueError(f"k must be >= 1, got {k}")
        self.k = k
        self.random_seed = random_seed
        self.n_init = n_init
        self._clusterer: Any = None

    @property
    def clusterer(self) -> Any:
        """Access the underlying KMeans object (None before fit)."""
        return self._clusterer

    @property
    def cluster_centers(self) -> np.ndarray | None:
        """Fitted cluster centres, shape (k, n_features)."""
        if self._clusterer is None:
            return None
        return self._clusterer.cluster_centers_

    def fit_predict(self, embeddings: np.ndarray) -> np.ndarray:
        """
        Partition the embeddings into k clusters.

        Raises:
            ValueError: If there are fewer rows than k.
        """
        embeddings = self._check_input(embeddings)
        self._clusterer = self._create_clusterer()
        labels = np.asarray(self._clusterer.fit_predict(embeddings), dtype=int)
        self._n_clusters = self.k
        self._n_noise_points = 0
        return labels

    def fit(self, embeddings: np.ndarray) -> "PartitionClusteringAdapter":
        embeddings = self._check_input(embeddings)
        self._clusterer = self._create_clusterer()
        self._clusterer.fit(embeddings)
        self._n_clusters = self.k
        self._n_noise_points = 0
        return self

    def predict(self, embeddings: np.ndarray) -> np.ndarray:
        """Assign each row to its nearest fitted centre."""
        if self._clusterer is None:
            raise RuntimeError("PartitionClusteringAdapter must be fit before predict")
        return np.asarray(self._clusterer.predict(np.asarray(embeddings, dtype=float)), dtype=int)

    def _check_input(self, embeddings: np.ndarray) -> np.ndarray:
        embeddings = np.asarray(embeddings, dtype=float)
        if embeddings.shape[0] < self.k:
            raise ValueError(
                f"k-means needs at least k={self.k} documents, got {embeddings.shape[0]}"
            )
        return embeddings

    def _create_clusterer(self) -> Any:
        """Create a configured KMeans instance (sklearn imported lazily)."""
        from sklearn.cluster import KMeans

        return KMeans(n_clusters=self.k, random_state=self.random_seed, n_init=self.n_init)
