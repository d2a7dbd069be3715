"""
Density-based clustering adapter backed by the hdbscan library.

The number of clusters is inferred from the data and sparse points are left
unassigned (label -1). Both counts are recomputed from the emitted labels on
every fit_predict call.
"""

import logging
from typing import Any

import numpy as np

from topicscope.clustering.base import OUTLIER_LABEL, ClusteringAdapter, UnsupportedOperationError

logger = logging.getLogger(__name__)


class DensityClusteringAdapter(ClusteringAdapter):
    """
    HDBSCAN adapter.

    Usage:
        >>> adapter = DensityClusteringAdapter(min_cluster_size=5, min_samples=3)
        >>> labels = adapter.fit_predict(embeddings)
        >>> adapter.n_clusters, adapter.n_noise_points
        (3, 4)

    Note:
        hdbscan is imported lazily inside _create_clusterer() to avoid slow
        module-level imports (numba compilation).
    """

    def __init__(
        self,
        min_cluster_size: int = 5,
        min_samples: int = 3,
        metric: str = "euclidean",
        cluster_selection_method: str = "eom",
        prediction_data: bool = True,
    ):
        """
        Initialize the adapter.

        Args:
            min_cluster_size: Smallest group HDBSCAN will call a cluster.
            min_samples: Core-point neighbourhood size. Lower = more clusters.
            metric: Distance metric passed to HDBSCAN.
            cluster_selection_method: "eom" (variable sizes) or "leaf".
            prediction_data: Keep the data needed for approximate_predict().
        """
        super().__init__()
        self.min_cluster_size = min_cluster_size
        self.min_samples = min_samples
        self.metric = metric
        self.cluster_selection_method = cluster_selection_method
        self.prediction_data = prediction_data
        self._clusterer: Any = None

    @property
    def clusterer(self) -> Any:
        """Access the underlying HDBSCAN object (None before fit)."""
        return self._clusterer

    def fit_predict(self, embeddings: np.ndarray) -> np.ndarray:
        """
        Cluster the embeddings.

        When there are fewer rows than min_cluster_size no cluster can form,
        so every row is labelled -1 without calling the backend.

        Returns:
            Integer label per row; -1 marks noise.
        """
        embeddings = np.asarray(embeddings, dtype=float)
        n_samples = embeddings.shape[0]

        if n_samples < self.min_cluster_size:
            logger.debug(
                f"{n_samples} samples below min_cluster_size={self.min_cluster_size}, "
                f"labelling all as noise"
            )
            self._clusterer = None
            labels = np.full(n_samples, OUTLIER_LABEL, dtype=int)
        else:
            self._clusterer = self._create_clusterer(n_samples)
            labels = np.asarray(self._clusterer.fit_predict(embeddings), dtype=int)

        self._update_stats(labels)
        return labels

    def fit(self, embeddings: np.ndarray) -> "DensityClusteringAdapter":
        self.fit_predict(embeddings)
        return self

    def predict(self, embeddings: np.ndarray) -> np.ndarray:
        """
        Label new points.

        HDBSCAN has no true out-of-sample predict; this delegates to
        approximate_predict() when prediction data is available.

        Raises:
            UnsupportedOperationError: If the fitted model cannot predict.
        """
        if not self.supports_approximate_predict:
            raise UnsupportedOperationError("HDBSCAN does not support prediction on new data")
        return self.approximate_predict(embeddings)

    @property
    def supports_approximate_predict(self) -> bool:
        return (
            self._clusterer is not None
            and self.prediction_data
            and getattr(self._clusterer, "prediction_data_", None) is not None
        )

    def approximate_predict(self, embeddings: np.ndarray) -> np.ndarray:
        """Assign new points to existing clusters (-1 when none is close)."""
        if not self.supports_approximate_predict:
            return super().approximate_predict(embeddings)

        import hdbscan

        labels, _strengths = hdbscan.approximate_predict(
            self._clusterer, np.asarray(embeddings, dtype=float)
        )
        return np.asarray(labels, dtype=int)

    def _create_clusterer(self, n_samples: int) -> Any:
        """
        Create a configured HDBSCAN instance.

        min_samples is capped at n_samples - 1 so small inputs stay valid
        for the neighbour queries.
        """
        from hdbscan import HDBSCAN

        return HDBSCAN(
            min_cluster_size=self.min_cluster_size,
            min_samples=max(1, min(self.min_samples, n_samples - 1)),
            metric=self.metric,
            cluster_selection_method=self.cluster_selection_method,
            prediction_data=self.prediction_data,
        )

    def _update_stats(self, labels: np.ndarray) -> None:
        self._n_noise_points = int(np.sum(labels == OUTLIER_LABEL))
        self._n_clusters = len({int(label) for label in labels if label != OUTLIER_LABEL})
