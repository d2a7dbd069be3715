"""Common interface for clustering backends.

Adapters wrap an external clustering library behind one contract:
fit_predict/fit/predict over an (n_samples, n_features) matrix, returning one
integer label per row in input order. Label -1 means "no cluster" and is only
ever produced by density-based adapters.
"""

from abc import ABC, abstractmethod

import numpy as np

OUTLIER_LABEL = -1


class UnsupportedOperationError(NotImplementedError):
    """Raised when a backend cannot perform the requested operation."""


class ClusteringAdapter(ABC):
    """
    Base class for clustering adapters.

    Subclasses set ``_n_clusters`` and ``_n_noise_points`` every time
    fit_predict runs so callers can inspect the most recent result.
    """

    def __init__(self) -> None:
        self._n_clusters = 0
        self._n_noise_points = 0

    @abstractmethod
    def fit_predict(self, embeddings: np.ndarray) -> np.ndarray:
        """Fit the backend and return one label per input row."""

    @abstractmethod
    def fit(self, embeddings: np.ndarray) -> "ClusteringAdapter":
        """Fit the backend without returning labels."""

    @abstractmethod
    def predict(self, embeddings: np.ndarray) -> np.ndarray:
        """Label new rows using previously fitted state."""

    @property
    def n_clusters(self) -> int:
        """Number of clusters found by the last fit_predict (excluding noise)."""
        return self._n_clusters

    @property
    def n_noise_points(self) -> int:
        """Number of rows labelled -1 by the last fit_predict."""
        return self._n_noise_points

    @property
    def supports_approximate_predict(self) -> bool:
        """Whether approximate_predict() can be called right now."""
        return False

    def approximate_predict(self, embeddings: np.ndarray) -> np.ndarray:
        """Assign new rows to fitted clusters without refitting."""
        raise UnsupportedOperationError(
            f"{type(self).__name__} does not support approximate prediction"
        )
