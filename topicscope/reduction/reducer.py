"""
Dimensionality reduction ahead of clustering.

Wraps umap-learn with the safeguards a small or dirty batch needs:
- rows holding NaN/Infinity or non-numeric entries are dropped before UMAP
  and re-inserted afterwards as zero vectors, so output order matches input
- n_components and n_neighbors are capped by the number of valid rows
- a missing umap install or any UMAP failure is logged and the original
  embeddings are returned unchanged

Only "every row is invalid" is raised, since that is bad input rather than
a backend fault.
"""

import logging
from collections import Counter
from collections.abc import Sequence
from typing import Any

import numpy as np

from topicscope.reduction.config import ReductionConfig

logger = logging.getLogger(__name__)


class NoValidEmbeddingsError(ValueError):
    """Raised when no embedding is usable for dimensionality reduction."""


class DimensionalityReducer:
    """
    UMAP-based reducer with graceful degradation.

    Usage:
        >>> reducer = DimensionalityReducer(n_components=10)
        >>> reduced = reducer.reduce(embeddings)   # (n, 768) -> (n, 10)

    Note:
        umap is imported lazily inside _create_model() because importing it
        triggers numba compilation (~seconds).
    """

    def __init__(self, n_components: int | None = None, config: ReductionConfig | None = None):
        """
        Initialize the reducer.

        Args:
            n_components: Target dimensionality. Overrides config.n_components.
            config: UMAP parameters. If None, uses default config.
        """
        self.config = config or ReductionConfig()
        self.n_components = n_components if n_components is not None else self.config.n_components

    def reduce(self, embeddings: Sequence[Sequence[float]] | np.ndarray) -> Any:
        """
        Reduce embeddings to at most n_components dimensions.

        Args:
            embeddings: Row vectors, all the same length.

        Returns:
            Reduced (n, d) array in input order, or the input itself when it is
            empty, already small enough, or reduction failed.

        Raises:
            NoValidEmbeddingsError: If every row contains invalid values.
        """
        if len(embeddings) == 0:
            return embeddings
        if embedding_width(embeddings) <= self.n_components:
            return embeddings

        matrix, invalid_indices = split_embeddings(embeddings)
        if len(invalid_indices) == len(embeddings):
            raise NoValidEmbeddingsError(
                "No valid embeddings for dimensionality reduction. "
                "All embeddings contain invalid values (NaN, Infinity, or non-numeric)."
            )
        if invalid_indices:
            logger.warning(
                f"{len(invalid_indices)} embeddings with invalid values removed before reduction"
            )

        invalid = set(invalid_indices)
        valid_positions = [i for i in range(len(embeddings)) if i not in invalid]
        n_samples = len(valid_positions)
        n_components = max(1, min(self.n_components, n_samples - 1, self.config.max_components))
        n_neighbors = max(1, min(self.config.n_neighbors, n_samples - 1))
        if n_components != self.n_components:
            logger.info(
                f"Adjusted n_components to {n_components} (was {self.n_components}) "
                f"for {n_samples} samples"
            )

        try:
            model = self._create_model(n_components=n_components, n_neighbors=n_neighbors)
            reduced = np.asarray(model.fit_transform(matrix[valid_positions]), dtype=float)
        except ImportError:
            logger.warning("Dimensionality reduction requires umap-learn. Using original embeddings.")
            return embeddings
        except Exception as e:
            logger.warning(f"Dimensionality reduction failed: {e}. Using original embeddings.")
            return embeddings

        if not invalid_indices:
            return reduced

        # Invalid rows become origin points so they fall out as noise
        full = np.zeros((len(embeddings), reduced.shape[1]), dtype=float)
        full[valid_positions] = reduced
        return full

    def _create_model(self, n_components: int, n_neighbors: int) -> Any:
        """Create a configured UMAP instance."""
        from umap import UMAP

        return UMAP(
            n_components=n_components,
            n_neighbors=n_neighbors,
            min_dist=self.config.min_dist,
            metric=self.config.metric,
            random_state=self.config.random_state,
        )


def embedding_width(embeddings: Sequence[Sequence[float]] | np.ndarray) -> int:
    """Most common row length, ignoring rows that have none."""
    if isinstance(embeddings, np.ndarray) and embeddings.ndim == 2:
        return int(embeddings.shape[1])
    widths: Counter[int] = Counter()
    for row in embeddings:
        try:
            widths[len(row)] += 1
        except TypeError:
            continue
    if not widths:
        return 0
    return widths.most_common(1)[0][0]


def split_embeddings(
    embeddings: Sequence[Sequence[float]] | np.ndarray,
) -> tuple[np.ndarray, list[int]]:
    """
    Parse rows into a float matrix, zeroing the ones that are unusable.

    A row is unusable when it is non-numeric, contains NaN/Infinity, or does
    not have the common width.

    Returns:
        (matrix, invalid_indices): an (n, width) float array whose invalid
        rows are all zeros, and the positions of those rows.
    """
    width = embedding_width(embeddings)
    matrix = np.zeros((len(embeddings), width), dtype=float)
    invalid_indices: list[int] = []

    for idx, row in enumerate(embeddings):
        try:
            vector = np.asarray(row, dtype=float)
        except (TypeError, ValueError):
            invalid_indices.append(idx)
            continue
        if vector.shape != (width,) or not np.all(np.isfinite(vector)):
            invalid_indices.append(idx)
            continue
        matrix[idx] = vector

    return matrix, invalid_indices
