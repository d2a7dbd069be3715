"""
Topic engine: the fit / transform pipeline.

Discovers topics in a document collection from precomputed embeddings and
gives each topic distinctive terms, a label and quality scores.

Architecture:
- Sync fit() running reduce -> cluster -> group -> c-TF-IDF -> label
- Collaborators (clustering adapter, reducer, term extractor, labeler) are
  built from EngineConfig or injected for testing
- Heavy backends (hdbscan, scikit-learn, umap-learn, LLM SDKs) are imported
  lazily by the collaborators themselves
- Reduction and LLM failures degrade to raw embeddings and term-based
  labels; configuration, data and state errors propagate
- When reduction runs, unusable vectors (non-numeric, NaN, wrong width)
  are clustered as origin points and then forced to outliers
"""

import logging
import time
from collections import defaultdict
from pathlib import Path
from typing import Any, Sequence

import numpy as np

from topicscope.clustering import (
    OUTLIER_LABEL,
    ClusteringAdapter,
    DensityClusteringAdapter,
    PartitionClusteringAdapter,
)
from topicscope.engine.config import ClusteringMethod, EngineConfig, LabelingMethod
from topicscope.engine.serializer import ModelSerializer
from topicscope.extraction import TermExtractor
from topicscope.labeling import (
    BaseLabeler,
    HybridLabeler,
    LabelingConfig,
    LLMLabeler,
    TermBasedLabeler,
    TextGenerator,
)
from topicscope.reduction import (
    DimensionalityReducer,
    NoValidEmbeddingsError,
    embedding_width,
    split_embeddings,
)
from topicscope.topics import Topic, metrics

logger = logging.getLogger(__name__)


class NotFittedError(RuntimeError):
    """Raised when an operation needs a fitted engine."""


class TopicEngine:
    """
    Topic modeling engine.

    Each fit() call replaces all previous state. After fit (or load) the
    engine can assign new embeddings to its topics with transform().

    Usage:
        >>> engine = TopicEngine(EngineConfig(clustering_method="kmeans", k=3))
        >>> topics = engine.fit(embeddings, documents)
        >>> for topic in topics:
        ...     print(f"{topic.label}: {topic.size} docs")
        Gpu & Demand: 12 docs
        Rate & Inflation: 9 docs
        Battery & Lithium: 9 docs
        >>> engine.transform(new_embeddings)
        array([0, 2])
    """

    def __init__(
        self,
        config: EngineConfig | None = None,
        *,
        llm_provider: TextGenerator | None = None,
        labeling_config: LabelingConfig | None = None,
        clustering_adapter: ClusteringAdapter | None = None,
        reducer: DimensionalityReducer | None = None,
        term_extractor: TermExtractor | None = None,
        labeler: BaseLabeler | None = None,
    ):
        """
        Initialize the engine.

        Args:
            config: Engine configuration. If None, uses default config.
            llm_provider: Text generator for the LLM and hybrid labelers.
            labeling_config: Labeling configuration for those labelers.
            clustering_adapter: Overrides the adapter built from config.
            reducer: Overrides the reducer built from config.
            term_extractor: Overrides the default term extractor.
            labeler: Overrides the labeler built from config.
        """
        self.config = config or EngineConfig()
        self.clustering_adapter = clustering_adapter or self._create_clustering_adapter()
        self.reducer = reducer or DimensionalityReducer(n_components=self.config.n_components)
        self.term_extractor = term_extractor or TermExtractor()
        self.labeler = labeler or self._create_labeler(llm_provider, labeling_config)

        self._topics: list[Topic] = []
        self._documents: list[str] = []
        self._cluster_labels: np.ndarray = np.empty(0, dtype=int)
        self._reduction_applied = False
        self._fitted = False

    @property
    def is_fitted(self) -> bool:
        """Whether fit() or load() has completed."""
        return self._fitted

    @property
    def topics(self) -> list[Topic]:
        """Return a copy of the topic list, ordered by id."""
        return list(self._topics)

    @property
    def outlier_indices(self) -> list[int]:
        """Positions of documents labelled as outliers in the last fit."""
        return [int(i) for i in np.flatnonzero(self._cluster_labels == OUTLIER_LABEL)]

    def fit(
        self,
        embeddings: Sequence[Sequence[float]] | np.ndarray,
        documents: Sequence[str],
        metadata: Sequence[dict[str, Any]] | None = None,
    ) -> list[Topic]:
        """
        Discover topics in a document collection.

        Args:
            embeddings: One vector per document, all the same length.
            documents: Document texts.
            metadata: Optional mapping per document.

        Returns:
            Topics ordered by id. Outlier documents belong to no topic.

        Raises:
            ValueError: If input lengths don't match, or embeddings are ragged
                or non-numeric and no reduction runs.
            NoValidEmbeddingsError: If reduction runs and no vector is usable.
        """
        n_docs = len(documents)
        if len(embeddings) != n_docs:
            raise ValueError(
                f"embeddings ({len(embeddings)}) and documents ({n_docs}) "
                f"must have the same length"
            )
        if metadata is not None and len(metadata) != n_docs:
            raise ValueError(
                f"metadata ({len(metadata)}) and documents ({n_docs}) must have the same length"
            )

        documents = list(documents)
        metadata = list(metadata) if metadata is not None else [{} for _ in documents]

        if n_docs == 0:
            logger.info("Empty input, returning no topics")
            self._reset(documents, np.empty(0, dtype=int), reduction_applied=False)
            return []

        start_time = time.monotonic()
        self._progress(f"Starting topic extraction for {n_docs} documents")

        invalid_rows: list[int] = []
        reduction_applied = False
        if (
            self.config.reduce_dimensions
            and embedding_width(embeddings) > self.config.n_components
        ):
            vectors, invalid_rows = split_embeddings(embeddings)
            if len(invalid_rows) == n_docs:
                raise NoValidEmbeddingsError(
                    "No valid embeddings to cluster. "
                    "All embeddings contain invalid values (NaN, Infinity, or non-numeric)."
                )
            self._progress(
                f"Reducing dimensions from {vectors.shape[1]} to {self.config.n_components}"
            )
            reduced = self.reducer.reduce(embeddings)
            reduction_applied = reduced is not embeddings
            working = np.asarray(reduced, dtype=float) if reduction_applied else vectors
        else:
            vectors = self._as_matrix(embeddings)
            working = vectors

        self._progress(f"Clustering {len(working)} documents")
        labels = np.asarray(self.clustering_adapter.fit_predict(working), dtype=int)
        if invalid_rows:
            logger.warning(f"{len(invalid_rows)} documents with invalid embeddings marked as outliers")
            labels = labels.copy()
            labels[invalid_rows] = OUTLIER_LABEL

        self._progress("Building topics from clusters")
        topics = self._build_topics(labels, vectors, documents, metadata)

        self._progress("Extracting distinctive terms")
        self._extract_terms(topics, documents)

        self._progress("Generating topic labels")
        self._label_topics(topics)

        self._reset(documents, labels, reduction_applied)
        self._topics = topics

        elapsed = time.monotonic() - start_time
        self._progress(
            f"Found {len(topics)} topics (plus {len(self.outlier_indices)} outliers), "
            f"{elapsed:.2f}s elapsed"
        )
        return list(topics)

    def transform(self, embeddings: Sequence[Sequence[float]] | np.ndarray) -> np.ndarray:
        """
        Assign new embeddings to the fitted topics.

        Uses the clustering backend's approximate prediction when the model
        was clustered on raw embeddings and the backend supports it. Otherwise
        each vector goes to the topic with the nearest centroid (ties resolved
        by lowest topic id); with ``outlier_distance_threshold`` set, vectors
        farther than that from every centroid get -1.

        Returns:
            Integer topic id per input vector.

        Raises:
            NotFittedError: If called before fit() or load().
            ValueError: If vector width differs from the fitted centroids.
        """
        if not self._fitted:
            raise NotFittedError("Must call fit before transform")

        if len(embeddings) == 0:
            return np.empty(0, dtype=int)
        vectors = self._as_matrix(embeddings)

        if not self._topics:
            return np.full(len(vectors), OUTLIER_LABEL, dtype=int)

        if not self._reduction_applied and self.clustering_adapter.supports_approximate_predict:
            return np.asarray(self.clustering_adapter.approximate_predict(vectors), dtype=int)

        return self._assign_to_nearest_topic(vectors)

    def get_topic(self, topic_id: int) -> Topic | None:
        """Look up a topic by id."""
        for topic in self._topics:
            if topic.id == topic_id:
                return topic
        return None

    def outliers(self) -> list[str]:
        """Documents labelled as outliers in the last fit (empty if never fit)."""
        return [self._documents[i] for i in self.outlier_indices]

    def get_stats(self) -> dict[str, Any]:
        """Summary of the fitted model."""
        n_documents = len(self._documents)
        return {
            "is_fitted": self._fitted,
            "clustering_method": self.config.clustering_method.value,
            "labeling_method": self.config.labeling_method.value,
            "n_topics": len(self._topics),
            "n_documents": n_documents,
            "n_outliers": len(self.outlier_indices),
            "reduction_applied": self._reduction_applied,
            "coverage": metrics.compute_coverage(self._topics, n_documents),
            "diversity": metrics.compute_diversity(self._topics),
            "topic_sizes": {topic.id: topic.size for topic in self._topics},
        }

    def save(self, path: str | Path) -> Path:
        """Write the fitted model to a JSON file."""
        if not self._fitted:
            raise NotFittedError("Must call fit before save")
        return ModelSerializer.save(self, path)

    @classmethod
    def load(cls, path: str | Path, **kwargs: Any) -> "TopicEngine":
        """
        Load a model written by save().

        The result can transform() and be inspected, but holds no documents.

        Args:
            path: Model file.
            **kwargs: Collaborator overrides passed to the constructor.

        Raises:
            FileNotFoundError: If the file does not exist.
            ModelFormatError: If the file is malformed.
        """
        config, topics = ModelSerializer.read(path)
        engine = cls(config, **kwargs)
        engine._topics = sorted(topics, key=lambda t: t.id)
        engine._fitted = True
        logger.info(f"Loaded {len(topics)} topics from {path}")
        return engine

    def _reset(self, documents: list[str], labels: np.ndarray, reduction_applied: bool) -> None:
        self._topics = []
        self._documents = documents
        self._cluster_labels = labels
        self._reduction_applied = reduction_applied
        self._fitted = True

    def _build_topics(
        self,
        labels: np.ndarray,
        vectors: np.ndarray,
        documents: list[str],
        metadata: list[dict[str, Any]],
    ) -> list[Topic]:
        """Group document positions by cluster label, skipping outliers."""
        clusters: dict[int, list[int]] = defaultdict(list)
        for doc_idx, label in enumerate(labels):
            if label == OUTLIER_LABEL:
                continue
            clusters[int(label)].append(doc_idx)

        return [
            Topic(
                id=cluster_id,
                document_indices=indices,
                documents=[documents[i] for i in indices],
                embeddings=vectors[indices],
                metadata=[metadata[i] for i in indices],
            )
            for cluster_id, indices in sorted(clusters.items())
        ]

    def _extract_terms(self, topics: list[Topic], documents: list[str]) -> None:
        """Fill terms and distinctiveness; the corpus table is built once."""
        doc_frequencies = self.term_extractor.compute_document_frequencies(documents)
        for topic in topics:
            topic.terms = self.term_extractor.extract_distinctive_terms(
                topic.documents,
                documents,
                top_n=self.config.top_n_terms,
                doc_frequencies=doc_frequencies,
            )

        for topic in topics:
            others = [other.terms for other in topics if other.id != topic.id]
            topic.distinctiveness = metrics.compute_distinctiveness(topic.terms, others)

    def _label_topics(self, topics: list[Topic]) -> None:
        for topic in topics:
            result = self.labeler.describe(topic)
            topic.label = result.label
            topic.description = result.description
            logger.debug(f"Topic {topic.id} labelled {result.label!r} ({result.source})")

    def _assign_to_nearest_topic(self, vectors: np.ndarray) -> np.ndarray:
        """Nearest-centroid assignment in the original embedding space."""
        topics = [t for t in self._topics if t.centroid.size]
        if not topics:
            return np.full(len(vectors), OUTLIER_LABEL, dtype=int)

        centroids = np.vstack([t.centroid for t in topics])
        if vectors.shape[1] != centroids.shape[1]:
            raise ValueError(
                f"embeddings have {vectors.shape[1]} dimensions, "
                f"topic centroids have {centroids.shape[1]}"
            )

        distances = np.linalg.norm(vectors[:, np.newaxis, :] - centroids[np.newaxis, :, :], axis=2)
        nearest = np.argmin(distances, axis=1)
        topic_ids = np.array([t.id for t in topics], dtype=int)
        assigned = topic_ids[nearest]

        threshold = self.config.outlier_distance_threshold
        if threshold is not None:
            min_distances = distances[np.arange(len(vectors)), nearest]
            assigned = np.where(min_distances > threshold, OUTLIER_LABEL, assigned)
        return assigned

    def _create_clustering_adapter(self) -> ClusteringAdapter:
        if self.config.clustering_method == ClusteringMethod.KMEANS:
            return PartitionClusteringAdapter(
                k=self.config.effective_k, random_seed=self.config.random_seed
            )
        return DensityClusteringAdapter(
            min_cluster_size=self.config.min_cluster_size,
            min_samples=self.config.min_samples,
        )

    def _create_labeler(
        self,
        provider: TextGenerator | None,
        labeling_config: LabelingConfig | None,
    ) -> BaseLabeler:
        method = self.config.labeling_method
        if method == LabelingMethod.LLM_BASED:
            return LLMLabeler(provider=provider, config=labeling_config)
        if method == LabelingMethod.HYBRID:
            return HybridLabeler(provider=provider, config=labeling_config)
        return TermBasedLabeler()

    @staticmethod
    def _as_matrix(embeddings: Sequence[Sequence[float]] | np.ndarray) -> np.ndarray:
        try:
            vectors = np.asarray(embeddings, dtype=float)
        except (TypeError, ValueError) as e:
            raise ValueError(f"embeddings must be a numeric matrix: {e}") from e
        if vectors.ndim != 2:
            raise ValueError(f"embeddings must be 2-dimensional, got shape {vectors.shape}")
        return vectors

    def _progress(self, message: str) -> None:
        level = logging.INFO if self.config.verbose else logging.DEBUG
        logger.log(level, message)
