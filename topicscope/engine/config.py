"""
Topic engine configuration.

Provides Pydantic settings selecting the clustering backend, the labeling
strategy and the pipeline switches of a TopicEngine.

Parameter Tuning Guide:
    - min_cluster_size: Lower (3-5) = more granular topics, higher (15-50) =
      broader topics. Inputs smaller than this come out as all outliers.
    - min_samples: Lower = more clusters, higher = more conservative.
      Keep <= min_cluster_size.
    - k: Only used by k-means. Defaults to 5 when unset.
    - n_components: Target dimensions before clustering. Reduction only runs
      when the embeddings are wider than this.
    - outlier_distance_threshold: Leave unset to always assign new documents
      to the nearest topic. Set it to send far-away documents to -1 instead.
"""

from enum import Enum

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_K = 5


class ClusteringMethod(str, Enum):
    """Clustering backend selector."""

    HDBSCAN = "hdbscan"
    KMEANS = "kmeans"


class LabelingMethod(str, Enum):
    """Labeling strategy selector."""

    TERM_BASED = "term_based"
    LLM_BASED = "llm_based"
    HYBRID = "hybrid"


class EngineConfig(BaseSettings):
    """
    Configuration for the topic engine.

    All settings can be overridden via environment variables prefixed with TOPICS_.
    The config is frozen: a fitted engine always reports the settings it ran with.

    Example:
        TOPICS_CLUSTERING_METHOD=kmeans
        TOPICS_K=8
        TOPICS_LABELING_METHOD=term_based
    """

    model_config = SettingsConfigDict(
        env_prefix="TOPICS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    # Clustering
    clustering_method: ClusteringMethod = Field(
        default=ClusteringMethod.HDBSCAN,
        description="Clustering backend: hdbscan (density, emits outliers) or kmeans (partition)",
    )
    min_cluster_size: int = Field(
        default=5,
        ge=2,
        description="Minimum documents per HDBSCAN cluster",
    )
    min_samples: int = Field(
        default=3,
        ge=1,
        description="HDBSCAN core-point neighborhood size",
    )
    k: int | None = Field(
        default=None,
        ge=1,
        description="Number of k-means clusters (default 5)",
    )
    random_seed: int | None = Field(
        default=None,
        description="Seed for k-means initialisation",
    )

    # Dimensionality reduction
    reduce_dimensions: bool = Field(
        default=True,
        description="Run UMAP before clustering when embeddings are wider than n_components",
    )
    n_components: int = Field(
        default=50,
        ge=1,
        description="Target dimensions after reduction",
    )

    # Topic representation
    labeling_method: LabelingMethod = Field(
        default=LabelingMethod.HYBRID,
        description="Labeling strategy: term_based, llm_based or hybrid",
    )
    top_n_terms: int = Field(
        default=20,
        ge=1,
        le=200,
        description="Distinctive terms kept per topic",
    )

    # Assignment
    outlier_distance_threshold: float | None = Field(
        default=None,
        gt=0.0,
        description="Max centroid distance for transform(); farther documents get -1",
    )

    verbose: bool = Field(
        default=False,
        description="Log pipeline progress at INFO instead of DEBUG",
    )

    @property
    def effective_k(self) -> int:
        """Cluster count handed to k-means."""
        return self.k if self.k is not None else DEFAULT_K
