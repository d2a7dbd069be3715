"""
JSON persistence for fitted topic models.

A model file holds the engine configuration and one summary per topic:

    {
      "version": 1,
      "config": {"clustering_method": "kmeans", "k": 3, ...},
      "topics": [{"id": 0, "label": "...", "terms": [...], "centroid": [...], ...}]
    }

Documents, embeddings and metadata are never written. Centroids are, so a
reloaded engine can still assign new embeddings with transform().
"""

import json
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from topicscope.engine.config import DEFAULT_K, ClusteringMethod, EngineConfig, LabelingMethod
from topicscope.topics.schemas import Topic

if TYPE_CHECKING:
    from topicscope.engine.service import TopicEngine

logger = logging.getLogger(__name__)

FORMAT_VERSION = 1


class ModelFormatError(ValueError):
    """Raised when a model file cannot be parsed or uses an unknown schema."""


class PersistedConfig(BaseModel):
    """Engine settings as written to disk."""

    model_config = ConfigDict(extra="ignore")

    clustering_method: ClusteringMethod
    min_cluster_size: int = Field(default=5, ge=2)
    min_samples: int = Field(default=3, ge=1)
    reduce_dimensions: bool = True
    n_components: int = Field(default=50, ge=1)
    labeling_method: LabelingMethod = LabelingMethod.HYBRID
    k: int | None = Field(default=None, ge=1)
    top_n_terms: int | None = Field(default=None, ge=1)
    outlier_distance_threshold: float | None = Field(default=None, gt=0.0)


class PersistedTopic(BaseModel):
    """Topic summary as written to disk."""

    model_config = ConfigDict(extra="ignore")

    id: int
    label: str | None = None
    description: str | None = None
    size: int = 0
    terms: list[str] = Field(default_factory=list)
    coherence: float = 0.0
    distinctiveness: float = 0.0
    document_indices: list[int] = Field(default_factory=list)
    centroid: list[float] = Field(default_factory=list)


class PersistedModel(BaseModel):
    """Top-level model file."""

    version: int = FORMAT_VERSION
    config: PersistedConfig
    topics: list[PersistedTopic] = Field(default_factory=list)


class ModelSerializer:
    """Reads and writes topic models as JSON documents."""

    @staticmethod
    def to_document(config: EngineConfig, topics: list[Topic]) -> dict[str, Any]:
        """Build the JSON-ready model document."""
        saved_config: dict[str, Any] = {
            "clustering_method": config.clustering_method.value,
            "min_cluster_size": config.min_cluster_size,
            "min_samples": config.min_samples,
            "reduce_dimensions": config.reduce_dimensions,
            "n_components": config.n_components,
            "labeling_method": config.labeling_method.value,
            "top_n_terms": config.top_n_terms,
        }
        if config.outlier_distance_threshold is not None:
            saved_config["outlier_distance_threshold"] = config.outlier_distance_threshold
        if config.clustering_method == ClusteringMethod.KMEANS:
            saved_config["k"] = config.k if config.k is not None else len(topics)

        return {
            "version": FORMAT_VERSION,
            "config": saved_config,
            "topics": [topic.to_dict() for topic in topics],
        }

    @classmethod
    def save(cls, engine: "TopicEngine", path: str | Path) -> Path:
        """
        Write a fitted engine to ``path``.

        Returns:
            The path written.
        """
        path = Path(path)
        document = cls.to_document(engine.config, engine.topics)
        path.write_text(json.dumps(document, indent=2), encoding="utf-8")
        logger.info(f"Saved {len(document['topics'])} topics to {path}")
        return path

    @classmethod
    def read(cls, path: str | Path) -> tuple[EngineConfig, list[Topic]]:
        """
        Parse a model file into an engine config and topic summaries.

        Raises:
            FileNotFoundError: If the file does not exist.
            ModelFormatError: If the file is not valid JSON, does not match
                the model schema, or has an unsupported version.
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Model file not found: {path}")

        try:
            raw = json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise ModelFormatError(f"Invalid JSON in model file {path}: {e}") from e
        if not isinstance(raw, dict):
            raise ModelFormatError(f"Model file {path} must contain a JSON object")

        version = raw.get("version", FORMAT_VERSION)
        if version != FORMAT_VERSION:
            raise ModelFormatError(
                f"Unsupported model format version {version!r} in {path} "
                f"(expected {FORMAT_VERSION})"
            )

        try:
            model = PersistedModel.model_validate(raw)
        except ValidationError as e:
            raise ModelFormatError(f"Invalid model file {path}: {e}") from e

        return cls._build_config(model), [cls._build_topic(t) for t in model.topics]

    @classmethod
    def load(cls, path: str | Path) -> "TopicEngine":
        """Read a model file and return a fitted TopicEngine."""
        from topicscope.engine.service import TopicEngine

        return TopicEngine.load(path)

    @staticmethod
    def _build_config(model: PersistedModel) -> EngineConfig:
        """Rebuild the engine config from the file alone.

        Every field is passed explicitly, so TOPICS_* environment variables
        cannot fill in settings the file left out.
        """
        saved = model.config
        fields = {
            name: info.get_default(call_default_factory=True)
            for name, info in EngineConfig.model_fields.items()
        }
        fields.update(saved.model_dump(exclude_none=True))
        if saved.clustering_method == ClusteringMethod.KMEANS and saved.k is None:
            fields["k"] = len(model.topics) or DEFAULT_K
        return EngineConfig(**fields)

    @staticmethod
    def _build_topic(saved: PersistedTopic) -> Topic:
        return Topic.from_dict(saved.model_dump())
