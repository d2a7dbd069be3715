"""Schema definitions for discovered topics.

Provides the Topic dataclass: one cluster of documents together with its
derived vocabulary, label and quality scores, plus serialization helpers
used when a fitted model is written to disk.
"""

from dataclasses import dataclass, field
from typing import Any

import numpy as np

from topicscope.topics import metrics


@dataclass
class Topic:
    """
    A discovered cluster of documents.

    Created by the engine right after clustering, then filled in place by term
    extraction (terms) and labeling (label, description). The centroid and
    coherence are computed on first access and cached; a topic is otherwise
    not mutated after the fit that produced it.

    Attributes:
        id: Cluster id, unique within a fitted model. Never -1 (outlier sentinel).
        document_indices: Positions of the topic's documents in the fitted corpus.
        documents: Document texts, parallel to document_indices.
        embeddings: Matrix (size, dim) of the documents' original embeddings.
        metadata: Per-document mappings, parallel to documents.
        terms: Distinctive terms, most distinctive first.
        label: Short human-readable name.
        description: Longer description when the labeler provides one.
        distinctiveness: Share of top terms not shared with other topics.

    Example:
        >>> topic = Topic(
        ...     id=0,
        ...     document_indices=[0, 2],
        ...     documents=["gpu sales", "gpu demand"],
        ...     embeddings=np.array([[1.0, 0.0], [0.0, 1.0]]),
        ... )
        >>> topic.centroid.tolist()
        [0.5, 0.5]
    """

    id: int
    document_indices: list[int]
    documents: list[str] = field(default_factory=list)
    embeddings: np.ndarray = field(default_factory=lambda: np.empty((0, 0)))
    metadata: list[dict[str, Any]] = field(default_factory=list)
    terms: list[str] = field(default_factory=list)
    label: str | None = None
    description: str | None = None
    distinctiveness: float = 0.0
    _centroid: np.ndarray | None = field(default=None, init=False, repr=False)
    _coherence: float | None = field(default=None, init=False, repr=False)

    def __post_init__(self) -> None:
        self.document_indices = [int(i) for i in self.document_indices]
        self.documents = list(self.documents)

        embeddings = np.asarray(self.embeddings, dtype=float)
        if embeddings.size == 0:
            embeddings = embeddings.reshape(0, 0)
        self.embeddings = embeddings

        if self.documents and not self.metadata:
            self.metadata = [{} for _ in self.documents]
        self.metadata = list(self.metadata)

        if len(set(self.document_indices)) != len(self.document_indices):
            raise ValueError(f"Topic {self.id} has duplicate document indices")
        if self.documents and len(self.documents) != len(self.document_indices):
            raise ValueError(
                f"Topic {self.id}: documents ({len(self.documents)}) and "
                f"document_indices ({len(self.document_indices)}) must have the same length"
            )
        if len(self.embeddings) and len(self.embeddings) != len(self.documents):
            raise ValueError(
                f"Topic {self.id}: embeddings ({len(self.embeddings)}) and "
                f"documents ({len(self.documents)}) must have the same length"
            )
        if self.metadata and len(self.metadata) != len(self.documents):
            raise ValueError(
                f"Topic {self.id}: metadata ({len(self.metadata)}) and "
                f"documents ({len(self.documents)}) must have the same length"
            )

    @property
    def size(self) -> int:
        """Number of documents in this topic."""
        return len(self.document_indices)

    @property
    def centroid(self) -> np.ndarray:
        """Coordinate-wise mean of the topic's embeddings (empty when it has none)."""
        if self._centroid is None:
            if len(self.embeddings) == 0:
                return np.empty(0)
            self._centroid = self.embeddings.mean(axis=0)
        return self._centroid

    @property
    def coherence(self) -> float:
        """Term co-occurrence coherence in [0, 1], computed once."""
        if self._coherence is None:
            self._coherence = metrics.compute_coherence(self.terms, self.documents, top_n=10)
        return self._coherence

    @coherence.setter
    def coherence(self, value: float) -> None:
        self._coherence = float(value)

    def representative_docs(self, k: int = 3) -> list[str]:
        """
        Return the k documents closest to the centroid.

        Falls back to the first k documents when no embeddings are held
        (e.g. a topic reloaded from disk with its centroid only).
        """
        if len(self.documents) <= k:
            return list(self.documents)
        if len(self.embeddings) == 0:
            return self.documents[:k]

        distances = np.linalg.norm(self.embeddings - self.centroid, axis=1)
        nearest = np.argsort(distances, kind="stable")[:k]
        return [self.documents[i] for i in nearest]

    def to_dict(self) -> dict[str, Any]:
        """
        Convert the topic summary to a dictionary for JSON serialization.

        Documents, embeddings and metadata are not included; the centroid is,
        so a reloaded model can still assign new embeddings.
        """
        return {
            "id": self.id,
            "label": self.label,
            "description": self.description,
            "size": self.size,
            "terms": list(self.terms),
            "coherence": self.coherence,
            "distinctiveness": self.distinctiveness,
            "document_indices": list(self.document_indices),
            "centroid": self.centroid.tolist(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Topic":
        """
        Create a Topic from a to_dict() summary.

        The result has no documents or embeddings; ids, terms, label, metrics
        and (when present) the centroid are restored.

        Raises:
            KeyError: If the id field is missing.
        """
        topic = cls(
            id=data["id"],
            document_indices=data.get("document_indices") or [],
            terms=list(data.get("terms") or []),
            label=data.get("label"),
            description=data.get("description"),
            distinctiveness=float(data.get("distinctiveness") or 0.0),
        )
        topic.coherence = data.get("coherence") or 0.0
        centroid = data.get("centroid")
        if centroid:
            topic._centroid = np.asarray(centroid, dtype=float)
        return topic

    def __eq__(self, other: object) -> bool:
        """Check equality based on id."""
        if not isinstance(other, Topic):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        """Hash based on id for use in sets and dicts."""
        return hash(self.id)
