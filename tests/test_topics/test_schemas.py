"""Tests for the Topic dataclass."""

import numpy as np
import pytest

from topicscope.topics import Topic


def _make_topic(topic_id=0, n_docs=4, dim=3, **kwargs):
    """Create a Topic whose i-th embedding is [i, i, ...]."""
    return Topic(
        id=topic_id,
        document_indices=list(range(10, 10 + n_docs)),
        documents=[f"document number {i}" for i in range(n_docs)],
        embeddings=np.array([[float(i)] * dim for i in range(n_docs)]),
        **kwargs,
    )


class TestTopicCreation:
    """Tests for Topic construction and validation."""

    def test_size(self):
        assert _make_topic(n_docs=4).size == 4

    def test_metadata_defaults_to_empty_mappings(self):
        topic = _make_topic(n_docs=3)
        assert topic.metadata == [{}, {}, {}]

    def test_duplicate_indices_rejected(self):
        with pytest.raises(ValueError, match="duplicate"):
            Topic(id=1, document_indices=[0, 0], documents=["a", "b"])

    def test_mismatched_documents_rejected(self):
        with pytest.raises(ValueError, match="same length"):
            Topic(id=1, document_indices=[0, 1, 2], documents=["a", "b"])

    def test_mismatched_embeddings_rejected(self):
        with pytest.raises(ValueError, match="same length"):
            Topic(
                id=1,
                document_indices=[0, 1],
                documents=["a", "b"],
                embeddings=np.zeros((3, 2)),
            )

    def test_equality_by_id(self):
        assert _make_topic(topic_id=5) == Topic(id=5, document_indices=[])
        assert _make_topic(topic_id=5) != _make_topic(topic_id=6)

    def test_hashable(self):
        topics = {_make_topic(topic_id=1), _make_topic(topic_id=1), _make_topic(topic_id=2)}
        assert len(topics) == 2


class TestCentroid:
    """Tests for the lazy centroid."""

    def test_centroid_is_coordinate_mean(self):
        topic = _make_topic(n_docs=4, dim=3)
        np.testing.assert_allclose(topic.centroid, [1.5, 1.5, 1.5])

    def test_centroid_matches_embedding_width(self):
        topic = _make_topic(dim=7)
        assert topic.centroid.shape == (7,)

    def test_centroid_cached(self):
        topic = _make_topic()
        assert topic.centroid is topic.centroid

    def test_empty_topic_has_empty_centroid(self):
        topic = Topic(id=0, document_indices=[])
        assert topic.centroid.size == 0


class TestRepresentativeDocs:
    """Tests for Topic.representative_docs()."""

    def test_nearest_to_centroid_first(self):
        topic = Topic(
            id=0,
            document_indices=[0, 1, 2, 3],
            documents=["far", "near", "middle", "farthest"],
            embeddings=np.array([[4.0], [0.1], [1.0], [9.0]]),
        )
        # centroid = 3.525
        assert topic.representative_docs(k=2) == ["far", "middle"]

    def test_returns_all_when_k_exceeds_size(self):
        topic = _make_topic(n_docs=2)
        assert topic.representative_docs(k=5) == topic.documents

    def test_without_embeddings_falls_back_to_first_k(self):
        topic = Topic(id=0, document_indices=[0, 1, 2, 3], documents=["a", "b", "c", "d"])
        assert topic.representative_docs(k=2) == ["a", "b"]


class TestCoherence:
    """Tests for the lazy coherence score."""

    def test_terms_always_together(self):
        topic = Topic(
            id=0,
            document_indices=[0, 1],
            documents=["gpu chip sales", "gpu chip demand"],
            terms=["gpu", "chip"],
        )
        assert topic.coherence == pytest.approx(1.0)

    def test_terms_never_together(self):
        topic = Topic(
            id=0,
            document_indices=[0, 1],
            documents=["gpu sales", "chip demand"],
            terms=["gpu", "chip"],
        )
        assert topic.coherence == pytest.approx(0.0)

    def test_coherence_can_be_set(self):
        topic = _make_topic()
        topic.coherence = 0.42
        assert topic.coherence == pytest.approx(0.42)


class TestSerialization:
    """Tests for to_dict()/from_dict()."""

    def test_to_dict_fields(self):
        topic = _make_topic(topic_id=3, terms=["gpu"], label="Gpu")
        data = topic.to_dict()

        assert data["id"] == 3
        assert data["label"] == "Gpu"
        assert data["size"] == 4
        assert data["terms"] == ["gpu"]
        assert data["document_indices"] == [10, 11, 12, 13]
        assert data["centroid"] == pytest.approx([1.5, 1.5, 1.5])
        assert "documents" not in data
        assert "embeddings" not in data

    def test_from_dict_restores_summary(self):
        original = _make_topic(topic_id=3, terms=["gpu", "chip"], label="Gpu & Chip")
        original.distinctiveness = 0.5
        restored = Topic.from_dict(original.to_dict())

        assert restored.id == 3
        assert restored.label == "Gpu & Chip"
        assert restored.terms == ["gpu", "chip"]
        assert restored.document_indices == original.document_indices
        assert restored.distinctiveness == pytest.approx(0.5)
        assert restored.coherence == pytest.approx(original.coherence)
        assert restored.documents == []
        np.testing.assert_allclose(restored.centroid, original.centroid)

    def test_from_dict_without_centroid(self):
        restored = Topic.from_dict({"id": 1, "terms": []})
        assert restored.centroid.size == 0
