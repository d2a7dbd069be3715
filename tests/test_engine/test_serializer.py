"""Tests for saving and loading topic models."""

import json

import numpy as np
import pytest

from topicscope.engine import (
    ClusteringMethod,
    EngineConfig,
    LabelingMethod,
    ModelFormatError,
    ModelSerializer,
    NotFittedError,
    TopicEngine,
)


@pytest.fixture
def model_path(tmp_path):
    return tmp_path / "model.json"


def _write(path, data):
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


def _minimal_model(**config):
    return {
        "version": 1,
        "config": {"clustering_method": "hdbscan", "labeling_method": "term_based", **config},
        "topics": [
            {"id": 0, "label": "Gpu", "terms": ["gpu"], "centroid": [0.0, 0.0]},
            {"id": 1, "label": "Memory", "terms": ["memory"], "centroid": [10.0, 10.0]},
        ],
    }


class TestSave:
    """Tests for TopicEngine.save()."""

    def test_document_layout(self, fitted_engine, model_path):
        fitted_engine.save(model_path)
        data = json.loads(model_path.read_text())

        assert data["version"] == 1
        assert data["config"]["clustering_method"] == "kmeans"
        assert data["config"]["labeling_method"] == "term_based"
        assert data["config"]["k"] == 3
        assert len(data["topics"]) == 3

    def test_topic_summary_fields(self, fitted_engine, model_path):
        fitted_engine.save(model_path)
        topic = json.loads(model_path.read_text())["topics"][0]

        for key in (
            "id",
            "label",
            "description",
            "size",
            "terms",
            "coherence",
            "distinctiveness",
            "document_indices",
            "centroid",
        ):
            assert key in topic
        assert "documents" not in topic
        assert "embeddings" not in topic

    def test_k_defaults_to_topic_count(self, sample_embeddings, sample_documents, model_path):
        engine = TopicEngine(EngineConfig(clustering_method="kmeans", labeling_method="term_based"))
        engine.fit(sample_embeddings, sample_documents)
        engine.save(model_path)

        assert json.loads(model_path.read_text())["config"]["k"] == len(engine.topics)

    def test_no_k_for_hdbscan(self, model_path):
        document = ModelSerializer.to_document(EngineConfig(k=4), [])
        assert "k" not in document["config"]

    def test_save_before_fit(self, kmeans_engine, model_path):
        with pytest.raises(NotFittedError):
            kmeans_engine.save(model_path)


class TestRoundTrip:
    """save() followed by load()."""

    def test_topic_ids_and_config(self, fitted_engine, model_path):
        fitted_engine.save(model_path)
        loaded = TopicEngine.load(model_path)

        assert {t.id for t in loaded.topics} == {t.id for t in fitted_engine.topics}
        assert loaded.config.clustering_method == ClusteringMethod.KMEANS
        assert loaded.config.labeling_method == LabelingMethod.TERM_BASED
        assert loaded.config.k == 3
        assert type(loaded.clustering_adapter) is type(fitted_engine.clustering_adapter)
        assert loaded.clustering_adapter.k == 3

    def test_labels_terms_metrics(self, fitted_engine, model_path):
        fitted_engine.save(model_path)
        loaded = TopicEngine.load(model_path)

        for original in fitted_engine.topics:
            restored = loaded.get_topic(original.id)
            assert restored.label == original.label
            assert restored.terms == original.terms
            assert restored.document_indices == original.document_indices
            assert restored.coherence == pytest.approx(original.coherence)
            assert restored.distinctiveness == pytest.approx(original.distinctiveness)
            assert restored.documents == []

    def test_loaded_engine_transforms(self, fitted_engine, model_path, sample_embeddings):
        fitted_engine.save(model_path)
        loaded = TopicEngine.load(model_path)

        assert loaded.is_fitted
        np.testing.assert_array_equal(
            loaded.transform(sample_embeddings), fitted_engine.transform(sample_embeddings)
        )

    def test_serializer_load_returns_engine(self, fitted_engine, model_path):
        ModelSerializer.save(fitted_engine, model_path)
        assert isinstance(ModelSerializer.load(model_path), TopicEngine)

    def test_threshold_persisted(self, sample_embeddings, sample_documents, model_path):
        engine = TopicEngine(
            EngineConfig(
                clustering_method="kmeans",
                k=3,
                labeling_method="term_based",
                outlier_distance_threshold=1.5,
            )
        )
        engine.fit(sample_embeddings, sample_documents)
        engine.save(model_path)

        assert TopicEngine.load(model_path).config.outlier_distance_threshold == 1.5


class TestLoad:
    """Tests for reading model files."""

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            TopicEngine.load(tmp_path / "nope.json")

    def test_invalid_json(self, model_path):
        model_path.write_text("{not json")
        with pytest.raises(ModelFormatError, match="Invalid JSON"):
            TopicEngine.load(model_path)

    def test_not_an_object(self, model_path):
        _write(model_path, [1, 2, 3])
        with pytest.raises(ModelFormatError):
            TopicEngine.load(model_path)

    def test_unknown_clustering_method(self, model_path):
        _write(model_path, _minimal_model(clustering_method="spectral"))
        with pytest.raises(ModelFormatError):
            TopicEngine.load(model_path)

    def test_unknown_labeling_method(self, model_path):
        _write(model_path, _minimal_model(labeling_method="magic"))
        with pytest.raises(ModelFormatError):
            TopicEngine.load(model_path)

    def test_unknown_version(self, model_path):
        data = _minimal_model()
        data["version"] = 2
        _write(model_path, data)
        with pytest.raises(ModelFormatError, match="version"):
            TopicEngine.load(model_path)

    def test_missing_version_read_as_current(self, model_path):
        data = _minimal_model()
        del data["version"]
        _write(model_path, data)
        assert len(TopicEngine.load(model_path).topics) == 2

    def test_missing_config(self, model_path):
        _write(model_path, {"version": 1, "topics": []})
        with pytest.raises(ModelFormatError):
            TopicEngine.load(model_path)

    def test_kmeans_without_k_uses_topic_count(self, model_path):
        _write(model_path, _minimal_model(clustering_method="kmeans"))
        loaded = TopicEngine.load(model_path)
        assert loaded.config.k == 2

    def test_format_error_is_value_error(self):
        assert issubclass(ModelFormatError, ValueError)

    def test_nearest_centroid_after_load(self, model_path):
        _write(model_path, _minimal_model())
        loaded = TopicEngine.load(model_path)
        assert loaded.transform([[1.0, 1.0], [9.0, 9.5]]).tolist() == [0, 1]

    def test_environment_does_not_fill_unsaved_settings(self, model_path, monkeypatch):
        monkeypatch.setenv("TOPICS_VERBOSE", "true")
        monkeypatch.setenv("TOPICS_RANDOM_SEED", "7")
        monkeypatch.setenv("TOPICS_TOP_N_TERMS", "99")
        monkeypatch.setenv("TOPICS_K", "9")
        _write(model_path, _minimal_model())

        config = TopicEngine.load(model_path).config

        assert config.verbose is False
        assert config.random_seed is None
        assert config.top_n_terms == 20
        assert config.k is None

    def test_saved_settings_win_over_environment(self, model_path, monkeypatch):
        monkeypatch.setenv("TOPICS_MIN_CLUSTER_SIZE", "40")
        _write(model_path, _minimal_model(min_cluster_size=8))
        assert TopicEngine.load(model_path).config.min_cluster_size == 8
