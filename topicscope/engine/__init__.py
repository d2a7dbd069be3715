"""
Topic engine orchestration and persistence.

Components:
- EngineConfig: Method selectors and pipeline switches (TOPICS_* env overrides)
- TopicEngine: fit / transform / save / load
- ModelSerializer: Versioned JSON model files
"""

from topicscope.engine.config import ClusteringMethod, EngineConfig, LabelingMethod
from topicscope.engine.serializer import ModelFormatError, ModelSerializer
from topicscope.engine.service import NotFittedError, TopicEngine

__all__ = [
    "ClusteringMethod",
    "EngineConfig",
    "LabelingMethod",
    "ModelFormatError",
    "ModelSerializer",
    "NotFittedError",
    "TopicEngine",
]
