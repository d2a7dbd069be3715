"""
Topic data model and quality metrics.

Components:
- Topic: Dataclass for one discovered cluster with lazy centroid/coherence
- metrics: Coherence, distinctiveness, diversity and coverage scores
"""

from topicscope.topics import metrics
from topicscope.topics.schemas import Topic

__all__ = [
    "Topic",
    "metrics",
]
