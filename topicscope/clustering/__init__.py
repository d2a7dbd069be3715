"""
Clustering adapters for topic discovery.

Components:
- ClusteringAdapter: Common fit/predict contract and noise/cluster counters
- DensityClusteringAdapter: HDBSCAN (variable cluster count, -1 outliers)
- PartitionClusteringAdapter: k-means (fixed cluster count, no outliers)
- UnsupportedOperationError: Raised for predictions a backend cannot make
"""

from topicscope.clustering.base import OUTLIER_LABEL, ClusteringAdapter, UnsupportedOperationError
from topicscope.clustering.hdbscan_adapter import DensityClusteringAdapter
from topicscope.clustering.kmeans_adapter import PartitionClusteringAdapter

__all__ = [
    "OUTLIER_LABEL",
    "ClusteringAdapter",
    "DensityClusteringAdapter",
    "PartitionClusteringAdapter",
    "UnsupportedOperationError",
]
