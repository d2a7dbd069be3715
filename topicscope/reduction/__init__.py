"""
Dimensionality reduction for document embeddings.

Components:
- ReductionConfig: UMAP parameters (REDUCTION_* env overrides)
- DimensionalityReducer: Validating, self-adjusting UMAP wrapper
- NoValidEmbeddingsError: Raised when every input row is unusable
- split_embeddings: Float matrix plus the positions of unusable rows
"""

from topicscope.reduction.config import ReductionConfig
from topicscope.reduction.reducer import (
    DimensionalityReducer,
    NoValidEmbeddingsError,
    embedding_width,
    split_embeddings,
)

__all__ = [
    "ReductionConfig",
    "DimensionalityReducer",
    "NoValidEmbeddingsError",
    "embedding_width",
    "split_embeddings",
]
