"""
UMAP dimensionality-reduction configuration.

Parameter Tuning Guide:
    - n_components: 5-15 works well before density clustering; the engine
      passes its own target, capped at max_components and n_samples - 1.
    - n_neighbors: Larger = more global structure. Capped at n_samples - 1.
    - min_dist: 0.0 packs points tightly, which suits clustering.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ReductionConfig(BaseSettings):
    """
    Configuration for the dimensionality reducer.

    All settings can be overridden via environment variables prefixed with REDUCTION_.

    Example:
        REDUCTION_N_NEIGHBORS=30
        REDUCTION_METRIC=euclidean
    """

    model_config = SettingsConfigDict(
        env_prefix="REDUCTION_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    n_components: int = Field(
        default=50,
        ge=1,
        description="Target dimensions after reduction.",
    )
    max_components: int = Field(
        default=50,
        ge=1,
        description="Hard ceiling on output dimensions regardless of target.",
    )
    n_neighbors: int = Field(
        default=15,
        ge=2,
        le=200,
        description="Local neighborhood size for UMAP. Larger = more global structure.",
    )
    min_dist: float = Field(
        default=0.0,
        ge=0.0,
        le=1.0,
        description="Minimum distance between points. 0.0 = tight clusters preferred.",
    )
    metric: str = Field(
        default="cosine",
        description="Distance metric for UMAP. Cosine is standard for text embeddings.",
    )
    random_state: int = Field(
        default=42,
        description="Random seed for reproducible dimensionality reduction.",
    )
