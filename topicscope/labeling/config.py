"""Configuration for topic labeling.

Provides Pydantic settings for LLM API keys, model selection, prompt sizing,
label post-processing and circuit breaker tuning. All settings can be
overridden via LABELING_* environment variables.
"""

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class LabelingConfig(BaseSettings):
    """Configuration for the term-based, LLM and hybrid labelers.

    Settings can be overridden via environment variables prefixed with LABELING_.

    Example:
        LABELING_OPENAI_API_KEY=sk-...
        LABELING_TEMPERATURE=0.0
        LABELING_MAX_LABEL_LENGTH=40
    """

    model_config = SettingsConfigDict(
        env_prefix="LABELING_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # LLM API keys
    openai_api_key: SecretStr | None = Field(
        default=None,
        description="OpenAI API key. When set, OpenAI is the default label generator.",
    )
    anthropic_api_key: SecretStr | None = Field(
        default=None,
        description="Anthropic API key, used when no OpenAI key is configured.",
    )

    # Model selection
    openai_model: str = Field(
        default="gpt-4o-mini",
        description="OpenAI model for label generation",
    )
    anthropic_model: str = Field(
        default="claude-3-5-haiku-latest",
        description="Anthropic model for label generation",
    )
    llm_timeout: float = Field(
        default=30.0,
        gt=0.0,
        description="Per-request timeout in seconds",
    )

    # Generation parameters
    max_tokens: int = Field(
        default=150,
        ge=16,
        le=4096,
        description="Maximum output tokens per label request",
    )
    temperature: float = Field(
        default=0.3,
        ge=0.0,
        le=2.0,
        description="Sampling temperature. Low values keep labels stable.",
    )

    # Prompt construction
    sample_documents: int = Field(
        default=3,
        ge=1,
        le=20,
        description="Representative documents included in the prompt",
    )
    prompt_terms: int = Field(
        default=10,
        ge=1,
        le=50,
        description="Top distinctive terms included in the prompt",
    )
    document_truncate: int = Field(
        default=300,
        ge=20,
        description="Characters kept per sampled document",
    )

    # Label post-processing
    max_label_length: int = Field(
        default=50,
        ge=5,
        description="Longer labels are cut and end with '...'",
    )

    # Circuit breaker
    circuit_failure_threshold: int = Field(
        default=3,
        ge=1,
        description="Consecutive failures before the generator circuit opens",
    )
    circuit_recovery_timeout: float = Field(
        default=60.0,
        ge=0.0,
        description="Seconds an open breaker waits before a trial call",
    )
