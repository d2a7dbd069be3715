"""Configuration for c-TF-IDF term extraction.

Uses Pydantic settings for environment-based configuration,
following the same pattern as the other service configs in the project.
"""

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Short English stop-word list. Tokens shorter than min_word_length are
# already discarded, so only words of three or more letters matter here.
DEFAULT_STOP_WORDS: frozenset[str] = frozenset(
    """
    the be to of and a in that have i it for not on with he as you do at
    this but his by from they we say her she or an will my one all would
    there their what so up out if about who get which go me when make can
    like time no just him know take people into year your good some could
    them see other than then now look only come its over think also back
    after use two how our work first well way even new want because any
    these give day most us is was are been has had were said did may
    """.split()
)


class TermExtractorConfig(BaseSettings):
    """
    Configuration for the TermExtractor.

    All settings can be overridden via environment variables with TERMS_ prefix.
    Example: TERMS_MIN_WORD_LENGTH=4

    Attributes:
        min_word_length: Shortest token kept after tokenization.
        max_word_length: Longest token kept after tokenization.
        stop_words: Tokens dropped before counting.
        top_n: Default number of terms returned per topic.
    """

    model_config = SettingsConfigDict(
        env_prefix="TERMS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    min_word_length: int = Field(
        default=3,
        ge=1,
        description="Minimum token length (inclusive).",
    )
    max_word_length: int = Field(
        default=20,
        ge=1,
        description="Maximum token length (inclusive).",
    )
    stop_words: frozenset[str] = Field(
        default=DEFAULT_STOP_WORDS,
        description="Lowercase tokens excluded from term counts.",
    )
    top_n: int = Field(
        default=20,
        ge=1,
        le=200,
        description="Number of distinctive terms returned per topic.",
    )

    @model_validator(mode="after")
    def _check_length_bounds(self) -> "TermExtractorConfig":
        if self.min_word_length > self.max_word_length:
            raise ValueError(
                f"min_word_length ({self.min_word_length}) must not exceed "
                f"max_word_length ({self.max_word_length})"
            )
        return self
