"""Data models for topic labeling results."""

from typing import Literal

from pydantic import BaseModel, Field

UNKNOWN_LABEL = "Unknown Topic"


class LabelResult(BaseModel):
    """A label plus optional enrichment for one topic.

    ``source`` records which strategy produced the label so callers never
    have to infer it from the label text.
    """

    label: str = Field(description="Short human-readable topic name")
    description: str | None = Field(default=None, description="One or two sentence summary")
    themes: list[str] = Field(default_factory=list, description="Key themes named by the model")
    confidence: float | None = Field(default=None, ge=0.0, le=1.0)
    source: Literal["terms", "llm"] = "terms"
