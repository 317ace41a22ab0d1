"""
Analysis result data models.

Structures for the creative output returned by Gemini: the trend
summary, the SORA 2 / VEO 3.1 prompts and the recommended hashtags.
"""

from enum import Enum
from typing import List
from pydantic import BaseModel, ConfigDict, Field, field_validator


class TrendLevel(str, Enum):
    """Simulated popularity of a hashtag."""
    VERY_HIGH = "Very High"
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


class Hashtag(BaseModel):
    """Recommended hashtag with its trend level."""
    model_config = ConfigDict(frozen=True)

    tag: str = Field(..., description="Hashtag text without the '#' symbol")
    trend_level: TrendLevel = Field(..., description="Simulated trend level")

    @field_validator("tag")
    @classmethod
    def strip_hash(cls, v: str) -> str:
        return v.strip().lstrip("#")


class Prompt(BaseModel):
    """One creative prompt in plain, SORA 2 and VEO 3.1 flavours."""
    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Prompt identifier")
    label: str = Field(..., description="Short label, e.g. 'Closest Match'")
    plain_prompt: str = Field(..., description="Plain-language idea")
    sora_prompt: str = Field(..., description="Structured SORA 2 prompt ending with a verification line")
    veo_prompt: str = Field(..., description="Structured VEO 3.1 prompt ending with a verification line")


class AnalysisResult(BaseModel):
    """Complete result of an analyze or clone operation.

    Only ``trend_summary``, ``prompts``, ``hashtags`` and ``scene_count`` are
    required. Every other field defaults to an empty string, zero or an
    empty list so a sparse reply still maps cleanly.
    """
    model_config = ConfigDict(frozen=True)

    trend_summary: str = Field(..., description="One-paragraph summary of the core idea")
    genre: str = Field("", description="Video genre")
    estimated_duration_seconds: float = Field(0.0, ge=0, description="Duration of the source video")
    scene_count: int = Field(..., ge=0, description="Number of distinct scenes")
    audience_demographics: str = Field("", description="Probable audience slice")
    success_factors: List[str] = Field(default_factory=list, description="Why the video works")
    top_keywords: List[str] = Field(default_factory=list, description="Top keywords")
    hook_suggestion: str = Field("", description="Suggested opening hook")
    prompts: List[Prompt] = Field(..., description="Generated prompts (expected 1-3)")
    hashtags: List[Hashtag] = Field(..., description="Recommended hashtags (expected 4-6)")

    @property
    def headline(self) -> str:
        """Short line used by the history list."""
        if self.genre:
            return f"{self.genre}: {self.trend_summary}"
        return self.trend_summary


class ClonePayload(BaseModel):
    """Narrow structured reply of the clone operation."""
    sora_prompt_clone: str = Field(..., description="Complete SORA 2 clone prompt")
    veo_prompt_clone: str = Field(..., description="Complete VEO 3.1 adaptation prompt")
    scene_count: int = Field(..., ge=0, description="Scenes in the original video")
    hashtags: List[Hashtag] = Field(..., description="Recommended hashtags")
