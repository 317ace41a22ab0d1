"""
Advanced controls data model.

Captures the generation parameters a user picks in the UI. The state is
immutable: every update returns a new validated copy.
"""

from enum import Enum
from typing import List, TypeVar
from pydantic import BaseModel, ConfigDict, Field, field_validator


class DetailLevel(str, Enum):
    """How much detail the generated prompts should carry."""
    NORMAL = "Normal"
    PROFESSIONAL = "Professional"
    CINEMATIC = "Cinematic"


class AnalysisType(str, Enum):
    """Which tracks of the video the analysis focuses on."""
    VISUAL_ONLY = "Visual Only"
    AUDIO_ONLY = "Audio Only"
    COMPREHENSIVE = "Comprehensive"


class VideoMood(str, Enum):
    """Desired emotional mood of the output."""
    HAPPY = "Happy"
    DRAMATIC = "Dramatic"
    SAD = "Sad"
    INSPIRING = "Inspiring"
    MYSTERIOUS = "Mysterious"
    ENERGETIC = "Energetic"


class LightingStyle(str, Enum):
    NATURAL = "Natural"
    STUDIO = "Studio"
    NEON = "Neon"
    WARM = "Warm"
    COLD = "Cold"


class CameraStyle(str, Enum):
    HANDHELD = "Handheld"
    STATIC = "Static"
    DRONE = "Drone"
    FIRST_PERSON_VIEW = "First-Person View"


class VoiceDialect(str, Enum):
    """Voice-over dialect. Everything except English is an Arabic dialect."""
    EGYPTIAN = "Egyptian"
    MOROCCAN = "Moroccan"
    LEBANESE = "Lebanese"
    ALGERIAN = "Algerian"
    SYRIAN = "Syrian"
    GULF = "Gulf"
    ENGLISH = "English"

    @property
    def display_name(self) -> str:
        """Dialect as it is spoken of in instructions (e.g. 'Gulf Arabic')."""
        if self == VoiceDialect.ENGLISH:
            return self.value
        return f"{self.value} Arabic"


class VoiceTone(str, Enum):
    CALM = "Calm"
    ENERGETIC = "Energetic"
    DRAMATIC = "Dramatic"


class PerformanceMode(str, Enum):
    """Model tier selector."""
    FAST = "Fast"
    HIGH_QUALITY = "High Quality"


class CloneSettings(BaseModel):
    """Flags that only apply to the clone operation."""
    model_config = ConfigDict(frozen=True)

    strict_duration: bool = Field(True, description="Keep the clone at the exact source duration")
    preserve_structure: bool = Field(True, description="Keep scene order, pacing and camera work")


E = TypeVar("E", bound=Enum)


def _toggled(values: List[E], value: E) -> List[E]:
    """Remove value if present, otherwise append it."""
    if value in values:
        return [v for v in values if v != value]
    return [*values, value]


class ControlsState(BaseModel):
    """User-chosen generation parameters for one session."""
    model_config = ConfigDict(frozen=True)

    detail_level: DetailLevel = Field(DetailLevel.PROFESSIONAL, description="Prompt detail level")
    analysis_type: AnalysisType = Field(AnalysisType.COMPREHENSIVE, description="Analysis focus")
    video_mood: VideoMood = Field(VideoMood.ENERGETIC, description="Desired mood")
    lighting_styles: List[LightingStyle] = Field(default_factory=list, description="Selected lighting styles")
    camera_styles: List[CameraStyle] = Field(default_factory=list, description="Selected camera styles")
    voice_dialect: VoiceDialect = Field(VoiceDialect.EGYPTIAN, description="Voice-over dialect")
    voice_tone: VoiceTone = Field(VoiceTone.ENERGETIC, description="Voice-over tone")
    clone_settings: CloneSettings = Field(default_factory=CloneSettings, description="Clone-only flags")
    performance_mode: PerformanceMode = Field(PerformanceMode.FAST, description="Model tier")

    @field_validator("lighting_styles", "camera_styles")
    @classmethod
    def drop_duplicates(cls, v):
        """Keep the first occurrence of each style, preserving order."""
        seen = []
        for item in v:
            if item not in seen:
                seen.append(item)
        return seen

    def update(self, **fields) -> "ControlsState":
        """Return a copy with the given fields replaced and re-validated."""
        data = self.model_dump()
        data.update(fields)
        return ControlsState.model_validate(data)

    def toggle_lighting_style(self, style: LightingStyle) -> "ControlsState":
        """Return a copy with the lighting style added or removed."""
        return self.update(lighting_styles=_toggled(self.lighting_styles, LightingStyle(style)))

    def toggle_camera_style(self, style: CameraStyle) -> "ControlsState":
        """Return a copy with the camera style added or removed."""
        return self.update(camera_styles=_toggled(self.camera_styles, CameraStyle(style)))
