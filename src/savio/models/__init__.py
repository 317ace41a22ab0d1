"""
Data models for SAVIO Trend Studio.

This module provides Pydantic models for type safety and validation
throughout the application.
"""

from .controls import (
    ControlsState,
    CloneSettings,
    DetailLevel,
    AnalysisType,
    VideoMood,
    LightingStyle,
    CameraStyle,
    VoiceDialect,
    VoiceTone,
    PerformanceMode,
)
from .analysis import (
    AnalysisResult,
    ClonePayload,
    Hashtag,
    Prompt,
    TrendLevel,
)
from .session_state import (
    SessionState,
    SessionHistory,
    HistoryItem,
    SelectedVideo,
    OperationStatus,
    OperationKind,
)

__all__ = [
    # Controls
    "ControlsState",
    "CloneSettings",
    "DetailLevel",
    "AnalysisType",
    "VideoMood",
    "LightingStyle",
    "CameraStyle",
    "VoiceDialect",
    "VoiceTone",
    "PerformanceMode",
    # Results
    "AnalysisResult",
    "ClonePayload",
    "Hashtag",
    "Prompt",
    "TrendLevel",
    # Session
    "SessionState",
    "SessionHistory",
    "HistoryItem",
    "SelectedVideo",
    "OperationStatus",
    "OperationKind",
]
