"""
Session state data model.

The explicit state container owned by one UI session: the selected video,
the advanced controls, the operation lifecycle and the bounded history.
"""

import time
from datetime import datetime
from enum import Enum
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field

from ..config import settings
from .analysis import AnalysisResult
from .controls import ControlsState


class OperationStatus(str, Enum):
    """Lifecycle of an analyze/clone operation."""
    IDLE = "idle"
    RUNNING = "running"
    READY = "ready"
    FAILED = "failed"


class OperationKind(str, Enum):
    ANALYZE = "analyze"
    CLONE = "clone"


class SelectedVideo(BaseModel):
    """An upload that passed the intake checks."""
    model_config = ConfigDict(frozen=True)

    path: str = Field(..., description="Local path of the uploaded file")
    name: str = Field(..., description="Original file name")
    mime_type: str = Field(..., description="Video MIME type")
    size_bytes: int = Field(..., ge=0, description="File size in bytes")
    duration_seconds: float = Field(0.0, ge=0, description="Probed duration in seconds")


class HistoryItem(BaseModel):
    """A completed result kept in the session history."""
    model_config = ConfigDict(frozen=True)

    id: int = Field(..., description="Creation time in milliseconds, unique per session")
    timestamp: datetime = Field(..., description="When the result was recorded")
    data: AnalysisResult = Field(..., description="The recorded result")

    @property
    def label(self) -> str:
        return f"{self.data.headline} ({self.timestamp.strftime('%H:%M:%S')})"


class SessionHistory(BaseModel):
    """Most-recent-first list of past results, capped at ``limit`` entries."""
    items: List[HistoryItem] = Field(default_factory=list, description="Newest first")
    limit: int = Field(default_factory=lambda: settings.history_limit, gt=0, description="Maximum entries kept")

    def _next_id(self) -> int:
        # Two results recorded within the same millisecond still get distinct ids.
        now_ms = time.time_ns() // 1_000_000
        if self.items and now_ms <= self.items[0].id:
            return self.items[0].id + 1
        return now_ms

    def record(self, result: AnalysisResult) -> HistoryItem:
        """Prepend a result and drop everything beyond the limit."""
        item = HistoryItem(id=self._next_id(), timestamp=datetime.now(), data=result)
        self.items = [item, *self.items][: self.limit]
        return item

    def select(self, item_id: int) -> AnalysisResult:
        """Return the stored result without reordering the history.

        Raises:
            KeyError: If no entry has that id
        """
        for item in self.items:
            if item.id == item_id:
                return item.data
        raise KeyError(item_id)

    def __len__(self) -> int:
        return len(self.items)


class SessionState(BaseModel):
    """Complete per-session state - the source of truth for the UI."""
    controls: ControlsState = Field(default_factory=ControlsState, description="Advanced controls")
    video: Optional[SelectedVideo] = Field(None, description="Currently selected upload")
    optional_context: str = Field("", description="Free-text context for the analyze operation")

    status: OperationStatus = Field(OperationStatus.IDLE, description="Operation lifecycle status")
    current_action: Optional[OperationKind] = Field(None, description="Operation in flight, if any")
    status_message: str = Field("Waiting for upload", description="User-facing status line")
    error: Optional[str] = Field(None, description="Raw error detail of the last failure")

    result: Optional[AnalysisResult] = Field(None, description="Result currently displayed")
    history: SessionHistory = Field(default_factory=SessionHistory, description="Past results")

    @property
    def is_running(self) -> bool:
        return self.status == OperationStatus.RUNNING

    @property
    def can_start(self) -> bool:
        """A new operation needs a video and nothing else in flight."""
        return self.video is not None and not self.is_running

    def select_video(self, video: SelectedVideo) -> bool:
        """Make an accepted upload the current source video.

        Returns:
            False while an operation is running; the state is left unchanged.
        """
        if self.is_running:
            return False
        self.video = video
        self.status = OperationStatus.IDLE
        self.status_message = f"{video.name} ready for action."
        self.error = None
        self.result = None
        return True

    def reject_upload(self, message: str) -> None:
        """Show an intake error without touching anything else."""
        self.error = message

    def begin(self, action: OperationKind, status_message: str) -> bool:
        """Enter RUNNING for ``action``.

        Returns:
            False if the trigger is inert (no video or already running);
            the state is left unchanged in that case.
        """
        if not self.can_start:
            return False
        self.status = OperationStatus.RUNNING
        self.current_action = OperationKind(action)
        self.status_message = status_message
        self.error = None
        return True

    def complete(self, result: AnalysisResult, status_message: str) -> HistoryItem:
        """RUNNING -> READY: show the result and record it in history."""
        self._require_running("complete")
        self.result = result
        item = self.history.record(result)
        self.status = OperationStatus.READY
        self.status_message = status_message
        self.current_action = None
        return item

    def fail(self, status_message: str, error: str) -> None:
        """RUNNING -> FAILED: keep the previous result and history untouched."""
        self._require_running("fail")
        self.status = OperationStatus.FAILED
        self.status_message = status_message
        self.error = error
        self.current_action = None

    def select_history(self, item_id: int) -> AnalysisResult:
        """Load a history entry as the displayed result."""
        if self.is_running:
            raise RuntimeError("Cannot load history while an operation is running")
        result = self.history.select(item_id)
        self.result = result
        self.status = OperationStatus.READY
        self.status_message = "Loaded from history."
        return result

    def _require_running(self, transition: str) -> None:
        if self.status != OperationStatus.RUNNING:
            raise RuntimeError(f"Cannot {transition} an operation in status '{self.status.value}'")
