"""Integration tests for Gradio web interface."""

import asyncio
import json

import pytest
from unittest.mock import patch, Mock, AsyncMock
import cv2
import gradio as gr

from savio.agents.root_agent import RootAgent
from savio.models import (
    AnalysisResult,
    CameraStyle,
    ControlsState,
    LightingStyle,
    OperationStatus,
    Prompt,
    SelectedVideo,
    SessionState,
)
from savio.tools.generation_client import GenerationClient
from savio.tools.media_encoder import UPLOAD_REJECTED_MESSAGE
from savio.web.app import (
    UPLOAD_BUSY_MESSAGE,
    UPLOAD_UNREADABLE_MESSAGE,
    SavioApp,
    apply_toggles,
    generate_with_js,
    hashtag_copy_text,
)


ANALYSIS_REPLY = json.dumps({
    "trend_summary": "Morning routine vlog",
    "scene_count": 2,
    "success_factors": ["Relatable", "Fast cuts"],
    "prompts": [{
        "id": "1",
        "label": "Closest Match",
        "plain_prompt": "A morning routine.",
        "sora_prompt": "sora text",
        "veo_prompt": "veo text",
    }],
    "hashtags": [
        {"tag": "morningroutine", "trend_level": "High"},
        {"tag": "#5am club", "trend_level": "Medium"},
    ],
})

# Positions inside the rendered view list
STATUS, ERROR, SUMMARY, INSIGHTS = 1, 2, 3, 4
ANALYZE_BUTTON, HISTORY, UPLOAD_ERROR, FIRST_SLOT = 7, 9, 10, 11
HASHTAGS_COPY = -1


def make_result(summary: str) -> AnalysisResult:
    return AnalysisResult(
        trend_summary=summary,
        scene_count=1,
        prompts=[Prompt(id="1", label="Closest Match", plain_prompt="p", sora_prompt="s", veo_prompt="v")],
        hashtags=[]
    )


class TestWebInterface:
    """Test Gradio web interface functionality."""

    @pytest.fixture
    def mock_client(self):
        client = Mock(spec=GenerationClient)
        client.generate_structured = AsyncMock(return_value=ANALYSIS_REPLY)
        client.generate_text = AsyncMock(return_value="expanded")
        return client

    @pytest.fixture
    def app(self, mock_client):
        """Create app instance."""
        return SavioApp(root_agent=RootAgent(client=mock_client))

    @pytest.fixture
    def video_path(self, tmp_path):
        path = tmp_path / "routine.mp4"
        path.write_bytes(b"fake_video_data")
        return str(path)

    @pytest.fixture
    def ready_state(self, video_path):
        state = SessionState()
        state.select_video(SelectedVideo(
            path=video_path, name="routine.mp4", mime_type="video/mp4", size_bytes=15, duration_seconds=6.0
        ))
        return state

    def test_interface_creation(self, app):
        """Test interface creation."""
        interface = app.create_interface()

        assert isinstance(interface, gr.Blocks)

        # Check main components exist
        components = {c.elem_id for c in interface.blocks.values() if hasattr(c, 'elem_id')}
        for elem_id in ["video_upload", "upload_error", "analyze_button", "clone_button",
                        "status_panel", "error_panel", "history", "hashtags_copy"]:
            assert elem_id in components

    def test_initial_render(self, app):
        values = app.render(SessionState())

        assert values[STATUS] == "**Status:** Waiting for upload"
        assert values[ERROR] == ""
        assert values[ANALYZE_BUTTON]["interactive"] is False
        assert values[FIRST_SLOT]["visible"] is False

    @pytest.mark.asyncio
    async def test_upload_accepted(self, app, video_path):
        state = SessionState()

        with patch("savio.web.app.get_video_duration", AsyncMock(return_value=9.4)):
            values = await app.handle_upload(video_path, state)

        assert state.video.name == "routine.mp4"
        assert state.video.duration_seconds == 9.4
        assert values[STATUS] == "**Status:** routine.mp4 ready for action."
        assert values[ANALYZE_BUTTON]["interactive"] is True
        assert values[UPLOAD_ERROR] == ""

    @pytest.mark.asyncio
    async def test_upload_wrong_type_rejected(self, app, mock_client, tmp_path):
        image_path = tmp_path / "photo.png"
        image_path.write_bytes(b"fake_image_data")
        state = SessionState()

        with patch("savio.web.app.get_video_duration", AsyncMock()) as get_duration:
            values = await app.handle_upload(str(image_path), state)

        assert state.video is None
        assert UPLOAD_REJECTED_MESSAGE in values[UPLOAD_ERROR]
        get_duration.assert_not_called()
        mock_client.generate_structured.assert_not_called()

    @pytest.mark.asyncio
    async def test_upload_too_large_keeps_previous_video(self, app, ready_state, tmp_path):
        big_path = tmp_path / "big.mp4"
        big_path.write_bytes(b"x")
        previous = ready_state.video

        with patch("savio.web.app.os.path.getsize", return_value=101 * 1024 * 1024):
            values = await app.handle_upload(str(big_path), ready_state)

        assert ready_state.video == previous
        assert UPLOAD_REJECTED_MESSAGE in values[UPLOAD_ERROR]

    @pytest.mark.asyncio
    async def test_analyze_streams_running_then_ready(self, app, mock_client, ready_state):
        release = asyncio.Event()

        async def slow_reply(*args, **kwargs):
            await release.wait()
            return ANALYSIS_REPLY

        mock_client.generate_structured.side_effect = slow_reply
        views = app.analyze(ready_state)

        running = await views.__anext__()
        release.set()
        ready = await views.__anext__()

        assert "Analyzing..." in running[STATUS]
        assert "⏳" in running[STATUS]
        assert running[ANALYZE_BUTTON]["interactive"] is False
        assert ready_state.status == OperationStatus.READY
        assert "Ready: 3 creative prompts generated." in ready[STATUS]
        assert ready[SUMMARY] == "### 🧠 AI Summary\nMorning routine vlog"
        assert "- Relatable" in ready[INSIGHTS]
        assert ready[FIRST_SLOT]["visible"] is True
        assert ready[FIRST_SLOT + 2] == "sora text"
        assert ready[FIRST_SLOT + 3] == "veo text"
        assert len(ready[HISTORY]["choices"]) == 1

    @pytest.mark.asyncio
    async def test_analyze_without_video_is_inert(self, app, mock_client):
        views = [values async for values in app.analyze(SessionState())]

        assert len(views) == 1
        mock_client.generate_structured.assert_not_called()

    @pytest.mark.asyncio
    async def test_clone_failure_shows_error(self, app, mock_client, ready_state):
        mock_client.generate_structured.return_value = "garbage"

        views = [values async for values in app.clone(ready_state)]

        assert ready_state.status == OperationStatus.FAILED
        assert "Adaptation failed" in views[-1][ERROR]

    def test_select_history(self, app, ready_state):
        first = ready_state.history.record(make_result("first"))
        ready_state.history.record(make_result("second"))

        values = app.select_history(first.id, ready_state)

        assert ready_state.result.trend_summary == "first"
        assert values[STATUS] == "**Status:** Loaded from history."
        assert [choice[1] for choice in values[HISTORY]["choices"]] == [
            item.id for item in ready_state.history.items
        ]

    def test_select_unknown_history_entry(self, app, ready_state):
        values = app.select_history(123, ready_state)

        assert ready_state.result is None
        assert values[STATUS] == "**Status:** routine.mp4 ready for action."

    def test_update_controls(self, app):
        state = SessionState()

        app.update_controls(
            state, "Cinematic", "Visual Only", "Dramatic", ["Neon", "Natural"], ["Drone"],
            "English", "Calm", True, False, "High Quality"
        )

        assert state.controls.detail_level == "Cinematic"
        assert state.controls.lighting_styles == [LightingStyle.NEON, LightingStyle.NATURAL]
        assert state.controls.camera_styles == [CameraStyle.DRONE]
        assert state.controls.clone_settings.preserve_structure is False
        assert state.controls.performance_mode == "High Quality"

    def test_apply_toggles_keeps_insertion_order(self):
        controls = ControlsState(lighting_styles=["Warm", "Neon"])

        controls = apply_toggles(
            controls, controls.lighting_styles, ["Natural", "Neon"], ControlsState.toggle_lighting_style
        )

        assert controls.lighting_styles == [LightingStyle.NEON, LightingStyle.NATURAL]

    @pytest.mark.asyncio
    async def test_expand_prompt(self, app, mock_client):
        assert await app.expand_prompt("  a cat surfing  ", "sora") == "expanded"
        assert mock_client.generate_text.await_count == 1

    @pytest.mark.asyncio
    async def test_expand_prompt_requires_idea(self, app, mock_client):
        result = await app.expand_prompt("   ", "sora")

        assert result.startswith("⚠️")
        mock_client.generate_text.assert_not_called()

    @pytest.mark.asyncio
    async def test_upload_refused_while_running(self, app, mock_client, ready_state, tmp_path):
        release = asyncio.Event()

        async def slow_reply(*args, **kwargs):
            await release.wait()
            return ANALYSIS_REPLY

        mock_client.generate_structured.side_effect = slow_reply
        views = app.analyze(ready_state)
        await views.__anext__()

        other_path = tmp_path / "other.mp4"
        other_path.write_bytes(b"other_video_data")
        with patch("savio.web.app.get_video_duration", AsyncMock(return_value=3.0)) as get_duration:
            values = await app.handle_upload(str(other_path), ready_state)

        assert UPLOAD_BUSY_MESSAGE in values[UPLOAD_ERROR]
        assert values[ANALYZE_BUTTON]["interactive"] is False
        assert ready_state.video.name == "routine.mp4"
        assert ready_state.status == OperationStatus.RUNNING
        get_duration.assert_not_called()

        # The buttons stay inert, so a clone click does nothing
        clone_views = [values async for values in app.clone(ready_state)]
        assert len(clone_views) == 1

        release.set()
        await views.__anext__()

        assert ready_state.status == OperationStatus.READY
        assert ready_state.error is None
        assert mock_client.generate_structured.await_count == 1
        assert len(ready_state.history) == 1

    @pytest.mark.asyncio
    async def test_webm_with_bad_frame_count_accepted(self, app, tmp_path):
        webm_path = tmp_path / "stream.webm"
        webm_path.write_bytes(b"fake_webm_data")
        capture = Mock()
        capture.get.side_effect = lambda prop: {cv2.CAP_PROP_FPS: 30.0, cv2.CAP_PROP_FRAME_COUNT: -1.0}[prop]
        state = SessionState()

        with patch("savio.tools.video_probe.cv2.VideoCapture", return_value=capture):
            values = await app.handle_upload(str(webm_path), state)

        assert state.video.mime_type == "video/webm"
        assert state.video.duration_seconds == 0.0
        assert values[UPLOAD_ERROR] == ""
        capture.release.assert_called_once()

    @pytest.mark.asyncio
    async def test_unreadable_video_reported(self, app, video_path):
        state = SessionState()

        with patch("savio.web.app.get_video_duration", AsyncMock(side_effect=OSError("corrupt header"))):
            values = await app.handle_upload(video_path, state)

        assert state.video is None
        assert UPLOAD_UNREADABLE_MESSAGE in values[UPLOAD_ERROR]

    @pytest.mark.asyncio
    async def test_copy_all_hashtags(self, app, ready_state):
        views = [values async for values in app.analyze(ready_state)]

        assert views[-1][HASHTAGS_COPY] == "#morningroutine #5amclub"
        assert app.render(SessionState())[HASHTAGS_COPY] == ""

    def test_hashtag_copy_text_empty(self):
        assert hashtag_copy_text(None) == ""
        assert hashtag_copy_text(make_result("no tags")) == ""

    def test_generate_with_js(self):
        js = generate_with_js("https://geminigen.ai/?mode=sora2")

        assert js.startswith("(text) =>")
        assert "navigator.clipboard.writeText(text" in js
        assert 'window.open("https://geminigen.ai/?mode=sora2", \'_blank\'' in js
