"""Gradio web interface for SAVIO Trend Studio."""

import asyncio
import json
import logging
import os
from pathlib import Path
from typing import Any, Callable, List, Optional

import gradio as gr

from ..agents.root_agent import RootAgent
from ..config import settings
from ..exceptions import SavioError, ValidationError
from ..models.analysis import AnalysisResult
from ..models.controls import (
    AnalysisType,
    CameraStyle,
    CloneSettings,
    ControlsState,
    DetailLevel,
    LightingStyle,
    PerformanceMode,
    VideoMood,
    VoiceDialect,
    VoiceTone,
)
from ..models.session_state import OperationKind, SelectedVideo, SessionState
from ..tools.media_encoder import check_upload, guess_mime_type
from ..tools.video_probe import get_video_duration
from ..utils.logging_config import configure_logging


logger = logging.getLogger(__name__)

MAX_PROMPT_SLOTS = 3

UPLOAD_BUSY_MESSAGE = "An operation is running. Wait for it to finish before uploading another video."
UPLOAD_UNREADABLE_MESSAGE = "The video could not be read. Try re-uploading or use another file."

TREND_LEVEL_BADGES = {
    "Very High": "🔥",
    "High": "📈",
    "Medium": "➖",
    "Low": "📉",
}


def _choices(enum_cls) -> List[str]:
    return [member.value for member in enum_cls]


def apply_toggles(
    controls: ControlsState,
    current: list,
    selected: List[str],
    toggle: Callable[[ControlsState, Any], ControlsState]
) -> ControlsState:
    """Replay a checkbox-group change as toggles so insertion order is kept.

    Removed values are toggled off first, then newly selected values are
    toggled on in the order they appear in ``selected``.
    """
    for value in current:
        if value.value not in selected:
            controls = toggle(controls, value)
    for value in selected:
        if value not in [v.value for v in current]:
            controls = toggle(controls, value)
    return controls


def render_summary(result: Optional[AnalysisResult]) -> str:
    if result is None:
        return ""
    return f"### 🧠 AI Summary\n{result.trend_summary}"


def render_insights(result: Optional[AnalysisResult]) -> str:
    if result is None or not result.success_factors:
        return ""
    lines = ["### 🔑 Key Insights"]
    lines.extend(f"- {factor}" for factor in result.success_factors)
    return "\n".join(lines)


def render_keywords(result: Optional[AnalysisResult]) -> str:
    if result is None or not result.top_keywords:
        return ""
    return "### 🏷️ Keywords\n" + " · ".join(f"`{kw}`" for kw in result.top_keywords)


def render_hashtags(result: Optional[AnalysisResult]) -> str:
    if result is None or not result.hashtags:
        return ""
    lines = ["### 📈 Recommended Hashtags"]
    for hashtag in result.hashtags:
        badge = TREND_LEVEL_BADGES.get(hashtag.trend_level.value, "")
        lines.append(f"- **#{hashtag.tag}** {badge} {hashtag.trend_level.value}")
    return "\n".join(lines)


def hashtag_copy_text(result: Optional[AnalysisResult]) -> str:
    """All hashtags as one space-separated line, ready to paste."""
    if result is None:
        return ""
    return " ".join(f"#{''.join(hashtag.tag.split())}" for hashtag in result.hashtags)


def generate_with_js(generation_url: str) -> str:
    """Browser-side handler: copy the prompt text, then open the generator."""
    return (
        "(text) => { navigator.clipboard.writeText(text || '').finally("
        f"() => window.open({json.dumps(generation_url)}, '_blank', 'noopener,noreferrer')); }}"
    )


class SavioApp:
    """Gradio application for SAVIO Trend Studio."""

    def __init__(self, root_agent: Optional[RootAgent] = None):
        """Initialize the application.

        Raises:
            StartupConfigError: If no Gemini credential is configured
        """
        self.root_agent = root_agent or RootAgent()
        logger.info("Initialized SAVIO web app")

    def create_interface(self) -> gr.Blocks:
        """Create the Gradio interface."""
        defaults = ControlsState()

        with gr.Blocks(title="SAVIO Trend Studio", theme=gr.themes.Soft()) as app:
            gr.Markdown(
                """
                # 🎬 SAVIO Trend Studio

                Upload a short video to analyze its trend or clone it into SORA 2 and VEO 3.1 prompts.
                """
            )

            state = gr.State(SessionState())

            with gr.Row():
                with gr.Column(scale=5):
                    video_file = gr.File(
                        label="🎬 اسحب الفيديو هنا أو اضغط للرفع (MP4, MOV, WEBM - Max 100MB)",
                        file_count="single",
                        file_types=[".mp4", ".mov", ".webm"],
                        type="filepath",
                        elem_id="video_upload"
                    )
                    upload_error = gr.Markdown(elem_id="upload_error")

                    optional_context = gr.Textbox(
                        label="Optional Context",
                        placeholder="E.g., product launch teaser for a coffee brand",
                        lines=2
                    )

                    with gr.Accordion("⚙️ Advanced Controls", open=False):
                        detail_level = gr.Dropdown(
                            choices=_choices(DetailLevel), value=defaults.detail_level.value, label="Detail Level"
                        )
                        analysis_type = gr.Dropdown(
                            choices=_choices(AnalysisType), value=defaults.analysis_type.value, label="Analysis Type"
                        )
                        video_mood = gr.Dropdown(
                            choices=_choices(VideoMood), value=defaults.video_mood.value, label="Video Mood"
                        )
                        lighting_styles = gr.CheckboxGroup(
                            choices=_choices(LightingStyle), value=[], label="Lighting & Cinematography"
                        )
                        camera_styles = gr.CheckboxGroup(
                            choices=_choices(CameraStyle), value=[], label="Camera Styles"
                        )
                        with gr.Row():
                            voice_dialect = gr.Dropdown(
                                choices=_choices(VoiceDialect), value=defaults.voice_dialect.value, label="Voice Dialect"
                            )
                            voice_tone = gr.Dropdown(
                                choices=_choices(VoiceTone), value=defaults.voice_tone.value, label="Voice Tone"
                            )
                        with gr.Row():
                            strict_duration = gr.Checkbox(
                                value=defaults.clone_settings.strict_duration, label="Clone: strict duration"
                            )
                            preserve_structure = gr.Checkbox(
                                value=defaults.clone_settings.preserve_structure, label="Clone: preserve structure"
                            )
                        performance_mode = gr.Radio(
                            choices=_choices(PerformanceMode), value=defaults.performance_mode.value, label="Performance Mode"
                        )

                    with gr.Row():
                        analyze_btn = gr.Button(
                            "🚀 Analyze Trend", variant="primary", interactive=False, elem_id="analyze_button"
                        )
                        clone_btn = gr.Button(
                            "📋 Clone Video", variant="secondary", interactive=False, elem_id="clone_button"
                        )

                with gr.Column(scale=4):
                    status_md = gr.Markdown("**Status:** Waiting for upload", elem_id="status_panel")
                    error_md = gr.Markdown(elem_id="error_panel")
                    summary_md = gr.Markdown()
                    insights_md = gr.Markdown()
                    keywords_md = gr.Markdown()
                    hashtags_md = gr.Markdown()
                    hashtags_copy = gr.Textbox(
                        label="Copy All Hashtags", show_copy_button=True, interactive=False, elem_id="hashtags_copy"
                    )

                with gr.Column(scale=3):
                    history_radio = gr.Radio(
                        choices=[], label="🕘 Prompt History", elem_id="history"
                    )

                    gr.Markdown("### 🧩 Generated Prompts")
                    prompt_outputs = []
                    for _ in range(MAX_PROMPT_SLOTS):
                        with gr.Group(visible=False) as group:
                            title = gr.Markdown()
                            sora_box = gr.Textbox(label="SORA 2", lines=8, show_copy_button=True, interactive=True)
                            veo_box = gr.Textbox(label="VEO 3.1", lines=8, show_copy_button=True, interactive=True)
                            with gr.Row():
                                sora_generate = gr.Button("🎬 Generate with SORA 2", size="sm")
                                veo_generate = gr.Button("🎞️ Generate with VEO 3.1", size="sm")
                            gr.Markdown("Generate copies the prompt (with your edits) and opens the generator. Paste it there.")
                        # Runs in the browser only: clipboard + new tab
                        sora_generate.click(fn=None, inputs=[sora_box], js=generate_with_js(settings.sora_generation_url))
                        veo_generate.click(fn=None, inputs=[veo_box], js=generate_with_js(settings.veo_generation_url))
                        prompt_outputs.extend([group, title, sora_box, veo_box])

            with gr.Accordion("✨ Prompt Expander", open=False):
                plain_idea = gr.Textbox(label="Core video idea", lines=2)
                expand_target = gr.Radio(
                    choices=[("SORA 2 (15.00s)", "sora"), ("VEO 3.1 (8.00s)", "veo")],
                    value="sora",
                    label="Target model"
                )
                expand_btn = gr.Button("Expand Prompt")
                expanded_prompt = gr.Textbox(label="Expanded Prompt", lines=10, show_copy_button=True)

            view_outputs = [
                state, status_md, error_md, summary_md, insights_md, keywords_md, hashtags_md,
                analyze_btn, clone_btn, history_radio, upload_error, *prompt_outputs, hashtags_copy
            ]

            # Event handlers
            video_file.upload(
                fn=self.handle_upload,
                inputs=[video_file, state],
                outputs=view_outputs
            )

            control_inputs = [
                state, detail_level, analysis_type, video_mood, lighting_styles, camera_styles,
                voice_dialect, voice_tone, strict_duration, preserve_structure, performance_mode
            ]
            for control in control_inputs[1:]:
                control.change(fn=self.update_controls, inputs=control_inputs, outputs=[state])

            optional_context.change(fn=self.update_context, inputs=[optional_context, state], outputs=[state])

            analyze_btn.click(fn=self.analyze, inputs=[state], outputs=view_outputs)
            clone_btn.click(fn=self.clone, inputs=[state], outputs=view_outputs)
            history_radio.select(fn=self.select_history, inputs=[history_radio, state], outputs=view_outputs)

            expand_btn.click(
                fn=self.expand_prompt,
                inputs=[plain_idea, expand_target],
                outputs=[expanded_prompt]
            )

        return app

    def render(self, state: SessionState, upload_error: str = "") -> list:
        """Render the session state into the values of ``view_outputs``."""
        result = state.result
        status_line = f"**Status:** {state.status_message}"
        if state.is_running:
            status_line += "\n\n⏳ SAVIO is thinking... This might take a moment, especially with High Quality mode."

        history_choices = [(item.label, item.id) for item in state.history.items]

        values = [
            state,
            status_line,
            f"⚠️ {state.error}" if state.error else "",
            render_summary(result),
            render_insights(result),
            render_keywords(result),
            render_hashtags(result),
            gr.update(interactive=state.can_start),
            gr.update(interactive=state.can_start),
            gr.update(choices=history_choices, value=None),
            upload_error,
        ]

        prompts = result.prompts if result else []
        for i in range(MAX_PROMPT_SLOTS):
            if i < len(prompts):
                prompt = prompts[i]
                values.extend([
                    gr.update(visible=True),
                    f"**{prompt.label}**\n\n{prompt.plain_prompt}",
                    prompt.sora_prompt,
                    prompt.veo_prompt,
                ])
            else:
                values.extend([gr.update(visible=False), "", "", ""])
        values.append(hashtag_copy_text(result))
        return values

    async def handle_upload(self, file_path: Optional[str], state: SessionState) -> list:
        """Validate an upload and make it the source video."""
        if not file_path:
            return self.render(state)
        if state.is_running:
            logger.info("Ignoring upload while an operation is running")
            return self.render(state, upload_error=f"⚠️ {UPLOAD_BUSY_MESSAGE}")

        name = Path(file_path).name
        size_bytes = os.path.getsize(file_path)
        mime_type = guess_mime_type(file_path)
        try:
            check_upload(name, size_bytes, mime_type)
        except ValidationError as e:
            return self.render(state, upload_error=f"⚠️ {e.message}")

        try:
            duration = await get_video_duration(file_path)
        except Exception as e:
            logger.error(f"Could not read video {name}: {e}")
            return self.render(state, upload_error=f"⚠️ {UPLOAD_UNREADABLE_MESSAGE}")

        selected = state.select_video(SelectedVideo(
            path=file_path,
            name=name,
            mime_type=mime_type,
            size_bytes=size_bytes,
            duration_seconds=duration
        ))
        if not selected:
            return self.render(state, upload_error=f"⚠️ {UPLOAD_BUSY_MESSAGE}")
        logger.info(f"Selected {name} ({size_bytes / (1024 * 1024):.1f} MB, {duration:.2f}s)")
        return self.render(state)

    def update_controls(
        self,
        state: SessionState,
        detail_level: str,
        analysis_type: str,
        video_mood: str,
        lighting_styles: List[str],
        camera_styles: List[str],
        voice_dialect: str,
        voice_tone: str,
        strict_duration: bool,
        preserve_structure: bool,
        performance_mode: str
    ) -> SessionState:
        """Fold the current widget values into the session controls."""
        controls = state.controls.update(
            detail_level=detail_level,
            analysis_type=analysis_type,
            video_mood=video_mood,
            voice_dialect=voice_dialect,
            voice_tone=voice_tone,
            clone_settings=CloneSettings(
                strict_duration=strict_duration,
                preserve_structure=preserve_structure
            ),
            performance_mode=performance_mode,
        )
        controls = apply_toggles(
            controls, controls.lighting_styles, lighting_styles or [], ControlsState.toggle_lighting_style
        )
        controls = apply_toggles(
            controls, controls.camera_styles, camera_styles or [], ControlsState.toggle_camera_style
        )
        state.controls = controls
        return state

    def update_context(self, optional_context: str, state: SessionState) -> SessionState:
        state.optional_context = optional_context or ""
        return state

    async def analyze(self, state: SessionState):
        """Run the analyze operation, streaming the running and final views."""
        async for values in self._run_operation(state, OperationKind.ANALYZE):
            yield values

    async def clone(self, state: SessionState):
        """Run the clone operation, streaming the running and final views."""
        async for values in self._run_operation(state, OperationKind.CLONE):
            yield values

    async def _run_operation(self, state: SessionState, action: OperationKind):
        if not state.can_start:
            yield self.render(state)
            return

        if action == OperationKind.ANALYZE:
            task = asyncio.create_task(self.root_agent.run_analyze(state))
        else:
            task = asyncio.create_task(self.root_agent.run_clone(state))

        # Let the task enter RUNNING before showing the busy view.
        await asyncio.sleep(0)
        yield self.render(state)

        await task
        yield self.render(state)

    def select_history(self, item_id: Optional[int], state: SessionState) -> list:
        """Show a stored result again."""
        if item_id is None or state.is_running:
            return self.render(state)
        try:
            state.select_history(int(item_id))
        except KeyError:
            logger.warning(f"History entry {item_id} no longer exists")
        return self.render(state)

    async def expand_prompt(self, plain_idea: str, target: str) -> str:
        """Expand a plain idea into a full model prompt."""
        if not plain_idea or not plain_idea.strip():
            return "⚠️ Please enter a core video idea first."
        try:
            return await self.root_agent.expand_prompt(plain_idea.strip(), target)
        except SavioError as e:
            logger.error(f"Prompt expansion failed: {e.message}")
            return f"❌ {e.message}"


def launch_app(share: bool = False, port: int = 7860, log_level: Optional[str] = None):
    """Launch the Gradio application.

    Args:
        share: If True, create a public share link
        port: Port to run the server on
        log_level: Overrides the configured log level

    Raises:
        StartupConfigError: If no Gemini credential is configured
    """
    settings.require_api_key()
    level = log_level or settings.log_level
    # Debug runs keep file:line detail; otherwise show the short progress lines
    configure_logging(level=level, clean=level.upper() != "DEBUG")

    app_instance = SavioApp()
    interface = app_instance.create_interface()
    interface.launch(
        share=share,
        server_port=port,
        server_name="0.0.0.0",
        show_error=True
    )


if __name__ == "__main__":
    launch_app(share=False)
