"""RootAgent - Central orchestrator for SAVIO Trend Studio."""

import asyncio
import logging
from typing import Any, Dict, Optional

from ..exceptions import ResponseParseError, SavioError
from ..models.analysis import AnalysisResult
from ..models.controls import ControlsState
from ..models.session_state import OperationKind, SelectedVideo, SessionState
from ..tools.generation_client import GenerationClient
from ..tools.media_encoder import InlineMedia, encode_media
from ..tools.prompt_builder import (
    build_analyze_instructions,
    build_clone_instructions,
    build_expand_instructions,
)
from ..tools.response_mapper import parse_analysis_response, parse_clone_response
from ..tools.response_schemas import ANALYSIS_OUTPUT_SCHEMA, CLONE_OUTPUT_SCHEMA
from ..utils.simple_logger import log_start, log_update, log_complete

logger = logging.getLogger(__name__)


# User-facing status lines per operation and outcome
STATUS_MESSAGES = {
    OperationKind.ANALYZE: {
        "running": "Analyzing... SAVIO is extracting speech and frames.",
        "ready": "Ready: 3 creative prompts generated.",
        "failed": "Analysis failed. Try re-uploading or adjust controls.",
    },
    OperationKind.CLONE: {
        "running": "Cloning... SAVIO is replicating the video structure.",
        "ready": "Ready: 1:1 clone prompts generated.",
        "failed": "Cloning failed. The video might be too complex.",
    },
}
PARSE_FAILED_MESSAGE = "The AI's response could not be read. Please try again."


class RootAgent:
    """Central orchestrator for the analyze, clone and expand operations."""

    def __init__(self, client: Optional[GenerationClient] = None):
        """Initialize root agent.

        Args:
            client: Generation client; created from settings when omitted

        Raises:
            StartupConfigError: If no Gemini credential is configured
        """
        self.client = client or GenerationClient()
        logger.info("RootAgent initialized")

    async def analyze_video(
        self,
        video: SelectedVideo,
        optional_context: str,
        controls: ControlsState,
    ) -> AnalysisResult:
        """Run the trend analysis for a video.

        Args:
            video: Accepted upload
            optional_context: Free-text hints from the user
            controls: Advanced controls

        Returns:
            AnalysisResult with up to three creative prompts
        """
        log_start(logger, f"Analyzing video: {video.name}")
        media = await self._encode(video)
        instructions = build_analyze_instructions(controls, optional_context, video.duration_seconds)

        response_text = await self.client.generate_structured(
            media, instructions, ANALYSIS_OUTPUT_SCHEMA, controls.performance_mode
        )

        log_update(logger, "Parsing analysis results...")
        result = parse_analysis_response(response_text)
        log_complete(logger, f"Analysis complete - {len(result.prompts)} prompts, {len(result.hashtags)} hashtags")
        return result

    async def clone_video(self, video: SelectedVideo, controls: ControlsState) -> AnalysisResult:
        """Produce one SORA 2 clone prompt and one VEO 3.1 adaptation.

        Args:
            video: Accepted upload
            controls: Advanced controls

        Returns:
            AnalysisResult holding a single 'clone-1' prompt
        """
        log_start(logger, f"Cloning video: {video.name}")
        media = await self._encode(video)
        instructions = build_clone_instructions(controls, video.duration_seconds)

        response_text = await self.client.generate_structured(
            media, instructions, CLONE_OUTPUT_SCHEMA, controls.performance_mode
        )

        log_update(logger, "Parsing clone results...")
        result = parse_clone_response(response_text, video.duration_seconds)
        log_complete(logger, f"Clone complete - {result.scene_count} scenes")
        return result

    async def expand_prompt(self, plain_prompt: str, target: str) -> str:
        """Expand a plain idea into a full SORA 2 ('sora') or VEO 3.1 ('veo') prompt."""
        log_start(logger, f"Expanding prompt for {target}")
        instructions = build_expand_instructions(plain_prompt, target)
        text = await self.client.generate_text(instructions)
        log_complete(logger, f"Expanded prompt ({len(text)} chars)")
        return text

    async def _encode(self, video: SelectedVideo) -> InlineMedia:
        # Whole-file read and base64 encode stay off the event loop.
        loop = asyncio.get_event_loop()
        return await loop.run_in_executor(None, encode_media, video.path, video.mime_type)

    async def run_analyze(self, state: SessionState) -> Dict[str, Any]:
        """Trigger boundary for the analyze button."""
        return await self._run(state, OperationKind.ANALYZE)

    async def run_clone(self, state: SessionState) -> Dict[str, Any]:
        """Trigger boundary for the clone button."""
        return await self._run(state, OperationKind.CLONE)

    async def _run(self, state: SessionState, action: OperationKind) -> Dict[str, Any]:
        """Run one operation against the session state.

        Never raises for operation failures: they are logged and turned into
        a FAILED state with a user-facing message plus the raw detail.

        Returns:
            Result dictionary with status 'success', 'error' or 'ignored'
        """
        messages = STATUS_MESSAGES[action]
        if not state.begin(action, messages["running"]):
            logger.info(f"Ignoring {action.value} trigger (no video or operation in flight)")
            return {"status": "ignored"}

        # Snapshot the inputs so the running operation sees one consistent view.
        video = state.video
        controls = state.controls

        try:
            if action == OperationKind.ANALYZE:
                result = await self.analyze_video(video, state.optional_context, controls)
            else:
                result = await self.clone_video(video, controls)
        except ResponseParseError as e:
            logger.error(f"{action.value} failed to parse response: {e.message}")
            state.fail(PARSE_FAILED_MESSAGE, e.message)
            return {"status": "error", "error": e.message, "error_code": e.error_code}
        except SavioError as e:
            logger.error(f"{action.value} failed: {e.message}")
            state.fail(messages["failed"], e.message)
            return {"status": "error", "error": e.message, "error_code": e.error_code}
        except Exception as e:
            logger.exception(f"{action.value} failed unexpectedly: {e}")
            state.fail(messages["failed"], str(e))
            return {"status": "error", "error": str(e), "error_code": "INTERNAL_ERROR"}

        item = state.complete(result, messages["ready"])
        return {"status": "success", "result": result, "history_id": item.id}
