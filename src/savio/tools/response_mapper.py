"""Parse Gemini's structured replies into AnalysisResult objects."""

import json
import logging
from typing import Any, Dict

from pydantic import ValidationError as PydanticValidationError

from ..exceptions import ResponseParseError
from ..models.analysis import AnalysisResult, ClonePayload, Prompt
from ..tools.prompt_builder import VEO_DURATION, format_duration


logger = logging.getLogger(__name__)

ANALYSIS_PARSE_ERROR = "Analysis failed: Could not parse the AI's response."
CLONE_PARSE_ERROR = "Adaptation failed: Could not parse the AI's response."

CLONE_PROMPT_ID = "clone-1"
CLONE_GENRE = "Video Clone & Adaptation"


def _load_json_object(response_text: str) -> Dict[str, Any]:
    """Decode the reply text; anything but a JSON object is rejected."""
    data = json.loads((response_text or "").strip())
    if not isinstance(data, dict):
        raise ValueError(f"Expected a JSON object, got {type(data).__name__}")
    # Explicit nulls fall back to the field defaults.
    return {key: value for key, value in data.items() if value is not None}


def parse_analysis_response(response_text: str) -> AnalysisResult:
    """Map an analyze reply to an AnalysisResult.

    Requires trend_summary, prompts, hashtags and scene_count; all other
    fields default to "", 0.0 or [].

    Raises:
        ResponseParseError: If the text is not valid JSON or misses a required field
    """
    try:
        data = _load_json_object(response_text)
        return AnalysisResult.model_validate(data)
    except (ValueError, PydanticValidationError) as e:
        logger.error(f"Failed to parse Gemini response: {e}")
        logger.debug(f"Response text: {response_text}")
        raise ResponseParseError(ANALYSIS_PARSE_ERROR, raw_text=response_text, reason=str(e)) from e


def parse_clone_response(response_text: str, duration: float) -> AnalysisResult:
    """Map a clone reply to a full AnalysisResult.

    The descriptive fields are fixed text derived from the operation, not
    from the model. The two prompts become a single Prompt with id 'clone-1'.

    Raises:
        ResponseParseError: If the text is not valid JSON or misses a required field
    """
    try:
        payload = ClonePayload.model_validate(_load_json_object(response_text))
    except (ValueError, PydanticValidationError) as e:
        logger.error(f"Failed to parse Gemini response for clone: {e}")
        logger.debug(f"Response text: {response_text}")
        raise ResponseParseError(CLONE_PARSE_ERROR, raw_text=response_text, reason=str(e)) from e

    precise_duration = format_duration(duration)
    return AnalysisResult(
        trend_summary=(
            f"Generated one SORA 2 clone prompt ({precise_duration}s) and one VEO 3.1 "
            f"adapted prompt ({VEO_DURATION}s) from the source video."
        ),
        genre=CLONE_GENRE,
        estimated_duration_seconds=duration,
        scene_count=payload.scene_count,
        audience_demographics="N/A",
        success_factors=[
            "Exact duration matching (SORA)",
            "8s adaptation (VEO)",
            "Cinematic rhythm replication",
        ],
        top_keywords=["video clone", f"SORA {precise_duration}s", f"VEO {VEO_DURATION}s"],
        hook_suggestion="Adapted from original video.",
        prompts=[
            Prompt(
                id=CLONE_PROMPT_ID,
                label="Adapted Video Prompts (SORA & VEO)",
                plain_prompt=(
                    f"SORA 2 prompt is a clone ({precise_duration}s), "
                    f"VEO 3.1 prompt is an adaptation ({VEO_DURATION}s)."
                ),
                sora_prompt=payload.sora_prompt_clone,
                veo_prompt=payload.veo_prompt_clone,
            )
        ],
        hashtags=payload.hashtags,
    )
