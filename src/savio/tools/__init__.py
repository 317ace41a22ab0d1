"""Tools behind the SAVIO analyze and clone operations."""

from .generation_client import GenerationClient
from .media_encoder import InlineMedia, check_upload, encode_media, guess_mime_type
from .prompt_builder import (
    InstructionSet,
    build_analyze_instructions,
    build_clone_instructions,
    build_controls_context,
    build_expand_instructions,
)
from .response_mapper import parse_analysis_response, parse_clone_response

__all__ = [
    "GenerationClient",
    "InlineMedia",
    "check_upload",
    "encode_media",
    "guess_mime_type",
    "InstructionSet",
    "build_analyze_instructions",
    "build_clone_instructions",
    "build_controls_context",
    "build_expand_instructions",
    "parse_analysis_response",
    "parse_clone_response",
]
