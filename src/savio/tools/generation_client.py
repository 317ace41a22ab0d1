"""Gemini generation client: one remote call per user action."""

import asyncio
import logging
from typing import Optional

from google import genai
from google.genai import types

from ..config import settings
from ..exceptions import TransportError
from ..models.controls import PerformanceMode
from ..tools.media_encoder import InlineMedia
from ..tools.prompt_builder import InstructionSet
from ..utils.simple_logger import log_update


logger = logging.getLogger(__name__)


class GenerationClient:
    """Thin wrapper around the Gemini SDK.

    Issues exactly one ``generate_content`` call per method invocation.
    There are no retries; a timeout applies only when configured.
    """

    def __init__(self, api_key: Optional[str] = None, timeout_seconds: Optional[float] = None):
        """Initialize the client.

        Args:
            api_key: Gemini API key; defaults to the configured credential
            timeout_seconds: Per-request timeout; defaults to the configured value

        Raises:
            StartupConfigError: If no API key is available
        """
        self._api_key = api_key or settings.require_api_key()
        timeout = timeout_seconds if timeout_seconds is not None else settings.request_timeout_seconds

        http_options = None
        if timeout:
            http_options = types.HttpOptions(timeout=int(timeout * 1000))
        self._client = genai.Client(api_key=self._api_key, http_options=http_options)
        logger.info(f"Initialized Gemini client (timeout: {timeout or 'none'})")

    @staticmethod
    def select_model(performance_mode: PerformanceMode) -> str:
        """Pick the model tier for a performance mode."""
        return settings.get_model_name(PerformanceMode(performance_mode).value)

    async def generate_structured(
        self,
        media: InlineMedia,
        instructions: InstructionSet,
        response_schema: types.Schema,
        performance_mode: PerformanceMode,
    ) -> str:
        """Send the media and instructions, asking for a schema-constrained JSON reply.

        Returns:
            Raw reply text (JSON)

        Raises:
            TransportError: If the call fails or returns no text
        """
        model = self.select_model(performance_mode)
        data = await asyncio.get_event_loop().run_in_executor(None, media.to_bytes)
        video_part = types.Part.from_bytes(data=data, mime_type=media.mime_type)
        config = types.GenerateContentConfig(
            system_instruction=instructions.system_instruction,
            response_mime_type="application/json",
            response_schema=response_schema,
        )

        log_update(logger, f"Sending {media.mime_type} to {model}...")
        return await self._generate(model, [video_part, instructions.user_instruction], config)

    async def generate_text(self, instructions: InstructionSet, model: Optional[str] = None) -> str:
        """Plain-text generation without media or schema.

        Raises:
            TransportError: If the call fails or returns no text
        """
        model = model or settings.expand_model
        config = types.GenerateContentConfig(system_instruction=instructions.system_instruction)
        log_update(logger, f"Sending text request to {model}...")
        return await self._generate(model, instructions.user_instruction, config)

    async def _generate(self, model: str, contents, config: types.GenerateContentConfig) -> str:
        try:
            response = await asyncio.get_event_loop().run_in_executor(
                None,
                lambda: self._client.models.generate_content(
                    model=model,
                    contents=contents,
                    config=config,
                ),
            )
        except Exception as e:
            logger.error(f"Gemini API call failed: {e}")
            raise TransportError(model, str(e)) from e

        text = response.text
        if not text:
            logger.error(f"Gemini API returned an empty response from {model}")
            raise TransportError(model, "Empty response")
        return text
