"""Configuration management for SAVIO Trend Studio."""

from typing import List, Optional
from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import StartupConfigError


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Gemini API
    gemini_api_key: Optional[str] = Field(
        None,
        validation_alias=AliasChoices("gemini_api_key", "api_key"),
    )
    fast_model: str = "gemini-2.5-flash"
    quality_model: str = "gemini-2.5-pro"
    expand_model: str = "gemini-2.5-flash"
    request_timeout_seconds: Optional[float] = None  # unset: wait for the provider

    # Upload intake
    max_upload_bytes: int = 100 * 1024 * 1024  # 100MB
    allowed_mime_types: List[str] = ["video/mp4", "video/quicktime", "video/webm"]

    # Session
    history_limit: int = 3

    # External generators the prompts are pasted into
    sora_generation_url: str = "https://geminigen.ai/?mode=sora2"
    veo_generation_url: str = "https://geminigen.ai/?mode=veo3.1"

    # Development
    debug: bool = False
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_prefix="SAVIO_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    def get_model_name(self, performance_mode: str) -> str:
        """Get the Gemini model variant for a performance mode."""
        if performance_mode == "High Quality":
            return self.quality_model
        return self.fast_model

    def validate_api_keys(self) -> bool:
        """Check if the Gemini credential is configured."""
        return bool(self.gemini_api_key)

    def require_api_key(self) -> str:
        """Return the Gemini credential or fail the startup."""
        if not self.validate_api_keys():
            raise StartupConfigError(
                "gemini_api_key",
                "GEMINI_API_KEY (or API_KEY) environment variable not set",
            )
        return self.gemini_api_key


# Global settings instance
settings = Settings()
