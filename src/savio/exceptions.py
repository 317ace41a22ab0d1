"""Custom exceptions for SAVIO Trend Studio."""

from typing import Optional


class SavioError(Exception):
    """Base exception for all SAVIO failures."""

    def __init__(self, message: str, error_code: str, details: Optional[dict] = None):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)


class ValidationError(SavioError):
    """Raised when an upload is rejected (wrong type or too large)."""

    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__(message, "VALIDATION_ERROR", details)


class TransportError(SavioError):
    """Raised when the remote generation call itself fails."""

    def __init__(self, model: str, reason: str = "Generation request failed"):
        message = f"Generation request to {model} failed: {reason}"
        details = {"model": model, "reason": reason}
        super().__init__(message, "TRANSPORT_ERROR", details)


class ResponseParseError(SavioError):
    """Raised when the structured reply cannot be parsed or misses required fields."""

    def __init__(self, message: str, raw_text: Optional[str] = None, reason: Optional[str] = None):
        self.raw_text = raw_text
        details = {"reason": reason} if reason else None
        super().__init__(message, "RESPONSE_PARSE_ERROR", details)


class StartupConfigError(SavioError):
    """Raised when a required setting is missing at startup."""

    def __init__(self, setting: str, reason: str):
        message = f"Configuration error for {setting}: {reason}"
        details = {"setting": setting, "reason": reason}
        super().__init__(message, "STARTUP_CONFIG_ERROR", details)
