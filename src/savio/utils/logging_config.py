"""Centralized logging configuration for SAVIO Trend Studio."""

import logging
import sys
from typing import Optional

from .simple_logger import CleanFormatter


NOISY_LOGGERS = [
    "httpx",
    "httpcore",
    "google.genai",
    "google_genai",
    "google.genai.models",
    "google.auth",
    "urllib3",
    "gradio",
    "uvicorn.access",
]


def configure_logging(
    level: str = "INFO",
    format: Optional[str] = None,
    suppress_external: bool = True,
    clean: bool = False
) -> None:
    """Configure logging for the application.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR)
        format: Custom format string, or None for default
        suppress_external: If True, suppress noisy external library logs
        clean: If True, use the short progress-style formatter instead
    """
    # Default format: levelname | time | filename:lineno | message
    if format is None:
        format = "%(levelname)-5s | %(asctime)s | %(filename)s:%(lineno)d | %(message)s"

    handler = logging.StreamHandler(sys.stdout)
    if clean:
        handler.setFormatter(CleanFormatter())
    else:
        handler.setFormatter(logging.Formatter(format, datefmt="%H:%M:%S"))

    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        handlers=[handler],
        force=True  # Reconfigure if already configured
    )

    if suppress_external:
        for name in NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)

        # Any other google.* logger created so far
        for name in list(logging.root.manager.loggerDict):
            if name.startswith("google."):
                logging.getLogger(name).setLevel(logging.WARNING)
