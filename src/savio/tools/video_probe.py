"""Video metadata probing with OpenCV."""

import asyncio
import logging
import math

import cv2


logger = logging.getLogger(__name__)


def get_duration_sync(video_path: str) -> float:
    """Synchronously get video duration in seconds (0.0 if unknown).

    Streamed containers such as webm often report a negative or missing
    frame count; those probe as 0.0.
    """
    cap = cv2.VideoCapture(video_path)
    try:
        fps = cap.get(cv2.CAP_PROP_FPS)
        frame_count = cap.get(cv2.CAP_PROP_FRAME_COUNT)
    finally:
        cap.release()

    if not fps or fps <= 0 or not math.isfinite(fps):
        return 0.0
    duration = frame_count / fps
    if not math.isfinite(duration) or duration <= 0:
        logger.warning(f"Unreliable frame count for {video_path}: {frame_count} at {fps} fps")
        return 0.0
    return duration


async def get_video_duration(video_path: str) -> float:
    """Get video duration in seconds without blocking the event loop."""
    loop = asyncio.get_event_loop()
    duration = await loop.run_in_executor(None, get_duration_sync, video_path)
    logger.debug(f"Probed duration of {video_path}: {duration:.2f}s")
    return duration
