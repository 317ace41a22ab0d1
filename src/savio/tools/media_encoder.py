"""Upload intake checks and inline media encoding for Gemini requests."""

import base64
import logging
import mimetypes
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from ..config import settings
from ..exceptions import ValidationError


logger = logging.getLogger(__name__)

# Same message for both violations, as shown next to the upload area.
UPLOAD_REJECTED_MESSAGE = "حجم الفيديو كبير أو نوع الملف غير مدعوم. جرب mp4/mov وبحد أقصى 100MB."

_EXTENSION_MIME_TYPES = {
    ".mp4": "video/mp4",
    ".mov": "video/quicktime",
    ".webm": "video/webm",
}


class InlineMedia(BaseModel):
    """Transport-ready representation of a media file."""
    model_config = ConfigDict(frozen=True)

    mime_type: str = Field(..., description="MIME type tag")
    data: str = Field(..., description="Base64-encoded file content")

    def to_bytes(self) -> bytes:
        """Decode the payload back to raw bytes."""
        return base64.b64decode(self.data)


def guess_mime_type(path: str) -> Optional[str]:
    """Guess a video MIME type from the file name."""
    suffix = Path(path).suffix.lower()
    if suffix in _EXTENSION_MIME_TYPES:
        return _EXTENSION_MIME_TYPES[suffix]
    mime_type, _ = mimetypes.guess_type(path)
    return mime_type


def check_upload(name: str, size_bytes: int, mime_type: Optional[str]) -> None:
    """Reject uploads that are too large or not a supported video type.

    Args:
        name: File name, used only for logging
        size_bytes: File size in bytes
        mime_type: Declared or guessed MIME type

    Raises:
        ValidationError: If the size exceeds the cap or the type is not allowed
    """
    if size_bytes > settings.max_upload_bytes:
        logger.warning(f"Rejected upload {name}: {size_bytes} bytes exceeds {settings.max_upload_bytes}")
        raise ValidationError(
            UPLOAD_REJECTED_MESSAGE,
            details={"file": name, "size_bytes": size_bytes, "max_bytes": settings.max_upload_bytes},
        )
    if mime_type not in settings.allowed_mime_types:
        logger.warning(f"Rejected upload {name}: unsupported type {mime_type}")
        raise ValidationError(
            UPLOAD_REJECTED_MESSAGE,
            details={"file": name, "mime_type": mime_type, "allowed": list(settings.allowed_mime_types)},
        )


def encode_media(path: str, mime_type: Optional[str] = None) -> InlineMedia:
    """Read a whole file and encode it for an inline request part.

    Args:
        path: Path of the file to encode
        mime_type: MIME type tag; guessed from the name when omitted

    Returns:
        InlineMedia with the MIME type and base64 text

    Raises:
        OSError: If the file cannot be read
    """
    with open(path, "rb") as f:
        raw = f.read()

    mime_type = mime_type or guess_mime_type(path) or "video/mp4"
    logger.debug(f"Encoded {Path(path).name}: {len(raw)} bytes as {mime_type}")
    return InlineMedia(mime_type=mime_type, data=base64.b64encode(raw).decode("ascii"))
