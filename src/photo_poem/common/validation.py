"""Request field checks run before any upstream call is issued."""
from __future__ import annotations
import base64
import binascii
import logging
import re
from typing import Any

from photo_poem.common.errors import ValidationError
from photo_poem.common.schema import VOICES, AudioRequest

LOGGER = logging.getLogger("photo_poem.common.validation")

DATA_URI_PREFIX = re.compile(r"^data:image/\w+;base64,")
MAX_PHOTO_BYTES = 15 * 1024 * 1024
MIN_SPEED = 0.25
MAX_SPEED = 4.0

def strip_data_uri(photo: str) -> str:
    """Return the bare base64 payload of a photo, without a data:image/...;base64, prefix."""
    return DATA_URI_PREFIX.sub("", photo, count=1)

def photo_payload(photo: str) -> str:
    """Return the base64 payload of a photo with its data-URI prefix and any line wrapping removed."""
    return "".join(strip_data_uri(photo).split())

def _require_text(text: Any, reason: str) -> str:
    if not isinstance(text, str) or not text:
        raise ValidationError(reason)
    return text

def validate_generation_input(text: Any, photo: Any, max_photo_bytes: int = MAX_PHOTO_BYTES) -> None:
    """
    Check the text note and photo of a poem request.

    Args:
        text: User note; must be a non-empty string.
        photo: Base64 image, optionally data-URI prefixed.
        max_photo_bytes: Upper bound on the decoded photo size.

    Raises:
        ValidationError: If either field is missing or malformed.
    """
    LOGGER.debug("Validating input data")
    _require_text(text, "Invalid text input")
    if not isinstance(photo, str) or not photo:
        raise ValidationError("Invalid photo input")
    payload = photo_payload(photo)
    try:
        decoded = base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError):
        raise ValidationError("Photo input is not a valid Base64 string")
    if not decoded:
        raise ValidationError("Invalid photo input")
    if len(decoded) > max_photo_bytes:
        raise ValidationError(
            f"Photo input exceeds the {max_photo_bytes} byte limit"
        )

def validate_audio_input(text: Any, voice: Any, speed: Any) -> AudioRequest:
    """Check an audio request and return it as an AudioRequest."""
    _require_text(text, "Text input must be provided to generate audio")
    if voice not in VOICES:
        raise ValidationError(f"Unsupported voice {voice!r}; expected one of {', '.join(VOICES)}")
    if isinstance(speed, bool) or not isinstance(speed, (int, float)):
        raise ValidationError("Speed must be a number")
    if not MIN_SPEED <= speed <= MAX_SPEED:
        raise ValidationError(f"Speed must be between {MIN_SPEED} and {MAX_SPEED}")
    return AudioRequest(text=text, voice=voice, speed=float(speed))
