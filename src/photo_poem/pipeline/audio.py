"""Audio pipeline: synthesize speech and return it base64-encoded."""
from __future__ import annotations
import base64
import logging
import tempfile
from pathlib import Path

from photo_poem.common.errors import InternalError
from photo_poem.common.schema import DEFAULT_SPEED, DEFAULT_VOICE, AudioResult, GenerationParams
from photo_poem.common.validation import validate_audio_input
from photo_poem.pipeline.services import LanguageModel

LOGGER = logging.getLogger("photo_poem.pipeline.audio")

def synthesize_audio(
    llm: LanguageModel,
    text: object,
    voice: object = DEFAULT_VOICE,
    speed: object = DEFAULT_SPEED,
    params: GenerationParams | None = None,
) -> AudioResult:
    """
    Render text as speech.

    The audio is written to a per-request temporary file and read back before encoding,
    so the payload is exactly the bytes that landed on disk. The directory is removed
    on every exit path.

    Raises:
        ValidationError: Missing text, unknown voice or out-of-range speed.
        UpstreamServiceError: The speech call failed.
        InternalError: The temporary file could not be written or read.
    """
    params = params or GenerationParams()
    request = validate_audio_input(text, voice, speed)
    LOGGER.info("Synthesizing audio: voice=%s speed=%s chars=%d", request.voice, request.speed, len(request.text))

    audio = llm.speech(
        request.text,
        voice=request.voice,
        speed=request.speed,
        model=params.tts_model,
        response_format=params.tts_format,
    )

    try:
        with tempfile.TemporaryDirectory(prefix="photo_poem_") as tmp:
            speech_file = Path(tmp) / f"speech.{params.tts_format}"
            speech_file.write_bytes(audio)
            LOGGER.debug("Speech saved to %s (%d bytes)", speech_file, len(audio))
            encoded = base64.b64encode(speech_file.read_bytes()).decode("ascii")
    except OSError as e:
        LOGGER.error("Audio artifact I/O failed: %s", e)
        raise InternalError(f"Failed to store synthesized audio: {e}")

    return AudioResult(audio_content=encoded)
