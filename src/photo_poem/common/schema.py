"""Dataclasses for values passed between the pipeline stages."""
from __future__ import annotations
from dataclasses import dataclass, field

from photo_poem.common.templates import PROMPT_TEMPLATE

HEALTHY = "healthy"
UNHEALTHY = "unhealthy"

VOICES = ("alloy", "ash", "coral", "echo", "fable", "nova", "onyx", "sage", "shimmer")
DEFAULT_VOICE = "alloy"
DEFAULT_SPEED = 1.0

LabelSet = tuple[str, ...]

@dataclass(frozen=True)
class PoemResult:
    """Text produced by one successful poem pipeline run."""
    generated_text: str
    labels: LabelSet = ()
    latency_ms: int = 0

@dataclass(frozen=True)
class AudioRequest:
    text: str
    voice: str = DEFAULT_VOICE
    speed: float = DEFAULT_SPEED

@dataclass(frozen=True)
class AudioResult:
    """Base64-encoded speech audio."""
    audio_content: str

@dataclass(frozen=True)
class HealthStatus:
    status: str
    message: str

    @property
    def healthy(self) -> bool:
        return self.status == HEALTHY

@dataclass(frozen=True)
class GenerationParams:
    """Sampling and model parameters for the OpenAI calls."""
    chat_model: str = "gpt-3.5-turbo"
    max_tokens: int = 300
    temperature: float = 0.8
    top_p: float = 0.9
    tts_model: str = "tts-1"
    tts_format: str = "mp3"
    health_max_tokens: int = 5
    system_prompt: str = field(
        default="You are a poetic and insightful assistant. "
        "Ensure the story is complete and does not end abruptly."
    )
    prompt_template: str = PROMPT_TEMPLATE
