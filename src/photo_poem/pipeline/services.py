"""Upstream capability interfaces and the container injected into request handlers."""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Protocol

from photo_poem.common.cache import LatestResultCache
from photo_poem.common.config import Settings
from photo_poem.common.schema import GenerationParams, LabelSet
from photo_poem.upstream.clarifai_client import ClarifaiClient
from photo_poem.upstream.openai_client import OpenAIClient

class VisionLabeler(Protocol):
    def predict_concepts(
        self,
        image_base64: str | None = None,
        image_url: str | None = None,
        version_id: str | None = None,
    ) -> LabelSet: ...

class LanguageModel(Protocol):
    def chat(
        self,
        messages: list[dict[str, str]],
        model: str,
        max_tokens: int,
        temperature: float | None = None,
        top_p: float | None = None,
    ) -> str: ...

    def speech(self, text: str, voice: str, speed: float, model: str, response_format: str = "mp3") -> bytes: ...

@dataclass
class Services:
    vision: VisionLabeler
    llm: LanguageModel
    cache: LatestResultCache = field(default_factory=LatestResultCache)
    params: GenerationParams = field(default_factory=GenerationParams)

def build_services(settings: Settings) -> Services:
    """Wire the real Clarifai and OpenAI clients from settings."""
    vision = ClarifaiClient(
        api_key=settings.clarifai_api_key,
        user_id=settings.clarifai_user_id,
        app_id=settings.clarifai_app_id,
        model_id=settings.clarifai_model_id,
        base_url=settings.clarifai_base_url,
        timeout=settings.http_timeout_s,
    )
    llm = OpenAIClient(
        api_key=settings.openai_api_key,
        base_url=settings.openai_base_url,
        timeout=settings.http_timeout_s,
    )
    return Services(vision=vision, llm=llm, params=settings.generation)
