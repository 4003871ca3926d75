"""Composite health check across the vision and language upstreams."""
from __future__ import annotations
import logging

from photo_poem.common.errors import UpstreamServiceError
from photo_poem.common.schema import HEALTHY, UNHEALTHY, GenerationParams, HealthStatus
from photo_poem.pipeline.services import LanguageModel, VisionLabeler

LOGGER = logging.getLogger("photo_poem.pipeline.health")

SAMPLE_IMAGE_URL = "https://samples.clarifai.com/metro-north.jpg"
PROBE_MODEL_VERSION = "aa7f35c01e0642fda5cf400f543e7c40"

def probe_vision(vision: VisionLabeler) -> None:
    try:
        vision.predict_concepts(image_url=SAMPLE_IMAGE_URL, version_id=PROBE_MODEL_VERSION)
    except UpstreamServiceError as e:
        raise UpstreamServiceError(e.service, f"Clarifai API check failed: {e.details}")

def probe_language(llm: LanguageModel, params: GenerationParams) -> None:
    try:
        llm.chat(
            [{"role": "user", "content": "Hello"}],
            model=params.chat_model,
            max_tokens=params.health_max_tokens,
        )
    except UpstreamServiceError as e:
        LOGGER.debug("OpenAI probe error: %s", e.details)
        raise UpstreamServiceError(e.service, "OpenAI API check failed")

def check_health(vision: VisionLabeler, llm: LanguageModel, params: GenerationParams | None = None) -> HealthStatus:
    """
    Probe Clarifai, then OpenAI, stopping at the first failure.

    Returns:
        Healthy status when both probes pass, else unhealthy with the failing probe's message.
    """
    params = params or GenerationParams()
    try:
        probe_vision(vision)
        probe_language(llm, params)
    except UpstreamServiceError as e:
        LOGGER.warning("Health check failed: %s", e.details)
        return HealthStatus(UNHEALTHY, e.details)
    return HealthStatus(HEALTHY, "All systems operational")
