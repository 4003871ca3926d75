"""Poem pipeline: validate, label the photo, compose a prompt, generate text, cache it."""
from __future__ import annotations
import logging
import time
from dataclasses import replace

from photo_poem.common.cache import LatestResultCache
from photo_poem.common.errors import UpstreamServiceError
from photo_poem.common.schema import GenerationParams, LabelSet, PoemResult
from photo_poem.common.templates import LABEL_SEPARATOR, compose_prompt
from photo_poem.common.validation import photo_payload, validate_generation_input
from photo_poem.pipeline.services import LanguageModel, Services, VisionLabeler
from photo_poem.upstream.openai_client import SERVICE as OPENAI_SERVICE

LOGGER = logging.getLogger("photo_poem.pipeline.poem")

def extract_labels(vision: VisionLabeler, photo: str) -> LabelSet:
    """Label a base64 photo (data-URI prefix and line wrapping allowed) with the vision service."""
    labels = vision.predict_concepts(image_base64=photo_payload(photo))
    LOGGER.info("Labels generated from image: %s", LABEL_SEPARATOR.join(labels))
    return labels

def generate_text(
    llm: LanguageModel,
    cache: LatestResultCache,
    prompt: str,
    params: GenerationParams,
) -> PoemResult:
    """
    Generate prose for a prompt and record it as the latest result.

    The cache is written only after a non-empty completion comes back.

    Raises:
        UpstreamServiceError: If the call fails or returns no text.
    """
    messages = [
        {"role": "system", "content": params.system_prompt},
        {"role": "user", "content": prompt},
    ]
    text = llm.chat(
        messages,
        model=params.chat_model,
        max_tokens=params.max_tokens,
        temperature=params.temperature,
        top_p=params.top_p,
    ).strip()
    if not text:
        raise UpstreamServiceError(OPENAI_SERVICE, "Empty completion")
    cache.set(text)
    LOGGER.info("Poem generated: %s", text)
    return PoemResult(generated_text=text)

def generate_poem(services: Services, text: str, photo: str) -> PoemResult:
    """Run the full poem pipeline for one request."""
    validate_generation_input(text, photo)

    start = time.time()
    labels = extract_labels(services.vision, photo)
    prompt = compose_prompt(labels, text, services.params.prompt_template)
    result = generate_text(services.llm, services.cache, prompt, services.params)
    latency = int((time.time() - start) * 1000)
    return replace(result, labels=labels, latency_ms=latency)
