from __future__ import annotations

from photo_poem.common.errors import UpstreamServiceError
from photo_poem.pipeline.health import PROBE_MODEL_VERSION, SAMPLE_IMAGE_URL, check_health


def test_healthy_when_both_probes_pass(vision, llm) -> None:  # noqa: ANN001
    status = check_health(vision, llm)
    assert status.status == "healthy"
    assert status.message == "All systems operational"
    assert vision.calls == [{"image_base64": None, "image_url": SAMPLE_IMAGE_URL, "version_id": PROBE_MODEL_VERSION}]
    assert len(llm.chat_calls) == 1
    assert llm.chat_calls[0]["max_tokens"] == 5


def test_vision_failure_short_circuits(vision, llm) -> None:  # noqa: ANN001
    vision.error = UpstreamServiceError("Clarifai", "Invalid API key")
    status = check_health(vision, llm)
    assert status.status == "unhealthy"
    assert status.message == "Clarifai API check failed: Invalid API key"
    assert llm.chat_calls == []


def test_language_failure_reported(vision, llm) -> None:  # noqa: ANN001
    llm.chat_error = UpstreamServiceError("OpenAI", "HTTP 401")
    status = check_health(vision, llm)
    assert status.status == "unhealthy"
    assert status.message == "OpenAI API check failed"
    assert len(vision.calls) == 1
    assert len(llm.chat_calls) == 1
