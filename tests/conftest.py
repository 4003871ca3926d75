from __future__ import annotations

from typing import Any

import pytest
from fastapi.testclient import TestClient

from photo_poem.pipeline.services import Services
from photo_poem.serve.fastapi_app import create_app

# 1x1 transparent PNG
PIXEL_PNG = (
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNkYPhfDwAChwGA60e6kgAAAABJRU5ErkJggg=="
)


class StubVision:
    def __init__(self, labels: tuple[str, ...] = ("train", "platform"), error: Exception | None = None) -> None:
        self.labels = labels
        self.error = error
        self.calls: list[dict[str, Any]] = []

    def predict_concepts(self, image_base64=None, image_url=None, version_id=None):  # noqa: ANN001
        self.calls.append({"image_base64": image_base64, "image_url": image_url, "version_id": version_id})
        if self.error is not None:
            raise self.error
        return tuple(self.labels)


class StubLanguageModel:
    def __init__(
        self,
        text: str = "A train waits in silence.",
        audio: bytes = b"ID3\x03\x00fake-mp3-bytes",
        chat_error: Exception | None = None,
        speech_error: Exception | None = None,
    ) -> None:
        self.text = text
        self.audio = audio
        self.chat_error = chat_error
        self.speech_error = speech_error
        self.chat_calls: list[dict[str, Any]] = []
        self.speech_calls: list[dict[str, Any]] = []

    def chat(self, messages, model, max_tokens, temperature=None, top_p=None):  # noqa: ANN001
        self.chat_calls.append(
            {"messages": messages, "model": model, "max_tokens": max_tokens, "temperature": temperature, "top_p": top_p}
        )
        if self.chat_error is not None:
            raise self.chat_error
        return self.text

    def speech(self, text, voice, speed, model, response_format="mp3"):  # noqa: ANN001
        self.speech_calls.append(
            {"text": text, "voice": voice, "speed": speed, "model": model, "response_format": response_format}
        )
        if self.speech_error is not None:
            raise self.speech_error
        return self.audio


@pytest.fixture
def pixel_png() -> str:
    return PIXEL_PNG


@pytest.fixture
def vision() -> StubVision:
    return StubVision()


@pytest.fixture
def llm() -> StubLanguageModel:
    return StubLanguageModel()


@pytest.fixture
def services(vision: StubVision, llm: StubLanguageModel) -> Services:
    return Services(vision=vision, llm=llm)


@pytest.fixture
def client(services: Services) -> TestClient:
    return TestClient(create_app(services))
