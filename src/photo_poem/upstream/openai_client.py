"""OpenAI REST client for chat completions and speech synthesis.

Endpoints:
- POST {base}/chat/completions
- POST {base}/audio/speech
"""
from __future__ import annotations
import logging
from typing import Any

import httpx

from photo_poem.common.errors import UpstreamServiceError

LOGGER = logging.getLogger("photo_poem.upstream.openai")

SERVICE = "OpenAI"

class OpenAIClient:
    """Blocking client for the two OpenAI capabilities the service needs."""

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://api.openai.com/v1",
        timeout: float = 120.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    def _post(self, path: str, payload: dict[str, Any]) -> httpx.Response:
        headers = {"Authorization": f"Bearer {self.api_key}"}
        try:
            with httpx.Client(timeout=self.timeout, transport=self._transport) as client:
                r = client.post(f"{self.base_url}{path}", headers=headers, json=payload)
                r.raise_for_status()
                return r
        except httpx.HTTPStatusError as e:
            message = _error_message(e.response)
            LOGGER.error("OpenAI %s failed: %s", path, message)
            raise UpstreamServiceError(SERVICE, message)
        except httpx.HTTPError as e:
            LOGGER.error("OpenAI %s request failed: %s", path, e)
            raise UpstreamServiceError(SERVICE, str(e) or type(e).__name__)

    def chat(
        self,
        messages: list[dict[str, str]],
        model: str,
        max_tokens: int,
        temperature: float | None = None,
        top_p: float | None = None,
    ) -> str:
        """Run one non-streaming chat completion and return the first choice's content."""
        payload: dict[str, Any] = {
            "model": model,
            "messages": messages,
            "max_tokens": max_tokens,
            "stream": False,
        }
        if temperature is not None:
            payload["temperature"] = temperature
        if top_p is not None:
            payload["top_p"] = top_p

        r = self._post("/chat/completions", payload)
        try:
            content = r.json()["choices"][0]["message"]["content"]
        except (ValueError, KeyError, IndexError, TypeError) as e:
            LOGGER.error("Malformed chat response: %s", e)
            raise UpstreamServiceError(SERVICE, "Malformed chat completion response")
        if content is None:
            return ""
        if not isinstance(content, str):
            LOGGER.error("Malformed chat response: content is %s", type(content).__name__)
            raise UpstreamServiceError(SERVICE, "Malformed chat completion response")
        return content

    def speech(self, text: str, voice: str, speed: float, model: str, response_format: str = "mp3") -> bytes:
        """Synthesize speech and return the raw audio bytes."""
        payload = {
            "model": model,
            "input": text,
            "voice": voice,
            "speed": speed,
            "response_format": response_format,
        }
        return self._post("/audio/speech", payload).content

def _error_message(response: httpx.Response) -> str:
    try:
        message = response.json()["error"]["message"]
    except (ValueError, KeyError, TypeError):
        message = None
    return f"HTTP {response.status_code}: {message}" if message else f"HTTP {response.status_code}"
