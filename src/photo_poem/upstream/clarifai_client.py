"""Clarifai REST client for concept labeling.

Endpoint:
- POST /v2/users/{user}/apps/{app}/models/{model}[/versions/{version}]/outputs
"""
from __future__ import annotations
import logging
from typing import Any

import httpx

from photo_poem.common.errors import UpstreamServiceError
from photo_poem.common.schema import LabelSet

LOGGER = logging.getLogger("photo_poem.upstream.clarifai")

SERVICE = "Clarifai"
STATUS_SUCCESS = 10000

class ClarifaiClient:
    """Blocking client for the Clarifai model-outputs endpoint."""

    def __init__(
        self,
        api_key: str,
        user_id: str,
        app_id: str,
        model_id: str = "general-image-recognition",
        base_url: str = "https://api.clarifai.com",
        timeout: float = 120.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.api_key = api_key
        self.user_id = user_id
        self.app_id = app_id
        self.model_id = model_id
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    def _outputs_url(self, version_id: str | None) -> str:
        url = f"{self.base_url}/v2/users/{self.user_id}/apps/{self.app_id}/models/{self.model_id}"
        if version_id:
            url += f"/versions/{version_id}"
        return url + "/outputs"

    def predict_concepts(
        self,
        image_base64: str | None = None,
        image_url: str | None = None,
        version_id: str | None = None,
    ) -> LabelSet:
        """
        Label one image and return concept names in the service's ranking order.

        Args:
            image_base64: Bare base64 image payload.
            image_url: Public image URL, used when no payload is given.
            version_id: Pin a model version; latest when omitted.

        Raises:
            UpstreamServiceError: On transport errors, malformed bodies or a non-success status code.
        """
        if image_base64 is not None:
            image: dict[str, str] = {"base64": image_base64}
        elif image_url is not None:
            image = {"url": image_url}
        else:
            raise ValueError("either image_base64 or image_url is required")

        headers = {"Authorization": f"Key {self.api_key}"}
        payload = {"inputs": [{"data": {"image": image}}]}
        try:
            with httpx.Client(timeout=self.timeout, transport=self._transport) as client:
                r = client.post(self._outputs_url(version_id), headers=headers, json=payload)
                data = r.json()
        except httpx.HTTPError as e:
            LOGGER.error("Clarifai request failed: %s", e)
            raise UpstreamServiceError(SERVICE, str(e) or type(e).__name__)
        except ValueError:
            LOGGER.error("Clarifai returned a non-JSON body (HTTP %s)", r.status_code)
            raise UpstreamServiceError(SERVICE, f"Malformed response (HTTP {r.status_code})")

        return _concepts_from_response(data)

def _concepts_from_response(data: Any) -> LabelSet:
    status = data.get("status", {}) if isinstance(data, dict) else {}
    code = status.get("code")
    if code != STATUS_SUCCESS:
        description = status.get("description") or f"status code {code}"
        details = status.get("details")
        if details:
            description = f"{description}: {details}"
        LOGGER.error("Clarifai call failed, status: %s", description)
        raise UpstreamServiceError(SERVICE, description)
    try:
        concepts = data["outputs"][0]["data"].get("concepts", [])
        return tuple(str(c["name"]) for c in concepts)
    except (KeyError, IndexError, TypeError, AttributeError) as e:
        LOGGER.error("Malformed Clarifai response: %s", e)
        raise UpstreamServiceError(SERVICE, "Malformed response")
