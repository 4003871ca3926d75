"""Failure taxonomy shared by the pipelines and the HTTP boundary."""
from __future__ import annotations


class PhotoPoemError(Exception):
    """Base failure carrying an error label and a human-readable detail."""

    error = "Internal server error"

    def __init__(self, details: str) -> None:
        super().__init__(details)
        self.details = details


class ValidationError(PhotoPoemError):
    """Malformed or missing request fields. Never retried."""

    error = "Invalid input"


class UpstreamServiceError(PhotoPoemError):
    """A remote capability failed at the transport level or returned a non-success status."""

    def __init__(self, service: str, details: str) -> None:
        super().__init__(details)
        self.service = service

    @property
    def error(self) -> str:  # type: ignore[override]
        return f"{self.service} API call failed"


class InternalError(PhotoPoemError):
    """Local processing failure unrelated to input or upstream."""


class ConfigError(Exception):
    """Startup configuration is missing or invalid."""
