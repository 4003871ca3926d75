from __future__ import annotations

import base64

import pytest

from photo_poem.common.errors import ValidationError
from photo_poem.common.validation import (
    photo_payload,
    strip_data_uri,
    validate_audio_input,
    validate_generation_input,
)


def test_valid_generation_input_passes(pixel_png: str) -> None:
    validate_generation_input("a quiet morning", pixel_png)


def test_data_uri_prefixed_photo_passes(pixel_png: str) -> None:
    validate_generation_input("a quiet morning", "data:image/png;base64," + pixel_png)


@pytest.mark.parametrize("text", [None, "", 42, ["a"]])
def test_bad_text_rejected(text, pixel_png: str) -> None:  # noqa: ANN001
    with pytest.raises(ValidationError, match="Invalid text input"):
        validate_generation_input(text, pixel_png)


@pytest.mark.parametrize("photo", [None, "", 123])
def test_missing_photo_rejected(photo) -> None:  # noqa: ANN001
    with pytest.raises(ValidationError, match="Invalid photo input"):
        validate_generation_input("text", photo)


def test_non_base64_photo_rejected() -> None:
    with pytest.raises(ValidationError, match="not a valid Base64"):
        validate_generation_input("text", "not-base64!!")


def test_oversized_photo_rejected() -> None:
    photo = base64.b64encode(b"x" * 64).decode("ascii")
    with pytest.raises(ValidationError, match="limit"):
        validate_generation_input("text", photo, max_photo_bytes=32)


def test_strip_data_uri() -> None:
    assert strip_data_uri("data:image/jpeg;base64,QUJD") == "QUJD"
    assert strip_data_uri("QUJD") == "QUJD"


def test_audio_input_defaults() -> None:
    req = validate_audio_input("hello", "alloy", 1)
    assert req.text == "hello"
    assert req.voice == "alloy"
    assert req.speed == 1.0
    assert isinstance(req.speed, float)


@pytest.mark.parametrize(
    "text,voice,speed,match",
    [
        ("", "alloy", 1.0, "Text input must be provided"),
        (None, "alloy", 1.0, "Text input must be provided"),
        ("hi", "robot", 1.0, "Unsupported voice"),
        ("hi", "alloy", 0, "between"),
        ("hi", "alloy", 5.0, "between"),
        ("hi", "alloy", "fast", "must be a number"),
        ("hi", "alloy", True, "must be a number"),
    ],
)
def test_bad_audio_input_rejected(text, voice, speed, match) -> None:  # noqa: ANN001
    with pytest.raises(ValidationError, match=match):
        validate_audio_input(text, voice, speed)


def test_whitespace_only_text_is_a_non_empty_string(pixel_png: str) -> None:
    validate_generation_input("   ", pixel_png)
    assert validate_audio_input(" ", "alloy", 1.0).text == " "


def test_line_wrapped_photo_passes() -> None:
    wrapped = base64.encodebytes(b"\x89PNG" * 40).decode("ascii")
    assert "\n" in wrapped
    validate_generation_input("text", wrapped)
    validate_generation_input("text", "data:image/png;base64," + wrapped.replace("\n", "\r\n"))


def test_photo_payload_removes_prefix_and_wrapping() -> None:
    assert photo_payload("data:image/png;base64,QUJD\nREVG\n") == "QUJDREVG"


def test_whitespace_only_photo_rejected() -> None:
    with pytest.raises(ValidationError, match="Invalid photo input"):
        validate_generation_input("text", " \n ")
