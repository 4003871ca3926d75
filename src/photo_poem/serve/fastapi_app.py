"""FastAPI surface for the photo poem service.

Endpoints:
- GET /health
- POST /api/generate-poem   { "text": "...", "photo": "<base64>" }
- POST /api/generate-audio  { "text": "...", "voice": "alloy", "speed": 1.0 }
- GET /api/latest-result
"""
from __future__ import annotations
import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator

from fastapi import APIRouter, Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from photo_poem.common.config import load_settings
from photo_poem.common.errors import PhotoPoemError, ValidationError
from photo_poem.common.logging_setup import setup_logging
from photo_poem.common.schema import DEFAULT_SPEED, DEFAULT_VOICE
from photo_poem.pipeline.audio import synthesize_audio
from photo_poem.pipeline.health import check_health
from photo_poem.pipeline.poem import generate_poem
from photo_poem.pipeline.services import Services, build_services

LOGGER = logging.getLogger("photo_poem.serve.app")

POEM_PATH = "/api/generate-poem"
AUDIO_PATH = "/api/generate-audio"
AUDIO_ERROR = "OpenAI TTS API call failed"

# Fields are loosely typed so malformed values reach the validator and map to the error envelope.
class GeneratePoemIn(BaseModel):
    text: Any = None
    photo: Any = None

class GeneratePoemOut(BaseModel):
    generatedText: str

class GenerateAudioIn(BaseModel):
    text: Any = None
    voice: Any = DEFAULT_VOICE
    speed: Any = DEFAULT_SPEED

class GenerateAudioOut(BaseModel):
    audioContent: str

def error_response(status_code: int, error: str, details: str | None = None) -> JSONResponse:
    body: dict[str, str] = {"error": error}
    if details is not None:
        body["details"] = details
    return JSONResponse(status_code=status_code, content=body)

def get_services(request: Request) -> Services:
    return request.app.state.services

router = APIRouter()

@router.get("/health")
def health(services: Services = Depends(get_services)) -> JSONResponse:
    status = check_health(services.vision, services.llm, services.params)
    return JSONResponse(
        status_code=200 if status.healthy else 500,
        content={"status": status.status, "message": status.message},
    )

@router.post(POEM_PATH, response_model=GeneratePoemOut)
def generate_poem_route(body: GeneratePoemIn, services: Services = Depends(get_services)) -> Any:
    LOGGER.info("Received poem request, text content: %s", body.text)
    try:
        result = generate_poem(services, body.text, body.photo)
    except ValidationError as e:
        LOGGER.error("%s route rejected input: %s", POEM_PATH, e.details)
        return error_response(400, e.error, e.details)
    except PhotoPoemError as e:
        LOGGER.error("%s route error: %s: %s", POEM_PATH, e.error, e.details)
        return error_response(500, e.error, e.details)
    LOGGER.info("Poem pipeline finished in %sms", result.latency_ms)
    return GeneratePoemOut(generatedText=result.generated_text)

@router.post(AUDIO_PATH, response_model=GenerateAudioOut)
def generate_audio_route(body: GenerateAudioIn, services: Services = Depends(get_services)) -> Any:
    LOGGER.info("Received audio request: voice=%s speed=%s", body.voice, body.speed)
    try:
        result = synthesize_audio(services.llm, body.text, body.voice, body.speed, services.params)
    except PhotoPoemError as e:
        LOGGER.error("%s route error: %s", AUDIO_PATH, e.details)
        return error_response(500, AUDIO_ERROR, e.details)
    return GenerateAudioOut(audioContent=result.audio_content)

@router.get("/api/latest-result")
def latest_result(services: Services = Depends(get_services)) -> JSONResponse:
    text = services.cache.get()
    if text is None:
        return error_response(404, "No AI generated text available.")
    return JSONResponse(content={"generatedText": text})

async def _request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    details = "; ".join(str(err.get("msg", err)) for err in exc.errors())
    if request.url.path == AUDIO_PATH:
        return error_response(500, AUDIO_ERROR, details)
    return error_response(400, ValidationError.error, details)

async def _unhandled_error(request: Request, exc: Exception) -> JSONResponse:
    LOGGER.exception("Unhandled error on %s", request.url.path)
    return error_response(500, "Internal server error", str(exc))

def create_app(services: Services | None = None) -> FastAPI:
    """
    Build the application.

    Args:
        services: Upstream clients and cache to serve with. When omitted they are
            built from environment settings at startup, and missing settings abort startup.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        if app.state.services is None:
            settings = load_settings()
            setup_logging(settings.log_level)
            app.state.services = build_services(settings)
        yield

    app = FastAPI(title="Photo Poem Service", lifespan=lifespan)
    app.state.services = services
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(RequestValidationError, _request_validation_error)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, _unhandled_error)
    app.include_router(router)
    return app

app = create_app()
