"""Service configuration from environment variables and the generation YAML."""
from __future__ import annotations
import dataclasses
import os
from dataclasses import dataclass, field
from typing import Any, Mapping

import yaml
from dotenv import load_dotenv

from photo_poem.common.errors import ConfigError
from photo_poem.common.schema import GenerationParams
from photo_poem.common.templates import load_template

REQUIRED_VARS = ("CLARIFAI_API_KEY", "CLARIFAI_USER_ID", "CLARIFAI_APP_ID", "OPENAI_API_KEY")

@dataclass(frozen=True)
class Settings:
    """Startup settings. Every field is read from an environment variable of the same name."""
    clarifai_api_key: str
    clarifai_user_id: str
    clarifai_app_id: str
    openai_api_key: str
    clarifai_base_url: str = "https://api.clarifai.com"
    clarifai_model_id: str = "general-image-recognition"
    openai_base_url: str = "https://api.openai.com/v1"
    http_timeout_s: float = 120.0
    host: str = "0.0.0.0"
    port: int = 8080
    log_level: str = "INFO"
    generation: GenerationParams = field(default_factory=GenerationParams)

def load_cfg(path: str) -> dict[str, Any]:
    with open(path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}

def load_generation_params(path: str) -> GenerationParams:
    """
    Build generation parameters from a YAML file, falling back to defaults for absent keys.

    A ``prompt_template_file`` key replaces the built-in prompt template with the file's content.
    """
    try:
        cfg = load_cfg(path)
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"Cannot read generation config {path}: {e}")
    if not isinstance(cfg, dict):
        raise ConfigError(f"Generation config {path} must be a mapping")

    cfg = dict(cfg)
    template_file = cfg.pop("prompt_template_file", None)
    if template_file:
        try:
            cfg["prompt_template"] = load_template(str(template_file))
        except OSError as e:
            raise ConfigError(f"Cannot read prompt template {template_file}: {e}")

    known = {f.name for f in dataclasses.fields(GenerationParams)}
    unknown = sorted(set(cfg) - known)
    if unknown:
        raise ConfigError(f"Unknown generation config keys: {', '.join(unknown)}")
    return GenerationParams(**cfg)

def _number(env: Mapping[str, str], name: str, cast: type, default: Any, problems: list[str]) -> Any:
    raw = env.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = cast(raw)
    except ValueError:
        problems.append(f"{name} must be numeric, got {raw!r}")
        return default
    if value <= 0:
        problems.append(f"{name} must be > 0")
    return value

def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    """
    Read settings from the environment, loading a local .env file first.

    Args:
        environ: Mapping to read instead of os.environ (skips .env loading).

    Raises:
        ConfigError: Listing every missing or invalid variable.
    """
    if environ is None:
        load_dotenv(override=False)
        environ = os.environ

    problems = [f"{name} is not set" for name in REQUIRED_VARS if not environ.get(name)]
    timeout = _number(environ, "HTTP_TIMEOUT_S", float, 120.0, problems)
    port = _number(environ, "PORT", int, 8080, problems)
    if problems:
        raise ConfigError("Invalid configuration: " + "; ".join(problems))

    config_path = environ.get("GENERATION_CONFIG")
    generation = load_generation_params(config_path) if config_path else GenerationParams()

    return Settings(
        clarifai_api_key=environ["CLARIFAI_API_KEY"],
        clarifai_user_id=environ["CLARIFAI_USER_ID"],
        clarifai_app_id=environ["CLARIFAI_APP_ID"],
        openai_api_key=environ["OPENAI_API_KEY"],
        clarifai_base_url=environ.get("CLARIFAI_BASE_URL", "https://api.clarifai.com"),
        clarifai_model_id=environ.get("CLARIFAI_MODEL_ID", "general-image-recognition"),
        openai_base_url=environ.get("OPENAI_BASE_URL", "https://api.openai.com/v1"),
        http_timeout_s=timeout,
        host=environ.get("HOST", "0.0.0.0"),
        port=port,
        log_level=environ.get("LOG_LEVEL", "INFO"),
        generation=generation,
    )
