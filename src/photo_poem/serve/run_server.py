"""Launch the photo poem service with uvicorn."""
from __future__ import annotations
import logging
import sys

import uvicorn

from photo_poem.common.config import load_settings
from photo_poem.common.errors import ConfigError
from photo_poem.common.logging_setup import setup_logging
from photo_poem.pipeline.services import build_services
from photo_poem.serve.fastapi_app import create_app

LOGGER = logging.getLogger("photo_poem.serve.run")

def main() -> None:
    setup_logging()
    try:
        settings = load_settings()
    except ConfigError as e:
        LOGGER.error("%s", e)
        sys.exit(1)
    setup_logging(settings.log_level)

    app = create_app(build_services(settings))
    LOGGER.info("Server is running on port %s", settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)

if __name__ == "__main__":
    main()
