from __future__ import annotations

import logging
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from chefcam.clients.gemini import GeminiClient
from chefcam.core import config
from chefcam.core.config import Settings
from chefcam.core.errors import ChefCamError, chefcam_error_handler
from chefcam.core.logging import setup_logging
from chefcam.core.middleware import RequestLoggingMiddleware
from chefcam.routers import analyze, health

log = logging.getLogger("chefcam")


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or Settings.from_env()
    setup_logging(settings.log_level)

    app = FastAPI(title="ChefCam", version=config.APP_VERSION)
    app.state.settings = settings
    app.state.gemini = GeminiClient.from_settings(settings) if settings.gemini_api_key else None
    if app.state.gemini is None:
        log.warning("GEMINI_API_KEY (or GOOGLE_API_KEY) not set; /api/analyze will fail")

    app.include_router(analyze.router)
    app.include_router(health.router)

    app.add_exception_handler(ChefCamError, chefcam_error_handler)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestLoggingMiddleware)

    return app

app = create_app()
