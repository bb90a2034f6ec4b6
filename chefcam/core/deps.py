# chefcam/core/deps.py
from __future__ import annotations

from typing import Optional

from fastapi import Request

from chefcam.clients.gemini import GeminiClient
from chefcam.core.config import Settings


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_gemini_client(request: Request) -> Optional[GeminiClient]:
    # None when no API key was configured at startup
    return request.app.state.gemini
