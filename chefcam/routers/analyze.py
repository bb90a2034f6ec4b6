# chefcam/routers/analyze.py
from __future__ import annotations

import logging
from typing import Literal, Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile
from starlette.concurrency import run_in_threadpool

from chefcam.clients.gemini import GeminiClient
from chefcam.core.deps import get_gemini_client
from chefcam.core.errors import ChefCamError
from chefcam.models.recipe import ErrorResponse, Recipe
from chefcam.services.analyze import analyze_dish
from chefcam.services.image_prep import ImageRejected, prepare_image

log = logging.getLogger("chefcam.api")

router = APIRouter(prefix="/api", tags=["analyze"])


@router.post(
    "/analyze",
    response_model=Recipe,
    responses={400: {"model": ErrorResponse}, 413: {"model": ErrorResponse}, 415: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def analyze(
    image: Optional[UploadFile] = File(None),
    source: Literal["upload", "camera"] = Form("upload"),
    gemini: Optional[GeminiClient] = Depends(get_gemini_client),
) -> Recipe:
    if gemini is None:
        raise ChefCamError(500, "Server is missing GEMINI_API_KEY (or GOOGLE_API_KEY)")

    if image is None:
        raise ChefCamError(400, "No image uploaded")

    data = await image.read()
    try:
        prepared = await run_in_threadpool(
            prepare_image, data, image.content_type, from_camera=(source == "camera")
        )
    except ImageRejected as e:
        log.info("image rejected", extra={"reason": e.message, "content_type": image.content_type})
        raise ChefCamError(e.status_code, e.message)

    try:
        return await analyze_dish(image=prepared, gemini_client=gemini)
    except Exception:
        log.exception("gemini analysis failed")
        raise ChefCamError(500, "Failed to analyze image")
