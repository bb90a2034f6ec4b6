# chefcam/routers/health.py
from __future__ import annotations

from fastapi import APIRouter, Depends, Response, status

from chefcam.core.config import Settings
from chefcam.core.deps import get_settings
from chefcam.services.health import check_gemini, version_payload

router = APIRouter(tags=["health"])


@router.get("/health")
def health():
    # Liveness only: if the process is serving requests, it's up
    return {"status": "ok", **version_payload()}


@router.get("/health/ready")
async def ready(response: Response, settings: Settings = Depends(get_settings)):
    gemini = await check_gemini(settings)

    overall = "ok"
    http_status = status.HTTP_200_OK

    # Without a key nothing can be analyzed
    if gemini["status"] == "fail":
        overall = "fail"
        http_status = status.HTTP_503_SERVICE_UNAVAILABLE
    elif gemini["status"] != "ok":
        overall = "degraded"

    response.status_code = http_status
    return {
        "status": overall,
        "checks": {"gemini": gemini},
        **version_payload(),
    }


@router.get("/version")
def version():
    return version_payload()
