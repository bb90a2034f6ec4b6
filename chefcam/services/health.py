# chefcam/services/health.py
from __future__ import annotations

import time
from typing import Any, Dict, Optional

import httpx

from chefcam.core import config
from chefcam.core.config import Settings


def _ms_since(start: float) -> int:
    return int((time.perf_counter() - start) * 1000)


def _check_result(status: str, latency_ms: int, error: Optional[str] = None) -> Dict[str, Any]:
    out: Dict[str, Any] = {"status": status, "latency_ms": latency_ms}
    if error:
        out["error"] = error
    return out


async def check_gemini(settings: Settings) -> Dict[str, Any]:
    start = time.perf_counter()
    if not settings.gemini_api_key:
        # no key: every analyze request would fail
        return _check_result("fail", 0, "Server is missing GEMINI_API_KEY (or GOOGLE_API_KEY)")
    try:
        # model metadata lookup is free and proves both key and model name
        async with httpx.AsyncClient(timeout=3.0) as client:
            r = await client.get(
                f"{config.GEMINI_API_BASE_URL}/models/{settings.gemini_model}",
                headers={"x-goog-api-key": settings.gemini_api_key},
            )
            r.raise_for_status()
        return _check_result("ok", _ms_since(start))
    except Exception as e:
        return _check_result("degraded", _ms_since(start), str(e))


def version_payload() -> Dict[str, Any]:
    return {
        "version": config.APP_VERSION,
        "git_sha": config.GIT_SHA,
        "build_date": config.BUILD_DATE,
    }
