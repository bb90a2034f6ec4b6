# chefcam/core/errors.py
from __future__ import annotations

from fastapi import Request
from fastapi.responses import JSONResponse

from chefcam.models.recipe import ErrorResponse


class ChefCamError(Exception):
    """An error that is reported to the client as {"error": message}."""

    def __init__(self, status_code: int, message: str):
        super().__init__(message)
        self.status_code = status_code
        self.message = message


async def chefcam_error_handler(request: Request, exc: ChefCamError) -> JSONResponse:
    body = ErrorResponse(error=exc.message)
    return JSONResponse(status_code=exc.status_code, content=body.model_dump())
