"""
Application-wide exception handlers.
"""

from __future__ import annotations

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse


def _describe_validation_error(exc: RequestValidationError) -> str:
    reasons: list[str] = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        message = str(error.get("msg") or "invalid value")
        reasons.append(f"{location}: {message}" if location else message)
    return "; ".join(reasons) or "Invalid request."


def register_exception_handlers(app: FastAPI) -> None:
    """
    Malformed bodies, missing fields and bad path params are client errors
    reported as 400 with the offending reason.
    """

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        _: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"detail": _describe_validation_error(exc)},
        )
