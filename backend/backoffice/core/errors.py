# backoffice/core/errors.py
"""
Uniform JSON error envelope.
Every failure leaves the API as {"status": "error", "message": "..."}.
"""
import logging
from contextlib import contextmanager
from typing import Iterator

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger("uvicorn.error")

INVALID_BODY = "Invalid request body"
INTERNAL_ERROR = "Internal server error"


def error_body(message: str) -> dict:
    return {"status": "error", "message": message}


@contextmanager
def persistence_errors(message: str) -> Iterator[None]:
    """
    Convert persistence failures inside the block into a 500 with `message`.

    HTTPExceptions raised inside the block (validation, 404, ...) pass
    through untouched.
    """
    try:
        yield
    except HTTPException:
        raise
    except Exception as exc:
        logger.exception("[persistence] %s", message)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=message) from exc


def install_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        message = exc.detail if isinstance(exc.detail, str) else str(exc.detail)
        return JSONResponse(
            status_code=exc.status_code,
            content=error_body(message),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        logger.info("[validation] %s %s: %s", request.method, request.url.path, exc.errors())
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=error_body(INVALID_BODY))

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception("[unhandled] %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=error_body(INTERNAL_ERROR),
        )
