"""
Application errors and their HTTP translation.

The crud layer raises these without knowing about FastAPI; the handler
registered in main.py turns them into JSON responses with the same
`{"detail": ...}` body FastAPI uses for its own HTTPException.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class AppError(Exception):
    """Base class for errors that map onto an HTTP status code."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class BadRequestError(AppError):
    """Client sent data the operation cannot use (400)."""

    status_code = 400


class UnauthorizedError(AppError):
    """Missing credentials or insufficient privileges (401)."""

    status_code = 401


class NotFoundError(AppError):
    """The addressed record does not exist (404)."""

    status_code = 404


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(AppError)
    async def app_error_handler(
        request: Request,
        exc: AppError,
    ) -> JSONResponse:
        logger.warning(
            f"{request.method} {request.url.path} -> {exc.status_code}: {exc.message}",
            extra={"method": request.method, "path": request.url.path, "status_code": exc.status_code},
        )
        headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == 401 else None
        return JSONResponse(
            status_code=exc.status_code,
            content={"detail": exc.message},
            headers=headers,
        )
