"""
Error taxonomy and the uniform JSON error body

Every failure visible to a client is rendered as {"msg": ..., "ver": ...}.
"""
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from leaderboard.config import VERSION


logger = logging.getLogger(__name__)


class AppError(Exception):
    """Base class for errors that map onto an HTTP status"""
    status_code = 500

    def __init__(self, msg: str):
        super().__init__(msg)
        self.msg = msg


class BadRequest(AppError):
    status_code = 400


class Unauthorized(AppError):
    status_code = 401


class Forbidden(AppError):
    # reserved
    status_code = 403


class NotFound(AppError):
    status_code = 404


class Conflict(AppError):
    status_code = 409


class InternalError(AppError):
    status_code = 500


def error_body(msg: str) -> dict:
    return {"msg": msg, "ver": VERSION}


def _describe_validation(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()) if p != "body")
        parts.append(f"{loc}: {err.get('msg')}" if loc else str(err.get("msg")))
    return "; ".join(parts) or "malformed request"


def register_error_handlers(app: FastAPI) -> None:
    """Install handlers mapping every error kind to the uniform body"""

    @app.exception_handler(AppError)
    async def _app_error(request: Request, exc: AppError):
        return JSONResponse(status_code=exc.status_code, content=error_body(exc.msg))

    @app.exception_handler(RequestValidationError)
    async def _validation_error(request: Request, exc: RequestValidationError):
        return JSONResponse(status_code=400, content=error_body(_describe_validation(exc)))

    @app.exception_handler(Exception)
    async def _unexpected_error(request: Request, exc: Exception):
        logger.error(
            f"❌ ERROR in {request.method} {request.url.path}: {type(exc).__name__}: {exc}",
            exc_info=exc
        )
        return JSONResponse(status_code=500, content=error_body(str(exc)))
