"""Map every failure to a JSON ``{"error": ...}`` body with the right status."""

import logging

import aiosqlite
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.errors import KittenTrackError, StorageError

logger = logging.getLogger(__name__)


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def validation_message(errors: list[dict]) -> str:
    """Reduce pydantic's error list to the first error, phrased for humans."""
    if not errors:
        return "Invalid request"
    err = errors[0]
    loc = [str(part) for part in err.get("loc", ()) if part not in ("body", "query", "path")]
    field = ".".join(loc)
    kind = err.get("type", "")

    if kind == "json_invalid":
        return "Invalid JSON body"
    if kind == "missing":
        return f"{field} is required" if field else "Request body is required"
    if kind == "value_error" and "error" in err.get("ctx", {}):
        return str(err["ctx"]["error"])
    return f"Invalid {field}: {err.get('msg', 'invalid value')}" if field else err.get("msg", "Invalid request")


async def _handle_validation(request: Request, exc: RequestValidationError) -> JSONResponse:
    return _error(400, validation_message(exc.errors()))


async def _handle_http(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


async def _handle_app_error(request: Request, exc: KittenTrackError) -> JSONResponse:
    # Details stay in the log
    logger.error("%s %s failed: %s", request.method, request.url.path, exc.message, exc_info=exc)
    return _error(exc.status_code, exc.public_message)


async def _handle_storage(request: Request, exc: aiosqlite.Error) -> JSONResponse:
    logger.error("%s %s storage failure", request.method, request.url.path, exc_info=exc)
    return _error(500, StorageError.public_message)


async def _handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
    logger.error("%s %s unexpected error", request.method, request.url.path, exc_info=exc)
    return _error(500, "Internal server error")


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RequestValidationError, _handle_validation)
    app.add_exception_handler(StarletteHTTPException, _handle_http)
    app.add_exception_handler(KittenTrackError, _handle_app_error)
    app.add_exception_handler(aiosqlite.Error, _handle_storage)
    app.add_exception_handler(Exception, _handle_unexpected)
