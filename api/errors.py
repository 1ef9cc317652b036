# File: api/errors.py
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from services.errors import (
    BadRequestError,
    MLServiceError,
    NotFoundError,
    SectionNotFoundError,
    UpstreamError,
    UpstreamEmptyResponseError,
)

logger = logging.getLogger(__name__)


def error_response(status_code: int, error: str, details=None, key: str = "error") -> JSONResponse:
    body = {"success": False, key: error}
    if details is not None:
        body["details"] = details
    return JSONResponse(status_code=status_code, content=body)


def register_exception_handlers(app: FastAPI):
    """Maps every failure to the {success: false, error|message, details?} envelope."""

    @app.exception_handler(NotFoundError)
    async def not_found_handler(request: Request, exc: NotFoundError):
        return error_response(404, exc.message)

    @app.exception_handler(SectionNotFoundError)
    async def section_not_found_handler(request: Request, exc: SectionNotFoundError):
        return error_response(404, exc.message, key="message")

    @app.exception_handler(BadRequestError)
    async def bad_request_handler(request: Request, exc: BadRequestError):
        logger.warning(f"Validation error on {request.url.path}: {exc.message}")
        return error_response(400, exc.message)

    @app.exception_handler(UpstreamError)
    async def upstream_handler(request: Request, exc: UpstreamError):
        return error_response(
            500,
            "Failed to analyze experiment",
            details={"upstreamStatus": exc.status, "upstreamBody": exc.body},
        )

    @app.exception_handler(UpstreamEmptyResponseError)
    async def upstream_empty_handler(request: Request, exc: UpstreamEmptyResponseError):
        return error_response(500, "Failed to analyze experiment", details=str(exc))

    @app.exception_handler(MLServiceError)
    async def ml_service_handler(request: Request, exc: MLServiceError):
        return error_response(500, "ML API request failed", details=str(exc))

    @app.exception_handler(RequestValidationError)
    async def validation_handler(request: Request, exc: RequestValidationError):
        logger.warning(f"Invalid request payload on {request.url.path}")
        return error_response(400, "Invalid request payload", details=jsonable_errors(exc))

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return error_response(exc.status_code, str(exc.detail))

    @app.exception_handler(Exception)
    async def unhandled_handler(request: Request, exc: Exception):
        logger.error(f"Unhandled error on {request.method} {request.url.path}", exc_info=exc)
        return error_response(500, "Internal server error")


def jsonable_errors(exc: RequestValidationError):
    return [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg", "")}
        for err in exc.errors()
    ]
