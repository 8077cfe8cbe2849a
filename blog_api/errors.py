"""
Error taxonomy for the blog posts API and the FastAPI handlers that render it.

Every error is logged and returned to the caller as
``{"error": <name>, "message": <text>}`` with the matching status code.
"""

from __future__ import annotations

import logging
from http import HTTPStatus

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class BlogApiError(Exception):
    """Base class for errors surfaced to API callers."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    @property
    def name(self) -> str:
        return type(self).__name__

    def as_dict(self) -> dict:
        return {"error": self.name, "message": self.message}


class ValidationError(BlogApiError):
    """Missing or mismatched request fields."""

    status_code = 400


class NotFoundError(BlogApiError):
    status_code = 404


class StoreError(BlogApiError):
    """The underlying database failed."""

    status_code = 500


def _field_path(loc: tuple) -> str:
    parts = [str(part) for part in loc if part != "body"]
    return ".".join(parts)


def validation_message(exc: RequestValidationError) -> str:
    """Collapse FastAPI's validation errors into a single caller-facing line."""
    messages = []
    for error in exc.errors():
        field = _field_path(tuple(error.get("loc", ())))
        if error.get("type") == "json_invalid":
            messages.append("Request body must be valid JSON")
        elif not field:
            messages.append("Request body must be a JSON object")
        elif error.get("type") == "missing":
            messages.append(f"Missing `{field}` in request body")
        else:
            messages.append(f"Invalid `{field}`: {error.get('msg', 'invalid value')}")
    return "; ".join(messages) or "Invalid request"


async def blog_api_error_handler(request: Request, exc: BlogApiError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(
            "%s %s failed: %s", request.method, request.url.path, exc.message,
            exc_info=exc,
        )
    else:
        logger.warning(
            "%s %s -> %d %s: %s",
            request.method,
            request.url.path,
            exc.status_code,
            exc.name,
            exc.message,
        )
    return JSONResponse(status_code=exc.status_code, content=exc.as_dict())


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Report request validation failures as 400s rather than FastAPI's 422."""
    return await blog_api_error_handler(
        request, ValidationError(validation_message(exc))
    )


async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Render routing errors (unknown path, wrong method) in the API's error shape."""
    logger.warning(
        "%s %s -> %d: %s", request.method, request.url.path, exc.status_code, exc.detail
    )
    try:
        name = HTTPStatus(exc.status_code).phrase.replace(" ", "").replace("-", "")
    except ValueError:
        name = "HTTPError"
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": name, "message": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error in %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=500,
        content={"error": "InternalServerError", "message": "An unexpected error occurred"},
    )


def setup_error_handling(app: FastAPI) -> None:
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(BlogApiError, blog_api_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
